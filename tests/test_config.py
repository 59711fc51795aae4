"""Tests for configuration adapter."""

from pathlib import Path
from tempfile import NamedTemporaryFile

import pytest

from poi_proximity.adapters.config import AppConfig


def write_toml(content: str) -> str:
    with NamedTemporaryFile(mode="w", suffix=".toml", delete=False) as f:
        f.write(content)
        return f.name


def test_config_loads_defaults() -> None:
    """Given no environment variables, when loading config, then defaults are used."""
    config = AppConfig()

    assert config.station_radius_km == 5.0
    assert config.place_radius_km == 10.0
    assert config.place_category == "museum"
    assert config.result_limit == 5
    assert config.http_timeout_seconds is None
    assert config.use_cors_relay_for_places is False
    assert config.use_cors_relay_for_within is True
    assert config.log_level == "INFO"


def test_config_loads_from_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Given environment variables, when loading config, then they are used."""
    monkeypatch.setenv("SPARQL_ENDPOINT_URL", "https://sparql.example.org/sparql")
    monkeypatch.setenv("PLACE_RADIUS_KM", "2.5")
    monkeypatch.setenv("HTTP_TIMEOUT_SECONDS", "30")
    monkeypatch.setenv("LOG_LEVEL", "debug")

    config = AppConfig()

    assert config.sparql_endpoint_url == "https://sparql.example.org/sparql"
    assert config.place_radius_km == 2.5
    assert config.http_timeout_seconds == 30.0
    assert config.log_level == "DEBUG"


@pytest.mark.parametrize(
    ("variable", "value", "message"),
    [
        ("STATION_RADIUS_KM", "0", "search radius must be greater than 0"),
        ("PLACE_RADIUS_KM", "-3", "search radius must be greater than 0"),
        ("RESULT_LIMIT", "0", "result_limit must be between 1 and 5"),
        ("RESULT_LIMIT", "6", "result_limit must be between 1 and 5"),
        ("HTTP_TIMEOUT_SECONDS", "0", "http_timeout_seconds must be greater than 0"),
        ("LOG_LEVEL", "chatty", "log_level must be a logging level name"),
    ],
)
def test_config_validates_values(
    monkeypatch: pytest.MonkeyPatch, variable: str, value: str, message: str
) -> None:
    """Given an invalid value, when loading config, then validation error is raised."""
    monkeypatch.setenv(variable, value)

    with pytest.raises(ValueError, match=message):
        AppConfig()


def test_config_applies_toml_overrides() -> None:
    """Given a TOML file with sources and search tables, when loading overrides, then settings change."""
    temp_path = write_toml(
        """
[sources]
sparql_endpoint_url = "https://sparql.example.org/sparql"
use_cors_relay_for_within = false

[search]
place_category = "gallery"
result_limit = 3
"""
    )

    try:
        config = AppConfig(config_file=temp_path)
        data = config.load_toml_overrides()

        assert "sources" in data
        assert config.sparql_endpoint_url == "https://sparql.example.org/sparql"
        assert config.use_cors_relay_for_within is False
        assert config.place_category == "gallery"
        assert config.result_limit == 3
        assert config.station_radius_km == 5.0
    finally:
        Path(temp_path).unlink()


def test_config_toml_overrides_are_validated() -> None:
    """Given an invalid value in TOML, when loading overrides, then validation error is raised."""
    temp_path = write_toml("[search]\nplace_radius_km = -1\n")

    try:
        config = AppConfig(config_file=temp_path)
        with pytest.raises(ValueError, match="search radius must be greater than 0"):
            config.load_toml_overrides()
    finally:
        Path(temp_path).unlink()


def test_config_rejects_non_table_section() -> None:
    """Given a section that is not a table, when loading overrides, then ValueError is raised."""
    temp_path = write_toml('search = "wide"\n')

    try:
        config = AppConfig(config_file=temp_path)
        with pytest.raises(ValueError, match="must be a table"):
            config.load_toml_overrides()
    finally:
        Path(temp_path).unlink()


def test_config_missing_file_raises() -> None:
    """Given a config_file that does not exist, when loading overrides, then FileNotFoundError is raised."""
    config = AppConfig(config_file="/nonexistent/poi.toml")

    with pytest.raises(FileNotFoundError):
        config.load_toml_overrides()


def test_config_without_file_has_no_overrides() -> None:
    """Given no config_file, when loading overrides, then nothing is applied."""
    assert AppConfig().load_toml_overrides() == {}
