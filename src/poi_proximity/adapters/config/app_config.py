"""12-factor configuration adapter using environment variables and TOML config."""

import logging
import tomllib
from pathlib import Path
from typing import Any

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from poi_proximity.adapters.graph_store.graph_store_loader import STATION_DATASET_URL
from poi_proximity.adapters.sparql_endpoint.constants import (
    CORS_RELAY_URL,
    OSM_GRAPH_IRI,
    SPARQL_ENDPOINT_URL,
    WITHIN_ENDPOINT_URL,
)

# TOML tables and the settings they may override
TOML_SECTIONS: dict[str, tuple[str, ...]] = {
    "sources": (
        "station_dataset_url",
        "sparql_endpoint_url",
        "osm_graph_iri",
        "within_endpoint_url",
        "cors_relay_url",
        "use_cors_relay_for_places",
        "use_cors_relay_for_within",
        "http_timeout_seconds",
    ),
    "search": (
        "station_radius_km",
        "place_radius_km",
        "place_category",
        "within_category",
        "result_limit",
    ),
}


class AppConfig(BaseSettings):
    """Application configuration following 12-factor principles."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        validate_assignment=True,
    )

    # Knowledge sources
    station_dataset_url: str = Field(
        default=STATION_DATASET_URL,
        description="JSON-LD dataset loaded into the in-memory station graph",
    )
    sparql_endpoint_url: str = Field(
        default=SPARQL_ENDPOINT_URL,
        description="Geospatial SPARQL endpoint used for radius lookups",
    )
    osm_graph_iri: str = Field(
        default=OSM_GRAPH_IRI,
        description="Named graph holding OpenStreetMap data on the radius endpoint",
    )
    within_endpoint_url: str = Field(
        default=WITHIN_ENDPOINT_URL,
        description="SPARQL endpoint used for polygon containment lookups",
    )
    cors_relay_url: str = Field(
        default=CORS_RELAY_URL,
        description="Relay prefix for endpoints that need a CORS indirection",
    )
    use_cors_relay_for_places: bool = Field(
        default=False,
        description="Send radius lookups through the CORS relay",
    )
    use_cors_relay_for_within: bool = Field(
        default=True,
        description="Send polygon containment lookups through the CORS relay",
    )
    http_timeout_seconds: float | None = Field(
        default=None,
        description="Total timeout for outgoing requests in seconds (unset for no timeout)",
    )

    # Search defaults
    station_radius_km: float = Field(default=5.0, description="Radius for station lookups in km")
    place_radius_km: float = Field(default=10.0, description="Radius for place lookups in km")
    place_category: str = Field(
        default="museum", description="OSM tourism tag used by radius lookups"
    )
    within_category: str = Field(
        default="Museum", description="Class name used by polygon containment lookups"
    )
    result_limit: int = Field(
        default=5, description="Maximum number of candidates returned by remote lookups (1-5)"
    )

    log_level: str = Field(default="INFO", description="Root logging level")

    # Optional TOML file with [sources] and [search] tables
    config_file: str | None = Field(
        default=None,
        description="Path to TOML configuration file overriding source and search settings",
    )

    @field_validator("station_radius_km", "place_radius_km")
    @classmethod
    def validate_radius(cls, v: float) -> float:
        """Validate search radii are positive."""
        if v <= 0:
            raise ValueError("search radius must be greater than 0")
        return v

    @field_validator("result_limit")
    @classmethod
    def validate_result_limit(cls, v: int) -> int:
        """Validate the result limit is between 1 and 5."""
        if not 1 <= v <= 5:
            raise ValueError("result_limit must be between 1 and 5")
        return v

    @field_validator("http_timeout_seconds")
    @classmethod
    def validate_timeout(cls, v: float | None) -> float | None:
        """Validate the timeout is positive when set."""
        if v is not None and v <= 0:
            raise ValueError("http_timeout_seconds must be greater than 0")
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level is a standard logging level name."""
        level = v.upper()
        if level not in logging.getLevelNamesMapping():
            raise ValueError(f"log_level must be a logging level name, got '{v}'")
        return level

    def load_toml_overrides(self) -> dict[str, Any]:
        """Apply settings from the TOML config file, if one is configured.

        Returns:
            The parsed TOML data, or an empty dict when no file is configured.

        Raises:
            FileNotFoundError: If config_file is set but does not exist.
            ValueError: If a known table is not a table.
        """
        if not self.config_file:
            return {}

        config_path = Path(self.config_file)
        if not config_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {config_path}")

        with open(config_path, "rb") as f:
            toml_data = tomllib.load(f)

        for section, keys in TOML_SECTIONS.items():
            table = toml_data.get(section, {})
            if not isinstance(table, dict):
                raise ValueError(f"TOML config '{section}' must be a table")
            for key in keys:
                if key in table:
                    setattr(self, key, table[key])

        return toml_data
