"""Configuration adapters."""

from poi_proximity.adapters.config.app_config import AppConfig

__all__ = ["AppConfig"]
