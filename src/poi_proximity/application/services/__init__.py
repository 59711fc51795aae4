"""Application services (use cases)."""

from poi_proximity.application.services.proximity_resolver import ProximityResolver

__all__ = ["ProximityResolver"]
