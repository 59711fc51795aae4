"""Proximity query domain model."""

import math
from dataclasses import dataclass

from poi_proximity.domain.errors import InvalidRadius
from poi_proximity.domain.models.geo_point import GeoPoint


@dataclass(frozen=True)
class ProximityQuery:
    """A request for points of interest of one category around an origin."""

    origin: GeoPoint
    radius_km: float
    category: str | None = None

    def __post_init__(self) -> None:
        if not math.isfinite(self.radius_km) or self.radius_km <= 0:
            raise InvalidRadius(self.radius_km)
