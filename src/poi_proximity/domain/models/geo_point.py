"""Geographic point domain model."""

import math
from dataclasses import dataclass


@dataclass(frozen=True)
class GeoPoint:
    """A WGS84 coordinate in decimal degrees."""

    longitude: float
    latitude: float

    def __post_init__(self) -> None:
        if not (math.isfinite(self.longitude) and math.isfinite(self.latitude)):
            raise ValueError(f"Coordinates must be finite, got ({self.longitude}, {self.latitude})")
        if not -90.0 <= self.latitude <= 90.0:
            raise ValueError(f"Latitude must be within [-90, 90], got {self.latitude}")
        if not -180.0 <= self.longitude <= 180.0:
            raise ValueError(f"Longitude must be within [-180, 180], got {self.longitude}")

    def to_wkt(self) -> str:
        """Return the point as a WKT literal, longitude first."""
        return f"POINT({self.longitude!r} {self.latitude!r})"
