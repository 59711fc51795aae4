"""Bounding box domain model."""

import math
from dataclasses import dataclass

from shapely.geometry import box

from poi_proximity.domain.models.geo_point import GeoPoint


@dataclass(frozen=True)
class BoundingBox:
    """Axis-aligned longitude/latitude rectangle around a search origin."""

    lon_min: float
    lon_max: float
    lat_min: float
    lat_max: float

    def __post_init__(self) -> None:
        values = (self.lon_min, self.lon_max, self.lat_min, self.lat_max)
        if not all(math.isfinite(v) for v in values):
            raise ValueError(f"Bounding box values must be finite, got {values}")
        if self.lon_min > self.lon_max:
            raise ValueError(f"lon_min {self.lon_min} is greater than lon_max {self.lon_max}")
        if self.lat_min > self.lat_max:
            raise ValueError(f"lat_min {self.lat_min} is greater than lat_max {self.lat_max}")

    def contains(self, point: GeoPoint) -> bool:
        """Check whether a point lies inside the box, edges included."""
        return (
            self.lon_min <= point.longitude <= self.lon_max
            and self.lat_min <= point.latitude <= self.lat_max
        )

    def to_wkt(self) -> str:
        """Return the box as a closed WKT polygon."""
        return box(self.lon_min, self.lat_min, self.lon_max, self.lat_max).wkt
