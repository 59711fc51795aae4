"""Normalized query result row."""

from dataclasses import dataclass

from poi_proximity.domain.models.geo_point import GeoPoint


@dataclass(frozen=True)
class Binding:
    """One result row, normalized across local and remote sources.

    Local rows carry raw coordinates and no distance; rows from the radius
    dialect carry a server-computed distance and no coordinates.
    """

    identifier: str
    display_name: str
    longitude: float | None = None
    latitude: float | None = None
    distance_km: float | None = None
    link_target: str | None = None

    @property
    def point(self) -> GeoPoint | None:
        """Return the raw coordinate, if the row has a valid one."""
        if self.longitude is None or self.latitude is None:
            return None
        try:
            return GeoPoint(longitude=self.longitude, latitude=self.latitude)
        except ValueError:
            return None
