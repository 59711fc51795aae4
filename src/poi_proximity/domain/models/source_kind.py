"""Source selector for proximity lookups."""

from enum import Enum


class SourceKind(str, Enum):
    """Which knowledge source (and query dialect) a lookup runs against."""

    # Local station graph, bounding-box dialect
    STATIONS = "stations"
    # Remote geospatial endpoint, radius dialect with server-side distance
    PLACES = "places"
    # Remote endpoint, polygon containment dialect
    PLACES_WITHIN = "places_within"

    @property
    def is_box_based(self) -> bool:
        """Whether the source's dialect filters on a bounding box."""
        return self in (SourceKind.STATIONS, SourceKind.PLACES_WITHIN)

    @property
    def is_remote(self) -> bool:
        """Whether the source is a remote endpoint; remote results are capped."""
        return self is not SourceKind.STATIONS
