"""Domain layer - core models, errors, geometry and ports."""

from poi_proximity.domain.errors import (
    InvalidQueryParameter,
    InvalidRadius,
    ProximityError,
    QueryExecutionError,
    SourceUnavailable,
)
from poi_proximity.domain.models import (
    Binding,
    BoundingBox,
    Candidate,
    GeoPoint,
    RankedResult,
    SourceKind,
)
from poi_proximity.domain.ports import QueryExecutor, ResultPresenter

__all__ = [
    "Binding",
    "BoundingBox",
    "Candidate",
    "GeoPoint",
    "InvalidQueryParameter",
    "InvalidRadius",
    "ProximityError",
    "QueryExecutionError",
    "QueryExecutor",
    "RankedResult",
    "ResultPresenter",
    "SourceKind",
    "SourceUnavailable",
]
