"""Domain models for proximity lookups."""

from poi_proximity.domain.models.binding import Binding
from poi_proximity.domain.models.bounding_box import BoundingBox
from poi_proximity.domain.models.candidate import Candidate
from poi_proximity.domain.models.error_details import ErrorDetails
from poi_proximity.domain.models.geo_point import GeoPoint
from poi_proximity.domain.models.proximity_query import ProximityQuery
from poi_proximity.domain.models.ranked_result import RankedResult
from poi_proximity.domain.models.source_kind import SourceKind
from poi_proximity.domain.models.sparql_query import QueryDialect, SparqlQuery
from poi_proximity.domain.models.store_state import StoreState

__all__ = [
    "Binding",
    "BoundingBox",
    "Candidate",
    "ErrorDetails",
    "GeoPoint",
    "ProximityQuery",
    "QueryDialect",
    "RankedResult",
    "SourceKind",
    "SparqlQuery",
    "StoreState",
]
