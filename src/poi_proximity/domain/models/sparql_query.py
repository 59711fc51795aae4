"""Validated SPARQL query text."""

from dataclasses import dataclass
from enum import Enum


class QueryDialect(str, Enum):
    """Query shapes understood by the executors."""

    BOUNDING_BOX = "bounding_box"
    RADIUS = "radius"
    WITHIN_POLYGON = "within_polygon"


@dataclass(frozen=True)
class SparqlQuery:
    """Query text produced by a builder, tagged with its dialect."""

    text: str
    dialect: QueryDialect

    def __str__(self) -> str:
        return self.text
