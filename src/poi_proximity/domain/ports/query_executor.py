"""Query executor port."""

from typing import Protocol

from poi_proximity.domain.models.binding import Binding
from poi_proximity.domain.models.sparql_query import SparqlQuery


class QueryExecutor(Protocol):
    """Port for evaluating a SPARQL query against one knowledge source."""

    source_name: str

    async def evaluate(self, query: SparqlQuery) -> list[Binding]:
        """Evaluate a query and return all result rows, fully collected.

        Raises:
            QueryExecutionError: On transport, evaluation or parse failure.
        """
        ...
