"""Query executor for the in-memory station graph."""

import logging

from poi_proximity.adapters.graph_store.binding_stream import BindingStream
from poi_proximity.domain.errors import QueryExecutionError, SourceUnavailable
from poi_proximity.domain.models.binding import Binding
from poi_proximity.domain.models.sparql_query import SparqlQuery
from poi_proximity.domain.ports.graph_store_provider import GraphStoreProvider
from poi_proximity.domain.ports.query_executor import QueryExecutor

logger = logging.getLogger(__name__)


class LocalQueryExecutor(QueryExecutor):
    """Evaluates queries against the shared station graph."""

    def __init__(self, store_provider: GraphStoreProvider, source_name: str = "stations") -> None:
        """Initialize with the provider of the station graph.

        Args:
            store_provider: Loader that owns the graph.
            source_name: Name used in logs and errors.
        """
        self._store_provider = store_provider
        self.source_name = source_name

    async def stream(self, query: SparqlQuery) -> BindingStream:
        """Return a stream of rows for a query, loading the graph if needed."""
        try:
            store = await self._store_provider.get_store()
        except SourceUnavailable as e:
            raise QueryExecutionError(self.source_name, e) from e
        return BindingStream(store, query)

    async def evaluate(self, query: SparqlQuery) -> list[Binding]:
        """Evaluate a query and collect every row before returning.

        Raises:
            QueryExecutionError: If the graph is unavailable or the query
                cannot be parsed or evaluated.
        """
        stream = await self.stream(query)
        try:
            bindings = await stream.collect()
        except Exception as e:
            # Parse and evaluation errors come from rdflib and pyparsing
            raise QueryExecutionError(self.source_name, e) from e
        logger.debug(f"{self.source_name}: collected {len(bindings)} row(s)")
        return bindings
