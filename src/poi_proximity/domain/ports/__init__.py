"""Ports (interfaces) for the ports-and-adapters architecture."""

from poi_proximity.domain.ports.graph_store_provider import GraphStoreProvider
from poi_proximity.domain.ports.query_executor import QueryExecutor
from poi_proximity.domain.ports.result_presenter import ResultPresenter

__all__ = [
    "GraphStoreProvider",
    "QueryExecutor",
    "ResultPresenter",
]
