"""Adapters layer - external system integrations."""

from poi_proximity.adapters.config import AppConfig
from poi_proximity.adapters.graph_store import GraphStoreLoader, LocalQueryExecutor
from poi_proximity.adapters.sparql_endpoint import RemoteQueryExecutor

__all__ = [
    "AppConfig",
    "GraphStoreLoader",
    "LocalQueryExecutor",
    "RemoteQueryExecutor",
]
