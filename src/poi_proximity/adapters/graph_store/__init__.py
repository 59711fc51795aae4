"""In-memory station graph adapters."""

from poi_proximity.adapters.graph_store.binding_stream import BindingStream
from poi_proximity.adapters.graph_store.graph_store_loader import GraphStoreLoader
from poi_proximity.adapters.graph_store.local_query_executor import LocalQueryExecutor

__all__ = ["BindingStream", "GraphStoreLoader", "LocalQueryExecutor"]
