"""Remote SPARQL endpoint adapters."""

from poi_proximity.adapters.sparql_endpoint.remote_query_executor import RemoteQueryExecutor

__all__ = ["RemoteQueryExecutor"]
