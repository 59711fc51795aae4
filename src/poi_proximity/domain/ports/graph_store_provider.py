"""Graph store provider port."""

from typing import TYPE_CHECKING, Protocol

from poi_proximity.domain.models.store_state import StoreState

if TYPE_CHECKING:
    from rdflib import Graph


class GraphStoreProvider(Protocol):
    """Port for obtaining the shared, read-only station graph."""

    @property
    def state(self) -> StoreState:
        """Current lifecycle state of the store."""
        ...

    async def get_store(self) -> "Graph":
        """Return the loaded graph, loading it on first use.

        Raises:
            SourceUnavailable: If the dataset could not be fetched or decoded.
        """
        ...
