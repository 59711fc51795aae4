"""Finite, restartable producer of station rows from the local graph."""

import asyncio
import logging
from collections.abc import AsyncIterator
from typing import TYPE_CHECKING

from poi_proximity.domain.models.binding import Binding
from poi_proximity.domain.models.sparql_query import SparqlQuery

if TYPE_CHECKING:
    from rdflib import Graph
    from rdflib.query import ResultRow

logger = logging.getLogger(__name__)


class BindingStream:
    """Evaluates a query against the graph and yields normalized rows.

    Every iteration re-evaluates the query from the start, yielding to the
    event loop between rows. Row order follows the query engine, not
    distance, so consumers must collect everything before sorting.
    """

    def __init__(self, store: "Graph", query: SparqlQuery) -> None:
        self._store = store
        self._query = query

    def __aiter__(self) -> AsyncIterator[Binding]:
        return self._rows()

    async def _rows(self) -> AsyncIterator[Binding]:
        # SPARQL evaluation is blocking; run it off the event loop
        rows = await asyncio.to_thread(self._evaluate)
        for row in rows:
            binding = self._normalize(row)
            if binding is not None:
                yield binding
            await asyncio.sleep(0)

    def _evaluate(self) -> list["ResultRow"]:
        return list(self._store.query(self._query.text))  # type: ignore[arg-type]

    async def collect(self) -> list[Binding]:
        """Drain the stream into a list, preserving engine order."""
        return [binding async for binding in self]

    @staticmethod
    def _normalize(row: "ResultRow") -> Binding | None:
        """Map a station/name/lat/long row to a binding."""
        values = row.asdict()
        station = values.get("station")
        name = values.get("name")
        lat = values.get("lat")
        long = values.get("long")
        if station is None or name is None or lat is None or long is None:
            logger.debug(f"Skipping incomplete station row {values}")
            return None
        try:
            latitude = float(str(lat))
            longitude = float(str(long))
        except ValueError:
            logger.debug(f"Skipping station row with non-numeric coordinates {values}")
            return None
        return Binding(
            identifier=str(station),
            display_name=str(name),
            longitude=longitude,
            latitude=latitude,
        )
