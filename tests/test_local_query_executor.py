"""Tests for the local graph executor and its binding stream."""

import asyncio
import json
import time
from unittest.mock import patch

import pytest
from rdflib import Graph

from poi_proximity.adapters.graph_store import BindingStream, LocalQueryExecutor
from poi_proximity.application.query_builders import build_station_query
from poi_proximity.domain.errors import QueryExecutionError, SourceUnavailable
from poi_proximity.domain.models import (
    BoundingBox,
    QueryDialect,
    SparqlQuery,
    StoreState,
)
from tests.test_graph_store_loader import STATIONS_JSONLD

BOX_AROUND_ANTWERP = BoundingBox(lon_min=4.328, lon_max=4.472, lat_min=51.155, lat_max=51.245)


def station_graph() -> Graph:
    graph = Graph()
    graph.parse(data=json.dumps(STATIONS_JSONLD), format="json-ld")
    return graph


class StaticStoreProvider:
    """Store provider that returns a prepared graph or fails."""

    def __init__(self, store: Graph | None = None, failure: SourceUnavailable | None = None) -> None:
        self._store = store
        self._failure = failure
        self.calls = 0

    @property
    def state(self) -> StoreState:
        return StoreState.FAILED if self._failure else StoreState.READY

    async def get_store(self) -> Graph:
        self.calls += 1
        if self._failure is not None:
            raise self._failure
        assert self._store is not None
        return self._store


class TestBindingStream:
    """Tests for BindingStream."""

    @pytest.mark.asyncio
    async def test_collect_returns_rows_inside_box(self) -> None:
        """Given one station inside and one outside the box, when collecting, then only the inside one is returned."""
        stream = BindingStream(station_graph(), build_station_query(BOX_AROUND_ANTWERP))

        bindings = await stream.collect()

        assert len(bindings) == 1
        assert bindings[0].identifier == "http://irail.be/stations/NMBS/008821006"
        assert bindings[0].display_name == "Antwerpen-Centraal"
        assert bindings[0].longitude == pytest.approx(4.41)
        assert bindings[0].latitude == pytest.approx(51.21)
        assert bindings[0].distance_km is None

    @pytest.mark.asyncio
    async def test_stream_is_restartable(self) -> None:
        """Given a stream, when iterating it twice, then both passes yield the same rows."""
        wide_box = BoundingBox(lon_min=3.0, lon_max=6.0, lat_min=50.0, lat_max=52.0)
        stream = BindingStream(station_graph(), build_station_query(wide_box))

        first = [binding async for binding in stream]
        second = await stream.collect()

        assert len(first) == 2
        assert first == second


class TestLocalQueryExecutor:
    """Tests for LocalQueryExecutor."""

    @pytest.mark.asyncio
    async def test_evaluate_collects_all_rows(self) -> None:
        """Given a loaded graph, when evaluating the station query, then matching rows are collected."""
        provider = StaticStoreProvider(store=station_graph())
        executor = LocalQueryExecutor(provider)

        bindings = await executor.evaluate(build_station_query(BOX_AROUND_ANTWERP))

        assert [b.display_name for b in bindings] == ["Antwerpen-Centraal"]
        assert provider.calls == 1

    @pytest.mark.asyncio
    async def test_unavailable_store_raises_query_execution_error(self) -> None:
        """Given the graph failed to load, when evaluating, then QueryExecutionError wraps SourceUnavailable."""
        failure = SourceUnavailable("stations", "dataset returned HTTP status 503")
        executor = LocalQueryExecutor(StaticStoreProvider(failure=failure), source_name="stations")

        with pytest.raises(QueryExecutionError) as exc_info:
            await executor.evaluate(build_station_query(BOX_AROUND_ANTWERP))

        assert exc_info.value.source == "stations"
        assert exc_info.value.cause is failure

    @pytest.mark.asyncio
    async def test_unparseable_query_raises_query_execution_error(self) -> None:
        """Given malformed query text, when evaluating, then QueryExecutionError is raised."""
        executor = LocalQueryExecutor(StaticStoreProvider(store=station_graph()))
        broken = SparqlQuery(text="SELECT WHERE {", dialect=QueryDialect.BOUNDING_BOX)

        with pytest.raises(QueryExecutionError):
            await executor.evaluate(broken)

    @pytest.mark.asyncio
    async def test_query_evaluation_does_not_block_event_loop(self) -> None:
        """Given a slow query evaluation, when collecting, then other coroutines keep running meanwhile."""
        evaluate = BindingStream._evaluate
        gaps: list[float] = []

        def slow_evaluate(self: BindingStream):  # type: ignore[no-untyped-def]
            time.sleep(0.3)
            return evaluate(self)

        async def heartbeat() -> None:
            last = time.monotonic()
            for _ in range(20):
                await asyncio.sleep(0.01)
                now = time.monotonic()
                gaps.append(now - last)
                last = now

        stream = BindingStream(station_graph(), build_station_query(BOX_AROUND_ANTWERP))
        with patch.object(BindingStream, "_evaluate", slow_evaluate):
            bindings, _ = await asyncio.gather(stream.collect(), heartbeat())

        assert [b.display_name for b in bindings] == ["Antwerpen-Centraal"]
        assert max(gaps) < 0.25
