"""Loader for the in-memory station graph.

The station dataset is a JSON-LD document. It is fetched and decoded into an
rdflib graph once per loader; concurrent first callers share a single
in-flight load.
"""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING

import aiohttp
from rdflib import Graph

from poi_proximity.adapters.api_request_logger import log_api_request
from poi_proximity.domain.errors import SourceUnavailable
from poi_proximity.domain.models.store_state import StoreState
from poi_proximity.domain.ports.graph_store_provider import GraphStoreProvider

logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from aiohttp import ClientSession

STATION_DATASET_URL = "https://graph.irail.be/sncb/stops"

DATASET_HEADERS = {
    "Accept": "application/ld+json, application/json;q=0.9",
}


class GraphStoreLoader(GraphStoreProvider):
    """Owns the station graph and its Uninitialized/Loading/Ready/Failed lifecycle."""

    def __init__(
        self,
        session: ClientSession,
        dataset_url: str = STATION_DATASET_URL,
        source_name: str = "stations",
        timeout_seconds: float | None = None,
    ) -> None:
        """Initialize the loader.

        Args:
            session: Shared aiohttp session used for the dataset fetch.
            dataset_url: URL of the JSON-LD station dataset.
            source_name: Name used in logs and errors.
            timeout_seconds: Total fetch timeout, or None for no timeout.
        """
        self._session = session
        self._dataset_url = dataset_url
        self.source_name = source_name
        self._timeout = aiohttp.ClientTimeout(total=timeout_seconds)
        self._state = StoreState.UNINITIALIZED
        self._store: Graph | None = None
        self._failure: SourceUnavailable | None = None
        self._load_task: asyncio.Task[Graph] | None = None
        self._lock = asyncio.Lock()
        self.fetch_count = 0

    @property
    def state(self) -> StoreState:
        return self._state

    async def get_store(self) -> Graph:
        """Return the station graph, loading it on the first call.

        Raises:
            SourceUnavailable: If the dataset could not be fetched or decoded.
                Once failed, every later call raises the same error without
                fetching again.
        """
        if self._state is StoreState.READY and self._store is not None:
            return self._store
        if self._state is StoreState.FAILED and self._failure is not None:
            raise self._failure

        async with self._lock:
            if self._load_task is None:
                self._state = StoreState.LOADING
                self._load_task = asyncio.ensure_future(self._load())
            task = self._load_task

        return await task

    async def _load(self) -> Graph:
        logger.info(f"Loading {self.source_name} graph from {self._dataset_url}")
        try:
            document = await self._fetch_document()
            # JSON-LD decoding is blocking and may fetch remote contexts
            store = await asyncio.to_thread(self._decode, document)
        except SourceUnavailable as e:
            self._fail(e)
            raise
        except Exception as e:
            failure = SourceUnavailable(self.source_name, f"unexpected error while loading: {e!r}")
            self._fail(failure)
            raise failure from e

        self._store = store
        self._state = StoreState.READY
        logger.info(f"Loaded {len(store)} triples into the {self.source_name} graph")
        return store

    def _fail(self, failure: SourceUnavailable) -> None:
        self._failure = failure
        self._state = StoreState.FAILED
        logger.error(f"Could not load {self.source_name} graph: {failure.reason}")

    async def _fetch_document(self) -> str:
        """Fetch the raw JSON-LD dataset and decode it as UTF-8."""
        self.fetch_count += 1
        log_api_request("GET", self._dataset_url, headers=DATASET_HEADERS)
        try:
            async with self._session.get(
                self._dataset_url, headers=DATASET_HEADERS, timeout=self._timeout
            ) as response:
                if response.status != 200:
                    raise SourceUnavailable(
                        self.source_name, f"dataset returned HTTP status {response.status}"
                    )
                return await response.text(encoding="utf-8")
        except UnicodeDecodeError as e:
            raise SourceUnavailable(self.source_name, f"dataset is not valid UTF-8: {e}") from e
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise SourceUnavailable(self.source_name, f"dataset fetch failed: {e}") from e

    def _decode(self, document: str) -> Graph:
        """Decode a JSON-LD document into a graph."""
        store = Graph()
        try:
            store.parse(data=document, format="json-ld")
        except Exception as e:
            # rdflib raises a variety of error types for malformed JSON-LD
            raise SourceUnavailable(self.source_name, f"dataset could not be decoded: {e}") from e
        return store
