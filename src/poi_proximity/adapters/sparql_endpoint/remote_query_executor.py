"""Query executor for remote SPARQL endpoints over HTTP."""

import asyncio
import logging
import math
from typing import TYPE_CHECKING, Any
from urllib.parse import quote, urlencode

import aiohttp
from shapely import wkt
from shapely.errors import ShapelyError

from poi_proximity.adapters.api_request_logger import log_api_request
from poi_proximity.adapters.sparql_endpoint.constants import (
    DEFAULT_HEADERS,
    IDENTIFIER_FIELDS,
    SPARQL_RESULTS_JSON,
    WKT_FIELDS,
)
from poi_proximity.domain.errors import QueryExecutionError
from poi_proximity.domain.models.binding import Binding
from poi_proximity.domain.models.sparql_query import SparqlQuery
from poi_proximity.domain.ports.query_executor import QueryExecutor

logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from aiohttp import ClientResponse, ClientSession


class RemoteQueryExecutor(QueryExecutor):
    """Sends queries to a SPARQL endpoint and parses the JSON result table.

    Server-side filtering and limiting are trusted: a non-success status
    yields no rows instead of an error.
    """

    def __init__(
        self,
        session: "ClientSession",
        endpoint_url: str,
        source_name: str = "places",
        cors_relay_url: str | None = None,
        send_format_param: bool = False,
        timeout_seconds: float | None = None,
    ) -> None:
        """Initialize the executor.

        Args:
            session: Shared aiohttp session.
            endpoint_url: SPARQL endpoint URL.
            source_name: Name used in logs and errors.
            cors_relay_url: Optional relay prefix; the full endpoint URL is
                percent-encoded and appended to it.
            send_format_param: Also pass the result format as a ``format``
                query parameter, for endpoints that ignore the Accept header.
            timeout_seconds: Total request timeout, or None for no timeout.
        """
        self._session = session
        self._endpoint_url = endpoint_url
        self.source_name = source_name
        self._cors_relay_url = cors_relay_url
        self._send_format_param = send_format_param
        self._timeout = aiohttp.ClientTimeout(total=timeout_seconds)

    def build_request(self, query: SparqlQuery) -> tuple[str, dict[str, str] | None]:
        """Return the URL and query parameters for a request."""
        params = {"query": query.text}
        if self._send_format_param:
            params["format"] = SPARQL_RESULTS_JSON

        if not self._cors_relay_url:
            return self._endpoint_url, params

        separator = "&" if "?" in self._endpoint_url else "?"
        target = f"{self._endpoint_url}{separator}{urlencode(params)}"
        return f"{self._cors_relay_url}{quote(target, safe='')}", None

    async def evaluate(self, query: SparqlQuery) -> list[Binding]:
        """Run a query against the endpoint.

        Returns:
            Parsed rows, or an empty list if the endpoint answered with a
            non-success status.

        Raises:
            QueryExecutionError: On transport failure or an unparseable body.
        """
        url, params = self.build_request(query)
        log_api_request("GET", url, params=params, headers=DEFAULT_HEADERS)

        try:
            async with self._session.get(
                url, params=params, headers=DEFAULT_HEADERS, timeout=self._timeout
            ) as response:
                if response.status != 200:
                    await self._log_error_response(response, url)
                    return []
                payload = await response.json(content_type=None)
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise QueryExecutionError(self.source_name, e) from e
        except ValueError as e:
            raise QueryExecutionError(self.source_name, e, status_code=200) from e

        bindings = self._parse_bindings(payload)
        logger.debug(f"{self.source_name}: received {len(bindings)} row(s)")
        return bindings

    async def _log_error_response(self, response: "ClientResponse", url: str) -> None:
        """Log error response details."""
        error_text = await response.text(errors="replace")
        error_body = error_text[:500] if error_text else "(empty response body)"
        content_type = response.headers.get("Content-Type", "unknown")
        logger.warning(
            f"{self.source_name}: endpoint returned status {response.status} for {url}: "
            f"{error_body} (Content-Type: {content_type})"
        )

    def _parse_bindings(self, payload: Any) -> list[Binding]:
        """Parse a SPARQL JSON results document into bindings."""
        rows = payload.get("results", {}).get("bindings") if isinstance(payload, dict) else None
        if not isinstance(rows, list):
            raise QueryExecutionError(
                self.source_name,
                ValueError("Response has no results.bindings array"),
                status_code=200,
            )

        bindings = []
        for row in rows:
            binding = self._parse_row(row) if isinstance(row, dict) else None
            if binding is None:
                logger.warning(f"{self.source_name}: skipping malformed row {row!r}")
                continue
            bindings.append(binding)
        return bindings

    @staticmethod
    def _value(row: dict[str, Any], field: str) -> str | None:
        cell = row.get(field)
        if isinstance(cell, dict) and isinstance(cell.get("value"), str):
            return cell["value"]
        return None

    def _parse_row(self, row: dict[str, Any]) -> Binding | None:
        """Parse one result row; returns None if required fields are missing."""
        identifier = next(
            (value for field in IDENTIFIER_FIELDS if (value := self._value(row, field))), None
        )
        name = self._value(row, "name")
        if not identifier or not name:
            return None

        distance_km: float | None = None
        raw_distance = self._value(row, "distance")
        if raw_distance is not None:
            try:
                distance_km = float(raw_distance)
            except ValueError:
                return None
            if not math.isfinite(distance_km) or distance_km < 0:
                return None

        longitude, latitude = self._parse_coordinates(row)
        return Binding(
            identifier=identifier,
            display_name=name,
            longitude=longitude,
            latitude=latitude,
            distance_km=distance_km,
            link_target=self._value(row, "website"),
        )

    def _parse_coordinates(self, row: dict[str, Any]) -> tuple[float | None, float | None]:
        """Read coordinates from explicit lat/long fields or a WKT geometry."""
        raw_long = self._value(row, "long")
        raw_lat = self._value(row, "lat")
        if raw_long is not None and raw_lat is not None:
            try:
                return float(raw_long), float(raw_lat)
            except ValueError:
                return None, None

        for field in WKT_FIELDS:
            literal = self._value(row, field)
            if literal is None:
                continue
            return self._parse_wkt(literal)
        return None, None

    @staticmethod
    def _parse_wkt(literal: str) -> tuple[float | None, float | None]:
        """Parse a WKT literal, dropping a leading CRS IRI if present."""
        text = literal.strip()
        if text.startswith("<") and ">" in text:
            text = text[text.index(">") + 1 :].strip()
        try:
            geometry = wkt.loads(text)
        except ShapelyError:
            return None, None
        if geometry.is_empty:
            return None, None
        point = geometry if geometry.geom_type == "Point" else geometry.centroid
        return point.x, point.y
