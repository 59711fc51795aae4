"""Proximity resolution use case: query one source and rank what it returns."""

import asyncio
import logging
from collections.abc import Mapping, Sequence
from typing import TYPE_CHECKING

from poi_proximity.application.query_builders import (
    DEFAULT_OSM_GRAPH,
    RESULT_LIMIT,
    build_place_query,
    build_station_query,
    build_within_query,
)
from poi_proximity.domain.errors import InvalidQueryParameter, QueryExecutionError
from poi_proximity.domain.geo import buffer_bounding_box, great_circle_distance_km
from poi_proximity.domain.models import (
    Binding,
    BoundingBox,
    Candidate,
    ErrorDetails,
    GeoPoint,
    ProximityQuery,
    RankedResult,
    SourceKind,
    SparqlQuery,
)

logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from poi_proximity.domain.ports import QueryExecutor


class ProximityResolver:
    """Finds points of interest near an origin and ranks them by distance.

    Each call is independent. A failing source produces an empty result
    carrying error details instead of raising, so sibling lookups for the
    same origin are unaffected.
    """

    def __init__(
        self,
        executors: Mapping[SourceKind, "QueryExecutor"],
        *,
        result_limit: int = RESULT_LIMIT,
        place_category: str = "museum",
        within_category: str = "Museum",
        osm_graph_iri: str = DEFAULT_OSM_GRAPH,
    ) -> None:
        """Initialize the resolver.

        Args:
            executors: Executor to use for each source kind.
            result_limit: Cap for remote lookups, at most 5; the radius query
                applies it server-side and it is enforced again here.
            place_category: Default category for radius lookups.
            within_category: Default category for polygon containment lookups.
            osm_graph_iri: Named graph queried by radius lookups.
        """
        self._executors = dict(executors)
        if isinstance(result_limit, bool) or not 1 <= result_limit <= RESULT_LIMIT:
            raise ValueError(f"result_limit must be between 1 and {RESULT_LIMIT}, got {result_limit!r}")
        self._result_limit = result_limit
        self._place_category = place_category
        self._within_category = within_category
        self._osm_graph_iri = osm_graph_iri

    async def resolve(
        self,
        origin: GeoPoint,
        radius_km: float,
        source: SourceKind,
        category: str | None = None,
    ) -> RankedResult:
        """Look up candidates near origin in one source.

        Args:
            origin: Search origin; all distances are measured from it.
            radius_km: Search radius in kilometres.
            source: Which knowledge source to query.
            category: Category override for place lookups.

        Returns:
            Candidates sorted by ascending distance. If the source failed,
            the result is empty and ``error`` describes the failure.

        Raises:
            InvalidRadius: If radius_km is not positive and finite.
        """
        request = ProximityQuery(origin=origin, radius_km=radius_km, category=category)

        executor = self._executors.get(source)
        if executor is None:
            logger.error(f"No executor configured for source '{source.value}'")
            return RankedResult(
                source=source, error=ErrorDetails(reason=f"Source '{source.value}' is not configured")
            )

        box = buffer_bounding_box(origin, radius_km) if source.is_box_based else None

        try:
            query = self._build_query(source, request, box)
            bindings = await executor.evaluate(query)
        except InvalidQueryParameter as e:
            logger.error(f"Could not build {source.value} query: {e}")
            return RankedResult(source=source, error=ErrorDetails(reason=str(e)))
        except QueryExecutionError as e:
            logger.warning(f"Lookup for {source.value} failed: {e}")
            return RankedResult(
                source=source,
                error=ErrorDetails(status_code=e.status_code, reason=str(e)),
            )

        candidates = self._rank(bindings, origin, box)
        if source.is_remote:
            candidates = candidates[: self._result_limit]

        logger.info(
            f"Found {len(candidates)} {source.value} candidate(s) within {radius_km} km "
            f"of ({origin.longitude}, {origin.latitude})"
        )
        return RankedResult(source=source, candidates=tuple(candidates))

    async def resolve_many(
        self,
        origin: GeoPoint,
        requests: Sequence[tuple[SourceKind, float]],
    ) -> list[RankedResult]:
        """Resolve several sources for the same origin concurrently.

        Args:
            origin: Shared search origin.
            requests: (source, radius_km) pairs.

        Returns:
            One result per request, in request order.
        """
        return list(
            await asyncio.gather(
                *(self.resolve(origin, radius_km, source) for source, radius_km in requests)
            )
        )

    def _build_query(
        self, source: SourceKind, request: ProximityQuery, box: BoundingBox | None
    ) -> SparqlQuery:
        if source is SourceKind.STATIONS and box is not None:
            return build_station_query(box)
        if source is SourceKind.PLACES_WITHIN and box is not None:
            return build_within_query(box, request.category or self._within_category)
        return build_place_query(
            request.origin,
            request.radius_km,
            request.category or self._place_category,
            limit=self._result_limit,
            graph_iri=self._osm_graph_iri,
        )

    @staticmethod
    def _rank(
        bindings: list[Binding], origin: GeoPoint, box: BoundingBox | None
    ) -> list[Candidate]:
        """Turn collected bindings into candidates, sorted by distance.

        Server-supplied distances are kept; otherwise the distance is
        computed from the row's coordinate. For box-based sources, rows whose
        coordinate falls outside the box are dropped.
        """
        candidates = []
        for binding in bindings:
            point = binding.point
            if box is not None and point is not None and not box.contains(point):
                logger.debug(f"Dropping {binding.identifier}: outside the bounding box")
                continue

            distance_km = binding.distance_km
            if distance_km is None:
                if point is None:
                    logger.debug(f"Dropping {binding.identifier}: no distance or coordinate")
                    continue
                distance_km = great_circle_distance_km(origin, point)

            candidates.append(
                Candidate(
                    identifier=binding.identifier,
                    display_name=binding.display_name,
                    distance_km=max(0.0, distance_km),
                    link_target=binding.link_target,
                )
            )

        # list.sort is stable: equal distances keep source order
        candidates.sort(key=lambda c: c.distance_km)
        return candidates
