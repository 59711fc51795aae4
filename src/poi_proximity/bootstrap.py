"""Composition root wiring configuration, sources and the resolver."""

import logging
import sys

import aiohttp

from poi_proximity.adapters.config import AppConfig
from poi_proximity.adapters.graph_store import GraphStoreLoader, LocalQueryExecutor
from poi_proximity.adapters.sparql_endpoint import RemoteQueryExecutor
from poi_proximity.application.services import ProximityResolver
from poi_proximity.domain.models import SourceKind

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging(config: AppConfig) -> None:
    """Configure root logging once for the embedding application."""
    logging.basicConfig(
        level=config.log_level,
        format=LOG_FORMAT,
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stderr,
    )


def create_resolver(
    session: aiohttp.ClientSession,
    config: AppConfig | None = None,
) -> ProximityResolver:
    """Build a resolver with one executor per source kind.

    The caller owns the session; every source shares it. The station graph
    is not fetched until the first station lookup.
    """
    config = config or AppConfig()
    config.load_toml_overrides()

    store_loader = GraphStoreLoader(
        session=session,
        dataset_url=config.station_dataset_url,
        source_name=SourceKind.STATIONS.value,
        timeout_seconds=config.http_timeout_seconds,
    )
    executors = {
        SourceKind.STATIONS: LocalQueryExecutor(store_loader, source_name=SourceKind.STATIONS.value),
        SourceKind.PLACES: RemoteQueryExecutor(
            session=session,
            endpoint_url=config.sparql_endpoint_url,
            source_name=SourceKind.PLACES.value,
            cors_relay_url=config.cors_relay_url if config.use_cors_relay_for_places else None,
            timeout_seconds=config.http_timeout_seconds,
        ),
        SourceKind.PLACES_WITHIN: RemoteQueryExecutor(
            session=session,
            endpoint_url=config.within_endpoint_url,
            source_name=SourceKind.PLACES_WITHIN.value,
            cors_relay_url=config.cors_relay_url if config.use_cors_relay_for_within else None,
            send_format_param=True,
            timeout_seconds=config.http_timeout_seconds,
        ),
    }
    logger.debug(f"Configured sources: {', '.join(kind.value for kind in executors)}")

    return ProximityResolver(
        executors,
        result_limit=config.result_limit,
        place_category=config.place_category,
        within_category=config.within_category,
        osm_graph_iri=config.osm_graph_iri,
    )
