#!/usr/bin/env python3
"""Helper script to list stations and museums near a coordinate."""

import asyncio
import sys

import aiohttp

from poi_proximity.adapters.config import AppConfig
from poi_proximity.adapters.formatters import TextResultPresenter
from poi_proximity.bootstrap import configure_logging, create_resolver
from poi_proximity.domain.models import GeoPoint, SourceKind


async def find_nearby(longitude: float, latitude: float) -> None:
    """Resolve stations and places around a coordinate and print them."""
    config = AppConfig()
    configure_logging(config)
    origin = GeoPoint(longitude=longitude, latitude=latitude)
    print(f"Searching around: {origin.longitude}, {origin.latitude}\n")

    async with aiohttp.ClientSession() as session:
        resolver = create_resolver(session, config)
        results = await resolver.resolve_many(
            origin,
            [
                (SourceKind.STATIONS, config.station_radius_km),
                (SourceKind.PLACES, config.place_radius_km),
            ],
        )

    presenter = TextResultPresenter()
    for result in results:
        await presenter.present(result)


if __name__ == "__main__":
    if len(sys.argv) < 3:
        print("Usage: python find_nearby.py <longitude> <latitude>")
        print("Example: python find_nearby.py 4.4 51.2")
        sys.exit(1)

    asyncio.run(find_nearby(float(sys.argv[1]), float(sys.argv[2])))
