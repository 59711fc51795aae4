"""Spherical geometry helpers: distances, destination points and buffered boxes.

All computations use a spherical earth. Bounding boxes are derived from a
geodesic buffer polygon rather than a planar square so that they contain every
point within the requested great-circle distance at any latitude.
"""

import math

from shapely.geometry import Polygon

from poi_proximity.domain.errors import InvalidRadius
from poi_proximity.domain.models.bounding_box import BoundingBox
from poi_proximity.domain.models.geo_point import GeoPoint

# Mean earth radius (IUGG)
EARTH_RADIUS_KM = 6371.0088

# Vertices on the buffer ring, not counting the two longitude tangent points
BUFFER_STEPS = 64


def _validate_radius(radius_km: float) -> None:
    if not isinstance(radius_km, int | float) or not math.isfinite(radius_km) or radius_km <= 0:
        raise InvalidRadius(radius_km)


def _normalize_longitude(longitude: float) -> float:
    return (longitude + 540.0) % 360.0 - 180.0


def great_circle_distance_km(a: GeoPoint, b: GeoPoint) -> float:
    """Compute the haversine distance between two points in kilometres."""
    phi1 = math.radians(a.latitude)
    phi2 = math.radians(b.latitude)
    dphi = phi2 - phi1
    dlambda = math.radians(b.longitude - a.longitude)

    h = math.sin(dphi / 2.0) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(dlambda / 2.0) ** 2
    # Clamp against floating point drift
    h = min(1.0, max(0.0, h))
    return 2.0 * EARTH_RADIUS_KM * math.asin(math.sqrt(h))


def destination_point(origin: GeoPoint, distance_km: float, bearing_deg: float) -> GeoPoint:
    """Return the point reached by travelling along a great circle from origin.

    Args:
        origin: Starting point.
        distance_km: Distance to travel in kilometres.
        bearing_deg: Initial bearing in degrees clockwise from north.

    Returns:
        The destination point, with longitude normalized to [-180, 180).
    """
    delta = distance_km / EARTH_RADIUS_KM
    theta = math.radians(bearing_deg)
    phi1 = math.radians(origin.latitude)
    lambda1 = math.radians(origin.longitude)

    sin_phi2 = math.sin(phi1) * math.cos(delta) + math.cos(phi1) * math.sin(delta) * math.cos(theta)
    phi2 = math.asin(min(1.0, max(-1.0, sin_phi2)))
    lambda2 = lambda1 + math.atan2(
        math.sin(theta) * math.sin(delta) * math.cos(phi1),
        math.cos(delta) - math.sin(phi1) * math.sin(phi2),
    )

    return GeoPoint(
        longitude=_normalize_longitude(math.degrees(lambda2)),
        latitude=max(-90.0, min(90.0, math.degrees(phi2))),
    )


def _covers_pole(origin: GeoPoint, angular_radius: float) -> bool:
    return angular_radius >= math.pi / 2.0 - abs(math.radians(origin.latitude))


def _buffer_bearings(origin: GeoPoint, angular_radius: float) -> list[float]:
    """Evenly spaced bearings plus the two where the circle reaches its extreme longitudes."""
    bearings = [i * 360.0 / BUFFER_STEPS for i in range(BUFFER_STEPS)]
    # Right spherical triangle pole/center/tangent point: cos(theta) = tan(delta) * tan(phi)
    cos_theta = math.tan(angular_radius) * math.tan(math.radians(origin.latitude))
    tangent = math.degrees(math.acos(min(1.0, max(-1.0, cos_theta))))
    bearings.extend([tangent, 360.0 - tangent])
    return sorted(set(bearings))


def geodesic_buffer(origin: GeoPoint, radius_km: float) -> Polygon:
    """Build a polygon approximating all points within radius_km of origin.

    The ring is not unwrapped across the antimeridian and is meaningless when
    the circle covers a pole; ``buffer_bounding_box`` handles both cases.

    Raises:
        InvalidRadius: If radius_km is not positive and finite.
    """
    _validate_radius(radius_km)
    angular_radius = radius_km / EARTH_RADIUS_KM
    ring = [
        destination_point(origin, radius_km, bearing)
        for bearing in _buffer_bearings(origin, angular_radius)
    ]
    return Polygon([(p.longitude, p.latitude) for p in ring])


def buffer_bounding_box(origin: GeoPoint, radius_km: float) -> BoundingBox:
    """Return the bounding box of the geodesic buffer around origin.

    Args:
        origin: Centre of the search.
        radius_km: Search radius in kilometres.

    Returns:
        A box containing every point within radius_km great-circle distance.

    Raises:
        InvalidRadius: If radius_km is not positive and finite.
    """
    _validate_radius(radius_km)
    angular_radius = radius_km / EARTH_RADIUS_KM
    latitude = math.radians(origin.latitude)

    if _covers_pole(origin, angular_radius):
        lat_min = math.degrees(latitude - angular_radius)
        lat_max = math.degrees(latitude + angular_radius)
        return BoundingBox(
            lon_min=-180.0,
            lon_max=180.0,
            lat_min=max(-90.0, lat_min) if origin.latitude >= 0 else -90.0,
            lat_max=90.0 if origin.latitude >= 0 else min(90.0, lat_max),
        )

    lon_min, lat_min, lon_max, lat_max = geodesic_buffer(origin, radius_km).bounds

    # Extreme longitude offset of a small circle: asin(sin(delta) / cos(phi))
    lon_extent = math.degrees(math.asin(math.sin(angular_radius) / math.cos(latitude)))
    if origin.longitude - lon_extent < -180.0 or origin.longitude + lon_extent > 180.0:
        lon_min, lon_max = -180.0, 180.0

    return BoundingBox(
        lon_min=min(lon_min, origin.longitude),
        lon_max=max(lon_max, origin.longitude),
        lat_min=min(lat_min, origin.latitude),
        lat_max=max(lat_max, origin.latitude),
    )
