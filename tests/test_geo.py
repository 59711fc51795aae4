"""Tests for spherical geometry helpers."""

import math

import pytest

from poi_proximity.domain.errors import InvalidRadius
from poi_proximity.domain.geo import (
    EARTH_RADIUS_KM,
    buffer_bounding_box,
    destination_point,
    geodesic_buffer,
    great_circle_distance_km,
)
from poi_proximity.domain.models import GeoPoint

ANTWERP = GeoPoint(longitude=4.4, latitude=51.2)


class TestGreatCircleDistance:
    """Tests for great_circle_distance_km."""

    @pytest.mark.parametrize(
        "point",
        [ANTWERP, GeoPoint(longitude=0.0, latitude=0.0), GeoPoint(longitude=-179.9, latitude=-89.9)],
    )
    def test_distance_to_self_is_zero(self, point: GeoPoint) -> None:
        """Given any point, when measuring distance to itself, then it is zero."""
        assert great_circle_distance_km(point, point) == 0.0

    def test_distance_is_symmetric(self) -> None:
        """Given two points, when swapping them, then the distance is unchanged."""
        other = GeoPoint(longitude=4.6, latitude=51.5)

        assert great_circle_distance_km(ANTWERP, other) == pytest.approx(
            great_circle_distance_km(other, ANTWERP)
        )

    def test_one_degree_of_latitude(self) -> None:
        """Given points one degree of latitude apart, when measuring, then about 111.2 km."""
        a = GeoPoint(longitude=0.0, latitude=0.0)
        b = GeoPoint(longitude=0.0, latitude=1.0)

        assert great_circle_distance_km(a, b) == pytest.approx(111.19, abs=0.01)

    def test_nearby_station_distance(self) -> None:
        """Given a station about a kilometre away, when measuring, then distance is close to it."""
        station = GeoPoint(longitude=4.41, latitude=51.21)

        assert great_circle_distance_km(ANTWERP, station) == pytest.approx(1.31, abs=0.05)

    def test_antipodal_points(self) -> None:
        """Given antipodal points, when measuring, then half the circumference is returned."""
        a = GeoPoint(longitude=0.0, latitude=0.0)
        b = GeoPoint(longitude=180.0, latitude=0.0)

        assert great_circle_distance_km(a, b) == pytest.approx(math.pi * EARTH_RADIUS_KM)


class TestDestinationPoint:
    """Tests for destination_point."""

    def test_travelling_north_increases_latitude(self) -> None:
        """Given a bearing of 0, when travelling, then only latitude changes."""
        destination = destination_point(ANTWERP, 10.0, 0.0)

        assert destination.longitude == pytest.approx(ANTWERP.longitude)
        assert destination.latitude > ANTWERP.latitude

    @pytest.mark.parametrize("bearing", [0.0, 45.0, 90.0, 180.0, 270.0, 333.0])
    def test_destination_is_at_requested_distance(self, bearing: float) -> None:
        """Given any bearing, when travelling 5 km, then the destination is 5 km away."""
        destination = destination_point(ANTWERP, 5.0, bearing)

        assert great_circle_distance_km(ANTWERP, destination) == pytest.approx(5.0, rel=1e-9)

    def test_longitude_wraps_across_antimeridian(self) -> None:
        """Given a start near the antimeridian, when travelling east, then longitude wraps."""
        start = GeoPoint(longitude=179.99, latitude=0.0)

        destination = destination_point(start, 10.0, 90.0)

        assert -180.0 <= destination.longitude < -179.0


class TestBufferBoundingBox:
    """Tests for buffer_bounding_box."""

    @pytest.mark.parametrize("latitude", [-80.0, -51.2, -10.0, 0.0, 23.5, 51.2, 70.0, 84.0])
    @pytest.mark.parametrize("radius_km", [0.5, 5.0, 10.0, 250.0])
    def test_box_contains_origin(self, latitude: float, radius_km: float) -> None:
        """Given any valid origin and radius, when buffering, then the origin is inside the box."""
        origin = GeoPoint(longitude=4.4, latitude=latitude)

        box = buffer_bounding_box(origin, radius_km)

        assert box.lon_min <= origin.longitude <= box.lon_max
        assert box.lat_min <= origin.latitude <= box.lat_max

    @pytest.mark.parametrize("latitude", [0.0, 51.2, 75.0])
    def test_box_contains_every_point_within_radius(self, latitude: float) -> None:
        """Given an origin, when buffering, then points just inside the radius in every direction are in the box."""
        origin = GeoPoint(longitude=4.4, latitude=latitude)
        radius_km = 25.0

        box = buffer_bounding_box(origin, radius_km)

        for bearing in range(0, 360):
            point = destination_point(origin, radius_km * 0.9999, float(bearing))
            assert box.contains(point), f"bearing {bearing} escaped the box"

    def test_box_is_tight_in_latitude(self) -> None:
        """Given a 5 km radius, when buffering, then the latitude span is about 10 km."""
        box = buffer_bounding_box(ANTWERP, 5.0)

        lat_span_km = (box.lat_max - box.lat_min) * math.pi / 180.0 * EARTH_RADIUS_KM
        assert lat_span_km == pytest.approx(10.0, rel=1e-6)

    def test_box_widens_in_longitude_away_from_equator(self) -> None:
        """Given the same radius, when buffering at higher latitude, then the longitude span grows."""
        equator = buffer_bounding_box(GeoPoint(longitude=4.4, latitude=0.0), 5.0)
        north = buffer_bounding_box(ANTWERP, 5.0)

        assert (north.lon_max - north.lon_min) > (equator.lon_max - equator.lon_min)

    def test_far_station_is_outside_box(self) -> None:
        """Given a station about 34 km away, when buffering 5 km, then it is outside the box."""
        box = buffer_bounding_box(ANTWERP, 5.0)

        assert box.contains(GeoPoint(longitude=4.41, latitude=51.21))
        assert not box.contains(GeoPoint(longitude=4.6, latitude=51.5))

    def test_circle_covering_pole_spans_all_longitudes(self) -> None:
        """Given an origin near the north pole, when buffering past it, then the box reaches the pole."""
        box = buffer_bounding_box(GeoPoint(longitude=10.0, latitude=89.99), 5.0)

        assert box.lon_min == -180.0
        assert box.lon_max == 180.0
        assert box.lat_max == 90.0
        assert box.lat_min < 89.99

    def test_circle_covering_south_pole(self) -> None:
        """Given an origin near the south pole, when buffering past it, then the box reaches -90."""
        box = buffer_bounding_box(GeoPoint(longitude=10.0, latitude=-89.99), 5.0)

        assert box.lat_min == -90.0
        assert box.lat_max > -89.99

    def test_circle_crossing_antimeridian_spans_all_longitudes(self) -> None:
        """Given an origin next to the antimeridian, when buffering across it, then lon_min <= lon_max holds."""
        box = buffer_bounding_box(GeoPoint(longitude=179.99, latitude=0.0), 5.0)

        assert box.lon_min == -180.0
        assert box.lon_max == 180.0

    @pytest.mark.parametrize("radius_km", [0.0, -1.0, math.nan, math.inf])
    def test_invalid_radius_is_rejected(self, radius_km: float) -> None:
        """Given a non-positive or non-finite radius, when buffering, then InvalidRadius is raised."""
        with pytest.raises(InvalidRadius):
            buffer_bounding_box(ANTWERP, radius_km)

    def test_buffer_polygon_vertices_lie_on_circle(self) -> None:
        """Given a buffer polygon, when measuring its vertices, then each is at the radius."""
        polygon = geodesic_buffer(ANTWERP, 5.0)

        for lon, lat in list(polygon.exterior.coords):
            vertex = GeoPoint(longitude=lon, latitude=lat)
            assert great_circle_distance_km(ANTWERP, vertex) == pytest.approx(5.0, rel=1e-6)
