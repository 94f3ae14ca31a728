"""Tests for Web Mercator projection, planar area and area formatting."""

import math

import pytest
from pyproj import Transformer

from polygon_export import InsufficientVerticesError, Vertex, area, bounding_box, format_area, project, unproject


class TestProjection:
    def test_origin(self):
        x, y = project(Vertex(lat=0.0, lng=0.0))
        assert x == 0.0
        assert y == pytest.approx(0.0, abs=1e-6)

    def test_antimeridian_easting(self):
        x, _ = project(Vertex(lat=0.0, lng=180.0))
        assert x == pytest.approx(math.pi * 6378137.0)

    @pytest.mark.parametrize("lat,lng", [(51.5, -0.12), (-33.86, 151.2), (64.1, -21.9), (0.0001, 0.0001)])
    def test_matches_pyproj_pseudo_mercator(self, lat, lng):
        transformer = Transformer.from_crs("EPSG:4326", "EPSG:3857", always_xy=True)
        expected_x, expected_y = transformer.transform(lng, lat)
        x, y = project(Vertex(lat=lat, lng=lng))
        assert x == pytest.approx(expected_x, abs=1e-3)
        assert y == pytest.approx(expected_y, abs=1e-3)

    def test_unproject_inverts_project(self):
        v = Vertex(lat=47.3769, lng=8.5417)
        back = unproject(*project(v))
        assert back.lat == pytest.approx(v.lat, abs=1e-12)
        assert back.lng == pytest.approx(v.lng, abs=1e-12)


class TestArea:
    def test_unit_square(self, unit_square):
        assert area(unit_square) == pytest.approx(1.0, abs=1e-6)

    def test_hectare_square(self, make_square):
        assert area(make_square(60.0, 25.0, 100.0)) == pytest.approx(10_000.0, rel=1e-9)

    def test_rotation_invariant(self, parcel):
        expected = area(parcel)
        for k in range(1, len(parcel)):
            rotated = parcel[k:] + parcel[:k]
            assert area(rotated) == pytest.approx(expected, rel=1e-9)

    def test_pre_closed_ring(self, parcel):
        assert area(parcel + [parcel[0]]) == pytest.approx(area(parcel), rel=1e-9)

    def test_winding_direction(self, parcel):
        assert area(list(reversed(parcel))) == pytest.approx(area(parcel), rel=1e-9)

    def test_non_negative(self, triangle):
        assert area(triangle) > 0

    @pytest.mark.parametrize("count", [0, 1, 2])
    def test_fewer_than_three_vertices(self, parcel, count):
        assert area(parcel[:count]) == 0.0

    def test_collinear_is_zero(self):
        line = [Vertex(lat=0.0, lng=0.0), Vertex(lat=0.0, lng=0.001), Vertex(lat=0.0, lng=0.002)]
        assert area(line) == 0.0


class TestBoundingBox:
    def test_extent(self, parcel):
        box = bounding_box(parcel)
        assert box.xmin == -0.12050
        assert box.xmax == -0.11720
        assert box.ymin == 51.49990
        assert box.ymax == 51.50190

    def test_empty_ring(self):
        with pytest.raises(InsufficientVerticesError):
            bounding_box([])


class TestFormatArea:
    @pytest.mark.parametrize(
        "sqm,expected",
        [
            (12.34, "12.3 m²"),
            (9_999.0, "9999.0 m²"),
            (10_000.0, "1.00 ha"),
            (250_000.0, "25.00 ha"),
            (1_000_000.0, "1.00 km²"),
            (3_456_000.0, "3.46 km²"),
        ],
    )
    def test_units(self, sqm, expected):
        assert format_area(sqm) == expected
