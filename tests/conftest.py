import datetime

import pytest

from polygon_export import Vertex, project, unproject


def metric_square(lat: float, lng: float, side_m: float) -> list[Vertex]:
    """Square with an exact side length in Web Mercator meters, corner at (lat, lng)."""
    x0, y0 = project(Vertex(lat=lat, lng=lng))
    return [
        unproject(x0, y0),
        unproject(x0 + side_m, y0),
        unproject(x0 + side_m, y0 + side_m),
        unproject(x0, y0 + side_m),
    ]


@pytest.fixture
def make_square():
    return metric_square


@pytest.fixture
def unit_square():
    return metric_square(10.0, 20.0, 1.0)


@pytest.fixture
def parcel():
    """A small irregular field polygon (~200 m across)."""
    return [
        Vertex(lat=51.50010, lng=-0.12050),
        Vertex(lat=51.50135, lng=-0.11980),
        Vertex(lat=51.50190, lng=-0.11800),
        Vertex(lat=51.50080, lng=-0.11720),
        Vertex(lat=51.49990, lng=-0.11870),
    ]


@pytest.fixture
def triangle():
    return [
        Vertex(lat=-33.8600, lng=151.2000),
        Vertex(lat=-33.8598, lng=151.2003),
        Vertex(lat=-33.8602, lng=151.2004),
    ]


@pytest.fixture
def export_date():
    return datetime.date(2024, 3, 15)
