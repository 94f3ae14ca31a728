"""Spherical Web Mercator (EPSG:3857) projection of WGS84 vertices.

The projection is used only to measure and scale polygons in meters. Latitude
+/-90 is a singularity of the forward formula and is not special-cased.
"""

from __future__ import annotations

import math

from .models import Ring, Vertex

EARTH_RADIUS_M = 6378137.0


def project(vertex: Vertex) -> tuple[float, float]:
    """Project a vertex to ``(easting, northing)`` meters."""
    x = EARTH_RADIUS_M * math.radians(vertex.lng)
    y = EARTH_RADIUS_M * math.log(math.tan(math.pi / 4 + math.radians(vertex.lat) / 2))
    return x, y


def project_ring(ring: Ring) -> list[tuple[float, float]]:
    return [project(v) for v in ring]


def unproject(x: float, y: float) -> Vertex:
    """Inverse of :func:`project`."""
    lng = math.degrees(x / EARTH_RADIUS_M)
    lat = math.degrees(2 * math.atan(math.exp(y / EARTH_RADIUS_M)) - math.pi / 2)
    return Vertex(lat=lat, lng=lng)
