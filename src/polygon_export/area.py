"""Planar polygon area on Web Mercator coordinates."""

from __future__ import annotations

from collections.abc import Sequence

from .errors import InsufficientVerticesError
from .models import BoundingBox, Ring
from .projection import project_ring


def close_ring(points: Sequence) -> list:
    """Return a copy of ``points`` whose last item equals its first."""
    closed = list(points)
    if closed and closed[0] != closed[-1]:
        closed.append(closed[0])
    return closed


def shoelace(points: Sequence[tuple[float, float]]) -> float:
    """Unsigned area of a planar polygon given as open or closed ``(x, y)`` points."""
    if len(points) < 3:
        return 0.0
    closed = close_ring(points)
    # relative to the first point; Mercator coordinates are ~1e7 and small
    # polygons would otherwise vanish in cancellation
    ox, oy = closed[0]
    total = 0.0
    for (x0, y0), (x1, y1) in zip(closed, closed[1:]):
        total += (x0 - ox) * (y1 - oy) - (x1 - ox) * (y0 - oy)
    return abs(total) / 2.0


def area(ring: Ring) -> float:
    """Area of a ring in square meters, measured in Web Mercator.

    Returns 0 for rings with fewer than three vertices. The same value is used
    for live display, as the scaling basis and in exported properties.
    """
    if len(ring) < 3:
        return 0.0
    return shoelace(project_ring(ring))


def bounding_box(ring: Ring) -> BoundingBox:
    if not ring:
        raise InsufficientVerticesError(0, minimum=1)
    lngs = [v.lng for v in ring]
    lats = [v.lat for v in ring]
    return BoundingBox(xmin=min(lngs), ymin=min(lats), xmax=max(lngs), ymax=max(lats))


def format_area(sq_meters: float) -> str:
    """Human readable area: km² above a square kilometer, ha above a hectare."""
    if sq_meters >= 1_000_000:
        return f"{sq_meters / 1_000_000:.2f} km²"
    if sq_meters >= 10_000:
        return f"{sq_meters / 10_000:.2f} ha"
    return f"{sq_meters:.1f} m²"
