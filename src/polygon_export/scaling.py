"""Centroid-relative scaling of a polygon to a target area.

The scale factor always comes from the Web Mercator area ratio. With
``ScaleMethod.DEGREES`` the factor is applied to longitude/latitude directly,
treating degree space as locally linear: an approximation that holds for
small, local polygons. ``ScaleMethod.PROJECTED`` applies it to Mercator
meters and projects back, which keeps the resulting area exact for polygons
of any size.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Sequence

from pydantic import ValidationError

from .area import area, close_ring
from .errors import TargetOutOfRangeError
from .models import Ring, ScaleMethod, Vertex
from .projection import project, unproject

logger = logging.getLogger(__name__)


def planar_centroid(points: Sequence[tuple[float, float]]) -> tuple[float, float]:
    """Area-weighted centroid of a planar polygon.

    Falls back to the mean of the distinct vertices when the polygon has no area.
    """
    closed = close_ring(points)
    signed = cx = cy = 0.0
    ox, oy = closed[0]
    for (x0, y0), (x1, y1) in zip(closed, closed[1:]):
        x0, y0, x1, y1 = x0 - ox, y0 - oy, x1 - ox, y1 - oy
        cross = x0 * y1 - x1 * y0
        signed += cross
        cx += (x0 + x1) * cross
        cy += (y0 + y1) * cross
    if signed == 0:
        distinct = closed[:-1] or closed
        return (
            sum(x for x, _ in distinct) / len(distinct),
            sum(y for _, y in distinct) / len(distinct),
        )
    return ox + cx / (3 * signed), oy + cy / (3 * signed)


def centroid(ring: Ring) -> Vertex:
    """Polygon centroid in degree space."""
    lng, lat = planar_centroid([(v.lng, v.lat) for v in ring])
    return Vertex(lat=lat, lng=lng)


def scale(ring: Ring, target_area_sqm: float, method: ScaleMethod = ScaleMethod.DEGREES) -> list[Vertex]:
    """Scale ``ring`` about its centroid so its area becomes ``target_area_sqm``.

    Degenerate rings and non-positive or non-finite targets leave the ring
    unchanged. The result has the same vertex count and order as the input.
    Raises TargetOutOfRangeError when a scaled vertex would leave WGS84 bounds.
    """
    current = area(ring)
    if current == 0 or not math.isfinite(target_area_sqm) or target_area_sqm <= 0:
        logger.debug("Scale skipped: current area %.3f m², target %r", current, target_area_sqm)
        return list(ring)

    factor = math.sqrt(target_area_sqm / current)
    logger.debug("Scaling %d vertices by %.9f (%.3f -> %.3f m²)", len(ring), factor, current, target_area_sqm)

    try:
        if method is ScaleMethod.PROJECTED:
            return _scale_projected(ring, factor)
        return _scale_degrees(ring, factor)
    except (ValidationError, OverflowError) as exc:
        raise TargetOutOfRangeError(target_area_sqm) from exc


def _scale_degrees(ring: Ring, factor: float) -> list[Vertex]:
    c = centroid(ring)
    return [
        Vertex(lat=c.lat + factor * (v.lat - c.lat), lng=c.lng + factor * (v.lng - c.lng))
        for v in ring
    ]


def _scale_projected(ring: Ring, factor: float) -> list[Vertex]:
    points = [project(v) for v in ring]
    cx, cy = planar_centroid(points)
    return [unproject(cx + factor * (x - cx), cy + factor * (y - cy)) for x, y in points]
