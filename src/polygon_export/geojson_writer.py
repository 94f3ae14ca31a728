"""GeoJSON encoding of a single polygon."""

from __future__ import annotations

import json

from .area import area, close_ring
from .models import Ring


def polygon_feature_collection(ring: Ring, area_sqm: float | None = None) -> dict:
    """Build a one-feature FeatureCollection; the ring is closed as GeoJSON requires."""
    coordinates = close_ring([[v.lng, v.lat] for v in ring])
    return {
        "type": "FeatureCollection",
        "features": [
            {
                "type": "Feature",
                "properties": {"area_sqm": area(ring) if area_sqm is None else area_sqm},
                "geometry": {"type": "Polygon", "coordinates": [coordinates]},
            }
        ],
    }


def encode_geojson(ring: Ring, area_sqm: float | None = None) -> str:
    return json.dumps(polygon_feature_collection(ring, area_sqm), separators=(",", ":"))
