"""KML encoding of a single polygon placemark.

KML coordinates are ``longitude,latitude,altitude`` triples; altitude is
always written as 0.
"""

from __future__ import annotations

import xml.etree.ElementTree as ET
from decimal import Decimal

from .area import area, close_ring
from .models import Ring

KML_NAMESPACE = "http://www.opengis.net/kml/2.2"


def _fixed(value: float) -> str:
    # shortest round-trip digits, never in exponent notation
    return format(Decimal(repr(value)), "f")


def format_coordinates(ring: Ring) -> str:
    """Whitespace-separated ``lng,lat,0`` triples, first triple repeated at the end."""
    return " ".join(f"{_fixed(lng)},{_fixed(lat)},0" for lng, lat in close_ring([(v.lng, v.lat) for v in ring]))


def encode_kml(ring: Ring, area_sqm: float | None = None, name: str = "Target Polygon") -> str:
    if area_sqm is None:
        area_sqm = area(ring)

    kml = ET.Element("kml", xmlns=KML_NAMESPACE)
    placemark = ET.SubElement(kml, "Placemark")
    ET.SubElement(placemark, "name").text = name
    ET.SubElement(placemark, "description").text = f"Area: {area_sqm:.2f} m2"

    polygon = ET.SubElement(placemark, "Polygon")
    boundary = ET.SubElement(polygon, "outerBoundaryIs")
    linear_ring = ET.SubElement(boundary, "LinearRing")
    ET.SubElement(linear_ring, "coordinates").text = format_coordinates(ring)

    ET.indent(kml, space="  ")
    body = ET.tostring(kml, encoding="unicode")
    return f'<?xml version="1.0" encoding="UTF-8"?>\n{body}\n'
