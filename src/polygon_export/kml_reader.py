"""KMZ/KML reader: extracts a polygon ring from KML geometry.

KMZ is a ZIP archive containing KML. KML coordinates are always WGS84
(EPSG:4326) in ``longitude,latitude,altitude`` format; altitude is dropped.
"""

from __future__ import annotations

import io
import zipfile
import xml.etree.ElementTree as ET
from typing import BinaryIO

from .models import PolygonMetadata, Vertex

KML_NS = "{http://www.opengis.net/kml/2.2}"


def read_kml_polygon(
    file: str | bytes | BinaryIO,
) -> tuple[list[Vertex], PolygonMetadata]:
    """Read the first polygon ring of a KMZ (or plain KML) file.

    Args:
        file: Path to a .kmz/.kml file, raw bytes, or a file-like object.

    Returns the open ring (closing vertex removed) and its metadata.
    """
    data = _read_bytes(file)

    # KMZ is a ZIP; plain KML is XML text
    if _is_zip(data):
        kml_text = _extract_kml_from_kmz(data)
        source_format = "KMZ"
    else:
        kml_text = data.decode("utf-8", errors="replace")
        source_format = "KML"

    root = ET.fromstring(kml_text)
    ring = _extract_ring(root)
    if ring is None:
        raise ValueError("No polygon LinearRing found in KML")

    if len(ring) > 1 and ring[0] == ring[-1]:
        ring.pop()

    metadata = PolygonMetadata(
        source_format=source_format,
        crs_epsg=4326,
        crs_name="WGS 84",
        is_projected=False,
        num_vertices=len(ring),
    )
    return ring, metadata


def _read_bytes(file: str | bytes | BinaryIO) -> bytes:
    if isinstance(file, str):
        with open(file, "rb") as f:
            return f.read()
    if isinstance(file, bytes):
        return file
    return file.read()


def _is_zip(data: bytes) -> bool:
    return data[:4] == b"PK\x03\x04"


def _extract_kml_from_kmz(data: bytes) -> str:
    """Extract the first .kml file from a KMZ (ZIP) archive."""
    with zipfile.ZipFile(io.BytesIO(data)) as zf:
        # Prefer doc.kml, fall back to any .kml
        names = zf.namelist()
        kml_name = next((n for n in names if n.lower() == "doc.kml"), None)
        if kml_name is None:
            kml_name = next((n for n in names if n.lower().endswith(".kml")), None)
        if kml_name is None:
            raise ValueError("No .kml file found in KMZ archive")
        return zf.read(kml_name).decode("utf-8", errors="replace")


def _extract_ring(root: ET.Element) -> list[Vertex] | None:
    """Return the vertices of the first LinearRing, preferring an outer boundary."""
    rings = [elem for elem in root.iter() if _local(elem.tag) == "LinearRing"]
    if not rings:
        return None

    # <innerBoundaryIs> rings are holes; take the outer one when it is marked
    outer = [
        ring
        for boundary in root.iter()
        if _local(boundary.tag) == "outerBoundaryIs"
        for ring in boundary
        if _local(ring.tag) == "LinearRing"
    ]
    linear_ring = (outer or rings)[0]

    coords_elem = next((e for e in linear_ring if _local(e.tag) == "coordinates"), None)
    if coords_elem is None or not coords_elem.text:
        return None
    return _parse_coordinates_text(coords_elem.text)


def _local(tag: str) -> str:
    return tag.replace(KML_NS, "")


def _parse_coordinates_text(text: str) -> list[Vertex]:
    """Parse a KML ``<coordinates>`` text block.

    Format: ``lon,lat[,alt] lon,lat[,alt] ...`` (whitespace-separated tuples).
    """
    vertices: list[Vertex] = []
    for token in text.strip().split():
        parts = token.split(",")
        if len(parts) < 2:
            continue
        vertices.append(Vertex(lat=float(parts[1]), lng=float(parts[0])))
    return vertices
