"""Shapefile archive reader with CRS auto-detection."""

from __future__ import annotations

import io
import zipfile
from pathlib import Path
from typing import BinaryIO

import shapefile
from pyproj import CRS, Transformer
from pyproj.exceptions import CRSError

from .models import PolygonMetadata, Vertex


def detect_crs(prj_source: str | Path | None) -> tuple[int | None, str | None, bool | None]:
    """Parse CRS from a .prj WKT string or file path.

    Returns (epsg_code, crs_name, is_projected) or (None, None, None) on failure.
    """
    if prj_source is None:
        return None, None, None

    wkt = prj_source if isinstance(prj_source, str) else ""
    if isinstance(prj_source, Path):
        if not prj_source.exists():
            return None, None, None
        wkt = prj_source.read_text()

    if not wkt.strip():
        return None, None, None

    try:
        crs = CRS.from_wkt(wkt)
    except CRSError:
        return None, None, None

    epsg = crs.to_epsg()
    return epsg, crs.name, crs.is_projected


def read_shapefile_archive(
    file: str | Path | bytes | BinaryIO,
) -> tuple[list[Vertex], PolygonMetadata]:
    """Read the first polygon of a zipped shapefile.

    Coordinates are taken as ``x = longitude, y = latitude``. Projected
    sources with a known EPSG code are transformed to WGS84 first. The ring is
    returned open (closing vertex removed). Only the first part is read.
    """
    if isinstance(file, (str, Path)):
        data = Path(file).read_bytes()
    elif isinstance(file, bytes):
        data = file
    else:
        data = file.read()

    members = _collect_members(data)
    if "shp" not in members:
        raise ValueError("No .shp file found in zip archive")

    sf = shapefile.Reader(
        shp=io.BytesIO(members["shp"]),
        shx=io.BytesIO(members["shx"]) if "shx" in members else None,
        dbf=io.BytesIO(members["dbf"]) if "dbf" in members else None,
    )
    prj_wkt = members["prj"].decode("utf-8", errors="replace") if "prj" in members else None
    epsg, crs_name, is_projected = detect_crs(prj_wkt)

    if sf.shapeType not in (shapefile.POLYGON, shapefile.POLYGONZ, shapefile.POLYGONM):
        raise ValueError(f"Unsupported shape type: {sf.shapeTypeName}. Only POLYGON shapes are supported.")

    shapes = sf.shapes()
    if not shapes:
        raise ValueError("Shapefile contains no records")

    shape = shapes[0]
    end = shape.parts[1] if len(shape.parts) > 1 else len(shape.points)
    points = [tuple(pt[:2]) for pt in shape.points[:end]]
    if is_projected:
        if not epsg:
            raise ValueError(f"Cannot reproject {crs_name}: no EPSG code in .prj")
        points = _to_lonlat(points, epsg)
    ring = [Vertex(lat=y, lng=x) for x, y in points]
    if len(ring) > 1 and ring[0] == ring[-1]:
        ring.pop()

    metadata = PolygonMetadata(
        source_format="SHAPEFILE",
        crs_epsg=epsg,
        crs_name=crs_name,
        is_projected=is_projected,
        num_vertices=len(ring),
    )
    return ring, metadata


def _to_lonlat(points: list[tuple[float, float]], source_epsg: int) -> list[tuple[float, float]]:
    """Transform projected x/y to WGS84 lon/lat."""
    transformer = Transformer.from_crs(f"EPSG:{source_epsg}", "EPSG:4326", always_xy=True)
    lons, lats = transformer.transform([x for x, _ in points], [y for _, y in points])
    return list(zip(lons, lats))


def _collect_members(data: bytes) -> dict[str, bytes]:
    """Map extension -> bytes for the first file of each shapefile component."""
    members: dict[str, bytes] = {}
    with zipfile.ZipFile(io.BytesIO(data)) as zf:
        for name in zf.namelist():
            ext = Path(name).suffix.lower().lstrip(".")
            if ext in ("shp", "shx", "dbf", "prj") and ext not in members:
                members[ext] = zf.read(name)
    return members
