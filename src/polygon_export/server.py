"""FastAPI server exposing area, scaling, export and import of a single polygon."""

from __future__ import annotations

import io
import logging
import xml.etree.ElementTree as ET
import zipfile

import shapefile
from fastapi import FastAPI, HTTPException, Query, UploadFile
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import Response
from pydantic import BaseModel

from .area import area, format_area
from .config import ExportSettings
from .errors import EncodingError, InsufficientVerticesError, TargetOutOfRangeError
from .exporter import export
from .kml_reader import read_kml_polygon
from .models import ExportFormat, PolygonMetadata, ScaleMethod, Vertex
from .reader import read_shapefile_archive
from .scaling import scale

logger = logging.getLogger(__name__)

app = FastAPI(title="Polygon Export", version="0.1.0")

settings = ExportSettings.from_env()


class RingRequest(BaseModel):
    vertices: list[Vertex]


class AreaResponse(BaseModel):
    area_sqm: float
    formatted: str
    vertex_count: int


class ScaleRequest(RingRequest):
    target_area_sqm: float
    method: ScaleMethod = ScaleMethod.DEGREES


class ScaleResponse(BaseModel):
    vertices: list[Vertex]
    area_sqm: float


class ExportRequest(RingRequest):
    filename: str | None = None
    target_area_sqm: float | None = None
    method: ScaleMethod = ScaleMethod.DEGREES


class ImportResponse(BaseModel):
    vertices: list[Vertex]
    metadata: PolygonMetadata
    area_sqm: float


@app.post("/area")
async def polygon_area(request: RingRequest) -> AreaResponse:
    """Planar Web Mercator area; 0 for fewer than three vertices."""
    sqm = area(request.vertices)
    return AreaResponse(area_sqm=sqm, formatted=format_area(sqm), vertex_count=len(request.vertices))


@app.post("/scale")
async def scale_polygon(request: ScaleRequest) -> ScaleResponse:
    """Scale the polygon about its centroid to the requested area."""
    try:
        vertices = scale(request.vertices, request.target_area_sqm, request.method)
    except TargetOutOfRangeError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    return ScaleResponse(vertices=vertices, area_sqm=area(vertices))


@app.post("/export")
async def export_polygon(
    request: ExportRequest,
    format: str = Query("geojson", pattern="^(geojson|kml|shapefile-archive|shp)$"),
):
    """Encode the polygon and return it as a file download."""
    try:
        artifact = await run_in_threadpool(
            export,
            request.vertices,
            ExportFormat(format),
            filename=request.filename,
            target_area_sqm=request.target_area_sqm,
            scale_method=request.method,
            settings=settings,
        )
    except (InsufficientVerticesError, TargetOutOfRangeError) as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    except EncodingError as exc:
        logger.exception("Export failed")
        raise HTTPException(status_code=500, detail="Failed to build export file") from exc

    return Response(
        content=artifact.content,
        media_type=artifact.media_type,
        headers={"Content-Disposition": f"attachment; filename={artifact.filename}"},
    )


@app.post("/import")
async def import_polygon(file: UploadFile) -> ImportResponse:
    """Read a polygon from an uploaded .kml, .kmz or zipped shapefile."""
    filename = (file.filename or "").lower()
    content = await file.read()

    try:
        if filename.endswith((".kmz", ".kml")):
            vertices, metadata = read_kml_polygon(io.BytesIO(content))
        elif filename.endswith(".zip"):
            vertices, metadata = read_shapefile_archive(io.BytesIO(content))
        else:
            raise HTTPException(status_code=400, detail="Upload a .kml, .kmz or .zip file")
    except (ValueError, zipfile.BadZipFile, ET.ParseError, shapefile.ShapefileException) as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc

    return ImportResponse(vertices=vertices, metadata=metadata, area_sqm=area(vertices))
