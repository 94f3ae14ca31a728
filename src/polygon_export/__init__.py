"""Polygon area, scaling and GIS export library."""

from .archive import build_archive
from .area import area, bounding_box, format_area
from .errors import (
    EncodingError,
    InsufficientVerticesError,
    MissingPartError,
    PolygonExportError,
    TargetOutOfRangeError,
)
from .exporter import export
from .geojson_writer import encode_geojson
from .kml_reader import read_kml_polygon
from .kml_writer import encode_kml
from .models import (
    BoundingBox,
    ExportArtifact,
    ExportFormat,
    PolygonMetadata,
    ScaleMethod,
    ShapefileParts,
    Vertex,
)
from .projection import project, unproject
from .reader import read_shapefile_archive
from .scaling import centroid, scale
from .shapefile_writer import encode_shapefile

__all__ = [
    "BoundingBox",
    "EncodingError",
    "ExportArtifact",
    "ExportFormat",
    "InsufficientVerticesError",
    "MissingPartError",
    "PolygonExportError",
    "PolygonMetadata",
    "ScaleMethod",
    "ShapefileParts",
    "TargetOutOfRangeError",
    "Vertex",
    "area",
    "bounding_box",
    "build_archive",
    "centroid",
    "encode_geojson",
    "encode_kml",
    "encode_shapefile",
    "export",
    "format_area",
    "project",
    "read_kml_polygon",
    "read_shapefile_archive",
    "scale",
    "unproject",
]
