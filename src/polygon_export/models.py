"""Pydantic data models for polygon export."""

from __future__ import annotations

from collections.abc import Sequence
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class Vertex(BaseModel):
    """A single geographic vertex in WGS84 degrees.

    Latitude exactly +/-90 is accepted but projects to an unbounded northing.
    """

    model_config = ConfigDict(frozen=True)

    lat: float = Field(ge=-90.0, le=90.0, allow_inf_nan=False)
    lng: float = Field(ge=-180.0, le=180.0, allow_inf_nan=False)


Ring = Sequence[Vertex]


class BoundingBox(BaseModel):
    """Axis-aligned extent of a ring (x = longitude, y = latitude)."""

    xmin: float
    ymin: float
    xmax: float
    ymax: float


class ExportFormat(str, Enum):
    GEOJSON = "geojson"
    KML = "kml"
    SHAPEFILE = "shapefile-archive"

    @classmethod
    def _missing_(cls, value):
        # "shp" is the tag older clients send for the shapefile archive
        if isinstance(value, str) and value.lower() in ("shp", "shapefile", "zip"):
            return cls.SHAPEFILE
        return None


class ScaleMethod(str, Enum):
    """Coordinate space the centroid-relative scale is applied in."""

    DEGREES = "degrees"
    PROJECTED = "projected"


class ExportArtifact(BaseModel):
    """An encoded payload ready to hand to the caller."""

    content: bytes
    format: ExportFormat
    filename: str
    media_type: str


class ShapefileParts(BaseModel):
    """The four buffers making up a single-polygon shapefile."""

    shp: bytes
    shx: bytes
    dbf: bytes
    prj: bytes


class PolygonMetadata(BaseModel):
    """Metadata about an imported polygon."""

    source_format: str
    crs_epsg: int | None = None
    crs_name: str | None = None
    is_projected: bool | None = None
    num_vertices: int
