"""Single entry point turning a ring into a downloadable artifact."""

from __future__ import annotations

import datetime
import logging
import struct
import zipfile

from .archive import build_archive
from .area import area
from .config import ExportSettings
from .errors import EncodingError, InsufficientVerticesError, PolygonExportError
from .geojson_writer import encode_geojson
from .kml_writer import encode_kml
from .models import ExportArtifact, ExportFormat, Ring, ScaleMethod
from .scaling import scale
from .shapefile_writer import encode_shapefile

logger = logging.getLogger(__name__)

MEDIA_TYPES = {
    ExportFormat.GEOJSON: "application/json",
    ExportFormat.KML: "application/vnd.google-earth.kml+xml",
    ExportFormat.SHAPEFILE: "application/zip",
}

EXTENSIONS = {
    ExportFormat.GEOJSON: ".geojson",
    ExportFormat.KML: ".kml",
    ExportFormat.SHAPEFILE: ".zip",
}


def export(
    ring: Ring,
    format: ExportFormat | str,
    *,
    filename: str | None = None,
    target_area_sqm: float | None = None,
    scale_method: ScaleMethod = ScaleMethod.DEGREES,
    settings: ExportSettings | None = None,
    modified: datetime.date | None = None,
) -> ExportArtifact:
    """Encode ``ring`` in ``format``, optionally scaling it to a target area first.

    Raises InsufficientVerticesError for rings with fewer than three vertices,
    TargetOutOfRangeError when scaling leaves WGS84 bounds, and EncodingError
    for any other failure while building the payload.
    """
    format = ExportFormat(format)
    settings = settings or ExportSettings()
    base = filename or settings.default_filename

    if len(ring) < 3:
        raise InsufficientVerticesError(len(ring))

    try:
        if target_area_sqm is not None:
            ring = scale(ring, target_area_sqm, scale_method)
        content = _encode(ring, format, base, settings, modified)
    except PolygonExportError:
        raise
    except (ValueError, TypeError, OverflowError, struct.error, zipfile.BadZipFile, OSError) as exc:
        raise EncodingError(f"Failed to encode {format.value}: {exc}") from exc

    artifact = ExportArtifact(
        content=content,
        format=format,
        filename=base + EXTENSIONS[format],
        media_type=MEDIA_TYPES[format],
    )
    logger.info("Exported %s: %d vertices, %d bytes", artifact.filename, len(ring), len(content))
    return artifact


def _encode(
    ring: Ring,
    format: ExportFormat,
    base: str,
    settings: ExportSettings,
    modified: datetime.date | None,
) -> bytes:
    if format is ExportFormat.GEOJSON:
        return encode_geojson(ring, area(ring)).encode("utf-8")
    if format is ExportFormat.KML:
        return encode_kml(ring, area(ring), name=settings.kml_name).encode("utf-8")
    parts = encode_shapefile(ring, modified=modified)
    return build_archive(base, parts, compression=settings.compression)
