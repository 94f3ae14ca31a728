"""Minimal ESRI Shapefile writer for a single polygon.

Produces the ``.shp``/``.shx``/``.dbf``/``.prj`` buffers for one Polygon
record with one part, following the ESRI Shapefile Technical Description.
Every binary layout below is a ``struct.Struct`` with explicit byte order:
the main file and index headers mix big-endian (file code, lengths, record
headers) and little-endian (version, shape type, coordinates) fields.
"""

from __future__ import annotations

import datetime
import logging
import struct

from .area import bounding_box, close_ring
from .errors import InsufficientVerticesError
from .models import BoundingBox, Ring, ShapefileParts

logger = logging.getLogger(__name__)

FILE_CODE = 9994
VERSION = 1000
SHAPE_POLYGON = 5
HEADER_SIZE = 100
RECORD_HEADER_SIZE = 8

WGS84_PRJ = (
    'GEOGCS["GCS_WGS_1984",DATUM["D_WGS_1984",SPHEROID["WGS_1984",6378137,298.257223563]],'
    'PRIMEM["Greenwich",0],UNIT["Degree",0.017453292519943295]]'
)

# bytes 0-27: file code, five unused ints, file length in 16-bit words
_HEADER_BE = struct.Struct(">i20xi")
# bytes 28-99: version, shape type, xmin ymin xmax ymax, zero Z and M ranges
_HEADER_LE = struct.Struct("<ii4d32x")
_RECORD_HEADER = struct.Struct(">ii")
# shape type, box, numParts, numPoints, parts[0]
_POLYGON_HEAD = struct.Struct("<i4diii")
_POINT = struct.Struct("<2d")
_INDEX_RECORD = struct.Struct(">ii")

DBF_VERSION = 0x03
DBF_FIELD_NAME = b"ID"
DBF_FIELD_WIDTH = 10
# version, YY MM DD, record count, header length, record length
_DBF_HEADER = struct.Struct("<BBBBIHH20x")
# name, type, reserved, width, decimals
_DBF_FIELD = struct.Struct("<11sc4xBB14x")
DBF_HEADER_TERMINATOR = b"\x0d"
DBF_EOF = b"\x1a"


def record_content_length(num_points: int) -> int:
    """Byte length of a one-part polygon record's content."""
    return _POLYGON_HEAD.size + _POINT.size * num_points


def _file_header(file_length_bytes: int, box: BoundingBox) -> bytes:
    return _HEADER_BE.pack(FILE_CODE, file_length_bytes // 2) + _HEADER_LE.pack(
        VERSION, SHAPE_POLYGON, box.xmin, box.ymin, box.xmax, box.ymax
    )


def encode_shp(closed: Ring, box: BoundingBox) -> bytes:
    content_length = record_content_length(len(closed))
    parts = [
        _file_header(HEADER_SIZE + RECORD_HEADER_SIZE + content_length, box),
        _RECORD_HEADER.pack(1, content_length // 2),
        _POLYGON_HEAD.pack(SHAPE_POLYGON, box.xmin, box.ymin, box.xmax, box.ymax, 1, len(closed), 0),
    ]
    parts.extend(_POINT.pack(v.lng, v.lat) for v in closed)
    return b"".join(parts)


def encode_shx(closed: Ring, box: BoundingBox) -> bytes:
    content_length = record_content_length(len(closed))
    return _file_header(HEADER_SIZE + _INDEX_RECORD.size, box) + _INDEX_RECORD.pack(
        HEADER_SIZE // 2, content_length // 2
    )


def encode_dbf(modified: datetime.date | None = None) -> bytes:
    """One-record dBase III table with a numeric ``ID`` field set to 1."""
    if modified is None:
        modified = datetime.date.today()

    header_length = _DBF_HEADER.size + _DBF_FIELD.size + len(DBF_HEADER_TERMINATOR)
    record_length = 1 + DBF_FIELD_WIDTH
    header = _DBF_HEADER.pack(
        DBF_VERSION,
        modified.year - 1900,
        modified.month,
        modified.day,
        1,
        header_length,
        record_length,
    )
    field = _DBF_FIELD.pack(DBF_FIELD_NAME, b"N", DBF_FIELD_WIDTH, 0)
    # numeric values are right-aligned within the field
    record = b" " + b"1".rjust(DBF_FIELD_WIDTH)[:DBF_FIELD_WIDTH]
    return header + field + DBF_HEADER_TERMINATOR + record + DBF_EOF


def encode_shapefile(ring: Ring, modified: datetime.date | None = None) -> ShapefileParts:
    """Encode ``ring`` as a single-polygon shapefile.

    The ring is closed before encoding, so the point count includes the
    repeated first vertex. Raises InsufficientVerticesError below three
    vertices, before any buffer is built.
    """
    if len(ring) < 3:
        raise InsufficientVerticesError(len(ring))

    closed = close_ring(ring)
    box = bounding_box(closed)
    parts = ShapefileParts(
        shp=encode_shp(closed, box),
        shx=encode_shx(closed, box),
        dbf=encode_dbf(modified),
        prj=WGS84_PRJ.encode("utf-8"),
    )
    logger.debug("Encoded shapefile: %d points, %d shp bytes", len(closed), len(parts.shp))
    return parts
