"""Zip packaging of shapefile component buffers."""

from __future__ import annotations

import io
import zipfile
from collections.abc import Mapping

from .errors import MissingPartError
from .models import ShapefileParts

SHAPEFILE_EXTS = ("shp", "shx", "dbf", "prj")


def build_archive(
    filename: str,
    parts: ShapefileParts | Mapping[str, bytes | str | None],
    compression: int = zipfile.ZIP_DEFLATED,
) -> bytes:
    """Pack the four shapefile buffers as ``<filename>.<ext>`` entries of one zip.

    Raises MissingPartError if any buffer is absent; nothing is written in that case.
    """
    if isinstance(parts, ShapefileParts):
        parts = parts.model_dump()

    buffers: dict[str, bytes] = {}
    for ext in SHAPEFILE_EXTS:
        data = parts.get(ext)
        if data is None:
            raise MissingPartError(ext)
        buffers[ext] = data.encode("utf-8") if isinstance(data, str) else bytes(data)

    buf = io.BytesIO()
    with zipfile.ZipFile(buf, "w", compression=compression) as zf:
        for ext, data in buffers.items():
            zf.writestr(f"{filename}.{ext}", data)
    return buf.getvalue()
