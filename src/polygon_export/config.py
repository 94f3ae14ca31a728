"""Export settings and logging setup."""

from __future__ import annotations

import logging
import os
import sys
import zipfile
from typing import Literal

from pydantic import BaseModel

ENV_PREFIX = "POLYGON_EXPORT_"

_COMPRESSION = {
    "deflated": zipfile.ZIP_DEFLATED,
    "stored": zipfile.ZIP_STORED,
}


class ExportSettings(BaseModel):
    """Defaults applied when a caller does not pass explicit values."""

    default_filename: str = "polygon_export"
    kml_name: str = "Target Polygon"
    zip_compression: Literal["deflated", "stored"] = "deflated"
    log_level: str = "INFO"

    @property
    def compression(self) -> int:
        return _COMPRESSION[self.zip_compression]

    @classmethod
    def from_env(cls, environ: dict[str, str] | None = None) -> ExportSettings:
        """Build settings from ``POLYGON_EXPORT_*`` environment variables."""
        environ = os.environ if environ is None else environ
        values = {}
        for name in cls.model_fields:
            key = ENV_PREFIX + name.upper()
            if key in environ:
                values[name] = environ[key]
        return cls(**values)


def configure_logging(level: str | int = "INFO") -> logging.Logger:
    """Attach a console handler to the package logger.

    Only the scripts call this; the library itself never installs handlers.
    """
    logger = logging.getLogger("polygon_export")
    logger.setLevel(level)
    logger.handlers.clear()

    console = logging.StreamHandler(sys.stdout)
    console.setFormatter(logging.Formatter("%(asctime)s %(levelname)-7s %(name)s: %(message)s"))
    logger.addHandler(console)
    return logger
