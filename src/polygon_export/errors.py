"""Exceptions raised by the polygon export core."""


class PolygonExportError(Exception):
    """Base class for all polygon export failures."""


class InsufficientVerticesError(PolygonExportError, ValueError):
    """A closed polygon needs at least three vertices."""

    def __init__(self, count: int, minimum: int = 3):
        self.count = count
        self.minimum = minimum
        super().__init__(f"Need at least {minimum} vertices for a polygon, got {count}")


class MissingPartError(PolygonExportError, KeyError):
    """A shapefile component buffer was not supplied to the archive builder."""

    def __init__(self, part: str):
        self.part = part
        super().__init__(f"Missing shapefile component: .{part}")

    def __str__(self) -> str:
        return self.args[0]


class EncodingError(PolygonExportError):
    """Unexpected failure while building an export payload."""


class TargetOutOfRangeError(PolygonExportError, ValueError):
    """Scaling to the target area would push a vertex outside WGS84 bounds."""

    def __init__(self, target_area_sqm: float):
        self.target_area_sqm = target_area_sqm
        super().__init__(f"Target area {target_area_sqm!r} m² moves the polygon outside valid coordinates")
