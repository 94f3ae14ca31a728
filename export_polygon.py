"""Export a polygon read from KML/KMZ or a zipped shapefile, optionally scaled to a target area.

Usage:
    python export_polygon.py parcel.kml --format shapefile-archive --target-area 5000
"""

import argparse
from pathlib import Path

from polygon_export import ExportFormat, ScaleMethod, area, export, format_area
from polygon_export.config import ExportSettings, configure_logging
from polygon_export.kml_reader import read_kml_polygon
from polygon_export.reader import read_shapefile_archive


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("input", type=Path, help=".kml, .kmz or .zip file containing one polygon")
    parser.add_argument(
        "--format",
        default=ExportFormat.SHAPEFILE.value,
        choices=[f.value for f in ExportFormat],
    )
    parser.add_argument("--target-area", type=float, default=None, help="target area in m²")
    parser.add_argument(
        "--method",
        default=ScaleMethod.DEGREES.value,
        choices=[m.value for m in ScaleMethod],
    )
    parser.add_argument("--output", type=Path, default=Path("."), help="output directory")
    parser.add_argument("--name", default=None, help="base filename of the export")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None):
    args = parse_args(argv)
    settings = ExportSettings.from_env()
    configure_logging(settings.log_level)

    print(f"Reading polygon: {args.input}\n")
    if args.input.suffix.lower() == ".zip":
        vertices, metadata = read_shapefile_archive(args.input)
    else:
        vertices, metadata = read_kml_polygon(str(args.input))

    print(f"Loaded {metadata.num_vertices} vertices ({metadata.source_format}, CRS: {metadata.crs_name or 'unknown'})")
    print(f"Area:          {format_area(area(vertices))}")

    artifact = export(
        vertices,
        args.format,
        filename=args.name or args.input.stem,
        target_area_sqm=args.target_area,
        scale_method=ScaleMethod(args.method),
        settings=settings,
    )
    if args.target_area is not None:
        print(f"Target area:   {format_area(args.target_area)}")

    args.output.mkdir(parents=True, exist_ok=True)
    path = args.output / artifact.filename
    path.write_bytes(artifact.content)
    print(f"\nExported {artifact.format.value}: {path} ({len(artifact.content):,} bytes)")


if __name__ == "__main__":
    main()
