"""
Command-line interface for fast-shapefile.

Usage:
    fast-shapefile info <file.shp>
    fast-shapefile dump <file.shp> [--format FORMAT] [--limit N]
    fast-shapefile convert <input.shp> <output.geojson> [--format FORMAT]
"""

import json
import logging
import sys
from collections import Counter
from pathlib import Path
from typing import Any

import click

from .converters import (
    to_geojson_geometry,
    to_wkt,
    write_geojson,
    write_geojsonl,
    write_geopackage,
)
from .exceptions import ShapefileError
from .geometry import geometry_type_name
from .reader import ShapefileReader
from .transform import reprojection


def _open(shapefile: str, **kwargs: Any) -> ShapefileReader:
    try:
        return ShapefileReader(shapefile, **kwargs)
    except (ShapefileError, OSError) as e:
        click.echo(f"Error opening shapefile: {e}", err=True)
        sys.exit(1)


@click.group()
@click.version_option(package_name="fast-shapefile")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
def main(verbose: bool):
    """
    Decode ESRI Shapefile (.shp) geometry streams.
    """
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s"
        )


@main.command()
@click.argument("shapefile", type=click.Path(exists=True))
@click.option("--json", "output_json", is_flag=True, help="Output as JSON")
def info(shapefile: str, output_json: bool):
    """
    Display header information and record statistics for a shapefile.
    """
    reader = _open(shapefile)
    header = reader.header

    kinds: Counter[str] = Counter()
    nulls = 0
    try:
        for geom in reader:
            kinds[geometry_type_name(geom)] += 1
            if geom.is_null:
                nulls += 1
    except (ShapefileError, OSError) as e:
        click.echo(f"Error reading records: {e}", err=True)
        sys.exit(1)
    finally:
        reader.close()

    if output_json:
        data: dict[str, object] = {
            "path": str(reader.path),
            "shape_type": header.shape_type.name,
            "bbox": [header.xmin, header.ymin, header.xmax, header.ymax],
            "file_length_bytes": header.file_length_bytes,
            "records": sum(kinds.values()),
            "null_records": nulls,
            "geometry_types": dict(kinds),
        }
        click.echo(json.dumps(data, indent=2))
    else:
        click.echo(f"Shapefile: {Path(shapefile).name}")
        click.echo(f"Shape type: {header.shape_type.name}")
        click.echo(
            f"Bounds: {header.xmin}, {header.ymin}, {header.xmax}, {header.ymax}"
        )
        click.echo(f"Records: {sum(kinds.values()):,} ({nulls:,} null)")
        for name, count in sorted(kinds.items()):
            click.echo(f"  {name}: {count:,}")


@main.command()
@click.argument("shapefile", type=click.Path(exists=True))
@click.option(
    "--format",
    "-f",
    "output_format",
    type=click.Choice(["wkt", "geojson"]),
    default="wkt",
    help="Output format for geometries",
)
@click.option(
    "--limit",
    "-n",
    type=int,
    default=10,
    help="Number of records to show (default: 10)",
)
@click.option("--strict", is_flag=True, help="Verify hole nesting with point-in-polygon")
def dump(shapefile: str, output_format: str, limit: int, strict: bool):
    """
    Dump record geometries for quick inspection.

    Example:
        fast-shapefile dump rivers.shp -n 5
    """
    reader = _open(shapefile, strict_nesting=strict)

    try:
        shown = 0
        while shown < limit and reader.advance():
            geom = reader.geometry
            assert geom is not None
            click.echo(f"--- Record {reader.record_number} ---")
            if output_format == "wkt":
                click.echo(f"Geometry: {to_wkt(geom)}")
            else:
                click.echo(f"Geometry: {json.dumps(to_geojson_geometry(geom))}")
            shown += 1
    except (ShapefileError, OSError) as e:
        click.echo(f"Error reading records: {e}", err=True)
        sys.exit(1)
    finally:
        reader.close()


@main.command()
@click.argument("shapefile", type=click.Path(exists=True))
@click.argument("output", type=click.Path())
@click.option(
    "--format",
    "-f",
    "output_format",
    type=click.Choice(["geojson", "geojsonl", "gpkg"]),
    help="Output format (default: auto-detect from extension)",
)
@click.option("--limit", "-n", type=int, help="Limit number of records")
@click.option("--compact", is_flag=True, help="Compact JSON output (no indentation)")
@click.option("--source-crs", help="CRS of the input coordinates, e.g. EPSG:3857")
@click.option("--target-crs", help="Reproject to this CRS (requires --source-crs)")
@click.option("--strict", is_flag=True, help="Verify hole nesting with point-in-polygon")
def convert(
    shapefile: str,
    output: str,
    output_format: str | None,
    limit: int | None,
    compact: bool,
    source_crs: str | None,
    target_crs: str | None,
    strict: bool,
):
    """
    Convert shapefile geometries to GeoJSON or GeoPackage.

    Examples:
        fast-shapefile convert input.shp output.geojson
        fast-shapefile convert input.shp data.geojsonl -n 1000
        fast-shapefile convert input.shp output.gpkg --source-crs EPSG:4326
        fast-shapefile convert input.shp out.geojson --source-crs EPSG:3857 --target-crs EPSG:4326
    """
    if target_crs and not source_crs:
        click.echo("--target-crs requires --source-crs", err=True)
        sys.exit(1)

    transform = reprojection(source_crs, target_crs) if target_crs else None
    reader = _open(shapefile, transform=transform, strict_nesting=strict)

    # Determine output format
    output_path = Path(output)
    if output_format:
        fmt = output_format
    elif output_path.suffix.lower() == ".geojsonl":
        fmt = "geojsonl"
    elif output_path.suffix.lower() == ".gpkg":
        fmt = "gpkg"
    else:
        fmt = "geojson"

    click.echo(f"Converting {Path(shapefile).name} to {fmt}...")

    try:
        if fmt == "geojsonl":
            count = write_geojsonl(reader, output, limit=limit)
        elif fmt == "gpkg":
            count = write_geopackage(
                reader, output, crs=target_crs or source_crs, limit=limit
            )
        else:
            indent = None if compact else 2
            count = write_geojson(reader, output, indent=indent, limit=limit)

        click.echo(f"Wrote {count:,} features to {output}")

    except Exception as e:
        click.echo(f"Error during conversion: {e}", err=True)
        sys.exit(1)
    finally:
        reader.close()


if __name__ == "__main__":
    main()
