"""
Output format converters for decoded shapefile geometries.

This module provides functions to convert geometries to various formats:
- WKT (Well-Known Text)
- GeoJSON
- Shapely geometries
- GeoPackage (using fiona/GDAL)

Attribute tables (.dbf) are not read by this package, so exported features
carry the record number as their id and an empty property set.
"""

import json
import logging
from collections.abc import Iterable
from pathlib import Path
from typing import Any

import fiona
from shapely.geometry import (
    LineString as ShapelyLineString,
)
from shapely.geometry import (
    MultiLineString as ShapelyMultiLineString,
)
from shapely.geometry import (
    MultiPoint as ShapelyMultiPoint,
)
from shapely.geometry import (
    MultiPolygon as ShapelyMultiPolygon,
)
from shapely.geometry import (
    Point as ShapelyPoint,
)
from shapely.geometry import (
    Polygon as ShapelyPolygon,
)
from shapely.geometry import mapping
from shapely.geometry.base import BaseGeometry

from .geometry import (
    Geometry,
    LineString,
    MultiLineString,
    MultiPoint,
    MultiPolygon,
    NullShape,
    Point,
    Polygon,
    ShapeType,
)
from .reader import ShapefileReader

logger = logging.getLogger(__name__)


def to_wkt(geom: Geometry) -> str:
    """
    Convert geometry to Well-Known Text (WKT) format.

    Example:
        >>> to_wkt(Point(x=-122.0, y=47.0))
        'POINT (-122.0 47.0)'
    """
    return geom.wkt


def _ring_coords(ring: Iterable[tuple[float, float]]) -> list[list[float]]:
    return [[x, y] for x, y in ring]


def to_geojson_geometry(geom: Geometry) -> dict[str, Any] | None:
    """
    Convert geometry to a GeoJSON geometry object.

    Null geometries map to None, as a GeoJSON Feature with no geometry.

    Example:
        >>> to_geojson_geometry(Point(x=-122.0, y=47.0))
        {'type': 'Point', 'coordinates': [-122.0, 47.0]}
    """
    if geom.is_null or isinstance(geom, NullShape):
        return None

    if isinstance(geom, Point):
        return {"type": "Point", "coordinates": [geom.x, geom.y]}

    elif isinstance(geom, LineString):
        return {"type": "LineString", "coordinates": _ring_coords(geom.points)}

    elif isinstance(geom, Polygon):
        return {
            "type": "Polygon",
            "coordinates": [_ring_coords(ring) for ring in geom.rings],
        }

    elif isinstance(geom, MultiPoint):
        return {
            "type": "MultiPoint",
            "coordinates": [[pt.x, pt.y] for pt in geom.points],
        }

    elif isinstance(geom, MultiLineString):
        return {
            "type": "MultiLineString",
            "coordinates": [_ring_coords(line.points) for line in geom.lines],
        }

    # MultiPolygon is the only remaining case
    return {
        "type": "MultiPolygon",
        "coordinates": [
            [_ring_coords(ring) for ring in poly.rings] for poly in geom.polygons
        ],
    }


def geometry_to_geojson_feature(
    geom: Geometry, fid: int | None = None
) -> dict[str, Any]:
    """Wrap a geometry in a GeoJSON Feature object."""
    feature: dict[str, Any] = {
        "type": "Feature",
        "properties": {},
        "geometry": to_geojson_geometry(geom),
    }
    if fid is not None:
        feature["id"] = fid
    return feature


def reader_features(
    reader: ShapefileReader, limit: int | None = None
) -> Iterable[dict[str, Any]]:
    """
    Yield GeoJSON Features for every record from the start of the file.

    Args:
        reader: Open shapefile reader; it is reset before reading
        limit: Maximum number of features to yield
    """
    reader.reset()
    count = 0
    while (limit is None or count < limit) and reader.advance():
        assert reader.geometry is not None
        yield geometry_to_geojson_feature(reader.geometry, fid=reader.record_number)
        count += 1


def features_to_geojson(features: Iterable[dict[str, Any]]) -> dict[str, Any]:
    """Collect GeoJSON Features into a FeatureCollection."""
    return {"type": "FeatureCollection", "features": list(features)}


def write_geojson(
    reader: ShapefileReader,
    output_path: str,
    indent: int | None = 2,
    limit: int | None = None,
) -> int:
    """
    Export every geometry of a shapefile to a GeoJSON file.

    Args:
        reader: Open shapefile reader
        output_path: Path to output GeoJSON file
        indent: JSON indentation (None for compact)
        limit: Maximum number of features to write

    Returns:
        Number of features written
    """
    geojson = features_to_geojson(reader_features(reader, limit=limit))

    with Path(output_path).open("w") as f:
        json.dump(geojson, f, indent=indent)

    return len(geojson["features"])


def write_geojsonl(
    reader: ShapefileReader,
    output_path: str,
    limit: int | None = None,
) -> int:
    """
    Export a shapefile to a GeoJSON Lines (newline-delimited) file.

    This format is better for large datasets as it is written one record at
    a time.

    Returns:
        Number of features written
    """
    count = 0
    with Path(output_path).open("w") as f:
        for feature in reader_features(reader, limit=limit):
            f.write(json.dumps(feature) + "\n")
            count += 1
    return count


def _polygon_to_shapely(poly: Polygon) -> ShapelyPolygon:
    """Convert a Polygon to a Shapely Polygon."""
    if poly.is_empty:
        return ShapelyPolygon()
    holes = [list(ring) for ring in poly.interiors]
    return ShapelyPolygon(list(poly.exterior), holes if holes else None)


def geometry_to_shapely(geom: Geometry) -> BaseGeometry:
    """
    Convert a decoded geometry to a Shapely geometry.

    Null and empty geometries become empty Shapely geometries of the matching
    type; NullShape becomes an empty Shapely Point.
    """
    if isinstance(geom, NullShape):
        return ShapelyPoint()

    if isinstance(geom, Point):
        if geom.is_null:
            return ShapelyPoint()
        return ShapelyPoint(geom.x, geom.y)

    if isinstance(geom, LineString):
        if geom.is_empty:
            return ShapelyLineString()
        return ShapelyLineString(geom.points)

    if isinstance(geom, Polygon):
        return _polygon_to_shapely(geom)

    if isinstance(geom, MultiPoint):
        return ShapelyMultiPoint([(pt.x, pt.y) for pt in geom.points])

    if isinstance(geom, MultiLineString):
        return ShapelyMultiLineString([line.points for line in geom.lines])

    # MultiPolygon is the only remaining case
    assert isinstance(geom, MultiPolygon)
    return ShapelyMultiPolygon([_polygon_to_shapely(poly) for poly in geom.polygons])


_FIONA_TYPES = {
    ShapeType.NULL: "Unknown",
    ShapeType.POINT: "Point",
    ShapeType.POLYLINE: "MultiLineString",
    ShapeType.POLYGON: "MultiPolygon",
    ShapeType.MULTIPOINT: "MultiPoint",
}


def _promote_to_multi(shapely_geom: BaseGeometry) -> BaseGeometry:
    """Promote single lines and polygons to Multi* for schema compatibility"""
    if isinstance(shapely_geom, ShapelyLineString):
        return ShapelyMultiLineString([shapely_geom])
    if isinstance(shapely_geom, ShapelyPolygon):
        return ShapelyMultiPolygon([shapely_geom])
    return shapely_geom


def write_geopackage(
    reader: ShapefileReader,
    output_path: str,
    crs: str | None = None,
    layer: str | None = None,
    limit: int | None = None,
) -> int:
    """
    Export a shapefile's geometries to a GeoPackage file.

    Uses fiona/GDAL to create a properly formatted GeoPackage (.gpkg) file.
    Lines and polygons are promoted to their Multi* type so single and
    multi-part records can share one layer; null and empty records are
    written without geometry.

    Args:
        reader: Open shapefile reader
        output_path: Path to output GeoPackage file (replaced if present)
        crs: CRS of the coordinates, e.g. "EPSG:4326" (None to omit)
        layer: Layer name (defaults to the output file stem)
        limit: Maximum number of features to write

    Returns:
        Number of features written
    """
    output_file = Path(output_path)
    if output_file.exists():
        output_file.unlink()

    geometry_type = _FIONA_TYPES[reader.header.shape_type]

    schema: dict[str, Any] = {
        "geometry": geometry_type,
        "properties": {"record": "int"},
    }
    layer_name = (layer or output_file.stem).replace(" ", "_").replace("-", "_")

    count = 0
    reader.reset()
    with fiona.open(  # pyright: ignore[reportUnknownMemberType]
        output_path,
        "w",
        driver="GPKG",
        crs=crs,
        schema=schema,
        layer=layer_name,
    ) as dst:  # pyright: ignore[reportUnknownVariableType]
        while (limit is None or count < limit) and reader.advance():
            geom = reader.geometry
            assert geom is not None
            geom_dict: dict[str, Any] | None = None
            if not geom.is_null and not geom.is_empty:
                geom_dict = dict(mapping(_promote_to_multi(geometry_to_shapely(geom))))
            dst.write(  # pyright: ignore[reportUnknownMemberType]
                {"geometry": geom_dict, "properties": {"record": reader.record_number}}
            )
            count += 1

    logger.info("Wrote %d features to %s", count, output_path)
    return count
