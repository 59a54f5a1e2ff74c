"""
Fast Shapefile

Decode ESRI Shapefile (.shp) geometry streams into Python geometry objects.

This library provides a pure Python sequential decoder for the shapefile main
file: header parsing, per-shape-type record decoding, multi-part ring assembly
and shell/hole classification for polygons.

Example:
    >>> from fast_shapefile import open_shapefile
    >>>
    >>> with open_shapefile("lakes.shp") as reader:
    ...     print(reader.header.shape_type)
    ...     while reader.advance():
    ...         print(reader.geometry.wkt, tuple(reader.envelope))

CLI Example:
    $ fast-shapefile info lakes.shp
    $ fast-shapefile convert lakes.shp lakes.geojson
"""

__version__ = "0.1.0"

from .geometry import (
    Coord,
    Envelope,
    Geometry,
    GeometryBuilder,
    LineString,
    MultiLineString,
    MultiPoint,
    MultiPolygon,
    NullShape,
    Point,
    Polygon,
    ShapeType,
)

from .exceptions import (
    MalformedRecordError,
    RecordTypeMismatch,
    ShapefileError,
    TruncatedRecordError,
    UnsupportedShapeType,
)

from .header import ShapefileHeader, read_header

from .cursor import RecordCursor

from .rings import (
    assign_holes,
    classify_rings,
    is_clockwise,
    signed_area,
    split_parts,
)

from .decoder import ShapeDecoder

from .transform import (
    GeometryPipeline,
    coordinate_transform,
    map_coordinates,
    reprojection,
    scale_translate,
)

from .reader import (
    ReaderOptions,
    ShapefileReader,
    open_shapefile,
)

from .converters import (
    features_to_geojson,
    geometry_to_geojson_feature,
    geometry_to_shapely,
    to_geojson_geometry,
    to_wkt,
    write_geojson,
    write_geojsonl,
    write_geopackage,
)

__all__ = [
    # Version
    "__version__",
    # Geometry types
    "Coord",
    "Envelope",
    "Geometry",
    "GeometryBuilder",
    "LineString",
    "MultiLineString",
    "MultiPoint",
    "MultiPolygon",
    "NullShape",
    "Point",
    "Polygon",
    "ShapeType",
    # Errors
    "MalformedRecordError",
    "RecordTypeMismatch",
    "ShapefileError",
    "TruncatedRecordError",
    "UnsupportedShapeType",
    # Decoding
    "ShapefileHeader",
    "read_header",
    "RecordCursor",
    "ShapeDecoder",
    "assign_holes",
    "classify_rings",
    "is_clockwise",
    "signed_area",
    "split_parts",
    # Transforms
    "GeometryPipeline",
    "coordinate_transform",
    "map_coordinates",
    "reprojection",
    "scale_translate",
    # Reader
    "ReaderOptions",
    "ShapefileReader",
    "open_shapefile",
    # Converters
    "features_to_geojson",
    "geometry_to_geojson_feature",
    "geometry_to_shapely",
    "to_geojson_geometry",
    "to_wkt",
    "write_geojson",
    "write_geojsonl",
    "write_geopackage",
]
