"""
Optional post-decode transform stage.

The reader runs every record through a GeometryPipeline: an ordered list of
stages where the first stage decodes the record and an optional second stage
transforms the decoded geometry. The transform is fixed when the pipeline is
built and applies to every record for the life of the reader.
"""

from collections.abc import Callable

from pyproj import CRS, Transformer

from .geometry import (
    Geometry,
    LineString,
    MultiLineString,
    MultiPoint,
    MultiPolygon,
    NullShape,
    Point,
    Polygon,
)

GeometryTransform = Callable[[Geometry], Geometry]
CoordFunc = Callable[[float, float], tuple[float, float]]


class GeometryPipeline:
    """
    Decode stage followed by an optional transform stage.

    Example:
        >>> pipeline = GeometryPipeline(decode, reprojection("EPSG:3857", "EPSG:4326"))
        >>> geom = pipeline.run()
    """

    def __init__(
        self,
        decode: Callable[[], Geometry],
        transform: GeometryTransform | None = None,
    ):
        self._decode = decode
        self._transform = transform
        self._post: tuple[GeometryTransform, ...] = (
            (transform,) if transform is not None else ()
        )

    @property
    def transform(self) -> GeometryTransform | None:
        return self._transform

    @property
    def stages(self) -> tuple[Callable[..., Geometry], ...]:
        """All stages in execution order, decode first"""
        return (self._decode, *self._post)

    def run(self) -> Geometry:
        geom = self._decode()
        for stage in self._post:
            geom = stage(geom)
        return geom


def map_coordinates(geom: Geometry, func: CoordFunc) -> Geometry:
    """
    Rebuild a geometry with func(x, y) applied to every coordinate.

    Null and empty geometries are returned unchanged.

    Args:
        geom: Geometry object to transform
        func: Function mapping (x, y) to a new (x, y)

    Returns:
        A new Geometry object of the same type
    """
    if geom.is_null or isinstance(geom, NullShape):
        return geom

    if isinstance(geom, Point):
        x, y = func(geom.x, geom.y)
        return Point(x=x, y=y)

    elif isinstance(geom, LineString):
        return LineString(points=[func(x, y) for x, y in geom.points])

    elif isinstance(geom, Polygon):
        return Polygon(rings=[[func(x, y) for x, y in ring] for ring in geom.rings])

    elif isinstance(geom, MultiPoint):
        new_points: list[Point] = []
        for pt in geom.points:
            x, y = func(pt.x, pt.y)
            new_points.append(Point(x=x, y=y))
        return MultiPoint(points=new_points)

    elif isinstance(geom, MultiLineString):
        return MultiLineString(
            lines=[
                LineString(points=[func(x, y) for x, y in line.points])
                for line in geom.lines
            ]
        )

    # MultiPolygon is the only remaining case
    assert isinstance(geom, MultiPolygon)
    return MultiPolygon(
        polygons=[
            Polygon(rings=[[func(x, y) for x, y in ring] for ring in poly.rings])
            for poly in geom.polygons
        ]
    )


def coordinate_transform(func: CoordFunc) -> GeometryTransform:
    """Lift a per-coordinate function into a geometry transform."""

    def apply(geom: Geometry) -> Geometry:
        return map_coordinates(geom, func)

    return apply


def scale_translate(
    sx: float = 1.0, sy: float = 1.0, dx: float = 0.0, dy: float = 0.0
) -> GeometryTransform:
    """Transform computing (x * sx + dx, y * sy + dy)."""
    return coordinate_transform(lambda x, y: (x * sx + dx, y * sy + dy))


def get_transformer(
    source_crs: str | int | CRS,
    target_crs: str | int | CRS,
) -> Transformer:
    """
    Create a pyproj Transformer for coordinate reprojection.

    Args:
        source_crs: Source coordinate reference system (EPSG code, WKT, or CRS object)
        target_crs: Target coordinate reference system (EPSG code, WKT, or CRS object)

    Returns:
        A pyproj Transformer instance with x/y (lon/lat) axis order.
    """
    return Transformer.from_crs(source_crs, target_crs, always_xy=True)


def reprojection(
    source_crs: str | int | CRS,
    target_crs: str | int | CRS,
) -> GeometryTransform:
    """
    Build a transform that reprojects geometries between two CRSs.

    Example:
        >>> to_wgs84 = reprojection("EPSG:3857", "EPSG:4326")
        >>> pt = to_wgs84(Point(x=-13410713.258, y=5894992.591))
        >>> round(pt.x, 4), round(pt.y, 4)
        (-120.4705, 46.7108)
    """
    transformer = get_transformer(source_crs, target_crs)

    def project(x: float, y: float) -> tuple[float, float]:
        px, py = transformer.transform(x, y)
        return (px, py)

    return coordinate_transform(project)
