"""
Geometry classes for representing decoded shapefile records.

These classes provide simple containers for geometry data with WKT output.
Decoders never instantiate them directly; they go through a GeometryBuilder so
callers can substitute their own construction logic.
"""

import math
from collections.abc import Iterable, Iterator, Sequence
from dataclasses import dataclass, field, replace
from enum import IntEnum

# Type aliases for coordinate tuples
Coord = tuple[float, float]
Ring = list[Coord]


class ShapeType(IntEnum):
    """Shape type codes from the shapefile header and record tags"""

    NULL = 0
    POINT = 1
    POLYLINE = 3
    POLYGON = 5
    MULTIPOINT = 8


@dataclass
class Envelope:
    """
    Mutable axis-aligned bounding box.

    A fresh Envelope is null (xmin > xmax) until init() is called. The reader
    keeps a single instance and re-initialises it for every record, so take a
    copy() of it if the value must outlive the next advance.
    """

    xmin: float = math.inf
    ymin: float = math.inf
    xmax: float = -math.inf
    ymax: float = -math.inf

    @classmethod
    def from_coords(cls, coords: Iterable[Coord]) -> "Envelope":
        env = cls()
        for x, y in coords:
            env.expand_to_include(x, y)
        return env

    def init(self, xmin: float, ymin: float, xmax: float, ymax: float) -> None:
        """Overwrite the box in place, normalising min/max order."""
        self.xmin, self.xmax = min(xmin, xmax), max(xmin, xmax)
        self.ymin, self.ymax = min(ymin, ymax), max(ymin, ymax)

    def set_to_null(self) -> None:
        self.xmin = self.ymin = math.inf
        self.xmax = self.ymax = -math.inf

    def expand_to_include(self, x: float, y: float) -> None:
        self.xmin = min(self.xmin, x)
        self.ymin = min(self.ymin, y)
        self.xmax = max(self.xmax, x)
        self.ymax = max(self.ymax, y)

    @property
    def is_null(self) -> bool:
        return self.xmin > self.xmax or self.ymin > self.ymax

    @property
    def width(self) -> float:
        return 0.0 if self.is_null else self.xmax - self.xmin

    @property
    def height(self) -> float:
        return 0.0 if self.is_null else self.ymax - self.ymin

    def contains(self, other: "Envelope") -> bool:
        """True if other lies entirely inside this box (edges inclusive)"""
        if self.is_null or other.is_null:
            return False
        return (
            self.xmin <= other.xmin
            and other.xmax <= self.xmax
            and self.ymin <= other.ymin
            and other.ymax <= self.ymax
        )

    def copy(self) -> "Envelope":
        return replace(self)

    def __iter__(self) -> Iterator[float]:
        return iter((self.xmin, self.ymin, self.xmax, self.ymax))


def _coord_text(coords: Iterable[Coord]) -> str:
    return ", ".join(f"{x} {y}" for x, y in coords)


@dataclass
class NullShape:
    """Geometry of a record in a file whose header shape type is Null"""

    is_null: bool = True

    @property
    def is_empty(self) -> bool:
        return True

    @property
    def wkt(self) -> str:
        return "GEOMETRYCOLLECTION EMPTY"

    @property
    def coordinates(self) -> tuple[()]:
        return ()

    @property
    def bounds(self) -> Envelope:
        return Envelope()


@dataclass
class Point:
    """A 2D point"""

    x: float
    y: float
    is_null: bool = False

    @classmethod
    def null(cls) -> "Point":
        return cls(x=math.nan, y=math.nan, is_null=True)

    @property
    def is_empty(self) -> bool:
        return self.is_null

    @property
    def wkt(self) -> str:
        if self.is_null:
            return "POINT EMPTY"
        return f"POINT ({self.x} {self.y})"

    @property
    def coordinates(self) -> Coord | tuple[()]:
        if self.is_null:
            return ()
        return (self.x, self.y)

    @property
    def bounds(self) -> Envelope:
        if self.is_null:
            return Envelope()
        return Envelope(self.x, self.y, self.x, self.y)


@dataclass
class LineString:
    """A line string (one part of a polyline)"""

    points: list[Coord] = field(default_factory=lambda: [])
    is_null: bool = False

    @classmethod
    def null(cls) -> "LineString":
        return cls(is_null=True)

    @property
    def is_empty(self) -> bool:
        return not self.points

    @property
    def wkt(self) -> str:
        if self.is_empty:
            return "LINESTRING EMPTY"
        return f"LINESTRING ({_coord_text(self.points)})"

    @property
    def coordinates(self) -> list[Coord]:
        return list(self.points)

    @property
    def bounds(self) -> Envelope:
        return Envelope.from_coords(self.points)

    def __len__(self) -> int:
        return len(self.points)


@dataclass
class Polygon:
    """A polygon: one exterior ring followed by zero or more holes"""

    rings: list[Ring] = field(default_factory=lambda: [])
    is_null: bool = False

    @classmethod
    def null(cls) -> "Polygon":
        return cls(is_null=True)

    @property
    def exterior(self) -> Ring:
        """The exterior ring (first ring)"""
        return self.rings[0] if self.rings else []

    @property
    def interiors(self) -> list[Ring]:
        """Interior rings (holes)"""
        return self.rings[1:] if len(self.rings) > 1 else []

    @property
    def is_empty(self) -> bool:
        return not self.rings

    @property
    def wkt(self) -> str:
        if self.is_empty:
            return "POLYGON EMPTY"
        ring_strs = [f"({_coord_text(ring)})" for ring in self.rings]
        return f"POLYGON ({', '.join(ring_strs)})"

    @property
    def coordinates(self) -> list[list[Coord]]:
        return [list(ring) for ring in self.rings]

    @property
    def bounds(self) -> Envelope:
        # Holes lie inside the shell, so the shell alone bounds the polygon
        return Envelope.from_coords(self.exterior)


@dataclass
class MultiPoint:
    """Multiple points"""

    points: list[Point] = field(default_factory=lambda: [])
    is_null: bool = False

    @classmethod
    def null(cls) -> "MultiPoint":
        return cls(is_null=True)

    @property
    def is_empty(self) -> bool:
        return not self.points

    @property
    def wkt(self) -> str:
        if self.is_empty:
            return "MULTIPOINT EMPTY"
        coords = ", ".join(f"({p.x} {p.y})" for p in self.points)
        return f"MULTIPOINT ({coords})"

    @property
    def coordinates(self) -> list[Coord]:
        return [(p.x, p.y) for p in self.points]

    @property
    def bounds(self) -> Envelope:
        return Envelope.from_coords(self.coordinates)

    def __len__(self) -> int:
        return len(self.points)

    def __iter__(self) -> Iterator[Point]:
        return iter(self.points)


@dataclass
class MultiLineString:
    """Multiple line strings"""

    lines: list[LineString] = field(default_factory=lambda: [])
    is_null: bool = False

    @property
    def is_empty(self) -> bool:
        return all(line.is_empty for line in self.lines)

    @property
    def wkt(self) -> str:
        if self.is_empty:
            return "MULTILINESTRING EMPTY"
        line_strs = [f"({_coord_text(line.points)})" for line in self.lines]
        return f"MULTILINESTRING ({', '.join(line_strs)})"

    @property
    def coordinates(self) -> list[list[Coord]]:
        return [line.coordinates for line in self.lines]

    @property
    def bounds(self) -> Envelope:
        return Envelope.from_coords(p for line in self.lines for p in line.points)

    def __len__(self) -> int:
        return len(self.lines)

    def __iter__(self) -> Iterator[LineString]:
        return iter(self.lines)


@dataclass
class MultiPolygon:
    """Multiple polygons"""

    polygons: list[Polygon] = field(default_factory=lambda: [])
    is_null: bool = False

    @property
    def is_empty(self) -> bool:
        return all(poly.is_empty for poly in self.polygons)

    @property
    def wkt(self) -> str:
        if self.is_empty:
            return "MULTIPOLYGON EMPTY"
        poly_strs: list[str] = []
        for poly in self.polygons:
            ring_strs = [f"({_coord_text(ring)})" for ring in poly.rings]
            poly_strs.append(f"({', '.join(ring_strs)})")
        return f"MULTIPOLYGON ({', '.join(poly_strs)})"

    @property
    def coordinates(self) -> list[list[list[Coord]]]:
        return [poly.coordinates for poly in self.polygons]

    @property
    def bounds(self) -> Envelope:
        return Envelope.from_coords(p for poly in self.polygons for p in poly.exterior)

    def __len__(self) -> int:
        return len(self.polygons)

    def __iter__(self) -> Iterator[Polygon]:
        return iter(self.polygons)


# Type alias for any geometry
Geometry = (
    NullShape | Point | LineString | Polygon | MultiPoint | MultiLineString | MultiPolygon
)


def geometry_type_name(geom: Geometry) -> str:
    """Get the geometry type name"""
    return type(geom).__name__


class GeometryBuilder:
    """
    Factory used by the shape decoders to construct geometries.

    Subclass and pass an instance to the reader to change how geometries are
    built (for example to produce shapely objects directly). Every method
    receives plain coordinate tuples.
    """

    def null_shape(self) -> Geometry:
        return NullShape()

    def point(self, x: float, y: float) -> Geometry:
        return Point(x=x, y=y)

    def null_point(self) -> Geometry:
        return Point.null()

    def multi_point(self, coords: Sequence[Coord]) -> Geometry:
        return MultiPoint(points=[Point(x=x, y=y) for x, y in coords])

    def null_multi_point(self) -> Geometry:
        return MultiPoint.null()

    def line_string(self, coords: Sequence[Coord]) -> Geometry:
        return LineString(points=list(coords))

    def null_line_string(self) -> Geometry:
        return LineString.null()

    def multi_line_string(self, parts: Sequence[Sequence[Coord]]) -> Geometry:
        return MultiLineString(lines=[LineString(points=list(p)) for p in parts])

    def polygon(self, shell: Sequence[Coord], holes: Sequence[Ring] = ()) -> Geometry:
        if not shell and not holes:
            return Polygon()
        return Polygon(rings=[list(shell), *(list(h) for h in holes)])

    def null_polygon(self) -> Geometry:
        return Polygon.null()

    def multi_polygon(
        self, polygons: Sequence[tuple[Sequence[Coord], Sequence[Ring]]]
    ) -> Geometry:
        return MultiPolygon(
            polygons=[
                Polygon(rings=[list(shell), *(list(h) for h in holes)])
                for shell, holes in polygons
            ]
        )
