"""Tests for geometry classes."""

import math

import pytest
from fast_shapefile import (
    Envelope, GeometryBuilder, LineString, MultiLineString, MultiPoint,
    MultiPolygon, NullShape, Point, Polygon, ShapeType
)


class TestShapeType:
    def test_codes(self):
        assert ShapeType.POINT == 1
        assert ShapeType.POLYLINE == 3
        assert ShapeType.POLYGON == 5
        assert ShapeType.MULTIPOINT == 8
        assert ShapeType(0) is ShapeType.NULL


class TestPoint:
    def test_point(self):
        pt = Point(x=-122.0, y=47.0)
        assert pt.x == -122.0
        assert pt.y == 47.0
        assert not pt.is_null

    def test_point_wkt(self):
        pt = Point(x=-122.0, y=47.0)
        assert pt.wkt == "POINT (-122.0 47.0)"

    def test_null_point(self):
        pt = Point.null()
        assert pt.is_null
        assert pt.is_empty
        assert math.isnan(pt.x)
        assert pt.coordinates == ()
        assert pt.bounds.is_null

    def test_point_bounds(self):
        bounds = Point(x=-122.0, y=47.0).bounds
        assert tuple(bounds) == (-122.0, 47.0, -122.0, 47.0)


class TestLineString:
    def test_linestring_basic(self):
        line = LineString(points=[(-122.0, 47.0), (-122.1, 47.1), (-122.2, 47.2)])
        assert len(line) == 3

    def test_linestring_wkt(self):
        line = LineString(points=[(-122.0, 47.0), (-122.1, 47.1)])
        assert line.wkt == "LINESTRING (-122.0 47.0, -122.1 47.1)"

    def test_empty_linestring_wkt(self):
        assert LineString().wkt == "LINESTRING EMPTY"

    def test_linestring_bounds(self):
        line = LineString(points=[(-122.0, 47.0), (-122.5, 47.5), (-122.2, 47.2)])
        bounds = line.bounds
        assert bounds.xmin == -122.5
        assert bounds.xmax == -122.0
        assert bounds.ymin == 47.0
        assert bounds.ymax == 47.5


class TestPolygon:
    def test_polygon_single_ring(self):
        ring = [(0, 0), (0, 10), (10, 10), (10, 0), (0, 0)]
        poly = Polygon(rings=[ring])
        assert poly.exterior == ring
        assert poly.interiors == []

    def test_polygon_with_hole(self):
        exterior = [(0, 0), (0, 10), (10, 10), (10, 0), (0, 0)]
        hole = [(2, 2), (8, 2), (8, 8), (2, 8), (2, 2)]
        poly = Polygon(rings=[exterior, hole])
        assert poly.exterior == exterior
        assert poly.interiors == [hole]

    def test_polygon_wkt(self):
        poly = Polygon(rings=[[(0, 0), (10, 0), (10, 10), (0, 0)]])
        assert poly.wkt == "POLYGON ((0 0, 10 0, 10 10, 0 0))"

    def test_null_polygon(self):
        poly = Polygon.null()
        assert poly.is_null
        assert poly.exterior == []
        assert poly.wkt == "POLYGON EMPTY"


class TestMultiPoint:
    def test_null_and_empty_are_distinct(self):
        assert MultiPoint.null() != MultiPoint()
        assert MultiPoint.null().is_null
        assert not MultiPoint().is_null
        assert MultiPoint().wkt == "MULTIPOINT EMPTY"

    def test_multipoint_wkt(self):
        mp = MultiPoint(points=[Point(x=0, y=0), Point(x=1, y=2)])
        assert mp.wkt == "MULTIPOINT ((0 0), (1 2))"
        assert len(list(mp)) == 2


class TestMultiLineString:
    def test_multilinestring_wkt(self):
        line1 = LineString(points=[(0, 0), (1, 1)])
        line2 = LineString(points=[(2, 2), (3, 3)])
        mls = MultiLineString(lines=[line1, line2])
        assert len(mls) == 2
        assert mls.wkt == "MULTILINESTRING ((0 0, 1 1), (2 2, 3 3))"
        assert tuple(mls.bounds) == (0, 0, 3, 3)


class TestMultiPolygon:
    def test_multipolygon_wkt(self):
        poly1 = Polygon(rings=[[(0, 0), (0, 1), (1, 1), (0, 0)]])
        poly2 = Polygon(rings=[[(5, 5), (5, 6), (6, 6), (5, 5)]])
        mpoly = MultiPolygon(polygons=[poly1, poly2])
        assert mpoly.wkt == (
            "MULTIPOLYGON (((0 0, 0 1, 1 1, 0 0)), ((5 5, 5 6, 6 6, 5 5)))"
        )
        assert tuple(mpoly.bounds) == (0, 0, 6, 6)


class TestNullShape:
    def test_null_shape(self):
        shape = NullShape()
        assert shape.is_null
        assert shape.is_empty
        assert shape.bounds.is_null


class TestEnvelope:
    def test_new_envelope_is_null(self):
        env = Envelope()
        assert env.is_null
        assert env.width == 0.0

    def test_init_in_place(self):
        env = Envelope()
        env.init(10, 20, 0, 5)
        assert tuple(env) == (0, 5, 10, 20)
        assert env.width == 10
        assert env.height == 15

    def test_copy_is_independent(self):
        env = Envelope(0, 0, 1, 1)
        copy = env.copy()
        env.init(5, 5, 6, 6)
        assert tuple(copy) == (0, 0, 1, 1)

    def test_contains_inclusive(self):
        outer = Envelope(0, 0, 10, 10)
        assert outer.contains(Envelope(0, 0, 10, 10))
        assert outer.contains(Envelope(2, 2, 3, 3))
        assert not outer.contains(Envelope(5, 5, 11, 6))
        assert not outer.contains(Envelope())

    def test_from_coords(self):
        env = Envelope.from_coords([(1, 5), (-1, 2), (3, 3)])
        assert tuple(env) == (-1, 2, 3, 5)

    def test_set_to_null(self):
        env = Envelope(0, 0, 1, 1)
        env.set_to_null()
        assert env.is_null


class TestGeometryBuilder:
    @pytest.fixture
    def builder(self) -> GeometryBuilder:
        return GeometryBuilder()

    def test_polygon_with_holes(self, builder):
        poly = builder.polygon([(0, 0), (0, 1), (1, 1)], [[(0.2, 0.2), (0.4, 0.2)]])
        assert isinstance(poly, Polygon)
        assert len(poly.rings) == 2

    def test_empty_polygon(self, builder):
        poly = builder.polygon([])
        assert poly.is_empty
        assert not poly.is_null

    def test_multi_polygon(self, builder):
        mpoly = builder.multi_polygon([([(0, 0), (0, 1), (1, 1)], [])] * 2)
        assert isinstance(mpoly, MultiPolygon)
        assert len(mpoly) == 2

    def test_null_constructors(self, builder):
        assert builder.null_point().is_null
        assert builder.null_line_string().is_null
        assert builder.null_polygon().is_null
        assert builder.null_multi_point().is_null
        assert isinstance(builder.null_shape(), NullShape)
