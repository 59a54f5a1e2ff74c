"""
Shape record decoders for the shapefile main file.

One decoding routine exists per supported shape type. The routine matching
the file's header shape type is looked up once, when the reader opens, and
then called for every record.

Record body layouts (all little-endian):

    Point:
        int32 type, float64 x, float64 y

    PolyLine / Polygon:
        int32 type, 4 x float64 bbox, int32 num_parts, int32 num_points,
        num_parts x int32 part offsets, num_points x (float64 x, float64 y)

    MultiPoint:
        int32 type, 4 x float64 bbox, int32 num_points,
        num_points x (float64 x, float64 y)

A type tag of 0 (Null) ends the record immediately.
"""

from collections.abc import Callable

from .cursor import RecordCursor
from .exceptions import MalformedRecordError, RecordTypeMismatch, UnsupportedShapeType
from .geometry import Envelope, Geometry, GeometryBuilder, Ring, ShapeType
from .rings import assign_holes, classify_rings, split_parts

DecodeFunc = Callable[[], Geometry]


class ShapeDecoder:
    """
    Decoder for the shape bodies of a .shp record stream.

    The decoder reads from a RecordCursor already positioned at a record body
    and writes each record's bounding box into a shared Envelope in place.

    Example:
        >>> decoder = ShapeDecoder(cursor, Envelope())
        >>> decode = decoder.decoder_for(ShapeType.POLYGON)
        >>> while cursor.advance():
        ...     geom = decode()
    """

    def __init__(
        self,
        cursor: RecordCursor,
        envelope: Envelope,
        builder: GeometryBuilder | None = None,
        strict_nesting: bool = False,
    ):
        """
        Initialize the decoder.

        Args:
            cursor: Record cursor to read shape bodies from
            envelope: Envelope overwritten with each record's bounding box
            builder: Geometry factory. If None, builds this package's
                geometry classes.
            strict_nesting: Require point-in-polygon containment, not just
                envelope containment, when assigning holes to shells
        """
        self.cursor = cursor
        self.envelope = envelope
        self.builder = builder or GeometryBuilder()
        self.strict_nesting = strict_nesting
        self._dispatch: dict[ShapeType, DecodeFunc] = {
            ShapeType.NULL: self.decode_null,
            ShapeType.POINT: self.decode_point,
            ShapeType.POLYLINE: self.decode_polyline,
            ShapeType.POLYGON: self.decode_polygon,
            ShapeType.MULTIPOINT: self.decode_multipoint,
        }

    def decoder_for(self, shape_type: int) -> DecodeFunc:
        """Return the decode routine for a header shape type."""
        try:
            return self._dispatch[ShapeType(shape_type)]
        except (ValueError, KeyError):
            raise UnsupportedShapeType(shape_type) from None

    def _read_tag(self, expected: ShapeType) -> bool:
        """Read the record type tag; True means the record is Null."""
        tag = self.cursor.read_int32()
        if tag == ShapeType.NULL:
            return True
        if tag != expected:
            raise RecordTypeMismatch(int(expected), tag, self.cursor.record_index)
        return False

    def _read_box(self) -> None:
        xmin, ymin, xmax, ymax = self.cursor.read_doubles(4)
        self.envelope.init(xmin, ymin, xmax, ymax)

    def _read_count(self, what: str) -> int:
        count = self.cursor.read_int32()
        if count < 0:
            raise MalformedRecordError(
                self.cursor.record_index, f"negative {what}: {count}"
            )
        return count

    def _read_parts(self) -> list[Ring]:
        """Read the bbox, part table and points shared by PolyLine and Polygon"""
        self._read_box()
        num_parts = self._read_count("part count")
        num_points = self._read_count("point count")
        offsets = self.cursor.read_int32s(num_parts)
        points = self.cursor.read_points(num_points)
        return split_parts(points, offsets, self.cursor.record_index)

    def decode_null(self) -> Geometry:
        self._read_tag(ShapeType.NULL)
        return self.builder.null_shape()

    def decode_point(self) -> Geometry:
        if self._read_tag(ShapeType.POINT):
            return self.builder.null_point()
        x, y = self.cursor.read_doubles(2)
        return self.builder.point(x, y)

    def decode_polyline(self) -> Geometry:
        if self._read_tag(ShapeType.POLYLINE):
            return self.builder.null_line_string()

        parts = self._read_parts()
        if not parts:
            return self.builder.line_string([])
        if len(parts) == 1:
            return self.builder.line_string(parts[0])
        return self.builder.multi_line_string(parts)

    def decode_polygon(self) -> Geometry:
        if self._read_tag(ShapeType.POLYGON):
            return self.builder.null_polygon()

        shells, holes = classify_rings(self._read_parts())
        polygons = assign_holes(shells, holes, strict=self.strict_nesting)
        if not polygons:
            return self.builder.polygon([])
        if len(polygons) == 1:
            shell, shell_holes = polygons[0]
            return self.builder.polygon(shell, shell_holes)
        return self.builder.multi_polygon(polygons)

    def decode_multipoint(self) -> Geometry:
        if self._read_tag(ShapeType.MULTIPOINT):
            return self.builder.null_multi_point()

        self._read_box()
        num_points = self._read_count("point count")
        return self.builder.multi_point(self.cursor.read_points(num_points))
