"""Helpers that assemble synthetic .shp byte streams for tests."""

import struct
from collections.abc import Sequence

Coord = tuple[float, float]

NULL, POINT, POLYLINE, POLYGON, MULTIPOINT = 0, 1, 3, 5, 8

# Clockwise rings are shells, counter-clockwise rings are holes
SQUARE_CW = [(0.0, 0.0), (0.0, 10.0), (10.0, 10.0), (10.0, 0.0), (0.0, 0.0)]
HOLE_CCW = [(2.0, 2.0), (8.0, 2.0), (8.0, 8.0), (2.0, 8.0), (2.0, 2.0)]
SQUARE2_CW = [(20.0, 0.0), (20.0, 10.0), (30.0, 10.0), (30.0, 0.0), (20.0, 0.0)]
FAR_HOLE_CCW = [(40.0, 40.0), (45.0, 40.0), (45.0, 45.0), (40.0, 45.0), (40.0, 40.0)]


def header(
    shape_type: int,
    bbox: Sequence[float] = (0.0, 0.0, 0.0, 0.0),
    file_length_words: int = 50,
    file_code: int = 9994,
) -> bytes:
    return (
        struct.pack(">i20xi", file_code, file_length_words)
        + struct.pack("<ii4d", 1000, shape_type, *bbox)
        + bytes(32)
    )


def _bbox(points: Sequence[Coord]) -> tuple[float, float, float, float]:
    xs = [p[0] for p in points] or [0.0]
    ys = [p[1] for p in points] or [0.0]
    return min(xs), min(ys), max(xs), max(ys)


def _coords(points: Sequence[Coord]) -> bytes:
    return b"".join(struct.pack("<2d", x, y) for x, y in points)


def null_body() -> bytes:
    return struct.pack("<i", NULL)


def point_body(x: float, y: float, tag: int = POINT) -> bytes:
    return struct.pack("<i2d", tag, x, y)


def parts_body(
    parts: Sequence[Sequence[Coord]],
    tag: int = POLYLINE,
    offsets: Sequence[int] | None = None,
) -> bytes:
    points = [p for part in parts for p in part]
    if offsets is None:
        offsets = []
        start = 0
        for part in parts:
            offsets.append(start)
            start += len(part)
    return (
        struct.pack("<i4d", tag, *_bbox(points))
        + struct.pack("<2i", len(offsets), len(points))
        + struct.pack(f"<{len(offsets)}i", *offsets)
        + _coords(points)
    )


def multipoint_body(points: Sequence[Coord], tag: int = MULTIPOINT) -> bytes:
    return (
        struct.pack("<i4d", tag, *_bbox(points))
        + struct.pack("<i", len(points))
        + _coords(points)
    )


def record(number: int, body: bytes) -> bytes:
    return struct.pack(">2i", number, len(body) // 2) + body


def shapefile(shape_type: int, bodies: Sequence[bytes], bbox=None) -> bytes:
    """Assemble a complete .shp byte stream from record bodies."""
    records = b"".join(record(i + 1, body) for i, body in enumerate(bodies))
    length_words = (100 + len(records)) // 2
    return header(shape_type, bbox or (0.0, 0.0, 0.0, 0.0), length_words) + records
