"""
Exceptions raised while reading shapefile geometry streams.

All errors derive from ShapefileError, which is itself a ValueError so callers
that already guard decode calls with ``except ValueError`` keep working.
"""


class ShapefileError(ValueError):
    """Base class for shapefile decoding errors"""


class UnsupportedShapeType(ShapefileError):
    """The header declares a shape type this reader cannot decode."""

    def __init__(self, code: int):
        self.code = code
        super().__init__(f"Unsupported shape type: {code}")


class RecordTypeMismatch(ShapefileError):
    """A record's type tag is neither Null nor the file-level shape type."""

    def __init__(self, expected: int, actual: int, record_index: int):
        self.expected = expected
        self.actual = actual
        self.record_index = record_index
        super().__init__(
            f"Record {record_index}: expected shape type {expected}, got {actual}"
        )


class TruncatedRecordError(ShapefileError):
    """
    The stream ended before a header or record body was complete.

    Attributes:
        record_index: 0-based index of the record being read, or None for the
            file header
        expected: Number of bytes the layout required
        actual: Number of bytes actually available
    """

    def __init__(self, record_index: int | None, expected: int, actual: int):
        self.record_index = record_index
        self.expected = expected
        self.actual = actual
        where = "header" if record_index is None else f"record {record_index}"
        super().__init__(
            f"Truncated {where}: needed {expected} bytes, only {actual} available"
        )


class MalformedRecordError(ShapefileError):
    """A record's counts or part offsets describe an impossible layout."""

    def __init__(self, record_index: int | None, message: str):
        self.record_index = record_index
        super().__init__(f"Record {record_index}: {message}")
