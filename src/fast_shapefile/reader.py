"""
ShapefileReader: the public entry point for decoding .shp geometry streams.

This module ties the header parser, record cursor, shape decoders and the
optional transform stage together behind a small cursor-style API.
"""

import logging
from collections.abc import Iterator
from dataclasses import dataclass
from pathlib import Path
from types import TracebackType
from typing import BinaryIO

from .cursor import RecordCursor
from .decoder import ShapeDecoder
from .geometry import Envelope, Geometry, GeometryBuilder
from .header import ShapefileHeader, read_header
from .transform import GeometryPipeline, GeometryTransform

logger = logging.getLogger(__name__)


@dataclass
class ReaderOptions:
    """
    Options fixed for the life of a reader.

    Attributes:
        builder: Geometry factory used by the decoders (None for the default)
        transform: Function applied to every decoded geometry
        strict_nesting: Confirm hole/shell nesting with a point-in-polygon
            test instead of trusting envelope containment alone
    """

    builder: GeometryBuilder | None = None
    transform: GeometryTransform | None = None
    strict_nesting: bool = False


class ShapefileReader:
    """
    Sequential reader for the geometry records of a shapefile.

    The reader exposes one record at a time. advance() moves to the next
    record and decodes it; the result is available from the geometry
    property until the next advance(). The envelope property is a single
    Envelope updated in place for every PolyLine, Polygon and MultiPoint
    record, so use envelope_copy() to keep a value across reads.

    Example:
        >>> with ShapefileReader("rivers.shp") as reader:
        ...     while reader.advance():
        ...         print(reader.geometry.wkt)

    Attributes:
        path: Path to the .shp file, or None when reading from a stream
        header: Parsed file header
    """

    def __init__(
        self,
        source: str | Path | BinaryIO,
        builder: GeometryBuilder | None = None,
        transform: GeometryTransform | None = None,
        strict_nesting: bool = False,
        owns_stream: bool | None = None,
    ):
        """
        Open a shapefile.

        Args:
            source: Path to a .shp file (the extension may be omitted) or a
                seekable binary stream positioned anywhere
            builder: Geometry factory used by the decoders
            transform: Function applied to every decoded geometry
            strict_nesting: Confirm hole nesting with point-in-polygon tests
            owns_stream: Close a caller-provided stream on close(). Files
                opened from a path are always closed by the reader.

        Raises:
            FileNotFoundError: If the file doesn't exist
            UnsupportedShapeType: If the header shape type is not supported
            TruncatedRecordError: If the stream is shorter than a header
        """
        self.options = ReaderOptions(
            builder=builder, transform=transform, strict_nesting=strict_nesting
        )
        self._stream: BinaryIO | None = None

        if isinstance(source, (str, Path)):
            path = Path(source)
            if not path.suffix:
                path = path.with_suffix(".shp")
            if not path.exists():
                raise FileNotFoundError(f"Shapefile not found: {path}")
            self.path: Path | None = path
            stream: BinaryIO = path.open("rb")
            self._owns_stream = True
        else:
            self.path = None
            stream = source
            self._owns_stream = bool(owns_stream)

        self._stream = stream
        try:
            self.header: ShapefileHeader = read_header(stream)
            self._cursor = RecordCursor(stream)
            self._envelope = Envelope()
            decoder = ShapeDecoder(
                self._cursor,
                self._envelope,
                builder=self.options.builder,
                strict_nesting=self.options.strict_nesting,
            )
            self._pipeline = GeometryPipeline(
                decoder.decoder_for(self.header.shape_type), self.options.transform
            )
        except BaseException:
            self.close()
            raise

        self._geometry: Geometry | None = None
        logger.info(
            "Opened %s: %s, bbox=(%s, %s, %s, %s)",
            self.path or "stream",
            self.header.shape_type.name,
            self.header.xmin,
            self.header.ymin,
            self.header.xmax,
            self.header.ymax,
        )

    @property
    def closed(self) -> bool:
        return self._stream is None

    def close(self) -> None:
        """Release the underlying stream. Closing twice is a no-op."""
        if self._stream is not None:
            if self._owns_stream:
                self._stream.close()
            self._stream = None

    def __enter__(self) -> "ShapefileReader":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        self.close()

    def _check_open(self) -> None:
        if self._stream is None:
            raise ValueError("I/O operation on closed shapefile reader")

    @property
    def shape_type(self) -> int:
        return self.header.shape_type

    @property
    def geometry(self) -> Geometry | None:
        """Geometry of the current record (None before the first advance)"""
        return self._geometry

    @property
    def envelope(self) -> Envelope:
        """Bounding box of the current record; mutated in place on advance"""
        return self._envelope

    def envelope_copy(self) -> Envelope:
        """Independent copy of the current record's bounding box"""
        return self._envelope.copy()

    @property
    def record_index(self) -> int:
        """0-based index of the current record, -1 before the first advance"""
        return self._cursor.record_index

    @property
    def record_number(self) -> int | None:
        """Record number stored in the current record header"""
        return self._cursor.record_number

    def advance(self) -> bool:
        """
        Decode the next record.

        Returns:
            True if a record was decoded, False at end of stream. False is
            sticky until reset().

        Raises:
            RecordTypeMismatch: If the record's type tag disagrees with the
                header shape type
            TruncatedRecordError: If the stream ends inside the record
            MalformedRecordError: If the record's counts or offsets are
                impossible
        """
        self._check_open()
        if not self._cursor.advance():
            return False
        self._geometry = self._pipeline.run()
        return True

    def reset(self) -> None:
        """Rewind to the first record without reopening the stream."""
        self._check_open()
        self._cursor.reset()
        self._geometry = None

    def iter_geometries(self) -> Iterator[Geometry]:
        """
        Lazily yield geometries from the current position to end of stream.

        Each pull advances the reader, so the generator shares its position
        with advance(). Call reset() to start another pass.
        """
        while self.advance():
            assert self._geometry is not None
            yield self._geometry

    def __iter__(self) -> Iterator[Geometry]:
        return self.iter_geometries()

    def read_all(self) -> list[Geometry]:
        """Rewind and decode every record into a list."""
        self.reset()
        return list(self.iter_geometries())


def open_shapefile(
    path: str | Path,
    builder: GeometryBuilder | None = None,
    transform: GeometryTransform | None = None,
    strict_nesting: bool = False,
) -> ShapefileReader:
    """
    Open a shapefile for sequential reading.

    Args:
        path: Path to the .shp file
        builder: Geometry factory used by the decoders
        transform: Function applied to every decoded geometry
        strict_nesting: Confirm hole nesting with point-in-polygon tests

    Returns:
        An open ShapefileReader; use it as a context manager to close it

    Example:
        >>> with open_shapefile("lakes.shp") as reader:
        ...     for geom in reader:
        ...         print(geom.wkt)
    """
    return ShapefileReader(
        path, builder=builder, transform=transform, strict_nesting=strict_nesting
    )
