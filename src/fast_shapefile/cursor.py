"""
Sequential record cursor over a shapefile byte stream.

Each record starts with an 8-byte big-endian header (record number, content
length in 16-bit words) followed by a little-endian shape body. The cursor
only frames records; the body is consumed by the shape decoders through the
primitive read methods below, so the body length is implied by the shape
layout rather than by the content length field.
"""

import logging
import os
import struct
from typing import BinaryIO

from .exceptions import TruncatedRecordError
from .geometry import Coord
from .header import HEADER_SIZE

logger = logging.getLogger(__name__)

_RECORD_HEADER = struct.Struct(">ii")
_INT32 = struct.Struct("<i")
_DOUBLE = struct.Struct("<d")


class RecordCursor:
    """
    Stateful position tracker over the records of a .shp stream.

    Not safe for concurrent use; give each thread its own reader and stream.

    Example:
        >>> cursor = RecordCursor(stream)
        >>> while cursor.advance():
        ...     tag = cursor.read_int32()
    """

    def __init__(self, stream: BinaryIO):
        self._stream = stream
        self._length = stream.seek(0, os.SEEK_END)
        self._exhausted = False
        self.record_index = -1
        self.record_number: int | None = None
        self.content_length: int | None = None
        stream.seek(HEADER_SIZE)

    @property
    def length(self) -> int:
        """Total stream length in bytes"""
        return self._length

    @property
    def position(self) -> int:
        return self._stream.tell()

    def advance(self) -> bool:
        """
        Move to the next record body.

        Returns:
            False once the stream position equals its length, True otherwise.
            Once False has been returned every later call returns False
            without touching the stream.

        Raises:
            TruncatedRecordError: If fewer than 8 bytes remain for the record
                header
        """
        if self._exhausted:
            return False

        if self._stream.tell() >= self._length:
            self._exhausted = True
            logger.debug("End of stream after %d records", self.record_index + 1)
            return False

        self.record_index += 1
        self.record_number, self.content_length = _RECORD_HEADER.unpack(
            self.read(_RECORD_HEADER.size)
        )
        return True

    def reset(self) -> None:
        """Reposition to the first record (byte offset 100)."""
        self._stream.seek(HEADER_SIZE)
        self._exhausted = False
        self.record_index = -1
        self.record_number = None
        self.content_length = None
        logger.debug("Cursor reset to first record")

    def read(self, size: int) -> bytes:
        """Read exactly size bytes from the current record."""
        remaining = max(self._length - self._stream.tell(), 0)
        if size > remaining:
            raise TruncatedRecordError(self.record_index, size, remaining)
        data = self._stream.read(size)
        if len(data) != size:
            raise TruncatedRecordError(self.record_index, size, len(data))
        return data

    def read_int32(self) -> int:
        return _INT32.unpack(self.read(4))[0]

    def read_int32s(self, count: int) -> list[int]:
        if count == 0:
            return []
        return list(struct.unpack(f"<{count}i", self.read(4 * count)))

    def read_double(self) -> float:
        return _DOUBLE.unpack(self.read(8))[0]

    def read_doubles(self, count: int) -> list[float]:
        if count == 0:
            return []
        return list(struct.unpack(f"<{count}d", self.read(8 * count)))

    def read_points(self, count: int) -> list[Coord]:
        """Read count interleaved (x, y) float64 pairs."""
        values = self.read_doubles(2 * count)
        return list(zip(values[0::2], values[1::2], strict=True))
