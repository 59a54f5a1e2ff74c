"""
Shapefile main file header parsing.

The 100-byte header mixes byte orders by field:

    Bytes 0-3:   File code, big-endian int32 (9994)
    Bytes 4-23:  Unused
    Bytes 24-27: File length in 16-bit words, big-endian int32
    Bytes 28-31: Version, little-endian int32 (1000)
    Bytes 32-35: Shape type, little-endian int32
    Bytes 36-67: Bounding box xmin, ymin, xmax, ymax, little-endian float64
    Bytes 68-99: Z and M ranges (not used)
"""

import logging
import struct
from dataclasses import dataclass
from typing import BinaryIO

from .exceptions import TruncatedRecordError, UnsupportedShapeType
from .geometry import Envelope, ShapeType

logger = logging.getLogger(__name__)

HEADER_SIZE = 100
FILE_CODE = 9994

_BIG_ENDIAN_FIELDS = struct.Struct(">i20xi")
_LITTLE_ENDIAN_FIELDS = struct.Struct("<ii4d")


@dataclass(frozen=True)
class ShapefileHeader:
    """
    Parsed shapefile header.

    Attributes:
        shape_type: Shape type shared by every non-null record in the file
        xmin, ymin, xmax, ymax: Bounding box of all shapes in the file
        file_length: File length in 16-bit words (informational)
        file_code: Magic number, 9994 for a well-formed file
        version: Format version, 1000 for a well-formed file
    """

    shape_type: ShapeType
    xmin: float
    ymin: float
    xmax: float
    ymax: float
    file_length: int = 0
    file_code: int = FILE_CODE
    version: int = 1000

    @property
    def bbox(self) -> Envelope:
        """A fresh Envelope holding the file's bounding box"""
        return Envelope(self.xmin, self.ymin, self.xmax, self.ymax)

    @property
    def file_length_bytes(self) -> int:
        return self.file_length * 2

    @classmethod
    def parse(cls, data: bytes) -> "ShapefileHeader":
        """
        Parse a header from its raw bytes.

        Args:
            data: At least the first 100 bytes of a .shp file

        Returns:
            The parsed header

        Raises:
            TruncatedRecordError: If fewer than 100 bytes are given
            UnsupportedShapeType: If the shape type code is not one of
                Null, Point, PolyLine, Polygon or MultiPoint
        """
        if len(data) < HEADER_SIZE:
            raise TruncatedRecordError(None, HEADER_SIZE, len(data))

        file_code, file_length = _BIG_ENDIAN_FIELDS.unpack_from(data, 0)
        version, type_code, xmin, ymin, xmax, ymax = _LITTLE_ENDIAN_FIELDS.unpack_from(
            data, 28
        )

        if file_code != FILE_CODE:
            logger.warning("Unexpected file code %d (expected %d)", file_code, FILE_CODE)

        try:
            shape_type = ShapeType(type_code)
        except ValueError:
            raise UnsupportedShapeType(type_code) from None

        return cls(
            shape_type=shape_type,
            xmin=xmin,
            ymin=ymin,
            xmax=xmax,
            ymax=ymax,
            file_length=file_length,
            file_code=file_code,
            version=version,
        )


def read_header(stream: BinaryIO) -> ShapefileHeader:
    """Read and parse the header from the start of a binary stream."""
    stream.seek(0)
    return ShapefileHeader.parse(stream.read(HEADER_SIZE))
