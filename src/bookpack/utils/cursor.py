"""Bounds-checked little-endian reads over a byte buffer."""

import struct

from bookpack.errors import BookPackError

_U16 = struct.Struct("<H")
_U32 = struct.Struct("<I")


class TruncatedDataError(BookPackError):
    """A read would run past the end of the buffer."""


class ByteCursor:
    """Sequential reader over ``bytes`` that never reads past the end.

    Every read checks ``position + size <= length`` first and raises
    TruncatedDataError when it does not hold. The position is left
    untouched by a failed read.
    """

    def __init__(self, data: bytes, position: int = 0):
        self._data = data
        self._position = position

    @property
    def position(self) -> int:
        return self._position

    @property
    def length(self) -> int:
        return len(self._data)

    @property
    def remaining(self) -> int:
        return max(self.length - self._position, 0)

    def _require(self, size: int) -> None:
        if size < 0 or self._position < 0 or self._position + size > self.length:
            raise TruncatedDataError(
                f"Need {size} bytes at offset {self._position}, "
                f"buffer holds {self.length}"
            )

    def read_u16(self) -> int:
        self._require(2)
        (value,) = _U16.unpack_from(self._data, self._position)
        self._position += 2
        return value

    def read_u32(self) -> int:
        self._require(4)
        (value,) = _U32.unpack_from(self._data, self._position)
        self._position += 4
        return value

    def read_bytes(self, size: int) -> bytes:
        self._require(size)
        chunk = self._data[self._position : self._position + size]
        self._position += size
        return bytes(chunk)

    def skip(self, size: int) -> None:
        self._require(size)
        self._position += size

    def seek(self, position: int) -> None:
        """Move to an absolute position inside the buffer."""
        if position < 0 or position > self.length:
            raise TruncatedDataError(
                f"Position {position} outside buffer of {self.length} bytes"
            )
        self._position = position
