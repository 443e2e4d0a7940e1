"""Big-endian field codec shared by all output records.

Encoding helpers pack unsigned integers; :class:`ByteReader` walks a buffer
and bounds-checks every read so truncated input surfaces as
:class:`~avm_ledger.errors.MalformedInput` instead of a short slice.
"""

from __future__ import annotations

import struct

from avm_ledger.avm.constants import UINT32_MAX, UINT64_MAX
from avm_ledger.errors.codec_errors import MalformedInput

# ---------------------------------------------------------------------------
# Encoding
# ---------------------------------------------------------------------------


def encode_uint32(n: int) -> bytes:
    """Encode an unsigned 32-bit integer, big-endian."""
    if not 0 <= n <= UINT32_MAX:
        msg = f"Value out of uint32 range: {n}"
        raise ValueError(msg)
    return struct.pack(">I", n)


def encode_uint64(n: int) -> bytes:
    """Encode an unsigned 64-bit integer, big-endian."""
    if not 0 <= n <= UINT64_MAX:
        msg = f"Value out of uint64 range: {n}"
        raise ValueError(msg)
    return struct.pack(">Q", n)


# ---------------------------------------------------------------------------
# Decoding
# ---------------------------------------------------------------------------


class ByteReader:
    """A read cursor over an immutable byte buffer.

    Args:
        data: The buffer to read from.
        offset: Position of the first byte to read.

    Raises:
        MalformedInput: If *offset* lies outside the buffer.
    """

    def __init__(self, data: bytes | bytearray | memoryview, offset: int = 0) -> None:
        self._data = bytes(data)
        if not 0 <= offset <= len(self._data):
            msg = f"Start offset {offset} outside buffer of {len(self._data)} bytes"
            raise MalformedInput(msg, offset=offset)
        self._offset = offset

    @property
    def offset(self) -> int:
        """Position of the next unread byte."""
        return self._offset

    @property
    def remaining(self) -> int:
        """Number of unread bytes."""
        return len(self._data) - self._offset

    def read(self, size: int, field: str) -> bytes:
        """Consume exactly *size* bytes.

        Args:
            size: Number of bytes to consume.
            field: Name of the field being read, used in error messages.

        Raises:
            MalformedInput: If fewer than *size* bytes remain.
        """
        if size > self.remaining:
            shortfall = size - self.remaining
            msg = (
                f"Unexpected end of buffer reading {field} at offset {self._offset}: "
                f"need {size} bytes, {shortfall} short"
            )
            raise MalformedInput(msg, offset=self._offset, shortfall=shortfall)
        chunk = self._data[self._offset : self._offset + size]
        self._offset += size
        return chunk

    def read_uint32(self, field: str) -> int:
        """Consume a big-endian unsigned 32-bit integer."""
        return struct.unpack(">I", self.read(4, field))[0]

    def read_uint64(self, field: str) -> int:
        """Consume a big-endian unsigned 64-bit integer."""
        return struct.unpack(">Q", self.read(8, field))[0]
