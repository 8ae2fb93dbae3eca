"""Bounds-checked readers over an immutable byte buffer."""

import struct
from typing import Optional


class ByteCursor:
    """Read-only view over a byte buffer with checked big-endian field reads.

    Every reader returns None instead of raising when the requested range
    would cross the end of the buffer, so callers can treat a truncated or
    corrupt length field as ordinary control flow.

    Attributes:
        data: The underlying buffer (never modified)
    """

    def __init__(self, data: bytes) -> None:
        self.data = memoryview(bytes(data)).toreadonly()

    def __len__(self) -> int:
        return len(self.data)

    def in_bounds(self, offset: int, size: int) -> bool:
        """Check that ``size`` bytes starting at ``offset`` lie inside the buffer."""
        return offset >= 0 and size >= 0 and offset + size <= len(self.data)

    def read_u16_be(self, offset: int) -> Optional[int]:
        """Read an unsigned 16-bit big-endian integer at ``offset``."""
        if not self.in_bounds(offset, 2):
            return None
        return struct.unpack_from(">H", self.data, offset)[0]

    def read_u32_be(self, offset: int) -> Optional[int]:
        """Read an unsigned 32-bit big-endian integer at ``offset``."""
        if not self.in_bounds(offset, 4):
            return None
        return struct.unpack_from(">I", self.data, offset)[0]

    def read_bytes(self, offset: int, size: int) -> Optional[bytes]:
        """Copy ``size`` bytes starting at ``offset``."""
        if not self.in_bounds(offset, size):
            return None
        return self.data[offset:offset + size].tobytes()

    def remainder(self, offset: int) -> bytes:
        """Copy everything from ``offset`` to the end of the buffer."""
        if offset >= len(self.data):
            return b""
        return self.data[offset:].tobytes()

    def startswith(self, prefix: bytes) -> bool:
        return self.read_bytes(0, len(prefix)) == prefix
