"""JPEG marker-segment scrubber.

Walks the marker segments that precede the entropy-coded scan data and drops
every APP1 segment (the conventional EXIF/XMP carrier). All other segments
and the scan data are copied byte-for-byte.
"""

import logging

from mediascrub.sanitize.buffer import ByteCursor
from mediascrub.sanitize.outcome import FORMAT_JPEG, StripOutcome

logger = logging.getLogger(__name__)

SOI = b"\xff\xd8"
APP1 = 0xFFE1

# Marker (2 bytes) + length field (2 bytes, counts itself)
_MARKER_SIZE = 2
_MIN_SEGMENT_LENGTH = 2


def is_jpeg(cursor: ByteCursor) -> bool:
    """Check for the Start-Of-Image marker."""
    return cursor.startswith(SOI)


def strip_jpeg(cursor: ByteCursor) -> StripOutcome:
    """Remove APP1 segments from a JPEG buffer.
    
    Args:
        cursor: Cursor over a buffer starting with the SOI marker
        
    Returns:
        Sanitized outcome, or an unchanged outcome if any segment header or
        body runs past the end of the buffer
    """
    if not is_jpeg(cursor):
        return StripOutcome.unchanged(FORMAT_JPEG, "missing SOI marker")
    
    output = bytearray(SOI)
    offset = len(SOI)
    removed = 0
    
    while offset < len(cursor):
        marker = cursor.read_u16_be(offset)
        if marker is None:
            return StripOutcome.unchanged(
                FORMAT_JPEG, f"truncated marker at offset {offset}"
            )
        
        # Not a marker any more: entropy-coded data follows
        if marker & 0xFF00 != 0xFF00:
            break
        
        length = cursor.read_u16_be(offset + _MARKER_SIZE)
        if length is None:
            return StripOutcome.unchanged(
                FORMAT_JPEG, f"truncated length for marker {marker:04X} at offset {offset}"
            )
        if length < _MIN_SEGMENT_LENGTH:
            return StripOutcome.unchanged(
                FORMAT_JPEG, f"invalid length {length} for marker {marker:04X} at offset {offset}"
            )
        
        segment_size = _MARKER_SIZE + length
        if not cursor.in_bounds(offset, segment_size):
            return StripOutcome.unchanged(
                FORMAT_JPEG,
                f"segment {marker:04X} at offset {offset} overruns buffer "
                f"({segment_size} bytes, {len(cursor) - offset} available)"
            )
        
        if marker == APP1:
            logger.debug(f"Dropping APP1 segment at offset {offset} ({segment_size} bytes)")
            removed += 1
        else:
            output += cursor.read_bytes(offset, segment_size)
        
        offset += segment_size
    
    output += cursor.remainder(offset)
    return StripOutcome.sanitized(FORMAT_JPEG, bytes(output), removed=removed)
