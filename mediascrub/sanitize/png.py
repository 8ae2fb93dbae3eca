"""PNG chunk scrubber.

Keeps only the chunks needed to rebuild the raster (IHDR, PLTE, IDAT, IEND)
and drops every ancillary chunk: text, timestamps, eXIf, colour profiles and
the rest. Kept chunks are copied verbatim, so their CRCs stay valid.
"""

import logging

from mediascrub.sanitize.buffer import ByteCursor
from mediascrub.sanitize.outcome import FORMAT_PNG, StripOutcome

logger = logging.getLogger(__name__)

PNG_MAGIC = 0x89504E47
PNG_EOL_MARKER = 0x0D0A1A0A
SIGNATURE_SIZE = 8

ESSENTIAL_CHUNKS = frozenset({b"IHDR", b"IDAT", b"PLTE", b"IEND"})

# Length (4) + type (4) + CRC (4)
_CHUNK_OVERHEAD = 12


def is_png(cursor: ByteCursor) -> bool:
    """Check for the 8-byte PNG signature."""
    return (
        cursor.read_u32_be(0) == PNG_MAGIC
        and cursor.read_u32_be(4) == PNG_EOL_MARKER
    )


def strip_png(cursor: ByteCursor) -> StripOutcome:
    """Drop every chunk outside the essential allow-list.
    
    Args:
        cursor: Cursor over a buffer starting with the PNG signature
        
    Returns:
        Sanitized outcome, or an unchanged outcome if a chunk header or body
        runs past the end of the buffer
    """
    if not is_png(cursor):
        return StripOutcome.unchanged(FORMAT_PNG, "missing PNG signature")
    
    output = bytearray(cursor.read_bytes(0, SIGNATURE_SIZE))
    offset = SIGNATURE_SIZE
    removed = 0
    
    while offset < len(cursor):
        length = cursor.read_u32_be(offset)
        chunk_type = cursor.read_bytes(offset + 4, 4)
        if length is None or chunk_type is None:
            return StripOutcome.unchanged(
                FORMAT_PNG, f"truncated chunk header at offset {offset}"
            )
        
        chunk_size = _CHUNK_OVERHEAD + length
        if not cursor.in_bounds(offset, chunk_size):
            return StripOutcome.unchanged(
                FORMAT_PNG,
                f"chunk {chunk_type!r} at offset {offset} overruns buffer "
                f"({chunk_size} bytes, {len(cursor) - offset} available)"
            )
        
        if chunk_type in ESSENTIAL_CHUNKS:
            output += cursor.read_bytes(offset, chunk_size)
        else:
            logger.debug(f"Dropping {chunk_type!r} chunk at offset {offset} ({chunk_size} bytes)")
            removed += 1
        
        offset += chunk_size
    
    return StripOutcome.sanitized(FORMAT_PNG, bytes(output), removed=removed)
