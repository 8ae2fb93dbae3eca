"""Format dispatch and fail-open entry point for metadata stripping."""

import logging
from typing import Optional

from mediascrub.sanitize.buffer import ByteCursor
from mediascrub.sanitize.jpeg import is_jpeg, strip_jpeg
from mediascrub.sanitize.outcome import UNRECOGNIZED, StripOutcome
from mediascrub.sanitize.png import is_png, strip_png

logger = logging.getLogger(__name__)

# 0 disables the size guard
DEFAULT_MAX_BYTES = 0


def sanitize(data: bytes, max_bytes: Optional[int] = DEFAULT_MAX_BYTES) -> StripOutcome:
    """Detect the container format by magic bytes and scrub it.
    
    The declared MIME type plays no part here; only the leading bytes decide
    which scrubber runs.
    
    Args:
        data: Raw file bytes
        max_bytes: Inputs larger than this are left alone (None or 0 disables)
        
    Returns:
        StripOutcome describing what happened
    """
    if max_bytes and len(data) > max_bytes:
        return StripOutcome.unchanged(
            None, f"payload of {len(data)} bytes exceeds limit of {max_bytes}"
        )
    
    cursor = ByteCursor(data)
    
    if is_jpeg(cursor):
        return strip_jpeg(cursor)
    if is_png(cursor):
        return strip_png(cursor)
    
    return StripOutcome.unchanged(None, UNRECOGNIZED)


def strip_metadata(
    data: bytes,
    mime_type: Optional[str] = None,
    max_bytes: Optional[int] = DEFAULT_MAX_BYTES
) -> bytes:
    """Return ``data`` with EXIF and ancillary metadata removed.
    
    Never raises for malformed input: if the buffer cannot be parsed the
    original bytes are returned unchanged. Unsupported formats pass through
    untouched.
    
    Args:
        data: Raw file bytes
        mime_type: Declared MIME type (advisory, only used for logging)
        max_bytes: Size limit above which stripping is skipped
        
    Returns:
        Sanitized bytes, or ``data`` itself if nothing could be removed
        
    Examples:
        >>> clean = strip_metadata(open("photo.jpg", "rb").read(), "image/jpeg")
    """
    try:
        outcome = sanitize(data, max_bytes=max_bytes)
    except Exception as e:
        logger.warning(f"Metadata stripping failed for {mime_type or 'unknown type'}: {e}")
        return data
    
    if outcome.changed:
        logger.debug(
            f"Stripped {outcome.removed} metadata block(s) from {outcome.format}: "
            f"{len(data)} -> {len(outcome.data)} bytes"
        )
    elif outcome.format is not None:
        logger.warning(
            f"Could not parse {outcome.format} payload ({outcome.reason}); "
            f"keeping original bytes"
        )
    elif outcome.reason != UNRECOGNIZED:
        logger.warning(f"Skipping metadata stripping: {outcome.reason}")
    else:
        logger.debug(f"No stripper for {mime_type or 'unknown type'}; passing through")
    
    return outcome.resolve(data)
