"""Metadata stripping for JPEG and PNG payloads."""

from mediascrub.sanitize.buffer import ByteCursor
from mediascrub.sanitize.outcome import StripOutcome, FORMAT_JPEG, FORMAT_PNG
from mediascrub.sanitize.jpeg import strip_jpeg, is_jpeg
from mediascrub.sanitize.png import strip_png, is_png, ESSENTIAL_CHUNKS
from mediascrub.sanitize.stripper import sanitize, strip_metadata, DEFAULT_MAX_BYTES

__all__ = [
    "ByteCursor",
    "StripOutcome",
    "FORMAT_JPEG",
    "FORMAT_PNG",
    "strip_jpeg",
    "is_jpeg",
    "strip_png",
    "is_png",
    "ESSENTIAL_CHUNKS",
    "sanitize",
    "strip_metadata",
    "DEFAULT_MAX_BYTES",
]
