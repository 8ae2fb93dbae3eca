"""Result type shared by the container-format scrubbers."""

from dataclasses import dataclass
from typing import Optional

FORMAT_JPEG = "jpeg"
FORMAT_PNG = "png"
UNRECOGNIZED = "unrecognized format"


@dataclass(frozen=True)
class StripOutcome:
    """Result of scrubbing one buffer.
    
    A scrubber either produces a sanitized buffer or reports that the input
    must be kept as-is. Callers collapse both cases to plain bytes with
    ``resolve``.
    
    Attributes:
        format: Detected container format ("jpeg", "png" or None)
        data: Sanitized bytes (None when unchanged)
        changed: Whether a sanitized buffer was produced
        reason: Why the input was left alone (unchanged outcomes only)
        removed: Number of segments/chunks dropped
    """
    format: Optional[str]
    data: Optional[bytes] = None
    changed: bool = False
    reason: Optional[str] = None
    removed: int = 0
    
    @classmethod
    def sanitized(cls, format: str, data: bytes, removed: int = 0) -> "StripOutcome":
        return cls(format=format, data=data, changed=True, removed=removed)
    
    @classmethod
    def unchanged(cls, format: Optional[str], reason: str) -> "StripOutcome":
        return cls(format=format, changed=False, reason=reason)
    
    def resolve(self, original: bytes) -> bytes:
        """Return the sanitized bytes, or ``original`` if nothing was produced."""
        if self.changed and self.data is not None:
            return self.data
        return original
