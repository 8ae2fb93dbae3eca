"""Storage key derivation.

Replaces the filename of an upload key with ``<time>-<digest>.<ext>``, where
``time`` is the millisecond timestamp in base 36 (so keys sort by upload
time) and ``digest`` is a 16-character SHA-256 prefix over the name, the
timestamp and a random token. The digest is a uniqueness aid, not a security
boundary.
"""

import hashlib
import logging
import time
import uuid
from typing import Callable, Optional

from mediascrub.exceptions import KeyDerivationError

logger = logging.getLogger(__name__)

Clock = Callable[[], int]
RandomSource = Callable[[], str]

CONTENT_TOKEN_LENGTH = 16
KEY_SEPARATOR = "/"

_BASE36_DIGITS = "0123456789abcdefghijklmnopqrstuvwxyz"


def system_clock() -> int:
    """Milliseconds since the epoch from the wall clock."""
    return int(time.time() * 1000)


def system_random() -> str:
    """Short random token for the digest seed."""
    return uuid.uuid4().hex[:8]


def to_base36(value: int) -> str:
    """Render a non-negative integer in lowercase base 36.
    
    Examples:
        >>> to_base36(0)
        '0'
        >>> to_base36(1700000000000)
        'loyw3v28'
    """
    if value < 0:
        raise ValueError(f"Cannot encode negative value in base 36: {value}")
    if value == 0:
        return "0"
    
    digits = []
    while value:
        value, remainder = divmod(value, 36)
        digits.append(_BASE36_DIGITS[remainder])
    return "".join(reversed(digits))


def file_extension(file_name: str) -> str:
    """Lowercased text after the last '.', or '' when there is none."""
    if "." not in file_name:
        return ""
    return file_name.rsplit(".", 1)[1].lower()


def derive_key(
    file_name: str,
    clock: Optional[Clock] = None,
    random_source: Optional[RandomSource] = None
) -> str:
    """Derive a time-ordered, collision-resistant filename.
    
    The result always has the form ``<timeToken>-<contentToken>.<ext>``.
    When the name has no extension the trailing '.' is still emitted, so
    every derived name has the same shape.
    
    Args:
        file_name: Original filename (final path segment)
        clock: Returns milliseconds since the epoch (wall clock by default)
        random_source: Returns a random token (uuid4-based by default)
        
    Returns:
        Derived filename
        
    Raises:
        KeyDerivationError: If the clock, randomness or digest step fails
        
    Examples:
        >>> derive_key("photo.JPG", clock=lambda: 1700000000000, random_source=lambda: "abc")
        'loyw3v28-4089abd1f0d09b72.jpg'
    """
    clock = clock or system_clock
    random_source = random_source or system_random
    
    try:
        timestamp = int(clock())
        random_token = str(random_source())
        seed = f"{file_name}-{timestamp}-{random_token}"
        digest = hashlib.sha256(seed.encode("utf-8")).hexdigest()
        time_token = to_base36(timestamp)
    except Exception as e:
        raise KeyDerivationError(f"Failed to derive key for {file_name!r}: {e}") from e
    
    content_token = digest[:CONTENT_TOKEN_LENGTH]
    extension = file_extension(file_name)
    
    return f"{time_token}-{content_token}.{extension}"


def derive_storage_key(
    original_key: str,
    clock: Optional[Clock] = None,
    random_source: Optional[RandomSource] = None
) -> str:
    """Replace the final segment of a storage key with a derived filename.
    
    The directory prefix is kept exactly as given (same segments, same order).
    
    Args:
        original_key: Key such as ``media/<identity>/photo.jpg``
        clock: See ``derive_key``
        random_source: See ``derive_key``
        
    Returns:
        New key with the same prefix
    """
    parts = original_key.split(KEY_SEPARATOR)
    file_name = parts.pop()
    derived = derive_key(file_name, clock=clock, random_source=random_source)
    new_key = KEY_SEPARATOR.join(parts + [derived])
    
    logger.debug(f"Derived key {new_key} from {original_key}")
    return new_key
