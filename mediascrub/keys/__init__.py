"""Storage key derivation."""

from mediascrub.keys.deriver import (
    derive_key,
    derive_storage_key,
    file_extension,
    to_base36,
    system_clock,
    system_random,
)

__all__ = [
    "derive_key",
    "derive_storage_key",
    "file_extension",
    "to_base36",
    "system_clock",
    "system_random",
]
