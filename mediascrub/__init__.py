"""mediascrub - metadata scrubbing and storage keys for image uploads.

Strips EXIF and ancillary metadata from JPEG and PNG payloads before they
are stored, and derives collision-resistant, time-ordered storage keys.
"""

from mediascrub._version import __version__, __version_info__
from mediascrub.config import ConfigManager
from mediascrub.processing import FileProcessor, ProcessedRecord, UploadFile, process_file
from mediascrub.sanitize import strip_metadata
from mediascrub.keys import derive_key, derive_storage_key

__license__ = "MIT"
__all__ = [
    "__version__",
    "__version_info__",
    "ConfigManager",
    "FileProcessor",
    "ProcessedRecord",
    "UploadFile",
    "process_file",
    "strip_metadata",
    "derive_key",
    "derive_storage_key",
]
