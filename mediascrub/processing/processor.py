"""Pipeline entry point: strip metadata, derive a key, build the record."""

import logging
from typing import Any, Iterable, Optional

from mediascrub.config import ConfigManager
from mediascrub.exceptions import ProcessingError
from mediascrub.keys import derive_storage_key
from mediascrub.keys.deriver import Clock, RandomSource
from mediascrub.processing.models import ProcessedRecord, UploadFile
from mediascrub.sanitize import DEFAULT_MAX_BYTES, strip_metadata

logger = logging.getLogger(__name__)

DEFAULT_STRIP_MIME_TYPES = ("image/jpeg", "image/png")
USER_ID_METADATA_KEY = "userId"


class FileProcessor:
    """Turns a raw upload into a ``ProcessedRecord``.
    
    Metadata stripping is best-effort and isolated: whatever happens inside
    it, the upload continues with the original bytes. Key derivation is not
    isolated; its failures surface as ``ProcessingError``.
    
    Attributes:
        strip_mime_types: Declared MIME types that get stripped
        max_bytes: Size limit passed to the stripper
        clock: Injected millisecond clock for key derivation
        random_source: Injected random token source for key derivation
    """
    
    def __init__(
        self,
        strip_mime_types: Iterable[str] = DEFAULT_STRIP_MIME_TYPES,
        max_bytes: Optional[int] = DEFAULT_MAX_BYTES,
        clock: Optional[Clock] = None,
        random_source: Optional[RandomSource] = None
    ) -> None:
        self.strip_mime_types = frozenset(strip_mime_types)
        self.max_bytes = max_bytes
        self.clock = clock
        self.random_source = random_source
    
    @classmethod
    def from_config(cls, config: ConfigManager, **kwargs: Any) -> "FileProcessor":
        """Build a processor from the ``sanitize`` config section.
        
        Args:
            config: Configuration manager
            **kwargs: Overrides (e.g. ``clock`` for tests)
            
        Returns:
            FileProcessor instance
        """
        return cls(
            strip_mime_types=config.get("sanitize.strip_mime_types", DEFAULT_STRIP_MIME_TYPES),
            max_bytes=config.get("sanitize.max_bytes", DEFAULT_MAX_BYTES),
            **kwargs
        )
    
    def strip_file(self, raw_file: UploadFile) -> UploadFile:
        """Strip metadata from a file, keeping its name, type and timestamp."""
        data = strip_metadata(raw_file.data, raw_file.mime_type, max_bytes=self.max_bytes)
        if data is raw_file.data:
            return raw_file
        return raw_file.with_data(data)
    
    def process(
        self,
        raw_file: UploadFile,
        original_key: str,
        user_id: Optional[str] = None
    ) -> ProcessedRecord:
        """Sanitize a file and compute its storage key.
        
        Args:
            raw_file: The uploaded file
            original_key: Key the uploader would have used (prefix + filename)
            user_id: Authenticated user id, stored as object metadata
            
        Returns:
            ProcessedRecord for the object store
            
        Raises:
            ProcessingError: If the storage key cannot be derived
        """
        processed_file = raw_file
        
        if raw_file.mime_type in self.strip_mime_types:
            try:
                processed_file = self.strip_file(raw_file)
            except Exception as e:
                logger.warning(f"Error removing metadata from {raw_file.name}: {e}")
                processed_file = raw_file
        
        try:
            key = derive_storage_key(
                original_key,
                clock=self.clock,
                random_source=self.random_source
            )
        except Exception as e:
            logger.error(f"Error processing file {raw_file.name}: {e}")
            if isinstance(e, ProcessingError):
                raise
            raise ProcessingError(f"Failed to process {raw_file.name}: {e}") from e
        
        return ProcessedRecord(
            file=processed_file,
            key=key,
            metadata={USER_ID_METADATA_KEY: user_id or ""},
        )


_default_processor = FileProcessor()


def process_file(
    raw_file: UploadFile,
    original_key: str,
    user_id: Optional[str] = None
) -> ProcessedRecord:
    """Process a file with the default processor settings.
    
    Examples:
        >>> record = process_file(UploadFile.from_path("photo.jpg"), "media/u1/photo.jpg", "alice")
        >>> record.key
        'media/u1/...jpg'
    """
    return _default_processor.process(raw_file, original_key, user_id)
