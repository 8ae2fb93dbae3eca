"""Upload orchestration: process each file and hand it to the object store."""

from dataclasses import asdict, dataclass, field
from fnmatch import fnmatch
from typing import Any, Dict, List, Optional, Sequence
import logging
import time

from ..config import ConfigError, ConfigManager
from ..exceptions import ProcessingError, StorageError, UploadRejectedError
from ..identity import Identity
from ..processing import FileProcessor, UploadFile
from ..storage import ObjectStore, ObjectStoreFactory

logger = logging.getLogger(__name__)


@dataclass
class UploadResult:
    """Result of uploading a single file.

    Attributes:
        filename: Original filename
        success: Whether the file reached the store (or would have, in dry run)
        key: Derived storage key
        original_size: Bytes received
        stored_size: Bytes written after stripping
        stripped: Whether metadata was removed
        location: Where the store put the object
        processing_time: Time taken (seconds)
        error: Error message if failed
    """
    filename: str
    success: bool = False
    key: Optional[str] = None
    original_size: int = 0
    stored_size: int = 0
    stripped: bool = False
    location: Optional[str] = None
    processing_time: float = 0.0
    error: Optional[str] = None


@dataclass
class UploadBatchResult:
    """Statistics for one upload batch.

    Attributes:
        total_files: Number of files in the batch
        uploaded: Number stored successfully
        rejected: Number refused because of their type
        errors: Number that failed during processing or storage
        total_time: Total time (seconds)
        results: Per-file results
    """
    total_files: int
    uploaded: int = 0
    rejected: int = 0
    errors: int = 0
    total_time: float = 0.0
    results: List[UploadResult] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


class UploadService:
    """Runs a batch of files through the pipeline and into the store.

    Each file is checked against the accepted types, keyed under the
    identity's path prefix, processed, and written with the user id as
    metadata. A failure affects only its own file and is never retried here.
    """

    def __init__(
        self,
        config: ConfigManager,
        store: Optional[ObjectStore] = None,
        processor: Optional[FileProcessor] = None,
        dry_run: bool = False
    ) -> None:
        """Initialize upload service.

        Args:
            config: Configuration manager
            store: Object store (created from config if not provided)
            processor: File processor (created from config if not provided)
            dry_run: If True, process files but don't write them

        Raises:
            ConfigError: If upload.path_prefix uses unknown fields
        """
        self.config = config
        self.dry_run = dry_run

        self.path_prefix = config.get("upload.path_prefix", "media/{identity_id}/")
        self._check_path_prefix(self.path_prefix)
        self.max_file_count = int(config.get("upload.max_file_count", 10))
        self.accepted_types = list(config.get("upload.accepted_types", ["image/*"]))

        self.processor = processor or FileProcessor.from_config(config)

        if store is not None:
            self.store = store
        elif dry_run:
            self.store = None
        else:
            self.store = ObjectStoreFactory.from_config(config)

        logger.info(
            f"UploadService initialized: max_files={self.max_file_count}, "
            f"accepted={self.accepted_types}, dry_run={dry_run}"
        )

    @staticmethod
    def _check_path_prefix(template: str) -> None:
        """Reject prefix templates with fields other than ``{identity_id}``.

        Raises:
            ConfigError: If the template cannot be formatted
        """
        try:
            str(template).format(identity_id="")
        except (KeyError, IndexError, ValueError, AttributeError) as e:
            raise ConfigError(
                f"Invalid upload.path_prefix {template!r}: "
                f"only {{identity_id}} may be used ({e!r})"
            ) from e

    def is_accepted(self, mime_type: str) -> bool:
        """Check a MIME type against the accepted patterns (e.g. ``image/*``)."""
        return any(fnmatch(mime_type or "", pattern) for pattern in self.accepted_types)

    def build_key(self, identity: Identity, filename: str) -> str:
        """Build the pre-derivation key ``<prefix><filename>`` for an identity."""
        prefix = self.path_prefix.format(identity_id=identity.identity_id)
        if prefix and not prefix.endswith("/"):
            prefix += "/"
        basename = filename.replace("\\", "/").rsplit("/", 1)[-1]
        return f"{prefix}{basename}"

    def upload(self, files: Sequence[UploadFile], identity: Identity) -> UploadBatchResult:
        """Upload a batch of files for one identity.

        Args:
            files: Files to upload
            identity: Authenticated uploader

        Returns:
            UploadBatchResult with per-file results

        Raises:
            UploadRejectedError: If the batch is larger than max_file_count
        """
        if self.max_file_count and len(files) > self.max_file_count:
            raise UploadRejectedError(
                f"Too many files: {len(files)} (maximum {self.max_file_count})"
            )

        start_time = time.time()
        batch = UploadBatchResult(total_files=len(files))

        for i, upload_file in enumerate(files, 1):
            logger.info(f"[{i}/{len(files)}] Uploading: {upload_file.name}")

            if not self.is_accepted(upload_file.mime_type):
                logger.warning(
                    f"Rejected {upload_file.name}: type {upload_file.mime_type} not accepted"
                )
                batch.rejected += 1
                batch.results.append(UploadResult(
                    filename=upload_file.name,
                    original_size=upload_file.size,
                    error=f"File type not accepted: {upload_file.mime_type}",
                ))
                continue

            result = self.upload_file(upload_file, identity)
            batch.results.append(result)

            if result.success:
                batch.uploaded += 1
            else:
                batch.errors += 1

        batch.total_time = time.time() - start_time

        logger.info(
            f"Upload batch complete: {batch.uploaded} uploaded, "
            f"{batch.rejected} rejected, {batch.errors} errors "
            f"(Total time: {batch.total_time:.2f}s)"
        )

        return batch

    def upload_file(self, upload_file: UploadFile, identity: Identity) -> UploadResult:
        """Process and store a single file.

        Args:
            upload_file: File to upload
            identity: Authenticated uploader

        Returns:
            UploadResult
        """
        start_time = time.time()
        result = UploadResult(filename=upload_file.name, original_size=upload_file.size)

        try:
            original_key = self.build_key(identity, upload_file.name)
            record = self.processor.process(upload_file, original_key, identity.username)

            result.key = record.key
            result.stored_size = record.file.size
            result.stripped = record.file.data != upload_file.data

            if self.dry_run:
                logger.info(f"[DRY RUN] Would store {record.key} ({record.file.size} bytes)")
            else:
                stored = self.store.put(
                    record.key,
                    record.file.data,
                    metadata=record.metadata,
                    content_type=record.file.mime_type,
                )
                result.location = stored.location
                logger.info(f"Upload success: {upload_file.name} -> {record.key}")

            result.success = True

        except ProcessingError as e:
            logger.error(f"Processing failed for {upload_file.name}: {e}")
            result.error = str(e)
        except StorageError as e:
            logger.error(f"Upload error for {upload_file.name}: {e}")
            result.error = str(e)

        result.processing_time = time.time() - start_time
        return result
