"""Filesystem-backed object store."""

import json
import logging
from pathlib import Path, PurePosixPath
from typing import Dict, Optional

from mediascrub.exceptions import StorageError, StorageNotFoundError
from mediascrub.storage.base import ObjectStore, StoredObject

logger = logging.getLogger(__name__)

METADATA_SUFFIX = ".meta.json"


class LocalObjectStore(ObjectStore):
    """Stores objects as files under a root directory.
    
    Each object is written to ``root_dir/<key>``; its metadata and content
    type go to a JSON sidecar next to it.
    
    Attributes:
        root_dir: Base directory for stored objects
    """
    
    def __init__(self, root_dir: str) -> None:
        """Initialize local object store.
        
        Args:
            root_dir: Base directory for stored objects (created if missing)
        """
        self.root_dir = Path(root_dir).expanduser()
        self.root_dir.mkdir(parents=True, exist_ok=True)
        super().__init__()
        logger.info(f"Local object store root: {self.root_dir}")
    
    def _object_path(self, key: str) -> Path:
        """Map a key to a file path, refusing keys that escape the root."""
        key_path = PurePosixPath(key)
        if not key or key.endswith("/"):
            raise StorageError(f"Invalid object key: {key!r}")
        if key_path.is_absolute() or ".." in key_path.parts:
            raise StorageError(f"Object key escapes store root: {key!r}")
        return self.root_dir.joinpath(*key_path.parts)
    
    @staticmethod
    def _metadata_path(object_path: Path) -> Path:
        return object_path.with_name(object_path.name + METADATA_SUFFIX)
    
    def put(
        self,
        key: str,
        data: bytes,
        metadata: Optional[Dict[str, str]] = None,
        content_type: Optional[str] = None
    ) -> StoredObject:
        object_path = self._object_path(key)
        sidecar = {
            "metadata": dict(metadata or {}),
            "content_type": content_type,
        }
        
        try:
            object_path.parent.mkdir(parents=True, exist_ok=True)
            object_path.write_bytes(data)
            with open(self._metadata_path(object_path), "w") as f:
                json.dump(sidecar, f, indent=2)
        except OSError as e:
            raise StorageError(f"Failed to write object {key}: {e}") from e
        
        logger.debug(f"Stored {key} ({len(data)} bytes) at {object_path}")
        
        return StoredObject(
            key=key,
            data=data,
            metadata=sidecar["metadata"],
            content_type=content_type,
            location=str(object_path),
        )
    
    def get(self, key: str) -> StoredObject:
        object_path = self._object_path(key)
        if not object_path.is_file():
            raise StorageNotFoundError(f"Object not found: {key}", status_code=404)
        
        sidecar = {}
        metadata_path = self._metadata_path(object_path)
        try:
            data = object_path.read_bytes()
            if metadata_path.exists():
                with open(metadata_path, "r") as f:
                    sidecar = json.load(f)
        except (OSError, ValueError) as e:
            raise StorageError(f"Failed to read object {key}: {e}") from e
        
        return StoredObject(
            key=key,
            data=data,
            metadata=sidecar.get("metadata", {}),
            content_type=sidecar.get("content_type"),
            location=str(object_path),
        )
    
    def exists(self, key: str) -> bool:
        return self._object_path(key).is_file()
    
    def __repr__(self) -> str:
        return f"<LocalObjectStore {self.root_dir}>"
