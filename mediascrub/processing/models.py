"""Data models for files moving through the upload pipeline."""

import mimetypes
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Dict, Optional

DEFAULT_MIME_TYPE = "application/octet-stream"


@dataclass(frozen=True)
class UploadFile:
    """An uploaded file held in memory.
    
    Instances are never modified; sanitizing produces a new instance via
    ``with_data``.
    
    Attributes:
        name: Original filename or logical path
        data: File contents
        mime_type: Declared MIME type
        last_modified: Last-modified time in milliseconds since the epoch
    """
    name: str
    data: bytes
    mime_type: str = DEFAULT_MIME_TYPE
    last_modified: Optional[int] = None
    
    @property
    def size(self) -> int:
        return len(self.data)
    
    def with_data(self, data: bytes) -> "UploadFile":
        """Return a copy carrying ``data`` with the same name, type and timestamp."""
        return replace(self, data=data)
    
    @classmethod
    def from_path(cls, path: str, mime_type: Optional[str] = None) -> "UploadFile":
        """Read a local file into an UploadFile.
        
        Args:
            path: Path to the file
            mime_type: Declared type (guessed from the extension if omitted)
            
        Returns:
            UploadFile instance
        """
        file_path = Path(path).expanduser()
        if mime_type is None:
            mime_type = mimetypes.guess_type(file_path.name)[0] or DEFAULT_MIME_TYPE
        
        return cls(
            name=file_path.name,
            data=file_path.read_bytes(),
            mime_type=mime_type,
            last_modified=int(file_path.stat().st_mtime * 1000),
        )
    
    def __repr__(self) -> str:
        return f"UploadFile({self.name!r}, {self.mime_type}, {self.size} bytes)"


@dataclass
class ProcessedRecord:
    """Output of the pipeline, ready for the object store.
    
    Attributes:
        file: Sanitized file (or the original when stripping was skipped)
        key: Derived storage key
        metadata: Object metadata; always carries ``userId``
    """
    file: UploadFile
    key: str
    metadata: Dict[str, str] = field(default_factory=dict)
