"""Abstract base class for object stores."""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Dict, Optional
import logging

logger = logging.getLogger(__name__)


@dataclass
class StoredObject:
    """An object as held by a store.
    
    Attributes:
        key: Storage key
        data: Object bytes (None when only the write was acknowledged)
        metadata: User metadata stored alongside the object
        content_type: MIME type recorded for the object
        location: Backend-specific location (file path or URL)
    """
    key: str
    data: Optional[bytes] = None
    metadata: Dict[str, str] = field(default_factory=dict)
    content_type: Optional[str] = None
    location: Optional[str] = None
    
    @property
    def size(self) -> int:
        return len(self.data) if self.data is not None else 0


class ObjectStore(ABC):
    """Abstract base class for durable object stores.
    
    The pipeline only needs one thing from a store: accept a key, the bytes
    and a metadata mapping. Reads exist for tooling and tests.
    """
    
    def __init__(self) -> None:
        logger.info(f"Initialized {self.__class__.__name__}")
    
    @abstractmethod
    def put(
        self,
        key: str,
        data: bytes,
        metadata: Optional[Dict[str, str]] = None,
        content_type: Optional[str] = None
    ) -> StoredObject:
        """Write an object.
        
        Args:
            key: Storage key
            data: Object bytes
            metadata: User metadata to store with the object
            content_type: MIME type of the object
            
        Returns:
            StoredObject describing the write
            
        Raises:
            StorageError: If the write fails
        """
        pass
    
    @abstractmethod
    def get(self, key: str) -> StoredObject:
        """Read an object.
        
        Raises:
            StorageNotFoundError: If no object exists under ``key``
        """
        pass
    
    @abstractmethod
    def exists(self, key: str) -> bool:
        """Check whether an object exists under ``key``."""
        pass
