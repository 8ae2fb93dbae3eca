"""Factory for creating object store instances."""

import logging
from typing import Dict, Type

from mediascrub.config import ConfigManager
from mediascrub.exceptions import StorageError
from mediascrub.storage.base import ObjectStore
from mediascrub.storage.remote import HttpObjectStore
from mediascrub.storage.local import LocalObjectStore

logger = logging.getLogger(__name__)


class ObjectStoreFactory:
    """Factory for creating object store instances by backend name."""
    
    # Registry of available store classes
    _backend_registry: Dict[str, Type[ObjectStore]] = {
        "local": LocalObjectStore,
        "http": HttpObjectStore,
    }
    
    @classmethod
    def create(cls, backend: str, **kwargs) -> ObjectStore:
        """Create an object store instance.
        
        Args:
            backend: Backend name ("local", "http", or a registered name)
            **kwargs: Backend-specific constructor arguments
            
        Returns:
            ObjectStore instance
            
        Raises:
            StorageError: If the backend is unknown or cannot be created
            
        Examples:
            >>> store = ObjectStoreFactory.create("local", root_dir="/tmp/uploads")
        """
        backend_lower = backend.lower().strip()
        
        if backend_lower not in cls._backend_registry:
            available = ", ".join(cls._backend_registry.keys())
            raise StorageError(
                f"Unsupported storage backend: {backend}. "
                f"Available backends: {available}"
            )
        
        store_class = cls._backend_registry[backend_lower]
        logger.info(f"Creating {store_class.__name__} for backend: {backend}")
        
        try:
            return store_class(**kwargs)
        except StorageError:
            raise
        except Exception as e:
            raise StorageError(
                f"Failed to create storage backend {backend}: {e}"
            ) from e
    
    @classmethod
    def from_config(cls, config: ConfigManager) -> ObjectStore:
        """Create the store named by ``storage.backend``.
        
        Backend arguments are read from ``storage.<backend>``.
        """
        backend = config.get("storage.backend", "local")
        options = config.get(f"storage.{backend}", {}) or {}
        return cls.create(backend, **options)
    
    @classmethod
    def register_backend(cls, name: str, store_class: Type[ObjectStore]) -> None:
        """Register a new store class with the factory.
        
        Args:
            name: Backend name identifier
            store_class: ObjectStore subclass to register
        """
        if not issubclass(store_class, ObjectStore):
            raise StorageError(
                f"Store class must be a subclass of ObjectStore: {store_class}"
            )
        
        cls._backend_registry[name.lower()] = store_class
        logger.debug(f"Registered storage backend: {name} -> {store_class.__name__}")
    
    @classmethod
    def list_backends(cls) -> list:
        """List all available backend names."""
        return list(cls._backend_registry.keys())
