"""Object store backends for processed uploads."""

from mediascrub.storage.base import ObjectStore, StoredObject
from mediascrub.storage.local import LocalObjectStore
from mediascrub.storage.remote import HttpObjectStore
from mediascrub.storage.factory import ObjectStoreFactory

__all__ = [
    "ObjectStore",
    "StoredObject",
    "LocalObjectStore",
    "HttpObjectStore",
    "ObjectStoreFactory",
]
