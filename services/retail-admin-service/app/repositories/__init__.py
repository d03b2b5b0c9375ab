"""
Storage backends for direct table and queue access.

- StorageBackend: abstract interface
- RedisStorageBackend: Redis hashes and lists
- InMemoryStorageBackend: process-local dictionaries
"""

from .memory_backend import InMemoryStorageBackend
from .redis_backend import RedisStorageBackend, create_redis_backend
from .storage_backend import Record, StorageBackend

__all__ = [
    "InMemoryStorageBackend",
    "Record",
    "RedisStorageBackend",
    "StorageBackend",
    "create_redis_backend",
]
