"""Storage abstraction package for scripthelp.

Backends (`StorageBackend` and its implementations) are re-exported here;
the key-value and settings stores are imported from their modules.
"""

from .base import StorageBackend
from .file_backend import FileStorageBackend
from .memory_backend import MemoryStorage

__all__ = ["StorageBackend", "FileStorageBackend", "MemoryStorage"]
