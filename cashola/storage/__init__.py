"""Storage abstraction package for cashola."""

from .base import StorageBackend
from .file_backend import FileStorageBackend
from .memory_backend import MemoryStorageBackend
from .serializer import JSONSerializer, Serializer

__all__ = ["StorageBackend", "FileStorageBackend", "MemoryStorageBackend", "JSONSerializer", "Serializer"]
