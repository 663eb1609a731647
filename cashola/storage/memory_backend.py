"""Simple memory-backed storage backend

This backend keeps stored bytes in a dict keyed by location. Nothing
survives the process; it is meant for tests and for callers that want
cashola semantics without touching the disk.
"""
from __future__ import annotations
from pathlib import Path
from threading import RLock
from typing import Dict, Optional

from cashola.errors import NotFoundError
from .base import StorageBackend
from .serializer import Serializer


class MemoryStorageBackend(StorageBackend):
    def __init__(self, serializer: Optional[Serializer] = None) -> None:
        super().__init__(serializer)
        self._lock = RLock()
        self._store: Dict[Path, bytes] = {}

    def write_bytes(self, location: Path, data: bytes) -> None:
        with self._lock:
            self._store[Path(location)] = bytes(data)

    def read_bytes(self, location: Path) -> bytes:
        with self._lock:
            try:
                return self._store[Path(location)]
            except KeyError:
                raise NotFoundError(f"Nothing stored at '{location}'.") from None

    def exists(self, location: Path) -> bool:
        with self._lock:
            return Path(location) in self._store

    def delete(self, location: Path) -> None:
        with self._lock:
            if self._store.pop(Path(location), None) is None:
                raise NotFoundError(f"Nothing stored at '{location}'.")

    def delete_all(self, directory: Path) -> None:
        root = Path(directory)
        with self._lock:
            for p in [p for p in self._store if p.is_relative_to(root)]:
                del self._store[p]
