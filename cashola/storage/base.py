"""Storage backend interface definitions.

Defines the StorageBackend abstract class used by cashola to persist and
retrieve remembered values. A backend addresses each value by its storage
location (a `Path`), stores bytes, and leaves encoding to a `Serializer`.

Every blocking method has an `*_async` twin that runs it on a worker thread,
so event-loop callers never block on disk I/O.
"""
from __future__ import annotations
import asyncio
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Optional

from cashola.errors import DecodeError
from .serializer import JSONSerializer, Serializer


class StorageBackend(ABC):
    """Abstract storage backend.

    Implementations must be thread-safe: the async variants run the
    blocking methods on worker threads.
    """

    def __init__(self, serializer: Optional[Serializer] = None) -> None:
        self.serializer = serializer or JSONSerializer()

    @property
    def extension(self) -> str:
        return self.serializer.extension

    @abstractmethod
    def write_bytes(self, location: Path, data: bytes) -> None:
        """Persist `data` at `location`.

        Missing parent directories are created and the write retried once.
        Raise `StorageIOError` if the data could not be written.
        """

    @abstractmethod
    def read_bytes(self, location: Path) -> bytes:
        """Return the bytes stored at `location`.

        Raise `NotFoundError` if nothing is stored there.
        """

    @abstractmethod
    def exists(self, location: Path) -> bool:
        """Return True if something is stored at `location`."""

    @abstractmethod
    def delete(self, location: Path) -> None:
        """Delete the value at `location`. Raise `NotFoundError` if absent."""

    @abstractmethod
    def delete_all(self, directory: Path) -> None:
        """Remove `directory` and everything below it. Missing is not an error."""

    def save(self, location: Path, value: Any) -> None:
        self.write_bytes(location, self.serializer.dump(value))

    def load(self, location: Path) -> Any:
        data = self.read_bytes(location)
        try:
            return self.serializer.load(data)
        except (ValueError, UnicodeDecodeError) as e:
            raise DecodeError(f"Cannot decode '{location}': {e}") from e

    async def write_bytes_async(self, location: Path, data: bytes) -> None:
        await asyncio.to_thread(self.write_bytes, location, data)

    async def save_async(self, location: Path, value: Any) -> None:
        await self.write_bytes_async(location, self.serializer.dump(value))

    async def load_async(self, location: Path) -> Any:
        return await asyncio.to_thread(self.load, location)

    async def exists_async(self, location: Path) -> bool:
        return await asyncio.to_thread(self.exists, location)

    async def delete_async(self, location: Path) -> None:
        await asyncio.to_thread(self.delete, location)

    async def delete_all_async(self, directory: Path) -> None:
        await asyncio.to_thread(self.delete_all, directory)
