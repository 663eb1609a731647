from pathlib import Path
from typing import Protocol, Any, runtime_checkable

from .serializer import Serializer


@runtime_checkable
class StorageProtocol(Protocol):
    """Storage backend protocol mirroring `cashola.storage.StorageBackend`.

    Implementations should follow the semantics documented on the abstract
    base class in `cashola.storage.base` (NotFoundError for missing
    locations, parent directory creation on write, etc.).
    """

    serializer: Serializer

    @property
    def extension(self) -> str: ...

    def write_bytes(self, location: Path, data: bytes) -> None: ...

    def save(self, location: Path, value: Any) -> None: ...

    def load(self, location: Path) -> Any: ...

    def exists(self, location: Path) -> bool: ...

    def delete(self, location: Path) -> None: ...

    def delete_all(self, directory: Path) -> None: ...

    async def write_bytes_async(self, location: Path, data: bytes) -> None: ...

    async def save_async(self, location: Path, value: Any) -> None: ...

    async def load_async(self, location: Path) -> Any: ...

    async def delete_async(self, location: Path) -> None: ...

    async def delete_all_async(self, directory: Path) -> None: ...
