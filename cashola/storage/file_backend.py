"""File-backed storage backend.

Each value lives in its own file, `<storage_dir>/<key>.json`. Writes are
atomic: data goes to a temporary file that is fsynced and then renamed over
the target. Directories are created lazily, only when a write fails because
they are missing.
"""
from __future__ import annotations
import logging
import os
import shutil
from pathlib import Path

from cashola.errors import NotFoundError, StorageIOError
from .base import StorageBackend

logger = logging.getLogger(__name__)


class FileStorageBackend(StorageBackend):

    def _write(self, path: Path, data: bytes) -> None:
        tmp = path.with_suffix(path.suffix + '.tmp')
        f = open(tmp, 'wb')
        try:
            with f:
                f.write(data)
                f.flush()
                os.fsync(f.fileno())
            tmp.replace(path)
        except OSError:
            tmp.unlink(missing_ok=True)
            raise

    def write_bytes(self, location: Path, data: bytes) -> None:
        path = Path(location)
        try:
            self._write(path, data)
        except FileNotFoundError:
            logger.debug('Creating storage directory %s', path.parent)
            try:
                path.parent.mkdir(parents=True, exist_ok=True)
                self._write(path, data)
            except OSError as e:
                raise StorageIOError(f"Cannot write '{path}': {e}") from e
        except OSError as e:
            raise StorageIOError(f"Cannot write '{path}': {e}") from e
        logger.debug('Wrote %s (%d bytes)', path, len(data))

    def read_bytes(self, location: Path) -> bytes:
        path = Path(location)
        try:
            with open(path, 'rb') as f:
                data = f.read()
        except FileNotFoundError as e:
            raise NotFoundError(f"Nothing stored at '{path}'.") from e
        except OSError as e:
            raise StorageIOError(f"Cannot read '{path}': {e}") from e
        logger.debug('Loaded %s (%d bytes)', path, len(data))
        return data

    def exists(self, location: Path) -> bool:
        return Path(location).is_file()

    def delete(self, location: Path) -> None:
        path = Path(location)
        try:
            path.unlink()
        except FileNotFoundError as e:
            raise NotFoundError(f"Nothing stored at '{path}'.") from e
        except OSError as e:
            raise StorageIOError(f"Cannot delete '{path}': {e}") from e
        logger.debug('Deleted %s', path)

    def delete_all(self, directory: Path) -> None:
        path = Path(directory)
        try:
            shutil.rmtree(path)
        except FileNotFoundError:
            logger.debug('Storage directory %s does not exist, nothing to clear', path)
            return
        except OSError as e:
            raise StorageIOError(f"Cannot clear '{path}': {e}") from e
        logger.debug('Cleared storage directory %s', path)
