from __future__ import annotations
import logging
from pathlib import Path
from typing import Dict, List

from cashola.errors import DuplicateKeyError, InvalidKeyError, NotFoundError
from cashola.util import is_valid_key

logger = logging.getLogger(__name__)


def validate_key(key: str) -> None:
    if not is_valid_key(key):
        raise InvalidKeyError(f"Invalid key: '{key}'. Must create a valid filename.")


class KeyRegistry:
    """Maps remembered keys to their storage locations.

    A key can be registered once per registry; registering it again fails
    so two live values can never share one file. Entries are kept when the
    stored file is cleared.
    """

    def __init__(self) -> None:
        self._locations: Dict[str, Path] = {}

    def register(self, key: str, storage_dir: str | Path, extension: str = '.json') -> Path:
        validate_key(key)
        if key in self._locations:
            raise DuplicateKeyError(f"'{key}' already being remembered.")
        location = Path(storage_dir) / f'{key}{extension}'
        self._locations[key] = location
        logger.debug('Registered %s -> %s', key, location)
        return location

    def location(self, key: str) -> Path:
        try:
            return self._locations[key]
        except KeyError:
            raise NotFoundError(f"Cannot find '{key}' in storage.") from None

    def list(self) -> List[str]:
        return list(self._locations)

    def reset(self) -> None:
        self._locations.clear()

    def __contains__(self, key: object) -> bool:
        return key in self._locations

    def __len__(self) -> int:
        return len(self._locations)
