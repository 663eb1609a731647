"""The cashola binding context.

A `Cashola` instance owns a key registry, a configuration and a storage
backend, and turns plain dicts and lists into live values that persist
every mutation:

    ctx = Cashola()
    state = ctx.remember_sync('counter', {'count': 0})
    state['count'] += 1          # counter.json now holds {"count":1}

Blocking entry points end in `_sync`; their coroutine twins write in the
background. The module-level functions in `cashola` are bound to a default
context.
"""
from __future__ import annotations
import asyncio
import logging
from concurrent.futures import Future, wait
from pathlib import Path
from typing import Any, List, Optional, Set

from cashola.config import CasholaConfig, load_config
from cashola.errors import NotFoundError, TypeKindError
from cashola.guard import check_kind, check_same_shape, check_stored_kind, is_sequence
from cashola.observed import BackgroundPersister, BlockingPersister, make_writer, observe, unwrap
from cashola.registry import KeyRegistry, validate_key
from cashola.storage import FileStorageBackend
from cashola.storage.interfaces import StorageProtocol

logger = logging.getLogger(__name__)


class Cashola:
    def __init__(self, config: Optional[CasholaConfig] = None, backend: Optional[StorageProtocol] = None) -> None:
        self.config = config or CasholaConfig()
        self.backend = backend or FileStorageBackend()
        self.registry = KeyRegistry()
        self._pending: Set[Future] = set()
        self._writer = make_writer()

    # configuration

    def configure(self, config: Optional[CasholaConfig] = None, **options: Any) -> CasholaConfig:
        """Update the configuration used by subsequent binds.

        Accepts a full `CasholaConfig` and/or individual options (snake_case
        or camelCase). Options set to None are ignored. Keys that are already
        remembered keep their storage location.
        """
        if config is not None:
            self.config = config
        options = {k: v for k, v in options.items() if v is not None}
        if options:
            self.config = self.config.updated(**options)
        logger.debug('Configuration is now %s', self.config)
        return self.config

    def configure_from_file(self, path: Optional[Path | str] = None) -> CasholaConfig:
        return self.configure(load_config(path))

    def reset(self) -> None:
        """Forget every remembered key and restore the default configuration."""
        self.registry.reset()
        self.config = CasholaConfig()

    @property
    def storage_dir(self) -> Path:
        return Path(self.config.storage_dir)

    # binding

    def _prepare(self, key: str, value: Any, array: bool) -> Optional[Path]:
        """Validate a bind request and register the key.

        Returns None when cashola is being ignored, otherwise the key's
        storage location.
        """
        validate_key(key)
        if self.config.is_ignored():
            logger.info("Ignoring cashola, '%s' will not be persisted", key)
            return None
        check_kind(value)
        if array and not is_sequence(value):
            raise TypeKindError(f"Type of value is '{type(value).__name__}', but must be a list.")
        return self.registry.register(key, self.config.storage_dir, self.backend.extension)

    def _bind_sync(self, key: str, value: Any, array: bool) -> Any:
        location = self._prepare(key, value, array)
        if location is None:
            return value

        try:
            stored = self.backend.load(location)
        except NotFoundError:
            logger.debug("Nothing remembered for '%s', creating %s", key, location)
            value = unwrap(value)
            self.backend.save(location, value)
        else:
            check_stored_kind(stored, key)
            check_same_shape(value, stored, key)
            logger.debug("Remembered '%s' from %s", key, location)
            value = stored

        return observe(value, BlockingPersister(self.backend, location))

    async def _bind(self, key: str, value: Any, array: bool) -> Any:
        location = self._prepare(key, value, array)
        if location is None:
            return value

        try:
            stored = await self.backend.load_async(location)
        except NotFoundError:
            logger.debug("Nothing remembered for '%s', creating %s", key, location)
            value = unwrap(value)
            await self.backend.save_async(location, value)
        else:
            check_stored_kind(stored, key)
            check_same_shape(value, stored, key)
            logger.debug("Remembered '%s' from %s", key, location)
            value = stored

        return observe(value, BackgroundPersister(self.backend, location, self._pending, self._writer))

    def remember_sync(self, key: str, value: Any = None) -> Any:
        """Return `value` (default `{}`) bound to `key`, writing every mutation before returning.

        If something is already stored under `key` it replaces `value`
        entirely; `value` is only the starting point for new keys.
        """
        return self._bind_sync(key, {} if value is None else value, array=False)

    def remember_array_sync(self, key: str, value: Any = None) -> Any:
        """Like `remember_sync` but the value must be a list (default `[]`)."""
        return self._bind_sync(key, [] if value is None else value, array=True)

    async def remember(self, key: str, value: Any = None) -> Any:
        """Return `value` (default `{}`) bound to `key`, writing mutations in the background.

        Mutations return immediately; call `flush()` to wait for their
        writes. Background write failures are logged, not raised.
        """
        return await self._bind(key, {} if value is None else value, array=False)

    async def remember_array(self, key: str, value: Any = None) -> Any:
        return await self._bind(key, [] if value is None else value, array=True)

    async def flush(self) -> None:
        """Wait until every queued background write has finished."""
        while True:
            futures = [f for f in list(self._pending) if not f.done()]
            if not futures:
                return
            await asyncio.gather(*(asyncio.wrap_future(f) for f in futures))

    def flush_sync(self) -> None:
        """Blocking `flush`, for code outside an event loop."""
        while True:
            futures = [f for f in list(self._pending) if not f.done()]
            if not futures:
                return
            wait(futures)

    # clearing

    def _location_for(self, key: str) -> Path:
        if key in self.registry:
            return self.registry.location(key)
        validate_key(key)
        return self.storage_dir / f'{key}{self.backend.extension}'

    def clear_sync(self, key: str) -> None:
        """Delete the stored value for `key`. The key stays registered."""
        location = self._location_for(key)
        try:
            self.backend.delete(location)
        except NotFoundError:
            raise NotFoundError(f"Cannot find '{key}' in storage.") from None
        logger.debug("Cleared '%s' (%s)", key, location)

    async def clear(self, key: str) -> None:
        location = self._location_for(key)
        try:
            await self.backend.delete_async(location)
        except NotFoundError:
            raise NotFoundError(f"Cannot find '{key}' in storage.") from None
        logger.debug("Cleared '%s' (%s)", key, location)

    def clear_all_sync(self) -> None:
        """Remove the whole storage directory."""
        self.backend.delete_all(self.storage_dir)

    async def clear_all(self) -> None:
        await self.backend.delete_all_async(self.storage_dir)

    def list(self) -> List[str]:
        """Return remembered keys in the order they were bound."""
        return self.registry.list()