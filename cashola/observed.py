"""Live values that write themselves to storage.

`ObservedDict` and `ObservedList` wrap a plain dict/list and behave like it
for reads. Every mutation is applied to the wrapped value first and then the
whole root value is handed to a persister:

- `BlockingPersister` writes before the mutating call returns and lets
  storage errors propagate to the caller.
- `BackgroundPersister` snapshots the value, queues the write on a
  single-worker thread pool and returns immediately. Queued writes are
  applied in the order they were issued and are finished before the
  interpreter exits, even if the event loop that issued them has already
  shut down; failures are logged, never raised.

Containers nested inside a binding are handed out as child wrappers sharing
the root's persister, so `state['items'].append(1)` persists `state`.
"""
from __future__ import annotations
import copy
import logging
from collections.abc import Mapping, MutableMapping, MutableSequence
from concurrent.futures import Future, ThreadPoolExecutor
from pathlib import Path
from typing import Any, Iterator, Optional, Set

from cashola.storage.interfaces import StorageProtocol

logger = logging.getLogger(__name__)


def make_writer() -> ThreadPoolExecutor:
    """Executor for background writes; one worker keeps them in issue order."""
    return ThreadPoolExecutor(max_workers=1, thread_name_prefix='cashola-writer')


class BlockingPersister:
    def __init__(self, backend: StorageProtocol, location: Path) -> None:
        self.backend = backend
        self.location = location

    def persist(self, root: Any) -> None:
        self.backend.save(self.location, root)


class BackgroundPersister:
    """Fire-and-forget persister for bindings created from a coroutine.

    Writes are submitted to `writer` (shared by the binding context) and
    their futures kept in `pending` until done, so the context can wait for
    them on flush.
    """

    def __init__(
        self,
        backend: StorageProtocol,
        location: Path,
        pending: Optional[Set[Future]] = None,
        writer: Optional[ThreadPoolExecutor] = None,
    ) -> None:
        self.backend = backend
        self.location = location
        self.pending = pending if pending is not None else set()
        self.writer = writer or make_writer()

    def persist(self, root: Any) -> None:
        try:
            data = self.backend.serializer.dump(root)
        except Exception:
            logger.exception('Failed to serialize value for %s', self.location)
            return

        future = self.writer.submit(self._write, data)
        self.pending.add(future)
        future.add_done_callback(self.pending.discard)

    def _write(self, data: bytes) -> None:
        try:
            self.backend.write_bytes(self.location, data)
        except Exception:
            logger.exception('Background write to %s failed', self.location)


def unwrap(value: Any) -> Any:
    return value.raw if isinstance(value, Observed) else value


class Observed:
    """Behaviour shared by observed containers."""

    def __init__(self, data: Any, persister, root: Any = None) -> None:
        self._data = data
        self._persister = persister
        self._root = data if root is None else root

    @property
    def raw(self) -> Any:
        """The wrapped value itself. Mutating it directly is not persisted."""
        return self._data

    def _persist(self) -> None:
        self._persister.persist(self._root)

    def _wrap(self, value: Any) -> Any:
        if isinstance(value, Observed):
            return value
        if isinstance(value, MutableMapping):
            return ObservedDict(value, self._persister, self._root)
        if isinstance(value, MutableSequence):
            return ObservedList(value, self._persister, self._root)
        return value

    def copy(self) -> Any:
        """Shallow copy of the wrapped value, like `dict.copy`/`list.copy`. Not observed."""
        return copy.copy(self._data)

    def snapshot(self) -> Any:
        """Detached deep copy of the wrapped value."""
        return copy.deepcopy(self._data)

    def __eq__(self, other: object) -> bool:
        return self._data == unwrap(other)

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return repr(self._data)


class ObservedDict(Observed, MutableMapping):

    def __getitem__(self, key: Any) -> Any:
        return self._wrap(self._data[key])

    def __setitem__(self, key: Any, value: Any) -> None:
        self._data[key] = unwrap(value)
        self._persist()

    def __delitem__(self, key: Any) -> None:
        del self._data[key]
        self._persist()

    def __iter__(self) -> Iterator[Any]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __contains__(self, key: object) -> bool:
        return key in self._data

    def update(self, other: Any = (), /, **kwargs: Any) -> None:
        if isinstance(other, Mapping):
            items = list(other.items())
        elif hasattr(other, 'keys'):
            items = [(k, other[k]) for k in other.keys()]
        else:
            items = list(other)
        items.extend(kwargs.items())
        if not items:
            return
        self._data.update((k, unwrap(v)) for k, v in items)
        self._persist()

    def __ior__(self, other: Any) -> 'ObservedDict':
        self.update(other)
        return self

    def setdefault(self, key: Any, default: Any = None) -> Any:
        if key not in self._data:
            self[key] = default
        return self[key]

    def pop(self, key: Any, *default: Any) -> Any:
        if key in self._data:
            value = self._data.pop(key)
            self._persist()
            return value
        if default:
            return default[0]
        raise KeyError(key)

    def popitem(self) -> tuple:
        item = self._data.popitem()
        self._persist()
        return item

    def clear(self) -> None:
        if self._data:
            self._data.clear()
            self._persist()


class ObservedList(Observed, MutableSequence):

    def __getitem__(self, index: Any) -> Any:
        if isinstance(index, slice):
            return self._data[index]
        return self._wrap(self._data[index])

    def __setitem__(self, index: Any, value: Any) -> None:
        if isinstance(index, slice):
            self._data[index] = [unwrap(v) for v in value]
        else:
            self._data[index] = unwrap(value)
        self._persist()

    def __delitem__(self, index: Any) -> None:
        del self._data[index]
        self._persist()

    def __len__(self) -> int:
        return len(self._data)

    def __iter__(self) -> Iterator[Any]:
        for value in self._data:
            yield self._wrap(value)

    def __contains__(self, value: object) -> bool:
        return unwrap(value) in self._data

    def insert(self, index: int, value: Any) -> None:
        self._data.insert(index, unwrap(value))
        self._persist()

    def append(self, value: Any) -> None:
        self._data.append(unwrap(value))
        self._persist()

    def extend(self, values: Any) -> None:
        values = [unwrap(v) for v in values]
        if not values:
            return
        self._data.extend(values)
        self._persist()

    def __iadd__(self, values: Any) -> 'ObservedList':
        self.extend(values)
        return self

    def pop(self, index: int = -1) -> Any:
        value = self._data.pop(index)
        self._persist()
        return value

    def remove(self, value: Any) -> None:
        self._data.remove(unwrap(value))
        self._persist()

    def clear(self) -> None:
        if self._data:
            self._data.clear()
            self._persist()

    def reverse(self) -> None:
        self._data.reverse()
        self._persist()

    def sort(self, *, key: Any = None, reverse: bool = False) -> None:
        self._data.sort(key=key, reverse=reverse)
        self._persist()

    def index(self, value: Any, *args: Any) -> int:
        return self._data.index(unwrap(value), *args)

    def count(self, value: Any) -> int:
        return self._data.count(unwrap(value))


def observe(value: Any, persister) -> Observed:
    """Wrap a remembered dict or list so its mutations reach `persister`."""
    if isinstance(value, MutableSequence):
        return ObservedList(value, persister)
    return ObservedDict(value, persister)
