"""Remember dicts and lists across runs.

    import cashola

    state = cashola.remember_sync('memory', {'foo': 'foo'})
    state['bar'] = 42            # written to .cashola/memory.json

The functions below are bound to a module-level default `Cashola` context.
Create your own `Cashola` instance for an isolated registry and
configuration.
"""

from .config import CasholaConfig, load_config
from .core import Cashola
from .errors import (
    CasholaError,
    DecodeError,
    DuplicateKeyError,
    InvalidKeyError,
    NotFoundError,
    ShapeMismatchError,
    StorageIOError,
    TypeKindError,
)
from .observed import ObservedDict, ObservedList

default_context = Cashola()

remember = default_context.remember
remember_sync = default_context.remember_sync
remember_array = default_context.remember_array
remember_array_sync = default_context.remember_array_sync
configure = default_context.configure
configure_from_file = default_context.configure_from_file
clear = default_context.clear
clear_sync = default_context.clear_sync
clear_all = default_context.clear_all
clear_all_sync = default_context.clear_all_sync
flush = default_context.flush
flush_sync = default_context.flush_sync
list_keys = default_context.list
reset = default_context.reset

__all__ = [
    "Cashola",
    "CasholaConfig",
    "CasholaError",
    "DecodeError",
    "DuplicateKeyError",
    "InvalidKeyError",
    "NotFoundError",
    "ObservedDict",
    "ObservedList",
    "ShapeMismatchError",
    "StorageIOError",
    "TypeKindError",
    "clear",
    "clear_all",
    "clear_all_sync",
    "clear_sync",
    "configure",
    "configure_from_file",
    "default_context",
    "flush",
    "flush_sync",
    "list_keys",
    "load_config",
    "remember",
    "remember_array",
    "remember_array_sync",
    "remember_sync",
    "reset",
]
