"""Exceptions raised by cashola.

Every error derives from `CasholaError` and from the builtin exception a
caller would naturally expect (`KeyError` for missing storage, `OSError`
for I/O failures, ...), so existing `except KeyError:` style handlers keep
working.
"""


class CasholaError(Exception):
    """Base class for all cashola errors."""


class InvalidKeyError(CasholaError, ValueError):
    """Key cannot be used as a filename."""


class DuplicateKeyError(CasholaError, ValueError):
    """Key is already being remembered in this context."""


class TypeKindError(CasholaError, TypeError):
    """Starter value is not a mapping or a list."""


class ShapeMismatchError(CasholaError, TypeError):
    """Stored value and requested value disagree on array vs. object."""


class NotFoundError(CasholaError, KeyError):
    """Nothing is stored at the requested location."""

    def __str__(self) -> str:
        # KeyError quotes its argument; keep plain messages readable
        return str(self.args[0]) if self.args else ''


class StorageIOError(CasholaError, OSError):
    """Reading or writing the storage location failed."""


class DecodeError(CasholaError, ValueError):
    """Stored content could not be decoded."""
