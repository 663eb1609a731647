"""Shape checks applied before a value is bound to storage."""
from collections.abc import Mapping, MutableSequence
from typing import Any

from cashola.errors import DecodeError, ShapeMismatchError, TypeKindError

ARRAY = 'array'
OBJECT = 'object'


def is_sequence(value: Any) -> bool:
    return isinstance(value, MutableSequence)


def shape_of(value: Any) -> str:
    return ARRAY if is_sequence(value) else OBJECT


def check_kind(value: Any) -> None:
    """Raise `TypeKindError` unless `value` is a mapping or a list."""
    if not isinstance(value, (Mapping, MutableSequence)):
        raise TypeKindError(f"Type of value is '{type(value).__name__}', but must be a mapping or a list.")


def check_stored_kind(loaded: Any, key: str) -> None:
    """Raise `DecodeError` if stored content is not a mapping or a list."""
    if not isinstance(loaded, (Mapping, MutableSequence)):
        raise DecodeError(
            f"Key '{key}' holds a {type(loaded).__name__}, not an object or an array. Clear storage to reuse it."
        )


def check_same_shape(requested: Any, loaded: Any, key: str) -> None:
    """Raise `ShapeMismatchError` if one value is a sequence and the other is not.

    Only sequence-ness is compared; contents are never inspected.
    """
    if is_sequence(requested) != is_sequence(loaded):
        shape = shape_of(loaded)
        raise ShapeMismatchError(
            f"Key '{key}' already holding an {shape}. Either clear storage or continue to use an {shape}."
        )
