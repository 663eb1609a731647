from collections import OrderedDict

import pytest

from cashola.errors import ShapeMismatchError, TypeKindError
from cashola.guard import check_kind, check_same_shape, shape_of


def test_shape_of():
    assert shape_of([]) == 'array'
    assert shape_of({}) == 'object'


@pytest.mark.parametrize("value", [{}, [], OrderedDict(), {'a': [1]}])
def test_check_kind_accepts_containers(value):
    check_kind(value)


@pytest.mark.parametrize("value", [1, 'text', None, (1, 2), 3.5, True])
def test_check_kind_rejects_scalars(value):
    with pytest.raises(TypeKindError):
        check_kind(value)


def test_same_shape_passes_regardless_of_contents():
    check_same_shape({'a': 1}, {'b': [1, 2]}, 'k')
    check_same_shape([1], ['x', {'y': 2}], 'k')


def test_mismatch_names_stored_shape():
    with pytest.raises(ShapeMismatchError, match="already holding an array"):
        check_same_shape({}, [], 'list1')
    with pytest.raises(ShapeMismatchError, match="already holding an object"):
        check_same_shape([], {}, 'obj1')
