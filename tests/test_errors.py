"""
Tests for the exception taxonomy.

Every propcycle error is a CyclerError and also the builtin a caller
would naturally catch.
"""

import pytest

from propcycle.errors import (
    ArityError,
    CyclerError,
    KeyAlreadyExistsError,
    KeyMismatchError,
    KeyNotFoundError,
    KeyOverlapError,
    LengthMismatchError,
    UnsupportedOperationError,
)


@pytest.mark.parametrize("error_cls, builtin", [
    (KeyOverlapError, ValueError),
    (KeyMismatchError, ValueError),
    (LengthMismatchError, ValueError),
    (KeyNotFoundError, KeyError),
    (KeyAlreadyExistsError, ValueError),
    (UnsupportedOperationError, ValueError),
    (ArityError, TypeError),
])
def test_hierarchy(error_cls, builtin):
    assert issubclass(error_cls, CyclerError)
    assert issubclass(error_cls, builtin)


def test_key_overlap_message():
    err = KeyOverlapError({'b', 'a'})
    assert err.overlap == {'a', 'b'}
    assert str(err) == "Can not compose overlapping cycles: ['a', 'b']"


def test_length_mismatch_message():
    err = LengthMismatchError(3, 2)
    assert (err.left_length, err.right_length) == (3, 2)
    assert str(err) == "Can only add equal length cycles, not 3 and 2"


def test_key_mismatch_message():
    err = KeyMismatchError({'c'}, {'lw'})
    assert str(err) == "Keys do not match:\n\tIntersection: {'c'}\n\tDisjoint: {'lw'}"


def test_key_not_found_message_unquoted():
    """KeyError normally repr-quotes its message; this one does not."""
    err = KeyNotFoundError("'x' is not a key")
    assert str(err) == "'x' is not a key"
