"""
Cycle Composer

A Cycler is a finite, restartable sequence of records, where a record is a
dict mapping property names to values. Cyclers are built bottom-up:

    - Leaf: one property name and a finite sequence of values
    - Composite: a left and a right Cycler joined by a CompositionOperator

Example:
    >>> c = cycler(color=['r', 'g', 'b']) + cycler(linestyle=['-', '--', '-.'])
    >>> list(c)[0]
    {'color': 'r', 'linestyle': '-'}

ARCHITECTURAL RULE:
    A composite owns private copies of its children.
    Composing a Cycler into another never aliases state with the original,
    so the only mutation visible to a holder is one it performed itself
    (change_key, += and *=).

Lengths are computed from the tree shape, never by iterating.
"""

from __future__ import annotations

import copy
import logging
import numbers
from enum import Enum
from functools import reduce
from operator import add
from typing import Any, Dict, Hashable, Iterable, Iterator, List, Optional, Set, Union

from propcycle.errors import (
    ArityError,
    KeyAlreadyExistsError,
    KeyMismatchError,
    KeyNotFoundError,
    KeyOverlapError,
    LengthMismatchError,
    UnsupportedOperationError,
)

logger = logging.getLogger(__name__)

Record = Dict[Hashable, Any]


class CompositionOperator(Enum):
    """
    How a composite node merges its children.

    PAIRWISE: index-aligned merge, lengths must match (the `+` operator)
    PRODUCT:  Cartesian merge, left slowest and right fastest (the `*` operator)
    """

    PAIRWISE = "+"
    PRODUCT = "*"


def _keys_of(side) -> Set[Hashable]:
    """Key set of one side of a node, peeking a single record if needed."""
    if side is None:
        return set()
    if isinstance(side, Cycler):
        return side.keys
    return set(next(iter(side), {}))


def _process_keys(left, right) -> Set[Hashable]:
    """
    Union of the key sets of `left` and `right`.

    Raises:
        KeyOverlapError: If the two key sets intersect
    """
    l_key = _keys_of(left)
    r_key = _keys_of(right)
    overlap = l_key & r_key
    if overlap:
        raise KeyOverlapError(overlap)
    return l_key | r_key


def _from_by_key(columns: Dict[Hashable, List[Any]]) -> "Cycler":
    """Rebuild a pairwise-only Cycler from per-key value lists."""
    if not columns:
        return Cycler(None)
    return reduce(add, (_cycler(k, v) for k, v in columns.items()))


class Cycler:
    """
    Composable cycles of property records.

    Do not build Cyclers from records directly unless you know what you are
    doing; use the `cycler` function instead.

    Parameters
    ----------
    left : Cycler, iterable of dict or None
        The 'left' side. A Cycler is copied; an iterable of records is
        materialised with each record copied.
    right : Cycler or None
        The 'right' side, copied if given.
    op : CompositionOperator or its symbol, optional
        Required whenever `right` is given.
    """

    def __init__(self, left, right: Optional["Cycler"] = None,
                 op: Union[CompositionOperator, str, None] = None):
        if isinstance(left, Cycler):
            self._left = left._copy()
        elif left is not None:
            self._left = [dict(rec) for rec in left]
        else:
            self._left = []

        if right is None:
            self._right = None
        elif isinstance(right, Cycler):
            self._right = right._copy()
        else:
            raise UnsupportedOperationError(
                f"The right side of a Cycler must be a Cycler, not {type(right).__name__}"
            )

        if op is not None:
            op = CompositionOperator(op)
        if (self._right is None) != (op is None):
            raise UnsupportedOperationError(
                "A composite Cycler needs both a right side and an operator"
            )
        self._op = op

        self._keys = _process_keys(self._left, self._right)

        if op is CompositionOperator.PAIRWISE and len(self._left) != len(self._right):
            raise LengthMismatchError(len(self._left), len(self._right))

        if op is not None and logger.isEnabledFor(logging.DEBUG):
            logger.debug(
                "Composed %s cycler with keys %s (length %d)",
                op.name.lower(), sorted(self._keys, key=repr), len(self),
            )

    @classmethod
    def _from_iter(cls, label: Hashable, itr: Iterable) -> "Cycler":
        """
        Build a leaf from a property name and a finite iterable.

        The iterable is consumed eagerly. An infinite iterable never returns.
        """
        ret = cls(None)
        ret._left = [{label: v} for v in itr]
        ret._keys = {label}
        return ret

    def _copy(self) -> "Cycler":
        """Structural copy: new nodes and new record dicts, same values."""
        dup = Cycler.__new__(Cycler)
        if isinstance(self._left, Cycler):
            dup._left = self._left._copy()
        else:
            dup._left = [dict(rec) for rec in self._left]
        dup._right = self._right._copy() if self._right is not None else None
        dup._op = self._op
        dup._keys = set(self._keys)
        return dup

    __copy__ = _copy

    def _replace_contents(self, other: "Cycler") -> None:
        """Take over another node's state while keeping this object's identity."""
        self._left = other._left
        self._right = other._right
        self._op = other._op
        self._keys = other._keys

    # =========================================================================
    # STRUCTURE
    # =========================================================================

    @property
    def keys(self) -> Set[Hashable]:
        """The keys this Cycler knows about."""
        return set(self._keys)

    @property
    def operator(self) -> Optional[CompositionOperator]:
        """Operator of a composite node, None for a leaf."""
        return self._op

    @property
    def left(self) -> Optional["Cycler"]:
        """Left child when it is a Cycler, None when this node stores records."""
        return self._left if isinstance(self._left, Cycler) else None

    @property
    def right(self) -> Optional["Cycler"]:
        return self._right

    def change_key(self, old: Hashable, new: Hashable) -> None:
        """
        Change a key in this cycler to a new name.
        Modification is performed in-place.

        Does nothing if the old key is the same as the new key.

        Raises:
            KeyAlreadyExistsError: If `new` is already a key
            KeyNotFoundError: If `old` is not a key
        """
        if old == new:
            return
        if new in self._keys:
            raise KeyAlreadyExistsError(
                f"Can't replace {old!r} with {new!r}, {new!r} is already a key"
            )
        if old not in self._keys:
            raise KeyNotFoundError(
                f"Can't replace {old!r} with {new!r}, {old!r} is not a key"
            )

        self._keys.remove(old)
        self._keys.add(new)

        if self._right is not None and old in self._right.keys:
            self._right.change_key(old, new)
        elif isinstance(self._left, Cycler):
            self._left.change_key(old, new)
        else:
            self._left = [
                {(new if k == old else k): v for k, v in rec.items()}
                for rec in self._left
            ]

    # =========================================================================
    # ITERATION
    # =========================================================================

    def __iter__(self) -> Iterator[Record]:
        if self._right is None:
            for rec in self._left:
                yield dict(rec)
        elif self._op is CompositionOperator.PAIRWISE:
            for a, b in zip(self._left, self._right):
                merged = dict(a)
                merged.update(b)
                yield merged
        else:
            for a in self._left:
                for b in self._right:
                    merged = dict(a)
                    merged.update(b)
                    yield merged

    def cycle(self) -> Iterator[Record]:
        """Endless iterator wrapping around the records. Empty if len is 0."""
        if len(self) == 0:
            return
        while True:
            yield from self

    def __call__(self) -> Iterator[Record]:
        return self.cycle()

    def __len__(self) -> int:
        if self._right is None:
            return len(self._left)
        if self._op is CompositionOperator.PAIRWISE:
            return min(len(self._left), len(self._right))
        return len(self._left) * len(self._right)

    # =========================================================================
    # COMPOSITION
    # =========================================================================

    def __add__(self, other):
        """
        Pair-wise combine two equal length cyclers (zip).

        Raises:
            LengthMismatchError: If the lengths differ
            KeyOverlapError: If the key sets intersect
        """
        if not isinstance(other, Cycler):
            return NotImplemented
        return Cycler(self, other, CompositionOperator.PAIRWISE)

    def __mul__(self, other):
        """
        Outer product of two cyclers (`itertools.product`) or integer
        multiplication.
        """
        if isinstance(other, Cycler):
            return Cycler(self, other, CompositionOperator.PRODUCT)
        if isinstance(other, numbers.Integral):
            return self.repeat(other)
        raise UnsupportedOperationError(
            f"Can only multiply a Cycler by a Cycler or an int, not {type(other).__name__}"
        )

    def __rmul__(self, other):
        return self * other

    def __iadd__(self, other):
        """In-place pair-wise combine. The previous state becomes the left child."""
        if not isinstance(other, Cycler):
            raise TypeError("Cannot += with a non-Cycler object")
        self._replace_contents(Cycler(self, other, CompositionOperator.PAIRWISE))
        logger.debug("Augmented cycler in place with pairwise composition")
        return self

    def __imul__(self, other):
        """
        In-place outer product or integer repetition.

        For a Cycler operand the previous state becomes the left child.
        """
        if isinstance(other, Cycler):
            self._replace_contents(Cycler(self, other, CompositionOperator.PRODUCT))
            logger.debug("Augmented cycler in place with product composition")
        elif isinstance(other, numbers.Integral):
            self._replace_contents(self.repeat(other))
            logger.debug("Repeated cycler in place %d times", other)
        else:
            raise UnsupportedOperationError(
                f"Can only multiply a Cycler by a Cycler or an int, not {type(other).__name__}"
            )
        return self

    def repeat(self, n: int) -> "Cycler":
        """
        Repeat every key's values `n` times, keeping keys aligned.

        The repetition is done per key on the `by_key` columns and rebuilt by
        pairwise composition, so `(a + b).repeat(2)` cycles a and b together
        rather than forming a product with a 2-long cycle.
        """
        if isinstance(n, bool) or not isinstance(n, numbers.Integral):
            raise UnsupportedOperationError(
                f"Can only repeat a Cycler an integer number of times, not {n!r}"
            )
        if n < 0:
            raise UnsupportedOperationError(
                f"Can not repeat a Cycler a negative number of times ({n})"
            )
        return _from_by_key({k: v * n for k, v in self.by_key().items()})

    def concat(self, other: "Cycler") -> "Cycler":
        """
        Concatenate two cyclers, as if chained using `itertools.chain`.

        The keys must match exactly.

        Examples:
            >>> num = cycler('a', range(3))
            >>> let = cycler('a', 'abc')
            >>> num.concat(let)
            cycler('a', [0, 1, 2, 'a', 'b', 'c'])
        """
        return concat(self, other)

    # =========================================================================
    # TRANSPOSITION
    # =========================================================================

    def by_key(self) -> Dict[Hashable, List[Any]]:
        """
        Values by key.

        This returns the transposed values of the cycler. Iterating over a
        Cycler yields dicts with a single value for each key; this method
        returns a dict of lists holding every value for a given key.
        """
        keys = self.keys
        out: Dict[Hashable, List[Any]] = {k: [] for k in keys}
        for rec in self:
            for k in keys:
                out[k].append(rec[k])
        return out

    def simplify(self) -> "Cycler":
        """
        Simplify the cycler into a sum (but no products) of cyclers.

        The result iterates identically to the original.
        """
        return _from_by_key(self.by_key())

    def __getitem__(self, key):
        if isinstance(key, slice):
            return _from_by_key({k: v[key] for k, v in self.by_key().items()})
        raise UnsupportedOperationError("Can only use slices with Cycler.__getitem__")

    # =========================================================================
    # COMPARISON & DISPLAY
    # =========================================================================

    def __eq__(self, other):
        if not isinstance(other, Cycler):
            return NotImplemented
        if len(self) != len(other):
            return False
        if self.keys ^ other.keys:
            return False
        return all(a == b for a, b in zip(self, other))

    __hash__ = None

    def __repr__(self):
        if self._op is None:
            if isinstance(self._left, Cycler):
                return repr(self._left)
            if len(self._keys) == 1:
                lab = next(iter(self._keys))
                itr = [rec[lab] for rec in self]
                return f"cycler({lab!r}, {itr!r})"
            return f"Cycler({self._left!r})"
        return f"({self._left!r} {self._op.value} {self._right!r})"

    def _repr_html_(self) -> str:
        from propcycle.backends.table import TableFormat, generate_table
        return generate_table(self, TableFormat.HTML)


def cycler(*args, **kwargs) -> Cycler:
    """
    Create a new `Cycler` object from a single positional argument,
    a pair of positional arguments, or the combination of keyword arguments.

    cycler(arg)
    cycler(label1=itr1[, label2=iter2[, ...]])
    cycler(label, itr)

    Form 1 copies a given `Cycler` object.

    Form 2 composes a `Cycler` as an inner product of the pairs of keyword
    arguments. In other words, all of the iterables are cycled simultaneously,
    as if through zip().

    Form 3 creates a `Cycler` from a label and an iterable. This is useful
    for when the label cannot be a keyword argument (e.g., an integer or a
    name that has a space in it).

    Raises:
        ArityError: If positional and keyword arguments are mixed, if
            neither is given, or if the positional shape is unusable
        UnsupportedOperationError: If more than one positional Cycler is given
    """
    if args and kwargs:
        raise ArityError(
            "cycler() can only accept positional OR keyword arguments -- not both."
        )

    if sum(isinstance(a, Cycler) for a in args) > 1:
        raise UnsupportedOperationError(
            "Only a single Cycler can be accepted as the lone positional argument. "
            "Use keyword arguments instead."
        )

    if len(args) == 1:
        if not isinstance(args[0], Cycler):
            raise ArityError(
                "If only one positional argument given, it must be a Cycler instance."
            )
        return copy_of(args[0])
    elif len(args) == 2:
        if not isinstance(args[0], Hashable):
            raise ArityError(
                f"The label of cycler(label, itr) must be hashable, not {type(args[0]).__name__}"
            )
        return _cycler(*args)
    elif len(args) > 2:
        raise ArityError(
            f"cycler() takes at most 2 positional arguments ({len(args)} given)"
        )

    if kwargs:
        return reduce(add, (_cycler(k, v) for k, v in kwargs.items()))

    raise ArityError("Must have at least a positional OR keyword arguments")


def _cycler(label: Hashable, itr) -> Cycler:
    """
    Create a new `Cycler` object from a property name and iterable of values.

    If `itr` is a single-key Cycler its values are taken over under `label`.
    """
    if isinstance(itr, Cycler):
        keys = itr.keys
        if len(keys) != 1:
            raise UnsupportedOperationError(
                "Can not create Cycler from a multi-property Cycler"
            )
        lab = keys.pop()
        # Doesn't need to be a new list because
        # _from_iter() will be creating that new list anyway.
        itr = (v[lab] for v in itr)

    return Cycler._from_iter(label, itr)


def concat(left: Cycler, right: Cycler) -> Cycler:
    """
    Concatenate `Cycler`s, as if chained using `itertools.chain`.

    The keys must match exactly.

    Raises:
        KeyMismatchError: If the key sets differ, reporting the
            intersection and the symmetric difference
    """
    if left.keys != right.keys:
        raise KeyMismatchError(left.keys & right.keys, left.keys ^ right.keys)

    _l = left.by_key()
    _r = right.by_key()
    return _from_by_key({k: _l[k] + _r[k] for k in left.keys})


def copy_of(source: Cycler) -> Cycler:
    """Independent deep copy of `source`, values included."""
    return copy.deepcopy(source)


__all__ = [
    "CompositionOperator",
    "Cycler",
    "Record",
    "concat",
    "copy_of",
    "cycler",
]
