"""
Exception taxonomy for propcycle.

Every error is raised synchronously at the offending call, before any
record is produced. Nothing here is retried or recovered from.

Each class also derives from the builtin exception a caller would
naturally catch (ValueError, KeyError, TypeError), so existing
`except ValueError:` handlers keep working.
"""


class CyclerError(Exception):
    """Base class for all propcycle errors."""
    pass


class KeyOverlapError(CyclerError, ValueError):
    """Raised when two Cyclers being composed share a property name."""

    def __init__(self, overlap):
        self.overlap = set(overlap)
        super().__init__(
            f"Can not compose overlapping cycles: {sorted(self.overlap, key=repr)}"
        )


class KeyMismatchError(CyclerError, ValueError):
    """Raised by concat when the two key sets are not identical."""

    def __init__(self, both, just_one):
        self.both = set(both)
        self.just_one = set(just_one)
        super().__init__(
            "\n\t".join([
                "Keys do not match:",
                f"Intersection: {self.both!r}",
                f"Disjoint: {self.just_one!r}",
            ])
        )


class LengthMismatchError(CyclerError, ValueError):
    """Raised by pairwise composition when operand lengths differ."""

    def __init__(self, left_length: int, right_length: int):
        self.left_length = left_length
        self.right_length = right_length
        super().__init__(
            f"Can only add equal length cycles, not {left_length} and {right_length}"
        )


class KeyNotFoundError(CyclerError, KeyError):
    """Raised by change_key when the old key is absent."""

    def __str__(self):
        # KeyError quotes its argument; keep the message readable
        return str(self.args[0]) if self.args else ""


class KeyAlreadyExistsError(CyclerError, ValueError):
    """Raised by change_key when the new key is already present."""
    pass


class UnsupportedOperationError(CyclerError, ValueError):
    """
    Raised for operations a Cycler does not support.

    Examples:
        - indexing with anything but a slice
        - renaming a multi-property Cycler into a leaf
        - building from more than one positional Cycler
        - repeating by a non-integer or negative count
        - multiplying by an operand that is neither a Cycler nor an int
    """
    pass


class ArityError(CyclerError, TypeError):
    """Raised when cycler() receives an unusable argument shape."""
    pass


__all__ = [
    "CyclerError",
    "KeyOverlapError",
    "KeyMismatchError",
    "LengthMismatchError",
    "KeyNotFoundError",
    "KeyAlreadyExistsError",
    "UnsupportedOperationError",
    "ArityError",
]
