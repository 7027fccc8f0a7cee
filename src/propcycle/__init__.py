"""
propcycle — composable property cycles

Builds finite, restartable sequences of property records that plotting
code walks through to style successive series.

    >>> from propcycle import cycler
    >>> cc = cycler(color=list('rgb')) * cycler(linestyle=['-', '--'])
    >>> len(cc)
    6

ARCHITECTURAL GUARANTEE:
------------------------
This package contains ZERO knowledge of:
    - Plotting libraries
    - Rendering or styling semantics
    - I/O or persistence

It composes records only. Consumers decide what the values mean.
"""

from propcycle.core import CompositionOperator, Cycler, concat, copy_of, cycler
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

__version__ = "0.1.0"

__all__ = [
    "ArityError",
    "CompositionOperator",
    "Cycler",
    "CyclerError",
    "KeyAlreadyExistsError",
    "KeyMismatchError",
    "KeyNotFoundError",
    "KeyOverlapError",
    "LengthMismatchError",
    "UnsupportedOperationError",
    "concat",
    "copy_of",
    "cycler",
]
