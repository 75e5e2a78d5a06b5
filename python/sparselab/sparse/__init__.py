import functools

from .base import Entry, SparseMatrix, Triplet
from .coo import CoordinateMatrix
from .rowmap import RowIndexedMatrix, SortedRow

# Closed set of storage variants, by name
FORMATS = {
    "coo-sorted": functools.partial(CoordinateMatrix, keep_sorted=True),
    "coo-unsorted": functools.partial(CoordinateMatrix, keep_sorted=False),
    "map-ordered": functools.partial(RowIndexedMatrix, ordered=True),
    "map-unordered": functools.partial(RowIndexedMatrix, ordered=False),
}


def new_matrix(fmt=None):
    """Create an empty matrix of the named format.

    Parameters
    ----------
    fmt : str, optional
        One of `FORMATS`. Defaults to `sparselab.get_default_format()`.

    Raises
    ------
    ValueError
        If ``fmt`` is not a known format.
    """
    if fmt is None:
        from .._runtime import get_default_format

        fmt = get_default_format()
    try:
        factory = FORMATS[fmt]
    except KeyError:
        raise ValueError(
            f"unknown sparse format {fmt!r}; expected one of {sorted(FORMATS)}"
        ) from None
    return factory()


__all__ = [
    "SparseMatrix",
    "CoordinateMatrix",
    "RowIndexedMatrix",
    "SortedRow",
    "Entry",
    "Triplet",
    "FORMATS",
    "new_matrix",
]
