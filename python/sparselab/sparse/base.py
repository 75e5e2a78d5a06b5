"""Base class for mutable sparse matrices.

These classes define the interface shared by the concrete storage formats in
`sparselab.sparse`: dimension bookkeeping, element access, SpMV and triplet
enumeration. Dimensions are not fixed at construction; they grow as entries
are written.
"""
import logging
import operator
import sys
from collections import namedtuple

import numpy as np

from ..errors import DimensionMismatch, NoSuchEntry

logger = logging.getLogger(__name__)

Triplet = namedtuple("Triplet", ["row", "col", "value"])
Triplet.__doc__ = "A stored entry: ``(row, col, value)``."


def check_index(row, col):
    """Coerce ``row``/``col`` to non-negative Python ints.

    Raises
    ------
    TypeError
        If an index is not an integer.
    IndexError
        If an index is negative.
    """
    row = operator.index(row)
    col = operator.index(col)
    if row < 0 or col < 0:
        raise IndexError("negative indices are not supported")
    return row, col


class Entry:
    """Handle to a stored value, returned by `SparseMatrix.set_or_get_mut`.

    The handle reads and writes ``store[key]``, where ``store`` is the cell or
    row container owning the value. COO cells move between list slots as
    whole objects and row containers own their values by column, so a handle
    stays attached to its entry across later inserts, shifts and row growth.

    Attributes
    ----------
    row, col : int
        Position of the entry.
    value : float
        Current value. Assigning stores ``float(value)`` in the matrix.
    """

    __slots__ = ("row", "col", "_store", "_key")

    def __init__(self, row, col, store, key):
        self.row = row
        self.col = col
        self._store = store
        self._key = key

    @property
    def value(self):
        return self._store[self._key]

    @value.setter
    def value(self, v):
        self._store[self._key] = float(v)

    def __iadd__(self, other):
        self.value = self.value + other
        return self

    def __float__(self):
        return float(self.value)

    def __repr__(self):
        return f"Entry(row={self.row}, col={self.col}, value={self.value!r})"


class SparseMatrix:
    """Abstract base class for growable 2D sparse matrices.

    Subclasses store entries and implement `_find`, `set_or_get_mut`,
    `vmult` and `to_triplets`. A new matrix is empty: ``nrows == ncols ==
    nnz == 0``.

    Attributes
    ----------
    nrows, ncols : int
        One past the largest row/column index ever written. Never shrink.
    nnz : int
        Number of distinct (row, col) pairs ever written, explicit zeros
        included.
    """

    format_name = None

    def __init__(self):
        self._nrows = 0
        self._ncols = 0
        self._nnz = 0
        logger.debug("created empty %s", type(self).__name__)

    @property
    def nrows(self):
        return self._nrows

    @property
    def ncols(self):
        return self._ncols

    @property
    def nnz(self):
        """Number of stored entries (int)."""
        return self._nnz

    @property
    def shape(self):
        return (self._nrows, self._ncols)

    def _grow(self, row, col):
        if row >= self._nrows:
            self._nrows = row + 1
        if col >= self._ncols:
            self._ncols = col + 1
        self._nnz += 1

    # Element access

    def _find(self, row, col):
        """Return the value stored at (row, col), raising `NoSuchEntry`."""
        raise NotImplementedError

    def get(self, row, col):
        """Return the value stored at (row, col).

        Raises
        ------
        NoSuchEntry
            If (row, col) was never written. Reads never insert.
        """
        row, col = check_index(row, col)
        return self._find(row, col)

    def get_or_default(self, row, col, default=0.0):
        """Return the stored value, or ``default`` for a never-written cell."""
        try:
            return self.get(row, col)
        except NoSuchEntry:
            return default

    def set_or_get_mut(self, row, col):
        """Get-or-insert the entry at (row, col).

        A missing entry is created with value 0.0; ``nnz`` is incremented and
        the dimensions are extended to cover it. An existing entry is returned
        unchanged.

        Returns
        -------
        Entry
            Handle whose ``value`` attribute reads and writes the entry.
        """
        raise NotImplementedError

    def set(self, row, col, value):
        """Store ``value`` at (row, col), inserting the entry if needed."""
        self.set_or_get_mut(row, col).value = value

    def __getitem__(self, key):
        row, col = key
        return self.get(row, col)

    def __setitem__(self, key, value):
        row, col = key
        self.set(row, col, value)

    def __contains__(self, key):
        row, col = key
        try:
            self.get(row, col)
        except NoSuchEntry:
            return False
        return True

    # Products

    def _check_operand(self, x):
        arr = np.asarray(x, dtype=np.float64)
        if arr.ndim != 1:
            raise DimensionMismatch("right operand must be 1D")
        if arr.shape[0] != self._ncols:
            raise DimensionMismatch(
                f"vector length {arr.shape[0]} must equal ncols {self._ncols}"
            )
        return arr

    def vmult(self, x):
        """Dense matrix-vector product ``y = A @ x``.

        Parameters
        ----------
        x : array_like
            1D vector of length ``ncols``.

        Returns
        -------
        numpy.ndarray
            New float64 vector of length ``nrows``. Only stored entries
            contribute.

        Raises
        ------
        DimensionMismatch
            If ``x`` is not 1D or its length differs from ``ncols``.
        """
        raise NotImplementedError

    def __matmul__(self, other):
        return self.vmult(other)

    # Enumeration / output

    def to_triplets(self):
        """Yield every stored entry as a `Triplet`, in format-defined order."""
        raise NotImplementedError

    def write(self, stream=None, sep=","):
        """Write one ``row<sep>col<sep>value`` line per stored entry."""
        if stream is None:
            stream = sys.stdout
        for r, c, v in self.to_triplets():
            stream.write(f"{r}{sep}{c}{sep}{v}\n")

    def toarray(self):
        """Return a dense numpy.ndarray of shape ``(nrows, ncols)``."""
        out = np.zeros(self.shape, dtype=np.float64)
        for r, c, v in self.to_triplets():
            out[r, c] = v
        return out

    def __repr__(self):
        return f"<{type(self).__name__} shape={self.shape} nnz={self._nnz}>"
