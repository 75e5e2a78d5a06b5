import bisect
import logging

import numpy as np

from ..errors import NoSuchEntry
from .base import Entry, SparseMatrix, Triplet, check_index

logger = logging.getLogger(__name__)

_ROW, _COL, _VAL = 0, 1, 2


def _cell_key(cell):
    return (cell[_ROW], cell[_COL])


class CoordinateMatrix(SparseMatrix):
    """Coordinate (COO) sparse matrix built by element-wise writes.

    Entries are kept in a flat list of ``[row, col, value]`` cells, at most one
    cell per (row, col).

    Parameters
    ----------
    keep_sorted : bool, optional
        If True, cells stay in ascending (row, col) order and lookups use
        binary search. If False (default), cells stay in insertion order and
        lookups scan linearly.

    Notes
    -----
    Sorted mode finds a key in O(log nnz) but still pays O(nnz) for every new
    key, because the cells after the insertion point are shifted one slot to
    the right. For a workload dominated by inserts it is therefore no faster
    asymptotically than unsorted mode; only lookups of existing entries
    benefit.

    Examples
    --------
    Build a small COO and run SpMV::

        >>> from sparselab.sparse import CoordinateMatrix
        >>> a = CoordinateMatrix(keep_sorted=True)
        >>> a[1, 2] = 3.0
        >>> a[0, 0] = 1.0
        >>> a.shape, a.nnz
        ((2, 3), 2)
        >>> list(a.to_triplets())
        [Triplet(row=0, col=0, value=1.0), Triplet(row=1, col=2, value=3.0)]
        >>> (a @ [1.0, 0.0, 1.0]).tolist()
        [1.0, 3.0]
    """

    def __init__(self, keep_sorted=False):
        self.keep_sorted = bool(keep_sorted)
        self._cells = []
        super().__init__()

    @property
    def format_name(self):
        return "coo-sorted" if self.keep_sorted else "coo-unsorted"

    def _locate(self, row, col):
        """Return ``(pos, found)`` for the key (row, col).

        In sorted mode ``pos`` is the insertion point when the key is missing;
        in unsorted mode it is ``len(cells)``.
        """
        cells = self._cells
        if self.keep_sorted:
            pos = bisect.bisect_left(cells, (row, col), key=_cell_key)
            found = pos < len(cells) and cells[pos][_ROW] == row and cells[pos][_COL] == col
            return pos, found
        for pos, cell in enumerate(cells):
            if cell[_ROW] == row and cell[_COL] == col:
                return pos, True
        return len(cells), False

    def _find(self, row, col):
        pos, found = self._locate(row, col)
        if not found:
            raise NoSuchEntry(row, col)
        return self._cells[pos][_VAL]

    def _insert(self, pos, cell):
        cells = self._cells
        if pos == len(cells):
            cells.append(cell)
            return
        # grow by one, shift [pos, n) right, then drop the new cell in place
        cells.append(cells[-1])
        for k in range(len(cells) - 2, pos, -1):
            cells[k] = cells[k - 1]
        cells[pos] = cell

    def set_or_get_mut(self, row, col):
        row, col = check_index(row, col)
        pos, found = self._locate(row, col)
        if found:
            cell = self._cells[pos]
        else:
            cell = [row, col, 0.0]
            self._insert(pos, cell)
            self._grow(row, col)
        return Entry(row, col, cell, _VAL)

    def vmult(self, x):
        arr = self._check_operand(x)
        logger.debug("coo vmult: shape=%s nnz=%d", self.shape, self._nnz)
        xs = arr.tolist()
        acc = [0.0] * self._nrows
        for r, c, v in self._cells:
            acc[r] += v * xs[c]
        return np.array(acc, dtype=np.float64)

    def to_triplets(self):
        for r, c, v in self._cells:
            yield Triplet(r, c, v)
