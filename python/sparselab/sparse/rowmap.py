"""Row-indexed sparse matrix: one column -> value map per row.

Notes
-----
- The per-row container is chosen by a row policy at construction time:
  `SortedRow` (ordered) or a plain ``dict`` (unordered).
- Row lists grow on write; rows between the old and new last row start out
  empty.
"""
import bisect
import logging

import numpy as np

from ..errors import NoSuchEntry, RowOutOfRange
from .base import Entry, SparseMatrix, Triplet, check_index

logger = logging.getLogger(__name__)


class SortedRow:
    """Column -> value mapping that iterates in ascending column order.

    Keys are kept in a sorted list and found by binary search; values live
    in a dict keyed by column, so an `Entry` handle keeps working after
    later inserts into the same row.
    """

    __slots__ = ("_keys", "_values")

    def __init__(self):
        self._keys = []
        self._values = {}

    def __len__(self):
        return len(self._keys)

    def __contains__(self, col):
        keys = self._keys
        pos = bisect.bisect_left(keys, col)
        return pos < len(keys) and keys[pos] == col

    def __getitem__(self, col):
        if col not in self:
            raise KeyError(col)
        return self._values[col]

    def __setitem__(self, col, value):
        if col not in self:
            bisect.insort(self._keys, col)
        self._values[col] = value

    def __iter__(self):
        return iter(self._keys)

    def keys(self):
        return list(self._keys)

    def items(self):
        values = self._values
        for col in self._keys:
            yield col, values[col]

    def __repr__(self):
        return f"SortedRow({dict(self.items())!r})"


class RowIndexedMatrix(SparseMatrix):
    """Sparse matrix stored as a list of per-row column maps.

    Parameters
    ----------
    ordered : bool, optional
        If True (default), rows are `SortedRow` containers and iterate in
        column order (lookup/insert by binary search). If False, rows are
        plain dicts with O(1) expected lookup/insert and no ordering
        contract.

    Notes
    -----
    `vmult` is O(nnz) like COO, but each entry is reached through the row
    container's iterator rather than a flat list, which is where the formats
    differ in practice.

    Examples
    --------
    ::

        >>> from sparselab.sparse import RowIndexedMatrix
        >>> a = RowIndexedMatrix()
        >>> a.set_or_get_mut(1, 2).value = 3.0
        >>> a.nrows, a.ncols, a.nnz
        (2, 3, 1)
        >>> a.get(1, 2)
        3.0
    """

    def __init__(self, ordered=True):
        self.ordered = bool(ordered)
        self._row_type = SortedRow if self.ordered else dict
        self._rows = []
        super().__init__()

    @property
    def format_name(self):
        return "map-ordered" if self.ordered else "map-unordered"

    def _find(self, row, col):
        if row >= len(self._rows):
            raise RowOutOfRange(row, col, self._nrows)
        data = self._rows[row]
        if col not in data:
            raise NoSuchEntry(row, col)
        return data[col]

    def set_or_get_mut(self, row, col):
        row, col = check_index(row, col)
        rows = self._rows
        if row >= len(rows):
            logger.debug("growing %s rows %d -> %d", self.format_name, len(rows), row + 1)
            rows.extend(self._row_type() for _ in range(row + 1 - len(rows)))
        data = rows[row]
        if col not in data:
            data[col] = 0.0
            self._grow(row, col)
        return Entry(row, col, data, col)

    def vmult(self, x):
        arr = self._check_operand(x)
        logger.debug("%s vmult: shape=%s nnz=%d", self.format_name, self.shape, self._nnz)
        xs = arr.tolist()
        out = np.zeros(self._nrows, dtype=np.float64)
        for i, data in enumerate(self._rows):
            acc = 0.0
            for j, v in data.items():
                acc += v * xs[j]
            out[i] = acc
        return out

    def to_triplets(self):
        for i, data in enumerate(self._rows):
            for j, v in data.items():
                yield Triplet(i, j, v)
