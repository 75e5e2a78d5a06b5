"""Exception types raised by sparselab matrices.

Every error also derives from the closest builtin exception, so callers that
catch ``ValueError``/``KeyError``/``IndexError`` keep working.
"""


class SparseError(Exception):
    """Base exception for sparselab errors."""
    pass


class DimensionMismatch(SparseError, ValueError):
    """Raised when an operand's shape disagrees with the matrix shape."""
    pass


class NoSuchEntry(SparseError, KeyError):
    """Raised when reading a (row, col) pair that was never written."""

    def __init__(self, row, col, message=None):
        self.row = row
        self.col = col
        super().__init__(message or f"no entry stored at ({row}, {col})")
        self._init_args = (row, col, message)

    def __str__(self):
        # KeyError quotes its argument; keep the plain message
        return str(self.args[0])

    def __reduce__(self):
        return (type(self), self._init_args)


class RowOutOfRange(NoSuchEntry, IndexError):
    """Raised by row-indexed matrices when reading a row ``>= nrows``."""

    def __init__(self, row, col, nrows):
        self.nrows = nrows
        super().__init__(row, col, f"row {row} out of range for matrix with {nrows} rows")
        self._init_args = (row, col, nrows)
