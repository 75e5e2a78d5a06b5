from ._runtime import get_default_format, set_default_format
from .errors import DimensionMismatch, NoSuchEntry, RowOutOfRange, SparseError
from . import sparse as sparse
from .sparse import new_matrix

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "set_default_format",
    "get_default_format",
    "new_matrix",
    "sparse",
    "SparseError",
    "DimensionMismatch",
    "NoSuchEntry",
    "RowOutOfRange",
]
