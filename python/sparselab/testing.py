"""Helpers shared by the test-suite and the benchmarks.

The tridiagonal fixture is the 1D Laplacian stencil ``[1, -2, 1]``; with
``x = arange(n)`` its product is ``[1, 0, ..., 0, -n]``.
"""
import time
from typing import Any, Callable, Dict, List, Optional

import numpy as np


def fill_tridiagonal(matrix, n: int) -> bool:
    """Write the ``n x n`` tridiagonal stencil into ``matrix`` and check it.

    Entries are written forward, rewritten backward (hitting the update path
    of the write accessor), then read back with ``get``.

    Returns
    -------
    bool
        True if every stored value reads back as written.
    """
    if n < 2:
        raise ValueError("tridiagonal fixture needs n >= 2")

    def put(i, j, v):
        matrix.set_or_get_mut(i, j).value = v

    put(0, 0, -2.0)
    put(0, 1, 1.0)
    for i in range(1, n - 1):
        put(i, i - 1, 1.0)
        put(i, i, -2.0)
        put(i, i + 1, 1.0)
    put(n - 1, n - 2, 1.0)
    put(n - 1, n - 1, -2.0)

    put(n - 1, n - 2, 1.0)
    put(n - 1, n - 1, -2.0)
    for i in range(n - 2, 0, -1):
        put(i, i - 1, 1.0)
        put(i, i, -2.0)
        put(i, i + 1, 1.0)
    put(0, 0, -2.0)
    put(0, 1, 1.0)

    get = matrix.get
    if not (get(n - 1, n - 2) == 1 and get(n - 1, n - 1) == -2 and get(0, 1) == 1 and get(0, 0) == -2):
        return False
    for i in range(n - 2, 0, -1):
        if get(i, i - 1) != 1 or get(i, i) != -2 or get(i, i + 1) != 1:
            return False
    return True


def tridiagonal_reference(n: int) -> np.ndarray:
    """Expected ``vmult(arange(n))`` for the matrix built by `fill_tridiagonal`."""
    out = np.zeros(n, dtype=np.float64)
    out[0] = 1.0
    out[n - 1] = -float(n)
    return out


def time_op(fn: Callable[[], Any], warmup: int, repeat: int) -> List[float]:
    for _ in range(warmup):
        fn()
    times: List[float] = []
    for _ in range(repeat):
        t0 = time.perf_counter()
        fn()
        t1 = time.perf_counter()
        times.append(t1 - t0)
    return times


def summarize(name: str, times: List[float], ops: float) -> Optional[Dict[str, float]]:
    if not times:
        return None
    arr = np.array(times, dtype=np.float64)
    return {
        "name": name,
        "min_ms": float(arr.min() * 1e3),
        "median_ms": float(np.median(arr) * 1e3),
        "mean_ms": float(arr.mean() * 1e3),
        "mops": float((ops / arr.min()) / 1e6) if ops > 0 and arr.min() > 0 else 0.0,
    }
