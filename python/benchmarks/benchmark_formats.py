import argparse
import logging
import sys
from typing import Dict, List, Optional

import numpy as np
import scipy.sparse as sp

from sparselab.log import get_logger, setup_logging
from sparselab.sparse import FORMATS, new_matrix
from sparselab.testing import fill_tridiagonal, summarize, time_op, tridiagonal_reference

logger = get_logger("benchmark_formats")

# ---------- Builders ----------


def build_tridiagonal(fmt: str, n: int):
    A = new_matrix(fmt)
    ok = fill_tridiagonal(A, n)
    return A, ok


def build_scipy_from_triplets(A) -> sp.coo_matrix:
    trips = list(A.to_triplets())
    row = np.array([t.row for t in trips], dtype=np.int64)
    col = np.array([t.col for t in trips], dtype=np.int64)
    data = np.array([t.value for t in trips], dtype=np.float64)
    return sp.coo_matrix((data, (row, col)), shape=A.shape)


def print_test_result(ok: bool, test_name: str) -> None:
    print(f"{test_name} test: {'PASSED' if ok else 'FAILED'}")


# ---------- Main ----------


def main(argv=None) -> int:
    p = argparse.ArgumentParser(description="Insertion and SpMV benchmarks across storage formats")
    p.add_argument("--n", type=int, default=2000, help="Size of the tridiagonal test matrix")
    p.add_argument(
        "--formats",
        type=str,
        default="all",
        help="Comma-separated formats: " + ", ".join(FORMATS),
    )
    p.add_argument("--warmup", type=int, default=1)
    p.add_argument("--repeat", type=int, default=3)
    p.add_argument("--validate", action="store_true", help="Check vmult against scipy.sparse")
    p.add_argument("--log-level", type=str.upper, default=None, choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    args = p.parse_args(argv)

    setup_logging(getattr(logging, args.log_level) if args.log_level else None)

    wanted = [f.strip() for f in args.formats.split(",") if f.strip()]
    if not wanted or "all" in wanted:
        wanted = list(FORMATS)
    unknown = [f for f in wanted if f not in FORMATS]
    if unknown:
        p.error(f"unknown formats: {', '.join(unknown)}")

    n = args.n
    x = np.arange(n, dtype=np.float64)
    y_ref = tridiagonal_reference(n)
    results: List[Optional[Dict[str, float]]] = []
    all_ok = True

    for fmt in wanted:
        logger.info("benchmarking %s with n=%d", fmt, n)
        times = time_op(lambda: build_tridiagonal(fmt, n), args.warmup, args.repeat)
        results.append(summarize(fmt + ":insert", times, 4.0 * (3 * n - 2)))

        A, fill_ok = build_tridiagonal(fmt, n)
        dims_ok = A.nrows == n and A.ncols == n and A.nnz == 3 * n - 2
        print_test_result(fill_ok, "insert")
        print_test_result(dims_ok, "dimension")

        times = time_op(lambda: A.vmult(x), args.warmup, args.repeat)
        results.append(summarize(fmt + ":vmult", times, 2.0 * A.nnz))
        y = A.vmult(x)
        vmult_ok = bool(np.array_equal(y, y_ref))
        print_test_result(vmult_ok, "vmult")

        if args.validate:
            y_scipy = build_scipy_from_triplets(A) @ x
            if not np.allclose(y, y_scipy, rtol=1e-12, atol=0.0):
                raise AssertionError(f"Validation failed: {fmt} vmult vs scipy")
        print(A.nrows, A.ncols, A.nnz)
        print("-" * 26)
        all_ok = all_ok and fill_ok and dims_ok and vmult_ok

    print(f"Format benchmarks: n={n} nnz={3 * n - 2}")
    for r in results:
        if not r:
            continue
        print(
            f"{r['name']:>20}: min {r['min_ms']:.3f} ms | median {r['median_ms']:.3f} ms | mean {r['mean_ms']:.3f} ms | {r['mops']:.2f} MOps/s"
        )
    return 0 if all_ok else 1


if __name__ == "__main__":
    sys.exit(main())
