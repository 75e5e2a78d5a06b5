import numpy as np
import pytest

from sparselab.errors import DimensionMismatch, NoSuchEntry, SparseError
from sparselab.sparse import FORMATS, Entry, SparseMatrix, new_matrix
from sparselab.testing import fill_tridiagonal, tridiagonal_reference

formats = pytest.mark.parametrize("fmt", sorted(FORMATS))


@formats
def test_new_matrix_is_empty(fmt):
    A = new_matrix(fmt)
    assert isinstance(A, SparseMatrix)
    assert A.format_name == fmt
    assert (A.nrows, A.ncols, A.nnz) == (0, 0, 0)
    assert list(A.to_triplets()) == []
    assert A.vmult([]).shape == (0,)


@formats
def test_tridiagonal_n6(fmt):
    A = new_matrix(fmt)
    assert fill_tridiagonal(A, 6)
    assert A.nrows == A.ncols == 6
    assert A.nnz == 16
    y = A.vmult(np.arange(6, dtype=np.float64))
    np.testing.assert_array_equal(y, np.array([1.0, 0.0, 0.0, 0.0, 0.0, -6.0]))
    np.testing.assert_array_equal(y, tridiagonal_reference(6))


@formats
def test_dimensions_grow_and_never_shrink(fmt):
    A = new_matrix(fmt)
    seen_rows = seen_cols = 0
    for r, c in [(3, 1), (0, 7), (2, 2), (9, 0), (1, 1)]:
        A.set_or_get_mut(r, c).value = 1.0
        assert A.nrows >= r + 1 and A.ncols >= c + 1
        assert A.nrows >= seen_rows and A.ncols >= seen_cols
        seen_rows, seen_cols = A.nrows, A.ncols
    assert A.shape == (10, 8)


@formats
def test_nnz_counts_distinct_pairs_including_zeros(fmt):
    A = new_matrix(fmt)
    A.set_or_get_mut(0, 0)
    A.set_or_get_mut(0, 0).value = 0.0
    A[1, 2] = 0.0
    A[1, 2] = 4.0
    A[2, 1] = 5.0
    assert A.nnz == 3
    assert A.get(0, 0) == 0.0


@formats
def test_write_read_consistency(fmt):
    rng = np.random.default_rng(1)
    A = new_matrix(fmt)
    expected = {}
    for (r, c), v in zip(rng.integers(0, 8, size=(60, 2)).tolist(), rng.standard_normal(60)):
        A.set_or_get_mut(r, c).value = v
        expected[(r, c)] = float(v)
        assert A.get(r, c) == float(v)
    assert A.nnz == len(expected)
    assert {(r, c): v for r, c, v in A.to_triplets()} == expected


@formats
def test_entry_handle(fmt):
    A = new_matrix(fmt)
    e = A.set_or_get_mut(2, 3)
    assert isinstance(e, Entry)
    assert (e.row, e.col, e.value) == (2, 3, 0.0)
    e.value = 1.5
    e += 2
    assert A.get(2, 3) == 3.5
    assert float(A.set_or_get_mut(2, 3)) == 3.5
    assert A.nnz == 1


@formats
def test_get_or_default_and_contains(fmt):
    A = new_matrix(fmt)
    A[1, 1] = 2.0
    assert A.get_or_default(1, 1) == 2.0
    assert A.get_or_default(0, 1) == 0.0
    assert A.get_or_default(5, 5, default=-1.0) == -1.0
    assert (1, 1) in A
    assert (0, 1) not in A
    assert A.nnz == 1


@formats
def test_error_taxonomy(fmt):
    A = new_matrix(fmt)
    fill_tridiagonal(A, 4)
    with pytest.raises(DimensionMismatch):
        A.vmult(np.ones(3))
    with pytest.raises(ValueError):
        A @ np.ones(5)
    with pytest.raises(NoSuchEntry):
        A.get(0, 3)
    with pytest.raises(NoSuchEntry):
        A[10, 0]
    with pytest.raises(KeyError):
        A.get(3, 0)
    with pytest.raises(SparseError):
        A.get(3, 0)


@formats
def test_invalid_indices(fmt):
    A = new_matrix(fmt)
    with pytest.raises(IndexError):
        A.set_or_get_mut(-1, 0)
    with pytest.raises(IndexError):
        A.get(0, -1)
    with pytest.raises(TypeError):
        A.set_or_get_mut(1.5, 0)
    assert A.nnz == 0
    A[np.int64(2), np.int32(1)] = 1.0
    assert A.shape == (3, 2)


def test_formats_agree_on_vmult():
    rng = np.random.default_rng(7)
    writes = list(zip(rng.integers(0, 30, size=(300, 2)).tolist(), rng.standard_normal(300)))
    mats = {}
    for fmt in FORMATS:
        A = new_matrix(fmt)
        for (r, c), v in writes:
            A[r, c] = v
        mats[fmt] = A
    shapes = {A.shape for A in mats.values()}
    nnzs = {A.nnz for A in mats.values()}
    assert len(shapes) == 1 and len(nnzs) == 1
    x = rng.standard_normal(mats["coo-sorted"].ncols)
    ref = mats["coo-sorted"].vmult(x)
    for fmt, A in mats.items():
        np.testing.assert_allclose(A.vmult(x), ref, rtol=1e-12, atol=1e-12, err_msg=fmt)
        np.testing.assert_allclose(A.toarray() @ x, ref, rtol=1e-12, atol=1e-12)


@formats
def test_vmult_matches_scipy(fmt):
    sp = pytest.importorskip("scipy.sparse")
    rng = np.random.default_rng(3)
    A = new_matrix(fmt)
    for (r, c), v in zip(rng.integers(0, 20, size=(120, 2)).tolist(), rng.standard_normal(120)):
        A[r, c] = v
    trips = list(A.to_triplets())
    B = sp.coo_matrix(
        ([t.value for t in trips], ([t.row for t in trips], [t.col for t in trips])),
        shape=A.shape,
    )
    x = rng.standard_normal(A.ncols)
    np.testing.assert_allclose(A.vmult(x), B @ x, rtol=1e-12, atol=1e-12)


@formats
def test_to_triplets_is_restartable(fmt):
    A = new_matrix(fmt)
    fill_tridiagonal(A, 5)
    first = list(A.to_triplets())
    assert list(A.to_triplets()) == first
    assert len(first) == A.nnz == 13
    assert "nnz=13" in repr(A)


def test_fill_tridiagonal_needs_two_rows():
    with pytest.raises(ValueError):
        fill_tridiagonal(new_matrix("coo-sorted"), 1)


@formats
def test_entry_handles_survive_later_writes(fmt):
    A = new_matrix(fmt)
    handles = {}
    for r, c in [(5, 5), (3, 7), (0, 0), (9, 1), (5, 0), (2, 2), (12, 4), (0, 9)]:
        handles[(r, c)] = A.set_or_get_mut(r, c)
        # later inserts land before, after and between earlier entries
        for k in range(3):
            A[(r + k) % 13, (c + 2 * k + 1) % 11] = 1.0
    for (r, c), e in handles.items():
        e.value = 100.0 * r + c
    for (r, c) in handles:
        assert A.get(r, c) == 100.0 * r + c


@formats
def test_write_defaults_to_stdout(fmt, capsys):
    A = new_matrix(fmt)
    A[1, 0] = 2.5
    A[0, 1] = -1.0
    A.write()
    lines = capsys.readouterr().out.splitlines()
    assert sorted(lines) == ["0,1,-1.0", "1,0,2.5"]
