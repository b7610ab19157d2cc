import itertools
import random

import pytest

from topohomology.parallel import chunk_reduction, spectral_sequence_reduction
from topohomology.reduction import BoundaryMatrix, standard_reduction


def _filtration(num_vertices, max_dim, seed):
    rng = random.Random(seed)
    weights = [rng.random() for _ in range(num_vertices)]
    simplices = [
        simplex
        for dim in range(max_dim + 1)
        for simplex in itertools.combinations(range(num_vertices), dim + 1)
    ]
    simplices.sort(key=lambda s: (max(weights[v] for v in s), len(s), s))
    position = {s: i for i, s in enumerate(simplices)}
    columns = []
    for s in simplices:
        if len(s) == 1:
            columns.append([])
        else:
            columns.append(
                [position[face] for face in itertools.combinations(s, len(s) - 1)]
            )
    dims = [len(s) - 1 for s in simplices]
    return columns, dims


def _triangle():
    columns = [[], [], [], [0, 1], [1, 2], [0, 2], [3, 4, 5]]
    dims = [0, 0, 0, 1, 1, 1, 2]
    return columns, dims


def _pairs(matrix):
    return sorted(
        (matrix.pivot(col), col)
        for col in range(len(matrix))
        if matrix.pivot(col) is not None
    )


def _reference_pairs(columns, dims):
    matrix = BoundaryMatrix(columns, dims)
    standard_reduction(matrix)
    return _pairs(matrix)


def _assert_reduced(matrix):
    pivots = [matrix.pivot(c) for c in range(len(matrix)) if matrix.pivot(c) is not None]
    assert len(pivots) == len(set(pivots))


def test_chunk_triangle_pairs():
    columns, dims = _triangle()
    matrix = BoundaryMatrix(columns, dims)
    chunk_reduction(matrix, False, 2)
    assert _pairs(matrix) == [(1, 3), (2, 4), (5, 6)]


def test_spectral_triangle_pairs():
    columns, dims = _triangle()
    matrix = BoundaryMatrix(columns, dims)
    spectral_sequence_reduction(matrix, 3)
    assert _pairs(matrix) == _reference_pairs(columns, dims)


@pytest.mark.parametrize("seed", range(5))
@pytest.mark.parametrize("use_sqrt", [False, True])
@pytest.mark.parametrize("threads", [1, 2, 3, 7])
def test_chunk_matches_standard(seed, use_sqrt, threads):
    columns, dims = _filtration(6, 3, seed)
    matrix = BoundaryMatrix(columns, dims)
    chunk_reduction(matrix, use_sqrt, threads)
    _assert_reduced(matrix)
    assert _pairs(matrix) == _reference_pairs(columns, dims)


@pytest.mark.parametrize("seed", range(5))
@pytest.mark.parametrize("stripes", [1, 2, 4, 9, 100])
def test_spectral_matches_standard(seed, stripes):
    columns, dims = _filtration(6, 3, seed)
    matrix = BoundaryMatrix(columns, dims)
    spectral_sequence_reduction(matrix, stripes)
    _assert_reduced(matrix)
    assert _pairs(matrix) == _reference_pairs(columns, dims)


def test_chunk_with_more_threads_than_columns():
    columns, dims = _triangle()
    matrix = BoundaryMatrix(columns, dims)
    chunk_reduction(matrix, threads=50)
    assert _pairs(matrix) == _reference_pairs(columns, dims)


def test_default_arguments_match_standard():
    columns, dims = _filtration(5, 2, 11)
    first = BoundaryMatrix(columns, dims)
    second = BoundaryMatrix(columns, dims)
    chunk_reduction(first)
    spectral_sequence_reduction(second)
    expected = _reference_pairs(columns, dims)
    assert _pairs(first) == expected
    assert _pairs(second) == expected


def test_paired_positive_columns_are_cleared():
    columns, dims = _filtration(5, 2, 3)
    matrix = BoundaryMatrix(columns, dims)
    chunk_reduction(matrix, True, 2)
    for birth, _ in _pairs(matrix):
        assert matrix.is_empty(birth)


def test_empty_matrix_is_left_empty():
    matrix = BoundaryMatrix([], [])
    chunk_reduction(matrix, False, 4)
    spectral_sequence_reduction(matrix, 4)
    assert len(matrix) == 0


def test_chunk_rejects_zero_threads():
    columns, dims = _triangle()
    with pytest.raises(ValueError):
        chunk_reduction(BoundaryMatrix(columns, dims), False, 0)


def test_spectral_rejects_zero_stripes():
    columns, dims = _triangle()
    with pytest.raises(ValueError):
        spectral_sequence_reduction(BoundaryMatrix(columns, dims), 0)