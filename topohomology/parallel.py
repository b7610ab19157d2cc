"""Block-structured reductions: the chunk algorithm and the spectral sequence algorithm.

Both split the columns into blocks that can be reduced independently. The
blocks are processed one after another here, which yields the same pairing
as running them side by side.
"""

from __future__ import annotations

import enum
import math
import os

from topohomology.reduction import BoundaryMatrix


class _ColumnType(enum.Enum):
    GLOBAL = enum.auto()
    LOCAL_POSITIVE = enum.auto()
    LOCAL_NEGATIVE = enum.auto()


def _worker_count(value: int | None, name: str) -> int:
    if value is None:
        return os.cpu_count() or 1
    if value < 1:
        raise ValueError(f"{name} must be at least 1, got {value}")
    return value


def chunk_reduction(
    matrix: BoundaryMatrix, use_sqrt: bool = False, threads: int | None = None
) -> None:
    """Reduce the matrix in place with the chunk algorithm.

    Columns are cut into chunks of ``sqrt(n)`` columns when ``use_sqrt`` is
    true, otherwise into ``threads`` chunks. Pivots local to a chunk and its
    left neighbour are eliminated first; the remaining global columns are then
    simplified and reduced as in the twist algorithm.
    """
    n = len(matrix)
    workers = _worker_count(threads, "threads")
    if n == 0:
        return
    if workers > n:
        workers = 1

    max_dim = matrix.max_dimension()
    lookup: list[int | None] = [None] * n
    types = [_ColumnType.GLOBAL] * n
    is_active = [False] * n

    chunk_size = math.isqrt(n) if use_sqrt else n // workers
    chunk_size = max(chunk_size, 1)
    bounds = list(range(0, n, chunk_size)) + [n]
    chunks = list(zip(bounds, bounds[1:]))

    for dim in range(max_dim, 0, -1):
        for begin, end in chunks:
            _local_chunk_reduction(matrix, lookup, types, dim, begin, end, begin)
        for (prev_begin, _), (begin, end) in zip(chunks, chunks[1:]):
            _local_chunk_reduction(matrix, lookup, types, dim, begin, end, prev_begin)

    global_columns = [col for col in range(n) if types[col] is _ColumnType.GLOBAL]
    for col in global_columns:
        is_active[col] = True
    _mark_active_columns(matrix, lookup, types, global_columns, is_active)

    for dim in range(max_dim, 0, -1):
        for col in global_columns:
            if matrix.dimension(col) == dim:
                _simplify_global_column(col, matrix, lookup, types, is_active)

        for col in global_columns:
            if matrix.dimension(col) != dim or types[col] is not _ColumnType.GLOBAL:
                continue
            low = matrix.pivot(col)
            while low is not None and lookup[low] is not None:
                matrix.add_to(lookup[low], col)
                low = matrix.pivot(col)
            if low is not None:
                lookup[low] = col
                matrix.clear(low)


def _local_chunk_reduction(
    matrix: BoundaryMatrix,
    lookup: list[int | None],
    types: list[_ColumnType],
    dim: int,
    chunk_begin: int,
    chunk_end: int,
    row_begin: int,
) -> None:
    for col in range(chunk_begin, chunk_end):
        if types[col] is not _ColumnType.GLOBAL or matrix.dimension(col) != dim:
            continue
        low = matrix.pivot(col)
        while low is not None and low >= row_begin and lookup[low] is not None:
            matrix.add_to(lookup[low], col)
            low = matrix.pivot(col)
        if low is not None and low >= row_begin:
            lookup[low] = col
            types[col] = _ColumnType.LOCAL_NEGATIVE
            types[low] = _ColumnType.LOCAL_POSITIVE
            matrix.clear(low)


def _mark_active_columns(
    matrix: BoundaryMatrix,
    lookup: list[int | None],
    types: list[_ColumnType],
    global_columns: list[int],
    is_active: list[bool],
) -> None:
    finished = [False] * len(matrix)
    for start in global_columns:
        pop_next = False
        stack: list[tuple[int, int | None]] = [(start, None)]
        while stack:
            cur, prev = stack[-1]
            if pop_next:
                stack.pop()
                pop_next = False
                if prev is not None:
                    if is_active[cur]:
                        is_active[prev] = True
                    if stack and prev == stack[-1][0]:
                        finished[prev] = True
                        pop_next = True
            else:
                pop_next = True
                for row in matrix.column(cur):
                    kind = types[row]
                    if kind is _ColumnType.GLOBAL:
                        is_active[cur] = True
                    elif kind is _ColumnType.LOCAL_POSITIVE:
                        nxt = lookup[row]
                        if nxt is not None and nxt != cur and not finished[cur]:
                            stack.append((nxt, cur))
                            pop_next = False


def _simplify_global_column(
    col: int,
    matrix: BoundaryMatrix,
    lookup: list[int | None],
    types: list[_ColumnType],
    is_active: list[bool],
) -> None:
    kept: list[int] = []
    while not matrix.is_empty(col):
        row = matrix.pivot(col)
        kind = types[row]
        if kind is _ColumnType.GLOBAL:
            kept.append(row)
            matrix.remove_max(col)
        elif kind is _ColumnType.LOCAL_NEGATIVE:
            matrix.remove_max(col)
        else:
            owner = lookup[row]
            if owner is not None and is_active[owner]:
                matrix.add_to(owner, col)
            else:
                matrix.remove_max(col)
    matrix.set_column(col, kept)


def spectral_sequence_reduction(matrix: BoundaryMatrix, stripes: int | None = None) -> None:
    """Reduce the matrix in place by sweeping diagonal blocks of ``stripes`` stripes."""
    n = len(matrix)
    num_stripes = _worker_count(stripes, "stripes")
    if n == 0:
        return
    block_size = -(-n // num_stripes)
    lookup: list[int | None] = [None] * n
    pending: list[list[int]] = [[] for _ in range(num_stripes)]

    for dim in range(matrix.max_dimension(), 0, -1):
        for stripe in range(num_stripes):
            col_begin = stripe * block_size
            col_end = min((stripe + 1) * block_size, n)
            pending[stripe].extend(
                col
                for col in range(col_begin, col_end)
                if matrix.dimension(col) == dim and matrix.pivot(col) is not None
            )

        for cur_pass in range(num_stripes):
            for stripe in range(num_stripes):
                row_begin = (stripe - cur_pass) * block_size
                row_end = row_begin + block_size
                still_open: list[int] = []
                for col in pending[stripe]:
                    low = matrix.pivot(col)
                    while (
                        low is not None
                        and row_begin <= low < row_end
                        and lookup[low] is not None
                    ):
                        matrix.add_to(lookup[low], col)
                        low = matrix.pivot(col)
                    if low is None:
                        continue
                    if row_begin <= low < row_end:
                        lookup[low] = col
                        matrix.clear(low)
                    else:
                        still_open.append(col)
                pending[stripe] = still_open