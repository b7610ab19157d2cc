"""Reductions that compress columns and eliminate every non-pivot entry they can.

These algorithms return the same pivots as the standard reduction. The
exhaustive variant also removes from each column every entry that is the
pivot of an earlier column. The lazy retrospective variant first reduces the
earlier columns it depends on.
"""

from __future__ import annotations

from topohomology.reduction import BoundaryMatrix


def exhaustive_compress_reduction(matrix: BoundaryMatrix, compress: bool = False) -> None:
    """Reduce the matrix in place, clearing every entry owned by an earlier pivot.

    With ``compress`` true, each column first drops the faces that are
    negative columns (columns that already own a pivot) before it is reduced.
    """
    n = len(matrix)
    owner: dict[int, int] = {}
    negative = [False] * n

    for col in range(n):
        if compress:
            matrix.set_column(col, [face for face in matrix.column(col) if not negative[face]])

        kept: list[int] = []
        has_pivot = False
        low = matrix.pivot(col)
        while low is not None:
            if low in owner:
                matrix.add_to(owner[low], col)
            else:
                if not has_pivot:
                    owner[low] = col
                    has_pivot = True
                    negative[col] = True
                kept.append(low)
                matrix.remove_max(col)
            low = matrix.pivot(col)

        matrix.set_column(col, kept)


def lazy_retrospective_reduction(matrix: BoundaryMatrix) -> None:
    """Reduce the matrix in place, reducing earlier columns again when they are needed."""
    positive_pair: dict[int, int] = {}
    negative_pair: dict[int, int] = {}

    for col in range(len(matrix)):
        if matrix.is_empty(col):
            continue

        matrix.set_column(
            col, [face for face in matrix.column(col) if face not in negative_pair]
        )

        stack = [col]
        while stack:
            top = stack[-1]
            dependency = next(
                (
                    positive_pair[face]
                    for face in matrix.column(top)
                    if face in positive_pair and positive_pair[face] != top
                ),
                None,
            )
            if dependency is not None:
                stack.append(dependency)
                continue
            done = stack.pop()
            if stack:
                matrix.add_to(done, stack[-1])

        if not matrix.is_empty(col):
            low = matrix.pivot(col)
            positive_pair[low] = col
            negative_pair[col] = low