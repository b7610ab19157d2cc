"""Boundary matrices over Z/2 and the column reduction algorithms that pair them."""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Iterable


class BoundaryMatrix:
    """A square boundary matrix over Z/2 with a dimension for each column.

    Each column is held as the set of its non-zero row indices. Adding one
    column to another is a symmetric difference.
    """

    def __init__(self, columns: Iterable[Iterable[int]], dimensions: Iterable[int]):
        cols = [set(rows) for rows in columns]
        dims = list(dimensions)
        if len(cols) != len(dims):
            raise ValueError(
                f"{len(cols)} columns but {len(dims)} dimensions were given"
            )
        self._columns: list[set[int]] = []
        self._dimensions = dims
        for rows in cols:
            self._check_rows(rows, len(cols))
            self._columns.append(rows)

    @staticmethod
    def _check_rows(rows: set[int], size: int) -> None:
        for row in rows:
            if not 0 <= row < size:
                raise ValueError(f"row index {row} outside 0..{size - 1}")

    def __len__(self) -> int:
        return len(self._columns)

    def column(self, index: int) -> list[int]:
        """Return the non-zero rows of a column in ascending order."""
        return sorted(self._columns[index])

    def set_column(self, index: int, rows: Iterable[int]) -> None:
        new_rows = set(rows)
        self._check_rows(new_rows, len(self._columns))
        self._columns[index] = new_rows

    def dimension(self, index: int) -> int:
        return self._dimensions[index]

    def max_dimension(self) -> int:
        return max(self._dimensions, default=0)

    def pivot(self, index: int) -> int | None:
        """Return the lowest one (largest row index) of a column, or None if empty."""
        rows = self._columns[index]
        return max(rows) if rows else None

    def column_size(self, index: int) -> int:
        return len(self._columns[index])

    def is_empty(self, index: int) -> bool:
        return not self._columns[index]

    def add_to(self, source: int, target: int) -> None:
        """Add column ``source`` to column ``target`` modulo 2."""
        self._columns[target] ^= self._columns[source]

    def clear(self, index: int) -> None:
        self._columns[index] = set()

    def remove_max(self, index: int) -> None:
        rows = self._columns[index]
        if not rows:
            raise IndexError(f"column {index} is empty")
        rows.remove(max(rows))

    def swap(self, first: int, second: int) -> None:
        """Exchange the contents of two columns."""
        self._columns[first], self._columns[second] = (
            self._columns[second],
            self._columns[first],
        )


def standard_reduction(matrix: BoundaryMatrix) -> None:
    """Reduce the matrix in place, left to right, by eliminating repeated pivots."""
    owner: dict[int, int] = {}
    for col in range(len(matrix)):
        low = matrix.pivot(col)
        while low is not None and low in owner:
            matrix.add_to(owner[low], col)
            low = matrix.pivot(col)
        if low is not None:
            owner[low] = col


def twist_reduction(matrix: BoundaryMatrix) -> None:
    """Reduce dimension by dimension from the top, clearing columns known to be positive."""
    owner: dict[int, int] = {}
    for dim in range(matrix.max_dimension(), 0, -1):
        for col in range(len(matrix)):
            if matrix.dimension(col) != dim:
                continue
            low = matrix.pivot(col)
            while low is not None and low in owner:
                matrix.add_to(owner[low], col)
                low = matrix.pivot(col)
            if low is not None:
                owner[low] = col
                matrix.clear(low)


def row_reduction(matrix: BoundaryMatrix) -> None:
    """Reduce the matrix in place by sweeping rows from the bottom up."""
    by_pivot: defaultdict[int, list[int]] = defaultdict(list)
    for cur in range(len(matrix) - 1, -1, -1):
        if not matrix.is_empty(cur):
            by_pivot[matrix.pivot(cur)].append(cur)
        sharing = by_pivot.get(cur)
        if not sharing:
            continue
        matrix.clear(cur)
        source = min(sharing)
        for target in sharing:
            if target == source or matrix.is_empty(target):
                continue
            matrix.add_to(source, target)
            if not matrix.is_empty(target):
                by_pivot[matrix.pivot(target)].append(target)


def swap_twist_reduction(matrix: BoundaryMatrix) -> None:
    """Twist reduction that keeps the sparser of two columns as the pivot owner."""
    owner: dict[int, int] = {}
    swap_candidate: set[int] = set()
    for dim in range(matrix.max_dimension(), 0, -1):
        for col in range(len(matrix)):
            if matrix.dimension(col) != dim:
                continue
            low = matrix.pivot(col)
            while low is not None and low in owner:
                other = owner[low]
                if other in swap_candidate and matrix.column_size(col) < matrix.column_size(other):
                    matrix.swap(other, col)
                matrix.add_to(other, col)
                low = matrix.pivot(col)
            if low is not None:
                owner[low] = col
                matrix.clear(low)
                swap_candidate.add(col)