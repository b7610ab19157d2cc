# topohomology

Tools for computing persistent homology from a filtered cell complex given
as a boundary matrix over Z/2, plus readers for Gmsh tetrahedral meshes and
the value files that go with them. It has no dependencies outside the
standard library.

## Modules

### `topohomology.reduction`

`BoundaryMatrix(columns, dimensions)` holds a square matrix as one set of
non-zero row indices per column, with one dimension per column. A
`ValueError` is raised if the counts differ or a row index lies outside the
matrix. Methods: `column`, `set_column`, `dimension`, `max_dimension`,
`pivot` (the largest row index, or `None` for an empty column),
`column_size`, `is_empty`, `add_to` (Z/2 column addition), `clear`,
`remove_max` (raises `IndexError` on an empty column) and `swap`.
`len(matrix)` gives the number of columns.

Reductions, each changing the matrix in place:

- `standard_reduction(matrix)`: left to right, eliminating repeated pivots.
- `twist_reduction(matrix)`: dimension by dimension from the top, clearing
  the column of each new pivot's row.
- `row_reduction(matrix)`: sweeps rows from the bottom up.
- `swap_twist_reduction(matrix)`: twist reduction that swaps columns so the
  sparser column keeps the pivot.

### `topohomology.parallel`

- `chunk_reduction(matrix, use_sqrt=False, threads=None)`: cuts the columns
  into chunks of `isqrt(n)` columns when `use_sqrt` is true, otherwise into
  `threads` chunks (default: the CPU count; one chunk if that exceeds the
  column count).
- `spectral_sequence_reduction(matrix, stripes=None)`: sweeps diagonal
  blocks of `stripes` stripes (default: the CPU count).

The chunks and stripes are processed one after another in a single thread.
A `threads` or `stripes` value below 1 raises `ValueError`.

### `topohomology.compress`

- `exhaustive_compress_reduction(matrix, compress=False)`: removes from each
  column every entry that is the pivot of an earlier column. With
  `compress=True`, each column first drops faces that are already negative
  columns.
- `lazy_retrospective_reduction(matrix)`: drops negative faces, then reduces
  earlier columns again when a column depends on them.

### `topohomology.pairs`

`PersistencePairs(pairs=())` is a list of `(birth, death)` pairs with
`len`, indexing, item assignment, `append(birth, death)`, `clear()` and
`sort()`. Two lists compare equal when they hold the same pairs in any order.

- `save_ascii(path)` / `PersistencePairs.load_ascii(path)`: a count, then
  one `birth death` line per pair.
- `save_binary(path)` / `PersistencePairs.load_binary(path)`: little-endian
  64-bit integers, the count first, then birth and death for each pair.

Both save methods sort the pairs first. The load methods raise `ValueError`
on a missing count or too few pairs.

### `topohomology.msh`

- `read_msh(path)` returns `(vertices, tetrahedra)`: a list of `Point3D(x,
  y, z)` and a list of `TetElement(v1, v2, v3, v4)`. Only elements of type 4
  are kept, with vertex indices made 0-based. Both `$Nodes`/`$Elements` and
  `$NOD`/`$ELM` section names are accepted.
- `read_vertex_alphas(path, adjustment)` reads one number per line and
  subtracts `adjustment`. Lines that do not start with a number are skipped.
- `read_sign_file(path)` reads one integer per line and keeps only -1, 0
  and 1.
- `read_tet_labels(path)` reads one integer label per line.

The readers report counts and skipped lines through the `logging` module,
under the `topohomology.msh` logger.

## Example

```python
from topohomology.reduction import BoundaryMatrix, twist_reduction

# A filled triangle: three vertices, three edges, one face.
columns = [[], [], [], [0, 1], [1, 2], [0, 2], [3, 4, 5]]
dimensions = [0, 0, 0, 1, 1, 1, 2]
matrix = BoundaryMatrix(columns, dimensions)
twist_reduction(matrix)

pairs = [
    (matrix.pivot(col), col)
    for col in range(len(matrix))
    if not matrix.is_empty(col)
]
print(pairs)  # [(1, 3), (2, 4), (5, 6)]
```

After a reduction, the pivot of each non-empty column gives a persistence
pair.

## What it does not do

The package is a library only. It has no command-line program. It does not
build boundary matrices from meshes or volumes, and it does not simplify the
topology of a shape. It provides the reductions, the pair files and the mesh
readers that such a tool would use.

## Installing and testing

```
pip install .
pip install ".[test]"
pytest
```