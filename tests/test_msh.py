import math

import pytest

from topohomology.msh import (
    Point3D,
    TetElement,
    read_msh,
    read_sign_file,
    read_tet_labels,
    read_vertex_alphas,
)

MESH = """$MeshFormat
2.2 0 8
$EndMeshFormat
$Nodes
5
1 0 0 0
2 1 0 0
3 0 1 0
4 0 0 1
5 1 1 1
$EndNodes
$Elements
3
1 15 2 0 1 1
2 2 2 0 1 1 2 3
3 4 2 0 1 1 2 5 4
$EndElements
"""


@pytest.fixture
def mesh_file(tmp_path):
    path = tmp_path / "mesh.msh"
    path.write_text(MESH)
    return path


def test_read_msh_vertices(mesh_file):
    vertices, _ = read_msh(mesh_file)
    assert vertices == [
        Point3D(0, 0, 0),
        Point3D(1, 0, 0),
        Point3D(0, 1, 0),
        Point3D(0, 0, 1),
        Point3D(1, 1, 1),
    ]


def test_read_msh_keeps_only_tetrahedra_zero_based(mesh_file):
    _, tets = read_msh(mesh_file)
    assert len(tets) == 1
    tet = tets[0]
    assert (tet.v1 + 1, tet.v2 + 1, tet.v3 + 1, tet.v4 + 1) == (1, 2, 5, 4)


def test_read_msh_tet_indices_are_within_vertices(mesh_file):
    vertices, tets = read_msh(mesh_file)
    for tet in tets:
        assert all(0 <= v < len(vertices) for v in (tet.v1, tet.v2, tet.v3, tet.v4))


def test_read_msh_legacy_node_header(tmp_path):
    path = tmp_path / "legacy.msh"
    path.write_text("$NOD\n2\n1 0.5 1.5 2.5\n2 3 4 5\n$ENDNOD\n")
    vertices, tets = read_msh(path)
    assert vertices == [Point3D(0.5, 1.5, 2.5), Point3D(3, 4, 5)]
    assert tets == []


def test_read_msh_ignores_nodes_beyond_count(tmp_path):
    path = tmp_path / "extra.msh"
    path.write_text("$Nodes\n1\n1 1 2 3\n2 4 5 6\n$EndNodes\n")
    vertices, _ = read_msh(path)
    assert vertices == [Point3D(1, 2, 3)]


def test_read_msh_missing_file(tmp_path):
    with pytest.raises(OSError):
        read_msh(tmp_path / "absent.msh")


def test_read_vertex_alphas_applies_adjustment_and_skips_bad_lines(tmp_path):
    path = tmp_path / "alphas.txt"
    path.write_text("0.5\n-1.25\nbad\ninfinity\n\n2\n")
    adjustment = 0.25
    alphas = read_vertex_alphas(path, adjustment)
    assert len(alphas) == 4
    restored = [a + adjustment for a in alphas]
    assert restored[:2] == [0.5, -1.25]
    assert math.isinf(restored[2]) and restored[2] > 0
    assert restored[3] == 2.0


def test_read_vertex_alphas_zero_adjustment_round_trip(tmp_path):
    values = [0.125, -3.5, 7.0]
    path = tmp_path / "alphas.txt"
    path.write_text("\n".join(repr(v) for v in values) + "\n")
    assert read_vertex_alphas(path, 0.0) == values


def test_read_vertex_alphas_missing_file(tmp_path):
    with pytest.raises(OSError):
        read_vertex_alphas(tmp_path / "absent.txt", 0.0)


def test_read_sign_file_filters_values(tmp_path):
    path = tmp_path / "signs.txt"
    path.write_text("1\n-1\n0\n2\nabc\n  1  \n\n")
    assert read_sign_file(path) == [1, -1, 0, 1]


def test_read_sign_file_missing_file(tmp_path):
    with pytest.raises(OSError):
        read_sign_file(tmp_path / "absent.txt")


def test_read_tet_labels(tmp_path):
    path = tmp_path / "labels.txt"
    path.write_text("1\n-1\n7\nx\n\n-1\n")
    assert read_tet_labels(path) == [1, -1, 7, -1]


def test_read_tet_labels_reads_leading_integer(tmp_path):
    path = tmp_path / "labels.txt"
    path.write_text("5abc\n 3 \n")
    assert read_tet_labels(path) == [5, 3]


def test_read_tet_labels_missing_file(tmp_path):
    with pytest.raises(OSError):
        read_tet_labels(tmp_path / "absent.txt")


def test_tet_element_defaults_are_zero():
    assert TetElement() == TetElement(0, 0, 0, 0)