"""Readers for Gmsh tetrahedral meshes and the per-vertex and per-tet value files."""

from __future__ import annotations

import logging
import math
import re
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)

_TET_ELEMENT_TYPE = 4
_TRIM = " \t\r\n"
_INT_RE = re.compile(r"[+-]?\d+")
_FLOAT_RE = re.compile(
    r"[+-]?(?:(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?|inf(?:inity)?|nan)",
    re.IGNORECASE,
)
_INT32_MIN = -(2**31)
_INT32_MAX = 2**31 - 1


@dataclass(frozen=True)
class Point3D:
    """A mesh vertex position."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0


@dataclass(frozen=True)
class TetElement:
    """A tetrahedron given by four zero-based vertex indices."""

    v1: int = 0
    v2: int = 0
    v3: int = 0
    v4: int = 0


def _leading_int(text: str) -> int | None:
    match = _INT_RE.match(text)
    return int(match.group()) if match else None


def _leading_float(text: str) -> float | None:
    match = _FLOAT_RE.match(text)
    return float(match.group()) if match else None


def _parse_fields(line: str, kinds: Sequence[type]) -> list:
    """Read whitespace-separated fields; once one fails, it and the rest read as zero."""
    tokens = line.split()
    values: list = []
    for position, kind in enumerate(kinds):
        value = None
        if position < len(tokens):
            parse: Callable[[str], object] = _leading_int if kind is int else _leading_float
            value = parse(tokens[position])
        if value is None:
            values.extend(k(0) for k in kinds[position:])
            break
        values.append(value)
    return values


def _read_count(line: str) -> int:
    return _parse_fields(line, (int,))[0]


def read_msh(path: str | Path) -> tuple[list[Point3D], list[TetElement]]:
    """Read the vertices and tetrahedra of a Gmsh mesh file.

    Only elements of type 4 (tetrahedra) are kept; their vertex indices are
    converted from one-based to zero-based.
    """
    vertices: list[Point3D] = []
    tetrahedra: list[TetElement] = []
    in_nodes = in_elements = False
    num_nodes = nodes_read = 0
    num_elements = elements_read = 0

    with open(path, encoding="utf-8", errors="replace") as handle:
        lines = iter(handle)
        for raw in lines:
            line = raw.strip(_TRIM)
            if not line:
                continue

            if line in ("$Nodes", "$NOD"):
                in_nodes, in_elements = True, False
                num_nodes = _read_count(next(lines, ""))
                nodes_read = 0
                continue
            if line in ("$EndNodes", "$ENDNOD"):
                in_nodes = False
                continue
            if line in ("$Elements", "$ELM"):
                in_elements, in_nodes = True, False
                num_elements = _read_count(next(lines, ""))
                elements_read = 0
                continue
            if line in ("$EndElements", "$ENDELM"):
                in_elements = False
                continue

            if in_nodes and nodes_read < num_nodes:
                _, x, y, z = _parse_fields(line, (int, float, float, float))
                vertices.append(Point3D(x, y, z))
                nodes_read += 1

            if in_elements and elements_read < num_elements:
                _, element_type, num_tags = _parse_fields(line, (int, int, int))
                if element_type == _TET_ELEMENT_TYPE:
                    skip = max(num_tags, 0)
                    fields = _parse_fields(line, (int,) * (3 + skip + 4))
                    a, b, c, d = fields[3 + skip :]
                    tetrahedra.append(TetElement(a - 1, b - 1, c - 1, d - 1))
                elements_read += 1

    logger.info("Read %d vertices and %d tetrahedra", len(vertices), len(tetrahedra))
    return vertices, tetrahedra


def read_vertex_alphas(path: str | Path, adjustment: float) -> list[float]:
    """Read one alpha value per line, each reduced by ``adjustment``.

    Lines that do not start with a number are skipped.
    """
    alphas: list[float] = []
    with open(path, encoding="utf-8", errors="replace") as handle:
        for raw in handle:
            text = raw.lstrip()
            value = _leading_float(text)
            if value is None:
                continue
            if math.isinf(value) and "inf" not in text[:16].lower():
                continue
            alphas.append(value - adjustment)
    logger.info("Read %d vertex alpha values", len(alphas))
    return alphas


def _read_int_lines(path: str | Path) -> list[int]:
    values: list[int] = []
    with open(path, encoding="utf-8", errors="replace") as handle:
        for raw in handle:
            line = raw.strip(_TRIM)
            if not line:
                continue
            value = _leading_int(line)
            if value is None or not _INT32_MIN <= value <= _INT32_MAX:
                logger.warning("Could not parse line as integer: %s", line)
                continue
            values.append(value)
    return values


def read_sign_file(path: str | Path) -> list[int]:
    """Read one sign per line, keeping only the values -1, 0 and 1."""
    signs: list[int] = []
    for value in _read_int_lines(path):
        if value in (-1, 0, 1):
            signs.append(value)
        else:
            logger.warning("Invalid sign value %d (expected -1, 0, or 1), skipping", value)
    return signs


def read_tet_labels(path: str | Path) -> list[int]:
    """Read one integer label per tetrahedron, one per line."""
    labels = _read_int_lines(path)
    logger.info("Read %d tet labels", len(labels))
    logger.info("Count of +1 labels: %d", labels.count(1))
    logger.info("Count of -1 labels: %d", labels.count(-1))
    return labels