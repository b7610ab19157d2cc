"""Persistent homology: boundary-matrix reductions, persistence pairs and Gmsh mesh readers."""

__version__ = "0.1.0"

__all__ = ["reduction", "pairs", "parallel", "compress", "msh"]