"""Hexahedral mesh reconstruction from constrained point sets, with a matplotlib 3D viewer."""

__version__ = "0.1.0"
__all__ = ["__version__"]