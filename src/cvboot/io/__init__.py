"""Mesh export formats."""

from __future__ import annotations

from .stl import serialize_mesh, write_stl

__all__ = ["serialize_mesh", "write_stl"]
