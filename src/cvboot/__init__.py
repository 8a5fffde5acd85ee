"""cvboot – parametric CV boot mesh generator."""

from __future__ import annotations

from .boot import build_mesh, make_boot
from .io.stl import serialize_mesh, write_stl
from .mesh import Mesh, analyze_mesh
from .mesh_quality import MeshQuality
from .params import BootParameters, load_parameters
from .profile import radius_profile
from .validation import ValidationError

__all__ = [
    "BootParameters",
    "Mesh",
    "MeshQuality",
    "ValidationError",
    "__version__",
    "analyze_mesh",
    "build_mesh",
    "load_parameters",
    "make_boot",
    "radius_profile",
    "serialize_mesh",
    "write_stl",
]

__version__ = "0.1.0"
