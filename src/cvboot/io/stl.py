from __future__ import annotations

from pathlib import Path
import struct
from typing import Iterator

import numpy as np

from cvboot._geometry import face_normals
from cvboot.mesh import Mesh

DEFAULT_SOLID_NAME = "cv_boot"


def _as_buffers(vertices, indices) -> tuple[np.ndarray, np.ndarray]:
    verts = np.asarray(vertices, dtype=float).reshape(-1, 3)
    faces = np.asarray(indices, dtype=np.int64).reshape(-1, 3)
    return verts, faces


def iter_ascii_stl(vertices, indices, solid_name: str = DEFAULT_SOLID_NAME) -> Iterator[str]:
    """Yield the lines of an ASCII STL document, one facet per triangle."""

    verts, faces = _as_buffers(vertices, indices)
    normals = face_normals(verts, faces)
    yield f"solid {solid_name}"
    for normal, tri in zip(normals, faces):
        nx, ny, nz = normal
        yield f"  facet normal {nx:.6e} {ny:.6e} {nz:.6e}"
        yield "    outer loop"
        for vidx in tri:
            vx, vy, vz = verts[vidx]
            yield f"      vertex {vx:.6e} {vy:.6e} {vz:.6e}"
        yield "    endloop"
        yield "  endfacet"
    yield f"endsolid {solid_name}"


def serialize_mesh(vertices, indices, solid_name: str = DEFAULT_SOLID_NAME) -> str:
    """Render vertex/index buffers as ASCII STL text.

    ``vertices`` may be flat or (N, 3); ``indices`` is a triangle list grouped
    in threes. Winding is written exactly as given.
    """

    return "\n".join(iter_ascii_stl(vertices, indices, solid_name)) + "\n"


def _binary_header(solid_name: str) -> bytes:
    return f"cvboot STL {solid_name}".encode("ascii", "replace")[:80].ljust(80, b"\0")


def write_stl(
    mesh: Mesh,
    path: Path,
    ascii: bool = True,
    solid_name: str = DEFAULT_SOLID_NAME,
) -> Path:
    path = Path(path)
    if ascii:
        path.write_text(serialize_mesh(mesh.vertices, mesh.faces, solid_name))
        return path

    normals = face_normals(mesh.vertices, mesh.faces)
    faces = mesh.faces
    vertices = mesh.vertices
    with path.open("wb") as handle:
        handle.write(_binary_header(solid_name))
        handle.write(struct.pack("<I", faces.shape[0]))
        for idx, tri in enumerate(faces):
            handle.write(
                struct.pack(
                    "<12fH",
                    *normals[idx],
                    *vertices[tri[0]],
                    *vertices[tri[1]],
                    *vertices[tri[2]],
                    0,
                )
            )
    return path


__all__ = ["DEFAULT_SOLID_NAME", "iter_ascii_stl", "serialize_mesh", "write_stl"]
