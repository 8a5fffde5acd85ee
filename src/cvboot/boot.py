"""Closed-shell mesh of the boot wall.

Vertices are emitted per axial sample and per angular sample as an
(outer, inner) pair, so the outer vertex of ring ``i`` at angle ``j`` has
index ``2 * (i * n_theta + j)`` and its inner partner follows it. Outer and
inner lateral surfaces are stitched between neighbouring rings and two
annular caps close the wall at the first and last ring.
"""

from __future__ import annotations

import numpy as np
from numpy.typing import DTypeLike

from cvboot._geometry import ring_angles, ring_points
from cvboot.mesh import Mesh
from cvboot.mesh_quality import MeshQuality, apply_lod
from cvboot.params import BootParameters
from cvboot.profile import RadiusProfile, radius_profile


def _resolve_quality(quality: MeshQuality | None) -> MeshQuality:
    if quality is None:
        return MeshQuality()
    return apply_lod(quality)


def boot_vertices(profile: RadiusProfile, angular_samples: int) -> np.ndarray:
    angles = ring_angles(angular_samples)
    heights = profile.heights
    outer = ring_points(profile.outer, heights, angles)
    inner = ring_points(profile.inner, heights, angles)
    return np.stack([outer, inner], axis=2).reshape(-1, 3)


def boot_faces(axial_samples: int, angular_samples: int) -> np.ndarray:
    """Triangles of the shell for the given sampling, shape (n_faces, 3)."""

    ring = np.arange(axial_samples * angular_samples, dtype=np.int64).reshape(axial_samples, angular_samples)
    outer = 2 * ring
    inner = outer + 1
    j_next = np.roll(np.arange(angular_samples), -1)

    o00, o01 = outer[:-1], outer[:-1, j_next]
    o10, o11 = outer[1:], outer[1:, j_next]
    i00, i01 = inner[:-1], inner[:-1, j_next]
    i10, i11 = inner[1:], inner[1:, j_next]
    lateral = np.stack(
        [
            np.stack([o00, o10, o11], axis=-1),
            np.stack([o00, o11, o01], axis=-1),
            # inner skin is wound the other way round
            np.stack([i00, i11, i10], axis=-1),
            np.stack([i00, i01, i11], axis=-1),
        ],
        axis=2,
    ).reshape(-1, 3)

    vo0, vo1 = outer[0], outer[0, j_next]
    vi0, vi1 = inner[0], inner[0, j_next]
    vo0b, vo1b = outer[-1], outer[-1, j_next]
    vi0b, vi1b = inner[-1], inner[-1, j_next]
    caps = np.stack(
        [
            np.stack([vo0, vi1, vi0], axis=-1),
            np.stack([vo0, vo1, vi1], axis=-1),
            np.stack([vo0b, vi0b, vi1b], axis=-1),
            np.stack([vo0b, vi1b, vo1b], axis=-1),
        ],
        axis=1,
    ).reshape(-1, 3)

    return np.vstack([lateral, caps])


def make_boot(params: BootParameters | None = None, quality: MeshQuality | None = None) -> Mesh:
    """Build the boot wall as a closed triangle mesh.

    Raises ``ValidationError`` when a parameter is NaN or infinite; any finite
    parameter set yields a full mesh, however degenerate its shape.
    """

    params = params or BootParameters()
    params.validate()
    quality = _resolve_quality(quality)

    profile = radius_profile(params, quality.axial_samples)
    vertices = boot_vertices(profile, quality.angular_samples)
    faces = boot_faces(quality.axial_samples, quality.angular_samples)
    metadata = {
        "parameters": params.to_dict(),
        "axial_samples": quality.axial_samples,
        "angular_samples": quality.angular_samples,
    }
    return Mesh(vertices, faces, metadata=metadata)


def build_mesh(
    params: BootParameters | None = None,
    quality: MeshQuality | None = None,
    dtype: DTypeLike = np.float64,
) -> tuple[np.ndarray, np.ndarray]:
    """Return ``(vertices, indices)``: (N, 3) positions and a flat uint32 triangle list.

    Pass ``dtype=np.float32`` to get single-precision positions, as GPU buffers
    and most STL exporters store them.
    """

    mesh = make_boot(params, quality)
    return mesh.vertices.astype(dtype, copy=False), mesh.indices


__all__ = ["boot_faces", "boot_vertices", "build_mesh", "make_boot"]
