from __future__ import annotations

import numpy as np


def ring_angles(count: int) -> np.ndarray:
    """Evenly spaced angles over a full turn, without the duplicate at 2*pi."""
    return 2.0 * np.pi * np.arange(count) / count


def ring_points(radii: np.ndarray, heights: np.ndarray, angles: np.ndarray) -> np.ndarray:
    """Sweep per-row radii around the Y axis.

    Returns an array of shape (rows, len(angles), 3) with points at
    (r*cos(theta), height, r*sin(theta)).
    """

    radii = np.asarray(radii, dtype=float)[:, np.newaxis]
    heights = np.asarray(heights, dtype=float)[:, np.newaxis]
    cos_t = np.cos(angles)[np.newaxis, :]
    sin_t = np.sin(angles)[np.newaxis, :]
    x = radii * cos_t
    y = np.broadcast_to(heights, x.shape)
    z = radii * sin_t
    return np.stack([x, y, z], axis=-1)


def face_normals(vertices: np.ndarray, faces: np.ndarray) -> np.ndarray:
    """Unit normals of (b - a) x (c - a); zero-area faces keep their zero vector."""

    vertices = np.asarray(vertices, dtype=float).reshape(-1, 3)
    faces = np.asarray(faces, dtype=np.int64).reshape(-1, 3)
    if faces.shape[0] == 0:
        return np.zeros((0, 3), dtype=float)
    v0 = vertices[faces[:, 0]]
    v1 = vertices[faces[:, 1]]
    v2 = vertices[faces[:, 2]]
    normals = np.cross(v1 - v0, v2 - v0)
    lengths = np.linalg.norm(normals, axis=1)
    lengths[lengths == 0] = 1.0
    return normals / lengths[:, np.newaxis]
