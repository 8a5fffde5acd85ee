"""Longitudinal radius profile of the boot wall.

The profile is piecewise over three zones along the axis ``z`` (measured
from the shaft end): the small clamp flat, the big clamp flat and the ribbed
midsection between them. Each radius is picked by an ordered rule list in
which the first matching condition wins, so the closed intervals at the
shoulder edges resolve the same way for every sample.
"""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from cvboot.mesh_quality import AXIAL_SAMPLES
from cvboot.params import BootParameters

SMALL_FLAT = 0
BIG_FLAT = 1
MIDSECTION = 2

ZONE_NAMES = {SMALL_FLAT: "small flat", BIG_FLAT: "big flat", MIDSECTION: "midsection"}

# Extra outer radius on the big clamp collar, in mm.
BIG_COLLAR_ALLOWANCE = 1.5


@dataclass(frozen=True)
class RadiusProfile:
    z: np.ndarray
    t: np.ndarray
    zone: np.ndarray
    outer: np.ndarray
    inner: np.ndarray
    boot_length: float

    @property
    def heights(self) -> np.ndarray:
        """Vertical position of each sample; the cup end sits at height 0."""
        return self.boot_length - self.z

    @property
    def wall(self) -> np.ndarray:
        return self.outer - self.inner

    def __len__(self) -> int:
        return int(self.z.shape[0])


def axial_positions(boot_length: float, axial_samples: int = AXIAL_SAMPLES) -> np.ndarray:
    return boot_length * np.arange(axial_samples, dtype=float) / (axial_samples - 1)


def classify(params: BootParameters, z: np.ndarray) -> tuple[np.ndarray, np.ndarray]:
    """Return the zone code and normalized midsection position ``t`` for each ``z``."""

    z = np.atleast_1d(np.asarray(z, dtype=float))
    in_small = z <= params.flat_small_len
    in_big = ~in_small & (z >= params.boot_length - params.flat_big_len)
    in_mid = ~(in_small | in_big)

    zone = np.where(in_small, SMALL_FLAT, np.where(in_big, BIG_FLAT, MIDSECTION))
    t = np.where(in_big, 1.0, 0.0)
    # A sample only lands in the midsection when its length is positive.
    with np.errstate(divide="ignore", invalid="ignore"):
        np.divide(z - params.flat_small_len, params.mid_length, out=t, where=in_mid)
    return zone, t


def _outer_radius(params: BootParameters, z: np.ndarray, zone: np.ndarray, t: np.ndarray) -> np.ndarray:
    p = params
    in_small = zone == SMALL_FLAT
    in_big = zone == BIG_FLAT
    big_start = p.boot_length - p.flat_big_len
    small_shoulder = p.r_small_outer + p.shoulder_height
    big_plain = p.r_big_outer + BIG_COLLAR_ALLOWANCE
    big_shoulder = big_plain + p.shoulder_height

    core = p.r_small_outer + (p.r_big_outer - p.r_small_outer) * t
    ribbed = core + p.rib_amp * np.sin(2.0 * np.pi * p.n_ribs * t)
    ribbed = np.maximum(ribbed, p.inner_small_r + p.wall_thickness)

    rules = [
        (in_small & (z <= p.shoulder_width), small_shoulder),
        (in_small & (p.flat_small_len - p.shoulder_width <= z) & (z <= p.flat_small_len), small_shoulder),
        (in_small, p.r_small_outer),
        (in_big & (big_start <= z) & (z <= big_start + p.shoulder_width), big_shoulder),
        (in_big & (z >= p.boot_length - p.shoulder_width), big_shoulder),
        (in_big, big_plain),
    ]
    conditions = [cond for cond, _ in rules]
    choices = [np.broadcast_to(np.asarray(value, dtype=float), z.shape) for _, value in rules]
    return np.select(conditions, choices, default=ribbed)


def _inner_radius(params: BootParameters, outer: np.ndarray, zone: np.ndarray, t: np.ndarray) -> np.ndarray:
    p = params
    # Bore stays cylindrical through the first rib period after the small end.
    first_rib = np.inf if p.n_ribs == 0 else 1.0 / p.n_ribs
    candidate = np.minimum(np.maximum(outer - p.wall_thickness, p.inner_small_r), p.inner_big_r)

    rules = [
        (zone == SMALL_FLAT, p.inner_small_r),
        (zone == BIG_FLAT, p.inner_big_r),
        ((zone == MIDSECTION) & (t < first_rib), p.inner_small_r),
    ]
    conditions = [cond for cond, _ in rules]
    choices = [np.broadcast_to(np.asarray(value, dtype=float), outer.shape) for _, value in rules]
    return np.select(conditions, choices, default=candidate)


def radii_at(params: BootParameters, z) -> tuple[np.ndarray, np.ndarray]:
    """Outer and inner radius at axial positions ``z`` (scalar or array)."""

    z = np.atleast_1d(np.asarray(z, dtype=float))
    zone, t = classify(params, z)
    outer = _outer_radius(params, z, zone, t)
    inner = _inner_radius(params, outer, zone, t)
    # Minimum wall thickness keeps the outer skin from crossing the bore.
    outer = np.maximum(outer, inner + params.wall_thickness)
    return outer, inner


def radius_profile(params: BootParameters, axial_samples: int = AXIAL_SAMPLES) -> RadiusProfile:
    z = axial_positions(params.boot_length, axial_samples)
    zone, t = classify(params, z)
    outer, inner = radii_at(params, z)
    return RadiusProfile(z=z, t=t, zone=zone, outer=outer, inner=inner, boot_length=float(params.boot_length))


__all__ = [
    "BIG_COLLAR_ALLOWANCE",
    "BIG_FLAT",
    "MIDSECTION",
    "RadiusProfile",
    "SMALL_FLAT",
    "ZONE_NAMES",
    "axial_positions",
    "classify",
    "radii_at",
    "radius_profile",
]
