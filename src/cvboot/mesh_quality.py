from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Literal

MeshLOD = Literal["preview", "final"]

AXIAL_SAMPLES = 200
ANGULAR_SAMPLES = 80


@dataclass(frozen=True)
class MeshQuality:
    """Controls sampling density of the boot and its runtime cost.

    Higher axial density mostly pays off at the ribs, where the profile
    oscillates fastest.
    """

    axial_samples: int = AXIAL_SAMPLES
    angular_samples: int = ANGULAR_SAMPLES
    lod: MeshLOD = "final"

    def __post_init__(self) -> None:
        for name, minimum in (("axial_samples", 2), ("angular_samples", 3)):
            value = getattr(self, name)
            count = int(value)
            if count != value:
                raise ValueError(f"{name} must be a whole number, got {value!r}.")
            if count < minimum:
                raise ValueError(f"{name} must be at least {minimum}.")
            object.__setattr__(self, name, count)

    @property
    def vertex_count(self) -> int:
        return 2 * self.axial_samples * self.angular_samples

    @property
    def face_count(self) -> int:
        # two lateral skins plus two annular caps
        return 2 * (self.axial_samples - 1) * self.angular_samples * 2 + 2 * self.angular_samples * 2


def apply_lod(quality: MeshQuality) -> MeshQuality:
    if quality.lod == "final":
        return quality
    if quality.lod != "preview":
        raise ValueError("lod must be 'preview' or 'final'.")
    return replace(
        quality,
        axial_samples=max(8, int(quality.axial_samples * 0.5)),
        angular_samples=max(12, int(quality.angular_samples * 0.5)),
    )
