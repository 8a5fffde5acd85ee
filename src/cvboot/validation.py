from __future__ import annotations

from typing import Mapping

import numpy as np


class ValidationError(ValueError):
    """Raised when validation constraints are violated."""


def validate_finite(values: Mapping[str, float]) -> None:
    """Reject NaN and infinite entries, which would silently poison the mesh."""

    names = list(values)
    arr = np.asarray([values[name] for name in names], dtype=float)
    bad = ~np.isfinite(arr)
    if np.any(bad):
        offenders = ", ".join(f"{names[i]}={arr[i]}" for i in np.flatnonzero(bad))
        raise ValidationError(f"Parameters must be finite numbers: {offenders}.")
