from __future__ import annotations

import json
import warnings
from dataclasses import asdict, dataclass, fields, replace
from pathlib import Path
from typing import Any, Dict, Mapping

from cvboot.validation import ValidationError, validate_finite


@dataclass(frozen=True)
class BootParameters:
    """Physical dimensions of a CV boot, in millimeters unless noted."""

    boot_length: float = 120.0
    shaft_d: float = 10.0
    cup_d: float = 95.0
    stretch_small: float = 0.95
    stretch_big: float = 0.99
    wall_thickness: float = 3.5
    rib_amp: float = 7.0
    n_ribs: float = 8.0
    shoulder_height: float = 2.0
    shoulder_width: float = 3.0
    flat_small_len: float = 12.0
    flat_big_len: float = 20.0

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "BootParameters":
        """Build parameters from camelCase or snake_case keys; missing keys keep defaults."""

        values: Dict[str, float] = {}
        for key, raw in data.items():
            name = _FIELD_ALIASES.get(key)
            if name is None:
                raise ValidationError(f"Unknown boot parameter '{key}'.")
            try:
                values[name] = float(raw)
            except (TypeError, ValueError) as exc:
                raise ValidationError(f"Parameter '{key}' must be a number, got {raw!r}.") from exc
        return cls(**values)

    def to_dict(self, camel: bool = True) -> Dict[str, float]:
        data = asdict(self)
        if not camel:
            return data
        return {CAMEL_NAMES[name]: value for name, value in data.items()}

    def replace(self, **changes: float) -> "BootParameters":
        return replace(self, **changes)

    def validate(self) -> None:
        validate_finite(asdict(self))

    @property
    def inner_small_r(self) -> float:
        return self.shaft_d * self.stretch_small / 2.0

    @property
    def inner_big_r(self) -> float:
        return self.cup_d * self.stretch_big / 2.0

    @property
    def r_small_outer(self) -> float:
        return self.inner_small_r + self.wall_thickness

    @property
    def r_big_outer(self) -> float:
        return self.inner_big_r + self.wall_thickness

    @property
    def mid_length(self) -> float:
        """Axial length of the ribbed midsection; zero or negative when the clamps meet."""
        return self.boot_length - self.flat_small_len - self.flat_big_len


CAMEL_NAMES = {
    "boot_length": "bootLength",
    "shaft_d": "shaftD",
    "cup_d": "cupD",
    "stretch_small": "stretchSmall",
    "stretch_big": "stretchBig",
    "wall_thickness": "wallThickness",
    "rib_amp": "ribAmp",
    "n_ribs": "nRibs",
    "shoulder_height": "shoulderHeight",
    "shoulder_width": "shoulderWidth",
    "flat_small_len": "flatSmallLen",
    "flat_big_len": "flatBigLen",
}

_FIELD_ALIASES = {**{f.name: f.name for f in fields(BootParameters)}, **{v: k for k, v in CAMEL_NAMES.items()}}


@dataclass(frozen=True)
class ParameterRange:
    label: str
    minimum: float
    maximum: float
    step: float

    def contains(self, value: float) -> bool:
        return self.minimum <= value <= self.maximum


PARAMETER_RANGES: Dict[str, ParameterRange] = {
    "boot_length": ParameterRange("Boot Length (mm)", 80.0, 200.0, 1.0),
    "shaft_d": ParameterRange("Shaft Diameter (mm)", 5.0, 30.0, 0.5),
    "cup_d": ParameterRange("Cup Diameter (mm)", 50.0, 150.0, 1.0),
    "stretch_small": ParameterRange("Small End Stretch", 0.85, 1.0, 0.01),
    "stretch_big": ParameterRange("Big End Stretch", 0.85, 1.0, 0.01),
    "wall_thickness": ParameterRange("Wall Thickness (mm)", 1.0, 8.0, 0.1),
    "rib_amp": ParameterRange("Rib Amplitude (mm)", 0.0, 15.0, 0.5),
    "n_ribs": ParameterRange("Number of Ribs", 1.0, 20.0, 1.0),
    "shoulder_height": ParameterRange("Shoulder Height (mm)", 0.0, 5.0, 0.1),
    "shoulder_width": ParameterRange("Shoulder Width (mm)", 1.0, 8.0, 0.5),
    "flat_small_len": ParameterRange("Small Clamp Length (mm)", 5.0, 30.0, 1.0),
    "flat_big_len": ParameterRange("Big Clamp Length (mm)", 10.0, 40.0, 1.0),
}


def out_of_range(params: BootParameters) -> list[str]:
    issues: list[str] = []
    for name, bounds in PARAMETER_RANGES.items():
        value = getattr(params, name)
        if not bounds.contains(value):
            issues.append(
                f"{bounds.label} {value:g} is outside the recommended range {bounds.minimum:g}–{bounds.maximum:g}."
            )
    if params.mid_length <= 0:
        issues.append("Clamp zones cover the whole boot; the ribbed midsection is empty.")
    return issues


def warn_out_of_range(params: BootParameters) -> list[str]:
    issues = out_of_range(params)
    for issue in issues:
        warnings.warn(issue, RuntimeWarning, stacklevel=2)
    return issues


def load_parameters(path: Path) -> BootParameters:
    """Read a JSON object of parameter overrides."""

    path = Path(path)
    try:
        data = json.loads(path.read_text())
    except json.JSONDecodeError as exc:
        raise ValidationError(f"{path} is not valid JSON: {exc}") from exc
    except OSError as exc:
        raise ValidationError(f"Unable to read parameters from {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ValidationError(f"{path} must contain a JSON object of parameters.")
    return BootParameters.from_mapping(data)


__all__ = [
    "BootParameters",
    "CAMEL_NAMES",
    "PARAMETER_RANGES",
    "ParameterRange",
    "load_parameters",
    "out_of_range",
    "warn_out_of_range",
]
