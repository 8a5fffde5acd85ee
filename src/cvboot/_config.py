from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict

from cvboot.mesh_quality import ANGULAR_SAMPLES, AXIAL_SAMPLES, MeshQuality

CONFIG_DIR = Path.home() / ".cvboot"
CONFIG_FILE = CONFIG_DIR / "cvboot.cfg"
DEFAULT_CONFIG = {
    "_comment": "Sampling resolution used by `cvboot export`; higher values sharpen the ribs.",
    "axial_samples": AXIAL_SAMPLES,
    "angular_samples": ANGULAR_SAMPLES,
    "solid_name": "cv_boot",
}


@dataclass(frozen=True)
class ExportSettings:
    """Resolved export settings from cvboot.cfg."""

    axial_samples: int
    angular_samples: int
    solid_name: str

    def quality(self, preview: bool = False) -> MeshQuality:
        return MeshQuality(
            axial_samples=self.axial_samples,
            angular_samples=self.angular_samples,
            lod="preview" if preview else "final",
        )


def ensure_user_config() -> None:
    """Ensure ~/.cvboot/cvboot.cfg exists with sane defaults."""

    try:
        CONFIG_DIR.mkdir(parents=True, exist_ok=True)
    except OSError:
        return

    if CONFIG_FILE.exists():
        return

    try:
        CONFIG_FILE.write_text(json.dumps(DEFAULT_CONFIG, indent=2) + "\n")
    except OSError:
        return


def _load_user_config() -> Dict[str, Any]:
    ensure_user_config()
    try:
        data = json.loads(CONFIG_FILE.read_text())
    except (OSError, json.JSONDecodeError):
        return DEFAULT_CONFIG.copy()
    if not isinstance(data, dict):
        return DEFAULT_CONFIG.copy()
    return data


def _sample_count(value: Any, default: int, minimum: int) -> int:
    try:
        count = int(value)
    except (TypeError, ValueError):
        return default
    return count if count >= minimum else default


def get_export_settings() -> ExportSettings:
    """Return the configured sampling resolution and solid name."""

    raw_config = _load_user_config()
    solid_name = str(raw_config.get("solid_name", DEFAULT_CONFIG["solid_name"])).strip()
    return ExportSettings(
        axial_samples=_sample_count(raw_config.get("axial_samples"), AXIAL_SAMPLES, 2),
        angular_samples=_sample_count(raw_config.get("angular_samples"), ANGULAR_SAMPLES, 3),
        solid_name=solid_name or DEFAULT_CONFIG["solid_name"],
    )
