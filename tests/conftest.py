from __future__ import annotations

import json
from pathlib import Path

import pytest

from cvboot import _config
from cvboot.params import BootParameters

PROJECT_ROOT = Path(__file__).resolve().parents[1]

# Parameters from the reference design used throughout the tests.
REFERENCE_PARAMS = {
    "bootLength": 120,
    "shaftD": 10,
    "cupD": 95,
    "stretchSmall": 0.95,
    "stretchBig": 0.99,
    "wallThickness": 3.5,
    "ribAmp": 7,
    "nRibs": 8,
    "shoulderHeight": 2,
    "shoulderWidth": 3,
    "flatSmallLen": 12,
    "flatBigLen": 20,
}


@pytest.fixture(autouse=True)
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Keep tests away from the real ~/.cvboot directory."""
    config_dir = tmp_path / "cvboot-home"
    monkeypatch.setattr(_config, "CONFIG_DIR", config_dir)
    monkeypatch.setattr(_config, "CONFIG_FILE", config_dir / "cvboot.cfg")
    return config_dir / "cvboot.cfg"


@pytest.fixture
def small_config(isolated_config: Path) -> Path:
    isolated_config.parent.mkdir(parents=True, exist_ok=True)
    isolated_config.write_text(json.dumps({"axial_samples": 12, "angular_samples": 16, "solid_name": "cv_boot"}))
    return isolated_config


@pytest.fixture
def project_root() -> Path:
    return PROJECT_ROOT


@pytest.fixture
def reference_params() -> BootParameters:
    return BootParameters.from_mapping(REFERENCE_PARAMS)
