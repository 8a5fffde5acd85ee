from __future__ import annotations

import numpy as np
import pytest

from cvboot.params import BootParameters
from cvboot.profile import BIG_FLAT, MIDSECTION, SMALL_FLAT, classify, radii_at, radius_profile

SMALL_SHOULDER = 4.75 + 3.5 + 2.0
SMALL_PLAIN = 4.75 + 3.5
BIG_SHOULDER = 47.025 + 3.5 + 2.0 + 1.5
BIG_PLAIN = 47.025 + 3.5 + 1.5


def _outer(params: BootParameters, z: float) -> float:
    outer, _ = radii_at(params, z)
    return float(outer[0])


def _inner(params: BootParameters, z: float) -> float:
    _, inner = radii_at(params, z)
    return float(inner[0])


def test_profile_sampling(reference_params: BootParameters):
    prof = radius_profile(reference_params)
    assert len(prof) == 200
    assert prof.z[0] == 0.0
    assert prof.z[-1] == pytest.approx(120.0)
    assert prof.heights[0] == pytest.approx(120.0)
    assert prof.heights[-1] == pytest.approx(0.0)


def test_end_radii(reference_params: BootParameters):
    prof = radius_profile(reference_params)
    # shaft end, at the top of the part
    assert prof.outer[0] == pytest.approx(10.25)
    assert prof.inner[0] == pytest.approx(4.75)
    # cup end, resting at height 0
    assert prof.outer[-1] == pytest.approx(BIG_SHOULDER)
    assert prof.inner[-1] == pytest.approx(47.025)


def test_zone_classification(reference_params: BootParameters):
    zone, t = classify(reference_params, np.array([0.0, 12.0, 12.5, 56.0, 99.9, 100.0, 120.0]))
    assert zone.tolist() == [SMALL_FLAT, SMALL_FLAT, MIDSECTION, MIDSECTION, MIDSECTION, BIG_FLAT, BIG_FLAT]
    assert t[0] == 0.0
    assert t[3] == pytest.approx(0.5)
    assert t[-1] == 1.0


@pytest.mark.parametrize(
    ("z", "expected"),
    [
        (0.0, SMALL_SHOULDER),
        (3.0, SMALL_SHOULDER),
        (3.5, SMALL_PLAIN),
        (8.5, SMALL_PLAIN),
        (9.0, SMALL_SHOULDER),
        (12.0, SMALL_SHOULDER),
    ],
)
def test_small_flat_shoulder_boundaries(reference_params: BootParameters, z: float, expected: float):
    assert _outer(reference_params, z) == pytest.approx(expected)
    assert _inner(reference_params, z) == pytest.approx(4.75)


@pytest.mark.parametrize(
    ("z", "expected"),
    [
        (100.0, BIG_SHOULDER),
        (103.0, BIG_SHOULDER),
        (103.5, BIG_PLAIN),
        (116.5, BIG_PLAIN),
        (117.0, BIG_SHOULDER),
        (120.0, BIG_SHOULDER),
    ],
)
def test_big_flat_shoulder_boundaries(reference_params: BootParameters, z: float, expected: float):
    assert _outer(reference_params, z) == pytest.approx(expected)
    assert _inner(reference_params, z) == pytest.approx(47.025)


def test_midsection_rib_crest_in_first_period_keeps_bore(reference_params: BootParameters):
    # t = 1/32 is a rib crest inside the first of eight periods.
    z = 12.0 + 88.0 / 32.0
    core = 8.25 + 42.275 / 32.0
    assert _outer(reference_params, z) == pytest.approx(core + 7.0)
    assert _inner(reference_params, z) == pytest.approx(4.75)


def test_midsection_trough_is_clamped(reference_params: BootParameters):
    z = 12.0 + 88.0 * 3.0 / 32.0
    assert _outer(reference_params, z) == pytest.approx(8.25)
    assert _inner(reference_params, z) == pytest.approx(4.75)


def test_midsection_follows_outer_after_first_period(reference_params: BootParameters):
    core = 8.25 + 42.275 * 0.5
    assert _outer(reference_params, 56.0) == pytest.approx(core, abs=1e-9)
    assert _inner(reference_params, 56.0) == pytest.approx(core - 3.5, abs=1e-9)


def test_inner_candidate_clamped_to_cup_radius():
    params = BootParameters().replace(rib_amp=15.0, n_ribs=4.0)
    # t = 13/16 is the crest of the last rib, where outer - wall exceeds the cup bore.
    z = params.flat_small_len + params.mid_length * 0.8125
    assert _inner(params, z) == pytest.approx(params.inner_big_r)


@pytest.mark.parametrize(
    "changes",
    [
        {},
        {"rib_amp": 15.0, "n_ribs": 20.0, "wall_thickness": 1.0},
        {"shaft_d": 30.0, "cup_d": 50.0, "rib_amp": 15.0},
        {"shaft_d": 60.0, "cup_d": 20.0},
        {"flat_small_len": 70.0, "flat_big_len": 70.0},
    ],
)
def test_minimum_wall_thickness(changes: dict):
    params = BootParameters().replace(**changes)
    prof = radius_profile(params)
    assert np.all(prof.wall >= params.wall_thickness - 1e-9)


def test_zero_length_midsection_has_no_midsection_samples():
    params = BootParameters().replace(boot_length=100.0, flat_small_len=40.0, flat_big_len=60.0, n_ribs=1.0, rib_amp=0.0)
    prof = radius_profile(params)
    assert MIDSECTION not in prof.zone.tolist()
    assert np.all(np.isfinite(prof.outer))
    assert np.all(np.isfinite(prof.inner))


def test_zero_ribs_does_not_divide_by_zero():
    params = BootParameters().replace(n_ribs=0.0)
    prof = radius_profile(params)
    mid = prof.zone == MIDSECTION
    assert np.all(np.isfinite(prof.outer))
    assert np.allclose(prof.inner[mid], params.inner_small_r)
