"""Tests for AnalysisProfile."""

from __future__ import annotations

import dataclasses
import json

import pytest

from ftcal_led_analyzer.models.profile import AnalysisProfile


# -----------------------------------------------------------------------
# Basic construction
# -----------------------------------------------------------------------


def test_profile_defaults() -> None:
    p = AnalysisProfile()
    assert p.marker == "ftCalLed_-"
    assert p.run_id_width == 5
    assert p.extension == ".txt"
    assert p.n_components == 332
    assert p.grid_width == 22
    assert p.grid_half == 11
    assert p.radius_tolerance == 0.0
    assert p.strict_records is True
    assert p.exclude_nonfinite is False
    assert p.ratio_ylim == (0.8, 1.1)
    assert p.radial_ylim == (0.9, 1.1)


def test_profile_frozen() -> None:
    p = AnalysisProfile()
    with pytest.raises(dataclasses.FrozenInstanceError):
        p.n_components = 10  # type: ignore[misc]


def test_profile_replace() -> None:
    p = AnalysisProfile()
    p2 = dataclasses.replace(p, radius_tolerance=1e-9)
    assert p2.radius_tolerance == 1e-9
    assert p2.marker == p.marker  # unchanged
    assert p.radius_tolerance == 0.0


@pytest.mark.parametrize(
    "kwargs",
    [
        {"marker": ""},
        {"run_id_width": 0},
        {"n_components": 0},
        {"grid_width": -1},
        {"radius_tolerance": -0.1},
    ],
)
def test_profile_rejects_invalid_values(kwargs) -> None:
    with pytest.raises(ValueError):
        AnalysisProfile(**kwargs)


# -----------------------------------------------------------------------
# Serialization
# -----------------------------------------------------------------------


def test_profile_dict_roundtrip_through_json() -> None:
    p = AnalysisProfile(marker="LED_", strict_records=False, radial_ylim=(0.8, 1.2))
    d = json.loads(json.dumps(p.to_dict()))
    assert d["radial_ylim"] == [0.8, 1.2]
    assert AnalysisProfile.from_dict(d) == p


def test_profile_from_partial_dict() -> None:
    p = AnalysisProfile.from_dict({"exclude_nonfinite": True})
    assert p.exclude_nonfinite is True
    assert p.n_components == 332
