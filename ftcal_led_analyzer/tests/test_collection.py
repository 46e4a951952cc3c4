"""Tests for collection loading, ordering, baseline selection and analysis."""

from __future__ import annotations

from dataclasses import replace

import numpy as np
import pytest

from ftcal_led_analyzer.analysis.collection import (
    analyze_collection,
    compare_runs,
    load_runs,
    select_baseline,
    sort_runs,
)
from ftcal_led_analyzer.errors import MalformedIdentifier, MalformedRecords, SourceUnavailable
from ftcal_led_analyzer.ingest.readers_led import LedRunReader
from ftcal_led_analyzer.models.results import RadialBinSet


def _load(make_led_file, tags, scale=None):
    runs = []
    for i, tag in enumerate(tags):
        amps = np.full(332, 100.0 * (scale[i] if scale else 1.0))
        runs.append(LedRunReader().read(make_led_file(tag, amps)))
    return runs


def test_baseline_is_lowest_run_id(make_led_file) -> None:
    runs = _load(make_led_file, ["00120", "00099", "00100"])
    base = select_baseline(runs)
    assert base.run_tag == "00099"
    # idempotent
    assert select_baseline(runs) is base
    assert select_baseline(list(reversed(runs))) is base


def test_baseline_of_empty_collection_raises() -> None:
    with pytest.raises(ValueError):
        select_baseline([])


def test_sort_and_compare(make_led_file) -> None:
    runs = _load(make_led_file, ["00300", "00100", "00200"])
    ordered = sort_runs(runs)
    assert [r.run_id for r in ordered] == [100, 200, 300]
    assert compare_runs(ordered[0], ordered[1]) == -1
    assert compare_runs(ordered[2], ordered[1]) == 1
    assert compare_runs(ordered[1], ordered[1]) == 0


def test_sort_is_stable_for_equal_ids(make_led_file, tmp_path) -> None:
    a = LedRunReader().read(make_led_file(name="ftCalLed_-00500_a.txt"))
    b = LedRunReader().read(make_led_file(name="ftCalLed_-00500_b.txt"))
    assert [r.source_path.name for r in sort_runs([b, a])] == ["ftCalLed_-00500_b.txt", "ftCalLed_-00500_a.txt"]
    assert select_baseline([b, a]) is b


def test_load_isolates_failures(make_led_file, tmp_path) -> None:
    good1 = make_led_file("00010")
    good2 = make_led_file("00011")
    bad_id = make_led_file(name="ftCalLed_-x0012_led.txt")
    short = make_led_file("00013", text="1 1 1 1 1 1 1 1 1\n")
    missing = tmp_path / "ftCalLed_-00014_led.txt"

    report = load_runs([good1, bad_id, missing, good2, short])
    assert [r.run_tag for r in report.runs] == ["00010", "00011"]
    kinds = {f.source.name: f.error for f in report.failures}
    assert isinstance(kinds["ftCalLed_-x0012_led.txt"], MalformedIdentifier)
    assert isinstance(kinds["ftCalLed_-00014_led.txt"], SourceUnavailable)
    assert isinstance(kinds["ftCalLed_-00013_led.txt"], MalformedRecords)
    assert all(f.stage == "load" for f in report.failures)
    assert "SourceUnavailable" in next(f.describe() for f in report.failures if f.kind == "SourceUnavailable")


def test_analyze_collection_orders_and_ratios(make_led_file) -> None:
    runs = _load(make_led_file, ["00300", "00100", "00200"], scale=[1.2, 1.0, 0.9])
    result = analyze_collection(runs)

    assert result.baseline.run_tag == "00100"
    assert [a.run.run_tag for a in result.analyses] == ["00100", "00200", "00300"]
    assert result.failures == ()

    self_ratio, r200, r300 = (a.ratio for a in result.analyses)
    assert np.all(self_ratio.values == 1.0)
    assert np.allclose(r200.values, 0.9)
    assert np.allclose(r300.values, 1.2)
    for a in result.analyses:
        assert a.bin_result.total_count == 332
        assert a.bin_result.n_bins == 39


def test_geometry_fault_halts_only_that_run(make_led_file) -> None:
    runs = _load(make_led_file, ["00100", "00200", "00300"])
    broken = replace(runs[1], bins=RadialBinSet(distances=runs[1].bins.distances[:-1]))
    result = analyze_collection([runs[0], broken, runs[2]])

    assert [a.run.run_tag for a in result.analyses] == ["00100", "00300"]
    (failure,) = result.failures
    assert failure.stage == "statistics"
    assert failure.run_tag == "00200"
    assert failure.kind == "GeometryInconsistency"


def test_warnings_are_collected_with_run_context(make_led_file) -> None:
    amps = np.full(332, 100.0)
    amps[0] = 0.0
    base = LedRunReader().read(make_led_file("00001", amps))
    run = LedRunReader().read(make_led_file("00002"))
    result = analyze_collection([run, base])
    assert any(w.startswith("run 00002:") and "non-finite" in w for w in result.warnings)


def test_explicit_baseline(make_led_file) -> None:
    runs = _load(make_led_file, ["00100", "00200"], scale=[1.0, 2.0])
    result = analyze_collection(runs, baseline=runs[1])
    assert result.baseline.run_tag == "00200"
    assert np.allclose(result.analyses[0].ratio.values, 0.5)
