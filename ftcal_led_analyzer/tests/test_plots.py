"""Headless smoke tests for the comparison figures (Agg backend)."""

from __future__ import annotations

import matplotlib

matplotlib.use("Agg")

import numpy as np
import pytest

from ftcal_led_analyzer.analysis.collection import analyze_collection
from ftcal_led_analyzer.ingest.readers_led import LedRunReader
from ftcal_led_analyzer.presentation.plots import (
    marker_style,
    plot_amplitudes,
    plot_radial,
    plot_ratios,
    radial_grid_shape,
    save_all_plots,
)


@pytest.fixture
def collection(make_led_file):
    runs = []
    for i, tag in enumerate(["00100", "00101", "00102", "00103"]):
        amps = np.full(332, 100.0 + i)
        if i == 0:
            amps[0] = 0.0  # baseline zero: component 0 is anomalous in every ratio
        runs.append(LedRunReader().read(make_led_file(tag, amps)))
    return analyze_collection(runs)


def test_marker_style_switches_after_nine_runs() -> None:
    assert marker_style(1) == ("o", "C0")
    assert marker_style(9) == ("o", "C8")
    assert marker_style(10) == ("s", "C0")
    assert marker_style(11) == ("s", "C1")


@pytest.mark.parametrize("n, rows", [(1, 1), (3, 1), (4, 2), (6, 2), (7, 3)])
def test_radial_grid_rows(n: int, rows: int) -> None:
    assert radial_grid_shape(n) == (rows, 3)


def test_amplitude_and_ratio_figures(collection) -> None:
    import matplotlib.pyplot as plt

    fig = plot_amplitudes(collection)
    ax = fig.axes[0]
    assert len(ax.lines) == 4
    assert [t.get_text() for t in ax.get_legend().get_texts()] == ["00100", "00101", "00102", "00103"]
    plt.close(fig)

    fig = plot_ratios(collection)
    ax = fig.axes[0]
    assert ax.get_ylim() == pytest.approx((0.8, 1.1))
    labels = [t.get_text() for t in ax.get_legend().get_texts()]
    assert labels[1] == "00101/00100"
    # the anomalous component is not drawn
    assert all(len(line.get_xdata()) == 331 for line in ax.lines)
    plt.close(fig)


def test_radial_figure_layout(collection) -> None:
    import matplotlib.pyplot as plt

    fig = plot_radial(collection)
    visible = [ax for ax in fig.axes if ax.get_visible()]
    assert len(fig.axes) == 6
    assert len(visible) == 4
    assert visible[1].get_title() == "Run 00101/00100 Radial Distance"
    plt.close(fig)


def test_save_all_plots(collection, tmp_path) -> None:
    written = save_all_plots(collection, tmp_path / "out")
    assert set(written) == {"amplitude_mean", "amplitude_ratio", "radial_distance"}
    for path in written.values():
        assert path.exists() and path.stat().st_size > 0
