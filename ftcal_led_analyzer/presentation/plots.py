"""Matplotlib figures for an LED run comparison.

Three plot families, all built from the numeric series exposed by the models:

1. amplitude mean vs component id, all runs overlaid
2. amplitude ratio (run / baseline) vs component id, all runs overlaid
3. radial distance vs mean ratio with std error bars, one panel per run

Styling follows the legacy macro: runs 1..9 use circles in colour cycle
order, later runs use squares with the colour cycle restarted.
"""

from __future__ import annotations

import math
from pathlib import Path
from typing import Dict, Optional, Tuple

import numpy as np

from ftcal_led_analyzer.analysis.collection import CollectionAnalysis
from ftcal_led_analyzer.models.profile import AnalysisProfile


def _get_pyplot():
    """Import pyplot lazily (backend must already be configured)."""
    import matplotlib.pyplot as plt
    return plt


def marker_style(position: int) -> Tuple[str, str]:
    """(marker, colour) for the run at 1-based ``position`` in display order."""
    if position < 10:
        return "o", f"C{(position - 1) % 10}"
    return "s", f"C{(position - 10) % 10}"


def radial_grid_shape(n_runs: int, n_cols: int = 3) -> Tuple[int, int]:
    """(rows, cols) of the radial-distance canvas."""
    if n_runs <= 0:
        return 0, n_cols
    return int(math.ceil(n_runs / float(n_cols))), n_cols


def plot_amplitudes(analysis: CollectionAnalysis, *, figsize: Tuple[float, float] = (6.0, 4.0)):
    plt = _get_pyplot()
    fig, ax = plt.subplots(figsize=figsize)
    for pos, a in enumerate(analysis.analyses, start=1):
        marker, color = marker_style(pos)
        s = a.run.amplitude_frame()
        ax.plot(s["component_id"], s["amplitude_mean"], linestyle="none",
                marker=marker, color=color, markersize=3, label=a.run.run_tag)
    ax.set_title("Amplitude Mean vs. Component Number")
    ax.set_xlabel("Component Number")
    ax.set_ylabel("Amplitude Mean [mV]")
    ax.legend(loc="best", fontsize="small")
    return fig


def plot_ratios(
    analysis: CollectionAnalysis,
    profile: Optional[AnalysisProfile] = None,
    *,
    figsize: Tuple[float, float] = (6.0, 4.0),
):
    prof = profile or AnalysisProfile()
    plt = _get_pyplot()
    fig, ax = plt.subplots(figsize=figsize)
    for pos, a in enumerate(analysis.analyses, start=1):
        marker, color = marker_style(pos)
        s = a.ratio.to_frame()
        s = s[~s["anomaly"]]
        ax.plot(s["component_id"], s["ratio"], linestyle="none",
                marker=marker, color=color, markersize=3, label=a.ratio.label)
    ax.set_title("Amplitude Mean Ratio vs. Component Number")
    ax.set_xlabel("Component Number")
    ax.set_ylabel("Amplitude Mean Ratio")
    ax.set_ylim(*prof.ratio_ylim)
    ax.legend(loc="best", fontsize="small")
    return fig


def plot_radial(
    analysis: CollectionAnalysis,
    profile: Optional[AnalysisProfile] = None,
    *,
    n_cols: int = 3,
    panel_size: Tuple[float, float] = (3.0, 2.4),
):
    prof = profile or AnalysisProfile()
    plt = _get_pyplot()
    n_rows, n_cols = radial_grid_shape(len(analysis.analyses), n_cols)
    n_rows = max(n_rows, 1)
    fig, axes = plt.subplots(
        n_rows, n_cols,
        figsize=(panel_size[0] * n_cols, panel_size[1] * n_rows),
        squeeze=False,
    )
    flat = axes.ravel()
    for ax, a in zip(flat, analysis.analyses):
        s = a.bin_result.to_frame()
        s = s[np.isfinite(s["mean_ratio"]) & np.isfinite(s["std_ratio"])]
        ax.errorbar(s["distance"], s["mean_ratio"], yerr=s["std_ratio"],
                    linestyle="none", marker="s", color="blue", markersize=3)
        ax.set_title(a.bin_result.title, fontsize="small")
        ax.set_xlabel("Radial Distance [arb. units]")
        ax.set_ylabel("Amplitude Mean Ratio Average")
        ax.set_ylim(*prof.radial_ylim)
    for ax in flat[len(analysis.analyses):]:
        ax.set_visible(False)
    fig.tight_layout()
    return fig


def save_all_plots(
    analysis: CollectionAnalysis,
    out_dir: str | Path,
    profile: Optional[AnalysisProfile] = None,
    *,
    dpi: int = 120,
) -> Dict[str, Path]:
    """Render the three figures to PNG files in ``out_dir``; returns name -> path."""
    plt = _get_pyplot()
    out = Path(out_dir).expanduser()
    out.mkdir(parents=True, exist_ok=True)

    figures = {
        "amplitude_mean": plot_amplitudes(analysis),
        "amplitude_ratio": plot_ratios(analysis, profile),
        "radial_distance": plot_radial(analysis, profile),
    }
    written: Dict[str, Path] = {}
    for name, fig in figures.items():
        path = out / f"{name}.png"
        fig.savefig(path, dpi=dpi)
        plt.close(fig)
        written[name] = path
    return written


__all__ = [
    "marker_style",
    "radial_grid_shape",
    "plot_amplitudes",
    "plot_ratios",
    "plot_radial",
    "save_all_plots",
]
