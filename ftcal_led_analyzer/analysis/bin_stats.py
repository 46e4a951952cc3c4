from __future__ import annotations

"""Radial-bin statistics of amplitude ratios.

Two passes:

1. ``order_by_radius`` re-orders the per-component ratios into ascending
   radius order (stable, so components sharing a radius keep file order).
2. ``compute_bin_statistics`` walks the sorted sequence once, one group per
   bin of the :class:`RadialBinSet`.  A group ends when the radius leaves the
   current bin or the sequence ends; both cases go through the same closure.

Every component must fall in exactly one bin.  A bin without members, or
components left over after the last bin, means the bin set was not derived
from these radii; that raises :class:`GeometryInconsistency`.
"""

from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple, Union

import numpy as np

from ftcal_led_analyzer.analysis.bins import same_bin
from ftcal_led_analyzer.analysis.ratio import compute_ratio
from ftcal_led_analyzer.errors import GeometryInconsistency
from ftcal_led_analyzer.models.profile import AnalysisProfile
from ftcal_led_analyzer.models.records import RunTable
from ftcal_led_analyzer.models.results import BinResult, BinStatistic, RadialBinSet, RatioVector


ArrayLike = Union[Sequence[float], np.ndarray]


def order_by_radius(radii: ArrayLike, values: ArrayLike) -> Tuple[np.ndarray, np.ndarray]:
    """Return ``(radii_sorted, values_sorted)`` in ascending radius order."""
    r = np.asarray(radii, dtype=np.float64)
    v = np.asarray(values, dtype=np.float64)
    if r.ndim != 1 or r.shape != v.shape:
        raise ValueError(f"radii and values must be 1D of equal length, got {r.shape} and {v.shape}")
    order = np.argsort(r, kind="stable")
    return r[order], v[order]


def _close_group(
    distance: float,
    members: np.ndarray,
    *,
    exclude_nonfinite: bool,
) -> BinStatistic:
    count = int(members.size)
    used = members[np.isfinite(members)] if exclude_nonfinite else members
    n_used = int(used.size)
    if n_used == 0:
        mean = float("nan")
        std = float("nan")
    else:
        # inf members give mean=inf, std=nan (IEEE pass-through)
        with np.errstate(invalid="ignore", over="ignore"):
            mean = float(np.sum(used) / n_used)
            std = float(np.sqrt(np.sum((used - mean) ** 2) / n_used))
    return BinStatistic(distance=float(distance), count=count, mean=mean, std=std, n_used=n_used)


def compute_bin_statistics(
    bins: RadialBinSet,
    radii: ArrayLike,
    ratios: ArrayLike,
    *,
    exclude_nonfinite: bool = False,
    run_id: int = 0,
    baseline_id: int = 0,
    run_tag: str = "",
    baseline_tag: str = "",
) -> BinResult:
    """Mean and population standard deviation of the ratios in each radial bin.

    Parameters
    ----------
    bins:
        Distinct radii of the run, ascending (see :func:`radial_bins`).
    radii, ratios:
        Per-component radius and ratio, paired by component index.
    exclude_nonfinite:
        If True, ``inf``/``nan`` ratios keep their bin membership (``count``)
        but are left out of ``mean`` and ``std``.
    run_id, baseline_id, run_tag, baseline_tag:
        Identifiers copied to the result.

    Raises
    ------
    GeometryInconsistency
        If a bin has no members or some component matches no bin.
    """
    r_sorted, v_sorted = order_by_radius(radii, ratios)
    tol = float(bins.tolerance)
    n = int(r_sorted.size)

    stats: List[BinStatistic] = []
    k = 0
    for distance in bins.distances:
        d = float(distance)
        start = k
        while k < n and same_bin(float(r_sorted[k]), d, tol):
            k += 1
        if k == start:
            raise GeometryInconsistency(
                f"run {run_tag or run_id}: radial bin {d!r} has no members "
                f"(next radius in sequence: {float(r_sorted[k]) if k < n else None!r})"
            )
        stats.append(_close_group(d, v_sorted[start:k], exclude_nonfinite=exclude_nonfinite))

    if k != n:
        raise GeometryInconsistency(
            f"run {run_tag or run_id}: {n - k} component(s) not covered by the radial bins "
            f"(first unmatched radius: {float(r_sorted[k])!r})"
        )

    return BinResult(
        run_id=int(run_id),
        baseline_id=int(baseline_id),
        run_tag=str(run_tag),
        baseline_tag=str(baseline_tag),
        stats=tuple(stats),
    )


@dataclass(frozen=True)
class RunAnalysis:
    """Ratio and bin statistics of one run against the baseline."""

    run: RunTable
    ratio: RatioVector
    bin_result: BinResult


def analyze_run(
    run: RunTable,
    baseline: RunTable,
    profile: Optional[AnalysisProfile] = None,
) -> RunAnalysis:
    """Ratio to ``baseline`` followed by the radial-bin statistics of ``run``."""
    prof = profile or AnalysisProfile()
    ratio = compute_ratio(run, baseline)
    result = compute_bin_statistics(
        run.bins,
        run.radii,
        ratio.values,
        exclude_nonfinite=prof.exclude_nonfinite,
        run_id=run.run_id,
        baseline_id=baseline.run_id,
        run_tag=run.run_tag,
        baseline_tag=baseline.run_tag,
    )
    return RunAnalysis(run=run, ratio=ratio, bin_result=result)
