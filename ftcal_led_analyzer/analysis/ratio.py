from __future__ import annotations

from typing import List

import numpy as np

from ftcal_led_analyzer.models.records import RunTable
from ftcal_led_analyzer.models.results import RatioVector


def compute_ratio(run: RunTable, baseline: RunTable) -> RatioVector:
    """Per-component ``run.amplitude_mean / baseline.amplitude_mean``.

    Components are paired by index (file row order).  A zero baseline
    amplitude is not an error: the entry becomes ``inf`` (or ``nan`` for 0/0)
    and is flagged in ``RatioVector.anomaly`` so that statistics and plots can
    exclude it.

    Raises
    ------
    ValueError
        If the two tables do not have the same number of components.
    """
    num = run.amplitude_mean
    den = baseline.amplitude_mean
    if num.shape != den.shape:
        raise ValueError(
            f"run {run.run_tag} has {num.size} components, baseline {baseline.run_tag} has {den.size}"
        )

    warnings: List[str] = []

    ids = run.component_id
    ids_base = baseline.component_id
    mismatch = ids != ids_base
    if np.any(mismatch):
        idx = np.where(mismatch)[0]
        warnings.append(
            f"component ids differ from baseline {baseline.run_tag} at {idx.size} rows "
            f"(first: {idx[:10].tolist()}); ratios are paired by row"
        )

    with np.errstate(divide="ignore", invalid="ignore"):
        values = num / den
    anomaly = ~np.isfinite(values)
    if np.any(anomaly):
        idx = np.where(anomaly)[0]
        warnings.append(
            f"{idx.size} non-finite ratio(s) against baseline {baseline.run_tag} "
            f"at rows {idx[:20].tolist()}"
        )

    return RatioVector(
        run_id=run.run_id,
        baseline_id=baseline.run_id,
        run_tag=run.run_tag,
        baseline_tag=baseline.run_tag,
        component_id=ids,
        values=values,
        anomaly=anomaly,
        warnings=tuple(warnings),
    )
