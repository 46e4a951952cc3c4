from __future__ import annotations

from typing import Sequence, Union

import numpy as np

from ftcal_led_analyzer.models.results import RadialBinSet


def same_bin(value: float, anchor: float, tolerance: float) -> bool:
    """Bin membership test shared by bin derivation and bin statistics.

    With ``tolerance == 0`` this is exact float equality: radii that are
    mathematically equal but differ in the last bit end up in different bins.
    """
    if tolerance <= 0.0:
        return value == anchor
    return abs(value - anchor) <= tolerance


def radial_bins(
    radii: Union[Sequence[float], np.ndarray],
    *,
    tolerance: float = 0.0,
) -> RadialBinSet:
    """Distinct radial distances in ascending order.

    Parameters
    ----------
    radii:
        Per-component radii of one run (any order).
    tolerance:
        0.0 removes exact duplicates only.  A positive value starts a new bin
        whenever a sorted radius exceeds the first radius of the current bin
        by more than ``tolerance``; the bin is represented by that first
        radius.

    Returns
    -------
    RadialBinSet
        Strictly ascending distances.  The count follows from the data.
    """
    r = np.asarray(radii, dtype=np.float64)
    if r.ndim != 1:
        raise ValueError(f"radii must be 1D, got shape {r.shape}")
    if np.any(~np.isfinite(r)):
        raise ValueError("radii must be finite")
    tol = float(tolerance)
    if tol < 0:
        raise ValueError(f"tolerance must be >= 0, got {tolerance}")

    s = np.sort(r, kind="stable")
    if s.size == 0:
        return RadialBinSet(distances=s, tolerance=tol)

    if tol == 0.0:
        keep = np.empty(s.size, dtype=bool)
        keep[0] = True
        keep[1:] = s[1:] != s[:-1]
        return RadialBinSet(distances=s[keep], tolerance=tol)

    anchors = [float(s[0])]
    for v in s[1:]:
        if not same_bin(float(v), anchors[-1], tol):
            anchors.append(float(v))
    return RadialBinSet(distances=np.asarray(anchors, dtype=np.float64), tolerance=tol)
