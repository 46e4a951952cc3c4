from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

import numpy as np
import pandas as pd


@dataclass(frozen=True)
class RadialBinSet:
    """Distinct radial distances of one run, strictly ascending.

    Attributes
    ----------
    distances:
        Float array of shape ``(n_bins,)``.  For the standard FT-Cal annulus
        ``n_bins == 39``; nothing in the analysis relies on that number.
    tolerance:
        Merge tolerance used to build the set (0.0 means exact equality).
    """

    distances: np.ndarray
    tolerance: float = 0.0

    def __len__(self) -> int:
        return int(self.distances.size)

    @property
    def n_bins(self) -> int:
        return len(self)


@dataclass(frozen=True)
class RatioVector:
    """Per-component amplitude ratio of a run to its baseline run.

    Attributes
    ----------
    run_id, baseline_id:
        Numeric run identifiers of numerator and denominator.
    run_tag, baseline_tag:
        The identifiers as they appear in the file names (used for labels).
    component_id:
        Component id per entry, shape ``(n,)``, taken from the run.
    values:
        Ratios, shape ``(n,)``.  A zero baseline amplitude yields ``inf`` or
        ``nan`` (IEEE pass-through).
    anomaly:
        Boolean mask of shape ``(n,)``, True where ``values`` is non-finite.
    """

    run_id: int
    baseline_id: int
    run_tag: str
    baseline_tag: str
    component_id: np.ndarray
    values: np.ndarray
    anomaly: np.ndarray
    warnings: Tuple[str, ...] = ()

    @property
    def n_anomalies(self) -> int:
        return int(np.count_nonzero(self.anomaly))

    @property
    def label(self) -> str:
        return f"{self.run_tag}/{self.baseline_tag}"

    def to_frame(self) -> pd.DataFrame:
        """Ratio-vs-index series."""
        return pd.DataFrame(
            {
                "component_index": np.arange(self.values.size, dtype=int),
                "component_id": self.component_id,
                "ratio": self.values,
                "anomaly": self.anomaly,
            }
        )


@dataclass(frozen=True)
class BinStatistic:
    """Ratio statistics of all components sharing one radial distance.

    ``count`` is the bin membership.  ``n_used`` is the number of ratios that
    entered ``mean`` and ``std``; it is smaller than ``count`` only when
    non-finite ratios were excluded.  ``std`` is the population standard
    deviation (divided by ``n_used``).
    """

    distance: float
    count: int
    mean: float
    std: float
    n_used: int


@dataclass(frozen=True)
class BinResult:
    """Per-bin statistics of one run against its baseline, in ascending radius."""

    run_id: int
    baseline_id: int
    run_tag: str
    baseline_tag: str
    stats: Tuple[BinStatistic, ...]

    @property
    def n_bins(self) -> int:
        return len(self.stats)

    @property
    def total_count(self) -> int:
        return int(sum(s.count for s in self.stats))

    @property
    def distances(self) -> np.ndarray:
        return np.array([s.distance for s in self.stats], dtype=np.float64)

    @property
    def means(self) -> np.ndarray:
        return np.array([s.mean for s in self.stats], dtype=np.float64)

    @property
    def stds(self) -> np.ndarray:
        return np.array([s.std for s in self.stats], dtype=np.float64)

    @property
    def title(self) -> str:
        return f"Run {self.run_tag}/{self.baseline_tag} Radial Distance"

    def to_frame(self) -> pd.DataFrame:
        """Statistic-vs-radius series."""
        return pd.DataFrame(
            {
                "distance": self.distances,
                "count": np.array([s.count for s in self.stats], dtype=int),
                "mean_ratio": self.means,
                "std_ratio": self.stds,
                "n_used": np.array([s.n_used for s in self.stats], dtype=int),
            }
        )
