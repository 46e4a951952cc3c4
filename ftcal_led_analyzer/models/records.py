from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Tuple

import numpy as np
import pandas as pd

from ftcal_led_analyzer.models.results import RadialBinSet


# Column order of the LED text files.
RECORD_FIELDS: Tuple[str, ...] = (
    "sector",
    "layer",
    "component_id",
    "pedestal",
    "noise",
    "charge",
    "charge_sigma",
    "amplitude_mean",
    "amplitude_sigma",
)

POSITION_FIELDS: Tuple[str, ...] = ("x", "y", "r")


@dataclass(frozen=True)
class ComponentRecord:
    """One row of an LED file; ``index`` is the row number in the file."""

    index: int
    sector: float
    layer: float
    component_id: float
    pedestal: float
    noise: float
    charge: float
    charge_sigma: float
    amplitude_mean: float
    amplitude_sigma: float


@dataclass(frozen=True)
class Position:
    """Crystal-grid coordinates and radial distance of one component."""

    x: int
    y: int
    r: float


@dataclass(frozen=True)
class GeometryResult:
    """Derived positions of all components of a run, in component order.

    x, y are integer arrays and r a float64 array, all of shape ``(n,)``.
    """

    x: np.ndarray
    y: np.ndarray
    r: np.ndarray

    def position(self, index: int) -> Position:
        return Position(x=int(self.x[index]), y=int(self.y[index]), r=float(self.r[index]))


@dataclass(frozen=True)
class RunTable:
    """
    In-memory representation of one LED run file after parsing.

    Notes
    - df has one row per component in file order (the canonical component index);
      columns are RECORD_FIELDS followed by the cached POSITION_FIELDS.
    - geometry and bins are derived once by the reader and never recomputed.
    - run_tag is the identifier exactly as found in the file name, run_id its integer value.
    """
    source_path: Path
    run_tag: str
    run_id: int
    df: pd.DataFrame
    geometry: GeometryResult
    bins: RadialBinSet
    warnings: Tuple[str, ...] = ()

    @property
    def n_components(self) -> int:
        return int(len(self.df))

    @property
    def amplitude_mean(self) -> np.ndarray:
        return self.df["amplitude_mean"].to_numpy(dtype=np.float64)

    @property
    def component_id(self) -> np.ndarray:
        return self.df["component_id"].to_numpy(dtype=np.float64)

    @property
    def radii(self) -> np.ndarray:
        return self.geometry.r

    @property
    def records(self) -> Tuple[ComponentRecord, ...]:
        rows = self.df.loc[:, list(RECORD_FIELDS)].itertuples(index=False, name=None)
        return tuple(
            ComponentRecord(i, *(float(v) for v in row)) for i, row in enumerate(rows)
        )

    @property
    def positions(self) -> Tuple[Position, ...]:
        return tuple(self.geometry.position(i) for i in range(self.n_components))

    def amplitude_frame(self) -> pd.DataFrame:
        """Value-vs-index series (amplitude mean per component)."""
        return pd.DataFrame(
            {
                "component_index": np.arange(self.n_components, dtype=int),
                "component_id": self.component_id,
                "amplitude_mean": self.amplitude_mean,
                "amplitude_sigma": self.df["amplitude_sigma"].to_numpy(dtype=np.float64),
            }
        )
