"""Analysis profile -- bundles all configuration that affects the output.

An AnalysisProfile groups every parameter of the LED comparison into one
frozen dataclass.  It can be:

- Constructed with defaults matching the FT-Cal LED files
- Overridden field-by-field via ``dataclasses.replace()``
- Serialized to/from a dict for JSON provenance
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict, Tuple


@dataclass(frozen=True)
class AnalysisProfile:
    """Frozen configuration for the LED comparison pipeline.

    File naming
    -----------
    marker : str
        Literal that precedes the run identifier in every file name.
    run_id_width : int
        Number of characters of the run identifier following ``marker``.
    extension : str
        Suffix of the LED files considered by discovery.

    Table layout
    ------------
    n_components : int
        Rows per run (one per crystal).
    grid_width : int
        Width of the crystal grid used to map component ids to (x, y).
    grid_half : int
        Remap threshold: grid indices ``<= grid_half`` are shifted by
        ``grid_half + 1``, the others by ``grid_half``.

    Analysis
    --------
    radius_tolerance : float
        0.0 groups radii by exact equality.  A positive value merges radii
        closer than the tolerance to the first radius of a bin.
    strict_records : bool
        If True, a table with missing/extra rows or non-numeric fields is
        rejected.  If False it is zero-filled and the repair is recorded as
        a warning.
    exclude_nonfinite : bool
        If True, non-finite ratios are left out of the per-bin mean/std.

    Plotting
    --------
    ratio_ylim, radial_ylim : tuple of float
        y-axis ranges for the ratio and radial-distance plots.
    """

    marker: str = "ftCalLed_-"
    run_id_width: int = 5
    extension: str = ".txt"

    n_components: int = 332
    grid_width: int = 22
    grid_half: int = 11

    radius_tolerance: float = 0.0
    strict_records: bool = True
    exclude_nonfinite: bool = False

    ratio_ylim: Tuple[float, float] = (0.8, 1.1)
    radial_ylim: Tuple[float, float] = (0.9, 1.1)

    def __post_init__(self) -> None:
        if not self.marker:
            raise ValueError("marker must be a non-empty string")
        if self.run_id_width <= 0:
            raise ValueError(f"run_id_width must be > 0, got {self.run_id_width}")
        if self.n_components <= 0:
            raise ValueError(f"n_components must be > 0, got {self.n_components}")
        if self.grid_width <= 0:
            raise ValueError(f"grid_width must be > 0, got {self.grid_width}")
        if self.radius_tolerance < 0:
            raise ValueError(f"radius_tolerance must be >= 0, got {self.radius_tolerance}")

    # ------------------------------------------------------------------
    # Serialization
    # ------------------------------------------------------------------

    def to_dict(self) -> Dict[str, Any]:
        """Return a JSON-friendly dict (tuples become lists)."""
        d = asdict(self)
        d["ratio_ylim"] = list(d["ratio_ylim"])
        d["radial_ylim"] = list(d["radial_ylim"])
        return d

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> AnalysisProfile:
        """Reconstruct from a dict (e.g. loaded from JSON)."""
        d = dict(d)  # shallow copy
        for key in ("ratio_ylim", "radial_ylim"):
            if key in d and not isinstance(d[key], tuple):
                d[key] = tuple(float(v) for v in d[key])
        return cls(**d)
