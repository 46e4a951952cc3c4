"""Analysis package.

Design principle:
  - Ingest produces immutable :class:`~ftcal_led_analyzer.models.records.RunTable` objects
    with positions and radial bins already derived.
  - Analysis consumes RunTables and produces new immutable results
    (RatioVector, BinResult); nothing here mutates a RunTable.

Grouping by radius uses exact float equality unless a tolerance is configured.
Collection-level orchestration lives in :mod:`ftcal_led_analyzer.analysis.collection`
(it depends on the ingest layer and is not re-exported here).
"""

from .geometry import component_position, derive_geometry
from .bins import radial_bins
from .ratio import compute_ratio
from .bin_stats import RunAnalysis, analyze_run, compute_bin_statistics, order_by_radius

__all__ = [
    "component_position",
    "derive_geometry",
    "radial_bins",
    "compute_ratio",
    "RunAnalysis",
    "analyze_run",
    "compute_bin_statistics",
    "order_by_radius",
]
