"""FT-Cal LED Analyzer -- comparison of FT-Cal LED calibration runs.

This package provides tools for:
- Discovering LED run files (``ftCalLed_-<run>...txt``) in a folder
- Reading each file into an immutable 332-component RunTable
- Deriving crystal-grid positions (x, y) and radial distances per component
- Computing amplitude ratios of every run to the earliest (baseline) run
- Averaging ratios per radial distance (mean and population std)
- Rendering the comparison plots with matplotlib

Key principles:
- Strict ingest: malformed tables are rejected unless lenient mode is requested
- Immutable stages: RunTable -> RatioVector -> BinResult, no in-place updates
- Isolation: one bad run is reported and skipped, never aborts the collection

Main subpackages:
- analysis: Geometry, radial bins, ratios, bin statistics, collection workflow
- ingest: File discovery and the LED text reader
- models: Data models (AnalysisProfile, RunTable, RatioVector, BinResult)
- presentation: Matplotlib figures
- scripts: Command-line entry point
"""

__all__ = []
