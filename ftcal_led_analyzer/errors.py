"""Error taxonomy for LED run ingestion and analysis.

Per-run failures (``SourceUnavailable``, ``MalformedIdentifier``,
``MalformedRecords``) are isolated by the collection layer: the affected run is
dropped and reported, the rest of the collection is processed.

``GeometryInconsistency`` signals that a run's radial bins and per-component
radii diverged. It is an ``AssertionError`` subclass and halts the statistics
of that run.

Division anomalies (zero baseline amplitude) are not exceptions; they are
flagged in :attr:`~ftcal_led_analyzer.models.results.RatioVector.anomaly`.
"""

from __future__ import annotations


class LedAnalysisError(Exception):
    """Base class of all errors raised by this package."""


class SourceUnavailable(LedAnalysisError, OSError):
    """An input file cannot be opened or read."""


class MalformedIdentifier(LedAnalysisError, ValueError):
    """The run identifier cannot be extracted from a source name."""


class MalformedRecords(LedAnalysisError, ValueError):
    """A run table does not have the expected shape or numeric content (strict mode)."""


class GeometryInconsistency(LedAnalysisError, AssertionError):
    """A radial bin closed with zero members, or components were left unbinned."""
