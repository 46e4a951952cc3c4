"""Collection-level orchestration: load, order, pick the baseline, analyse.

Runs are independent of each other; the only cross-run step is the baseline
selection, a reduction over the fully loaded collection.  Per-run failures
never abort the collection: they are returned as :class:`RunFailure` records
and the remaining runs are processed.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, Optional, Sequence, Tuple, Union

from ftcal_led_analyzer.analysis.bin_stats import RunAnalysis, analyze_run
from ftcal_led_analyzer.errors import GeometryInconsistency, LedAnalysisError
from ftcal_led_analyzer.ingest.readers_led import LedRunReader
from ftcal_led_analyzer.models.profile import AnalysisProfile
from ftcal_led_analyzer.models.records import RunTable


@dataclass(frozen=True)
class RunFailure:
    """A run dropped at ``stage`` ("load" or "statistics") because of ``error``."""

    source: Path
    stage: str
    error: Exception
    run_tag: Optional[str] = None

    @property
    def kind(self) -> str:
        return type(self.error).__name__

    def describe(self) -> str:
        who = f"run {self.run_tag}" if self.run_tag else self.source.name
        return f"{who}: {self.stage} failed ({self.kind}: {self.error})"


@dataclass(frozen=True)
class LoadReport:
    runs: Tuple[RunTable, ...]
    failures: Tuple[RunFailure, ...] = ()


@dataclass(frozen=True)
class CollectionAnalysis:
    """Result of :func:`analyze_collection`; ``analyses`` are in ascending run order."""

    baseline: RunTable
    analyses: Tuple[RunAnalysis, ...]
    failures: Tuple[RunFailure, ...] = ()
    warnings: Tuple[str, ...] = ()

    @property
    def runs(self) -> Tuple[RunTable, ...]:
        return tuple(a.run for a in self.analyses)


def load_runs(
    paths: Iterable[Union[str, Path]],
    reader: Optional[LedRunReader] = None,
) -> LoadReport:
    """Read every path; unreadable or malformed runs are reported, not loaded."""
    rd = reader or LedRunReader()
    runs: List[RunTable] = []
    failures: List[RunFailure] = []
    for path in paths:
        p = Path(path)
        try:
            runs.append(rd.read(p))
        except LedAnalysisError as e:
            failures.append(RunFailure(source=p, stage="load", error=e))
    return LoadReport(runs=tuple(runs), failures=tuple(failures))


def run_sort_key(run: RunTable) -> int:
    return int(run.run_id)


def compare_runs(a: RunTable, b: RunTable) -> int:
    """-1, 0 or 1 as ``a`` orders before, with, or after ``b`` (by run id)."""
    ka = run_sort_key(a)
    kb = run_sort_key(b)
    return (ka > kb) - (ka < kb)


def sort_runs(runs: Iterable[RunTable]) -> List[RunTable]:
    """Ascending run id; stable for equal ids."""
    return sorted(runs, key=run_sort_key)


def select_baseline(runs: Sequence[RunTable]) -> RunTable:
    """The run with the smallest run id.

    With several runs sharing the smallest id the first one in ``runs`` is
    returned; which one that is carries no meaning.
    """
    if not runs:
        raise ValueError("cannot select a baseline from an empty collection")
    return min(runs, key=run_sort_key)


def analyze_collection(
    runs: Sequence[RunTable],
    profile: Optional[AnalysisProfile] = None,
    *,
    baseline: Optional[RunTable] = None,
) -> CollectionAnalysis:
    """Ratio and radial-bin statistics of every run against the baseline.

    Parameters
    ----------
    runs:
        Fully loaded runs (any order).
    profile:
        Analysis options (``exclude_nonfinite``).
    baseline:
        Explicit baseline; defaults to :func:`select_baseline`.

    A :class:`GeometryInconsistency` in one run stops the statistics of that
    run only; it is reported in ``failures`` with stage "statistics".
    """
    prof = profile or AnalysisProfile()
    base = baseline if baseline is not None else select_baseline(runs)

    warnings: List[str] = []
    analyses: List[RunAnalysis] = []
    failures: List[RunFailure] = []
    for run in sort_runs(runs):
        try:
            a = analyze_run(run, base, prof)
        except GeometryInconsistency as e:
            failures.append(RunFailure(source=run.source_path, stage="statistics", error=e, run_tag=run.run_tag))
            continue
        analyses.append(a)
        warnings.extend(f"run {run.run_tag}: {w}" for w in run.warnings)
        warnings.extend(f"run {run.run_tag}: {w}" for w in a.ratio.warnings)

    return CollectionAnalysis(
        baseline=base,
        analyses=tuple(analyses),
        failures=tuple(failures),
        warnings=tuple(warnings),
    )
