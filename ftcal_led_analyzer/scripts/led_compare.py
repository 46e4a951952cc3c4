"""Compare all FT-Cal LED runs of one folder against the earliest run.

Usage::

    python -m ftcal_led_analyzer.scripts.led_compare /path/to/OriginalLEDData --out-dir plots

The folder is scanned for ``*ftCalLed_-<run>*.txt`` files; every readable run is
divided by the run with the lowest run number, and the three comparison figures
are written as PNG files.
"""

from __future__ import annotations

import json
from dataclasses import replace
from pathlib import Path
from typing import Optional, Sequence

from ftcal_led_analyzer.analysis.collection import analyze_collection, load_runs
from ftcal_led_analyzer.ingest.discovery import LedFileDiscovery
from ftcal_led_analyzer.ingest.readers_led import LedRunReader
from ftcal_led_analyzer.models.profile import AnalysisProfile


def _build_profile(ns) -> AnalysisProfile:
    if ns.profile:
        prof = AnalysisProfile.from_dict(json.loads(Path(ns.profile).read_text(encoding="utf-8")))
    else:
        prof = AnalysisProfile()
    overrides = {}
    if ns.marker is not None:
        overrides["marker"] = ns.marker
    if ns.extension is not None:
        overrides["extension"] = ns.extension
    if ns.tolerance is not None:
        overrides["radius_tolerance"] = float(ns.tolerance)
    if ns.lenient:
        overrides["strict_records"] = False
    if ns.exclude_nonfinite:
        overrides["exclude_nonfinite"] = True
    return replace(prof, **overrides) if overrides else prof


def main(argv: Optional[Sequence[str]] = None) -> int:
    import argparse
    import textwrap

    p = argparse.ArgumentParser(
        prog="python -m ftcal_led_analyzer.scripts.led_compare",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        description=textwrap.dedent(
            """\
            Compare the FT-Cal LED runs of a folder.

            Each run's amplitude means are divided by those of the run with the lowest
            run number, and averaged per radial distance of the crystals.
            """
        ),
    )
    p.add_argument("folder", help="Folder containing the LED text files")
    p.add_argument("--profile", default=None, help="JSON file with AnalysisProfile fields")
    p.add_argument("--marker", default=None, help="Literal preceding the run number in file names (default 'ftCalLed_-')")
    p.add_argument("--extension", default=None, help="File extension to scan (default '.txt')")
    p.add_argument("--tolerance", type=float, default=None, help="Radius tolerance for binning (default 0 = exact)")
    p.add_argument("--lenient", action="store_true", help="Zero-fill malformed tables instead of rejecting them")
    p.add_argument("--exclude-nonfinite", action="store_true", help="Leave non-finite ratios out of bin statistics")
    p.add_argument("--out-dir", default=None, help="Output directory for PNG plots (default: <folder>/led_plots)")
    p.add_argument("--no-plots", action="store_true", help="Only print the summary")

    ns = p.parse_args(list(argv) if argv is not None else None)

    prof = _build_profile(ns)

    catalog = LedFileDiscovery(prof).build_catalog(ns.folder)
    for w in catalog.warnings:
        print(f"[warn] {w}")
    print(f"[info] {catalog.n_files} LED file(s) in {catalog.root_dir}")

    report = load_runs(catalog.files, LedRunReader(prof))
    for f in report.failures:
        print(f"[warn] {f.describe()}")
    if not report.runs:
        print("[warn] no run could be loaded; nothing to compare")
        return 1

    result = analyze_collection(report.runs, prof)
    for w in result.warnings:
        print(f"[warn] {w}")
    for f in result.failures:
        print(f"[warn] {f.describe()}")
    if not result.analyses:
        print("[warn] no run could be analysed")
        return 1

    print(f"[info] baseline run: {result.baseline.run_tag}")
    for a in result.analyses:
        br = a.bin_result
        ratios = a.ratio.values[~a.ratio.anomaly]
        mean_ratio = float(ratios.mean()) if ratios.size else float("nan")
        print(
            f"  run {a.run.run_tag}: {a.run.n_components} components, {br.n_bins} radial bins, "
            f"mean ratio={mean_ratio:.4f}, anomalies={a.ratio.n_anomalies}"
        )

    if not ns.no_plots:
        import matplotlib

        matplotlib.use("Agg")
        from ftcal_led_analyzer.presentation.plots import save_all_plots

        out_dir = Path(ns.out_dir) if ns.out_dir else catalog.root_dir / "led_plots"
        written = save_all_plots(result, out_dir, prof)
        for name, path in written.items():
            print(f"[info] wrote {name}: {path}")

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
