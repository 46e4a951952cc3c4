from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from ftcal_led_analyzer.models.catalog import LedFileCatalog
from ftcal_led_analyzer.models.profile import AnalysisProfile


@dataclass
class LedFileDiscovery:
    """
    Scan one folder (non-recursive) for LED run files.

    A file is a candidate when it is a regular file whose name ends with the profile's
    extension (case-insensitive).  Candidates without the run marker in their name are
    skipped and reported as warnings instead of failing later at load time.
    """
    profile: AnalysisProfile = field(default_factory=AnalysisProfile)

    def build_catalog(self, selected_dir: str | Path) -> LedFileCatalog:
        root = Path(selected_dir).expanduser().resolve()
        if not root.exists() or not root.is_dir():
            raise FileNotFoundError(f"Not a directory: {root}")

        ext = self.profile.extension.lower()
        marker = self.profile.marker

        files: List[Path] = []
        skipped: List[Path] = []
        for p in sorted(root.iterdir(), key=lambda q: q.name):
            if not p.is_file():
                continue
            if not p.name.lower().endswith(ext):
                continue
            if marker not in p.name:
                skipped.append(p)
                continue
            files.append(p)

        warnings: List[str] = []
        if skipped:
            warnings.append(f"{len(skipped)} '{ext}' file(s) without marker '{marker}' skipped:")
            for p in skipped[:20]:
                warnings.append(f"  {p.name}")
        if not files:
            warnings.append(f"no LED files matching '*{marker}*{ext}' in {root}")

        return LedFileCatalog(
            root_dir=root,
            marker=marker,
            extension=ext,
            files=files,
            skipped=skipped,
            warnings=tuple(warnings),
        )


def discover_led_files(selected_dir: str | Path, profile: Optional[AnalysisProfile] = None) -> LedFileCatalog:
    """Shortcut for ``LedFileDiscovery(profile).build_catalog(selected_dir)``."""
    return LedFileDiscovery(profile or AnalysisProfile()).build_catalog(selected_dir)
