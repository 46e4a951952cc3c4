from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import List, Tuple


@dataclass(frozen=True)
class LedFileCatalog:
    """
    Discovery output: the LED run files found in one folder.

    Notes
    - files are sorted by file name; this is NOT the run order (use sort_runs after loading).
    - skipped lists files with the right extension whose name lacks the run marker.
    """
    root_dir: Path
    marker: str
    extension: str
    files: List[Path]
    skipped: List[Path]
    warnings: Tuple[str, ...] = ()

    @property
    def n_files(self) -> int:
        return len(self.files)

    def __iter__(self):
        return iter(self.files)
