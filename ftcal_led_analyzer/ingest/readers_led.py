from __future__ import annotations

from pathlib import Path
from typing import List, Optional, Tuple, Union

import numpy as np
import pandas as pd

from ftcal_led_analyzer.analysis.bins import radial_bins
from ftcal_led_analyzer.analysis.geometry import derive_geometry
from ftcal_led_analyzer.errors import MalformedIdentifier, MalformedRecords, SourceUnavailable
from ftcal_led_analyzer.models.profile import AnalysisProfile
from ftcal_led_analyzer.models.records import POSITION_FIELDS, RECORD_FIELDS, RunTable


N_FIELDS = len(RECORD_FIELDS)


def parse_run_identifier(
    name: Union[str, Path],
    *,
    marker: str = "ftCalLed_-",
    width: int = 5,
) -> Tuple[str, int]:
    """
    Extract the run identifier from a file name.

    The identifier is the ``width`` characters following the first occurrence of
    ``marker`` in the base name, e.g. ``ftCalLed_-12345_...txt`` -> ("12345", 12345).
    """
    base = Path(name).name
    pos = base.find(marker)
    if pos < 0:
        raise MalformedIdentifier(f"run marker '{marker}' not found in '{base}'")
    tag = base[pos + len(marker): pos + len(marker) + width]
    if len(tag) != width:
        raise MalformedIdentifier(f"'{base}': expected {width} characters after '{marker}', got '{tag}'")
    try:
        run_id = int(tag)
    except ValueError:
        raise MalformedIdentifier(f"'{base}': run identifier '{tag}' is not an integer") from None
    return tag, run_id


class LedRunReader:
    """
    Reader for FT-Cal LED text files: 9 whitespace-separated numeric fields per row,
    no header, one row per component.

    Field order:
        sector, layer, component_id, pedestal, noise, charge, charge_sigma,
        amplitude_mean, amplitude_sigma

    Contract (strict_records=True, the default):
      - Exactly n_components non-blank rows, each with exactly 9 numeric fields.
      - Any violation raises MalformedRecords; no partial table is returned.

    Lenient mode (strict_records=False) reads the values as one token stream, the
    way the legacy macro did: rows are refilled regardless of line breaks, reading
    stops at the first non-numeric token, anything missing is zero-filled and
    extra tokens are ignored.  Every repair is listed in RunTable.warnings.

    Geometry (x, y, r per component) and the radial bin set are derived here,
    once, and cached on the returned RunTable.
    """

    def __init__(self, profile: Optional[AnalysisProfile] = None):
        self.profile = profile or AnalysisProfile()

    def read(self, path: Union[str, Path]) -> RunTable:
        prof = self.profile
        p = Path(path).expanduser()
        run_tag, run_id = parse_run_identifier(p, marker=prof.marker, width=prof.run_id_width)

        try:
            text = p.read_text(errors="replace")
        except OSError as e:
            raise SourceUnavailable(f"cannot read LED file '{p}': {e}") from e

        if prof.strict_records:
            mat = self._parse_strict(text, p)
            warnings: List[str] = []
        else:
            mat, warnings = self._parse_stream(text)

        df = pd.DataFrame(mat, columns=list(RECORD_FIELDS))

        try:
            geometry = derive_geometry(
                df["component_id"].to_numpy(),
                grid_width=prof.grid_width,
                grid_half=prof.grid_half,
            )
        except ValueError as e:
            raise MalformedRecords(f"'{p.name}': {e}") from e

        df[POSITION_FIELDS[0]] = geometry.x
        df[POSITION_FIELDS[1]] = geometry.y
        df[POSITION_FIELDS[2]] = geometry.r

        bins = radial_bins(geometry.r, tolerance=prof.radius_tolerance)

        return RunTable(
            source_path=p.resolve(),
            run_tag=run_tag,
            run_id=run_id,
            df=df,
            geometry=geometry,
            bins=bins,
            warnings=tuple(warnings),
        )

    def _parse_strict(self, text: str, path: Path) -> np.ndarray:
        n = int(self.profile.n_components)
        rows = [line.split() for line in text.splitlines() if line.strip()]
        if len(rows) != n:
            raise MalformedRecords(f"'{path.name}': expected {n} rows, found {len(rows)}")

        bad_width = [i for i, row in enumerate(rows) if len(row) != N_FIELDS]
        if bad_width:
            raise MalformedRecords(
                f"'{path.name}': rows with != {N_FIELDS} fields: {bad_width[:20]}"
            )

        tokens = pd.Series([tok for row in rows for tok in row], dtype=object)
        values = pd.to_numeric(tokens, errors="coerce").to_numpy(dtype=np.float64)
        bad = ~np.isfinite(values)
        if np.any(bad):
            idx = np.where(bad)[0]
            cells = [(int(i) // N_FIELDS, RECORD_FIELDS[int(i) % N_FIELDS]) for i in idx[:10]]
            raise MalformedRecords(f"'{path.name}': non-numeric or non-finite fields at (row, field) {cells}")

        return values.reshape((n, N_FIELDS))

    def _parse_stream(self, text: str) -> Tuple[np.ndarray, List[str]]:
        n = int(self.profile.n_components)
        need = n * N_FIELDS
        warnings: List[str] = []

        tokens = text.split()
        values = pd.to_numeric(pd.Series(tokens[:need], dtype=object), errors="coerce").to_numpy(dtype=np.float64)

        bad = ~np.isfinite(values)
        if np.any(bad):
            first_bad = int(np.argmax(bad))
            warnings.append(
                f"non-numeric token '{tokens[first_bad]}' at row {first_bad // N_FIELDS}, "
                f"field {RECORD_FIELDS[first_bad % N_FIELDS]}; remaining fields zero-filled"
            )
            values = values[:first_bad]

        if len(tokens) < need and values.size == len(tokens):
            warnings.append(f"only {len(tokens)} of {need} fields present; remaining fields zero-filled")
        elif len(tokens) > need:
            warnings.append(f"{len(tokens) - need} extra field(s) after row {n - 1} ignored")

        flat = np.zeros(need, dtype=np.float64)
        flat[: values.size] = values
        return flat.reshape((n, N_FIELDS)), warnings
