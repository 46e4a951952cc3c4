from __future__ import annotations

from pathlib import Path
from typing import Callable, Optional, Sequence

import numpy as np
import pytest

from ftcal_led_analyzer.tests.led_test_utils import annulus_component_ids, led_rows


@pytest.fixture
def standard_ids() -> np.ndarray:
    return annulus_component_ids()


@pytest.fixture
def make_led_file(tmp_path: Path, standard_ids: np.ndarray) -> Callable[..., Path]:
    """Factory writing one LED file; returns its path.

    ``amplitudes`` defaults to 100.0 for every component, ``text`` bypasses
    the generated rows entirely.
    """

    def _make(
        run_tag: str = "12345",
        amplitudes: Optional[Sequence[float]] = None,
        *,
        name: Optional[str] = None,
        text: Optional[str] = None,
        folder: Optional[Path] = None,
    ) -> Path:
        d = folder or tmp_path
        d.mkdir(parents=True, exist_ok=True)
        fname = name or f"ftCalLed_-{run_tag}_led.txt"
        if text is None:
            amps = np.full(standard_ids.size, 100.0) if amplitudes is None else np.asarray(amplitudes, dtype=float)
            text = led_rows(standard_ids, amps)
        p = d / fname
        p.write_text(text, encoding="utf-8")
        return p

    return _make
