"""Component id -> crystal-grid position.

The FT-Cal crystals sit on a ``grid_width x grid_width`` grid (22 x 22).  A
component id enumerates that grid row by row:

    row = floor(id / 22) + 1          (1..22)
    col = id + 1 - (row - 1) * 22     (1..22)

Each index is then remapped so that the grid is centred on the origin with no
zero coordinate: indices ``<= 11`` map to ``-11..-1`` and indices ``>= 12`` to
``1..11``.  ``x`` is the remapped column, ``y`` the remapped row and
``r = sqrt(x**2 + y**2)``.  Ids ``c`` and ``483 - c`` are point-symmetric.
"""

from __future__ import annotations

import math
from typing import Sequence, Union

import numpy as np

from ftcal_led_analyzer.models.records import GeometryResult, Position


GRID_WIDTH = 22
GRID_HALF = 11


def _as_component_ids(component_ids: Union[Sequence[float], np.ndarray]) -> np.ndarray:
    ids = np.asarray(component_ids, dtype=np.float64)
    if ids.ndim != 1:
        raise ValueError(f"component ids must be 1D, got shape {ids.shape}")
    bad = ~np.isfinite(ids) | (ids < 0) | (ids != np.floor(ids))
    if np.any(bad):
        idx = np.where(bad)[0]
        raise ValueError(
            f"component ids must be non-negative integers; offending rows: {idx[:20].tolist()}"
        )
    return ids.astype(np.int64)


def _remap(v, grid_half: int):
    return np.where(v <= grid_half, v - (grid_half + 1), v - grid_half)


def component_position(
    component_id: float,
    *,
    grid_width: int = GRID_WIDTH,
    grid_half: int = GRID_HALF,
) -> Position:
    """Map one component id to its grid position."""
    cid = float(component_id)
    if not math.isfinite(cid) or cid < 0 or not cid.is_integer():
        raise ValueError(f"component id must be a non-negative integer, got {component_id!r}")
    cid_i = int(cid)

    row = cid_i // grid_width + 1
    col = cid_i + 1 - (row - 1) * grid_width

    y = row - (grid_half + 1) if row <= grid_half else row - grid_half
    x = col - (grid_half + 1) if col <= grid_half else col - grid_half

    xf = float(x)
    yf = float(y)
    return Position(x=int(x), y=int(y), r=math.sqrt(xf * xf + yf * yf))


def derive_geometry(
    component_ids: Union[Sequence[float], np.ndarray],
    *,
    grid_width: int = GRID_WIDTH,
    grid_half: int = GRID_HALF,
) -> GeometryResult:
    """Vectorised :func:`component_position` over all components of a run.

    Returns the same values as the scalar form, bit for bit.
    """
    ids = _as_component_ids(component_ids)

    row = ids // grid_width + 1
    col = ids + 1 - (row - 1) * grid_width

    y = _remap(row, grid_half).astype(np.int64)
    x = _remap(col, grid_half).astype(np.int64)

    xf = x.astype(np.float64)
    yf = y.astype(np.float64)
    r = np.sqrt(xf * xf + yf * yf)
    return GeometryResult(x=x, y=y, r=r)
