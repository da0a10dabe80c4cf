from __future__ import annotations

import numpy as np

from .core import TourState


def round_half_away(h: np.ndarray) -> np.ndarray:
    """
    Round non-negative distances half away from zero, like C round().
    Values just below 0.5 map to 0 (floor(h + 0.5) would give 1 there).
    """
    lo = np.floor(h)
    return np.where(h - lo >= 0.5, lo + 1.0, lo).astype(np.int64)


def build_distance_matrix(x: np.ndarray, y: np.ndarray) -> np.ndarray:
    """
    Rounded EUC_2D matrix: d(i, j) = round(hypot(dx, dy)).
    Symmetric with a zero diagonal; one row is filled per node.
    """
    x = np.asarray(x, dtype=np.float64)
    y = np.asarray(y, dtype=np.float64)
    n = x.shape[0]
    D = np.zeros((n, n), dtype=np.int64)
    for i in range(n):
        dx = x[i] - x
        dy = y[i] - y
        D[i] = round_half_away(np.hypot(dx, dy))
    return D


def attach_distance_matrix(state: TourState) -> None:
    state.dist = build_distance_matrix(state.x, state.y)
