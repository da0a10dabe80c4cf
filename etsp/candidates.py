from __future__ import annotations

from dataclasses import dataclass
from typing import List

import numpy as np

from .core import TourState


@dataclass
class CandidateConfig:
    k: int = 20


def effective_k(k: int, n: int) -> int:
    """Clamp the requested list size to the number of other nodes."""
    return max(0, min(int(k), n - 1))


def build_candidates(state: TourState, cfg: CandidateConfig | None = None) -> None:
    """
    Build per-node candidate lists from state.dist.

    Each list holds the k nearest other nodes ordered by (distance, index),
    followed by the node itself as a trailing sentinel.
    """
    if cfg is None:
        cfg = CandidateConfig()
    if cfg.k < 0:
        raise ValueError(f"candidate list size must be >= 0, got {cfg.k}")
    n = state.n
    k = effective_k(cfg.k, n)
    cand: List[List[int]] = [[] for _ in range(n)]
    for i in range(n):
        # Stable argsort keeps ascending index among equal distances.
        order = np.argsort(state.dist[i], kind="stable")
        order = order[order != i][:k]
        cand[i] = [int(j) for j in order] + [i]
    state.cand = cand
