from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import numpy as np

from .core import TourState, compute_tour_length, rebuild_positions


@dataclass
class InitConfig:
    """Configuration for the initial constructor."""

    start_node: int = 0


def build_initial_tour(state: TourState, cfg: Optional[InitConfig] = None) -> None:
    """
    Nearest-neighbour greedy constructor.
    - Starts at cfg.start_node (node 0 by default).
    - Extends from the last tour node to the nearest unvisited node.
    - Ties go to the lowest node index.
    """
    if cfg is None:
        cfg = InitConfig()

    n = state.n
    if n == 0:
        state.tour = []
        state.pos = []
        state.current_cost = 0
        return
    if not 0 <= cfg.start_node < n:
        raise ValueError(f"start node {cfg.start_node} out of range for {n} nodes")

    visited = np.zeros((n,), dtype=bool)
    big = np.iinfo(np.int64).max
    tour = [cfg.start_node]
    visited[cfg.start_node] = True
    u = cfg.start_node
    for _ in range(n - 1):
        row = np.where(visited, big, state.dist[u])
        # argmin returns the first minimum, i.e. the lowest index on ties.
        chosen = int(np.argmin(row))
        tour.append(chosen)
        visited[chosen] = True
        u = chosen

    state.tour = tour
    rebuild_positions(state)
    state.current_cost = compute_tour_length(state)
