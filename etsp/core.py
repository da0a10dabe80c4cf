from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Sequence

import numpy as np


@dataclass
class TourState:
    """
    Core solver state for a single Euclidean TSP run.

    Node indices are 0..n-1 in input order.
    dist is the rounded integer distance matrix (n x n, int64).
    cand[i] holds the k nearest other nodes of i followed by i itself.
    pos[node] is the current position of node in tour.
    """

    n: int

    # Geometry
    x: np.ndarray = field(default_factory=lambda: np.zeros(0, dtype=np.float64))
    y: np.ndarray = field(default_factory=lambda: np.zeros(0, dtype=np.float64))

    # Precomputed once per run
    dist: np.ndarray = field(default_factory=lambda: np.zeros((0, 0), dtype=np.int64))
    cand: List[List[int]] = field(default_factory=list)

    # Solution state
    tour: List[int] = field(default_factory=list)
    pos: List[int] = field(default_factory=list)

    # Cost bookkeeping
    current_cost: int = 0
    rounds: int = 0


def tour_length(tour: Sequence[int], dist: np.ndarray) -> int:
    """Cyclic sum of edge distances for tour."""
    n = len(tour)
    if n < 2:
        return 0
    idx = np.asarray(tour, dtype=np.int64)
    return int(dist[idx, np.roll(idx, -1)].sum())


def compute_tour_length(state: TourState) -> int:
    return tour_length(state.tour, state.dist)


def rebuild_positions(state: TourState) -> None:
    """Recompute the node -> position index from the tour."""
    pos = [-1] * state.n
    for p, node in enumerate(state.tour):
        pos[node] = p
    state.pos = pos


def snapshot_state(state: TourState) -> TourState:
    """Copy the mutable tour; geometry, matrix and candidates are shared."""
    return TourState(
        n=state.n,
        x=state.x,
        y=state.y,
        dist=state.dist,
        cand=state.cand,
        tour=list(state.tour),
        pos=list(state.pos),
        current_cost=state.current_cost,
        rounds=state.rounds,
    )


def restore_snapshot(target: TourState, snap: TourState) -> None:
    """Copy mutable solution state from snapshot into target."""
    target.tour = list(snap.tour)
    target.pos = list(snap.pos)
    target.current_cost = snap.current_cost
