from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .core import TourState, compute_tour_length


@dataclass
class TwoOptConfig:
    max_sweeps: Optional[int] = None


def _reverse_segment(state: TourState, i: int, j: int) -> None:
    """Reverse tour[i..j] (inclusive) and refresh pos for that range."""
    tour = state.tour
    tour[i : j + 1] = reversed(tour[i : j + 1])
    pos = state.pos
    for p in range(i, j + 1):
        pos[tour[p]] = p


def two_opt_sweep(state: TourState) -> int:
    """
    One first-improvement pass over tour positions 0..n-2.

    For the edge (u, v) leaving each position, the candidates of u are tried
    in list order; the first strictly improving exchange of (u, v), (w, z)
    for (u, w), (v, z) is applied and the scan moves to the next position.
    Returns the number of moves applied.
    """
    n = state.n
    if n < 4:
        return 0
    tour = state.tour
    pos = state.pos
    dist = state.dist
    moves = 0
    for u_i in range(n - 1):
        u = tour[u_i]
        v = tour[u_i + 1]
        d_uv = dist[u, v]
        for w in state.cand[u]:
            if w == u:
                continue
            w_i = pos[w]
            if w_i == u_i or w_i == u_i + 1:
                continue
            z = tour[(w_i + 1) % n]
            current = d_uv + dist[w, z]
            candidate = dist[u, w] + dist[v, z]
            if candidate < current:
                if w_i > u_i:
                    _reverse_segment(state, u_i + 1, w_i)
                else:
                    _reverse_segment(state, w_i + 1, u_i)
                moves += 1
                break
    return moves


def two_opt_local_search(state: TourState, cfg: Optional[TwoOptConfig] = None) -> int:
    """
    Run sweeps until one applies no move (local optimum) or cfg.max_sweeps is hit.
    Recomputes cost if any improvement found. Returns total moves applied.
    """
    if cfg is None:
        cfg = TwoOptConfig()
    total = 0
    sweeps = 0
    while True:
        moves = two_opt_sweep(state)
        total += moves
        sweeps += 1
        if moves == 0:
            break
        if cfg.max_sweeps is not None and sweeps >= cfg.max_sweeps:
            break
    if total:
        state.current_cost = compute_tour_length(state)
    return total
