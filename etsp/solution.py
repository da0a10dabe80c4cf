from __future__ import annotations

import io
import sys
from typing import Optional

from .core import TourState, compute_tour_length


def validate_tour(state: TourState) -> None:
    """
    Basic feasibility checks.
    - Coverage: every node 0..n-1 appears exactly once.
    - Positions: pos mirrors the tour.
    - Cost: recompute the length and ensure it matches current_cost if set.
    """
    n = state.n
    if len(state.tour) != n:
        raise ValueError(f"Tour has {len(state.tour)} nodes, expected {n}")
    seen = [0] * n
    for node in state.tour:
        if node < 0 or node >= n:
            raise ValueError(f"Node id {node} out of range")
        seen[node] += 1
    for j in range(n):
        if seen[j] != 1:
            raise ValueError(f"Node {j} seen {seen[j]} times")
    if state.pos:
        for p, node in enumerate(state.tour):
            if state.pos[node] != p:
                raise ValueError(f"Position index out of sync for node {node}")

    recomputed = compute_tour_length(state)
    if state.current_cost and recomputed != state.current_cost:
        raise ValueError(f"Cost mismatch: recomputed {recomputed} vs current_cost {state.current_cost}")
    state.current_cost = recomputed


def emit_tour(state: TourState, out: Optional[io.TextIOBase] = None) -> None:
    """Write the tour to stdout (or provided stream), one 0-based node index per line."""
    out_stream = sys.stdout if out is None else out
    for node in state.tour:
        out_stream.write(f"{node}\n")
    out_stream.flush()
