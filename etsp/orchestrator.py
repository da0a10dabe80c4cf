from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence, Tuple

from .candidates import CandidateConfig, build_candidates
from .constructor import InitConfig, build_initial_tour
from .core import TourState, compute_tour_length, restore_snapshot, snapshot_state
from .distance import attach_distance_matrix
from .io import make_state, read_points_file, read_tsplib
from .solution import validate_tour
from .two_opt import TwoOptConfig, two_opt_local_search


@dataclass
class SolverConfig:
    time_limit_sec: Optional[float] = 1.9
    # Compare whole elapsed seconds against the budget instead of fractional ones.
    truncate_seconds: bool = False


def _deadline_reached(start: float, cfg: SolverConfig) -> bool:
    if cfg.time_limit_sec is None:
        return False
    elapsed = time.monotonic() - start
    if cfg.truncate_seconds:
        elapsed = float(int(elapsed))
    return elapsed >= cfg.time_limit_sec


def solve_with_state(
    state: TourState,
    candidate_config: Optional[CandidateConfig] = None,
    init_config: Optional[InitConfig] = None,
    two_opt_config: Optional[TwoOptConfig] = None,
    solver_config: Optional[SolverConfig] = None,
    on_improve: Optional[Callable[[TourState], None]] = None,
) -> TourState:
    """
    Run the solver given a pre-loaded TourState.
    Builds the distance matrix, candidate lists and greedy tour, then repeats
    2-opt rounds until a round fails to shorten the tour or the deadline passes.
    The deadline is only checked between rounds.
    on_improve is called with the state for the initial tour and every improving round.
    Returns the state holding the retained tour.
    """
    candidate_config = candidate_config or CandidateConfig()
    init_config = init_config or InitConfig()
    two_opt_config = two_opt_config or TwoOptConfig()
    solver_config = solver_config or SolverConfig()
    start = time.monotonic()
    state.rounds = 0

    if state.n <= 1:
        state.tour = list(range(state.n))
        state.pos = list(range(state.n))
        state.current_cost = 0
        if on_improve is not None and state.n:
            on_improve(state)
        return state

    attach_distance_matrix(state)
    build_candidates(state, candidate_config)
    build_initial_tour(state, init_config)
    validate_tour(state)

    if on_improve is not None:
        on_improve(state)

    while not _deadline_reached(start, solver_config):
        snap = snapshot_state(state)
        two_opt_local_search(state, two_opt_config)
        new_cost = compute_tour_length(state)
        old_cost = compute_tour_length(snap)
        if new_cost >= old_cost:
            restore_snapshot(state, snap)
            break
        state.current_cost = new_cost
        state.rounds += 1
        if on_improve is not None:
            on_improve(state)

    validate_tour(state)
    return state


def solve(
    points: Sequence[Tuple[float, float]],
    k: int = 20,
    time_limit_sec: Optional[float] = 1.9,
    truncate_seconds: bool = False,
    on_improve: Optional[Callable[[TourState], None]] = None,
) -> List[int]:
    """Convenience wrapper: solve for a list of points and return the tour."""
    state = make_state(points)
    solve_with_state(
        state=state,
        candidate_config=CandidateConfig(k=k),
        solver_config=SolverConfig(time_limit_sec=time_limit_sec, truncate_seconds=truncate_seconds),
        on_improve=on_improve,
    )
    return list(state.tour)


def solve_file(
    path: str,
    tsplib: bool = False,
    candidate_config: Optional[CandidateConfig] = None,
    solver_config: Optional[SolverConfig] = None,
    on_improve: Optional[Callable[[TourState], None]] = None,
) -> TourState:
    """Convenience wrapper that loads an instance then solves."""
    state = read_tsplib(path) if tsplib else read_points_file(path)
    return solve_with_state(
        state=state,
        candidate_config=candidate_config,
        solver_config=solver_config,
        on_improve=on_improve,
    )
