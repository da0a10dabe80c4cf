from __future__ import annotations

import numpy as np

from etsp import (
    CandidateConfig,
    TourState,
    TwoOptConfig,
    build_candidates,
    build_distance_matrix,
    build_initial_tour,
    compute_tour_length,
    two_opt_local_search,
    two_opt_sweep,
    validate_tour,
)
from etsp.core import rebuild_positions


def make_state(points, k: int = 20) -> TourState:
    x = np.array([p[0] for p in points], dtype=np.float64)
    y = np.array([p[1] for p in points], dtype=np.float64)
    state = TourState(n=len(points), x=x, y=y)
    state.dist = build_distance_matrix(x, y)
    build_candidates(state, CandidateConfig(k=k))
    return state


def set_tour(state: TourState, tour) -> None:
    state.tour = list(tour)
    rebuild_positions(state)
    state.current_cost = compute_tour_length(state)


def naive_local_search(tour, dist, cand):
    """Same move order as the engine, but positions found with list.index."""
    tour = list(tour)
    n = len(tour)
    while True:
        improved = False
        for u_i in range(n - 1):
            u = tour[u_i]
            v = tour[u_i + 1]
            for w in cand[u]:
                if w == u:
                    continue
                w_i = tour.index(w)
                if w_i == u_i or w_i == u_i + 1:
                    continue
                z = tour[(w_i + 1) % n]
                if dist[u, w] + dist[v, z] < dist[u, v] + dist[w, z]:
                    lo, hi = (u_i + 1, w_i) if w_i > u_i else (w_i + 1, u_i)
                    tour[lo : hi + 1] = reversed(tour[lo : hi + 1])
                    improved = True
                    break
        if not improved:
            return tour


def test_crossing_square_is_uncrossed():
    state = make_state([(0, 0), (0, 10), (10, 10), (10, 0)])
    set_tour(state, [0, 2, 1, 3])
    assert state.current_cost == 48
    moves = two_opt_local_search(state)
    assert moves == 1
    assert state.tour == [0, 1, 2, 3]
    assert state.current_cost == 40
    validate_tour(state)


def test_optimal_square_no_moves():
    state = make_state([(0, 0), (0, 10), (10, 10), (10, 0)])
    build_initial_tour(state)
    assert two_opt_sweep(state) == 0
    assert two_opt_local_search(state) == 0
    assert state.tour == [0, 1, 2, 3]


def test_two_nodes_sweep_is_noop():
    state = make_state([(0, 0), (3, 4)])
    set_tour(state, [0, 1])
    assert two_opt_sweep(state) == 0
    assert state.tour == [0, 1]
    assert state.current_cost == 10


def test_sweeps_never_increase_length():
    rng = np.random.default_rng(42)
    state = make_state(rng.uniform(0, 1000, size=(120, 2)).tolist())
    set_tour(state, [int(v) for v in rng.permutation(120)])
    prev = state.current_cost
    for _ in range(200):
        moves = two_opt_sweep(state)
        cur = compute_tour_length(state)
        assert cur <= prev
        if moves:
            assert cur < prev
        prev = cur
        if moves == 0:
            break
    state.current_cost = prev
    validate_tour(state)


def test_position_index_matches_naive_scan():
    rng = np.random.default_rng(9)
    state = make_state(rng.uniform(0, 500, size=(70, 2)).tolist(), k=8)
    start = [int(v) for v in rng.permutation(70)]
    expected = naive_local_search(start, state.dist, state.cand)
    set_tour(state, start)
    two_opt_local_search(state)
    assert state.tour == expected
    validate_tour(state)


def test_local_optimum_is_stable():
    rng = np.random.default_rng(1)
    state = make_state(rng.uniform(0, 100, size=(50, 2)).tolist())
    build_initial_tour(state)
    two_opt_local_search(state)
    tour = list(state.tour)
    assert two_opt_sweep(state) == 0
    assert state.tour == tour


def test_max_sweeps_caps_work():
    rng = np.random.default_rng(4)
    state = make_state(rng.uniform(0, 1000, size=(100, 2)).tolist())
    set_tour(state, [int(v) for v in rng.permutation(100)])
    capped = make_copy(state)
    first_sweep = two_opt_sweep(make_copy(state))
    moves = two_opt_local_search(capped, TwoOptConfig(max_sweeps=1))
    assert moves == first_sweep
    validate_tour(capped)


def make_copy(state: TourState) -> TourState:
    copy = TourState(n=state.n, x=state.x, y=state.y, dist=state.dist, cand=state.cand)
    set_tour(copy, state.tour)
    return copy
