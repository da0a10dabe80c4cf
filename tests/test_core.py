from __future__ import annotations

import numpy as np
import pytest

from etsp import (
    TourState,
    build_distance_matrix,
    compute_tour_length,
    restore_snapshot,
    snapshot_state,
    tour_length,
    validate_tour,
)


def make_random_state(n: int, seed: int) -> TourState:
    rng = np.random.default_rng(seed)
    pts = rng.uniform(0, 1000, size=(n, 2))
    state = TourState(n=n, x=pts[:, 0], y=pts[:, 1])
    state.dist = build_distance_matrix(state.x, state.y)
    state.tour = [int(v) for v in rng.permutation(n)]
    state.pos = [0] * n
    for p, node in enumerate(state.tour):
        state.pos[node] = p
    return state


def test_tour_length_square():
    D = build_distance_matrix([0, 0, 10, 10], [0, 10, 10, 0])
    assert tour_length([0, 1, 2, 3], D) == 40
    assert tour_length([0, 2, 1, 3], D) == 48


def test_tour_length_rotation_and_reversal_invariant():
    state = make_random_state(50, seed=5)
    base = compute_tour_length(state)
    tour = state.tour
    for shift in (1, 7, 49):
        assert tour_length(tour[shift:] + tour[:shift], state.dist) == base
    assert tour_length(list(reversed(tour)), state.dist) == base


def test_tour_length_small():
    D = build_distance_matrix([0.0, 3.0], [0.0, 4.0])
    assert tour_length([], D) == 0
    assert tour_length([1], D) == 0
    assert tour_length([0, 1], D) == 10


def test_snapshot_restore_roundtrip():
    state = make_random_state(10, seed=1)
    state.current_cost = compute_tour_length(state)
    snap = snapshot_state(state)
    original = list(state.tour)
    state.tour.reverse()
    state.current_cost = -1
    restore_snapshot(state, snap)
    assert state.tour == original
    assert state.current_cost == compute_tour_length(state)
    # Snapshot does not alias the live tour.
    state.tour[0], state.tour[1] = state.tour[1], state.tour[0]
    assert snap.tour == original


def test_validate_rejects_duplicates():
    state = make_random_state(5, seed=2)
    state.tour = [0, 1, 2, 3, 3]
    state.pos = []
    with pytest.raises(ValueError):
        validate_tour(state)


def test_validate_rejects_cost_mismatch():
    state = make_random_state(6, seed=3)
    state.current_cost = compute_tour_length(state) + 1
    with pytest.raises(ValueError):
        validate_tour(state)
