from .core import TourState, compute_tour_length, restore_snapshot, snapshot_state, tour_length
from .io import make_state, parse_points, read_points, read_points_file, read_tsplib, read_tsplib_tour
from .distance import build_distance_matrix
from .solution import emit_tour, validate_tour
from .candidates import CandidateConfig, build_candidates
from .constructor import InitConfig, build_initial_tour
from .two_opt import TwoOptConfig, two_opt_local_search, two_opt_sweep
from .orchestrator import SolverConfig, solve, solve_file, solve_with_state

__all__ = [
    "TourState",
    "compute_tour_length",
    "tour_length",
    "snapshot_state",
    "restore_snapshot",
    "parse_points",
    "read_points",
    "read_points_file",
    "read_tsplib",
    "read_tsplib_tour",
    "build_distance_matrix",
    "emit_tour",
    "validate_tour",
    "CandidateConfig",
    "build_candidates",
    "InitConfig",
    "build_initial_tour",
    "TwoOptConfig",
    "two_opt_sweep",
    "two_opt_local_search",
    "SolverConfig",
    "make_state",
    "solve",
    "solve_file",
    "solve_with_state",
]
