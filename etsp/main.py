from __future__ import annotations

import argparse
import sys
import time

from .candidates import CandidateConfig
from .io import read_points, read_points_file, read_tsplib
from .orchestrator import SolverConfig, solve_with_state
from .solution import emit_tour


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Approximate Euclidean TSP tour under a time budget.")
    parser.add_argument("input", nargs="?", default=None, help="Point file (default: read stdin)")
    parser.add_argument("--time-limit", type=float, default=1.9, help="Time budget in seconds")
    parser.add_argument("--k", type=int, default=20, help="Candidate list size per node")
    parser.add_argument("--tsplib", action="store_true", help="Input is a TSPLIB file with NODE_COORD_SECTION")
    parser.add_argument(
        "--truncate-seconds",
        action="store_true",
        help="Compare whole elapsed seconds against the time limit",
    )
    parser.add_argument("--verbose", action="store_true", help="Print progress to stderr")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    if args.k < 0:
        print("--k must be >= 0", file=sys.stderr)
        return 1
    if args.tsplib and args.input is None:
        print("--tsplib requires an input file", file=sys.stderr)
        return 1

    try:
        if args.tsplib:
            state = read_tsplib(args.input)
        elif args.input is not None:
            state = read_points_file(args.input)
        else:
            state = read_points(sys.stdin)
    except (OSError, ValueError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1

    start = time.monotonic()

    def on_improve(s):
        print(
            f"[etsp] round={s.rounds} length={s.current_cost} elapsed={time.monotonic() - start:.3f}",
            file=sys.stderr,
        )

    solve_with_state(
        state=state,
        candidate_config=CandidateConfig(k=args.k),
        solver_config=SolverConfig(time_limit_sec=args.time_limit, truncate_seconds=args.truncate_seconds),
        on_improve=on_improve if args.verbose else None,
    )
    emit_tour(state)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
