#!/usr/bin/env python3
from __future__ import annotations

import argparse
import sqlite3
import sys
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from etsp import (
    CandidateConfig,
    SolverConfig,
    TourState,
    compute_tour_length,
    read_points_file,
    read_tsplib,
    solve_with_state,
    validate_tour,
)

FORMAT_SUFFIX = {"tsplib": "*.tsp", "points": "*.txt"}

# runs: one row per invocation; solver_instances: one row per instance solved.
# bks holds reference tours, instances the dataset membership of each file.
SCHEMA = """
CREATE TABLE IF NOT EXISTS runs (
    run_id INTEGER PRIMARY KEY AUTOINCREMENT,
    dataset TEXT,
    input_format TEXT,
    k INTEGER,
    time_limit_s REAL,
    ts DATETIME DEFAULT CURRENT_TIMESTAMP,
    notes TEXT
);
CREATE TABLE IF NOT EXISTS solver_instances (
    run_id INTEGER REFERENCES runs(run_id),
    instance TEXT,
    n INTEGER,
    initial_length REAL,
    solver_length REAL,
    solver_tour_text TEXT,
    rounds INTEGER,
    time_ms REAL,
    valid INTEGER
);
CREATE TABLE IF NOT EXISTS bks (
    instance TEXT PRIMARY KEY,
    bks_length REAL,
    bks_tour_text TEXT
);
CREATE TABLE IF NOT EXISTS instances (
    instance TEXT PRIMARY KEY,
    dataset TEXT
);
"""


@dataclass
class InstanceResult:
    instance: str
    n: Optional[int] = None
    initial_length: Optional[float] = None
    length: Optional[float] = None
    tour_text: str = ""
    rounds: int = 0
    time_ms: float = 0.0
    valid: bool = False

    def row(self, run_id: int) -> tuple:
        return (
            run_id,
            self.instance,
            self.n,
            self.initial_length,
            self.length,
            self.tour_text,
            self.rounds,
            self.time_ms,
            int(self.valid),
        )


def open_db(path: str) -> sqlite3.Connection:
    conn = sqlite3.connect(path)
    conn.executescript(SCHEMA)
    return conn


def load_instance(path: Path, input_format: str) -> TourState:
    if input_format == "tsplib":
        return read_tsplib(path)
    return read_points_file(path)


def run_one_instance(path: Path, input_format: str, time_limit: float, k: int = 20) -> InstanceResult:
    """Solve one instance; failures are captured in the result rather than raised."""
    result = InstanceResult(instance=path.name)
    start = time.perf_counter()
    try:
        state = load_instance(path, input_format)
        result.n = state.n

        def on_improve(s):
            if result.initial_length is None:
                result.initial_length = float(s.current_cost)

        solve_with_state(
            state=state,
            candidate_config=CandidateConfig(k=k),
            solver_config=SolverConfig(time_limit_sec=time_limit),
            on_improve=on_improve,
        )
        validate_tour(state)
        result.length = float(compute_tour_length(state))
        if result.initial_length is None:
            result.initial_length = result.length
        result.tour_text = " ".join(str(node) for node in state.tour)
        result.rounds = state.rounds
        result.valid = True
    except Exception as exc:  # noqa: BLE001
        result.tour_text = f"ERROR: {exc}"
    result.time_ms = (time.perf_counter() - start) * 1000.0
    return result


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Run the etsp solver over a dataset and log to SQLite.")
    parser.add_argument("--dataset", required=True, help="Folder containing instance files")
    parser.add_argument("--format", choices=sorted(FORMAT_SUFFIX), default="tsplib", help="Instance file format")
    parser.add_argument("--time-limit", type=float, required=True, help="time limit per instance (seconds)")
    parser.add_argument("--k", type=int, default=20, help="Candidate list size per node")
    parser.add_argument("--db", required=True, help="SQLite DB path to write results into")
    parser.add_argument("--notes", default="", help="Optional notes for the run")
    parser.add_argument(
        "--opt-tours",
        default=None,
        help="Folder with <name>.opt.tour reference tours (tsplib format only)",
    )
    args = parser.parse_args(argv)

    dataset_dir = Path(args.dataset)
    pattern = FORMAT_SUFFIX[args.format]
    files = sorted(dataset_dir.glob(pattern))
    if not files:
        print(f"No {pattern} files found in {dataset_dir}", file=sys.stderr)
        return 1

    conn = open_db(args.db)
    with conn:
        if args.opt_tours and args.format == "tsplib":
            from scripts.bks_loader import load_bks

            conn.executemany(
                "INSERT OR REPLACE INTO bks(instance, bks_length, bks_tour_text) VALUES (?, ?, ?)",
                [(name, length, text) for name, (length, text) in load_bks(dataset_dir, Path(args.opt_tours)).items()],
            )
        run_id = conn.execute(
            "INSERT INTO runs(dataset, input_format, k, time_limit_s, notes) VALUES (?, ?, ?, ?, ?)",
            (str(dataset_dir), args.format, args.k, args.time_limit, args.notes),
        ).lastrowid
        conn.executemany(
            "INSERT OR IGNORE INTO instances(instance, dataset) VALUES (?, ?)",
            [(f.name, str(dataset_dir)) for f in files],
        )

    for path in files:
        result = run_one_instance(path, input_format=args.format, time_limit=args.time_limit, k=args.k)
        with conn:
            conn.execute("INSERT INTO solver_instances VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)", result.row(run_id))
        print(
            f"[run {run_id}] {result.instance}: length={result.length} valid={int(result.valid)} "
            f"time_ms={result.time_ms:.1f}",
            file=sys.stderr,
        )

    conn.close()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
