#!/usr/bin/env python3
from __future__ import annotations

import argparse
import json
import sqlite3
from pathlib import Path

from scripts.run_etsp import load_instance


def export_run(conn: sqlite3.Connection, run_id: int) -> dict:
    cur = conn.cursor()
    cur.execute("SELECT dataset, input_format, k, time_limit_s, notes FROM runs WHERE run_id=?", (run_id,))
    row = cur.fetchone()
    if row is None:
        raise ValueError(f"run_id {run_id} not found")
    dataset, input_format, k, time_limit_s, notes = row
    cur.execute(
        """
        SELECT instance, n, initial_length, solver_length, solver_tour_text, rounds, time_ms, valid
        FROM solver_instances
        WHERE run_id=?
        """,
        (run_id,),
    )
    solver_rows = cur.fetchall()
    cur.execute("SELECT instance, bks_length, bks_tour_text FROM bks")
    bks_rows = {r[0]: (r[1], r[2]) for r in cur.fetchall()}

    instances = []
    for inst, n, initial_length, length, tour_text, rounds, time_ms, valid in solver_rows:
        bks_length, bks_tour = bks_rows.get(inst, (None, ""))
        gap_pct = None
        if length is not None and bks_length is not None and bks_length != 0:
            gap_pct = 100.0 * (length - bks_length) / bks_length
        tour = []
        if valid:
            tour = [int(tok) for tok in tour_text.split()]
        coords = {}
        try:
            state = load_instance(Path(dataset) / inst, input_format)
            coords = {str(i): (float(state.x[i]), float(state.y[i])) for i in range(state.n)}
        except (OSError, ValueError):
            pass
        instances.append(
            {
                "instance": inst,
                "n": n,
                "initial_length": initial_length,
                "solver_length": length,
                "tour": tour,
                "rounds": rounds,
                "bks_length": bks_length,
                "bks_tour": bks_tour,
                "gap_pct": gap_pct,
                "valid": bool(valid),
                "time_ms": time_ms,
                "coords": coords,
            }
        )
    return {
        "run_id": run_id,
        "dataset": dataset,
        "input_format": input_format,
        "k": k,
        "time_limit_s": time_limit_s,
        "notes": notes,
        "instances": instances,
    }


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Export run results to JSON.")
    parser.add_argument("--db", required=True, help="SQLite DB path")
    parser.add_argument("--run-id", type=int, required=True, help="Run ID to export")
    parser.add_argument("--out", required=True, help="Output JSON file")
    args = parser.parse_args(argv)

    conn = sqlite3.connect(args.db)
    data = export_run(conn, args.run_id)
    Path(args.out).write_text(json.dumps(data, indent=2))
    conn.close()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
