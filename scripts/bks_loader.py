#!/usr/bin/env python3
from __future__ import annotations

import sys
from pathlib import Path
from typing import Dict, List, Optional, Tuple

from etsp import build_distance_matrix, read_tsplib, read_tsplib_tour, tour_length


def opt_tour_for(instance: Path, tour_dir: Path) -> Path:
    """<name>.tsp -> <tour_dir>/<name>.opt.tour"""
    return tour_dir / f"{instance.stem}.opt.tour"


def reference_length(instance: Path, tour_file: Path) -> Tuple[int, List[int]]:
    """Length of a reference tour under the solver's own rounded distances."""
    state = read_tsplib(instance)
    tour = read_tsplib_tour(tour_file)
    if len(tour) != state.n:
        raise ValueError(f"{tour_file.name} visits {len(tour)} nodes, {instance.name} has {state.n}")
    dist = build_distance_matrix(state.x, state.y)
    return tour_length(tour, dist), tour


def load_bks(dataset_dir: Path, tour_dir: Optional[Path] = None) -> Dict[str, Tuple[float, str]]:
    """
    Best-known tours for the .tsp instances of a dataset.
    Looks for <name>.opt.tour in tour_dir (default: next to the instance).
    Returns mapping: instance file name -> (length, tour as space separated 0-based ids).
    Unreadable tours are reported on stderr and skipped.
    """
    tour_dir = tour_dir or dataset_dir
    out: Dict[str, Tuple[float, str]] = {}
    for instance in sorted(dataset_dir.glob("*.tsp")):
        tour_file = opt_tour_for(instance, tour_dir)
        if not tour_file.exists():
            continue
        try:
            length, tour = reference_length(instance, tour_file)
        except ValueError as exc:
            print(f"[bks] skip {instance.name}: {exc}", file=sys.stderr)
            continue
        out[instance.name] = (float(length), " ".join(str(node) for node in tour))
    return out


if __name__ == "__main__":
    import argparse
    parser = argparse.ArgumentParser(description="Print best-known tour lengths for a TSPLIB dataset.")
    parser.add_argument("dataset")
    parser.add_argument("--tours", default=None, help="Folder holding .opt.tour files")
    args = parser.parse_args()
    data = load_bks(Path(args.dataset), Path(args.tours) if args.tours else None)
    for name, (length, _) in data.items():
        print(name, length)
