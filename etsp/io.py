from __future__ import annotations

from pathlib import Path
from typing import Dict, List, Sequence, TextIO, Tuple

import numpy as np

from .core import TourState


def make_state(coords: Sequence[Tuple[float, float]]) -> TourState:
    """Build an unsolved state from (x, y) pairs."""
    n = len(coords)
    x = np.array([c[0] for c in coords], dtype=np.float64)
    y = np.array([c[1] for c in coords], dtype=np.float64)
    return TourState(n=n, x=x, y=y)


def parse_points(text: str) -> TourState:
    """
    Parse a point count followed by that many "x y" pairs.
    Tokens may be split across lines arbitrarily; trailing tokens are ignored.
    """
    tokens = text.split()
    if not tokens:
        raise ValueError("Input is empty, expected a point count")
    try:
        n = int(tokens[0])
    except ValueError:
        raise ValueError(f"Point count must be an integer, got {tokens[0]!r}") from None
    if n < 0:
        raise ValueError(f"Point count must be >= 0, got {n}")
    if len(tokens) < 1 + 2 * n:
        raise ValueError(f"Expected {n} coordinate pairs, got {(len(tokens) - 1) // 2}")
    coords: List[Tuple[float, float]] = []
    for i in range(n):
        sx, sy = tokens[1 + 2 * i], tokens[2 + 2 * i]
        try:
            coords.append((float(sx), float(sy)))
        except ValueError:
            raise ValueError(f"Bad coordinates for point {i}: {sx!r} {sy!r}") from None
    return make_state(coords)


def read_points(stream: TextIO) -> TourState:
    return parse_points(stream.read())


def read_points_file(path: str | Path) -> TourState:
    return parse_points(Path(path).read_text())


def _parse_header_value(line: str) -> Tuple[str, str]:
    if ":" in line:
        key, val = line.split(":", 1)
        return key.strip().upper(), val.strip()
    parts = line.split()
    return (parts[0].strip().upper(), parts[1].strip() if len(parts) > 1 else "")


def read_tsplib(path: str | Path) -> TourState:
    """
    Read a TSPLIB95 instance with a NODE_COORD_SECTION.
    Internal indices are 0..DIMENSION-1 in file id order.
    Only EUC_2D (or an absent EDGE_WEIGHT_TYPE) is accepted.
    """
    path = Path(path)
    lines = [ln.rstrip() for ln in path.read_text().splitlines() if ln.strip()]

    dimension: int | None = None
    edge_weight_type: str | None = None
    coords: Dict[int, Tuple[float, float]] = {}

    section = None
    for raw in lines:
        upper = raw.strip().upper()
        if upper.startswith("NODE_COORD_SECTION"):
            section = "COORD"
            continue
        if upper.startswith("EOF"):
            break
        if upper.endswith("_SECTION"):
            section = "OTHER"
            continue

        if section is None:
            key, val = _parse_header_value(raw)
            if key == "DIMENSION":
                dimension = int(val)
            elif key == "EDGE_WEIGHT_TYPE":
                edge_weight_type = val.upper()
            continue

        if section == "COORD":
            parts = raw.split()
            if len(parts) < 3:
                continue
            coords[int(parts[0])] = (float(parts[1]), float(parts[2]))

    if dimension is None:
        raise ValueError("TSPLIB file missing DIMENSION")
    if edge_weight_type is not None and edge_weight_type != "EUC_2D":
        raise ValueError(f"Unsupported EDGE_WEIGHT_TYPE {edge_weight_type}")
    if len(coords) != dimension:
        raise ValueError(f"NODE_COORD_SECTION has {len(coords)} nodes, DIMENSION is {dimension}")

    ordered = [coords[ts_id] for ts_id in sorted(coords)]
    return make_state(ordered)


def read_tsplib_tour(path: str | Path) -> List[int]:
    """
    Read the TOUR_SECTION of a TSPLIB .tour file as 0-based node indices.
    The section ends at -1 or EOF; ids must form a permutation of 1..DIMENSION.
    """
    path = Path(path)
    dimension: int | None = None
    tour: List[int] = []
    in_tour = False
    for raw in path.read_text().splitlines():
        line = raw.strip()
        if not line:
            continue
        upper = line.upper()
        if upper.startswith("EOF"):
            break
        if upper.startswith("TOUR_SECTION"):
            in_tour = True
            continue
        if not in_tour:
            key, val = _parse_header_value(line)
            if key == "DIMENSION":
                dimension = int(val)
            continue
        ids = [int(tok) for tok in line.split()]
        if -1 in ids:
            tour.extend(ids[: ids.index(-1)])
            break
        tour.extend(ids)

    if not tour:
        raise ValueError(f"{path.name}: TOUR_SECTION is empty")
    n = dimension if dimension is not None else len(tour)
    if sorted(tour) != list(range(1, n + 1)):
        raise ValueError(f"{path.name}: tour is not a permutation of 1..{n}")
    return [node - 1 for node in tour]
