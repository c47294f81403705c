import time
from collections import defaultdict
from typing import Dict, List, Optional, Sequence, Set, Tuple

from ortools.sat.python import cp_model as _cp

import progress
from board import Board
from config import CFG
from models import BOARD_HEIGHT, BOARD_WIDTH, Location, Orientation
from objective import Objective
from placement_parser import TYPE_LETTERS, parse, serialize
from tiles import Tile


def _candidate_options(base: Board) -> List[Tile]:
    """Placements of unplaced types that are valid against ``base`` alone."""
    options: List[Tile] = []
    for y in range(BOARD_HEIGHT):
        for x in range(BOARD_WIDTH):
            if base.tile_at(x, y) is not None:
                continue
            for letter, tile_type in TYPE_LETTERS.items():
                if tile_type in base.placed:
                    continue
                for orientation in Orientation:
                    code = f"{letter}{x}{y}{orientation.char}"
                    if base.valid_placement(code):
                        options.append(parse(code))
    return options


def _colour_conflicts(options: Sequence[Tile]) -> List[Tuple[int, int]]:
    """Index pairs that would put a green and a red dinosaur on one corner."""
    painted: Dict[Location, List[Tuple[int, object]]] = defaultdict(list)
    for idx, tile in enumerate(options):
        for loc, state in tile.corners():
            if state.is_dinosaur:
                painted[loc].append((idx, state))

    pairs: Set[Tuple[int, int]] = set()
    for entries in painted.values():
        for i, (a, sa) in enumerate(entries):
            for b, sb in entries[i + 1:]:
                if a != b and sa.conflicts_with(sb):
                    pairs.add((min(a, b), max(a, b)))
    return sorted(pairs)


class _SolutionCollector(_cp.CpSolverSolutionCallback):
    def __init__(self, options: Sequence[Tile], variables, fixed: Sequence[Tile]):
        _cp.CpSolverSolutionCallback.__init__(self)
        self._options = options
        self._variables = variables
        self._fixed = list(fixed)
        self.solutions: Set[str] = set()

    def on_solution_callback(self) -> None:
        chosen = [
            tile
            for tile, var in zip(self._options, self._variables)
            if self.BooleanValue(var)
        ]
        tiles = sorted(self._fixed + chosen)
        self.solutions.add("".join(serialize(t) for t in tiles))


def enumerate_solutions_cp_sat(
    objective: Objective,
    max_seconds: Optional[float] = None,
) -> Tuple[bool, Set[str], Optional[str]]:
    """
    Enumerate complete boards with CP-SAT instead of recursive search.

    Every open square is covered exactly once, every unplaced tile type is
    used exactly once, and placements that would paint one corner both green
    and red exclude each other.  Each remaining check in
    ``Board.valid_placement`` only looks at the candidate and the initial
    board, so the enumerated set matches the backtracking solver.

    Returns ``(ok, solutions, reason)``; ``ok`` is False when the enumeration
    was cut short or the model was rejected.
    """
    t0 = time.time()
    base = Board.from_objective(objective)
    fixed = list(base.placed.values())

    if base.is_complete():
        return True, {base.serialize()}, None

    options = _candidate_options(base)
    open_squares = [
        Location(x, y)
        for y in range(BOARD_HEIGHT)
        for x in range(BOARD_WIDTH)
        if base.tile_at(x, y) is None
    ]
    remaining = [t for t in TYPE_LETTERS.values() if t not in base.placed]

    by_square: Dict[Location, List[int]] = defaultdict(list)
    by_type: Dict[object, List[int]] = defaultdict(list)
    for idx, tile in enumerate(options):
        for sq in tile.squares():
            by_square[sq].append(idx)
        by_type[tile.tile_type].append(idx)

    for sq in open_squares:
        if not by_square.get(sq):
            return True, set(), f"No placement covers square {sq}"
    for tile_type in remaining:
        if not by_type.get(tile_type):
            return True, set(), f"No placement for tile {tile_type.letter}"

    m = _cp.CpModel()
    p = [m.NewBoolVar(f"p_{serialize(tile)}") for tile in options]

    for sq in open_squares:
        m.Add(sum(p[i] for i in by_square[sq]) == 1)
    for tile_type in remaining:
        m.Add(sum(p[i] for i in by_type[tile_type]) == 1)
    for a, b in _colour_conflicts(options):
        m.Add(p[a] + p[b] <= 1)

    seconds = CFG.CP_MAX_SECONDS if max_seconds is None else max_seconds
    solver = _cp.CpSolver()
    solver.parameters.enumerate_all_solutions = True
    # Full enumeration runs on a single search worker.
    solver.parameters.num_search_workers = 1
    solver.parameters.log_search_progress = False
    if seconds and float(seconds) > 0:
        solver.parameters.max_time_in_seconds = float(seconds)

    collector = _SolutionCollector(options, p, fixed)
    res = solver.Solve(m, collector)

    progress.log_attempt_detail(
        "CP-SAT finished",
        status=solver.StatusName(res),
        options=len(options),
        solutions=len(collector.solutions),
        duration=f"{time.time() - t0:.2f}s",
    )

    if res in (_cp.OPTIMAL, _cp.INFEASIBLE):
        return True, collector.solutions, None
    if res == _cp.MODEL_INVALID:
        return False, collector.solutions, "Model invalid (configuration error)"
    return False, collector.solutions, "Stopped before enumeration finished (timebox)"
