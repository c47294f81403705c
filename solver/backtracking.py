# solver/backtracking.py — exhaustive tiling search
from __future__ import annotations

import multiprocessing as mp
import threading
import time
from concurrent.futures import ProcessPoolExecutor, as_completed
from dataclasses import dataclass
from typing import Dict, Iterator, List, Optional, Set, Tuple

import progress
from board import Board, BoardState
from config import CFG
from objective import Objective


class SolutionSet:
    """Insertion-ordered set of serialised boards, safe for concurrent adds."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._items: Dict[str, None] = {}

    def add(self, code: str) -> bool:
        with self._lock:
            if code in self._items:
                return False
            self._items[code] = None
            return True

    def __contains__(self, code: object) -> bool:
        with self._lock:
            return code in self._items

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)

    def __iter__(self) -> Iterator[str]:
        return iter(self.ordered())

    def ordered(self) -> List[str]:
        with self._lock:
            return list(self._items)

    def as_set(self) -> Set[str]:
        with self._lock:
            return set(self._items)


@dataclass
class SearchStats:
    nodes: int = 0          # boards expanded
    dead_ends: int = 0      # boards with an open square and no candidate
    solutions: int = 0      # new entries added to the solution set
    branches: int = 0       # subtrees handed to worker processes
    elapsed: float = 0.0

    def merge(self, other: "SearchStats") -> None:
        self.nodes += other.nodes
        self.dead_ends += other.dead_ends


def _expand(board: Board, sink: SolutionSet, stats: SearchStats) -> List[Board]:
    """Record ``board`` if complete, else return one child per candidate.

    Children are anchored on the first open square in row-major order; any
    tile covering that square must have it as its top-left square because
    every earlier square is already covered.
    """
    stats.nodes += 1
    if board.is_complete():
        if sink.add(board.serialize()):
            stats.solutions += 1
        return []

    loc = board.first_open_square()
    candidates = board.find_candidate_placements(loc) if loc is not None else []
    if not candidates:
        stats.dead_ends += 1
        return []

    children: List[Board] = []
    for code in candidates:
        child = board.copy()
        child.add_tile(code)
        children.append(child)
    return children


def _search(board: Board, sink: SolutionSet, stats: SearchStats) -> None:
    for child in _expand(board, sink, stats):
        _search(child, sink, stats)


def _search_subtree(objective: Objective, state: BoardState) -> Tuple[List[str], SearchStats]:
    """Runs in a worker process; results travel back to the parent."""
    sink = SolutionSet()
    stats = SearchStats()
    _search(Board.from_snapshot(objective, state), sink, stats)
    return sink.ordered(), stats


def _frontier(board: Board, depth: int, sink: SolutionSet, stats: SearchStats) -> List[BoardState]:
    level = [board]
    for _ in range(depth):
        nxt: List[Board] = []
        for b in level:
            nxt.extend(_expand(b, sink, stats))
        level = nxt
        if not level:
            break
    return [b.snapshot() for b in level]


class Solver:
    """
    Enumerates every complete board reachable from an objective's initial
    placement where each added tile passes ``Board.valid_placement``.

    With one worker the search runs depth-first on the calling thread and the
    solution order is reproducible.  With more workers the first
    ``split_depth`` placements are expanded here and each resulting board is
    searched in a separate worker process.  Each worker returns its own
    solutions, which the parent folds into one ``SolutionSet`` in completion
    order.
    """

    def __init__(
        self,
        objective: Objective,
        *,
        workers: Optional[int] = None,
        split_depth: Optional[int] = None,
    ) -> None:
        self.objective = objective
        self.workers = max(1, int(CFG.WORKERS if workers is None else workers))
        self.split_depth = max(0, int(CFG.SPLIT_DEPTH if split_depth is None else split_depth))
        self.last_stats = SearchStats()

    def run(self) -> SolutionSet:
        t0 = time.time()
        sink = SolutionSet()
        stats = SearchStats()
        root = Board.from_objective(self.objective)

        if self.workers == 1:
            _search(root, sink, stats)
            progress.add_nodes(stats.nodes, dead_ends=stats.dead_ends)
        else:
            frontier = _frontier(root, self.split_depth, sink, stats)
            progress.add_nodes(stats.nodes, dead_ends=stats.dead_ends)
            stats.branches = len(frontier)
            ctx = mp.get_context("spawn")
            with ProcessPoolExecutor(max_workers=self.workers, mp_context=ctx) as pool:
                futures = [
                    pool.submit(_search_subtree, self.objective, state)
                    for state in frontier
                ]
                for fut in as_completed(futures):
                    found, sub = fut.result()
                    stats.merge(sub)
                    progress.add_nodes(sub.nodes, dead_ends=sub.dead_ends)
                    stats.solutions += sum(sink.add(code) for code in found)

        stats.elapsed = time.time() - t0
        self.last_stats = stats
        progress.set_solutions(len(sink))
        progress.log_attempt_detail(
            "Backtracking finished",
            workers=self.workers,
            branches=stats.branches or None,
            nodes=stats.nodes,
            dead_ends=stats.dead_ends,
            solutions=len(sink),
            duration=f"{stats.elapsed:.2f}s",
        )
        return sink

    def solutions(self) -> Set[str]:
        return self.run().as_set()


def enumerate_solutions(objective: Objective, **kwargs) -> Set[str]:
    return Solver(objective, **kwargs).solutions()
