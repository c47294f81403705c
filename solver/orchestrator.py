# Orchestrator: strategy selection for solution enumeration
from __future__ import annotations

import time
import traceback
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Set

from config import CFG
from objective import Objective
from progress import (
    reset, start_timer, set_strategy, set_objective, set_solutions,
    set_done, log_attempt_detail,
)
from solver.backtracking import Solver

STRATEGIES = ("backtracking", "cp_sat", "cross_check")


@dataclass
class SolveResult:
    ok: bool
    solutions: Set[str]
    strategy: str
    reason: Optional[str] = None
    meta: Dict[str, Any] = field(default_factory=dict)


def _run_backtracking(objective: Objective, meta: Dict[str, Any]) -> Set[str]:
    solver = Solver(objective)
    found = solver.solutions()
    stats = solver.last_stats
    meta["backtracking"] = {
        "workers": solver.workers,
        "nodes": stats.nodes,
        "dead_ends": stats.dead_ends,
        "branches": stats.branches,
        "elapsed": stats.elapsed,
    }
    return found


def _run_cp_sat(objective: Objective, meta: Dict[str, Any]):
    # ortools is only imported when a CP-SAT strategy is requested.
    from solver.cp_sat import enumerate_solutions_cp_sat

    t0 = time.time()
    ok, found, reason = enumerate_solutions_cp_sat(objective)
    meta["cp_sat"] = {"ok": ok, "reason": reason, "elapsed": time.time() - t0}
    return ok, found, reason


def solve_objective(objective: Objective, strategy: Optional[str] = None) -> SolveResult:
    """
    Enumerate every solution of ``objective``.

    ``strategy`` is ``backtracking`` (default from ``CFG.STRATEGY``),
    ``cp_sat``, or ``cross_check`` which runs both and requires them to agree.
    """
    name = (strategy or CFG.STRATEGY or "backtracking").strip().lower()
    if name not in STRATEGIES:
        raise ValueError(f"unknown strategy {name!r}; expected one of {', '.join(STRATEGIES)}")

    reset()
    set_strategy(name)
    set_objective(objective.initial_state)
    start_timer()
    log_attempt_detail(
        "Solve requested",
        initial=objective.initial_state or "-",
        connections=objective.connected_islands or "-",
    )

    meta: Dict[str, Any] = {}
    ok = True
    reason: Optional[str] = None
    try:
        if name == "backtracking":
            found = _run_backtracking(objective, meta)
        elif name == "cp_sat":
            ok, found, reason = _run_cp_sat(objective, meta)
        else:
            found = _run_backtracking(objective, meta)
            ok, cp_found, reason = _run_cp_sat(objective, meta)
            if ok and cp_found != found:
                ok = False
                missing = sorted(found - cp_found)
                extra = sorted(cp_found - found)
                meta["mismatch"] = {"missing_from_cp_sat": missing, "extra_in_cp_sat": extra}
                reason = (
                    f"Strategies disagree ({len(missing)} only in backtracking, "
                    f"{len(extra)} only in CP-SAT)"
                )
    except Exception as e:
        reason = f"orchestrator exception: {type(e).__name__}: {e}"
        traceback.print_exc()
        log_attempt_detail("Solve failed", error=reason)
        meta["trace"] = reason
        set_done(False, reason=reason)
        return SolveResult(ok=False, solutions=set(), strategy=name, reason=reason, meta=meta)

    set_solutions(len(found))
    set_done(ok, reason=reason)
    return SolveResult(ok=ok, solutions=found, strategy=name, reason=reason, meta=meta)
