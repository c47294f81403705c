from __future__ import annotations

import logging
import time
import threading
from pathlib import Path
from typing import Any, Dict, Optional

from config import CFG

# ------------------------------
# Thread-safe global progress state
# ------------------------------

PROGRESS_LOCK = threading.Lock()


def _log_file_path() -> Path:
    configured = Path(CFG.ATTEMPT_LOG)
    if configured.is_absolute():
        return configured
    return Path(__file__).resolve().parent / configured


def _init_logger() -> logging.Logger:
    logger = logging.getLogger("solver.attempt_log")
    if logger.handlers:
        return logger

    if not str(CFG.ATTEMPT_LOG or "").strip():
        return logger

    log_path = _log_file_path()
    try:
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handler = logging.FileHandler(log_path, encoding="utf-8")
        formatter = logging.Formatter(
            "%(asctime)s [%(levelname)s] %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
        handler.setFormatter(formatter)
        logger.addHandler(handler)
        logger.setLevel(logging.INFO)
        logger.propagate = False
    except OSError:
        # An unwritable log directory leaves the attempt log disabled.
        logger.handlers.clear()
    return logger


ATTEMPT_LOGGER = _init_logger()


def _log_enabled() -> bool:
    return bool(ATTEMPT_LOGGER.handlers)


def _fmt_seconds(seconds: Optional[float]) -> Optional[str]:
    if seconds is None:
        return None
    try:
        return f"{float(seconds):.2f}s"
    except (TypeError, ValueError):
        return None


def _emit_log(event: str, **fields: Any) -> None:
    if not _log_enabled():
        return
    extras = [
        f"{key}={value}"
        for key, value in fields.items()
        if value is not None and value != ""
    ]
    try:
        if extras:
            ATTEMPT_LOGGER.info("%s | %s", event, " ".join(extras))
        else:
            ATTEMPT_LOGGER.info("%s", event)
    except Exception:
        # Logging failures must never bubble back to callers.
        pass


def log_attempt_detail(event: str, **fields: Any) -> None:
    """Write one ``event | key=value ...`` line to the attempt log."""
    with PROGRESS_LOCK:
        fields.setdefault("strategy", PROGRESS.get("strategy") or None)
        _emit_log(event, **fields)


# Single source of truth for the current run
PROGRESS: Dict[str, Any] = {
    "status": "Idle",          # Idle | Solving | Solved | Error
    "strategy": "",            # backtracking | cp_sat | cross_check
    "objective": "",           # initial placement string
    "nodes": 0,                # boards expanded so far
    "dead_ends": 0,            # boards with no candidate placement
    "solutions": 0,            # distinct complete boards found
    "elapsed_start": None,     # t0 (float) when solving started
    "elapsed": 0.0,            # seconds snapshot
    "message": "",             # optional note
    "done": False,             # run completed
    "ok": None,                # success flag if known
    "run_id": 0,               # monotonically increasing identifier
}

# ------------------------------
# Helpers
# ------------------------------

def _now() -> float:
    return time.time()

def _fmt_elapsed(seconds: float) -> str:
    seconds = max(0.0, float(seconds))
    if seconds < 60:
        return f"{int(seconds)}s"
    m, s = divmod(int(seconds), 60)
    if m < 60:
        return f"{m}m {s}s"
    h, m = divmod(m, 60)
    return f"{h}h {m}m"

def reset() -> None:
    with PROGRESS_LOCK:
        new_run_id = int(PROGRESS.get("run_id", 0)) + 1
        PROGRESS.update({
            "status": "Idle",
            "strategy": "",
            "objective": "",
            "nodes": 0,
            "dead_ends": 0,
            "solutions": 0,
            "elapsed_start": None,
            "elapsed": 0.0,
            "message": "",
            "done": False,
            "ok": None,
            "run_id": new_run_id,
        })
        _emit_log("Progress reset", run_id=new_run_id)

def start_timer() -> None:
    with PROGRESS_LOCK:
        PROGRESS["elapsed_start"] = _now()
        PROGRESS["elapsed"] = 0.0
        PROGRESS["status"] = "Solving"
        _emit_log(
            "Run started",
            strategy=PROGRESS.get("strategy"),
            objective=PROGRESS.get("objective"),
        )

def _touch_elapsed_locked() -> None:
    t0 = PROGRESS.get("elapsed_start")
    if t0 is not None:
        PROGRESS["elapsed"] = _now() - float(t0)

# ------------------------------
# Setters
# ------------------------------

def set_status(v: Any) -> None:
    with PROGRESS_LOCK:
        PROGRESS["status"] = str(v)

def set_strategy(v: Any) -> None:
    with PROGRESS_LOCK:
        PROGRESS["strategy"] = "" if v is None else str(v)

def set_objective(v: Any) -> None:
    with PROGRESS_LOCK:
        PROGRESS["objective"] = "" if v is None else str(v)

def add_nodes(n: int = 1, *, dead_ends: int = 0) -> None:
    with PROGRESS_LOCK:
        PROGRESS["nodes"] += max(0, int(n))
        PROGRESS["dead_ends"] += max(0, int(dead_ends))
        _touch_elapsed_locked()

def set_solutions(n: Any) -> None:
    with PROGRESS_LOCK:
        PROGRESS["solutions"] = max(0, int(n))

def set_message(msg: Any) -> None:
    with PROGRESS_LOCK:
        PROGRESS["message"] = "" if msg is None else str(msg)

def set_done(ok: Any = None, *, reason: Any = None) -> None:
    """Mark the run complete.

    ``ok`` picks the final status (``Solved`` / ``Error``); when omitted the
    run counts as solved.  ``reason`` is surfaced through ``message``.
    """
    ok_flag = True if ok is None else bool(ok)

    with PROGRESS_LOCK:
        _touch_elapsed_locked()
        PROGRESS["status"] = "Solved" if ok_flag else "Error"
        PROGRESS["ok"] = ok_flag
        PROGRESS["done"] = True
        if reason is not None:
            PROGRESS["message"] = str(reason)
        _emit_log(
            "Run finished",
            status=PROGRESS.get("status"),
            strategy=PROGRESS.get("strategy"),
            nodes=PROGRESS.get("nodes"),
            solutions=PROGRESS.get("solutions"),
            duration=_fmt_seconds(PROGRESS.get("elapsed")),
            message=PROGRESS.get("message"),
        )

# ------------------------------
# Snapshots
# ------------------------------

def snapshot() -> Dict[str, Any]:
    with PROGRESS_LOCK:
        _touch_elapsed_locked()
        out = dict(PROGRESS)
        out["elapsed_str"] = _fmt_elapsed(PROGRESS["elapsed"])
        return out


__all__ = [
    "PROGRESS", "PROGRESS_LOCK", "reset", "start_timer", "set_status",
    "set_strategy", "set_objective", "add_nodes", "set_solutions",
    "set_message", "set_done", "snapshot", "log_attempt_detail",
]
