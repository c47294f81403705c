# config.py
import os

# ======= Worker / search fan-out =======
WORKERS     = int(os.getenv("DINO_WORKERS", "1"))
# Placements applied serially before branches are handed to the pool.
SPLIT_DEPTH = int(os.getenv("DINO_SPLIT_DEPTH", "1"))

# ======= Strategy selection =======
# backtracking | cp_sat | cross_check
STRATEGY = os.getenv("DINO_STRATEGY", "backtracking").strip().lower()

# ======= CP-SAT enumeration =======
CP_MAX_SECONDS = float(os.getenv("DINO_CP_MAX_SECONDS", "30"))

# ======= Objective catalogue =======
RANDOM_SEED = int(os.getenv("DINO_RANDOM_SEED", "0"))

# ======= Attempt log =======
ATTEMPT_LOG = os.getenv("DINO_ATTEMPT_LOG", os.path.join("logs", "solver_attempts.log"))

class CFG:
    WORKERS     = WORKERS
    SPLIT_DEPTH = SPLIT_DEPTH

    STRATEGY = STRATEGY

    CP_MAX_SECONDS = CP_MAX_SECONDS

    RANDOM_SEED = RANDOM_SEED

    ATTEMPT_LOG = ATTEMPT_LOG

__all__ = ["CFG"]
