# objective.py — puzzle instance contract
from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import List, Mapping, Optional, Sequence, Tuple

from config import CFG
from errors import MalformedCode
from models import Location
from placement_parser import split_codes

Connection = Tuple[Location, Location]


def parse_connections(pairs: str) -> List[Connection]:
    """Decode ``x1y1x2y2`` chunks into corner pairs."""
    out: List[Connection] = []
    for chunk in split_codes(pairs):
        if not all("0" <= ch <= "9" for ch in chunk):
            raise MalformedCode(
                f"connection {chunk!r} must be four digits",
                code=chunk,
                reason="connection",
            )
        x1, y1, x2, y2 = (int(ch) for ch in chunk)
        out.append((Location(x1, y1), Location(x2, y2)))
    return out


@dataclass(frozen=True)
class Objective:
    initial_state: str = ""
    connected_islands: str = ""
    _connections: Tuple[Connection, ...] = field(
        init=False, repr=False, compare=False, default=()
    )

    def __post_init__(self) -> None:
        split_codes(self.initial_state)
        object.__setattr__(self, "_connections", tuple(parse_connections(self.connected_islands)))

    def initial_codes(self) -> List[str]:
        return split_codes(self.initial_state)

    def connections(self) -> Tuple[Connection, ...]:
        return self._connections

    @staticmethod
    def new_objective(
        difficulty: int,
        catalogue: Mapping[int, Sequence["Objective"]],
        rng: Optional[random.Random] = None,
    ) -> "Objective":
        """
        Pick an objective of the requested difficulty from ``catalogue``.
        Building the catalogue itself is the caller's job.
        """
        try:
            pool = catalogue[difficulty]
        except KeyError:
            raise LookupError(f"no objectives for difficulty {difficulty}") from None
        if not pool:
            raise LookupError(f"no objectives for difficulty {difficulty}")
        rng = rng or random.Random(CFG.RANDOM_SEED)
        return pool[rng.randrange(len(pool))]


__all__ = ["Objective", "Connection", "parse_connections"]
