# board.py — mutable board aggregate and placement predicates
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Mapping, Optional, Sequence, Set, Tuple, Union

from models import (
    BOARD_HEIGHT,
    BOARD_WIDTH,
    CORNER_COLUMNS,
    CORNER_ROWS,
    CornerState,
    Location,
    Orientation,
    initial_corner_state,
)
from objective import Objective
from placement_parser import TYPE_LETTERS, parse, parse_type, serialize, split_codes
from tiles import Tile, TileType

TOTAL_TILES = len(TileType)


def _on_square_grid(loc: Location) -> bool:
    return 0 <= loc.x < BOARD_WIDTH and 0 <= loc.y < BOARD_HEIGHT


def _on_corner_grid(loc: Location) -> bool:
    return 0 <= loc.x < CORNER_COLUMNS and 0 <= loc.y < CORNER_ROWS


@dataclass(frozen=True)
class BoardState:
    """Immutable copy of a board's grids, safe to hand to another worker."""
    corners: Tuple[Tuple[CornerState, ...], ...]
    squares: Tuple[Tuple[Optional[Tile], ...], ...]
    tiles: Tuple[Tile, ...]


class Board:
    """
    One puzzle board: corner states, square occupancy and the placed tiles.

    ``corners[y][x]`` holds the state of corner location ``(x, y)``.  Land
    corners start EMPTY and may be painted GREEN or RED by a tile; water
    corners never change.

    ``squares[y][x]`` refers to the square to the lower-right of corner
    ``(x, y)`` and holds the covering Tile or ``None``.  Each placed tile is
    referenced by exactly two squares.
    """

    def __init__(self, objective: Optional[Objective] = None):
        self.objective = objective or Objective()
        self.corners: List[List[CornerState]] = [
            [initial_corner_state(x, y) for x in range(CORNER_COLUMNS)]
            for y in range(CORNER_ROWS)
        ]
        self.squares: List[List[Optional[Tile]]] = [
            [None] * BOARD_WIDTH for _ in range(BOARD_HEIGHT)
        ]
        self.placed: Dict[TileType, Tile] = {}

    # ------------------------------------------------------------------
    # construction / copying
    # ------------------------------------------------------------------

    @classmethod
    def from_objective(cls, objective: Objective) -> "Board":
        board = cls(objective)
        board.initialize(objective.initial_state)
        return board

    @classmethod
    def for_difficulty(
        cls,
        difficulty: int,
        catalogue: Mapping[int, Sequence[Objective]],
    ) -> "Board":
        return cls.from_objective(Objective.new_objective(difficulty, catalogue))

    def copy(self) -> "Board":
        clone = Board.__new__(Board)
        clone.objective = self.objective
        clone.corners = [row[:] for row in self.corners]
        clone.squares = [row[:] for row in self.squares]
        clone.placed = dict(self.placed)
        return clone

    def snapshot(self) -> BoardState:
        return BoardState(
            corners=tuple(tuple(row) for row in self.corners),
            squares=tuple(tuple(row) for row in self.squares),
            tiles=tuple(sorted(self.placed.values())),
        )

    @classmethod
    def from_snapshot(cls, objective: Objective, state: BoardState) -> "Board":
        board = cls.__new__(cls)
        board.objective = objective
        board.corners = [list(row) for row in state.corners]
        board.squares = [list(row) for row in state.squares]
        board.placed = {t.tile_type: t for t in state.tiles}
        return board

    # ------------------------------------------------------------------
    # queries
    # ------------------------------------------------------------------

    def location_state(self, loc: Location) -> CornerState:
        if not _on_corner_grid(loc):
            raise IndexError(f"corner {loc.x},{loc.y} is off the board")
        return self.corners[loc.y][loc.x]

    def tile_at(self, x: int, y: int) -> Optional[Tile]:
        if not _on_square_grid(Location(x, y)):
            raise IndexError(f"square {x},{y} is off the board")
        return self.squares[y][x]

    def first_open_square(self) -> Optional[Location]:
        for y in range(BOARD_HEIGHT):
            for x in range(BOARD_WIDTH):
                if self.squares[y][x] is None:
                    return Location(x, y)
        return None

    def is_complete(self) -> bool:
        return len(self.placed) == TOTAL_TILES

    def serialize(self) -> str:
        return "".join(serialize(t) for t in sorted(self.placed.values()))

    def __str__(self) -> str:
        return self.serialize()

    def __repr__(self) -> str:
        return f"Board({self.serialize()!r})"

    # ------------------------------------------------------------------
    # mutation
    # ------------------------------------------------------------------

    def initialize(self, codes: str) -> None:
        for code in split_codes(codes):
            self.add_tile(code)

    def add_tile(self, code: str) -> Tile:
        tile = parse(code)
        for sq in tile.squares():
            self.squares[sq.y][sq.x] = tile
        for loc, state in tile.corners():
            # Only dinosaurs paint; water stays fixed by the board topology.
            if state.is_dinosaur and self.corners[loc.y][loc.x] is CornerState.EMPTY:
                self.corners[loc.y][loc.x] = state
        self.placed[tile.tile_type] = tile
        return tile

    def update_tile(self, code: str) -> Tile:
        tile_type = parse(code).tile_type
        self.remove_tile(tile_type)
        return self.add_tile(code)

    def remove_tile(self, tile_type: Union[TileType, str]) -> None:
        if not isinstance(tile_type, TileType):
            tile_type = parse_type(tile_type)
        tile = self.placed.pop(tile_type, None)
        if tile is None:
            return
        for sq in tile.squares():
            if self.squares[sq.y][sq.x] == tile:
                self.squares[sq.y][sq.x] = None
        for loc, state in tile.corners():
            current = self.corners[loc.y][loc.x]
            if not current.is_dinosaur or current is not state:
                continue
            # Another placed tile still paints this colour here.
            if any(other.contribution_at(loc) is current for other in self.placed.values()):
                continue
            self.corners[loc.y][loc.x] = CornerState.EMPTY

    # ------------------------------------------------------------------
    # placement predicates
    # ------------------------------------------------------------------

    @staticmethod
    def is_on_board(code: str) -> bool:
        tile = parse(code)
        x, y = tile.location.x, tile.location.y
        if tile.orientation.is_vertical:
            return 0 <= x <= BOARD_WIDTH - 1 and 0 <= y <= BOARD_HEIGHT - 2
        return 0 <= x <= BOARD_WIDTH - 2 and 0 <= y <= BOARD_HEIGHT - 1

    def overlaps(self, code: str) -> bool:
        tile = parse(code)
        return any(
            _on_square_grid(sq) and self.squares[sq.y][sq.x] is not None
            for sq in tile.squares()
        )

    def is_consistent(self, code: str) -> bool:
        tile = parse(code)
        for loc, state in tile.corners():
            if not _on_corner_grid(loc):
                return False
            if state.is_water != self.corners[loc.y][loc.x].is_water:
                return False
        return True

    def is_dangerous(self, code: str) -> bool:
        if not self.is_consistent(code):
            return True
        tile = parse(code)
        return any(
            state.conflicts_with(self.corners[loc.y][loc.x])
            for loc, state in tile.corners()
        )

    def violates_objective(self, code: str) -> bool:
        """
        True when the placement is dangerous, leaves a required connection
        inside its footprint unoccupied, or joins dinosaurs that the
        objective does not ask to be connected.
        """
        if self.is_dangerous(code):
            return True

        tile = parse(code)
        found_land: Set[Location] = set(tile.dinosaur_corners())

        cols, rows = tile.footprint
        min_x, min_y = tile.location.x, tile.location.y
        max_x, max_y = min_x + cols, min_y + rows

        def _inside(loc: Location) -> bool:
            return min_x <= loc.x < max_x and min_y <= loc.y < max_y

        required: Set[Location] = set()
        for a, b in self.objective.connections():
            if _inside(a) and _inside(b):
                required.add(a)
                required.add(b)

        if not required <= found_land:
            return True
        return len(found_land) > 1 and not found_land <= required

    def valid_placement(self, code: str) -> bool:
        return (
            self.is_on_board(code)
            and not self.overlaps(code)
            and not self.violates_objective(code)
        )

    def find_candidate_placements(self, loc: Location) -> List[str]:
        """
        Every valid placement of a not-yet-placed tile anchored at ``loc``,
        ordered by type letter then orientation.
        """
        out: List[str] = []
        if not _on_square_grid(loc):
            return out
        for letter, tile_type in TYPE_LETTERS.items():
            if tile_type in self.placed:
                continue
            for orientation in Orientation:
                code = f"{letter}{loc.x}{loc.y}{orientation.char}"
                if self.valid_placement(code):
                    out.append(code)
        return out
