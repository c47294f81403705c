# tiles.py — tile types and their corner layouts
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterator, List, Tuple

from models import CornerState, Location, Orientation

W = CornerState.WATER
E = CornerState.EMPTY
G = CornerState.GREEN
R = CornerState.RED

Layout = Tuple[Tuple[CornerState, ...], ...]  # rows (dy) of columns (dx)


class TileType(Enum):
    A = "a"
    B = "b"
    C = "c"
    D = "d"
    E = "e"
    F = "f"

    @property
    def letter(self) -> str:
        return self.value

    @property
    def ordinal(self) -> int:
        return _ORDINALS[self]

    def layout(self, orientation: Orientation) -> Layout:
        return _LAYOUTS[(self, orientation)]

    def state_at(self, dx: int, dy: int, orientation: Orientation) -> CornerState:
        return _LAYOUTS[(self, orientation)][dy][dx]


_ORDINALS: Dict[TileType, int] = {t: i for i, t in enumerate(TileType)}

# Each tile in NORTH orientation: 2 corner columns x 3 corner rows.
# Types b, c, e put land on the anchor corner; a, d, f put water there.
_CANONICAL: Dict[TileType, Layout] = {
    TileType.A: ((W, G),
                 (E, W),
                 (W, G)),
    TileType.B: ((G, W),
                 (W, E),
                 (E, W)),
    TileType.C: ((R, W),
                 (W, R),
                 (E, W)),
    TileType.D: ((W, R),
                 (E, W),
                 (W, E)),
    TileType.E: ((E, W),
                 (W, E),
                 (G, W)),
    TileType.F: ((W, E),
                 (R, W),
                 (W, R)),
}


def _rotate_cw(layout: Layout) -> Layout:
    rows = len(layout)
    cols = len(layout[0])
    return tuple(
        tuple(layout[rows - 1 - j][i] for j in range(rows))
        for i in range(cols)
    )


def _build_layouts() -> Dict[Tuple[TileType, Orientation], Layout]:
    table: Dict[Tuple[TileType, Orientation], Layout] = {}
    for tile_type, canonical in _CANONICAL.items():
        layout = canonical
        for orientation in Orientation:
            table[(tile_type, orientation)] = layout
            layout = _rotate_cw(layout)
    return table


_LAYOUTS = _build_layouts()


@dataclass(frozen=True)
class Tile:
    tile_type: TileType
    location: Location
    orientation: Orientation

    def __lt__(self, other: "Tile") -> bool:
        return self.tile_type.ordinal < other.tile_type.ordinal

    @property
    def footprint(self) -> Tuple[int, int]:
        return self.orientation.footprint

    def corners(self) -> Iterator[Tuple[Location, CornerState]]:
        """Yield every touched corner with this tile's contribution there."""
        cols, rows = self.orientation.footprint
        for dy in range(rows):
            for dx in range(cols):
                yield (
                    self.location.offset(dx, dy),
                    self.tile_type.state_at(dx, dy, self.orientation),
                )

    def dinosaur_corners(self) -> List[Location]:
        return [loc for loc, state in self.corners() if state.is_dinosaur]

    def squares(self) -> Tuple[Location, Location]:
        (ax, ay), (bx, by) = self.orientation.squares
        return self.location.offset(ax, ay), self.location.offset(bx, by)

    def contribution_at(self, loc: Location) -> CornerState | None:
        cols, rows = self.orientation.footprint
        dx = loc.x - self.location.x
        dy = loc.y - self.location.y
        if 0 <= dx < cols and 0 <= dy < rows:
            return self.tile_type.state_at(dx, dy, self.orientation)
        return None

    def __str__(self) -> str:
        from placement_parser import serialize
        return serialize(self)
