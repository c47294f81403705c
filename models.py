
from dataclasses import dataclass
from enum import Enum
from typing import ClassVar, Tuple

# Squares on the board; corners are one larger in each direction.
BOARD_WIDTH = 4
BOARD_HEIGHT = 3
CORNER_COLUMNS = BOARD_WIDTH + 1
CORNER_ROWS = BOARD_HEIGHT + 1


def is_water_corner(x: int, y: int) -> bool:
    return (x + y) % 2 == 1


@dataclass(frozen=True)
class Location:
    x: int
    y: int

    OUT: ClassVar["Location"]

    def offset(self, dx: int, dy: int) -> "Location":
        return Location(self.x + dx, self.y + dy)

    def __str__(self) -> str:
        return f"{self.x}{self.y}"


Location.OUT = Location(-1, -1)


class Orientation(Enum):
    NORTH = 0
    EAST = 1
    SOUTH = 2
    WEST = 3

    @property
    def char(self) -> str:
        return self.name[0]

    @property
    def is_vertical(self) -> bool:
        return self in (Orientation.NORTH, Orientation.SOUTH)

    @property
    def footprint(self) -> Tuple[int, int]:
        """(corner columns, corner rows) touched by a tile in this orientation."""
        return (2, 3) if self.is_vertical else (3, 2)

    @property
    def squares(self) -> Tuple[Tuple[int, int], Tuple[int, int]]:
        """Square offsets covered relative to the anchor square."""
        return ((0, 0), (0, 1)) if self.is_vertical else ((0, 0), (1, 0))


class CornerState(Enum):
    WATER = "water"   # fixed by board topology
    EMPTY = "empty"   # land with no dinosaur
    GREEN = "green"   # land occupied by a green dinosaur
    RED = "red"       # land occupied by a red dinosaur

    @property
    def is_water(self) -> bool:
        return self is CornerState.WATER

    @property
    def is_dinosaur(self) -> bool:
        return self in (CornerState.GREEN, CornerState.RED)

    def conflicts_with(self, other: "CornerState") -> bool:
        return {self, other} == {CornerState.GREEN, CornerState.RED}


def initial_corner_state(x: int, y: int) -> CornerState:
    return CornerState.WATER if is_water_corner(x, y) else CornerState.EMPTY
