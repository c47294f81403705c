import pytest

from models import (
    CORNER_COLUMNS,
    CORNER_ROWS,
    CornerState,
    Location,
    Orientation,
    initial_corner_state,
    is_water_corner,
)
from tiles import Tile, TileType, _rotate_cw


def test_out_location_is_off_grid_sentinel():
    assert Location.OUT == Location(-1, -1)
    assert str(Location(3, 2)) == "32"
    assert Location(1, 1).offset(2, -1) == Location(3, 0)


def test_water_corners_follow_checkerboard():
    for y in range(CORNER_ROWS):
        for x in range(CORNER_COLUMNS):
            state = initial_corner_state(x, y)
            assert state.is_water == is_water_corner(x, y)
            if not state.is_water:
                assert state is CornerState.EMPTY
    assert initial_corner_state(0, 0) is CornerState.EMPTY
    assert initial_corner_state(1, 0) is CornerState.WATER


def test_only_green_and_red_conflict():
    assert CornerState.GREEN.conflicts_with(CornerState.RED)
    assert CornerState.RED.conflicts_with(CornerState.GREEN)
    assert not CornerState.RED.conflicts_with(CornerState.RED)
    assert not CornerState.GREEN.conflicts_with(CornerState.EMPTY)
    assert not CornerState.WATER.conflicts_with(CornerState.RED)


def test_orientation_footprints():
    assert Orientation.NORTH.footprint == (2, 3)
    assert Orientation.SOUTH.footprint == (2, 3)
    assert Orientation.EAST.footprint == (3, 2)
    assert Orientation.WEST.footprint == (3, 2)
    assert [o.char for o in Orientation] == ["N", "E", "S", "W"]


@pytest.mark.parametrize("tile_type", list(TileType))
def test_four_rotations_return_to_north(tile_type):
    layout = tile_type.layout(Orientation.NORTH)
    for orientation in (Orientation.EAST, Orientation.SOUTH, Orientation.WEST):
        layout = _rotate_cw(layout)
        assert layout == tile_type.layout(orientation)
    assert _rotate_cw(layout) == tile_type.layout(Orientation.NORTH)


@pytest.mark.parametrize("tile_type", list(TileType))
def test_layouts_keep_water_on_alternating_corners(tile_type):
    for orientation in Orientation:
        cols, rows = orientation.footprint
        anchor_is_water = tile_type.state_at(0, 0, orientation).is_water
        for dy in range(rows):
            for dx in range(cols):
                expected = anchor_is_water == ((dx + dy) % 2 == 0)
                assert tile_type.state_at(dx, dy, orientation).is_water == expected


def test_tile_corners_and_squares():
    tile = Tile(TileType.C, Location(0, 0), Orientation.NORTH)
    assert tile.squares() == (Location(0, 0), Location(0, 1))
    assert tile.dinosaur_corners() == [Location(0, 0), Location(1, 1)]
    assert tile.contribution_at(Location(1, 1)) is CornerState.RED
    assert tile.contribution_at(Location(2, 0)) is None
    assert str(tile) == "c00N"

    flat = Tile(TileType.F, Location(1, 0), Orientation.EAST)
    assert flat.squares() == (Location(1, 0), Location(2, 0))
    assert len(list(flat.corners())) == 6


def test_tiles_sort_by_type_letter():
    tiles = [
        Tile(TileType.F, Location(0, 0), Orientation.NORTH),
        Tile(TileType.A, Location(3, 1), Orientation.WEST),
        Tile(TileType.C, Location(1, 1), Orientation.EAST),
    ]
    assert [t.tile_type.letter for t in sorted(tiles)] == ["a", "c", "f"]
