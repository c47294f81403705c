# placement_parser.py
from typing import Dict, List

from errors import MalformedCode
from models import Location, Orientation
from tiles import Tile, TileType

CODE_LENGTH = 4

TYPE_LETTERS: Dict[str, TileType] = {
    "a": TileType.A,
    "b": TileType.B,
    "c": TileType.C,
    "d": TileType.D,
    "e": TileType.E,
    "f": TileType.F,
}

ORIENTATION_CHARS: Dict[str, Orientation] = {
    "E": Orientation.EAST,
    "S": Orientation.SOUTH,
    "W": Orientation.WEST,
}

# Any orientation byte other than E/S/W (including garbage) decodes as NORTH.
UNKNOWN_ORIENTATION_DEFAULT = Orientation.NORTH


def _digit(code: str, idx: int) -> int:
    ch = code[idx]
    if not ("0" <= ch <= "9"):
        raise MalformedCode(
            f"placement {code!r}: coordinate {ch!r} is not a digit",
            code=code,
            reason="coordinate",
        )
    return ord(ch) - ord("0")


def parse_type(letter: str) -> TileType:
    tile_type = TYPE_LETTERS.get(letter)
    if tile_type is None:
        raise MalformedCode(
            f"unknown tile type {letter!r}",
            code=letter,
            reason="type",
        )
    return tile_type


def parse_orientation(ch: str) -> Orientation:
    return ORIENTATION_CHARS.get(ch, UNKNOWN_ORIENTATION_DEFAULT)


def parse(code: str) -> Tile:
    """
    Decode a four character placement ``[type][x][y][orientation]``.
    """
    if not isinstance(code, str) or len(code) != CODE_LENGTH:
        raise MalformedCode(
            f"placement {code!r} must be exactly {CODE_LENGTH} characters",
            code=code if isinstance(code, str) else None,
            reason="length",
        )
    tile_type = parse_type(code[0])
    location = Location(_digit(code, 1), _digit(code, 2))
    return Tile(tile_type, location, parse_orientation(code[3]))


def serialize(tile: Tile) -> str:
    loc = tile.location
    return f"{tile.tile_type.letter}{loc.x}{loc.y}{tile.orientation.char}"


def split_codes(codes: str) -> List[str]:
    codes = codes or ""
    if len(codes) % CODE_LENGTH:
        raise MalformedCode(
            f"placement string of length {len(codes)} is not a multiple of {CODE_LENGTH}",
            code=codes,
            reason="length",
        )
    return [codes[i:i + CODE_LENGTH] for i in range(0, len(codes), CODE_LENGTH)]
