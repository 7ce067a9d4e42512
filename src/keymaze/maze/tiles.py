from __future__ import annotations

from enum import Enum
from typing import Dict, Tuple


class Tile(Enum):
    """Tile codes used by level files.

    The integer values are the on-disk codes; anything outside this set is
    rejected when a grid is built.
    """

    FLOOR = 0
    WALL = 1
    START = 2
    GOAL = 3
    KEY = 4
    GATE = 5

    @property
    def glyph(self) -> str:
        """A single-character visualization useful for logs/debug."""
        return _GLYPHS[self]

    @property
    def color(self) -> Tuple[int, int, int]:
        """Base RGB fill used by the Arcade renderer."""
        return _COLORS[self]


_GLYPHS: Dict[Tile, str] = {
    Tile.FLOOR: ".",
    Tile.WALL: "#",
    Tile.START: "S",
    Tile.GOAL: "G",
    Tile.KEY: "k",
    Tile.GATE: "+",
}

_COLORS: Dict[Tile, Tuple[int, int, int]] = {
    Tile.FLOOR: (10, 10, 40),
    Tile.WALL: (200, 220, 255),
    Tile.START: (10, 10, 40),
    Tile.GOAL: (60, 200, 80),
    Tile.KEY: (255, 215, 0),
    Tile.GATE: (220, 20, 20),
}

GLYPH_TO_TILE: Dict[str, Tile] = {glyph: tile for tile, glyph in _GLYPHS.items()}

VALID_CODES = frozenset(t.value for t in Tile)


def tile_from_code(code: object) -> Tile:
    """Translate a raw level code into a Tile.

    Raises:
        ValueError: for anything that is not one of the known integer codes.
    """
    # bool is an int subclass; True/False in a level file is a mistake
    if isinstance(code, bool) or not isinstance(code, int):
        raise ValueError(f"Tile code must be an integer, got {code!r}")
    if code not in VALID_CODES:
        raise ValueError(f"Unknown tile code {code}")
    return Tile(code)
