from __future__ import annotations

import copy
import logging
from typing import List, Optional, Sequence, Tuple

from ..exceptions import InvalidLevelData, PreconditionViolation
from .tiles import GLYPH_TO_TILE, Tile, tile_from_code

logger = logging.getLogger(__name__)

Cell = Tuple[int, int]


class Grid:
    """A rectangular tile matrix with the semantic queries movement needs.

    Cells are addressed as (row, col). The grid owns a private deep copy of the
    level matrix it was built from, so the source data is never modified and
    loading the same level twice gives the same result.

    Query policy: ``tile_at`` requires in-bounds coordinates and raises
    PreconditionViolation otherwise. The ``is_*`` predicates are bounds-checked
    and simply return False outside the grid.
    """

    __slots__ = ("_cells", "_rows", "_cols", "tile_size", "start")

    def __init__(self, cells: Sequence[Sequence[int]], tile_size: int = 32) -> None:
        if tile_size <= 0:
            raise ValueError("tile_size must be positive")
        self._cells: List[List[Tile]] = self._decode(copy.deepcopy(cells))
        self._rows = len(self._cells)
        self._cols = len(self._cells[0])
        self.tile_size = tile_size

        starts = [(r, c) for r, row in enumerate(self._cells) for c, t in enumerate(row) if t is Tile.START]
        if len(starts) > 1:
            raise InvalidLevelData(f"Level has {len(starts)} start tiles at {starts}; at most one is allowed")

        self.start: Optional[Cell] = self.find_start()
        if self.start is not None:
            # Start only marks the spawn; afterwards it behaves like floor.
            self._cells[self.start[0]][self.start[1]] = Tile.FLOOR
        logger.debug("Initialized Grid %dx%d (start=%s)", self._rows, self._cols, self.start)

    @staticmethod
    def _decode(raw: Sequence[Sequence[int]]) -> List[List[Tile]]:
        if not isinstance(raw, (list, tuple)) or not raw:
            raise InvalidLevelData("Level must have at least one row")
        width = None
        decoded: List[List[Tile]] = []
        for r, row in enumerate(raw):
            if not isinstance(row, (list, tuple)) or not row:
                raise InvalidLevelData(f"Row {r} must be a non-empty list of tile codes")
            if width is None:
                width = len(row)
            elif len(row) != width:
                raise InvalidLevelData(f"All rows must have equal width; row 0 has {width}, row {r} has {len(row)}")
            out: List[Tile] = []
            for c, code in enumerate(row):
                try:
                    out.append(tile_from_code(code))
                except ValueError as exc:
                    raise InvalidLevelData(f"Invalid tile at ({r}, {c}): {exc}") from exc
            decoded.append(out)
        return decoded

    # ---- Size helpers ----------------------------------------------------
    @property
    def rows(self) -> int:
        return self._rows

    @property
    def cols(self) -> int:
        return self._cols

    def dimensions(self) -> Tuple[int, int]:
        return self._rows, self._cols

    def pixel_width(self) -> int:
        return self._cols * self.tile_size

    def pixel_height(self) -> int:
        return self._rows * self.tile_size

    def cell_center(self, r: int, c: int) -> Tuple[float, float]:
        """Pixel (x, y) of the center of a cell, y growing downward."""
        half = self.tile_size / 2
        return c * self.tile_size + half, r * self.tile_size + half

    # ---- Queries ---------------------------------------------------------
    def in_bounds(self, r: int, c: int) -> bool:
        return 0 <= r < self._rows and 0 <= c < self._cols

    def tile_at(self, r: int, c: int) -> Tile:
        """Return the tile at (r, c).

        Callers must check ``in_bounds`` first; an out-of-bounds read is a bug
        and raises PreconditionViolation.
        """
        if not self.in_bounds(r, c):
            raise PreconditionViolation(
                f"Cell out of bounds: ({r}, {c}) for grid {self._rows}x{self._cols}"
            )
        return self._cells[r][c]

    def _is(self, r: int, c: int, tile: Tile) -> bool:
        return self.in_bounds(r, c) and self._cells[r][c] is tile

    def is_wall(self, r: int, c: int) -> bool:
        return self._is(r, c, Tile.WALL)

    def is_goal(self, r: int, c: int) -> bool:
        return self._is(r, c, Tile.GOAL)

    def is_key(self, r: int, c: int) -> bool:
        return self._is(r, c, Tile.KEY)

    def is_gate(self, r: int, c: int) -> bool:
        return self._is(r, c, Tile.GATE)

    def count(self, tile: Tile) -> int:
        return sum(1 for row in self._cells for t in row if t is tile)

    def find_start(self) -> Optional[Cell]:
        """Row-major scan for the first Start tile, or None if the level has none."""
        for r, row in enumerate(self._cells):
            for c, t in enumerate(row):
                if t is Tile.START:
                    return (r, c)
        return None

    # ---- Mutation --------------------------------------------------------
    def consume_key(self, r: int, c: int) -> None:
        self._cells[r][c] = Tile.FLOOR
        logger.debug("Consumed key at (%d, %d)", r, c)

    def consume_gate(self, r: int, c: int) -> None:
        self._cells[r][c] = Tile.FLOOR
        logger.debug("Consumed gate at (%d, %d)", r, c)

    # ---- ASCII helpers ---------------------------------------------------
    @classmethod
    def from_lines(cls, lines: Sequence[str], tile_size: int = 32) -> "Grid":
        """Create a Grid from an ASCII layout ('.', '#', 'S', 'G', 'k', '+')."""
        codes: List[List[int]] = []
        for r, line in enumerate(lines):
            row: List[int] = []
            for c, ch in enumerate(line):
                if ch not in GLYPH_TO_TILE:
                    raise InvalidLevelData(f"Unknown glyph {ch!r} at ({r}, {c})")
                row.append(GLYPH_TO_TILE[ch].value)
            codes.append(row)
        return cls(codes, tile_size=tile_size)

    def to_lines(self) -> List[str]:
        return ["".join(t.glyph for t in row) for row in self._cells]

    def __repr__(self) -> str:
        return f"Grid(rows={self._rows}, cols={self._cols}, start={self.start})"
