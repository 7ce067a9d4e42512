import sys
from pathlib import Path

import pytest

# Ensure 'src' is on sys.path for test imports without installing the package
ROOT = Path(__file__).resolve().parents[1]
src = ROOT / "src"
if str(src) not in sys.path:
    sys.path.insert(0, str(src))

from keymaze.maze.grid import Grid  # noqa: E402


@pytest.fixture
def make_grid():
    """Build a Grid from ASCII rows ('.', '#', 'S', 'G', 'k', '+')."""

    def _make(*lines: str, tile_size: int = 32) -> Grid:
        return Grid.from_lines(list(lines), tile_size=tile_size)

    return _make


@pytest.fixture
def open_room(make_grid):
    """5x5 room, start at (1,1), goal at (3,3), no inner walls."""
    return make_grid(
        "#####",
        "#S..#",
        "#...#",
        "#..G#",
        "#####",
    )
