"""Key Maze: a tile maze with keys, gates and smooth grid movement."""

from .exceptions import InvalidLevelData, KeyMazeError, PreconditionViolation
from .maze import Grid, Tile
from .movement import ArrivalResult, Avatar, Direction, MovementState

__all__ = [
    "ArrivalResult",
    "Avatar",
    "Direction",
    "Grid",
    "InvalidLevelData",
    "KeyMazeError",
    "MovementState",
    "PreconditionViolation",
    "Tile",
]

__version__ = "0.1.0"
