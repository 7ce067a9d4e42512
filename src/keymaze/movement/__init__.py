from .avatar import (
    NOTHING_TO_RESOLVE,
    STOPPED,
    ArrivalResult,
    Avatar,
    Direction,
    MovementState,
    TileMap,
    Vector,
)
from .throttle import MoveThrottle

__all__ = [
    "ArrivalResult",
    "Avatar",
    "Direction",
    "MoveThrottle",
    "MovementState",
    "NOTHING_TO_RESOLVE",
    "STOPPED",
    "TileMap",
    "Vector",
]
