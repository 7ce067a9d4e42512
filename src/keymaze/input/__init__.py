from .manager import (
    ACTION_DIRECTIONS,
    MOVE_DOWN,
    MOVE_LEFT,
    MOVE_RIGHT,
    MOVE_UP,
    RESTART,
    InputManager,
)

__all__ = [
    "ACTION_DIRECTIONS",
    "InputManager",
    "MOVE_DOWN",
    "MOVE_LEFT",
    "MOVE_RIGHT",
    "MOVE_UP",
    "RESTART",
]
