from enum import Enum, auto


class GameEvent(Enum):
    """Events emitted by GameSession to notify UI or systems."""

    LEVEL_LOADED = auto()
    KEY_COLLECTED = auto()
    GATE_OPENED = auto()
    LEVEL_COMPLETED = auto()
    GAME_WON = auto()
