from .events import GameEvent
from .session import FALLBACK_SPAWN, GameSession

__all__ = ["FALLBACK_SPAWN", "GameEvent", "GameSession"]
