from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Optional, Set

import arcade

from ..movement.avatar import Direction, Vector

logger = logging.getLogger(__name__)

MOVE_UP = "move_up"
MOVE_DOWN = "move_down"
MOVE_LEFT = "move_left"
MOVE_RIGHT = "move_right"
RESTART = "restart"

ACTION_DIRECTIONS: Dict[str, Vector] = {
    MOVE_UP: Direction.UP,
    MOVE_DOWN: Direction.DOWN,
    MOVE_LEFT: Direction.LEFT,
    MOVE_RIGHT: Direction.RIGHT,
}


def _normalize_key_name(name: str) -> int:
    """Translate a key name ("UP", "w") to an arcade.key constant."""
    if len(name) == 1:
        name = name.upper()
    try:
        return getattr(arcade.key, name)
    except AttributeError as e:
        raise ValueError(f"Unknown key name: {name}") from e


class InputManager:
    """Maps Arcade key codes to logical actions.

    Movement actions translate to direction vectors through ``direction_for``;
    everything else (restart) is handled by the window.
    """

    def __init__(self, mapping: Optional[Dict[str, Iterable[str]]] = None) -> None:
        self._mapping: Dict[str, Set[int]] = {}
        if not mapping:
            mapping = self._default_mapping()
        for action, key_names in mapping.items():
            self.bind(action, key_names)
        logger.debug("Input mapping initialized: %s", self._mapping)

    @staticmethod
    def _default_mapping() -> Dict[str, Iterable[str]]:
        return {
            MOVE_UP: ["W", "UP"],
            MOVE_DOWN: ["S", "DOWN"],
            MOVE_LEFT: ["A", "LEFT"],
            MOVE_RIGHT: ["D", "RIGHT"],
            RESTART: ["SPACE"],
        }

    def bind(self, action: str, keys: Iterable[str]) -> None:
        self._mapping[action] = {_normalize_key_name(k) for k in keys}

    def actions_for_key(self, key: int) -> List[str]:
        actions = [action for action, keys in self._mapping.items() if key in keys]
        logger.debug("Key %s maps to actions %s", key, actions)
        return actions

    @staticmethod
    def direction_for(actions: Iterable[str]) -> Optional[Vector]:
        """Return the direction of the first movement action, if any."""
        for action in actions:
            if action in ACTION_DIRECTIONS:
                return ACTION_DIRECTIONS[action]
        return None
