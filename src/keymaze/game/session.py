from __future__ import annotations

import logging
from typing import Callable, List

from ..levels.loader import LevelSet
from ..maze.grid import Cell, Grid
from ..maze.tiles import Tile
from ..movement.avatar import Avatar, Vector
from ..movement.throttle import MoveThrottle
from .events import GameEvent

logger = logging.getLogger(__name__)

# Spawn used when a level has no start tile.
FALLBACK_SPAWN: Cell = (1, 1)

CONTROLS_HINT = "WASD/arrow keys to move"

Listener = Callable[[GameEvent, "GameSession"], None]


class GameSession:
    """Owns the run: which level is loaded, the avatar, and the screen flags.

    The window forwards directions and frame deltas here. Each frame the
    session advances the avatar, resolves an arrival when one happened, checks
    the goal, and keeps the avatar walking in its held direction.
    """

    def __init__(
        self,
        levels: LevelSet,
        tile_size: int = 32,
        speed: float = 130.0,
        move_interval: float = 0.09,
        start_level: int = 0,
    ) -> None:
        if len(levels) == 0:
            raise ValueError("GameSession needs at least one level")
        self._listeners: List[Listener] = []
        self.levels = levels
        self.tile_size = tile_size
        self.avatar = Avatar(tile_size=tile_size, speed=speed)
        self.throttle = MoveThrottle(move_interval)
        if not 0 <= start_level < len(levels):
            logger.warning(
                "Start level %d out of range for %d level(s); starting at level 0",
                start_level,
                len(levels),
            )
            start_level = 0
        self.first_level = start_level
        self.clock: float = 0.0

        self.show_start: bool = True
        self.has_won: bool = False
        self.level_index: int = start_level
        self.grid: Grid
        self.gates_total: int = 0
        self.gates_passed: int = 0
        self.load_level(start_level)

    # ---- Events ----------------------------------------------------------
    def add_listener(self, listener: Listener) -> None:
        """Subscribe to session events (level loads, pickups, gates, wins)."""
        self._listeners.append(listener)

    def _emit(self, event: GameEvent) -> None:
        for listener in list(self._listeners):
            try:
                listener(event, self)
            except Exception as ex:  # listeners shouldn't crash the frame loop
                logger.exception("Listener errored on %s: %s", event, ex)

    # ---- Level flow ------------------------------------------------------
    def load_level(self, index: int) -> None:
        """Build a fresh grid for ``index`` and put the avatar on its start tile."""
        self.grid = self.levels.build_grid(index, self.tile_size)
        self.level_index = index

        self.avatar.reset_keys()
        spawn = self.grid.start if self.grid.start is not None else FALLBACK_SPAWN
        if self.grid.start is None:
            logger.warning("Level %d has no start tile; spawning at %s", index, FALLBACK_SPAWN)
        self.avatar.place_at(*spawn)

        self.gates_total = self.grid.count(Tile.GATE)
        self.gates_passed = 0
        self.throttle.reset()
        logger.info("Loaded level %d (%dx%d), avatar at %s", index, self.grid.rows, self.grid.cols, spawn)
        self._emit(GameEvent.LEVEL_LOADED)

    def restart(self) -> None:
        self.has_won = False
        self.show_start = True
        self.load_level(self.first_level)

    def dismiss_start(self) -> None:
        self.show_start = False

    @property
    def playing(self) -> bool:
        return not self.show_start and not self.has_won

    @property
    def gates_remaining(self) -> int:
        return self.gates_total - self.gates_passed

    # ---- Frame driving ---------------------------------------------------
    def handle_direction(self, direction: Vector) -> bool:
        """Forward a movement direction from input. Returns whether it was accepted."""
        if not self.playing:
            return False
        if not self.avatar.is_moving and not self.throttle.allow(self.clock):
            return False
        return self.avatar.request_move(self.grid, direction)

    def update(self, dt: float) -> None:
        """Advance one frame of ``dt`` seconds."""
        self.clock += dt
        if not self.playing:
            return
        if self.avatar.advance(dt) or self.avatar.just_arrived:
            self._on_arrival()

    def _on_arrival(self) -> None:
        result = self.avatar.resolve_arrival(self.grid)
        if result.picked_key:
            self._emit(GameEvent.KEY_COLLECTED)
        if result.opened_gate:
            self.gates_passed += 1
            self._emit(GameEvent.GATE_OPENED)

        if self.grid.is_goal(*self.avatar.cell):
            self._complete_level()
            return
        self.avatar.try_continue(self.grid)

    def _complete_level(self) -> None:
        next_index = self.level_index + 1
        if next_index < len(self.levels):
            logger.info("Level %d complete; advancing to level %d", self.level_index, next_index)
            self._emit(GameEvent.LEVEL_COMPLETED)
            self.load_level(next_index)
            return
        self.has_won = True
        logger.info("Reached the goal of the final level %d; game won", self.level_index)
        self._emit(GameEvent.GAME_WON)

    # ---- HUD -------------------------------------------------------------
    def hud_text(self) -> List[str]:
        return [
            CONTROLS_HINT,
            f"Gates: {self.gates_remaining}/{self.gates_total}",
            f"Keys: {self.avatar.key_count}",
        ]
