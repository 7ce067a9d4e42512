from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional, Protocol, Tuple

from ..maze.grid import Cell

logger = logging.getLogger(__name__)

Vector = Tuple[int, int]

STOPPED: Vector = (0, 0)


class Direction:
    """Unit (d_row, d_col) steps for the four cardinal moves."""

    UP: Vector = (-1, 0)
    DOWN: Vector = (1, 0)
    LEFT: Vector = (0, -1)
    RIGHT: Vector = (0, 1)


class MovementState(Enum):
    IDLE = auto()
    TRANSITING = auto()


class TileMap(Protocol):
    """Protocol for the grid interface used by Avatar.

    Any map works as long as it answers these queries and can consume
    pickups in place.
    """

    def in_bounds(self, r: int, c: int) -> bool: ...
    def is_wall(self, r: int, c: int) -> bool: ...
    def is_key(self, r: int, c: int) -> bool: ...
    def is_gate(self, r: int, c: int) -> bool: ...
    def consume_key(self, r: int, c: int) -> None: ...
    def consume_gate(self, r: int, c: int) -> None: ...


@dataclass(frozen=True)
class ArrivalResult:
    """Outcome of resolving one arrival.

    Attributes:
        cell: Cell the avatar landed on, or None when there was nothing to resolve.
        picked_key: A key was collected and removed from the grid.
        opened_gate: A gate was opened, costing one key.
    """

    cell: Optional[Cell]
    picked_key: bool = False
    opened_gate: bool = False

    @property
    def resolved(self) -> bool:
        return self.cell is not None


NOTHING_TO_RESOLVE = ArrivalResult(cell=None)


class Avatar:
    """The player's token: a discrete cell plus a smoothly moving pixel position.

    Movement is a two-state machine. While IDLE, ``cell`` is authoritative and
    ``pixel_pos`` sits on its center. ``request_move`` starts a TRANSITING
    phase toward a neighbour cell; ``advance(dt)`` slides ``pixel_pos`` toward
    that cell's center and commits ``cell`` only on arrival.

    Arrival is a two-phase commit. ``advance`` raises ``just_arrived``; the
    caller then calls ``resolve_arrival(grid)`` once to collect keys and open
    gates, checks for the goal itself, and may call ``try_continue(grid)`` to
    keep walking in the held direction.
    """

    def __init__(self, tile_size: int = 32, speed: float = 130.0) -> None:
        if speed <= 0:
            raise ValueError("speed must be positive")
        self.tile_size = tile_size
        self.speed = float(speed)  # pixels per second

        self.cell: Cell = (0, 0)
        self.pixel_pos: Tuple[float, float] = self._center_of(self.cell)
        self.state: MovementState = MovementState.IDLE
        self.target_cell: Optional[Cell] = None
        self.intent: Vector = STOPPED
        self.key_count: int = 0
        self.just_arrived: bool = False

    def __repr__(self) -> str:  # pragma: no cover - debugging helper
        return (
            f"<Avatar cell={self.cell} state={self.state.name} target={self.target_cell} "
            f"keys={self.key_count}>"
        )

    def _center_of(self, cell: Cell) -> Tuple[float, float]:
        half = self.tile_size / 2
        return cell[1] * self.tile_size + half, cell[0] * self.tile_size + half

    @property
    def is_moving(self) -> bool:
        return self.state is MovementState.TRANSITING

    # ---- Placement -------------------------------------------------------
    def place_at(self, r: int, c: int) -> None:
        """Teleport to (r, c) and drop any in-flight movement."""
        self.cell = (r, c)
        self.pixel_pos = self._center_of(self.cell)
        self.state = MovementState.IDLE
        self.target_cell = None
        self.intent = STOPPED
        self.just_arrived = False
        logger.debug("Avatar placed at %s", self.cell)

    def reset_keys(self) -> None:
        self.key_count = 0

    # ---- Movement --------------------------------------------------------
    def can_enter(self, grid: TileMap, r: int, c: int) -> bool:
        """Return True if the avatar may step onto (r, c) right now.

        Out-of-bounds cells and walls are never enterable. A gate is locked
        while the avatar holds no keys.
        """
        if not grid.in_bounds(r, c):
            return False
        if grid.is_wall(r, c):
            return False
        if grid.is_gate(r, c) and self.key_count == 0:
            return False
        return True

    def _start_transit(self, grid: TileMap, direction: Vector) -> bool:
        tr = self.cell[0] + direction[0]
        tc = self.cell[1] + direction[1]
        if not self.can_enter(grid, tr, tc):
            logger.debug("Blocked move from %s toward (%d, %d)", self.cell, tr, tc)
            return False
        self.target_cell = (tr, tc)
        self.state = MovementState.TRANSITING
        logger.debug("Avatar transiting %s -> %s", self.cell, self.target_cell)
        return True

    def request_move(self, grid: TileMap, direction: Vector) -> bool:
        """Ask to move one cell in ``direction``.

        The direction is remembered as the intent either way. While a transit
        is in flight the request is accepted but does not redirect it; the new
        intent applies after arrival.

        Returns:
            True if a transit started or one is already running; False if the
            neighbour cell is blocked (state is left untouched).
        """
        self.intent = direction
        if self.state is MovementState.TRANSITING:
            return True
        if direction == STOPPED:
            return False
        return self._start_transit(grid, direction)

    def try_continue(self, grid: TileMap) -> bool:
        """Retry the held intent after an arrival.

        Returns True if a transit is running afterwards.
        """
        if self.state is MovementState.TRANSITING:
            return True
        if self.intent == STOPPED:
            return False
        return self._start_transit(grid, self.intent)

    def advance(self, dt: float) -> bool:
        """Move ``pixel_pos`` toward the target center by ``speed * dt``.

        The step is clamped so the position never passes the target; reaching
        it snaps exactly onto the center and completes the transit.

        Returns:
            True if the avatar arrived during this call.
        """
        if self.state is not MovementState.TRANSITING or self.target_cell is None:
            return False

        tx, ty = self._center_of(self.target_cell)
        px, py = self.pixel_pos
        dx = tx - px
        dy = ty - py
        dist = math.hypot(dx, dy)
        step = self.speed * max(0.0, dt)

        if dist == 0 or step >= dist:
            self.pixel_pos = (tx, ty)
            self._finish_transit()
            return True

        self.pixel_pos = (px + dx / dist * step, py + dy / dist * step)
        return False

    def _finish_transit(self) -> None:
        assert self.target_cell is not None
        self.cell = self.target_cell
        self.target_cell = None
        self.state = MovementState.IDLE
        self.just_arrived = True
        logger.debug("Avatar arrived at %s", self.cell)

    # ---- Tile interaction ------------------------------------------------
    def resolve_arrival(self, grid: TileMap) -> ArrivalResult:
        """Apply key pickups and gate openings for the cell just reached.

        Only the first call after an arrival does anything; later calls return
        NOTHING_TO_RESOLVE so a key or gate is never counted twice.
        """
        if not self.just_arrived:
            return NOTHING_TO_RESOLVE

        r, c = self.cell
        picked_key = False
        opened_gate = False

        if grid.is_key(r, c):
            self.key_count += 1
            grid.consume_key(r, c)
            picked_key = True
            logger.info("Collected key at %s (keys=%d)", self.cell, self.key_count)

        if grid.is_gate(r, c):
            self.key_count = max(0, self.key_count - 1)
            grid.consume_gate(r, c)
            opened_gate = True
            logger.info("Opened gate at %s (keys=%d)", self.cell, self.key_count)

        self.just_arrived = False
        return ArrivalResult(cell=self.cell, picked_key=picked_key, opened_gate=opened_gate)


__all__ = [
    "ArrivalResult",
    "Avatar",
    "Direction",
    "MovementState",
    "NOTHING_TO_RESOLVE",
    "STOPPED",
    "TileMap",
    "Vector",
]
