from __future__ import annotations

import logging

import arcade

from .game.events import GameEvent
from .game.session import GameSession
from .input.manager import RESTART, InputManager
from .maze.tiles import Tile
from .settings import Settings

logger = logging.getLogger(__name__)

HUD_HEIGHT = 24
BACKGROUND = (240, 240, 240)
HUD_TEXT = (0, 0, 0)
AVATAR_COLOR = (255, 255, 255)


class MazeWindow(arcade.Window):
    """The Arcade window: draws the session state and feeds it input and time.

    Grid pixel coordinates grow downward while Arcade's y axis grows upward,
    so every draw call flips y against the playfield height.
    """

    def __init__(self, session: GameSession, settings: Settings) -> None:
        self.session = session
        self.input = InputManager(settings.input.mapping)
        super().__init__(
            width=session.grid.pixel_width(),
            height=session.grid.pixel_height() + HUD_HEIGHT,
            title=settings.window.title,
            vsync=settings.window.vsync,
        )
        self.background_color = BACKGROUND
        session.add_listener(self._on_event)
        logger.info("MazeWindow initialized (%dx%d)", self.width, self.height)

    def _on_event(self, event: GameEvent, session: GameSession) -> None:
        if event is GameEvent.LEVEL_LOADED:
            self.set_size(session.grid.pixel_width(), session.grid.pixel_height() + HUD_HEIGHT)

    # Arcade lifecycle
    def on_update(self, delta_time: float):  # noqa: N802 (arcade API)
        self.session.update(delta_time)

    def on_key_press(self, symbol: int, modifiers: int):  # noqa: N802 (arcade API)
        session = self.session
        if session.show_start:
            session.dismiss_start()
            return
        actions = self.input.actions_for_key(symbol)
        if session.has_won:
            if RESTART in actions:
                session.restart()
            return
        direction = self.input.direction_for(actions)
        if direction is not None:
            session.handle_direction(direction)

    def on_draw(self):  # noqa: N802 (arcade API)
        self.clear()
        if self.session.show_start:
            self._draw_start_screen()
            return
        self._draw_tiles()
        self._draw_avatar()
        self._draw_hud()
        if self.session.has_won:
            self._draw_win_screen()

    # Drawing
    def _flip(self, y: float) -> float:
        return self.session.grid.pixel_height() - y

    def _draw_tiles(self) -> None:
        grid = self.session.grid
        ts = grid.tile_size
        for r in range(grid.rows):
            for c in range(grid.cols):
                tile = grid.tile_at(r, c)
                left = c * ts
                top = self._flip(r * ts)
                base = Tile.WALL.color if tile is Tile.WALL else Tile.FLOOR.color
                arcade.draw_lrbt_rectangle_filled(left, left + ts, top - ts, top, base)
                if tile is Tile.GOAL:
                    arcade.draw_lrbt_rectangle_filled(left + 4, left + ts - 4, top - ts + 4, top - 4, (*tile.color, 220))
                elif tile is Tile.KEY:
                    arcade.draw_circle_filled(left + ts / 2, top - ts / 2, ts * 0.2, tile.color)
                elif tile is Tile.GATE:
                    arcade.draw_lrbt_rectangle_filled(left, left + ts, top - ts, top, tile.color)
                    arcade.draw_lrbt_rectangle_filled(left + 2, left + ts - 2, top - ts + 2, top - 2, (255, 80, 80))

    def _draw_avatar(self) -> None:
        avatar = self.session.avatar
        x, y = avatar.pixel_pos
        arcade.draw_circle_filled(x, self._flip(y), avatar.tile_size * 0.3, AVATAR_COLOR)

    def _draw_hud(self) -> None:
        hint, gates, keys = self.session.hud_text()
        y = self.height - HUD_HEIGHT / 2
        arcade.draw_lrbt_rectangle_filled(0, self.width, self.height - HUD_HEIGHT, self.height, BACKGROUND)
        arcade.draw_text(hint, 10, y, HUD_TEXT, 12, anchor_y="center")
        arcade.draw_text(f"{keys}   {gates}", self.width - 10, y, HUD_TEXT, 12, anchor_x="right", anchor_y="center")

    def _draw_start_screen(self) -> None:
        arcade.draw_lrbt_rectangle_filled(0, self.width, 0, self.height, (20, 20, 40))
        cx, cy = self.width / 2, self.height / 2
        arcade.draw_text(
            "Collect the keys to unlock the gates and reach the goal",
            cx, cy + 20, (255, 255, 255), 14,
            anchor_x="center", anchor_y="center", width=int(self.width * 0.9), multiline=True, align="center",
        )
        arcade.draw_text("Press any key to begin", cx, cy - 30, (255, 255, 255), 12, anchor_x="center", anchor_y="center")

    def _draw_win_screen(self) -> None:
        arcade.draw_lrbt_rectangle_filled(0, self.width, 0, self.height, (0, 0, 0, 100))
        cx, cy = self.width / 2, self.height / 2
        arcade.draw_text("YOU WIN!", cx, cy + 30, (255, 215, 0), 32, anchor_x="center", anchor_y="center")
        arcade.draw_text("Press SPACE to restart", cx, cy - 30, (255, 255, 255), 14, anchor_x="center", anchor_y="center")


def run(session: GameSession, settings: Settings) -> None:  # pragma: no cover - manual usage
    """Open the window and block in Arcade's event loop."""
    MazeWindow(session, settings)
    arcade.run()
