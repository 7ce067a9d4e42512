import pytest

from keymaze.game.events import GameEvent
from keymaze.game.session import FALLBACK_SPAWN, GameSession
from keymaze.levels.loader import LevelSet
from keymaze.maze.tiles import GLYPH_TO_TILE
from keymaze.movement.avatar import Direction, MovementState


def _codes(*lines):
    """Raw level codes from ASCII rows."""
    return [[GLYPH_TO_TILE[ch].value for ch in line] for line in lines]


CORRIDOR = _codes(
    "######",
    "#S...#",
    "######",
)

KEY_GATE_GOAL = _codes(
    "#######",
    "#Sk+.G#",
    "#######",
)


def _session(*levels, **kwargs):
    kwargs.setdefault("speed", 32.0)
    kwargs.setdefault("move_interval", 0.0)
    session = GameSession(LevelSet(list(levels)), **kwargs)
    session.dismiss_start()
    return session


def test_new_session_starts_on_start_screen():
    session = GameSession(LevelSet([CORRIDOR]))
    assert session.show_start is True
    assert session.playing is False
    assert session.avatar.cell == (1, 1)
    # input is ignored until the start screen is dismissed
    assert session.handle_direction(Direction.RIGHT) is False
    session.dismiss_start()
    assert session.playing is True


def test_held_direction_walks_until_blocked():
    session = _session(CORRIDOR)
    assert session.handle_direction(Direction.RIGHT) is True

    session.update(1.0)
    assert session.avatar.cell == (1, 2)
    assert session.avatar.state is MovementState.TRANSITING
    session.update(1.0)
    assert session.avatar.cell == (1, 3)
    session.update(1.0)
    assert session.avatar.cell == (1, 4)
    # the wall at (1, 5) stops the walk
    assert session.avatar.state is MovementState.IDLE
    assert session.avatar.just_arrived is False


def test_keys_gates_and_hud_counters():
    session = _session(KEY_GATE_GOAL, CORRIDOR)
    events = []
    session.add_listener(lambda e, s: events.append(e))

    assert session.gates_total == 1
    assert session.hud_text() == ["WASD/arrow keys to move", "Gates: 1/1", "Keys: 0"]

    session.handle_direction(Direction.RIGHT)
    session.update(1.0)
    assert GameEvent.KEY_COLLECTED in events
    assert session.avatar.key_count == 1

    session.update(1.0)
    assert GameEvent.GATE_OPENED in events
    assert session.avatar.key_count == 0
    assert session.gates_passed == 1
    assert session.gates_remaining == 0
    assert session.hud_text()[1] == "Gates: 0/1"


def test_goal_advances_to_next_level():
    session = _session(KEY_GATE_GOAL, CORRIDOR)
    events = []
    session.add_listener(lambda e, s: events.append(e))

    session.handle_direction(Direction.RIGHT)
    for _ in range(4):
        session.update(1.0)

    assert GameEvent.LEVEL_COMPLETED in events
    assert session.level_index == 1
    assert session.avatar.cell == (1, 1)
    assert session.avatar.key_count == 0
    assert session.avatar.state is MovementState.IDLE
    assert session.has_won is False


def test_reaching_goal_of_last_level_wins():
    session = _session(_codes("#####", "#SG##", "#####"))
    events = []
    session.add_listener(lambda e, s: events.append(e))

    session.handle_direction(Direction.RIGHT)
    session.update(1.0)

    assert session.has_won is True
    assert events[-1] is GameEvent.GAME_WON
    assert session.playing is False
    # further input and frames are ignored on the win screen
    assert session.handle_direction(Direction.LEFT) is False
    session.update(1.0)
    assert session.avatar.cell == (1, 2)


def test_restart_reloads_pristine_first_level():
    levels = LevelSet([KEY_GATE_GOAL])
    session = GameSession(levels, speed=32.0, move_interval=0.0)
    session.dismiss_start()
    session.handle_direction(Direction.RIGHT)
    session.update(1.0)
    assert not session.grid.is_key(1, 2)

    session.restart()

    assert session.show_start is True
    assert session.has_won is False
    assert session.grid.is_key(1, 2)
    assert session.avatar.cell == (1, 1)
    assert session.avatar.key_count == 0
    assert session.gates_passed == 0


def test_level_without_start_uses_fallback_spawn(caplog):
    session = _session(_codes("...", "...", "..."))
    assert session.avatar.cell == FALLBACK_SPAWN
    assert any("no start tile" in rec.message for rec in caplog.records)


def test_throttle_limits_move_attempts():
    session = _session(CORRIDOR, move_interval=0.5)

    # a blocked attempt still uses up the interval
    assert session.handle_direction(Direction.UP) is False
    assert session.handle_direction(Direction.RIGHT) is False
    session.update(0.5)
    assert session.handle_direction(Direction.RIGHT) is True


def test_listener_errors_are_logged_not_raised(caplog):
    session = _session(CORRIDOR)

    def boom(event, s):
        raise RuntimeError("listener failure")

    session.add_listener(boom)
    session.load_level(0)

    assert any("Listener errored" in rec.message for rec in caplog.records)


def test_empty_level_set_is_rejected():
    with pytest.raises(ValueError):
        GameSession(LevelSet([]))


@pytest.mark.parametrize("start_level", [3, -1])
def test_out_of_range_start_level_falls_back_to_first(start_level, caplog):
    session = GameSession(LevelSet([CORRIDOR]), start_level=start_level)

    assert session.level_index == 0
    assert session.first_level == 0
    assert session.avatar.cell == (1, 1)
    assert any("out of range" in rec.message for rec in caplog.records)

    session.restart()
    assert session.level_index == 0
