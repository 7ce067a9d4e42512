import argparse
import logging
from pathlib import Path

from .game.session import GameSession
from .levels.loader import load_default_levels, load_level_file
from .logging_config import configure_logging
from .settings import Settings


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        prog="keymaze",
        description="Key Maze - collect keys, open gates, reach the goal. Built with Python + Arcade",
    )
    parser.add_argument(
        "--levels",
        dest="levels_path",
        type=Path,
        default=None,
        help="Path to a levels.json file. Defaults to the bundled levels.",
    )
    parser.add_argument(
        "--settings",
        dest="settings_path",
        type=Path,
        default=None,
        help="Path to a user settings YAML file to load/override defaults.",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable verbose debug logging.",
    )
    return parser.parse_args(argv)


def build_session(args) -> tuple[GameSession, Settings]:
    settings = Settings.load(user_path=args.settings_path)
    levels = load_level_file(args.levels_path) if args.levels_path else load_default_levels()
    gameplay = settings.gameplay
    session = GameSession(
        levels,
        tile_size=gameplay.tile_size,
        speed=gameplay.speed,
        move_interval=gameplay.move_interval,
        start_level=gameplay.start_level,
    )
    return session, settings


def main(argv=None) -> int:
    args = parse_args(argv)
    configure_logging(level=logging.DEBUG if args.debug else logging.INFO)

    session, settings = build_session(args)

    # Imported late so level/config errors surface without opening a window.
    from .app import run

    run(session, settings)
    return 0
