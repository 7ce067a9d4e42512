from .loader import LEVELS_SCHEMA, LevelSet, load_default_levels, load_level_file, parse_levels

__all__ = [
    "LEVELS_SCHEMA",
    "LevelSet",
    "load_default_levels",
    "load_level_file",
    "parse_levels",
]
