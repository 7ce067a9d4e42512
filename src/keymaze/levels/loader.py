from __future__ import annotations

import copy
import json
import logging
from importlib import resources
from pathlib import Path
from typing import Any, List, Sequence, Tuple, Union

from jsonschema import Draft202012Validator

from ..exceptions import InvalidLevelData, LevelFileNotFoundError, LevelParseError, LevelSchemaError
from ..maze.grid import Grid
from ..maze.tiles import VALID_CODES

logger = logging.getLogger(__name__)

Matrix = List[List[int]]

LEVELS_SCHEMA = {
    "$schema": "https://json-schema.org/draft/2020-12/schema",
    "type": "object",
    "required": ["levels"],
    "properties": {
        "levels": {
            "type": "array",
            "minItems": 1,
            "items": {
                "type": "array",
                "minItems": 1,
                "items": {
                    "type": "array",
                    "minItems": 1,
                    "items": {"type": "integer", "enum": sorted(VALID_CODES)},
                },
            },
        },
    },
}

_VALIDATOR = Draft202012Validator(LEVELS_SCHEMA)


class LevelSet:
    """The raw level matrices from one level file.

    The matrices are kept pristine. ``build_grid`` hands a deep copy to each
    new Grid, so reloading or restarting a level always starts from the
    authored layout.
    """

    def __init__(self, levels: Sequence[Sequence[Sequence[int]]], source: str = "<memory>") -> None:
        self._levels: Tuple[Matrix, ...] = tuple(copy.deepcopy(list(m)) for m in levels)
        self.source = source

    def __len__(self) -> int:
        return len(self._levels)

    def __getitem__(self, index: int) -> Matrix:
        return copy.deepcopy(self._levels[index])

    def build_grid(self, index: int, tile_size: int = 32) -> Grid:
        if not 0 <= index < len(self._levels):
            raise IndexError(f"Level index {index} out of range (0..{len(self._levels) - 1})")
        grid = Grid(copy.deepcopy(self._levels[index]), tile_size=tile_size)
        logger.debug("Built grid for level %d from %s: %r", index, self.source, grid)
        return grid

    def __repr__(self) -> str:
        return f"LevelSet(levels={len(self._levels)}, source={self.source!r})"


def _schema_problems(data: Any) -> List[str]:
    problems: List[str] = []
    for err in sorted(_VALIDATOR.iter_errors(data), key=lambda e: list(e.absolute_path)):
        where = ".".join(str(p) for p in err.absolute_path) or "root"
        problems.append(f"At {where}: {err.message}")
    return problems


def parse_levels(data: Any, source: str = "<memory>") -> LevelSet:
    """Validate already-decoded level data and wrap it in a LevelSet."""
    problems = _schema_problems(data)
    if problems:
        raise LevelSchemaError(source, problems)
    levels = LevelSet(data["levels"], source=source)
    # Build every level once so bad layouts fail at load time, not mid-game.
    problems = []
    for index in range(len(levels)):
        try:
            levels.build_grid(index)
        except InvalidLevelData as exc:
            problems.append(f"At levels.{index}: {exc}")
    if problems:
        raise LevelSchemaError(source, problems)
    logger.info("Loaded %d level(s) from %s", len(levels), source)
    return levels


def load_level_file(path: Union[str, Path]) -> LevelSet:
    """Read and validate a ``levels.json`` file.

    Raises:
        LevelFileNotFoundError: the path is missing or not a regular file.
        LevelParseError: the file is not valid JSON.
        LevelSchemaError: the JSON does not describe a list of tile matrices,
            or one of the levels cannot be built into a grid.
    """
    p = Path(path)
    if not p.is_file():
        raise LevelFileNotFoundError(p)
    try:
        with p.open("r", encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise LevelParseError(p, e.msg, e.lineno, e.colno) from e
    return parse_levels(data, source=str(p))


def load_default_levels() -> LevelSet:
    """Load the level file bundled with the package."""
    text = resources.files("keymaze.levels").joinpath("levels.json").read_text(encoding="utf-8")
    logger.debug("Loaded embedded levels resource")
    return parse_levels(json.loads(text), source="keymaze/levels/levels.json")


__all__ = [
    "LEVELS_SCHEMA",
    "LevelSet",
    "load_default_levels",
    "load_level_file",
    "parse_levels",
]
