import json
from pathlib import Path

import pytest

from keymaze.exceptions import (
    InvalidLevelData,
    LevelFileNotFoundError,
    LevelParseError,
    LevelSchemaError,
)
from keymaze.levels.loader import LevelSet, load_default_levels, load_level_file, parse_levels
from keymaze.maze.tiles import Tile

SIMPLE = {
    "levels": [
        [
            [1, 1, 1, 1],
            [1, 2, 4, 1],
            [1, 5, 3, 1],
            [1, 1, 1, 1],
        ]
    ]
}


def write_json(path: Path, data):
    path.write_text(json.dumps(data), encoding="utf-8")


def test_load_valid_file(tmp_path: Path, caplog):
    file_path = tmp_path / "levels.json"
    write_json(file_path, SIMPLE)

    caplog.set_level("INFO")
    levels = load_level_file(file_path)

    assert len(levels) == 1
    assert levels[0] == SIMPLE["levels"][0]
    assert any("Loaded 1 level(s)" in rec.message for rec in caplog.records)


def test_build_grid_leaves_source_untouched(tmp_path: Path):
    file_path = tmp_path / "levels.json"
    write_json(file_path, SIMPLE)
    levels = load_level_file(file_path)

    grid = levels.build_grid(0, tile_size=16)
    assert grid.start == (1, 1)
    assert grid.tile_size == 16
    grid.consume_key(1, 2)

    # the LevelSet still holds the authored layout
    assert levels[0][1] == [1, 2, 4, 1]
    fresh = levels.build_grid(0)
    assert fresh.is_key(1, 2)


def test_level_set_does_not_alias_input():
    raw = [[[2, 0]]]
    levels = LevelSet(raw)
    raw[0][0][1] = 1
    assert levels[0] == [[2, 0]]
    # indexing hands out copies too
    levels[0][0][0] = 9
    assert levels[0] == [[2, 0]]


def test_build_grid_bad_index():
    levels = LevelSet([[[0]]])
    with pytest.raises(IndexError):
        levels.build_grid(1)
    with pytest.raises(IndexError):
        levels.build_grid(-1)


def test_missing_file(tmp_path: Path):
    with pytest.raises(LevelFileNotFoundError):
        load_level_file(tmp_path / "nope.json")


def test_malformed_json_reports_location(tmp_path: Path):
    bad = tmp_path / "bad.json"
    bad.write_text('{"levels": [[[1, 1],]]', encoding="utf-8")

    with pytest.raises(LevelParseError) as ei:
        load_level_file(bad)

    assert ei.value.lineno == 1
    assert "line 1" in str(ei.value)


def test_unknown_tile_code_fails_schema(tmp_path: Path):
    file_path = tmp_path / "levels.json"
    write_json(file_path, {"levels": [[[0, 0], [0, 9]]]})

    with pytest.raises(LevelSchemaError) as ei:
        load_level_file(file_path)

    msg = str(ei.value)
    assert "failed schema validation" in msg
    assert "levels.0.1.1" in msg
    # schema errors are level-data errors for callers that skip bad levels
    assert isinstance(ei.value, InvalidLevelData)


@pytest.mark.parametrize(
    "data",
    [
        {},
        {"levels": []},
        {"levels": [[]]},
        {"levels": [[[]]]},
        {"levels": [[["1"]]]},
        {"levels": [[[True]]]},
        [],
    ],
)
def test_schema_rejects_bad_shapes(data):
    with pytest.raises(LevelSchemaError):
        parse_levels(data)


def test_ragged_level_fails_at_load():
    with pytest.raises(LevelSchemaError) as ei:
        parse_levels({"levels": [[[0, 0], [0]]]})
    assert "levels.0" in str(ei.value)


def test_second_level_with_two_starts_fails_at_load(tmp_path: Path):
    file_path = tmp_path / "levels.json"
    write_json(file_path, {"levels": [[[2, 3]], [[2, 2]]]})

    with pytest.raises(LevelSchemaError) as ei:
        load_level_file(file_path)

    msg = str(ei.value)
    assert "levels.1" in msg
    assert "levels.0" not in msg
    assert isinstance(ei.value, InvalidLevelData)


def test_float_codes_fail_at_load():
    with pytest.raises(LevelSchemaError):
        parse_levels({"levels": [[[2, 1.0]]]})


def test_directory_is_not_a_level_file(tmp_path: Path):
    with pytest.raises(LevelFileNotFoundError):
        load_level_file(tmp_path)


def test_bundled_levels_are_playable():
    levels = load_default_levels()
    assert len(levels) >= 2
    for i in range(len(levels)):
        grid = levels.build_grid(i)
        assert grid.start is not None
        assert grid.count(Tile.GOAL) == 1
        assert grid.count(Tile.KEY) >= grid.count(Tile.GATE) - 1
