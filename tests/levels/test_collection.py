import json
import math
from pathlib import Path

import pytest

from boxman.components import Position
from boxman.levels.collection import LevelCollection, normalize_index, split_xsb_pack
from boxman.levels.level import LevelError
from boxman.levels.parse import parse_xsb


def _collection(n: int) -> LevelCollection:
    return LevelCollection([parse_xsb("#" * i + "@$.") for i in range(n)])


@pytest.mark.parametrize(
    "value, expected",
    [
        (1, 1),
        (3, 3),
        (5, 5),
        (0, 5),
        (-7, 5),
        (6, 1),
        (99, 1),
        (math.nan, 1),
        ("abc", 1),
        (None, 1),
        ("2", 2),
        (2.9, 2),
    ],
)
def test_normalize_index(value: object, expected: int) -> None:
    assert normalize_index(value, 5) == expected  # type: ignore[arg-type]


def test_collection_wraparound_and_load() -> None:
    levels = _collection(3)
    assert levels.count == len(levels) == 3
    assert levels.normalize_index(0) == 3
    assert levels.normalize_index(4) == 1
    assert levels.normalize_index(float("nan")) == 1
    assert levels.load_level(levels.normalize_index(0)).width == 5
    assert levels.load_level(1).player == Position(0, 0)


def test_load_level_out_of_range() -> None:
    levels = _collection(2)
    with pytest.raises(IndexError):
        levels.load_level(0)
    with pytest.raises(IndexError):
        levels.load_level(3)


def test_empty_collection_rejected() -> None:
    with pytest.raises(LevelError):
        LevelCollection([])


def test_builtin_levels_load() -> None:
    levels = LevelCollection.builtin()
    assert levels.count >= 4
    for index in range(1, levels.count + 1):
        level = levels.load_level(index)
        assert level.name
        assert len(level.targets) >= len(level.boxes) > 0


def test_from_json_file(tmp_path: Path) -> None:
    path = tmp_path / "levels.json"
    path.write_text(
        json.dumps(
            [
                {"width": 3, "height": 1, "targets": "2,0", "boxes": "1,0", "player": "0,0"},
                "#####\n#@$.#\n#####",
            ]
        )
    )
    levels = LevelCollection.from_file(path)
    assert levels.count == 2
    assert levels.load_level(1).width == 3
    assert levels.load_level(2).player == Position(1, 1)


def test_from_json_file_requires_list(tmp_path: Path) -> None:
    path = tmp_path / "levels.json"
    path.write_text(json.dumps({"width": 3}))
    with pytest.raises(LevelError):
        LevelCollection.from_file(path)


def test_from_xsb_pack(tmp_path: Path) -> None:
    path = tmp_path / "pack.txt"
    path.write_text(
        "; first\n#####\n#@$.#\n#####\n\n\n; second\n######\n#@ $.#\n######\n"
    )
    levels = LevelCollection.from_file(path)
    assert levels.count == 2
    assert levels.load_level(2).width == 6


def test_split_xsb_pack_skips_comments_and_blank_runs() -> None:
    assert split_xsb_pack("\n; c\nab\ncd\n\n\n\nef\n") == ["ab\ncd", "ef"]
