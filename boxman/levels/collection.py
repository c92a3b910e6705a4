"""Ordered level collections and the level-index wraparound policy."""

from __future__ import annotations

import json
import logging
import math
from pathlib import Path
from typing import Any, List, Sequence, Union

from boxman.levels.builtin import builtin_levels
from boxman.levels.level import Level, LevelError
from boxman.levels.parse import parse_level, parse_xsb

logger = logging.getLogger(__name__)

LevelIndexLike = Union[int, float, str, None]


def normalize_index(value: LevelIndexLike, count: int) -> int:
    """Map a requested level index onto ``1..count``.

    * ``value <= 0`` selects the last level.
    * A value that is not a number, or exceeds ``count``, selects the first level.
    * Otherwise the (integer part of the) value is used as-is.
    """
    number: float
    try:
        number = float(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return 1
    if math.isnan(number):
        return 1
    if number <= 0:
        return count
    if number > count:
        return 1
    return int(number)


class LevelCollection:
    """Immutable, 1-indexed sequence of levels."""

    def __init__(self, levels: Sequence[Level]):
        if not levels:
            raise LevelError("Level collection is empty")
        self._levels: List[Level] = list(levels)

    @classmethod
    def builtin(cls) -> LevelCollection:
        """Collection of the levels bundled with the package."""
        return cls(builtin_levels())

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> LevelCollection:
        """Load levels from ``path``.

        ``.json`` files hold a list whose items are either structured level
        mappings or XSB strings. Any other file is read as an XSB pack with
        levels separated by blank lines; lines starting with ``;`` are comments.
        """
        path = Path(path)
        text = path.read_text(encoding="utf-8")
        if path.suffix.lower() == ".json":
            data: Any = json.loads(text)
            if not isinstance(data, list):
                raise LevelError(f"{path}: expected a JSON list of levels")
            levels = [parse_level(item) for item in data]
        else:
            levels = [parse_xsb(block) for block in split_xsb_pack(text)]
        logger.info("Loaded %d levels from %s", len(levels), path)
        return cls(levels)

    @property
    def count(self) -> int:
        return len(self._levels)

    def __len__(self) -> int:
        return len(self._levels)

    def normalize_index(self, value: LevelIndexLike) -> int:
        return normalize_index(value, self.count)

    def load_level(self, index: int) -> Level:
        """Return level ``index`` (1-based).

        Raises:
            IndexError: If ``index`` is outside ``1..count``; callers should
                pass the index through ``normalize_index`` first.
        """
        if not 1 <= index <= self.count:
            raise IndexError(f"Level {index} out of range 1..{self.count}")
        return self._levels[index - 1]


def split_xsb_pack(text: str) -> List[str]:
    """Split a multi-level XSB text into one block per level."""
    blocks: List[str] = []
    current: List[str] = []
    for line in text.splitlines():
        if line.lstrip().startswith(";"):
            continue
        if line.strip():
            current.append(line)
        elif current:
            blocks.append("\n".join(current))
            current = []
    if current:
        blocks.append("\n".join(current))
    return blocks
