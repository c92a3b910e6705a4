"""Decoding of level descriptions.

Two textual forms are understood:

* The structured form: a mapping with ``width``, ``height``, ``walls``,
  ``targets``, ``boxes`` and ``player``. Each collection is a list of ``[x, y]``
  pairs or a pair-separated string such as ``"1,2 3,4"``.
* The classic Sokoban (XSB) grid::

      #####
      #@$.#
      #####

  ``#`` wall, ``$`` box, ``.`` target, ``*`` box on target, ``@`` player,
  ``+`` player on target, and space, ``-`` or ``_`` for floor.

Both produce a validated ``Level``; malformed input raises ``LevelError``.
"""

from __future__ import annotations

import re
from typing import Any, List, Mapping, Optional, Sequence, Set, Union

from boxman.levels.level import Level, LevelError, Pair

PairsLike = Union[str, Sequence[Sequence[int]]]

# Older level packs name things after what was drawn on screen.
FIELD_ALIASES: Mapping[str, str] = {
    "trees": "walls",
    "spots": "targets",
    "buckets": "boxes",
    "man": "player",
}

DEFAULT_WIDTH = 15
DEFAULT_HEIGHT = 10

XSB_FLOOR = frozenset(" -_")
XSB_KNOWN = frozenset("#$.*@+") | XSB_FLOOR

_PAIR_RE = re.compile(r"^\s*(-?\d+)\s*,\s*(-?\d+)\s*$")
_COMMA_RE = re.compile(r"\s*,\s*")


def parse_pairs(value: PairsLike) -> List[Pair]:
    """Decode a collection of ``(x, y)`` integer pairs.

    Accepts a pair-separated string (pairs split by whitespace or ``;``,
    coordinates by ``,``) or a sequence of two-element sequences.
    """
    if isinstance(value, str):
        # "1 , 2" is one pair: glue coordinates before splitting on separators
        text = _COMMA_RE.sub(",", value.strip())
        chunks = [c for c in re.split(r"[;\s]+", text) if c]
        pairs: List[Pair] = []
        for chunk in chunks:
            match = _PAIR_RE.match(chunk)
            if match is None:
                raise LevelError(f"Malformed pair {chunk!r}")
            pairs.append((int(match.group(1)), int(match.group(2))))
        return pairs
    return [_coerce_pair(item) for item in value]


def _coerce_pair(item: Any) -> Pair:
    if isinstance(item, str):
        pairs = parse_pairs(item)
        if len(pairs) != 1:
            raise LevelError(f"Malformed pair {item!r}")
        return pairs[0]
    try:
        x, y = item
    except (TypeError, ValueError) as exc:
        raise LevelError(f"Malformed pair {item!r}") from exc
    if isinstance(x, bool) or isinstance(y, bool):
        raise LevelError(f"Malformed pair {item!r}")
    if not isinstance(x, int) or not isinstance(y, int):
        raise LevelError(f"Pair coordinates must be integers: {item!r}")
    return (x, y)


def level_from_dict(data: Mapping[str, Any]) -> Level:
    """Build a ``Level`` from its structured description.

    ``width``/``height`` default to 15x10, the size of the classic board.
    """
    fields = {FIELD_ALIASES.get(k, k): v for k, v in data.items()}
    try:
        player_raw = fields["player"]
    except KeyError as exc:
        raise LevelError("Level has no player position") from exc

    player_pairs = (
        parse_pairs(player_raw) if isinstance(player_raw, str) else [player_raw]
    )
    if len(player_pairs) != 1:
        raise LevelError(f"Level must have exactly one player, got {player_raw!r}")

    return Level.from_pairs(
        width=int(fields.get("width", DEFAULT_WIDTH)),
        height=int(fields.get("height", DEFAULT_HEIGHT)),
        walls=parse_pairs(fields.get("walls", [])),
        targets=parse_pairs(fields.get("targets", [])),
        boxes=parse_pairs(fields.get("boxes", [])),
        player=_coerce_pair(player_pairs[0]),
        name=fields.get("name"),
    )


def parse_xsb(text: str, name: Optional[str] = None) -> Level:
    """Build a ``Level`` from a classic Sokoban text grid.

    Leading and trailing blank lines are ignored; rows are padded with floor to
    the longest row.
    """
    lines = text.splitlines()
    while lines and not lines[0].strip():
        lines.pop(0)
    while lines and not lines[-1].strip():
        lines.pop()
    if not lines:
        raise LevelError("Empty level text")

    walls: Set[Pair] = set()
    targets: Set[Pair] = set()
    boxes: Set[Pair] = set()
    players: List[Pair] = []

    for y, row in enumerate(lines):
        for x, ch in enumerate(row):
            if ch not in XSB_KNOWN:
                raise LevelError(f"Unknown level character {ch!r} at {(x, y)}")
            if ch == "#":
                walls.add((x, y))
            if ch in ".*+":
                targets.add((x, y))
            if ch in "$*":
                boxes.add((x, y))
            if ch in "@+":
                players.append((x, y))

    if len(players) != 1:
        raise LevelError(f"Level must have exactly one player, found {len(players)}")

    return Level.from_pairs(
        width=max(len(row) for row in lines),
        height=len(lines),
        walls=walls,
        targets=targets,
        boxes=boxes,
        player=players[0],
        name=name,
    )


def parse_level(data: Union[str, Mapping[str, Any]]) -> Level:
    """Dispatch to ``parse_xsb`` or ``level_from_dict`` based on input type."""
    if isinstance(data, str):
        return parse_xsb(data)
    return level_from_dict(data)
