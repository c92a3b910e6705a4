"""Plain-text rendering in the classic Sokoban notation.

``#`` wall, ``$`` box, ``.`` target, ``*`` box on target, ``@`` player,
``+`` player on target, space for floor. For a level enclosed by walls, the
output of ``render_text`` on a freshly loaded state parses back to the same
level with ``boxman.levels.parse_xsb``.
"""

from typing import Dict, FrozenSet

from boxman.components import Position
from boxman.state import GameState
from boxman.types import EntityKind

_K = EntityKind

GLYPHS: Dict[FrozenSet[EntityKind], str] = {
    frozenset(): " ",
    frozenset({_K.WALL}): "#",
    frozenset({_K.TARGET}): ".",
    frozenset({_K.BOX}): "$",
    frozenset({_K.BOX, _K.TARGET}): "*",
    frozenset({_K.PLAYER}): "@",
    frozenset({_K.PLAYER, _K.TARGET}): "+",
}


def render_text(state: GameState) -> str:
    rows = []
    for y in range(state.level.height):
        row = "".join(
            GLYPHS.get(state.entity_kinds_at(Position(x, y)), "?")
            for x in range(state.level.width)
        )
        rows.append(row.rstrip())
    return "\n".join(rows)
