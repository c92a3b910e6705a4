from enum import StrEnum, auto
from typing import Awaitable, Callable, Optional, TYPE_CHECKING


# Forward declarations to avoid circular imports:
if TYPE_CHECKING:
    from boxman.state import GameState

EntityID = int

PLAYER_ID: EntityID = 0
"""Entity ID always assigned to the player token."""

LevelCallback = Callable[[int], Optional[Awaitable[None]]]
WinFn = Callable[["GameState"], bool]


class EntityKind(StrEnum):
    """Kinds of things that can occupy a grid cell.

    ``TARGET`` is a floor marking: it may share a cell with a ``BOX`` or the
    ``PLAYER``.
    """

    WALL = auto()
    TARGET = auto()
    BOX = auto()
    PLAYER = auto()
