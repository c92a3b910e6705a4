from enum import StrEnum, auto
from typing import Dict, Optional, Tuple, Union


class Direction(StrEnum):
    """String enum of directional commands.

    Enum Members:
        UP: Move up (towards row 0).
        DOWN: Move down.
        LEFT: Move left (towards column 0).
        RIGHT: Move right.
    """

    UP = auto()
    DOWN = auto()
    LEFT = auto()
    RIGHT = auto()

    @property
    def delta(self) -> Tuple[int, int]:
        """Unit displacement ``(dx, dy)`` for this direction."""
        return DIRECTION_DELTAS[self]


DIRECTION_DELTAS: Dict[Direction, Tuple[int, int]] = {
    Direction.UP: (0, -1),
    Direction.DOWN: (0, 1),
    Direction.LEFT: (-1, 0),
    Direction.RIGHT: (1, 0),
}

# Browser key codes, DOM key names and terminal shorthands.
KEY_TO_DIRECTION: Dict[Union[str, int], Direction] = {
    37: Direction.LEFT,
    38: Direction.UP,
    39: Direction.RIGHT,
    40: Direction.DOWN,
    "arrowleft": Direction.LEFT,
    "arrowup": Direction.UP,
    "arrowright": Direction.RIGHT,
    "arrowdown": Direction.DOWN,
    "left": Direction.LEFT,
    "up": Direction.UP,
    "right": Direction.RIGHT,
    "down": Direction.DOWN,
    "a": Direction.LEFT,
    "w": Direction.UP,
    "d": Direction.RIGHT,
    "s": Direction.DOWN,
    "h": Direction.LEFT,
    "k": Direction.UP,
    "l": Direction.RIGHT,
    "j": Direction.DOWN,
}


def decode_key(key: Union[str, int, Direction, None]) -> Optional[Direction]:
    """Translate a raw key event into a ``Direction``.

    Anything that is not a directional key decodes to ``None`` which the game
    loop treats as a no-op command.
    """
    if key is None:
        return None
    if isinstance(key, Direction):
        return key
    if isinstance(key, str):
        key = key.strip().lower()
    return KEY_TO_DIRECTION.get(key)
