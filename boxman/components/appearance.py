from dataclasses import dataclass
from typing import Optional

from boxman.directions import Direction
from boxman.types import EntityKind


@dataclass(frozen=True)
class Appearance:
    """
    Rendering appearance of a movable entity.

    Attributes:
        kind: What the entity is (``BOX`` or ``PLAYER``).
        facing: Direction the entity looks towards; ``None`` for boxes.
        in_motion: True while an animation for the entity is in flight.
    """

    kind: EntityKind
    facing: Optional[Direction] = None
    in_motion: bool = False
