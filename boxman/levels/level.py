"""Immutable level description.

A ``Level`` is the static definition of one puzzle: its bounds, the wall and
target cells, and the initial placement of boxes and the player. It never
changes once built; ``boxman.state.GameState.from_level`` copies the initial
placement into a fresh mutable game state.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional, Tuple

from pyrsistent import PSet, pset

from boxman.components import Position

# Grid coordinate alias (x, y)
Pair = Tuple[int, int]


class LevelError(ValueError):
    """Raised when level data is malformed."""


@dataclass(frozen=True)
class Level:
    """
    Static puzzle definition.

    Attributes:
        width (int): Grid width in cells.
        height (int): Grid height in cells.
        walls (PSet[Position]): Impassable cells.
        targets (PSet[Position]): Cells every box must end up on.
        boxes (PSet[Position]): Initial box positions.
        player (Position): Initial player position.
        name (str | None): Optional display name.
    """

    width: int
    height: int
    walls: PSet[Position]
    targets: PSet[Position]
    boxes: PSet[Position]
    player: Position
    name: Optional[str] = None

    def __post_init__(self) -> None:
        self.validate()

    @classmethod
    def from_pairs(
        cls,
        width: int,
        height: int,
        walls: Iterable[Pair],
        targets: Iterable[Pair],
        boxes: Iterable[Pair],
        player: Pair,
        name: Optional[str] = None,
    ) -> Level:
        """Build a level from plain ``(x, y)`` integer pairs."""
        return cls(
            width=width,
            height=height,
            walls=pset(Position(x, y) for x, y in walls),
            targets=pset(Position(x, y) for x, y in targets),
            boxes=pset(Position(x, y) for x, y in boxes),
            player=Position(*player),
            name=name,
        )

    def in_bounds(self, pos: Position) -> bool:
        """Return True if ``pos`` lies within the level rectangle."""
        return 0 <= pos.x < self.width and 0 <= pos.y < self.height

    def validate(self) -> None:
        """Check the structural invariants of the level.

        Raises:
            LevelError: If bounds are not positive, any position lies outside
                the grid, the player overlaps a wall or box, or a box or target
                overlaps a wall.
        """
        if self.width <= 0 or self.height <= 0:
            raise LevelError(f"Invalid bounds {self.width}x{self.height}")

        for label, positions in (
            ("wall", self.walls),
            ("target", self.targets),
            ("box", self.boxes),
        ):
            outside = [p for p in positions if not self.in_bounds(p)]
            if outside:
                raise LevelError(f"{label} out of bounds: {sorted_pairs(outside)}")

        if not self.in_bounds(self.player):
            raise LevelError(f"player out of bounds: {self.player}")
        if self.player in self.walls:
            raise LevelError(f"player on a wall: {self.player}")
        if self.player in self.boxes:
            raise LevelError(f"player on a box: {self.player}")

        stuck = self.boxes & self.walls
        if stuck:
            raise LevelError(f"box on a wall: {sorted_pairs(stuck)}")

        buried = self.targets & self.walls
        if buried:
            raise LevelError(f"target on a wall: {sorted_pairs(buried)}")


def sorted_pairs(positions: Iterable[Position]) -> list[Pair]:
    """Return positions as sorted ``(x, y)`` tuples (row-major)."""
    return sorted(((p.x, p.y) for p in positions), key=lambda p: (p[1], p[0]))
