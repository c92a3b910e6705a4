"""Mutable game state for the active level.

``GameState`` keeps the dynamic part of a puzzle (where the player and each box
currently are, and how they look) keyed by stable entity IDs. The static part
(bounds, walls, targets) lives in the referenced ``Level``.

Component stores are ``pyrsistent`` maps: mutators rebind a store rather than
editing it, so a store captured before a move (e.g. by a renderer or a test)
never changes underneath its holder.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import FrozenSet, Iterable, Optional, Set

from pyrsistent import PMap, pmap

from boxman.components import Appearance, Position
from boxman.directions import Direction
from boxman.levels.level import Level, sorted_pairs
from boxman.types import PLAYER_ID, EntityID, EntityKind
from boxman.utils.ecs import entities_at


@dataclass
class GameState:
    """Snapshot of the player and box positions for one level instance.

    Attributes:
        level (Level): Static puzzle definition this state belongs to.
        position (PMap[EntityID, Position]): Position of every movable entity.
            Entity ``PLAYER_ID`` is the player; all other IDs are boxes.
        appearance (PMap[EntityID, Appearance]): Render-facing appearance of
            every movable entity.
    """

    level: Level
    position: PMap[EntityID, Position]
    appearance: PMap[EntityID, Appearance]

    @classmethod
    def from_level(cls, level: Level) -> GameState:
        """Create a fresh state from the level's initial placement.

        Boxes get IDs ``1..n`` in row-major order of their initial position.
        """
        position = {PLAYER_ID: level.player}
        appearance = {
            PLAYER_ID: Appearance(kind=EntityKind.PLAYER, facing=Direction.DOWN)
        }
        for eid, (x, y) in enumerate(sorted_pairs(level.boxes), start=1):
            position[eid] = Position(x, y)
            appearance[eid] = Appearance(kind=EntityKind.BOX)
        return cls(level=level, position=pmap(position), appearance=pmap(appearance))

    # -------- Queries --------

    @property
    def player(self) -> Position:
        return self.position[PLAYER_ID]

    @property
    def box_ids(self) -> FrozenSet[EntityID]:
        return frozenset(eid for eid in self.position if eid != PLAYER_ID)

    @property
    def boxes(self) -> FrozenSet[Position]:
        """Current box positions."""
        return frozenset(
            pos for eid, pos in self.position.items() if eid != PLAYER_ID
        )

    @property
    def facing(self) -> Optional[Direction]:
        return self.appearance[PLAYER_ID].facing

    def is_in_bounds(self, pos: Position) -> bool:
        """Return True if ``pos`` lies within the level rectangle."""
        return self.level.in_bounds(pos)

    def is_wall(self, pos: Position) -> bool:
        return pos in self.level.walls

    def box_at(self, pos: Position) -> Optional[EntityID]:
        """Return the ID of the box at ``pos``, or ``None``."""
        for eid in entities_at(self.position, pos):
            if eid != PLAYER_ID:
                return eid
        return None

    def entity_kinds_at(self, pos: Position) -> FrozenSet[EntityKind]:
        """Return every kind of entity occupying ``pos``.

        Targets combine with boxes and the player, so the result may hold more
        than one kind (e.g. ``{TARGET, BOX}``).
        """
        kinds: Set[EntityKind] = set()
        if pos in self.level.walls:
            kinds.add(EntityKind.WALL)
        if pos in self.level.targets:
            kinds.add(EntityKind.TARGET)
        for eid in entities_at(self.position, pos):
            kinds.add(EntityKind.PLAYER if eid == PLAYER_ID else EntityKind.BOX)
        return frozenset(kinds)

    # -------- Mutators (game loop only) --------

    def move_player(self, to: Position) -> None:
        self.position = self.position.set(PLAYER_ID, to)

    def move_box(self, from_: Position, to: Position) -> None:
        """Move the box at ``from_`` to ``to``.

        Raises:
            KeyError: If no box occupies ``from_``.
        """
        eid = self.box_at(from_)
        if eid is None:
            raise KeyError(f"No box at {from_}")
        self.position = self.position.set(eid, to)

    def set_facing(self, direction: Direction) -> None:
        current = self.appearance[PLAYER_ID]
        self.appearance = self.appearance.set(
            PLAYER_ID, replace(current, facing=direction)
        )

    def set_in_motion(self, eids: Iterable[EntityID], in_motion: bool) -> None:
        appearance = self.appearance
        for eid in eids:
            appearance = appearance.set(
                eid, replace(appearance[eid], in_motion=in_motion)
            )
        self.appearance = appearance
