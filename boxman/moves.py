"""Movement resolution.

``resolve`` decides what a single directional command does to a ``GameState``
without touching it. The result is one of three outcomes:

* ``Blocked``: nothing moves (the player may still turn to face the direction).
* ``PlayerMoved``: the player steps into an empty cell.
* ``PlayerPushedBox``: the player steps into a box's cell and the box moves one
  cell further in the same direction.

Only a single box can be pushed; a box backed by another box, a wall or the
grid edge does not move. Targets never obstruct anything.

``apply_outcome`` commits an accepted outcome to the state and is only called
by the game loop.
"""

from dataclasses import dataclass
from typing import List, Tuple, Union

from boxman.components import Position
from boxman.directions import Direction
from boxman.state import GameState
from boxman.types import PLAYER_ID, EntityID

EntityMove = Tuple[EntityID, Position, Position]


@dataclass(frozen=True)
class Blocked:
    direction: Direction

    @property
    def moves(self) -> List[EntityMove]:
        return []


@dataclass(frozen=True)
class PlayerMoved:
    direction: Direction
    from_: Position
    to: Position

    @property
    def moves(self) -> List[EntityMove]:
        return [(PLAYER_ID, self.from_, self.to)]


@dataclass(frozen=True)
class PlayerPushedBox:
    """
    Attributes:
        direction: Commanded direction.
        player_from: Player position before the move.
        player_to: Player position after the move (the box's old cell).
        box_from: Box position before the move.
        box_to: Box position after the move.
        box_id: Entity ID of the pushed box.
    """

    direction: Direction
    player_from: Position
    player_to: Position
    box_from: Position
    box_to: Position
    box_id: EntityID

    @property
    def moves(self) -> List[EntityMove]:
        return [
            (PLAYER_ID, self.player_from, self.player_to),
            (self.box_id, self.box_from, self.box_to),
        ]


MoveOutcome = Union[Blocked, PlayerMoved, PlayerPushedBox]


def is_free(state: GameState, pos: Position) -> bool:
    """True if a box could be placed at ``pos``: in bounds, no wall, no box."""
    return (
        state.is_in_bounds(pos)
        and not state.is_wall(pos)
        and state.box_at(pos) is None
    )


def resolve(state: GameState, direction: Direction) -> MoveOutcome:
    """Decide the outcome of moving the player one cell in ``direction``.

    Pure: the same state and direction always give the same outcome and the
    state is never modified.

    Args:
        state (GameState): Current game state.
        direction (Direction): Commanded direction.
    Returns:
        MoveOutcome: ``Blocked``, ``PlayerMoved`` or ``PlayerPushedBox``.
    """
    dx, dy = direction.delta
    player = state.player
    next_pos = player.offset(dx, dy)

    if not state.is_in_bounds(next_pos) or state.is_wall(next_pos):
        return Blocked(direction)

    box_id = state.box_at(next_pos)
    if box_id is None:
        return PlayerMoved(direction, player, next_pos)

    beyond = next_pos.offset(dx, dy)
    if not is_free(state, beyond):
        return Blocked(direction)

    return PlayerPushedBox(
        direction=direction,
        player_from=player,
        player_to=next_pos,
        box_from=next_pos,
        box_to=beyond,
        box_id=box_id,
    )


def apply_outcome(state: GameState, outcome: MoveOutcome) -> None:
    """Commit an outcome's positions to ``state``.

    The box is moved before the player so the player never shares a cell with
    the box it pushes.
    """
    if isinstance(outcome, PlayerPushedBox):
        state.move_box(outcome.box_from, outcome.box_to)
        state.move_player(outcome.player_to)
    elif isinstance(outcome, PlayerMoved):
        state.move_player(outcome.to)
