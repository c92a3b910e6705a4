from typing import Dict

from boxman.components import Position
from boxman.directions import Direction
from boxman.moves import Blocked, PlayerPushedBox, apply_outcome, resolve
from boxman.state import GameState
from boxman.types import EntityID
from test_utils import make_state, snapshot


def check_positions(state: GameState, expected: Dict[EntityID, Position]) -> None:
    for eid, pos in expected.items():
        assert state.position[eid] == pos


def push(state: GameState, direction: Direction) -> GameState:
    apply_outcome(state, resolve(state, direction))
    return state


def test_agent_pushes_box_successfully() -> None:
    state = make_state(player=(0, 0), boxes=[(1, 0)])
    outcome = resolve(state, Direction.RIGHT)
    assert outcome == PlayerPushedBox(
        direction=Direction.RIGHT,
        player_from=Position(0, 0),
        player_to=Position(1, 0),
        box_from=Position(1, 0),
        box_to=Position(2, 0),
        box_id=1,
    )
    push(state, Direction.RIGHT)
    check_positions(state, {0: Position(1, 0), 1: Position(2, 0)})


def test_push_blocked_by_wall() -> None:
    state = make_state(player=(0, 0), boxes=[(1, 0)], walls=[(2, 0)])
    before = snapshot(state)
    assert resolve(state, Direction.RIGHT) == Blocked(Direction.RIGHT)
    push(state, Direction.RIGHT)
    assert snapshot(state) == before


def test_push_blocked_by_another_box() -> None:
    state = make_state(player=(0, 0), boxes=[(1, 0), (2, 0)])
    assert isinstance(resolve(state, Direction.RIGHT), Blocked)
    push(state, Direction.RIGHT)
    check_positions(state, {0: Position(0, 0), 1: Position(1, 0), 2: Position(2, 0)})


def test_push_box_out_of_bounds() -> None:
    state = make_state(player=(3, 0), boxes=[(4, 0)], width=5, height=1)
    assert isinstance(resolve(state, Direction.RIGHT), Blocked)
    push(state, Direction.RIGHT)
    check_positions(state, {0: Position(3, 0), 1: Position(4, 0)})


def test_push_box_out_of_bounds_at_top_edge() -> None:
    state = make_state(player=(2, 2), boxes=[(2, 1)])
    push(state, Direction.UP)
    check_positions(state, {0: Position(2, 1), 1: Position(2, 0)})
    assert isinstance(resolve(state, Direction.UP), Blocked)


def test_push_box_onto_target() -> None:
    state = make_state(player=(0, 0), boxes=[(1, 0)], targets=[(2, 0)])
    outcome = resolve(state, Direction.RIGHT)
    assert isinstance(outcome, PlayerPushedBox)
    assert outcome.box_to == Position(2, 0)


def test_push_box_off_target() -> None:
    state = make_state(player=(0, 0), boxes=[(1, 0)], targets=[(1, 0)])
    push(state, Direction.RIGHT)
    check_positions(state, {0: Position(1, 0), 1: Position(2, 0)})


def test_push_in_every_direction() -> None:
    cases = {
        Direction.UP: ((2, 1), (2, 0)),
        Direction.DOWN: ((2, 3), (2, 4)),
        Direction.LEFT: ((1, 2), (0, 2)),
        Direction.RIGHT: ((3, 2), (4, 2)),
    }
    for direction, (box, beyond) in cases.items():
        state = make_state(player=(2, 2), boxes=[box])
        outcome = resolve(state, direction)
        assert isinstance(outcome, PlayerPushedBox)
        assert outcome.player_to == Position(*box)
        assert outcome.box_from == Position(*box)
        assert outcome.box_to == Position(*beyond)


def test_pushed_box_keeps_its_id() -> None:
    state = make_state(player=(0, 1), boxes=[(1, 1), (3, 3)])
    box_id = state.box_at(Position(1, 1))
    push(state, Direction.RIGHT)
    assert state.box_at(Position(2, 1)) == box_id
    assert state.box_at(Position(3, 3)) is not None


def test_push_moves_only_one_box() -> None:
    state = make_state(player=(0, 0), boxes=[(1, 0), (3, 0)], width=6, height=1)
    push(state, Direction.RIGHT)
    assert state.boxes == frozenset({Position(2, 0), Position(3, 0)})
    assert isinstance(resolve(state, Direction.RIGHT), Blocked)
