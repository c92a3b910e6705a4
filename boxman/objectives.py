"""
Win detection.

A level is won when every box rests on a target. Both functions are pure and
may be called any number of times.
"""

from boxman.state import GameState


def is_win(state: GameState) -> bool:
    """Every box position is a target position."""
    return state.boxes.issubset(state.level.targets)


def boxes_on_target(state: GameState) -> int:
    """Number of boxes currently resting on a target."""
    return len(state.boxes.intersection(state.level.targets))
