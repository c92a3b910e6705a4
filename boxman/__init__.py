"""Grid box-pushing puzzle engine.

The pieces, from the bottom up:

* ``boxman.levels``: immutable ``Level`` definitions, parsers and collections.
* ``boxman.state.GameState``: current player and box positions for a level.
* ``boxman.moves.resolve``: what a directional command does.
* ``boxman.objectives.is_win``: whether every box is on a target.
* ``boxman.loop.GameLoop``: the per-level turn state machine.
* ``boxman.session.Game``: level switching, progress and the host-facing API.
"""

from boxman.directions import Direction
from boxman.levels import Level, LevelCollection, LevelError
from boxman.loop import GameLoop, LoopPhase
from boxman.moves import Blocked, MoveOutcome, PlayerMoved, PlayerPushedBox, resolve
from boxman.objectives import is_win
from boxman.session import Game
from boxman.state import GameState
from boxman.types import EntityKind

__all__ = [
    "Blocked",
    "Direction",
    "EntityKind",
    "Game",
    "GameLoop",
    "GameState",
    "Level",
    "LevelCollection",
    "LevelError",
    "LoopPhase",
    "MoveOutcome",
    "PlayerMoved",
    "PlayerPushedBox",
    "is_win",
    "resolve",
]
