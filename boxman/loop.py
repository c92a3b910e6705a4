"""Turn sequencing for one level instance.

``GameLoop`` drives a single ``GameState`` through its turns::

    AWAITING_COMMAND -> RESOLVING -> BLOCKED -> AWAITING_COMMAND
                                  -> ANIMATING -> APPLYING -> CHECKING_WIN
                                       -> AWAITING_COMMAND | COMPLETED

Each turn waits for one command, resolves it, animates the displaced entities
(two of them for a push, concurrently, joined before going on), commits the new
positions and checks for a win. ``COMPLETED`` is terminal: loading another
level, or reloading this one, builds a new loop around a new state.

The loop is the only writer of its ``GameState``.
"""

from __future__ import annotations

import inspect
import logging
from enum import StrEnum, auto
from typing import Callable, List, Optional

from boxman.animation import Animator, InstantAnimator, animate_all
from boxman.commands import CommandSource
from boxman.directions import Direction
from boxman.moves import Blocked, MoveOutcome, apply_outcome, resolve
from boxman.objectives import is_win
from boxman.state import GameState
from boxman.types import LevelCallback, WinFn

logger = logging.getLogger(__name__)

ResolveFn = Callable[[GameState, Direction], MoveOutcome]


class LoopPhase(StrEnum):
    """Phases of the turn state machine."""

    AWAITING_COMMAND = auto()
    RESOLVING = auto()
    BLOCKED = auto()
    ANIMATING = auto()
    APPLYING = auto()
    CHECKING_WIN = auto()
    COMPLETED = auto()


class GameLoop:
    """Turn-by-turn driver for one level.

    Args:
        state (GameState): Freshly loaded state; the loop takes ownership.
        commands (CommandSource): Where ``run`` reads commands from.
        animator (Animator | None): Visual transition capability; defaults to
            ``InstantAnimator``.
        level_index (int): Index reported to ``on_level_complete``.
        on_level_complete (LevelCallback | None): Called (and awaited if it
            returns an awaitable) once, when the level is won.
        resolve_fn (ResolveFn): Movement resolver.
        win_fn (WinFn): Win predicate.
    """

    def __init__(
        self,
        state: GameState,
        commands: CommandSource,
        animator: Optional[Animator] = None,
        level_index: int = 1,
        on_level_complete: Optional[LevelCallback] = None,
        resolve_fn: ResolveFn = resolve,
        win_fn: WinFn = is_win,
    ):
        self.state = state
        self.level_index = level_index
        self._commands = commands
        self._animator: Animator = animator or InstantAnimator()
        self._on_level_complete = on_level_complete
        self._resolve_fn = resolve_fn
        self._win_fn = win_fn
        self._in_flight = False
        self.phase = LoopPhase.AWAITING_COMMAND
        self.phase_log: List[LoopPhase] = [self.phase]
        self.turns = 0

    @property
    def completed(self) -> bool:
        return self.phase is LoopPhase.COMPLETED

    def _enter(self, phase: LoopPhase) -> None:
        self.phase = phase
        self.phase_log.append(phase)

    async def run(self) -> None:
        """Process commands until the level is completed.

        Non-directional commands are skipped without reaching the resolver.
        """
        self._commands.attach()
        try:
            while not self.completed:
                if self.phase is not LoopPhase.AWAITING_COMMAND:
                    self._enter(LoopPhase.AWAITING_COMMAND)
                direction = await self._commands.next_command()
                if direction is None:
                    logger.debug("Level %d: ignoring no-op command", self.level_index)
                    continue
                await self.step(direction)
        finally:
            self._commands.detach()

    async def step(self, direction: Direction) -> Optional[MoveOutcome]:
        """Run one full turn for ``direction``.

        Returns:
            MoveOutcome | None: The resolved outcome, or ``None`` if the level
            is already completed or another turn is still in flight.
        """
        if self._in_flight or self.completed:
            logger.debug(
                "Level %d: rejecting %s (in_flight=%s, phase=%s)",
                self.level_index,
                direction,
                self._in_flight,
                self.phase,
            )
            return None

        self._in_flight = True
        try:
            with self._commands.busy():
                return await self._turn(direction)
        finally:
            self._in_flight = False

    async def _turn(self, direction: Direction) -> MoveOutcome:
        self._enter(LoopPhase.RESOLVING)
        outcome = self._resolve_fn(self.state, direction)
        self.turns += 1

        if isinstance(outcome, Blocked):
            self._enter(LoopPhase.BLOCKED)
            self.state.set_facing(direction)
            logger.debug("Level %d: %s blocked", self.level_index, direction)
            self._enter(LoopPhase.AWAITING_COMMAND)
            return outcome

        self._enter(LoopPhase.ANIMATING)
        moving = [eid for eid, _, _ in outcome.moves]
        self.state.set_facing(direction)
        self.state.set_in_motion(moving, True)
        await animate_all(self._animator, outcome.moves)

        self._enter(LoopPhase.APPLYING)
        apply_outcome(self.state, outcome)
        self.state.set_in_motion(moving, False)
        logger.debug("Level %d: %s", self.level_index, outcome)

        self._enter(LoopPhase.CHECKING_WIN)
        if not self._win_fn(self.state):
            self._enter(LoopPhase.AWAITING_COMMAND)
            return outcome

        self._enter(LoopPhase.COMPLETED)
        logger.info("Level %d completed in %d turns", self.level_index, self.turns)
        if self._on_level_complete is not None:
            result = self._on_level_complete(self.level_index)
            if inspect.isawaitable(result):
                await result
        return outcome
