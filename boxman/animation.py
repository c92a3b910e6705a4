"""Animation coordination.

The game loop does not draw anything itself. For every entity an accepted move
displaces, it asks an ``Animator`` to carry out the visual transition and waits
for it to report completion. A push moves two entities; both requests are
issued together and ``animate_all`` only returns once *both* have finished, so
no new command is resolved while any part of the previous move is still on
screen.

Animators shipped here:

* ``InstantAnimator``: completes immediately (headless play, tests).
* ``TimedAnimator``: completes after a fixed duration, optionally emitting
  linearly interpolated frames to a callback.
* ``RecordingAnimator``: wraps another animator and records every request.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Callable, List, Optional, Protocol, Sequence, Tuple

from boxman.components import Position
from boxman.types import EntityID

logger = logging.getLogger(__name__)

DEFAULT_DURATION = 0.2
DEFAULT_FPS = 60

FrameFn = Callable[[EntityID, float, float], None]
AnimationRequest = Tuple[EntityID, Position, Position]


class Animator(Protocol):
    """Capability performing one entity's visual transition.

    ``animate`` must complete exactly once per call.
    """

    async def animate(self, eid: EntityID, from_: Position, to: Position) -> None: ...


class InstantAnimator:
    async def animate(self, eid: EntityID, from_: Position, to: Position) -> None:
        return None


class TimedAnimator:
    """Fixed-duration transition.

    Attributes:
        duration (float): Seconds each transition takes.
        fps (int): Frame rate used when ``on_frame`` is set.
        on_frame (FrameFn | None): Receives ``(eid, x, y)`` with fractional
            grid coordinates for each intermediate frame; the final frame is
            always exactly ``to``.
    """

    def __init__(
        self,
        duration: float = DEFAULT_DURATION,
        fps: int = DEFAULT_FPS,
        on_frame: Optional[FrameFn] = None,
    ):
        self.duration = duration
        self.fps = fps
        self.on_frame = on_frame

    async def animate(self, eid: EntityID, from_: Position, to: Position) -> None:
        if self.on_frame is None or self.duration <= 0:
            await asyncio.sleep(self.duration)
            if self.on_frame is not None:
                self.on_frame(eid, float(to.x), float(to.y))
            return

        frames = max(1, round(self.duration * self.fps))
        for i in range(1, frames + 1):
            await asyncio.sleep(self.duration / frames)
            p = i / frames
            self.on_frame(
                eid,
                (1 - p) * from_.x + p * to.x,
                (1 - p) * from_.y + p * to.y,
            )


class RecordingAnimator:
    """Delegate to ``inner`` while keeping a log of requests."""

    def __init__(self, inner: Optional[Animator] = None):
        self.inner: Animator = inner or InstantAnimator()
        self.requests: List[AnimationRequest] = []
        self.completed: List[AnimationRequest] = []

    async def animate(self, eid: EntityID, from_: Position, to: Position) -> None:
        request = (eid, from_, to)
        self.requests.append(request)
        await self.inner.animate(eid, from_, to)
        self.completed.append(request)


async def animate_all(
    animator: Animator, requests: Sequence[AnimationRequest]
) -> None:
    """Run all ``requests`` concurrently and wait for every one to finish."""
    if not requests:
        return
    logger.debug("Animating %d entities", len(requests))
    await asyncio.gather(
        *(animator.animate(eid, from_, to) for eid, from_, to in requests)
    )
