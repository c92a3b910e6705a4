"""Game session: the control surface a host talks to.

``Game`` owns the level collection, the command source and the current
``GameLoop``/``GameState`` pair. A host drives it through:

* ``move(direction)``: offer a directional command to the running loop.
* ``load_level(index)``: switch level; the index goes through the wraparound
  policy first.
* ``reset()``: reload the current level.
* ``current_level_index``.
* ``run()``: play forever, advancing to the next level after each win.

Two callbacks report back to the host: ``on_level_loaded(index)`` once per load,
before the first command is awaited, and ``on_level_complete(index)`` once per
win, awaited before the next level is loaded.
"""

from __future__ import annotations

import asyncio
import inspect
import logging
from typing import Callable, Optional

from boxman.animation import Animator, InstantAnimator, TimedAnimator
from boxman.commands import QueueCommandSource, RawKey
from boxman.config import BoxmanSettings
from boxman.levels.collection import LevelCollection, LevelIndexLike
from boxman.loop import GameLoop
from boxman.progress import ProgressStore
from boxman.state import GameState
from boxman.types import LevelCallback

logger = logging.getLogger(__name__)

LoadedCallback = Callable[[int], None]


class Game:
    """Level switching, progress and lifecycle around ``GameLoop``.

    Args:
        levels (LevelCollection): Levels to play.
        commands (QueueCommandSource | None): Command source shared by every
            loop this game creates.
        animator (Animator | None): Passed to each loop.
        on_level_loaded (LoadedCallback | None): Host notification on load.
        on_level_complete (LevelCallback | None): Host notification on win;
            may be async.
        progress (ProgressStore | None): Where completions are recorded.
        session (str): Progress key.
        completion_pause (float): Seconds to wait after a win before the next
            level loads.
    """

    def __init__(
        self,
        levels: LevelCollection,
        commands: Optional[QueueCommandSource] = None,
        animator: Optional[Animator] = None,
        on_level_loaded: Optional[LoadedCallback] = None,
        on_level_complete: Optional[LevelCallback] = None,
        progress: Optional[ProgressStore] = None,
        session: str = "default",
        completion_pause: float = 0.0,
    ):
        self.levels = levels
        self.commands = commands or QueueCommandSource()
        self.animator: Animator = animator or InstantAnimator()
        self.on_level_loaded = on_level_loaded
        self.on_level_complete = on_level_complete
        self.progress = progress
        self.session = session
        self.completion_pause = completion_pause
        self.loop: Optional[GameLoop] = None
        self._task: Optional[asyncio.Task[None]] = None

    @classmethod
    def from_settings(
        cls, settings: BoxmanSettings, **kwargs: object
    ) -> Game:
        """Build a game from configuration; ``kwargs`` override constructor args."""
        levels = (
            LevelCollection.from_file(settings.levels_path)
            if settings.levels_path
            else LevelCollection.builtin()
        )
        options: dict[str, object] = {
            "animator": TimedAnimator(settings.animation_duration),
            "progress": ProgressStore(settings.progress_path),
            "session": settings.session,
            "completion_pause": settings.completion_pause,
        }
        options.update(kwargs)
        return cls(levels, **options)  # type: ignore[arg-type]

    # -------- Control surface --------

    @property
    def state(self) -> Optional[GameState]:
        return self.loop.state if self.loop is not None else None

    @property
    def current_level_index(self) -> int:
        if self.loop is None:
            raise RuntimeError("No level loaded")
        return self.loop.level_index

    def start_index(self) -> int:
        """Level to begin with: the saved progress, or 1."""
        if self.progress is None:
            return 1
        return self.levels.normalize_index(self.progress.read(self.session))

    def load_level(self, index: LevelIndexLike) -> int:
        """Replace the current level with level ``index`` (after wraparound).

        Any turn still in progress on the previous level is abandoned.

        Returns:
            int: The level index actually loaded.
        """
        level_index = self.levels.normalize_index(index)
        level = self.levels.load_level(level_index)
        self._teardown()
        self.loop = GameLoop(
            GameState.from_level(level),
            self.commands,
            animator=self.animator,
            level_index=level_index,
            on_level_complete=self._complete,
        )
        logger.info("Loaded level %d (%s)", level_index, level.name or "unnamed")
        if self.on_level_loaded is not None:
            self.on_level_loaded(level_index)
        return level_index

    def reset(self) -> int:
        return self.load_level(self.current_level_index)

    def next_level(self) -> int:
        return self.load_level(self.current_level_index + 1)

    def previous_level(self) -> int:
        return self.load_level(self.current_level_index - 1)

    def move(self, key: RawKey) -> bool:
        """Offer a command to the loop started by ``run()``.

        Returns False if the key was dropped: no loop is listening (``run()``
        is not active, or a freshly loaded level has not started yet) or a turn
        is in flight. Hosts without ``run()`` can drive ``loop.step`` directly.
        """
        return self.commands.push(key)

    async def run(self) -> None:
        """Play until cancelled, loading the next level after every win."""
        if self.loop is None:
            self.load_level(self.start_index())
        try:
            while True:
                loop = self.loop
                assert loop is not None
                self._task = asyncio.ensure_future(loop.run())
                await asyncio.wait({self._task})
                if self._task.cancelled():
                    # Torn down by load_level(); a fresh loop is already in place.
                    continue
                self._task.result()
                if self.loop is loop:
                    self.load_level(loop.level_index + 1)
        finally:
            self._teardown()

    # -------- Internals --------

    def _teardown(self) -> None:
        if self._task is not None and not self._task.done():
            self._task.cancel()
            # input is refused until the next loop attaches
            self.commands.detach()

    async def _complete(self, level_index: int) -> None:
        if self.progress is not None:
            self.progress.write(self.session, level_index + 1)
        if self.on_level_complete is not None:
            result = self.on_level_complete(level_index)
            if inspect.isawaitable(result):
                await result
        if self.completion_pause > 0:
            await asyncio.sleep(self.completion_pause)
