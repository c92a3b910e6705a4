"""Command sources.

A command source hands the game loop one command at a time. Commands are
either a ``Direction`` or ``None`` (any non-directional input, which the loop
treats as a no-op).

The loop owns the subscription: it ``attach``es when it starts waiting for
input and ``detach``es when it finishes or is torn down. While a move is being
resolved and animated the loop holds the source ``busy``; input received in
that window is dropped rather than queued, so a new move never starts from a
half-finished one.
"""

from __future__ import annotations

import asyncio
import logging
from contextlib import contextmanager
from typing import ContextManager, Iterator, Optional, Protocol, Union

from boxman.directions import Direction, decode_key

logger = logging.getLogger(__name__)

RawKey = Union[str, int, Direction, None]


class CommandSource(Protocol):
    def attach(self) -> None: ...

    def detach(self) -> None: ...

    def busy(self) -> ContextManager[None]: ...

    async def next_command(self) -> Optional[Direction]: ...


class QueueCommandSource:
    """Command source fed by ``push``.

    Raw keys (browser key codes, key names, ``Direction`` members) are decoded
    on arrival; anything else becomes a ``None`` command.
    """

    def __init__(self) -> None:
        self._queue: asyncio.Queue[Optional[Direction]] = asyncio.Queue()
        self._attached = False
        self._busy = False
        self.dropped = 0

    @property
    def attached(self) -> bool:
        return self._attached

    def attach(self) -> None:
        self._attached = True

    def detach(self) -> None:
        self._attached = False
        self._busy = False
        self._clear()

    @contextmanager
    def busy(self) -> Iterator[None]:
        self._busy = True
        try:
            yield
        finally:
            self._busy = False

    def push(self, key: RawKey) -> bool:
        """Offer a key to the game. Returns False if the key was dropped."""
        if not self._attached or self._busy:
            self.dropped += 1
            logger.debug("Dropped command %r (attached=%s)", key, self._attached)
            return False
        self._queue.put_nowait(decode_key(key))
        return True

    async def next_command(self) -> Optional[Direction]:
        return await self._queue.get()

    def pending(self) -> int:
        return self._queue.qsize()

    def _clear(self) -> None:
        while not self._queue.empty():
            self._queue.get_nowait()
