"""
cli.py - Play Boxman in a terminal.

Usage:
    python -m boxman                    # Resume from saved progress
    python -m boxman --level 3          # Start at level 3
    python -m boxman --levels pack.txt  # Play a custom XSB or JSON level pack

Controls (type a line, then Enter):
    w / up      a / left      s / down      d / right
    Several moves at once: "ddwa" or "right right up"
    r = Reset level    n = Next level    p = Previous level
    <number> = Jump to level    q = Quit
    save <file> = Write the board as a PNG image
"""

from __future__ import annotations

import argparse
import asyncio
import logging
from typing import List, Optional, Sequence

from boxman.config import BoxmanSettings
from boxman.directions import KEY_TO_DIRECTION
from boxman.loop import LoopPhase
from boxman.objectives import boxes_on_target
from boxman.renderer.image import ImageRenderer
from boxman.renderer.text import render_text
from boxman.session import Game

logger = logging.getLogger(__name__)

SINGLE_KEYS = frozenset(k for k in KEY_TO_DIRECTION if isinstance(k, str) and len(k) == 1)
IDLE_PHASES = (LoopPhase.AWAITING_COMMAND, LoopPhase.COMPLETED)


def split_moves(line: str) -> Optional[List[str]]:
    """Split a line of movement input into keys; ``None`` if it is not one."""
    keys: List[str] = []
    for token in line.lower().split():
        if token in KEY_TO_DIRECTION:
            keys.append(token)
        elif set(token) <= SINGLE_KEYS:
            keys.extend(token)
        else:
            return None
    return keys


def print_board(game: Game) -> None:
    state = game.state
    if state is None:
        return
    print()
    print(render_text(state))
    print(
        f"Level {game.current_level_index}/{game.levels.count}"
        f"  boxes placed: {boxes_on_target(state)}/{len(state.boxes)}"
    )


async def wait_idle(game: Game) -> None:
    """Wait until every queued command has been played out."""
    while True:
        loop = game.loop
        if loop is not None and not game.commands.pending() and loop.phase in IDLE_PHASES:
            return
        await asyncio.sleep(0.01)


async def wait_listening(game: Game) -> None:
    """Wait until a loop is attached to the command source."""
    while not game.commands.attached:
        await asyncio.sleep(0.01)


async def handle_line(
    game: Game, line: str, renderer: Optional[ImageRenderer] = None
) -> bool:
    """Apply one line of input. Returns False when the player quits."""
    command = line.strip().lower()
    if command in ("q", "quit", "exit"):
        return False
    if command.startswith("save ") and game.state is not None:
        path = line.strip()[len("save "):].strip()
        (renderer or ImageRenderer()).render(game.state).save(path)
        print(f"Saved board to {path}")
        return True
    if command in ("r", "reset"):
        game.reset()
    elif command in ("n", "next"):
        game.next_level()
    elif command in ("p", "prev", "previous"):
        game.previous_level()
    elif command.lstrip("-").isdigit():
        game.load_level(int(command))
    else:
        keys = split_moves(command)
        if keys is None:
            print(f"Unknown command: {line.strip()!r}")
            return True
        if keys:
            await wait_listening(game)
        for key in keys:
            game.move(key)
    # let the session start the freshly loaded loop before we poll it
    await asyncio.sleep(0)
    await wait_idle(game)
    print_board(game)
    return True


async def play(settings: BoxmanSettings, level: Optional[int] = None) -> None:
    def on_loaded(index: int) -> None:
        print(f"\n=== Level {index} ===")

    def on_complete(index: int) -> None:
        print(f"\nLevel {index} complete!")

    game = Game.from_settings(
        settings, on_level_loaded=on_loaded, on_level_complete=on_complete
    )
    game.load_level(level if level is not None else game.start_index())
    renderer = ImageRenderer.from_settings(settings)
    runner = asyncio.ensure_future(game.run())
    try:
        await asyncio.sleep(0)
        print_board(game)
        while True:
            try:
                line = await asyncio.to_thread(input, "> ")
            except EOFError:
                break
            if not await handle_line(game, line, renderer):
                break
    finally:
        runner.cancel()
        await asyncio.gather(runner, return_exceptions=True)


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Terminal box-pushing puzzle.")
    parser.add_argument("--level", type=int, default=None, help="Level to start at")
    parser.add_argument("--levels", default=None, help="Level pack (JSON or XSB)")
    parser.add_argument("--session", default=None, help="Progress key")
    parser.add_argument("--progress", default=None, help="Progress file")
    args = parser.parse_args(argv)

    overrides = {
        "levels_path": args.levels,
        "session": args.session,
        "progress_path": args.progress,
    }
    settings = BoxmanSettings(**{k: v for k, v in overrides.items() if v is not None})
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    logger.debug("Settings: %s", settings)

    try:
        asyncio.run(play(settings, args.level))
    except KeyboardInterrupt:
        pass
    return 0
