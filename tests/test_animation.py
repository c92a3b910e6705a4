import asyncio
from typing import List, Tuple

import pytest

from boxman.animation import (
    InstantAnimator,
    RecordingAnimator,
    TimedAnimator,
    animate_all,
)
from boxman.components import Position
from boxman.types import EntityID


@pytest.mark.asyncio
async def test_timed_animator_emits_interpolated_frames() -> None:
    frames: List[Tuple[EntityID, float, float]] = []
    animator = TimedAnimator(
        duration=0.04, fps=100, on_frame=lambda *frame: frames.append(frame)
    )
    await animator.animate(3, Position(1, 2), Position(2, 2))

    assert len(frames) == 4
    assert all(eid == 3 for eid, _, _ in frames)
    xs = [x for _, x, _ in frames]
    assert xs == sorted(xs)
    assert xs[0] == pytest.approx(1.25)
    assert frames[-1] == (3, 2.0, 2.0)


@pytest.mark.asyncio
async def test_zero_duration_emits_final_frame_only() -> None:
    frames: List[Tuple[EntityID, float, float]] = []
    animator = TimedAnimator(duration=0, on_frame=lambda *frame: frames.append(frame))
    await animator.animate(0, Position(0, 0), Position(0, 1))
    assert frames == [(0, 0.0, 1.0)]


@pytest.mark.asyncio
async def test_timed_animator_without_frames_just_waits() -> None:
    loop = asyncio.get_running_loop()
    start = loop.time()
    await TimedAnimator(duration=0.02).animate(0, Position(0, 0), Position(1, 0))
    assert loop.time() - start >= 0.015


@pytest.mark.asyncio
async def test_animate_all_runs_requests_concurrently() -> None:
    loop = asyncio.get_running_loop()
    recorder = RecordingAnimator(TimedAnimator(duration=0.05))
    requests = [
        (0, Position(0, 0), Position(1, 0)),
        (1, Position(1, 0), Position(2, 0)),
    ]
    start = loop.time()
    await animate_all(recorder, requests)
    elapsed = loop.time() - start

    assert recorder.requests == requests
    assert sorted(recorder.completed) == sorted(requests)
    assert elapsed < 0.095


@pytest.mark.asyncio
async def test_animate_all_with_no_requests() -> None:
    recorder = RecordingAnimator()
    await animate_all(recorder, [])
    assert recorder.requests == []


@pytest.mark.asyncio
async def test_instant_animator_completes() -> None:
    assert await InstantAnimator().animate(0, Position(0, 0), Position(0, 1)) is None
