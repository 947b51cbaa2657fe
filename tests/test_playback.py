"""Tests for the playback loop."""

from __future__ import annotations

import asyncio
import random
from collections.abc import Callable

import pytest

from pixelsmith.models import AnimationState
from pixelsmith.playback import AsyncioScheduler, PlaybackLoop
from pixelsmith.session import EditorSession


class FakeScheduler:
    """Records requested callbacks instead of running them."""

    def __init__(self) -> None:
        self.pending: dict[int, Callable[[], None]] = {}
        self.cancelled: list[int] = []
        self._next = 0

    def request(self, callback: Callable[[], None]) -> int:
        self._next += 1
        self.pending[self._next] = callback
        return self._next

    def cancel(self, handle: int) -> None:
        self.cancelled.append(handle)
        self.pending.pop(handle, None)


@pytest.fixture
def session(sprite_config) -> EditorSession:
    s = EditorSession(sprite_config, rng=random.Random(3))
    s.generate()
    return s


@pytest.fixture
def scheduler() -> FakeScheduler:
    return FakeScheduler()


@pytest.fixture
def loop(session, scheduler) -> PlaybackLoop:
    return PlaybackLoop(session, scheduler, clock=lambda: 0.0)


def test_start_arms_scheduler(loop, scheduler):
    loop.start()
    assert loop.playing
    assert len(scheduler.pending) == 1
    loop.start()
    assert len(scheduler.pending) == 1


def test_tick_waits_for_frame_delay(loop, session):
    loop.start()
    assert loop.tick(50) is False
    assert session.current_frame_id == "idle-0"
    assert loop.tick(100) is True
    assert session.current_frame_id == "idle-1"
    # Measured from the last advance, not from start.
    assert loop.tick(150) is False
    assert loop.tick(200) is True
    assert session.current_frame_id == "idle-2"


def test_one_frame_per_tick_even_when_late(loop, session):
    loop.start()
    assert loop.tick(10_000) is True
    assert session.current_frame_id == "idle-1"


def test_playback_wraps_within_state(loop, session):
    loop.start()
    for now in (100, 200, 300):
        loop.tick(now)
    assert session.current_frame_id == "idle-0"


def test_tick_rearms(loop, scheduler):
    loop.start()
    loop.tick(10)
    loop.tick(120)
    assert len(scheduler.pending) == 3


def test_uses_current_state_delay(loop, session):
    session.select_state(AnimationState.ATTACK)
    loop.start()
    assert loop.tick(59) is False
    assert loop.tick(60) is True


def test_stop_is_idempotent(loop, scheduler):
    loop.start()
    loop.stop()
    loop.stop()
    assert not loop.playing
    assert len(scheduler.cancelled) == 1


def test_tick_after_stop_does_nothing(loop, scheduler, session):
    loop.start()
    loop.stop()
    assert loop.tick(1_000) is False
    assert session.current_frame_id == "idle-0"
    assert len(scheduler.pending) == 0


def test_toggle(loop):
    assert loop.toggle() is True
    assert loop.toggle() is False
    assert loop.toggle() is True


def test_on_frame_callback(session, scheduler):
    seen: list[str] = []
    playback = PlaybackLoop(session, scheduler, clock=lambda: 0.0, on_frame=seen.append)
    playback.start()
    playback.tick(100)
    assert seen == ["idle-1"]


@pytest.mark.asyncio
async def test_asyncio_scheduler_runs_and_cancels():
    scheduler = AsyncioScheduler(interval=0.001)
    calls: list[str] = []
    scheduler.request(lambda: calls.append("ran"))
    handle = scheduler.request(lambda: calls.append("cancelled"))
    scheduler.cancel(handle)
    await asyncio.sleep(0.05)
    assert calls == ["ran"]


@pytest.mark.asyncio
async def test_playback_on_event_loop(session):
    clock = {"now": 0.0}
    playback = PlaybackLoop(
        session,
        AsyncioScheduler(interval=0.001),
        clock=lambda: clock["now"],
    )
    playback.start()
    clock["now"] = 100.0
    await asyncio.sleep(0.05)
    playback.stop()
    assert session.current_frame_id == "idle-1"
