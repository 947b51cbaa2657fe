"""Cooperative frame playback driven by an external scheduler."""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Callable
from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from pixelsmith.session import EditorSession

logger = logging.getLogger(__name__)

TICK_INTERVAL = 1 / 60


class Scheduler(Protocol):
    """Calls back once at some point in the future; the request can be cancelled."""

    def request(self, callback: Callable[[], None]) -> Any: ...

    def cancel(self, handle: Any) -> None: ...


class AsyncioScheduler:
    """Schedules callbacks on an asyncio event loop at roughly 60 Hz."""

    def __init__(
        self,
        loop: asyncio.AbstractEventLoop | None = None,
        interval: float = TICK_INTERVAL,
    ) -> None:
        self.loop = loop or asyncio.get_running_loop()
        self.interval = interval

    def request(self, callback: Callable[[], None]) -> asyncio.TimerHandle:
        return self.loop.call_later(self.interval, callback)

    def cancel(self, handle: asyncio.TimerHandle) -> None:
        handle.cancel()


def monotonic_ms() -> float:
    return time.monotonic() * 1000


class PlaybackLoop:
    """Advances the session's current frame at its state's frame delay.

    Each scheduled tick advances at most one frame, and only once the
    configured delay has elapsed since the last advance.
    """

    def __init__(
        self,
        session: EditorSession,
        scheduler: Scheduler,
        clock: Callable[[], float] = monotonic_ms,
        on_frame: Callable[[str], None] | None = None,
    ) -> None:
        self.session = session
        self.scheduler = scheduler
        self.clock = clock
        self.on_frame = on_frame
        self.playing = False
        self._handle: Any = None
        self._last_advance = 0.0

    def start(self) -> None:
        if self.playing:
            return
        self.playing = True
        self._last_advance = self.clock()
        self._arm()
        logger.debug("Playback started")

    def stop(self) -> None:
        """Stop playback; safe to call repeatedly."""
        if not self.playing:
            return
        self.playing = False
        if self._handle is not None:
            self.scheduler.cancel(self._handle)
            self._handle = None
        logger.debug("Playback stopped")

    def toggle(self) -> bool:
        """Start or stop playback and return whether it is now playing."""
        if self.playing:
            self.stop()
        else:
            self.start()
        return self.playing

    def tick(self, now_ms: float | None = None) -> bool:
        """Advance one frame if the delay has elapsed; returns whether it advanced."""
        self._handle = None
        if not self.playing:
            return False
        now = self.clock() if now_ms is None else now_ms
        advanced = False
        if now - self._last_advance >= self.session.frame_delay():
            frame = self.session.navigate(1)
            self._last_advance = now
            advanced = frame is not None
            if frame is not None and self.on_frame is not None:
                self.on_frame(frame.id)
        self._arm()
        return advanced

    def _arm(self) -> None:
        self._handle = self.scheduler.request(self.tick)
