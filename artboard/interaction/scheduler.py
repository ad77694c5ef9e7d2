"""Animation-frame schedulers.

The only scheduling primitive the interaction layer needs is "run this on the
next frame". ``ManualFrameScheduler`` runs frames when told to, which suits
tests and hosts that drive their own render loop; ``AsyncioFrameScheduler``
maps frames onto an asyncio event loop.
"""

import asyncio
import itertools
from typing import Callable, Optional, Protocol

from artboard.config import get_settings


FrameCallback = Callable[[], None]


class FrameScheduler(Protocol):
    """Defers callbacks to the next animation frame."""

    def request_frame(self, callback: FrameCallback) -> int:
        """Schedule ``callback`` for the next frame and return a handle."""
        ...

    def cancel_frame(self, handle: int) -> None:
        """Cancel a scheduled callback. Unknown handles are ignored."""
        ...


class ManualFrameScheduler:
    """Scheduler whose frames run on explicit ``tick()`` calls."""

    def __init__(self) -> None:
        self._ids = itertools.count(1)
        self._pending: dict[int, FrameCallback] = {}
        self.frame_count = 0

    def request_frame(self, callback: FrameCallback) -> int:
        handle = next(self._ids)
        self._pending[handle] = callback
        return handle

    def cancel_frame(self, handle: int) -> None:
        self._pending.pop(handle, None)

    @property
    def pending(self) -> int:
        """Number of callbacks waiting for the next frame."""
        return len(self._pending)

    def tick(self) -> int:
        """Run one frame.

        Callbacks requested while the frame runs wait for the following frame.

        Returns:
            Number of callbacks run.
        """
        callbacks = list(self._pending.values())
        self._pending.clear()
        self.frame_count += 1
        for callback in callbacks:
            callback()
        return len(callbacks)


class AsyncioFrameScheduler:
    """Scheduler that runs frames on an asyncio loop at a fixed interval."""

    def __init__(
        self,
        loop: Optional[asyncio.AbstractEventLoop] = None,
        frame_interval: Optional[float] = None,
    ) -> None:
        """
        Initialize scheduler.

        Args:
            loop: Event loop to schedule on, defaults to the running loop.
            frame_interval: Seconds per frame, defaults to the configured
                ``frame_interval_ms``.
        """
        self._loop = loop
        if frame_interval is None:
            frame_interval = get_settings().frame_interval_ms / 1000.0
        self.frame_interval = frame_interval
        self._ids = itertools.count(1)
        self._handles: dict[int, asyncio.TimerHandle] = {}

    @property
    def loop(self) -> asyncio.AbstractEventLoop:
        if self._loop is None:
            self._loop = asyncio.get_running_loop()
        return self._loop

    def request_frame(self, callback: FrameCallback) -> int:
        handle_id = next(self._ids)

        def run() -> None:
            self._handles.pop(handle_id, None)
            callback()

        self._handles[handle_id] = self.loop.call_later(self.frame_interval, run)
        return handle_id

    def cancel_frame(self, handle: int) -> None:
        timer = self._handles.pop(handle, None)
        if timer is not None:
            timer.cancel()

    @property
    def pending(self) -> int:
        return len(self._handles)
