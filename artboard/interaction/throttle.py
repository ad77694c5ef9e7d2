"""Frame-rate throttling for live geometry broadcasts."""

from typing import Callable, Generic, Optional, TypeVar

from artboard.interaction.scheduler import FrameScheduler

T = TypeVar("T")


class FrameThrottle(Generic[T]):
    """Deliver the freshest value at most once per frame.

    Values pushed within one frame coalesce: the frame delivers the last one
    pushed (trailing edge, last-write-wins). Nothing is delivered for a frame
    in which no value was pushed.
    """

    def __init__(self, callback: Optional[Callable[[T], None]], scheduler: FrameScheduler) -> None:
        self.callback = callback
        self._scheduler = scheduler
        self._handle: Optional[int] = None
        self._latest: Optional[T] = None
        self._has_value = False

    @property
    def pending(self) -> bool:
        """Whether a frame is scheduled to deliver a value."""
        return self._handle is not None

    def push(self, value: T) -> None:
        """Record a value and make sure a frame will deliver it."""
        self._latest = value
        self._has_value = True
        if self._handle is None:
            self._handle = self._scheduler.request_frame(self._flush)

    def cancel(self) -> None:
        """Drop the scheduled frame and any undelivered value."""
        if self._handle is not None:
            self._scheduler.cancel_frame(self._handle)
            self._handle = None
        self._latest = None
        self._has_value = False

    def _flush(self) -> None:
        self._handle = None
        if not self._has_value:
            return
        value = self._latest
        self._latest = None
        self._has_value = False
        if self.callback is not None:
            self.callback(value)
