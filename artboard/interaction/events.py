"""Pointer events and the document-level event source.

The event source plays the role of the browser ``document``: controllers
attach move/up listeners to it for the lifetime of a gesture so they keep
receiving pointer movement after the cursor leaves the component.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional

from artboard.geometry.schema import SnapModifiers


class PointerEventType(str, Enum):
    """Global pointer events a gesture listens to."""

    POINTER_MOVE = "pointermove"
    POINTER_UP = "pointerup"


@dataclass(frozen=True)
class PointerEvent:
    """A pointer event in screen (client) pixels."""

    client_x: float
    client_y: float
    alt_key: bool = False  # Bypass snapping
    shift_key: bool = False  # Lock aspect ratio while resizing
    on_resize_handle: bool = False  # Pointer-down landed on a handle

    @property
    def modifiers(self) -> SnapModifiers:
        return SnapModifiers(
            bypass_all_snapping=self.alt_key, lock_aspect_ratio=self.shift_key
        )


PointerListener = Callable[[PointerEvent], None]


class PointerEventSource:
    """Dispatches pointer events to registered listeners, in delivery order."""

    def __init__(self) -> None:
        self._listeners: dict[PointerEventType, list[PointerListener]] = {
            event_type: [] for event_type in PointerEventType
        }

    def add_listener(self, event_type: PointerEventType, listener: PointerListener) -> None:
        """Register a listener. Adding the same listener twice is a no-op."""
        listeners = self._listeners[PointerEventType(event_type)]
        if listener not in listeners:
            listeners.append(listener)

    def remove_listener(self, event_type: PointerEventType, listener: PointerListener) -> None:
        """Remove a listener if registered."""
        listeners = self._listeners[PointerEventType(event_type)]
        if listener in listeners:
            listeners.remove(listener)

    def dispatch(self, event_type: PointerEventType, event: PointerEvent) -> None:
        """Deliver an event to a snapshot of the current listeners."""
        for listener in list(self._listeners[PointerEventType(event_type)]):
            listener(event)

    def listener_count(self, event_type: Optional[PointerEventType] = None) -> int:
        """Number of listeners for one type, or for all types."""
        if event_type is not None:
            return len(self._listeners[PointerEventType(event_type)])
        return sum(len(listeners) for listeners in self._listeners.values())

    def move(self, client_x: float, client_y: float, **modifiers: bool) -> None:
        """Dispatch a pointer-move at the given client position."""
        self.dispatch(
            PointerEventType.POINTER_MOVE, PointerEvent(client_x, client_y, **modifiers)
        )

    def up(self, client_x: float = 0.0, client_y: float = 0.0, **modifiers: bool) -> None:
        """Dispatch a pointer-up."""
        self.dispatch(
            PointerEventType.POINTER_UP, PointerEvent(client_x, client_y, **modifiers)
        )
