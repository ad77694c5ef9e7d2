"""Pointer interaction: drag/resize controller and frame-throttled broadcasts."""

from artboard.interaction.controller import (
    ComponentInteraction,
    InteractionMode,
    InteractionState,
)
from artboard.interaction.events import PointerEvent, PointerEventSource, PointerEventType
from artboard.interaction.resize import (
    apply_aspect_lock,
    clamp_to_policy,
    compute_raw_resize,
    keep_touching_guides,
    resolve_aspect_ratio,
)
from artboard.interaction.scheduler import (
    AsyncioFrameScheduler,
    FrameScheduler,
    ManualFrameScheduler,
)
from artboard.interaction.throttle import FrameThrottle

__all__ = [
    # Controller
    "ComponentInteraction",
    "InteractionMode",
    "InteractionState",
    # Events
    "PointerEvent",
    "PointerEventSource",
    "PointerEventType",
    # Scheduling
    "AsyncioFrameScheduler",
    "FrameScheduler",
    "FrameThrottle",
    "ManualFrameScheduler",
    # Resize math
    "apply_aspect_lock",
    "clamp_to_policy",
    "compute_raw_resize",
    "keep_touching_guides",
    "resolve_aspect_ratio",
]
