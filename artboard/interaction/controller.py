"""
controller.py - Drag and resize state machine for one canvas component.

States: idle -> dragging -> idle, and idle -> resizing -> idle.

While a gesture is active the controller listens to pointer-move/up on the
shared event source, snaps every move against the sibling bounds, broadcasts
the in-progress rectangle at most once per frame, and commits the final
rectangle exactly once on pointer-up. The controller never mutates sibling
data; the owning artboard stays the source of truth for committed geometry.
"""

import logging
import math
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional, Sequence, Union

from artboard.components.registry import SizePolicyRegistry, default_registry
from artboard.constraints.snapping import SnappingConstraint
from artboard.geometry.schema import (
    AlignmentGuide,
    ComponentBounds,
    MovingElement,
    Point,
    Rectangle,
    ResizeHandle,
    parse_handle,
)
from artboard.interaction.events import PointerEvent, PointerEventSource, PointerEventType
from artboard.interaction.resize import (
    apply_aspect_lock,
    clamp_to_policy,
    compute_raw_resize,
    keep_touching_guides,
    resolve_aspect_ratio,
)
from artboard.interaction.scheduler import FrameScheduler
from artboard.interaction.throttle import FrameThrottle

logger = logging.getLogger(__name__)

SiblingSource = Union[Sequence[ComponentBounds], Callable[[], Sequence[ComponentBounds]], None]


class InteractionMode(str, Enum):
    """Gesture currently owned by a controller."""

    IDLE = "idle"
    DRAGGING = "dragging"
    RESIZING = "resizing"


@dataclass
class InteractionState:
    """Transient state of one drag or resize gesture."""

    mode: InteractionMode
    start_rect: Rectangle
    current_rect: Rectangle
    pointer_start: Point
    resize_handle: Optional[ResizeHandle] = None


class ComponentInteraction:
    """
    Pointer interaction controller for one component instance.

    Each component owns its own controller, so concurrent gestures on
    different components share no mutable state.
    """

    def __init__(
        self,
        component_id: str,
        component_type: str,
        rect: Rectangle,
        *,
        events: PointerEventSource,
        scheduler: FrameScheduler,
        on_select: Callable[[], None],
        on_position_change: Callable[[Rectangle], None],
        on_live_position_change: Optional[Callable[[Optional[Rectangle]], None]] = None,
        on_guides_change: Optional[Callable[[list[AlignmentGuide]], None]] = None,
        siblings: SiblingSource = None,
        locked: bool = False,
        scale: float = 1.0,
        registry: Optional[SizePolicyRegistry] = None,
        snapping: Optional[SnappingConstraint] = None,
    ):
        """
        Initialize controller.

        Args:
            component_id: Id of the controlled component.
            component_type: Type used to look up its size policy.
            rect: Current committed rectangle (artboard space).
            events: Document-level pointer event source.
            scheduler: Animation-frame scheduler for live broadcasts.
            on_select: Fired when a gesture starts.
            on_position_change: Receives the committed rectangle, once per gesture.
            on_live_position_change: Receives the in-progress rectangle at most
                once per frame, then None when the gesture ends.
            on_guides_change: Receives the active guides when they change, then
                an empty list when the gesture ends.
            siblings: Sibling bounds, or a callable returning fresh bounds.
            locked: Locked components ignore pointer-down.
            scale: Canvas zoom; screen deltas are divided by it.
            registry: Size policy registry, defaults to the built-in one.
            snapping: Snap threshold/grid, defaults to configured settings.
        """
        self.component_id = component_id
        self.component_type = component_type
        self.rect = rect
        self.locked = locked
        self.scale = scale
        self.siblings = siblings

        self.on_select = on_select
        self.on_position_change = on_position_change
        self.on_live_position_change = on_live_position_change
        self.on_guides_change = on_guides_change

        self._events = events
        self._registry = registry or default_registry()
        self._snapping = snapping or SnappingConstraint()
        self._live = FrameThrottle(self._emit_live, scheduler)

        self._state: Optional[InteractionState] = None
        self._last_guides: list[AlignmentGuide] = []
        self._listening = False

    # =========================================================================
    # PROPERTIES
    # =========================================================================

    @property
    def mode(self) -> InteractionMode:
        return self._state.mode if self._state else InteractionMode.IDLE

    @property
    def is_dragging(self) -> bool:
        return self.mode == InteractionMode.DRAGGING

    @property
    def is_resizing(self) -> bool:
        return self.mode == InteractionMode.RESIZING

    @property
    def resize_handle(self) -> Optional[ResizeHandle]:
        return self._state.resize_handle if self._state else None

    @property
    def start_rect(self) -> Optional[Rectangle]:
        return self._state.start_rect if self._state else None

    @property
    def current_rect(self) -> Optional[Rectangle]:
        return self._state.current_rect if self._state else None

    @property
    def display_rect(self) -> Rectangle:
        """Rectangle to draw: in-progress geometry during a gesture."""
        return self._state.current_rect if self._state else self.rect

    @property
    def guides(self) -> list[AlignmentGuide]:
        return list(self._last_guides)

    # =========================================================================
    # PUBLIC API
    # =========================================================================

    def update(
        self,
        *,
        rect: Optional[Rectangle] = None,
        siblings: SiblingSource = None,
        component_type: Optional[str] = None,
        locked: Optional[bool] = None,
        scale: Optional[float] = None,
    ) -> None:
        """Refresh inputs from the owning artboard.

        A new committed rect does not disturb a gesture in progress; it only
        becomes the start rect of the next one. Arguments left as None keep
        their current value; pass an empty sequence to clear the siblings.
        """
        if rect is not None:
            self.rect = rect
        if siblings is not None:
            self.siblings = siblings
        if component_type is not None:
            self.component_type = component_type
        if locked is not None:
            self.locked = locked
        if scale is not None:
            self.scale = scale

    def pointer_down(self, event: PointerEvent) -> bool:
        """Pointer-down on the component body.

        Returns:
            True if a drag started.
        """
        if self.locked or self._state is not None:
            return False
        if event.on_resize_handle:
            return False

        self._begin(InteractionMode.DRAGGING, event)
        return True

    def resize_start(self, event: PointerEvent, handle: "ResizeHandle | str") -> bool:
        """Pointer-down on one of the eight resize handles.

        Returns:
            True if a resize started.
        """
        if self.locked or self._state is not None:
            return False

        parsed = parse_handle(handle)
        if parsed is None:
            logger.debug("Component %s: ignoring unknown resize handle %r", self.component_id, handle)
            return False

        self._begin(InteractionMode.RESIZING, event, parsed)
        return True

    def dispose(self) -> None:
        """Tear down: detach listeners and drop any gesture without committing."""
        if self._state is not None:
            logger.debug(
                "Component %s disposed during %s; gesture discarded",
                self.component_id,
                self._state.mode.value,
            )
        self._detach()
        self._live.cancel()
        self._state = None
        self._last_guides = []

    # =========================================================================
    # GESTURE LIFECYCLE
    # =========================================================================

    def _begin(
        self,
        mode: InteractionMode,
        event: PointerEvent,
        handle: Optional[ResizeHandle] = None,
    ) -> None:
        self.on_select()

        start = self.rect.to_rect()
        self._state = InteractionState(
            mode=mode,
            start_rect=start,
            current_rect=start,
            pointer_start=Point(x=event.client_x, y=event.client_y),
            resize_handle=handle,
        )
        self._attach()
        logger.debug(
            "Component %s: idle -> %s%s",
            self.component_id,
            mode.value,
            f" ({handle.value})" if handle else "",
        )

    def _attach(self) -> None:
        if self._listening:
            return
        self._events.add_listener(PointerEventType.POINTER_MOVE, self._handle_move)
        self._events.add_listener(PointerEventType.POINTER_UP, self._handle_up)
        self._listening = True

    def _detach(self) -> None:
        if not self._listening:
            return
        self._events.remove_listener(PointerEventType.POINTER_MOVE, self._handle_move)
        self._events.remove_listener(PointerEventType.POINTER_UP, self._handle_up)
        self._listening = False

    def _handle_move(self, event: PointerEvent) -> None:
        state = self._state
        if state is None:
            return

        scale = self._effective_scale()
        dx = (event.client_x - state.pointer_start.x) / scale
        dy = (event.client_y - state.pointer_start.y) / scale

        if state.mode == InteractionMode.DRAGGING:
            rect, guides = self._drag_to(state, dx, dy, event)
        else:
            rect, guides = self._resize_to(state, dx, dy, event)

        state.current_rect = rect
        self._live.push(rect)
        self._set_guides(guides)

    def _handle_up(self, event: PointerEvent) -> None:
        state = self._state
        if state is None:
            return

        self._detach()
        self._state = None
        self._live.cancel()

        committed = state.current_rect
        self.rect = committed
        logger.debug(
            "Component %s: %s -> idle, committing %s",
            self.component_id,
            state.mode.value,
            committed,
        )
        self.on_position_change(committed)

        if self.on_live_position_change is not None:
            self.on_live_position_change(None)
        self._last_guides = []
        if self.on_guides_change is not None:
            self.on_guides_change([])

    # =========================================================================
    # GEOMETRY
    # =========================================================================

    def _effective_scale(self) -> float:
        scale = self.scale
        if scale is None or not math.isfinite(scale) or scale <= 0:
            return 1.0
        return scale

    def _current_siblings(self) -> list[ComponentBounds]:
        source = self.siblings
        if source is None:
            return []
        if callable(source):
            source = source()
        return list(source or [])

    def _drag_to(
        self, state: InteractionState, dx: float, dy: float, event: PointerEvent
    ) -> tuple[Rectangle, list[AlignmentGuide]]:
        start = state.start_rect
        result = self._snapping.snap_position(
            Point(x=start.x + dx, y=start.y + dy),
            MovingElement(id=self.component_id, width=start.width, height=start.height),
            self._current_siblings(),
            event.modifiers,
        )
        rect = start.with_position(result.position.x, result.position.y)
        return rect, result.guides

    def _resize_to(
        self, state: InteractionState, dx: float, dy: float, event: PointerEvent
    ) -> tuple[Rectangle, list[AlignmentGuide]]:
        start = state.start_rect
        handle = state.resize_handle
        policy = self._registry.get(self.component_type)
        modifiers = event.modifiers

        ratio = resolve_aspect_ratio(policy, start, modifiers.lock_aspect_ratio)
        raw = compute_raw_resize(start, handle, dx, dy)
        raw = apply_aspect_lock(raw, start, handle, ratio)

        result = self._snapping.snap_resize(
            raw,
            start,
            handle,
            self._current_siblings(),
            modifiers,
            moving_id=self.component_id,
        )

        # Size policy always has the last word over snapping
        rect = apply_aspect_lock(result.rect, start, handle, ratio)
        rect = clamp_to_policy(rect, start, handle, policy, ratio)
        return rect, keep_touching_guides(result.guides, rect)

    # =========================================================================
    # CALLBACKS
    # =========================================================================

    def _emit_live(self, rect: Rectangle) -> None:
        if self.on_live_position_change is not None:
            self.on_live_position_change(rect)

    def _set_guides(self, guides: list[AlignmentGuide]) -> None:
        if guides == self._last_guides:
            return
        self._last_guides = list(guides)
        if self.on_guides_change is not None:
            self.on_guides_change(list(guides))
