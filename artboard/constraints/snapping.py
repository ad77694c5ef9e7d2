"""Snap resolution for component moves and resizes.

Policy (alignment first, grid second):
- Alt/Option bypasses every kind of snapping.
- Each axis is resolved independently. Sibling alignment wins on an axis when
  any sibling edge/center is within the threshold.
- The coordinate grid is only a fallback on axes with no sibling alignment,
  and only when the grid line is itself within the threshold.

All inputs and outputs are in artboard-local pixels, so the threshold does not
change with canvas zoom.
"""

import logging
import math
from dataclasses import dataclass, field
from typing import Optional, Sequence

from artboard.config import get_settings
from artboard.constraints.alignment import (
    MOVE_RELATIONS,
    best_candidate,
    build_guide,
    edge_relations,
    find_alignment_candidates,
    valid_siblings,
)
from artboard.geometry.schema import (
    AlignmentGuide,
    Axis,
    ComponentBounds,
    Edge,
    MovingElement,
    Point,
    Rectangle,
    ResizeHandle,
    SnapModifiers,
    SnapSource,
    parse_handle,
)

logger = logging.getLogger(__name__)

_NO_MODIFIERS = SnapModifiers()


@dataclass
class SnapResult:
    """Result of a move snap."""

    position: Point
    guides: list[AlignmentGuide] = field(default_factory=list)
    source: SnapSource = SnapSource.NONE


@dataclass
class ResizeSnapResult:
    """Result of a resize snap."""

    rect: Rectangle
    guides: list[AlignmentGuide] = field(default_factory=list)
    source: SnapSource = SnapSource.NONE


def snap_to_grid(value: float, grid_size: float) -> float:
    """Snap a scalar to the nearest grid line (halves round up)."""
    if not math.isfinite(value) or not math.isfinite(grid_size) or grid_size <= 0:
        return value
    return math.floor(value / grid_size + 0.5) * grid_size


def snap_to_grid_within_threshold(value: float, grid_size: float, threshold: float) -> float:
    """Snap a scalar to the grid only when the grid line is close enough."""
    if not math.isfinite(threshold) or threshold < 0:
        return value
    snapped = snap_to_grid(value, grid_size)
    return snapped if abs(snapped - value) <= threshold else value


def _combine_sources(sources: Sequence[SnapSource]) -> SnapSource:
    unique = set(sources)
    if not unique:
        return SnapSource.NONE
    if len(unique) == 1:
        return unique.pop()
    return SnapSource.MIXED


def _snap_params(threshold: Optional[float], grid_size: Optional[float]) -> tuple[float, float]:
    settings = get_settings()
    if threshold is None:
        threshold = settings.snap_threshold_px
    if grid_size is None:
        grid_size = settings.effective_grid_size
    return threshold, grid_size


def _clamp_non_negative(rect: Rectangle) -> Rectangle:
    if rect.width >= 0 and rect.height >= 0:
        return rect
    return rect.with_size(max(0.0, rect.width), max(0.0, rect.height))


def resolve_snap(
    raw_position: Point,
    moving: MovingElement,
    siblings: Optional[Sequence[ComponentBounds]] = None,
    modifiers: Optional[SnapModifiers] = None,
    *,
    threshold: Optional[float] = None,
    grid_size: Optional[float] = None,
) -> SnapResult:
    """Resolve snapping for a move/drag.

    Args:
        raw_position: Unsnapped top-left candidate.
        moving: Id and size of the moving element.
        siblings: Bounds of the other components on the artboard. The moving
            component is filtered out by id if present.
        modifiers: Modifier state; ``bypass_all_snapping`` returns the raw
            position untouched.
        threshold: Snap distance, defaults to the configured threshold.
        grid_size: Grid pitch, defaults to the configured grid; 0 disables
            grid fallback.

    Returns:
        SnapResult with the corrected position and at most one guide per axis.
    """
    modifiers = modifiers or _NO_MODIFIERS
    if modifiers.bypass_all_snapping:
        return SnapResult(position=raw_position)

    threshold, grid_size = _snap_params(threshold, grid_size)

    moving_rect = Rectangle(
        x=raw_position.x, y=raw_position.y, width=moving.width, height=moving.height
    )
    others = valid_siblings(siblings, moving.id)
    candidates = find_alignment_candidates(
        moving_rect, others, threshold, MOVE_RELATIONS[Axis.X] + MOVE_RELATIONS[Axis.Y]
    )

    coords = {Axis.X: raw_position.x, Axis.Y: raw_position.y}
    guides: list[AlignmentGuide] = []
    sources: list[SnapSource] = []

    for axis in (Axis.X, Axis.Y):
        winner = best_candidate(candidates, axis)
        if winner is not None:
            coords[axis] += winner.offset
            guides.append(build_guide(winner, candidates, moving.id))
            sources.append(SnapSource.ALIGNMENT)
            continue

        snapped = snap_to_grid_within_threshold(coords[axis], grid_size, threshold)
        if snapped != coords[axis]:
            coords[axis] = snapped
            sources.append(SnapSource.GRID)

    return SnapResult(
        position=Point(x=coords[Axis.X], y=coords[Axis.Y]),
        guides=guides,
        source=_combine_sources(sources),
    )


def resolve_resize_snap(
    raw_rect: Rectangle,
    start_rect: Rectangle,
    handle: "ResizeHandle | str",
    siblings: Optional[Sequence[ComponentBounds]] = None,
    modifiers: Optional[SnapModifiers] = None,
    *,
    moving_id: Optional[str] = None,
    threshold: Optional[float] = None,
    grid_size: Optional[float] = None,
) -> ResizeSnapResult:
    """Resolve snapping for a resize.

    Only the edges dragged by ``handle`` are snapped, and only edge-to-edge
    (a right edge snaps to sibling left/right edges). The opposite edge on each
    mobile axis stays where it was in ``start_rect``. Size limits are not
    applied here; callers clamp afterwards.

    Args:
        raw_rect: Unsnapped candidate rectangle.
        start_rect: Rectangle at the start of the gesture.
        handle: One of the eight compass handles.
        siblings: Bounds of the other components on the artboard.
        modifiers: Modifier state; ``bypass_all_snapping`` returns ``raw_rect``
            untouched, before any other check.
        moving_id: Id of the resized component, excluded from siblings and
            listed first in guide component ids.
        threshold: Snap distance, defaults to the configured threshold.
        grid_size: Grid pitch, defaults to the configured grid.

    Returns:
        ResizeSnapResult with the corrected rectangle and its guides.
    """
    modifiers = modifiers or _NO_MODIFIERS
    if modifiers.bypass_all_snapping:
        return ResizeSnapResult(rect=raw_rect)

    parsed = parse_handle(handle)
    if parsed is None:
        logger.debug("Ignoring resize with unknown handle %r", handle)
        return ResizeSnapResult(rect=raw_rect)

    raw = _clamp_non_negative(raw_rect)

    threshold, grid_size = _snap_params(threshold, grid_size)
    start = _clamp_non_negative(start_rect)
    others = valid_siblings(siblings, moving_id)

    lines = {
        Edge.LEFT: raw.x,
        Edge.RIGHT: raw.right,
        Edge.TOP: raw.y,
        Edge.BOTTOM: raw.bottom,
    }
    # Anchored edges come from the start rect, never from the raw candidate
    if parsed.moves_left:
        lines[Edge.RIGHT] = start.right
    if parsed.moves_right:
        lines[Edge.LEFT] = start.x
    if parsed.moves_top:
        lines[Edge.BOTTOM] = start.bottom
    if parsed.moves_bottom:
        lines[Edge.TOP] = start.y

    probe = Rectangle(
        x=lines[Edge.LEFT],
        y=lines[Edge.TOP],
        width=lines[Edge.RIGHT] - lines[Edge.LEFT],
        height=lines[Edge.BOTTOM] - lines[Edge.TOP],
    )

    guides: list[AlignmentGuide] = []
    sources: list[SnapSource] = []

    for edge in parsed.mobile_edges:
        candidates = find_alignment_candidates(probe, others, threshold, edge_relations(edge))
        winner = best_candidate(candidates, edge.axis)
        if winner is not None:
            lines[edge] = winner.position
            guides.append(build_guide(winner, candidates, moving_id))
            sources.append(SnapSource.ALIGNMENT)
            continue

        snapped = snap_to_grid_within_threshold(lines[edge], grid_size, threshold)
        if snapped != lines[edge]:
            lines[edge] = snapped
            sources.append(SnapSource.GRID)

    # A mobile edge may not cross its anchor
    if parsed.moves_left:
        lines[Edge.LEFT] = min(lines[Edge.LEFT], lines[Edge.RIGHT])
    if parsed.moves_right:
        lines[Edge.RIGHT] = max(lines[Edge.RIGHT], lines[Edge.LEFT])
    if parsed.moves_top:
        lines[Edge.TOP] = min(lines[Edge.TOP], lines[Edge.BOTTOM])
    if parsed.moves_bottom:
        lines[Edge.BOTTOM] = max(lines[Edge.BOTTOM], lines[Edge.TOP])

    rect = Rectangle(
        x=lines[Edge.LEFT],
        y=lines[Edge.TOP],
        width=lines[Edge.RIGHT] - lines[Edge.LEFT],
        height=lines[Edge.BOTTOM] - lines[Edge.TOP],
    )
    return ResizeSnapResult(rect=rect, guides=guides, source=_combine_sources(sources))


@dataclass
class SnappingConstraint:
    """Snapping behaviour for one canvas: threshold and grid.

    Values default to the configured settings at construction time.
    """

    snap_threshold: float = field(default_factory=lambda: get_settings().snap_threshold_px)
    grid_size: float = field(default_factory=lambda: get_settings().grid_size_px)
    grid_enabled: bool = field(default_factory=lambda: get_settings().grid_snapping)

    @property
    def effective_grid_size(self) -> float:
        return self.grid_size if self.grid_enabled else 0.0

    def snap_position(
        self,
        raw_position: Point,
        moving: MovingElement,
        siblings: Optional[Sequence[ComponentBounds]] = None,
        modifiers: Optional[SnapModifiers] = None,
    ) -> SnapResult:
        """Snap a dragged element's position."""
        return resolve_snap(
            raw_position,
            moving,
            siblings,
            modifiers,
            threshold=self.snap_threshold,
            grid_size=self.effective_grid_size,
        )

    def snap_resize(
        self,
        raw_rect: Rectangle,
        start_rect: Rectangle,
        handle: "ResizeHandle | str",
        siblings: Optional[Sequence[ComponentBounds]] = None,
        modifiers: Optional[SnapModifiers] = None,
        moving_id: Optional[str] = None,
    ) -> ResizeSnapResult:
        """Snap the mobile edges of a resized element."""
        return resolve_resize_snap(
            raw_rect,
            start_rect,
            handle,
            siblings,
            modifiers,
            moving_id=moving_id,
            threshold=self.snap_threshold,
            grid_size=self.effective_grid_size,
        )
