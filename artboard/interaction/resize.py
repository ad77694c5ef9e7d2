"""Resize geometry: handle deltas, aspect locking and size-policy clamping.

Every function keeps the edge opposite the dragged handle where it was in the
gesture's start rectangle.
"""

import math
from typing import Optional

from artboard.components.sizes import SizePolicy
from artboard.constraints.alignment import guide_touches
from artboard.geometry.schema import AlignmentGuide, Rectangle, ResizeHandle, parse_handle


def _usable_ratio(ratio: Optional[float]) -> bool:
    return ratio is not None and math.isfinite(ratio) and ratio > 0


def width_dominant(handle: ResizeHandle) -> bool:
    """Whether width drives height when the aspect ratio is locked."""
    return handle.moves_left or handle.moves_right


def compute_raw_resize(
    start: Rectangle, handle: "ResizeHandle | str", dx: float, dy: float
) -> Rectangle:
    """Naive rectangle for a handle dragged by (dx, dy) artboard pixels.

    Sizes bottom out at zero rather than flipping the rectangle. An unknown
    handle leaves the rectangle unchanged.
    """
    parsed = parse_handle(handle)
    if parsed is None:
        return start

    x, y, width, height = start.x, start.y, start.width, start.height

    if parsed.moves_right:
        width = max(0.0, start.width + dx)
    if parsed.moves_left:
        width = max(0.0, start.width - dx)
        x = start.right - width
    if parsed.moves_bottom:
        height = max(0.0, start.height + dy)
    if parsed.moves_top:
        height = max(0.0, start.height - dy)
        y = start.bottom - height

    return Rectangle(x=x, y=y, width=width, height=height)


def resolve_aspect_ratio(
    policy: SizePolicy, start: Rectangle, locked: bool
) -> Optional[float]:
    """Ratio to hold while Shift is down.

    The component type's ratio wins; otherwise the start rectangle's own
    proportions are kept. None when unlocked or the start size is degenerate.
    """
    if not locked:
        return None
    if _usable_ratio(policy.aspect_ratio):
        return policy.aspect_ratio
    if start.width > 0 and start.height > 0:
        ratio = start.width / start.height
        if _usable_ratio(ratio):
            return ratio
    return None


def apply_aspect_lock(
    rect: Rectangle,
    start: Rectangle,
    handle: "ResizeHandle | str",
    ratio: Optional[float],
) -> Rectangle:
    """Recompute the non-dominant dimension from the dominant one.

    Horizontal and corner handles drive height from width; north/south
    handles drive width from height. The edge opposite the handle is
    re-anchored to the start rectangle.
    """
    parsed = parse_handle(handle)
    if parsed is None or not _usable_ratio(ratio):
        return rect

    x, y, width, height = rect.x, rect.y, rect.width, rect.height

    if width_dominant(parsed):
        height = width / ratio
        if parsed.moves_top:
            y = start.bottom - height
    else:
        width = height * ratio
        if parsed.moves_left:
            x = start.right - width

    return Rectangle(x=x, y=y, width=width, height=height)


def _clamp(value: float, lower: float, upper: float) -> float:
    return max(lower, min(upper, value))


def clamp_to_policy(
    rect: Rectangle,
    start: Rectangle,
    handle: "ResizeHandle | str",
    policy: SizePolicy,
    ratio: Optional[float] = None,
) -> Rectangle:
    """Clamp a resized rectangle into the policy's min/max size.

    With a ratio, the size is clamped along the dominant dimension inside the
    range where both dimensions satisfy the policy. If no such range exists
    the plain min/max clamp wins over the ratio.

    Args:
        rect: Candidate rectangle (after snapping).
        start: Rectangle at the start of the gesture.
        handle: Handle being dragged.
        policy: Size policy for the component type.
        ratio: Locked aspect ratio, or None.

    Returns:
        Clamped rectangle with the opposite edges anchored.
    """
    parsed = parse_handle(handle)
    if parsed is None:
        return rect

    width, height = policy.clamp_size(rect.width, rect.height)

    if _usable_ratio(ratio):
        max_w = policy.max_width if policy.max_width is not None else math.inf
        max_h = policy.max_height if policy.max_height is not None else math.inf
        lower = max(policy.min_width, policy.min_height * ratio)
        upper = min(max_w, max_h * ratio)
        if lower <= upper:
            if width_dominant(parsed):
                width = _clamp(rect.width, lower, upper)
                height = width / ratio
            else:
                height = _clamp(rect.height, lower / ratio, upper / ratio)
                width = height * ratio

    x = start.right - width if parsed.moves_left else rect.x
    y = start.bottom - height if parsed.moves_top else rect.y
    return Rectangle(x=x, y=y, width=width, height=height)


def keep_touching_guides(
    guides: list[AlignmentGuide], rect: Rectangle
) -> list[AlignmentGuide]:
    """Drop guides whose edge was moved off the line by clamping or aspect lock."""
    return [guide for guide in guides if guide_touches(guide, rect)]
