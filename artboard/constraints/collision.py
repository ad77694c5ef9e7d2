"""Overlap detection and free-slot placement on an artboard."""

from typing import Optional, Sequence

from artboard.components.registry import SizePolicyRegistry, default_registry
from artboard.geometry.schema import ComponentBounds, Point, Rectangle, Size

# Search step and gap between components, in artboard pixels
PLACEMENT_STEP = 8


def rects_overlap(a: Rectangle, b: Rectangle) -> bool:
    """Check if two rectangles overlap. Touching edges do not count."""
    return a.x < b.right and a.right > b.x and a.y < b.bottom and a.bottom > b.y


def is_within_bounds(rect: Rectangle, container: Size) -> bool:
    """Check if a rectangle lies fully inside the container."""
    return (
        rect.x >= 0
        and rect.y >= 0
        and rect.right <= container.width
        and rect.bottom <= container.height
    )


def constrain_to_bounds(rect: Rectangle, container: Size) -> Rectangle:
    """Shrink and shift a rectangle so it fits inside the container."""
    width = min(rect.width, container.width)
    height = min(rect.height, container.height)
    return Rectangle(
        x=max(0.0, min(rect.x, container.width - width)),
        y=max(0.0, min(rect.y, container.height - height)),
        width=width,
        height=height,
    )


def overlap_area(a: Rectangle, b: Rectangle) -> Optional[float]:
    """Area shared by two rectangles, or None if they do not overlap."""
    if not rects_overlap(a, b):
        return None
    overlap_x = max(0.0, min(a.right, b.right) - max(a.x, b.x))
    overlap_y = max(0.0, min(a.bottom, b.bottom) - max(a.y, b.y))
    return overlap_x * overlap_y


def find_overlapping_components(
    rect: Rectangle,
    components: Sequence[ComponentBounds],
    exclude_id: Optional[str] = None,
) -> list[ComponentBounds]:
    """Components the rectangle overlaps, excluding ``exclude_id``."""
    return [c for c in components if c.id != exclude_id and rects_overlap(rect, c)]


def minimum_push_vector(moving: Rectangle, obstacle: Rectangle) -> Point:
    """Smallest axis-aligned translation that separates ``moving`` from ``obstacle``."""
    if not rects_overlap(moving, obstacle):
        return Point(x=0, y=0)

    options = [
        Point(x=obstacle.right - moving.x, y=0),
        Point(x=-(moving.right - obstacle.x), y=0),
        Point(x=0, y=obstacle.bottom - moving.y),
        Point(x=0, y=-(moving.bottom - obstacle.y)),
    ]
    # First option wins ties
    return min(options, key=lambda p: abs(p.x) + abs(p.y))


def find_non_overlapping_position(
    rect: Rectangle,
    components: Sequence[ComponentBounds],
    container: Size,
    exclude_id: Optional[str] = None,
) -> Point:
    """Find the nearest free position for a rectangle.

    Searches outward in square rings of ``PLACEMENT_STEP`` pixels around the
    original position. Falls back to stacking below existing content.
    """
    others = [c for c in components if c.id != exclude_id]

    constrained = constrain_to_bounds(rect, container)
    test_rect = rect.with_position(constrained.x, constrained.y)
    if not any(rects_overlap(test_rect, other) for other in others):
        return Point(x=constrained.x, y=constrained.y)

    max_radius = max(container.width, container.height)
    radius = PLACEMENT_STEP
    while radius < max_radius:
        for dx in range(-radius, radius + 1, PLACEMENT_STEP):
            for dy in range(-radius, radius + 1, PLACEMENT_STEP):
                # Perimeter of the ring only
                if abs(dx) != radius and abs(dy) != radius:
                    continue
                candidate = rect.with_position(rect.x + dx, rect.y + dy)
                if not is_within_bounds(candidate, container):
                    continue
                if not any(rects_overlap(candidate, other) for other in others):
                    return candidate.position
        radius += PLACEMENT_STEP

    max_y = max((c.bottom for c in others), default=-PLACEMENT_STEP) + PLACEMENT_STEP
    return Point(
        x=max(0.0, min(rect.x, container.width - rect.width)),
        y=min(max_y, container.height - rect.height),
    )


def find_initial_position(
    size: Size,
    components: Sequence[ComponentBounds],
    container: Size,
) -> Point:
    """First free slot for a new component, scanning rows from the top-left."""
    padding = PLACEMENT_STEP

    y = padding
    while y < container.height - size.height:
        x = padding
        while x < container.width - size.width:
            candidate = Rectangle(x=x, y=y, width=size.width, height=size.height)
            if not any(rects_overlap(candidate, c) for c in components):
                return Point(x=x, y=y)
            x += padding
        y += padding

    max_y = max((c.bottom for c in components), default=0.0) + padding
    return Point(x=padding, y=min(max_y, max(0.0, container.height - size.height)))


def place_new_component(
    component_type: str,
    components: Sequence[ComponentBounds],
    container: Size,
    registry: Optional[SizePolicyRegistry] = None,
) -> Rectangle:
    """Size a new component from its policy defaults and find it a free slot."""
    policy = (registry or default_registry()).get(component_type)
    size = policy.default_size
    position = find_initial_position(size, components, container)
    return Rectangle(x=position.x, y=position.y, width=size.width, height=size.height)
