"""Constraint module - snapping, alignment guides and placement."""

from artboard.constraints.alignment import (
    AlignmentCandidate,
    find_alignment_candidates,
    get_guide_bounds,
    guide_touches,
    valid_siblings,
)
from artboard.constraints.collision import (
    constrain_to_bounds,
    find_initial_position,
    find_non_overlapping_position,
    find_overlapping_components,
    is_within_bounds,
    minimum_push_vector,
    overlap_area,
    place_new_component,
    rects_overlap,
)
from artboard.constraints.snapping import (
    ResizeSnapResult,
    SnappingConstraint,
    SnapResult,
    resolve_resize_snap,
    resolve_snap,
    snap_to_grid,
    snap_to_grid_within_threshold,
)

__all__ = [
    # Snapping
    "ResizeSnapResult",
    "SnapResult",
    "SnappingConstraint",
    "resolve_resize_snap",
    "resolve_snap",
    "snap_to_grid",
    "snap_to_grid_within_threshold",
    # Alignment
    "AlignmentCandidate",
    "find_alignment_candidates",
    "get_guide_bounds",
    "guide_touches",
    "valid_siblings",
    # Collision
    "constrain_to_bounds",
    "find_initial_position",
    "find_non_overlapping_position",
    "find_overlapping_components",
    "is_within_bounds",
    "minimum_push_vector",
    "overlap_area",
    "place_new_component",
    "rects_overlap",
]
