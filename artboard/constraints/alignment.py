"""Alignment detection between a moving rectangle and its siblings.

Finds which edges/centers of the moving rectangle sit within snapping range of
sibling edges, picks the winning alignment per axis, and projects accepted
guides onto the components they touch.
"""

import math
from dataclasses import dataclass
from typing import Iterable, Optional, Sequence

from artboard.geometry.schema import (
    AlignmentGuide,
    Axis,
    ComponentBounds,
    Edge,
    GuideExtent,
    GuideKind,
    Rectangle,
)

# Tolerance for treating two sibling lines as the same guide line
EPSILON = 1e-9

# Relations evaluated while moving a whole rectangle, in tie-break order
MOVE_RELATIONS: dict[Axis, tuple[GuideKind, ...]] = {
    Axis.X: (
        GuideKind.LEFT_LEFT,
        GuideKind.LEFT_RIGHT,
        GuideKind.RIGHT_LEFT,
        GuideKind.RIGHT_RIGHT,
        GuideKind.CENTER_X,
    ),
    Axis.Y: (
        GuideKind.TOP_TOP,
        GuideKind.TOP_BOTTOM,
        GuideKind.BOTTOM_TOP,
        GuideKind.BOTTOM_BOTTOM,
        GuideKind.CENTER_Y,
    ),
}

_KIND_ORDER = {
    kind: index
    for relations in MOVE_RELATIONS.values()
    for index, kind in enumerate(relations)
}


def edge_relations(edge: Edge) -> tuple[GuideKind, ...]:
    """Edge-to-edge relations available to a single mobile edge (resize)."""
    return tuple(
        kind
        for kind in MOVE_RELATIONS[edge.axis]
        if kind.moving_edge == edge and not kind.is_center
    )


@dataclass(frozen=True)
class AlignmentCandidate:
    """One in-threshold pairing of a moving edge with a sibling edge."""

    kind: GuideKind
    sibling_id: str
    sibling_index: int
    position: float  # Sibling line coordinate
    offset: float  # Signed correction that puts the moving edge on the line

    @property
    def axis(self) -> Axis:
        return self.kind.axis

    @property
    def distance(self) -> float:
        return abs(self.offset)

    def sort_key(self) -> tuple:
        """Closest first, edges before centers, then input order."""
        return (
            self.distance,
            self.kind.is_center,
            self.sibling_index,
            _KIND_ORDER[self.kind],
        )


def _is_finite_rect(rect: Rectangle) -> bool:
    return all(math.isfinite(v) for v in (rect.x, rect.y, rect.width, rect.height))


def valid_siblings(
    siblings: Optional[Iterable[Optional[ComponentBounds]]],
    moving_id: Optional[str] = None,
) -> list[ComponentBounds]:
    """Drop the moving component and malformed bounds, keeping input order."""
    result = []
    for sibling in siblings or ():
        if sibling is None:
            continue
        if moving_id is not None and sibling.id == moving_id:
            continue
        if not _is_finite_rect(sibling) or sibling.width < 0 or sibling.height < 0:
            continue
        result.append(sibling)
    return result


def find_alignment_candidates(
    moving: Rectangle,
    siblings: Sequence[ComponentBounds],
    threshold: float,
    relations: Optional[Iterable[GuideKind]] = None,
) -> list[AlignmentCandidate]:
    """Enumerate every relation whose distance is within ``threshold``.

    Args:
        moving: The moving rectangle at its raw position.
        siblings: Already-filtered sibling bounds.
        threshold: Maximum snap distance (inclusive).
        relations: Relations to evaluate. Defaults to all move relations.

    Returns:
        Candidates in sibling order, then relation order.
    """
    if relations is None:
        relations = MOVE_RELATIONS[Axis.X] + MOVE_RELATIONS[Axis.Y]
    relations = tuple(relations)

    if not _is_finite_rect(moving) or not math.isfinite(threshold) or threshold < 0:
        return []

    candidates = []
    for index, sibling in enumerate(siblings):
        for kind in relations:
            line = sibling.edge(kind.sibling_edge)
            offset = line - moving.edge(kind.moving_edge)
            if abs(offset) <= threshold:
                candidates.append(
                    AlignmentCandidate(
                        kind=kind,
                        sibling_id=sibling.id,
                        sibling_index=index,
                        position=line,
                        offset=offset,
                    )
                )
    return candidates


def best_candidate(
    candidates: Iterable[AlignmentCandidate], axis: Axis
) -> Optional[AlignmentCandidate]:
    """Pick the winning candidate on one axis, or None."""
    on_axis = [c for c in candidates if c.axis == axis]
    if not on_axis:
        return None
    return min(on_axis, key=AlignmentCandidate.sort_key)


def build_guide(
    winner: AlignmentCandidate,
    candidates: Iterable[AlignmentCandidate],
    moving_id: Optional[str] = None,
) -> AlignmentGuide:
    """Turn an accepted candidate into a guide.

    Siblings with another edge on the same line, matched by the same moving
    edge, are listed too, so the projected guide spans every shape the
    snapped edge aligns with.
    """
    ids: list[str] = [] if moving_id is None else [moving_id]
    aligned = sorted(
        (
            c
            for c in candidates
            if c.kind.moving_edge == winner.kind.moving_edge
            and abs(c.position - winner.position) <= EPSILON
        ),
        key=lambda c: c.sibling_index,
    )
    for candidate in aligned:
        if candidate.sibling_id not in ids:
            ids.append(candidate.sibling_id)

    return AlignmentGuide(
        axis=winner.axis,
        position=winner.position,
        kind=winner.kind,
        component_ids=tuple(ids),
    )


def get_guide_bounds(
    guide: AlignmentGuide, components: Iterable[Optional[ComponentBounds]]
) -> GuideExtent:
    """Get the visible extent of a guide line.

    An ``x`` guide is a vertical line, so the extent is the Y-range covering
    every component the guide references; a ``y`` guide spans X.

    Args:
        guide: The guide to project.
        components: Bounds of the artboard's components (any superset).

    Returns:
        Start/end along the perpendicular axis, ``(0, 0)`` when none of the
        referenced components are present.
    """
    aligned = [
        c for c in components
        if c is not None and c.id in guide.component_ids and _is_finite_rect(c)
    ]

    if not aligned:
        return GuideExtent(start=0.0, end=0.0)

    if guide.axis == Axis.X:
        return GuideExtent(
            start=min(c.y for c in aligned),
            end=max(c.bottom for c in aligned),
        )
    return GuideExtent(
        start=min(c.x for c in aligned),
        end=max(c.right for c in aligned),
    )


def guide_touches(guide: AlignmentGuide, rect: Rectangle) -> bool:
    """Check that the rectangle's edge for this guide still lies on its line."""
    return abs(rect.edge(guide.kind.moving_edge) - guide.position) <= 1e-6
