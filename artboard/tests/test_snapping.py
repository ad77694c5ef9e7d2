"""
Tests for snap resolution (moves and resizes).
"""

import math

import pytest

from artboard.constraints.snapping import (
    SnappingConstraint,
    resolve_resize_snap,
    resolve_snap,
    snap_to_grid,
    snap_to_grid_within_threshold,
)
from artboard.geometry.schema import (
    Axis,
    ComponentBounds,
    GuideKind,
    MovingElement,
    Point,
    Rectangle,
    ResizeHandle,
    SnapModifiers,
    SnapSource,
)


def bounds(id, x, y, width, height):
    return ComponentBounds(id=id, x=x, y=y, width=width, height=height)


class TestGridHelpers:
    """Tests for the scalar grid helpers."""

    def test_snap_to_nearest_line(self):
        assert snap_to_grid(13, 8) == 16
        assert snap_to_grid(11, 8) == 8
        assert snap_to_grid(-3, 8) == 0

    def test_halves_round_up(self):
        assert snap_to_grid(12, 8) == 16
        assert snap_to_grid(4, 8) == 8

    def test_disabled_grid_passes_through(self):
        assert snap_to_grid(13.3, 0) == 13.3
        assert snap_to_grid(13.3, -8) == 13.3

    def test_non_finite_passes_through(self):
        assert math.isnan(snap_to_grid(float("nan"), 8))
        assert snap_to_grid(math.inf, 8) == math.inf

    def test_within_threshold(self):
        assert snap_to_grid_within_threshold(15, 8, 2) == 16
        assert snap_to_grid_within_threshold(13, 8, 2) == 13


class TestResolveSnap:
    """Tests for move snapping."""

    def test_bypass_returns_raw_position(self, sibling_bounds):
        """Alt wins over everything, including exact alignments."""
        result = resolve_snap(
            Point(x=198, y=2),
            MovingElement(id="m", width=100, height=50),
            sibling_bounds,
            SnapModifiers(bypass_all_snapping=True),
            threshold=10,
        )

        assert result.position == Point(x=198, y=2)
        assert result.guides == []
        assert result.source == SnapSource.NONE

    def test_two_axis_alignment(self, sibling_bounds):
        """Moving near the top row aligns left and top edges."""
        result = resolve_snap(
            Point(x=198, y=2),
            MovingElement(id="m", width=100, height=50),
            sibling_bounds,
            threshold=10,
        )

        assert result.position == Point(x=200, y=0)
        assert len(result.guides) == 2
        assert result.source == SnapSource.ALIGNMENT

        x_guide, y_guide = result.guides
        assert x_guide.axis == Axis.X
        assert x_guide.position == 200
        assert x_guide.kind == GuideKind.LEFT_LEFT
        assert x_guide.component_ids == ("m", "s2")

        assert y_guide.axis == Axis.Y
        assert y_guide.position == 0
        assert y_guide.kind == GuideKind.TOP_TOP
        # Both top-row siblings lie on the same line
        assert y_guide.component_ids == ("m", "s1", "s2")

    def test_threshold_is_inclusive(self):
        sibling = bounds("a", 108, 0, 50, 50)
        result = resolve_snap(
            Point(x=100, y=300),
            MovingElement(id="m", width=50, height=50),
            [sibling],
            threshold=8,
            grid_size=0,
        )

        assert result.position == Point(x=108, y=300)
        assert len(result.guides) == 1
        assert result.guides[0].kind == GuideKind.LEFT_LEFT
        assert result.guides[0].component_ids == ("m", "a")

    def test_beyond_threshold_does_not_snap(self):
        sibling = bounds("a", 109, 0, 50, 50)
        result = resolve_snap(
            Point(x=100, y=300),
            MovingElement(id="m", width=50, height=50),
            [sibling],
            threshold=8,
            grid_size=0,
        )

        assert result.position == Point(x=100, y=300)
        assert result.guides == []
        assert result.source == SnapSource.NONE

    def test_just_beyond_threshold_does_not_snap(self):
        sibling = bounds("a", 108.0000000001, 0, 50, 50)
        result = resolve_snap(
            Point(x=100, y=300),
            MovingElement(id="m", width=50, height=50),
            [sibling],
            threshold=8,
            grid_size=0,
        )

        assert result.position == Point(x=100, y=300)
        assert result.guides == []

    def test_axes_are_independent(self):
        """An x alignment leaves an unaligned y untouched."""
        sibling = bounds("a", 103, 0, 50, 50)
        result = resolve_snap(
            Point(x=100, y=300.5),
            MovingElement(id="m", width=50, height=50),
            [sibling],
            threshold=5,
            grid_size=0,
        )

        assert result.position == Point(x=103, y=300.5)
        assert [g.axis for g in result.guides] == [Axis.X]

    def test_grid_fallback(self):
        result = resolve_snap(
            Point(x=13, y=30),
            MovingElement(id="m", width=40, height=40),
            [],
            threshold=5,
            grid_size=8,
        )

        assert result.position == Point(x=16, y=32)
        assert result.guides == []
        assert result.source == SnapSource.GRID

    def test_grid_outside_threshold_is_ignored(self):
        result = resolve_snap(
            Point(x=13, y=28),
            MovingElement(id="m", width=40, height=40),
            [],
            threshold=2,
            grid_size=8,
        )

        assert result.position == Point(x=13, y=28)
        assert result.source == SnapSource.NONE

    def test_alignment_beats_grid(self):
        """A sibling off the grid still wins over the nearer grid line."""
        sibling = bounds("a", 103, 1000, 50, 50)
        result = resolve_snap(
            Point(x=101, y=400),
            MovingElement(id="m", width=50, height=50),
            [sibling],
            threshold=5,
            grid_size=8,
        )

        assert result.position.x == 103

    def test_mixed_source(self):
        sibling = bounds("a", 100, 0, 50, 50)
        result = resolve_snap(
            Point(x=102, y=403),
            MovingElement(id="m", width=50, height=50),
            [sibling],
            threshold=5,
            grid_size=8,
        )

        assert result.position == Point(x=100, y=400)
        assert [g.axis for g in result.guides] == [Axis.X]
        assert result.source == SnapSource.MIXED

    def test_moving_component_is_not_its_own_sibling(self):
        stale_self = bounds("m", 102, 0, 50, 50)
        result = resolve_snap(
            Point(x=100, y=300),
            MovingElement(id="m", width=50, height=50),
            [stale_self],
            threshold=5,
            grid_size=0,
        )

        assert result.position == Point(x=100, y=300)
        assert result.guides == []

    def test_malformed_siblings_are_skipped(self):
        siblings = [
            None,
            bounds("nan", float("nan"), 0, 50, 50),
            bounds("negative", 98, 0, -5, 50),
            bounds("ok", 103, 1000, 50, 50),
        ]
        result = resolve_snap(
            Point(x=100, y=300),
            MovingElement(id="m", width=50, height=50),
            siblings,
            threshold=5,
            grid_size=0,
        )

        assert result.position == Point(x=103, y=300)
        assert result.guides[0].component_ids == ("m", "ok")

    def test_no_siblings(self):
        result = resolve_snap(
            Point(x=10.5, y=20.5),
            MovingElement(id="m", width=50, height=50),
            None,
            threshold=5,
            grid_size=0,
        )

        assert result.position == Point(x=10.5, y=20.5)


class TestTieBreaking:
    """Tests for choosing between equally good alignments."""

    def test_closest_wins(self):
        siblings = [
            bounds("far", 104, 1000, 10, 10),
            bounds("near", 101, 2000, 10, 10),
        ]
        result = resolve_snap(
            Point(x=100, y=300),
            MovingElement(id="m", width=50, height=50),
            siblings,
            threshold=5,
            grid_size=0,
        )

        assert result.position.x == 101
        assert result.guides[0].component_ids == ("m", "near")

    def test_edge_beats_center_at_equal_distance(self):
        siblings = [
            bounds("centered", 73, 1000, 100, 20),
            bounds("edge", 103, 2000, 10, 20),
        ]
        result = resolve_snap(
            Point(x=100, y=300),
            MovingElement(id="m", width=40, height=40),
            siblings,
            threshold=5,
            grid_size=0,
        )

        assert result.position.x == 103
        assert result.guides[0].kind == GuideKind.LEFT_LEFT

    def test_input_order_breaks_remaining_ties(self):
        siblings = [
            bounds("first", 102, 1000, 10, 10),
            bounds("second", 98, 2000, 10, 10),
        ]
        result = resolve_snap(
            Point(x=100, y=300),
            MovingElement(id="m", width=50, height=50),
            siblings,
            threshold=5,
            grid_size=0,
        )

        assert result.position.x == 102
        assert result.guides[0].component_ids == ("m", "first")

    def test_guide_lists_only_siblings_on_the_snapped_edge(self):
        """A sibling center on the line is not merged into an edge guide."""
        siblings = [
            bounds("edge", 101, 1000, 10, 10),
            bounds("centered", 81, 2000, 40, 10),
        ]
        result = resolve_snap(
            Point(x=100, y=300),
            MovingElement(id="m", width=10, height=10),
            siblings,
            threshold=5,
            grid_size=0,
        )

        assert result.position.x == 101
        assert result.guides[0].kind == GuideKind.LEFT_LEFT
        assert result.guides[0].component_ids == ("m", "edge")

    def test_deterministic(self, sibling_bounds):
        args = (
            Point(x=198, y=2),
            MovingElement(id="m", width=100, height=50),
            sibling_bounds,
        )

        first = resolve_snap(*args, threshold=10, grid_size=8)
        second = resolve_snap(*args, threshold=10, grid_size=8)

        assert first == second

    def test_siblings_are_not_mutated(self, sibling_bounds):
        before = list(sibling_bounds)

        resolve_snap(
            Point(x=198, y=2),
            MovingElement(id="m", width=100, height=50),
            sibling_bounds,
            threshold=10,
        )

        assert sibling_bounds == before


class TestResolveResizeSnap:
    """Tests for resize snapping."""

    def test_right_edge_snaps_to_sibling_left(self):
        start = Rectangle(x=0, y=0, width=100, height=50)
        siblings = [
            bounds("a", 150, 100, 50, 50),
            # Would attract the anchored left edge if it were considered
            bounds("b", 3, 300, 20, 20),
        ]
        result = resolve_resize_snap(
            Rectangle(x=0, y=0, width=147, height=50),
            start,
            ResizeHandle.E,
            siblings,
            moving_id="m",
            threshold=5,
            grid_size=0,
        )

        assert result.rect == Rectangle(x=0, y=0, width=150, height=50)
        assert len(result.guides) == 1
        assert result.guides[0].kind == GuideKind.RIGHT_LEFT
        assert result.guides[0].position == 150
        assert result.guides[0].component_ids == ("m", "a")

    def test_west_handle_keeps_right_edge(self):
        start = Rectangle(x=100, y=0, width=100, height=50)
        result = resolve_resize_snap(
            Rectangle(x=53, y=0, width=147, height=50),
            start,
            "w",
            [bounds("a", 0, 100, 50, 50)],
            threshold=5,
            grid_size=0,
        )

        assert result.rect.x == 50
        assert result.rect.right == 200
        assert result.guides[0].kind == GuideKind.LEFT_RIGHT

    def test_north_handle_keeps_bottom_edge(self):
        start = Rectangle(x=0, y=100, width=50, height=100)
        result = resolve_resize_snap(
            Rectangle(x=0, y=52, width=50, height=148),
            start,
            ResizeHandle.N,
            [bounds("a", 200, 0, 50, 50)],
            threshold=5,
            grid_size=0,
        )

        assert result.rect == Rectangle(x=0, y=50, width=50, height=150)
        assert result.guides[0].kind == GuideKind.TOP_BOTTOM

    def test_corner_snaps_both_edges(self):
        start = Rectangle(x=0, y=0, width=100, height=100)
        siblings = [
            bounds("right", 202, 500, 50, 50),
            bounds("below", 500, 198, 50, 50),
        ]
        result = resolve_resize_snap(
            Rectangle(x=0, y=0, width=200, height=200),
            start,
            ResizeHandle.SE,
            siblings,
            threshold=5,
            grid_size=0,
        )

        assert result.rect == Rectangle(x=0, y=0, width=202, height=198)
        assert [g.axis for g in result.guides] == [Axis.X, Axis.Y]

    def test_anchor_comes_from_start_rect(self):
        start = Rectangle(x=0, y=0, width=100, height=50)
        result = resolve_resize_snap(
            Rectangle(x=5, y=0, width=121.5, height=50),
            start,
            ResizeHandle.E,
            [],
            threshold=5,
            grid_size=0,
        )

        assert result.rect.x == 0
        assert result.rect.y == 0

    def test_grid_fallback_on_mobile_edge(self):
        start = Rectangle(x=0, y=0, width=100, height=50)
        result = resolve_resize_snap(
            Rectangle(x=0, y=0, width=97, height=50),
            start,
            ResizeHandle.E,
            [],
            threshold=5,
            grid_size=8,
        )

        assert result.rect.width == 96
        assert result.rect.height == 50
        assert result.source == SnapSource.GRID

    def test_bypass_returns_raw(self):
        raw = Rectangle(x=0, y=0, width=147, height=50)
        result = resolve_resize_snap(
            raw,
            Rectangle(x=0, y=0, width=100, height=50),
            ResizeHandle.E,
            [bounds("a", 150, 100, 50, 50)],
            SnapModifiers(bypass_all_snapping=True),
            threshold=5,
        )

        assert result.rect == raw
        assert result.guides == []

    def test_unknown_handle_is_a_noop(self):
        raw = Rectangle(x=0, y=0, width=147, height=50)
        result = resolve_resize_snap(
            raw,
            Rectangle(x=0, y=0, width=100, height=50),
            "x",
            [bounds("a", 150, 100, 50, 50)],
            threshold=5,
        )

        assert result.rect == raw
        assert result.guides == []
        assert result.source == SnapSource.NONE

    def test_negative_size_is_clamped(self):
        result = resolve_resize_snap(
            Rectangle(x=0, y=0, width=-20, height=50),
            Rectangle(x=0, y=0, width=100, height=50),
            ResizeHandle.E,
            [],
            threshold=5,
            grid_size=0,
        )

        assert result.rect.width == 0
        assert result.rect.height == 50

    def test_bypass_keeps_negative_raw_rect(self):
        raw = Rectangle(x=0, y=0, width=-20, height=50)
        result = resolve_resize_snap(
            raw,
            Rectangle(x=0, y=0, width=100, height=50),
            ResizeHandle.E,
            [],
            SnapModifiers(bypass_all_snapping=True),
        )

        assert result.rect == raw
        assert result.guides == []
        assert result.source == SnapSource.NONE

    def test_bypass_before_handle_check(self):
        raw = Rectangle(x=0, y=0, width=-20, height=50)
        result = resolve_resize_snap(
            raw,
            Rectangle(x=0, y=0, width=100, height=50),
            "x",
            [],
            SnapModifiers(bypass_all_snapping=True),
        )

        assert result.rect == raw


class TestSnappingConstraint:
    """Tests for the configured snapping wrapper."""

    def test_grid_disabled(self):
        constraint = SnappingConstraint(snap_threshold=5, grid_size=8, grid_enabled=False)

        assert constraint.effective_grid_size == 0
        result = constraint.snap_position(
            Point(x=13, y=30), MovingElement(id="m", width=40, height=40)
        )
        assert result.position == Point(x=13, y=30)

    def test_grid_enabled(self):
        constraint = SnappingConstraint(snap_threshold=5, grid_size=8, grid_enabled=True)

        result = constraint.snap_position(
            Point(x=13, y=30), MovingElement(id="m", width=40, height=40)
        )
        assert result.position == Point(x=16, y=32)

    def test_snap_resize(self):
        constraint = SnappingConstraint(snap_threshold=5, grid_size=8, grid_enabled=False)

        result = constraint.snap_resize(
            Rectangle(x=0, y=0, width=147, height=50),
            Rectangle(x=0, y=0, width=100, height=50),
            ResizeHandle.E,
            [bounds("a", 150, 100, 50, 50)],
            moving_id="m",
        )
        assert result.rect.width == 150

    @pytest.mark.parametrize("threshold", [0, 0.5])
    def test_tiny_threshold_needs_exact_match(self, threshold):
        constraint = SnappingConstraint(snap_threshold=threshold, grid_size=8, grid_enabled=False)

        result = constraint.snap_position(
            Point(x=101, y=300),
            MovingElement(id="m", width=50, height=50),
            [bounds("a", 100, 0, 50, 50)],
        )
        assert result.position.x == 101
