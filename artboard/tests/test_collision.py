"""
Tests for overlap detection and placement.
"""

from artboard.components.registry import SizePolicyRegistry
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
from artboard.geometry.schema import ComponentBounds, Point, Rectangle, Size


CONTAINER = Size(width=800, height=600)


def bounds(id, x, y, width, height):
    return ComponentBounds(id=id, x=x, y=y, width=width, height=height)


class TestOverlap:
    """Tests for overlap checks."""

    def test_overlapping(self):
        a = Rectangle(x=0, y=0, width=10, height=10)
        b = Rectangle(x=5, y=5, width=10, height=10)

        assert rects_overlap(a, b)
        assert overlap_area(a, b) == 25

    def test_touching_edges_do_not_overlap(self):
        a = Rectangle(x=0, y=0, width=10, height=10)
        b = Rectangle(x=10, y=0, width=10, height=10)

        assert not rects_overlap(a, b)
        assert overlap_area(a, b) is None

    def test_find_overlapping_components(self):
        components = [
            bounds("self", 0, 0, 50, 50),
            bounds("hit", 40, 40, 50, 50),
            bounds("miss", 200, 200, 50, 50),
        ]

        hits = find_overlapping_components(
            Rectangle(x=0, y=0, width=50, height=50), components, exclude_id="self"
        )

        assert [c.id for c in hits] == ["hit"]

    def test_minimum_push_vector(self):
        moving = Rectangle(x=0, y=0, width=10, height=10)
        obstacle = Rectangle(x=8, y=0, width=10, height=10)

        assert minimum_push_vector(moving, obstacle) == Point(x=-2, y=0)

    def test_push_vector_without_overlap(self):
        moving = Rectangle(x=0, y=0, width=10, height=10)
        obstacle = Rectangle(x=50, y=0, width=10, height=10)

        assert minimum_push_vector(moving, obstacle) == Point(x=0, y=0)


class TestBounds:
    """Tests for container bounds."""

    def test_within_bounds(self):
        assert is_within_bounds(Rectangle(x=0, y=0, width=800, height=600), CONTAINER)
        assert not is_within_bounds(Rectangle(x=-1, y=0, width=10, height=10), CONTAINER)

    def test_constrain_shifts_inside(self):
        rect = constrain_to_bounds(Rectangle(x=790, y=-5, width=50, height=50), CONTAINER)

        assert rect == Rectangle(x=750, y=0, width=50, height=50)

    def test_constrain_shrinks_oversized(self):
        rect = constrain_to_bounds(Rectangle(x=100, y=0, width=1000, height=50), CONTAINER)

        assert rect.width == 800
        assert rect.x == 0


class TestPlacement:
    """Tests for free-slot search and new component placement."""

    def test_free_position_is_kept(self):
        position = find_non_overlapping_position(
            Rectangle(x=100, y=100, width=50, height=50),
            [bounds("other", 300, 300, 50, 50)],
            CONTAINER,
        )

        assert position == Point(x=100, y=100)

    def test_nearest_free_ring(self):
        position = find_non_overlapping_position(
            Rectangle(x=0, y=0, width=50, height=50),
            [bounds("other", 0, 0, 50, 50)],
            Size(width=400, height=400),
        )

        assert position == Point(x=0, y=56)

    def test_excluded_component_is_ignored(self):
        position = find_non_overlapping_position(
            Rectangle(x=0, y=0, width=50, height=50),
            [bounds("self", 0, 0, 50, 50)],
            CONTAINER,
            exclude_id="self",
        )

        assert position == Point(x=0, y=0)

    def test_initial_position_on_empty_artboard(self):
        assert find_initial_position(Size(width=100, height=100), [], CONTAINER) == Point(x=8, y=8)

    def test_initial_position_skips_occupied_area(self):
        position = find_initial_position(
            Size(width=184, height=120), [bounds("big", 0, 0, 300, 300)], CONTAINER
        )

        assert position == Point(x=304, y=8)

    def test_initial_position_when_nothing_fits(self):
        position = find_initial_position(
            Size(width=200, height=200), [], Size(width=100, height=100)
        )

        assert position == Point(x=8, y=0)

    def test_place_new_component_uses_default_size(self):
        rect = place_new_component("kpi", [], CONTAINER)

        assert rect == Rectangle(x=8, y=8, width=184, height=120)

    def test_place_unknown_type(self):
        rect = place_new_component("mystery", [], CONTAINER, SizePolicyRegistry())

        assert (rect.width, rect.height) == (280, 200)
