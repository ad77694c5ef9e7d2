"""Pytest configuration and fixtures."""

from typing import Callable, Optional

import pytest

from artboard.components.registry import SizePolicyRegistry
from artboard.components.sizes import SizePolicy
from artboard.constraints.snapping import SnappingConstraint
from artboard.geometry.schema import ComponentBounds, Rectangle
from artboard.interaction.controller import ComponentInteraction
from artboard.interaction.events import PointerEventSource
from artboard.interaction.scheduler import ManualFrameScheduler


class CallbackRecorder:
    """Collects every outbound controller callback in call order."""

    def __init__(self) -> None:
        self.selected = 0
        self.commits: list[Rectangle] = []
        self.live: list[Optional[Rectangle]] = []
        self.guides: list[list] = []
        self.order: list[str] = []

    def on_select(self) -> None:
        self.selected += 1
        self.order.append("select")

    def on_position_change(self, rect: Rectangle) -> None:
        self.commits.append(rect)
        self.order.append("commit")

    def on_live_position_change(self, rect: Optional[Rectangle]) -> None:
        self.live.append(rect)
        self.order.append("live")

    def on_guides_change(self, guides: list) -> None:
        self.guides.append(guides)
        self.order.append("guides")


@pytest.fixture
def sibling_bounds() -> list[ComponentBounds]:
    """Three siblings: two on the top row, one below the first."""
    return [
        ComponentBounds(id="s1", x=0, y=0, width=100, height=50),
        ComponentBounds(id="s2", x=200, y=0, width=100, height=50),
        ComponentBounds(id="s3", x=0, y=200, width=100, height=50),
    ]


@pytest.fixture
def events() -> PointerEventSource:
    return PointerEventSource()


@pytest.fixture
def scheduler() -> ManualFrameScheduler:
    return ManualFrameScheduler()


@pytest.fixture
def registry() -> SizePolicyRegistry:
    """Built-in policies plus small test types."""
    registry = SizePolicyRegistry.with_builtins()
    registry.register("widget", SizePolicy(min_width=20, min_height=20))
    registry.register(
        "banner",
        SizePolicy(min_width=10, min_height=10, aspect_ratio=2.0),
    )
    registry.register(
        "badge",
        SizePolicy(min_width=20, min_height=20, max_width=120, max_height=80),
    )
    return registry


@pytest.fixture
def no_grid() -> SnappingConstraint:
    """Sibling alignment only."""
    return SnappingConstraint(snap_threshold=5, grid_size=8, grid_enabled=False)


@pytest.fixture
def recorder() -> CallbackRecorder:
    return CallbackRecorder()


@pytest.fixture
def make_controller(
    events: PointerEventSource,
    scheduler: ManualFrameScheduler,
    registry: SizePolicyRegistry,
    no_grid: SnappingConstraint,
    recorder: CallbackRecorder,
) -> Callable[..., ComponentInteraction]:
    """Factory building a controller wired to the shared fixtures."""

    def factory(
        rect: Rectangle = Rectangle(x=0, y=0, width=100, height=50),
        component_type: str = "widget",
        component_id: str = "moving",
        **kwargs,
    ) -> ComponentInteraction:
        kwargs.setdefault("snapping", no_grid)
        return ComponentInteraction(
            component_id,
            component_type,
            rect,
            events=events,
            scheduler=scheduler,
            registry=registry,
            on_select=recorder.on_select,
            on_position_change=recorder.on_position_change,
            on_live_position_change=recorder.on_live_position_change,
            on_guides_change=recorder.on_guides_change,
            **kwargs,
        )

    return factory
