"""Pydantic v2 models for canvas geometry.

All values are in artboard-local pixels: the coordinate space components are
positioned in, independent of the canvas pan and zoom.
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class Axis(str, Enum):
    """Axis a guide constrains. ``x`` guides are drawn as vertical lines."""

    X = "x"
    Y = "y"


class Edge(str, Enum):
    """Snappable lines of a rectangle."""

    LEFT = "left"
    RIGHT = "right"
    CENTER_X = "center_x"
    TOP = "top"
    BOTTOM = "bottom"
    CENTER_Y = "center_y"

    @property
    def axis(self) -> Axis:
        if self in (Edge.LEFT, Edge.RIGHT, Edge.CENTER_X):
            return Axis.X
        return Axis.Y

    @property
    def is_center(self) -> bool:
        return self in (Edge.CENTER_X, Edge.CENTER_Y)


class GuideKind(str, Enum):
    """Edge relationship that produced a guide (moving edge, sibling edge)."""

    LEFT_LEFT = "left-left"
    LEFT_RIGHT = "left-right"
    RIGHT_LEFT = "right-left"
    RIGHT_RIGHT = "right-right"
    CENTER_X = "center-x"
    TOP_TOP = "top-top"
    TOP_BOTTOM = "top-bottom"
    BOTTOM_TOP = "bottom-top"
    BOTTOM_BOTTOM = "bottom-bottom"
    CENTER_Y = "center-y"

    @property
    def moving_edge(self) -> Edge:
        return _KIND_EDGES[self][0]

    @property
    def sibling_edge(self) -> Edge:
        return _KIND_EDGES[self][1]

    @property
    def axis(self) -> Axis:
        return self.moving_edge.axis

    @property
    def is_center(self) -> bool:
        return self.moving_edge.is_center

    @classmethod
    def for_edges(cls, moving: Edge, sibling: Edge) -> "GuideKind":
        """Look up the kind for a (moving edge, sibling edge) pair."""
        return _EDGES_KIND[(moving, sibling)]


_KIND_EDGES: dict[GuideKind, tuple[Edge, Edge]] = {
    GuideKind.LEFT_LEFT: (Edge.LEFT, Edge.LEFT),
    GuideKind.LEFT_RIGHT: (Edge.LEFT, Edge.RIGHT),
    GuideKind.RIGHT_LEFT: (Edge.RIGHT, Edge.LEFT),
    GuideKind.RIGHT_RIGHT: (Edge.RIGHT, Edge.RIGHT),
    GuideKind.CENTER_X: (Edge.CENTER_X, Edge.CENTER_X),
    GuideKind.TOP_TOP: (Edge.TOP, Edge.TOP),
    GuideKind.TOP_BOTTOM: (Edge.TOP, Edge.BOTTOM),
    GuideKind.BOTTOM_TOP: (Edge.BOTTOM, Edge.TOP),
    GuideKind.BOTTOM_BOTTOM: (Edge.BOTTOM, Edge.BOTTOM),
    GuideKind.CENTER_Y: (Edge.CENTER_Y, Edge.CENTER_Y),
}
_EDGES_KIND = {edges: kind for kind, edges in _KIND_EDGES.items()}


class ResizeHandle(str, Enum):
    """The eight compass handles around a selected component."""

    N = "n"
    NE = "ne"
    E = "e"
    SE = "se"
    S = "s"
    SW = "sw"
    W = "w"
    NW = "nw"

    @property
    def moves_left(self) -> bool:
        return "w" in self.value

    @property
    def moves_right(self) -> bool:
        return "e" in self.value

    @property
    def moves_top(self) -> bool:
        return "n" in self.value

    @property
    def moves_bottom(self) -> bool:
        return "s" in self.value

    @property
    def mobile_edges(self) -> tuple[Edge, ...]:
        """Edges this handle drags, x-axis edge first."""
        edges = []
        if self.moves_left:
            edges.append(Edge.LEFT)
        if self.moves_right:
            edges.append(Edge.RIGHT)
        if self.moves_top:
            edges.append(Edge.TOP)
        if self.moves_bottom:
            edges.append(Edge.BOTTOM)
        return tuple(edges)


def parse_handle(value: "ResizeHandle | str | None") -> Optional[ResizeHandle]:
    """Coerce a handle identifier, returning None when it is not recognised."""
    if isinstance(value, ResizeHandle):
        return value
    try:
        return ResizeHandle(value)
    except ValueError:
        return None


class SnapSource(str, Enum):
    """Which mechanism produced the corrected geometry."""

    NONE = "none"
    ALIGNMENT = "alignment"
    GRID = "grid"
    MIXED = "mixed"


# ============================================================================
# Value Models
# ============================================================================


class Point(BaseModel):
    """A position in artboard space."""

    model_config = ConfigDict(frozen=True)

    x: float
    y: float


class Size(BaseModel):
    """Width and height in artboard pixels."""

    model_config = ConfigDict(frozen=True)

    width: float = Field(ge=0)
    height: float = Field(ge=0)


class Rectangle(BaseModel):
    """Axis-aligned rectangle.

    Width and height are non-negative at rest but are left unvalidated so a
    resize can represent a transient rectangle before it is clamped.
    """

    model_config = ConfigDict(frozen=True)

    x: float = Field(description="Left position")
    y: float = Field(description="Top position")
    width: float = Field(description="Width")
    height: float = Field(description="Height")

    @property
    def right(self) -> float:
        """Right edge position."""
        return self.x + self.width

    @property
    def bottom(self) -> float:
        """Bottom edge position."""
        return self.y + self.height

    @property
    def center_x(self) -> float:
        """Horizontal center."""
        return self.x + self.width / 2

    @property
    def center_y(self) -> float:
        """Vertical center."""
        return self.y + self.height / 2

    @property
    def position(self) -> Point:
        return Point(x=self.x, y=self.y)

    def edge(self, edge: Edge) -> float:
        """Coordinate of one of the rectangle's snappable lines."""
        return getattr(self, _EDGE_ATTRS[edge])

    def with_position(self, x: float, y: float) -> "Rectangle":
        return self.model_copy(update={"x": x, "y": y})

    def with_size(self, width: float, height: float) -> "Rectangle":
        return self.model_copy(update={"width": width, "height": height})

    def as_bounds(self, component_id: str) -> "ComponentBounds":
        return ComponentBounds(
            id=component_id, x=self.x, y=self.y, width=self.width, height=self.height
        )

    def to_rect(self) -> "Rectangle":
        """Plain rectangle without any subclass fields."""
        return Rectangle(x=self.x, y=self.y, width=self.width, height=self.height)


_EDGE_ATTRS = {
    Edge.LEFT: "x",
    Edge.RIGHT: "right",
    Edge.CENTER_X: "center_x",
    Edge.TOP: "y",
    Edge.BOTTOM: "bottom",
    Edge.CENTER_Y: "center_y",
}


class ComponentBounds(Rectangle):
    """Read-only snapshot of a component's rectangle on an artboard."""

    id: str


class AlignmentGuide(BaseModel):
    """An accepted alignment between the moving element and its siblings."""

    model_config = ConfigDict(frozen=True)

    axis: Axis
    position: float = Field(description="Line coordinate on the guide's axis")
    kind: GuideKind
    component_ids: tuple[str, ...] = Field(
        default=(), description="Moving id first, then aligned sibling ids"
    )

    @property
    def key(self) -> str:
        """Identity of the rendered line."""
        return f"{self.axis.value}-{self.position:g}"


class GuideExtent(BaseModel):
    """On-screen span of a guide line along the perpendicular axis."""

    model_config = ConfigDict(frozen=True)

    start: float
    end: float

    @property
    def length(self) -> float:
        return max(0.0, self.end - self.start)


class SnapModifiers(BaseModel):
    """Keyboard modifiers relevant to snapping."""

    model_config = ConfigDict(frozen=True)

    bypass_all_snapping: bool = Field(default=False, description="Alt/Option held")
    lock_aspect_ratio: bool = Field(default=False, description="Shift held")


class MovingElement(BaseModel):
    """Identity and size of the element being dragged."""

    model_config = ConfigDict(frozen=True)

    id: str
    width: float
    height: float
