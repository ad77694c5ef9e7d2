"""Size policies for the built-in component types.

Default sizes are used when a component is dropped onto an artboard; minimum,
maximum and aspect ratio constrain every resize.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from artboard.geometry.schema import Size


DEFAULT_COMPONENT_TYPE = "default"


class SizePolicy(BaseModel):
    """Resize constraints and drop size for one component type."""

    model_config = ConfigDict(frozen=True)

    min_width: float = Field(ge=0)
    min_height: float = Field(ge=0)
    max_width: Optional[float] = Field(default=None, description="None means unbounded")
    max_height: Optional[float] = Field(default=None, description="None means unbounded")
    aspect_ratio: Optional[float] = Field(
        default=None, gt=0, description="Locked width/height ratio, None for freeform"
    )
    default_width: float = Field(default=280, gt=0)
    default_height: float = Field(default=200, gt=0)

    @model_validator(mode="after")
    def _check_ranges(self) -> "SizePolicy":
        if self.max_width is not None and self.max_width < self.min_width:
            raise ValueError("max_width must be >= min_width")
        if self.max_height is not None and self.max_height < self.min_height:
            raise ValueError("max_height must be >= min_height")
        return self

    @property
    def min_size(self) -> Size:
        return Size(width=self.min_width, height=self.min_height)

    @property
    def max_size(self) -> Optional[Size]:
        if self.max_width is None and self.max_height is None:
            return None
        return Size(
            width=self.max_width if self.max_width is not None else float("inf"),
            height=self.max_height if self.max_height is not None else float("inf"),
        )

    @property
    def default_size(self) -> Size:
        return Size(width=self.default_width, height=self.default_height)

    def clamp_width(self, width: float) -> float:
        upper = self.max_width if self.max_width is not None else float("inf")
        return max(self.min_width, min(upper, width))

    def clamp_height(self, height: float) -> float:
        upper = self.max_height if self.max_height is not None else float("inf")
        return max(self.min_height, min(upper, height))

    def clamp_size(self, width: float, height: float) -> tuple[float, float]:
        """Clamp a size into the policy's min/max box."""
        return self.clamp_width(width), self.clamp_height(height)


BUILTIN_SIZE_POLICIES: dict[str, SizePolicy] = {
    "chart": SizePolicy(
        min_width=200, min_height=152, default_width=400, default_height=256
    ),
    "chart-line": SizePolicy(
        min_width=200, min_height=152, default_width=400, default_height=256
    ),
    "chart-bar": SizePolicy(
        min_width=200, min_height=152, default_width=400, default_height=256
    ),
    # Doughnuts stay square
    "chart-doughnut": SizePolicy(
        min_width=152, min_height=152, aspect_ratio=1.0,
        default_width=280, default_height=280,
    ),
    "chart-legend": SizePolicy(
        min_width=80, min_height=24, default_width=200, default_height=48
    ),
    "text": SizePolicy(
        min_width=40, min_height=24, default_width=120, default_height=40
    ),
    "heading": SizePolicy(
        min_width=80, min_height=32, max_width=800, max_height=120,
        default_width=304, default_height=48,
    ),
    "kpi": SizePolicy(
        min_width=104, min_height=80, max_width=400, max_height=304,
        default_width=184, default_height=120,
    ),
    DEFAULT_COMPONENT_TYPE: SizePolicy(
        min_width=80, min_height=64, default_width=280, default_height=200
    ),
}
