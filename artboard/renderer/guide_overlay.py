"""
guide_overlay.py - Alignment guide overlay.

Draws the guides produced by the snap resolver in artboard space. It NEVER
decides which guides exist; it only projects each guide onto the components it
aligns and turns the result into drawable lines or SVG.

Newly appearing guides are flagged so the host can flash them as snap
feedback.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Optional, Sequence, Union
from xml.etree import ElementTree as ET
from xml.etree.ElementTree import Element, SubElement

from artboard.config import get_settings
from artboard.constraints.alignment import get_guide_bounds
from artboard.geometry.schema import AlignmentGuide, Axis, ComponentBounds


SVG_NS = "http://www.w3.org/2000/svg"


def format_px(value: float) -> str:
    """Format pixel value for SVG (2 decimal places)."""
    return f"{value:.2f}"


@dataclass(frozen=True)
class GuideLine:
    """A guide ready to draw: line coordinate plus its projected span."""

    axis: Axis
    position: float
    start: float
    end: float
    is_new: bool = False

    @property
    def key(self) -> str:
        return f"{self.axis.value}-{self.position:g}"

    @property
    def length(self) -> float:
        return max(0.0, self.end - self.start)

    def endpoints(self) -> tuple[float, float, float, float]:
        """(x1, y1, x2, y2) in artboard pixels."""
        if self.axis == Axis.X:
            return self.position, self.start, self.position, self.end
        return self.start, self.position, self.end, self.position


class GuideOverlay:
    """
    Tracks the displayed guide set between updates.

    A guide is "new" on the first update it appears in and stays unflagged
    while it remains visible.
    """

    def __init__(self) -> None:
        self._shown: set[str] = set()

    def lines(
        self,
        guides: Iterable[AlignmentGuide],
        components: Sequence[ComponentBounds],
    ) -> list[GuideLine]:
        """Project guides into drawable lines and update the shown set.

        Guides on the same line are drawn once, spanning the union of their
        extents.
        """
        merged: dict[str, GuideLine] = {}
        for guide in guides:
            extent = get_guide_bounds(guide, components)
            existing = merged.get(guide.key)
            if existing is not None:
                merged[guide.key] = GuideLine(
                    axis=guide.axis,
                    position=guide.position,
                    start=min(existing.start, extent.start),
                    end=max(existing.end, extent.end),
                )
            else:
                merged[guide.key] = GuideLine(
                    axis=guide.axis,
                    position=guide.position,
                    start=extent.start,
                    end=extent.end,
                )

        lines = [
            GuideLine(
                axis=line.axis,
                position=line.position,
                start=line.start,
                end=line.end,
                is_new=key not in self._shown,
            )
            for key, line in merged.items()
        ]
        self._shown = set(merged)
        return lines

    def clear(self) -> None:
        """Forget the shown set (the gesture ended)."""
        self._shown = set()


class GuideOverlayRenderer:
    """
    Renders guide lines to SVG for an artboard.

    Colour, thickness and opacity default to the configured settings.
    """

    def __init__(
        self,
        color: Optional[str] = None,
        thickness_px: Optional[float] = None,
        opacity: Optional[float] = None,
    ):
        settings = get_settings()
        self.color = color or settings.guide_color
        self.thickness_px = thickness_px if thickness_px is not None else settings.guide_thickness_px
        self.opacity = opacity if opacity is not None else settings.guide_opacity
        self.overlay = GuideOverlay()

    def render(
        self,
        guides: Sequence[AlignmentGuide],
        components: Sequence[ComponentBounds],
        width: float,
        height: float,
        output: Optional[Union[str, Path]] = None,
    ) -> str:
        """
        Render guides over an artboard of the given size.

        Args:
            guides: Active guides; an empty list renders an empty overlay.
            components: Bounds used to project each guide.
            width: Artboard width in pixels.
            height: Artboard height in pixels.
            output: Optional output path for file

        Returns:
            SVG content as string
        """
        svg = Element('svg')
        svg.set('xmlns', SVG_NS)
        svg.set('width', format_px(width))
        svg.set('height', format_px(height))
        svg.set('viewBox', f"0 0 {format_px(width)} {format_px(height)}")
        svg.set('pointer-events', 'none')

        if not guides:
            self.overlay.clear()
        else:
            group = SubElement(svg, 'g')
            group.set('id', 'alignment-guides')
            for line in self.overlay.lines(guides, components):
                self._render_line(group, line)

        ET.indent(svg, space="  ")
        svg_str = ET.tostring(svg, encoding='unicode')

        if output:
            Path(output).write_text(svg_str, encoding='utf-8')

        return svg_str

    def _render_line(self, parent: Element, line: GuideLine) -> None:
        x1, y1, x2, y2 = line.endpoints()
        el = SubElement(parent, 'line')
        el.set('x1', format_px(x1))
        el.set('y1', format_px(y1))
        el.set('x2', format_px(x2))
        el.set('y2', format_px(y2))
        el.set('stroke', self.color)
        el.set('stroke-width', format_px(self.thickness_px))
        # New guides flash at full strength
        el.set('stroke-opacity', format_px(1.0 if line.is_new else self.opacity))
        el.set('data-guide', line.key)
        if line.is_new:
            el.set('class', 'guide guide-new')
        else:
            el.set('class', 'guide')
