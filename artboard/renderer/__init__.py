"""Renderer module - draws alignment guides over an artboard."""

from artboard.renderer.guide_overlay import GuideLine, GuideOverlay, GuideOverlayRenderer

__all__ = [
    "GuideLine",
    "GuideOverlay",
    "GuideOverlayRenderer",
]
