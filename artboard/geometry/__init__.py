"""Geometry value types shared by the snapping and interaction layers."""

from artboard.geometry.schema import (
    AlignmentGuide,
    Axis,
    ComponentBounds,
    Edge,
    GuideExtent,
    GuideKind,
    MovingElement,
    Point,
    Rectangle,
    ResizeHandle,
    Size,
    SnapModifiers,
    SnapSource,
    parse_handle,
)

__all__ = [
    "AlignmentGuide",
    "Axis",
    "ComponentBounds",
    "Edge",
    "GuideExtent",
    "GuideKind",
    "MovingElement",
    "Point",
    "Rectangle",
    "ResizeHandle",
    "Size",
    "SnapModifiers",
    "SnapSource",
    "parse_handle",
]
