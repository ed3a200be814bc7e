"""
Core data models for box layout.

All models are frozen dataclasses; transformations return new instances.
"""

from .geometry import ContainerBounds, Offset, Rect, Size
from .boxes import Box, DimensionConstraint, PositionedBox

__all__ = [
    "Box",
    "DimensionConstraint",
    "PositionedBox",
    "ContainerBounds",
    "Offset",
    "Rect",
    "Size",
]
