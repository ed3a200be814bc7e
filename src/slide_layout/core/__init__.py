"""
Core package: shared data models, interchange schemas and serialization.

These models are the single source of truth for the engine and paging
layers. Everything here is immutable; the engine produces fresh
PositionedBox trees per call and nothing is cached.
"""

from .models import (
    Box,
    DimensionConstraint,
    PositionedBox,
    ContainerBounds,
    Offset,
    Rect,
    Size,
)

__all__ = [
    "Box",
    "DimensionConstraint",
    "PositionedBox",
    "ContainerBounds",
    "Offset",
    "Rect",
    "Size",
]
