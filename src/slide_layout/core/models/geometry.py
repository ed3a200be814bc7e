"""
Module: geometry

Purpose:
    Provides the small value types shared by the measurement and paging
    layers: oracle-space rectangles, 2D offsets, container bounds and
    size hints.

Key Classes:
    - Rect: Rectangle in the Layout Oracle's shared ancestor space
    - Offset: 2D translation, supports addition
    - ContainerBounds: Pixel bounds of the layout container
    - Size: Explicit width/height hint for fixed boxes

Dependencies:
    - dataclasses (std)

Used By:
    - core.models.boxes
    - engine.adapter, engine.normalizer
    - paging.paginator
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Offset:
    """
    2D translation in pixels.

    Example:
        >>> Offset(10, 40) + Offset(5, 0)
        Offset(x=15, y=40)
    """

    x: float = 0.0
    y: float = 0.0

    def __add__(self, other: Offset) -> Offset:
        return Offset(self.x + other.x, self.y + other.y)

    def to_dict(self) -> dict:
        return {"x": self.x, "y": self.y}

    @classmethod
    def from_dict(cls, data: dict) -> Offset:
        return cls(x=data.get("x", 0.0), y=data.get("y", 0.0))


@dataclass(frozen=True, slots=True)
class Size:
    """Explicit size hint passed to the Layout Oracle."""

    width: float
    height: float


@dataclass(frozen=True, slots=True)
class ContainerBounds:
    """
    Pixel bounds of the container a box tree is laid out in.

    A container with a non-positive width or height is degenerate: layout
    calls return empty results for it instead of raising.
    """

    width: float
    height: float

    @property
    def is_degenerate(self) -> bool:
        """True when either dimension is <= 0."""
        return self.width <= 0 or self.height <= 0

    def as_size(self) -> Size:
        return Size(self.width, self.height)


@dataclass(frozen=True, slots=True)
class Rect:
    """
    Rectangle reported by the Layout Oracle.

    Coordinates live in the Oracle's shared ancestor space, so two rects
    are only meaningful relative to each other.

    Attributes:
        x: Left edge
        y: Top edge
        width: Width in pixels
        height: Height in pixels

    Example:
        >>> parent = Rect(100, 200, 300, 300)
        >>> Rect(110, 250, 30, 30).offset_from(parent)
        Offset(x=10, y=50)
    """

    x: float
    y: float
    width: float
    height: float

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height

    def offset_from(self, reference: Rect) -> Offset:
        """
        Position of this rect's origin relative to another rect's origin.

        Args:
            reference: Rect to measure from

        Returns:
            Offset of (self.x - reference.x, self.y - reference.y)
        """
        return Offset(self.x - reference.x, self.y - reference.y)
