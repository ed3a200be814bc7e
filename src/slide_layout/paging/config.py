"""
Module: paging.config

Purpose:
    Configuration for splitting positioned boxes into slides.
    Defines slide dimensions, content offset and row grouping tolerance.

Key Classes:
    - SlideConfig: Immutable slide configuration

Dependencies:
    - dataclasses (std)

Used By:
    - paging.paginator: split_into_slides()
"""

from __future__ import annotations

from dataclasses import dataclass, field

from slide_layout.core.models import Offset


# 16:9 slide at 960px wide
DEFAULT_SLIDE_WIDTH_PX = 960
DEFAULT_SLIDE_HEIGHT_PX = 540
DEFAULT_ROW_EPSILON_PX = 1.0


@dataclass(frozen=True)
class SlideConfig:
    """
    Configuration for slide splitting (immutable).

    Attributes:
        slide_width: Slide width in pixels
        slide_height: Slide height in pixels
        content_offset: Where the content area starts on each slide. Every
            slide's first row lands at content_offset.y.
        row_epsilon_px: Max y difference for boxes to share a row
        order_by_position: Sort boxes by (y, x) before grouping rows.
            Off by default: rows trust the Oracle's emission order.

    Example:
        >>> config = SlideConfig(slide_height=540, content_offset=Offset(0, 60))
        >>> config.max_layout_height
        480
    """

    slide_width: float = DEFAULT_SLIDE_WIDTH_PX
    slide_height: float = DEFAULT_SLIDE_HEIGHT_PX
    content_offset: Offset = field(default_factory=Offset)
    row_epsilon_px: float = DEFAULT_ROW_EPSILON_PX
    order_by_position: bool = False

    def __post_init__(self) -> None:
        """Validate configuration on construction."""
        if self.slide_width <= 0:
            raise ValueError(f"slide_width must be positive: {self.slide_width}")
        if self.slide_height <= 0:
            raise ValueError(f"slide_height must be positive: {self.slide_height}")
        if self.row_epsilon_px < 0:
            raise ValueError(f"row_epsilon_px must be >= 0: {self.row_epsilon_px}")
        if self.max_layout_height <= 0:
            raise ValueError("Content offset exceeds slide height")

    @property
    def max_layout_height(self) -> float:
        """Height available for content below the content offset."""
        return self.slide_height - self.content_offset.y
