"""
Module: engine.config

Purpose:
    Configuration for the layout pipeline. Immutable settings for overflow
    reporting, grow-to-fit re-measurement and debug output.

Key Classes:
    - LayoutConfig: Settings for layout_boxes()

Dependencies:
    - dataclasses (std)

Used By:
    - engine.pipeline: layout_boxes()
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional


@dataclass(frozen=True)
class LayoutConfig:
    """
    Configuration for a layout call (immutable).

    Attributes:
        warn_on_overflow: Report top-level boxes crossing the container's
            right or bottom edge in LayoutResult.warnings
        grow_to_fit: When content overflows the container vertically,
            measure once more with the container grown to
            ceil(content_bottom + grow_padding_px)
        grow_padding_px: Extra height added when growing the container
        debug_overlay_dir: If set, write a PNG overlay of every result here

    Example:
        >>> config = LayoutConfig(grow_to_fit=True)
        >>> config.grow_padding_px
        20.0
    """

    warn_on_overflow: bool = True
    grow_to_fit: bool = False
    grow_padding_px: float = 20.0
    debug_overlay_dir: Optional[Path] = None

    def __post_init__(self) -> None:
        """Validate configuration on construction."""
        if self.grow_padding_px < 0:
            raise ValueError(f"grow_padding_px must be >= 0: {self.grow_padding_px}")
