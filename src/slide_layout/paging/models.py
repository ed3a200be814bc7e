"""
Module: paging.models

Purpose:
    Data models for pagination: rows of sibling boxes and the pages they
    are packed into.

Key Classes:
    - Row: Sibling boxes sharing a vertical band (built incrementally)
    - Page: Boxes re-based to a page-local origin (immutable)

Dependencies:
    - dataclasses (std)
    - core.models: PositionedBox, Offset

Used By:
    - paging.rows: Creates Rows
    - paging.paginator: Creates Pages
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Tuple

from slide_layout.core.models import Offset, PositionedBox


@dataclass
class Row:
    """
    Sibling boxes judged to occupy the same vertical band.

    Mutable while the grouper fills it; never exposed past the paginator
    except through its boxes.

    Attributes:
        top: y of the first member
        bottom: Max of members' y + height
        boxes: Members in encounter order

    Example:
        >>> row = Row.start(first_box)
        >>> row.add(second_box)
        >>> row.height
        40
    """

    top: float
    bottom: float
    boxes: List[PositionedBox] = field(default_factory=list)

    @classmethod
    def start(cls, box: PositionedBox) -> Row:
        """Open a row with box as its first member."""
        return cls(top=box.y, bottom=box.bottom, boxes=[box])

    def add(self, box: PositionedBox) -> None:
        self.boxes.append(box)
        self.bottom = max(self.bottom, box.bottom)

    @property
    def height(self) -> float:
        return self.bottom - self.top

    def to_dict(self) -> dict:
        return {
            "top": self.top,
            "bottom": self.bottom,
            "boxes": [box.to_dict() for box in self.boxes],
        }


@dataclass(frozen=True)
class Page:
    """
    Boxes of one or more consecutive rows, re-based to the page origin.

    Attributes:
        index: Page number (0-indexed)
        boxes: Top-level boxes with page-local coordinates
        offset: Page offset the boxes were shifted by
        source_top: Pre-pagination y that maps to offset.y

    Example:
        >>> page = Page(index=0, boxes=(box_a, box_b))
        >>> page.box_count
        2
    """

    index: int
    boxes: Tuple[PositionedBox, ...]
    offset: Offset = field(default_factory=Offset)
    source_top: float = 0.0

    @property
    def box_count(self) -> int:
        return len(self.boxes)

    @property
    def is_empty(self) -> bool:
        return len(self.boxes) == 0

    @property
    def height_used(self) -> float:
        """Distance from the page offset to the lowest box bottom."""
        if not self.boxes:
            return 0.0
        return max(box.bottom for box in self.boxes) - self.offset.y

    def to_dict(self) -> dict:
        return {
            "index": self.index,
            "offset": self.offset.to_dict(),
            "sourceTop": self.source_top,
            "boxes": [box.to_dict() for box in self.boxes],
        }

    @classmethod
    def from_dict(cls, data: dict, default_index: int = 0) -> Page:
        return cls(
            index=data.get("index", default_index),
            boxes=tuple(PositionedBox.from_dict(box) for box in data["boxes"]),
            offset=Offset.from_dict(data.get("offset", {})),
            source_top=data.get("sourceTop", 0.0),
        )
