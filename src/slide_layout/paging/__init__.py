"""
Module: paging

Purpose:
    Row-based pagination of positioned boxes into bounded-height slides.

Key Functions:
    - group_rows(): Cluster boxes into rows
    - paginate(): Pack rows into pages
    - split_into_slides(): group_rows() + paginate() for a SlideConfig

Key Classes:
    - SlideConfig: Slide dimensions and offsets
    - Row: Boxes sharing a vertical band
    - Page: Boxes re-based to a page-local origin

Dependencies:
    - slide_layout.core.models

Used By:
    - Callers needing paged output from engine.layout_boxes()
"""

from .config import SlideConfig
from .models import Row, Page
from .rows import group_rows
from .paginator import paginate, split_into_slides

__all__ = [
    # Config
    "SlideConfig",
    # Models
    "Row",
    "Page",
    # Functions
    "group_rows",
    "paginate",
    "split_into_slides",
]
