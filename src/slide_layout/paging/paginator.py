"""
Module: paging.paginator

Purpose:
    Pack rows into height-bounded pages, re-basing coordinates per page.
    Rows are atomic: a row is never split across pages.

Key Functions:
    - paginate(): Rows -> Pages
    - split_into_slides(): Positioned boxes -> Pages for a slide config

Algorithm:
    1. page_top starts at the first row's top
    2. For each row, needed = row.bottom - page_top
    3. If the page already holds a row and needed > max height,
       flush the page and restart at this row's top
    4. Append the row either way, so a row taller than a page still
       gets a page of its own
    5. Flush the last page

Dependencies:
    - paging.models: Row, Page
    - paging.rows: group_rows()
    - paging.config: SlideConfig

Used By:
    - Callers producing paged/templated output
"""

from __future__ import annotations

import logging
from typing import Iterable, List, Optional, Sequence

from slide_layout.core.models import Offset, PositionedBox

from .config import SlideConfig
from .models import Page, Row
from .rows import group_rows

logger = logging.getLogger(__name__)


def paginate(
    rows: Sequence[Row],
    max_page_height: float,
    page_offset: Optional[Offset] = None,
) -> List[Page]:
    """
    Arrange rows onto pages.

    Each flushed box is copied with y' = y - page_top + offset.y and
    x' = x + offset.x. Only top-level boxes move; their children keep
    their parent-relative coordinates.

    Args:
        rows: Rows in order (from group_rows())
        max_page_height: Height budget per page, measured from page_top
        page_offset: Local origin of every page (default (0, 0))

    Returns:
        Pages in row order. Zero rows give zero pages.

    Raises:
        ValueError: If max_page_height is not positive

    Example:
        >>> pages = paginate(rows, max_page_height=400)
        >>> [page.box_count for page in pages]
        [5, 1]
    """
    if max_page_height <= 0:
        raise ValueError(f"max_page_height must be positive: {max_page_height}")
    if not rows:
        return []

    offset = page_offset or Offset()
    pages: List[Page] = []
    active_rows: List[Row] = []
    page_top = rows[0].top

    def flush() -> None:
        if not active_rows:
            return
        dy = offset.y - page_top
        boxes = tuple(
            box.translated(offset.x, dy)
            for row in active_rows
            for box in row.boxes
        )
        pages.append(Page(index=len(pages), boxes=boxes, offset=offset, source_top=page_top))
        active_rows.clear()

    for row in rows:
        needed_height = row.bottom - page_top

        if active_rows and needed_height > max_page_height:
            flush()
            page_top = row.top

        if row.height > max_page_height:
            logger.warning(
                f"Row at y={row.top} overflows page {len(pages)}: "
                f"{row.height}px needed, {max_page_height}px available"
            )

        active_rows.append(row)

    flush()

    logger.info(
        f"Paginated {sum(len(row.boxes) for row in rows)} boxes "
        f"in {len(rows)} rows onto {len(pages)} pages"
    )
    return pages


def split_into_slides(
    boxes: Iterable[PositionedBox],
    config: Optional[SlideConfig] = None,
) -> List[Page]:
    """
    Split a flat list of positioned sibling boxes into slides.

    Rows are grouped with config.row_epsilon_px and paginated against
    config.max_layout_height (the slide height below the content offset).
    Every slide's boxes are shifted by config.content_offset.

    Args:
        boxes: Top-level positioned boxes, e.g. LayoutResult.boxes
        config: Slide settings (defaults to SlideConfig())

    Returns:
        One Page per slide
    """
    config = config or SlideConfig()
    boxes = list(boxes)
    if not boxes:
        return []

    if config.order_by_position:
        boxes.sort(key=lambda b: (b.y, b.x))

    rows = group_rows(boxes, epsilon_px=config.row_epsilon_px)
    return paginate(rows, config.max_layout_height, page_offset=config.content_offset)
