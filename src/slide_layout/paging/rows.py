"""
Module: paging.rows

Purpose:
    Cluster an ordered sibling sequence of positioned boxes into rows by
    vertical proximity.

Key Functions:
    - group_rows(): Boxes in emission order -> Rows

Algorithm:
    Walk boxes in the order given. A box joins the current row when its
    y is within epsilon of the row's top; otherwise it opens a new row.
    The input is NOT sorted: boxes are expected in the Oracle's
    row-major emission order (left-to-right within a row).

Dependencies:
    - paging.models: Row

Used By:
    - paging.paginator: split_into_slides()
"""

from __future__ import annotations

from typing import Iterable, List, Optional

from slide_layout.core.models import PositionedBox

from .models import Row

# Absorbs sub-pixel rounding between nominally aligned boxes
DEFAULT_EPSILON_PX = 1.0


def group_rows(
    boxes: Iterable[PositionedBox],
    epsilon_px: float = DEFAULT_EPSILON_PX,
) -> List[Row]:
    """
    Group boxes into rows, preserving encounter order.

    Args:
        boxes: Sibling boxes in row-major emission order
        epsilon_px: Max |box.y - row.top| for a box to join the current row

    Returns:
        Rows in encounter order, members in encounter order

    Raises:
        ValueError: If epsilon_px is negative

    Example:
        >>> rows = group_rows([box(y=0), box(y=0.4), box(y=50)])
        >>> [len(row.boxes) for row in rows]
        [2, 1]
    """
    if epsilon_px < 0:
        raise ValueError(f"epsilon_px must be >= 0: {epsilon_px}")

    rows: List[Row] = []
    current: Optional[Row] = None

    for box in boxes:
        if current is not None and abs(box.y - current.top) <= epsilon_px:
            current.add(box)
        else:
            current = Row.start(box)
            rows.append(current)

    return rows
