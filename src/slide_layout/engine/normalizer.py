"""
Module: engine.normalizer

Purpose:
    Converts oracle-space rectangles into a PositionedBox tree whose
    coordinates are relative to each node's logical parent.

Key Functions:
    - normalize(): Box tree + rects -> PositionedBox tree
    - child_group_offset(): Wrapper offset relative to its container
    - collect_child_group_offsets(): All wrapper offsets of a tree

Key Classes:
    - MissingMeasurementError: No rect for a box id

Dependencies:
    - core.models: Box, PositionedBox, Rect, Offset

Used By:
    - engine.pipeline: layout_boxes()

Coordinate Rules:
    - Root: positioned relative to itself, always (0, 0)
    - Child without wrapper: child_rect - parent_rect
    - Child inside a child-group wrapper:
          (wrapper_rect - parent_rect) + (child_rect - wrapper_rect)
      so the wrapper never shows up as a node
    - Fixed boxes keep their declared size, variable boxes take the
      measured size. The root always takes the measured (container) size
"""

from __future__ import annotations

from typing import Dict, Mapping, Optional

from slide_layout.core.models import Box, Offset, PositionedBox, Rect


class MissingMeasurementError(LookupError):
    """
    A staged box has no rectangle.

    Cannot happen when the rects came from measure() on the same tree, so
    this signals a programming error.
    """

    def __init__(self, box_id: str, what: str = "box"):
        super().__init__(f"No measurement for {what} {box_id!r}")
        self.box_id = box_id


def normalize(box: Box, rects: Mapping[str, Rect]) -> PositionedBox:
    """
    Build a PositionedBox tree from measured rectangles.

    Args:
        box: Root of the Box tree that was measured
        rects: Measurement (or any id -> Rect mapping) for the tree. Wrapper
            rects are looked up through rects.wrapper_rect() when present.

    Returns:
        PositionedBox tree isomorphic to box

    Raises:
        MissingMeasurementError: If any box or wrapper rect is absent

    Example:
        >>> root = normalize(board, measurement)
        >>> (root.x, root.y)
        (0.0, 0.0)
    """
    rect = _rect_for(rects, box.id)
    # The root is staged at the container size, whatever it declares
    return _position(box, rect, Offset(0.0, 0.0), rects, declared_size=False)


def child_group_offset(rects: Mapping[str, Rect], box_id: str) -> Offset:
    """
    Resolved offset of a box's child-group wrapper relative to the box.

    Callers composing higher-level coordinate systems (e.g. a page content
    offset) add this to positions they derive from the wrapper.

    Raises:
        MissingMeasurementError: If the box or its wrapper was not measured
    """
    container = _rect_for(rects, box_id)
    wrapper = _wrapper_rect_for(rects, box_id)
    if wrapper is None:
        raise MissingMeasurementError(box_id, what="child group of")
    return wrapper.offset_from(container)


def collect_child_group_offsets(box: Box, rects: Mapping[str, Rect]) -> Dict[str, Offset]:
    """Offsets of every staged wrapper in the tree, keyed by owning box id."""
    return {
        node.id: child_group_offset(rects, node.id)
        for node in box.iter_all()
        if node.has_child_group
    }


def _position(
    box: Box,
    rect: Rect,
    position: Offset,
    rects: Mapping[str, Rect],
    declared_size: bool = True,
) -> PositionedBox:
    """Position box at the given parent-relative offset and recurse."""
    children = []
    if not box.is_leaf:
        # Reference for children: the wrapper when one was staged
        reference = rect
        base = Offset(0.0, 0.0)
        if box.has_child_group:
            reference = _wrapper_rect_for(rects, box.id)
            if reference is None:
                raise MissingMeasurementError(box.id, what="child group of")
            base = reference.offset_from(rect)

        for child in box.children:
            child_rect = _rect_for(rects, child.id)
            child_position = base + child_rect.offset_from(reference)
            children.append(_position(child, child_rect, child_position, rects))

    use_declared = declared_size and box.is_fixed
    width = box.width if use_declared else rect.width
    height = box.height if use_declared else rect.height

    return PositionedBox(
        id=box.id,
        x=position.x,
        y=position.y,
        width=width,
        height=height,
        children=tuple(children),
        color=box.color,
    )


def _rect_for(rects: Mapping[str, Rect], box_id: str) -> Rect:
    try:
        return rects[box_id]
    except KeyError:
        raise MissingMeasurementError(box_id) from None


def _wrapper_rect_for(rects: Mapping[str, Rect], box_id: str) -> Optional[Rect]:
    lookup = getattr(rects, "wrapper_rect", None)
    if lookup is None:
        return None
    return lookup(box_id)
