"""
Module: engine.adapter

Purpose:
    Layout Oracle adapter. Stages a Box tree, issues exactly one
    measurement barrier, then reads every node's rectangle in one batch.

Key Functions:
    - measure(): Box tree + container bounds -> Measurement

Key Classes:
    - Measurement: Read-only id -> Rect mapping, plus wrapper rects

Dependencies:
    - engine.tree_builder: start_staged_tree(), stage_descendants()
    - engine.oracle: LayoutOracle protocol

Used By:
    - engine.pipeline: layout_boxes()
    - engine.normalizer: consumes Measurement

Design Notes:
    Interleaving staging and reads for different subtrees is not allowed:
    each extra barrier costs far more than extra staged nodes, and nodes
    measured in different passes can disagree about sibling geometry.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Dict, Iterator, Optional

from slide_layout.core.models import Box, ContainerBounds, Rect

from .oracle import LayoutOracle
from .tree_builder import stage_descendants, start_staged_tree

logger = logging.getLogger(__name__)


class Measurement(Mapping):
    """
    Rectangles for one layout call, keyed by box id.

    Behaves as a read-only Mapping[str, Rect]. Wrapper rectangles are kept
    apart, keyed by the id of the box that owns the wrapper, so they can
    never collide with box ids.

    Duplicate box ids in the source tree leave the last rectangle read.

    Example:
        >>> m = measure(oracle, board, ContainerBounds(600, 400))
        >>> m["card-1"]
        Rect(x=-10000.0, y=-10000.0, width=50, height=50)
    """

    __slots__ = ("_rects", "_wrappers")

    def __init__(
        self,
        rects: Optional[Dict[str, Rect]] = None,
        wrappers: Optional[Dict[str, Rect]] = None,
    ) -> None:
        self._rects = dict(rects or {})
        self._wrappers = dict(wrappers or {})

    @classmethod
    def empty(cls) -> Measurement:
        return cls()

    def __getitem__(self, box_id: str) -> Rect:
        return self._rects[box_id]

    def __iter__(self) -> Iterator[str]:
        return iter(self._rects)

    def __len__(self) -> int:
        return len(self._rects)

    def wrapper_rect(self, box_id: str) -> Optional[Rect]:
        """Rect of the child-group wrapper owned by box_id, if any."""
        return self._wrappers.get(box_id)

    @property
    def wrapper_ids(self) -> frozenset[str]:
        return frozenset(self._wrappers)

    def __repr__(self) -> str:
        return f"Measurement({len(self._rects)} rects, {len(self._wrappers)} wrappers)"


def measure(
    oracle: LayoutOracle,
    root: Box,
    bounds: ContainerBounds,
) -> Measurement:
    """
    Measure every node of a Box tree with a single Oracle barrier.

    Order of operations:
        1. Stage the whole tree (create + attach, no reads)
        2. One oracle.compute() on the root
        3. Read all rects in one batch
        4. Release staging artifacts (also when staging or the barrier fails)

    Args:
        oracle: Layout Oracle
        root: Root box, staged as the container
        bounds: Container bounds

    Returns:
        Measurement for all boxes and wrappers. Empty, without contacting
        the Oracle, when the container is degenerate.

    Raises:
        LayoutOracleError: Propagated unchanged from the Oracle
    """
    if bounds.is_degenerate:
        logger.debug(f"Degenerate container {bounds.width}x{bounds.height}, skipping layout")
        return Measurement.empty()

    tree = start_staged_tree(oracle, root, bounds)
    try:
        stage_descendants(oracle, tree)
        oracle.compute(tree.root.handle, bounds)

        rects: Dict[str, Rect] = {}
        wrappers: Dict[str, Rect] = {}
        for node in tree.iter_nodes():
            rects[node.box.id] = oracle.rect(node.handle)
            if node.wrapper is not None:
                wrappers[node.box.id] = oracle.rect(node.wrapper)
    finally:
        oracle.release(tree.root.handle)

    if len(rects) < tree.node_count:
        logger.debug(
            f"Measured {tree.node_count} boxes into {len(rects)} ids; "
            f"duplicate ids were overwritten"
        )
    return Measurement(rects, wrappers)
