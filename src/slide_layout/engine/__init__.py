"""
Module: engine

Purpose:
    Box-tree layout protocol: stage a whole Box tree in a Layout Oracle,
    measure it behind a single barrier, and normalize the rectangles into
    a parent-relative PositionedBox tree.

Key Functions:
    - layout_boxes(): Main entry point
    - measure(): Stage + single barrier + batch read
    - normalize(): Rects -> PositionedBox tree
    - build_staged_tree(): Build phase only

Key Classes:
    - LayoutOracle: Protocol for the external layout engine
    - LayoutConfig: Pipeline settings
    - LayoutResult: Pipeline output
    - Measurement: id -> Rect mapping

Dependencies:
    - slide_layout.core.models

Used By:
    - slide_layout.paging (consumes LayoutResult.boxes)
"""

from .oracle import LayoutOracle, LayoutOracleError
from .tree_builder import (
    build_staged_tree,
    start_staged_tree,
    stage_descendants,
    StagedNode,
    StagedTree,
)
from .adapter import measure, Measurement
from .normalizer import (
    normalize,
    child_group_offset,
    collect_child_group_offsets,
    MissingMeasurementError,
)
from .config import LayoutConfig
from .timing import TimingLog, timed_phase
from .pipeline import layout_boxes, LayoutResult

__all__ = [
    # Oracle contract
    "LayoutOracle",
    "LayoutOracleError",
    # Build + measure
    "build_staged_tree",
    "start_staged_tree",
    "stage_descendants",
    "StagedNode",
    "StagedTree",
    "measure",
    "Measurement",
    # Normalize
    "normalize",
    "child_group_offset",
    "collect_child_group_offsets",
    "MissingMeasurementError",
    # Pipeline
    "LayoutConfig",
    "LayoutResult",
    "layout_boxes",
    "TimingLog",
    "timed_phase",
]
