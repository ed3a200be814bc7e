"""
Module: engine.pipeline

Purpose:
    Main entry point of the measurement side: runs the adapter and the
    normalizer for one Box tree and packages the result with diagnostics.

Key Functions:
    - layout_boxes(): Box tree + container -> LayoutResult

Key Classes:
    - LayoutResult: Positioned tree, wrapper offsets and warnings

Pipeline:
    1. measure() - stage, one barrier, batch read
    2. normalize() - parent-relative PositionedBox tree
    3. Optional grow-to-fit: re-run 1-2 once with a taller container
    4. Overflow warnings, optional debug overlay

Dependencies:
    - engine.adapter, engine.normalizer, engine.timing
    - utils.visualizer: debug overlay (PIL)

Used By:
    - Callers; paging.split_into_slides() consumes LayoutResult.boxes
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from slide_layout.core.models import Box, ContainerBounds, Offset, PositionedBox

from .adapter import measure
from .config import LayoutConfig
from .normalizer import collect_child_group_offsets, normalize
from .oracle import LayoutOracle
from .timing import TimingLog, timed_phase

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LayoutResult:
    """
    Layout output with diagnostics.

    Attributes:
        root: Positioned root (the container), None for degenerate containers
        bounds: Container bounds the result was measured with (grown when
            grow_to_fit kicked in)
        child_group_offsets: Wrapper offset per owning box id
        warnings: Overflow messages

    Example:
        >>> result = layout_boxes(oracle, board, ContainerBounds(600, 400))
        >>> [box.id for box in result.boxes]
        ['card-1', 'card-2']
    """

    root: Optional[PositionedBox]
    bounds: ContainerBounds
    child_group_offsets: Dict[str, Offset] = field(default_factory=dict)
    warnings: List[str] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return self.root is None

    @property
    def boxes(self) -> Tuple[PositionedBox, ...]:
        """Top-level positioned boxes, in source order."""
        if self.root is None:
            return ()
        return self.root.children

    @property
    def content_height(self) -> float:
        """Lowest bottom edge among top-level boxes (0.0 when empty)."""
        return max((box.bottom for box in self.boxes), default=0.0)


def layout_boxes(
    oracle: LayoutOracle,
    root: Box,
    bounds: ContainerBounds,
    config: Optional[LayoutConfig] = None,
    timing: Optional[TimingLog] = None,
) -> LayoutResult:
    """
    Position a Box tree inside a container.

    Args:
        oracle: Layout Oracle
        root: Root box; its children are the top-level boxes
        bounds: Container bounds
        config: Pipeline settings (defaults to LayoutConfig())
        timing: Optional log receiving stage_and_measure / normalize timings

    Returns:
        LayoutResult. For degenerate containers the result is empty.

    Raises:
        LayoutOracleError: Propagated unchanged from the Oracle
        MissingMeasurementError: If the Oracle skipped a node
    """
    config = config or LayoutConfig()
    timing = timing or TimingLog()

    if bounds.is_degenerate:
        logger.debug(f"Degenerate container {bounds.width}x{bounds.height}: empty layout")
        return LayoutResult(root=None, bounds=bounds)

    positioned, offsets = _run(oracle, root, bounds, timing)

    if config.grow_to_fit:
        content_bottom = max((box.bottom for box in positioned.children), default=0.0)
        if content_bottom > bounds.height:
            grown = ContainerBounds(bounds.width, math.ceil(content_bottom + config.grow_padding_px))
            logger.debug(
                f"Content bottom {content_bottom} exceeds container height "
                f"{bounds.height}; re-measuring at {grown.height}"
            )
            bounds = grown
            positioned, offsets = _run(oracle, root, bounds, timing)

    warnings = _overflow_warnings(positioned, bounds) if config.warn_on_overflow else []
    for warning in warnings:
        logger.warning(warning)

    result = LayoutResult(
        root=positioned,
        bounds=bounds,
        child_group_offsets=offsets,
        warnings=warnings,
    )

    if config.debug_overlay_dir is not None:
        from slide_layout.utils.visualizer import save_debug_overlay
        save_debug_overlay(positioned, config.debug_overlay_dir, name=root.id, bounds=bounds)

    return result


def _run(
    oracle: LayoutOracle,
    root: Box,
    bounds: ContainerBounds,
    timing: TimingLog,
) -> Tuple[PositionedBox, Dict[str, Offset]]:
    with timed_phase(timing, "stage_and_measure"):
        measurement = measure(oracle, root, bounds)
    with timed_phase(timing, "normalize"):
        positioned = normalize(root, measurement)
        offsets = collect_child_group_offsets(root, measurement)

    logger.debug(
        f"Laid out {positioned.node_count} boxes in "
        f"{timing.phase_timings['stage_and_measure'][-1] * 1000:.2f}ms"
    )
    return positioned, offsets


def _overflow_warnings(root: PositionedBox, bounds: ContainerBounds) -> List[str]:
    """Messages for top-level boxes crossing the container's right/bottom edge."""
    warnings = []
    for box in root.children:
        if box.right > bounds.width or box.bottom > bounds.height:
            warnings.append(
                f"Box {box.id!r} overflows container: spans to "
                f"({box.right}, {box.bottom}) in {bounds.width}x{bounds.height}"
            )
    return warnings
