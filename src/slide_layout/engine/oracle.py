"""
Module: engine.oracle

Purpose:
    Call contract of the Layout Oracle: the external engine that resolves
    box sizes and positions from style descriptors. This package consumes
    an Oracle, it never implements one.

Key Classes:
    - LayoutOracle: Protocol for a staging layout engine
    - LayoutOracleError: Base class for failures raised by an Oracle

Call Contract:
    1. Build phase: create_node() / append_child() for the whole tree
    2. Exactly one compute() on the root (the measurement barrier)
    3. Read phase: rect() for every staged node
    4. release() the staged tree

    Rects are reported in one shared ancestor coordinate space; only
    differences between rects are meaningful.

Dependencies:
    - typing (std)

Used By:
    - engine.tree_builder: Build phase
    - engine.adapter: Barrier, read phase and release
"""

from __future__ import annotations

from typing import Any, Optional, Protocol, runtime_checkable

from slide_layout.core.models import ContainerBounds, Rect, Size

# Opaque per-Oracle node reference
NodeHandle = Any


class LayoutOracleError(Exception):
    """
    Failure reported by the Layout Oracle (e.g. a style it refuses).

    Propagated to callers unchanged; nothing in this package retries.
    """


@runtime_checkable
class LayoutOracle(Protocol):
    """Staging layout engine consumed by engine.adapter.measure()."""

    def create_node(self, style: str, size: Optional[Size] = None) -> NodeHandle:
        """Create a detached node. size is a hard constraint when given."""
        ...

    def append_child(self, parent: NodeHandle, child: NodeHandle) -> None:
        """Attach child as the last child of parent."""
        ...

    def compute(self, root: NodeHandle, bounds: ContainerBounds) -> None:
        """Lay out the whole staged tree under root. The measurement barrier."""
        ...

    def rect(self, node: NodeHandle) -> Rect:
        """Resolved rectangle of a staged node, valid after compute()."""
        ...

    def release(self, root: NodeHandle) -> None:
        """Tear down every staging artifact under root."""
        ...
