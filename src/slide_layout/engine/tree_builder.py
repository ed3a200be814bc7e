"""
Module: engine.tree_builder

Purpose:
    Stages an entire Box tree in the Layout Oracle without requesting any
    measurement. Every node, including child-group wrappers, is created
    and attached before the adapter issues its single barrier.

Key Functions:
    - build_staged_tree(): Stage a Box tree, return the handle tree
    - start_staged_tree(): Stage only the root (the container)
    - stage_descendants(): Stage everything below an already staged root

Key Classes:
    - StagedNode: Box paired with its Oracle handle (and wrapper handle)
    - StagedTree: Root of the staged handle tree

Dependencies:
    - engine.oracle: LayoutOracle protocol

Used By:
    - engine.adapter: measure()
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterator, List, Optional

from slide_layout.core.models import Box, ContainerBounds, Size

from .oracle import LayoutOracle, NodeHandle

logger = logging.getLogger(__name__)


@dataclass
class StagedNode:
    """
    A Box staged in the Oracle.

    Attributes:
        box: Source box
        handle: Oracle node for the box
        wrapper: Oracle node of the child-group wrapper, if one was staged
        children: Staged children, in source order
    """
    box: Box
    handle: NodeHandle
    wrapper: Optional[NodeHandle] = None
    children: List[StagedNode] = field(default_factory=list)

    def iter_all(self) -> Iterator[StagedNode]:
        """Pre-order traversal, matching Box.iter_all()."""
        yield self
        for child in self.children:
            yield from child.iter_all()


@dataclass
class StagedTree:
    """Fully staged tree, ready for the measurement barrier."""
    root: StagedNode
    bounds: ContainerBounds
    node_count: int = 0
    wrapper_count: int = 0

    def iter_nodes(self) -> Iterator[StagedNode]:
        return self.root.iter_all()


def build_staged_tree(
    oracle: LayoutOracle,
    root: Box,
    bounds: ContainerBounds,
) -> StagedTree:
    """
    Stage a whole Box tree in the Oracle.

    The root box becomes the layout container and is staged with the
    container bounds as its hard size. Fixed boxes pass their declared
    size; variable boxes pass none. A box with children and a
    child_group_style gets a wrapper node between it and its children.

    No measurement is requested here. If the Oracle refuses a node part
    way through, the nodes staged so far are left attached under the
    root handle; callers that need cleanup should use start_staged_tree()
    and stage_descendants() so they can release the root on failure.

    Args:
        oracle: Layout Oracle to stage into
        root: Root box (the container)
        bounds: Container bounds

    Returns:
        StagedTree mirroring the Box tree

    Example:
        >>> tree = build_staged_tree(oracle, board, ContainerBounds(600, 400))
        >>> tree.node_count == board.node_count
        True
    """
    tree = start_staged_tree(oracle, root, bounds)
    stage_descendants(oracle, tree)
    return tree


def start_staged_tree(
    oracle: LayoutOracle,
    root: Box,
    bounds: ContainerBounds,
) -> StagedTree:
    """Stage the root box alone, sized to the container bounds."""
    return StagedTree(
        root=StagedNode(box=root, handle=oracle.create_node(root.style, bounds.as_size())),
        bounds=bounds,
        node_count=1,
    )


def stage_descendants(oracle: LayoutOracle, tree: StagedTree) -> None:
    """
    Stage every node below the tree's root.

    Each node is attached to its parent (or wrapper) as soon as it is
    created, so everything staged is reachable from the root handle even
    when the Oracle raises midway.
    """
    _stage_children(oracle, tree.root, tree)

    logger.debug(
        f"Staged {tree.node_count} boxes and {tree.wrapper_count} wrappers "
        f"for container {tree.bounds.width}x{tree.bounds.height}"
    )


def _stage_children(oracle: LayoutOracle, parent: StagedNode, tree: StagedTree) -> None:
    """Create, attach and fill children of an already staged node."""
    box = parent.box
    if box.is_leaf:
        return

    target = parent.handle
    if box.has_child_group:
        parent.wrapper = oracle.create_node(box.child_group_style)
        oracle.append_child(parent.handle, parent.wrapper)
        target = parent.wrapper
        tree.wrapper_count += 1

    for child_box in box.children:
        child = StagedNode(box=child_box, handle=oracle.create_node(child_box.style, _size_hint(child_box)))
        oracle.append_child(target, child.handle)
        parent.children.append(child)
        tree.node_count += 1
        _stage_children(oracle, child, tree)


def _size_hint(box: Box) -> Optional[Size]:
    if box.is_fixed:
        return Size(box.width, box.height)
    return None
