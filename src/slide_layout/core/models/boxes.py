"""
Module: boxes

Purpose:
    Provides the Box and PositionedBox dataclasses - immutable tree nodes
    describing content blocks before and after layout. A PositionedBox tree
    always mirrors the Box tree it was produced from: same ids, same child
    ordering, same shape at every depth.

Key Functions:
    - Box.iter_all() / PositionedBox.iter_all(): Pre-order traversal
    - Box.find(box_id): Find a node by id
    - PositionedBox.translated(dx, dy): Copy with shifted origin
    - to_dict() / from_dict(): JSON interchange shape

Dependencies:
    - dataclasses (std)
    - enum (std)

Used By:
    - engine.tree_builder, engine.normalizer
    - paging.rows, paging.paginator
    - core.utils.serialization
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Iterator, Optional, Tuple


class DimensionConstraint(str, Enum):
    """How a box's size is resolved."""
    FIXED = "fixed"        # Declared width/height are hard constraints
    VARIABLE = "variable"  # Size comes entirely from the Layout Oracle

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True, slots=True)
class Box:
    """
    Content block to be positioned (immutable tree structure).

    The tree looks like:
        Box ("board")            <- root, staged as the layout container
        ├── Box ("card-1")
        │   ├── Box ("field-1")  <- optionally inside a child-group wrapper
        │   └── Box ("field-2")
        └── Box ("card-2")

    Attributes:
        id: Identifier, unique within one layout call
        dimension_constraint: FIXED or VARIABLE
        style: Opaque style descriptor, only read by the Layout Oracle
        width: Declared width (required when FIXED)
        height: Declared height (required when FIXED)
        children: Ordered child boxes. Order is the emission order.
        child_group_style: Style of a wrapper container placed between this
            box and its children. The wrapper is never exposed as a node.
        color: Pass-through display metadata

    Invariants:
        - FIXED boxes have non-negative width and height

    Example:
        >>> card = Box("card", DimensionConstraint.FIXED, width=50, height=50)
        >>> board = Box("board", DimensionConstraint.VARIABLE, children=(card,))
        >>> board.node_count
        2
    """

    id: str
    dimension_constraint: DimensionConstraint = DimensionConstraint.VARIABLE
    style: str = ""
    width: Optional[float] = None
    height: Optional[float] = None
    children: Tuple[Box, ...] = ()
    child_group_style: Optional[str] = None
    color: Optional[str] = None

    def __post_init__(self) -> None:
        """Validate declared size on construction."""
        if self.dimension_constraint == DimensionConstraint.FIXED:
            if self.width is None or self.height is None:
                raise ValueError(f"Fixed box {self.id!r} requires width and height")
            if self.width < 0 or self.height < 0:
                raise ValueError(
                    f"Fixed box {self.id!r} has negative size: {self.width}x{self.height}"
                )

    # ─────────────────────────────────────────────────────────────────────────
    # Properties
    # ─────────────────────────────────────────────────────────────────────────

    @property
    def is_fixed(self) -> bool:
        return self.dimension_constraint == DimensionConstraint.FIXED

    @property
    def is_leaf(self) -> bool:
        return len(self.children) == 0

    @property
    def has_child_group(self) -> bool:
        """True when children are staged inside a wrapper container."""
        return bool(self.child_group_style) and not self.is_leaf

    @property
    def node_count(self) -> int:
        """Number of boxes in this subtree, including self."""
        return 1 + sum(child.node_count for child in self.children)

    # ─────────────────────────────────────────────────────────────────────────
    # Iteration / Query
    # ─────────────────────────────────────────────────────────────────────────

    def iter_all(self) -> Iterator[Box]:
        """Iterate over this box and all descendants (pre-order)."""
        yield self
        for child in self.children:
            yield from child.iter_all()

    def find(self, box_id: str) -> Optional[Box]:
        """Find a box by id in this subtree, or None."""
        if self.id == box_id:
            return self
        for child in self.children:
            found = child.find(box_id)
            if found is not None:
                return found
        return None

    # ─────────────────────────────────────────────────────────────────────────
    # Serialization
    # ─────────────────────────────────────────────────────────────────────────

    def to_dict(self) -> dict:
        d = {
            "id": self.id,
            "dimensionConstraint": str(self.dimension_constraint),
            "styleDescriptor": self.style,
        }
        if self.width is not None:
            d["width"] = self.width
        if self.height is not None:
            d["height"] = self.height
        if self.children:
            d["children"] = [child.to_dict() for child in self.children]
        if self.child_group_style:
            d["childGroupStyle"] = self.child_group_style
        if self.color is not None:
            d["color"] = self.color
        return d

    @classmethod
    def from_dict(cls, data: dict) -> Box:
        return cls(
            id=data["id"],
            dimension_constraint=DimensionConstraint(data["dimensionConstraint"]),
            style=data.get("styleDescriptor", ""),
            width=data.get("width"),
            height=data.get("height"),
            children=tuple(cls.from_dict(child) for child in data.get("children", [])),
            child_group_style=data.get("childGroupStyle"),
            color=data.get("color"),
        )

    def __repr__(self) -> str:
        child_str = f", children={len(self.children)}" if self.children else ""
        return f"Box({self.id!r}, {self.dimension_constraint.value}{child_str})"


@dataclass(frozen=True, slots=True)
class PositionedBox:
    """
    Box after layout (immutable).

    x and y are relative to the node's logical parent. For the root they
    are relative to the layout container, for children relative to the
    parent box even when a child-group wrapper sits in between.

    Attributes:
        id: Same id as the source Box
        x: Left edge relative to logical parent
        y: Top edge relative to logical parent
        width: Resolved width
        height: Resolved height
        children: Positioned children, in source order
        color: Carried over from the source Box
    """

    id: str
    x: float
    y: float
    width: float
    height: float
    children: Tuple[PositionedBox, ...] = ()
    color: Optional[str] = None

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height

    @property
    def node_count(self) -> int:
        return 1 + sum(child.node_count for child in self.children)

    def iter_all(self) -> Iterator[PositionedBox]:
        """Iterate over this box and all descendants (pre-order)."""
        yield self
        for child in self.children:
            yield from child.iter_all()

    def translated(self, dx: float, dy: float) -> PositionedBox:
        """
        Copy with the origin shifted by (dx, dy).

        Children keep their parent-relative coordinates and are carried
        along unchanged.
        """
        return replace(self, x=self.x + dx, y=self.y + dy)

    def to_dict(self) -> dict:
        d = {
            "id": self.id,
            "x": self.x,
            "y": self.y,
            "width": self.width,
            "height": self.height,
        }
        if self.children:
            d["children"] = [child.to_dict() for child in self.children]
        if self.color is not None:
            d["color"] = self.color
        return d

    @classmethod
    def from_dict(cls, data: dict) -> PositionedBox:
        return cls(
            id=data["id"],
            x=data["x"],
            y=data["y"],
            width=data["width"],
            height=data["height"],
            children=tuple(cls.from_dict(child) for child in data.get("children", [])),
            color=data.get("color"),
        )

    def __repr__(self) -> str:
        child_str = f", children={len(self.children)}" if self.children else ""
        return (
            f"PositionedBox({self.id!r}, x={self.x}, y={self.y}, "
            f"{self.width}x{self.height}{child_str})"
        )
