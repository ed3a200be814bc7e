import pytest
import sys
from pathlib import Path

# Add src to sys.path so we can import slide_layout
SRC_PATH = Path(__file__).resolve().parent.parent / "src"
if SRC_PATH.as_posix() not in sys.path:
    sys.path.insert(0, SRC_PATH.as_posix())

from slide_layout.core.models import (  # noqa: E402
    Box,
    ContainerBounds,
    DimensionConstraint,
    PositionedBox,
    Rect,
)
from slide_layout.engine.oracle import LayoutOracleError  # noqa: E402


# Where the fake engine places the container, like an off-screen element
ORIGIN_X = -10000.0
ORIGIN_Y = -10000.0
DEFAULT_LEAF_SIZE = (40.0, 20.0)


class _FlowNode:
    def __init__(self, node_id, style, size):
        self.node_id = node_id
        self.style = style
        self.size = size
        self.children = []
        self.offset = (0.0, 0.0)
        self.measured = (0.0, 0.0)
        self.rect = None


def _parse_style(style):
    """
    Tiny style language for the fake engine.

    Tokens: "row" (default) / "column", "gap=N", "pad=N",
    "top=N" / "left=N" (own margins), "fail" (engine refuses).
    """
    opts = {"direction": "row", "gap": 0.0, "pad": 0.0, "top": 0.0, "left": 0.0, "fail": False}
    for token in (style or "").split():
        if token in ("row", "column"):
            opts["direction"] = token
        elif token == "fail":
            opts["fail"] = True
        elif "=" in token:
            key, value = token.split("=", 1)
            opts[key] = float(value)
    return opts


class FlowOracle:
    """
    Deterministic stand-in for a real layout engine.

    Lays children out in wrapping rows (or a column), records every call
    so tests can check the staging/barrier/read ordering, and refuses to
    stage after the barrier or read before it.

    The "fail" style token makes compute() raise, or create_node() when
    the engine was built with refuse_on_stage=True.
    """

    def __init__(self, refuse_on_stage=False):
        self.refuse_on_stage = refuse_on_stage
        self.calls = []
        self.compute_count = 0
        self.released = []
        self._next_id = 0
        self._computed = False

    # Build phase

    def create_node(self, style, size=None):
        assert not self._computed, "staging after measurement barrier"
        if self.refuse_on_stage and _parse_style(style)["fail"]:
            raise LayoutOracleError(f"Refused style {style!r}")
        node = _FlowNode(self._next_id, style, size)
        self._next_id += 1
        self.calls.append(("create", style))
        return node

    def append_child(self, parent, child):
        assert not self._computed, "staging after measurement barrier"
        parent.children.append(child)
        self.calls.append(("append", parent.node_id, child.node_id))

    # Barrier

    def compute(self, root, bounds):
        self.calls.append(("compute",))
        self.compute_count += 1
        self._check_styles(root)
        self._measure(root, bounds.width)
        self._assign(root, ORIGIN_X, ORIGIN_Y)
        self._computed = True

    # Read phase

    def rect(self, node):
        assert self._computed, "rect read before measurement barrier"
        self.calls.append(("rect", node.node_id))
        return node.rect

    def release(self, root):
        self.calls.append(("release",))
        self.released.append(root)
        self._computed = False

    def call_kinds(self):
        return [call[0] for call in self.calls]

    def _check_styles(self, node):
        if _parse_style(node.style)["fail"]:
            raise LayoutOracleError(f"Refused style {node.style!r}")
        for child in node.children:
            self._check_styles(child)

    def _measure(self, node, available_width):
        style = _parse_style(node.style)
        pad, gap = style["pad"], style["gap"]
        outer_width = node.size.width if node.size else available_width
        inner_width = outer_width - 2 * pad

        cursor_x = cursor_y = line_height = 0.0
        max_right = max_bottom = 0.0
        for child in node.children:
            child_w, child_h = self._measure(child, inner_width)
            margins = _parse_style(child.style)
            total_w = margins["left"] + child_w
            total_h = margins["top"] + child_h

            if style["direction"] == "column":
                child.offset = (pad + margins["left"], pad + cursor_y + margins["top"])
                cursor_y += total_h + gap
            else:
                if cursor_x > 0 and cursor_x + total_w > inner_width:
                    cursor_y += line_height + gap
                    cursor_x = 0.0
                    line_height = 0.0
                child.offset = (pad + cursor_x + margins["left"], pad + cursor_y + margins["top"])
                cursor_x += total_w + gap
                line_height = max(line_height, total_h)

            max_right = max(max_right, child.offset[0] + child_w)
            max_bottom = max(max_bottom, child.offset[1] + child_h)

        if node.size:
            node.measured = (node.size.width, node.size.height)
        elif node.children:
            node.measured = (max_right + pad, max_bottom + pad)
        else:
            node.measured = DEFAULT_LEAF_SIZE
        return node.measured

    def _assign(self, node, x, y):
        node.rect = Rect(x, y, node.measured[0], node.measured[1])
        for child in node.children:
            self._assign(child, x + child.offset[0], y + child.offset[1])


# Common test fixtures
@pytest.fixture
def flow_oracle():
    """Fresh fake layout engine."""
    return FlowOracle()


@pytest.fixture
def refusing_oracle():
    """Fake layout engine that rejects "fail" styles while staging."""
    return FlowOracle(refuse_on_stage=True)


@pytest.fixture
def fixed_box():
    """Factory for fixed-size boxes."""
    def _create(box_id, width=50, height=50, style="", children=(), child_group_style=None):
        return Box(
            id=box_id,
            dimension_constraint=DimensionConstraint.FIXED,
            style=style,
            width=width,
            height=height,
            children=tuple(children),
            child_group_style=child_group_style,
        )
    return _create


@pytest.fixture
def board():
    """Factory for a variable root box acting as the container."""
    def _create(children, style="row gap=10"):
        return Box(id="board", style=style, children=tuple(children))
    return _create


@pytest.fixture
def positioned():
    """Factory for positioned boxes."""
    def _create(box_id, x=0.0, y=0.0, width=20.0, height=20.0, children=()):
        return PositionedBox(
            id=box_id, x=x, y=y, width=width, height=height, children=tuple(children)
        )
    return _create


@pytest.fixture
def bounds():
    return ContainerBounds(300, 200)
