"""Top-level package for slide-layout.

Positions a tree of boxes on an infinite canvas through an external
Layout Oracle, then splits the positioned output into bounded-height
slides.

Provides subpackages:
- slide_layout.core – Box/PositionedBox models, schemas, serialization
- slide_layout.engine – staging, single-barrier measurement, normalization
- slide_layout.paging – row grouping and pagination
- slide_layout.utils – debug overlays
"""

from importlib.metadata import PackageNotFoundError, version as _pkg_version

from .core import Box, DimensionConstraint, PositionedBox, ContainerBounds, Offset, Rect
from .engine import (
    LayoutOracle,
    LayoutOracleError,
    MissingMeasurementError,
    LayoutConfig,
    LayoutResult,
    layout_boxes,
    measure,
    normalize,
)
from .paging import SlideConfig, Page, group_rows, paginate, split_into_slides

try:
    __version__ = _pkg_version("slide-layout")
except PackageNotFoundError:
    __version__ = "0.0.0"

__all__: list[str] = [
    "__version__",
    "Box",
    "DimensionConstraint",
    "PositionedBox",
    "ContainerBounds",
    "Offset",
    "Rect",
    "LayoutOracle",
    "LayoutOracleError",
    "MissingMeasurementError",
    "LayoutConfig",
    "LayoutResult",
    "layout_boxes",
    "measure",
    "normalize",
    "SlideConfig",
    "Page",
    "group_rows",
    "paginate",
    "split_into_slides",
]
