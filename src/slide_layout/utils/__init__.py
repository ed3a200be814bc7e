"""Debug utilities."""

from .visualizer import (
    render_layout,
    render_pages,
    save_debug_overlay,
    save_page_overlays,
)

__all__ = [
    "render_layout",
    "render_pages",
    "save_debug_overlay",
    "save_page_overlays",
]
