"""
Module: utils.visualizer

Purpose:
    Debug visualization for layout results. Draws the outline and id of
    every positioned box (nested boxes resolved to absolute coordinates)
    to help diagnose Oracle output and pagination.

Key Functions:
    - render_layout(): Image of a PositionedBox tree
    - render_pages(): One image per page
    - save_debug_overlay(): Render a tree and save it as PNG
    - save_page_overlays(): Render pages and save them as PNGs

Dependencies:
    - PIL: Image drawing

Used By:
    - engine.pipeline: Optional debug output (LayoutConfig.debug_overlay_dir)
"""

from __future__ import annotations

import logging
import math
import re
from pathlib import Path
from typing import Iterable, List, Optional, Sequence, Tuple

from PIL import Image, ImageColor, ImageDraw, ImageFont

from slide_layout.core.models import ContainerBounds, PositionedBox
from slide_layout.paging.models import Page

logger = logging.getLogger(__name__)

# Outline colors by tree depth (root, top-level, nested, deeper)
DEPTH_COLORS = [
    (120, 120, 120, 255),   # Grey - container
    (0, 90, 255, 255),      # Blue - top-level boxes
    (0, 170, 60, 255),      # Green - children
    (255, 140, 0, 255),     # Orange - grandchildren and below
]

BACKGROUND_COLOR = (255, 255, 255, 255)
FILL_ALPHA = 60
LABEL_BG_COLOR = (0, 0, 0, 200)
LABEL_TEXT_COLOR = (255, 255, 255)
BOX_LINE_WIDTH = 2
FONT_SIZE = 12


def render_layout(
    root: PositionedBox,
    bounds: Optional[ContainerBounds] = None,
) -> Image.Image:
    """
    Draw a positioned tree with box outlines and id labels.

    The canvas covers the container bounds (when given) and every box.

    Args:
        root: Positioned root, drawn at its own (x, y)
        bounds: Container bounds to size the canvas

    Returns:
        New RGB image
    """
    width, height = _canvas_size([root], bounds)
    return _render([root], width, height, origin_depth=0)


def render_pages(
    pages: Sequence[Page],
    slide_width: float,
    slide_height: float,
) -> List[Image.Image]:
    """
    Draw each page as a slide-sized image.

    Top-level page boxes are drawn at depth 1 so colors match
    render_layout() output for the same boxes.
    """
    images = []
    for page in pages:
        width, height = _canvas_size(page.boxes, ContainerBounds(slide_width, slide_height))
        images.append(_render(page.boxes, width, height, origin_depth=1))
    return images


def save_debug_overlay(
    root: PositionedBox,
    output_dir: Path,
    name: str,
    bounds: Optional[ContainerBounds] = None,
) -> Path:
    """
    Render a positioned tree and save it as PNG.

    Returns:
        Path to the saved image (<output_dir>/<name>_layout.png, with
        characters unsafe in file names replaced)
    """
    image = render_layout(root, bounds)
    output_dir.mkdir(parents=True, exist_ok=True)
    path = output_dir / f"{_safe_name(name)}_layout.png"
    image.save(path, "PNG")

    logger.info(f"Saved layout overlay for {name}: {root.node_count} boxes")
    return path


def save_page_overlays(
    pages: Sequence[Page],
    output_dir: Path,
    name: str,
    slide_width: float,
    slide_height: float,
) -> List[Path]:
    """Render pages and save them as <name>_page_<index>.png."""
    output_dir.mkdir(parents=True, exist_ok=True)
    paths = []
    for page, image in zip(pages, render_pages(pages, slide_width, slide_height)):
        path = output_dir / f"{_safe_name(name)}_page_{page.index}.png"
        image.save(path, "PNG")
        paths.append(path)

    logger.info(f"Saved {len(paths)} page overlays for {name}")
    return paths


def _render(
    boxes: Iterable[PositionedBox],
    width: int,
    height: int,
    origin_depth: int,
) -> Image.Image:
    image = Image.new("RGBA", (width, height), BACKGROUND_COLOR)
    overlay = Image.new("RGBA", image.size, (255, 255, 255, 0))
    draw = ImageDraw.Draw(overlay)
    font = _load_font()

    for box in boxes:
        _draw_tree(draw, box, 0.0, 0.0, origin_depth, font)

    return Image.alpha_composite(image, overlay).convert("RGB")


def _draw_tree(
    draw: ImageDraw.ImageDraw,
    box: PositionedBox,
    parent_x: float,
    parent_y: float,
    depth: int,
    font: ImageFont.ImageFont,
) -> None:
    """Draw box at its absolute position, then its children."""
    x0 = parent_x + box.x
    y0 = parent_y + box.y
    x1 = x0 + box.width
    y1 = y0 + box.height

    outline = DEPTH_COLORS[min(depth, len(DEPTH_COLORS) - 1)]
    fill = _fill_color(box.color, outline)
    draw.rectangle((x0, y0, max(x0, x1), max(y0, y1)), fill=fill, outline=outline, width=BOX_LINE_WIDTH)
    _draw_label(draw, box.id, x0, y0, font)

    for child in box.children:
        _draw_tree(draw, child, x0, y0, depth + 1, font)


def _draw_label(
    draw: ImageDraw.ImageDraw,
    label_text: str,
    x: float,
    y: float,
    font: ImageFont.ImageFont,
) -> None:
    text_bbox = draw.textbbox((0, 0), label_text, font=font)
    text_width = text_bbox[2] - text_bbox[0]
    text_height = text_bbox[3] - text_bbox[1]

    draw.rectangle(
        (x + 1, y + 1, x + text_width + 5, y + text_height + 5),
        fill=LABEL_BG_COLOR,
    )
    draw.text((x + 3, y + 3), label_text, fill=LABEL_TEXT_COLOR, font=font)


def _fill_color(
    color: Optional[str],
    outline: Tuple[int, int, int, int],
) -> Tuple[int, int, int, int]:
    """Translucent fill from the box's own color, or from its outline."""
    if color:
        try:
            r, g, b = ImageColor.getrgb(color)[:3]
            return (r, g, b, FILL_ALPHA)
        except ValueError:
            logger.debug(f"Unrecognized box color {color!r}, using outline color")
    return (outline[0], outline[1], outline[2], FILL_ALPHA)


def _canvas_size(
    boxes: Iterable[PositionedBox],
    bounds: Optional[ContainerBounds],
) -> Tuple[int, int]:
    right = bounds.width if bounds else 0.0
    bottom = bounds.height if bounds else 0.0
    for box in boxes:
        right = max(right, box.right)
        bottom = max(bottom, box.bottom)
    return max(1, math.ceil(right)), max(1, math.ceil(bottom))


def _safe_name(name: str) -> str:
    """File-name stem from a box id: anything outside [A-Za-z0-9_-] becomes "-"."""
    cleaned = re.sub(r"[^A-Za-z0-9_\-]+", "-", name).strip("-")
    return cleaned or "layout"


def _load_font() -> ImageFont.ImageFont:
    try:
        return ImageFont.truetype("Arial.ttf", FONT_SIZE)
    except (IOError, OSError):
        return ImageFont.load_default()
