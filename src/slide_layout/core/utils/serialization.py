"""
Serialization Utilities

Provides to/from JSON utilities for the interchange documents.

- `serialize_*` and `deserialize_*` functions wrap the models' own
  `to_dict()` / `from_dict()` methods
- Deserialization validates first (basic checks by default)
- File helpers read and write UTF-8 JSON
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import TYPE_CHECKING, Any, Iterable

from ..models.boxes import Box, PositionedBox
from ..schemas.validator import (
    validate_box,
    validate_positioned_box,
    validate_page,
    ValidationError,
)

if TYPE_CHECKING:
    from slide_layout.paging.models import Page


# ─────────────────────────────────────────────────────────────────────────────
# Box Trees
# ─────────────────────────────────────────────────────────────────────────────

def serialize_box(box: Box) -> dict[str, Any]:
    """Serialize a Box tree to a dictionary."""
    return box.to_dict()


def deserialize_box(
    data: dict[str, Any],
    *,
    validate: bool = True,
    strict: bool = False,
) -> Box:
    """
    Deserialize a Box tree from a dictionary.

    Args:
        data: Dictionary from JSON
        validate: Whether to validate before parsing
        strict: Use full JSON Schema validation

    Returns:
        Box instance

    Raises:
        ValidationError: If validate=True and data is invalid
        ValueError: If data cannot be parsed into a Box
    """
    if validate:
        validate_box(data, strict=strict)
    return Box.from_dict(data)


def serialize_positioned_box(box: PositionedBox) -> dict[str, Any]:
    """Serialize a PositionedBox tree to a dictionary."""
    return box.to_dict()


def deserialize_positioned_box(
    data: dict[str, Any],
    *,
    validate: bool = True,
    strict: bool = False,
) -> PositionedBox:
    """Deserialize a PositionedBox tree from a dictionary."""
    if validate:
        validate_positioned_box(data, strict=strict)
    return PositionedBox.from_dict(data)


# ─────────────────────────────────────────────────────────────────────────────
# Pages
# ─────────────────────────────────────────────────────────────────────────────

def serialize_pages(pages: Iterable[Page]) -> list[dict[str, Any]]:
    """Serialize pages to a list of Page documents."""
    return [page.to_dict() for page in pages]


def deserialize_pages(
    data: list[dict[str, Any]],
    *,
    validate: bool = True,
    strict: bool = False,
) -> list[Page]:
    """
    Deserialize a list of Page documents.

    Pages without an explicit index get their position in the list.
    """
    from slide_layout.paging.models import Page

    if not isinstance(data, list):
        raise ValidationError("pages must be a list", path="")

    pages = []
    for i, page_data in enumerate(data):
        if validate:
            try:
                validate_page(page_data, strict=strict)
            except ValidationError as e:
                raise ValidationError(
                    f"Invalid page {i}: {e}",
                    path=f"[{i}].{e.path}" if e.path else f"[{i}]",
                    errors=e.errors or [str(e)],
                ) from e
        pages.append(Page.from_dict(page_data, default_index=i))
    return pages


# ─────────────────────────────────────────────────────────────────────────────
# File Utilities
# ─────────────────────────────────────────────────────────────────────────────

def load_box_tree(path: Path, *, validate: bool = True, strict: bool = False) -> Box:
    """
    Load a Box tree from a JSON file.

    Raises:
        FileNotFoundError: If the file does not exist
        ValidationError: If the document is invalid
    """
    if not path.exists():
        raise FileNotFoundError(f"Box file not found: {path}")

    with open(path, "r", encoding="utf-8") as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as e:
            raise ValidationError(
                f"Error parsing {path.name}: {e}",
                path=str(path),
                errors=[str(e)],
            ) from e

    return deserialize_box(data, validate=validate, strict=strict)


def save_box_tree(box: Box, path: Path) -> None:
    """Save a Box tree to a JSON file."""
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(serialize_box(box), f, indent=2, ensure_ascii=False)


def save_pages(pages: Iterable[Page], path: Path) -> None:
    """
    Save pages to a JSON file.

    Args:
        pages: Pages from paginate() or split_into_slides()
        path: Output path
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(serialize_pages(pages), f, indent=2, ensure_ascii=False)


def load_pages(path: Path, *, validate: bool = True, strict: bool = False) -> list[Page]:
    """
    Load pages previously written by save_pages().

    Raises:
        FileNotFoundError: If the file does not exist
        ValidationError: If the document is invalid
    """
    if not path.exists():
        raise FileNotFoundError(f"Pages file not found: {path}")

    with open(path, "r", encoding="utf-8") as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as e:
            raise ValidationError(
                f"Error parsing {path.name}: {e}",
                path=str(path),
                errors=[str(e)],
            ) from e

    return deserialize_pages(data, validate=validate, strict=strict)
