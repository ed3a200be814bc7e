"""
Schema Validation Utilities

Validates JSON interchange documents (Box, PositionedBox, Page) before
they are turned into models.

Two levels:
- Basic checks (always): required fields, types, fixed-size rules,
  applied recursively with a dotted path to the offending node
- Strict checks (strict=True): full JSON Schema validation via jsonschema
  against the *.schema.json files shipped next to this module
"""

from __future__ import annotations

import json
from numbers import Real
from pathlib import Path
from typing import Any

import jsonschema


# Loaded lazily, once per process
_SCHEMAS: dict[str, dict] = {}

_CONSTRAINTS = ("fixed", "variable")


def _load_schema(name: str) -> dict:
    """Load a schema from the schemas directory."""
    if name not in _SCHEMAS:
        schema_path = Path(__file__).parent / f"{name}.schema.json"
        if not schema_path.exists():
            raise FileNotFoundError(f"Schema not found: {schema_path}")
        with open(schema_path, "r", encoding="utf-8") as f:
            _SCHEMAS[name] = json.load(f)
    return _SCHEMAS[name]


class ValidationError(Exception):
    """Raised when data fails schema validation."""

    def __init__(self, message: str, path: str = "", errors: list[str] | None = None):
        super().__init__(message)
        self.path = path
        self.errors = errors or []


def validate_box(data: dict[str, Any], *, strict: bool = False) -> None:
    """
    Validate a Box document (recursively).

    Args:
        data: Box dictionary to validate
        strict: If True, also validate against box.schema.json

    Raises:
        ValidationError: If data is invalid
    """
    _validate_box_node(data, "root")
    if strict:
        _validate_against_schema(data, "box")


def validate_positioned_box(data: dict[str, Any], *, strict: bool = False) -> None:
    """
    Validate a PositionedBox document (recursively).

    Raises:
        ValidationError: If data is invalid
    """
    _validate_positioned_node(data, "root")
    if strict:
        _validate_against_schema(data, "positioned_box")


def validate_page(data: dict[str, Any], *, strict: bool = False) -> None:
    """
    Validate a Page document: an envelope with a list of positioned boxes.

    Raises:
        ValidationError: If data is invalid
    """
    if not isinstance(data, dict) or "boxes" not in data:
        raise ValidationError("Page must have boxes", path="")
    boxes = data["boxes"]
    if not isinstance(boxes, list):
        raise ValidationError("boxes must be a list", path="boxes")
    if "sourceTop" in data and not _is_number(data["sourceTop"]):
        raise ValidationError("sourceTop must be a number", path="sourceTop")
    for i, box in enumerate(boxes):
        _validate_positioned_node(box, f"boxes[{i}]")

    if strict:
        _validate_against_schema(data, "page")
        for box in boxes:
            _validate_against_schema(box, "positioned_box")


def _validate_against_schema(data: dict[str, Any], name: str) -> None:
    schema = _load_schema(name)
    try:
        jsonschema.validate(data, schema)
    except jsonschema.ValidationError as e:
        raise ValidationError(
            f"Schema validation failed: {e.message}",
            path=".".join(str(p) for p in e.absolute_path),
            errors=[e.message],
        ) from e


def _validate_box_node(data: Any, path: str) -> None:
    """Validate a box node recursively."""
    if not isinstance(data, dict):
        raise ValidationError("Box must be an object", path=path)

    required = ["id", "dimensionConstraint", "styleDescriptor"]
    missing = [f for f in required if f not in data]
    if missing:
        raise ValidationError(
            f"Box missing required fields: {missing}",
            path=path,
            errors=[f"Missing field: {f}" for f in missing],
        )

    _check_id(data["id"], path)

    constraint = data["dimensionConstraint"]
    if constraint not in _CONSTRAINTS:
        raise ValidationError(
            f"Invalid dimensionConstraint: {constraint!r}",
            path=f"{path}.dimensionConstraint",
        )

    if not isinstance(data["styleDescriptor"], str):
        raise ValidationError(
            "styleDescriptor must be a string",
            path=f"{path}.styleDescriptor",
        )

    for dim in ("width", "height"):
        if dim in data:
            _check_size(data[dim], f"{path}.{dim}")
        elif constraint == "fixed":
            raise ValidationError(
                f"Fixed box {data['id']!r} requires {dim}",
                path=f"{path}.{dim}",
            )

    for i, child in enumerate(_children_of(data, path)):
        _validate_box_node(child, f"{path}.children[{i}]")


def _validate_positioned_node(data: Any, path: str) -> None:
    """Validate a positioned box node recursively."""
    if not isinstance(data, dict):
        raise ValidationError("PositionedBox must be an object", path=path)

    required = ["id", "x", "y", "width", "height"]
    missing = [f for f in required if f not in data]
    if missing:
        raise ValidationError(
            f"PositionedBox missing required fields: {missing}",
            path=path,
            errors=[f"Missing field: {f}" for f in missing],
        )

    _check_id(data["id"], path)
    for coord in ("x", "y"):
        if not _is_number(data[coord]):
            raise ValidationError(
                f"Invalid {coord}: {data[coord]!r} (must be a number)",
                path=f"{path}.{coord}",
            )
    _check_size(data["width"], f"{path}.width")
    _check_size(data["height"], f"{path}.height")

    for i, child in enumerate(_children_of(data, path)):
        _validate_positioned_node(child, f"{path}.children[{i}]")


def _children_of(data: dict[str, Any], path: str) -> list:
    children = data.get("children", [])
    if not isinstance(children, list):
        raise ValidationError("children must be a list", path=f"{path}.children")
    return children


def _check_id(value: Any, path: str) -> None:
    if not isinstance(value, str) or not value:
        raise ValidationError(
            f"Invalid id: {value!r} (must be a non-empty string)",
            path=f"{path}.id",
        )


def _check_size(value: Any, path: str) -> None:
    if not _is_number(value) or value < 0:
        raise ValidationError(
            f"Invalid size: {value!r} (must be a non-negative number)",
            path=path,
        )


def _is_number(value: Any) -> bool:
    return isinstance(value, Real) and not isinstance(value, bool)
