"""
Schemas Package

JSON schema definitions and validation utilities for the interchange
documents.
"""

from .validator import (
    validate_box,
    validate_positioned_box,
    validate_page,
    ValidationError,
)

__all__ = [
    "validate_box",
    "validate_positioned_box",
    "validate_page",
    "ValidationError",
]
