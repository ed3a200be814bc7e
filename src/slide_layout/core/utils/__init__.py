"""
Utils Package

Serialization and file helpers.
"""

from .serialization import (
    serialize_box,
    deserialize_box,
    serialize_positioned_box,
    deserialize_positioned_box,
    serialize_pages,
    deserialize_pages,
    load_box_tree,
    save_box_tree,
    load_pages,
    save_pages,
)

__all__ = [
    "serialize_box",
    "deserialize_box",
    "serialize_positioned_box",
    "deserialize_positioned_box",
    "serialize_pages",
    "deserialize_pages",
    "load_box_tree",
    "save_box_tree",
    "load_pages",
    "save_pages",
]
