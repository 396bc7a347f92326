"""Grid item and layout values."""

from .abstraction import GridItem, Layout, merge_items

__all__ = [
    "GridItem",
    "Layout",
    "merge_items",
]
