"""Placement engine: geometry, collisions, cascades and compaction."""

from .geometry import GridGeometry, PixelRect, to_grid, to_pixels
from .collision import collides, get_all_collisions, get_first_collision
from .free_space import place
from .cascade import move_items
from .compactor import CompactType, compact
from .legalizer import (
    LegalizationResult,
    clamp_item,
    clamp_size,
    correct_bounds,
    legalize_layout,
)

__all__ = [
    "GridGeometry",
    "PixelRect",
    "to_grid",
    "to_pixels",
    "collides",
    "get_all_collisions",
    "get_first_collision",
    "place",
    "move_items",
    "CompactType",
    "compact",
    "LegalizationResult",
    "clamp_item",
    "clamp_size",
    "correct_bounds",
    "legalize_layout",
]
