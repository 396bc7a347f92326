"""
Layout Compactor

Repacks a layout toward the grid origin to close the gaps left by drags,
resizes and cascades. Greedy first-fit: static items are placed first and
never move; the rest are placed one at a time in reading order, each at
the first free slot along the compaction axis. Compacting a compacted
layout returns it unchanged.
"""

import logging
from enum import Enum
from itertools import count
from typing import Dict, List, Optional, Union

from ..layout.abstraction import GridItem, Layout
from .collision import collides

logger = logging.getLogger(__name__)


class CompactType(Enum):
    """Direction items are packed in."""
    VERTICAL = "vertical"      # float up
    HORIZONTAL = "horizontal"  # float left
    NONE = "none"              # leave positions alone

    @classmethod
    def parse(cls, value: Optional[Union["CompactType", str]]) -> "CompactType":
        """Accept an enum member, its value, or None (no compaction)."""
        if isinstance(value, cls):
            return value
        if value is None or value == "":
            return cls.NONE
        try:
            return cls(str(value).lower())
        except ValueError:
            raise ValueError(
                f"Unknown compact type: {value}. "
                f"Valid options: {[m.value for m in cls]}"
            ) from None


def _hits(item: GridItem, placed: List[GridItem]) -> bool:
    return any(collides(item, other) for other in placed)


def _compact_vertical(item: GridItem, placed: List[GridItem]) -> GridItem:
    # Rows below every placed item are free, so this always ends
    for y in count(0):
        test = item.moved(y=y)
        if not _hits(test, placed):
            return test


def _compact_horizontal(item: GridItem, placed: List[GridItem], cols: int) -> GridItem:
    # Leftmost free slot in the item's row, else in the first row below with one
    last_x = max(0, cols - item.w)
    for y in count(item.y):
        for x in range(0, last_x + 1):
            test = item.moved(x=x, y=y)
            if not _hits(test, placed):
                return test


def compact(layout: Layout, cols: int,
            direction: Optional[Union[CompactType, str]] = CompactType.VERTICAL) -> Layout:
    """
    Compact a layout.

    Args:
        layout: Layout to compact
        cols: Column count of the grid
        direction: CompactType, its string value, or None for no compaction

    Returns:
        New layout in the original item order (``layout`` itself for NONE)
    """
    direction = CompactType.parse(direction)
    if direction is CompactType.NONE:
        return layout

    placed: List[GridItem] = layout.static_items()
    movable = layout.movable_items()

    if direction is CompactType.VERTICAL:
        movable.sort(key=lambda i: (i.y, i.x))
    else:
        movable.sort(key=lambda i: (i.x, i.y))

    result: Dict[str, GridItem] = {item.id: item for item in placed}
    moved = 0
    for item in movable:
        if direction is CompactType.VERTICAL:
            packed = _compact_vertical(item, placed)
        else:
            packed = _compact_horizontal(item, placed, cols)
        if packed.rect != item.rect:
            moved += 1
        placed.append(packed)
        result[item.id] = packed

    if logger.isEnabledFor(logging.DEBUG):
        logger.debug(
            "Compacted %d items (%s, cols=%d): %d moved",
            len(layout), direction.value, cols, moved,
        )

    return Layout(result[item_id] for item_id in layout.ids)
