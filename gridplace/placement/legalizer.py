"""
Layout Legalizer

Brings a caller-supplied layout into a valid state before it is used for
interaction:

1. Bounds (Clamp) - Apply min/max sizes, cap widths at the column count and
   shift items left so they end inside the grid
2. Overlap Removal (Relocate) - Move items that still collide with an
   earlier item to the nearest free position
3. Compaction - Pack the result along the configured axis

Static items are never clamped or moved; overlaps they cause with each
other are reported, not fixed.
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Tuple, Union

from ..layout.abstraction import GridItem, Layout
from .collision import collides
from .compactor import CompactType, compact
from .free_space import place

logger = logging.getLogger(__name__)


@dataclass
class LegalizationResult:
    """Result of a legalization pass."""
    layout: Layout
    clamped: int = 0  # items whose size or position was clamped
    relocated: int = 0  # items moved to resolve an overlap
    static_conflicts: List[Tuple[str, str]] = field(default_factory=list)  # static/static overlaps

    @property
    def changed(self) -> bool:
        return self.clamped > 0 or self.relocated > 0


def clamp_size(item: GridItem, w: int, h: int) -> Tuple[int, int]:
    """Apply an item's min/max bounds to a proposed size (never below 1)."""
    w = max(item.min_w or 1, w)
    h = max(item.min_h or 1, h)
    if item.max_w is not None:
        w = min(w, item.max_w)
    if item.max_h is not None:
        h = min(h, item.max_h)
    return (max(1, w), max(1, h))


def clamp_item(item: GridItem, cols: int) -> GridItem:
    """
    Clamp an item's size and position into the grid.

    The column count wins over ``min_w``: an item never ends up wider than
    the grid.
    """
    w, h = clamp_size(item, item.w, item.h)
    if cols > 0:
        w = min(w, cols)
    x = max(0, min(item.x, cols - w))
    y = max(0, item.y)
    if (x, y, w, h) == item.rect:
        return item
    return item.with_rect(x, y, w, h)


def correct_bounds(layout: Layout, cols: int) -> Layout:
    """Clamp every non-static item into the grid."""
    return Layout(item if item.static else clamp_item(item, cols) for item in layout)


def legalize_layout(layout: Layout, cols: int,
                    compact_type: Optional[Union[CompactType, str]] = CompactType.VERTICAL
                    ) -> LegalizationResult:
    """
    Run a full legalization pass.

    Args:
        layout: Layout to legalize
        cols: Column count of the grid
        compact_type: Compaction applied last

    Returns:
        LegalizationResult with the new layout and statistics
    """
    result = LegalizationResult(layout=layout)

    # Phase 1: bounds
    clamped = []
    for item in layout:
        fixed = item if item.static else clamp_item(item, cols)
        if fixed is not item:
            result.clamped += 1
            if logger.isEnabledFor(logging.DEBUG):
                logger.debug("Clamp %s: %s -> %s", item.id, item.rect, fixed.rect)
        clamped.append(fixed)

    # Phase 2: overlaps; statics first so movable items route around them
    statics = [i for i in clamped if i.static]
    for i, a in enumerate(statics):
        for b in statics[i + 1:]:
            if collides(a, b):
                result.static_conflicts.append((a.id, b.id))

    placed: List[GridItem] = list(statics)
    resolved = {item.id: item for item in statics}
    for item in clamped:
        if item.static:
            continue
        free = place(placed, item, cols)
        if free is not item:
            result.relocated += 1
        placed.append(free)
        resolved[item.id] = free

    legal = Layout(resolved[item.id] for item in clamped)

    # Phase 3: compaction
    result.layout = compact(legal, cols, compact_type)

    if logger.isEnabledFor(logging.DEBUG):
        logger.debug(
            "Legalization done: items=%d clamped=%d relocated=%d static_conflicts=%d",
            len(layout),
            result.clamped,
            result.relocated,
            len(result.static_conflicts),
        )
    return result
