"""
Cascade Resolver

Gravity-style collision resolution after one item moves. The moved item
keeps its new position; everything it lands on is pushed straight down
below it, and each pushed item pushes whatever it now lands on, until
nothing overlaps.

Pushes only ever increase y, so every item settles after a bounded number
of pushes and the queue always drains. Static items never move, but they
still block: an item pushed onto a static item continues below it.
"""

import logging
from collections import deque
from typing import Deque, Dict, List, Set, Tuple

from ..layout.abstraction import GridItem, Layout
from .collision import collides

logger = logging.getLogger(__name__)


def _below_static(item: GridItem, static_items: List[GridItem]) -> GridItem:
    """Push ``item`` down until it clears every static item."""
    moved = True
    while moved:
        moved = False
        for blocker in static_items:
            if collides(item, blocker):
                item = item.moved(y=blocker.y + blocker.h)
                moved = True
    return item


def move_items(layout: Layout, moved_item: GridItem, cols: int) -> Layout:
    """
    Place ``moved_item`` and push colliding items down out of its way.

    Args:
        layout: Current layout
        moved_item: The item at its new position (matched by id)
        cols: Column count of the grid (pushes never change x)

    Returns:
        New layout in the original item order. ``layout`` itself when the
        moved id is not part of it.
    """
    if moved_item.id not in layout:
        logger.debug("Cascade skipped: %s not in layout", moved_item.id)
        return layout

    positions: Dict[str, GridItem] = {item.id: item for item in layout}
    positions[moved_item.id] = moved_item
    static_items = [item for item in positions.values() if item.static]

    queue: Deque[str] = deque([moved_item.id])
    # (id, y) pairs already expanded; a pushed item is expanded again at its new row
    visited: Set[Tuple[str, int]] = set()
    pushes = 0

    while queue:
        current = positions[queue.popleft()]
        key = (current.id, current.y)
        if key in visited:
            continue
        visited.add(key)

        for other in list(positions.values()):
            if other.id == current.id or other.id == moved_item.id or other.static:
                continue
            if not collides(current, other):
                continue

            pushed = _below_static(other.moved(y=current.y + current.h), static_items)
            positions[other.id] = pushed
            queue.append(other.id)
            pushes += 1

            if logger.isEnabledFor(logging.DEBUG):
                logger.debug(
                    "Cascade push %s: y %d -> %d (under %s)",
                    other.id, other.y, pushed.y, current.id,
                )

    if logger.isEnabledFor(logging.DEBUG):
        logger.debug(
            "Cascade done: moved=%s to (%d, %d) cols=%d pushes=%d",
            moved_item.id, moved_item.x, moved_item.y, cols, pushes,
        )

    return Layout(positions[item_id] for item_id in layout.ids)
