"""
Resize Computations

Turns a pointer delta into a new item rectangle for a given handle.

The pixel delta is converted to cells and snapped with a threshold: a
positive delta must reach ``1 + threshold - 0.5`` cells before the size
grows by one (0.8 cells at the default 0.3), which keeps the edge from
flickering while the pointer hovers near a cell boundary.
"""

import logging
from typing import Iterable

from ..config import GridConfig
from ..layout.abstraction import GridItem
from ..placement.collision import collides
from ..placement.geometry import round_half_up
from ..placement.legalizer import clamp_size
from .drag import geometry_for
from .state import Point, ResizeHandle

logger = logging.getLogger(__name__)


def snap_delta(cells: float, threshold: float = 0.3) -> int:
    """Round a delta in cells toward zero by ``threshold`` before snapping."""
    if cells > 0:
        return round_half_up(cells - threshold)
    return round_half_up(cells + threshold)


def _stop_at_static(item: GridItem, original: GridItem, handle: ResizeHandle,
                    static_items: Iterable[GridItem]) -> GridItem:
    """
    Pull the dragged edges back so they stop at static items.

    An edge only stops at a blocker lying past that edge of ``original``,
    so the result is never smaller than ``original``.
    """
    x, y, w, h = item.rect
    for blocker in static_items:
        if blocker.id == item.id:
            continue
        if not collides(item.with_rect(x, y, w, h), blocker):
            continue

        if handle.moves_east and blocker.x >= original.right:
            w = min(w, blocker.x - x)
        if handle.moves_south and blocker.y >= original.bottom:
            h = min(h, blocker.y - y)
        if handle.moves_west and blocker.right <= original.x and x < blocker.right:
            x = blocker.right
            w = original.right - x
        if handle.moves_north and blocker.bottom <= original.y and y < blocker.bottom:
            y = blocker.bottom
            h = original.bottom - y

    return item.with_rect(x, y, w, h)


def resize_target(original: GridItem, handle: ResizeHandle, start: Point,
                  pointer: Point, config: GridConfig,
                  static_items: Iterable[GridItem] = ()) -> GridItem:
    """
    New rectangle for an item being resized.

    Args:
        original: The item as it was when the resize started
        handle: Handle being dragged
        start: Pointer position at resize start
        pointer: Current pointer position
        config: Container settings
        static_items: Items the resized edges must stop at

    Returns:
        ``original`` with its new x/y/w/h
    """
    geometry = geometry_for(config)
    dx = snap_delta((pointer.x - start.x) / geometry.cell_width, config.resize_threshold)
    dy = snap_delta((pointer.y - start.y) / geometry.cell_height, config.resize_threshold)

    w, h = original.w, original.h
    if handle.moves_east:
        w = original.w + dx
    if handle.moves_west:
        w = original.w - dx
    if handle.moves_south:
        h = original.h + dy
    if handle.moves_north:
        h = original.h - dy

    w, h = clamp_size(original, w, h)

    # West/north handles move the near edge; the far edge stays put
    x, y = original.x, original.y
    if handle.moves_west:
        x = original.right - w
        if x < 0:
            x = 0
            w = clamp_size(original, original.right, h)[0]
    if handle.moves_north:
        y = original.bottom - h
        if y < 0:
            y = 0
            h = clamp_size(original, w, original.bottom)[1]

    cols = config.cols
    if cols > 0:
        x = min(x, cols - 1)
        w = max(1, min(w, cols - x))
    if config.is_bounded and config.max_rows:
        y = min(y, max(0, config.max_rows - 1))
        h = max(1, min(h, config.max_rows - y))

    target = _stop_at_static(original.with_rect(x, y, w, h), original, handle, static_items)

    if logger.isEnabledFor(logging.DEBUG):
        logger.debug(
            "Resize %s (%s): delta=(%d, %d) %s -> %s",
            original.id, handle.value, dx, dy, original.rect, target.rect,
        )
    return target
