"""Pointer -> grid cell computations for dragging and dropping."""

from ..config import GridConfig
from ..layout.abstraction import GridItem
from ..placement.geometry import GridGeometry
from .state import Point


def geometry_for(config: GridConfig) -> GridGeometry:
    return GridGeometry(
        cols=config.cols,
        row_height=config.row_height,
        gap=config.gap,
        container_width=config.container_width,
        margin=config.margin,
    )


def pointer_offset(item: GridItem, pointer: Point, config: GridConfig) -> Point:
    """Where inside ``item`` the pointer grabbed it, in pixels."""
    rect = geometry_for(config).to_pixels(item)
    pad_x, pad_y = config.container_padding
    return Point(pointer.x - pad_x - rect.left, pointer.y - pad_y - rect.top)


def drag_target(item: GridItem, pointer: Point, offset: Point,
                config: GridConfig) -> GridItem:
    """
    Cell the dragged item should occupy for a pointer position.

    The item's top-left corner follows the pointer minus the grab offset,
    snapped to the nearest cell and clamped into the grid: columns always,
    rows against ``max_rows`` when it is set.
    """
    pad_x, pad_y = config.container_padding
    col, row = geometry_for(config).to_grid(
        pointer.x - offset.x - pad_x,
        pointer.y - offset.y - pad_y,
    )

    cols = config.cols
    w = min(item.w, cols) if cols > 0 else item.w
    x = max(0, min(cols - w, col))
    y = max(0, row)
    if config.max_rows and y + item.h > config.max_rows:
        y = max(0, config.max_rows - item.h)
    return item.with_rect(x, y, w, item.h)


def drop_target(item: GridItem, pointer: Point, config: GridConfig) -> GridItem:
    """Cell under the pointer for an item dropped in from outside."""
    pad_x, pad_y = config.container_padding
    col, row = geometry_for(config).to_grid(pointer.x - pad_x, pointer.y - pad_y)
    return item.moved(x=col, y=row)
