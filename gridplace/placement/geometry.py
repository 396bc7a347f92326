"""
Grid Geometry

Converts between pixel coordinates inside a container and grid cells.
Pixel positions are relative to the grid's content box (container padding
already removed). Nothing here guards against a zero or negative container
width: the resulting cell sizes are passed through so the caller can see
the bad measurement.
"""

from dataclasses import dataclass
from typing import Optional, Tuple
import math

from ..layout.abstraction import GridItem, Layout


@dataclass(frozen=True)
class PixelRect:
    """Pixel box of an item inside the grid content box."""
    left: float
    top: float
    width: float
    height: float

    @property
    def right(self) -> float:
        return self.left + self.width

    @property
    def bottom(self) -> float:
        return self.top + self.height


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves going up (not to even)."""
    return int(math.floor(value + 0.5))


def resolve_margin(gap: float,
                   margin: Optional[Tuple[float, float]] = None) -> Tuple[float, float]:
    """(horizontal, vertical) margin; ``gap`` on both axes when unset."""
    if margin is None:
        return (gap, gap)
    return (margin[0], margin[1])


def column_width(cols: int, gap: float, container_width: float,
                 margin: Optional[Tuple[float, float]] = None) -> float:
    """Width of one column: the space left after the gutters, split evenly."""
    margin_x, _ = resolve_margin(gap, margin)
    return (container_width - margin_x * (cols - 1)) / cols


def to_grid(pixel_x: float, pixel_y: float, cols: int, row_height: float,
            gap: float, container_width: float,
            margin: Optional[Tuple[float, float]] = None) -> Tuple[int, int]:
    """
    Snap a pixel position to the nearest cell.

    Returns:
        (col, row), both clamped to >= 0
    """
    margin_x, margin_y = resolve_margin(gap, margin)
    col_width = column_width(cols, gap, container_width, margin)
    col = round_half_up(pixel_x / (col_width + margin_x))
    row = round_half_up(pixel_y / (row_height + margin_y))
    return (max(0, col), max(0, row))


def to_pixels(item: GridItem, cols: int, row_height: float, gap: float,
              container_width: float,
              margin: Optional[Tuple[float, float]] = None) -> PixelRect:
    """Exact pixel box of an item (no rounding)."""
    margin_x, margin_y = resolve_margin(gap, margin)
    col_width = column_width(cols, gap, container_width, margin)
    return PixelRect(
        left=item.x * (col_width + margin_x),
        top=item.y * (row_height + margin_y),
        width=item.w * col_width + (item.w - 1) * margin_x,
        height=item.h * row_height + (item.h - 1) * margin_y,
    )


@dataclass(frozen=True)
class GridGeometry:
    """Cell geometry of one container, bundled for repeated conversions."""
    cols: int
    row_height: float
    gap: float
    container_width: float
    margin: Optional[Tuple[float, float]] = None

    @property
    def margin_x(self) -> float:
        return resolve_margin(self.gap, self.margin)[0]

    @property
    def margin_y(self) -> float:
        return resolve_margin(self.gap, self.margin)[1]

    @property
    def col_width(self) -> float:
        return column_width(self.cols, self.gap, self.container_width, self.margin)

    @property
    def cell_width(self) -> float:
        """Horizontal pitch: one column plus its gutter."""
        return self.col_width + self.margin_x

    @property
    def cell_height(self) -> float:
        """Vertical pitch: one row plus its gutter."""
        return self.row_height + self.margin_y

    def to_grid(self, pixel_x: float, pixel_y: float) -> Tuple[int, int]:
        return to_grid(pixel_x, pixel_y, self.cols, self.row_height, self.gap,
                       self.container_width, self.margin)

    def to_pixels(self, item: GridItem) -> PixelRect:
        return to_pixels(item, self.cols, self.row_height, self.gap,
                         self.container_width, self.margin)

    def container_height(self, layout: Layout, padding_y: float = 0) -> float:
        """Height the container needs to show every row of ``layout``."""
        return layout.bottom() * self.cell_height + padding_y * 2
