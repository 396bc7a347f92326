"""Tests for pixel <-> cell conversion."""

import pytest

from gridplace.layout.abstraction import GridItem, Layout
from gridplace.placement.geometry import (
    GridGeometry,
    column_width,
    round_half_up,
    to_grid,
    to_pixels,
)


@pytest.fixture
def geometry():
    """12 columns, 84px wide with 16px gutters."""
    return GridGeometry(cols=12, row_height=60, gap=16, container_width=1184)


class TestRounding:
    """Tests for half-up rounding."""

    def test_halves_round_up(self):
        assert round_half_up(0.5) == 1
        assert round_half_up(2.5) == 3

    def test_negative_halves_round_toward_positive(self):
        assert round_half_up(-0.5) == 0
        assert round_half_up(-1.5) == -1

    def test_plain_rounding(self):
        assert round_half_up(1.4) == 1
        assert round_half_up(1.6) == 2


class TestToGrid:
    """Tests for pixel -> cell snapping."""

    def test_column_width(self):
        assert column_width(12, 16, 1184) == 84

    def test_exact_cell_origin(self, geometry):
        assert geometry.to_grid(300, 152) == (3, 2)

    def test_snaps_to_nearest(self, geometry):
        assert geometry.to_grid(349, 0) == (3, 0)
        assert geometry.to_grid(350, 0) == (4, 0)

    def test_clamped_to_zero(self, geometry):
        assert geometry.to_grid(-500, -500) == (0, 0)

    def test_custom_margin(self):
        # col width (1000 - 11*10) / 12
        col, row = to_grid(0, 170, cols=12, row_height=60, gap=16,
                           container_width=1000, margin=(10, 25))
        assert (col, row) == (0, 2)

    def test_function_and_method_agree(self, geometry):
        assert geometry.to_grid(520, 230) == to_grid(520, 230, 12, 60, 16, 1184)


class TestToPixels:
    """Tests for cell -> pixel boxes."""

    def test_single_cell(self, geometry):
        rect = geometry.to_pixels(GridItem(id="a", x=0, y=0, w=1, h=1))
        assert (rect.left, rect.top, rect.width, rect.height) == (0, 0, 84, 60)

    def test_span_includes_inner_gutters(self, geometry):
        rect = geometry.to_pixels(GridItem(id="a", x=2, y=1, w=3, h=2))
        assert rect.left == 200
        assert rect.top == 76
        assert rect.width == 3 * 84 + 2 * 16
        assert rect.height == 2 * 60 + 16
        assert rect.right == rect.left + rect.width

    def test_round_trip_of_origin(self, geometry):
        item = GridItem(id="a", x=7, y=4, w=2, h=2)
        rect = to_pixels(item, 12, 60, 16, 1184)
        assert geometry.to_grid(rect.left, rect.top) == (7, 4)

    def test_pitches(self, geometry):
        assert geometry.cell_width == 100
        assert geometry.cell_height == 76

    def test_container_height(self, geometry):
        layout = Layout([GridItem(id="a", x=0, y=0, w=1, h=3)])
        assert geometry.container_height(layout, padding_y=16) == 3 * 76 + 32
