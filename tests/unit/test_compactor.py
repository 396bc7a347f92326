"""Tests for layout compaction and legalization."""

import pytest

from gridplace.layout.abstraction import GridItem, Layout
from gridplace.placement.compactor import CompactType, compact
from gridplace.placement.legalizer import (
    clamp_item,
    clamp_size,
    correct_bounds,
    legalize_layout,
)


@pytest.fixture
def scattered():
    """Items with gaps above and to the left of them."""
    return Layout([
        GridItem(id="a", x=2, y=3, w=2, h=1),
        GridItem(id="b", x=6, y=5, w=3, h=2),
        GridItem(id="c", x=2, y=8, w=4, h=1),
    ])


class TestCompactType:
    """Tests for compact type parsing."""

    def test_parse_strings(self):
        assert CompactType.parse("vertical") is CompactType.VERTICAL
        assert CompactType.parse("HORIZONTAL") is CompactType.HORIZONTAL

    def test_parse_none(self):
        assert CompactType.parse(None) is CompactType.NONE
        assert CompactType.parse("") is CompactType.NONE

    def test_unknown_rejected(self):
        with pytest.raises(ValueError):
            CompactType.parse("diagonal")


class TestVerticalCompaction:
    """Tests for float-up compaction."""

    def test_floats_items_up(self, scattered):
        result = compact(scattered, cols=12)
        assert result.get("a").rect == (2, 0, 2, 1)
        assert result.get("b").rect == (6, 0, 3, 2)
        # c spans a's column, so it stops under a
        assert result.get("c").rect == (2, 1, 4, 1)

    def test_never_changes_x(self, scattered):
        result = compact(scattered, cols=12)
        for item in scattered:
            assert result.get(item.id).x == item.x

    def test_idempotent(self, scattered, dashboard):
        for layout in (scattered, dashboard):
            once = compact(layout, cols=12)
            assert compact(once, cols=12) == once

    def test_no_overlaps_after_compaction(self):
        overlapping = Layout([
            GridItem(id="a", x=0, y=0, w=4, h=2),
            GridItem(id="b", x=2, y=1, w=4, h=2),
            GridItem(id="c", x=0, y=1, w=2, h=1),
        ])
        assert compact(overlapping, cols=12).find_overlaps() == []

    def test_static_items_stay_and_block(self, with_static):
        layout = with_static.with_item(with_static.get("under").moved(y=6))
        result = compact(layout, cols=12)
        assert result.get("wall").rect == (4, 0, 2, 2)
        assert result.get("under").y == 2

    def test_keeps_layout_order(self, scattered):
        assert compact(scattered, cols=12).ids == ["a", "b", "c"]


class TestHorizontalCompaction:
    """Tests for float-left compaction."""

    def test_floats_items_left(self, scattered):
        result = compact(scattered, cols=12, direction="horizontal")
        assert result.get("a").rect == (0, 3, 2, 1)
        assert result.get("b").rect == (0, 5, 3, 2)
        assert result.get("c").rect == (0, 8, 4, 1)

    def test_packs_against_neighbours(self):
        layout = Layout([
            GridItem(id="a", x=3, y=0, w=2, h=1),
            GridItem(id="b", x=8, y=0, w=2, h=1),
        ])
        result = compact(layout, cols=12, direction=CompactType.HORIZONTAL)
        assert result.get("a").x == 0
        assert result.get("b").x == 2

    def test_full_row_drops_down(self):
        layout = Layout([
            GridItem(id="a", x=0, y=0, w=3, h=1),
            GridItem(id="b", x=3, y=0, w=2, h=1),
        ])
        # cols=4: b cannot sit next to a, so it takes the leftmost slot below
        result = compact(layout, cols=4, direction="horizontal")
        assert result.get("b").rect == (0, 1, 2, 1)
        assert result.find_overlaps() == []

    def test_dropped_item_is_not_moved_again(self):
        layout = Layout([
            GridItem(id="0", x=0, y=2, w=4, h=1),
            GridItem(id="1", x=3, y=2, w=1, h=1),
        ])
        once = compact(layout, cols=4, direction="horizontal")
        assert once.get("1").rect == (0, 3, 1, 1)
        assert compact(once, cols=4, direction="horizontal") == once

    def test_idempotent(self, scattered, dashboard, with_static):
        crowded = Layout([
            GridItem(id="a", x=0, y=0, w=3, h=1),
            GridItem(id="b", x=1, y=0, w=2, h=2),
            GridItem(id="c", x=2, y=1, w=3, h=1),
            GridItem(id="d", x=0, y=1, w=1, h=3),
        ])
        for layout, cols in ((scattered, 12), (dashboard, 12), (with_static, 6), (crowded, 4)):
            once = compact(layout, cols=cols, direction="horizontal")
            assert once.find_overlaps() == []
            assert compact(once, cols=cols, direction="horizontal") == once


class TestNoCompaction:
    def test_none_returns_same_layout(self, scattered):
        assert compact(scattered, cols=12, direction=None) is scattered
        assert compact(scattered, cols=12, direction="none") is scattered


class TestClamp:
    """Tests for size and bounds clamping."""

    def test_min_width_wins_over_requested(self):
        item = GridItem(id="a", w=3, h=2, min_w=2, max_w=6)
        assert clamp_size(item, 1, 2) == (2, 2)

    def test_max_width(self):
        item = GridItem(id="a", w=3, h=2, min_w=2, max_w=6)
        assert clamp_size(item, 9, 2) == (6, 2)

    def test_never_below_one(self):
        assert clamp_size(GridItem(id="a"), 0, -3) == (1, 1)

    def test_clamp_item_pulls_into_grid(self):
        item = GridItem(id="a", x=10, y=0, w=4, h=1)
        assert clamp_item(item, cols=12).rect == (8, 0, 4, 1)

    def test_clamp_item_caps_width_at_cols(self):
        item = GridItem(id="a", x=0, y=0, w=8, h=1, min_w=6)
        assert clamp_item(item, cols=4).rect == (0, 0, 4, 1)

    def test_clamp_item_unchanged_is_same_object(self):
        item = GridItem(id="a", x=1, y=1, w=2, h=2)
        assert clamp_item(item, cols=12) is item

    def test_correct_bounds_skips_static(self):
        layout = Layout([GridItem(id="s", x=10, y=0, w=4, h=1, static=True)])
        assert correct_bounds(layout, cols=12).get("s").x == 10


class TestLegalizeLayout:
    """Tests for full legalization."""

    def test_resolves_overlaps_and_bounds(self):
        layout = Layout([
            GridItem(id="a", x=0, y=0, w=4, h=2),
            GridItem(id="b", x=2, y=0, w=4, h=2),
            GridItem(id="c", x=11, y=3, w=3, h=1),
        ])
        result = legalize_layout(layout, cols=12)
        assert result.layout.find_overlaps() == []
        for item in result.layout:
            assert 0 <= item.x and item.right <= 12
        assert result.clamped == 1
        assert result.relocated >= 1
        assert result.changed

    def test_reports_static_conflicts(self):
        layout = Layout([
            GridItem(id="s1", x=0, y=0, w=2, h=2, static=True),
            GridItem(id="s2", x=1, y=1, w=2, h=2, static=True),
        ])
        result = legalize_layout(layout, cols=12)
        assert result.static_conflicts == [("s1", "s2")]
        assert result.layout.get("s2").rect == (1, 1, 2, 2)

    def test_legal_layout_unchanged(self, side_by_side):
        result = legalize_layout(side_by_side, cols=12)
        assert result.layout == side_by_side
        assert not result.changed
