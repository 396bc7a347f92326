"""Tests for grid items and layouts."""

import pytest

from gridplace.layout.abstraction import GridItem, Layout, merge_items


class TestGridItem:
    """Tests for GridItem construction and derivation."""

    def test_zero_width_rejected(self):
        with pytest.raises(ValueError):
            GridItem(id="a", w=0, h=1)

    def test_zero_height_rejected(self):
        with pytest.raises(ValueError):
            GridItem(id="a", w=1, h=0)

    def test_empty_id_rejected(self):
        with pytest.raises(ValueError):
            GridItem(id="", w=1, h=1)

    def test_edges(self):
        item = GridItem(id="a", x=2, y=3, w=4, h=5)
        assert item.right == 6
        assert item.bottom == 8
        assert item.rect == (2, 3, 4, 5)

    def test_moved_returns_new_item(self):
        """Derivation never modifies the original."""
        item = GridItem(id="a", x=1, y=1, w=2, h=2)
        moved = item.moved(x=5)
        assert moved.rect == (5, 1, 2, 2)
        assert item.rect == (1, 1, 2, 2)

    def test_resized_keeps_position(self):
        item = GridItem(id="a", x=1, y=1, w=2, h=2)
        assert item.resized(h=4).rect == (1, 1, 2, 4)

    def test_data_not_part_of_equality(self):
        a = GridItem(id="a", data={"title": "one"})
        b = GridItem(id="a", data={"title": "two"})
        assert a == b


class TestItemCapabilities:
    """Tests for per-item drag/resize permissions."""

    def test_static_never_draggable(self):
        item = GridItem(id="a", static=True, is_draggable=True)
        assert item.draggable(True) is False
        assert item.resizable(True) is False

    def test_unset_uses_container_default(self):
        item = GridItem(id="a")
        assert item.draggable(True) is True
        assert item.draggable(False) is False

    def test_item_flag_cannot_override_disabled_container(self):
        item = GridItem(id="a", is_resizable=True)
        assert item.resizable(False) is False

    def test_item_flag_disables(self):
        item = GridItem(id="a", is_draggable=False)
        assert item.draggable(True) is False


class TestSerialization:
    """Tests for dict conversion."""

    def test_to_dict_omits_unset_fields(self):
        d = GridItem(id="a", x=1, y=2, w=3, h=4).to_dict()
        assert d == {"id": "a", "x": 1, "y": 2, "w": 3, "h": 4}

    def test_to_dict_includes_bounds_and_static(self):
        d = GridItem(id="a", min_w=2, static=True).to_dict()
        assert d["min_w"] == 2
        assert d["static"] is True

    def test_from_dict_accepts_camel_case(self):
        item = GridItem.from_dict({
            "id": "a", "x": 0, "y": 0, "w": 3, "h": 2,
            "minW": 2, "maxW": 6, "isDraggable": False,
        })
        assert item.min_w == 2
        assert item.max_w == 6
        assert item.is_draggable is False

    def test_from_dict_keeps_unknown_keys_in_data(self):
        item = GridItem.from_dict({"id": "a", "w": 1, "h": 1, "content": "Hello"})
        assert item.data == {"content": "Hello"}

    def test_from_dict_casts_numbers(self):
        item = GridItem.from_dict({"id": 7, "x": "2", "y": 1.0, "w": 3, "h": 1})
        assert item.id == "7"
        assert item.x == 2
        assert item.y == 1

    def test_dict_round_trip(self):
        item = GridItem(id="a", x=1, y=2, w=3, h=4, max_h=6, data={"k": "v"})
        restored = GridItem.from_dict(item.to_dict())
        assert restored == item
        assert restored.data == {"k": "v"}


class TestLayout:
    """Tests for Layout collection behaviour."""

    def test_order_and_lookup(self, stacked):
        assert stacked.ids == ["a", "b", "c"]
        assert stacked.get("b").y == 2
        assert stacked.get("missing") is None
        assert "a" in stacked
        assert len(stacked) == 3

    def test_with_item_replaces_in_place(self, stacked):
        updated = stacked.with_item(GridItem(id="b", x=5, y=0, w=2, h=2))
        assert updated.ids == ["a", "b", "c"]
        assert updated.get("b").x == 5
        assert stacked.get("b").x == 0

    def test_with_item_appends_unknown(self, stacked):
        updated = stacked.with_item(GridItem(id="d", w=1, h=1))
        assert updated.ids == ["a", "b", "c", "d"]

    def test_without(self, stacked):
        assert stacked.without("b").ids == ["a", "c"]

    def test_bottom(self, stacked):
        assert stacked.bottom() == 6
        assert Layout().bottom() == 0

    def test_find_overlaps(self):
        layout = Layout([
            GridItem(id="a", x=0, y=0, w=2, h=2),
            GridItem(id="b", x=1, y=1, w=2, h=2),
            GridItem(id="c", x=2, y=0, w=1, h=1),
        ])
        assert layout.find_overlaps() == [("a", "b")]

    def test_find_overlaps_can_skip_static(self):
        layout = Layout([
            GridItem(id="a", x=0, y=0, w=2, h=2),
            GridItem(id="s", x=1, y=1, w=2, h=2, static=True),
        ])
        assert layout.find_overlaps(include_static=False) == []

    def test_static_and_movable_split(self, with_static):
        assert [i.id for i in with_static.static_items()] == ["wall"]
        assert [i.id for i in with_static.movable_items()] == ["free", "under"]

    def test_from_dicts(self):
        layout = Layout.from_dicts([{"id": "a", "w": 2, "h": 1}, {"i": "ignored", "id": "b"}])
        assert layout.ids == ["a", "b"]


class TestMergeItems:
    """Tests for merging a new item set into a layout."""

    def test_existing_items_keep_rect(self, stacked):
        incoming = [GridItem(id="b", x=9, y=9, w=1, h=1, data={"title": "B"})]
        merged = merge_items(stacked, incoming)
        assert merged.ids == ["b"]
        assert merged.get("b").rect == (0, 2, 2, 2)
        assert merged.get("b").data == {"title": "B"}

    def test_new_items_keep_caller_position(self, stacked):
        merged = merge_items(stacked, list(stacked) + [GridItem(id="d", x=6, y=1, w=2, h=1)])
        assert merged.get("d").rect == (6, 1, 2, 1)
        assert merged.ids == ["a", "b", "c", "d"]
