"""
Layout Abstraction Layer

Provides the item and layout values every engine stage works on. Items are
immutable: the placement, responsive and interaction layers never modify an
item in place, they return a new one (``GridItem.moved``/``resized``) and a
new Layout holding it.
"""

from dataclasses import dataclass, field, replace
from typing import Any, Dict, Iterable, Iterator, List, Optional, Tuple


# camelCase keys used by item lists coming from a browser front-end
_DICT_KEYS = {
    "minW": "min_w",
    "minH": "min_h",
    "maxW": "max_w",
    "maxH": "max_h",
    "isDraggable": "is_draggable",
    "isResizable": "is_resizable",
}

_ITEM_FIELDS = (
    "id", "x", "y", "w", "h",
    "min_w", "min_h", "max_w", "max_h",
    "static", "is_draggable", "is_resizable",
)


@dataclass(frozen=True)
class GridItem:
    """A rectangle on the grid, in cell units."""
    id: str
    x: int = 0  # column of the top-left cell
    y: int = 0  # row of the top-left cell
    w: int = 1  # columns spanned
    h: int = 1  # rows spanned

    # Size bounds
    min_w: Optional[int] = None
    min_h: Optional[int] = None
    max_w: Optional[int] = None
    max_h: Optional[int] = None

    # Behaviour
    static: bool = False
    is_draggable: Optional[bool] = None  # None = container default
    is_resizable: Optional[bool] = None

    # Opaque caller data (content, class names); never read by the engine
    data: Dict[str, Any] = field(default_factory=dict, compare=False, hash=False)

    def __post_init__(self):
        if not self.id:
            raise ValueError("Grid item id must be a non-empty string")
        if self.w < 1 or self.h < 1:
            raise ValueError(
                f"Grid item {self.id} must span at least one cell (w={self.w}, h={self.h})"
            )

    @property
    def right(self) -> int:
        """First column to the right of the item."""
        return self.x + self.w

    @property
    def bottom(self) -> int:
        """First row below the item."""
        return self.y + self.h

    @property
    def rect(self) -> Tuple[int, int, int, int]:
        return (self.x, self.y, self.w, self.h)

    def moved(self, x: Optional[int] = None, y: Optional[int] = None) -> "GridItem":
        """Return a copy at a new position."""
        return replace(
            self,
            x=self.x if x is None else x,
            y=self.y if y is None else y,
        )

    def resized(self, w: Optional[int] = None, h: Optional[int] = None) -> "GridItem":
        """Return a copy with a new size."""
        return replace(
            self,
            w=self.w if w is None else w,
            h=self.h if h is None else h,
        )

    def with_rect(self, x: int, y: int, w: int, h: int) -> "GridItem":
        return replace(self, x=x, y=y, w=w, h=h)

    def draggable(self, container_default: bool = True) -> bool:
        """Whether this item may be dragged inside a container."""
        if self.static:
            return False
        if self.is_draggable is None:
            return container_default
        return self.is_draggable and container_default

    def resizable(self, container_default: bool = True) -> bool:
        """Whether this item may be resized inside a container."""
        if self.static:
            return False
        if self.is_resizable is None:
            return container_default
        return self.is_resizable and container_default

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization (unset bounds omitted)."""
        d: Dict[str, Any] = {"id": self.id, "x": self.x, "y": self.y, "w": self.w, "h": self.h}
        for name in ("min_w", "min_h", "max_w", "max_h", "is_draggable", "is_resizable"):
            value = getattr(self, name)
            if value is not None:
                d[name] = value
        if self.static:
            d["static"] = True
        if self.data:
            d["data"] = dict(self.data)
        return d

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "GridItem":
        """
        Build an item from a mapping.

        Accepts both snake_case and camelCase bound names. Keys the engine
        does not know are kept in ``data``.
        """
        kwargs: Dict[str, Any] = {}
        extra: Dict[str, Any] = dict(d.get("data") or {})
        for key, value in d.items():
            if key == "data":
                continue
            name = _DICT_KEYS.get(key, key)
            if name in _ITEM_FIELDS:
                kwargs[name] = value
            else:
                extra[key] = value
        if "id" in kwargs:
            kwargs["id"] = str(kwargs["id"])
        for name in ("x", "y", "w", "h"):
            if name in kwargs:
                kwargs[name] = int(kwargs[name])
        return cls(data=extra, **kwargs)


class Layout:
    """
    Ordered collection of grid items keyed by id.

    Order is insertion-stable and only matters for reporting; placement
    depends on coordinates alone. A Layout is never changed after it is
    built: ``with_item`` and ``with_items`` return new layouts.
    """

    __slots__ = ("_items",)

    def __init__(self, items: Iterable[GridItem] = ()):
        ordered: Dict[str, GridItem] = {}
        for item in items:
            # Later duplicates replace earlier ones but keep the first slot
            ordered[item.id] = item
        self._items = ordered

    # --- Item Access ---

    def __iter__(self) -> Iterator[GridItem]:
        return iter(self._items.values())

    def __len__(self) -> int:
        return len(self._items)

    def __contains__(self, item_id: object) -> bool:
        return item_id in self._items

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Layout):
            return NotImplemented
        return list(self._items.values()) == list(other._items.values())

    def __repr__(self) -> str:
        cells = ", ".join(f"{i.id}:({i.x},{i.y},{i.w},{i.h})" for i in self)
        return f"Layout([{cells}])"

    def get(self, item_id: str) -> Optional[GridItem]:
        """Get an item by id."""
        return self._items.get(item_id)

    @property
    def ids(self) -> List[str]:
        return list(self._items.keys())

    def to_list(self) -> List[GridItem]:
        return list(self._items.values())

    def static_items(self) -> List[GridItem]:
        return [i for i in self._items.values() if i.static]

    def movable_items(self) -> List[GridItem]:
        return [i for i in self._items.values() if not i.static]

    # --- Derivation ---

    def with_item(self, item: GridItem) -> "Layout":
        """Return a layout where ``item`` replaces the entry with its id.

        Unknown ids are appended.
        """
        items = dict(self._items)
        items[item.id] = item
        return Layout(items.values())

    def with_items(self, updated: Iterable[GridItem]) -> "Layout":
        """Replace several items at once, keeping the current order."""
        items = dict(self._items)
        for item in updated:
            items[item.id] = item
        return Layout(items.values())

    def without(self, item_id: str) -> "Layout":
        return Layout(i for i in self._items.values() if i.id != item_id)

    # --- Placement Utilities ---

    def bottom(self) -> int:
        """Lowest occupied row boundary (0 for an empty layout)."""
        return max((i.bottom for i in self._items.values()), default=0)

    def find_overlaps(self, include_static: bool = True) -> List[Tuple[str, str]]:
        """
        Find all overlapping item pairs.

        Args:
            include_static: If False, pairs involving a static item are skipped.

        Returns:
            List of (id1, id2) tuples in layout order
        """
        overlaps = []
        items = self.to_list()
        for i, a in enumerate(items):
            for b in items[i + 1:]:
                if not include_static and (a.static or b.static):
                    continue
                if not (a.right <= b.x or b.right <= a.x or
                        a.bottom <= b.y or b.bottom <= a.y):
                    overlaps.append((a.id, b.id))
        return overlaps

    def to_dicts(self) -> List[Dict[str, Any]]:
        return [i.to_dict() for i in self._items.values()]

    @classmethod
    def from_dicts(cls, dicts: Iterable[Dict[str, Any]]) -> "Layout":
        return cls(GridItem.from_dict(d) for d in dicts)


def merge_items(current: Layout, incoming: Iterable[GridItem]) -> Layout:
    """
    Merge a new caller-supplied item set into the current layout.

    Items present in both keep the current x/y/w/h (the caller's other
    fields win); items new to the set keep the caller's position. Items
    absent from ``incoming`` are dropped. Order follows ``incoming``.
    """
    merged = []
    for item in incoming:
        existing = current.get(item.id)
        if existing is not None:
            item = item.with_rect(existing.x, existing.y, existing.w, existing.h)
        merged.append(item)
    return Layout(merged)
