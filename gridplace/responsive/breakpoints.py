"""
Responsive Breakpoints

Maps a container width to a named breakpoint and its column count, and
keeps one layout per breakpoint.

A breakpoint is active from its threshold (inclusive) up to the next larger
threshold (exclusive). Widths below every threshold fall back to the
smallest breakpoint; an empty table falls back to the configured default
name. Ties between equal thresholds go to the first one in table order.
"""

import logging
from typing import Callable, Dict, Iterable, List, Mapping, Optional, Tuple

from ..config import get_defaults
from ..layout.abstraction import GridItem, Layout

logger = logging.getLogger(__name__)

BreakpointCallback = Callable[[str, int], None]


def default_breakpoints() -> Dict[str, int]:
    """Packaged breakpoint table (lg/md/sm/xs/xxs)."""
    return get_defaults().breakpoints


def default_cols() -> Dict[str, int]:
    """Packaged column table."""
    return get_defaults().cols


def sort_breakpoints(breakpoints: Mapping[str, int]) -> List[Tuple[str, int]]:
    """Breakpoints ordered from the widest threshold to the narrowest."""
    return sorted(breakpoints.items(), key=lambda entry: entry[1], reverse=True)


def resolve_breakpoint(width: float, breakpoints: Optional[Mapping[str, int]] = None) -> str:
    """
    Find the breakpoint active at ``width``.

    Args:
        width: Container width in pixels
        breakpoints: Name -> minimum width; the packaged table if None

    Returns:
        Name of the breakpoint with the highest threshold <= width
    """
    if breakpoints is None:
        breakpoints = default_breakpoints()
    if not breakpoints:
        return get_defaults().fallback_breakpoint

    ordered = sort_breakpoints(breakpoints)
    for name, min_width in ordered:
        if width >= min_width:
            return name
    return ordered[-1][0]


def get_cols(breakpoint: str, cols: Optional[Mapping[str, int]] = None) -> int:
    """
    Column count for a breakpoint.

    Looks in ``cols`` first, then the packaged column table, then uses the
    fixed fallback.
    """
    if cols and breakpoint in cols:
        return int(cols[breakpoint])
    defaults = get_defaults()
    packaged = defaults.cols
    if breakpoint in packaged:
        return packaged[breakpoint]
    return defaults.fallback_cols


class BreakpointTracker:
    """
    Edge-triggered breakpoint detection.

    Feed it every container width; the callback fires only when the resolved
    breakpoint differs from the previous one. The first width always
    notifies.
    """

    def __init__(self, breakpoints: Optional[Mapping[str, int]] = None,
                 cols: Optional[Mapping[str, int]] = None,
                 callback: Optional[BreakpointCallback] = None):
        self.breakpoints: Dict[str, int] = dict(
            default_breakpoints() if breakpoints is None else breakpoints
        )
        self.cols: Dict[str, int] = dict(cols or {})
        self.callback = callback
        self.current: Optional[str] = None
        self.current_cols: Optional[int] = None
        self.width: Optional[float] = None

    def update(self, width: float) -> bool:
        """
        Recompute for a new width.

        Returns:
            True if the breakpoint changed (and the callback was notified)
        """
        self.width = width
        name = resolve_breakpoint(width, self.breakpoints)
        if name == self.current:
            return False

        previous = self.current
        self.current = name
        self.current_cols = get_cols(name, self.cols)
        logger.info(
            "Breakpoint %s -> %s at width %s (%d cols)",
            previous, name, width, self.current_cols,
        )
        if self.callback is not None:
            self.callback(name, self.current_cols)
        return True


def generate_layouts(items: Iterable[GridItem],
                     breakpoints: Iterable[str] = ("lg", "md", "sm", "xs", "xxs")
                     ) -> "ResponsiveLayoutSet":
    """Use the same arrangement for every breakpoint."""
    layout = Layout(items)
    return ResponsiveLayoutSet({name: layout for name in breakpoints})


def generate_responsive_layouts(items: Iterable[GridItem],
                                cols: Optional[Mapping[str, int]] = None
                                ) -> "ResponsiveLayoutSet":
    """
    Adapt one arrangement to every column count.

    Items keep their row; widths are capped at the column count and items
    are shifted left just enough to end inside the grid.
    """
    if cols is None:
        cols = default_cols()
    items = list(items)
    layouts: Dict[str, Layout] = {}
    for name, count in cols.items():
        adapted = []
        for item in items:
            w = min(item.w, count)
            x = count - w if item.x + w > count else item.x
            adapted.append(item.with_rect(x, item.y, w, item.h))
        layouts[name] = Layout(adapted)
    return ResponsiveLayoutSet(layouts)


class ResponsiveLayoutSet:
    """One layout per breakpoint."""

    def __init__(self, layouts: Optional[Mapping[str, Layout]] = None):
        self._layouts: Dict[str, Layout] = dict(layouts or {})

    def __contains__(self, name: object) -> bool:
        return name in self._layouts

    def __len__(self) -> int:
        return len(self._layouts)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ResponsiveLayoutSet):
            return NotImplemented
        return self._layouts == other._layouts

    @property
    def breakpoints(self) -> List[str]:
        return list(self._layouts.keys())

    def layout_for(self, name: str) -> Layout:
        """Layout stored for a breakpoint (empty if none)."""
        return self._layouts.get(name, Layout())

    def with_layout(self, name: str, layout: Layout) -> "ResponsiveLayoutSet":
        layouts = dict(self._layouts)
        layouts[name] = layout
        return ResponsiveLayoutSet(layouts)

    def items(self):
        return self._layouts.items()
