"""
GridPlace Session State Management

Holds the layout, gesture state and config for one grid container so callers
don't have to thread them through step() themselves. Dispatches effects to
callbacks and keeps an undo/redo stack of committed layouts.
"""

import logging
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Union

from ..config import GridConfig, get_defaults
from ..layout.abstraction import GridItem, Layout, merge_items
from ..placement.legalizer import correct_bounds, legalize_layout
from ..responsive.breakpoints import (
    BreakpointTracker,
    ResponsiveLayoutSet,
    generate_responsive_layouts,
    get_cols,
)
from .machine import step
from .state import (
    IDLE,
    DragEnd,
    DragMove,
    DragStart,
    DropItem,
    Effect,
    EffectKind,
    Event,
    InteractionState,
    Point,
    ResizeEnd,
    ResizeHandle,
    ResizeMove,
    ResizeStart,
    StepResult,
)

logger = logging.getLogger(__name__)

# on_layout_change(layout)
LayoutCallback = Callable[[Layout], None]
# on_drag*/on_resize*(layout, old_item, new_item, placeholder)
GestureCallback = Callable[[Layout, Optional[GridItem], Optional[GridItem], Optional[GridItem]], None]
# on_drop(layout, item)
DropCallback = Callable[[Layout, GridItem], None]

_GESTURE_CALLBACKS = {
    EffectKind.DRAG_START: "on_drag_start",
    EffectKind.DRAG: "on_drag",
    EffectKind.DRAG_STOP: "on_drag_stop",
    EffectKind.RESIZE_START: "on_resize_start",
    EffectKind.RESIZE: "on_resize",
    EffectKind.RESIZE_STOP: "on_resize_stop",
}


class GridSession:
    """
    Manages the lifecycle of one grid container.

    Provides:
    - Event forwarding through the interaction state machine
    - Callback dispatch for the resulting effects
    - Item set merging with legalization
    - Undo/redo of committed layouts
    """

    MAX_UNDO_STACK = 50

    def __init__(self, items: Iterable[GridItem] = (),
                 config: Optional[GridConfig] = None,
                 on_layout_change: Optional[LayoutCallback] = None,
                 on_drag_start: Optional[GestureCallback] = None,
                 on_drag: Optional[GestureCallback] = None,
                 on_drag_stop: Optional[GestureCallback] = None,
                 on_resize_start: Optional[GestureCallback] = None,
                 on_resize: Optional[GestureCallback] = None,
                 on_resize_stop: Optional[GestureCallback] = None,
                 on_drop: Optional[DropCallback] = None):
        self.config: GridConfig = config or GridConfig.from_defaults()
        self.on_layout_change = on_layout_change
        self.on_drag_start = on_drag_start
        self.on_drag = on_drag
        self.on_drag_stop = on_drag_stop
        self.on_resize_start = on_resize_start
        self.on_resize = on_resize
        self.on_resize_stop = on_resize_stop
        self.on_drop = on_drop

        self.state: InteractionState = IDLE
        self.layout: Layout = self._legalize(Layout(items))
        self._undo_stack: List[Layout] = []
        self._redo_stack: List[Layout] = []

        # Initial snapshot
        self._undo_stack.append(self.layout)

    @property
    def is_idle(self) -> bool:
        return self.state.is_idle

    @property
    def can_undo(self) -> bool:
        return len(self._undo_stack) > 1  # the initial layout stays

    @property
    def can_redo(self) -> bool:
        return bool(self._redo_stack)

    # --- Events ---

    def handle(self, event: Event) -> StepResult:
        """
        Feed one event through the state machine.

        Stores the resulting state and layout, calls the callbacks for its
        effects and records a committed layout for undo.
        """
        result = step(self.state, self.layout, event, self.config)
        self.state = result.state
        self.layout = result.layout

        committed = False
        for effect in result.effects:
            self._dispatch(effect)
            if effect.kind is EffectKind.LAYOUT_CHANGE:
                committed = True
        if committed:
            self._commit(result.layout)
        return result

    def drag_start(self, item_id: str, pointer: Point) -> StepResult:
        return self.handle(DragStart(item_id, pointer))

    def drag_move(self, pointer: Point) -> StepResult:
        return self.handle(DragMove(pointer))

    def drag_end(self, pointer: Optional[Point] = None) -> StepResult:
        return self.handle(DragEnd(pointer))

    def resize_start(self, item_id: str, handle: Union[ResizeHandle, str],
                     pointer: Point) -> StepResult:
        return self.handle(ResizeStart(item_id, handle, pointer))

    def resize_move(self, pointer: Point) -> StepResult:
        return self.handle(ResizeMove(pointer))

    def resize_end(self, pointer: Optional[Point] = None) -> StepResult:
        return self.handle(ResizeEnd(pointer))

    def drop(self, item: GridItem, pointer: Point) -> StepResult:
        return self.handle(DropItem(item, pointer))

    # --- Layout changes from the caller ---

    def set_items(self, items: Iterable[GridItem]) -> Layout:
        """
        Replace the item set.

        Items already in the layout keep their position and size; new items
        start where the caller put them. The result is legalized and
        committed.
        """
        merged = merge_items(self.layout, items)
        self._apply(self._legalize(merged))
        return self.layout

    def set_config(self, config: GridConfig) -> Layout:
        """Swap the container config and legalize the layout for it."""
        self.config = config
        self._apply(self._legalize(self.layout))
        return self.layout

    def set_width(self, width: float):
        """Record the container content width used for pixel mapping."""
        self.config = self.config.with_width(width)

    # --- Undo/redo ---

    def undo(self) -> bool:
        """
        Undo the last committed change.

        Returns:
            True if undo was performed, False if nothing to undo or a
            gesture is in progress
        """
        if not self.can_undo or not self.is_idle:
            return False

        self._redo_stack.append(self._undo_stack.pop())
        self.layout = self._undo_stack[-1]
        self._notify_layout(self.layout)
        return True

    def redo(self) -> bool:
        """
        Redo the last undone change.

        Returns:
            True if redo was performed, False if nothing to redo or a
            gesture is in progress
        """
        if not self._redo_stack or not self.is_idle:
            return False

        layout = self._redo_stack.pop()
        self._undo_stack.append(layout)
        self.layout = layout
        self._notify_layout(self.layout)
        return True

    def get_stats(self) -> Dict[str, Any]:
        """Get session statistics."""
        return {
            "items": len(self.layout),
            "cols": self.config.cols,
            "rows": self.layout.bottom(),
            "gesture": self.state.kind.value,
            "active_item": self.state.active_item_id,
            "undo_available": self.can_undo,
            "redo_available": self.can_redo,
        }

    # --- Internals ---

    def _legalize(self, layout: Layout, cols: Optional[int] = None) -> Layout:
        cols = self.config.cols if cols is None else cols
        if self.config.allow_overlap:
            return correct_bounds(layout, cols)
        return legalize_layout(layout, cols, self.config.effective_compact_type).layout

    def _apply(self, layout: Layout):
        """Set a caller-driven layout, abandoning any gesture in progress."""
        if not self.is_idle:
            logger.info("Gesture on %s abandoned by a layout change", self.state.active_item_id)
            self.state = IDLE
        changed = layout != self.layout
        self.layout = layout
        if changed:
            self._commit(layout)
            self._notify_layout(layout)

    def _commit(self, layout: Layout):
        if self._undo_stack and self._undo_stack[-1] == layout:
            return
        self._undo_stack.append(layout)
        self._redo_stack.clear()
        while len(self._undo_stack) > self.MAX_UNDO_STACK:
            self._undo_stack.pop(0)
        logger.info("Layout committed (%d items, %d rows)", len(layout), layout.bottom())

    def _reset_history(self):
        self._undo_stack = [self.layout]
        self._redo_stack.clear()

    def _notify_layout(self, layout: Layout):
        if self.on_layout_change is not None:
            self.on_layout_change(layout)

    def _dispatch(self, effect: Effect):
        if effect.kind is EffectKind.LAYOUT_CHANGE:
            self._notify_layout(effect.layout)
            return
        if effect.kind is EffectKind.DROP:
            if self.on_drop is not None:
                self.on_drop(effect.layout, effect.new_item)
            return
        callback = getattr(self, _GESTURE_CALLBACKS[effect.kind])
        if callback is not None:
            callback(effect.layout, effect.old_item, effect.new_item, effect.placeholder)


class ResponsiveGridSession(GridSession):
    """
    A session whose column count and layout follow the container width.

    Keeps one layout per breakpoint. Committed layouts are written back to
    the active breakpoint; switching breakpoints loads the stored layout
    (or adapts the current one when none is stored) and starts a fresh
    undo history.
    """

    def __init__(self, layouts: Optional[Union[ResponsiveLayoutSet, Mapping[str, Iterable[GridItem]]]] = None,
                 items: Optional[Iterable[GridItem]] = None,
                 breakpoints: Optional[Mapping[str, int]] = None,
                 cols: Optional[Mapping[str, int]] = None,
                 config: Optional[GridConfig] = None,
                 on_breakpoint_change: Optional[Callable[[str, int], None]] = None,
                 **callbacks: Any):
        self.cols_table: Dict[str, int] = dict(cols or {})
        self.tracker = BreakpointTracker(breakpoints, self.cols_table)
        self.on_breakpoint_change = on_breakpoint_change

        if isinstance(layouts, ResponsiveLayoutSet):
            self.layouts = layouts
        elif layouts is not None:
            self.layouts = ResponsiveLayoutSet({name: Layout(its) for name, its in layouts.items()})
        elif items is not None:
            table = {name: get_cols(name, self.cols_table) for name in self.tracker.breakpoints}
            self.layouts = generate_responsive_layouts(items, table)
        else:
            self.layouts = ResponsiveLayoutSet()

        # Until a width is known the fallback breakpoint is active
        self.breakpoint: str = get_defaults().fallback_breakpoint
        config = (config or GridConfig.from_defaults()).with_cols(
            get_cols(self.breakpoint, self.cols_table)
        )
        super().__init__(self.layouts.layout_for(self.breakpoint), config, **callbacks)
        self.layouts = self.layouts.with_layout(self.breakpoint, self.layout)

    def set_width(self, width: float):
        """
        Record a new container width.

        Switches breakpoint, column count and layout when the width crosses
        a threshold.
        """
        super().set_width(width)
        if not self.tracker.update(width):
            return
        name = self.tracker.current
        if name == self.breakpoint:
            return
        self._switch(name, self.tracker.current_cols)

    def _switch(self, name: str, cols: int):
        if not self.is_idle:
            logger.info("Gesture on %s abandoned by breakpoint change", self.state.active_item_id)
            self.state = IDLE

        self.layouts = self.layouts.with_layout(self.breakpoint, self.layout)
        self.breakpoint = name
        self.config = self.config.with_cols(cols)

        source = self.layouts.layout_for(name) if name in self.layouts else self.layout
        self.layout = self._legalize(source)
        self.layouts = self.layouts.with_layout(name, self.layout)
        self._reset_history()

        if self.on_breakpoint_change is not None:
            self.on_breakpoint_change(name, cols)
        self._notify_layout(self.layout)

    def set_items(self, items: Iterable[GridItem]) -> Layout:
        """Merge the item set into every stored breakpoint layout."""
        items = list(items)
        for name, layout in list(self.layouts.items()):
            if name == self.breakpoint:
                continue
            cols = get_cols(name, self.cols_table)
            merged = self._legalize(merge_items(layout, items), cols)
            self.layouts = self.layouts.with_layout(name, merged)
        return super().set_items(items)

    def _commit(self, layout: Layout):
        super()._commit(layout)
        self.layouts = self.layouts.with_layout(self.breakpoint, layout)

    def undo(self) -> bool:
        if not super().undo():
            return False
        self.layouts = self.layouts.with_layout(self.breakpoint, self.layout)
        return True

    def redo(self) -> bool:
        if not super().redo():
            return False
        self.layouts = self.layouts.with_layout(self.breakpoint, self.layout)
        return True
