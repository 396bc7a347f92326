"""
Interaction State Machine

Drives drag, resize and drop gestures as a pure function:

    step(state, layout, event, config) -> StepResult(state, layout, effects)

The machine keeps nothing between calls. Callers store the returned state
and layout and pass them back with the next event (GridSession does this
for them). Rejected or ignored events come back with ``accepted=False``
and the inputs unchanged.

    Idle --DragStart--> Dragging --DragMove*--> Dragging --DragEnd--> Idle
    Idle --ResizeStart--> Resizing --ResizeMove*--> Resizing --ResizeEnd--> Idle
    Idle --DropItem--> Idle

If the item being dragged or resized disappears from the layout the
gesture is abandoned: the machine returns to Idle and leaves the layout
alone.
"""

import logging
from dataclasses import replace
from typing import Callable, Dict, Type

from ..config import GridConfig
from ..layout.abstraction import Layout
from ..placement.cascade import move_items
from ..placement.collision import get_all_collisions
from ..placement.compactor import compact
from ..placement.free_space import place
from ..placement.legalizer import clamp_item
from .drag import drag_target, drop_target, pointer_offset
from .resize import resize_target
from .state import (
    IDLE,
    DragEnd,
    DragMove,
    DragStart,
    DragState,
    DropItem,
    Effect,
    EffectKind,
    Event,
    InteractionState,
    ResizeEnd,
    ResizeHandle,
    ResizeMove,
    ResizeStart,
    ResizeState,
    StepResult,
)

logger = logging.getLogger(__name__)


def _ignored(state: InteractionState, layout: Layout, reason: str) -> StepResult:
    logger.debug("Event ignored: %s", reason)
    return StepResult(state=state, layout=layout, effects=[], accepted=False)


def _abandoned(layout: Layout, item_id: str,
               reason: str = "item no longer in layout") -> StepResult:
    logger.info("Gesture on %s abandoned: %s", item_id, reason)
    return StepResult(state=IDLE, layout=layout, effects=[], accepted=False)


# --- Drag ---

def _drag_start(state: InteractionState, layout: Layout, event: DragStart,
                config: GridConfig) -> StepResult:
    if not state.is_idle:
        return _ignored(state, layout, f"drag start while {state.kind.value}")

    item = layout.get(event.item_id)
    if item is None:
        return _ignored(state, layout, f"drag start on unknown item {event.item_id}")
    if not item.draggable(config.is_draggable):
        return _ignored(state, layout, f"item {item.id} is not draggable")

    drag = DragState(
        item_id=item.id,
        offset=pointer_offset(item, event.pointer, config),
        original=item,
        snapshot=layout,
        placeholder=item,
        pointer=event.pointer,
    )
    effect = Effect(EffectKind.DRAG_START, layout, old_item=item, new_item=item, placeholder=item)
    return StepResult(state=InteractionState(drag=drag), layout=layout, effects=[effect])


def _drag_move(state: InteractionState, layout: Layout, event: DragMove,
               config: GridConfig) -> StepResult:
    drag = state.drag
    if drag is None:
        return _ignored(state, layout, "drag move without a drag")

    item = layout.get(drag.item_id)
    if item is None:
        return _abandoned(layout, drag.item_id)
    if item.static:
        return _abandoned(layout, item.id, "item became static")

    target = drag_target(item, event.pointer, drag.offset, config)
    moved = layout.with_item(target)

    if not config.allow_overlap:
        collisions = get_all_collisions(moved, target)
        # Statics never get pushed out of the way
        if any(other.static for other in collisions):
            return _ignored(state, layout, f"move of {item.id} to {target.rect} hits a static item")
        if config.prevent_collision and collisions:
            return _ignored(state, layout, f"move of {item.id} to {target.rect} collides")

    if not config.prevent_collision and not config.allow_overlap:
        moved = move_items(moved, target, config.cols)

    new_layout = compact(moved, config.cols, config.effective_compact_type)

    if logger.isEnabledFor(logging.DEBUG):
        logger.debug("Drag %s -> %s", item.id, target.rect)

    new_state = InteractionState(drag=replace(drag, placeholder=target, pointer=event.pointer))
    effect = Effect(
        EffectKind.DRAG,
        new_layout,
        old_item=drag.original,
        new_item=new_layout.get(item.id),
        placeholder=target,
    )
    return StepResult(state=new_state, layout=new_layout, effects=[effect])


def _drag_end(state: InteractionState, layout: Layout, event: DragEnd,
              config: GridConfig) -> StepResult:
    drag = state.drag
    if drag is None:
        return _ignored(state, layout, "drag end without a drag")
    if drag.item_id not in layout:
        return _abandoned(layout, drag.item_id)

    final = compact(layout, config.cols, config.effective_compact_type)
    final_item = final.get(drag.item_id)
    logger.info("Drag %s finished: %s -> %s", drag.item_id, drag.original.rect, final_item.rect)

    effects = [
        Effect(
            EffectKind.DRAG_STOP,
            final,
            old_item=drag.original,
            new_item=final_item,
            placeholder=drag.placeholder or final_item,
        ),
        Effect(EffectKind.LAYOUT_CHANGE, final),
    ]
    return StepResult(state=IDLE, layout=final, effects=effects)


# --- Resize ---

def _resize_start(state: InteractionState, layout: Layout, event: ResizeStart,
                  config: GridConfig) -> StepResult:
    if not state.is_idle:
        return _ignored(state, layout, f"resize start while {state.kind.value}")

    try:
        handle = ResizeHandle(event.handle)
    except ValueError:
        return _ignored(state, layout, f"unknown resize handle {event.handle!r}")
    if handle.value not in config.resize_handles:
        return _ignored(state, layout, f"resize handle {handle.value} not enabled")

    item = layout.get(event.item_id)
    if item is None:
        return _ignored(state, layout, f"resize start on unknown item {event.item_id}")
    if not item.resizable(config.is_resizable):
        return _ignored(state, layout, f"item {item.id} is not resizable")

    resize = ResizeState(
        item_id=item.id,
        handle=handle,
        start_pointer=event.pointer,
        original=item,
        snapshot=layout,
    )
    effect = Effect(EffectKind.RESIZE_START, layout, old_item=item, new_item=item, placeholder=item)
    return StepResult(state=InteractionState(resize=resize), layout=layout, effects=[effect])


def _resize_move(state: InteractionState, layout: Layout, event: ResizeMove,
                 config: GridConfig) -> StepResult:
    resize = state.resize
    if resize is None:
        return _ignored(state, layout, "resize move without a resize")

    item = layout.get(resize.item_id)
    if item is None:
        return _abandoned(layout, resize.item_id)
    if item.static:
        return _abandoned(layout, item.id, "item became static")

    target = resize_target(
        resize.original,
        resize.handle,
        resize.start_pointer,
        event.pointer,
        config,
        static_items=layout.static_items(),
    )
    # Positions of other items stay put until the resize ends
    resized = item.with_rect(*target.rect)
    new_layout = layout.with_item(resized)

    effect = Effect(
        EffectKind.RESIZE,
        new_layout,
        old_item=resize.original,
        new_item=resized,
        placeholder=resized,
    )
    return StepResult(state=state, layout=new_layout, effects=[effect])


def _resize_end(state: InteractionState, layout: Layout, event: ResizeEnd,
                config: GridConfig) -> StepResult:
    resize = state.resize
    if resize is None:
        return _ignored(state, layout, "resize end without a resize")

    item = layout.get(resize.item_id)
    if item is None:
        return _abandoned(layout, resize.item_id)

    settled = layout
    if not config.allow_overlap:
        settled = move_items(layout, item, config.cols)
    final = compact(settled, config.cols, config.effective_compact_type)
    final_item = final.get(item.id)
    logger.info("Resize %s finished: %s -> %s", item.id, resize.original.rect, final_item.rect)

    effects = [
        Effect(
            EffectKind.RESIZE_STOP,
            final,
            old_item=resize.original,
            new_item=final_item,
            placeholder=final_item,
        ),
        Effect(EffectKind.LAYOUT_CHANGE, final),
    ]
    return StepResult(state=IDLE, layout=final, effects=effects)


# --- Drop ---

def _drop(state: InteractionState, layout: Layout, event: DropItem,
          config: GridConfig) -> StepResult:
    if not state.is_idle:
        return _ignored(state, layout, f"drop while {state.kind.value}")
    if event.item.id in layout:
        return _ignored(state, layout, f"dropped item id {event.item.id} already in layout")

    target = clamp_item(drop_target(event.item, event.pointer, config), config.cols)
    if not config.allow_overlap:
        target = place(layout, target, config.cols)

    final = compact(layout.with_item(target), config.cols, config.effective_compact_type)
    dropped = final.get(target.id)
    logger.info("Dropped %s at %s", dropped.id, dropped.rect)

    effects = [
        Effect(EffectKind.DROP, final, new_item=dropped, placeholder=target),
        Effect(EffectKind.LAYOUT_CHANGE, final),
    ]
    return StepResult(state=state, layout=final, effects=effects)


_HANDLERS: Dict[Type, Callable[..., StepResult]] = {
    DragStart: _drag_start,
    DragMove: _drag_move,
    DragEnd: _drag_end,
    ResizeStart: _resize_start,
    ResizeMove: _resize_move,
    ResizeEnd: _resize_end,
    DropItem: _drop,
}


def step(state: InteractionState, layout: Layout, event: Event,
         config: GridConfig) -> StepResult:
    """
    Feed one event to the state machine.

    Args:
        state: Gesture state returned by the previous step (IDLE initially)
        layout: Current layout
        event: The pointer event
        config: Container settings (column count, geometry, modes)

    Returns:
        StepResult with the next state, the next layout and the effects
        to report to the caller
    """
    handler = _HANDLERS.get(type(event))
    if handler is None:
        raise TypeError(f"Unsupported interaction event: {type(event).__name__}")
    return handler(state, layout, event, config)
