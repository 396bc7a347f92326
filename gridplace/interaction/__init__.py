"""Drag, resize and drop gestures as a pure state machine, plus caller-side sessions."""

from .state import (
    IDLE,
    DragEnd,
    DragMove,
    DragStart,
    DropItem,
    Effect,
    EffectKind,
    GestureKind,
    InteractionState,
    Point,
    ResizeEnd,
    ResizeHandle,
    ResizeMove,
    ResizeStart,
    StepResult,
)
from .drag import drag_target, drop_target, pointer_offset
from .resize import resize_target, snap_delta
from .machine import step
from .session import GridSession, ResponsiveGridSession

__all__ = [
    "IDLE",
    "DragEnd",
    "DragMove",
    "DragStart",
    "DropItem",
    "Effect",
    "EffectKind",
    "GestureKind",
    "InteractionState",
    "Point",
    "ResizeEnd",
    "ResizeHandle",
    "ResizeMove",
    "ResizeStart",
    "StepResult",
    "drag_target",
    "drop_target",
    "pointer_offset",
    "resize_target",
    "snap_delta",
    "step",
    "GridSession",
    "ResponsiveGridSession",
]
