"""
Interaction State

Values threaded through the interaction state machine: the gesture state a
caller stores between events, the events it feeds in, and the effects it
gets back. All of them are immutable.

Pointer positions are pixels in the container frame: measured from the
container's outer top-left corner, padding included. Converting raw
mouse/touch/pointer events into that frame is the caller's job.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Union

from ..layout.abstraction import GridItem, Layout


class GestureKind(Enum):
    """Which gesture, if any, is in progress."""
    IDLE = "idle"
    DRAGGING = "dragging"
    RESIZING = "resizing"


class ResizeHandle(Enum):
    """Resize handle, named by the compass edges it controls."""
    N = "n"
    S = "s"
    E = "e"
    W = "w"
    NE = "ne"
    NW = "nw"
    SE = "se"
    SW = "sw"

    @property
    def moves_north(self) -> bool:
        return "n" in self.value

    @property
    def moves_south(self) -> bool:
        return "s" in self.value

    @property
    def moves_east(self) -> bool:
        return "e" in self.value

    @property
    def moves_west(self) -> bool:
        return "w" in self.value


class EffectKind(Enum):
    """What an effect reports; maps to the caller's callbacks."""
    DRAG_START = "drag_start"
    DRAG = "drag"
    DRAG_STOP = "drag_stop"
    RESIZE_START = "resize_start"
    RESIZE = "resize"
    RESIZE_STOP = "resize_stop"
    DROP = "drop"
    LAYOUT_CHANGE = "layout_change"


@dataclass(frozen=True)
class Point:
    """Pointer position in pixels."""
    x: float
    y: float

    def __sub__(self, other: "Point") -> "Point":
        return Point(self.x - other.x, self.y - other.y)


@dataclass(frozen=True)
class DragState:
    """Data captured when a drag starts."""
    item_id: str
    offset: Point  # pointer position inside the item
    original: GridItem  # item before the drag
    snapshot: Layout  # layout before the drag
    placeholder: Optional[GridItem] = None  # last resolved target cell
    pointer: Optional[Point] = None  # last pointer position


@dataclass(frozen=True)
class ResizeState:
    """Data captured when a resize starts."""
    item_id: str
    handle: ResizeHandle
    start_pointer: Point
    original: GridItem  # item before the resize
    snapshot: Layout


@dataclass(frozen=True)
class InteractionState:
    """Gesture state of one container. Callers keep it between events."""
    drag: Optional[DragState] = None
    resize: Optional[ResizeState] = None

    @property
    def kind(self) -> GestureKind:
        if self.drag is not None:
            return GestureKind.DRAGGING
        if self.resize is not None:
            return GestureKind.RESIZING
        return GestureKind.IDLE

    @property
    def is_idle(self) -> bool:
        return self.kind is GestureKind.IDLE

    @property
    def active_item_id(self) -> Optional[str]:
        if self.drag is not None:
            return self.drag.item_id
        if self.resize is not None:
            return self.resize.item_id
        return None


IDLE = InteractionState()


# --- Events ---

@dataclass(frozen=True)
class DragStart:
    item_id: str
    pointer: Point


@dataclass(frozen=True)
class DragMove:
    pointer: Point


@dataclass(frozen=True)
class DragEnd:
    pointer: Optional[Point] = None


@dataclass(frozen=True)
class ResizeStart:
    item_id: str
    handle: Union[ResizeHandle, str]
    pointer: Point


@dataclass(frozen=True)
class ResizeMove:
    pointer: Point


@dataclass(frozen=True)
class ResizeEnd:
    pointer: Optional[Point] = None


@dataclass(frozen=True)
class DropItem:
    """A new item dragged in from outside the grid and released."""
    item: GridItem
    pointer: Point


Event = Union[DragStart, DragMove, DragEnd, ResizeStart, ResizeMove, ResizeEnd, DropItem]


# --- Effects ---

@dataclass(frozen=True)
class Effect:
    """
    Something the caller should be told about.

    ``old_item`` is the item as it was when the gesture started and
    ``new_item`` as it is after this step, so callers can keep an audit
    trail or undo history.
    """
    kind: EffectKind
    layout: Layout
    old_item: Optional[GridItem] = None
    new_item: Optional[GridItem] = None
    placeholder: Optional[GridItem] = None


@dataclass(frozen=True)
class StepResult:
    """Outcome of feeding one event to the state machine."""
    state: InteractionState
    layout: Layout
    effects: List[Effect] = field(default_factory=list)
    accepted: bool = True  # False when the event was rejected or ignored

    def effects_of(self, kind: EffectKind) -> List[Effect]:
        return [e for e in self.effects if e.kind is kind]
