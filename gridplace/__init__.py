"""
GridPlace - Grid Layout Placement Engine

Places, compacts and rearranges rectangular items on a column grid: pointer
to cell mapping, collision detection, push-down cascades, compaction,
responsive breakpoints and a pure drag/resize state machine.
"""

__version__ = "0.1.0"
__author__ = "GridPlace Team"

from .layout.abstraction import GridItem, Layout, merge_items
from .config import GridConfig, GridDefaults, get_defaults
from .placement.compactor import CompactType, compact
from .placement.cascade import move_items
from .placement.free_space import place
from .responsive.breakpoints import BreakpointTracker, get_cols, resolve_breakpoint
from .interaction.machine import step
from .interaction.session import GridSession, ResponsiveGridSession

__all__ = [
    "GridItem",
    "Layout",
    "merge_items",
    "GridConfig",
    "GridDefaults",
    "get_defaults",
    "CompactType",
    "compact",
    "move_items",
    "place",
    "BreakpointTracker",
    "get_cols",
    "resolve_breakpoint",
    "step",
    "GridSession",
    "ResponsiveGridSession",
]
