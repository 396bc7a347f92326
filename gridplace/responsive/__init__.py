"""Breakpoint resolution and per-breakpoint layouts."""

from .breakpoints import (
    BreakpointTracker,
    ResponsiveLayoutSet,
    default_breakpoints,
    default_cols,
    generate_layouts,
    generate_responsive_layouts,
    get_cols,
    resolve_breakpoint,
)

__all__ = [
    "BreakpointTracker",
    "ResponsiveLayoutSet",
    "default_breakpoints",
    "default_cols",
    "generate_layouts",
    "generate_responsive_layouts",
    "get_cols",
    "resolve_breakpoint",
]
