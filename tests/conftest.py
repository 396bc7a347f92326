"""
Shared test fixtures for GridPlace tests.

Provides reusable items, layouts, container configs and pointer helpers
for testing the placement engine, the interaction state machine and
sessions.
"""

import pytest
from typing import Tuple

from gridplace.config import GridConfig
from gridplace.interaction.state import Point
from gridplace.layout.abstraction import GridItem, Layout

# 12 columns of 84px with 16px gutters: one column pitch is exactly 100px
CONTAINER_WIDTH = 1184
CELL_WIDTH = 100
CELL_HEIGHT = 76  # 60px rows + 16px gutter
PADDING = 16


def cell_point(col: float, row: float, inset: Tuple[float, float] = (10, 10)) -> Point:
    """Pointer position (container frame) a few pixels inside a cell."""
    return Point(
        PADDING + col * CELL_WIDTH + inset[0],
        PADDING + row * CELL_HEIGHT + inset[1],
    )


@pytest.fixture
def config() -> GridConfig:
    """A 12-column container with round cell pitches."""
    return GridConfig(container_width=CONTAINER_WIDTH)


@pytest.fixture
def all_handles_config() -> GridConfig:
    """Container with every resize handle enabled."""
    return GridConfig(
        container_width=CONTAINER_WIDTH,
        resize_handles=("n", "s", "e", "w", "ne", "nw", "se", "sw"),
    )


@pytest.fixture
def side_by_side() -> Layout:
    """Two 4x2 items next to each other on the first row."""
    return Layout([
        GridItem(id="1", x=0, y=0, w=4, h=2),
        GridItem(id="2", x=4, y=0, w=4, h=2),
    ])


@pytest.fixture
def stacked() -> Layout:
    """Three items in one column, touching top to bottom."""
    return Layout([
        GridItem(id="a", x=0, y=0, w=2, h=2),
        GridItem(id="b", x=0, y=2, w=2, h=2),
        GridItem(id="c", x=0, y=4, w=2, h=2),
    ])


@pytest.fixture
def with_static() -> Layout:
    """A movable item, a static block and an item below the block."""
    return Layout([
        GridItem(id="free", x=0, y=0, w=2, h=2),
        GridItem(id="wall", x=4, y=0, w=2, h=2, static=True),
        GridItem(id="under", x=4, y=3, w=2, h=1),
    ])


@pytest.fixture
def dashboard() -> Layout:
    """A small dashboard with bounds and a static header."""
    return Layout([
        GridItem(id="header", x=0, y=0, w=12, h=1, static=True),
        GridItem(id="chart", x=0, y=1, w=6, h=3, min_w=3, max_w=8),
        GridItem(id="table", x=6, y=1, w=6, h=3),
        GridItem(id="notes", x=0, y=4, w=4, h=2, min_h=2),
    ])


@pytest.fixture
def at():
    """Pointer helper: ``at(col, row)`` is a point just inside that cell."""
    return cell_point
