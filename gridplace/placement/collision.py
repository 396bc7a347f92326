"""Axis-aligned collision tests on grid cells.

Items that only share an edge do not collide.
"""

from typing import Iterable, List, Optional

from ..layout.abstraction import GridItem


def collides(a: GridItem, b: GridItem) -> bool:
    """Check if two items overlap by at least one cell."""
    return not (a.x + a.w <= b.x or b.x + b.w <= a.x or
                a.y + a.h <= b.y or b.y + b.h <= a.y)


def get_all_collisions(items: Iterable[GridItem], item: GridItem) -> List[GridItem]:
    """Every item colliding with ``item``, ignoring entries with its id."""
    return [other for other in items
            if other.id != item.id and collides(other, item)]


def get_first_collision(items: Iterable[GridItem], item: GridItem) -> Optional[GridItem]:
    for other in items:
        if other.id != item.id and collides(other, item):
            return other
    return None
