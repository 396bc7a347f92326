"""
Free-Space Search

Finds the first position where an item fits without colliding. The scan is
row-major from the requested row downward, left to right inside each row,
so results are deterministic, and it always ends because rows below the
lowest item are empty.
"""

import logging
from typing import Iterable, Optional

from ..layout.abstraction import GridItem
from .collision import collides

logger = logging.getLogger(__name__)


def place(items: Iterable[GridItem], candidate: GridItem, cols: int,
          exclude_id: Optional[str] = None) -> GridItem:
    """
    Resolve a free position for ``candidate``.

    Args:
        items: Items already on the grid
        candidate: Item with the requested position
        cols: Column count of the grid
        exclude_id: Id of an item to ignore (typically the candidate's own entry)

    Returns:
        ``candidate`` itself when the requested position is free, otherwise a
        copy at the first free position at or below the requested row
    """
    obstacles = [i for i in items if i.id != exclude_id]

    if not any(collides(candidate, other) for other in obstacles):
        return candidate

    # Wider than the grid: only x=0 is worth trying
    last_x = max(0, cols - candidate.w)

    y = candidate.y
    while True:
        for x in range(0, last_x + 1):
            test = candidate.moved(x=x, y=y)
            if not any(collides(test, other) for other in obstacles):
                if logger.isEnabledFor(logging.DEBUG):
                    logger.debug(
                        "Placed %s: requested (%d, %d) -> (%d, %d)",
                        candidate.id, candidate.x, candidate.y, x, y,
                    )
                return test
        y += 1
