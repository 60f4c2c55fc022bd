from typing import List, Tuple

from .connectivity import Region, find_regions
from .grid import Coord2D, Grid
from .tiles import FLOOR, WALL

Corridor = Tuple[Coord2D, Coord2D]


def carve_corridor(grid: Grid, start: Coord2D, end: Coord2D) -> int:
    """L-shaped corridor from ``start`` to ``end``.

    Steps horizontally one cell at a time until x matches, then vertically
    until y matches, setting every visited in-bounds cell to FLOOR. The start
    cell itself is not stamped. Returns the number of WALL cells opened.
    """
    (x, y) = start
    (gx, gy) = end
    opened = 0

    def open_cell(cx, cy):
        nonlocal opened
        if grid.is_valid_position(cx, cy) and grid.get(cx, cy) is WALL:
            opened += 1
        grid.set(cx, cy, FLOOR)

    while x != gx:
        x += 1 if gx > x else -1
        open_cell(x, y)
    while y != gy:
        y += 1 if gy > y else -1
        open_cell(x, y)
    return opened


def connect_regions(grid: Grid, min_cave_size: int) -> Tuple[List[Region], List[Corridor], int]:
    """Join consecutive surviving regions with L-shaped corridors.

    Regions of at least ``min_cave_size`` cells are re-derived from the grid
    and region i is joined to region i+1 anchor-to-anchor, in scan order.
    This links neighbors in the list; with three or more regions it does not
    promise every region ends up reachable from every other.

    Returns ``(regions, corridors, cells_opened)``.
    """
    regions = find_regions(grid, min_size=min_cave_size)
    corridors: List[Corridor] = []
    opened = 0
    for a, b in zip(regions, regions[1:]):
        opened += carve_corridor(grid, a.anchor, b.anchor)
        corridors.append((a.anchor, b.anchor))
    return regions, corridors, opened


__all__ = ["Corridor", "carve_corridor", "connect_regions"]
