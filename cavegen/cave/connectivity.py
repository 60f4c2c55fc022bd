"""Region discovery over FLOOR cells.

Flood fill is 4-connected (no diagonals). Regions come back in the order the
row-major scan first meets them, and each region lists its cells in BFS
order, so ``region.anchor`` is always the cell the scan started from.
"""

from __future__ import annotations

from collections import deque
from typing import List, NamedTuple, Optional

from .grid import Coord2D, Grid
from .tiles import FLOOR

ORTHOGONAL = [(1, 0), (-1, 0), (0, 1), (0, -1)]


class Region(NamedTuple):
    cells: List[Coord2D]

    @property
    def size(self) -> int:
        return len(self.cells)

    @property
    def anchor(self) -> Coord2D:
        return self.cells[0]


def flood_region(grid: Grid, start: Coord2D, visited: List[bool]) -> Region:
    """Collect the FLOOR region containing ``start``, marking ``visited`` by index."""
    w = grid.width
    sx, sy = start
    visited[sy * w + sx] = True
    q = deque([start])
    cells: List[Coord2D] = []
    while q:
        cx, cy = q.popleft()
        cells.append((cx, cy))
        for dx, dy in ORTHOGONAL:
            nx, ny = cx + dx, cy + dy
            if grid.is_valid_position(nx, ny) and not visited[ny * w + nx] and grid.get(nx, ny) is FLOOR:
                visited[ny * w + nx] = True
                q.append((nx, ny))
    return Region(cells)


def find_regions(grid: Grid, min_size: int = 1) -> List[Region]:
    """Partition FLOOR into maximal regions; keep those with ``size >= min_size``."""
    visited = [False] * (grid.width * grid.height)
    regions: List[Region] = []
    for y in range(grid.height):
        for x in range(grid.width):
            idx = y * grid.width + x
            if visited[idx] or grid.tiles[idx] is not FLOOR:
                continue
            region = flood_region(grid, (x, y), visited)
            if region.size >= min_size:
                regions.append(region)
    return regions


def largest_region_index(regions: List[Region]) -> Optional[int]:
    """Index of the biggest region; the earliest wins ties. None when empty."""
    best = None
    best_size = 0
    for i, region in enumerate(regions):
        if region.size > best_size:
            best, best_size = i, region.size
    return best


__all__ = ["Region", "ORTHOGONAL", "flood_region", "find_regions", "largest_region_index"]
