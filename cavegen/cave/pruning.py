"""Pruning pass: fill in floor pockets too small to be worth reaching."""

from __future__ import annotations

from typing import List, Optional, Tuple

from .connectivity import Region
from .grid import Grid
from .tiles import WALL


def prune_small_regions(
    grid: Grid, regions: List[Region], largest_index: Optional[int], min_cave_size: int
) -> Tuple[int, int]:
    """Wall over every region smaller than ``min_cave_size`` except the largest.

    Regions at or above the threshold are left alone even when they are not
    connected to the largest one; corridor carving deals with those.
    Returns ``(regions_pruned, cells_pruned)``.
    """
    regions_pruned = 0
    cells_pruned = 0
    for i, region in enumerate(regions):
        if i == largest_index or region.size >= min_cave_size:
            continue
        for x, y in region.cells:
            grid.set(x, y, WALL)
        regions_pruned += 1
        cells_pruned += region.size
    return regions_pruned, cells_pruned


__all__ = ["prune_small_regions"]
