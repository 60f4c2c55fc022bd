"""Cellular automaton phases: random fill, smoothing iterations, border ring."""

from __future__ import annotations

from .grid import Grid
from .tiles import FLOOR, WALL

# 3x3 Moore neighborhood minus the centre
MOORE_OFFSETS = [(-1, -1), (0, -1), (1, -1), (-1, 0), (1, 0), (-1, 1), (0, 1), (1, 1)]


def initialize_grid(width: int, height: int, fill_percent: int, rng) -> Grid:
    """Stamp every cell WALL or FLOOR with one ``rng.next(100)`` draw each.

    Draw order is y outer, x inner; changing it changes every seeded map.
    """
    grid = Grid(width, height)
    for y in range(height):
        for x in range(width):
            grid.set(x, y, WALL if rng.next(100) < fill_percent else FLOOR)
    return grid


def count_wall_neighbors(grid: Grid, x: int, y: int) -> int:
    """Count WALL tiles among the 8 neighbors; off-grid neighbors count as WALL."""
    return sum(1 for dx, dy in MOORE_OFFSETS if grid.get(x + dx, y + dy) is WALL)


def automaton_step(grid: Grid, birth_limit: int, death_limit: int) -> Grid:
    """Return the next generation. ``grid`` is only read."""
    out = Grid(grid.width, grid.height)
    for y in range(grid.height):
        for x in range(grid.width):
            walls = count_wall_neighbors(grid, x, y)
            if grid.get(x, y) is WALL:
                out.set(x, y, FLOOR if walls < death_limit else WALL)
            else:
                out.set(x, y, WALL if walls > birth_limit else FLOOR)
    return out


def run_automaton(grid: Grid, steps: int, birth_limit: int, death_limit: int) -> Grid:
    for _ in range(steps):
        grid = automaton_step(grid, birth_limit, death_limit)
    return grid


def enforce_border(grid: Grid) -> int:
    """Force the outer ring to WALL. Returns how many cells changed."""
    w, h = grid.width, grid.height
    ring = set()
    for x in range(w):
        ring.add((x, 0))
        ring.add((x, h - 1))
    for y in range(h):
        ring.add((0, y))
        ring.add((w - 1, y))
    changed = 0
    for x, y in ring:
        if grid.get(x, y) is not WALL:
            grid.set(x, y, WALL)
            changed += 1
    return changed


__all__ = [
    "MOORE_OFFSETS",
    "initialize_grid",
    "count_wall_neighbors",
    "automaton_step",
    "run_automaton",
    "enforce_border",
]
