"""Spawn point selection on a finished cave map.

Read-only consumer of ``CaveMap``: it queries FLOOR cells and never writes.
Draws go through any object exposing ``next(bound)`` (normally a
``RandomSource``) so a given seed always places the spawn on the same cell.
"""

from __future__ import annotations

import random
from typing import List, Tuple

from cavegen.cave import CaveMap
from cavegen.logging_utils import get_logger

log = get_logger("cavegen.spawn")


def floor_positions(cave_map: CaveMap) -> List[Tuple[int, int]]:
    """All FLOOR coordinates in row-major order."""
    return cave_map.floor_positions()


def is_floor_at(cave_map: CaveMap, x: int, y: int) -> bool:
    """True only for in-bounds FLOOR cells."""
    return cave_map.is_valid_position(x, y) and cave_map.is_floor(x, y)


def random_floor_position(cave_map: CaveMap, rng=None) -> Tuple[int, int]:
    """Pick a uniformly random FLOOR cell.

    Without ``rng`` the choice comes from the process-wide ``random`` module
    and is not reproducible.

    A map with no floor at all falls back to its centre cell, which is then
    a WALL; callers that care should check ``is_floor_at`` on the result.
    """
    candidates = floor_positions(cave_map)
    if not candidates:
        centre = (cave_map.width // 2, cave_map.height // 2)
        log.warn(event="no_floor_positions", width=cave_map.width, height=cave_map.height, fallback=f"{centre[0]},{centre[1]}")
        return centre
    if rng is None:
        return random.choice(candidates)
    return candidates[rng.next(len(candidates))]


__all__ = ["floor_positions", "is_floor_at", "random_floor_position"]
