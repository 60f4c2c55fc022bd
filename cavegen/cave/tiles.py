from enum import Enum


class Tile(str, Enum):
    """Per-cell state. Values double as the single-char wire encoding."""

    WALL = "W"
    FLOOR = "F"


# Tile constants centralized for modular imports
WALL = Tile.WALL
FLOOR = Tile.FLOOR

CHAR_TO_TILE = {t.value: t for t in Tile}

__all__ = ["Tile", "WALL", "FLOOR", "CHAR_TO_TILE"]
