"""Public cave package interface."""

from .config import ConfigError, GenerationConfig  # noqa: F401
from .grid import CaveMap, Grid  # noqa: F401
from .pipeline import Cave, generate_map  # noqa: F401
from .rng import RandomSource  # noqa: F401
from .tiles import FLOOR, WALL, Tile  # noqa: F401

__all__ = [
    "Cave",
    "CaveMap",
    "ConfigError",
    "FLOOR",
    "GenerationConfig",
    "Grid",
    "RandomSource",
    "Tile",
    "WALL",
    "generate_map",
]
