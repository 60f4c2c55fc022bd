"""Row-major tile buffers.

``Grid`` is the mutable working buffer each pipeline stage owns. ``CaveMap``
is the frozen result handed to consumers; it has the same read API and no
mutators.

Both share the bounds policy: reads outside the grid report ``WALL`` and
writes outside the grid are ignored.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Iterable, Iterator, List, Optional, Sequence, Tuple

from .tiles import CHAR_TO_TILE, FLOOR, WALL, Tile

Coord2D = Tuple[int, int]


class _TileView:
    """Read-only accessors shared by Grid and CaveMap."""

    width: int
    height: int
    tiles: Sequence[Tile]

    def is_valid_position(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def index_of(self, x: int, y: int) -> int:
        return y * self.width + x

    def position_of(self, index: int) -> Coord2D:
        y, x = divmod(index, self.width)
        return (x, y)

    def get(self, x: int, y: int) -> Tile:
        if not self.is_valid_position(x, y):
            return WALL
        return self.tiles[y * self.width + x]

    def is_floor(self, x: int, y: int) -> bool:
        return self.get(x, y) is FLOOR

    def cells(self) -> Iterator[Coord2D]:
        """Yield every coordinate, y outer and x inner."""
        for y in range(self.height):
            for x in range(self.width):
                yield x, y

    def floor_positions(self) -> List[Coord2D]:
        return [self.position_of(i) for i, t in enumerate(self.tiles) if t is FLOOR]

    def count(self, tile: Tile) -> int:
        return sum(1 for t in self.tiles if t is tile)

    def tile_string(self) -> str:
        return "".join(t.value for t in self.tiles)

    def rows(self) -> List[str]:
        s = self.tile_string()
        return [s[y * self.width:(y + 1) * self.width] for y in range(self.height)]


class Grid(_TileView):
    """Mutable tile buffer, filled with ``fill`` on creation."""

    __slots__ = ("width", "height", "tiles")

    def __init__(self, width: int, height: int, fill: Tile = WALL):
        if width <= 0 or height <= 0:
            raise ValueError(f"grid dimensions must be positive (got {width}x{height})")
        self.width = width
        self.height = height
        self.tiles: List[Tile] = [fill] * (width * height)

    def set(self, x: int, y: int, tile: Tile) -> None:
        if not self.is_valid_position(x, y):
            return
        self.tiles[y * self.width + x] = tile

    def copy(self) -> "Grid":
        g = Grid.__new__(Grid)
        g.width = self.width
        g.height = self.height
        g.tiles = list(self.tiles)
        return g

    def freeze(self) -> "CaveMap":
        return CaveMap(self.width, self.height, tuple(self.tiles))

    @classmethod
    def from_rows(cls, rows: Iterable[str]) -> "Grid":
        """Build a grid from strings of ``W``/``F`` (or ``#``/``.``), row y=0 first."""
        rows = list(rows)
        if not rows:
            raise ValueError("at least one row required")
        g = cls(len(rows[0]), len(rows))
        for y, row in enumerate(rows):
            if len(row) != g.width:
                raise ValueError(f"row {y} has length {len(row)}, expected {g.width}")
            for x, ch in enumerate(row):
                g.set(x, y, _char_tile(ch))
        return g

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, _TileView):
            return NotImplemented
        return (self.width, self.height, list(self.tiles)) == (other.width, other.height, list(other.tiles))

    def __repr__(self) -> str:
        return f"Grid({self.width}x{self.height})"


@dataclass(frozen=True)
class CaveMap(_TileView):
    """Immutable generation output."""

    width: int
    height: int
    tiles: Tuple[Tile, ...]

    def __post_init__(self):
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"map dimensions must be positive (got {self.width}x{self.height})")
        if len(self.tiles) != self.width * self.height:
            raise ValueError("tile count does not match dimensions")

    def thaw(self) -> Grid:
        """Return a mutable working copy."""
        g = Grid(self.width, self.height)
        g.tiles = list(self.tiles)
        return g

    def to_dict(self, extra: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        data: Dict[str, Any] = {"width": self.width, "height": self.height, "rows": self.rows()}
        if extra:
            data.update(extra)
        return data


def _char_tile(ch: str) -> Tile:
    if ch == "#":
        return WALL
    if ch == ".":
        return FLOOR
    try:
        return CHAR_TO_TILE[ch]
    except KeyError:
        raise ValueError(f"unknown tile character {ch!r}") from None


__all__ = ["Grid", "CaveMap", "Coord2D"]
