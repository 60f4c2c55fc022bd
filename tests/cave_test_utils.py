from collections import deque

# Tile characters as they appear in CaveMap.rows(); duplicated here for test
# independence from cavegen.cave.tiles.
WALL = "W"
FLOOR = "F"


class SequenceRng:
    """Stand-in random source replaying a fixed list of draws."""

    def __init__(self, values):
        self.values = list(values)
        self.bounds = []

    def next(self, bound):
        self.bounds.append(bound)
        return self.values.pop(0)


def border_cells(width, height):
    for x in range(width):
        yield x, 0
        yield x, height - 1
    for y in range(height):
        yield 0, y
        yield width - 1, y


def floor_components(rows):
    """Return list of sets of (x,y) 4-connected FLOOR components, scan order."""
    h = len(rows)
    w = len(rows[0])
    seen = set()
    comps = []
    for y in range(h):
        for x in range(w):
            if rows[y][x] != FLOOR or (x, y) in seen:
                continue
            comp = {(x, y)}
            seen.add((x, y))
            q = deque([(x, y)])
            while q:
                cx, cy = q.popleft()
                for dx, dy in ((1, 0), (-1, 0), (0, 1), (0, -1)):
                    nx, ny = cx + dx, cy + dy
                    if 0 <= nx < w and 0 <= ny < h and (nx, ny) not in seen and rows[ny][nx] == FLOOR:
                        seen.add((nx, ny))
                        comp.add((nx, ny))
                        q.append((nx, ny))
            comps.append(comp)
    return comps
