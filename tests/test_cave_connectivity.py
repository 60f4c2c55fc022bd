from cavegen.cave import FLOOR, Grid, RandomSource
from cavegen.cave.automaton import enforce_border, initialize_grid, run_automaton
from cavegen.cave.connectivity import find_regions, largest_region_index

ROWS = [
    "WWWWWWW",
    "WFFWFWW",
    "WFWWFFW",
    "WWWFWWW",
    "WWWWWWW",
]


def test_regions_in_scan_order_with_bfs_cells():
    regions = find_regions(Grid.from_rows(ROWS))
    assert [r.size for r in regions] == [3, 3, 1]
    assert [r.anchor for r in regions] == [(1, 1), (4, 1), (3, 3)]
    assert regions[0].cells == [(1, 1), (2, 1), (1, 2)]
    assert regions[1].cells == [(4, 1), (4, 2), (5, 2)]


def test_diagonal_cells_are_not_connected():
    regions = find_regions(Grid.from_rows(["FW", "WF"]))
    assert [r.cells for r in regions] == [[(0, 0)], [(1, 1)]]


def test_min_size_filter():
    regions = find_regions(Grid.from_rows(ROWS), min_size=2)
    assert [r.anchor for r in regions] == [(1, 1), (4, 1)]


def test_largest_region_ties_go_to_first():
    regions = find_regions(Grid.from_rows(ROWS))
    assert largest_region_index(regions) == 0


def test_largest_region_picks_biggest():
    regions = find_regions(Grid.from_rows(["FWFFF", "WWWWW", "FFWWW"]))
    assert [r.size for r in regions] == [1, 3, 2]
    assert largest_region_index(regions) == 1


def test_no_floor_means_no_regions():
    regions = find_regions(Grid(4, 4))
    assert regions == []
    assert largest_region_index(regions) is None


def test_regions_partition_all_floor_and_are_maximal():
    g = initialize_grid(24, 16, 45, RandomSource(777))
    g = run_automaton(g, 3, 4, 3)
    enforce_border(g)
    regions = find_regions(g)
    seen = set()
    for region in regions:
        cells = set(region.cells)
        assert len(cells) == region.size
        assert not cells & seen
        seen |= cells
        for x, y in cells:
            assert g.get(x, y) is FLOOR
            for dx, dy in ((1, 0), (-1, 0), (0, 1), (0, -1)):
                n = (x + dx, y + dy)
                if g.get(*n) is FLOOR:
                    assert n in cells
    assert seen == set(g.floor_positions())
