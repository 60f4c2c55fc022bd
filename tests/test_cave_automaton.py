import pytest

from cavegen.cave import FLOOR, WALL, Grid, RandomSource
from cavegen.cave.automaton import (
    MOORE_OFFSETS,
    automaton_step,
    count_wall_neighbors,
    enforce_border,
    initialize_grid,
    run_automaton,
)
from tests.cave_test_utils import SequenceRng, border_cells


def test_initialize_draw_order_is_y_outer_x_inner():
    rng = SequenceRng([0, 99, 0, 99, 99, 0])
    g = initialize_grid(3, 2, 50, rng)
    assert g.rows() == ["WFW", "FFW"]
    assert rng.bounds == [100] * 6


@pytest.mark.parametrize("fill,expected", [(0, "F"), (100, "W")])
def test_initialize_extremes(fill, expected):
    g = initialize_grid(6, 4, fill, RandomSource(3))
    assert set(g.tile_string()) == {expected}


def test_initialize_draws_once_per_cell():
    rng = RandomSource(3)
    initialize_grid(11, 7, 45, rng)
    assert rng.draws == 77


def test_threshold_is_strictly_less_than_fill():
    # draw == fill_percent must give FLOOR
    g = initialize_grid(2, 1, 40, SequenceRng([39, 40]))
    assert g.rows() == ["WF"]


def test_count_wall_neighbors_treats_off_grid_as_wall():
    g = Grid(3, 3, fill=FLOOR)
    assert count_wall_neighbors(g, 1, 1) == 0
    assert count_wall_neighbors(g, 0, 0) == 5
    assert count_wall_neighbors(g, 1, 0) == 3
    assert count_wall_neighbors(g, 2, 2) == 5


def test_count_wall_neighbors_excludes_centre():
    g = Grid(3, 3, fill=WALL)
    assert count_wall_neighbors(g, 1, 1) == 8
    g.set(1, 1, FLOOR)
    assert count_wall_neighbors(g, 1, 1) == 8


@pytest.mark.parametrize("seed", [1, 2, 3])
def test_count_wall_neighbors_matches_brute_force(seed):
    g = initialize_grid(9, 6, 45, RandomSource(seed))
    for x, y in g.cells():
        expected = 0
        for ny in range(y - 1, y + 2):
            for nx in range(x - 1, x + 2):
                if (nx, ny) == (x, y):
                    continue
                inside = 0 <= nx < g.width and 0 <= ny < g.height
                if not inside or g.tiles[ny * g.width + nx] is WALL:
                    expected += 1
        assert count_wall_neighbors(g, x, y) == expected
    assert len(MOORE_OFFSETS) == 8


def test_step_rules():
    g = Grid.from_rows(["FFFFF", "FFFFF", "FFWFF", "FFFFF", "FFFFF"])
    out = automaton_step(g, birth_limit=4, death_limit=3)
    # lone wall dies (0 < 3), corners see 5 off-grid walls (> 4) and are born
    assert out.rows() == ["WFFFW", "FFFFF", "FFFFF", "FFFFF", "WFFFW"]


def test_step_wall_survives_at_death_limit():
    g = Grid.from_rows(["WWW", "WWW", "WWW"])
    out = automaton_step(g, birth_limit=8, death_limit=8)
    # centre has exactly 8 wall neighbours: not < 8, so it stays
    assert out.get(1, 1) is WALL


def test_step_floor_survives_at_birth_limit():
    g = Grid.from_rows(["WWW", "WFW", "WWW"])
    out = automaton_step(g, birth_limit=8, death_limit=0)
    assert out.get(1, 1) is FLOOR
    out = automaton_step(g, birth_limit=7, death_limit=0)
    assert out.get(1, 1) is WALL


def test_step_does_not_mutate_input():
    rows = ["FWFWF", "WFWFW", "FWFWF"]
    g = Grid.from_rows(rows)
    out = automaton_step(g, 4, 3)
    assert g.rows() == rows
    assert out is not g


def test_run_automaton_zero_steps_is_identity():
    g = initialize_grid(8, 5, 45, RandomSource(8))
    snapshot = list(g.tiles)
    out = run_automaton(g, 0, 4, 3)
    assert list(out.tiles) == snapshot


def test_run_automaton_chains_steps():
    g = initialize_grid(10, 8, 45, RandomSource(21))
    expected = automaton_step(automaton_step(g, 4, 3), 4, 3)
    assert run_automaton(g, 2, 4, 3) == expected


def test_enforce_border():
    g = Grid(4, 3, fill=FLOOR)
    assert enforce_border(g) == 10
    assert g.rows() == ["WWWW", "WFFW", "WWWW"]
    assert enforce_border(g) == 0


@pytest.mark.parametrize("w,h", [(1, 1), (1, 5), (5, 1), (2, 2)])
def test_enforce_border_degenerate_sizes(w, h):
    g = Grid(w, h, fill=FLOOR)
    enforce_border(g)
    assert g.count(FLOOR) == 0
    for x, y in border_cells(w, h):
        assert g.get(x, y) is WALL
