from typing import List, Tuple

from models import CellPosition, GridBounds, GridSpace
from utils.grid_utils import (
    compute_frontier,
    grow_bounds,
    neighbors,
    sorted_cells,
)


def make_spaces(cells: List[Tuple[int, int]]) -> List[GridSpace]:
    return [
        GridSpace(id=f"s{i}", position=CellPosition(x=x, y=y))
        for i, (x, y) in enumerate(cells)
    ]


def test_neighbors_of_interior_cell() -> None:
    assert set(neighbors((2, 2))) == {
        (1, 1), (2, 1), (3, 1),
        (1, 2), (3, 2),
        (1, 3), (2, 3), (3, 3),
    }


def test_neighbors_skip_negative_coordinates() -> None:
    assert set(neighbors((0, 0))) == {(1, 0), (0, 1), (1, 1)}
    assert set(neighbors((0, 3))) == {(0, 2), (1, 2), (1, 3), (0, 4), (1, 4)}


def test_grow_bounds_only_grows() -> None:
    bounds = GridBounds(rows=3, cols=4)
    assert grow_bounds(bounds, 1, 1) is bounds
    assert grow_bounds(bounds, 6, 0) == GridBounds(rows=3, cols=7)
    assert grow_bounds(bounds, 0, 9) == GridBounds(rows=10, cols=4)
    assert grow_bounds(bounds, 5, 5) == GridBounds(rows=6, cols=6)


def test_frontier_single_space_in_unit_grid() -> None:
    frontier = compute_frontier(make_spaces([(0, 0)]), GridBounds(rows=1, cols=1))
    assert frontier == {(1, 0), (0, 1), (1, 1)}


def test_frontier_of_empty_grid_is_whole_rectangle() -> None:
    frontier = compute_frontier([], GridBounds(rows=2, cols=3))
    assert frontier == {(x, y) for x in range(3) for y in range(2)}


def test_frontier_includes_interior_gaps_far_from_spaces() -> None:
    bounds = GridBounds(rows=5, cols=5)
    frontier = compute_frontier(make_spaces([(0, 0)]), bounds)
    assert (4, 4) in frontier
    assert (0, 0) not in frontier
    assert len(frontier) == 24


def test_frontier_extends_past_bounds_around_edge_spaces() -> None:
    bounds = GridBounds(rows=2, cols=2)
    frontier = compute_frontier(make_spaces([(1, 1)]), bounds)
    assert {(2, 0), (2, 1), (2, 2), (0, 2), (1, 2)} <= frontier
    assert (1, 1) not in frontier


def test_frontier_never_offers_occupied_cells() -> None:
    cells = [(0, 0), (1, 0), (2, 0), (1, 1)]
    frontier = compute_frontier(make_spaces(cells), GridBounds(rows=2, cols=3))
    assert not frontier & set(cells)
    assert frontier == {(0, 1), (2, 1), (3, 0), (3, 1), (0, 2), (1, 2), (2, 2)}


def test_sorted_cells_orders_by_row_then_column() -> None:
    assert sorted_cells({(1, 1), (0, 1), (2, 0)}) == [(2, 0), (0, 1), (1, 1)]
