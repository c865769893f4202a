"""
Grid cell utilities for the Space Grid Allocator

Pure functions over grid cells and bounds. Cells are (x, y) tuples where
x is the column and y the row; both are non-negative.

Neighbourhood uses 8-connectivity:

    (x-1, y-1) (x, y-1) (x+1, y-1)
    (x-1, y)    [cell]  (x+1, y)
    (x-1, y+1) (x, y+1) (x+1, y+1)
"""

from typing import Iterable, Iterator, List, Set, Tuple

from models import GridBounds, GridSpace

Cell = Tuple[int, int]

NEIGHBOR_OFFSETS: Tuple[Cell, ...] = (
    (-1, -1), (0, -1), (1, -1),
    (-1, 0),           (1, 0),
    (-1, 1),  (0, 1),  (1, 1),
)


def neighbors(cell: Cell) -> Iterator[Cell]:
    """
    Yield the 8-connected neighbours of a cell.

    Neighbours with a negative coordinate are skipped; there is no upper
    limit because the grid grows to admit new cells.
    """
    x, y = cell
    for dx, dy in NEIGHBOR_OFFSETS:
        nx, ny = x + dx, y + dy
        if nx >= 0 and ny >= 0:
            yield nx, ny


def cells_in_bounds(bounds: GridBounds) -> Iterator[Cell]:
    """Yield every cell inside bounds, row by row."""
    for y in range(bounds.rows):
        for x in range(bounds.cols):
            yield x, y


def grow_bounds(bounds: GridBounds, x: int, y: int) -> GridBounds:
    """
    Return bounds large enough to contain (x, y).

    Never shrinks: the result is the original bounds when the cell is
    already inside them.
    """
    if bounds.contains(x, y):
        return bounds
    return GridBounds(rows=max(bounds.rows, y + 1), cols=max(bounds.cols, x + 1))


def occupied_cells(spaces: Iterable[GridSpace]) -> Set[Cell]:
    return {space.position.as_tuple() for space in spaces}


def compute_frontier(spaces: Iterable[GridSpace], bounds: GridBounds) -> Set[Cell]:
    """
    Compute the cells a caller may offer for a new placement.

    The frontier is the union of:
        - every 8-connected neighbour of an occupied cell, and
        - every cell inside the current bounds,
    minus every occupied cell.

    Interior cells are included even when they are far from any space, so a
    sparse grid offers all of its holes.

    Args:
        spaces: Placed spaces
        bounds: Current grid bounds

    Returns:
        Set of unoccupied (x, y) cells
    """
    occupied = occupied_cells(spaces)

    candidates: Set[Cell] = set(cells_in_bounds(bounds))
    for cell in occupied:
        candidates.update(neighbors(cell))

    return candidates - occupied


def cell_sort_key(cell: Cell) -> Tuple[int, int]:
    """Order cells by row, then column."""
    x, y = cell
    return y, x


def sorted_cells(cells: Iterable[Cell]) -> List[Cell]:
    return sorted(cells, key=cell_sort_key)
