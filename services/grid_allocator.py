"""
Grid Allocator

Owns the placed spaces and the grid bounds, and keeps two invariants:
    - at most one space per cell
    - every space lies inside the bounds, which only ever grow

Operations:
    - place(position, payload) - create a space on a free cell
    - relocate(space_id, position) - move a space to a free cell
    - ensure_capacity(x, y) - grow bounds to contain a cell
    - compute_frontier() - cells offerable for a new placement

All state is guarded by one lock, so a conflict check and the write that
follows it are never interleaved with another mutation.
"""

import logging
import threading
import uuid
from collections import Counter
from typing import Any, Callable, Dict, Iterable, List, NamedTuple, Optional, Sequence, Set, Tuple, Union

from config import settings
from models import CellPosition, GridBounds, GridSpace
from utils import grid_utils
from utils.grid_utils import Cell

logger = logging.getLogger(__name__)

PositionLike = Union[CellPosition, Sequence[int]]

# Payload keys owned by the allocator
RESERVED_FIELDS = frozenset({"id", "position"})


class GridAllocatorError(Exception):
    """Base class for recoverable allocator errors"""
    code = "GRID_ERROR"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ConflictError(GridAllocatorError):
    """The target cell is occupied by another space"""
    code = "POSITION_CONFLICT"

    def __init__(self, position: Cell, occupant_id: str):
        x, y = position
        super().__init__(f"Position ({x}, {y}) is already occupied by space {occupant_id}")
        self.position = position
        self.occupant_id = occupant_id


class NotFoundError(GridAllocatorError):
    """No space has the given id"""
    code = "SPACE_NOT_FOUND"

    def __init__(self, space_id: str):
        super().__init__(f"Space {space_id} not found")
        self.space_id = space_id


class InvalidPositionError(ValueError):
    """Coordinates or dimensions that can never be valid"""
    code = "INVALID_POSITION"


def to_cell(position: PositionLike) -> Cell:
    """
    Normalize a position to an (x, y) tuple.

    Raises:
        InvalidPositionError: If the position is not two non-negative integers
    """
    if isinstance(position, CellPosition):
        return position.as_tuple()

    try:
        x, y = position
    except (TypeError, ValueError):
        raise InvalidPositionError(f"Invalid position: {position!r}")

    for value in (x, y):
        if isinstance(value, bool) or not isinstance(value, int):
            raise InvalidPositionError(f"Coordinates must be integers, got {position!r}")
        if value < 0:
            raise InvalidPositionError(f"Coordinates must be non-negative, got {position!r}")
    return x, y


def _build_space(space_id: str, cell: Cell, payload: Optional[Dict[str, Any]]) -> GridSpace:
    data = {k: v for k, v in (payload or {}).items() if k not in RESERVED_FIELDS}
    x, y = cell
    data["id"] = space_id
    data["position"] = {"x": x, "y": y}
    return GridSpace.model_validate(data)


class Placement(NamedTuple):
    """A created space and the bounds right after its placement"""
    space: GridSpace
    bounds: GridBounds


class Relocation(NamedTuple):
    """A moved space, the cell it left and the bounds right after the move"""
    space: GridSpace
    previous: CellPosition
    bounds: GridBounds


class GridAllocator:
    """
    Single owner of grid state.

    Features:
        - Conflict-free placement and relocation
        - Frontier-driven growth of the bounds, up to max_dim rows and columns
        - Consistent snapshots for readers
    """

    def __init__(
        self,
        rows: int = 1,
        cols: int = 1,
        id_factory: Optional[Callable[[], str]] = None,
        max_dim: Optional[int] = None
    ):
        self.max_dim = max_dim if max_dim is not None else settings.MAX_GRID_DIM
        self._check_dimensions(rows, cols)
        self._bounds = GridBounds(rows=rows, cols=cols)
        self._spaces: Dict[str, GridSpace] = {}
        self._occupancy: Dict[Cell, str] = {}
        self._lock = threading.Lock()
        self._id_factory = id_factory or (lambda: uuid.uuid4().hex)

    # -------- Core operations --------

    def place(self, position: PositionLike, payload: Optional[Dict[str, Any]] = None) -> GridSpace:
        """
        Create a space on a free cell.

        The bounds grow first when the cell lies outside them.

        Args:
            position: Target cell
            payload: Caller fields stored with the space (name, capacity, status, ...)

        Returns:
            The created space

        Raises:
            ConflictError: If the cell is already occupied
            InvalidPositionError: If the position is negative or beyond max_dim
        """
        return self.place_space(position, payload).space

    def place_space(
        self,
        position: PositionLike,
        payload: Optional[Dict[str, Any]] = None
    ) -> Placement:
        """Like place, also returning the bounds produced by the same write."""
        cell = self._to_cell(position)

        with self._lock:
            self._check_vacant(cell)
            space = _build_space(self._new_id(), cell, payload)
            self._grow(cell)
            self._spaces[space.id] = space
            self._occupancy[cell] = space.id
            bounds = self._bounds

        logger.info(f"Placed space {space.id} at {cell}")
        return Placement(space, bounds)

    def relocate(self, space_id: str, position: PositionLike) -> GridSpace:
        """
        Move a space to another cell.

        Moving a space onto its own cell succeeds without changing anything.

        Raises:
            NotFoundError: If space_id is unknown
            ConflictError: If another space occupies the destination
            InvalidPositionError: If the position is negative or beyond max_dim
        """
        return self.move_space(space_id, position).space

    def move_space(self, space_id: str, position: PositionLike) -> Relocation:
        """Like relocate, also returning the cell the space left and the new bounds."""
        cell = self._to_cell(position)

        with self._lock:
            space = self._require(space_id)
            previous = space.position
            current = previous.as_tuple()
            if current == cell:
                return Relocation(space, previous, self._bounds)

            self._check_vacant(cell, moving_id=space_id)
            self._grow(cell)

            x, y = cell
            moved = space.model_copy(update={"position": CellPosition(x=x, y=y)})
            del self._occupancy[current]
            self._occupancy[cell] = space_id
            self._spaces[space_id] = moved
            bounds = self._bounds

        logger.info(f"Relocated space {space_id} from {current} to {cell}")
        return Relocation(moved, previous, bounds)

    def ensure_capacity(self, x: int, y: int) -> GridBounds:
        """
        Grow the bounds so they contain (x, y).

        Idempotent, and never shrinks the bounds.
        """
        cell = self._to_cell((x, y))
        with self._lock:
            self._grow(cell)
            return self._bounds

    def compute_frontier(self) -> Set[Cell]:
        """Frontier of a consistent snapshot of the grid."""
        spaces, bounds = self.snapshot()
        return grid_utils.compute_frontier(spaces, bounds)

    # -------- Reads --------

    @property
    def bounds(self) -> GridBounds:
        with self._lock:
            return self._bounds

    def get(self, space_id: str) -> GridSpace:
        with self._lock:
            return self._require(space_id)

    def spaces(self) -> List[GridSpace]:
        """All spaces ordered by row, then column."""
        return self.snapshot()[0]

    def snapshot(self) -> Tuple[List[GridSpace], GridBounds]:
        with self._lock:
            spaces = list(self._spaces.values())
            bounds = self._bounds
        spaces.sort(key=lambda s: grid_utils.cell_sort_key(s.position.as_tuple()))
        return spaces, bounds

    def status_summary(self) -> Dict[str, Any]:
        """Count spaces per status label."""
        spaces = self.spaces()
        counts = Counter(
            "unassigned" if space.status is None else str(space.status)
            for space in spaces
        )
        return {"total": len(spaces), "by_status": dict(counts)}

    # -------- Other mutations --------

    def remove(self, space_id: str) -> GridSpace:
        """
        Delete a space. The bounds are left as they are.

        Raises:
            NotFoundError: If space_id is unknown
        """
        with self._lock:
            space = self._require(space_id)
            del self._spaces[space_id]
            del self._occupancy[space.position.as_tuple()]

        logger.info(f"Removed space {space_id} from {space.position.as_tuple()}")
        return space

    def update_payload(self, space_id: str, changes: Dict[str, Any]) -> GridSpace:
        """
        Replace payload fields of a space. id and position cannot be changed here.

        Raises:
            NotFoundError: If space_id is unknown
        """
        updates = {k: v for k, v in changes.items() if k not in RESERVED_FIELDS}

        with self._lock:
            space = self._require(space_id)
            data = space.model_dump()
            data.update(updates)
            updated = GridSpace.model_validate(data)
            self._spaces[space_id] = updated

        logger.info(f"Updated space {space_id}: {sorted(updates)}")
        return updated

    def resize(self, rows: int, cols: int) -> GridBounds:
        """
        Grow the grid to at least rows x cols.

        Smaller dimensions than the current bounds leave them unchanged.
        """
        self._check_dimensions(rows, cols)
        return self.ensure_capacity(cols - 1, rows - 1)

    def relocate_many(
        self,
        updates: Iterable[Tuple[str, PositionLike]]
    ) -> Tuple[List[GridSpace], List[Dict[str, str]]]:
        """
        Apply several relocations in order, each atomically on its own.

        A failing entry does not stop the batch.

        Returns:
            Tuple of (moved spaces, errors) where each error has space_id,
            code and message
        """
        moved: List[GridSpace] = []
        errors: List[Dict[str, str]] = []

        for space_id, position in updates:
            try:
                moved.append(self.relocate(space_id, position))
            except (GridAllocatorError, InvalidPositionError) as e:
                logger.warning(f"Bulk relocation of {space_id} failed: {e}")
                errors.append({"space_id": space_id, "code": e.code, "message": str(e)})

        return moved, errors

    # -------- Validation --------

    def _to_cell(self, position: PositionLike) -> Cell:
        cell = to_cell(position)
        if max(cell) >= self.max_dim:
            raise InvalidPositionError(
                f"Position {cell} is outside the maximum grid of {self.max_dim}x{self.max_dim}"
            )
        return cell

    def _check_dimensions(self, rows: int, cols: int) -> None:
        if rows < 1 or cols < 1:
            raise InvalidPositionError(f"Grid dimensions must be at least 1x1, got {rows}x{cols}")
        if rows > self.max_dim or cols > self.max_dim:
            raise InvalidPositionError(
                f"Grid dimensions {rows}x{cols} exceed the maximum of {self.max_dim}x{self.max_dim}"
            )

    # -------- Internals (call with the lock held) --------

    def _require(self, space_id: str) -> GridSpace:
        space = self._spaces.get(space_id)
        if space is None:
            raise NotFoundError(space_id)
        return space

    def _check_vacant(self, cell: Cell, moving_id: Optional[str] = None) -> None:
        occupant = self._occupancy.get(cell)
        if occupant is not None and occupant != moving_id:
            raise ConflictError(cell, occupant)

    def _grow(self, cell: Cell) -> None:
        grown = grid_utils.grow_bounds(self._bounds, *cell)
        if grown != self._bounds:
            logger.info(
                f"Grid grown from {self._bounds.rows}x{self._bounds.cols} "
                f"to {grown.rows}x{grown.cols}"
            )
            self._bounds = grown

    def _new_id(self) -> str:
        space_id = self._id_factory()
        while space_id in self._spaces:
            space_id = self._id_factory()
        return space_id


grid_allocator = GridAllocator(
    rows=settings.DEFAULT_GRID_ROWS,
    cols=settings.DEFAULT_GRID_COLS
)


def get_grid_allocator() -> GridAllocator:
    """FastAPI dependency returning the process-wide allocator"""
    return grid_allocator
