"""
Grid Router

Exposes the grid bounds and the placement frontier to the space management UI.

Endpoints:
    GET /grid - Current bounds
    PUT /grid - Grow the grid to at least the given dimensions
    POST /grid/ensure-capacity - Grow the grid to contain a cell
    GET /grid/frontier - Cells offerable for a new space
    GET /grid/layout - Bounds and spaces in one consistent snapshot
"""

import logging

from fastapi import APIRouter, Depends

from models import (
    CellPosition,
    FrontierData,
    FrontierResponse,
    GridResizeRequest,
    GridResponse,
    LayoutData,
    LayoutResponse
)
from services.activity_service import activity_service
from services.grid_allocator import GridAllocator, get_grid_allocator
from utils.grid_utils import sorted_cells

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/grid", response_model=GridResponse)
async def get_grid(allocator: GridAllocator = Depends(get_grid_allocator)):
    """Get the current grid bounds."""
    return GridResponse(data=allocator.bounds)


@router.put("/grid", response_model=GridResponse)
async def resize_grid(
    request: GridResizeRequest,
    allocator: GridAllocator = Depends(get_grid_allocator)
):
    """
    Set grid dimensions.

    The grid never shrinks: each dimension becomes the larger of the
    requested and the current value, so placed spaces always stay inside.
    """
    previous = allocator.bounds
    bounds = allocator.resize(request.rows, request.cols)

    if bounds != previous:
        await activity_service.log_activity("grid_updated", {
            "rows": bounds.rows,
            "cols": bounds.cols,
            "previous": previous.model_dump()
        })
        message = "Grid settings updated successfully"
    else:
        message = "Grid already covers the requested dimensions"

    return GridResponse(message=message, data=bounds)


@router.post("/grid/ensure-capacity", response_model=GridResponse)
async def ensure_capacity(
    request: CellPosition,
    allocator: GridAllocator = Depends(get_grid_allocator)
):
    """Grow the grid so that it contains the given cell."""
    bounds = allocator.ensure_capacity(request.x, request.y)
    return GridResponse(data=bounds)


@router.get("/grid/frontier", response_model=FrontierResponse)
def get_frontier(allocator: GridAllocator = Depends(get_grid_allocator)):
    """
    Get the cells where a new space may be placed.

    Includes every free neighbour of a placed space (which may lie just
    outside the grid) and every free cell inside the grid.
    """
    cells = sorted_cells(allocator.compute_frontier())
    logger.debug(f"Frontier has {len(cells)} cells")
    return FrontierResponse(data=FrontierData(
        cells=[CellPosition(x=x, y=y) for x, y in cells],
        count=len(cells)
    ))


@router.get("/grid/layout", response_model=LayoutResponse)
def get_layout(allocator: GridAllocator = Depends(get_grid_allocator)):
    """Get bounds and spaces together, as the booking screens render them."""
    spaces, bounds = allocator.snapshot()
    return LayoutResponse(data=LayoutData(grid=bounds, spaces=spaces))
