"""
Space Router

Handles placement, relocation and removal of spaces on the grid.

Conflicts, unknown ids and invalid coordinates are raised by the allocator
and translated to 409, 404 and 400 responses by the handlers in main.

Endpoints:
    GET /spaces - List spaces ordered by row, then column
    POST /spaces - Place a new space
    GET /spaces/status/summary - Count spaces per status
    PUT /spaces/positions - Relocate several spaces
    GET /spaces/{space_id} - Get a space
    PUT /spaces/{space_id}/position - Relocate a space
    PUT /spaces/{space_id}/status - Change a space's status
    DELETE /spaces/{space_id} - Remove a space
"""

import logging

from fastapi import APIRouter, Depends

from models import (
    BulkRelocateData,
    BulkRelocateError,
    BulkRelocateRequest,
    BulkRelocateResponse,
    RelocateRequest,
    SpaceCreateRequest,
    SpaceListResponse,
    SpaceResponse,
    StatusSummary,
    StatusSummaryResponse,
    StatusUpdateRequest
)
from services.activity_service import activity_service
from services.grid_allocator import GridAllocator, get_grid_allocator

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/spaces", response_model=SpaceListResponse)
async def list_spaces(allocator: GridAllocator = Depends(get_grid_allocator)):
    """List all spaces ordered by row, then column."""
    spaces = allocator.spaces()
    return SpaceListResponse(data=spaces, count=len(spaces))


@router.post("/spaces", response_model=SpaceResponse, status_code=201)
async def place_space(
    request: SpaceCreateRequest,
    allocator: GridAllocator = Depends(get_grid_allocator)
):
    """
    Place a new space on a free cell.

    The grid grows when the cell lies outside it. Responds 409 when the
    cell is already taken; the caller should fetch the frontier and retry.
    """
    logger.info(f"Place request: position={request.position.as_tuple()}, name={request.name}")

    space, bounds = allocator.place_space(request.position, request.payload())

    await activity_service.log_activity("space_placed", {
        "space_id": space.id,
        "space_name": space.name,
        "position": space.position.model_dump(),
        "grid": bounds.model_dump()
    })

    return SpaceResponse(message="Space placed successfully", data=space)


@router.get("/spaces/status/summary", response_model=StatusSummaryResponse)
async def get_status_summary(allocator: GridAllocator = Depends(get_grid_allocator)):
    """Count spaces per status label."""
    return StatusSummaryResponse(data=StatusSummary(**allocator.status_summary()))


@router.put("/spaces/positions", response_model=BulkRelocateResponse)
async def relocate_spaces(
    request: BulkRelocateRequest,
    allocator: GridAllocator = Depends(get_grid_allocator)
):
    """
    Relocate several spaces in order.

    Each entry is applied on its own; failed entries are reported in
    data.errors without undoing the successful ones.
    """
    moved, errors = allocator.relocate_many(
        (update.space_id, update.position) for update in request.updates
    )

    await activity_service.log_activity("bulk_space_positions_updated", {
        "updates_count": len(moved),
        "errors_count": len(errors)
    })

    return BulkRelocateResponse(
        message=f"Updated {len(moved)} space positions",
        data=BulkRelocateData(
            successful_updates=moved,
            errors=[BulkRelocateError(**error) for error in errors]
        )
    )


@router.get("/spaces/{space_id}", response_model=SpaceResponse)
async def get_space(space_id: str, allocator: GridAllocator = Depends(get_grid_allocator)):
    return SpaceResponse(data=allocator.get(space_id))


@router.put("/spaces/{space_id}/position", response_model=SpaceResponse)
async def relocate_space(
    space_id: str,
    request: RelocateRequest,
    allocator: GridAllocator = Depends(get_grid_allocator)
):
    """
    Move a space to another cell.

    Moving a space onto its current cell succeeds and changes nothing.
    """
    space, old_position, bounds = allocator.move_space(space_id, request.position)

    if space.position != old_position:
        await activity_service.log_activity("space_position_updated", {
            "space_id": space_id,
            "space_name": space.name,
            "old_position": old_position.model_dump(),
            "new_position": space.position.model_dump(),
            "grid": bounds.model_dump()
        })

    return SpaceResponse(message="Space position updated successfully", data=space)


@router.put("/spaces/{space_id}/status", response_model=SpaceResponse)
async def update_space_status(
    space_id: str,
    request: StatusUpdateRequest,
    allocator: GridAllocator = Depends(get_grid_allocator)
):
    space = allocator.update_payload(space_id, {"status": request.status})

    await activity_service.log_activity("space_status_updated", {
        "space_id": space_id,
        "status": space.status
    })

    return SpaceResponse(message="Space status updated successfully", data=space)


@router.delete("/spaces/{space_id}", response_model=SpaceResponse)
async def remove_space(space_id: str, allocator: GridAllocator = Depends(get_grid_allocator)):
    """Remove a space. The grid keeps its current size."""
    space = allocator.remove(space_id)

    await activity_service.log_activity("space_removed", {
        "space_id": space_id,
        "space_name": space.name,
        "position": space.position.model_dump()
    })

    return SpaceResponse(message="Space removed successfully", data=space)
