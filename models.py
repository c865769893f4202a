"""
Pydantic models for the Space Grid Allocator

Defines the grid domain entities and the request/response models for
the HTTP surface:
- Grid cells and bounds
- Placed spaces (with opaque caller payload)
- Request envelopes for placement, relocation and resizing
- Response envelopes shared by all routers
"""

from typing import Any, Dict, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field


# ============================================================================
# Grid Domain Models
# ============================================================================

class CellPosition(BaseModel):
    """
    Integer grid cell coordinate.

    x is the column and y is the row, both zero-based.
    """
    model_config = ConfigDict(frozen=True)

    x: int = Field(..., ge=0, description="Zero-based column")
    y: int = Field(..., ge=0, description="Zero-based row")

    def as_tuple(self) -> Tuple[int, int]:
        return self.x, self.y


class GridBounds(BaseModel):
    """
    Rectangular extent of the grid.

    Covers the cells [0, cols) x [0, rows), independent of occupancy.
    """
    model_config = ConfigDict(frozen=True)

    rows: int = Field(..., ge=1)
    cols: int = Field(..., ge=1)

    def contains(self, x: int, y: int) -> bool:
        return 0 <= x < self.cols and 0 <= y < self.rows


class GridSpace(BaseModel):
    """
    A space placed on the grid.

    name, capacity and status are stored for callers and never interpreted
    by the allocator. Any additional payload keys are kept as extra fields.
    """
    model_config = ConfigDict(frozen=True, extra="allow")

    id: str
    position: CellPosition
    name: Optional[Any] = None
    capacity: Optional[Any] = None
    status: Optional[Any] = None


# ============================================================================
# Shared Models
# ============================================================================

class ErrorDetail(BaseModel):
    """Error information for failed operations"""
    code: str
    message: str
    retryable: bool = False
    suggestion: Optional[str] = None


class ErrorResponse(BaseModel):
    """Body returned for every failed request"""
    success: bool = False
    error: ErrorDetail


# ============================================================================
# Request Models
# ============================================================================

class SpaceCreateRequest(BaseModel):
    """
    Request to place a new space.

    Any fields besides position are passed through to the allocator as payload.
    """
    model_config = ConfigDict(extra="allow")

    position: CellPosition
    name: Optional[str] = Field(None, max_length=200, description="Display label")
    capacity: Optional[Any] = None
    status: Optional[Any] = Field("available", description="Opaque status label")

    def payload(self) -> Dict[str, Any]:
        return self.model_dump(exclude={"position"})


class RelocateRequest(BaseModel):
    """Request to move a space to another cell"""
    position: CellPosition


class PositionUpdate(BaseModel):
    """A single entry of a bulk relocation"""
    space_id: str
    position: CellPosition


class BulkRelocateRequest(BaseModel):
    """Request to move several spaces, each as its own relocation"""
    updates: List[PositionUpdate]


class StatusUpdateRequest(BaseModel):
    """Request to replace a space's status label"""
    status: Any = Field(..., description="Opaque status label")


class GridResizeRequest(BaseModel):
    """
    Request to set grid dimensions.

    The grid only grows: dimensions smaller than the current bounds are ignored.
    """
    rows: int = Field(..., ge=1)
    cols: int = Field(..., ge=1)


# ============================================================================
# Response Models
# ============================================================================

class GridResponse(BaseModel):
    """Current grid bounds"""
    success: bool = True
    message: Optional[str] = None
    data: GridBounds


class LayoutData(BaseModel):
    """Consistent snapshot of bounds and placed spaces"""
    grid: GridBounds
    spaces: List[GridSpace]


class LayoutResponse(BaseModel):
    success: bool = True
    data: LayoutData


class FrontierData(BaseModel):
    """Cells that may be offered for a new placement, ordered by row then column"""
    cells: List[CellPosition]
    count: int


class FrontierResponse(BaseModel):
    success: bool = True
    data: FrontierData


class SpaceResponse(BaseModel):
    """A single space"""
    success: bool = True
    message: Optional[str] = None
    data: GridSpace


class SpaceListResponse(BaseModel):
    success: bool = True
    data: List[GridSpace]
    count: int


class BulkRelocateError(BaseModel):
    """Failure of one entry in a bulk relocation"""
    space_id: str
    code: str
    message: str


class BulkRelocateData(BaseModel):
    successful_updates: List[GridSpace]
    errors: List[BulkRelocateError]


class BulkRelocateResponse(BaseModel):
    success: bool = True
    message: str
    data: BulkRelocateData


class StatusSummary(BaseModel):
    """Number of spaces per status label"""
    total: int
    by_status: Dict[str, int]


class StatusSummaryResponse(BaseModel):
    success: bool = True
    data: StatusSummary
