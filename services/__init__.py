"""
Services for the Space Grid Allocator

The GridAllocator owns grid state. The ActivityLogClient forwards
mutations to the external activity log.
"""

from .activity_service import ActivityLogClient, activity_service
from .grid_allocator import (
    ConflictError,
    GridAllocator,
    GridAllocatorError,
    InvalidPositionError,
    NotFoundError,
    Placement,
    Relocation,
    get_grid_allocator,
    grid_allocator
)

__all__ = [
    "ActivityLogClient",
    "activity_service",
    "ConflictError",
    "GridAllocator",
    "GridAllocatorError",
    "InvalidPositionError",
    "NotFoundError",
    "Placement",
    "Relocation",
    "get_grid_allocator",
    "grid_allocator"
]
