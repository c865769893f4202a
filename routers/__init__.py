"""
API Routers for the Space Grid Allocator
"""

from . import grid_router
from . import space_router

__all__ = [
    "grid_router",
    "space_router"
]
