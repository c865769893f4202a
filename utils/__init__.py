"""
Utility modules for the Space Grid Allocator
"""

from .grid_utils import compute_frontier, grow_bounds, neighbors, sorted_cells

__all__ = ["compute_frontier", "grow_bounds", "neighbors", "sorted_cells"]
