"""
Core data types: the cell vocabulary, directions and move results.
"""

from pushbox.core.cells import Cell, Direction, MoveResult

__all__ = [
    "Cell",
    "Direction",
    "MoveResult",
]
