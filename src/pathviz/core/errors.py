# src/pathviz/core/errors.py
#!/usr/bin/env python3
"""Precondition failures raised before any traversal starts.

"No path" is never an error; callers check ``SearchResult.found``.
"""

from typing import Tuple

Cell = Tuple[int, int]  # (row, col)


class GridSearchError(ValueError):
    """Base class for every error the grid-search core raises."""


class InvalidGridSize(GridSearchError):
    def __init__(self, size, detail: str = "grid size must be >= 1"):
        self.size = size
        super().__init__(f"{detail} (got {size})")


class InvalidBounds(GridSearchError):
    def __init__(self, role: str, cell: Cell, size: int):
        self.role = role
        self.cell = cell
        self.size = size
        super().__init__(f"{role} {cell} is outside the {size}x{size} grid")


class BlockedEndpoint(GridSearchError):
    def __init__(self, role: str, cell: Cell):
        self.role = role
        self.cell = cell
        super().__init__(f"{role} {cell} lies on a wall")


class NoAlgorithmSelected(GridSearchError):
    def __init__(self):
        super().__init__("Select at least one algorithm to run.")


class MapFormatError(GridSearchError):
    pass
