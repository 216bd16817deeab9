# src/pathviz/core/types.py
#!/usr/bin/env python3
from dataclasses import dataclass, field
from typing import List, Tuple, Optional, Dict

from pathviz.core.errors import InvalidGridSize

Cell = Tuple[int, int]  # (row, col)

OPEN = 0
BLOCK = 1


@dataclass(frozen=True)
class Grid:
    """Square board of obstruction flags, cells[row][col] is OPEN or BLOCK.

    Frozen. Edits go through the helpers in ``pathviz.core.grid`` and return
    a new Grid.
    """
    size: int
    cells: Tuple[Tuple[int, ...], ...]

    def __post_init__(self):
        if self.size < 1:
            raise InvalidGridSize(self.size)
        if len(self.cells) != self.size or any(len(r) != self.size for r in self.cells):
            raise InvalidGridSize(self.size, "cells must be a square matrix of side size")

    def in_bounds(self, c: Cell) -> bool:
        r, col = c
        return 0 <= r < self.size and 0 <= col < self.size

    def is_block(self, c: Cell) -> bool:
        r, col = c
        return self.cells[r][col] == BLOCK

    @property
    def walls(self) -> List[Cell]:
        return [(r, c) for r in range(self.size) for c in range(self.size)
                if self.cells[r][c] == BLOCK]


@dataclass
class StepResult:
    status: str                   # "running" | "done" | "no_path"
    opened: List[Cell] = field(default_factory=list)
    settled: Optional[Cell] = None
    metrics: Dict[str, int] = field(default_factory=dict)


@dataclass(frozen=True)
class SearchResult:
    trace: Tuple[Cell, ...]       # settle order
    path: Tuple[Cell, ...]        # start..target, empty when unreachable
    parents: Dict[Cell, Cell] = field(default_factory=dict, compare=False, repr=False)

    @property
    def found(self) -> bool:
        return bool(self.path)
