# src/pathviz/core/grid.py
#!/usr/bin/env python3
"""
Grid model: construction, adjacency and editing.

Neighbor order is fixed to up, down, left, right. It is observable in the
visitation traces (it decides which of two equal-cost cells enters the
frontier first), so don't reorder it.

Editing never mutates a Grid; every helper returns a new snapshot.
"""

import json
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Iterable, List, Optional, Tuple

from pathviz.core.errors import InvalidGridSize, MapFormatError
from pathviz.core.types import BLOCK, OPEN, Cell, Grid

# up, down, left, right as (drow, dcol)
DIR4: Tuple[Cell, ...] = ((-1, 0), (1, 0), (0, -1), (0, 1))

# editor board bounds; the engine itself takes any size >= 1
MIN_SIZE = 8
MAX_SIZE = 35


def clamp_size(value: int) -> int:
    return min(MAX_SIZE, max(MIN_SIZE, value))


def build_grid(size: int) -> Grid:
    """N x N grid with no walls."""
    if size < 1:
        raise InvalidGridSize(size)
    row = (OPEN,) * size
    return Grid(size, tuple(row for _ in range(size)))


def from_rows(rows: Iterable[Iterable[int]]) -> Grid:
    """Grid from nested rows of 0/1 (anything truthy is a wall)."""
    cells = tuple(tuple(BLOCK if v else OPEN for v in r) for r in rows)
    return Grid(len(cells), cells)


def from_walls(size: int, walls: Iterable[Cell]) -> Grid:
    if size < 1:
        raise InvalidGridSize(size)
    blocked = set(walls)
    cells = tuple(
        tuple(BLOCK if (r, c) in blocked else OPEN for c in range(size))
        for r in range(size)
    )
    return Grid(size, cells)


def neighbors(grid: Grid, cell: Cell) -> List[Cell]:
    """In-bounds, unblocked 4-neighbors of ``cell`` in up/down/left/right order."""
    r, c = cell
    out: List[Cell] = []
    for dr, dc in DIR4:
        n = (r + dr, c + dc)
        if grid.in_bounds(n) and not grid.is_block(n):
            out.append(n)
    return out


def with_wall(grid: Grid, cell: Cell, value: bool = True) -> Grid:
    r, c = cell
    flag = BLOCK if value else OPEN
    if grid.cells[r][c] == flag:
        return grid
    row = grid.cells[r][:c] + (flag,) + grid.cells[r][c + 1:]
    return Grid(grid.size, grid.cells[:r] + (row,) + grid.cells[r + 1:])


def toggle_wall(grid: Grid, cell: Cell) -> Grid:
    return with_wall(grid, cell, not grid.is_block(cell))


def cleared(grid: Grid, cell: Cell) -> Grid:
    return with_wall(grid, cell, False)


# ---------- Editor state ----------

class Tool(str, Enum):
    START = "start"
    WALL = "wall"
    TARGET = "target"


@dataclass
class Board:
    """Editable board: the grid plus the designated endpoints.

    Keeps the endpoint invariant the engine relies on: start and target are
    never walls (placing an endpoint clears the wall under it, and walls are
    never painted over an endpoint).
    """
    grid: Grid
    start: Optional[Cell] = None
    target: Optional[Cell] = None
    tool: Tool = Tool.WALL

    @classmethod
    def empty(cls, size: int) -> "Board":
        return cls(build_grid(size))

    @property
    def size(self) -> int:
        return self.grid.size

    def apply(self, cell: Cell, paint: bool = False) -> None:
        """Use the active tool on ``cell``.

        With the wall tool a click toggles; ``paint`` (mouse drag) only adds.
        """
        if not self.grid.in_bounds(cell):
            return
        if self.tool is Tool.WALL:
            if cell == self.start or cell == self.target:
                return
            if paint:
                self.grid = with_wall(self.grid, cell, True)
            else:
                self.grid = toggle_wall(self.grid, cell)
        elif self.tool is Tool.START:
            self.grid = cleared(self.grid, cell)
            self.start = cell
        elif self.tool is Tool.TARGET:
            self.grid = cleared(self.grid, cell)
            self.target = cell

    def resize(self, size: int) -> None:
        """New empty board, size clamped to [MIN_SIZE, MAX_SIZE]."""
        self.grid = build_grid(clamp_size(size))
        self.start = None
        self.target = None

    def clear(self) -> None:
        self.grid = build_grid(self.grid.size)
        self.start = None
        self.target = None

    def readiness(self, any_algorithm: bool) -> str:
        if self.start is None and self.target is None:
            return "Place a start and target node to begin."
        if self.start is None:
            return "Place a start node."
        if self.target is None:
            return "Place a target node."
        if not any_algorithm:
            return "Select at least one algorithm to run."
        return "Ready to visualize."

    def is_ready(self) -> bool:
        return self.start is not None and self.target is not None


# ---------- Map files ----------

def load_map(path: Path) -> Board:
    """Read a board saved by :func:`save_map`.

    A wall under either endpoint is cleared, as placing it in the editor would.

    Shape: ``{"size": N, "start": [r, c] | null, "target": [r, c] | null,
    "cells": [[0|1, ...], ...]}``.
    """
    try:
        with open(path, "r") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as ex:
        raise MapFormatError(f"cannot read map {path}: {ex}") from ex

    try:
        size = int(data["size"])
        grid = from_rows(data["cells"])
        start = _cell_or_none(data.get("start"))
        target = _cell_or_none(data.get("target"))
    except (KeyError, TypeError, ValueError) as ex:
        raise MapFormatError(f"malformed map {path}: {ex}") from ex

    if grid.size != size:
        raise MapFormatError(f"malformed map {path}: cells size mismatch")
    for role, c in (("start", start), ("target", target)):
        if c is not None and not grid.in_bounds(c):
            raise MapFormatError(f"malformed map {path}: {role} out of bounds")
        if c is not None:
            grid = cleared(grid, c)
    return Board(grid, start, target)


def save_map(board: Board, path: Path) -> None:
    data = {
        "size": board.size,
        "start": list(board.start) if board.start is not None else None,
        "target": list(board.target) if board.target is not None else None,
        "cells": [list(r) for r in board.grid.cells],
    }
    with open(path, "w") as f:
        json.dump(data, f)


def _cell_or_none(v) -> Optional[Cell]:
    if v is None:
        return None
    r, c = v
    return (int(r), int(c))
