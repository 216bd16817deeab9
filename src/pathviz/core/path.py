# src/pathviz/core/path.py
#!/usr/bin/env python3
from typing import Dict, List, Tuple

Cell = Tuple[int, int]  # (row, col)


def reconstruct_path(parent: Dict[Cell, Cell], start: Cell, target: Cell) -> List[Cell]:
    """Walk ``parent`` back from target to start.

    Returns [start, ..., target], or [] when target was never reached. Parents
    are only ever assigned from strictly cheaper cells, so the chain is acyclic
    and the walk ends within grid-area steps.
    """
    path: List[Cell] = []
    cur = target
    while True:
        path.append(cur)
        if cur == start:
            break
        if cur not in parent:
            return []
        cur = parent[cur]
    path.reverse()

    if path[0] != start:
        return []
    return path
