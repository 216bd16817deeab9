# src/pathviz/core/search.py
#!/usr/bin/env python3
"""
Frontier search over a grid, one settle per step().

Both variants share the same loop and differ only in priority():
- Dijkstra: priority = g
- A*:       priority = g + manhattan(cell, target), and settled neighbors are
            skipped before relaxation.

Frontier entries are (priority, seq, cell). seq is a per-run insertion
counter, so equal priorities pop FIFO; combined with the fixed neighbor order
this makes the visitation trace reproducible for identical inputs.

Stale entries are not removed from the heap; a popped cell that is already
settled is simply discarded (lazy deletion).

The loop stops as soon as the target is settled. It never floods the rest of
the grid, the trace length depends on it.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Set, Tuple
import heapq
import logging
from math import inf

from pathviz.core.grid import neighbors
from pathviz.core.path import reconstruct_path
from pathviz.core.types import Cell, Grid, SearchResult, StepResult

logger = logging.getLogger(__name__)


def manhattan(a: Cell, b: Cell) -> int:
    return abs(a[0] - b[0]) + abs(a[1] - b[1])


@dataclass
class FrontierSearch:
    name: str = "Dijkstra"
    skip_settled: bool = False

    # Internal state, rebuilt by reset()
    grid: Optional[Grid] = None
    start: Optional[Cell] = None
    target: Optional[Cell] = None
    frontier: List[Tuple[int, int, Cell]] = field(default_factory=list)  # (priority, seq, cell)
    settled: Set[Cell] = field(default_factory=set)
    cost: Dict[Cell, int] = field(default_factory=dict)
    parent: Dict[Cell, Cell] = field(default_factory=dict)
    trace: List[Cell] = field(default_factory=list)
    seq: int = 0
    popped_count: int = 0
    done: bool = False
    no_path: bool = False

    # -------------------- lifecycle --------------------

    def init(self, grid: Grid, start: Cell, target: Cell) -> None:
        self.grid = grid
        self.start = start
        self.target = target
        self.reset()

    def reset(self) -> None:
        """Clear all state and seed the frontier with start at cost 0."""
        if self.grid is None:
            return
        self.frontier.clear()
        self.settled.clear()
        self.cost.clear()
        self.parent.clear()
        self.trace.clear()
        self.seq = 0
        self.popped_count = 0
        self.done = False
        self.no_path = False

        self.cost[self.start] = 0
        self._push(self.start, 0)

    # -------------------- helpers --------------------

    def priority(self, cell: Cell, g: int) -> int:
        return g

    def _bump(self) -> int:
        self.seq += 1
        return self.seq

    def _push(self, cell: Cell, g: int) -> None:
        heapq.heappush(self.frontier, (self.priority(cell, g), self._bump(), cell))

    def _pop_unsettled(self) -> Optional[Cell]:
        while self.frontier:
            _, _, u = heapq.heappop(self.frontier)
            self.popped_count += 1
            if u not in self.settled:
                return u
        return None

    # -------------------- stepping --------------------

    def step(self) -> StepResult:
        """Settle exactly one cell, or report the terminal state."""
        if self.grid is None:
            return StepResult(status="idle", metrics={})
        if self.done:
            return StepResult(status="done", metrics=self._metrics())
        if self.no_path:
            return StepResult(status="no_path", metrics=self._metrics())

        u = self._pop_unsettled()
        if u is None:
            self.no_path = True
            return StepResult(status="no_path", metrics=self._metrics())

        self.settled.add(u)
        self.trace.append(u)

        if u == self.target:
            self.done = True
            return StepResult(status="done", settled=u, metrics=self._metrics())

        opened_now: List[Cell] = []
        g_u = self.cost[u]
        for v in neighbors(self.grid, u):
            if self.skip_settled and v in self.settled:
                continue
            alt = g_u + 1
            if alt < self.cost.get(v, inf):
                self.cost[v] = alt
                self.parent[v] = u
                self._push(v, alt)
                opened_now.append(v)

        return StepResult(status="running", opened=opened_now, settled=u,
                          metrics=self._metrics())

    def run(self) -> SearchResult:
        """Step until the target is settled or the frontier runs dry."""
        if self.grid is None:
            raise RuntimeError(f"{self.name}: init() must be called before run()")
        while not (self.done or self.no_path):
            self.step()

        path = reconstruct_path(self.parent, self.start, self.target) if self.done else []
        logger.debug("%s %s->%s: settled=%d popped=%d path_len=%d",
                     self.name, self.start, self.target,
                     len(self.trace), self.popped_count, len(path))
        return SearchResult(trace=tuple(self.trace), path=tuple(path),
                            parents=dict(self.parent))

    # -------------------- metrics --------------------

    def _metrics(self) -> Dict[str, int]:
        return {
            "popped": self.popped_count,
            "frontier_size": len(self.frontier),
            "settled_count": len(self.settled),
        }


@dataclass
class AStarSearch(FrontierSearch):
    name: str = "A*"
    skip_settled: bool = True

    def priority(self, cell: Cell, g: int) -> int:
        return g + manhattan(cell, self.target)


def dijkstra(grid: Grid, start: Cell, target: Cell) -> SearchResult:
    algo = FrontierSearch()
    algo.init(grid, start, target)
    return algo.run()


def astar(grid: Grid, start: Cell, target: Cell) -> SearchResult:
    algo = AStarSearch()
    algo.init(grid, start, target)
    return algo.run()
