# src/pathviz/core/runner.py
#!/usr/bin/env python3
"""
Run orchestration: validate the request, run each variant on its own state,
collect the results.

Variants never share cost/parent/trace structures, so running both gives the
same per-variant results as running each alone, sequentially or in threads.
"""

from concurrent.futures import ThreadPoolExecutor
from enum import Enum
from typing import Dict, Iterable, Mapping, Type
import logging

from pathviz.core.errors import BlockedEndpoint, InvalidBounds, NoAlgorithmSelected
from pathviz.core.search import AStarSearch, FrontierSearch
from pathviz.core.types import Cell, Grid, SearchResult

logger = logging.getLogger(__name__)


class Variant(str, Enum):
    DIJKSTRA = "dijkstra"
    ASTAR = "astar"

    @property
    def label(self) -> str:
        return "Dijkstra" if self is Variant.DIJKSTRA else "A*"

    @classmethod
    def parse(cls, name: str) -> "Variant":
        key = name.strip().lower().replace("*", "star").replace("-", "").replace("_", "")
        for v in cls:
            if key == v.value:
                return v
        raise ValueError(f"unknown algorithm {name!r}")


class RunOutcome(str, Enum):
    SUCCESS = "success"    # every requested variant found a path
    PARTIAL = "partial"
    FAILURE = "failure"    # none did


_ALGOS: Dict[Variant, Type[FrontierSearch]] = {
    Variant.DIJKSTRA: FrontierSearch,
    Variant.ASTAR: AStarSearch,
}


def check_endpoints(grid: Grid, start: Cell, target: Cell) -> None:
    """Raise before any traversal if start/target can't be searched from/to."""
    for role, c in (("start", start), ("target", target)):
        if not grid.in_bounds(c):
            raise InvalidBounds(role, c, grid.size)
    for role, c in (("start", start), ("target", target)):
        if grid.is_block(c):
            raise BlockedEndpoint(role, c)


def run_search(grid: Grid, start: Cell, target: Cell, variant: Variant) -> SearchResult:
    check_endpoints(grid, start, target)
    algo = _ALGOS[Variant(variant)]()
    algo.init(grid, start, target)
    return algo.run()


def run_all(grid: Grid, start: Cell, target: Cell, variants: Iterable[Variant],
            parallel: bool = False) -> Dict[Variant, SearchResult]:
    """Run every requested variant independently.

    Results are keyed in canonical variant order (Dijkstra, then A*) whatever
    order ``variants`` came in. With ``parallel`` each variant gets its own
    worker thread; results are merged only once all of them finished.
    """
    requested = set(Variant(v) for v in variants)
    if not requested:
        raise NoAlgorithmSelected()
    check_endpoints(grid, start, target)
    ordered = [v for v in Variant if v in requested]

    if parallel and len(ordered) > 1:
        with ThreadPoolExecutor(max_workers=len(ordered)) as pool:
            futures = {v: pool.submit(run_search, grid, start, target, v) for v in ordered}
            results = {v: futures[v].result() for v in ordered}
    else:
        results = {v: run_search(grid, start, target, v) for v in ordered}

    if logger.isEnabledFor(logging.INFO):
        logger.info("run %s->%s on %dx%d: %s", start, target, grid.size, grid.size,
                    ", ".join(f"{v.label} settled={len(r.trace)} path={len(r.path)}"
                              for v, r in results.items()))
    return results


def classify(results: Mapping[Variant, SearchResult]) -> RunOutcome:
    found = [r.found for r in results.values()]
    if found and all(found):
        return RunOutcome.SUCCESS
    if any(found):
        return RunOutcome.PARTIAL
    return RunOutcome.FAILURE


def status_message(results: Mapping[Variant, SearchResult]) -> str:
    """One-line summary for a status bar."""
    outcome = classify(results)
    if outcome is RunOutcome.SUCCESS:
        return "Search complete."
    if outcome is RunOutcome.FAILURE:
        return "No path found."
    for v, r in results.items():
        if not r.found:
            return f"{v.label} did not find a path."
    return "Search complete."
