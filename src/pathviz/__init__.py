"""Grid shortest-path search (Dijkstra and A*) with replayable visitation traces."""

from pathviz.core.errors import (
    BlockedEndpoint,
    GridSearchError,
    InvalidBounds,
    InvalidGridSize,
    MapFormatError,
    NoAlgorithmSelected,
)
from pathviz.core.grid import build_grid, neighbors
from pathviz.core.path import reconstruct_path
from pathviz.core.runner import RunOutcome, Variant, classify, run_all, run_search
from pathviz.core.types import Cell, Grid, SearchResult

__all__ = [
    "BlockedEndpoint",
    "Cell",
    "Grid",
    "GridSearchError",
    "InvalidBounds",
    "InvalidGridSize",
    "MapFormatError",
    "NoAlgorithmSelected",
    "RunOutcome",
    "SearchResult",
    "Variant",
    "build_grid",
    "classify",
    "neighbors",
    "reconstruct_path",
    "run_all",
    "run_search",
]
