# src/pathviz/app/playback.py
#!/usr/bin/env python3
"""
Frame-by-frame replay of finished search results.

All variants advance in lock-step: frame i of the visit phase reveals the
i-th settled cell of every trace that is long enough, then the path phase does
the same with the paths. Searching is already over when playback starts;
cancel() only stops the replay.
"""

from dataclasses import dataclass, field
from typing import Dict, Mapping, Optional, Set

from pathviz.app.settings import PATH_DELAY_MS, STEP_DELAY_MS
from pathviz.core.runner import Variant, status_message
from pathviz.core.types import Cell, SearchResult

VISIT = "visit"
PATH = "path"
DONE = "done"
CANCELLED = "cancelled"


@dataclass
class Frame:
    phase: str
    index: int
    cells: Dict[Variant, Cell] = field(default_factory=dict)  # revealed this frame


class Playback:
    def __init__(self, results: Mapping[Variant, SearchResult],
                 step_delay_ms: int = STEP_DELAY_MS, path_delay_ms: int = PATH_DELAY_MS):
        self.results = dict(results)
        self.step_delay_ms = step_delay_ms
        self.path_delay_ms = path_delay_ms
        self.visit_frames = max((len(r.trace) for r in self.results.values()), default=0)
        self.path_frames = max((len(r.path) for r in self.results.values()), default=0)

        self.visited: Dict[Variant, Set[Cell]] = {v: set() for v in self.results}
        self.path_cells: Dict[Variant, Set[Cell]] = {v: set() for v in self.results}
        self.phase = VISIT
        self.index = 0
        self._last_ms: Optional[float] = None
        self._skip_empty_phases()

    @property
    def finished(self) -> bool:
        return self.phase in (DONE, CANCELLED)

    @property
    def delay_ms(self) -> int:
        return self.path_delay_ms if self.phase == PATH else self.step_delay_ms

    def step(self) -> Frame:
        """Reveal one frame. Returns a DONE/CANCELLED frame once finished."""
        if self.finished:
            return Frame(self.phase, self.index)

        cells: Dict[Variant, Cell] = {}
        for v, r in self.results.items():
            seq = r.trace if self.phase == VISIT else r.path
            if self.index < len(seq):
                cells[v] = seq[self.index]
        target = self.visited if self.phase == VISIT else self.path_cells
        for v, c in cells.items():
            target[v].add(c)

        frame = Frame(self.phase, self.index, cells)
        self.index += 1
        self._skip_empty_phases()
        return frame

    def tick(self, now_ms: float) -> Optional[Frame]:
        """Step if the current phase delay has elapsed since the last step."""
        if self.finished:
            return None
        if self._last_ms is not None and now_ms - self._last_ms < self.delay_ms:
            return None
        self._last_ms = now_ms
        return self.step()

    def cancel(self) -> None:
        self.phase = CANCELLED

    def status(self) -> str:
        if self.phase == CANCELLED:
            return "Simulation cleared. Ready for another run."
        if not self.finished:
            return "Running search algorithms..."
        return status_message(self.results)

    def _skip_empty_phases(self) -> None:
        if self.phase == VISIT and self.index >= self.visit_frames:
            self.phase, self.index = PATH, 0
        if self.phase == PATH and self.index >= self.path_frames:
            self.phase = DONE
