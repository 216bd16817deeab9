# src/pathviz/app/viewer.py
#!/usr/bin/env python3
"""
Search Algorithm Visualizer: edit a board, compare Dijkstra against A*.

- Keyboard:
    [S]/[W]/[T]  -> tool: start / wall / target
    [D]/[A]/[B]  -> toggle Dijkstra / toggle A* / enable both
    [SPACE]      -> start search (replays the finished traces)
    [R]          -> reset simulation (clear overlays, keep board)
    [C]          -> clear board
    [+]/[-]      -> grid size
    [1]/[2]      -> load bundled map
    [Q]/[ESC]    -> quit

Mouse: click a cell to use the active tool; drag with the wall tool to paint.

Configuration: see ``pathviz.app.settings``.
"""

import logging
import sys
from typing import List, Optional, Sequence, Set, Tuple

import pygame

from pathviz.app.playback import Playback
from pathviz.app.settings import MAP_DIR, MAX_SIZE, MIN_SIZE, Settings, clamp_size, resolve_settings
from pathviz.core.errors import GridSearchError
from pathviz.core.grid import Board, Tool, load_map
from pathviz.core.runner import Variant, run_all
from pathviz.core.types import Cell

logger = logging.getLogger(__name__)

# ---------- Config ----------
MAP_FILES = {
    "01_open_field": MAP_DIR / "01_open_field.json",
    "02_walled_maze": MAP_DIR / "02_walled_maze.json",
}
PANEL_W = 360            # right band: status + buttons
GRID_MARGIN = 16
BOARD_PX = 560           # grid drawing budget, cell size derives from it
FONT_NAME = None         # default pygame font

# Colors
BLACK        = (  0,   0,   0)
CELL_OPEN    = (236, 239, 244)
CELL_WALL    = ( 36,  40,  48)
START_BLUE   = ( 70, 130, 180)
TARGET_RED   = (220,  50,  47)
D_VISITED    = (255, 183,  77)
A_VISITED    = (129, 199, 255)
BOTH_VISITED = (186, 160, 255)
D_PATH       = (245, 124,   0)
A_PATH       = ( 21, 101, 192)
BOTH_PATH    = ( 46, 139,  87)

CARD_BG      = (24, 28, 36, 220)
TEXT_LIGHT   = (230, 235, 240)
ACCENT_GOLD  = (255, 210, 0)


def cell_size_for(size: int) -> int:
    return max(14, min(32, BOARD_PX // size))


# ---------- Simple UI Button ----------
class UIButton:
    def __init__(self, label: str, rect: pygame.Rect, callback, *, togglable: bool = False):
        self.label = label
        self.rect = rect
        self.callback = callback
        self.hover = False
        self.togglable = togglable
        self.active = False
        self.enabled = True

    def set_active(self, value: bool):
        self.active = bool(value)

    def draw(self, screen: pygame.Surface, font: pygame.font.Font):
        base = pygame.Surface(self.rect.size, pygame.SRCALPHA)
        bg_idle   = (36, 40, 48, 220)
        bg_hover  = (46, 50, 60, 230)
        bg_active = (58, 86, 160, 235)
        border_active = (120, 170, 255, 255)

        if self.active and self.togglable:
            bg = bg_active
        elif self.hover and self.enabled:
            bg = bg_hover
        else:
            bg = bg_idle
        pygame.draw.rect(base, bg, base.get_rect(), border_radius=10)
        screen.blit(base, self.rect.topleft)

        if self.active and self.togglable:
            pygame.draw.rect(screen, border_active, self.rect, width=2, border_radius=10)

        fg = (235, 238, 242) if self.enabled else (120, 124, 130)
        text = font.render(self.label, True, fg)
        screen.blit(text, text.get_rect(center=self.rect.center))

    def handle_mouse(self, event: pygame.event.Event) -> bool:
        if event.type == pygame.MOUSEMOTION:
            self.hover = self.rect.collidepoint(event.pos)
        elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            if self.rect.collidepoint(event.pos):
                if self.enabled:
                    self.callback()
                return True
        return False


# ---------- Viewer ----------
class Viewer:
    def __init__(self, board: Board, settings: Settings):
        pygame.init()

        self.board = board
        self.settings = settings
        self.font_small = pygame.font.Font(FONT_NAME, 16)
        self.font = pygame.font.Font(FONT_NAME, 18)
        self.font_big = pygame.font.Font(FONT_NAME, 24)

        self.enabled: Set[Variant] = set()
        self.playback: Optional[Playback] = None
        self.status_message = "Place a start and target to begin."
        self.mouse_down = False
        self.alive = True

        self._buttons: List[UIButton] = []
        self.screen = pygame.display.set_mode(self._window_size())
        pygame.display.set_caption("Search Algorithm Visualizer")
        self._layout()
        self.clock = pygame.time.Clock()

    # ---------- layout ----------
    def _window_size(self) -> Tuple[int, int]:
        cs = cell_size_for(self.board.size)
        grid_px = GRID_MARGIN * 2 + self.board.size * cs
        return grid_px + PANEL_W, max(grid_px, 640)

    def _layout(self):
        self.cell_size = cell_size_for(self.board.size)
        self._grid_origin = (GRID_MARGIN, GRID_MARGIN)
        grid_px = GRID_MARGIN * 2 + self.board.size * self.cell_size
        win_w, win_h = self.screen.get_size()
        self._right_band = pygame.Rect(grid_px, 0, max(PANEL_W, win_w - grid_px), win_h)
        self._build_buttons()

    def _resize_window(self):
        self.screen = pygame.display.set_mode(self._window_size())
        self._layout()

    def cell_at(self, pos: Tuple[int, int]) -> Optional[Cell]:
        ox, oy = self._grid_origin
        x, y = pos
        if x < ox or y < oy:
            return None
        cell = ((y - oy) // self.cell_size, (x - ox) // self.cell_size)
        return cell if self.board.grid.in_bounds(cell) else None

    # ---------- main loop ----------
    def run(self):
        while self.alive:
            self.frame(pygame.time.get_ticks())
            self.clock.tick(60)
        pygame.quit()

    def frame(self, now_ms: float):
        self._handle_events()
        if self.playback is not None and not self.playback.finished:
            self.playback.tick(now_ms)
            if self.playback.finished:
                self.status_message = self.playback.status()
                self._refresh_active_states()
        self._draw()

    @property
    def is_running(self) -> bool:
        return self.playback is not None and not self.playback.finished

    # ---------- actions ----------
    def start_search(self):
        if self.is_running or not self.board.is_ready():
            return
        try:
            results = run_all(self.board.grid, self.board.start, self.board.target, self.enabled)
        except GridSearchError as ex:
            logger.warning("search rejected: %s", ex)
            self.status_message = str(ex)
            return
        self.playback = Playback(results, self.settings.step_delay_ms, self.settings.path_delay_ms)
        self.status_message = self.playback.status()
        self._refresh_active_states()

    def reset_simulation(self):
        if self.is_running:
            return
        self._clear_overlays()
        self.status_message = "Simulation cleared. Ready for another run."

    def clear_board(self):
        if self.is_running:
            return
        self.board.clear()
        self._clear_overlays()
        self.status_message = "Board cleared. Configure a new run."

    def set_size(self, size: int):
        if self.is_running:
            return
        size = clamp_size(size)
        if size == self.board.size:
            return
        self.board.resize(size)
        self._clear_overlays()
        self.status_message = "Grid resized. Place your start and target nodes."
        self._resize_window()

    def set_tool(self, tool: Tool):
        if self.is_running:
            return
        self.board.tool = tool
        self._refresh_active_states()

    def toggle_variant(self, variant: Variant):
        if self.is_running:
            return
        self.enabled ^= {variant}
        self._refresh_active_states()

    def enable_both(self):
        if self.is_running:
            return
        self.enabled = set(Variant)
        self._refresh_active_states()

    def switch_map(self, key: str):
        if self.is_running or key not in MAP_FILES:
            return
        try:
            board = load_map(MAP_FILES[key])
        except GridSearchError as ex:
            logger.error("failed to load map %s: %s", key, ex)
            self.status_message = f"Failed to load map {key}."
            return
        board.tool = self.board.tool
        self.board = board
        self._clear_overlays()
        self.status_message = f"Loaded {key}."
        self._resize_window()

    def click_cell(self, cell: Cell, paint: bool = False):
        if self.is_running:
            return
        self._clear_overlays()
        self.board.apply(cell, paint)
        if not paint and self.board.tool is Tool.START:
            self.status_message = "Start node placed. Choose a target."
        elif not paint and self.board.tool is Tool.TARGET:
            self.status_message = "Target node placed. Select an algorithm to run."

    def _clear_overlays(self):
        if self.playback is not None:
            self.playback.cancel()
        self.playback = None
        self._refresh_active_states()

    # ---------- events ----------
    def _handle_events(self):
        for e in pygame.event.get():
            if e.type == pygame.QUIT:
                self.alive = False
            elif e.type == pygame.KEYDOWN:
                self._handle_key(e.key)
            elif e.type == pygame.MOUSEBUTTONUP and e.button == 1:
                self.mouse_down = False
            elif e.type in (pygame.MOUSEMOTION, pygame.MOUSEBUTTONDOWN):
                if any(b.handle_mouse(e) for b in self._buttons):
                    continue
                cell = self.cell_at(e.pos)
                if e.type == pygame.MOUSEBUTTONDOWN and e.button == 1:
                    self.mouse_down = True
                    if cell is not None:
                        self.click_cell(cell)
                elif self.mouse_down and cell is not None and self.board.tool is Tool.WALL:
                    self.click_cell(cell, paint=True)

    def _handle_key(self, key: int):
        if key in (pygame.K_ESCAPE, pygame.K_q):
            self.alive = False
        elif key == pygame.K_SPACE:
            self.start_search()
        elif key == pygame.K_r:
            self.reset_simulation()
        elif key == pygame.K_c:
            self.clear_board()
        elif key == pygame.K_s:
            self.set_tool(Tool.START)
        elif key == pygame.K_w:
            self.set_tool(Tool.WALL)
        elif key == pygame.K_t:
            self.set_tool(Tool.TARGET)
        elif key == pygame.K_d:
            self.toggle_variant(Variant.DIJKSTRA)
        elif key == pygame.K_a:
            self.toggle_variant(Variant.ASTAR)
        elif key == pygame.K_b:
            self.enable_both()
        elif key in (pygame.K_PLUS, pygame.K_EQUALS):
            self.set_size(self.board.size + 1)
        elif key in (pygame.K_MINUS, pygame.K_UNDERSCORE):
            self.set_size(self.board.size - 1)
        elif key == pygame.K_1:
            self.switch_map("01_open_field")
        elif key == pygame.K_2:
            self.switch_map("02_walled_maze")

    # ---------- drawing ----------
    def _draw(self):
        self.screen.fill((24, 26, 32))
        self._draw_grid()
        self._draw_panel()
        pygame.display.flip()

    def cell_color(self, cell: Cell) -> Tuple[int, int, int]:
        if cell == self.board.start:
            return START_BLUE
        if cell == self.board.target:
            return TARGET_RED
        if self.board.grid.is_block(cell):
            return CELL_WALL
        if self.playback is None:
            return CELL_OPEN
        pb = self.playback
        d_path = cell in pb.path_cells.get(Variant.DIJKSTRA, ())
        a_path = cell in pb.path_cells.get(Variant.ASTAR, ())
        if d_path and a_path:
            return BOTH_PATH
        if d_path:
            return D_PATH
        if a_path:
            return A_PATH
        d_seen = cell in pb.visited.get(Variant.DIJKSTRA, ())
        a_seen = cell in pb.visited.get(Variant.ASTAR, ())
        if d_seen and a_seen:
            return BOTH_VISITED
        if d_seen:
            return D_VISITED
        if a_seen:
            return A_VISITED
        return CELL_OPEN

    def _draw_grid(self):
        cs = self.cell_size
        ox, oy = self._grid_origin
        for row in range(self.board.size):
            for col in range(self.board.size):
                rect = pygame.Rect(ox + col * cs, oy + row * cs, cs, cs)
                pygame.draw.rect(self.screen, self.cell_color((row, col)), rect)
                pygame.draw.rect(self.screen, BLACK, rect, 1)

    def _build_buttons(self):
        self._buttons.clear()
        rb = self._right_band
        x = rb.x + 16
        y = rb.y + 230  # leaves space for the status card above
        w = max(160, rb.width - 32)
        h = 32
        gap = 8
        third = (w - 2 * gap) // 3
        half = (w - gap) // 2

        def row(specs, width):
            nonlocal y
            for i, (label, cb, store_as) in enumerate(specs):
                rect = pygame.Rect(x + i * (width + gap), y, width, h)
                btn = UIButton(label, rect, cb, togglable=store_as is not None)
                self._buttons.append(btn)
                if store_as:
                    setattr(self, store_as, btn)
            y += h + gap

        row([("Start", lambda: self.set_tool(Tool.START), "btn_tool_start"),
             ("Wall", lambda: self.set_tool(Tool.WALL), "btn_tool_wall"),
             ("Target", lambda: self.set_tool(Tool.TARGET), "btn_tool_target")], third)
        row([("Dijkstra", lambda: self.toggle_variant(Variant.DIJKSTRA), "btn_algo_d"),
             ("A*", lambda: self.toggle_variant(Variant.ASTAR), "btn_algo_a"),
             ("Both", self.enable_both, None)], third)
        row([("Start Search", self.start_search, None),
             ("Reset Simulation", self.reset_simulation, None)], half)
        row([("Size -", lambda: self.set_size(self.board.size - 1), None),
             ("Size +", lambda: self.set_size(self.board.size + 1), None)], half)
        row([("Map 1", lambda: self.switch_map("01_open_field"), None),
             ("Map 2", lambda: self.switch_map("02_walled_maze"), None)], half)
        row([("Clear", self.clear_board, None)], w)

        self._refresh_active_states()

    def _refresh_active_states(self):
        tools = {"btn_tool_start": Tool.START, "btn_tool_wall": Tool.WALL,
                 "btn_tool_target": Tool.TARGET}
        for attr, tool in tools.items():
            if hasattr(self, attr):
                getattr(self, attr).set_active(self.board.tool is tool)
        if hasattr(self, "btn_algo_d"):
            self.btn_algo_d.set_active(Variant.DIJKSTRA in self.enabled)
        if hasattr(self, "btn_algo_a"):
            self.btn_algo_a.set_active(Variant.ASTAR in self.enabled)
        running = self.is_running
        for b in self._buttons:
            b.enabled = not running
            if b.label == "Start Search":
                b.enabled = not running and self.board.is_ready() and bool(self.enabled)

    def _draw_panel(self):
        rb = self._right_band
        card = pygame.Surface((rb.width - 20, 206), pygame.SRCALPHA)
        pygame.draw.rect(card, CARD_BG, card.get_rect(), border_radius=14)
        self.screen.blit(card, (rb.x + 10, rb.y + 10))

        x0 = rb.x + 24
        y0 = rb.y + 18

        def line(text, big=False, color=TEXT_LIGHT):
            nonlocal y0
            f = self.font_big if big else self.font
            surf = f.render(text, True, color)
            self.screen.blit(surf, (x0, y0))
            y0 += surf.get_height() + 6

        line("Search Visualizer", big=True, color=ACCENT_GOLD)
        readiness = ("Running search algorithms..." if self.is_running
                     else self.board.readiness(bool(self.enabled)))
        line(readiness)
        line(self.status_message)
        line(f"Grid: {self.board.size}x{self.board.size}  (min {MIN_SIZE}, max {MAX_SIZE})")
        line(f"Tool: {self.board.tool.value}")
        if self.playback is not None:
            for v, r in self.playback.results.items():
                line(f"{v.label}: visited {len(r.trace)}, path {len(r.path)}")

        self._draw_legend(rb.x + 16, rb.bottom - 120)
        for b in self._buttons:
            b.draw(self.screen, self.font_small)

    def _draw_legend(self, x: int, y: int):
        items = [("Start", START_BLUE), ("Target", TARGET_RED), ("Wall", CELL_WALL),
                 ("Dijkstra", D_VISITED), ("A*", A_VISITED), ("Both", BOTH_VISITED)]
        for i, (label, color) in enumerate(items):
            cx = x + (i % 3) * 110
            cy = y + (i // 3) * 26
            pygame.draw.rect(self.screen, color, pygame.Rect(cx, cy, 16, 16))
            txt = self.font_small.render(label, True, TEXT_LIGHT)
            self.screen.blit(txt, (cx + 22, cy))


# ---------- main ----------
def main(argv: Optional[Sequence[str]] = None):
    settings = resolve_settings(sys.argv[1:] if argv is None else argv)
    logging.basicConfig(level=getattr(logging, settings.log_level, logging.WARNING),
                        format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    if settings.map_path is not None:
        try:
            board = load_map(settings.map_path)
        except GridSearchError as ex:
            print(f"Failed to load map: {ex}")
            sys.exit(1)
    else:
        board = Board.empty(settings.size)
    Viewer(board, settings).run()


if __name__ == "__main__":
    main()
