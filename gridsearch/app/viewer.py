# gridsearch/app/viewer.py
#!/usr/bin/env python3
"""
Grid Search Viewer — edit a maze, then watch A* / UCS / Best-First explore it.

- Mouse:
    left click       -> toggle wall (or place start/goal after [S]/[G])
- Keyboard:
    [SPACE]          -> run/pause
    [N]              -> single step
    [R]              -> reset search state (walls stay)
    [C]              -> cancel running search
    [1]/[2]/[3]      -> algorithm (A* / UCS / Best-First)
    [H]              -> toggle heuristic (Manhattan / Euclidean)
    [S]/[G]          -> next click sets start / adds goal
    [M]/[B]          -> random walls / backtracker maze
    [+]/[-]          -> steps/sec
    [Q]/[ESC]        -> quit

Settings: GRIDSEARCH_* env vars or --key=value flags (see gridsearch.app.config).
"""

import logging
import os
import random
import sys
import time
from typing import Callable, Dict, List, Tuple, Optional, Set, Union

import pygame

from gridsearch.app.config import ViewerConfig, resolve_config
from gridsearch.core.errors import GridSearchError
from gridsearch.core.session import SearchSession
from gridsearch.core.types import Cell, SearchConfig, WALL
from gridsearch.core import mazegen

logger = logging.getLogger(__name__)

# ---------- Config ----------
PANEL_W = 360            # right band: metrics + buttons
GRID_MARGIN = 16
CELL_SIZE_DEFAULT = 56
FONT_NAME = None  # default pygame font

ALGO_LABELS = {"astar": "A*", "ucs": "UCS", "bestfirst": "Best-First"}

# Colors
WHITE       = (255,255,255)
BLACK       = (  0,  0,  0)
BLUE        = ( 70,130,180)
RED         = (220, 50, 47)
PATH_GRAY   = (200,200,200)
WALL_DARK   = ( 44, 62, 80)
EXPLORED_A  = (241,196, 15,120)
FRONTIER_A  = (  0,150,255,110)
SOLUTION    = (231, 76, 60)

CARD_BG     = (24,28,36,220)
CARD_HI     = (255,255,255,18)
TEXT_LIGHT  = (230,235,240)
ACCENT_GOLD = (255,210,0)
BTN_IDLE    = (52, 73, 94)
BTN_HOVER   = (69, 96,122)
BTN_LIT     = (22,160,133)


# ---------- Panel button ----------
class ControlButton:
    """Panel button; label and highlight are read back from the viewer every frame."""

    def __init__(self, rect: pygame.Rect, label: Union[str, Callable[[], str]],
                 action: Callable[[], None], lit: Optional[Callable[[], bool]] = None):
        self.rect = rect
        self._label = label
        self.action = action
        self._lit = lit
        self.hover = False

    @property
    def label(self) -> str:
        return self._label() if callable(self._label) else self._label

    @property
    def active(self) -> bool:
        return bool(self._lit and self._lit())

    def draw(self, screen: pygame.Surface, font: pygame.font.Font):
        fill = BTN_LIT if self.active else BTN_HOVER if self.hover else BTN_IDLE
        pygame.draw.rect(screen, fill, self.rect, border_radius=8)
        if self.active:
            pygame.draw.rect(screen, ACCENT_GOLD, self.rect, width=2, border_radius=8)
        text = font.render(self.label, True, TEXT_LIGHT)
        screen.blit(text, text.get_rect(center=self.rect.center))

    def handle_mouse(self, event: pygame.event.Event) -> bool:
        """Track hover; fire on left click inside. True if the click was consumed."""
        if event.type == pygame.MOUSEMOTION:
            self.hover = self.rect.collidepoint(event.pos)
            return False
        if event.type == pygame.MOUSEBUTTONDOWN and event.button == 1 and self.rect.collidepoint(event.pos):
            self.action()
            return True
        return False


# ---------- Viewer ----------
class Viewer:
    def __init__(self, config: ViewerConfig):
        pygame.init()

        self.config = config
        self.rng = random.Random(config.seed)
        rows, cols = config.rows, config.cols
        start = (rows - 1, cols - 1)   # bottom-right
        goal = (0, 0)                  # top-left
        grid = mazegen.random_walls(rows, cols, config.wall_density, rng=self.rng,
                                    keep_open=(start, goal))
        self.session = SearchSession(grid, start, [goal], max_goals=config.max_goals,
                                     listeners=[self])
        self.search_config = config.search_config()

        self.font_small = pygame.font.Font(FONT_NAME, 14)
        self.font = pygame.font.Font(FONT_NAME, 18)
        self.font_big = pygame.font.Font(FONT_NAME, 22)

        self.cell_size = self._auto_cell_size()
        grid_px_w = GRID_MARGIN*2 + cols * self.cell_size
        grid_px_h = GRID_MARGIN*2 + rows * self.cell_size
        win_w = grid_px_w + PANEL_W
        win_h = max(grid_px_h, 640)

        self.screen = pygame.display.set_mode((win_w, win_h), pygame.RESIZABLE)
        pygame.display.set_caption("Grid Search")

        self.buttons: Dict[str, ControlButton] = {}
        self._layout(win_w, win_h)

        self.closed_set: Set[Cell] = set()
        self.path: List[Cell] = []

        self.running = False
        self.click_mode = "wall"   # "wall" | "start" | "goal"
        self.clock = pygame.time.Clock()
        self.steps_per_sec = config.steps_per_sec
        self.state = "Idle"
        self._last_step_t = 0.0

    # ---------- session events ----------
    def on_explored(self, cell: Cell, step_index: int):
        self.closed_set.add(cell)

    def on_path_found(self, cells: List[Cell], step_count: int):
        self.path = cells
        self.state = "Done"
        self.running = False

    def on_exhausted(self):
        self.state = "No path"
        self.running = False

    def on_cancelled(self):
        self.state = "Cancelled"
        self.running = False

    # ---------- layout ----------
    def _layout(self, win_w: int, win_h: int):
        """Compute integer cell_size that fits window and center the grid."""
        grid = self.session.grid
        avail_w = max(1, win_w - PANEL_W - 2 * GRID_MARGIN)
        avail_h = max(1, win_h - 2 * GRID_MARGIN)

        cs_by_w = avail_w // grid.cols
        cs_by_h = avail_h // grid.rows
        self.cell_size = int(max(8, min(cs_by_w, cs_by_h)))

        grid_plate_w = grid.cols * self.cell_size + 2 * GRID_MARGIN
        grid_plate_h = grid.rows * self.cell_size + 2 * GRID_MARGIN

        left_x = max(0, (win_w - (grid_plate_w + PANEL_W)) // 2)
        top_y  = max(0, (win_h - grid_plate_h) // 2)

        self.canvas_rect = pygame.Rect(left_x, top_y, grid_plate_w, grid_plate_h)
        self._grid_origin = (self.canvas_rect.x + GRID_MARGIN,
                             self.canvas_rect.y + GRID_MARGIN)
        self._right_band = pygame.Rect(self.canvas_rect.right, 0,
                                       max(PANEL_W, win_w - self.canvas_rect.right),
                                       win_h)
        self._build_buttons()

    def _auto_cell_size(self) -> int:
        target_h = 720 - GRID_MARGIN*2
        return max(14, min(CELL_SIZE_DEFAULT, target_h // self.session.grid.rows))

    def cell_at(self, pos: Tuple[int, int]) -> Optional[Cell]:
        """Map a window pixel to the (row, col) under it, or None."""
        ox, oy = self._grid_origin
        x, y = pos
        if x < ox or y < oy:
            return None
        cell = ((y - oy) // self.cell_size, (x - ox) // self.cell_size)
        return cell if self.session.grid.in_bounds(cell) else None

    # ---------- main loop ----------
    def run(self):
        while True:
            for e in pygame.event.get():
                self.handle_event(e)
            if self.running:
                self._tick_algorithm()
            self._draw()
            self.clock.tick(60)

    def _tick_algorithm(self):
        t0 = time.time()
        step_interval = 1.0 / max(1, self.steps_per_sec)
        if t0 - self._last_step_t >= step_interval:
            self._last_step_t = t0
            self._do_step()

    def _ensure_started(self) -> bool:
        if self.session.running:
            return True
        self._reset_overlays()
        try:
            self.session.start_search(self.search_config)
        except GridSearchError as ex:
            logger.error("cannot start search: %s", ex)
            self.state = "Error"
            return False
        return True

    def _do_step(self):
        if not self._ensure_started():
            self.running = False
            return
        self.session.step()
        if self.session.running:
            self.state = "Running" if self.running else "Paused"

    def _quit(self):
        pygame.quit()
        sys.exit(0)

    def handle_event(self, e: pygame.event.Event):
        try:
            self._handle_event(e)
        except GridSearchError as ex:
            logger.warning("%s", ex)

    def _handle_event(self, e: pygame.event.Event):
        if e.type == pygame.QUIT:
            self._quit()
        elif e.type == pygame.KEYDOWN:
            if e.key in (pygame.K_ESCAPE, pygame.K_q):
                self._quit()
            elif e.key == pygame.K_SPACE:
                self._toggle_run()
            elif e.key == pygame.K_n:
                self._do_step()
            elif e.key == pygame.K_r:
                self._reset()
            elif e.key == pygame.K_c:
                self.session.cancel_search()
            elif e.key == pygame.K_1:
                self._switch_algo("astar")
            elif e.key == pygame.K_2:
                self._switch_algo("ucs")
            elif e.key == pygame.K_3:
                self._switch_algo("bestfirst")
            elif e.key == pygame.K_h:
                self._toggle_heuristic()
            elif e.key == pygame.K_s:
                self._set_click_mode("start")
            elif e.key == pygame.K_g:
                self._set_click_mode("goal")
            elif e.key == pygame.K_m:
                self._generate("random")
            elif e.key == pygame.K_b:
                self._generate("backtracker")
            elif e.key in (pygame.K_PLUS, pygame.K_EQUALS, pygame.K_KP_PLUS):
                self._bump_speed(+1)
            elif e.key in (pygame.K_MINUS, pygame.K_UNDERSCORE, pygame.K_KP_MINUS):
                self._bump_speed(-1)
        elif e.type == pygame.VIDEORESIZE:
            self.screen = pygame.display.set_mode((e.w, e.h), pygame.RESIZABLE)
            self._layout(e.w, e.h)
        elif e.type in (pygame.MOUSEMOTION, pygame.MOUSEBUTTONDOWN):
            for b in self.buttons.values():
                if b.handle_mouse(e):
                    return
            if e.type == pygame.MOUSEBUTTONDOWN and e.button == 1:
                self._click_cell(e.pos)

    # ---------- editing ----------
    def _set_click_mode(self, mode: str):
        self.click_mode = "wall" if self.click_mode == mode else mode

    def _click_cell(self, pos: Tuple[int, int]):
        cell = self.cell_at(pos)
        if cell is None or self.session.running:
            return
        self._reset()
        if self.click_mode == "start":
            self.session.set_start(cell)
        elif self.click_mode == "goal":
            self.session.add_goal(cell)
        else:
            self.session.toggle_wall(cell)
        self.click_mode = "wall"

    def _generate(self, kind: str):
        self._reset()
        if kind == "random":
            self.session.generate_random(self.config.wall_density, rng=self.rng)
        else:
            self.session.generate_backtracker(rng=self.rng)

    # ---------- controls ----------
    def _toggle_run(self):
        if not self.running and not self._ensure_started():
            return
        self.running = not self.running
        self.state = "Running" if self.running else "Paused"

    def _switch_algo(self, key: str):
        self._reset()
        self.search_config = SearchConfig(key, self.search_config.heuristic)

    def _toggle_heuristic(self):
        self._reset()
        h = "euclidean" if self.search_config.heuristic == "manhattan" else "manhattan"
        self.search_config = SearchConfig(self.search_config.algorithm, h)

    def _bump_speed(self, dv: int):
        self.steps_per_sec = int(max(1, min(60, self.steps_per_sec + dv)))

    def _reset_overlays(self):
        self.closed_set.clear()
        self.path = []

    def _reset(self):
        self.running = False
        self.session.reset_search_state()
        self._reset_overlays()
        self.state = "Idle"

    # ---------- drawing ----------
    def _draw(self):
        self.screen.fill((24, 26, 32))
        self._draw_grid()
        self._draw_metrics_and_buttons()
        pygame.display.flip()

    def _cell_rect(self, cell: Cell) -> pygame.Rect:
        cs = self.cell_size
        ox, oy = self._grid_origin
        row, col = cell
        return pygame.Rect(ox + col*cs, oy + row*cs, cs, cs)

    def _overlay(self, cells, rgba):
        cs = self.cell_size
        s = pygame.Surface((cs, cs), pygame.SRCALPHA)
        s.fill(rgba)
        for c in cells:
            self.screen.blit(s, self._cell_rect(c).topleft)

    def _draw_grid(self):
        grid = self.session.grid
        for row in range(grid.rows):
            for col in range(grid.cols):
                rect = self._cell_rect((row, col))
                v = grid.cells[row][col]
                pygame.draw.rect(self.screen, WALL_DARK if v == WALL else PATH_GRAY, rect)
                pygame.draw.rect(self.screen, BLACK, rect, 1)

        special = {self.session.start, *self.session.goals}
        self._overlay((c for c in self.closed_set if c not in special), EXPLORED_A)
        self._overlay(self.session.open_cells(), FRONTIER_A)

        for c in self.path:
            if c not in special:
                pygame.draw.rect(self.screen, SOLUTION, self._cell_rect(c).inflate(-6, -6),
                                 border_radius=4)

        self._draw_badge(self.session.start, BLUE, "S")
        for i, g in enumerate(self.session.goals, 1):
            self._draw_badge(g, RED, f"G{i}")

    def _draw_badge(self, cell: Cell, color: Tuple[int,int,int], label: str):
        rect = self._cell_rect(cell)
        pygame.draw.circle(self.screen, color, rect.center, max(6, self.cell_size//2 - 4))
        txt = self.font_small.render(label, True, WHITE)
        self.screen.blit(txt, txt.get_rect(center=rect.center))

    # ---------- buttons + metrics ----------
    def _build_buttons(self):
        """Lay out the control panel below the metrics card."""
        self.buttons.clear()
        rb = self._right_band
        x = rb.x + 16
        y = rb.y + 250
        w = max(160, rb.width - 32)
        h, gap = 34, 8
        half = (w - gap) // 2

        # one entry per row: (key, label, action, lit) or a pair of them side by side
        rows = [
            [("run", lambda: "Pause" if self.running else "Run", self._toggle_run, lambda: self.running)],
            [("step", "Step", self._do_step, None),
             ("reset", "Reset", self._reset, None)],
            [("slower", "Speed -", lambda: self._bump_speed(-1), None),
             ("faster", "Speed +", lambda: self._bump_speed(+1), None)],
            *[[(key, f"Algo: {ALGO_LABELS[key]}", lambda k=key: self._switch_algo(k),
                lambda k=key: self.search_config.algorithm == k)] for key in ALGO_LABELS],
            [("heuristic", lambda: f"Heuristic: {self.search_config.heuristic}", self._toggle_heuristic, None)],
            [("start", "Set Start", lambda: self._set_click_mode("start"), lambda: self.click_mode == "start"),
             ("goal", "Add Goal", lambda: self._set_click_mode("goal"), lambda: self.click_mode == "goal")],
            [("random", "Random", lambda: self._generate("random"), None),
             ("backtracker", "Backtracker", lambda: self._generate("backtracker"), None)],
        ]
        for row in rows:
            bw = w if len(row) == 1 else half
            for i, (key, label, action, lit) in enumerate(row):
                rect = pygame.Rect(x + i * (half + gap), y, bw, h)
                self.buttons[key] = ControlButton(rect, label, action, lit)
            y += h + gap

    def _draw_metrics_and_buttons(self):
        rb = self._right_band

        card_h = 230
        card = pygame.Surface((rb.width - 20, card_h), pygame.SRCALPHA)
        pygame.draw.rect(card, CARD_BG, card.get_rect(), border_radius=14)
        hi = pygame.Surface((card.get_width(), 24), pygame.SRCALPHA)
        pygame.draw.rect(hi, CARD_HI, hi.get_rect(), border_radius=14)
        card.blit(hi, (0,0))
        self.screen.blit(card, (rb.x + 10, rb.y + 10))

        x0 = rb.x + 24
        y0 = rb.y + 18

        def line(text, big=False, color=TEXT_LIGHT):
            nonlocal y0
            f = self.font_big if big else self.font
            surf = f.render(text, True, color)
            self.screen.blit(surf, (x0, y0))
            y0 += surf.get_height() + 6

        m = self.session.counters
        line("Metrics", big=True, color=ACCENT_GOLD)
        line(f"Nodes explored: {m['nodes_explored']}")
        line(f"Discovered: {m['nodes_discovered']}")
        line(f"Open: {len(self.session.open_cells())}")
        line(f"Steps taken: {m['steps_taken']}")
        line("-" * 26)
        line(f"Algo: {ALGO_LABELS[self.search_config.algorithm]}"
             f" ({self.search_config.heuristic})")
        line(f"State: {self.state}   Speed: {self.steps_per_sec} steps/s")

        for b in self.buttons.values():
            b.draw(self.screen, self.font_small)


# ---------- main ----------
def main(argv=None):
    argv = sys.argv[1:] if argv is None else argv
    try:
        config = resolve_config(argv, os.environ)
    except GridSearchError as ex:
        print(f"Bad settings: {ex}", file=sys.stderr)
        sys.exit(2)
    logging.basicConfig(level=config.logging_level,
                        format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    Viewer(config).run()

if __name__ == "__main__":
    main()
