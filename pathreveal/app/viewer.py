#!/usr/bin/env python3
"""
pathreveal viewer: looping A* reveal on a full-window grid

- The grid fills the window at ~25 px per cell; the centered panel is a
  reserved region the search has to route around.
- Keyboard:
    [+]/[-]      -> exploration reveal slower / faster (x1.25)
    []]/[[]      -> path reveal slower / faster (x1.25)
    [Q]/[ESC]    -> quit
- Resizing the window pauses the animation; 500 ms after the last resize
  event the cycle restarts on the new grid.

Config: env PATHREVEAL_* or --search-ms=, --path-ms=, --density=, --blocks=,
--seed=, --debug (see pathreveal.core.config).
"""

import sys
from typing import Optional, Tuple

import pygame

from pathreveal.app import theme_skin as THEME
from pathreveal.core.config import SequencerConfig, resolve_config
from pathreveal.core.layout import TARGET_CELL_PX, grid_for_window, panel_bounds
from pathreveal.core.sequencer import AnimationSequencer
from pathreveal.core.types import Cell, Frame, Rect

# ---------- Config ----------
WINDOW_DEFAULT = (1280, 720)
WINDOW_MIN = (320, 240)
RESIZE_SETTLE_MS = 500
RESIZE_THRESHOLD_PX = 5
FPS = 60
FONT_NAME = None  # default pygame font
SPEED_STEP = 1.25


# ---------- Viewer ----------
class Viewer:
    def __init__(self, config: SequencerConfig):
        pygame.init()

        self.screen = pygame.display.set_mode(WINDOW_DEFAULT, pygame.RESIZABLE)
        pygame.display.set_caption("pathreveal")
        self.font = pygame.font.Font(FONT_NAME, 18)
        self.font_big = pygame.font.Font(FONT_NAME, 24)
        self.clock = pygame.time.Clock()

        self.sequencer = AnimationSequencer(config)

        # resize debounce
        self._settled_size = self.screen.get_size()
        self._resizing = False
        self._resize_deadline = 0
        self._pending_size: Tuple[int, int] = self._settled_size

        self._wipe_started: Optional[int] = None

        self._layout(*self._settled_size)
        self.sequencer.set_grid(self.cols, self.rows, [self.panel])

    # ---------- layout ----------
    def _layout(self, win_w: int, win_h: int):
        """Grid that fills the window exactly, plus the reserved panel."""
        self.cols, self.rows = grid_for_window(win_w, win_h, TARGET_CELL_PX)
        self.cell_w = win_w / max(1, self.cols)
        self.cell_h = win_h / max(1, self.rows)
        self.panel = panel_bounds(self.cols, self.rows, win_w)

    def _cell_rect(self, c: Cell, inset: float = 0.0) -> pygame.Rect:
        col, row = c
        x = col * self.cell_w + self.cell_w * inset
        y = row * self.cell_h + self.cell_h * inset
        return pygame.Rect(int(x), int(y),
                           max(1, int(self.cell_w * (1 - 2 * inset))),
                           max(1, int(self.cell_h * (1 - 2 * inset))))

    def _block_rect(self, r: Rect) -> pygame.Rect:
        return pygame.Rect(int(r.x * self.cell_w), int(r.y * self.cell_h),
                           int(r.width * self.cell_w), int(r.height * self.cell_h))

    # ---------- loop ----------
    def run(self):
        while True:
            dt = self.clock.tick(FPS)
            self._handle_events()
            self._settle_resize()
            self.sequencer.advance(dt)
            self._draw()

    def _quit(self):
        self.sequencer.teardown()
        pygame.quit()
        sys.exit(0)

    def _handle_events(self):
        for e in pygame.event.get():
            if e.type == pygame.QUIT:
                self._quit()
            elif e.type == pygame.KEYDOWN:
                if e.key in (pygame.K_ESCAPE, pygame.K_q):
                    self._quit()
                elif e.key in (pygame.K_PLUS, pygame.K_EQUALS, pygame.K_KP_PLUS):
                    self._bump_speed(search=SPEED_STEP)
                elif e.key in (pygame.K_MINUS, pygame.K_UNDERSCORE, pygame.K_KP_MINUS):
                    self._bump_speed(search=1 / SPEED_STEP)
                elif e.key == pygame.K_RIGHTBRACKET:
                    self._bump_speed(path=SPEED_STEP)
                elif e.key == pygame.K_LEFTBRACKET:
                    self._bump_speed(path=1 / SPEED_STEP)
            elif e.type == pygame.VIDEORESIZE:
                self._on_resize(e.w, e.h)

    def _bump_speed(self, search: float = 1.0, path: float = 1.0):
        cfg = self.sequencer.config
        self.sequencer.set_speeds(
            search_delay_ms=max(1.0, min(5000.0, cfg.search_delay_ms * search)),
            path_delay_ms=max(1.0, min(5000.0, cfg.path_delay_ms * path)),
        )

    # ---------- resize (debounced) ----------
    def _on_resize(self, w: int, h: int):
        # always track the latest size; the threshold only decides whether a
        # new resize starts
        self._pending_size = (w, h)
        if not self._resizing:
            sw, sh = self._settled_size
            if abs(w - sw) <= RESIZE_THRESHOLD_PX and abs(h - sh) <= RESIZE_THRESHOLD_PX:
                return
            self._resizing = True
            self.sequencer.suspend()
        self._resize_deadline = pygame.time.get_ticks() + RESIZE_SETTLE_MS

    def _settle_resize(self):
        if not self._resizing or pygame.time.get_ticks() < self._resize_deadline:
            return
        w = max(WINDOW_MIN[0], self._pending_size[0])
        h = max(WINDOW_MIN[1], self._pending_size[1])
        self.screen = pygame.display.set_mode((w, h), pygame.RESIZABLE)
        self._settled_size = (w, h)
        self._resizing = False
        self._wipe_started = None
        self._layout(w, h)
        self.sequencer.resume(self.cols, self.rows, [self.panel])

    # ---------- drawing ----------
    def _draw(self):
        frame = self.sequencer.frame()
        THEME.draw_backdrop(self.screen)
        self._draw_grid_lines()
        self._draw_cells(frame)
        self._draw_panel(frame)
        self._draw_wipe(frame)
        pygame.display.flip()

    def _draw_grid_lines(self):
        w, h = self.screen.get_size()
        for col in range(self.cols + 1):
            x = int(col * self.cell_w)
            pygame.draw.line(self.screen, THEME.GRID_LINE, (x, 0), (x, h))
        for row in range(self.rows + 1):
            y = int(row * self.cell_h)
            pygame.draw.line(self.screen, THEME.GRID_LINE, (0, y), (w, y))

    def _draw_cells(self, frame: Frame):
        for c in frame.obstacles:
            pygame.draw.rect(self.screen, THEME.WALL_FILL, self._cell_rect(c))
        for b in frame.blocks:
            THEME.rounded_rect(self.screen, self._block_rect(b), THEME.BLOCK_FILL, radius=6)

        endpoints = (frame.start, frame.end)
        for c in frame.searched:
            if c in endpoints:
                continue
            rect = self._cell_rect(c, inset=0.1)
            pygame.draw.rect(self.screen, THEME.SEARCH_FILL, rect, border_radius=2)
            pygame.draw.rect(self.screen, THEME.SEARCH_STROKE, rect, width=1, border_radius=2)

        stroke = THEME.path_stroke(pygame.time.get_ticks() / 1000.0)
        for c in frame.path:
            if c in endpoints:
                continue
            rect = self._cell_rect(c, inset=0.1)
            pygame.draw.rect(self.screen, THEME.PATH_FILL, rect, border_radius=2)
            pygame.draw.rect(self.screen, stroke, rect, width=2, border_radius=2)

        self._draw_endpoint(frame.start, THEME.START_FILL, THEME.START_STROKE)
        self._draw_endpoint(frame.end, THEME.END_FILL, THEME.END_STROKE)

    def _draw_endpoint(self, cell: Optional[Cell], fill, stroke):
        if cell is None:
            return
        rect = self._cell_rect(cell)
        r = max(3, int(min(self.cell_w, self.cell_h) / 2.5))
        pygame.draw.circle(self.screen, fill, rect.center, r)
        pygame.draw.circle(self.screen, stroke, rect.center, r, 2)

    def _draw_panel(self, frame: Frame):
        rect = self._block_rect(self.panel)
        THEME.glass_panel(self.screen, rect)
        if rect.width <= 0 or rect.height <= 0:
            return

        x0 = rect.x + 16
        y0 = rect.y + 12

        def line(text, big=False, color=THEME.TEXT_LIGHT):
            nonlocal y0
            if y0 > rect.bottom - 20:
                return
            f = self.font_big if big else self.font
            surf = f.render(text, True, color)
            self.screen.blit(surf, (x0, y0))
            y0 += surf.get_height() + 6

        cfg = self.sequencer.config
        state = self.sequencer.state
        line("$ pathreveal --algo=astar", big=True, color=THEME.TEXT_GREEN)
        line(f"grid {frame.cols}x{frame.rows}  walls {len(frame.obstacles)}")
        line(f"phase {'RESIZING' if frame.suspended else frame.phase}")
        line(f"searched {len(frame.searched)}/{len(state.search_steps)}  "
             f"path {len(frame.path)}/{len(state.path)}")
        line(f"speed search {cfg.search_delay_ms:.0f} ms  path {cfg.path_delay_ms:.0f} ms")

    def _draw_wipe(self, frame: Frame):
        if not frame.wiping:
            self._wipe_started = None
            return
        now = pygame.time.get_ticks()
        if self._wipe_started is None:
            self._wipe_started = now
        progress = (now - self._wipe_started) / max(1.0, self.sequencer.config.wipe_ms)
        THEME.wipe_veil(self.screen, progress)


# ---------- main ----------
def main():
    try:
        config = resolve_config()
    except ValueError as ex:
        print(f"Bad configuration: {ex}")
        sys.exit(2)
    Viewer(config).run()


if __name__ == "__main__":
    main()
