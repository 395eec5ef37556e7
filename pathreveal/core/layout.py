#!/usr/bin/env python3
"""
Procedural layout for one SETUP: decorative blocks, scattered walls, endpoints.

Every random placement uses the same policy: sample a uniform in-bounds
position, resample on collision, give up after `attempts` tries and keep the
last sample. On a nearly saturated grid the kept sample may collide; that is
accepted.

Also holds the panel geometry (the reserved region the viewer draws over) and
the pixel -> grid conversion.
"""

import math
import random
from typing import Callable, Dict, Iterable, List, Optional, Sequence, Tuple

from pathreveal.core.types import Cell, Layout, Rect

PLACEMENT_ATTEMPTS = 1000
TARGET_CELL_PX = 25

# Tailwind-style breakpoints (px)
BREAKPOINTS: Tuple[Tuple[str, int], ...] = (
    ("2xl", 1536),
    ("xl",  1280),
    ("lg",  1024),
    ("md",   768),
    ("sm",   640),
)

# Panel sizing per breakpoint. margin_cols set -> fixed side margins (small
# screens); otherwise width_percent of the grid, clamped to min/max.
PANEL_CONFIG: Dict[str, Dict[str, Optional[float]]] = {
    "xs":  {"margin_cols": 3,    "min_cols": 8,  "max_cols": None, "margin_rows": 2, "min_rows": 8,  "max_rows": 8},
    "sm":  {"margin_cols": 3,    "min_cols": 12, "max_cols": None, "margin_rows": 2, "min_rows": 8,  "max_rows": 8},
    "md":  {"margin_cols": None, "min_cols": 23, "max_cols": 23,   "margin_rows": 2, "min_rows": 8,  "max_rows": 8},
    "lg":  {"margin_cols": None, "min_cols": 23, "max_cols": 23,   "margin_rows": 2, "min_rows": 8,  "max_rows": 8},
    "xl":  {"margin_cols": None, "min_cols": 23, "max_cols": 23,   "margin_rows": 2, "min_rows": 10, "max_rows": 10},
    "2xl": {"margin_cols": None, "min_cols": 25, "max_cols": 25,   "margin_rows": 2, "min_rows": 10, "max_rows": 10},
}


# ---------- geometry ----------
def grid_for_window(width: int, height: int, cell_px: int = TARGET_CELL_PX) -> Tuple[int, int]:
    """(cols, rows) that fit a width x height pixel viewport at ~cell_px per cell."""
    cell_px = max(1, int(cell_px))
    return max(0, int(width) // cell_px), max(0, int(height) // cell_px)


def breakpoint_for(viewport_width: int) -> str:
    for name, min_w in BREAKPOINTS:
        if viewport_width >= min_w:
            return name
    return "xs"


def panel_bounds(cols: int, rows: int, viewport_width: int) -> Rect:
    """Centered panel rectangle in cell units; empty when the grid is empty."""
    if cols <= 0 or rows <= 0:
        return Rect(0, 0, 0, 0)

    cfg = PANEL_CONFIG[breakpoint_for(viewport_width)]

    if cfg["margin_cols"] is not None:
        panel_cols = cols - int(cfg["margin_cols"]) * 2
    else:
        panel_cols = int(math.floor(cols * 0.5))
    panel_cols = max(panel_cols, int(cfg["min_cols"]))
    if cfg["max_cols"]:
        panel_cols = min(panel_cols, int(cfg["max_cols"]))
    panel_cols = min(panel_cols, cols - 2)  # at least one cell of margin

    panel_rows = rows - int(cfg["margin_rows"]) * 2
    panel_rows = max(panel_rows, int(cfg["min_rows"]))
    panel_rows = min(panel_rows, int(cfg["max_rows"]))
    panel_rows = min(panel_rows, rows - 2)

    # even spacing so the panel centers exactly
    if (cols - panel_cols) % 2 != 0:
        panel_cols -= 1
    if (rows - panel_rows) % 2 != 0:
        panel_rows -= 1
    if panel_cols <= 0 or panel_rows <= 0:
        return Rect(0, 0, 0, 0)

    return Rect((cols - panel_cols) // 2, (rows - panel_rows) // 2, panel_cols, panel_rows)


# ---------- sampling ----------
def random_point(rng: random.Random, cols: int, rows: int,
                 is_taken: Callable[[Cell], bool],
                 attempts: int = PLACEMENT_ATTEMPTS) -> Cell:
    """Uniform cell, resampled while is_taken(); last sample kept after the budget."""
    tries = 0
    while True:
        c = (rng.randrange(cols), rng.randrange(rows))
        tries += 1
        if not is_taken(c) or tries >= attempts:
            return c


def place_blocks(rng: random.Random, cols: int, rows: int, reserved: Sequence[Rect],
                 count: int, size: int, attempts: int = PLACEMENT_ATTEMPTS) -> List[Rect]:
    """count size x size blocks, disjoint from reserved and from each other."""
    blocks: List[Rect] = []
    if count <= 0 or size <= 0 or size > cols or size > rows:
        return blocks

    def taken(r: Rect) -> bool:
        return any(r.overlaps(o) for o in reserved) or any(r.overlaps(b) for b in blocks)

    for _ in range(count):
        tries = 0
        while True:
            r = Rect(rng.randrange(cols - size + 1), rng.randrange(rows - size + 1), size, size)
            tries += 1
            if not taken(r) or tries >= attempts:
                break
        blocks.append(r)
    return blocks


def wall_count(cols: int, rows: int, reserved: Iterable[Rect], density: float) -> int:
    """floor(density * free cells). A reserved cell counts once, and only in bounds."""
    taken = set()
    for r in reserved:
        taken.update(c for c in r.cells() if 0 <= c[0] < cols and 0 <= c[1] < rows)
    free = cols * rows - len(taken)
    return max(0, int(math.floor(free * density)))


def generate_layout(rng: random.Random, cols: int, rows: int, reserved: Sequence[Rect] = (),
                    density: float = 0.35, block_count: int = 0, block_size: int = 2,
                    attempts: int = PLACEMENT_ATTEMPTS) -> Layout:
    """
    One full SETUP layout.

    Order: decorative blocks, then walls, then start, then end. Walls and
    endpoints avoid reserved regions, blocks and already placed walls.
    Start and end may coincide.
    """
    blocks = place_blocks(rng, cols, rows, reserved, block_count, block_size, attempts)
    fixed = list(reserved) + blocks

    walls: List[Cell] = []
    wall_set = set()

    def taken(c: Cell) -> bool:
        return c in wall_set or any(r.contains(c) for r in fixed)

    for _ in range(wall_count(cols, rows, fixed, density)):
        c = random_point(rng, cols, rows, taken, attempts)
        walls.append(c)
        wall_set.add(c)

    start = random_point(rng, cols, rows, taken, attempts)
    end = random_point(rng, cols, rows, taken, attempts)

    blocked = set(wall_set)
    for r in fixed:
        blocked.update(r.cells())

    return Layout(obstacles=tuple(walls), blocks=tuple(blocks), start=start, end=end,
                  blocked=frozenset(blocked))
