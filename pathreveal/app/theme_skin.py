# pathreveal/app/theme_skin.py
"""
Terminal-green skin (visuals only; no logic)
- Backdrop: vertical dark gradient, cached per window size
- Panel: frosted glass card over the reserved region
- Path: gold cells with a slow brightness pulse
- Wipe: black veil whose alpha follows the wipe progress

The viewer owns layout and state; everything here takes plain values.
"""

from __future__ import annotations
import math
from typing import Dict, Tuple
import pygame

# ---- palette ----
GRID_LINE      = (22, 26, 24)
WALL_FILL      = (44, 48, 52)
BLOCK_FILL     = (30, 34, 40)
SEARCH_FILL    = (10, 40, 24)
SEARCH_STROKE  = (34, 197, 94)
PATH_FILL      = (90, 70, 10)
PATH_STROKE    = (250, 204, 21)
START_FILL     = (59, 130, 246)
START_STROKE   = (147, 197, 253)
END_FILL       = (239, 68, 68)
END_STROKE     = (252, 165, 165)
TEXT_LIGHT     = (230, 235, 240)
TEXT_GREEN     = (74, 222, 128)

PANEL_FILL     = (8, 12, 10, 215)
PANEL_SHADOW   = (0, 0, 0, 140)

# caches
_backdrop_by_size: Dict[Tuple[int, int], pygame.Surface] = {}


# ---------- helpers ----------
def rounded_rect(surface: pygame.Surface, rect: pygame.Rect, color, radius=16, width=0):
    pygame.draw.rect(surface, color, rect, width=width, border_radius=radius)


def glass_panel(screen: pygame.Surface, rect: pygame.Rect,
                fill_rgba=PANEL_FILL, shadow_rgba=PANEL_SHADOW):
    if rect.width <= 0 or rect.height <= 0:
        return
    shadow = pygame.Surface((rect.width + 18, rect.height + 18), pygame.SRCALPHA)
    rounded_rect(shadow, pygame.Rect(9, 9, rect.width, rect.height), shadow_rgba, radius=12)
    screen.blit(shadow, (rect.x - 9, rect.y - 9))
    card = pygame.Surface(rect.size, pygame.SRCALPHA)
    rounded_rect(card, pygame.Rect(0, 0, rect.width, rect.height), fill_rgba, radius=12)
    # title bar sheen
    hi = pygame.Surface((rect.width, max(18, rect.height // 10)), pygame.SRCALPHA)
    pygame.draw.rect(hi, (255, 255, 255, 16), hi.get_rect(), border_radius=12)
    card.blit(hi, (0, 0))
    screen.blit(card, rect.topleft)


def draw_backdrop(screen: pygame.Surface):
    """Dark gradient, cached by window size."""
    w, h = screen.get_size()
    key = (w, h)
    if key not in _backdrop_by_size:
        surf = pygame.Surface((w, h))
        top = (4, 6, 6); bot = (10, 14, 12)
        for y in range(h):
            t = y / max(1, h - 1)
            c = (
                int(top[0] + (bot[0] - top[0]) * t),
                int(top[1] + (bot[1] - top[1]) * t),
                int(top[2] + (bot[2] - top[2]) * t),
            )
            pygame.draw.line(surf, c, (0, y), (w, y))
        _backdrop_by_size.clear()
        _backdrop_by_size[key] = surf
    screen.blit(_backdrop_by_size[key], (0, 0))


def path_stroke(t: float) -> Tuple[int, int, int]:
    """Path outline color; brightness pulses with a 1.5 s period."""
    k = 0.5 * (1.0 + math.sin(t * 2.0 * math.pi / 1.5))
    gain = 1.0 + 0.3 * k
    return tuple(min(255, int(c * gain)) for c in PATH_STROKE)


def wipe_veil(screen: pygame.Surface, progress: float):
    """Black veil, 0 = clear, 1 = fully covered."""
    alpha = int(255 * max(0.0, min(1.0, progress)))
    if alpha <= 0:
        return
    veil = pygame.Surface(screen.get_size(), pygame.SRCALPHA)
    veil.fill((0, 0, 0, alpha))
    screen.blit(veil, (0, 0))
