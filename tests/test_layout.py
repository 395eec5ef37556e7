import random

import pytest

from pathreveal.core.layout import (
    breakpoint_for, generate_layout, grid_for_window, panel_bounds,
    place_blocks, random_point, wall_count,
)
from pathreveal.core.types import Rect


def test_grid_for_window():
    assert grid_for_window(1280, 720) == (51, 28)
    assert grid_for_window(100, 50, cell_px=25) == (4, 2)
    assert grid_for_window(10, 10) == (0, 0)


@pytest.mark.parametrize("width,name", [
    (320, "xs"), (640, "sm"), (767, "sm"), (768, "md"), (1024, "lg"), (1280, "xl"), (1536, "2xl"),
])
def test_breakpoints(width, name):
    assert breakpoint_for(width) == name


def test_panel_bounds_empty_grid():
    assert panel_bounds(0, 10, 1280) == Rect(0, 0, 0, 0)
    assert panel_bounds(10, 0, 1280) == Rect(0, 0, 0, 0)


def test_panel_bounds_desktop_is_centered():
    cols, rows = grid_for_window(1280, 720)
    r = panel_bounds(cols, rows, 1280)
    assert r.width <= 23 and r.height == 10
    assert r.x * 2 + r.width == cols
    assert r.y * 2 + r.height == rows
    assert r.x >= 1 and r.y >= 1


def test_panel_bounds_phone_uses_margins():
    r = panel_bounds(16, 30, 400)
    # 16 - 2*3 = 10 columns, 8 rows
    assert (r.width, r.height) == (10, 8)
    assert r.x == 3
    assert r.y * 2 + r.height == 30


def test_random_point_avoids_taken_cells():
    rng = random.Random(1)
    taken = {(x, y) for x in range(4) for y in range(4)} - {(2, 3)}
    for _ in range(20):
        assert random_point(rng, 4, 4, lambda c: c in taken) == (2, 3)


def test_random_point_gives_up_after_budget():
    rng = random.Random(1)
    calls = []

    def always_taken(c):
        calls.append(c)
        return True

    c = random_point(rng, 3, 3, always_taken, attempts=7)
    assert len(calls) == 7
    assert c == calls[-1]


def test_wall_count_excludes_reserved():
    assert wall_count(10, 10, [Rect(0, 0, 5, 4)], 0.35) == 28
    assert wall_count(10, 10, [], 0.0) == 0


def test_wall_count_counts_overlapping_and_clipped_regions_once():
    # two 4x4 regions sharing a 2x2 corner: 28 unique cells -> 72 free
    assert wall_count(10, 10, [Rect(0, 0, 4, 4), Rect(2, 2, 4, 4)], 0.5) == 36
    # only the 2x2 in-bounds part of this one counts -> 96 free
    assert wall_count(10, 10, [Rect(8, 8, 5, 5)], 0.5) == 48


def test_blocks_are_disjoint_and_in_bounds():
    rng = random.Random(3)
    reserved = [Rect(4, 4, 4, 3)]
    blocks = place_blocks(rng, 16, 12, reserved, count=4, size=2)
    assert len(blocks) == 4
    for i, b in enumerate(blocks):
        assert 0 <= b.x and b.x + b.width <= 16
        assert 0 <= b.y and b.y + b.height <= 12
        assert not b.overlaps(reserved[0])
        for other in blocks[i + 1:]:
            assert not b.overlaps(other)


def test_blocks_that_cannot_fit_are_skipped():
    assert place_blocks(random.Random(0), 3, 3, [], count=2, size=4) == []


def test_generate_layout_keeps_endpoints_free():
    reserved = [Rect(5, 3, 10, 4)]
    for seed in range(25):
        layout = generate_layout(random.Random(seed), 20, 10, reserved,
                                 density=0.35, block_count=2, block_size=2)
        assert len(layout.obstacles) == wall_count(20, 10, reserved + list(layout.blocks), 0.35)
        for c in (layout.start, layout.end):
            assert 0 <= c[0] < 20 and 0 <= c[1] < 10
            assert c not in layout.blocked
            assert not reserved[0].contains(c)
            assert not any(b.contains(c) for b in layout.blocks)
        for w in layout.obstacles:
            assert not reserved[0].contains(w)
            assert not any(b.contains(w) for b in layout.blocks)
        assert set(reserved[0].cells()) <= layout.blocked


def test_walls_leave_room_for_blocks():
    panel = Rect(4, 3, 4, 4)
    for seed in range(10):
        layout = generate_layout(random.Random(seed), 12, 10, [panel],
                                 density=0.35, block_count=8, block_size=2)
        fixed = [panel] + list(layout.blocks)
        free = 12 * 10 - len({c for r in fixed for c in r.cells()})
        assert len(layout.obstacles) == int(free * 0.35)
        assert len(set(layout.obstacles)) == len(layout.obstacles)
        for w in layout.obstacles:
            assert not any(r.contains(w) for r in fixed)


def test_generate_layout_is_seeded():
    a = generate_layout(random.Random(42), 12, 9, density=0.3)
    b = generate_layout(random.Random(42), 12, 9, density=0.3)
    assert a == b
