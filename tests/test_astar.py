from collections import deque

import pytest

from pathreveal.core.astar import AStarSearch, manhattan


def _reachable(cols, rows, walls, start):
    seen = {start}
    q = deque([start])
    while q:
        x, y = q.popleft()
        for n in ((x, y + 1), (x + 1, y), (x, y - 1), (x - 1, y)):
            if 0 <= n[0] < cols and 0 <= n[1] < rows and n not in walls and n not in seen:
                seen.add(n)
                q.append(n)
    return seen


def _assert_valid_path(path, walls, start, end):
    assert path[0] == start
    assert path[-1] == end
    for a, b in zip(path, path[1:]):
        assert manhattan(a, b) == 1
    assert not set(path) & set(walls)


MAZE_WALLS = {(1, 0), (1, 1), (1, 2), (3, 1), (3, 2), (3, 3), (3, 4), (5, 0), (5, 1), (5, 3)}


@pytest.mark.parametrize("start,end", [
    ((0, 0), (0, 0)),
    ((0, 0), (6, 4)),
    ((6, 4), (0, 0)),
    ((2, 5), (5, 2)),
    ((3, 0), (3, 5)),
])
def test_open_grid_path_is_manhattan_plus_one(start, end):
    engine = AStarSearch(7, 6, [])
    res = engine.find_path(start, end, 7, 6)
    assert len(res.path) == manhattan(start, end) + 1
    _assert_valid_path(res.path, set(), start, end)


def test_wall_with_gap_at_bottom():
    walls = [(1, 0), (1, 1), (1, 2), (1, 3)]
    res = AStarSearch(5, 5, walls).find_path((0, 0), (2, 0), 5, 5)
    # down x=0, across the gap, back up x=2
    assert len(res.path) == 11
    assert [c for c in res.path if c[0] == 1] == [(1, 4)]
    _assert_valid_path(res.path, walls, (0, 0), (2, 0))


def test_enclosed_corner_is_unreachable():
    walls = [(1, 2), (2, 1)]
    res = AStarSearch(3, 3, walls).find_path((0, 0), (2, 2), 3, 3)
    assert res.path == ()
    assert not res.found
    reachable = _reachable(3, 3, set(walls), (0, 0))
    assert len(res.search_steps) == len(set(res.search_steps))
    assert set(res.search_steps) == reachable


def test_unreachable_trace_covers_component_once():
    walls = {(2, y) for y in range(6)}
    res = AStarSearch(6, 6, walls).find_path((0, 3), (5, 3), 6, 6)
    assert res.path == ()
    assert sorted(res.search_steps) == sorted(_reachable(6, 6, walls, (0, 3)))


def test_path_through_maze_is_shortest():
    cols, rows = 7, 5
    res = AStarSearch(cols, rows, MAZE_WALLS).find_path((0, 0), (6, 0), cols, rows)
    _assert_valid_path(res.path, MAZE_WALLS, (0, 0), (6, 0))

    # BFS distance as reference
    dist = {(0, 0): 0}
    q = deque([(0, 0)])
    while q:
        x, y = q.popleft()
        for n in ((x, y + 1), (x + 1, y), (x, y - 1), (x - 1, y)):
            if 0 <= n[0] < cols and 0 <= n[1] < rows and n not in MAZE_WALLS and n not in dist:
                dist[n] = dist[(x, y)] + 1
                q.append(n)
    assert len(res.path) - 1 == dist[(6, 0)]


def test_search_steps_start_with_start_and_end_with_goal():
    res = AStarSearch(7, 5, MAZE_WALLS).find_path((0, 0), (6, 0))
    assert res.search_steps[0] == (0, 0)
    assert res.search_steps[-1] == (6, 0)
    assert len(res.search_steps) == len(set(res.search_steps))


def test_repeated_calls_are_identical():
    engine = AStarSearch(7, 5, MAZE_WALLS)
    first = engine.find_path((0, 4), (6, 0), 7, 5)
    second = engine.find_path((0, 4), (6, 0), 7, 5)
    other = AStarSearch(7, 5, sorted(MAZE_WALLS, reverse=True)).find_path((0, 4), (6, 0), 7, 5)
    assert first == second == other


def test_tie_break_prefers_earliest_inserted():
    # Every cell on an open 3x3 grid has f == 4 toward (2,2); down is inserted
    # before right, so the column x=0 is taken first.
    res = AStarSearch(3, 3, []).find_path((0, 0), (2, 2), 3, 3)
    assert res.search_steps[:2] == ((0, 0), (0, 1))
    assert res.path == ((0, 0), (0, 1), (0, 2), (1, 2), (2, 2))


def test_fewer_walls_never_explores_more_than_reachable():
    walls = set(MAZE_WALLS)
    start, end = (0, 4), (6, 0)
    while walls:
        res = AStarSearch(7, 5, walls).find_path(start, end, 7, 5)
        assert len(res.search_steps) <= len(_reachable(7, 5, walls, start))
        walls.pop()


def test_start_on_wall_does_not_raise():
    res = AStarSearch(3, 3, [(0, 0)]).find_path((0, 0), (2, 2), 3, 3)
    assert isinstance(res.path, tuple)
