#!/usr/bin/env python3
"""
A* over a 4-connected grid with unit step cost.

find_path() runs the whole search in one call and returns both the path and
the exploration trace (cells in the order they were closed) so a viewer can
replay the search afterwards.

Heuristic:
- Manhattan distance (admissible and consistent on a 4-connected unit grid).

Tie-breaking in the PQ:
- (f, rank, cell): lower f, then the cell that entered the open set first.
  A cell keeps its rank when its f improves, so the choice is stable.

Closed cells are never reopened. That is only optimal because every step
costs 1; weighted terrain would need reopen-on-improvement.
"""

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Set, Tuple
import heapq
from math import inf

from pathreveal.core.types import Cell, PathResult

# down, right, up, left
DIRECTIONS: Tuple[Cell, ...] = ((0, 1), (1, 0), (0, -1), (-1, 0))


def manhattan(a: Cell, b: Cell) -> int:
    return abs(a[0] - b[0]) + abs(a[1] - b[1])


@dataclass
class AStarSearch:
    cols: int
    rows: int
    walls: Iterable[Cell] = field(default_factory=frozenset)

    def __post_init__(self) -> None:
        self.walls = frozenset(tuple(w) for w in self.walls)

    # -------------------- helpers --------------------

    def _neighbors4(self, c: Cell, cols: int, rows: int) -> List[Cell]:
        """Valid 4-connected neighbors of c, in DIRECTIONS order."""
        x, y = c
        out: List[Cell] = []
        for dx, dy in DIRECTIONS:
            n = (x + dx, y + dy)
            if 0 <= n[0] < cols and 0 <= n[1] < rows and n not in self.walls:
                out.append(n)
        return out

    @staticmethod
    def _reconstruct_path(parent: Dict[Cell, Cell], start: Cell, end: Cell) -> List[Cell]:
        path: List[Cell] = [end]
        cur = end
        while cur != start:
            cur = parent[cur]
            path.append(cur)
        path.reverse()
        return path

    # -------------------- search --------------------

    def find_path(self, start: Cell, end: Cell,
                  cols: Optional[int] = None, rows: Optional[int] = None) -> PathResult:
        """
        Shortest path from start to end.

        Returns PathResult(path=(), search_steps=trace) when end is unreachable.
        Endpoints are assumed in bounds and free; that is not re-checked.
        """
        cols = self.cols if cols is None else cols
        rows = self.rows if rows is None else rows
        start, end = tuple(start), tuple(end)

        open_pq: List[Tuple[int, int, Cell]] = []   # (f, rank, cell)
        open_rank: Dict[Cell, int] = {}             # cell -> insertion rank
        closed_set: Set[Cell] = set()
        parent: Dict[Cell, Cell] = {}
        g: Dict[Cell, int] = {start: 0}
        f: Dict[Cell, int] = {start: manhattan(start, end)}
        trace: List[Cell] = []
        seq = 0

        open_rank[start] = seq
        heapq.heappush(open_pq, (f[start], seq, start))

        while open_rank:
            f_u, rank, u = heapq.heappop(open_pq)

            # Ignore stale pops (f improved since push, or already closed)
            if open_rank.get(u) != rank or f_u != f.get(u, inf):
                continue

            del open_rank[u]
            closed_set.add(u)
            trace.append(u)

            if u == end:
                path = self._reconstruct_path(parent, start, u)
                return PathResult(path=tuple(path), search_steps=tuple(trace))

            for v in self._neighbors4(u, cols, rows):
                if v in closed_set:
                    continue
                alt = g[u] + 1
                if alt < g.get(v, inf):
                    parent[v] = u
                    g[v] = alt
                    f[v] = alt + manhattan(v, end)
                    if v not in open_rank:
                        seq += 1
                        open_rank[v] = seq
                    heapq.heappush(open_pq, (f[v], open_rank[v], v))

        return PathResult(path=(), search_steps=tuple(trace))
