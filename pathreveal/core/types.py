# pathreveal/core/types.py
#!/usr/bin/env python3
from dataclasses import dataclass, field
from typing import Tuple, Optional, FrozenSet, Iterator

Cell = Tuple[int, int]  # (col, row)

# Sequencer phases
SETUP     = "SETUP"
RETRY     = "RETRY"
SEARCHING = "SEARCHING"
PATH      = "PATH"
PAUSE     = "PAUSE"
WIPE      = "WIPE"


@dataclass(frozen=True)
class Rect:
    """Axis-aligned block of cells: columns [x, x+width), rows [y, y+height)."""
    x: int
    y: int
    width: int
    height: int

    def contains(self, c: Cell) -> bool:
        cx, cy = c
        return self.x <= cx < self.x + self.width and self.y <= cy < self.y + self.height

    def overlaps(self, other: "Rect") -> bool:
        return (self.x < other.x + other.width and other.x < self.x + self.width and
                self.y < other.y + other.height and other.y < self.y + self.height)

    def cells(self) -> Iterator[Cell]:
        for row in range(self.y, self.y + self.height):
            for col in range(self.x, self.x + self.width):
                yield (col, row)


@dataclass(frozen=True)
class PathResult:
    path: Tuple[Cell, ...] = ()          # start..end inclusive, () if unreachable
    search_steps: Tuple[Cell, ...] = ()  # cells in the order they were closed

    @property
    def found(self) -> bool:
        return len(self.path) > 0


@dataclass(frozen=True)
class Layout:
    obstacles: Tuple[Cell, ...]           # random walls, in placement order
    blocks: Tuple[Rect, ...]              # decorative blocks
    start: Cell
    end: Cell
    blocked: FrozenSet[Cell] = field(default_factory=frozenset)  # walls + reserved + blocks


@dataclass(frozen=True)
class Frame:
    """What a renderer needs for one tick. Never mutated after creation."""
    phase: str
    cols: int = 0
    rows: int = 0
    obstacles: Tuple[Cell, ...] = ()
    blocks: Tuple[Rect, ...] = ()
    reserved: Tuple[Rect, ...] = ()
    start: Optional[Cell] = None
    end: Optional[Cell] = None
    searched: Tuple[Cell, ...] = ()
    path: Tuple[Cell, ...] = ()
    wiping: bool = False
    suspended: bool = False
