#!/usr/bin/env python3
"""
Animation sequencer: SETUP -> SEARCHING -> PATH -> PAUSE -> WIPE -> SETUP ...

Split in two:
- transition(state, event, ctx) -> (state, effects): all phase logic. The only
  side channel is the returned effects (ScheduleTimer / CancelTimer).
- AnimationSequencer: owns the state, feeds events in, and applies effects to
  a scheduler. At most one timer is outstanding at any time.

Events:
- GridReady(cols, rows, reserved)  grid known or changed
- TimerFired()                     the pending timer ran
- Suspend() / Resume(...)          viewport resize started / finished
- Teardown()                       owner is going away

A failed search (no route) sends the cycle through RETRY and back to SETUP
with a fresh layout. The number of regenerations is not capped.
"""

import random
from dataclasses import dataclass, field, replace
from typing import Callable, List, Optional, Sequence, Tuple

from pathreveal.core.astar import AStarSearch
from pathreveal.core.config import DEFAULT_CONFIG, SequencerConfig
from pathreveal.core.layout import generate_layout
from pathreveal.core.scheduler import ManualScheduler
from pathreveal.core.types import (
    Cell, Frame, Rect,
    SETUP, RETRY, SEARCHING, PATH, PAUSE, WIPE,
)


# -------------------- events --------------------

@dataclass(frozen=True)
class GridReady:
    cols: int
    rows: int
    reserved: Tuple[Rect, ...] = ()


@dataclass(frozen=True)
class TimerFired:
    pass


@dataclass(frozen=True)
class Suspend:
    pass


@dataclass(frozen=True)
class Resume:
    cols: int
    rows: int
    reserved: Tuple[Rect, ...] = ()


@dataclass(frozen=True)
class Teardown:
    pass


# -------------------- effects --------------------

@dataclass(frozen=True)
class ScheduleTimer:
    delay_ms: float


@dataclass(frozen=True)
class CancelTimer:
    pass


Effects = List[object]


# -------------------- state --------------------

@dataclass(frozen=True)
class SequencerState:
    phase: str = SETUP
    cols: int = 0
    rows: int = 0
    reserved: Tuple[Rect, ...] = ()
    obstacles: Tuple[Cell, ...] = ()
    blocks: Tuple[Rect, ...] = ()
    start: Optional[Cell] = None
    end: Optional[Cell] = None
    search_steps: Tuple[Cell, ...] = ()
    path: Tuple[Cell, ...] = ()
    search_index: int = 0      # how many trace cells are revealed
    path_index: int = 0        # how many path cells are revealed
    wiping: bool = False
    suspended: bool = False
    started: bool = False      # SETUP already generated for this entry
    regenerations: int = 0     # failed setups since the last success

    def frame(self) -> Frame:
        return Frame(
            phase=self.phase,
            cols=self.cols,
            rows=self.rows,
            obstacles=self.obstacles,
            blocks=self.blocks,
            reserved=self.reserved,
            start=self.start,
            end=self.end,
            searched=self.search_steps[:self.search_index],
            path=self.path[:self.path_index],
            wiping=self.wiping,
            suspended=self.suspended,
        )


@dataclass
class Context:
    config: SequencerConfig = DEFAULT_CONFIG
    rng: random.Random = field(default_factory=random.Random)
    search_factory: Callable[..., AStarSearch] = AStarSearch

    def debug(self, msg: str) -> None:
        if self.config.debug:
            print(f"[pathreveal] {msg}")


# -------------------- phase entry --------------------

def _cleared(s: SequencerState) -> SequencerState:
    """Drop everything a cycle produced; keep grid, reserved and flags."""
    return replace(s, obstacles=(), blocks=(), start=None, end=None,
                   search_steps=(), path=(), search_index=0, path_index=0,
                   wiping=False, started=False)


def _enter_setup(s: SequencerState, ctx: Context) -> Tuple[SequencerState, Effects]:
    s = replace(s, phase=SETUP)
    if s.cols <= 0 or s.rows <= 0 or s.suspended or s.started:
        return s, []

    s = replace(_cleared(s), started=True)
    cfg = ctx.config
    layout = generate_layout(ctx.rng, s.cols, s.rows, s.reserved,
                             density=cfg.density, block_count=cfg.block_count,
                             block_size=cfg.block_size, attempts=cfg.attempts)
    engine = ctx.search_factory(s.cols, s.rows, layout.blocked)
    result = engine.find_path(layout.start, layout.end, s.cols, s.rows)

    s = replace(s, obstacles=layout.obstacles, blocks=layout.blocks,
                start=layout.start, end=layout.end)

    if not result.path:
        ctx.debug(f"SETUP {s.cols}x{s.rows}: no path {layout.start} -> {layout.end}, retrying "
                  f"(attempt {s.regenerations + 1})")
        s = replace(s, phase=RETRY, started=False, regenerations=s.regenerations + 1)
        return s, [ScheduleTimer(cfg.retry_delay_ms)]

    ctx.debug(f"SETUP {s.cols}x{s.rows}: {len(layout.obstacles)} walls, "
              f"{len(result.search_steps)} search steps, path {len(result.path)}")
    s = replace(s, search_steps=result.search_steps, path=result.path, regenerations=0)
    return _enter_searching(s, ctx)


def _enter_searching(s: SequencerState, ctx: Context) -> Tuple[SequencerState, Effects]:
    if not s.search_steps:
        ctx.debug("SEARCHING with an empty trace, back to SETUP")
        return replace(_cleared(s), phase=SETUP), [ScheduleTimer(ctx.config.retry_delay_ms)]
    s = replace(s, phase=SEARCHING, search_index=1)
    return s, [ScheduleTimer(ctx.config.search_delay_ms)]


def _enter_path(s: SequencerState, ctx: Context) -> Tuple[SequencerState, Effects]:
    if not s.path:
        ctx.debug("PATH with an empty path, skipping to PAUSE")
        return _enter_pause(s, ctx)
    s = replace(s, phase=PATH, path_index=1)
    return s, [ScheduleTimer(ctx.config.path_delay_ms)]


def _enter_pause(s: SequencerState, ctx: Context) -> Tuple[SequencerState, Effects]:
    return replace(s, phase=PAUSE), [ScheduleTimer(ctx.config.pause_ms)]


def _enter_wipe(s: SequencerState, ctx: Context) -> Tuple[SequencerState, Effects]:
    return replace(s, phase=WIPE, wiping=True), [ScheduleTimer(ctx.config.wipe_ms)]


def _hard_reset(s: SequencerState, ctx: Context, cols: int, rows: int,
                reserved: Sequence[Rect]) -> Tuple[SequencerState, Effects]:
    s = replace(_cleared(s), cols=cols, rows=rows, reserved=tuple(reserved),
                regenerations=0)
    s, effects = _enter_setup(s, ctx)
    return s, [CancelTimer()] + effects


# -------------------- transition --------------------

def _on_timer(s: SequencerState, ctx: Context) -> Tuple[SequencerState, Effects]:
    if s.phase == SEARCHING:
        if s.search_index >= len(s.search_steps):
            return _enter_path(s, ctx)
        return replace(s, search_index=s.search_index + 1), [ScheduleTimer(ctx.config.search_delay_ms)]

    if s.phase == PATH:
        if s.path_index >= len(s.path):
            return _enter_pause(s, ctx)
        return replace(s, path_index=s.path_index + 1), [ScheduleTimer(ctx.config.path_delay_ms)]

    if s.phase == PAUSE:
        return _enter_wipe(s, ctx)

    if s.phase == WIPE:
        return _enter_setup(_cleared(s), ctx)

    if s.phase == RETRY:
        return _enter_setup(replace(s, started=False), ctx)

    if s.phase == SETUP and not s.started:
        return _enter_setup(s, ctx)

    return s, []


def transition(s: SequencerState, event: object, ctx: Context) -> Tuple[SequencerState, Effects]:
    if isinstance(event, TimerFired):
        if s.suspended:
            return s, []
        return _on_timer(s, ctx)

    if isinstance(event, GridReady):
        reserved = tuple(event.reserved)
        same = (event.cols, event.rows, reserved) == (s.cols, s.rows, s.reserved)
        if s.suspended:
            return replace(s, cols=event.cols, rows=event.rows, reserved=reserved), []
        if same and (s.started or s.phase == RETRY):
            return s, []
        return _hard_reset(s, ctx, event.cols, event.rows, reserved)

    if isinstance(event, Suspend):
        if s.suspended:
            return s, []
        ctx.debug(f"suspend in {s.phase}")
        return replace(s, suspended=True), [CancelTimer()]

    if isinstance(event, Resume):
        ctx.debug(f"resume at {event.cols}x{event.rows}")
        return _hard_reset(replace(s, suspended=False), ctx, event.cols, event.rows, event.reserved)

    if isinstance(event, Teardown):
        return s, [CancelTimer()]

    raise TypeError(f"unknown event {event!r}")


# -------------------- driver --------------------

class AnimationSequencer:
    def __init__(self, config: SequencerConfig = DEFAULT_CONFIG,
                 scheduler: Optional[ManualScheduler] = None,
                 rng: Optional[random.Random] = None,
                 search_factory: Callable[..., AStarSearch] = AStarSearch):
        self.config = config
        self.scheduler = scheduler if scheduler is not None else ManualScheduler()
        self.ctx = Context(config=config,
                           rng=rng if rng is not None else random.Random(config.seed),
                           search_factory=search_factory)
        self.state = SequencerState()
        self._timer: Optional[int] = None
        self._closed = False

    # ---- inputs ----
    def dispatch(self, event) -> SequencerState:
        if self._closed:
            return self.state
        self.state, effects = transition(self.state, event, self.ctx)
        for eff in effects:
            self._apply(eff)
        if isinstance(event, Teardown):
            self._closed = True
        return self.state

    def set_grid(self, cols: int, rows: int, reserved: Sequence[Rect] = ()) -> SequencerState:
        return self.dispatch(GridReady(cols, rows, tuple(reserved)))

    def suspend(self) -> SequencerState:
        return self.dispatch(Suspend())

    def resume(self, cols: int, rows: int, reserved: Sequence[Rect] = ()) -> SequencerState:
        return self.dispatch(Resume(cols, rows, tuple(reserved)))

    def teardown(self) -> None:
        self.dispatch(Teardown())

    def advance(self, ms: float) -> int:
        return self.scheduler.advance(ms)

    def set_speeds(self, search_delay_ms: Optional[float] = None,
                   path_delay_ms: Optional[float] = None) -> SequencerConfig:
        """Change reveal pacing; applies from the next scheduled tick."""
        changes = {}
        if search_delay_ms is not None:
            changes["search_delay_ms"] = search_delay_ms
        if path_delay_ms is not None:
            changes["path_delay_ms"] = path_delay_ms
        self.config = replace(self.config, **changes)
        self.ctx.config = self.config
        return self.config

    # ---- outputs ----
    @property
    def phase(self) -> str:
        return self.state.phase

    @property
    def timer_pending(self) -> bool:
        return self._timer is not None

    def frame(self) -> Frame:
        return self.state.frame()

    # ---- effects ----
    def _apply(self, eff) -> None:
        if isinstance(eff, CancelTimer):
            self._cancel()
        elif isinstance(eff, ScheduleTimer):
            self._cancel()
            self._timer = self.scheduler.call_later(eff.delay_ms, self._on_timer)
        else:
            raise TypeError(f"unknown effect {eff!r}")

    def _cancel(self) -> None:
        if self._timer is not None:
            self.scheduler.cancel(self._timer)
            self._timer = None

    def _on_timer(self) -> None:
        self._timer = None
        self.dispatch(TimerFired())
