#!/usr/bin/env python3
"""
One-shot timers on a manually advanced clock.

Nothing here reads wall time: the owner calls advance(ms) with however much
time has passed (the viewer passes the frame clock's delta, tests pass
whatever they like), and every callback whose deadline is reached fires in
deadline order.
"""

import heapq
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Tuple


@dataclass
class ManualScheduler:
    now_ms: float = 0.0
    _queue: List[Tuple[float, int, int]] = field(default_factory=list)  # (deadline, seq, handle)
    _callbacks: Dict[int, Callable[[], None]] = field(default_factory=dict)
    _seq: int = 0

    def call_later(self, delay_ms: float, callback: Callable[[], None]) -> int:
        """Run callback once, delay_ms from now. Returns a handle for cancel()."""
        self._seq += 1
        handle = self._seq
        self._callbacks[handle] = callback
        heapq.heappush(self._queue, (self.now_ms + max(0.0, float(delay_ms)), self._seq, handle))
        return handle

    def cancel(self, handle: int) -> bool:
        """Drop a pending callback. False if it already ran or was cancelled."""
        return self._callbacks.pop(handle, None) is not None

    def pending(self) -> int:
        return len(self._callbacks)

    def advance(self, ms: float) -> int:
        """Move the clock forward by ms and fire what came due. Returns #fired."""
        target = self.now_ms + max(0.0, float(ms))
        fired = 0
        while self._queue and self._queue[0][0] <= target:
            deadline, _, handle = heapq.heappop(self._queue)
            cb = self._callbacks.pop(handle, None)
            if cb is None:
                continue  # cancelled
            self.now_ms = deadline
            cb()
            fired += 1
        self.now_ms = target
        return fired
