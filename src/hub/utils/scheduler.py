from __future__ import annotations

import heapq
import itertools
from dataclasses import dataclass, field
from time import monotonic
from typing import Any, Callable, Dict, List, Tuple

from hub.constants import FRAME_DT
from hub.events.bus import EVENT_TICK, EventBus


@dataclass(slots=True)
class TaskHandle:
    """Returned by the scheduler; pass back to ``cancel``."""

    task_id: int
    deadline: float | None = None
    cancelled: bool = False


@dataclass(slots=True)
class TaskScheduler:
    """Central scheduler for wall-clock timers and per-frame tasks.

    Timers fire against ``clock()`` deadlines, independent of frame pacing.
    Frame tasks receive the tick's ``dt`` and are removed when they return
    ``False`` or are cancelled. Nothing here blocks; the host drives it by
    emitting ``EVENT_TICK``.
    """

    event_bus: EventBus | None = None
    clock: Callable[[], float] | None = field(default=None, repr=False)

    _clock: Callable[[], float] = field(init=False, repr=False)
    _timers: List[Tuple[float, int, Callable[[], Any]]] = field(init=False, repr=False)
    _frame_tasks: Dict[int, Callable[[float], Any]] = field(init=False, repr=False)
    _handles: Dict[int, TaskHandle] = field(init=False, repr=False)
    _ids: Any = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._clock = self.clock or monotonic
        self._timers = []
        self._frame_tasks = {}
        self._handles = {}
        self._ids = itertools.count(1)
        if self.event_bus is not None:
            self.event_bus.subscribe(EVENT_TICK, self.on_tick)

    def now(self) -> float:
        return self._clock()

    def call_at(self, deadline: float, fn: Callable[[], Any]) -> TaskHandle:
        task_id = next(self._ids)
        handle = TaskHandle(task_id=task_id, deadline=float(deadline))
        self._handles[task_id] = handle
        heapq.heappush(self._timers, (handle.deadline, task_id, fn))
        return handle

    def call_later(self, delay: float, fn: Callable[[], Any]) -> TaskHandle:
        return self.call_at(self._clock() + max(0.0, float(delay)), fn)

    def add_frame_task(self, fn: Callable[[float], Any]) -> TaskHandle:
        task_id = next(self._ids)
        handle = TaskHandle(task_id=task_id)
        self._handles[task_id] = handle
        self._frame_tasks[task_id] = fn
        return handle

    def cancel(self, handle: TaskHandle | None) -> None:
        if handle is None or handle.cancelled:
            return
        handle.cancelled = True
        self._handles.pop(handle.task_id, None)
        self._frame_tasks.pop(handle.task_id, None)
        # Cancelled timers stay in the heap and are skipped when popped.

    def cancel_all(self) -> None:
        for handle in list(self._handles.values()):
            handle.cancelled = True
        self._handles.clear()
        self._frame_tasks.clear()
        self._timers.clear()

    def teardown(self) -> None:
        """Drop every task and stop listening for ticks."""
        self.cancel_all()
        if self.event_bus is not None:
            self.event_bus.unsubscribe(EVENT_TICK, self.on_tick)

    @property
    def pending(self) -> int:
        return len(self._handles)

    def on_tick(self, sender=None, **kwargs):
        dt = kwargs.get('dt', FRAME_DT)
        try:
            dt = float(dt)
        except (TypeError, ValueError):
            dt = FRAME_DT
        self.run_frame(dt)
        self.run_due()

    def run_frame(self, dt: float) -> None:
        for task_id, fn in list(self._frame_tasks.items()):
            if task_id not in self._frame_tasks:
                continue
            if fn(dt) is False:
                handle = self._handles.get(task_id)
                if handle is not None:
                    self.cancel(handle)

    def run_due(self) -> int:
        """Fire every timer whose deadline has passed, earliest first."""
        now = self._clock()
        fired = 0
        while self._timers and self._timers[0][0] <= now:
            _, task_id, fn = heapq.heappop(self._timers)
            handle = self._handles.pop(task_id, None)
            if handle is None or handle.cancelled:
                continue
            handle.cancelled = True
            fn()
            fired += 1
        return fired
