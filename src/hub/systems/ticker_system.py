from __future__ import annotations

from typing import Dict

from esper import World

from hub.components.ticker import StatTicker
from hub.constants import TICKER_DURATION
from hub.events.bus import EventBus, EVENT_TICKER_FINISHED, EVENT_TICKER_VISIBLE
from hub.utils.scheduler import TaskHandle, TaskScheduler


def ease_out_cubic(progress: float) -> float:
    p = min(max(progress, 0.0), 1.0)
    return 1.0 - (1.0 - p) ** 3


class TickerSystem:
    """Runs each stat counter's count-up as a frame task, once per ticker."""

    def __init__(self, world: World, event_bus: EventBus, scheduler: TaskScheduler, *, duration: float = TICKER_DURATION):
        self.world = world
        self.event_bus = event_bus
        self.scheduler = scheduler
        self.duration = duration
        self._tasks: Dict[int, TaskHandle] = {}
        self.event_bus.subscribe(EVENT_TICKER_VISIBLE, self.on_visible)

    def create_ticker(self, value: int, suffix: str = "") -> int:
        return self.world.create_entity(StatTicker(value=int(value), suffix=suffix))

    def on_visible(self, sender, **payload):
        ent = payload.get("ticker_entity")
        if ent is None:
            return
        self.start(int(ent))

    def start(self, ent: int) -> None:
        try:
            ticker = self.world.component_for_entity(ent, StatTicker)
        except KeyError:
            return
        if ticker.started:
            return
        ticker.started = True

        def step(dt: float) -> bool:
            return self._advance(ent, dt)

        self._tasks[ent] = self.scheduler.add_frame_task(step)

    def _advance(self, ent: int, dt: float) -> bool:
        try:
            ticker = self.world.component_for_entity(ent, StatTicker)
        except KeyError:
            self._tasks.pop(ent, None)
            return False
        ticker.elapsed += dt
        progress = ticker.elapsed / self.duration if self.duration > 0 else 1.0
        ticker.display = round(ease_out_cubic(progress) * ticker.value)
        if progress < 1.0:
            return True
        ticker.display = ticker.value
        ticker.finished = True
        self._tasks.pop(ent, None)
        self.event_bus.emit(EVENT_TICKER_FINISHED, ticker_entity=ent, value=ticker.value)
        return False

    def teardown(self) -> None:
        for handle in self._tasks.values():
            self.scheduler.cancel(handle)
        self._tasks.clear()
        self.event_bus.unsubscribe(EVENT_TICKER_VISIBLE, self.on_visible)
