from __future__ import annotations

from typing import List, Sequence

from esper import World

from hub.components.filter_state import LaneConfig
from hub.components.lane_state import LaneState
from hub.events.bus import EventBus, EVENT_LANE_HOVER
from hub.utils.roster_query import default_lane_configs
from hub.utils.scheduler import TaskScheduler


class LaneMarqueeSystem:
    """Advances the looping roster lanes; hovering a lane pauses only that lane."""

    def __init__(
        self,
        world: World,
        event_bus: EventBus,
        scheduler: TaskScheduler,
        configs: Sequence[LaneConfig] | None = None,
    ) -> None:
        self.world = world
        self.event_bus = event_bus
        self.scheduler = scheduler
        self._lane_entities: List[int] = []
        for config in configs or default_lane_configs():
            ent = self.world.create_entity(
                LaneState(index=config.index, reverse=config.reverse, duration=config.duration)
            )
            self._lane_entities.append(ent)
        self._frame_handle = self.scheduler.add_frame_task(self.advance)
        self.event_bus.subscribe(EVENT_LANE_HOVER, self.on_lane_hover)

    def lanes(self) -> List[LaneState]:
        return [self.world.component_for_entity(ent, LaneState) for ent in self._lane_entities]

    def advance(self, dt: float) -> None:
        for lane in self.lanes():
            if lane.paused or lane.duration <= 0.0:
                continue
            step = dt / lane.duration
            if lane.reverse:
                step = -step
            lane.phase = (lane.phase + step) % 1.0

    def on_lane_hover(self, sender, **payload):
        index = payload.get("lane")
        if index is None:
            return
        for lane in self.lanes():
            if lane.index == index:
                lane.paused = bool(payload.get("hovered"))

    def teardown(self) -> None:
        self.scheduler.cancel(self._frame_handle)
        self.event_bus.unsubscribe(EVENT_LANE_HOVER, self.on_lane_hover)
        for ent in self._lane_entities:
            if self.world.entity_exists(ent):
                self.world.delete_entity(ent, immediate=True)
        self._lane_entities.clear()
