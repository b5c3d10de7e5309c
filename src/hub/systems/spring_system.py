from esper import World

from hub.components.spring import Spring, Spring2D
from hub.constants import FRAME_DT
from hub.events.bus import EventBus, EVENT_TICK


class SpringSystem:
    """Advances every live spring in the world once per frame with the frame's dt."""

    def __init__(self, world: World, event_bus: EventBus):
        self.world = world
        self.event_bus = event_bus
        event_bus.subscribe(EVENT_TICK, self.on_tick)

    def on_tick(self, sender, **kwargs):
        dt = kwargs.get('dt', FRAME_DT)
        try:
            dt = float(dt)
        except (TypeError, ValueError):
            dt = FRAME_DT
        if dt <= 0.0:
            return
        for _, spring in self.world.get_component(Spring):
            spring.step(dt)
        for _, pair in self.world.get_component(Spring2D):
            pair.step(dt)

    def teardown(self) -> None:
        self.event_bus.unsubscribe(EVENT_TICK, self.on_tick)
