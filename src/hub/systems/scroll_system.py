from esper import World

from hub.components.header_state import HeaderState
from hub.constants import HEADER_SCROLL_THRESHOLD
from hub.events.bus import EventBus, EVENT_HEADER_SCROLLED, EVENT_SCROLL


class HeaderScrollSystem:
    """Flips the header to its solid style once the page scrolls past the threshold."""

    def __init__(self, world: World, event_bus: EventBus, *, threshold: float = HEADER_SCROLL_THRESHOLD):
        self.world = world
        self.event_bus = event_bus
        self.threshold = threshold
        self._state_entity = self.world.create_entity(HeaderState())
        self.event_bus.subscribe(EVENT_SCROLL, self.on_scroll)

    @property
    def state(self) -> HeaderState:
        return self.world.component_for_entity(self._state_entity, HeaderState)

    def on_scroll(self, sender, **payload):
        scroll_y = payload.get("scroll_y")
        if scroll_y is None:
            return
        try:
            y = float(scroll_y)
        except (TypeError, ValueError):
            return
        state = self.state
        state.scroll_y = y
        scrolled = y > self.threshold
        if scrolled != state.scrolled:
            state.scrolled = scrolled
            self.event_bus.emit(EVENT_HEADER_SCROLLED, scrolled=scrolled)

    def teardown(self) -> None:
        self.event_bus.unsubscribe(EVENT_SCROLL, self.on_scroll)
