from __future__ import annotations

import math
from typing import Iterable, List, Sequence, Tuple

from esper import World

from hub.components.dock_icon import DockIcon
from hub.components.spring import Spring
from hub.constants import DOCK_SPRING, MAGNIFY_BOOST, MAGNIFY_RADIUS
from hub.events.bus import EventBus, EVENT_DOCK_LEAVE, EVENT_MOUSE_LEAVE, EVENT_MOUSE_MOVE
from hub.utils.spring_math import SpringParams


def target_scale(distance: float, radius: float = MAGNIFY_RADIUS, boost: float = MAGNIFY_BOOST) -> float:
    if distance < radius:
        return 1.0 + (1.0 - distance / radius) * boost
    return 1.0


class ProximityMagnifier:
    """Scales dock icons by their horizontal distance to the pointer.

    Only the pointer's x is used. Vertical extent of the dock is given by
    ``row_bounds`` (bottom, top); a pointer outside it counts as having left
    the dock, which pushes every icon back to scale 1.
    """

    def __init__(
        self,
        world: World,
        event_bus: EventBus,
        icons: Sequence[Tuple[str, float]] = (),
        *,
        row_bounds: Tuple[float, float] | None = None,
        radius: float = MAGNIFY_RADIUS,
        boost: float = MAGNIFY_BOOST,
        params: SpringParams | None = None,
    ) -> None:
        self.world = world
        self.event_bus = event_bus
        self.radius = radius
        self.boost = boost
        self.row_bounds = row_bounds
        self.params = params or SpringParams.of(DOCK_SPRING)
        self.pointer_x: float = math.inf
        self._icon_entities: List[int] = []
        self.add_icons(icons)
        self.event_bus.subscribe(EVENT_MOUSE_MOVE, self.on_mouse_move)
        self.event_bus.subscribe(EVENT_DOCK_LEAVE, self.on_leave)
        self.event_bus.subscribe(EVENT_MOUSE_LEAVE, self.on_leave)

    def add_icons(self, icons: Iterable[Tuple[str, float]]) -> List[int]:
        created = []
        for label, center_x in icons:
            ent = self.world.create_entity(
                DockIcon(label=label, center_x=float(center_x), order=len(self._icon_entities)),
                Spring(params=self.params, value=1.0, target=1.0),
            )
            self._icon_entities.append(ent)
            created.append(ent)
        return created

    def on_mouse_move(self, sender, **payload):
        x = payload.get("x")
        if x is None:
            return
        try:
            xf = float(x)
        except (TypeError, ValueError):
            return
        if self.row_bounds is not None:
            y = payload.get("y")
            if y is None:
                self.set_pointer_x(math.inf)
                return
            try:
                yf = float(y)
            except (TypeError, ValueError):
                return
            bottom, top = self.row_bounds
            if not (bottom <= yf <= top):
                self.set_pointer_x(math.inf)
                return
        self.set_pointer_x(xf)

    def on_leave(self, sender, **payload):
        self.set_pointer_x(math.inf)

    def set_pointer_x(self, x: float) -> None:
        self.pointer_x = x
        for ent in self._icon_entities:
            icon = self.world.component_for_entity(ent, DockIcon)
            spring = self.world.component_for_entity(ent, Spring)
            distance = abs(x - icon.center_x)
            spring.target = target_scale(distance, self.radius, self.boost)
            icon.label_visible = distance <= icon.half_width

    def scales(self) -> List[float]:
        """Current smoothed scale per icon, in dock order."""
        return [self.world.component_for_entity(ent, Spring).value for ent in self._icon_entities]

    def icons(self) -> List[DockIcon]:
        return [self.world.component_for_entity(ent, DockIcon) for ent in self._icon_entities]

    def teardown(self) -> None:
        self.event_bus.unsubscribe(EVENT_MOUSE_MOVE, self.on_mouse_move)
        self.event_bus.unsubscribe(EVENT_DOCK_LEAVE, self.on_leave)
        self.event_bus.unsubscribe(EVENT_MOUSE_LEAVE, self.on_leave)
        for ent in self._icon_entities:
            if self.world.entity_exists(ent):
                self.world.delete_entity(ent, immediate=True)
        self._icon_entities.clear()
