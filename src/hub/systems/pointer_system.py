from __future__ import annotations

import logging
from dataclasses import replace
from typing import Optional

from esper import World

from hub.components.pointer_state import CursorGlyph, CursorHalo, PointerState
from hub.components.spring import Spring2D
from hub.constants import CURSOR_SPRING, CURSOR_START, HALO_SPRING, POINTER_LABEL_MAX
from hub.events.bus import (
    EventBus,
    EVENT_MOUSE_LEAVE,
    EVENT_MOUSE_MOVE,
    EVENT_POINTER_HOVER_CHANGED,
)
from hub.ui.registry import InteractiveRegion, InteractiveRegistry
from hub.utils.spring_math import SpringParams

logger = logging.getLogger(__name__)


def resolve_label(region: InteractiveRegion, registry: InteractiveRegistry, max_len: int = POINTER_LABEL_MAX) -> str:
    """Pick the chip text for a hovered region.

    Priority: the region's own aria label, its title, then the nearest
    enclosing control's aria label, then that control's visible text.
    """
    if region.aria_label:
        return region.aria_label
    if region.title:
        return region.title
    control = registry.closest_control(region)
    if control is None:
        return ""
    if control.aria_label:
        return control.aria_label
    text = " ".join(control.text.split())
    return text[:max_len]


class PointerTracker:
    """Records raw pointer samples, hit-tests them and feeds the cursor springs."""

    def __init__(
        self,
        world: World,
        event_bus: EventBus,
        registry: Optional[InteractiveRegistry] = None,
        *,
        fast: SpringParams | None = None,
        slow: SpringParams | None = None,
    ) -> None:
        self.world = world
        self.event_bus = event_bus
        self.registry = registry
        if registry is None:
            logger.debug("No interactive registry; pointer hover is disabled")
        start_x, start_y = CURSOR_START
        self._state_entity = self.world.create_entity(
            PointerState(raw_x=start_x, raw_y=start_y, fast_x=start_x, fast_y=start_y, slow_x=start_x, slow_y=start_y)
        )
        self._glyph_entity = self.world.create_entity(
            CursorGlyph(), Spring2D.at(fast or SpringParams.of(CURSOR_SPRING), start_x, start_y)
        )
        self._halo_entity = self.world.create_entity(
            CursorHalo(), Spring2D.at(slow or SpringParams.of(HALO_SPRING), start_x, start_y)
        )
        self.event_bus.subscribe(EVENT_MOUSE_MOVE, self.on_mouse_move)
        self.event_bus.subscribe(EVENT_MOUSE_LEAVE, self.on_mouse_leave)

    @property
    def state(self) -> PointerState:
        return self.world.component_for_entity(self._state_entity, PointerState)

    @property
    def glyph(self) -> Spring2D:
        return self.world.component_for_entity(self._glyph_entity, Spring2D)

    @property
    def halo(self) -> Spring2D:
        return self.world.component_for_entity(self._halo_entity, Spring2D)

    def on_mouse_move(self, sender, **payload):
        x = payload.get("x")
        y = payload.get("y")
        if x is None or y is None:
            return
        try:
            xf = float(x)
            yf = float(y)
        except (TypeError, ValueError):
            return
        state = self.state
        state.raw_x = xf
        state.raw_y = yf
        self.glyph.retarget(xf, yf)
        self.halo.retarget(xf, yf)
        region = self._hit_test(xf, yf)
        if region is not None and region.interactive:
            self._set_hover(True, resolve_label(region, self.registry), region.element_id)
        else:
            self._set_hover(False, "", None)

    def on_mouse_leave(self, sender, **payload):
        self._set_hover(False, "", None)

    def _hit_test(self, x: float, y: float) -> InteractiveRegion | None:
        if self.registry is None:
            return None
        return self.registry.element_at(x, y)

    def _set_hover(self, hovering: bool, label: str, element_id: str | None) -> None:
        state = self.state
        changed = state.hovering != hovering or state.label != label
        state.hovering = hovering
        state.label = label
        state.element_id = element_id
        if changed:
            self.event_bus.emit(EVENT_POINTER_HOVER_CHANGED, hovering=hovering, label=label)

    def get_pointer_state(self) -> PointerState:
        """Snapshot of the pointer including the current smoothed positions."""
        state = self.state
        state.fast_x, state.fast_y = self.glyph.position
        state.slow_x, state.slow_y = self.halo.position
        return replace(state)

    def teardown(self) -> None:
        self.event_bus.unsubscribe(EVENT_MOUSE_MOVE, self.on_mouse_move)
        self.event_bus.unsubscribe(EVENT_MOUSE_LEAVE, self.on_mouse_leave)
        for ent in (self._glyph_entity, self._halo_entity, self._state_entity):
            if self.world.entity_exists(ent):
                self.world.delete_entity(ent, immediate=True)
