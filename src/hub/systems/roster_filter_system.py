from __future__ import annotations

from typing import Optional, Sequence, Tuple

from esper import World

from hub.components.filter_state import FilterCriteria, ViewModel
from hub.components.roster import Element, RosterEntry, Tier
from hub.constants import FILTER_TIERS
from hub.events.bus import EventBus, EVENT_ROSTER_VIEW_CHANGED
from hub.utils.roster_query import available_elements, compute_view


def _coerce(enum_type, value):
    """Accept an enum member, its string value, or None/"" for "no filter"."""
    if value is None or value == "":
        return None
    if isinstance(value, enum_type):
        return value
    try:
        return enum_type(str(value))
    except ValueError:
        return None


class RosterFilterSystem:
    """Owns the roster search criteria and the derived view."""

    def __init__(self, world: World, event_bus: EventBus, roster: Sequence[RosterEntry]):
        self.world = world
        self.event_bus = event_bus
        self.roster: Tuple[RosterEntry, ...] = tuple(roster)
        self._criteria_entity = self.world.create_entity(FilterCriteria())
        self._view: ViewModel | None = None

    @property
    def criteria(self) -> FilterCriteria:
        return self.world.component_for_entity(self._criteria_entity, FilterCriteria)

    def set_query(self, text: str | None) -> None:
        self._update(query=text or "")

    def set_element_filter(self, element: Element | str | None) -> None:
        self._update(element=_coerce(Element, element))

    def set_tier_filter(self, tier: Tier | str | None) -> None:
        self._update(tier=_coerce(Tier, tier))

    def clear_all_filters(self) -> None:
        self._update(query="", element=None, tier=None)

    def get_view(self) -> ViewModel:
        if self._view is None:
            self._view = compute_view(self.roster, self.criteria)
        return self._view

    def element_options(self) -> Tuple[Element, ...]:
        return available_elements(self.roster)

    def tier_options(self) -> Tuple[Tier, ...]:
        return tuple(Tier(t) for t in FILTER_TIERS)

    def teardown(self) -> None:
        self._view = None
        if self.world.entity_exists(self._criteria_entity):
            self.world.delete_entity(self._criteria_entity, immediate=True)

    def _update(self, **changes) -> None:
        criteria = self.criteria
        changed = False
        for name, value in changes.items():
            if getattr(criteria, name) != value:
                setattr(criteria, name, value)
                changed = True
        if not changed:
            return
        self._view = None
        self.event_bus.emit(EVENT_ROSTER_VIEW_CHANGED, view=self.get_view())
