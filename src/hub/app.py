"""Wires the interaction systems together behind the operations the page calls."""
from __future__ import annotations

from typing import Callable, Collection, Iterable, List, Mapping, Optional, Sequence, Tuple

from esper import World

from hub.components.filter_state import ViewModel
from hub.components.modal_session import ModalSession, ModalTab
from hub.components.notification import Notification
from hub.components.pointer_state import PointerState
from hub.components.roster import DetailRecord, Element, RosterEntry, Tier
from hub.constants import FRAME_DT
from hub.data.loader import Dataset
from hub.events.bus import EventBus, EVENT_MODAL_CANCEL, EVENT_MOUSE_MOVE, EVENT_TEARDOWN, EVENT_TICK
from hub.systems.detail_view_system import DetailViewSystem
from hub.systems.lane_system import LaneMarqueeSystem
from hub.systems.magnifier_system import ProximityMagnifier
from hub.systems.notification_system import NotificationScheduler
from hub.systems.pointer_system import PointerTracker
from hub.systems.roster_filter_system import RosterFilterSystem
from hub.systems.scroll_system import HeaderScrollSystem
from hub.systems.spring_system import SpringSystem
from hub.systems.ticker_system import TickerSystem
from hub.ui.registry import InteractiveRegistry
from hub.utils.scheduler import TaskScheduler
from hub.utils.scroll_lock import ScrollLockHost
from hub.utils.session_store import SessionFlagStore


class HubEngine:
    def __init__(
        self,
        roster: Sequence[RosterEntry],
        details: Mapping[int, DetailRecord],
        *,
        registry: Optional[InteractiveRegistry] = None,
        session_store: Optional[SessionFlagStore] = None,
        scroll_host: Optional[ScrollLockHost] = None,
        clock: Callable[[], float] | None = None,
        banner_ids: Collection[int] = (),
        dock_icons: Iterable[Tuple[str, float]] = (),
        dock_row_bounds: Tuple[float, float] | None = None,
        event_bus: EventBus | None = None,
    ) -> None:
        self.event_bus = event_bus or EventBus()
        self.world = World()
        self.scheduler = TaskScheduler(event_bus=self.event_bus, clock=clock)
        self.spring_system = SpringSystem(self.world, self.event_bus)
        self.pointer = PointerTracker(self.world, self.event_bus, registry)
        self.magnifier = ProximityMagnifier(self.world, self.event_bus, tuple(dock_icons), row_bounds=dock_row_bounds)
        self.notifications = NotificationScheduler(self.world, self.event_bus, self.scheduler, session_store)
        self.roster_filter = RosterFilterSystem(self.world, self.event_bus, roster)
        self.lanes = LaneMarqueeSystem(self.world, self.event_bus, self.scheduler)
        self.detail_view = DetailViewSystem(
            self.world, self.event_bus, details, scroll_host, banner_ids=banner_ids
        )
        self.tickers = TickerSystem(self.world, self.event_bus, self.scheduler)
        self.header = HeaderScrollSystem(self.world, self.event_bus)
        self._torn_down = False

    @classmethod
    def from_dataset(cls, dataset: Dataset, **kwargs) -> "HubEngine":
        return cls(dataset.roster, dataset.details, banner_ids=dataset.banner_ids, **kwargs)

    # ------------------------------------------------------------------
    # Host loop
    # ------------------------------------------------------------------
    def start(self) -> None:
        self.notifications.activate()

    def tick(self, dt: float = FRAME_DT) -> None:
        self.event_bus.emit(EVENT_TICK, dt=dt)

    def pointer_move(self, x: float, y: float) -> None:
        self.event_bus.emit(EVENT_MOUSE_MOVE, x=x, y=y)

    def cancel(self, origin: str = "escape") -> None:
        self.event_bus.emit(EVENT_MODAL_CANCEL, origin=origin)

    def teardown(self) -> None:
        if self._torn_down:
            return
        self._torn_down = True
        self.notifications.teardown()
        self.lanes.teardown()
        self.tickers.teardown()
        self.detail_view.teardown()
        self.magnifier.teardown()
        self.pointer.teardown()
        self.header.teardown()
        self.roster_filter.teardown()
        self.spring_system.teardown()
        self.scheduler.teardown()
        self.event_bus.emit(EVENT_TEARDOWN)

    # ------------------------------------------------------------------
    # Roster
    # ------------------------------------------------------------------
    def set_query(self, text: str) -> None:
        self.roster_filter.set_query(text)

    def set_element_filter(self, element: Element | str | None) -> None:
        self.roster_filter.set_element_filter(element)

    def set_tier_filter(self, tier: Tier | str | None) -> None:
        self.roster_filter.set_tier_filter(tier)

    def clear_all_filters(self) -> None:
        self.roster_filter.clear_all_filters()

    def get_view(self) -> ViewModel:
        return self.roster_filter.get_view()

    # ------------------------------------------------------------------
    # Detail modal
    # ------------------------------------------------------------------
    def open_detail(self, character_id: int) -> bool:
        return self.detail_view.open(character_id)

    def close_detail(self) -> bool:
        return self.detail_view.close()

    def select_tab(self, tab: ModalTab | str) -> bool:
        return self.detail_view.select_tab(tab)

    def select_costume(self, index: int) -> bool:
        return self.detail_view.select_costume(index)

    def modal(self) -> ModalSession | None:
        return self.detail_view.session

    # ------------------------------------------------------------------
    # Notifications and pointer
    # ------------------------------------------------------------------
    def dismiss_notification(self, notification_id: str) -> bool:
        return self.notifications.dismiss(notification_id)

    def active_notifications(self) -> List[Notification]:
        return self.notifications.active()

    def get_pointer_state(self) -> PointerState:
        return self.pointer.get_pointer_state()
