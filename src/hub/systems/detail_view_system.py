from __future__ import annotations

import logging
from typing import Collection, Mapping, Optional

from esper import World

from hub.components.modal_session import ModalSession, ModalTab, ScrollLock
from hub.components.roster import Costume, DetailRecord
from hub.events.bus import (
    EventBus,
    EVENT_CHARACTER_SELECTED,
    EVENT_MODAL_CANCEL,
    EVENT_MODAL_CLOSED,
    EVENT_MODAL_COSTUME_CHANGED,
    EVENT_MODAL_OPENED,
    EVENT_MODAL_TAB_CHANGED,
)
from hub.utils.scroll_lock import ScrollLockHost

logger = logging.getLogger(__name__)


class DetailViewSystem:
    """Open/close state machine for the character detail modal.

    Closed is the absence of a ModalSession component. Entering the open
    state takes the document scroll lock; leaving it hands back the exact
    value the lock replaced.
    """

    def __init__(
        self,
        world: World,
        event_bus: EventBus,
        details: Mapping[int, DetailRecord],
        scroll_host: Optional[ScrollLockHost] = None,
        *,
        banner_ids: Collection[int] = (),
    ) -> None:
        self.world = world
        self.event_bus = event_bus
        self.details = details
        self.scroll_host = scroll_host
        self.banner_ids = frozenset(banner_ids)
        self._lock_entity = self.world.create_entity(ScrollLock())
        self.event_bus.subscribe(EVENT_CHARACTER_SELECTED, self._on_character_selected)
        self.event_bus.subscribe(EVENT_MODAL_CANCEL, self._on_cancel)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    @property
    def is_open(self) -> bool:
        return self._session_entry() is not None

    @property
    def session(self) -> ModalSession | None:
        entry = self._session_entry()
        return entry[1] if entry else None

    @property
    def lock(self) -> ScrollLock:
        return self.world.component_for_entity(self._lock_entity, ScrollLock)

    def record(self) -> DetailRecord | None:
        session = self.session
        if session is None:
            return None
        return self.details.get(session.character_id)

    def active_costume(self) -> Costume | None:
        session = self.session
        record = self.record()
        if session is None or record is None or not record.costumes:
            return None
        return record.costumes[session.active_costume_index]

    def _session_entry(self) -> tuple[int, ModalSession] | None:
        sessions = list(self.world.get_component(ModalSession))
        if not sessions:
            return None
        return sessions[0]

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------
    def open(self, character_id: int) -> bool:
        record = self.details.get(character_id)
        if record is None:
            logger.debug("No detail record for character %s; modal stays as is", character_id)
            return False
        if not record.costumes:
            logger.debug("Character %s has no costumes; modal stays as is", character_id)
            return False
        entry = self._session_entry()
        if entry is None:
            self.world.create_entity(
                ModalSession(character_id=record.id, on_banner=record.id in self.banner_ids)
            )
            self._acquire_lock()
        else:
            _, session = entry
            session.character_id = record.id
            session.active_tab = ModalTab.LORE
            session.active_costume_index = 0
            session.costume_switches = 0
            session.on_banner = record.id in self.banner_ids
        self.event_bus.emit(EVENT_MODAL_OPENED, character_id=record.id)
        return True

    def select_tab(self, tab: ModalTab | str) -> bool:
        session = self.session
        if session is None:
            return False
        if not isinstance(tab, ModalTab):
            try:
                tab = ModalTab(str(tab).lower())
            except ValueError:
                return False
        if session.active_tab != tab:
            session.active_tab = tab
            self.event_bus.emit(EVENT_MODAL_TAB_CHANGED, character_id=session.character_id, tab=tab)
        return True

    def select_costume(self, index: int) -> bool:
        session = self.session
        record = self.record()
        if session is None or record is None:
            return False
        try:
            idx = int(index)
        except (TypeError, ValueError):
            return False
        if idx < 0 or idx >= len(record.costumes):
            logger.debug("Costume index %s out of range for character %s", index, record.id)
            return False
        session.active_costume_index = idx
        session.costume_switches += 1
        self.event_bus.emit(EVENT_MODAL_COSTUME_CHANGED, character_id=session.character_id, index=idx)
        self.select_tab(ModalTab.COSTUME)
        return True

    def close(self) -> bool:
        entry = self._session_entry()
        if entry is None:
            return False
        ent, session = entry
        character_id = session.character_id
        self.world.delete_entity(ent, immediate=True)
        self._release_lock()
        self.event_bus.emit(EVENT_MODAL_CLOSED, character_id=character_id)
        return True

    # ------------------------------------------------------------------
    # Scroll lock
    # ------------------------------------------------------------------
    def _acquire_lock(self) -> None:
        lock = self.lock
        if lock.held or self.scroll_host is None:
            return
        lock.prior = self.scroll_host.acquire()
        lock.held = True

    def _release_lock(self) -> None:
        lock = self.lock
        if not lock.held:
            return
        if self.scroll_host is not None:
            self.scroll_host.release(lock.prior)
        lock.held = False
        lock.prior = None

    # ------------------------------------------------------------------
    # Event handlers
    # ------------------------------------------------------------------
    def _on_character_selected(self, sender, **payload):
        character_id = payload.get("character_id")
        if character_id is None:
            return
        try:
            self.open(int(character_id))
        except (TypeError, ValueError):
            return

    def _on_cancel(self, sender, **payload):
        # Clicks inside the modal content never reach the backdrop.
        if payload.get("origin") == "content":
            return
        self.close()

    def teardown(self) -> None:
        self.close()
        self.event_bus.unsubscribe(EVENT_CHARACTER_SELECTED, self._on_character_selected)
        self.event_bus.unsubscribe(EVENT_MODAL_CANCEL, self._on_cancel)
