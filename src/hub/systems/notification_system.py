from __future__ import annotations

import itertools
import logging
from typing import List, Optional, Sequence

from esper import World

from hub.components.notification import (
    DEFAULT_SEQUENCE,
    DismissTimer,
    Notification,
    NotificationFeed,
    NotificationTemplate,
    SchedulerPhase,
)
from hub.constants import NOTIFICATION_DELAYS, NOTIFICATION_LIFETIME, SESSION_WELCOMED_KEY
from hub.events.bus import (
    EventBus,
    EVENT_NOTIFICATION_DISMISS_REQUEST,
    EVENT_NOTIFICATION_DISMISSED,
    EVENT_NOTIFICATION_HOVER,
    EVENT_NOTIFICATION_SHOWN,
)
from hub.utils.scheduler import TaskHandle, TaskScheduler
from hub.utils.session_store import SessionFlagStore

logger = logging.getLogger(__name__)

# Shared across scheduler instances so ids stay unique after a remount.
_generation = itertools.count(1)


class NotificationScheduler:
    """Fires the welcome sequence once per session and manages toast lifetimes."""

    def __init__(
        self,
        world: World,
        event_bus: EventBus,
        scheduler: TaskScheduler,
        session_store: Optional[SessionFlagStore] = None,
        *,
        sequence: Sequence[NotificationTemplate] = DEFAULT_SEQUENCE,
        delays: Sequence[float] = NOTIFICATION_DELAYS,
        lifetime: float = NOTIFICATION_LIFETIME,
        session_key: str = SESSION_WELCOMED_KEY,
    ) -> None:
        if len(delays) < len(sequence):
            raise ValueError("every notification in the sequence needs a delay")
        self.world = world
        self.event_bus = event_bus
        self.scheduler = scheduler
        self.session_store = session_store
        self.sequence = tuple(sequence)
        self.delays = tuple(float(d) for d in delays)
        self.lifetime = float(lifetime)
        self.session_key = session_key
        self._fire_handles: List[TaskHandle] = []
        self._feed_entity = self.world.create_entity(NotificationFeed())
        self.event_bus.subscribe(EVENT_NOTIFICATION_DISMISS_REQUEST, self._on_dismiss_request)
        self.event_bus.subscribe(EVENT_NOTIFICATION_HOVER, self._on_hover)

    @property
    def feed(self) -> NotificationFeed:
        return self.world.component_for_entity(self._feed_entity, NotificationFeed)

    @property
    def phase(self) -> SchedulerPhase:
        return self.feed.phase

    # ------------------------------------------------------------------
    # Session activation
    # ------------------------------------------------------------------
    def activate(self) -> SchedulerPhase:
        feed = self.feed
        if feed.phase is not SchedulerPhase.NOT_FIRED:
            return feed.phase
        if self._already_welcomed():
            feed.phase = SchedulerPhase.DONE
            return feed.phase
        self._mark_welcomed()
        start = self.scheduler.now()
        for index, template in enumerate(self.sequence):
            handle = self.scheduler.call_at(start + self.delays[index], self._make_fire(index, template))
            self._fire_handles.append(handle)
        feed.phase = SchedulerPhase.SCHEDULED if self.sequence else SchedulerPhase.DONE
        return feed.phase

    def _already_welcomed(self) -> bool:
        if self.session_store is None:
            return False
        try:
            return bool(self.session_store.get(self.session_key))
        except Exception:
            logger.warning("Session storage unavailable; showing notifications", exc_info=True)
            return False

    def _mark_welcomed(self) -> None:
        if self.session_store is None:
            return
        try:
            self.session_store.set(self.session_key)
        except Exception:
            logger.warning("Could not persist %s", self.session_key, exc_info=True)

    def _make_fire(self, index: int, template: NotificationTemplate):
        def fire():
            self._fire(index, template)

        return fire

    def _fire(self, index: int, template: NotificationTemplate) -> None:
        feed = self.feed
        notification = Notification(
            id=f"toast-{index}-{next(_generation)}",
            kind=template.kind,
            title=template.title,
            body=template.body,
            accent_color=template.accent_color,
            emoji=template.emoji,
            call_to_action=template.call_to_action,
        )
        timer = DismissTimer(lifetime=self.lifetime, remaining=self.lifetime)
        ent = self.world.create_entity(notification, timer)
        feed.notification_entities.append(ent)
        feed.fired += 1
        feed.phase = SchedulerPhase.DONE if feed.fired >= len(self.sequence) else SchedulerPhase.FIRING
        self._start_timer(ent, timer)
        self.event_bus.emit(EVENT_NOTIFICATION_SHOWN, notification_id=notification.id, kind=notification.kind)

    # ------------------------------------------------------------------
    # Lifetime
    # ------------------------------------------------------------------
    def _start_timer(self, ent: int, timer: DismissTimer) -> None:
        notification_id = self.world.component_for_entity(ent, Notification).id
        timer.deadline = self.scheduler.now() + timer.remaining
        timer.paused = False

        def expire():
            timer.handle = None
            self.dismiss(notification_id, reason="timeout")

        timer.handle = self.scheduler.call_at(timer.deadline, expire)

    def pause(self, notification_id: str) -> None:
        ent = self._find(notification_id)
        if ent is None:
            return
        notification = self.world.component_for_entity(ent, Notification)
        timer = self.world.component_for_entity(ent, DismissTimer)
        notification.hovered = True
        if timer.paused:
            return
        timer.remaining = max(0.0, timer.deadline - self.scheduler.now())
        timer.deadline = None
        timer.paused = True
        self.scheduler.cancel(timer.handle)
        timer.handle = None

    def resume(self, notification_id: str) -> None:
        ent = self._find(notification_id)
        if ent is None:
            return
        notification = self.world.component_for_entity(ent, Notification)
        timer = self.world.component_for_entity(ent, DismissTimer)
        notification.hovered = False
        if not timer.paused:
            return
        self._start_timer(ent, timer)

    def remaining(self, notification_id: str) -> float | None:
        ent = self._find(notification_id)
        if ent is None:
            return None
        timer = self.world.component_for_entity(ent, DismissTimer)
        if timer.paused:
            return timer.remaining
        return max(0.0, timer.deadline - self.scheduler.now())

    def dismiss(self, notification_id: str, reason: str = "user") -> bool:
        ent = self._find(notification_id)
        if ent is None:
            return False
        timer = self.world.component_for_entity(ent, DismissTimer)
        self.scheduler.cancel(timer.handle)
        timer.handle = None
        feed = self.feed
        feed.notification_entities.remove(ent)
        self.world.delete_entity(ent, immediate=True)
        self.event_bus.emit(EVENT_NOTIFICATION_DISMISSED, notification_id=notification_id, reason=reason)
        return True

    def active(self) -> List[Notification]:
        """Active notifications, oldest first."""
        return [self.world.component_for_entity(ent, Notification) for ent in self.feed.notification_entities]

    def _find(self, notification_id: str) -> int | None:
        for ent in self.feed.notification_entities:
            try:
                notification = self.world.component_for_entity(ent, Notification)
            except KeyError:
                continue
            if notification.id == notification_id:
                return ent
        return None

    def _on_dismiss_request(self, sender, **payload):
        notification_id = payload.get("notification_id")
        if notification_id is None:
            return
        self.dismiss(str(notification_id))

    def _on_hover(self, sender, **payload):
        notification_id = payload.get("notification_id")
        if notification_id is None:
            return
        if payload.get("hovered"):
            self.pause(str(notification_id))
        else:
            self.resume(str(notification_id))

    def teardown(self) -> None:
        """Cancel pending fires and dismiss timers; active toasts are dropped silently."""
        for handle in self._fire_handles:
            self.scheduler.cancel(handle)
        self._fire_handles.clear()
        feed = self.feed
        for ent in list(feed.notification_entities):
            try:
                timer = self.world.component_for_entity(ent, DismissTimer)
            except KeyError:
                continue
            self.scheduler.cancel(timer.handle)
            timer.handle = None
            self.world.delete_entity(ent, immediate=True)
        feed.notification_entities.clear()
        self.event_bus.unsubscribe(EVENT_NOTIFICATION_DISMISS_REQUEST, self._on_dismiss_request)
        self.event_bus.unsubscribe(EVENT_NOTIFICATION_HOVER, self._on_hover)
