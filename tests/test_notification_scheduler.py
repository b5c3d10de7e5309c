import pytest
from esper import World

from hub.components.notification import NotificationKind, SchedulerPhase
from hub.constants import NOTIFICATION_DELAYS
from hub.events.bus import (
    EventBus,
    EVENT_NOTIFICATION_DISMISS_REQUEST,
    EVENT_NOTIFICATION_DISMISSED,
    EVENT_NOTIFICATION_HOVER,
    EVENT_NOTIFICATION_SHOWN,
    EVENT_TICK,
)
from hub.systems.notification_system import NotificationScheduler
from hub.utils.scheduler import TaskScheduler
from hub.utils.session_store import MemorySessionStore
from tests.helpers import FakeClock


class _BrokenStore:
    def get(self, key):
        raise PermissionError("storage disabled")

    def set(self, key):
        raise PermissionError("storage disabled")


# Delays that land exactly on the 0.25 s test steps.
EXACT_DELAYS = (1.0, 4.5, 8.0)


def _setup(store=None, clock=None, delays=EXACT_DELAYS):
    clock = clock or FakeClock()
    world = World()
    bus = EventBus()
    scheduler = TaskScheduler(event_bus=bus, clock=clock)
    notifications = NotificationScheduler(world, bus, scheduler, store, delays=delays)
    return clock, world, bus, scheduler, notifications


def _run_for(clock, bus, seconds, step=0.25):
    for _ in range(round(seconds / step)):
        clock.advance(step)
        bus.emit(EVENT_TICK, dt=step)


def _ids(notifications):
    return [n.id for n in notifications.active()]


def test_default_sequence_fires_at_staggered_delays_in_order():
    clock, world, bus, scheduler, notifications = _setup(MemorySessionStore(), delays=NOTIFICATION_DELAYS)
    shown = []
    bus.subscribe(EVENT_NOTIFICATION_SHOWN, lambda sender, **p: shown.append(p["kind"]))

    assert notifications.activate() is SchedulerPhase.SCHEDULED
    _run_for(clock, bus, 1.0)
    assert shown == []
    _run_for(clock, bus, 0.5)
    assert shown == [NotificationKind.WELCOME]
    assert notifications.phase is SchedulerPhase.FIRING
    _run_for(clock, bus, 3.25)
    assert shown == [NotificationKind.WELCOME, NotificationKind.BANNER]
    _run_for(clock, bus, 3.5)
    assert shown == [NotificationKind.WELCOME, NotificationKind.BANNER, NotificationKind.INFO]
    assert notifications.phase is SchedulerPhase.DONE


def test_sequence_fires_once_per_session_across_remounts():
    store = MemorySessionStore()
    clock = FakeClock()
    shown = []
    for _ in range(2):
        _, world, bus, scheduler, notifications = _setup(store, clock)
        bus.subscribe(EVENT_NOTIFICATION_SHOWN, lambda sender, **p: shown.append(p["notification_id"]))
        notifications.activate()
        _run_for(clock, bus, 10.0, step=0.5)
    assert len(shown) == 3
    assert len(set(shown)) == 3


def test_second_activation_is_noop():
    clock, world, bus, scheduler, notifications = _setup(MemorySessionStore())
    notifications.activate()
    notifications.activate()
    _run_for(clock, bus, 9.0, step=0.5)
    assert notifications.feed.fired == 3


def test_already_welcomed_session_goes_straight_to_done():
    store = MemorySessionStore()
    store.set("bd2hub-welcomed")
    clock, world, bus, scheduler, notifications = _setup(store)
    assert notifications.activate() is SchedulerPhase.DONE
    assert scheduler.pending == 0


def test_unavailable_storage_degrades_to_always_show():
    clock, world, bus, scheduler, notifications = _setup(_BrokenStore())
    assert notifications.activate() is SchedulerPhase.SCHEDULED
    _run_for(clock, bus, 1.5)
    assert len(notifications.active()) == 1


def test_notifications_auto_dismiss_after_lifetime():
    clock, world, bus, scheduler, notifications = _setup()
    dismissed = []
    bus.subscribe(EVENT_NOTIFICATION_DISMISSED, lambda sender, **p: dismissed.append(p))
    notifications.activate()
    _run_for(clock, bus, 1.0)
    welcome = notifications.active()[0]
    # Shown at t=1.0, so it expires at t=6.4.
    _run_for(clock, bus, 5.25)
    assert welcome.id in _ids(notifications)
    _run_for(clock, bus, 0.25)
    assert welcome.id not in _ids(notifications)
    assert dismissed[0] == {"notification_id": welcome.id, "reason": "timeout"}


def test_hover_pauses_and_resume_restores_exact_remaining_time():
    clock, world, bus, scheduler, notifications = _setup()
    notifications.activate()
    _run_for(clock, bus, 1.0)
    note_id = notifications.active()[0].id
    _run_for(clock, bus, 2.0)

    bus.emit(EVENT_NOTIFICATION_HOVER, notification_id=note_id, hovered=True)
    assert notifications.remaining(note_id) == pytest.approx(3.4)
    _run_for(clock, bus, 30.0, step=1.0)
    assert notifications.remaining(note_id) == pytest.approx(3.4)
    assert note_id in _ids(notifications)

    bus.emit(EVENT_NOTIFICATION_HOVER, notification_id=note_id, hovered=False)
    _run_for(clock, bus, 3.25)
    assert note_id in _ids(notifications)
    _run_for(clock, bus, 0.25)
    assert note_id not in _ids(notifications)


def test_pausing_one_notification_does_not_affect_others():
    clock, world, bus, scheduler, notifications = _setup()
    notifications.activate()
    _run_for(clock, bus, 4.5)
    first, second = _ids(notifications)
    notifications.pause(first)
    # The banner was shown at t=4.5 and expires at t=9.9.
    _run_for(clock, bus, 5.5)
    ids = _ids(notifications)
    assert first in ids
    assert second not in ids


def test_explicit_dismiss_removes_immediately_and_cancels_timer():
    clock, world, bus, scheduler, notifications = _setup()
    dismissed = []
    bus.subscribe(EVENT_NOTIFICATION_DISMISSED, lambda sender, **p: dismissed.append(p["reason"]))
    notifications.activate()
    _run_for(clock, bus, 1.0)
    note_id = notifications.active()[0].id
    bus.emit(EVENT_NOTIFICATION_DISMISS_REQUEST, notification_id=note_id)
    assert notifications.active() == []
    _run_for(clock, bus, 9.0)
    # Only the banner timed out; the dismissed welcome toast never fires its timer.
    assert dismissed == ["user", "timeout"]
    assert notifications.dismiss(note_id) is False


def test_active_list_keeps_insertion_order():
    clock, world, bus, scheduler, notifications = _setup()
    notifications.activate()
    _run_for(clock, bus, 4.5)
    kinds = [n.kind for n in notifications.active()]
    assert kinds == [NotificationKind.WELCOME, NotificationKind.BANNER]
    banner = notifications.active()[1]
    assert banner.call_to_action
    assert banner.id.startswith("toast-1-")


def test_teardown_cancels_pending_fires_and_timers():
    clock, world, bus, scheduler, notifications = _setup()
    notifications.activate()
    _run_for(clock, bus, 1.0)
    notifications.teardown()
    assert scheduler.pending == 0
    _run_for(clock, bus, 20.0, step=1.0)
    assert notifications.active() == []
    assert notifications.feed.fired == 1


def test_sequence_requires_a_delay_per_message():
    world = World()
    bus = EventBus()
    with pytest.raises(ValueError):
        NotificationScheduler(world, bus, TaskScheduler(clock=FakeClock()), delays=(1.0,))
