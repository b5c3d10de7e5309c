from esper import World

from hub.components.modal_session import ModalTab
from hub.events.bus import (
    EventBus,
    EVENT_CHARACTER_SELECTED,
    EVENT_MODAL_CANCEL,
    EVENT_MODAL_CLOSED,
    EVENT_MODAL_COSTUME_CHANGED,
    EVENT_MODAL_OPENED,
)
from hub.systems.detail_view_system import DetailViewSystem
from hub.utils.scroll_lock import DocumentScrollLock
from tests.helpers import make_details


def _setup(overflow="auto", banner_ids=(2,)):
    bus = EventBus()
    host = DocumentScrollLock(overflow)
    system = DetailViewSystem(World(), bus, make_details(), host, banner_ids=banner_ids)
    return bus, host, system


def test_open_takes_scroll_lock_and_close_restores_prior_value():
    bus, host, system = _setup("auto")
    assert system.open(1)
    assert system.is_open
    assert host.overflow == "hidden"
    assert system.close()
    assert not system.is_open
    assert host.overflow == "auto"


def test_open_starts_on_lore_tab_with_first_costume():
    bus, host, system = _setup()
    system.open(2)
    session = system.session
    assert session.active_tab is ModalTab.LORE
    assert session.active_costume_index == 0
    assert session.on_banner
    assert system.active_costume().id == "2-0"
    assert system.record().lore == "Lore of 2"


def test_unknown_character_is_a_noop():
    bus, host, system = _setup()
    opened = []
    bus.subscribe(EVENT_MODAL_OPENED, lambda sender, **p: opened.append(p))
    assert system.open(99) is False
    assert not system.is_open
    assert host.overflow == "auto"
    assert opened == []


def test_reopen_switches_character_without_relocking():
    bus, host, system = _setup("scroll")
    system.open(1)
    system.select_tab("ratings")
    system.open(3)
    assert system.session.character_id == 3
    assert system.session.active_tab is ModalTab.LORE
    assert len(list(system.world.get_component(type(system.session)))) == 1
    system.close()
    assert host.overflow == "scroll"


def test_select_costume_forces_costume_tab_and_bumps_switch_counter():
    bus, host, system = _setup()
    changes = []
    bus.subscribe(EVENT_MODAL_COSTUME_CHANGED, lambda sender, **p: changes.append(p["index"]))
    system.open(1)
    assert system.select_costume(2)
    assert system.session.active_tab is ModalTab.COSTUME
    assert system.session.active_costume_index == 2
    assert system.select_costume(2)
    assert system.session.costume_switches == 2
    assert changes == [2, 2]


def test_select_costume_out_of_range_is_rejected():
    bus, host, system = _setup()
    system.open(1)
    assert system.select_costume(3) is False
    assert system.select_costume(-1) is False
    assert system.session.active_costume_index == 0
    assert system.session.active_tab is ModalTab.LORE


def test_select_operations_without_open_modal_are_noops():
    bus, host, system = _setup()
    assert system.select_tab(ModalTab.RATINGS) is False
    assert system.select_costume(0) is False
    assert system.close() is False


def test_unknown_tab_name_is_rejected():
    bus, host, system = _setup()
    system.open(1)
    assert system.select_tab("trivia") is False
    assert system.select_tab("Gameplay")
    assert system.session.active_tab is ModalTab.GAMEPLAY


def test_escape_and_backdrop_close_but_content_clicks_do_not():
    bus, host, system = _setup()
    closed = []
    bus.subscribe(EVENT_MODAL_CLOSED, lambda sender, **p: closed.append(p["character_id"]))
    system.open(1)
    bus.emit(EVENT_MODAL_CANCEL, origin="content")
    assert system.is_open
    bus.emit(EVENT_MODAL_CANCEL, origin="backdrop")
    assert not system.is_open
    system.open(2)
    bus.emit(EVENT_MODAL_CANCEL, origin="escape")
    assert closed == [1, 2]


def test_character_selected_event_opens_modal():
    bus, host, system = _setup()
    bus.emit(EVENT_CHARACTER_SELECTED, character_id=3)
    assert system.session.character_id == 3


def test_lock_without_host_never_holds():
    bus = EventBus()
    system = DetailViewSystem(World(), bus, make_details())
    system.open(1)
    assert not system.lock.held
    assert system.close()


def test_teardown_closes_and_releases_lock():
    bus, host, system = _setup("visible")
    system.open(1)
    system.teardown()
    assert host.overflow == "visible"
    bus.emit(EVENT_CHARACTER_SELECTED, character_id=1)
    assert not system.is_open


def test_record_without_costumes_does_not_open():
    bus = EventBus()
    host = DocumentScrollLock("auto")
    system = DetailViewSystem(World(), bus, make_details(ids=(1,), costumes=0), host)
    assert system.open(1) is False
    assert not system.is_open
    assert host.overflow == "auto"
