from blinker import Signal
from typing import Dict

class EventBus:
    """Simple event bus leveraging blinker Signal objects."""
    def __init__(self):
        self._signals: Dict[str, Signal] = {}

    def subscribe(self, name: str, fn):
        sig = self._signals.setdefault(name, Signal(name))
        # Use weak=False to retain strong reference to bound methods so systems not kept in a variable still receive events.
        sig.connect(fn, weak=False)

    def unsubscribe(self, name: str, fn):
        sig = self._signals.get(name)
        if sig:
            sig.disconnect(fn)

    def emit(self, name: str, **payload):
        sig = self._signals.get(name)
        if sig:
            sig.send(self, **payload)


# ============================================================================
# SYSTEM & TIMING
# ============================================================================
EVENT_TICK = "tick"                        # payload: dt=float (seconds)
EVENT_TEARDOWN = "teardown"                # payload: None


# ============================================================================
# INPUT & POINTER
# ============================================================================
EVENT_MOUSE_MOVE = "mouse_move"                        # payload: x, y
EVENT_MOUSE_LEAVE = "mouse_leave"                      # payload: None
EVENT_POINTER_HOVER_CHANGED = "pointer_hover_changed"  # payload: hovering=bool, label=str
EVENT_SCROLL = "scroll"                                # payload: scroll_y=float
EVENT_HEADER_SCROLLED = "header_scrolled"              # payload: scrolled=bool


# ============================================================================
# DOCK
# ============================================================================
EVENT_DOCK_LEAVE = "dock_leave"            # payload: None


# ============================================================================
# NOTIFICATIONS
# ============================================================================
EVENT_NOTIFICATION_SHOWN = "notification_shown"          # payload: notification_id=str, kind=NotificationKind
EVENT_NOTIFICATION_DISMISSED = "notification_dismissed"  # payload: notification_id=str, reason=str
EVENT_NOTIFICATION_HOVER = "notification_hover"          # payload: notification_id=str, hovered=bool
EVENT_NOTIFICATION_DISMISS_REQUEST = "notification_dismiss_request"  # payload: notification_id=str


# ============================================================================
# ROSTER
# ============================================================================
EVENT_ROSTER_VIEW_CHANGED = "roster_view_changed"  # payload: view=ViewModel
EVENT_LANE_HOVER = "lane_hover"                    # payload: lane=int, hovered=bool
EVENT_CHARACTER_SELECTED = "character_selected"    # payload: character_id=int


# ============================================================================
# DETAIL MODAL
# ============================================================================
EVENT_MODAL_OPENED = "modal_opened"                    # payload: character_id=int
EVENT_MODAL_CLOSED = "modal_closed"                    # payload: character_id=int
EVENT_MODAL_CANCEL = "modal_cancel"                    # payload: origin=str ("escape" | "backdrop" | "content")
EVENT_MODAL_TAB_CHANGED = "modal_tab_changed"          # payload: character_id=int, tab=ModalTab
EVENT_MODAL_COSTUME_CHANGED = "modal_costume_changed"  # payload: character_id=int, index=int


# ============================================================================
# STAT TICKERS
# ============================================================================
EVENT_TICKER_VISIBLE = "ticker_visible"    # payload: ticker_entity=int
EVENT_TICKER_FINISHED = "ticker_finished"  # payload: ticker_entity=int, value=int
