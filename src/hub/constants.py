# Frame timing. Integrators are sub-stepped so a single step never exceeds one frame.
FRAME_DT = 1 / 60
MAX_FRAME_DT = 1 / 60

# Pointer springs as (stiffness, damping, mass).
# The halo spring is softer and heavier than the glyph spring so it trails behind it.
CURSOR_SPRING = (420.0, 36.0, 0.55)
HALO_SPRING = (180.0, 26.0, 0.9)
# Cursor starts off-screen until the first move sample arrives.
CURSOR_START = (-200.0, -200.0)
# Visible-text fallback labels are cut to this many characters.
POINTER_LABEL_MAX = 24

# Dock magnifier.
MAGNIFY_RADIUS = 80.0
MAGNIFY_BOOST = 0.6
DOCK_SPRING = (350.0, 25.0, 1.0)
DOCK_LABELS = ("Home", "Characters", "Tier List", "Guides", "Boss", "Community")

# Notifications (seconds).
SESSION_WELCOMED_KEY = "bd2hub-welcomed"
NOTIFICATION_DELAYS = (1.2, 4.5, 8.0)
NOTIFICATION_LIFETIME = 5.4

# Roster lanes. Loop durations are in seconds; lane 1 scrolls the other way.
LANE_COUNT = 3
LANE_DURATIONS = (42.0, 36.0, 48.0)
LANE_REVERSED = (False, True, False)
FILTER_TIERS = ("SS", "S", "A", "B")

# Header switches to its solid background past this scroll offset.
HEADER_SCROLL_THRESHOLD = 48.0

# Stat counters.
TICKER_DURATION = 1.6
