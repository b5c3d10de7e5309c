"""Components for the ephemeral notification stack."""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import List, Optional

from hub.utils.scheduler import TaskHandle


class NotificationKind(Enum):
    WELCOME = "welcome"
    BANNER = "banner"
    INFO = "info"


class SchedulerPhase(Enum):
    NOT_FIRED = auto()
    SCHEDULED = auto()
    FIRING = auto()
    DONE = auto()


@dataclass(frozen=True, slots=True)
class NotificationTemplate:
    kind: NotificationKind
    title: str
    body: str
    accent_color: str
    emoji: str = ""
    call_to_action: Optional[str] = None


@dataclass(slots=True)
class Notification:
    id: str
    kind: NotificationKind
    title: str
    body: str
    accent_color: str
    emoji: str = ""
    call_to_action: Optional[str] = None
    hovered: bool = False


@dataclass(slots=True)
class DismissTimer:
    """Auto-dismiss countdown. While paused, ``remaining`` holds the time left."""

    lifetime: float
    deadline: float | None = None
    remaining: float = 0.0
    paused: bool = False
    handle: TaskHandle | None = field(default=None, repr=False)


@dataclass(slots=True)
class NotificationFeed:
    """Singleton listing active notification entities in insertion order."""

    notification_entities: List[int] = field(default_factory=list)
    phase: SchedulerPhase = SchedulerPhase.NOT_FIRED
    fired: int = 0


DEFAULT_SEQUENCE = (
    NotificationTemplate(
        kind=NotificationKind.WELCOME,
        emoji="\u2694\ufe0f",
        title="Welcome to BD2Hub!",
        body="Your ultimate Brown Dust 2 community hub. Tier lists, guides & tools, all in one place.",
        accent_color="#a855f7",
    ),
    NotificationTemplate(
        kind=NotificationKind.BANNER,
        emoji="\U0001f525",
        title="Olivier drops tomorrow!",
        body="The fan-favourite returns. Warm up those gems: full pull value analysis is live.",
        accent_color="#f97316",
        call_to_action="View banner \u2192",
    ),
    NotificationTemplate(
        kind=NotificationKind.INFO,
        emoji="\U0001f4ca",
        title="Tier list updated",
        body="Post-patch rankings are in. Anastasia climbs to top 3 in Mirror War meta.",
        accent_color="#38bdf8",
    ),
)
