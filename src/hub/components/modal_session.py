from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any


class ModalTab(Enum):
    LORE = "lore"
    GAMEPLAY = "gameplay"
    RATINGS = "ratings"
    COSTUME = "costume"


@dataclass(slots=True)
class ModalSession:
    """Exists only while the character detail modal is open."""

    character_id: int
    active_tab: ModalTab = ModalTab.LORE
    active_costume_index: int = 0
    # Bumped on every costume switch so the art panel can replay its transition.
    costume_switches: int = 0
    on_banner: bool = False


@dataclass(slots=True)
class ScrollLock:
    """Singleton tracking whether the modal holds the document scroll lock."""

    held: bool = False
    prior: Any = None
