"""Immutable roster and character detail records."""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Mapping, Tuple


class Element(Enum):
    DARK = "Dark"
    LIGHT = "Light"
    FIRE = "Fire"
    WIND = "Wind"
    WATER = "Water"
    EARTH = "Earth"


class Tier(Enum):
    SS = "SS"
    S = "S"
    A = "A"
    B = "B"
    C = "C"


class Rarity(Enum):
    LIMITED = "Limited"
    STANDARD = "Standard"
    UPCOMING = "Upcoming"


@dataclass(frozen=True, slots=True)
class RosterEntry:
    """A playable character as it appears in the roster lanes and search grid."""

    id: int
    name: str
    costume_name: str
    element: Element
    role: str
    tier: Tier


@dataclass(frozen=True, slots=True)
class Costume:
    id: str
    name: str
    rarity: Rarity
    skills: Tuple[str, ...] = ()
    description: str = ""


@dataclass(frozen=True, slots=True)
class DetailRecord:
    """Everything the detail modal shows for one character.

    ``mode_ratings`` maps a content mode (e.g. "PvE", "Mirror War") to a
    0-10 score.
    """

    id: int
    costumes: Tuple[Costume, ...]
    lore: str = ""
    gameplay: str = ""
    mode_ratings: Mapping[str, float] = field(default_factory=dict)
