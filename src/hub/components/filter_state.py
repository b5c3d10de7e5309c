from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Tuple

from hub.components.roster import Element, RosterEntry, Tier


@dataclass(slots=True)
class FilterCriteria:
    """Search box text plus the element and tier chips."""

    query: str = ""
    element: Optional[Element] = None
    tier: Optional[Tier] = None

    @property
    def normalized_query(self) -> str:
        # Matched as typed; only the filtering switch ignores surrounding spaces.
        return self.query.lower()

    @property
    def is_filtering(self) -> bool:
        return bool(self.query.strip()) or self.element is not None or self.tier is not None


@dataclass(frozen=True, slots=True)
class LaneConfig:
    """How one roster lane loops: direction and seconds per full loop."""

    index: int
    reverse: bool
    duration: float


@dataclass(frozen=True, slots=True)
class ViewModel:
    """Render-ready roster output.

    When ``is_filtering`` is False the full roster is split across ``lanes``
    and ``filtered`` is empty. When it is True, ``filtered`` holds the matches
    in roster order and ``lanes`` is empty.
    """

    is_filtering: bool
    filtered: Tuple[RosterEntry, ...] = ()
    lanes: Tuple[Tuple[RosterEntry, ...], ...] = ()
    lane_configs: Tuple[LaneConfig, ...] = field(default=())

    @property
    def no_matches(self) -> bool:
        return self.is_filtering and not self.filtered

    @property
    def entries(self) -> Tuple[RosterEntry, ...]:
        if self.is_filtering:
            return self.filtered
        return tuple(entry for lane in self.lanes for entry in lane)
