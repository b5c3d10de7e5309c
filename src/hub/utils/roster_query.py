"""Pure query functions over the roster."""
from __future__ import annotations

import math
from typing import List, Sequence, Tuple

from hub.components.filter_state import FilterCriteria, LaneConfig, ViewModel
from hub.components.roster import Element, RosterEntry
from hub.constants import LANE_COUNT, LANE_DURATIONS, LANE_REVERSED


def matches(entry: RosterEntry, criteria: FilterCriteria) -> bool:
    query = criteria.normalized_query
    if query:
        haystack = (
            entry.name,
            entry.costume_name,
            entry.element.value,
            entry.role,
            entry.tier.value,
        )
        if not any(query in text.lower() for text in haystack):
            return False
    if criteria.element is not None and entry.element != criteria.element:
        return False
    if criteria.tier is not None and entry.tier != criteria.tier:
        return False
    return True


def partition_lanes(roster: Sequence[RosterEntry], lane_count: int = LANE_COUNT) -> Tuple[Tuple[RosterEntry, ...], ...]:
    """Split the roster into contiguous lanes of ``ceil(n / lane_count)`` entries.

    Trailing lanes may be shorter or empty. An empty roster gives empty lanes.
    """
    entries = tuple(roster)
    chunk_size = math.ceil(len(entries) / lane_count) or 1
    lanes: List[Tuple[RosterEntry, ...]] = []
    for i in range(lane_count):
        if i == lane_count - 1:
            lanes.append(entries[i * chunk_size:])
        else:
            lanes.append(entries[i * chunk_size:(i + 1) * chunk_size])
    return tuple(lanes)


def default_lane_configs() -> Tuple[LaneConfig, ...]:
    return tuple(
        LaneConfig(index=i, reverse=LANE_REVERSED[i], duration=LANE_DURATIONS[i])
        for i in range(LANE_COUNT)
    )


def compute_view(roster: Sequence[RosterEntry], criteria: FilterCriteria) -> ViewModel:
    if not criteria.is_filtering:
        return ViewModel(
            is_filtering=False,
            lanes=partition_lanes(roster),
            lane_configs=default_lane_configs(),
        )
    return ViewModel(
        is_filtering=True,
        filtered=tuple(entry for entry in roster if matches(entry, criteria)),
    )


def available_elements(roster: Sequence[RosterEntry]) -> Tuple[Element, ...]:
    """Distinct elements in first-seen roster order, for the filter chips."""
    seen: List[Element] = []
    for entry in roster:
        if entry.element not in seen:
            seen.append(entry.element)
    return tuple(seen)
