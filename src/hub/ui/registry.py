"""Spatial index of interactive screen regions used for pointer hit-testing.

The presentation layer registers one region per element it draws (buttons,
roster pills, dock icons, modal tabs) and refreshes the bounds whenever the
layout changes. Regions registered later, or with a higher ``z``, sit on
top of earlier ones.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterator, Optional, Tuple

Bounds = Tuple[float, float, float, float]  # (left, bottom, width, height)


@dataclass(slots=True)
class InteractiveRegion:
    element_id: str
    bounds: Bounds
    aria_label: str = ""
    title: str = ""
    text: str = ""
    # Whether the pointer shows the "clickable" state over this region.
    interactive: bool = True
    # False for decorative children (icons, spans) nested inside a control.
    is_control: bool = True
    # Nearest enclosing button/link, if this region is a child of one.
    parent_id: Optional[str] = None
    z: int = 0
    order: int = field(default=0, repr=False)

    def contains(self, x: float, y: float) -> bool:
        left, bottom, width, height = self.bounds
        return left <= x <= left + width and bottom <= y <= bottom + height


class InteractiveRegistry:
    def __init__(self) -> None:
        self._regions: Dict[str, InteractiveRegion] = {}
        self._order = 0

    def register(self, region: InteractiveRegion) -> InteractiveRegion:
        self._order += 1
        region.order = self._order
        self._regions[region.element_id] = region
        return region

    def unregister(self, element_id: str) -> None:
        self._regions.pop(element_id, None)

    def update_bounds(self, element_id: str, bounds: Bounds) -> None:
        region = self._regions.get(element_id)
        if region is not None:
            region.bounds = bounds

    def get(self, element_id: str) -> InteractiveRegion | None:
        return self._regions.get(element_id)

    def regions(self) -> list[InteractiveRegion]:
        return list(self._regions.values())

    def clear(self) -> None:
        self._regions.clear()

    def __len__(self) -> int:
        return len(self._regions)

    def element_at(self, x: float, y: float) -> InteractiveRegion | None:
        """Return the topmost region containing the point, or None."""
        best: InteractiveRegion | None = None
        for region in self._regions.values():
            if not region.contains(x, y):
                continue
            if best is None or (region.z, region.order) > (best.z, best.order):
                best = region
        return best

    def closest_control(self, region: InteractiveRegion) -> InteractiveRegion | None:
        """Nearest button-like region, starting with the region itself."""
        if region.is_control:
            return region
        for parent in self.ancestors(region):
            if parent.is_control:
                return parent
        return None

    def ancestors(self, region: InteractiveRegion) -> Iterator[InteractiveRegion]:
        seen = {region.element_id}
        parent_id = region.parent_id
        while parent_id is not None and parent_id not in seen:
            parent = self._regions.get(parent_id)
            if parent is None:
                return
            seen.add(parent_id)
            yield parent
            parent_id = parent.parent_id
