from dataclasses import dataclass


@dataclass(slots=True)
class DockIcon:
    """An anchored icon in the bottom dock; its scale lives in a sibling Spring."""

    label: str
    center_x: float
    order: int = 0
    half_width: float = 24.0
    label_visible: bool = False
