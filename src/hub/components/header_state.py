from dataclasses import dataclass


@dataclass(slots=True)
class HeaderState:
    scroll_y: float = 0.0
    scrolled: bool = False
