from dataclasses import dataclass


@dataclass(slots=True)
class LaneState:
    """Loop position of one roster marquee lane.

    ``phase`` is the fraction of one loop already scrolled, in [0, 1).
    """

    index: int
    reverse: bool
    duration: float
    phase: float = 0.0
    paused: bool = False
