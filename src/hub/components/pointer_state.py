from dataclasses import dataclass


@dataclass(slots=True)
class PointerState:
    """Latest pointer sample plus the smoothed glyph/halo positions."""

    raw_x: float = -200.0
    raw_y: float = -200.0
    fast_x: float = -200.0
    fast_y: float = -200.0
    slow_x: float = -200.0
    slow_y: float = -200.0
    hovering: bool = False
    label: str = ""
    element_id: str | None = None


@dataclass(slots=True)
class CursorGlyph:
    """Marker for the entity whose Spring2D drives the primary cursor glyph."""

    pass


@dataclass(slots=True)
class CursorHalo:
    """Marker for the entity whose Spring2D drives the trailing halo."""

    pass
