from __future__ import annotations

from typing import Any, Protocol


class ScrollLockHost(Protocol):
    """Document-level scrolling switch owned by the page."""

    def acquire(self) -> Any:
        """Disable background scrolling and return the value it replaced."""
        ...

    def release(self, prior: Any) -> None:
        """Restore the value returned by the matching ``acquire``."""
        ...


class DocumentScrollLock:
    """In-process stand-in for the page body's ``overflow`` style."""

    LOCKED = "hidden"

    def __init__(self, overflow: str = "") -> None:
        self.overflow = overflow

    def acquire(self) -> str:
        prior = self.overflow
        self.overflow = self.LOCKED
        return prior

    def release(self, prior: str) -> None:
        self.overflow = prior
