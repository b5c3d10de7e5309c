from __future__ import annotations

from typing import Protocol, Set


class SessionFlagStore(Protocol):
    """Per-browsing-session key/flag storage."""

    def get(self, key: str) -> bool: ...

    def set(self, key: str) -> None: ...


class MemorySessionStore:
    """Session store that lives as long as the process."""

    def __init__(self) -> None:
        self._flags: Set[str] = set()

    def get(self, key: str) -> bool:
        return key in self._flags

    def set(self, key: str) -> None:
        self._flags.add(key)

    def clear(self) -> None:
        self._flags.clear()
