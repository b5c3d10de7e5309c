from dataclasses import dataclass


@dataclass(slots=True)
class StatTicker:
    """A headline statistic that counts up from zero the first time it is seen."""

    value: int
    suffix: str = ""
    display: int = 0
    elapsed: float = 0.0
    started: bool = False
    finished: bool = False

    @property
    def text(self) -> str:
        return f"{self.display:,}{self.suffix}"
