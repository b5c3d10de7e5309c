from __future__ import annotations

from typing import Dict, Sequence

from hub.components.roster import Costume, DetailRecord, Element, Rarity, RosterEntry, Tier


class FakeClock:
    def __init__(self) -> None:
        self.value = 0.0

    def advance(self, amount: float) -> None:
        self.value += amount

    def __call__(self) -> float:
        return self.value


_SAMPLE = (
    (1, "Blade", "Crimson Edge", Element.FIRE, "DPS", Tier.SS),
    (2, "Olivier", "Moonlit Duelist", Element.DARK, "Sub-DPS", Tier.S),
    (3, "Anastasia", "Frost Bloom", Element.WATER, "Mage", Tier.SS),
    (4, "Lathel", "Holy Knight", Element.LIGHT, "Tank", Tier.A),
    (5, "Rou", "Wind Runner", Element.WIND, "Support", Tier.B),
    (6, "Morpeah", "Stone Witch", Element.EARTH, "Healer", Tier.A),
    (7, "Justia", "Verdict", Element.LIGHT, "Buffer", Tier.S),
)


def make_roster(count: int | None = None) -> tuple[RosterEntry, ...]:
    """Return the first ``count`` sample entries, padding with generated ones."""
    entries = [RosterEntry(*row) for row in _SAMPLE]
    total = len(entries) if count is None else count
    next_id = len(entries) + 1
    while len(entries) < total:
        entries.append(
            RosterEntry(next_id, f"Hero {next_id}", f"Outfit {next_id}", Element.DARK, "DPS", Tier.C)
        )
        next_id += 1
    return tuple(entries[:total])


def make_details(ids: Sequence[int] = (1, 2, 3), costumes: int = 3) -> Dict[int, DetailRecord]:
    details = {}
    for cid in ids:
        details[cid] = DetailRecord(
            id=cid,
            costumes=tuple(
                Costume(
                    id=f"{cid}-{i}",
                    name=f"Costume {i}",
                    rarity=Rarity.LIMITED if i == 0 else Rarity.STANDARD,
                    skills=(f"Skill {i}",),
                )
                for i in range(costumes)
            ),
            lore=f"Lore of {cid}",
            gameplay=f"Gameplay of {cid}",
            mode_ratings={"PvE": 9.0, "Mirror War": 7.5},
        )
    return details
