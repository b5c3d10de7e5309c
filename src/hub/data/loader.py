"""Build roster and detail collections from the site's characters document.

The document has three sections: ``allCharacters`` (the roster),
``bannerCharacters`` (the subset currently featured) and
``characterDetails`` (one detail record per character).
"""
from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterable, Mapping, Tuple

from hub.components.roster import Costume, DetailRecord, Element, Rarity, RosterEntry, Tier


@dataclass(frozen=True, slots=True)
class Dataset:
    roster: Tuple[RosterEntry, ...] = ()
    details: Mapping[int, DetailRecord] = field(default_factory=dict)
    banner_ids: frozenset[int] = frozenset()

    def is_on_banner(self, character_id: int) -> bool:
        return character_id in self.banner_ids


def _enum_value(enum_type, raw: Any, what: str):
    try:
        return enum_type(str(raw))
    except ValueError:
        raise ValueError(f"Unknown {what} {raw!r}") from None


def parse_roster_entry(raw: Mapping[str, Any]) -> RosterEntry:
    return RosterEntry(
        id=int(raw["id"]),
        name=str(raw["name"]),
        costume_name=str(raw.get("costume", "")),
        element=_enum_value(Element, raw["element"], "element"),
        role=str(raw.get("role", "")),
        tier=_enum_value(Tier, raw["tier"], "tier"),
    )


def parse_costume(raw: Mapping[str, Any]) -> Costume:
    return Costume(
        id=str(raw["id"]),
        name=str(raw["name"]),
        rarity=_enum_value(Rarity, raw.get("rarity", "Standard"), "rarity"),
        skills=tuple(str(s) for s in raw.get("skills", ())),
        description=str(raw.get("description", "")),
    )


def parse_detail_record(raw: Mapping[str, Any]) -> DetailRecord:
    costumes = tuple(parse_costume(c) for c in raw.get("costumes", ()))
    if not costumes:
        raise ValueError(f"Character {raw.get('id')!r} has no costumes")
    ratings: Dict[str, float] = {}
    for mode, score in (raw.get("modeRatings") or {}).items():
        value = float(score)
        if value < 0 or value > 10:
            raise ValueError(f"Rating for {mode!r} out of range: {value}")
        ratings[str(mode)] = value
    return DetailRecord(
        id=int(raw["id"]),
        costumes=costumes,
        lore=str(raw.get("lore", "")),
        gameplay=str(raw.get("gameplay", "")),
        mode_ratings=ratings,
    )


def build_roster(entries: Iterable[Mapping[str, Any]]) -> Tuple[RosterEntry, ...]:
    roster = tuple(parse_roster_entry(e) for e in entries)
    seen: set[int] = set()
    for entry in roster:
        if entry.id in seen:
            raise ValueError(f"Duplicate roster id {entry.id}")
        seen.add(entry.id)
    return roster


def load_dataset(document: Mapping[str, Any]) -> Dataset:
    """Parse an already-materialized characters document."""
    roster = build_roster(document.get("allCharacters") or ())
    details = {}
    for raw in document.get("characterDetails") or ():
        record = parse_detail_record(raw)
        details[record.id] = record
    banner_ids = frozenset(int(c["id"]) for c in document.get("bannerCharacters") or ())
    return Dataset(roster=roster, details=details, banner_ids=banner_ids)


def load_dataset_file(path: str | Path) -> Dataset:
    with open(path, encoding="utf-8") as fh:
        return load_dataset(json.load(fh))
