import json

import pytest

from hub.components.roster import Element, Rarity, Tier
from hub.data.loader import load_dataset, load_dataset_file


def _document():
    return {
        "allCharacters": [
            {"id": 1, "name": "Blade", "costume": "Crimson Edge", "element": "Fire", "role": "DPS", "tier": "SS"},
            {"id": 2, "name": "Olivier", "costume": "Moonlit Duelist", "element": "Dark", "role": "Sub-DPS", "tier": "S"},
        ],
        "bannerCharacters": [{"id": 2}],
        "characterDetails": [
            {
                "id": 1,
                "lore": "A wandering swordsman.",
                "gameplay": "Burst damage.",
                "modeRatings": {"PvE": 9.5, "PvP": 7},
                "costumes": [
                    {"id": "1-0", "name": "Crimson Edge", "rarity": "Limited", "skills": ["Slash"]},
                    {"id": "1-1", "name": "Summer", "rarity": "Upcoming"},
                ],
            }
        ],
    }


def test_load_dataset_builds_roster_details_and_banner():
    dataset = load_dataset(_document())
    assert [e.name for e in dataset.roster] == ["Blade", "Olivier"]
    assert dataset.roster[0].element is Element.FIRE
    assert dataset.roster[1].tier is Tier.S
    record = dataset.details[1]
    assert record.costumes[1].rarity is Rarity.UPCOMING
    assert record.costumes[0].skills == ("Slash",)
    assert record.mode_ratings == {"PvE": 9.5, "PvP": 7.0}
    assert dataset.is_on_banner(2)
    assert not dataset.is_on_banner(1)


def test_missing_sections_default_to_empty():
    dataset = load_dataset({})
    assert dataset.roster == ()
    assert dataset.details == {}
    assert dataset.banner_ids == frozenset()


def test_unknown_element_raises():
    doc = _document()
    doc["allCharacters"][0]["element"] = "Thunder"
    with pytest.raises(ValueError):
        load_dataset(doc)


def test_duplicate_roster_ids_raise():
    doc = _document()
    doc["allCharacters"][1]["id"] = 1
    with pytest.raises(ValueError):
        load_dataset(doc)


def test_rating_outside_zero_to_ten_raises():
    doc = _document()
    doc["characterDetails"][0]["modeRatings"]["PvE"] = 11
    with pytest.raises(ValueError):
        load_dataset(doc)


def test_load_dataset_file(tmp_path):
    path = tmp_path / "characters.json"
    path.write_text(json.dumps(_document()), encoding="utf-8")
    dataset = load_dataset_file(path)
    assert len(dataset.roster) == 2


def test_detail_record_without_costumes_raises():
    doc = _document()
    doc["characterDetails"][0]["costumes"] = []
    with pytest.raises(ValueError):
        load_dataset(doc)
