"""Tests for catalog loading and validation."""

import json

import pytest

from weekendly.catalog import Catalog, load_catalog
from weekendly.errors import CatalogError, UnknownOptionError


def _minimal(activities):
    return {
        "groups": {"fun": {"name": "Fun", "activities": activities}},
        "themes": {},
        "weekend_options": {"twoDays": {"name": "Default", "days": ["saturday", "sunday"]}},
    }


def test_default_catalog_contents(catalog: Catalog) -> None:
    assert len(catalog.get_all_activities()) == 24
    assert len(catalog.get_themes()) == 6
    assert [o.key for o in catalog.get_weekend_options()][:2] == ["twoDays", "threeDaysFriday"]

    brunch = catalog.get_activity("gourmet-brunch")
    assert brunch.category == "Indoor"
    assert brunch.group == "culinary"
    assert brunch.duration_minutes == 120


def test_weekend_option_lookup(catalog: Catalog) -> None:
    assert catalog.get_weekend_option("fourDaysMonday").days == ["friday", "saturday", "sunday", "monday"]
    with pytest.raises(UnknownOptionError):
        catalog.get_weekend_option("fiveDays")


def test_missing_required_field_fails_at_load() -> None:
    entry = {"id": "x", "name": "X", "duration_minutes": 60, "vibe": "fun", "time": "10:00", "category": "Indoor"}
    with pytest.raises(CatalogError):
        Catalog.from_dict(_minimal([entry]))


def test_bad_time_fails_at_load() -> None:
    entry = {"id": "x", "name": "X", "duration_minutes": 60, "vibe": "fun", "time": "25:99",
             "category": "Indoor", "energy_level": "low"}
    with pytest.raises(CatalogError):
        Catalog.from_dict(_minimal([entry]))


def test_duplicate_ids_fail_at_load() -> None:
    entry = {"id": "x", "name": "X", "duration_minutes": 60, "vibe": "fun", "time": "10:00",
             "category": "Outdoor", "energy_level": "low"}
    with pytest.raises(CatalogError):
        Catalog.from_dict(_minimal([entry, dict(entry)]))


def test_catalog_without_weekend_options_is_rejected() -> None:
    data = _minimal([])
    data["weekend_options"] = {}
    with pytest.raises(CatalogError):
        Catalog.from_dict(data)


def test_load_catalog_from_file(tmp_path) -> None:
    entry = {"id": "kayak", "name": "Kayaking", "duration_minutes": 90, "vibe": "adventurous",
             "time": "9:15", "category": "Outdoor", "energy_level": "high"}
    path = tmp_path / "catalog.json"
    path.write_text(json.dumps(_minimal([entry])), encoding="utf-8")

    catalog = load_catalog(str(path))

    assert catalog.get_activity("kayak").time == "09:15"


def test_unreadable_catalog_file(tmp_path) -> None:
    path = tmp_path / "broken.json"
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(CatalogError):
        load_catalog(str(path))
