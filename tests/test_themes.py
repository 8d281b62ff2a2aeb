"""Tests for theme application."""

import pytest

from conftest import make_activity

from weekendly import placement
from weekendly.catalog import Catalog
from weekendly.errors import UnknownOptionError
from weekendly.store import ScheduleStore


def _ids(store: ScheduleStore) -> dict:
    return {day: [a.id for a in items] for day, items in store.schedule().items()}


def test_theme_is_dealt_round_robin(store: ScheduleStore, catalog: Catalog) -> None:
    placement.apply_theme(store, catalog, catalog.get_theme("wellnessWarrior"))

    assert _ids(store) == {
        "saturday": ["sunrise-yoga", "digital-detox"],
        "sunday": ["mountain-expedition", "gourmet-brunch"],
    }


def test_theme_replaces_existing_schedule(store: ScheduleStore, catalog: Catalog) -> None:
    store.place_on_day("saturday", make_activity("my-own-thing", "13:00", 60))

    placement.apply_theme(store, catalog, catalog.get_theme("urbanExplorer"))

    assert store.locate("my-own-thing") is None
    assert len(store.scheduled_activities()) == 4


def test_applying_a_theme_twice_is_idempotent(store: ScheduleStore, catalog: Catalog) -> None:
    theme = catalog.get_theme("creativeSoul")

    placement.apply_theme(store, catalog, theme)
    first = _ids(store)
    placement.apply_theme(store, catalog, theme)

    assert _ids(store) == first


def test_missing_theme_ids_are_skipped(store: ScheduleStore, catalog: Catalog) -> None:
    applied = placement.apply_theme(store, catalog, catalog.get_theme("luxurySeeker"))

    assert [a.id for a in applied] == ["wine-discovery", "holistic-spa", "astronomy-night"]
    assert _ids(store) == {
        "saturday": ["wine-discovery", "astronomy-night"],
        "sunday": ["holistic-spa"],
    }


def test_themed_ids_leave_the_bucket(store: ScheduleStore, catalog: Catalog) -> None:
    store.add_to_bucket(catalog.get_activity("holistic-spa"))
    store.add_to_bucket(make_activity("keep-me", "18:00", 60))

    placement.apply_theme(store, catalog, catalog.get_theme("mindfulEscape"))

    assert [a.id for a in store.bucket] == ["keep-me"]
    assert store.invariant_violations() == []


def test_unknown_theme_raises(catalog: Catalog) -> None:
    with pytest.raises(UnknownOptionError):
        catalog.get_theme("partyAnimal")
