"""Tests for first-fit placement, bucket flushing and weekend reconfiguration."""

import pytest

from conftest import make_activity

from weekendly import placement
from weekendly.errors import NoSlotError
from weekendly.observability import metrics
from weekendly.store import ScheduleStore


def test_place_without_day_uses_first_free_day(store: ScheduleStore) -> None:
    store.place_on_day("saturday", make_activity("hike", "09:00", 120))

    day = placement.place_activity(store, make_activity("brunch", "10:00", 60))

    assert day == "sunday"
    assert [a.id for a in store.activities_on("sunday")] == ["brunch"]


def test_place_without_free_day_raises_and_changes_nothing(store: ScheduleStore) -> None:
    store.place_on_day("saturday", make_activity("sat-block", "08:00", 600))
    store.place_on_day("sunday", make_activity("sun-block", "08:00", 600))
    before = store.schedule()

    with pytest.raises(NoSlotError):
        placement.place_activity(store, make_activity("cinema", "12:00", 60))

    assert store.schedule() == before


def test_flush_orders_by_start_time_and_rotates_days(store: ScheduleStore) -> None:
    store.add_to_bucket(make_activity("b", "15:00", 60))
    store.add_to_bucket(make_activity("a", "09:00", 60))

    outcomes = placement.flush_bucket_to_schedule(store)

    assert [(o.activity_id, o.day) for o in outcomes] == [("a", "saturday"), ("b", "sunday")]
    assert all(o.success for o in outcomes)
    assert store.bucket == []
    assert metrics.snapshot()["bucket_flushes_total"] == 1


def test_flush_pointer_wraps_to_first_day(three_days) -> None:
    store = ScheduleStore(three_days)
    for index, time in enumerate(["08:00", "10:00", "12:00", "14:00"]):
        store.add_to_bucket(make_activity(f"item-{index}", time, 60))

    outcomes = placement.flush_bucket_to_schedule(store)

    assert [o.day for o in outcomes] == ["friday", "saturday", "sunday", "friday"]


def test_flush_retains_items_without_a_slot(store: ScheduleStore) -> None:
    store.place_on_day("saturday", make_activity("sat-block", "08:00", 600))
    store.place_on_day("sunday", make_activity("sun-block", "08:00", 600))
    store.add_to_bucket(make_activity("stuck", "12:00", 60))
    store.add_to_bucket(make_activity("evening", "19:00", 60))

    outcomes = placement.flush_bucket_to_schedule(store, retain_unplaced=True)

    failed = [o for o in outcomes if not o.success]
    assert [(o.activity_id, o.error_type) for o in failed] == [("stuck", "no_slot")]
    assert [a.id for a in store.bucket] == ["stuck"]
    assert store.locate("evening") == "saturday"
    assert store.invariant_violations() == []


def test_flush_can_discard_items_without_a_slot(store: ScheduleStore) -> None:
    store.place_on_day("saturday", make_activity("sat-block", "08:00", 600))
    store.place_on_day("sunday", make_activity("sun-block", "08:00", 600))
    store.add_to_bucket(make_activity("stuck", "12:00", 60))

    outcomes = placement.flush_bucket_to_schedule(store, retain_unplaced=False)

    assert outcomes[0].error_type == "no_slot"
    assert store.bucket == []
    assert store.locate("stuck") is None


def test_flush_of_empty_bucket_is_a_no_op(store: ScheduleStore) -> None:
    store.place_on_day("saturday", make_activity("hike", "09:00", 60))

    assert placement.flush_bucket_to_schedule(store) == []
    assert [a.id for a in store.activities_on("saturday")] == ["hike"]


def test_flush_keeps_bucket_order_for_equal_start_times(store: ScheduleStore) -> None:
    store.add_to_bucket(make_activity("alpha", "10:00", 60))
    store.add_to_bucket(make_activity("bravo", "10:00", 60))
    store.add_to_bucket(make_activity("early", "08:00", 60))

    outcomes = placement.flush_bucket_to_schedule(store)

    assert [(o.activity_id, o.day) for o in outcomes] == [
        ("early", "saturday"),
        ("alpha", "sunday"),
        ("bravo", "saturday"),
    ]


def test_flush_reports_and_drops_already_scheduled_items(store: ScheduleStore, two_days) -> None:
    brunch = make_activity("brunch", "09:00", 60)
    gallery = make_activity("gallery", "11:00", 60)
    store.commit(two_days, {"saturday": [brunch]}, [brunch, gallery])

    outcomes = placement.flush_bucket_to_schedule(store, retain_unplaced=True)

    assert outcomes[0].activity_id == "brunch"
    assert outcomes[0].error_type == "already_scheduled"
    assert outcomes[0].day == "saturday"
    assert (outcomes[1].activity_id, outcomes[1].day) == ("gallery", "saturday")
    assert store.bucket == []
    assert [a.id for a in store.activities_on("saturday")] == ["brunch", "gallery"]
    assert store.invariant_violations() == []


def test_flush_into_partly_filled_days_keeps_days_conflict_free(store: ScheduleStore) -> None:
    store.place_on_day("saturday", make_activity("sat-morning", "09:00", 180))
    store.place_on_day("sunday", make_activity("sun-afternoon", "13:00", 120))
    store.add_to_bucket(make_activity("matinee", "14:00", 60))
    store.add_to_bucket(make_activity("lunch", "12:00", 90))
    store.add_to_bucket(make_activity("brunch", "10:00", 60))
    store.add_to_bucket(make_activity("all-day", "08:00", 600))

    outcomes = placement.flush_bucket_to_schedule(store)

    assert [(o.activity_id, o.day) for o in outcomes if o.success] == [
        ("brunch", "sunday"),
        ("lunch", "saturday"),
        ("matinee", "saturday"),
    ]
    assert [a.id for a in store.bucket] == ["all-day"]
    assert store.invariant_violations() == []


def test_reconfiguration_moves_unplaceable_activity_to_bucket(three_days, two_days) -> None:
    store = ScheduleStore(three_days)
    store.place_on_day("friday", make_activity("party", "10:00", 60))
    store.place_on_day("saturday", make_activity("sat-block", "08:00", 600))
    store.place_on_day("sunday", make_activity("sun-block", "08:00", 600))

    outcomes = placement.change_weekend_configuration(store, two_days)

    assert store.days == ["saturday", "sunday"]
    assert [a.id for a in store.bucket] == ["party"]
    assert outcomes[0].activity_id == "party"
    assert outcomes[0].day is None
    assert store.invariant_violations() == []


def test_reconfiguration_reassigns_removed_day_activities(three_days, two_days) -> None:
    store = ScheduleStore(three_days)
    store.place_on_day("friday", make_activity("party", "20:00", 120))
    store.place_on_day("friday", make_activity("dinner", "17:00", 90))
    store.place_on_day("saturday", make_activity("late-show", "19:00", 180))

    outcomes = placement.change_weekend_configuration(store, two_days)

    assert [(o.activity_id, o.day) for o in outcomes] == [("party", "sunday"), ("dinner", "saturday")]
    assert [a.id for a in store.activities_on("saturday")] == ["late-show", "dinner"]
    assert store.bucket == []


def test_reconfiguration_keeps_shared_days(two_days, three_days) -> None:
    store = ScheduleStore(two_days)
    store.place_on_day("sunday", make_activity("brunch", "11:00", 60))

    outcomes = placement.change_weekend_configuration(store, three_days)

    assert outcomes == []
    assert store.days == ["friday", "saturday", "sunday"]
    assert [a.id for a in store.activities_on("sunday")] == ["brunch"]
    assert store.activities_on("friday") == []
