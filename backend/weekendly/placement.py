"""
Placement algorithms over a ``ScheduleStore``.

Every bulk operation works on copies of the store's state and commits once at
the end, so a failure never leaves a half-applied schedule behind. Placement is
greedy: the first day that fits wins.
"""

import logging
from typing import Dict, List, Optional

from .catalog import Catalog
from .errors import AlreadyScheduledError, NoSlotError
from .intervals import find_conflict
from .models import Activity, Outcome, Theme, WeekendConfiguration
from .observability import log_event, metrics
from .store import ScheduleStore

logger = logging.getLogger("weekendly.placement")


def first_free_day(
    days: List[str],
    schedule: Dict[str, List[Activity]],
    activity: Activity,
    start: int = 0,
) -> Optional[int]:
    """Index of the first day (scanning from ``start``, wrapping once) where ``activity`` fits."""
    count = len(days)
    for offset in range(count):
        index = (start + offset) % count
        if not find_conflict(activity, schedule[days[index]]):
            return index
    return None


def place_activity(store: ScheduleStore, activity: Activity, day: Optional[str] = None) -> str:
    """
    Place a single activity and return the day it landed on.

    With ``day`` the store's own checks apply (duplicate, conflict). Without it
    the active weekend's days are tried in order; ``NoSlotError`` is raised and
    nothing changes when none fits.
    """
    if day is None:
        index = first_free_day(store.days, store.schedule(), activity)
        if index is None:
            raise NoSlotError(activity.id, activity.name)
        day = store.days[index]

    store.place_on_day(day, activity)
    return day


def flush_bucket_to_schedule(store: ScheduleStore, retain_unplaced: bool = True) -> List[Outcome]:
    """
    Move every bucket item onto the schedule.

    Items are processed by start time (stable, so ties keep bucket order). A
    rotating pointer spreads them across days: each item is tried from the
    pointer onwards, wrapping once, and the pointer then moves to the day after
    the one used. Items already on the schedule are reported and dropped.
    Items with no free day stay in the bucket when ``retain_unplaced`` is set,
    otherwise they are discarded with the rest of the bucket.
    """
    days = store.days
    schedule = store.schedule()
    original = store.bucket
    ordered = sorted(original, key=lambda a: a.start_minutes)

    outcomes: List[Outcome] = []
    unplaced_ids = set()
    pointer = 0

    for activity in ordered:
        existing_day = next(
            (day for day, items in schedule.items() if any(a.id == activity.id for a in items)),
            None,
        )
        if existing_day:
            err = AlreadyScheduledError(activity.id, activity.name, existing_day)
            outcomes.append(Outcome.from_error("flush_bucket", err))
            continue

        index = first_free_day(days, schedule, activity, start=pointer)
        if index is None:
            unplaced_ids.add(activity.id)
            outcomes.append(Outcome.from_error("flush_bucket", NoSlotError(activity.id, activity.name)))
            continue

        day = days[index]
        schedule[day].append(activity)
        pointer = (index + 1) % len(days)
        outcomes.append(Outcome.ok("flush_bucket", f"{activity.name} added to {day}", activity.id, day))

    remaining = [a for a in original if a.id in unplaced_ids] if retain_unplaced else []
    store.commit(store.configuration, schedule, remaining)

    placed = sum(1 for o in outcomes if o.success)
    metrics.incr("bucket_flushes_total")
    log_event(
        logger,
        logging.INFO,
        "bucket_flushed",
        processed=len(ordered),
        placed=placed,
        failed=len(ordered) - placed,
        retained=len(remaining),
    )
    return outcomes


def change_weekend_configuration(
    store: ScheduleStore,
    new_configuration: WeekendConfiguration,
) -> List[Outcome]:
    """
    Switch the active weekend, redistributing activities from dropped days.

    Days present in both configurations keep their lists. Activities from
    dropped days are taken day by day in insertion order and placed on the first
    new day where they fit; the rest go to the bucket. Nothing is discarded.
    """
    old_days = store.days
    new_days = list(new_configuration.days)
    current = store.schedule()

    schedule: Dict[str, List[Activity]] = {day: list(current.get(day, [])) for day in new_days}
    removed_days = [day for day in old_days if day not in new_days]
    extracted = [activity for day in removed_days for activity in current[day]]

    bucket = store.bucket
    outcomes: List[Outcome] = []
    for activity in extracted:
        index = first_free_day(new_days, schedule, activity)
        if index is None:
            bucket.append(activity)
            outcomes.append(Outcome.ok(
                "change_weekend",
                f"No free day for {activity.name}; moved to the bucket",
                activity.id,
            ))
            continue
        day = new_days[index]
        schedule[day].append(activity)
        outcomes.append(Outcome.ok("change_weekend", f"{activity.name} moved to {day}", activity.id, day))

    store.commit(new_configuration, schedule, bucket)

    log_event(
        logger,
        logging.INFO,
        "weekend_changed",
        option=new_configuration.key,
        removed_days=removed_days,
        reassigned=sum(1 for o in outcomes if o.day),
        bucketed=sum(1 for o in outcomes if not o.day),
    )
    return outcomes


def apply_theme(store: ScheduleStore, catalog: Catalog, theme: Theme) -> List[Activity]:
    """
    Overwrite the schedule with a theme's activities, dealt round-robin over the days.

    This is a full replacement with no conflict checks. The result depends only
    on the catalog, the theme and the active days, so applying it twice gives
    the same schedule. Themed ids are dropped from the bucket to keep ids unique.
    """
    days = store.days
    activities = catalog.resolve_theme(theme)

    schedule: Dict[str, List[Activity]] = {day: [] for day in days}
    for index, activity in enumerate(activities):
        schedule[days[index % len(days)]].append(activity)

    themed_ids = {a.id for a in activities}
    bucket = [a for a in store.bucket if a.id not in themed_ids]
    store.commit(store.configuration, schedule, bucket)

    metrics.incr("themes_applied_total")
    log_event(
        logger,
        logging.INFO,
        "theme_applied",
        theme=theme.key,
        resolved=len(activities),
        skipped=len(theme.activity_ids) - len(activities),
    )
    return activities
