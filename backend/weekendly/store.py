"""
Schedule store: per-day activity lists plus the unscheduled bucket.

Invariants held after every public call:
- no two activities on the same day overlap (bulk theme application is the
  one documented exception, see ``placement.apply_theme``).
- an activity id appears at most once across all days and the bucket.
"""

from typing import Dict, List, Optional

from .errors import ConflictError, DuplicateError, NotFoundError, UnknownDayError
from .intervals import find_conflict, overlaps
from .models import Activity, ScheduleState, WeekendConfiguration

BUCKET = "bucket"


class ScheduleStore:
    """Owns the schedule, the bucket and the active weekend configuration."""

    def __init__(
        self,
        configuration: WeekendConfiguration,
        days: Optional[Dict[str, List[Activity]]] = None,
        bucket: Optional[List[Activity]] = None,
    ):
        self.configuration = configuration
        self._days: Dict[str, List[Activity]] = {
            day: list((days or {}).get(day, [])) for day in configuration.days
        }
        self._bucket: List[Activity] = list(bucket or [])

    # -------------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------------

    @property
    def days(self) -> List[str]:
        return list(self.configuration.days)

    @property
    def bucket(self) -> List[Activity]:
        return list(self._bucket)

    def schedule(self) -> Dict[str, List[Activity]]:
        """Copy of the day -> activities mapping, insertion ordered."""
        return {day: list(items) for day, items in self._days.items()}

    def activities_on(self, day: str) -> List[Activity]:
        return list(self._require_day(day))

    def day_sorted(self, day: str) -> List[Activity]:
        """Activities of a day ordered by start time, for display."""
        return sorted(self._require_day(day), key=lambda a: a.start_minutes)

    def scheduled_activities(self) -> List[Activity]:
        return [a for items in self._days.values() for a in items]

    def find_day(self, activity_id: str) -> Optional[str]:
        for day, items in self._days.items():
            if any(a.id == activity_id for a in items):
                return day
        return None

    def get_scheduled(self, activity_id: str) -> Optional[Activity]:
        for items in self._days.values():
            for activity in items:
                if activity.id == activity_id:
                    return activity
        return None

    def get_bucketed(self, activity_id: str) -> Optional[Activity]:
        for activity in self._bucket:
            if activity.id == activity_id:
                return activity
        return None

    def locate(self, activity_id: str) -> Optional[str]:
        """Day holding the id, ``"bucket"``, or None."""
        day = self.find_day(activity_id)
        if day:
            return day
        if self.get_bucketed(activity_id):
            return BUCKET
        return None

    def find_conflict(self, day: str, activity: Activity) -> Optional[Activity]:
        return find_conflict(activity, self._require_day(day))

    def is_empty(self) -> bool:
        return not self._bucket and not any(self._days.values())

    # -------------------------------------------------------------------------
    # Mutations
    # -------------------------------------------------------------------------

    def place_on_day(self, day: str, activity: Activity) -> None:
        items = self._require_day(day)
        location = self.locate(activity.id)
        if location:
            raise DuplicateError(activity.id, location)

        conflict = find_conflict(activity, items)
        if conflict:
            raise ConflictError(day, activity.id, conflict.id, conflict.name)

        items.append(activity)

    def remove_from_day(self, day: str, activity_id: str) -> Activity:
        items = self._require_day(day)
        for index, activity in enumerate(items):
            if activity.id == activity_id:
                return items.pop(index)
        raise NotFoundError(f"Activity {activity_id} is not planned on {day}.", activity_id=activity_id, day=day)

    def add_to_bucket(self, activity: Activity) -> None:
        location = self.locate(activity.id)
        if location:
            raise DuplicateError(activity.id, location)
        self._bucket.append(activity)

    def remove_from_bucket(self, activity_id: str) -> Activity:
        for index, activity in enumerate(self._bucket):
            if activity.id == activity_id:
                return self._bucket.pop(index)
        raise NotFoundError(f"Activity {activity_id} is not in the bucket.", activity_id=activity_id)

    def replace_on_day(self, day: str, activity: Activity) -> None:
        """Swap the entry with the same id on ``day``, keeping its position. No conflict check."""
        items = self._require_day(day)
        for index, existing in enumerate(items):
            if existing.id == activity.id:
                items[index] = activity
                return
        raise NotFoundError(f"Activity {activity.id} is not planned on {day}.", activity_id=activity.id, day=day)

    def replace_in_bucket(self, activity: Activity) -> None:
        """Swap the bucket entry with the same id for ``activity`` (e.g. after a time change)."""
        for index, existing in enumerate(self._bucket):
            if existing.id == activity.id:
                self._bucket[index] = activity
                return
        raise NotFoundError(f"Activity {activity.id} is not in the bucket.", activity_id=activity.id)

    def commit(
        self,
        configuration: WeekendConfiguration,
        days: Dict[str, List[Activity]],
        bucket: List[Activity],
    ) -> None:
        """Replace the whole state at once; used by bulk algorithms that work on copies."""
        self.configuration = configuration
        self._days = {day: list(days.get(day, [])) for day in configuration.days}
        self._bucket = list(bucket)

    # -------------------------------------------------------------------------
    # Invariants & snapshots
    # -------------------------------------------------------------------------

    def invariant_violations(self) -> List[str]:
        problems: List[str] = []
        for day, items in self._days.items():
            for i, a in enumerate(items):
                for b in items[i + 1:]:
                    if overlaps(a, b):
                        problems.append(f"{day}: {a.id} overlaps {b.id}")

        seen: Dict[str, str] = {}
        locations = [(day, a) for day, items in self._days.items() for a in items]
        locations += [(BUCKET, a) for a in self._bucket]
        for location, activity in locations:
            if activity.id in seen:
                problems.append(f"{activity.id} appears in {seen[activity.id]} and {location}")
            else:
                seen[activity.id] = location
        return problems

    def snapshot(self, selected_theme: Optional[str] = None) -> ScheduleState:
        return ScheduleState(
            weekend_option=self.configuration.key,
            selected_theme=selected_theme,
            days=self.schedule(),
            bucket=self.bucket,
        )

    @classmethod
    def from_snapshot(cls, state: ScheduleState, configuration: WeekendConfiguration) -> "ScheduleStore":
        """
        Rebuild a store from a snapshot.

        Activities saved under days outside ``configuration`` are moved to the
        bucket; repeated ids are dropped so every id stays unique after a restore.
        Day lists are otherwise restored as saved.
        """
        days: Dict[str, List[Activity]] = {day: [] for day in configuration.days}
        bucket: List[Activity] = []
        seen = set()

        for day, items in state.days.items():
            for activity in items:
                if activity.id in seen:
                    continue
                seen.add(activity.id)
                target = days.get(day)
                if target is None:
                    bucket.append(activity)
                else:
                    target.append(activity)

        for activity in state.bucket:
            if activity.id not in seen:
                seen.add(activity.id)
                bucket.append(activity)

        return cls(configuration, days, bucket)

    def _require_day(self, day: str) -> List[Activity]:
        items = self._days.get(day)
        if items is None:
            raise UnknownDayError(day)
        return items
