"""Typed planner failures.

The store raises these; ``WeekendPlanner`` turns them into ``Outcome`` values at
its operation boundary so nothing reaching the host is an uncaught exception.
"""

from typing import Optional


class SchedulingError(Exception):
    """Base class for recoverable scheduling failures."""

    error_type = "scheduling"

    def __init__(
        self,
        message: str,
        activity_id: Optional[str] = None,
        day: Optional[str] = None,
    ):
        super().__init__(message)
        self.message = message
        self.activity_id = activity_id
        self.day = day


class ConflictError(SchedulingError):
    """The activity's interval overlaps an activity already on the target day."""

    error_type = "conflict"

    def __init__(self, day: str, activity_id: str, conflicting_id: str, conflicting_name: str):
        super().__init__(
            f"Time conflict on {day} with {conflicting_name}.",
            activity_id=activity_id,
            day=day,
        )
        self.conflicting_id = conflicting_id
        self.conflicting_name = conflicting_name


class NoSlotError(SchedulingError):
    error_type = "no_slot"

    def __init__(self, activity_id: str, activity_name: str):
        super().__init__(f"No available slot for {activity_name}.", activity_id=activity_id)


class DuplicateError(SchedulingError):
    error_type = "duplicate"

    def __init__(self, activity_id: str, location: str):
        super().__init__(
            f"Activity {activity_id} is already in the {location}.",
            activity_id=activity_id,
            day=location if location != "bucket" else None,
        )
        self.location = location


class AlreadyScheduledError(SchedulingError):
    """Raised during a bucket flush for an item that is already on some day."""

    error_type = "already_scheduled"

    def __init__(self, activity_id: str, activity_name: str, day: str):
        super().__init__(
            f"{activity_name} is already planned for the weekend.",
            activity_id=activity_id,
            day=day,
        )


class NotFoundError(SchedulingError):
    error_type = "not_found"


class UnknownDayError(SchedulingError):
    error_type = "unknown_day"

    def __init__(self, day: str):
        super().__init__(f"{day} is not part of the active weekend.", day=day)


class UnknownOptionError(SchedulingError):
    """Unknown weekend option, theme or mood key."""

    error_type = "unknown_option"


class CatalogError(ValueError):
    """Malformed catalog data, raised at load time."""


class InvalidTimeError(SchedulingError):
    error_type = "invalid_time"


class InvalidActivityError(SchedulingError):
    """A user-defined activity failed validation."""

    error_type = "invalid_activity"
