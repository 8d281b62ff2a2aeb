"""
Time-interval helpers for same-day conflict detection.

Times are 24h ``HH:MM`` strings without a date; an interval is
``[start, start + duration)`` in minutes since midnight. Ends past 24:00 are
accepted as-is and never wrapped into the next day.
"""

from __future__ import annotations

from typing import Iterable, Optional, Protocol


class Timed(Protocol):
    id: str
    time: str
    duration_minutes: int


def to_minutes(hhmm: str) -> int:
    """Convert 'HH:MM' to minutes since midnight."""
    hours, minutes = hhmm.strip().split(":")
    return int(hours) * 60 + int(minutes)


def to_hhmm(total: int) -> str:
    return f"{total // 60:02d}:{total % 60:02d}"


def end_minutes(item: Timed) -> int:
    return to_minutes(item.time) + item.duration_minutes


def overlaps(a: Timed, b: Timed) -> bool:
    """True iff the two half-open intervals share at least one minute."""
    a_start = to_minutes(a.time)
    b_start = to_minutes(b.time)
    return a_start < b_start + b.duration_minutes and a_start + a.duration_minutes > b_start


def find_conflict(candidate: Timed, existing: Iterable[Timed]) -> Optional[Timed]:
    """
    Return the first entry of ``existing`` that overlaps ``candidate``.

    An entry carrying the candidate's own id is skipped, so moving or retiming
    an activity never collides with its previous placement.
    """
    for item in existing:
        if item.id == candidate.id:
            continue
        if overlaps(candidate, item):
            return item
    return None
