"""Preference profile and recommendation scoring."""

from collections import Counter
from typing import Dict, List, Mapping, Optional

from .catalog import Catalog
from .conditions import is_adverse, is_clear
from .models import Activity, PreferenceProfile, Recommendation

DEFAULT_AVG_DURATION = 120

VIBE_WEIGHT = 3
CATEGORY_WEIGHT = 2
ENERGY_WEIGHT = 2
WEATHER_WEIGHT = 3


def build_profile(schedule: Mapping[str, List[Activity]]) -> PreferenceProfile:
    """Tally vibes, categories and energy levels over every placed activity."""
    placed = [a for items in schedule.values() for a in items]
    if not placed:
        return PreferenceProfile(avg_duration=DEFAULT_AVG_DURATION)

    return PreferenceProfile(
        vibes=dict(Counter(a.vibe for a in placed)),
        categories=dict(Counter(a.category for a in placed)),
        energy_levels=dict(Counter(a.energy_level for a in placed)),
        avg_duration=sum(a.duration_minutes for a in placed) / len(placed),
        activity_count=len(placed),
    )


def duration_bonus(difference: float) -> int:
    if difference <= 30:
        return 2
    if difference <= 60:
        return 1
    return 0


def score_activity(
    activity: Activity,
    profile: PreferenceProfile,
    weather_by_day: Mapping[str, Optional[int]],
) -> int:
    score = VIBE_WEIGHT * profile.vibes.get(activity.vibe, 0)
    score += CATEGORY_WEIGHT * profile.categories.get(activity.category, 0)
    score += ENERGY_WEIGHT * profile.energy_levels.get(activity.energy_level, 0)
    score += duration_bonus(abs(activity.duration_minutes - profile.avg_duration))

    for code in weather_by_day.values():
        if activity.category == "Indoor" and is_adverse(code):
            score += WEATHER_WEIGHT
        elif activity.category == "Outdoor" and is_clear(code):
            score += WEATHER_WEIGHT
    return score


def recommend(
    catalog: Catalog,
    schedule: Mapping[str, List[Activity]],
    weather_by_day: Optional[Dict[str, Optional[int]]] = None,
    limit: int = 5,
) -> List[Recommendation]:
    """
    Rank unscheduled catalog activities against the current plan.

    Read-only. Ties keep catalog order (``sorted`` is stable).
    """
    weather_by_day = weather_by_day or {}
    profile = build_profile(schedule)
    scheduled_ids = {a.id for items in schedule.values() for a in items}

    scored = [
        Recommendation(activity=activity, score=score_activity(activity, profile, weather_by_day))
        for activity in catalog.get_all_activities()
        if activity.id not in scheduled_ids
    ]
    scored.sort(key=lambda r: r.score, reverse=True)
    return scored[:limit]
