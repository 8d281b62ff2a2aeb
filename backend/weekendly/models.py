"""Data models for activities, weekend configurations, snapshots, and planner outcomes."""

import re
from datetime import date as date_type, datetime
from typing import Any, Optional, List, Dict, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .conditions import headline
from .errors import SchedulingError
from .intervals import end_minutes, to_minutes


Category = Literal["Indoor", "Outdoor"]
EnergyLevel = Literal["low", "medium", "high"]
SwapState = Literal["balanced", "proposal_pending", "swapped"]

WEEKDAYS = ["monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday"]

_TIME_RE = re.compile(r"^(\d{1,2}):(\d{2})$")


# =============================================================================
# Activity Models
# =============================================================================

class Activity(BaseModel):
    """A schedulable leisure item. Catalog entries are shared; placed copies carry their own time."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1, description="Unique activity identifier")
    name: str = Field(..., min_length=1)
    duration_minutes: int = Field(..., gt=0, description="Length of the activity in minutes")
    category: Category
    vibe: str = Field(..., min_length=1, description="Free-form mood tag, e.g. 'serene'")
    energy_level: EnergyLevel
    time: str = Field(..., description="Start time, 24h HH:MM")
    description: str = ""
    group: Optional[str] = Field(None, description="Catalog category group key, e.g. 'culinary'")
    source: Literal["catalog", "custom"] = "catalog"

    @field_validator("time")
    @classmethod
    def _validate_time(cls, value: str) -> str:
        match = _TIME_RE.match(value.strip())
        if not match:
            raise ValueError(f"time must be HH:MM, got {value!r}")
        hours, minutes = int(match.group(1)), int(match.group(2))
        if hours > 23 or minutes > 59:
            raise ValueError(f"time out of range: {value!r}")
        return f"{hours:02d}:{minutes:02d}"

    @property
    def start_minutes(self) -> int:
        return to_minutes(self.time)

    @property
    def end_minutes(self) -> int:
        return end_minutes(self)

    def with_time(self, time: str) -> "Activity":
        """Return a validated copy starting at ``time``."""
        return Activity.model_validate({**self.model_dump(), "time": time})


class Theme(BaseModel):
    """A curated, named list of catalog activity ids."""

    model_config = ConfigDict(frozen=True)

    key: str
    name: str
    activity_ids: List[str] = Field(default_factory=list)
    description: str = ""
    mood: Optional[str] = None


class WeekendConfiguration(BaseModel):
    """Ordered set of days in play, e.g. ['friday', 'saturday', 'sunday']."""

    model_config = ConfigDict(frozen=True)

    key: str
    name: str
    days: List[str] = Field(..., min_length=1)

    @field_validator("days")
    @classmethod
    def _validate_days(cls, days: List[str]) -> List[str]:
        seen: List[str] = []
        for day in days:
            normalized = day.strip().lower()
            if normalized not in WEEKDAYS:
                raise ValueError(f"unknown day {day!r}")
            if normalized not in seen:
                seen.append(normalized)
        return seen


# =============================================================================
# Snapshot Models
# =============================================================================

class ScheduleState(BaseModel):
    """Persisted snapshot of one planning session."""
    weekend_option: str
    selected_theme: Optional[str] = None
    days: Dict[str, List[Activity]] = Field(default_factory=dict)
    bucket: List[Activity] = Field(default_factory=list)
    saved_at: str = Field(default_factory=lambda: datetime.now().isoformat())


class SavedPlan(BaseModel):
    """A named copy of the plan kept for later reference."""
    id: str
    name: str
    theme: Optional[str] = None
    weekend_option: str
    state: ScheduleState
    metadata: Dict[str, Any] = Field(default_factory=dict)
    created_at: str = Field(default_factory=lambda: datetime.now().isoformat())


# =============================================================================
# Outcome Models
# =============================================================================

class Outcome(BaseModel):
    """Result of one planner operation (or one item of a bulk operation)."""
    operation: str
    success: bool = True
    error_type: Optional[str] = None
    message: str = ""
    activity_id: Optional[str] = None
    day: Optional[str] = None
    conflicting_activity_id: Optional[str] = None

    @classmethod
    def ok(cls, operation: str, message: str = "", activity_id: Optional[str] = None,
           day: Optional[str] = None) -> "Outcome":
        return cls(operation=operation, message=message, activity_id=activity_id, day=day)

    @classmethod
    def from_error(cls, operation: str, exc: SchedulingError) -> "Outcome":
        return cls(
            operation=operation,
            success=False,
            error_type=exc.error_type,
            message=exc.message,
            activity_id=exc.activity_id,
            day=exc.day,
            conflicting_activity_id=getattr(exc, "conflicting_id", None),
        )


class PreferenceProfile(BaseModel):
    """Histograms over the currently placed activities."""
    vibes: Dict[str, int] = Field(default_factory=dict)
    categories: Dict[str, int] = Field(default_factory=dict)
    energy_levels: Dict[str, int] = Field(default_factory=dict)
    avg_duration: float = 120.0
    activity_count: int = 0


class Recommendation(BaseModel):
    activity: Activity
    score: int = Field(..., ge=0)


class SwapProposal(BaseModel):
    """Suggested replacement of an outdoor activity on a day with adverse weather."""
    day: str
    from_activity: Activity
    to_activity: Activity
    weather_code: Optional[int] = None

    @property
    def message(self) -> str:
        return (
            f"{headline(self.weather_code)} detected on {self.day.capitalize()}! Consider swapping "
            f"{self.from_activity.name} for {self.to_activity.name}"
        )


class OutdoorNudge(BaseModel):
    """Clear-weather day dominated by indoor plans."""
    day: str
    indoor_count: int
    total_count: int
    message: str


class PlanSummary(BaseModel):
    text: str
    total_activities: int = 0
    estimated_duration_minutes: int = 0
    categories: List[str] = Field(default_factory=list)
    vibes: List[str] = Field(default_factory=list)


# =============================================================================
# Holiday & Mood Models
# =============================================================================

class Holiday(BaseModel):
    date: date_type
    name: str
    type: str = "national"
    vibe: str = ""
    suggested_activities: List[str] = Field(default_factory=list, description="Catalog activity ids")


class LongWeekendOpportunity(BaseModel):
    type: str
    days: List[str]
    suggestion: str
    weekend_option: str = Field(..., description="Weekend option key that covers the holiday")


class LongWeekend(BaseModel):
    """An upcoming holiday and the extended weekend it makes possible, if any."""
    holiday: Holiday
    days_until: int
    region: str
    season: str
    opportunity: Optional[LongWeekendOpportunity] = None


class LongWeekendSuggestion(BaseModel):
    long_weekend: LongWeekend
    weekend_option: str
    message: str
    activities: List[Activity] = Field(default_factory=list)
    planning_tips: List[str] = Field(default_factory=list)


class MoodEntry(BaseModel):
    """One mood check-in with the context it was recorded in."""
    id: str
    moods: List[str] = Field(..., min_length=1)
    time_of_day: str
    weather: str = "unknown"
    planned_activities: List[str] = Field(default_factory=list)
    recorded_at: datetime = Field(default_factory=datetime.now)


class MoodInsights(BaseModel):
    entries: int = 0
    dominant_moods: List[Dict[str, Any]] = Field(default_factory=list)
    time_patterns: Dict[str, str] = Field(default_factory=dict)
    message: Optional[str] = None


# =============================================================================
# Request Models
# =============================================================================

class PlaceActivityRequest(BaseModel):
    activity_id: str = Field(..., min_length=1, description="Catalog activity id")
    day: Optional[str] = Field(None, description="Target day; first free day when omitted")
    time: Optional[str] = Field(None, description="Override the catalog start time (HH:MM)")


class MoveActivityRequest(BaseModel):
    day: str


class UpdateTimeRequest(BaseModel):
    time: str


class BucketAddRequest(BaseModel):
    activity_id: str = Field(..., min_length=1)
    time: Optional[str] = None


class CustomActivityRequest(BaseModel):
    """User-defined activity added straight to the bucket."""
    name: str = Field(..., min_length=1, max_length=120)
    duration_minutes: int = Field(..., gt=0, le=24 * 60)
    category: Category = "Indoor"
    vibe: str = Field("personal", min_length=1, max_length=40)
    energy_level: EnergyLevel = "medium"
    time: Optional[str] = None
    description: str = Field("", max_length=1000)


class WeekendOptionRequest(BaseModel):
    option: str = Field(..., description="Weekend option key, e.g. 'threeDaysFriday'")


class ThemeRequest(BaseModel):
    theme: str


class SavePlanRequest(BaseModel):
    name: Optional[str] = Field(None, max_length=120)


class TrackMoodRequest(BaseModel):
    moods: List[str] = Field(..., min_length=1, max_length=5, description="Mood keys, e.g. ['relaxed']")
    weather: Optional[str] = Field(None, max_length=40)
