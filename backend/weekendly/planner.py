"""
WeekendPlanner: the operation surface the host application talks to.

Each operation runs synchronously against one in-memory store, returns typed
``Outcome`` values instead of raising, forwards them to the notification sink,
and saves a snapshot after every committed mutation.
"""

import logging
import uuid
from datetime import date, datetime
from typing import Callable, Dict, List, Optional, Union

from pydantic import ValidationError

from .advisor import SwapAdvisor, find_outdoor_nudges
from .catalog import Catalog
from .conditions import describe_code
from .config import Settings
from .errors import (
    ConflictError,
    InvalidActivityError,
    InvalidTimeError,
    NoSlotError,
    NotFoundError,
    SchedulingError,
    UnknownOptionError,
)
from .holidays import detect_region, suggest_long_weekend, upcoming_long_weekends
from .models import (
    WEEKDAYS,
    Activity,
    Category,
    EnergyLevel,
    LongWeekend,
    LongWeekendSuggestion,
    MoodEntry,
    MoodInsights,
    OutdoorNudge,
    Outcome,
    PlanSummary,
    Recommendation,
    SavedPlan,
    SwapProposal,
    SwapState,
)
from .moods import mood_insights, recommend_for_moods, time_of_day, unknown_moods
from .notifications import LoggingNotificationSink, NotificationSink
from .observability import log_event, metrics, timed
from .persistence import SnapshotStore
from . import placement
from .recommend import recommend
from .safety import sanitize_activity_description, sanitize_activity_name, sanitize_vibe
from .store import ScheduleStore
from .weather import WeatherSource

logger = logging.getLogger("weekendly.planner")

DEFAULT_BUCKET_TIME = "12:00"

ActivityRef = Union[str, Activity]


class WeekendPlanner:
    """Owns one planning session: store, swap advisor and the selected theme."""

    def __init__(
        self,
        catalog: Catalog,
        store: Optional[ScheduleStore] = None,
        weather: Optional[WeatherSource] = None,
        sink: Optional[NotificationSink] = None,
        persistence: Optional[SnapshotStore] = None,
        settings: Optional[Settings] = None,
    ):
        self.settings = settings or Settings()
        self.catalog = catalog
        self.store = store or ScheduleStore(catalog.get_weekend_option(self.settings.default_weekend_option))
        self.weather = weather
        self.sink = sink or LoggingNotificationSink()
        self.persistence = persistence
        self.selected_theme: Optional[str] = self.settings.default_theme
        self.advisor = SwapAdvisor()
        self.mood_history: List[MoodEntry] = []

    @classmethod
    def restore(
        cls,
        catalog: Catalog,
        persistence: SnapshotStore,
        settings: Optional[Settings] = None,
        weather: Optional[WeatherSource] = None,
        sink: Optional[NotificationSink] = None,
    ) -> "WeekendPlanner":
        """Build a planner from the last saved snapshot, or an empty one."""
        settings = settings or Settings()
        planner = cls(catalog, weather=weather, sink=sink, persistence=persistence, settings=settings)

        state = persistence.load_snapshot()
        if state is None:
            return planner

        try:
            configuration = catalog.get_weekend_option(state.weekend_option)
        except UnknownOptionError:
            log_event(logger, logging.WARNING, "snapshot_option_unknown", option=state.weekend_option)
            configuration = catalog.get_weekend_option(settings.default_weekend_option)

        planner.store = ScheduleStore.from_snapshot(state, configuration)
        planner.selected_theme = state.selected_theme or settings.default_theme
        log_event(
            logger,
            logging.INFO,
            "planner_restored",
            option=configuration.key,
            scheduled=len(planner.store.scheduled_activities()),
            bucketed=len(planner.store.bucket),
        )
        return planner

    # -------------------------------------------------------------------------
    # Internals
    # -------------------------------------------------------------------------

    def _run(self, operation: str, action: Callable[[], Outcome]) -> Outcome:
        try:
            with timed(f"planner_{operation}"):
                outcome = action()
        except SchedulingError as e:
            metrics.incr(f"planner_{e.error_type}_total")
            outcome = Outcome.from_error(operation, e)
        else:
            self._persist()

        metrics.incr(f"planner_{operation}_total")
        self.sink.notify(outcome)
        return outcome

    def _publish(self, outcomes: List[Outcome]) -> List[Outcome]:
        for outcome in outcomes:
            self.sink.notify(outcome)
        return outcomes

    def _persist(self) -> None:
        if self.persistence:
            self.persistence.save_snapshot(self.store.snapshot(self.selected_theme))

    def _resolve(self, ref: ActivityRef) -> Activity:
        if isinstance(ref, Activity):
            return ref
        activity = self.catalog.get_activity(ref)
        if activity is None:
            raise NotFoundError(f"Unknown activity: {ref}", activity_id=ref)
        return activity

    @staticmethod
    def _retimed(activity: Activity, time: Optional[str]) -> Activity:
        if not time:
            return activity
        try:
            return activity.with_time(time)
        except ValidationError:
            raise InvalidTimeError(f"Invalid time {time!r}; expected HH:MM.", activity_id=activity.id)

    # -------------------------------------------------------------------------
    # Schedule operations
    # -------------------------------------------------------------------------

    def place_activity(self, ref: ActivityRef, day: Optional[str] = None, time: Optional[str] = None) -> Outcome:
        """Place a catalog activity (or a given copy) on ``day``, or on the first day it fits."""
        def action() -> Outcome:
            activity = self._retimed(self._resolve(ref), time)
            placed_day = placement.place_activity(self.store, activity, day)
            return Outcome.ok("place_activity", f"{activity.name} added to {placed_day}", activity.id, placed_day)

        return self._run("place_activity", action)

    def remove_from_day(self, day: str, activity_id: str) -> Outcome:
        def action() -> Outcome:
            removed = self.store.remove_from_day(day, activity_id)
            return Outcome.ok("remove_from_day", f"{removed.name} removed from plan", activity_id, day)

        return self._run("remove_from_day", action)

    def move_activity(self, activity_id: str, to_day: str) -> Outcome:
        """Move a planned activity to another day; it is never checked against itself."""
        def action() -> Outcome:
            from_day = self.store.find_day(activity_id)
            if from_day is None:
                raise NotFoundError(f"Activity {activity_id} is not planned.", activity_id=activity_id)
            activity = self.store.get_scheduled(activity_id)
            if from_day == to_day:
                return Outcome.ok("move_activity", f"{activity.name} is already on {to_day}", activity_id, to_day)

            conflict = self.store.find_conflict(to_day, activity)
            if conflict:
                raise ConflictError(to_day, activity_id, conflict.id, conflict.name)

            self.store.remove_from_day(from_day, activity_id)
            self.store.place_on_day(to_day, activity)
            return Outcome.ok("move_activity", f"{activity.name} moved to {to_day}", activity_id, to_day)

        return self._run("move_activity", action)

    def update_activity_time(self, activity_id: str, new_time: str) -> Outcome:
        """Retime a bucket item freely, or a planned one if the new slot is free."""
        def action() -> Outcome:
            bucketed = self.store.get_bucketed(activity_id)
            if bucketed:
                self.store.replace_in_bucket(self._retimed(bucketed, new_time))
                return Outcome.ok("update_time", "Activity time updated in your bucket!", activity_id)

            day = self.store.find_day(activity_id)
            if day is None:
                raise NotFoundError("Activity not found!", activity_id=activity_id)

            updated = self._retimed(self.store.get_scheduled(activity_id), new_time)
            conflict = self.store.find_conflict(day, updated)
            if conflict:
                raise ConflictError(day, activity_id, conflict.id, conflict.name)
            self.store.replace_on_day(day, updated)
            return Outcome.ok("update_time", "Activity time updated successfully!", activity_id, day)

        return self._run("update_time", action)

    # -------------------------------------------------------------------------
    # Bucket operations
    # -------------------------------------------------------------------------

    def add_to_bucket(self, ref: ActivityRef, time: Optional[str] = None) -> Outcome:
        def action() -> Outcome:
            activity = self._retimed(self._resolve(ref), time)
            self.store.add_to_bucket(activity)
            return Outcome.ok("add_to_bucket", f'Added "{activity.name}" to your bucket!', activity.id)

        return self._run("add_to_bucket", action)

    def add_custom_activity_to_bucket(
        self,
        name: str,
        duration_minutes: int,
        category: Category = "Indoor",
        vibe: str = "personal",
        energy_level: EnergyLevel = "medium",
        time: Optional[str] = None,
        description: str = "",
    ) -> Outcome:
        """Stage a user-defined activity; text fields are stripped of markup."""
        def action() -> Outcome:
            try:
                activity = Activity(
                    id=f"activity_{uuid.uuid4().hex[:12]}",
                    name=sanitize_activity_name(name),
                    duration_minutes=duration_minutes,
                    category=category,
                    vibe=sanitize_vibe(vibe) or "personal",
                    energy_level=energy_level,
                    time=time or DEFAULT_BUCKET_TIME,
                    description=sanitize_activity_description(description),
                    source="custom",
                )
            except ValidationError as e:
                raise InvalidActivityError(f"Invalid custom activity: {e.errors()[0]['msg']}")
            self.store.add_to_bucket(activity)
            return Outcome.ok("add_to_bucket", f'Added "{activity.name}" to your bucket!', activity.id)

        return self._run("add_to_bucket", action)

    def remove_from_bucket(self, activity_id: str) -> Outcome:
        def action() -> Outcome:
            self.store.remove_from_bucket(activity_id)
            return Outcome.ok("remove_from_bucket", "Activity removed from bucket", activity_id)

        return self._run("remove_from_bucket", action)

    def schedule_from_bucket(self, activity_id: str, day: Optional[str] = None) -> Outcome:
        """Move one bucket item onto ``day`` (or the first day it fits)."""
        def action() -> Outcome:
            activity = self.store.get_bucketed(activity_id)
            if activity is None:
                raise NotFoundError(f"Activity {activity_id} is not in the bucket.", activity_id=activity_id)

            target = day
            if target is None:
                index = placement.first_free_day(self.store.days, self.store.schedule(), activity)
                if index is None:
                    raise NoSlotError(activity.id, activity.name)
                target = self.store.days[index]
            else:
                conflict = self.store.find_conflict(target, activity)
                if conflict:
                    raise ConflictError(target, activity.id, conflict.id, conflict.name)

            self.store.remove_from_bucket(activity_id)
            self.store.place_on_day(target, activity)
            return Outcome.ok("schedule_from_bucket", f"{activity.name} added to {target}", activity_id, target)

        return self._run("schedule_from_bucket", action)

    def flush_bucket_to_schedule(self) -> List[Outcome]:
        with timed("planner_flush_bucket"):
            outcomes = placement.flush_bucket_to_schedule(
                self.store, retain_unplaced=self.settings.retain_unplaced_on_flush
            )
        self._persist()
        return self._publish(outcomes)

    # -------------------------------------------------------------------------
    # Weekend & theme
    # -------------------------------------------------------------------------

    def change_weekend_configuration(self, option_key: str) -> List[Outcome]:
        try:
            configuration = self.catalog.get_weekend_option(option_key)
        except UnknownOptionError as e:
            return self._publish([Outcome.from_error("change_weekend", e)])

        outcomes = placement.change_weekend_configuration(self.store, configuration)
        self.advisor.forget_days(self.store.days)
        self._persist()
        summary = Outcome.ok("change_weekend", f"Weekend set to {configuration.name}")
        return self._publish(outcomes + [summary])

    def apply_theme(self, theme_key: str) -> Outcome:
        def action() -> Outcome:
            theme = self.catalog.get_theme(theme_key)
            placement.apply_theme(self.store, self.catalog, theme)
            self.selected_theme = theme.key
            return Outcome.ok("apply_theme", f"{theme.name} added to plan")

        return self._run("apply_theme", action)

    # -------------------------------------------------------------------------
    # Recommendations & weather
    # -------------------------------------------------------------------------

    def weather_by_day(self) -> Dict[str, Optional[int]]:
        """Stored codes per planned day. Never fetches; see ``refresh_weather``."""
        if self.weather is None:
            return {day: None for day in self.store.days}
        return {day: self.weather.get_weather_for_day(day) for day in self.store.days}

    def refresh_weather(self) -> Dict[str, int]:
        """Blocking; hosts run it off the request path."""
        if self.weather is None:
            return {}
        with timed("weather_refresh"):
            return self.weather.refresh()

    def weather_status(self) -> dict:
        status = getattr(self.weather, "status", None)
        return status() if status else {"location": None, "ok": None, "fetched_at": None, "attempted_at": None}

    def recommend(self, limit: Optional[int] = None) -> List[Recommendation]:
        return recommend(
            self.catalog,
            self.store.schedule(),
            self.weather_by_day(),
            limit=limit or self.settings.recommendation_limit,
        )

    def evaluate_weather_swaps(self) -> List[SwapProposal]:
        proposals = self.advisor.evaluate(self.store, self.catalog, self.weather_by_day())
        for proposal in proposals:
            self.sink.notify(proposal)
        return proposals

    def confirm_swap(self, day: str) -> Outcome:
        def action() -> Outcome:
            proposal = self.advisor.confirm(self.store, day)
            return Outcome.ok(
                "confirm_swap",
                "Activity swapped for better weather!",
                proposal.to_activity.id,
                day,
            )

        return self._run("confirm_swap", action)

    def dismiss_swap(self, day: str) -> Outcome:
        try:
            proposal = self.advisor.dismiss(day)
        except NotFoundError as e:
            outcome = Outcome.from_error("dismiss_swap", e)
        else:
            outcome = Outcome.ok("dismiss_swap", "Keeping the original plan", proposal.from_activity.id, day)
        self.sink.notify(outcome)
        return outcome

    def swap_state(self, day: str) -> SwapState:
        return self.advisor.state(day)

    def outdoor_nudges(self) -> List[OutdoorNudge]:
        nudges = find_outdoor_nudges(self.store, self.weather_by_day())
        for nudge in nudges:
            self.sink.notify(nudge)
        return nudges

    # -------------------------------------------------------------------------
    # Holidays & moods
    # -------------------------------------------------------------------------

    @property
    def region(self) -> str:
        return self.settings.region or detect_region(self.settings.latitude, self.settings.longitude)

    def upcoming_long_weekends(self, today: Optional[date] = None, look_ahead_days: int = 90) -> List[LongWeekend]:
        return upcoming_long_weekends(today or date.today(), self.region, look_ahead_days)

    def suggest_long_weekend(self, today: Optional[date] = None) -> Optional[LongWeekendSuggestion]:
        """Nearest holiday that extends a weekend in the next 60 days. The plan is left as is."""
        suggestion = suggest_long_weekend(
            today or date.today(),
            self.catalog,
            region=self.region,
            theme_key=self.selected_theme,
        )
        if suggestion:
            self.sink.notify(Outcome.ok(
                "suggest_long_weekend",
                f"Long weekend opportunity: {suggestion.long_weekend.holiday.name}!",
            ))
        return suggestion

    def track_mood(self, moods: List[str], weather: Optional[str] = None, now: Optional[datetime] = None) -> Outcome:
        """Record a mood check-in along with the time of day, weather and current plan."""
        def action() -> Outcome:
            unknown = unknown_moods(moods)
            if unknown:
                raise UnknownOptionError(f"Unknown mood: {', '.join(unknown)}")

            recorded_at = now or datetime.now()
            entry = MoodEntry(
                id=f"mood_{uuid.uuid4().hex[:12]}",
                moods=list(dict.fromkeys(moods)),
                time_of_day=time_of_day(recorded_at.hour),
                weather=weather or self._weather_description(recorded_at),
                planned_activities=[a.id for a in self.store.scheduled_activities()],
                recorded_at=recorded_at,
            )
            if self.persistence:
                self.persistence.save_mood_entry(entry)
            else:
                self.mood_history.append(entry)
            metrics.incr("moods_tracked_total")
            return Outcome.ok("track_mood", f"Mood tracked: {', '.join(entry.moods)}")

        return self._run("track_mood", action)

    def _weather_description(self, when: datetime) -> str:
        if self.weather is None:
            return "unknown"
        return describe_code(self.weather.get_weather_for_day(WEEKDAYS[when.weekday()]))

    def mood_suggestions(self, moods: List[str]) -> List[Activity]:
        """Catalog activities for the moods that are not already planned or bucketed."""
        taken = [a.id for a in self.store.scheduled_activities()] + [a.id for a in self.store.bucket]
        return recommend_for_moods(self.catalog, moods, exclude_ids=taken)

    def mood_insights(self, days: int = 30, now: Optional[datetime] = None) -> MoodInsights:
        now = now or datetime.now()
        if self.persistence:
            entries = self.persistence.list_mood_entries()
        else:
            entries = self.mood_history
        return mood_insights(entries, now, days)

    # -------------------------------------------------------------------------
    # Summary & saved plans
    # -------------------------------------------------------------------------

    def summary(self) -> PlanSummary:
        placed = self.store.scheduled_activities()
        if not placed:
            return PlanSummary(text="Plan your perfect weekend with Weekendly!")

        theme_name = "Amazing Weekend"
        if self.selected_theme:
            try:
                theme_name = self.catalog.get_theme(self.selected_theme).name
            except UnknownOptionError:
                pass

        return PlanSummary(
            text=f"My {theme_name.lower()} includes {len(placed)} amazing activities!",
            total_activities=len(placed),
            estimated_duration_minutes=sum(a.duration_minutes for a in placed),
            categories=list(dict.fromkeys(a.category for a in placed)),
            vibes=list(dict.fromkeys(a.vibe for a in placed)),
        )

    def save_weekend_plan(self, name: Optional[str] = None) -> SavedPlan:
        if self.persistence is None:
            raise RuntimeError("No persistence configured for saving plans")

        summary = self.summary()
        if not name and self.selected_theme:
            try:
                name = f"{self.catalog.get_theme(self.selected_theme).name} Weekend"
            except UnknownOptionError:
                name = None

        plan = SavedPlan(
            id=f"plan_{uuid.uuid4().hex[:12]}",
            name=sanitize_activity_name(name or "My Weekend"),
            theme=self.selected_theme,
            weekend_option=self.store.configuration.key,
            state=self.store.snapshot(self.selected_theme),
            metadata=summary.model_dump(exclude={"text"}),
        )
        self.persistence.save_plan(plan)
        metrics.incr("plans_saved_total")
        log_event(logger, logging.INFO, "plan_saved", plan_id=plan.id, activities=summary.total_activities)
        return plan

    def list_weekend_plans(self, limit: int = 10, offset: int = 0) -> List[dict]:
        if self.persistence is None:
            return []
        return self.persistence.list_plans(limit=limit, offset=offset)

    def plan_view(self) -> dict:
        """Read model for the host: days sorted by start time, plus the bucket."""
        return {
            "weekend_option": self.store.configuration.key,
            "weekend_name": self.store.configuration.name,
            "selected_theme": self.selected_theme,
            "days": {
                day: [a.model_dump() for a in self.store.day_sorted(day)]
                for day in self.store.days
            },
            "bucket": [a.model_dump() for a in self.store.bucket],
            "swap_states": {day: self.advisor.state(day) for day in self.store.days},
        }
