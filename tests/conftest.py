"""Shared fixtures for the planner tests."""

import pytest

from weekendly.catalog import Catalog
from weekendly.config import Settings
from weekendly.models import Activity, WeekendConfiguration
from weekendly.notifications import CollectingNotificationSink
from weekendly.observability import metrics
from weekendly.persistence import SnapshotStore
from weekendly.planner import WeekendPlanner
from weekendly.store import ScheduleStore
from weekendly.weather import StaticWeatherSource


def make_activity(
    activity_id: str,
    time: str = "09:00",
    duration: int = 60,
    category: str = "Indoor",
    vibe: str = "relaxed",
    energy_level: str = "low",
    name: str = None,
) -> Activity:
    return Activity(
        id=activity_id,
        name=name or activity_id.replace("-", " ").title(),
        duration_minutes=duration,
        category=category,
        vibe=vibe,
        energy_level=energy_level,
        time=time,
    )


@pytest.fixture(autouse=True)
def reset_metrics():
    metrics.reset()
    yield
    metrics.reset()


@pytest.fixture
def catalog() -> Catalog:
    return Catalog.default()


@pytest.fixture
def two_days() -> WeekendConfiguration:
    return WeekendConfiguration(key="twoDays", name="Default", days=["saturday", "sunday"])


@pytest.fixture
def three_days() -> WeekendConfiguration:
    return WeekendConfiguration(key="threeDaysFriday", name="3-Day (Fri-Sun)", days=["friday", "saturday", "sunday"])


@pytest.fixture
def store(two_days) -> ScheduleStore:
    return ScheduleStore(two_days)


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(db_path=str(tmp_path / "weekendly.db"))


@pytest.fixture
def weather() -> StaticWeatherSource:
    return StaticWeatherSource()


@pytest.fixture
def sink() -> CollectingNotificationSink:
    return CollectingNotificationSink()


@pytest.fixture
def snapshots(settings) -> SnapshotStore:
    return SnapshotStore(settings.db_path)


@pytest.fixture
def planner(catalog, settings, weather, sink, snapshots) -> WeekendPlanner:
    return WeekendPlanner(
        catalog,
        weather=weather,
        sink=sink,
        persistence=snapshots,
        settings=settings,
    )
