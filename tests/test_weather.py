"""Tests for weather code classification and the Open-Meteo source."""

from datetime import date, datetime, timedelta

import pytest
import requests

from weekendly.catalog import Catalog
from weekendly.conditions import describe_code, headline, is_adverse, is_clear
from weekendly.observability import metrics
from weekendly.planner import WeekendPlanner
from weekendly.weather import (
    Forecast,
    OpenMeteoWeatherSource,
    StaticWeatherSource,
    WeatherCache,
)

# 2026-10-16 is a Friday
FRIDAY = date(2026, 10, 16)
FRIDAY_NOON = datetime(2026, 10, 16, 12, 0)

FORECAST = {
    "daily": {
        "time": [
            "2026-10-16", "2026-10-17", "2026-10-18", "2026-10-19",
            "2026-10-20", "2026-10-21", "2026-10-22",
        ],
        "weathercode": [0, 61, 3, None, 95, 1, 2],
    }
}


class FakeResponse:
    def __init__(self, payload, status_code=200):
        self.payload = payload
        self.status_code = status_code

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} error")

    def json(self):
        return self.payload


class Clock:
    def __init__(self, start: datetime):
        self.current = start

    def __call__(self) -> datetime:
        return self.current

    def advance(self, minutes: int) -> None:
        self.current += timedelta(minutes=minutes)


@pytest.fixture
def calls(monkeypatch):
    recorded = []

    def fake_get(url, params=None, timeout=None):
        recorded.append(params)
        return FakeResponse(FORECAST)

    monkeypatch.setattr(requests, "get", fake_get)
    return recorded


@pytest.fixture
def failing_calls(monkeypatch):
    recorded = []

    def failing_get(url, params=None, timeout=None):
        recorded.append(params)
        raise requests.ConnectionError("network down")

    monkeypatch.setattr(requests, "get", failing_get)
    return recorded


@pytest.fixture
def clock() -> Clock:
    return Clock(FRIDAY_NOON)


def make_source(clock, **kwargs) -> OpenMeteoWeatherSource:
    return OpenMeteoWeatherSource(today=lambda: FRIDAY, now=clock, **kwargs)


def test_code_classification() -> None:
    assert is_clear(0) and is_clear(1)
    assert not is_clear(2)
    assert is_adverse(51) and is_adverse(95)
    assert not is_adverse(50)
    assert not is_clear(None) and not is_adverse(None)


def test_describe_code() -> None:
    assert describe_code(0) == "sunny"
    assert describe_code(61) == "rain"
    assert describe_code(73) == "snow"
    assert describe_code(96) == "storm"
    assert describe_code(None) == "unknown"


def test_headline_follows_condition() -> None:
    assert headline(63) == "Rainy weather"
    assert headline(73) == "Snow"
    assert headline(95) == "Thunderstorms"


def test_static_source() -> None:
    source = StaticWeatherSource({"saturday": 61, "sunday": None})
    source.set("monday", 0)
    assert source.get_weather_for_day("saturday") == 61
    assert source.get_weather_for_day("monday") == 0
    assert source.get_weather_for_day("tuesday") is None
    assert source.refresh() == {"saturday": 61, "monday": 0}


def test_reads_before_refresh_do_not_fetch(calls, clock) -> None:
    source = make_source(clock)

    assert source.get_weather_for_day("saturday") is None
    assert calls == []


def test_refresh_maps_dates_to_weekdays(calls, clock) -> None:
    source = make_source(clock, latitude=52.52, longitude=13.41)

    codes = source.refresh()

    assert codes["friday"] == 0
    assert source.get_weather_for_day("saturday") == 61
    assert source.get_weather_for_day("monday") is None
    assert source.get_weather_for_day("tuesday") == 95
    assert calls[0]["daily"] == "weathercode"
    assert calls[0]["latitude"] == 52.52
    assert metrics.snapshot()["weather_refreshes_total"] == 1


def test_refresh_within_interval_reuses_forecast(calls, clock) -> None:
    source = make_source(clock, refresh_minutes=30)
    source.refresh()

    clock.advance(10)
    source.refresh()
    assert len(calls) == 1

    clock.advance(30)
    source.refresh()
    assert len(calls) == 2


def test_failed_refresh_is_remembered(failing_calls, clock) -> None:
    source = make_source(clock, refresh_minutes=30)

    assert source.refresh() == {}
    assert source.refresh() == {}
    assert source.get_weather_for_day("saturday") is None

    assert len(failing_calls) == 1
    assert metrics.snapshot()["weather_fetch_errors_total"] == 1
    assert source.status()["ok"] is False
    assert not source.needs_refresh()

    clock.advance(30)
    assert source.needs_refresh()


def test_failed_refresh_keeps_previous_codes(calls, clock, monkeypatch) -> None:
    source = make_source(clock, refresh_minutes=30)
    source.refresh()

    def failing_get(url, params=None, timeout=None):
        raise requests.Timeout("timed out")

    monkeypatch.setattr(requests, "get", failing_get)
    clock.advance(45)

    assert source.refresh()["saturday"] == 61
    assert source.status()["ok"] is False
    assert source.status()["fetched_at"] == FRIDAY_NOON.isoformat()


def test_old_forecast_is_not_served(calls, clock) -> None:
    source = make_source(clock)
    source.refresh()

    clock.advance(25 * 60)

    assert source.get_weather_for_day("saturday") is None


def test_malformed_payload_counts_as_failure(monkeypatch, clock) -> None:
    monkeypatch.setattr(requests, "get", lambda url, params=None, timeout=None: FakeResponse({"oops": 1}))
    source = make_source(clock)

    assert source.refresh() == {}
    assert source.status()["ok"] is False


def test_http_error_counts_as_failure(monkeypatch, clock) -> None:
    monkeypatch.setattr(requests, "get", lambda url, params=None, timeout=None: FakeResponse({}, 503))
    source = make_source(clock)

    assert source.refresh() == {}
    assert metrics.snapshot()["weather_fetch_errors_total"] == 1


def test_cache_stores_one_row_per_location(calls, clock, tmp_path) -> None:
    cache = WeatherCache(str(tmp_path / "weather.db"))
    make_source(clock, cache=cache).refresh()

    stored = cache.load("28.6139,77.2090")

    assert stored.codes["saturday"] == 61
    assert stored.ok
    assert cache.load("0.0000,0.0000") is None


def test_new_source_reads_stored_forecast_without_fetching(calls, clock, tmp_path) -> None:
    db_path = str(tmp_path / "weather.db")
    make_source(clock, cache=WeatherCache(db_path)).refresh()

    restarted = make_source(clock, cache=WeatherCache(db_path))
    clock.advance(5)

    assert restarted.get_weather_for_day("sunday") == 3
    assert restarted.refresh()["sunday"] == 3
    assert len(calls) == 1


def test_stored_failure_blocks_refetch_after_restart(failing_calls, clock, tmp_path) -> None:
    db_path = str(tmp_path / "weather.db")
    make_source(clock, cache=WeatherCache(db_path)).refresh()

    make_source(clock, cache=WeatherCache(db_path)).refresh()

    assert len(failing_calls) == 1


def test_prune_drops_stale_locations(tmp_path) -> None:
    cache = WeatherCache(str(tmp_path / "weather.db"))
    cache.save(Forecast(location="0,0", attempted_at=datetime.now() - timedelta(days=10)))
    cache.save(Forecast(location="1,1", attempted_at=datetime.now()))

    assert cache.prune(days=7) == 1
    assert cache.load("0,0") is None
    assert cache.load("1,1") is not None


def test_planner_operations_never_fetch(failing_calls, clock, settings) -> None:
    catalog = Catalog.default()
    planner = WeekendPlanner(catalog, weather=make_source(clock), settings=settings)
    planner.change_weekend_configuration("fourDaysMonday")
    planner.place_activity("urban-cycling", day="saturday")

    planner.recommend()
    planner.evaluate_weather_swaps()
    planner.outdoor_nudges()
    assert failing_calls == []

    planner.refresh_weather()
    planner.refresh_weather()
    planner.recommend()
    assert len(failing_calls) == 1
