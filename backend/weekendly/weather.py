"""
Weather sources for the planner.

Planner operations only ever read the last stored forecast; the network is
touched by ``refresh()``, which the host runs at startup and then on a timer
outside the request path. A failed fetch is remembered for the refresh
interval so a dead API is not retried on every read.
"""

import logging
import sqlite3
from datetime import date, datetime, timedelta
from typing import Callable, Dict, Mapping, Optional, Protocol

import requests
from pydantic import BaseModel, Field

from .config import DEFAULT_LATITUDE, DEFAULT_LONGITUDE
from .models import WEEKDAYS
from .observability import log_event, metrics

logger = logging.getLogger("weekendly.weather")

OPEN_METEO_URL = "https://api.open-meteo.com/v1/forecast"

# Minutes between network refreshes, successful or not
REFRESH_INTERVAL_MINUTES = 30

# Weekday-keyed codes drift once the calendar moves on
MAX_FORECAST_AGE = timedelta(hours=24)


class WeatherSource(Protocol):
    def get_weather_for_day(self, day: str) -> Optional[int]:
        ...

    def refresh(self) -> Dict[str, int]:
        ...


class StaticWeatherSource:
    """Fixed day -> code mapping, for hosts that push weather in themselves."""

    def __init__(self, codes: Optional[Mapping[str, Optional[int]]] = None):
        self.codes: Dict[str, Optional[int]] = dict(codes or {})

    def set(self, day: str, code: Optional[int]) -> None:
        self.codes[day] = code

    def get_weather_for_day(self, day: str) -> Optional[int]:
        return self.codes.get(day)

    def refresh(self) -> Dict[str, int]:
        return {day: code for day, code in self.codes.items() if code is not None}


class Forecast(BaseModel):
    """Latest forecast for one location, plus the outcome of the last fetch attempt."""
    location: str
    codes: Dict[str, int] = Field(default_factory=dict)
    fetched_at: Optional[datetime] = Field(None, description="Last successful fetch")
    attempted_at: datetime
    ok: bool = True


class WeatherCache:
    """One row per location holding the whole seven-day forecast."""

    def __init__(self, db_path: str = "./weekendly.db"):
        self.db_path = db_path
        self._init_db()

    def _init_db(self):
        with sqlite3.connect(self.db_path) as conn:
            conn.execute("""
                CREATE TABLE IF NOT EXISTS weather_forecasts (
                    location TEXT PRIMARY KEY,
                    data TEXT NOT NULL,
                    attempted_at TEXT NOT NULL
                )
            """)
            conn.commit()

    def load(self, location: str) -> Optional[Forecast]:
        with sqlite3.connect(self.db_path) as conn:
            row = conn.execute(
                "SELECT data FROM weather_forecasts WHERE location = ?",
                (location,)
            ).fetchone()
        if not row:
            return None
        return Forecast.model_validate_json(row[0])

    def save(self, forecast: Forecast) -> None:
        with sqlite3.connect(self.db_path) as conn:
            conn.execute(
                """INSERT OR REPLACE INTO weather_forecasts (location, data, attempted_at)
                   VALUES (?, ?, ?)""",
                (forecast.location, forecast.model_dump_json(), forecast.attempted_at.isoformat())
            )
            conn.commit()

    def prune(self, days: int = 7) -> int:
        """Drop locations nobody has refreshed for ``days``."""
        cutoff = (datetime.now() - timedelta(days=days)).isoformat()
        with sqlite3.connect(self.db_path) as conn:
            cursor = conn.execute("DELETE FROM weather_forecasts WHERE attempted_at < ?", (cutoff,))
            conn.commit()
            return cursor.rowcount


class OpenMeteoWeatherSource:
    """Daily weather codes for the coming week from the Open-Meteo forecast API."""

    def __init__(
        self,
        latitude: float = DEFAULT_LATITUDE,
        longitude: float = DEFAULT_LONGITUDE,
        cache: Optional[WeatherCache] = None,
        timeout: float = 10.0,
        base_url: str = OPEN_METEO_URL,
        refresh_minutes: int = REFRESH_INTERVAL_MINUTES,
        today: Callable[[], date] = date.today,
        now: Callable[[], datetime] = datetime.now,
    ):
        self.latitude = latitude
        self.longitude = longitude
        self.cache = cache
        self.timeout = timeout
        self.base_url = base_url
        self.refresh_interval = timedelta(minutes=refresh_minutes)
        self._today = today
        self._now = now
        self._forecast: Optional[Forecast] = None
        self._loaded = False

    @property
    def location(self) -> str:
        return f"{self.latitude:.4f},{self.longitude:.4f}"

    def _current(self) -> Optional[Forecast]:
        if not self._loaded:
            self._loaded = True
            if self.cache and self._forecast is None:
                self._forecast = self.cache.load(self.location)
        return self._forecast

    def _fetch_forecast(self) -> Optional[Dict[str, int]]:
        """Weekday name -> code for the next seven days, or None if the request fails."""
        params = {
            "latitude": self.latitude,
            "longitude": self.longitude,
            "daily": "weathercode",
            "timezone": "auto",
        }
        try:
            response = requests.get(self.base_url, params=params, timeout=self.timeout)
            response.raise_for_status()
            daily = response.json()["daily"]
            dates, codes = daily["time"], daily["weathercode"]
        except requests.RequestException as e:
            metrics.incr("weather_fetch_errors_total")
            logger.error(f"Weather API request failed: {e}")
            return None
        except (KeyError, TypeError, ValueError) as e:
            metrics.incr("weather_fetch_errors_total")
            logger.error(f"Unexpected weather payload: {e}")
            return None

        today = self._today()
        horizon = today + timedelta(days=6)
        forecast: Dict[str, int] = {}
        for raw_date, code in zip(dates, codes):
            if code is None:
                continue
            day_date = datetime.strptime(raw_date, "%Y-%m-%d").date()
            if not today <= day_date <= horizon:
                continue
            forecast.setdefault(WEEKDAYS[day_date.weekday()], int(code))
        return forecast

    def needs_refresh(self) -> bool:
        """True when no attempt was made within the refresh interval."""
        current = self._current()
        return current is None or self._now() - current.attempted_at >= self.refresh_interval

    def refresh(self, force: bool = False) -> Dict[str, int]:
        """
        Fetch the forecast if the last attempt is older than the refresh interval.

        A failed fetch keeps the previous codes and still counts as an attempt.
        Returns the codes that reads will see afterwards.
        """
        if not force and not self.needs_refresh():
            return self.codes()

        previous = self._current()
        attempted_at = self._now()
        codes = self._fetch_forecast()

        if codes is None:
            self._forecast = Forecast(
                location=self.location,
                codes=previous.codes if previous else {},
                fetched_at=previous.fetched_at if previous else None,
                attempted_at=attempted_at,
                ok=False,
            )
            log_event(logger, logging.WARNING, "weather_refresh_failed", location=self.location)
        else:
            self._forecast = Forecast(
                location=self.location,
                codes=codes,
                fetched_at=attempted_at,
                attempted_at=attempted_at,
            )
            metrics.incr("weather_refreshes_total")
            log_event(logger, logging.INFO, "weather_refreshed", location=self.location, days=len(codes))

        if self.cache:
            self.cache.save(self._forecast)
        return self.codes()

    def codes(self) -> Dict[str, int]:
        """Stored codes, or nothing when the last good forecast is too old to trust."""
        current = self._current()
        if current is None or current.fetched_at is None:
            return {}
        if self._now() - current.fetched_at > MAX_FORECAST_AGE:
            return {}
        return dict(current.codes)

    def status(self) -> dict:
        current = self._current()
        return {
            "location": self.location,
            "ok": current.ok if current else None,
            "fetched_at": current.fetched_at.isoformat() if current and current.fetched_at else None,
            "attempted_at": current.attempted_at.isoformat() if current else None,
        }

    def get_weather_for_day(self, day: str) -> Optional[int]:
        return self.codes().get(day)
