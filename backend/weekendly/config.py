"""Runtime settings, read from the environment (and a local .env file)."""

import os
from typing import List, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field

# Default location when the host has no coordinates (New Delhi)
DEFAULT_LATITUDE = 28.6139
DEFAULT_LONGITUDE = 77.2090


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


class Settings(BaseModel):
    db_path: str = "./weekendly.db"
    log_level: str = "INFO"
    catalog_path: Optional[str] = None
    region: Optional[str] = Field(None, description="Holiday region; detected from the coordinates when unset")
    default_weekend_option: str = "twoDays"
    default_theme: str = "wellnessWarrior"
    latitude: float = Field(DEFAULT_LATITUDE, ge=-90, le=90)
    longitude: float = Field(DEFAULT_LONGITUDE, ge=-180, le=180)
    weather_cache_minutes: int = Field(30, ge=0)
    weather_timeout_seconds: float = Field(10.0, gt=0)
    retain_unplaced_on_flush: bool = True
    recommendation_limit: int = Field(5, ge=1, le=50)
    cors_origins: List[str] = Field(default_factory=lambda: ["http://localhost:3000", "http://localhost:5173"])

    @classmethod
    def from_env(cls) -> "Settings":
        load_dotenv()
        origins = os.getenv("CORS_ORIGINS", "http://localhost:3000,http://localhost:5173").split(",")
        return cls(
            db_path=os.getenv("WEEKENDLY_DB_PATH", "./weekendly.db"),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
            catalog_path=os.getenv("WEEKENDLY_CATALOG_PATH") or None,
            region=os.getenv("WEEKENDLY_REGION") or None,
            default_weekend_option=os.getenv("WEEKENDLY_DEFAULT_OPTION", "twoDays"),
            default_theme=os.getenv("WEEKENDLY_DEFAULT_THEME", "wellnessWarrior"),
            latitude=float(os.getenv("WEEKENDLY_LATITUDE", DEFAULT_LATITUDE)),
            longitude=float(os.getenv("WEEKENDLY_LONGITUDE", DEFAULT_LONGITUDE)),
            weather_cache_minutes=int(os.getenv("WEEKENDLY_WEATHER_CACHE_MINUTES", "30")),
            weather_timeout_seconds=float(os.getenv("WEEKENDLY_WEATHER_TIMEOUT", "10")),
            retain_unplaced_on_flush=_env_bool("WEEKENDLY_RETAIN_UNPLACED", True),
            recommendation_limit=int(os.getenv("WEEKENDLY_RECOMMENDATION_LIMIT", "5")),
            cors_origins=[o.strip() for o in origins if o.strip()],
        )
