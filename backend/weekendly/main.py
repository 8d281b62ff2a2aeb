"""
Weekendly Backend
FastAPI app exposing the weekend planner: schedule, bucket, themes, recommendations and weather advice
"""

import asyncio
import json
import logging
import time
import uuid
from contextlib import asynccontextmanager, suppress
from typing import List, Optional

from fastapi import Depends, FastAPI, HTTPException, Query, Request, Response
from fastapi.middleware.cors import CORSMiddleware

from .catalog import load_catalog
from .conditions import describe_code
from .config import Settings
from .models import (
    BucketAddRequest,
    CustomActivityRequest,
    MoveActivityRequest,
    Outcome,
    PlaceActivityRequest,
    SavePlanRequest,
    ThemeRequest,
    TrackMoodRequest,
    UpdateTimeRequest,
    WeekendOptionRequest,
)
from .observability import (
    classify_error,
    configure_logging,
    log_event,
    metrics,
    request_id_ctx,
)
from .persistence import SnapshotStore
from .planner import WeekendPlanner
from .weather import OpenMeteoWeatherSource, WeatherCache, WeatherSource

configure_logging()
logger = logging.getLogger("weekendly.api")

settings = Settings.from_env()

# Global instance (single local user)
planner: Optional[WeekendPlanner] = None

# Failure type -> HTTP status for operations that did not commit
ERROR_STATUS = {
    "not_found": 404,
    "unknown_day": 404,
    "unknown_option": 404,
    "conflict": 409,
    "duplicate": 409,
    "no_slot": 409,
    "already_scheduled": 409,
    "invalid_time": 422,
    "invalid_activity": 422,
}


async def refresh_weather_periodically(weather: WeatherSource, interval_seconds: float):
    """Keep the stored forecast current without blocking the event loop."""
    loop = asyncio.get_event_loop()
    while True:
        try:
            await loop.run_in_executor(None, weather.refresh)
        except Exception as e:
            metrics.incr("weather_refresh_errors_total")
            log_event(logger, logging.ERROR, "weather_refresh_error", error_type=classify_error(e), error=str(e))
        await asyncio.sleep(interval_seconds)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Initialize and cleanup resources"""
    global planner

    configure_logging(settings.log_level)
    catalog = load_catalog(settings.catalog_path)
    weather = OpenMeteoWeatherSource(
        latitude=settings.latitude,
        longitude=settings.longitude,
        cache=WeatherCache(settings.db_path),
        timeout=settings.weather_timeout_seconds,
        refresh_minutes=settings.weather_cache_minutes,
    )
    planner = WeekendPlanner.restore(
        catalog,
        SnapshotStore(settings.db_path),
        settings=settings,
        weather=weather,
    )
    refresher = asyncio.create_task(
        refresh_weather_periodically(weather, max(settings.weather_cache_minutes, 1) * 60)
    )
    log_event(logger, logging.INFO, "startup_complete", weekend_option=planner.store.configuration.key)

    yield

    refresher.cancel()
    with suppress(asyncio.CancelledError):
        await refresher
    log_event(logger, logging.INFO, "shutdown_complete")


app = FastAPI(
    title="Weekendly API",
    description="Weekend activity planner with weather-aware suggestions",
    version="1.0.0",
    lifespan=lifespan,
)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PATCH", "DELETE"],
    allow_headers=["Content-Type", "Authorization"],
)


def _record_failure(request: Request, exc: Exception, event: str) -> str:
    error_type = classify_error(exc)
    metrics.incr("http_errors_total")
    metrics.incr(f"error_type_{error_type}_total")
    log_event(
        logger,
        logging.ERROR,
        event,
        method=request.method,
        path=request.url.path,
        error_type=error_type,
        error=str(exc),
    )
    return error_type


@app.middleware("http")
async def request_observability_middleware(request: Request, call_next):
    req_id = request.headers.get("X-Request-Id") or uuid.uuid4().hex
    token = request_id_ctx.set(req_id)
    started = time.perf_counter()
    metrics.incr("http_requests_total")

    try:
        response = await call_next(request)
    except Exception as exc:
        _record_failure(request, exc, "request_failed")
        request_id_ctx.reset(token)
        raise
    finally:
        elapsed_ms = int((time.perf_counter() - started) * 1000)
        metrics.observe_ms("http_request", elapsed_ms)

    response.headers["X-Request-Id"] = req_id
    if response.status_code >= 500:
        metrics.incr("http_errors_total")
    elif response.status_code >= 400:
        metrics.incr("http_rejections_total")

    log_event(
        logger,
        logging.INFO,
        "request_complete",
        method=request.method,
        path=request.url.path,
        status_code=response.status_code,
        duration_ms=elapsed_ms,
    )
    request_id_ctx.reset(token)
    return response


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    metrics.incr("unhandled_exceptions_total")
    error_type = _record_failure(request, exc, "unhandled_exception")
    return Response(
        content=json.dumps({"error": {"type": error_type, "message": "Internal server error"}}),
        status_code=500,
        media_type="application/json",
    )


def get_planner() -> WeekendPlanner:
    if planner is None:
        raise HTTPException(status_code=503, detail="Planner not initialized")
    return planner


def _checked(outcome: Outcome) -> dict:
    """Return the outcome body, or raise the matching HTTP error when it failed."""
    if not outcome.success:
        raise HTTPException(
            status_code=ERROR_STATUS.get(outcome.error_type, 400),
            detail=outcome.model_dump(),
        )
    return outcome.model_dump()


def _outcomes(outcomes: List[Outcome]) -> dict:
    return {
        "outcomes": [o.model_dump() for o in outcomes],
        "placed": sum(1 for o in outcomes if o.success and o.day),
        "failed": sum(1 for o in outcomes if not o.success),
    }


@app.get("/")
async def root():
    return {"status": "ok", "service": "weekendly-api"}


@app.get("/health")
async def health_check():
    """Health check endpoint"""
    return {
        "status": "healthy",
        "planner_initialized": planner is not None,
    }


@app.get("/metrics")
async def metrics_snapshot():
    """Basic in-memory metrics snapshot."""
    return {"metrics": metrics.snapshot()}


# =============================================================================
# Catalog & plan
# =============================================================================

@app.get("/api/catalog")
async def get_catalog(p: WeekendPlanner = Depends(get_planner)):
    return p.catalog.to_dict()


@app.get("/api/plan")
async def get_plan(p: WeekendPlanner = Depends(get_planner)):
    return p.plan_view()


@app.post("/api/plan/activities")
async def place_activity(request: PlaceActivityRequest, p: WeekendPlanner = Depends(get_planner)):
    """Add a catalog activity to a day, or to the first day with a free slot."""
    return _checked(p.place_activity(request.activity_id, day=request.day, time=request.time))


@app.delete("/api/plan/days/{day}/activities/{activity_id}")
async def remove_activity(day: str, activity_id: str, p: WeekendPlanner = Depends(get_planner)):
    return _checked(p.remove_from_day(day, activity_id))


@app.post("/api/plan/activities/{activity_id}/move")
async def move_activity(activity_id: str, request: MoveActivityRequest, p: WeekendPlanner = Depends(get_planner)):
    return _checked(p.move_activity(activity_id, request.day))


@app.patch("/api/activities/{activity_id}/time")
async def update_activity_time(activity_id: str, request: UpdateTimeRequest, p: WeekendPlanner = Depends(get_planner)):
    """Change the start time of a planned or bucketed activity."""
    return _checked(p.update_activity_time(activity_id, request.time))


@app.post("/api/plan/weekend")
async def change_weekend(request: WeekendOptionRequest, p: WeekendPlanner = Depends(get_planner)):
    outcomes = p.change_weekend_configuration(request.option)
    if outcomes and outcomes[0].error_type == "unknown_option":
        _checked(outcomes[0])
    return {**_outcomes(outcomes), "plan": p.plan_view()}


@app.post("/api/plan/theme")
async def apply_theme(request: ThemeRequest, p: WeekendPlanner = Depends(get_planner)):
    outcome = _checked(p.apply_theme(request.theme))
    return {**outcome, "plan": p.plan_view()}


@app.get("/api/plan/summary")
async def get_summary(p: WeekendPlanner = Depends(get_planner)):
    return p.summary().model_dump()


# =============================================================================
# Bucket
# =============================================================================

@app.post("/api/bucket")
async def add_to_bucket(request: BucketAddRequest, p: WeekendPlanner = Depends(get_planner)):
    return _checked(p.add_to_bucket(request.activity_id, time=request.time))


@app.post("/api/bucket/custom")
async def add_custom_activity(request: CustomActivityRequest, p: WeekendPlanner = Depends(get_planner)):
    """Create a user-defined activity and stage it in the bucket."""
    return _checked(p.add_custom_activity_to_bucket(
        name=request.name,
        duration_minutes=request.duration_minutes,
        category=request.category,
        vibe=request.vibe,
        energy_level=request.energy_level,
        time=request.time,
        description=request.description,
    ))


@app.delete("/api/bucket/{activity_id}")
async def remove_from_bucket(activity_id: str, p: WeekendPlanner = Depends(get_planner)):
    return _checked(p.remove_from_bucket(activity_id))


@app.post("/api/bucket/{activity_id}/schedule")
async def schedule_from_bucket(
    activity_id: str,
    request: Optional[MoveActivityRequest] = None,
    p: WeekendPlanner = Depends(get_planner),
):
    return _checked(p.schedule_from_bucket(activity_id, day=request.day if request else None))


@app.post("/api/bucket/flush")
async def flush_bucket(p: WeekendPlanner = Depends(get_planner)):
    """Place every bucket item on the first day where it fits."""
    outcomes = p.flush_bucket_to_schedule()
    return {**_outcomes(outcomes), "plan": p.plan_view()}


# =============================================================================
# Recommendations & weather
# =============================================================================

@app.get("/api/recommendations")
async def get_recommendations(limit: Optional[int] = None, p: WeekendPlanner = Depends(get_planner)):
    if limit is not None and not 1 <= limit <= 50:
        raise HTTPException(status_code=422, detail="limit must be between 1 and 50")
    return {"recommendations": [r.model_dump() for r in p.recommend(limit)]}


@app.get("/api/weather")
async def get_weather(p: WeekendPlanner = Depends(get_planner)):
    return {
        "days": {
            day: {"code": code, "description": describe_code(code)}
            for day, code in p.weather_by_day().items()
        },
        "source": p.weather_status(),
    }


@app.post("/api/weather/refresh")
async def refresh_weather(p: WeekendPlanner = Depends(get_planner)):
    """Refresh the forecast if it is due; the fetch runs off the event loop."""
    loop = asyncio.get_event_loop()
    await loop.run_in_executor(None, p.refresh_weather)
    return await get_weather(p)


@app.get("/api/weather/swaps")
async def get_swap_proposals(p: WeekendPlanner = Depends(get_planner)):
    proposals = p.evaluate_weather_swaps()
    return {
        "proposals": [{**sp.model_dump(), "message": sp.message} for sp in proposals],
        "states": {day: p.swap_state(day) for day in p.store.days},
    }


@app.post("/api/weather/swaps/{day}/confirm")
async def confirm_swap(day: str, p: WeekendPlanner = Depends(get_planner)):
    return _checked(p.confirm_swap(day))


@app.post("/api/weather/swaps/{day}/dismiss")
async def dismiss_swap(day: str, p: WeekendPlanner = Depends(get_planner)):
    return _checked(p.dismiss_swap(day))


@app.get("/api/weather/nudges")
async def get_outdoor_nudges(p: WeekendPlanner = Depends(get_planner)):
    return {"nudges": [n.model_dump() for n in p.outdoor_nudges()]}


# =============================================================================
# Holidays & moods
# =============================================================================

@app.get("/api/holidays/long-weekends")
async def get_long_weekends(days: int = 90, p: WeekendPlanner = Depends(get_planner)):
    """Upcoming holidays in the planner's region, nearest first."""
    if not 1 <= days <= 366:
        raise HTTPException(status_code=422, detail="days must be between 1 and 366")
    long_weekends = p.upcoming_long_weekends(look_ahead_days=days)
    return {"region": p.region, "long_weekends": [lw.model_dump(mode="json") for lw in long_weekends]}


@app.get("/api/holidays/suggestion")
async def get_long_weekend_suggestion(p: WeekendPlanner = Depends(get_planner)):
    suggestion = p.suggest_long_weekend()
    return {"suggestion": suggestion.model_dump(mode="json") if suggestion else None}


@app.post("/api/moods")
async def track_mood(request: TrackMoodRequest, p: WeekendPlanner = Depends(get_planner)):
    outcome = _checked(p.track_mood(request.moods, weather=request.weather))
    return {**outcome, "suggestions": [a.model_dump() for a in p.mood_suggestions(request.moods)]}


@app.get("/api/moods/suggestions")
async def get_mood_suggestions(moods: List[str] = Query(default=[]), p: WeekendPlanner = Depends(get_planner)):
    return {"moods": moods, "activities": [a.model_dump() for a in p.mood_suggestions(moods)]}


@app.get("/api/moods/insights")
async def get_mood_insights(days: int = 30, p: WeekendPlanner = Depends(get_planner)):
    if days < 1:
        raise HTTPException(status_code=422, detail="days must be positive")
    return p.mood_insights(days=days).model_dump()


# =============================================================================
# Saved plans
# =============================================================================

@app.post("/api/plans")
async def save_plan(request: SavePlanRequest, p: WeekendPlanner = Depends(get_planner)):
    plan = p.save_weekend_plan(request.name)
    return {"success": True, "plan_id": plan.id, "name": plan.name, "metadata": plan.metadata}


@app.get("/api/plans")
async def list_plans(limit: int = 10, offset: int = 0, p: WeekendPlanner = Depends(get_planner)):
    """List saved plans, newest first."""
    if limit < 1 or limit > 100:
        raise HTTPException(status_code=422, detail="limit must be between 1 and 100")
    if offset < 0:
        raise HTTPException(status_code=422, detail="offset must be non-negative")
    plans = p.list_weekend_plans(limit=limit, offset=offset)
    return {"plans": plans, "count": len(plans)}
