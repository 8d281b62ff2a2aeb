"""Tests for preference profiling and recommendation scoring."""

from conftest import make_activity

from weekendly.catalog import Catalog
from weekendly.recommend import build_profile, duration_bonus, recommend, score_activity


def test_empty_schedule_scores_only_duration(catalog: Catalog) -> None:
    results = recommend(catalog, {"saturday": [], "sunday": []})

    assert [r.activity.id for r in results] == [
        "gourmet-brunch",
        "collaborative-cooking",
        "street-food-adventure",
        "farmers-market",
        "urban-cycling",
    ]
    assert all(r.score == 2 for r in results)


def test_empty_profile_uses_default_average() -> None:
    profile = build_profile({})
    assert profile.avg_duration == 120
    assert profile.activity_count == 0
    assert profile.vibes == {}


def test_duration_bonus_thresholds() -> None:
    assert duration_bonus(0) == 2
    assert duration_bonus(30) == 2
    assert duration_bonus(31) == 1
    assert duration_bonus(60) == 1
    assert duration_bonus(61) == 0


def test_histograms_are_weighted() -> None:
    schedule = {
        "saturday": [make_activity("quiz", "19:00", 240, vibe="competitive", energy_level="low")],
        "sunday": [make_activity("chess", "10:00", 240, vibe="competitive", energy_level="low")],
    }
    profile = build_profile(schedule)
    candidate = make_activity("trivia", "20:00", 150, vibe="competitive", energy_level="medium")

    # vibe 3*2 + category 2*2 + energy 0 + duration 0
    assert score_activity(candidate, profile, {}) == 10


def test_scheduled_activities_are_not_recommended(catalog: Catalog) -> None:
    schedule = {"saturday": [catalog.get_activity("gourmet-brunch")], "sunday": []}

    results = recommend(catalog, schedule, limit=50)

    assert "gourmet-brunch" not in [r.activity.id for r in results]
    assert len(results) == len(catalog.get_all_activities()) - 1


def test_clear_weather_code_zero_favours_outdoor(catalog: Catalog) -> None:
    results = recommend(catalog, {"saturday": [], "sunday": []}, {"saturday": 0, "sunday": None})

    assert [r.activity.id for r in results[:4]] == [
        "street-food-adventure",
        "farmers-market",
        "urban-cycling",
        "sunrise-yoga",
    ]
    assert results[0].score == 5


def test_adverse_weather_favours_indoor_per_day() -> None:
    profile = build_profile({})
    indoor = make_activity("museum", "10:00", 120, category="Indoor")
    outdoor = make_activity("hike", "10:00", 120, category="Outdoor")
    weather = {"saturday": 61, "sunday": 80}

    assert score_activity(indoor, profile, weather) == 2 + 3 + 3
    assert score_activity(outdoor, profile, weather) == 2


def test_limit_caps_results(catalog: Catalog) -> None:
    assert len(recommend(catalog, {}, limit=3)) == 3
