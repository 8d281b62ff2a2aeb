"""Tests for holiday dates, region detection and long weekend suggestions."""

from datetime import date

import pytest

from weekendly.config import Settings
from weekendly.holidays import (
    detect_region,
    easter_sunday,
    holidays_for,
    nth_weekday,
    season_for,
    suggest_long_weekend,
    upcoming_long_weekends,
)
from weekendly.planner import WeekendPlanner

# 2026-10-18 is a Sunday
SUNDAY = date(2026, 10, 18)


@pytest.mark.parametrize(
    "latitude,longitude,region",
    [
        (40.71, -74.00, "us"),
        (28.61, 77.21, "india"),
        (51.51, -0.13, "uk"),
        (51.05, -114.07, "canada"),
        (-33.87, 151.21, "australia"),
        (0.0, 0.0, "india"),
        (None, None, "india"),
    ],
)
def test_detect_region(latitude, longitude, region) -> None:
    assert detect_region(latitude, longitude) == region


def test_computed_holiday_dates() -> None:
    assert easter_sunday(2025) == date(2025, 4, 20)
    assert easter_sunday(2026) == date(2026, 4, 5)
    assert nth_weekday(2026, 11, 3, 4) == date(2026, 11, 26)
    assert nth_weekday(2026, 5, 0, -1) == date(2026, 5, 25)


def test_holidays_include_international_days_in_date_order() -> None:
    holidays = holidays_for("uk", 2026)

    names = [h.name for h in holidays]
    assert "Valentine's Day" in names
    assert [h.date for h in holidays] == sorted(h.date for h in holidays)
    good_friday = next(h for h in holidays if h.name == "Good Friday")
    assert good_friday.date == date(2026, 4, 3)


def test_southern_hemisphere_seasons_are_flipped() -> None:
    assert season_for(7) == "summer"
    assert season_for(7, "australia") == "winter"
    assert season_for(12, "uk") == "winter"


def test_upcoming_long_weekends_map_weekdays_to_options() -> None:
    upcoming = upcoming_long_weekends(SUNDAY, "us", look_ahead_days=90)

    assert [(lw.holiday.name, lw.days_until) for lw in upcoming] == [
        ("Halloween", 13),
        ("Veterans Day", 24),
        ("Thanksgiving", 39),
        ("Christmas Day", 68),
        ("New Year's Day", 75),
    ]
    options = {lw.holiday.name: lw.opportunity.weekend_option if lw.opportunity else None for lw in upcoming}
    assert options["Halloween"] is None
    assert options["Veterans Day"] is None
    assert options["Thanksgiving"] == "fourDaysThursday"
    assert options["Christmas Day"] == "threeDaysFriday"
    assert upcoming[0].season == "fall"


def test_tuesday_holiday_suggests_saturday_to_tuesday() -> None:
    upcoming = upcoming_long_weekends(SUNDAY, "india", look_ahead_days=5)

    assert upcoming[0].holiday.name == "Dussehra"
    assert upcoming[0].opportunity.weekend_option == "fourDaysTuesday"
    assert upcoming[0].opportunity.days == ["saturday", "sunday", "monday", "tuesday"]


def test_suggestion_uses_nearest_long_weekend(catalog) -> None:
    suggestion = suggest_long_weekend(SUNDAY, catalog, region="us", theme_key="urbanExplorer")

    assert suggestion.long_weekend.holiday.name == "Thanksgiving"
    assert suggestion.weekend_option == "fourDaysThursday"
    assert suggestion.message.startswith("Adventure awaits! This Thanksgiving is ideal for discovering")
    assert suggestion.message.endswith("during your 4-day weekend opportunity.")
    assert [a.id for a in suggestion.activities] == [
        "collaborative-cooking",
        "trivia-championship",
        "wine-discovery",
        "cultural-workshop",
    ]
    assert len(suggestion.planning_tips) == 3
    assert suggestion.planning_tips[0].startswith("Take advantage of the 4-day weekend opportunity")


def test_no_suggestion_without_an_extended_weekend(catalog) -> None:
    assert suggest_long_weekend(SUNDAY, catalog, region="us", look_ahead_days=20) is None


def test_planner_suggestion_uses_configured_region(catalog, tmp_path, sink) -> None:
    settings = Settings(db_path=str(tmp_path / "weekendly.db"), region="uk")
    planner = WeekendPlanner(catalog, sink=sink, settings=settings)

    suggestion = planner.suggest_long_weekend(today=date(2026, 3, 20))

    assert suggestion.long_weekend.holiday.name == "Good Friday"
    assert suggestion.weekend_option == "threeDaysFriday"
    assert sink.notices[-1].operation == "suggest_long_weekend"
    # The plan itself is untouched
    assert planner.store.configuration.key == "twoDays"


def test_planner_region_defaults_to_coordinates(planner: WeekendPlanner) -> None:
    assert planner.region == "india"
    assert planner.suggest_long_weekend(today=SUNDAY).long_weekend.holiday.name == "Dussehra"
