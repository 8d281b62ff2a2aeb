"""
Holiday awareness: upcoming public holidays and the long weekends they open up.

Fixed-date holidays repeat every year; weekday-anchored ones (fourth Thursday
of November, last Monday of May, ...) and Easter are computed per year; lunar
calendar festivals are listed per year. A holiday on a Monday or Friday gives
a 3-day weekend, one on a Thursday or Tuesday a 4-day weekend with one extra
day off.
"""

import calendar
from datetime import date, timedelta
from typing import List, Optional

from .catalog import Catalog
from .models import Holiday, LongWeekend, LongWeekendOpportunity, LongWeekendSuggestion

DEFAULT_REGION = "india"

# (lat_min, lat_max, lon_min, lon_max); first match wins, so US beats Canada on the border
REGION_BOUNDS = {
    "us": (24, 49, -125, -66),
    "india": (8, 37, 68, 97),
    "uk": (49, 61, -8, 2),
    "canada": (42, 70, -141, -52),
    "australia": (-44, -10, 113, 154),
}

# A rule is ("fixed", month, day), ("nth", month, weekday, n) with n=-1 for the
# last one, ("easter", offset_days) or ("dates", ["YYYY-MM-DD", ...]).
HOLIDAY_RULES = {
    "us": [
        (("fixed", 1, 1), "New Year's Day", "national", "reflective", ["mindfulness-retreat", "digital-detox"]),
        (("nth", 1, 0, 3), "Martin Luther King Jr. Day", "national", "community", ["networking-meetup", "cultural-workshop"]),
        (("nth", 2, 0, 3), "Presidents' Day", "national", "adventurous", ["photography-walk", "gallery-exploration"]),
        (("nth", 5, 0, -1), "Memorial Day", "national", "social", ["farmers-market", "botanical-picnic"]),
        (("fixed", 7, 4), "Independence Day", "national", "energetic", ["dance-workshop", "street-food-adventure"]),
        (("nth", 9, 0, 1), "Labor Day", "national", "relaxed", ["holistic-spa", "gourmet-brunch"]),
        (("nth", 10, 0, 2), "Columbus Day", "national", "explorer", ["urban-cycling", "photography-walk"]),
        (("fixed", 11, 11), "Veterans Day", "national", "grateful", ["mindfulness-retreat", "literary-journey"]),
        (("nth", 11, 3, 4), "Thanksgiving", "national", "family", ["collaborative-cooking", "trivia-championship"]),
        (("fixed", 12, 25), "Christmas Day", "national", "cozy", ["wine-discovery", "cinema-experience"]),
    ],
    "india": [
        (("fixed", 1, 1), "New Year's Day", "national", "celebratory", ["cultural-workshop"]),
        (("fixed", 1, 14), "Makar Sankranti", "cultural", "festive", ["cultural-workshop", "street-food-adventure"]),
        (("fixed", 1, 26), "Republic Day", "national", "patriotic", ["cultural-workshop", "photography-walk"]),
        (("dates", ["2025-02-26", "2026-02-15"]), "Maha Shivratri", "religious", "spiritual",
         ["mindfulness-retreat", "cultural-workshop"]),
        (("dates", ["2025-03-13", "2026-03-04"]), "Holi", "cultural", "festive", ["dance-workshop", "street-food-adventure"]),
        (("fixed", 4, 14), "Baisakhi", "cultural", "harvest", ["dance-workshop", "farmers-market"]),
        (("fixed", 8, 15), "Independence Day", "national", "patriotic", ["cultural-workshop", "photography-walk"]),
        (("dates", ["2025-08-16", "2026-09-04"]), "Janmashtami", "religious", "devotional",
         ["cultural-workshop", "dance-workshop"]),
        (("dates", ["2025-08-09", "2026-08-28"]), "Raksha Bandhan", "cultural", "family", ["collaborative-cooking"]),
        (("dates", ["2025-08-27", "2026-09-14"]), "Ganesh Chaturthi", "religious", "joyous",
         ["cultural-workshop", "street-food-adventure"]),
        (("fixed", 10, 2), "Gandhi Jayanti", "national", "reflective", ["mindfulness-retreat", "literary-journey"]),
        (("dates", ["2025-10-02", "2026-10-20"]), "Dussehra", "cultural", "triumphant",
         ["cultural-workshop", "live-performance"]),
        (("dates", ["2025-10-20", "2026-11-08"]), "Diwali", "cultural", "joyous", ["cultural-workshop", "gourmet-brunch"]),
        (("dates", ["2025-11-05", "2026-11-24"]), "Guru Nanak Jayanti", "religious", "peaceful",
         ["mindfulness-retreat", "cultural-workshop"]),
        (("fixed", 12, 25), "Christmas Day", "religious", "peaceful", ["wine-discovery", "cinema-experience"]),
    ],
    "uk": [
        (("fixed", 1, 1), "New Year's Day", "national", "fresh-start", ["mindfulness-retreat", "digital-detox"]),
        (("easter", -2), "Good Friday", "religious", "contemplative", ["literary-journey", "gallery-exploration"]),
        (("easter", 1), "Easter Monday", "religious", "renewal", ["botanical-picnic", "photography-walk"]),
        (("nth", 5, 0, 1), "Early May Bank Holiday", "national", "spring", ["farmers-market", "botanical-picnic"]),
        (("nth", 5, 0, -1), "Spring Bank Holiday", "national", "outdoor", ["urban-cycling", "photography-walk"]),
        (("nth", 8, 0, -1), "Summer Bank Holiday", "national", "relaxed", ["holistic-spa", "gourmet-brunch"]),
        (("fixed", 12, 25), "Christmas Day", "national", "cozy", ["wine-discovery", "cinema-experience"]),
        (("fixed", 12, 26), "Boxing Day", "national", "leisurely", ["gourmet-brunch", "live-performance"]),
    ],
    "canada": [
        (("fixed", 1, 1), "New Year's Day", "national", "fresh-start", ["mindfulness-retreat", "digital-detox"]),
        (("nth", 2, 0, 3), "Family Day", "provincial", "family", ["collaborative-cooking"]),
        (("easter", -2), "Good Friday", "religious", "contemplative", ["literary-journey", "gallery-exploration"]),
        (("fixed", 7, 1), "Canada Day", "national", "patriotic", ["cultural-workshop", "street-food-adventure"]),
        (("nth", 9, 0, 1), "Labour Day", "national", "relaxed", ["holistic-spa", "gourmet-brunch"]),
        (("nth", 10, 0, 2), "Thanksgiving", "national", "grateful", ["collaborative-cooking"]),
        (("fixed", 11, 11), "Remembrance Day", "national", "respectful", ["mindfulness-retreat", "literary-journey"]),
        (("fixed", 12, 25), "Christmas Day", "national", "cozy", ["wine-discovery", "cinema-experience"]),
        (("fixed", 12, 26), "Boxing Day", "national", "leisurely", ["gourmet-brunch", "live-performance"]),
    ],
    "australia": [
        (("fixed", 1, 1), "New Year's Day", "national", "celebratory", ["botanical-picnic"]),
        (("fixed", 1, 26), "Australia Day", "national", "patriotic", ["street-food-adventure"]),
        (("easter", -2), "Good Friday", "religious", "contemplative", ["literary-journey", "gallery-exploration"]),
        (("easter", 1), "Easter Monday", "religious", "renewal", ["botanical-picnic", "photography-walk"]),
        (("fixed", 4, 25), "ANZAC Day", "national", "commemorative", ["mindfulness-retreat", "cultural-workshop"]),
        (("nth", 6, 0, 2), "King's Birthday", "national", "traditional", ["cultural-workshop", "live-performance"]),
        (("fixed", 12, 25), "Christmas Day", "national", "summer-celebration", ["botanical-picnic"]),
        (("fixed", 12, 26), "Boxing Day", "national", "leisurely", ["street-food-adventure"]),
    ],
    "international": [
        (("fixed", 2, 14), "Valentine's Day", "cultural", "romantic", ["wine-discovery", "live-performance"]),
        (("fixed", 3, 17), "St. Patrick's Day", "cultural", "festive", ["dance-workshop", "street-food-adventure"]),
        (("fixed", 4, 22), "Earth Day", "awareness", "nature", ["botanical-picnic", "mountain-expedition"]),
        (("fixed", 10, 31), "Halloween", "cultural", "creative", ["cultural-workshop", "cinema-experience"]),
    ],
}

SEASONS = {
    "spring": {
        "months": (3, 4, 5),
        "activities": ["botanical-picnic", "photography-walk", "farmers-market", "sunrise-yoga"],
        "description": "Spring awakening calls for outdoor renewal and fresh experiences",
    },
    "summer": {
        "months": (6, 7, 8),
        "activities": ["mountain-expedition", "urban-cycling", "street-food-adventure", "dance-workshop"],
        "description": "Summer energy invites adventure and outdoor exploration",
    },
    "fall": {
        "months": (9, 10, 11),
        "activities": ["wine-discovery", "cultural-workshop", "gallery-exploration", "gourmet-brunch"],
        "description": "Fall transition brings perfect weather for cultural immersion",
    },
    "winter": {
        "months": (12, 1, 2),
        "activities": ["mindfulness-retreat", "literary-journey", "holistic-spa", "cinema-experience"],
        "description": "Winter invites introspection and cozy indoor experiences",
    },
}

SOUTHERN_HEMISPHERE = {"australia"}
_OPPOSITE_SEASON = {"spring": "fall", "summer": "winter", "fall": "spring", "winter": "summer"}

# Weekday of the holiday -> the extended weekend it opens up
OPPORTUNITIES = {
    0: LongWeekendOpportunity(
        type="3-day weekend",
        days=["saturday", "sunday", "monday"],
        suggestion="Take advantage of this Monday holiday for a 3-day adventure!",
        weekend_option="threeDaysMonday",
    ),
    4: LongWeekendOpportunity(
        type="3-day weekend",
        days=["friday", "saturday", "sunday"],
        suggestion="Perfect Friday holiday for an extended weekend getaway!",
        weekend_option="threeDaysFriday",
    ),
    3: LongWeekendOpportunity(
        type="4-day weekend opportunity",
        days=["thursday", "friday", "saturday", "sunday"],
        suggestion="Consider taking Friday off for a mini-vacation!",
        weekend_option="fourDaysThursday",
    ),
    1: LongWeekendOpportunity(
        type="4-day weekend opportunity",
        days=["saturday", "sunday", "monday", "tuesday"],
        suggestion="Consider taking Monday off for a mini-vacation!",
        weekend_option="fourDaysTuesday",
    ),
}

THEME_OPENERS = {
    "wellnessWarrior": "Perfect timing for your wellness journey! {name} offers a great opportunity to",
    "urbanExplorer": "Adventure awaits! This {name} is ideal for discovering",
    "creativeSoul": "Inspiration calls! {name} presents a wonderful chance to",
    "socialButterfly": "Connect and celebrate! {name} is perfect for",
    "luxurySeeker": "Indulge in excellence! This {name} invites you to",
    "mindfulEscape": "Find peace and clarity! {name} offers time to",
}

PLANNING_TIPS = [
    "Book accommodations early for holiday weekends",
    "Check local event calendars for special celebrations",
    "Consider weather patterns for outdoor activities",
    "Plan transportation in advance for popular destinations",
]


def detect_region(latitude: Optional[float], longitude: Optional[float]) -> str:
    if latitude is None or longitude is None:
        return DEFAULT_REGION
    for region, (lat_min, lat_max, lon_min, lon_max) in REGION_BOUNDS.items():
        if lat_min <= latitude <= lat_max and lon_min <= longitude <= lon_max:
            return region
    return DEFAULT_REGION


def easter_sunday(year: int) -> date:
    """Gregorian Easter (anonymous Gregorian algorithm)."""
    a = year % 19
    b, c = divmod(year, 100)
    d, e = divmod(b, 4)
    f = (b + 8) // 25
    g = (b - f + 1) // 3
    h = (19 * a + b - d - g + 15) % 30
    i, k = divmod(c, 4)
    el = (32 + 2 * e + 2 * i - h - k) % 7
    m = (a + 11 * h + 22 * el) // 451
    month, day = divmod(h + el - 7 * m + 114, 31)
    return date(year, month, day + 1)


def nth_weekday(year: int, month: int, weekday: int, n: int) -> date:
    """The ``n``-th ``weekday`` (0=Monday) of the month; ``n=-1`` is the last one."""
    days = [
        date(year, month, d)
        for d in range(1, calendar.monthrange(year, month)[1] + 1)
        if date(year, month, d).weekday() == weekday
    ]
    return days[n if n < 0 else n - 1]


def _rule_dates(rule: tuple, year: int) -> List[date]:
    kind = rule[0]
    if kind == "fixed":
        return [date(year, rule[1], rule[2])]
    if kind == "nth":
        return [nth_weekday(year, rule[1], rule[2], rule[3])]
    if kind == "easter":
        return [easter_sunday(year) + timedelta(days=rule[1])]
    if kind == "dates":
        listed = [date.fromisoformat(raw) for raw in rule[1]]
        return [d for d in listed if d.year == year]
    raise ValueError(f"Unknown holiday rule: {kind}")


def holidays_for(region: str, year: int) -> List[Holiday]:
    """Regional plus international holidays for the year, in date order."""
    rules = HOLIDAY_RULES.get(region, HOLIDAY_RULES[DEFAULT_REGION]) + HOLIDAY_RULES["international"]
    holidays = [
        Holiday(date=when, name=name, type=kind, vibe=vibe, suggested_activities=activities)
        for rule, name, kind, vibe, activities in rules
        for when in _rule_dates(rule, year)
    ]
    return sorted(holidays, key=lambda h: h.date)


def season_for(month: int, region: str = DEFAULT_REGION) -> str:
    season = next(name for name, data in SEASONS.items() if month in data["months"])
    if region in SOUTHERN_HEMISPHERE:
        return _OPPOSITE_SEASON[season]
    return season


def upcoming_long_weekends(
    today: date,
    region: str = DEFAULT_REGION,
    look_ahead_days: int = 90,
) -> List[LongWeekend]:
    """Holidays from today up to ``look_ahead_days`` ahead, nearest first."""
    horizon = today + timedelta(days=look_ahead_days)
    season = season_for(today.month, region)

    found: List[LongWeekend] = []
    for year in range(today.year, horizon.year + 1):
        for holiday in holidays_for(region, year):
            if not today <= holiday.date <= horizon:
                continue
            found.append(LongWeekend(
                holiday=holiday,
                days_until=(holiday.date - today).days,
                region=region,
                season=season,
                opportunity=OPPORTUNITIES.get(holiday.date.weekday()),
            ))
    return sorted(found, key=lambda lw: lw.days_until)


def suggest_long_weekend(
    today: date,
    catalog: Catalog,
    region: str = DEFAULT_REGION,
    theme_key: Optional[str] = None,
    look_ahead_days: int = 60,
) -> Optional[LongWeekendSuggestion]:
    """
    Plan for the nearest holiday that extends a weekend, or None.

    Activities are the holiday's own picks followed by the season's, resolved
    against the catalog (unknown ids are skipped), four at most.
    """
    upcoming = [lw for lw in upcoming_long_weekends(today, region, look_ahead_days) if lw.opportunity]
    if not upcoming:
        return None

    long_weekend = upcoming[0]
    opportunity = long_weekend.opportunity
    season = SEASONS[long_weekend.season]

    opener = THEME_OPENERS.get(theme_key or "", THEME_OPENERS["wellnessWarrior"])
    message = (
        f"{opener.format(name=long_weekend.holiday.name)} embrace "
        f"{season['description'].lower()} during your {opportunity.type}."
    )

    ids = list(dict.fromkeys(long_weekend.holiday.suggested_activities + season["activities"]))
    activities = [a for a in (catalog.get_activity(i) for i in ids) if a is not None][:4]

    tips = [f"Take advantage of the {opportunity.type} - {opportunity.suggestion}"] + PLANNING_TIPS

    return LongWeekendSuggestion(
        long_weekend=long_weekend,
        weekend_option=opportunity.weekend_option,
        message=message,
        activities=activities,
        planning_tips=tips[:3],
    )
