"""
WMO weather code classification.

Codes follow the Open-Meteo daily ``weathercode`` field: 0-1 is clear, 51 and
above is drizzle, rain, snow or thunderstorm. ``None`` means unknown and counts
as neither clear nor adverse.
"""

from typing import Optional

ADVERSE_THRESHOLD = 51
CLEAR_CODES = (0, 1)


def is_adverse(code: Optional[int]) -> bool:
    return code is not None and code >= ADVERSE_THRESHOLD


def is_clear(code: Optional[int]) -> bool:
    return code is not None and code in CLEAR_CODES


def describe_code(code: Optional[int]) -> str:
    """Map a WMO code to a simplified condition."""
    if code is None:
        return "unknown"
    if code in CLEAR_CODES:
        return "sunny"
    if code in (2, 3):
        return "cloudy"
    if code in (45, 48):
        return "foggy"
    if 71 <= code <= 77 or code in (85, 86):
        return "snow"
    if code >= 95:
        return "storm"
    if code >= ADVERSE_THRESHOLD:
        return "rain"
    return "cloudy"


# Headline used in swap suggestions, keyed by describe_code()
CONDITION_HEADLINES = {
    "rain": "Rainy weather",
    "snow": "Snow",
    "storm": "Thunderstorms",
    "foggy": "Fog",
    "cloudy": "Cloudy weather",
    "sunny": "Sunshine",
    "unknown": "Uncertain weather",
}


def headline(code: Optional[int]) -> str:
    return CONDITION_HEADLINES[describe_code(code)]
