"""
Mood check-ins and mood-based activity filtering.

A mood matches an activity when the mood lists it directly, when the
activity's vibe is one the mood complements, or through a few energy and
category affinities (energetic likes high energy, relaxed likes low energy,
creative likes cultural activities, social likes group activities).
"""

from collections import Counter, defaultdict
from datetime import datetime, timedelta
from typing import Dict, Iterable, List

from .catalog import Catalog
from .models import Activity, MoodEntry, MoodInsights

MOOD_DEFINITIONS: Dict[str, Dict] = {
    "energetic": {
        "name": "Energetic",
        "emoji": "⚡",
        "description": "Feeling pumped and ready for high-energy activities",
        "suggested_activities": ["dance-workshop", "mountain-expedition", "urban-cycling", "street-food-adventure"],
        "complementary": ["adventurous", "social"],
    },
    "relaxed": {
        "name": "Relaxed",
        "emoji": "😌",
        "description": "Peaceful and looking for gentle, calming experiences",
        "suggested_activities": ["mindfulness-retreat", "holistic-spa", "botanical-picnic", "wine-discovery"],
        "complementary": ["mindful", "content"],
    },
    "creative": {
        "name": "Creative",
        "emoji": "🎨",
        "description": "Inspired and eager to express yourself artistically",
        "suggested_activities": ["cultural-workshop", "gallery-exploration", "collaborative-cooking", "photography-walk"],
        "complementary": ["curious", "expressive"],
    },
    "social": {
        "name": "Social",
        "emoji": "👥",
        "description": "Wanting to connect and share experiences with others",
        "suggested_activities": ["networking-meetup", "farmers-market", "trivia-championship", "dance-workshop"],
        "complementary": ["energetic", "happy"],
    },
    "contemplative": {
        "name": "Contemplative",
        "emoji": "🤔",
        "description": "Reflective and seeking meaningful, thought-provoking experiences",
        "suggested_activities": ["literary-journey", "gallery-exploration", "mindfulness-retreat", "astronomy-night"],
        "complementary": ["peaceful", "curious"],
    },
    "adventurous": {
        "name": "Adventurous",
        "emoji": "🗺️",
        "description": "Ready to explore new places and try exciting experiences",
        "suggested_activities": ["photography-walk", "street-food-adventure", "urban-cycling", "mountain-expedition"],
        "complementary": ["energetic", "curious"],
    },
    "romantic": {
        "name": "Romantic",
        "emoji": "💕",
        "description": "In the mood for intimate and loving experiences",
        "suggested_activities": ["wine-discovery", "live-performance", "botanical-picnic", "cinema-experience"],
        "complementary": ["relaxed", "happy"],
    },
    "curious": {
        "name": "Curious",
        "emoji": "🔍",
        "description": "Eager to learn and discover new things",
        "suggested_activities": ["gallery-exploration", "cultural-workshop", "photography-walk", "farmers-market"],
        "complementary": ["adventurous", "creative"],
    },
    "nostalgic": {
        "name": "Nostalgic",
        "emoji": "📻",
        "description": "Longing for familiar comforts and cherished memories",
        "suggested_activities": ["cinema-experience", "gourmet-brunch", "literary-journey", "live-performance"],
        "complementary": ["contemplative", "romantic"],
    },
    "spontaneous": {
        "name": "Spontaneous",
        "emoji": "🎲",
        "description": "Ready for impromptu adventures and unexpected discoveries",
        "suggested_activities": ["street-food-adventure", "photography-walk", "farmers-market", "urban-cycling"],
        "complementary": ["adventurous", "energetic"],
    },
}

MOOD_SUGGESTION_LIMIT = 6


def unknown_moods(moods: Iterable[str]) -> List[str]:
    return [m for m in moods if m not in MOOD_DEFINITIONS]


def time_of_day(hour: int) -> str:
    if hour < 12:
        return "morning"
    if hour < 17:
        return "afternoon"
    if hour < 21:
        return "evening"
    return "night"


def _matches(activity: Activity, mood: str) -> bool:
    definition = MOOD_DEFINITIONS.get(mood)
    if definition is None:
        return False
    if activity.id in definition["suggested_activities"]:
        return True
    if activity.vibe in definition["complementary"]:
        return True
    if mood == "energetic" and activity.energy_level == "high":
        return True
    if mood == "relaxed" and activity.energy_level == "low":
        return True
    if mood == "creative" and activity.group == "cultural":
        return True
    if mood == "social" and "group" in activity.description.lower():
        return True
    return False


def filter_activities_by_mood(activities: Iterable[Activity], moods: List[str]) -> List[Activity]:
    """Activities matching any of the moods, in input order. No moods keeps everything."""
    activities = list(activities)
    if not moods:
        return activities
    return [a for a in activities if any(_matches(a, mood) for mood in moods)]


def recommend_for_moods(
    catalog: Catalog,
    moods: List[str],
    exclude_ids: Iterable[str] = (),
    limit: int = MOOD_SUGGESTION_LIMIT,
) -> List[Activity]:
    excluded = set(exclude_ids)
    candidates = [a for a in catalog.get_all_activities() if a.id not in excluded]
    return filter_activities_by_mood(candidates, moods)[:limit]


def mood_insights(entries: List[MoodEntry], now: datetime, days: int = 30) -> MoodInsights:
    """Top three moods over the window and the most common mood per time of day."""
    cutoff = now - timedelta(days=days)
    recent = [e for e in entries if e.recorded_at >= cutoff]
    if not recent:
        return MoodInsights(message="Start tracking your moods to see personalized insights!")

    frequency: Counter = Counter()
    by_slot: Dict[str, Counter] = defaultdict(Counter)
    for entry in recent:
        for mood in entry.moods:
            frequency[mood] += 1
            by_slot[entry.time_of_day][mood] += 1

    dominant = [
        {
            "mood": mood,
            "count": count,
            "percentage": round(count / len(recent) * 100),
            "name": MOOD_DEFINITIONS.get(mood, {}).get("name", mood),
        }
        for mood, count in frequency.most_common(3)
    ]
    slots = ("morning", "afternoon", "evening", "night")
    return MoodInsights(
        entries=len(recent),
        dominant_moods=dominant,
        time_patterns={slot: by_slot[slot].most_common(1)[0][0] for slot in slots if by_slot[slot]},
    )
