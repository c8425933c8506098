"""
modules/planning/visit_timing.py
----------------------------------
Preferred time-of-day inference for a PlaceKnowledge.

Resolution order:
  1. place.preferred_time (structured hint from the research step)
  2. keywords in best_time_to_visit
       sunrise / morning → MORNING
       sunset / evening  → EVENING
       night             → NIGHT   (nightlife category also lands here)
       afternoon         → AFTERNOON
  3. category default
       fort / landmark   → MORNING
       beach             → EVENING
       nightlife         → NIGHT
  4. FLEXIBLE
"""

from __future__ import annotations

from schemas.place import PlaceCategory, PlaceKnowledge, TimeOfDay
from modules.tool_usage.time_tool import AFTERNOON_START, EVENING_START, NIGHT_START


# Sort ordinal used by the Day Scheduler: morning < flexible < afternoon < evening < night
TIME_ORDER: dict[TimeOfDay, float] = {
    TimeOfDay.MORNING:   0,
    TimeOfDay.FLEXIBLE:  0.5,
    TimeOfDay.AFTERNOON: 1,
    TimeOfDay.EVENING:   2,
    TimeOfDay.NIGHT:     3,
}

# Earliest start a visit is pushed to when it prefers a later period
BUCKET_FLOOR: dict[TimeOfDay, int] = {
    TimeOfDay.AFTERNOON: AFTERNOON_START,
    TimeOfDay.EVENING:   EVENING_START,
    TimeOfDay.NIGHT:     NIGHT_START,
}

_CATEGORY_DEFAULTS: dict[PlaceCategory, TimeOfDay] = {
    PlaceCategory.FORT:      TimeOfDay.MORNING,
    PlaceCategory.LANDMARK:  TimeOfDay.MORNING,
    PlaceCategory.BEACH:     TimeOfDay.EVENING,
    PlaceCategory.NIGHTLIFE: TimeOfDay.NIGHT,
}


def optimal_time_of_day(place: PlaceKnowledge) -> TimeOfDay:
    if place.preferred_time is not None:
        return place.preferred_time

    best_time = (place.best_time_to_visit or "").lower()
    if "morning" in best_time or "sunrise" in best_time:
        return TimeOfDay.MORNING
    if "evening" in best_time or "sunset" in best_time:
        return TimeOfDay.EVENING
    if "night" in best_time or place.category == PlaceCategory.NIGHTLIFE:
        return TimeOfDay.NIGHT
    if "afternoon" in best_time:
        return TimeOfDay.AFTERNOON

    return _CATEGORY_DEFAULTS.get(place.category, TimeOfDay.FLEXIBLE)


def sort_by_time_of_day(places: list[PlaceKnowledge]) -> list[PlaceKnowledge]:
    """Stable sort; places sharing a period keep their incoming (route) order."""
    return sorted(places, key=lambda p: TIME_ORDER[optimal_time_of_day(p)])
