"""
modules/planning/meal_planner.py
----------------------------------
Inserts meals into a day's visit/travel skeleton.

Meal table (clock, duration, cost in INR, venue preference):
  breakfast      07:30  45 min  250  cafe
  morning_snack  10:30  20 min  100  cafe
  lunch          12:30  60 min  400  restaurant
  evening_snack  16:30  20 min  150  cafe
  dinner         19:30  75 min  600  restaurant

A meal is only planned when the skeleton's span plausibly covers its slot,
and only when an unused nearby venue is left; otherwise it is omitted.
Venues are ranked by: venue-type preference → rating ↓ → distance ↑.
"""

from __future__ import annotations
from dataclasses import dataclass
import logging

from schemas.itinerary import ScheduledActivity
from schemas.place import NearbyPlace, PlaceKnowledge
from modules.tool_usage.time_tool import (
    BREAKFAST_TIME,
    DAY_END,
    DINNER_TIME,
    EVENING_SNACK_TIME,
    LUNCH_TIME,
    MORNING_SNACK_TIME,
    MORNING_START,
    format_minutes,
    time_slot_for,
)

logger = logging.getLogger(__name__)

MEAL_FATIGUE_IMPACT = -10   # meals restore energy


@dataclass(frozen=True)
class MealSlot:
    key: str
    time: int            # minutes from midnight
    duration: int        # minutes
    cost: float
    label: str
    prefer_cafe: bool


MEAL_SLOTS: dict[str, MealSlot] = {
    "breakfast":     MealSlot("breakfast",     BREAKFAST_TIME,     45, 250.0, "Breakfast",     True),
    "morning_snack": MealSlot("morning_snack", MORNING_SNACK_TIME, 20, 100.0, "Morning Tea",   True),
    "lunch":         MealSlot("lunch",         LUNCH_TIME,         60, 400.0, "Lunch",         False),
    "evening_snack": MealSlot("evening_snack", EVENING_SNACK_TIME, 20, 150.0, "Refreshments",  True),
    "dinner":        MealSlot("dinner",        DINNER_TIME,        75, 600.0, "Dinner",        False),
}


def _is_cafe(venue: NearbyPlace) -> bool:
    category = (venue.category or "").lower()
    return "cafe" in category or "café" in category


class MealPlanner:
    """Places meals into a day; never fails, only omits."""

    def insert_meals(
        self,
        activities: list[ScheduledActivity],
        day_number: int,
        places: list[PlaceKnowledge],
    ) -> tuple[list[ScheduledActivity], float]:
        """
        Args:
            activities: Time-ordered visit/travel skeleton for the day.
            day_number: 1-based day index (stamped on every meal).
            places:     The day's places; their nearby_restaurants form the pool.

        Returns:
            (activities sorted by start time including meals, total meal cost)
        """
        with_meals = list(activities)
        pool = [r for p in places for r in p.nearby_restaurants]
        if not pool:
            return with_meals, 0.0

        used: set[str] = set()
        meal_cost = 0.0

        for slot in self.meals_for_span(activities):
            venue = self.pick_venue(pool, used, slot.prefer_cafe)
            if venue is None:
                logger.debug("Day %d: no venue left for %s", day_number, slot.key)
                continue

            meal = self._meal_activity(slot, venue, day_number)
            with_meals.insert(self._insert_index(with_meals, slot.time), meal)
            used.add(venue.name)
            meal_cost += slot.cost

        with_meals.sort(key=lambda a: a.start_minute)
        return with_meals, meal_cost

    @staticmethod
    def meals_for_span(activities: list[ScheduledActivity]) -> list[MealSlot]:
        """Meals whose slot falls inside the day's activity span (with tolerance)."""
        first = activities[0].start_minute if activities else MORNING_START
        last = activities[-1].end_minute if activities else DAY_END

        slots: list[MealSlot] = []
        if first <= BREAKFAST_TIME + 60:
            slots.append(MEAL_SLOTS["breakfast"])
        if first <= MORNING_SNACK_TIME and last >= MORNING_SNACK_TIME:
            slots.append(MEAL_SLOTS["morning_snack"])
        if first <= LUNCH_TIME and last >= LUNCH_TIME - 30:
            slots.append(MEAL_SLOTS["lunch"])
        if first <= EVENING_SNACK_TIME and last >= EVENING_SNACK_TIME:
            slots.append(MEAL_SLOTS["evening_snack"])
        if last >= DINNER_TIME - 60:
            slots.append(MEAL_SLOTS["dinner"])
        return slots

    @staticmethod
    def pick_venue(
        pool: list[NearbyPlace],
        used: set[str],
        prefer_cafe: bool,
    ) -> NearbyPlace | None:
        available = [r for r in pool if r.name not in used]
        if not available:
            return None

        def rank(venue: NearbyPlace) -> tuple[int, float, float]:
            type_penalty = 0 if _is_cafe(venue) == prefer_cafe else 1
            return (type_penalty, -(venue.rating or 0.0), venue.distance or 0.0)

        return min(available, key=rank)

    @staticmethod
    def _insert_index(activities: list[ScheduledActivity], minute: int) -> int:
        for idx, activity in enumerate(activities):
            if activity.start_minute > minute:
                return idx
        return len(activities)

    @staticmethod
    def _meal_activity(slot: MealSlot, venue: NearbyPlace, day_number: int) -> ScheduledActivity:
        end = slot.time + slot.duration
        return ScheduledActivity(
            id=f"{slot.key}-{day_number}",
            day=day_number,
            activity_type="meal",
            name=venue.name,
            category="restaurant",
            coordinates=venue.coordinates,
            start_minute=slot.time,
            end_minute=end,
            start_time=format_minutes(slot.time),
            end_time=format_minutes(end),
            duration=slot.duration,
            time_slot=time_slot_for(slot.time),
            fatigue_impact=MEAL_FATIGUE_IMPACT,
            estimated_cost=slot.cost,
            best_time_reason=slot.label,
        )
