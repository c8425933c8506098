"""
modules/planning/day_scheduler.py
-----------------------------------
Builds one day's time-ordered activity list from that day's place cluster.

For each place, in preferred time-of-day order (ties keep route order):
  start = max(t_cur, period floor, opening time, t_cur + travel)
  skip   if start + typical_duration > closing time
  skip   if start ≥ 23:00 (nightlife exempt)
  emit   travel segment (when a previous visit exists), then the visit
  t_cur  = visit end + BUFFER_MINUTES

Then meals are slotted in (MealPlanner) and the day gets its
recommendations (DayRecommender). Unsatisfiable places are dropped silently.

Per-visit lookup tables:
  fatigue  beach 20 | fort 35 | landmark 25 | activity 40 | nightlife 30
           restaurant -5 | destination 20
  cost     entry_fee when known; otherwise a category default, or a
           category share of the daily budget when a budget is given.
"""

from __future__ import annotations
import logging

from schemas.itinerary import DayItinerary, ScheduledActivity, TravelSegment, TripBudget
from schemas.place import PlaceCategory, PlaceKnowledge
from modules.tool_usage.distance_tool import DistanceTool
from modules.tool_usage.time_tool import (
    DAY_END,
    MINUTES_PER_DAY,
    MORNING_START,
    TimeTool,
    format_minutes,
    parse_hhmm,
    parse_window,
    round_1dp,
    round_half_up,
    time_slot_for,
)
from modules.planning.meal_planner import MealPlanner
from modules.planning.visit_timing import BUCKET_FLOOR, optimal_time_of_day, sort_by_time_of_day
from modules.recommendation.day_recommender import DayRecommender
import config

logger = logging.getLogger(__name__)


_FATIGUE_BY_CATEGORY: dict[PlaceCategory, int] = {
    PlaceCategory.BEACH:       20,
    PlaceCategory.FORT:        35,
    PlaceCategory.LANDMARK:    25,
    PlaceCategory.ACTIVITY:    40,
    PlaceCategory.NIGHTLIFE:   30,
    PlaceCategory.RESTAURANT:  -5,
    PlaceCategory.DESTINATION: 20,
}
_DEFAULT_FATIGUE = 20

_DEFAULT_COST_BY_CATEGORY: dict[PlaceCategory, float] = {
    PlaceCategory.BEACH:       0,
    PlaceCategory.FORT:        100,
    PlaceCategory.LANDMARK:    150,
    PlaceCategory.ACTIVITY:    500,
    PlaceCategory.NIGHTLIFE:   1000,
    PlaceCategory.RESTAURANT:  400,
    PlaceCategory.DESTINATION: 100,
}
_DEFAULT_COST = 100

# Share of the daily budget a single visit of this category is expected to take
_BUDGET_SHARE_BY_CATEGORY: dict[PlaceCategory, float] = {
    PlaceCategory.BEACH:       0,
    PlaceCategory.FORT:        0.02,
    PlaceCategory.LANDMARK:    0.03,
    PlaceCategory.ACTIVITY:    0.1,
    PlaceCategory.NIGHTLIFE:   0.2,
    PlaceCategory.RESTAURANT:  0.08,
    PlaceCategory.DESTINATION: 0.02,
}
_DEFAULT_BUDGET_SHARE = 0.05


def fatigue_for(category: PlaceCategory) -> int:
    return _FATIGUE_BY_CATEGORY.get(category, _DEFAULT_FATIGUE)


def estimate_cost(category: PlaceCategory, budget: TripBudget | None, num_days: int) -> float:
    """Category-based cost estimate for a visit with no known entry fee."""
    if budget is not None:
        daily_budget = budget.total / max(num_days, 1)
        return round_half_up(daily_budget * _BUDGET_SHARE_BY_CATEGORY.get(category, _DEFAULT_BUDGET_SHARE))
    return _DEFAULT_COST_BY_CATEGORY.get(category, _DEFAULT_COST)


def crowd_level(minutes: int, peak_hours: list[str]) -> str:
    """
    "high"  : start falls inside a peak window
    "medium": start within 60 minutes of a peak window's start
    "low"   : otherwise

    Entries that are not "HH:MM-HH:MM" windows are ignored.
    """
    windows: list[str] = []
    for window in peak_hours:
        try:
            parse_window(window)
        except ValueError:
            logger.debug("Ignoring unparseable peak window %r", window)
            continue
        windows.append(window)

    for window in windows:
        if TimeTool.is_within_window(minutes, window):
            return "high"
    for window in windows:
        peak_start, _ = parse_window(window)
        if abs(minutes - peak_start) < 60:
            return "medium"
    return "low"


def opening_window(place: PlaceKnowledge) -> tuple[int, int]:
    """(open, close) in minutes; unknown hours → 08:00–23:00, overnight close pushed past midnight."""
    if place.opening_hours is None:
        return MORNING_START, DAY_END
    open_minute = parse_hhmm(place.opening_hours.open)
    close_minute = parse_hhmm(place.opening_hours.close)
    if close_minute < open_minute:
        close_minute += MINUTES_PER_DAY
    return open_minute, close_minute


class DayScheduler:
    """
    Schedules a single day. One instance can be reused across days; it holds
    no per-day state.
    """

    def __init__(
        self,
        distance_tool: DistanceTool | None = None,
        time_tool: TimeTool | None = None,
        meal_planner: MealPlanner | None = None,
        recommender: DayRecommender | None = None,
        buffer_minutes: int = config.BUFFER_MINUTES,
    ):
        self.distance_tool  = distance_tool  or DistanceTool()
        self.time_tool      = time_tool      or TimeTool()
        self.meal_planner   = meal_planner   or MealPlanner()
        self.recommender    = recommender    or DayRecommender()
        self.buffer_minutes = buffer_minutes

    def schedule(
        self,
        day_number: int,
        date: str,
        places: list[PlaceKnowledge],
        budget: TripBudget | None = None,
        num_days: int = 1,
    ) -> DayItinerary:
        """
        Args:
            day_number: 1-based day index.
            date:       ISO date string for the day.
            places:     The day's cluster, already in visiting order.
            budget:     Optional trip budget for cost estimates.
            num_days:   Trip length (daily budget = total / num_days).
        """
        activities: list[ScheduledActivity] = []
        t_cur = MORNING_START
        total_fatigue = 0
        total_cost = 0.0
        visit_index = 0
        prev_visit: ScheduledActivity | None = None

        for place in sort_by_time_of_day(places):
            if place.category == PlaceCategory.ACCOMMODATION:
                continue

            start = t_cur
            floor = BUCKET_FLOOR.get(optimal_time_of_day(place))
            if floor is not None and t_cur < floor:
                start = floor

            open_minute, close_minute = opening_window(place)
            start = max(start, open_minute)

            travel: TravelSegment | None = None
            if prev_visit is not None:
                distance_km = self.distance_tool.between(prev_visit.coordinates, place.coordinates)
                travel_minutes = self.time_tool.estimate_travel_minutes(distance_km)
                start = max(start, t_cur + travel_minutes)
                travel = TravelSegment(
                    distance_km=round_1dp(distance_km),
                    duration_minutes=travel_minutes,
                    mode=self.time_tool.travel_mode(distance_km),
                )

            if start + place.typical_duration > close_minute:
                logger.debug(
                    "Day %d: skipping %s, %d min visit does not fit before %s",
                    day_number, place.name, place.typical_duration, format_minutes(close_minute),
                )
                continue
            if start >= DAY_END and place.category != PlaceCategory.NIGHTLIFE:
                logger.debug("Day %d: skipping %s, too late in the day", day_number, place.name)
                continue

            if travel is not None:
                travel_fatigue = round_half_up(travel.duration_minutes / 10)
                activities.append(ScheduledActivity(
                    id=f"travel-{day_number}-{visit_index}",
                    day=day_number,
                    activity_type="travel",
                    name=f"Travel to {place.name}",
                    category=PlaceCategory.DESTINATION.value,
                    coordinates=place.coordinates,
                    start_minute=t_cur,
                    end_minute=start,
                    start_time=format_minutes(t_cur),
                    end_time=format_minutes(start),
                    duration=start - t_cur,
                    time_slot=time_slot_for(t_cur),
                    fatigue_impact=travel_fatigue,
                    travel=travel,
                ))
                total_fatigue += travel_fatigue

            end = start + place.typical_duration
            cost = place.entry_fee if place.entry_fee is not None else estimate_cost(
                place.category, budget, num_days
            )
            fatigue = fatigue_for(place.category)
            visit = ScheduledActivity(
                id=f"visit-{day_number}-{visit_index}",
                day=day_number,
                activity_type="visit",
                name=place.name,
                category=place.category.value,
                coordinates=place.coordinates,
                start_minute=start,
                end_minute=end,
                start_time=format_minutes(start),
                end_time=format_minutes(end),
                duration=place.typical_duration,
                time_slot=time_slot_for(start),
                fatigue_impact=fatigue,
                estimated_cost=cost,
                crowd_level=crowd_level(start, place.crowd_peak_hours),
                best_time_reason=place.best_time_to_visit,
            )
            activities.append(visit)
            prev_visit = visit

            total_cost += cost
            total_fatigue += fatigue
            t_cur = end + self.buffer_minutes
            visit_index += 1

        travel_distance = 0.0
        visits = [a for a in activities if a.activity_type == "visit"]
        for prev, curr in zip(visits, visits[1:]):
            travel_distance += self.distance_tool.between(prev.coordinates, curr.coordinates)

        recommendations = self.recommender.recommend(places)
        activities, meal_cost = self.meal_planner.insert_meals(activities, day_number, places)

        return DayItinerary(
            day=day_number,
            date=date,
            activities=activities,
            total_fatigue=total_fatigue,
            total_cost=total_cost + meal_cost,
            travel_distance=round_1dp(travel_distance),
            recommendations=recommendations,
        )
