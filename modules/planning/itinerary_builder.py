"""
modules/planning/itinerary_builder.py
---------------------------------------
Multi-day itinerary assembly.

Pipeline:
  1. num_days = inclusive calendar days between start and end.
  2. Accommodation removed from the visitable set.
  3. cluster_by_proximity → one place cluster per day (missing clusters → empty day).
  4. For each day, sequentially:
       - clusters with > 1 place are reordered by the RouteOptimizer (awaited)
       - DayScheduler builds the DayItinerary
  5. route = coordinates of every visit, day by day, in schedule order.
  6. Summary:
       total_cost              Σ day.total_cost
       places_visited          number of visit activities
       distance_traveled       Σ day.travel_distance (1 dp)
       average_fatigue_per_day Σ day.total_fatigue / num_days (rounded)
       missing_categories      beach / restaurant / landmark absent from the input
"""

from __future__ import annotations
import asyncio
from datetime import date, datetime, timedelta, timezone
import logging

from schemas.itinerary import (
    DayItinerary,
    GeneratedItinerary,
    ItinerarySummary,
    TripBudget,
)
from schemas.place import Coords, PlaceCategory, PlaceKnowledge
from modules.optimization.route_optimizer import NearestNeighborOptimizer, RouteOptimizer, apply_order
from modules.planning.day_scheduler import DayScheduler
from modules.planning.region_clustering import cluster_by_proximity
from modules.tool_usage.time_tool import round_1dp, round_half_up

logger = logging.getLogger(__name__)

RECOMMENDED_CATEGORIES: list[PlaceCategory] = [
    PlaceCategory.BEACH,
    PlaceCategory.RESTAURANT,
    PlaceCategory.LANDMARK,
]


class ItineraryInputError(ValueError):
    """Raised when dates fall outside the planner's input contract."""


def parse_trip_date(value: date | str) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(value)
    except (TypeError, ValueError) as exc:
        raise ItineraryInputError(f"Invalid trip date: {value!r}") from exc


def days_between(start: date, end: date) -> int:
    """Inclusive calendar-day count (same day → 1)."""
    return (end - start).days + 1


def find_missing_categories(places: list[PlaceKnowledge]) -> list[str]:
    present = {p.category for p in places}
    return [c.value for c in RECOMMENDED_CATEGORIES if c not in present]


class ItineraryBuilder:
    """
    Drives clustering and per-day scheduling across the full trip.
    Days are independent but built one after another.
    """

    def __init__(
        self,
        scheduler: DayScheduler | None = None,
        route_optimizer: RouteOptimizer | None = None,
        max_distance_km: float | None = None,
    ):
        self.scheduler       = scheduler       or DayScheduler()
        self.route_optimizer = route_optimizer or NearestNeighborOptimizer()
        self.max_distance_km = max_distance_km

    # ── Public entry points ───────────────────────────────────────────────────

    async def build(
        self,
        knowledge: list[PlaceKnowledge],
        start: date | str,
        end: date | str,
        budget: TripBudget | None = None,
    ) -> GeneratedItinerary:
        """
        Generate a complete multi-day itinerary.

        Args:
            knowledge: Researched places, accommodation included.
            start:     First day of trip (date or "YYYY-MM-DD").
            end:       Last day of trip, inclusive.
            budget:    Optional trip budget for cost estimates.

        Raises:
            ItineraryInputError: malformed dates or end before start.
        """
        start_date = parse_trip_date(start)
        end_date = parse_trip_date(end)
        if end_date < start_date:
            raise ItineraryInputError(f"Trip ends ({end_date}) before it starts ({start_date})")

        num_days = days_between(start_date, end_date)
        logger.info(
            "Generating itinerary for %d places, %s to %s (%d days)",
            len(knowledge), start_date, end_date, num_days,
        )

        visitable = [p for p in knowledge if p.category != PlaceCategory.ACCOMMODATION]
        clusters = cluster_by_proximity(visitable, num_days, self.max_distance_km)

        days: list[DayItinerary] = []
        for day_idx in range(num_days):
            day_places = clusters[day_idx] if day_idx < len(clusters) else []
            if len(day_places) > 1:
                order = await self.route_optimizer.optimize(day_places)
                day_places = apply_order(day_places, order)

            days.append(self.scheduler.schedule(
                day_number=day_idx + 1,
                date=(start_date + timedelta(days=day_idx)).isoformat(),
                places=day_places,
                budget=budget,
                num_days=num_days,
            ))

        route: list[Coords] = [
            activity.coordinates
            for day in days
            for activity in day.activities
            if activity.activity_type == "visit"
        ]

        summary = ItinerarySummary(
            total_days=num_days,
            total_cost=sum(d.total_cost for d in days),
            places_visited=sum(len(d.visits) for d in days),
            distance_traveled=round_1dp(sum(d.travel_distance for d in days)),
            average_fatigue_per_day=round_half_up(sum(d.total_fatigue for d in days) / num_days),
            missing_categories=find_missing_categories(knowledge),
        )

        logger.info(
            "Generated %d days, %d visits, %.1f km total",
            len(days), summary.places_visited, summary.distance_traveled,
        )

        return GeneratedItinerary(
            days=days,
            route=route,
            summary=summary,
            generated_at=datetime.now(timezone.utc).isoformat(),
        )

    def build_sync(
        self,
        knowledge: list[PlaceKnowledge],
        start: date | str,
        end: date | str,
        budget: TripBudget | None = None,
    ) -> GeneratedItinerary:
        """Blocking wrapper around build() for callers without an event loop."""
        return asyncio.run(self.build(knowledge, start, end, budget))
