import asyncio
from datetime import date

import pytest

from schemas.itinerary import TripBudget
from schemas.place import Coords, PlaceCategory, PlaceKnowledge
from modules.optimization.route_optimizer import RouteOptimizer
from modules.planning.itinerary_builder import (
    ItineraryBuilder,
    ItineraryInputError,
    days_between,
    find_missing_categories,
)


def make_place(name, lat, lng=73.80, category=PlaceCategory.ACTIVITY, duration=60, **kwargs):
    return PlaceKnowledge(
        name=name,
        coordinates=Coords(lat, lng),
        category=category,
        typical_duration=duration,
        **kwargs,
    )


class ReversingOptimizer(RouteOptimizer):
    """Records every call and visits places in reverse."""

    def __init__(self):
        self.calls = []

    async def optimize(self, places):
        self.calls.append([p.name for p in places])
        return list(reversed(range(len(places))))


@pytest.fixture
def two_regions():
    north = [make_place("n1", 15.50), make_place("n2", 15.53), make_place("n3", 15.56, 73.82)]
    south = [make_place("s1", 16.58), make_place("s2", 16.61), make_place("s3", 16.63, 73.78)]
    return north + south


def build(places, start, end, budget=None, **kwargs):
    return asyncio.run(ItineraryBuilder(**kwargs).build(places, start, end, budget))


def test_days_between_is_inclusive():
    assert days_between(date(2025, 1, 10), date(2025, 1, 10)) == 1
    assert days_between(date(2025, 1, 10), date(2025, 1, 12)) == 3


def test_day_count_matches_date_range(two_regions):
    itinerary = build(two_regions, "2025-01-30", "2025-02-03")
    assert len(itinerary.days) == 5
    assert [d.date for d in itinerary.days] == [
        "2025-01-30", "2025-01-31", "2025-02-01", "2025-02-02", "2025-02-03",
    ]
    assert [d.day for d in itinerary.days] == [1, 2, 3, 4, 5]
    assert itinerary.summary.total_days == 5


def test_empty_trip_still_has_every_day():
    itinerary = build([], date(2025, 1, 10), date(2025, 1, 12))
    assert len(itinerary.days) == 3
    assert all(d.activities == [] for d in itinerary.days)
    assert itinerary.summary.places_visited == 0
    assert itinerary.summary.missing_categories == ["beach", "restaurant", "landmark"]


def test_two_regions_two_days(two_regions):
    itinerary = build(two_regions, "2025-01-10", "2025-01-11")

    day_one, day_two = itinerary.days
    assert {v.name for v in day_one.visits} == {"n1", "n2", "n3"}
    assert {v.name for v in day_two.visits} == {"s1", "s2", "s3"}
    assert itinerary.summary.places_visited == 6


def test_every_activity_belongs_to_its_day(two_regions):
    itinerary = build(two_regions, "2025-01-10", "2025-01-12")
    for day in itinerary.days:
        assert all(a.day == day.day for a in day.activities)
        starts = [a.start_minute for a in day.activities]
        assert starts == sorted(starts)


def test_route_follows_visits(two_regions):
    itinerary = build(two_regions, "2025-01-10", "2025-01-11")
    expected = [v.coordinates for d in itinerary.days for v in d.visits]
    assert itinerary.route == expected
    assert len(itinerary.route) == 6


def test_accommodation_filtered_but_counted_for_categories():
    places = [
        make_place("Hotel", 15.50, category=PlaceCategory.ACCOMMODATION),
        make_place("Baga Beach", 15.55, category=PlaceCategory.BEACH),
    ]
    itinerary = build(places, "2025-01-10", "2025-01-10")
    assert [v.name for v in itinerary.days[0].visits] == ["Baga Beach"]
    assert itinerary.summary.missing_categories == ["restaurant", "landmark"]


def test_summary_averages_fatigue_and_sums_cost():
    fort = make_place("Fort", 15.50, category=PlaceCategory.FORT)
    itinerary = build([fort], "2025-01-10", "2025-01-11")

    assert itinerary.days[0].total_fatigue == 35
    assert itinerary.days[1].total_fatigue == 0
    assert itinerary.summary.average_fatigue_per_day == 18
    assert itinerary.summary.total_cost == 100


def test_budget_scales_unknown_costs():
    landmark = make_place("Basilica", 15.50, category=PlaceCategory.LANDMARK)
    itinerary = build([landmark], "2025-01-10", "2025-01-11", TripBudget(total=20000))
    # daily 10000 × 3 %
    assert itinerary.days[0].visits[0].estimated_cost == 300


def test_distance_summed_over_days(two_regions):
    itinerary = build(two_regions, "2025-01-10", "2025-01-11")
    total = sum(d.travel_distance for d in itinerary.days)
    assert itinerary.summary.distance_traveled == pytest.approx(total, abs=0.05)
    assert itinerary.summary.distance_traveled > 0


def test_optimizer_called_only_for_multi_place_days():
    optimizer = ReversingOptimizer()
    places = [make_place("a", 15.50), make_place("b", 15.51), make_place("solo", 17.0)]
    itinerary = build(places, "2025-01-10", "2025-01-11", route_optimizer=optimizer)

    assert optimizer.calls == [["a", "b"]]
    assert [v.name for v in itinerary.days[0].visits] == ["b", "a"]
    assert [v.name for v in itinerary.days[1].visits] == ["solo"]


def test_duplicate_names_survive_reordering():
    optimizer = ReversingOptimizer()
    places = [make_place("Market", 15.50), make_place("Market", 15.52)]
    itinerary = build(places, "2025-01-10", "2025-01-10", route_optimizer=optimizer)

    coords = [v.coordinates for v in itinerary.days[0].visits]
    assert coords == [Coords(15.52, 73.80), Coords(15.50, 73.80)]


def test_build_is_deterministic(two_regions):
    first = build(two_regions, "2025-01-10", "2025-01-12")
    second = build(two_regions, "2025-01-10", "2025-01-12")
    assert first.days == second.days
    assert first.route == second.route
    assert first.summary == second.summary


def test_build_sync_matches_async(two_regions):
    builder = ItineraryBuilder()
    sync_result = builder.build_sync(two_regions, "2025-01-10", "2025-01-11")
    assert sync_result.days == build(two_regions, "2025-01-10", "2025-01-11").days


def test_end_before_start_rejected():
    with pytest.raises(ItineraryInputError):
        build([], "2025-01-12", "2025-01-10")


@pytest.mark.parametrize("bad", ["2025-13-01", "next tuesday", None])
def test_malformed_dates_rejected(bad):
    with pytest.raises(ItineraryInputError):
        build([], bad, "2025-01-10")


def test_missing_categories_order():
    places = [make_place("x", 15.5, category=PlaceCategory.LANDMARK)]
    assert find_missing_categories(places) == ["beach", "restaurant"]
