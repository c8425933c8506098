import pytest

from schemas.place import PlaceCategory, PlaceKnowledge, TimeOfDay
from modules.planning.visit_timing import optimal_time_of_day, sort_by_time_of_day


def make_place(name="P", category=PlaceCategory.ACTIVITY, best_time="", preferred=None):
    return PlaceKnowledge(
        name=name,
        category=category,
        best_time_to_visit=best_time,
        preferred_time=preferred,
    )


@pytest.mark.parametrize("text, expected", [
    ("Catch the sunrise", TimeOfDay.MORNING),
    ("Early morning is quiet", TimeOfDay.MORNING),
    ("Stunning SUNSET views", TimeOfDay.EVENING),
    ("Lively in the evening", TimeOfDay.EVENING),
    ("Best at night", TimeOfDay.NIGHT),
    ("Late afternoon light", TimeOfDay.AFTERNOON),
    ("Morning or evening", TimeOfDay.MORNING),
])
def test_keywords(text, expected):
    assert optimal_time_of_day(make_place(best_time=text)) == expected


@pytest.mark.parametrize("category, expected", [
    (PlaceCategory.FORT, TimeOfDay.MORNING),
    (PlaceCategory.LANDMARK, TimeOfDay.MORNING),
    (PlaceCategory.BEACH, TimeOfDay.EVENING),
    (PlaceCategory.NIGHTLIFE, TimeOfDay.NIGHT),
    (PlaceCategory.ACTIVITY, TimeOfDay.FLEXIBLE),
    (PlaceCategory.DESTINATION, TimeOfDay.FLEXIBLE),
])
def test_category_defaults(category, expected):
    assert optimal_time_of_day(make_place(category=category)) == expected


def test_keyword_beats_category():
    beach = make_place(category=PlaceCategory.BEACH, best_time="sunrise walks")
    assert optimal_time_of_day(beach) == TimeOfDay.MORNING


def test_nightlife_text_in_afternoon_still_night():
    club = make_place(category=PlaceCategory.NIGHTLIFE, best_time="afternoon happy hour")
    assert optimal_time_of_day(club) == TimeOfDay.NIGHT


def test_structured_hint_wins():
    fort = make_place(category=PlaceCategory.FORT, best_time="sunset", preferred="afternoon")
    assert optimal_time_of_day(fort) == TimeOfDay.AFTERNOON


def test_sort_order_and_stability():
    places = [
        make_place("night", best_time="night"),
        make_place("eve", best_time="evening"),
        make_place("flex-1"),
        make_place("aft", best_time="afternoon"),
        make_place("morn", best_time="morning"),
        make_place("flex-2"),
    ]
    names = [p.name for p in sort_by_time_of_day(places)]
    assert names == ["morn", "flex-1", "flex-2", "aft", "eve", "night"]
