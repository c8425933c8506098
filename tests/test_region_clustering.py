from schemas.place import Coords, PlaceCategory, PlaceKnowledge
from modules.planning.region_clustering import (
    cluster_by_proximity,
    group_by_region,
    split_region_into_days,
)
from modules.tool_usage.distance_tool import DistanceTool

# 0.01° of latitude ≈ 1.1 km; 1° ≈ 111 km


def make_place(name, lat, lng=73.80):
    return PlaceKnowledge(name=name, coordinates=Coords(lat, lng), category=PlaceCategory.LANDMARK)


def names(cluster):
    return [p.name for p in cluster]


def test_fewer_places_than_days_gives_singletons():
    places = [make_place("a", 15.50), make_place("b", 15.51)]
    assert [names(c) for c in cluster_by_proximity(places, 3)] == [["a"], ["b"]]


def test_single_day_keeps_far_apart_places_together():
    # ≈ 150 km apart: two regions, but only one day available
    places = [make_place("north", 16.85), make_place("south", 15.50)]
    clusters = cluster_by_proximity(places, 1)
    assert len(clusters) == 1
    assert sorted(names(clusters[0])) == ["north", "south"]


def test_two_regions_two_days():
    region_a = [make_place("a1", 15.50), make_place("a2", 15.53), make_place("a3", 15.56, 73.82)]
    region_b = [make_place("b1", 16.58), make_place("b2", 16.61), make_place("b3", 16.63, 73.78)]
    clusters = cluster_by_proximity(region_a + region_b, 2)

    assert len(clusters) == 2
    assert names(clusters[0]) == ["a1", "a2", "a3"]
    assert names(clusters[1]) == ["b1", "b2", "b3"]


def test_leftover_region_joins_nearest_cluster():
    places = [
        make_place("home-1", 0.0, 0.0),
        make_place("home-2", 0.01, 0.0),
        make_place("north", 2.0, 0.0),     # ≈ 222 km from home
        make_place("south", -2.0, 0.0),    # ≈ 222 km from home, 444 km from north
    ]
    clusters = cluster_by_proximity(places, 2)
    assert [names(c) for c in clusters] == [["home-1", "home-2", "south"], ["north"]]


def test_one_region_split_across_days():
    places = [make_place(f"p{i}", 15.50 + i * 0.01) for i in range(6)]
    clusters = cluster_by_proximity(places, 3)

    assert len(clusters) == 3
    assert [len(c) for c in clusters] == [2, 2, 2]
    assert sorted(p.name for c in clusters for p in c) == sorted(p.name for p in places)


def test_spare_days_filled_by_halving_largest_cluster():
    region_a = [make_place(f"a{i}", 15.50 + i * 0.01) for i in range(5)]
    lonely = [make_place("far", 18.0)]
    clusters = cluster_by_proximity(region_a + lonely, 4)

    assert len(clusters) == 4
    assert sorted(len(c) for c in clusters) == [1, 1, 2, 2]
    assert all(c for c in clusters)


def test_never_more_clusters_than_days():
    places = [make_place(f"p{i}", 10.0 + i * 2.0) for i in range(7)]   # every place its own region
    for num_days in (1, 2, 3, 6):
        assert len(cluster_by_proximity(places, num_days)) <= num_days


def test_regions_respect_seed_distance():
    places = [make_place(f"p{i}", 15.0 + i * 0.3) for i in range(10)]   # ≈ 33 km steps
    tool = DistanceTool()
    for region in group_by_region(places, 100.0):
        seed = region[0]
        for member in region:
            assert tool.between(seed.coordinates, member.coordinates) <= 100.0


def test_regions_sorted_largest_first():
    places = [make_place("solo", 20.0), make_place("x1", 15.0), make_place("x2", 15.01)]
    regions = group_by_region(places, 100.0)
    assert [len(r) for r in regions] == [2, 1]


def test_duplicate_names_are_distinct_places():
    places = [make_place("Market", 15.50), make_place("Market", 15.52)]
    regions = group_by_region(places, 100.0)
    assert len(regions) == 1
    assert len(regions[0]) == 2


def test_split_region_small_region_gives_singletons():
    region = [make_place("a", 15.50), make_place("b", 15.51)]
    assert [names(c) for c in split_region_into_days(region, 3)] == [["a"], ["b"]]


def test_split_region_grows_from_nearest_neighbours():
    # Two tight pairs far apart inside one region
    region = [
        make_place("w1", 15.50, 73.50),
        make_place("e1", 15.50, 74.00),
        make_place("w2", 15.50, 73.51),
        make_place("e2", 15.50, 74.01),
    ]
    clusters = split_region_into_days(region, 2)
    assert [names(c) for c in clusters] == [["w1", "w2"], ["e1", "e2"]]
