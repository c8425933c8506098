"""
modules/planning/region_clustering.py
---------------------------------------
Partitions a trip's places into per-day clusters so that no single day
requires unreasonable travel.

Pipeline:
  1. group_by_region  : greedy seeding: every unassigned place within
                         max_distance_km of the region *seed* joins it.
                         Regions sorted by size, largest first.
  2a. regions ≥ days  : one region per day for the largest `num_days`;
                         every leftover region is appended to the cluster
                         whose (current) centroid is nearest.
  2b. regions < days  : regions bigger than their share of days are split
                         by nearest-neighbour growth (split_region_into_days);
                         spare days are then filled by halving the largest
                         cluster while any cluster holds more than 2 places.
  3. empty clusters dropped.

Places are tracked by their position in the input list, so two places that
share a name are still treated as distinct.
Ties on distance resolve to the first candidate found.
"""

from __future__ import annotations
import logging
import math

from schemas.place import PlaceKnowledge
from modules.tool_usage.distance_tool import DistanceTool
import config

logger = logging.getLogger(__name__)

_distance = DistanceTool()


def cluster_by_proximity(
    places: list[PlaceKnowledge],
    num_days: int,
    max_distance_km: float | None = None,
) -> list[list[PlaceKnowledge]]:
    """
    Distribute places across at most num_days geographically coherent clusters.

    Args:
        places:          Visitable places (accommodation already removed).
        num_days:        Number of calendar days in the trip.
        max_distance_km: Region radius around a seed. Defaults to
                         config.MAX_SAME_DAY_DISTANCE_KM.

    Returns:
        Non-empty clusters; len ≤ num_days except when places ≤ num_days,
        in which case every place is its own cluster.
    """
    if len(places) <= num_days:
        return [[p] for p in places]

    if max_distance_km is None:
        max_distance_km = config.MAX_SAME_DAY_DISTANCE_KM

    regions = group_by_region(places, max_distance_km)
    logger.info("Found %d distinct geographic regions for %d days", len(regions), num_days)

    clusters: list[list[PlaceKnowledge]] = []

    if len(regions) >= num_days:
        if len(regions) > num_days:
            logger.warning(
                "%d regions but only %d days; some regions will share days",
                len(regions), num_days,
            )
        clusters = [list(region) for region in regions[:num_days]]

        for region in regions[num_days:]:
            region_centroid = _distance.centroid(p.coordinates for p in region)
            nearest_idx = 0
            min_dist = math.inf
            for idx, cluster in enumerate(clusters):
                dist = _distance.between(
                    region_centroid, _distance.centroid(p.coordinates for p in cluster)
                )
                if dist < min_dist:
                    min_dist = dist
                    nearest_idx = idx
            clusters[nearest_idx].extend(region)
    else:
        days_per_region = math.ceil(num_days / len(regions))

        for region in regions:
            if len(region) <= days_per_region or len(clusters) >= num_days - 1:
                clusters.append(list(region))
            else:
                share = min(days_per_region, num_days - len(clusters))
                clusters.extend(split_region_into_days(region, share))

        # Spare capacity: keep halving the largest cluster.
        while len(clusters) < num_days and any(len(c) > 2 for c in clusters):
            largest_idx = 0
            largest_size = 0
            for idx, cluster in enumerate(clusters):
                if len(cluster) > largest_size:
                    largest_size = len(cluster)
                    largest_idx = idx
            if largest_size <= 2:
                break
            to_split = clusters[largest_idx]
            half = math.ceil(len(to_split) / 2)
            clusters[largest_idx] = to_split[:half]
            clusters.append(to_split[half:])

    return [c for c in clusters if c]


def group_by_region(
    places: list[PlaceKnowledge],
    max_distance_km: float,
) -> list[list[PlaceKnowledge]]:
    """
    Greedy seed-based grouping. A place joins a region when it lies within
    max_distance_km of the region's seed (the first place of the region).
    """
    regions: list[list[PlaceKnowledge]] = []
    assigned: set[int] = set()

    for seed_idx, seed in enumerate(places):
        if seed_idx in assigned:
            continue
        region = [seed]
        assigned.add(seed_idx)

        for other_idx, other in enumerate(places):
            if other_idx in assigned:
                continue
            if _distance.between(seed.coordinates, other.coordinates) <= max_distance_km:
                region.append(other)
                assigned.add(other_idx)

        regions.append(region)

    # Stable: equal-sized regions keep discovery order.
    regions.sort(key=len, reverse=True)
    return regions


def split_region_into_days(
    region: list[PlaceKnowledge],
    num_days: int,
) -> list[list[PlaceKnowledge]]:
    """
    Split one region into up to num_days clusters of ≤ ceil(len/num_days)
    places each, growing every cluster from the first unassigned place by
    repeatedly adding the place nearest to the cluster's running centroid.
    """
    if len(region) <= num_days:
        return [[p] for p in region]

    clusters: list[list[PlaceKnowledge]] = []
    assigned: set[int] = set()
    places_per_day = math.ceil(len(region) / num_days)

    for _ in range(num_days):
        if len(assigned) >= len(region):
            break
        seed_idx = next(i for i in range(len(region)) if i not in assigned)
        cluster = [region[seed_idx]]
        assigned.add(seed_idx)

        while len(cluster) < places_per_day and len(assigned) < len(region):
            centroid = _distance.centroid(p.coordinates for p in cluster)
            nearest_idx = None
            min_dist = math.inf
            for idx, place in enumerate(region):
                if idx in assigned:
                    continue
                dist = _distance.between(centroid, place.coordinates)
                if dist < min_dist:
                    min_dist = dist
                    nearest_idx = idx
            if nearest_idx is None:
                break
            cluster.append(region[nearest_idx])
            assigned.add(nearest_idx)

        clusters.append(cluster)

    return clusters
