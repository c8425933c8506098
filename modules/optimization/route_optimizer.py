"""
modules/optimization/route_optimizer.py
-----------------------------------------
Intra-day visit ordering.

The optimizer is an awaited collaborator of the ItineraryBuilder. It answers
with positions into the list it was given (not names), so the caller maps
the answer back onto its own records without any lookup by name.

NearestNeighborOptimizer:
    path = [0]
    repeat: append the unvisited place closest to path[-1]
    ties → lowest index
"""

from __future__ import annotations
from abc import ABC, abstractmethod
import math

from schemas.place import PlaceKnowledge
from modules.tool_usage.distance_tool import DistanceTool


class RouteOptimizer(ABC):
    """Base interface. Subclasses may call out to remote routing services."""

    @abstractmethod
    async def optimize(self, places: list[PlaceKnowledge]) -> list[int]:
        """
        Args:
            places: One day's places, in any order.

        Returns:
            A permutation of range(len(places)) giving the visiting order.
        """


class NearestNeighborOptimizer(RouteOptimizer):

    def __init__(self, distance_tool: DistanceTool | None = None):
        self.distance_tool = distance_tool or DistanceTool()

    async def optimize(self, places: list[PlaceKnowledge]) -> list[int]:
        if not places:
            return []

        order = [0]
        remaining = set(range(1, len(places)))
        while remaining:
            current = places[order[-1]].coordinates
            nearest = None
            min_dist = math.inf
            for idx in sorted(remaining):
                dist = self.distance_tool.between(current, places[idx].coordinates)
                if dist < min_dist:
                    min_dist = dist
                    nearest = idx
            order.append(nearest)
            remaining.discard(nearest)
        return order


def apply_order(places: list[PlaceKnowledge], order: list[int]) -> list[PlaceKnowledge]:
    """
    Reorder places by optimizer output. Out-of-range and repeated positions are
    ignored; positions the optimizer left out are appended in input order.
    """
    seen: set[int] = set()
    ordered: list[PlaceKnowledge] = []
    for idx in order:
        if 0 <= idx < len(places) and idx not in seen:
            seen.add(idx)
            ordered.append(places[idx])
    ordered.extend(p for i, p in enumerate(places) if i not in seen)
    return ordered
