"""
modules/tool_usage/distance_tool.py
-------------------------------------
Arithmetic tool: great-circle distance between geographic coordinates.
Local computation, straight-line (haversine) only; no routing API involved.
"""

from __future__ import annotations
import math
from typing import Iterable

from schemas.place import Coords


_EARTH_RADIUS_KM = 6371.0


def haversine_km(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """
    Compute great-circle distance between two points using the Haversine formula.

    Args:
        lat1, lon1: Coordinates of point A (decimal degrees).
        lat2, lon2: Coordinates of point B (decimal degrees).

    Returns:
        Distance in kilometres.
    """
    phi1, phi2 = math.radians(lat1), math.radians(lat2)
    d_phi = math.radians(lat2 - lat1)
    d_lam = math.radians(lon2 - lon1)

    a = math.sin(d_phi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(d_lam / 2) ** 2
    return 2 * _EARTH_RADIUS_KM * math.atan2(math.sqrt(a), math.sqrt(1 - a))


class DistanceTool:
    """
    Coordinate arithmetic shared by clustering, scheduling and route ordering.
    """

    def between(self, a: Coords, b: Coords) -> float:
        """Distance in km between two Coords."""
        return haversine_km(a.lat, a.lng, b.lat, b.lng)

    @staticmethod
    def centroid(points: Iterable[Coords]) -> Coords:
        """
        Arithmetic mean of the given coordinates.
        Returns Coords(0, 0) for an empty input.
        """
        points = list(points)
        if not points:
            return Coords(0.0, 0.0)
        return Coords(
            lat=sum(p.lat for p in points) / len(points),
            lng=sum(p.lng for p in points) / len(points),
        )
