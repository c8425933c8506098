"""
schemas/itinerary.py
--------------------
Dataclass definitions for the output itinerary structures.

Times are minutes from midnight internally (start_minute / end_minute) and
"HH:MM" strings for presentation. Nightlife visits can run past 24:00, so the
strings are not guaranteed to be valid clock times.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Optional

from schemas.place import Coords
import config


@dataclass
class TripBudget:
    """
    Optional spending envelope for the whole trip.
    Only used to scale category cost estimates when entry fees are unknown.
    """
    total: float = 0.0
    currency: str = config.DEFAULT_CURRENCY
    per_person: bool = False


@dataclass(frozen=True)
class TravelSegment:
    distance_km: float = 0.0
    duration_minutes: int = 0
    mode: str = "auto"                 # "car" | "auto"


@dataclass(frozen=True)
class ScheduledActivity:
    """
    One scheduled unit within a day. Immutable once emitted.

    activity_type:
      "visit" : time spent at a PlaceKnowledge
      "travel": movement towards the next visit (travel is set)
      "meal"  : breakfast / snack / lunch / dinner at a nearby venue
    """
    id: str
    day: int
    activity_type: str
    name: str
    category: str
    coordinates: Coords
    start_minute: int
    end_minute: int
    start_time: str
    end_time: str
    duration: int
    time_slot: str                       # morning | afternoon | evening | night
    fatigue_impact: int = 0
    estimated_cost: float = 0.0
    crowd_level: Optional[str] = None    # low | medium | high (visits only)
    best_time_reason: str = ""
    travel: Optional[TravelSegment] = None


@dataclass
class PlaceRecommendation:
    name: str = ""
    category: str = ""
    coordinates: Coords = field(default_factory=Coords)
    distance: Optional[float] = None
    reason: str = ""
    score: float = 0.0
    map_url: str = ""
    google_maps_url: str = ""


@dataclass
class DayItinerary:
    """One calendar day's scheduled activities."""
    day: int = 0
    date: str = ""                       # ISO-8601 date
    activities: list[ScheduledActivity] = field(default_factory=list)
    total_fatigue: int = 0
    total_cost: float = 0.0
    travel_distance: float = 0.0         # km between consecutive visits
    recommendations: list[PlaceRecommendation] = field(default_factory=list)

    @property
    def visits(self) -> list[ScheduledActivity]:
        return [a for a in self.activities if a.activity_type == "visit"]


@dataclass
class ItinerarySummary:
    total_days: int = 0
    total_cost: float = 0.0
    places_visited: int = 0
    distance_traveled: float = 0.0
    average_fatigue_per_day: int = 0
    missing_categories: list[str] = field(default_factory=list)


@dataclass
class GeneratedItinerary:
    """
    Top-level output of the planner.
    route is the ordered list of visit coordinates across all days (map polyline).
    """
    days: list[DayItinerary] = field(default_factory=list)
    route: list[Coords] = field(default_factory=list)
    summary: ItinerarySummary = field(default_factory=ItinerarySummary)
    generated_at: str = ""               # ISO-8601 timestamp
