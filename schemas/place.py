"""
schemas/place.py
----------------
Dataclass definitions for the researched place data consumed by the planner.

PlaceKnowledge records are produced upstream (research step) and are treated
as read-only input by clustering and scheduling.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


class PlaceCategory(str, Enum):
    BEACH = "beach"
    FORT = "fort"
    LANDMARK = "landmark"
    ACTIVITY = "activity"
    NIGHTLIFE = "nightlife"
    RESTAURANT = "restaurant"
    DESTINATION = "destination"
    ACCOMMODATION = "accommodation"


class TimeOfDay(str, Enum):
    """Preferred visiting period. FLEXIBLE is never a schedule bucket."""
    MORNING = "morning"
    AFTERNOON = "afternoon"
    EVENING = "evening"
    NIGHT = "night"
    FLEXIBLE = "flexible"


@dataclass(frozen=True)
class Coords:
    lat: float = 0.0
    lng: float = 0.0


@dataclass
class OpeningHours:
    """
    Daily opening window as "HH:MM" strings.
    A close earlier than open means the venue stays open past midnight.
    """
    open: str = "08:00"
    close: str = "23:00"


@dataclass
class NearbyPlace:
    """A food venue found close to a researched place."""
    name: str = ""
    coordinates: Coords = field(default_factory=Coords)
    category: str = "restaurant"       # free text, e.g. "cafe" | "restaurant" | "bakery"
    rating: Optional[float] = None     # scale 1–5
    distance: Optional[float] = None   # km from the parent place


@dataclass
class PlaceKnowledge:
    """
    One point of interest.

    name is unique within a planning run by convention only; the planner
    tracks places by position, so duplicates are tolerated.
    """
    name: str = ""
    coordinates: Coords = field(default_factory=Coords)
    category: PlaceCategory = PlaceCategory.DESTINATION
    typical_duration: int = 60                     # minutes
    entry_fee: Optional[float] = None              # None → estimate from category
    opening_hours: Optional[OpeningHours] = None   # None → assume open all day
    best_time_to_visit: str = ""                   # free text, e.g. "Sunset views"
    nearby_restaurants: list[NearbyPlace] = field(default_factory=list)
    crowd_peak_hours: list[str] = field(default_factory=list)   # ["HH:MM-HH:MM", ...]
    preferred_time: Optional[TimeOfDay] = None
    # ^ structured hint; overrides keyword parsing of best_time_to_visit when set

    def __post_init__(self) -> None:
        # Accept plain strings from JSON / API layers.
        self.category = PlaceCategory(self.category)
        if self.preferred_time is not None:
            self.preferred_time = TimeOfDay(self.preferred_time)
