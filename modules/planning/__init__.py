"""modules/planning: Region clustering, day scheduling and itinerary assembly."""

from modules.planning.itinerary_builder import ItineraryBuilder, ItineraryInputError
from modules.planning.day_scheduler import DayScheduler
from modules.planning.meal_planner import MealPlanner
from modules.planning.region_clustering import cluster_by_proximity

__all__ = [
    "ItineraryBuilder",
    "ItineraryInputError",
    "DayScheduler",
    "MealPlanner",
    "cluster_by_proximity",
]
