"""
modules/recommendation/day_recommender.py
-------------------------------------------
Suggests extra stops for a day whose plan lacks a category.

Rules (evaluated in order, result capped at MAX_RECOMMENDATIONS):
  - no restaurant among the day's places but nearby venues exist
    → recommend the first nearby venue
"""

from __future__ import annotations
from urllib.parse import quote

from schemas.itinerary import PlaceRecommendation
from schemas.place import PlaceCategory, PlaceKnowledge

MAX_RECOMMENDATIONS = 3


class DayRecommender:

    def recommend(self, places: list[PlaceKnowledge]) -> list[PlaceRecommendation]:
        recommendations: list[PlaceRecommendation] = []

        has_restaurant = any(p.category == PlaceCategory.RESTAURANT for p in places)
        nearby = [r for p in places for r in p.nearby_restaurants]

        if not has_restaurant and nearby:
            venue = nearby[0]
            lat, lng = venue.coordinates.lat, venue.coordinates.lng
            recommendations.append(PlaceRecommendation(
                name=venue.name,
                category=PlaceCategory.RESTAURANT.value,
                coordinates=venue.coordinates,
                distance=venue.distance,
                reason="No restaurant in your plan - consider this nearby option",
                score=0.8,
                map_url=f"https://www.openstreetmap.org/?mlat={lat}&mlon={lng}",
                google_maps_url=(
                    "https://www.google.com/maps/search/?api=1&query="
                    + quote(venue.name, safe="")
                ),
            ))

        return recommendations[:MAX_RECOMMENDATIONS]
