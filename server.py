"""
server.py
---------
HTTP surface for the itinerary builder.

  GET  /            liveness
  POST /itinerary   places + dates (+ budget) → GeneratedItinerary
  GET  /geocode     Nominatim lookup, used to seed places
"""

from __future__ import annotations
from contextlib import asynccontextmanager
from dataclasses import asdict
from datetime import date
import logging
from typing import Annotated, List, Optional

from fastapi import FastAPI, HTTPException, Query, Request
from pydantic import BaseModel, Field
import requests

from schemas.itinerary import TripBudget
from schemas.place import Coords, NearbyPlace, OpeningHours, PlaceCategory, PlaceKnowledge, TimeOfDay
from modules.planning.itinerary_builder import ItineraryBuilder, ItineraryInputError
from modules.tool_usage.nominatim_tool import NominatimTool
import config

logging.basicConfig(
    level=config.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


# ── Request models ────────────────────────────────────────────────────────────

class CoordsIn(BaseModel):
    lat: float
    lng: float


class OpeningHoursIn(BaseModel):
    open: str = Field(pattern=r"^\d{1,2}:\d{2}$")
    close: str = Field(pattern=r"^\d{1,2}:\d{2}$")


PeakWindow = Annotated[str, Field(pattern=r"^\d{1,2}:\d{2}-\d{1,2}:\d{2}$")]


class NearbyPlaceIn(BaseModel):
    name: str
    coordinates: CoordsIn
    category: str = "restaurant"
    rating: Optional[float] = None
    distance: Optional[float] = None


class PlaceIn(BaseModel):
    name: str
    coordinates: CoordsIn
    category: PlaceCategory = PlaceCategory.DESTINATION
    typical_duration: int = Field(default=60, gt=0)
    entry_fee: Optional[float] = Field(default=None, ge=0)
    opening_hours: Optional[OpeningHoursIn] = None
    best_time_to_visit: str = ""
    nearby_restaurants: List[NearbyPlaceIn] = []
    crowd_peak_hours: List[PeakWindow] = []
    preferred_time: Optional[TimeOfDay] = None

    def to_knowledge(self) -> PlaceKnowledge:
        return PlaceKnowledge(
            name=self.name,
            coordinates=Coords(self.coordinates.lat, self.coordinates.lng),
            category=self.category,
            typical_duration=self.typical_duration,
            entry_fee=self.entry_fee,
            opening_hours=(
                OpeningHours(self.opening_hours.open, self.opening_hours.close)
                if self.opening_hours else None
            ),
            best_time_to_visit=self.best_time_to_visit,
            nearby_restaurants=[
                NearbyPlace(
                    name=r.name,
                    coordinates=Coords(r.coordinates.lat, r.coordinates.lng),
                    category=r.category,
                    rating=r.rating,
                    distance=r.distance,
                )
                for r in self.nearby_restaurants
            ],
            crowd_peak_hours=list(self.crowd_peak_hours),
            preferred_time=self.preferred_time,
        )


class BudgetIn(BaseModel):
    total: float = Field(ge=0)
    currency: str = config.DEFAULT_CURRENCY
    per_person: bool = False


class ItineraryRequest(BaseModel):
    places: List[PlaceIn] = Field(max_length=config.MAX_PLACES_PER_REQUEST)
    start_date: date
    end_date: date
    budget: Optional[BudgetIn] = None


# ── App ───────────────────────────────────────────────────────────────────────

@asynccontextmanager
async def lifespan(app: FastAPI):
    app.state.builder = ItineraryBuilder()
    app.state.geocoder = NominatimTool()
    yield
    app.state.geocoder.session.close()


app = FastAPI(title="Smart Itinerary API", lifespan=lifespan)


@app.get("/")
async def root():
    return {"message": "Smart Itinerary API is running"}


@app.post("/itinerary")
async def create_itinerary(payload: ItineraryRequest, request: Request):
    """Cluster, order and schedule the given places across the trip dates."""
    num_days = (payload.end_date - payload.start_date).days + 1
    if num_days > config.MAX_TRIP_DAYS:
        raise HTTPException(
            status_code=422,
            detail=f"Trips are limited to {config.MAX_TRIP_DAYS} days (got {num_days})",
        )
    budget = None
    if payload.budget is not None:
        budget = TripBudget(
            total=payload.budget.total,
            currency=payload.budget.currency,
            per_person=payload.budget.per_person,
        )
    builder: ItineraryBuilder = request.app.state.builder
    try:
        itinerary = await builder.build(
            [p.to_knowledge() for p in payload.places],
            payload.start_date,
            payload.end_date,
            budget,
        )
    except ItineraryInputError as e:
        raise HTTPException(status_code=422, detail=str(e))
    return asdict(itinerary)


@app.get("/geocode")
def geocode(request: Request, q: str = Query(min_length=1), limit: int = Query(1, ge=1, le=10)):
    """Top hit by default (served from the geocoder cache on repeats)."""
    geocoder: NominatimTool = request.app.state.geocoder
    try:
        if limit == 1:
            places = geocoder.search_place(q)
        else:
            places = geocoder.search(q, limit=limit)
    except requests.RequestException as e:
        logger.error("Nominatim search failed for %r: %s", q, e)
        raise HTTPException(status_code=502, detail="Geocoding service unavailable")
    return {"places": [asdict(p) for p in places]}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
