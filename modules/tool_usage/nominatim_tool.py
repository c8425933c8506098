"""
modules/tool_usage/nominatim_tool.py
--------------------------------------
Geocodes free-text place names through OpenStreetMap Nominatim.
Free service, no API key; usage policy requires ≤ 1 request/second and an
identifying User-Agent.

State (last request time, cached hits) lives on the tool instance:
create one NominatimTool per application and share it.
"""

from __future__ import annotations
from dataclasses import dataclass, field
import logging
import threading
import time
from typing import Any, Callable, Optional

import requests

from schemas.place import Coords, PlaceCategory, PlaceKnowledge
import config

logger = logging.getLogger(__name__)

_VIEWBOX_DELTA_DEG = 0.5   # ≈ 50 km around a `near` point


@dataclass
class GeocodedPlace:
    place_id: str = ""
    name: str = ""
    formatted_address: str = ""
    coordinates: Coords = field(default_factory=Coords)
    types: list[str] = field(default_factory=list)
    source: str = "nominatim"          # "nominatim" | "cached"

    def to_place_knowledge(
        self,
        category: PlaceCategory | str = PlaceCategory.DESTINATION,
        typical_duration: int = 60,
    ) -> PlaceKnowledge:
        """Minimal PlaceKnowledge seeded from a geocoding hit."""
        return PlaceKnowledge(
            name=self.name,
            coordinates=self.coordinates,
            category=category,
            typical_duration=typical_duration,
        )


class RateLimiter:
    """
    Enforces a minimum interval between calls to wait(), across threads.
    clock/sleep are injectable so tests never actually sleep.
    """

    def __init__(
        self,
        min_interval_seconds: float,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.min_interval_seconds = min_interval_seconds
        self._clock = clock
        self._sleep = sleep
        self._last_call: Optional[float] = None
        self._lock = threading.Lock()

    def wait(self) -> None:
        # Held across the sleep so concurrent callers queue up behind each other.
        with self._lock:
            now = self._clock()
            if self._last_call is not None:
                elapsed = now - self._last_call
                if elapsed < self.min_interval_seconds:
                    self._sleep(self.min_interval_seconds - elapsed)
            self._last_call = self._clock()

    def reset(self) -> None:
        with self._lock:
            self._last_call = None


class PlaceCache:
    """Case-insensitive query → GeocodedPlace cache."""

    def __init__(self) -> None:
        self._entries: dict[str, GeocodedPlace] = {}

    def get(self, query: str) -> GeocodedPlace | None:
        return self._entries.get(query.lower())

    def put(self, query: str, place: GeocodedPlace) -> None:
        self._entries[query.lower()] = place

    def clear(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)


class NominatimTool:
    """Wraps the Nominatim /search endpoint."""

    def __init__(
        self,
        base_url: str = config.NOMINATIM_BASE_URL,
        user_agent: str = config.NOMINATIM_USER_AGENT,
        timeout: float = config.NOMINATIM_TIMEOUT_SECONDS,
        rate_limiter: RateLimiter | None = None,
        cache: PlaceCache | None = None,
        session: requests.Session | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.user_agent = user_agent
        self.timeout = timeout
        self.rate_limiter = rate_limiter or RateLimiter(config.NOMINATIM_RATE_LIMIT_SECONDS)
        self.cache = cache or PlaceCache()
        self.session = session or requests.Session()

    def search(
        self,
        query: str,
        near: Coords | None = None,
        limit: int = 3,
    ) -> list[GeocodedPlace]:
        """
        Free-text search.

        Args:
            query: Place name or address.
            near:  Bias (not bound) results towards this point.
            limit: Maximum number of hits.

        Raises:
            requests.HTTPError: non-2xx response.
            requests.RequestException: network failure.
        """
        params: dict[str, Any] = {
            "q": query,
            "format": "json",
            "limit": str(limit),
            "addressdetails": "1",
        }
        if near is not None:
            d = _VIEWBOX_DELTA_DEG
            params["viewbox"] = f"{near.lng - d},{near.lat + d},{near.lng + d},{near.lat - d}"
            params["bounded"] = "0"

        self.rate_limiter.wait()
        response = self.session.get(
            f"{self.base_url}/search",
            params=params,
            headers={"User-Agent": self.user_agent, "Accept": "application/json"},
            timeout=self.timeout,
        )
        response.raise_for_status()
        raw_data: list[dict] = response.json()

        logger.debug("Nominatim returned %d hits for %r", len(raw_data), query)
        return [self._parse_record(item) for item in raw_data]

    def search_place(self, query: str) -> list[GeocodedPlace]:
        """Top hit for a query, cached case-insensitively after the first lookup."""
        cached = self.cache.get(query)
        if cached is not None:
            return [GeocodedPlace(
                place_id=cached.place_id,
                name=cached.name,
                formatted_address=cached.formatted_address,
                coordinates=cached.coordinates,
                types=list(cached.types),
                source="cached",
            )]

        places = self.search(query, limit=1)[:1]
        if places:
            self.cache.put(query, places[0])
        return places

    @staticmethod
    def _parse_record(item: dict) -> GeocodedPlace:
        display_name = item.get("display_name", "")
        return GeocodedPlace(
            place_id=str(item.get("place_id", "")),
            name=display_name.split(",")[0].strip(),
            formatted_address=display_name,
            coordinates=Coords(
                lat=float(item.get("lat", 0.0)),
                lng=float(item.get("lon", 0.0)),
            ),
            types=[t for t in (item.get("type"), item.get("class")) if t],
        )
