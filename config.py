"""
config.py
---------
Central configuration for the itinerary builder.
Every tunable is read from an environment variable with a safe default.
"""

import os

# ── Clustering ────────────────────────────────────────────────────────────────
# Places farther apart than this are never seeded into the same region.
MAX_SAME_DAY_DISTANCE_KM: float = float(os.getenv("MAX_SAME_DAY_DISTANCE_KM", "100"))

# ── Scheduling ────────────────────────────────────────────────────────────────
BUFFER_MINUTES: int = int(os.getenv("BUFFER_MINUTES", "15"))     # slack after every visit
DEFAULT_CURRENCY: str = os.getenv("DEFAULT_CURRENCY", "INR")     # meal costs are quoted in INR

# ── HTTP surface ──────────────────────────────────────────────────────────────
# Upper bounds on a single /itinerary request.
MAX_TRIP_DAYS: int = int(os.getenv("MAX_TRIP_DAYS", "30"))
MAX_PLACES_PER_REQUEST: int = int(os.getenv("MAX_PLACES_PER_REQUEST", "200"))

# ── Geocoding (OpenStreetMap Nominatim) ───────────────────────────────────────
NOMINATIM_BASE_URL: str = os.getenv("NOMINATIM_BASE_URL", "https://nominatim.openstreetmap.org")
NOMINATIM_USER_AGENT: str = os.getenv(
    "NOMINATIM_USER_AGENT", "smart-itinerary/1.0 (trip-planning)"
)
# Nominatim usage policy: at most one request per second.
NOMINATIM_RATE_LIMIT_SECONDS: float = float(os.getenv("NOMINATIM_RATE_LIMIT_SECONDS", "1.1"))
NOMINATIM_TIMEOUT_SECONDS: float = float(os.getenv("NOMINATIM_TIMEOUT_SECONDS", "10"))

# ── Logging ───────────────────────────────────────────────────────────────────
LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
