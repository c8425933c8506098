"""
modules/tool_usage/time_tool.py
---------------------------------
Arithmetic tool: minute-of-day conversions, time-of-day buckets and
travel-time estimation used by the Day Scheduler.

All clock values are integer minutes from midnight. Values ≥ 1440 are legal
(late-night visits) and format as "24:xx", "25:xx", ...
"""

from __future__ import annotations
import math


# ── Day landmarks (minutes from midnight) ─────────────────────────────────────
BREAKFAST_TIME     = 7 * 60 + 30    # 07:30
MORNING_START      = 8 * 60         # 08:00
MORNING_SNACK_TIME = 10 * 60 + 30   # 10:30
LUNCH_TIME         = 12 * 60 + 30   # 12:30
AFTERNOON_START    = 14 * 60        # 14:00
EVENING_SNACK_TIME = 16 * 60 + 30   # 16:30
EVENING_START      = 17 * 60        # 17:00
DINNER_TIME        = 19 * 60 + 30   # 19:30
NIGHT_START        = 21 * 60        # 21:00
DAY_END            = 23 * 60        # 23:00

MINUTES_PER_DAY = 24 * 60

# Effective urban speed ≈ 20 km/h including stops → 3 min per km
_MINUTES_PER_KM = 3
_MIN_TRAVEL_MINUTES = 15
_CAR_THRESHOLD_KM = 5.0


def round_half_up(value: float) -> int:
    """Round to the nearest integer, .5 always upwards (2.5 → 3, -2.5 → -2)."""
    return math.floor(value + 0.5)


def round_1dp(value: float) -> float:
    """Round to one decimal place with half-up semantics."""
    return round_half_up(value * 10) / 10


def parse_hhmm(value: str) -> int:
    """
    "HH:MM" → minutes from midnight. A missing minutes part counts as 0.

    Raises:
        ValueError: when a component is not an integer.
    """
    hours, _, mins = value.strip().partition(":")
    return int(hours or 0) * 60 + int(mins or 0)


def parse_window(window: str) -> tuple[int, int]:
    """
    "HH:MM-HH:MM" → (start, end) minutes. An end earlier than the start is
    an overnight window and is moved past midnight.

    Raises:
        ValueError: when either side is missing or not a clock time.
    """
    start, sep, end = window.partition("-")
    if not sep or not start.strip() or not end.strip():
        raise ValueError(f"Not a time window: {window!r}")
    start_minute = parse_hhmm(start)
    end_minute = parse_hhmm(end)
    if end_minute < start_minute:
        end_minute += MINUTES_PER_DAY
    return start_minute, end_minute


def format_minutes(minutes: int) -> str:
    """Minutes from midnight → zero-padded "HH:MM" (no wrap at midnight)."""
    return f"{minutes // 60:02d}:{minutes % 60:02d}"


def time_slot_for(minutes: int) -> str:
    """Bucket a minute-of-day value into morning / afternoon / evening / night."""
    if minutes < AFTERNOON_START:
        return "morning"
    if minutes < EVENING_START:
        return "afternoon"
    if minutes < NIGHT_START:
        return "evening"
    return "night"


class TimeTool:
    """
    Travel-time estimation and window checks used by the Day Scheduler.
    """

    def __init__(
        self,
        minutes_per_km: float = _MINUTES_PER_KM,
        min_travel_minutes: int = _MIN_TRAVEL_MINUTES,
    ):
        self.minutes_per_km = minutes_per_km
        self.min_travel_minutes = min_travel_minutes

    def estimate_travel_minutes(self, distance_km: float) -> int:
        """
        Door-to-door travel estimate, never below min_travel_minutes.

        Args:
            distance_km: Straight-line distance (output of DistanceTool).
        """
        return max(self.min_travel_minutes, round_half_up(distance_km * self.minutes_per_km))

    @staticmethod
    def travel_mode(distance_km: float) -> str:
        return "car" if distance_km > _CAR_THRESHOLD_KM else "auto"

    @staticmethod
    def is_within_window(minutes: int, window: str) -> bool:
        """
        Check whether a minute-of-day value falls inside a "HH:MM-HH:MM" window
        (both ends inclusive). Overnight windows such as "22:00-02:00" cover
        both sides of midnight.
        """
        start, end = parse_window(window)
        if end >= MINUTES_PER_DAY and minutes < start:
            minutes += MINUTES_PER_DAY
        return start <= minutes <= end
