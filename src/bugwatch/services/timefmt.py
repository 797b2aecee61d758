"""Relative time formatting for the sightings feed."""

import math
from datetime import UTC, datetime

MINUTES_PER_HOUR = 60
HOURS_PER_DAY = 24


def round_half_up(value: float) -> int:
    """Round to the nearest integer, with halves going up (2.5 -> 3)."""
    return math.floor(value + 0.5)


def pretty_time(instant: datetime, now: datetime | None = None) -> str:
    """Render how long ago an instant was, e.g. ``45m ago`` or ``3h ago``."""
    current = now or datetime.now(tz=UTC)
    elapsed = (current - instant).total_seconds()
    minutes = max(1, round_half_up(elapsed / 60))
    if minutes < MINUTES_PER_HOUR:
        return f"{minutes}m ago"
    hours = round_half_up(minutes / MINUTES_PER_HOUR)
    if hours < HOURS_PER_DAY:
        return f"{hours}h ago"
    days = round_half_up(hours / HOURS_PER_DAY)
    return f"{days}d ago"
