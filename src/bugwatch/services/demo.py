"""Demo sightings shown to new sessions."""

from datetime import datetime, timedelta
from uuid import uuid4

from bugwatch.domain.sightings import Sighting
from bugwatch.services.tagging import extract_location

_DEMO_ENTRIES: tuple[tuple[str, str, int], ...] = (
    (
        "Tiny beetles near the vending machines. @<Science Atrium>",
        "https://images.unsplash.com/photo-1504518633247-6bf4c7c6f62c"
        "?auto=format&fit=crop&w=400&q=80",
        45,
    ),
    (
        "Fruit flies around the compost bin. @<Cafe Patio>",
        "https://images.unsplash.com/photo-1586953208448-b95ef33822f8"
        "?auto=format&fit=crop&w=400&q=80",
        90,
    ),
    (
        "Mosquito swarm close to the south pond @<Lakeside Lawn>",
        "https://images.unsplash.com/photo-1438109491414-7198515b166b"
        "?auto=format&fit=crop&w=400&q=80",
        150,
    ),
)


def demo_sightings(now: datetime) -> list[Sighting]:
    """Build the demo sightings relative to ``now``, newest first."""
    sightings = [
        Sighting(
            id=uuid4(),
            description=description,
            location=extract_location(description),
            image_url=image_url,
            created_at=now - timedelta(minutes=age_minutes),
        )
        for description, image_url, age_minutes in _DEMO_ENTRIES
    ]
    return sorted(sightings, key=lambda sighting: sighting.created_at, reverse=True)
