"""Domain models for bug sightings."""

from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from datetime import datetime
from uuid import UUID


@dataclass(frozen=True)
class Sighting:
    """A single user-submitted bug report with photo evidence."""

    id: UUID
    description: str
    location: str
    image_url: str
    created_at: datetime


@dataclass(frozen=True)
class DistributionEntry:
    """Number of sightings recorded for one location."""

    location: str
    count: int


class SightingCollection:
    """Newest-first sequence of sightings that only grows at the head."""

    def __init__(self, sightings: Iterable[Sighting] = ()) -> None:
        self._items: list[Sighting] = list(sightings)

    def prepend(self, sighting: Sighting) -> None:
        """Insert a sighting as the newest entry."""
        self._items.insert(0, sighting)

    def snapshot(self) -> tuple[Sighting, ...]:
        """Return the current sightings, newest first."""
        return tuple(self._items)

    def __iter__(self) -> Iterator[Sighting]:
        return iter(self.snapshot())

    def __len__(self) -> int:
        return len(self._items)
