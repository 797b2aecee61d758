"""Pydantic response models for the HTTP API."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field

from bugwatch.domain.sightings import DistributionEntry, Sighting
from bugwatch.services.distribution import bar_width
from bugwatch.services.timefmt import pretty_time


class SightingView(BaseModel):
    """A sighting as shown in the feed."""

    id: UUID
    description: str
    location: str
    image_url: str
    created_at: datetime
    age: str

    @classmethod
    def from_sighting(cls, sighting: Sighting, now: datetime) -> "SightingView":
        return cls(
            id=sighting.id,
            description=sighting.description,
            location=sighting.location,
            image_url=sighting.image_url,
            created_at=sighting.created_at,
            age=pretty_time(sighting.created_at, now),
        )


class SightingFeed(BaseModel):
    """Newest-first list of sightings."""

    total: int
    sightings: list[SightingView]


class DistributionView(BaseModel):
    """One ranked location with its relative bar width."""

    location: str
    count: int = Field(ge=1)
    bar_width: int = Field(ge=0, le=100)


class DistributionSummary(BaseModel):
    """Ranked per-location counts."""

    total: int
    entries: list[DistributionView]

    @classmethod
    def from_entries(
        cls, entries: list[DistributionEntry], total: int
    ) -> "DistributionSummary":
        top_count = entries[0].count if entries else 1
        return cls(
            total=total,
            entries=[
                DistributionView(
                    location=entry.location,
                    count=entry.count,
                    bar_width=bar_width(entry.count, top_count),
                )
                for entry in entries
            ],
        )


class SubmissionErrorView(BaseModel):
    """Validation failure returned to API clients."""

    error: str
    message: str
