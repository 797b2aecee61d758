"""Shared test fixtures."""

import asyncio
from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta
from uuid import uuid4

import pytest

from bugwatch.config import Settings
from bugwatch.containers import AppContainer, build_container
from bugwatch.domain.sightings import Sighting
from bugwatch.services.sessions import SightingSession
from bugwatch.services.sightings import ImageUpload, SightingService

FIXED_NOW = datetime(2026, 3, 14, 12, 0, tzinfo=UTC)
PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"fake-png-body"


@dataclass
class FakeImageUpload:
    """Upload stub that returns static bytes."""

    content: bytes = PNG_BYTES
    content_type: str | None = "image/png"
    delay_seconds: float = 0.0

    async def read(self) -> bytes:
        if self.delay_seconds:
            await asyncio.sleep(self.delay_seconds)
        return self.content


@dataclass
class FailingImageUpload:
    """Upload stub whose read fails like an unreadable file."""

    content_type: str | None = "image/jpeg"

    async def read(self) -> bytes:
        raise OSError("unreadable file")


@dataclass
class FakeClock:
    """Clock that only moves when advanced."""

    now: datetime = FIXED_NOW

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += timedelta(seconds=seconds)


@dataclass
class RaisingSightingService(SightingService):
    """Sighting service whose submissions always fail with ``error``."""

    error: Exception = field(default_factory=lambda: RuntimeError("boom"))

    async def submit(
        self,
        session: SightingSession,
        description: str,
        image: ImageUpload | None,
    ) -> Sighting:
        raise self.error


def make_sighting(location: str, created_at: datetime = FIXED_NOW) -> Sighting:
    return Sighting(
        id=uuid4(),
        description=f"Spotted something @<{location}>",
        location=location,
        image_url="data:image/png;base64,AAAA",
        created_at=created_at,
    )


@pytest.fixture
def settings() -> Settings:
    return Settings(environment="test", seed_demo_sightings=False)


@pytest.fixture
def session() -> SightingSession:
    return SightingSession(id="session-1")


@pytest.fixture
def sighting_service() -> SightingService:
    return SightingService(clock=lambda: FIXED_NOW)


@pytest.fixture
def container(settings: Settings) -> AppContainer:
    return build_container(settings)
