"""Dependency container wiring for the application."""

from dataclasses import dataclass

from bugwatch.config import Settings
from bugwatch.services.demo import demo_sightings
from bugwatch.services.sessions import SessionStore
from bugwatch.services.sightings import SightingService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    session_store: SessionStore
    sighting_service: SightingService


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    session_store = SessionStore(
        seed=demo_sightings if resolved_settings.seed_demo_sightings else None,
        ttl_seconds=resolved_settings.session_ttl_seconds,
        max_sessions=resolved_settings.max_sessions,
    )
    sighting_service = SightingService(
        max_image_bytes=resolved_settings.max_image_bytes,
    )
    return AppContainer(
        settings=resolved_settings,
        session_store=session_store,
        sighting_service=sighting_service,
    )
