"""Application configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    environment: str = _ENVIRONMENT
    seed_demo_sightings: bool = True
    max_image_bytes: int = 10 * 1024 * 1024
    session_cookie_name: str = "bugwatch_session"
    session_ttl_seconds: int = 60 * 60
    max_sessions: int = 1000

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )
