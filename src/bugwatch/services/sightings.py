"""Sighting submission and validation."""

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Protocol
from uuid import uuid4

from bugwatch.domain.sightings import Sighting
from bugwatch.services.images import to_data_url
from bugwatch.services.sessions import SightingSession
from bugwatch.services.tagging import extract_location

logger = logging.getLogger(__name__)

DEFAULT_MAX_IMAGE_BYTES = 10 * 1024 * 1024


class SubmissionError(Exception):
    """Base class for recoverable, user-facing submission failures."""

    code = "submission_error"
    message = "Could not submit sighting"

    def __init__(self, message: str | None = None) -> None:
        if message is not None:
            self.message = message
        super().__init__(self.message)


class MissingDescription(SubmissionError):
    """Raised when the description is blank."""

    code = "missing_description"
    message = "Describe the bug and include @<location>."


class MissingImage(SubmissionError):
    """Raised when no photo is attached."""

    code = "missing_image"
    message = "Attach a photo so others can verify the sighting."


class ImageReadError(SubmissionError):
    """Raised when the attached photo cannot be read."""

    code = "image_read_error"
    message = "Could not read file"


class ImageUpload(Protocol):
    """Uploaded image payload, e.g. a FastAPI ``UploadFile``."""

    content_type: str | None

    async def read(self) -> bytes:
        """Return the full image contents."""


def _utc_now() -> datetime:
    return datetime.now(tz=UTC)


@dataclass
class SightingService:
    """Validates submissions and records them on a session's collection."""

    max_image_bytes: int = DEFAULT_MAX_IMAGE_BYTES
    clock: Callable[[], datetime] = field(default=_utc_now)

    async def submit(
        self,
        session: SightingSession,
        description: str,
        image: ImageUpload | None,
    ) -> Sighting:
        """Validate input, read the image and prepend a new sighting."""
        if not description.strip():
            logger.info("Rejected sighting without description")
            raise MissingDescription()
        if image is None:
            logger.info("Rejected sighting without image")
            raise MissingImage()

        async with session.submission_lock:
            image_url = await self._read_image(image)
            sighting = Sighting(
                id=uuid4(),
                description=description,
                location=extract_location(description),
                image_url=image_url,
                created_at=self.clock(),
            )
            session.collection.prepend(sighting)

        logger.info(
            "Recorded sighting",
            extra={
                "session_id": session.id,
                "sighting_id": str(sighting.id),
                "location": sighting.location,
            },
        )
        return sighting

    async def _read_image(self, image: ImageUpload) -> str:
        try:
            image_bytes = await image.read()
        except Exception as exc:
            logger.warning("Failed to read uploaded image", exc_info=True)
            raise ImageReadError() from exc
        if not image_bytes:
            logger.warning("Uploaded image is empty")
            raise ImageReadError()
        if len(image_bytes) > self.max_image_bytes:
            logger.warning(
                "Uploaded image is too large",
                extra={"size": len(image_bytes), "limit": self.max_image_bytes},
            )
            raise ImageReadError("Photo is too large to upload")
        return to_data_url(image_bytes, image.content_type)
