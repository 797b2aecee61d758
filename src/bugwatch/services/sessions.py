"""Per-session sighting state."""

import asyncio
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta
from uuid import uuid4

from bugwatch.domain.sightings import DistributionEntry, Sighting, SightingCollection
from bugwatch.services.distribution import aggregate

SeedFactory = Callable[[datetime], list[Sighting]]

DEFAULT_SESSION_TTL_SECONDS = 60 * 60
DEFAULT_MAX_SESSIONS = 1000


@dataclass
class SightingSession:
    """State owned by one browser session.

    The lock serializes submissions so a rapid double submit is applied in
    order instead of interleaving around the image read.
    """

    id: str
    collection: SightingCollection = field(default_factory=SightingCollection)
    submission_lock: asyncio.Lock = field(default_factory=asyncio.Lock)
    _distribution: list[DistributionEntry] = field(
        default_factory=list, init=False, repr=False
    )
    _distribution_size: int = field(default=-1, init=False, repr=False)

    def distribution(self) -> list[DistributionEntry]:
        """Return the ranked distribution for the current collection."""
        # The collection only grows, so its length identifies its contents.
        if self._distribution_size != len(self.collection):
            self._distribution = aggregate(self.collection)
            self._distribution_size = len(self.collection)
        return list(self._distribution)


@dataclass
class _SessionEntry:
    session: SightingSession
    expires_at: datetime


def _utc_now() -> datetime:
    return datetime.now(tz=UTC)


@dataclass
class SessionStore:
    """In-memory registry of sighting sessions for this process.

    Sessions expire after ``ttl_seconds`` without a request, and the least
    recently used sessions are evicted once ``max_sessions`` is exceeded.
    """

    seed: SeedFactory | None = None
    ttl_seconds: int = DEFAULT_SESSION_TTL_SECONDS
    max_sessions: int = DEFAULT_MAX_SESSIONS
    clock: Callable[[], datetime] = field(default=_utc_now)
    _sessions: dict[str, _SessionEntry] = field(default_factory=dict, init=False)

    def __len__(self) -> int:
        return len(self._sessions)

    def get(self, session_id: str) -> SightingSession | None:
        """Return a live session and refresh its expiry, if present."""
        now = self.clock()
        entry = self._sessions.pop(session_id, None)
        if entry is None:
            return None
        if now >= entry.expires_at:
            return None
        # Reinsert so dict order stays least recently used first.
        entry.expires_at = now + timedelta(seconds=self.ttl_seconds)
        self._sessions[session_id] = entry
        return entry.session

    def get_or_create(self, session_id: str | None) -> tuple[SightingSession, bool]:
        """Return the session for the id, creating one when it is unknown.

        The boolean is true when a new session was created.
        """
        if session_id:
            existing = self.get(session_id)
            if existing is not None:
                return existing, False
        now = self.clock()
        self._evict(now)
        session = SightingSession(id=uuid4().hex, collection=self._seed_collection(now))
        self._sessions[session.id] = _SessionEntry(
            session=session,
            expires_at=now + timedelta(seconds=self.ttl_seconds),
        )
        return session, True

    def _evict(self, now: datetime) -> None:
        """Drop expired sessions and make room for one more."""
        while self._sessions:
            oldest_id = next(iter(self._sessions))
            entry = self._sessions[oldest_id]
            if now < entry.expires_at and len(self._sessions) < self.max_sessions:
                return
            self._sessions.pop(oldest_id)

    def _seed_collection(self, now: datetime) -> SightingCollection:
        if self.seed is None:
            return SightingCollection()
        return SightingCollection(self.seed(now))
