"""FastAPI application factory."""

import logging
from datetime import UTC, datetime

from fastapi import FastAPI, File, Form, Request, UploadFile, status
from fastapi.responses import HTMLResponse, JSONResponse, RedirectResponse, Response

from bugwatch.api.models import (
    DistributionSummary,
    SightingFeed,
    SightingView,
    SubmissionErrorView,
)
from bugwatch.api.page import render_page
from bugwatch.app_logging import configure_logging
from bugwatch.containers import AppContainer
from bugwatch.services.sessions import SightingSession
from bugwatch.services.sightings import SubmissionError

FALLBACK_UPLOAD_ERROR = "Could not upload file"


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)

    app = FastAPI()
    app.state.container = container

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.get("/", response_class=HTMLResponse)
    async def index(request: Request) -> Response:
        """Render the submission form, distribution and feed."""
        state_container: AppContainer = request.app.state.container
        session, created = _resolve_session(state_container, request)
        response = HTMLResponse(render_page(session, _now()))
        return _with_session_cookie(state_container, response, session, created)

    @app.post("/", response_class=HTMLResponse)
    async def submit_form(
        request: Request,
        description: str = Form(default=""),
        image: UploadFile | None = File(default=None),
    ) -> Response:
        """Handle the HTML form post and redirect back to the page."""
        state_container: AppContainer = request.app.state.container
        session, created = _resolve_session(state_container, request)
        try:
            await state_container.sighting_service.submit(
                session, description, _normalize_upload(image)
            )
        except SubmissionError as exc:
            response = HTMLResponse(
                render_page(
                    session,
                    _now(),
                    error=_format_submission_error(state_container, exc),
                    description=description,
                ),
                status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            )
            return _with_session_cookie(state_container, response, session, created)
        except Exception:
            logger.exception("Failed to submit sighting", extra={"session": session.id})
            response = HTMLResponse(
                render_page(
                    session,
                    _now(),
                    error=FALLBACK_UPLOAD_ERROR,
                    description=description,
                ),
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            )
            return _with_session_cookie(state_container, response, session, created)

        response = RedirectResponse("/", status_code=status.HTTP_303_SEE_OTHER)
        return _with_session_cookie(state_container, response, session, created)

    @app.get("/api/sightings")
    async def list_sightings(request: Request) -> Response:
        """Return the session's sightings, newest first."""
        state_container: AppContainer = request.app.state.container
        session, created = _resolve_session(state_container, request)
        now = _now()
        sightings = session.collection.snapshot()
        feed = SightingFeed(
            total=len(sightings),
            sightings=[SightingView.from_sighting(item, now) for item in sightings],
        )
        response = JSONResponse(feed.model_dump(mode="json"))
        return _with_session_cookie(state_container, response, session, created)

    @app.post("/api/sightings")
    async def create_sighting(
        request: Request,
        description: str = Form(default=""),
        image: UploadFile | None = File(default=None),
    ) -> Response:
        """Submit a sighting and return it, or a typed validation error."""
        state_container: AppContainer = request.app.state.container
        session, created = _resolve_session(state_container, request)
        try:
            sighting = await state_container.sighting_service.submit(
                session, description, _normalize_upload(image)
            )
        except SubmissionError as exc:
            error = SubmissionErrorView(error=exc.code, message=exc.message)
            response = JSONResponse(
                error.model_dump(),
                status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            )
            return _with_session_cookie(state_container, response, session, created)
        except Exception:
            logger.exception("Failed to submit sighting", extra={"session": session.id})
            error = SubmissionErrorView(
                error="internal_error", message=FALLBACK_UPLOAD_ERROR
            )
            response = JSONResponse(
                error.model_dump(),
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            )
            return _with_session_cookie(state_container, response, session, created)

        view = SightingView.from_sighting(sighting, _now())
        response = JSONResponse(
            view.model_dump(mode="json"), status_code=status.HTTP_201_CREATED
        )
        return _with_session_cookie(state_container, response, session, created)

    @app.get("/api/distribution")
    async def distribution(request: Request) -> Response:
        """Return per-location counts, most reported first."""
        state_container: AppContainer = request.app.state.container
        session, created = _resolve_session(state_container, request)
        summary = DistributionSummary.from_entries(
            session.distribution(), len(session.collection)
        )
        response = JSONResponse(summary.model_dump(mode="json"))
        return _with_session_cookie(state_container, response, session, created)

    return app


def _now() -> datetime:
    return datetime.now(tz=UTC)


def _resolve_session(
    state_container: AppContainer, request: Request
) -> tuple[SightingSession, bool]:
    """Look up the caller's session from its cookie, creating one if needed."""
    cookie_name = state_container.settings.session_cookie_name
    return state_container.session_store.get_or_create(request.cookies.get(cookie_name))


def _with_session_cookie(
    state_container: AppContainer,
    response: Response,
    session: SightingSession,
    created: bool,
) -> Response:
    """Attach the session cookie when the session was just created."""
    if created:
        response.set_cookie(
            state_container.settings.session_cookie_name,
            session.id,
            httponly=True,
            samesite="lax",
        )
    return response


def _normalize_upload(image: UploadFile | None) -> UploadFile | None:
    """Treat an empty file input as no image attached."""
    if image is None or not image.filename:
        return None
    return image


def _format_submission_error(
    state_container: AppContainer, exc: SubmissionError
) -> str:
    """Return a user-facing submission error with local debug info."""
    cause = exc.__cause__
    if state_container.settings.environment == "local" and cause is not None:
        detail = f"{type(cause).__name__}: {cause}".strip()
        return f"{exc.message} (debug: {detail})"
    return exc.message
