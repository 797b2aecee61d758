"""Tests for the HTTP surface."""

from fastapi.testclient import TestClient

from bugwatch.api.app import (
    FALLBACK_UPLOAD_ERROR,
    _format_submission_error,
    create_app,
)
from bugwatch.config import Settings
from bugwatch.containers import AppContainer, build_container
from bugwatch.services.sightings import ImageReadError, MissingImage
from tests.conftest import PNG_BYTES, RaisingSightingService


def _image_files() -> dict[str, tuple[str, bytes, str]]:
    return {"image": ("bug.png", PNG_BYTES, "image/png")}


def test_health(container: AppContainer) -> None:
    client = TestClient(create_app(container))

    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_index_renders_seeded_sightings() -> None:
    container = build_container(Settings(environment="test"))
    client = TestClient(create_app(container))

    response = client.get("/")

    assert response.status_code == 200
    assert "3 sightings" in response.text
    assert "@Science Atrium" in response.text
    assert "45m ago" in response.text
    assert container.settings.session_cookie_name in response.cookies


def test_api_submit_creates_sighting(container: AppContainer) -> None:
    client = TestClient(create_app(container))

    response = client.post(
        "/api/sightings",
        data={"description": "Line of ants @<East Quad>"},
        files=_image_files(),
    )

    assert response.status_code == 201
    data = response.json()
    assert data["location"] == "East Quad"
    assert data["image_url"].startswith("data:image/png;base64,")
    assert data["age"] == "1m ago"


def test_api_submit_updates_feed_and_distribution(container: AppContainer) -> None:
    client = TestClient(create_app(container))

    for description in ["Ants @<Gym>", "Moths @<Lab>", "Beetles @<Lab>"]:
        response = client.post(
            "/api/sightings", data={"description": description}, files=_image_files()
        )
        assert response.status_code == 201

    feed = client.get("/api/sightings").json()
    distribution = client.get("/api/distribution").json()

    assert feed["total"] == 3
    assert [item["location"] for item in feed["sightings"]] == ["Lab", "Lab", "Gym"]
    assert distribution == {
        "total": 3,
        "entries": [
            {"location": "Lab", "count": 2, "bar_width": 100},
            {"location": "Gym", "count": 1, "bar_width": 50},
        ],
    }


def test_api_submit_missing_description(container: AppContainer) -> None:
    client = TestClient(create_app(container))

    response = client.post(
        "/api/sightings", data={"description": "   "}, files=_image_files()
    )

    assert response.status_code == 422
    assert response.json() == {
        "error": "missing_description",
        "message": "Describe the bug and include @<location>.",
    }


def test_api_submit_missing_image(container: AppContainer) -> None:
    client = TestClient(create_app(container))

    response = client.post("/api/sightings", data={"description": "valid @<Lab>"})

    assert response.status_code == 422
    assert response.json()["error"] == "missing_image"
    assert client.get("/api/sightings").json()["total"] == 0


def test_form_submit_redirects_to_page(container: AppContainer) -> None:
    client = TestClient(create_app(container))

    response = client.post(
        "/",
        data={"description": "Ants @<Gym>"},
        files=_image_files(),
        follow_redirects=False,
    )

    assert response.status_code == 303
    assert response.headers["location"] == "/"
    page = client.get("/")
    assert "1 sightings" in page.text
    assert "@Gym" in page.text


def test_form_error_keeps_description(container: AppContainer) -> None:
    client = TestClient(create_app(container))

    response = client.post("/", data={"description": "Ants <b>here</b> @<Lab>"})

    assert response.status_code == 422
    assert "Attach a photo so others can verify the sighting." in response.text
    assert "Ants &lt;b&gt;here&lt;/b&gt; @&lt;Lab&gt;" in response.text


def test_sessions_do_not_share_sightings(container: AppContainer) -> None:
    app = create_app(container)
    first = TestClient(app)
    second = TestClient(app)

    first.post("/api/sightings", data={"description": "Ants"}, files=_image_files())

    assert first.get("/api/sightings").json()["total"] == 1
    assert second.get("/api/sightings").json()["total"] == 0


def test_format_submission_error_adds_debug_detail_locally() -> None:
    local = build_container(Settings(environment="local", seed_demo_sightings=False))
    production = build_container(
        Settings(environment="production", seed_demo_sightings=False)
    )
    try:
        raise ImageReadError() from OSError("disk gone")
    except ImageReadError as exc:
        error = exc

    assert _format_submission_error(local, error) == (
        "Could not read file (debug: OSError: disk gone)"
    )
    assert _format_submission_error(production, error) == "Could not read file"
    assert _format_submission_error(local, MissingImage()) == MissingImage.message


def test_api_submit_empty_file_is_image_read_error(container: AppContainer) -> None:
    client = TestClient(create_app(container))

    response = client.post(
        "/api/sightings",
        data={"description": "Ants @<Lab>"},
        files={"image": ("bug.png", b"", "image/png")},
    )

    assert response.status_code == 422
    assert response.json() == {
        "error": "image_read_error",
        "message": "Could not read file",
    }


def test_form_submit_empty_file_shows_read_error(container: AppContainer) -> None:
    client = TestClient(create_app(container))

    response = client.post(
        "/",
        data={"description": "Ants @<Lab>"},
        files={"image": ("bug.png", b"", "image/png")},
    )

    assert response.status_code == 422
    assert "Could not read file" in response.text
    assert "Ants @&lt;Lab&gt;" in response.text


def test_form_read_error_shows_debug_detail_locally() -> None:
    settings = Settings(environment="local", seed_demo_sightings=False)
    container = build_container(settings)
    try:
        raise ImageReadError() from OSError("disk gone")
    except ImageReadError as exc:
        container.sighting_service = RaisingSightingService(error=exc)
    client = TestClient(create_app(container))

    response = client.post(
        "/", data={"description": "Ants @<Lab>"}, files=_image_files()
    )

    assert response.status_code == 422
    assert "Could not read file (debug: OSError: disk gone)" in response.text


def test_form_unexpected_error_renders_fallback(container: AppContainer) -> None:
    container.sighting_service = RaisingSightingService()
    client = TestClient(create_app(container))

    response = client.post(
        "/", data={"description": "Ants @<Lab>"}, files=_image_files()
    )

    assert response.status_code == 500
    assert FALLBACK_UPLOAD_ERROR in response.text
    assert "Ants @&lt;Lab&gt;" in response.text


def test_api_unexpected_error_returns_fallback(container: AppContainer) -> None:
    container.sighting_service = RaisingSightingService()
    client = TestClient(create_app(container))

    response = client.post(
        "/api/sightings", data={"description": "Ants @<Lab>"}, files=_image_files()
    )

    assert response.status_code == 500
    assert response.json() == {
        "error": "internal_error",
        "message": FALLBACK_UPLOAD_ERROR,
    }


def test_cookieless_requests_do_not_grow_sessions_without_bound() -> None:
    container = build_container(
        Settings(environment="test", seed_demo_sightings=False, max_sessions=10)
    )
    app = create_app(container)

    for _ in range(50):
        assert TestClient(app).get("/api/distribution").status_code == 200

    assert len(container.session_store) == 10
