"""ASGI entrypoint for the Bugwatch app."""

from bugwatch.api.app import create_app
from bugwatch.containers import build_container

app = create_app(build_container())
