"""ASGI entrypoint for the prayer tracker API."""

from prayer_tracker.api.app import create_app
from prayer_tracker.containers import build_container

app = create_app(build_container())
