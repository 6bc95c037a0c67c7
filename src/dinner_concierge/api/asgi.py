"""ASGI entrypoint for the dinner concierge API."""

from dinner_concierge.api.app import create_app
from dinner_concierge.containers import build_container

app = create_app(build_container())
