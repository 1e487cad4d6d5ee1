"""ASGI entrypoint for the netctl API."""

from netctl.api.app import create_app
from netctl.containers import build_container

app = create_app(build_container())
