"""ASGI entrypoint for the macro tracker API."""

from macrotracker.api.app import create_app
from macrotracker.containers import build_container

app = create_app(build_container())
