"""ASGI entrypoint for the nutripro API."""

from nutripro.api.app import create_app
from nutripro.containers import build_container

app = create_app(build_container())
