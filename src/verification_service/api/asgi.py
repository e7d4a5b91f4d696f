"""ASGI entrypoint for the verification service API."""

from verification_service.api.app import create_app
from verification_service.containers import build_container

app = create_app(build_container())
