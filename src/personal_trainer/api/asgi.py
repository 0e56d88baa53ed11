"""ASGI entrypoint for the personal trainer API."""

from personal_trainer.api.app import create_app
from personal_trainer.containers import build_container

app = create_app(build_container())
