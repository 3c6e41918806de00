"""Production container and its FastAPI wiring."""

from dishka import AsyncContainer, make_async_container
from dishka.integrations.fastapi import FastapiProvider, setup_dishka
from fastapi import FastAPI

from singles.util.di import PROVIDERS, get_provider


def create_container() -> AsyncContainer:
    """Build the container with the real Postgres store and email client."""
    providers = [get_provider(base, use_mock=False)() for base in PROVIDERS]
    # FastapiProvider makes the Request resolvable in REQUEST scope
    return make_async_container(*providers, FastapiProvider())


def setup_di(app: FastAPI, container: AsyncContainer) -> None:
    """Attach the container to the app; it is closed on app shutdown."""
    setup_dishka(container, app)
