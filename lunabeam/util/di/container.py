"""Production dependency injection container."""

import logfire
from dishka import AsyncContainer, make_async_container
from dishka.integrations.fastapi import FastapiProvider, setup_dishka
from fastapi import FastAPI

from lunabeam.util.di import PROVIDERS, get_provider


def create_container() -> AsyncContainer:
    """Build the production container.

    Every mockable component (persistence, notifier, clock) gets its
    production implementation. Settings are read from the environment.
    """
    providers = [get_provider(base, use_mock=False) for base in PROVIDERS]
    logfire.info(
        "Building DI container",
        providers=[provider.__name__ for provider in providers],
    )
    return make_async_container(
        *(provider() for provider in providers), FastapiProvider()
    )


def setup_di(app: FastAPI, container: AsyncContainer) -> None:
    """Attach a container to the app so routes can use FromDishka."""
    setup_dishka(container, app)
