"""Container construction and FastAPI integration."""

from typing import Collection

from dishka import AsyncContainer, make_async_container
from dishka.integrations.fastapi import FastapiProvider, setup_dishka
from fastapi import FastAPI

from memex.util.di import Component, select_providers


def create_container(mocked: Collection[Component] = ()) -> AsyncContainer:
    """Build an APP-scoped container.

    Production uses the default of no mocked components. `FastapiProvider`
    makes the incoming `Request` resolvable, which the auth dependencies need.

    Args:
        mocked: Components to replace with their in-memory implementation
    """
    return make_async_container(*select_providers(mocked), FastapiProvider())


def setup_di(app: FastAPI, container: AsyncContainer) -> None:
    """Attach the container to the app; routes resolve through `FromDishka`."""
    setup_dishka(container, app)
