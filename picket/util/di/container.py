"""Dependency injection container."""

from dishka import AsyncContainer, make_async_container
from dishka.integrations.fastapi import FastapiProvider, setup_dishka
from fastapi import FastAPI

from picket.util.di import Component, select_providers


def create_container(mocked: set[Component] | None = None) -> AsyncContainer:
    """Build the DI container.

    Production uses no mocks. Tests pass the components to replace (see
    ``tests/di``).
    """
    # FastapiProvider makes the current Request available to providers
    return make_async_container(*select_providers(mocked), FastapiProvider())


def setup_di(app: FastAPI, container: AsyncContainer) -> None:
    """Attach the container to the app; one request scope per HTTP request."""
    setup_dishka(container, app)
