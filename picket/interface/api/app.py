"""FastAPI application."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from dishka import AsyncContainer
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from picket.config import Settings
from picket.interface.api.errors import register_error_handlers
from picket.interface.api.routes import (
    auth,
    health,
    invitations,
    subscriptions,
    users,
)
from picket.util.di.container import create_container, setup_di
from picket.util.observability import instrument_fastapi
from picket.util.tasks import BackgroundDispatcher


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    yield
    # Let in-flight mail and push deliveries finish before the container closes
    dispatcher = await app.state.dishka_container.get(BackgroundDispatcher)
    await dispatcher.drain()
    await app.state.dishka_container.close()


def create_app(container: AsyncContainer | None = None) -> FastAPI:
    """Create FastAPI application.

    Note: Logfire should be configured before calling this function.
    In production, start_app.py handles this.

    Args:
        container: DI container, production container when omitted
    """
    settings = Settings()

    app_instance = FastAPI(
        title="Picket API",
        description="Backend API for Picketer - coordination of pickets, "
        "invitation-only membership",
        version="0.1.0",
        lifespan=lifespan,
    )

    instrument_fastapi(app_instance)

    app_instance.add_middleware(
        CORSMiddleware,
        allow_origins=[
            settings.api.frontend_url,
            "http://localhost:3000",  # Local development
        ],
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=[
            "Authorization",
            "Content-Type",
            "Accept",
            "Origin",
            "X-Auth-Token",
        ],
        max_age=600,
    )

    setup_di(app_instance, container or create_container())
    register_error_handlers(app_instance)

    app_instance.include_router(health.router)
    app_instance.include_router(auth.router)
    app_instance.include_router(invitations.router)
    app_instance.include_router(users.router)
    app_instance.include_router(subscriptions.router)

    return app_instance
