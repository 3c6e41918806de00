"""FastAPI application."""

from dishka import AsyncContainer
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from singles.config import Settings
from singles.interface.api.routes import (
    health,
    invites,
    members,
    moderation,
    onboarding,
)
from singles.interface.error import register_exception_handlers
from singles.util.di.container import create_container, setup_di
from singles.util.logging import check_production_settings
from singles.util.observability import instrument_fastapi, instrument_httpx


def create_app(container: AsyncContainer | None = None) -> FastAPI:
    """Create FastAPI application.

    Note: Logfire should be configured before calling this function.
    In production, start_app.py handles this.

    Args:
        container: DI container; the production container when omitted
    """
    settings = Settings()
    check_production_settings(settings)

    # Instrument httpx for outbound email delivery
    instrument_httpx()

    app_instance = FastAPI(
        title="DateAstrum Singles API",
        description="Invitation, moderation and activation of single members",
        version="0.1.0",
    )

    # Instrument FastAPI for automatic tracing of HTTP requests
    instrument_fastapi(app_instance)

    app_instance.add_middleware(
        CORSMiddleware,
        allow_origins=[
            settings.api.frontend_url,
            "http://localhost:3000",  # Local development
            "http://localhost:5173",  # Vite default
        ],
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=[
            "Content-Type",
            "Accept",
            "Origin",
            "User-Agent",
            "Cache-Control",
            "X-Requested-With",
        ],
        max_age=600,  # Cache preflight requests for 10 minutes
    )

    setup_di(app_instance, container or create_container())
    register_exception_handlers(app_instance)

    # Register routes
    app_instance.include_router(health.router)
    app_instance.include_router(invites.router)
    app_instance.include_router(onboarding.router)
    app_instance.include_router(moderation.router)
    app_instance.include_router(members.router)

    return app_instance
