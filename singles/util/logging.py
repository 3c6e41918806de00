"""Logging configuration for the application."""

import logging

import logfire

from singles.config import Settings
from singles.util.error import ConfigurationError

_DEFAULT_JWT_SECRET = "CHANGE_ME_IN_PRODUCTION"


def setup_logging(settings: Settings) -> None:
    """Configure application logging.

    Standard library records (uvicorn, sqlalchemy) are forwarded to logfire
    so they share the same output as the application's spans.

    Args:
        settings: Application settings
    """
    level = logging.DEBUG if settings.debug else logging.INFO

    logging.basicConfig(
        level=level,
        handlers=[logfire.LogfireLoggingHandler()],
        force=True,  # Override any existing configuration
    )

    # Set third-party loggers to WARNING to reduce noise
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)

    logging.getLogger("singles").setLevel(level)

    logfire.info(
        "Logging configured",
        environment=settings.environment,
        level=logging.getLevelName(level),
    )


def check_production_settings(settings: Settings) -> None:
    """Refuse to start a production deployment with unsafe defaults.

    Raises:
        ConfigurationError: If a required secret is left at its default
    """
    if settings.environment != "production":
        return
    if settings.auth.jwt_secret == _DEFAULT_JWT_SECRET:
        raise ConfigurationError("AUTH__JWT_SECRET", "must be set in production")
    if not settings.email.base_url:
        logfire.warn("EMAIL__BASE_URL is not set; invite emails will not be delivered")
