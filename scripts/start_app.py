#!/usr/bin/env python3
"""Serve the onboarding API with uvicorn."""

import sys

import logfire
import uvicorn

from singles.config import Settings
from singles.interface.api.app import create_app
from singles.util.logging import setup_logging
from singles.util.observability import configure_logfire


def main() -> int:
    settings = Settings()

    # Logfire first, so configuration errors raised by create_app are exported
    configure_logfire(settings)
    setup_logging(settings)

    try:
        app = create_app()
    except Exception as e:
        logfire.error(
            "Application startup failed",
            environment=settings.environment,
            error_type=type(e).__name__,
            _exc_info=sys.exc_info(),
        )
        raise

    logfire.info("Starting onboarding API", port=settings.port, git_sha=settings.git_sha)
    uvicorn.run(
        app,
        host="0.0.0.0",
        port=settings.port,
        log_level="debug" if settings.debug else "info",
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
