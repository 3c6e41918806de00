#!/usr/bin/env python3
"""Upgrade the onboarding schema to the latest Alembic revision.

Runs before the app starts; a failure stops the deploy so the service
never serves against a schema missing the invite tables.
"""

import sys
from pathlib import Path

import logfire
from alembic import command
from alembic.config import Config

from singles.config import Settings
from singles.util.observability import configure_logfire

ALEMBIC_INI = Path(__file__).resolve().parent.parent / "alembic.ini"


def main(target: str = "head") -> int:
    settings = Settings()
    configure_logfire(settings)

    with logfire.span("migrations.upgrade", target=target):
        try:
            command.upgrade(Config(str(ALEMBIC_INI)), target)
        except Exception as e:
            logfire.error(
                "Database migration failed",
                target=target,
                error_type=type(e).__name__,
                _exc_info=sys.exc_info(),
            )
            raise

    logfire.info("Database migrations completed", target=target)
    return 0


if __name__ == "__main__":
    sys.exit(main(*sys.argv[1:2]))
