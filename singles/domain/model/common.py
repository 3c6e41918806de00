"""Shared base for onboarding entities."""

from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict


def utcnow() -> datetime:
    """Current time as a timezone-aware UTC datetime."""
    return datetime.now(timezone.utc)


class DomainModel(BaseModel):
    """Immutable entity snapshot.

    Repositories return new instances for every change; services build
    updated copies with ``model_copy(update=...)``.
    """

    model_config = ConfigDict(frozen=True)
