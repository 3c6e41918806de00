"""Shared base classes and helpers for onboarding value objects."""

from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, RootModel


def clean_text(value: Any) -> Any:
    """Trim submitted text; blank strings become None."""
    if isinstance(value, str):
        return value.strip() or None
    return value


class ValueObject(BaseModel):
    """Immutable, value-compared submission payload.

    Unknown keys in client payloads are dropped rather than rejected.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")


T = TypeVar("T")


class RootValueObject(RootModel[T], Generic[T]):
    """Single-value wrapper such as a normalized email.

    ``str()`` yields the wrapped value so it can be stored as-is.
    """

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return str(self.root)
