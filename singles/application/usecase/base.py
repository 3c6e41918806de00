"""Base use case."""

from abc import ABC, abstractmethod
from typing import Generic, TypeVar

from pydantic import BaseModel

RequestT = TypeVar("RequestT", bound=BaseModel)
ResponseT = TypeVar("ResponseT", bound=BaseModel)


class BaseUseCase(ABC, Generic[RequestT, ResponseT]):
    """One user-facing onboarding operation.

    Use cases translate a validated request into domain service calls and
    shape the result for the HTTP layer.
    """

    @abstractmethod
    async def execute(self, request: RequestT) -> ResponseT:
        pass
