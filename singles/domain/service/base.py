"""Base service class for domain services."""

from collections.abc import Callable
from datetime import datetime

# Source of "now" for expiry decisions; replaced in tests to move time forward
Clock = Callable[[], datetime]


class Service:
    """Base class for all domain services.

    Domain services contain business logic that doesn't naturally belong
    to a single entity or spans multiple entities/aggregates.
    """

    pass
