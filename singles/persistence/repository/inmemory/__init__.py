"""In-memory repository implementations for testing."""

from .account import InMemoryAccountRepository
from .activation import InMemoryActivationRepository
from .event import InMemoryInviteEventRepository
from .invite import InMemoryInviteRepository
from .profile import InMemoryProfileRepository
from .review import InMemoryReviewRepository
from .verification import InMemoryVerificationRepository

__all__ = [
    "InMemoryAccountRepository",
    "InMemoryActivationRepository",
    "InMemoryInviteEventRepository",
    "InMemoryInviteRepository",
    "InMemoryProfileRepository",
    "InMemoryReviewRepository",
    "InMemoryVerificationRepository",
]
