"""PostgreSQL repository implementations."""

from singles.persistence.repository.account import PostgresAccountRepository
from singles.persistence.repository.activation import PostgresActivationRepository
from singles.persistence.repository.event import PostgresInviteEventRepository
from singles.persistence.repository.invite import PostgresInviteRepository
from singles.persistence.repository.profile import PostgresProfileRepository
from singles.persistence.repository.review import PostgresReviewRepository
from singles.persistence.repository.verification import (
    PostgresVerificationRepository,
)

__all__ = [
    "PostgresAccountRepository",
    "PostgresActivationRepository",
    "PostgresInviteEventRepository",
    "PostgresInviteRepository",
    "PostgresProfileRepository",
    "PostgresReviewRepository",
    "PostgresVerificationRepository",
]
