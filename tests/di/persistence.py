"""Mock persistence providers for testing."""

from dishka import Scope, provide

from singles.domain.repository import (
    AccountRepository,
    ActivationRepository,
    InviteEventRepository,
    InviteRepository,
    ProfileRepository,
    ReviewRepository,
    VerificationRepository,
)
from singles.persistence.repository.inmemory import (
    InMemoryAccountRepository,
    InMemoryActivationRepository,
    InMemoryInviteEventRepository,
    InMemoryInviteRepository,
    InMemoryProfileRepository,
    InMemoryReviewRepository,
    InMemoryVerificationRepository,
)
from singles.util.di.infrastructure.persistence import PersistenceProvider


class MockPersistenceProvider(PersistenceProvider):
    """Mock persistence provider using in-memory repositories.

    Uses APP scope so state survives across requests within one container;
    every test builds its own container, which keeps tests isolated.
    """

    __is_mock__ = True

    scope = Scope.APP

    @provide
    def get_account_repository(self) -> AccountRepository:
        """Provide in-memory account repository."""
        return InMemoryAccountRepository()

    @provide
    def get_invite_repository(self) -> InviteRepository:
        """Provide in-memory invite repository."""
        return InMemoryInviteRepository()

    @provide
    def get_activation_repository(self) -> ActivationRepository:
        return InMemoryActivationRepository()

    @provide
    def get_verification_repository(self) -> VerificationRepository:
        return InMemoryVerificationRepository()

    @provide
    def get_profile_repository(self) -> ProfileRepository:
        return InMemoryProfileRepository()

    @provide
    def get_review_repository(self) -> ReviewRepository:
        return InMemoryReviewRepository()

    @provide
    def get_event_repository(self) -> InviteEventRepository:
        return InMemoryInviteEventRepository()
