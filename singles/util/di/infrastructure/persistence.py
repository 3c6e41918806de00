"""Persistence infrastructure providers."""

from collections.abc import AsyncIterator

from dishka import Scope, provide

from singles.config import Settings
from singles.domain.repository import (
    AccountRepository,
    ActivationRepository,
    InviteEventRepository,
    InviteRepository,
    ProfileRepository,
    ReviewRepository,
    VerificationRepository,
)
from singles.persistence.database import SqlStore
from singles.persistence.repository import (
    PostgresAccountRepository,
    PostgresActivationRepository,
    PostgresInviteEventRepository,
    PostgresInviteRepository,
    PostgresProfileRepository,
    PostgresReviewRepository,
    PostgresVerificationRepository,
)
from singles.persistence.schema import SchemaGuard
from singles.util.di.base import ProviderBase
from singles.util.observability import instrument_sqlalchemy


class PersistenceProvider(ProviderBase):
    """Persistence component base."""

    __mock_component__ = "persistence"


class ProdPersistenceProvider(PersistenceProvider):
    """Production persistence provider using PostgreSQL."""

    __is_mock__ = False

    @provide(scope=Scope.APP)
    def get_schema_guard(self) -> SchemaGuard:
        """Provide the process-wide schema guard."""
        return SchemaGuard()

    @provide(scope=Scope.APP)
    async def get_store(
        self, settings: Settings, schema_guard: SchemaGuard
    ) -> AsyncIterator[SqlStore]:
        """Provide the retrying store. The engine is disposed on shutdown."""
        store = SqlStore(
            settings.database,
            schema_guard=schema_guard,
            debug=settings.debug,
            # Instrument each engine, including ones recreated after a failure
            on_engine_created=instrument_sqlalchemy,
        )
        yield store
        await store.dispose()

    @provide(scope=Scope.REQUEST)
    def get_account_repository(self, store: SqlStore) -> AccountRepository:
        """Provide Account repository."""
        return PostgresAccountRepository(store)

    @provide(scope=Scope.REQUEST)
    def get_invite_repository(self, store: SqlStore) -> InviteRepository:
        """Provide Invite repository."""
        return PostgresInviteRepository(store)

    @provide(scope=Scope.REQUEST)
    def get_activation_repository(self, store: SqlStore) -> ActivationRepository:
        """Provide activation token repository."""
        return PostgresActivationRepository(store)

    @provide(scope=Scope.REQUEST)
    def get_verification_repository(
        self, store: SqlStore
    ) -> VerificationRepository:
        """Provide verification session repository."""
        return PostgresVerificationRepository(store)

    @provide(scope=Scope.REQUEST)
    def get_profile_repository(self, store: SqlStore) -> ProfileRepository:
        """Provide SingleProfile repository."""
        return PostgresProfileRepository(store)

    @provide(scope=Scope.REQUEST)
    def get_review_repository(self, store: SqlStore) -> ReviewRepository:
        """Provide Review repository."""
        return PostgresReviewRepository(store)

    @provide(scope=Scope.REQUEST)
    def get_event_repository(self, store: SqlStore) -> InviteEventRepository:
        """Provide invite event repository."""
        return PostgresInviteEventRepository(store)
