"""Integration tests for the SQL repositories.

Runs against a throwaway SQLite file so the real statements (compare-and-set
updates, RETURNING, unique constraints) are exercised without a server.
"""

from datetime import datetime, timedelta, timezone
from uuid import uuid4

import pytest
import pytest_asyncio

from singles.config import DatabaseSettings
from singles.domain.error import DuplicateError
from singles.domain.model import ActivationToken, Invite, Review, SingleProfile
from singles.domain.value import (
    ActivationId,
    InviteId,
    InviteStatus,
    RequestedRole,
    ReviewId,
    UserId,
    VerificationStatus,
)
from singles.persistence.database import SqlStore
from singles.persistence.repository import (
    PostgresAccountRepository,
    PostgresActivationRepository,
    PostgresInviteRepository,
    PostgresProfileRepository,
    PostgresReviewRepository,
    PostgresVerificationRepository,
)
from singles.persistence.tables import metadata
from tests.conftest import make_couple, make_media, make_profile, make_single

NOW = datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc)


@pytest_asyncio.fixture
async def store(tmp_path):
    settings = DatabaseSettings(
        url=f"sqlite+aiosqlite:///{tmp_path / 'singles.db'}",
        retry_base_delay_ms=0,
    )
    sql_store = SqlStore(settings)
    engine = await sql_store.get_engine()
    async with engine.begin() as conn:
        await conn.run_sync(metadata.create_all)

    yield sql_store

    await sql_store.dispose()


def _invite(inviter_id: UserId, **overrides) -> Invite:
    values = {
        "id": InviteId(uuid4()),
        "inviter_id": inviter_id,
        "invitee_email": "robin@example.com",
        "requested_role": RequestedRole.SINGLE_FEMALE,
        "token_hash": b"h" * 32,
        "token_salt": b"s" * 16,
        "expires_at": NOW + timedelta(days=7),
        "created_at": NOW,
        "updated_at": NOW,
    }
    values.update(overrides)
    return Invite(**values)


class TestAccountRepositoryIntegration:
    """Integration tests for PostgresAccountRepository."""

    @pytest.mark.asyncio
    async def test_round_trip_and_case_insensitive_email(self, store):
        accounts = PostgresAccountRepository(store)
        couple = await make_couple(accounts, email="Couple@Example.com")

        found = await accounts.find_by_email("couple@example.COM")

        assert found.id == couple.id
        assert found.display_name == "Alex & Sam"
        assert found.membership_expires_at.tzinfo is not None
        assert await accounts.username_exists(couple.username)

    @pytest.mark.asyncio
    async def test_duplicate_email(self, store):
        accounts = PostgresAccountRepository(store)
        await make_single(accounts, email="robin@example.com")

        with pytest.raises(DuplicateError):
            await make_single(accounts, email="robin@example.com")


class TestInviteRepositoryIntegration:
    """Integration tests for PostgresInviteRepository."""

    @pytest.mark.asyncio
    async def test_add_within_quota(self, store):
        # Arrange
        accounts = PostgresAccountRepository(store)
        invites = PostgresInviteRepository(store)
        couple = await make_couple(accounts)

        # Act
        added = [await invites.add_within_quota(_invite(couple.id), 2) for _ in range(3)]

        # Assert
        assert added == [True, True, False]
        assert await invites.count_active_by_inviter(couple.id) == 2

    @pytest.mark.asyncio
    async def test_transition_is_compare_and_set(self, store):
        """Only the first transition out of pending matches."""
        # Arrange
        accounts = PostgresAccountRepository(store)
        invites = PostgresInviteRepository(store)
        couple = await make_couple(accounts)
        invite = _invite(couple.id)
        await invites.add_within_quota(invite, 3)

        # Act
        revoked = await invites.transition(
            invite.id,
            (InviteStatus.PENDING,),
            InviteStatus.REVOKED,
            now=NOW + timedelta(hours=1),
            consume=True,
        )
        second = await invites.transition(
            invite.id, (InviteStatus.PENDING,), InviteStatus.DECLINED, now=NOW
        )

        # Assert
        assert revoked.status == InviteStatus.REVOKED
        assert revoked.consumed_at == NOW + timedelta(hours=1)
        assert second is None
        stored = await invites.find_by_id(invite.id)
        assert stored.status == InviteStatus.REVOKED
        assert stored.token_hash == b"h" * 32
        assert await invites.count_active_by_inviter(couple.id) == 0

    @pytest.mark.asyncio
    async def test_consume_keeps_first_timestamp(self, store):
        accounts = PostgresAccountRepository(store)
        invites = PostgresInviteRepository(store)
        couple = await make_couple(accounts)
        invite = _invite(couple.id, status=InviteStatus.AWAITING_COUPLE)
        await invites.add_within_quota(invite, 3)
        first = NOW + timedelta(hours=1)

        await invites.transition(
            invite.id, (InviteStatus.AWAITING_COUPLE,), InviteStatus.COMPLETED,
            now=first, consume=True,
        )
        again = await invites.transition(
            invite.id, (InviteStatus.COMPLETED,), InviteStatus.COMPLETED,
            now=first + timedelta(hours=1), consume=True,
        )

        assert again.consumed_at == first

    @pytest.mark.asyncio
    async def test_find_by_statuses(self, store):
        accounts = PostgresAccountRepository(store)
        invites = PostgresInviteRepository(store)
        couple = await make_couple(accounts)
        waiting = _invite(couple.id, status=InviteStatus.AWAITING_VERIFICATION)
        await invites.add_within_quota(waiting, 3)
        await invites.add_within_quota(_invite(couple.id), 3)

        found = await invites.find_by_statuses([InviteStatus.AWAITING_VERIFICATION])

        assert [i.id for i in found] == [waiting.id]


class TestActivationRepositoryIntegration:
    """Integration tests for PostgresActivationRepository."""

    @pytest.mark.asyncio
    async def test_consume_once_and_replace(self, store):
        # Arrange
        accounts = PostgresAccountRepository(store)
        invites = PostgresInviteRepository(store)
        activations = PostgresActivationRepository(store)
        couple = await make_couple(accounts)
        invite = _invite(couple.id)
        await invites.add_within_quota(invite, 3)

        def _token() -> ActivationToken:
            return ActivationToken(
                id=ActivationId(uuid4()),
                invite_id=invite.id,
                token_hash=b"a" * 32,
                token_salt=b"b" * 16,
                expires_at=NOW + timedelta(days=7),
                created_at=NOW,
            )

        first = await activations.replace_for_invite(_token(), NOW)

        # Act
        second = await activations.replace_for_invite(_token(), NOW)
        claim = uuid4()
        claimed = await activations.consume(second.id, NOW, claim)
        retried = await activations.consume(second.id, NOW, claim)
        claimed_again = await activations.consume(second.id, NOW, uuid4())

        # Assert
        assert (await activations.find_by_id(first.id)).consumed_at == NOW
        assert claimed is True
        assert retried is True
        assert claimed_again is False
        assert await activations.consume_all_for_invite(invite.id, NOW) == 0

    @pytest.mark.asyncio
    async def test_release_returns_token_to_holder_only(self, store):
        # Arrange
        accounts = PostgresAccountRepository(store)
        invites = PostgresInviteRepository(store)
        activations = PostgresActivationRepository(store)
        couple = await make_couple(accounts)
        invite = _invite(couple.id)
        await invites.add_within_quota(invite, 3)
        token = await activations.replace_for_invite(
            ActivationToken(
                id=ActivationId(uuid4()),
                invite_id=invite.id,
                token_hash=b"a" * 32,
                token_salt=b"b" * 16,
                expires_at=NOW + timedelta(days=7),
                created_at=NOW,
            ),
            NOW,
        )
        claim = uuid4()
        await activations.consume(token.id, NOW, claim)

        # Act
        by_other = await activations.release(token.id, uuid4())
        by_holder = await activations.release(token.id, claim)

        # Assert
        assert by_other is False
        assert by_holder is True
        assert (await activations.find_by_id(token.id)).consumed_at is None
        assert await activations.consume(token.id, NOW, uuid4()) is True


class TestVerificationRepositoryIntegration:
    """Integration tests for PostgresVerificationRepository."""

    @pytest.mark.asyncio
    async def test_submissions_share_one_session(self, store):
        # Arrange
        accounts = PostgresAccountRepository(store)
        invites = PostgresInviteRepository(store)
        sessions = PostgresVerificationRepository(store)
        couple = await make_couple(accounts)
        invite = _invite(couple.id)
        await invites.add_within_quota(invite, 3)

        # Act
        with_profile = await sessions.save_profile(
            invite.id, invite.invitee_email, make_profile(),
            VerificationStatus.AWAITING_UPLOADS, NOW,
        )
        with_media = await sessions.save_media(
            invite.id, invite.invitee_email, make_media(),
            VerificationStatus.UNDER_REVIEW, NOW,
        )
        rejected = await sessions.record_decision(
            with_media.id, VerificationStatus.REJECTED, UserId(uuid4()), NOW,
            rejection_reason="Blurry selfie",
        )

        # Assert
        assert with_media.id == with_profile.id
        assert with_media.submitted_profile.nickname == "Robin"
        assert with_media.submitted_media.selfies[0].id == "selfie-1"
        assert rejected.status == VerificationStatus.REJECTED
        assert rejected.rejection_reason == "Blurry selfie"
        by_invite = await sessions.find_by_invites([invite.id, InviteId(uuid4())])
        assert list(by_invite) == [invite.id]


class TestReviewAndProfileRepositoryIntegration:
    """Integration tests for PostgresReviewRepository and PostgresProfileRepository."""

    @pytest.mark.asyncio
    async def test_review_pair_is_unique(self, store):
        # Arrange
        accounts = PostgresAccountRepository(store)
        reviews = PostgresReviewRepository(store)
        single = await make_single(accounts)
        couple = await make_couple(accounts)

        def _review(score: int) -> Review:
            return Review(
                id=ReviewId(uuid4()),
                single_user_id=single.id,
                couple_user_id=couple.id,
                score=score,
                created_at=NOW,
            )

        await reviews.add(_review(4))

        # Act & Assert
        with pytest.raises(DuplicateError):
            await reviews.add(_review(2))

        stats = await reviews.stats_for_single(single.id)
        assert stats.review_count == 1
        assert stats.average_score == 4.0

    @pytest.mark.asyncio
    async def test_profile_upsert(self, store):
        accounts = PostgresAccountRepository(store)
        profiles = PostgresProfileRepository(store)
        single = await make_single(accounts)
        profile = SingleProfile(
            user_id=single.id, nickname="Robin", availability={"weekends": True}
        )

        await profiles.save(profile)
        await profiles.save(profile.model_copy(update={"city": "Valencia"}))

        stored = await profiles.find_by_user(single.id)
        assert stored.city == "Valencia"
        assert stored.availability == {"weekends": True}
