"""Unit tests for ModerationService."""

from uuid import uuid4

import pytest

from singles.domain.error import InvalidTransitionError, NotFoundError
from singles.domain.repository import AccountRepository, InviteRepository
from singles.domain.value import (
    InviteEventType,
    InviteStatus,
    SessionId,
    TokenStatus,
    UserId,
    VerificationStatus,
)
from tests.conftest import (
    FrozenClock,
    build_services,
    make_couple,
    submit_for_review,
)
from tests.harness import create_env_fixture

# Unit test fixture - everything mocked
unit_env = create_env_fixture()


def _token_from(url: str) -> str:
    return url.split("token=", 1)[1]


class TestListQueue:
    """Tests for list_queue method."""

    @pytest.mark.asyncio
    async def test_default_queue_holds_invites_under_verification(self, unit_env):
        # Arrange
        services = await build_services(unit_env, FrozenClock())
        couple = await make_couple(await unit_env.get(AccountRepository))
        created, session = await submit_for_review(services, couple)
        await services.invites.create_invite(couple.id, "other@example.com", "single_male")

        # Act
        queue = await services.moderation.list_queue()

        # Assert
        assert len(queue) == 1
        assert queue[0].invite.id == created.invite.id
        assert queue[0].session.id == session.id

    @pytest.mark.asyncio
    async def test_queue_by_status(self, unit_env):
        services = await build_services(unit_env, FrozenClock())
        couple = await make_couple(await unit_env.get(AccountRepository))
        pending = await services.invites.create_invite(
            couple.id, "other@example.com", "single_male"
        )

        queue = await services.moderation.list_queue([InviteStatus.PENDING])

        assert [item.invite.id for item in queue] == [pending.invite.id]
        assert queue[0].session is None


class TestApprove:
    """Tests for approve method."""

    @pytest.mark.asyncio
    async def test_approve_issues_activation(self, unit_env):
        # Arrange
        clock = FrozenClock()
        services = await build_services(unit_env, clock)
        couple = await make_couple(await unit_env.get(AccountRepository))
        moderator_id = UserId(uuid4())
        created, session = await submit_for_review(services, couple)

        # Act
        outcome = await services.moderation.approve(created.invite.id, moderator_id)

        # Assert
        assert outcome.invite.status == InviteStatus.AWAITING_ACTIVATION
        assert outcome.invitee_email == "robin@example.com"
        assert outcome.inviter_name == "Alex & Sam"
        assert outcome.role_label == "Unicorn Invite"
        assert "/join/singles/activate?token=" in outcome.activation_url

        check = await services.activation.verify_activation_token(
            _token_from(outcome.activation_url)
        )
        assert check.status == TokenStatus.VALID

        sessions = await services.moderation.list_queue(
            [InviteStatus.AWAITING_ACTIVATION]
        )
        assert sessions[0].session.status == VerificationStatus.APPROVED
        assert sessions[0].session.decision_user_id == moderator_id

        history = await services.events.history(created.invite.id)
        types = [e.event_type for e in history]
        assert InviteEventType.ACTIVATION_TOKEN_CREATED in types
        assert types[-1] == InviteEventType.APPROVED

    @pytest.mark.asyncio
    async def test_reapproval_replaces_activation_token(self, unit_env):
        """Approving again re-issues the link and retires the old one."""
        # Arrange
        services = await build_services(unit_env, FrozenClock())
        couple = await make_couple(await unit_env.get(AccountRepository))
        created, _ = await submit_for_review(services, couple)
        moderator_id = UserId(uuid4())
        first = await services.moderation.approve(created.invite.id, moderator_id)

        # Act
        second = await services.moderation.approve(created.invite.id, moderator_id)

        # Assert
        old = await services.activation.verify_activation_token(
            _token_from(first.activation_url)
        )
        new = await services.activation.verify_activation_token(
            _token_from(second.activation_url)
        )
        assert old.status == TokenStatus.CONSUMED
        assert new.status == TokenStatus.VALID

    @pytest.mark.asyncio
    async def test_approve_closed_invite_rejected(self, unit_env):
        services = await build_services(unit_env, FrozenClock())
        couple = await make_couple(await unit_env.get(AccountRepository))
        created = await services.invites.create_invite(
            couple.id, "robin@example.com", "single_male"
        )
        await services.invites.revoke_invite(created.invite.id, couple.id)

        with pytest.raises(InvalidTransitionError):
            await services.moderation.approve(created.invite.id, UserId(uuid4()))

    @pytest.mark.asyncio
    async def test_approve_lapsed_invite_expires_it(self, unit_env):
        # Arrange
        clock = FrozenClock()
        services = await build_services(unit_env, clock)
        couple = await make_couple(await unit_env.get(AccountRepository))
        created, _ = await submit_for_review(services, couple)
        clock.advance(days=8)

        # Act
        with pytest.raises(InvalidTransitionError) as exc_info:
            await services.moderation.approve(created.invite.id, UserId(uuid4()))

        # Assert
        assert exc_info.value.current == InviteStatus.EXPIRED.value
        stored = await (await unit_env.get(InviteRepository)).find_by_id(
            created.invite.id
        )
        assert stored.status == InviteStatus.EXPIRED
        history = await services.events.history(created.invite.id)
        types = [e.event_type for e in history]
        assert types[-1] == InviteEventType.EXPIRED
        assert InviteEventType.APPROVED not in types

    @pytest.mark.asyncio
    async def test_reapproval_allowed_after_invite_ttl(self, unit_env):
        """An approved invite can get a fresh link even past its own TTL."""
        clock = FrozenClock()
        services = await build_services(unit_env, clock)
        couple = await make_couple(await unit_env.get(AccountRepository))
        created, _ = await submit_for_review(services, couple)
        await services.moderation.approve(created.invite.id, UserId(uuid4()))
        clock.advance(days=8)

        outcome = await services.moderation.approve(created.invite.id, UserId(uuid4()))

        assert outcome.invite.status == InviteStatus.AWAITING_ACTIVATION
        check = await services.activation.verify_activation_token(
            _token_from(outcome.activation_url)
        )
        assert check.status == TokenStatus.VALID

    @pytest.mark.asyncio
    async def test_approve_unknown_invite(self, unit_env):
        services = await build_services(unit_env, FrozenClock())

        with pytest.raises(NotFoundError):
            await services.moderation.approve(uuid4(), UserId(uuid4()))


class TestReject:
    """Tests for reject method."""

    @pytest.mark.asyncio
    async def test_reject_leaves_invite_status(self, unit_env):
        # Arrange
        services = await build_services(unit_env, FrozenClock())
        invite_repo = await unit_env.get(InviteRepository)
        couple = await make_couple(await unit_env.get(AccountRepository))
        created, session = await submit_for_review(services, couple)
        moderator_id = UserId(uuid4())

        # Act
        rejected = await services.moderation.reject(
            session.id, moderator_id, "Selfie does not match", notes="Blurry"
        )

        # Assert
        assert rejected.status == VerificationStatus.REJECTED
        assert rejected.rejection_reason == "Selfie does not match"
        assert rejected.moderation_notes == "Blurry"
        assert rejected.decision_at is not None

        invite = await invite_repo.find_by_id(created.invite.id)
        assert invite.status == InviteStatus.AWAITING_VERIFICATION

        history = await services.events.history(created.invite.id)
        assert history[-1].event_type == InviteEventType.VERIFICATION_REJECTED
        assert history[-1].metadata["reason"] == "Selfie does not match"

    @pytest.mark.asyncio
    async def test_rejected_invitee_can_resubmit(self, unit_env):
        services = await build_services(unit_env, FrozenClock())
        couple = await make_couple(await unit_env.get(AccountRepository))
        created, session = await submit_for_review(services, couple)
        await services.moderation.reject(session.id, UserId(uuid4()), "Try again")

        check = await services.invites.verify_invite_token(created.token)
        resubmitted = await services.verification.submit_profile(
            check.invite, session.submitted_profile
        )

        assert resubmitted.id == session.id
        assert resubmitted.status == VerificationStatus.AWAITING_UPLOADS

    @pytest.mark.asyncio
    async def test_cannot_reject_approved_session(self, unit_env):
        services = await build_services(unit_env, FrozenClock())
        couple = await make_couple(await unit_env.get(AccountRepository))
        created, session = await submit_for_review(services, couple)
        await services.moderation.approve(created.invite.id, UserId(uuid4()))

        with pytest.raises(InvalidTransitionError):
            await services.moderation.reject(session.id, UserId(uuid4()), "Too late")

    @pytest.mark.asyncio
    async def test_reject_unknown_session(self, unit_env):
        services = await build_services(unit_env, FrozenClock())

        with pytest.raises(NotFoundError):
            await services.moderation.reject(SessionId(uuid4()), UserId(uuid4()), "x")


class TestDecline:
    """Tests for decline method."""

    @pytest.mark.asyncio
    async def test_decline_consumes_activation(self, unit_env):
        # Arrange
        services = await build_services(unit_env, FrozenClock())
        couple = await make_couple(await unit_env.get(AccountRepository))
        created, _ = await submit_for_review(services, couple)
        moderator_id = UserId(uuid4())
        outcome = await services.moderation.approve(created.invite.id, moderator_id)

        # Act
        declined = await services.moderation.decline(
            created.invite.id, moderator_id, reason="Duplicate profile"
        )

        # Assert
        assert declined.status == InviteStatus.DECLINED
        assert declined.consumed_at is not None
        check = await services.activation.verify_activation_token(
            _token_from(outcome.activation_url)
        )
        assert check.status == TokenStatus.CONSUMED

    @pytest.mark.asyncio
    async def test_decline_terminal_invite_is_noop(self, unit_env):
        services = await build_services(unit_env, FrozenClock())
        couple = await make_couple(await unit_env.get(AccountRepository))
        created = await services.invites.create_invite(
            couple.id, "robin@example.com", "single_male"
        )
        revoked = await services.invites.revoke_invite(created.invite.id, couple.id)

        result = await services.moderation.decline(created.invite.id, UserId(uuid4()))

        assert result.status == InviteStatus.REVOKED
        assert result.updated_at == revoked.updated_at
