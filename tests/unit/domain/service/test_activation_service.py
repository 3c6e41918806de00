"""Unit tests for ActivationService."""

import asyncio
from uuid import uuid4

import pytest

from singles.domain.error import ConflictError, ValidationError
from singles.domain.repository import AccountRepository, InviteRepository
from singles.domain.service import NotificationClient
from singles.domain.service.notification import ADMIN_NEW_MEMBER_TEMPLATE
from singles.domain.value import (
    AccountKind,
    ActivationStatus,
    InviteEventType,
    InviteStatus,
    TokenStatus,
    UserId,
)
from singles.persistence.error import StoreUnavailableError
from singles.util.password import verify_password
from tests.conftest import (
    FrozenClock,
    build_services,
    make_couple,
    make_single,
    submit_for_review,
)
from tests.harness import create_env_fixture

# Unit test fixture - everything mocked
unit_env = create_env_fixture()

PASSWORD = "correct horse battery"


async def _approved(unit_env, clock=None):
    """Services plus an approved invite and its activation token."""
    services = await build_services(unit_env, clock or FrozenClock())
    couple = await make_couple(await unit_env.get(AccountRepository))
    created, _ = await submit_for_review(services, couple)
    outcome = await services.moderation.approve(created.invite.id, UserId(uuid4()))
    token = outcome.activation_url.split("token=", 1)[1]
    return services, couple, created, token


class TestVerifyActivationToken:
    """Tests for verify_activation_token method."""

    @pytest.mark.asyncio
    async def test_valid_token(self, unit_env):
        services, _, created, token = await _approved(unit_env)

        check = await services.activation.verify_activation_token(token)

        assert check.status == TokenStatus.VALID
        assert check.invite.id == created.invite.id
        assert check.expires_at is not None

    @pytest.mark.asyncio
    async def test_invite_token_is_not_an_activation_token(self, unit_env):
        services, _, created, _ = await _approved(unit_env)

        check = await services.activation.verify_activation_token(created.token)

        assert check.status == TokenStatus.INVALID

    @pytest.mark.asyncio
    async def test_expired_token(self, unit_env):
        clock = FrozenClock()
        services, _, _, token = await _approved(unit_env, clock)

        clock.advance(hours=169)
        check = await services.activation.verify_activation_token(token)

        assert check.status == TokenStatus.EXPIRED


class TestCompleteActivation:
    """Tests for complete_activation method."""

    @pytest.mark.asyncio
    async def test_activation_creates_single_account(self, unit_env):
        """Redeeming the token creates the account, profile and audit trail."""
        # Arrange
        services, couple, created, token = await _approved(unit_env)
        accounts = await unit_env.get(AccountRepository)
        invite_repo = await unit_env.get(InviteRepository)

        # Act
        result = await services.activation.complete_activation(token, PASSWORD)

        # Assert
        assert result.status == ActivationStatus.ACTIVATED
        assert result.invite_id == created.invite.id

        account = await accounts.find_by_id(result.user_id)
        assert account.kind == AccountKind.SINGLE
        assert account.email == "robin@example.com"
        assert account.username == "single_robin"
        assert account.invite_source_user_id == couple.id
        assert account.is_email_verified
        assert verify_password(PASSWORD, account.password_hash)

        invite = await invite_repo.find_by_id(created.invite.id)
        assert invite.status == InviteStatus.AWAITING_COUPLE
        assert invite.invitee_user_id == result.user_id

        profile = await services.profiles.get_profile(result.user_id)
        assert profile.nickname == "Robin"
        assert profile.city == "Valencia"
        assert profile.invite_source_user_id == couple.id

        types = [e.event_type for e in await services.events.history(created.invite.id)]
        assert types[-2:] == [
            InviteEventType.USER_LINKED,
            InviteEventType.ACTIVATION_COMPLETED,
        ]

    @pytest.mark.asyncio
    async def test_second_redemption_is_consumed(self, unit_env):
        services, _, _, token = await _approved(unit_env)
        await services.activation.complete_activation(token, PASSWORD)

        again = await services.activation.complete_activation(token, PASSWORD)

        assert again.status == ActivationStatus.CONSUMED
        assert again.user_id is None

    @pytest.mark.asyncio
    async def test_concurrent_redemptions_have_one_winner(self, unit_env):
        # Arrange
        services, _, _, token = await _approved(unit_env)

        # Act
        results = await asyncio.gather(
            *(services.activation.complete_activation(token, PASSWORD) for _ in range(5))
        )

        # Assert
        statuses = [r.status for r in results]
        assert statuses.count(ActivationStatus.ACTIVATED) == 1
        assert statuses.count(ActivationStatus.CONSUMED) == 4

    @pytest.mark.asyncio
    async def test_two_couples_inviting_same_email_activate_concurrently(
        self, unit_env
    ):
        """Both invites end up linked to the one single account."""
        # Arrange
        services = await build_services(unit_env, FrozenClock())
        accounts = await unit_env.get(AccountRepository)
        invite_repo = await unit_env.get(InviteRepository)
        tokens, invite_ids = [], []
        for _ in range(2):
            couple = await make_couple(accounts)
            created, _ = await submit_for_review(services, couple)
            outcome = await services.moderation.approve(
                created.invite.id, UserId(uuid4())
            )
            tokens.append(outcome.activation_url.split("token=", 1)[1])
            invite_ids.append(created.invite.id)

        # Act
        results = await asyncio.gather(
            *(services.activation.complete_activation(t, PASSWORD) for t in tokens)
        )

        # Assert
        assert [r.status for r in results] == [ActivationStatus.ACTIVATED] * 2
        assert results[0].user_id == results[1].user_id
        for invite_id in invite_ids:
            invite = await invite_repo.find_by_id(invite_id)
            assert invite.status == InviteStatus.AWAITING_COUPLE
            assert invite.invitee_user_id == results[0].user_id

    @pytest.mark.asyncio
    async def test_account_inserted_concurrently_is_linked(
        self, unit_env, monkeypatch
    ):
        # Arrange
        services, couple, created, token = await _approved(unit_env)
        accounts = await unit_env.get(AccountRepository)
        add = accounts.add
        competitor = {}

        async def add_after_competitor(account):
            # Another redemption inserts the same email first
            if "account" not in competitor:
                competitor["account"] = None
                competitor["account"] = await make_single(
                    accounts, email="robin@example.com", username="single_robin"
                )
            return await add(account)

        monkeypatch.setattr(accounts, "add", add_after_competitor)

        # Act
        result = await services.activation.complete_activation(token, PASSWORD)

        # Assert
        assert result.status == ActivationStatus.ACTIVATED
        assert result.user_id == competitor["account"].id
        linked = await accounts.find_by_id(result.user_id)
        assert verify_password(PASSWORD, linked.password_hash)

    @pytest.mark.asyncio
    async def test_failure_after_claim_releases_token(self, unit_env, monkeypatch):
        """A redemption that fails midway leaves the link usable for a retry."""
        # Arrange
        services, _, created, token = await _approved(unit_env)
        invite_repo = await unit_env.get(InviteRepository)
        hydrate = services.profiles.hydrate_from_submission

        async def store_down(*args, **kwargs):
            raise StoreUnavailableError(3, ConnectionResetError())

        monkeypatch.setattr(services.profiles, "hydrate_from_submission", store_down)

        # Act
        with pytest.raises(StoreUnavailableError):
            await services.activation.complete_activation(token, PASSWORD)

        # Assert
        check = await services.activation.verify_activation_token(token)
        assert check.status == TokenStatus.VALID
        invite = await invite_repo.find_by_id(created.invite.id)
        assert invite.status == InviteStatus.AWAITING_ACTIVATION

        monkeypatch.setattr(services.profiles, "hydrate_from_submission", hydrate)
        retried = await services.activation.complete_activation(token, PASSWORD)
        assert retried.status == ActivationStatus.ACTIVATED
        assert (await invite_repo.find_by_id(created.invite.id)).invitee_user_id == (
            retried.user_id
        )
        again = await services.activation.verify_activation_token(token)
        assert again.status == TokenStatus.CONSUMED

    @pytest.mark.asyncio
    async def test_expired_token_does_not_activate(self, unit_env):
        clock = FrozenClock()
        services, _, _, token = await _approved(unit_env, clock)

        clock.advance(days=8)
        result = await services.activation.complete_activation(token, PASSWORD)

        assert result.status == ActivationStatus.EXPIRED

    @pytest.mark.asyncio
    async def test_garbage_token(self, unit_env):
        services = await build_services(unit_env, FrozenClock())

        result = await services.activation.complete_activation("nope", PASSWORD)

        assert result.status == ActivationStatus.INVALID

    @pytest.mark.asyncio
    async def test_short_password_rejected_without_consuming(self, unit_env):
        services, _, _, token = await _approved(unit_env)

        with pytest.raises(ValidationError, match="at least 8"):
            await services.activation.complete_activation(token, "short")

        check = await services.activation.verify_activation_token(token)
        assert check.status == TokenStatus.VALID

    @pytest.mark.asyncio
    async def test_couple_email_conflicts(self, unit_env):
        services, _, _, token = await _approved(unit_env)
        await make_couple(
            await unit_env.get(AccountRepository), email="robin@example.com"
        )

        with pytest.raises(ConflictError, match="couple account"):
            await services.activation.complete_activation(token, PASSWORD)

    @pytest.mark.asyncio
    async def test_existing_single_is_linked(self, unit_env):
        # Arrange
        services, couple, _, token = await _approved(unit_env)
        accounts = await unit_env.get(AccountRepository)
        existing = await make_single(accounts, email="robin@example.com")

        # Act
        result = await services.activation.complete_activation(token, PASSWORD)

        # Assert
        assert result.user_id == existing.id
        linked = await accounts.find_by_id(existing.id)
        assert linked.invite_source_user_id == couple.id
        assert verify_password(PASSWORD, linked.password_hash)

    @pytest.mark.asyncio
    async def test_username_collision_gets_suffix(self, unit_env):
        services, _, _, token = await _approved(unit_env)
        accounts = await unit_env.get(AccountRepository)
        await make_single(accounts, username="single_robin")

        result = await services.activation.complete_activation(token, PASSWORD)

        account = await accounts.find_by_id(result.user_id)
        assert account.username != "single_robin"
        assert account.username.startswith("single_")
        assert len(account.username) <= 20

    @pytest.mark.asyncio
    async def test_admins_are_notified(self, unit_env):
        services, _, created, token = await _approved(unit_env)
        notifications = await unit_env.get(NotificationClient)

        await services.activation.complete_activation(token, PASSWORD)

        sent = notifications.sent_with(ADMIN_NEW_MEMBER_TEMPLATE)
        assert len(sent) == 1
        assert sent[0].recipients == ["moderators@example.com"]
        assert sent[0].data["invite_id"] == str(created.invite.id)

    @pytest.mark.asyncio
    async def test_notification_failure_does_not_undo_activation(self, unit_env):
        services, _, _, token = await _approved(unit_env)
        notifications = await unit_env.get(NotificationClient)
        notifications.fail = True

        result = await services.activation.complete_activation(token, PASSWORD)

        assert result.status == ActivationStatus.ACTIVATED
