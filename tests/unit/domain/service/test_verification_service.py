"""Unit tests for VerificationService."""

import pytest

from singles.domain.error import InvalidTransitionError, ValidationError
from singles.domain.repository import AccountRepository, InviteRepository
from singles.domain.service import InviteService, VerificationService
from singles.domain.value import (
    InviteEventType,
    InviteStatus,
    SubmittedMedia,
    VerificationStatus,
)
from tests.conftest import FrozenClock, build_services, make_couple, make_media, make_profile
from tests.harness import create_env_fixture

# Unit test fixture - everything mocked
unit_env = create_env_fixture()


async def _create_invite(unit_env):
    invite_service = await unit_env.get(InviteService)
    couple = await make_couple(await unit_env.get(AccountRepository))
    return await invite_service.create_invite(couple.id, "robin@example.com", "single_male")


class TestSubmitProfile:
    """Tests for submit_profile method."""

    @pytest.mark.asyncio
    async def test_profile_moves_invite_to_awaiting_verification(self, unit_env):
        # Arrange
        verification = await unit_env.get(VerificationService)
        invite_repo = await unit_env.get(InviteRepository)
        created = await _create_invite(unit_env)

        # Act
        session = await verification.submit_profile(created.invite, make_profile())

        # Assert
        assert session.status == VerificationStatus.AWAITING_UPLOADS
        assert session.invite_id == created.invite.id
        assert session.invitee_email == "robin@example.com"
        assert session.submitted_profile.contact_email == "robin@example.com"
        assert session.submitted_profile.short_bio == "Friendly and curious."

        invite = await invite_repo.find_by_id(created.invite.id)
        assert invite.status == InviteStatus.AWAITING_VERIFICATION

    @pytest.mark.asyncio
    async def test_resubmitting_updates_the_same_session(self, unit_env):
        verification = await unit_env.get(VerificationService)
        created = await _create_invite(unit_env)

        first = await verification.submit_profile(created.invite, make_profile())
        second = await verification.submit_profile(
            created.invite, make_profile(nickname="Robbie")
        )

        assert second.id == first.id
        assert second.submitted_profile.nickname == "Robbie"

    @pytest.mark.asyncio
    async def test_consent_required(self, unit_env):
        verification = await unit_env.get(VerificationService)
        created = await _create_invite(unit_env)

        with pytest.raises(ValidationError, match="Consent"):
            await verification.submit_profile(
                created.invite, make_profile(consent_acknowledged=False)
            )

    @pytest.mark.asyncio
    async def test_required_fields_listed(self, unit_env):
        verification = await unit_env.get(VerificationService)
        created = await _create_invite(unit_env)

        with pytest.raises(ValidationError) as exc_info:
            await verification.submit_profile(
                created.invite, make_profile(city="  ", contact_email="nope")
            )

        assert "contact_email" in str(exc_info.value)
        assert "city" in str(exc_info.value)

    @pytest.mark.asyncio
    async def test_closed_invite_rejects_submissions(self, unit_env):
        # Arrange
        verification = await unit_env.get(VerificationService)
        invite_service = await unit_env.get(InviteService)
        created = await _create_invite(unit_env)
        revoked = await invite_service.revoke_invite(
            created.invite.id, created.invite.inviter_id
        )

        # Act & Assert
        with pytest.raises(InvalidTransitionError):
            await verification.submit_profile(revoked, make_profile())


class TestSubmitMedia:
    """Tests for submit_media method."""

    @pytest.mark.asyncio
    async def test_media_puts_session_under_review(self, unit_env):
        # Arrange
        services = await build_services(unit_env, FrozenClock())
        couple = await make_couple(await unit_env.get(AccountRepository))
        created = await services.invites.create_invite(
            couple.id, "robin@example.com", "single_male"
        )
        await services.verification.submit_profile(created.invite, make_profile())

        # Act
        session = await services.verification.submit_media(created.invite, make_media())

        # Assert
        assert session.status == VerificationStatus.UNDER_REVIEW
        assert session.submitted_media.identity_documents[0].id == "doc-1"
        assert session.submitted_profile is not None

        history = await services.events.history(created.invite.id)
        assert [e.event_type for e in history] == [
            InviteEventType.CREATED,
            InviteEventType.PROFILE_SAVED,
            InviteEventType.MEDIA_SAVED,
        ]
        assert history[-1].metadata["selfies"] == 1
        assert history[-1].metadata["has_video"] is False

    @pytest.mark.asyncio
    async def test_profile_must_come_first(self, unit_env):
        verification = await unit_env.get(VerificationService)
        created = await _create_invite(unit_env)

        with pytest.raises(ValidationError, match="profile"):
            await verification.submit_media(created.invite, make_media())

    @pytest.mark.asyncio
    async def test_empty_media_rejected(self, unit_env):
        verification = await unit_env.get(VerificationService)
        created = await _create_invite(unit_env)
        await verification.submit_profile(created.invite, make_profile())

        with pytest.raises(ValidationError, match="media"):
            await verification.submit_media(created.invite, SubmittedMedia())
