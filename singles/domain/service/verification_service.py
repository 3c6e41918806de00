"""Verification session domain service."""

import logfire

from singles.domain.error import InvalidTransitionError, ValidationError
from singles.domain.model.common import utcnow
from singles.domain.model.invite import Invite
from singles.domain.model.verification import VerificationSession
from singles.domain.repository import InviteRepository, VerificationRepository
from singles.domain.value import (
    InviteEventType,
    InviteId,
    InviteStatus,
    SubmittedMedia,
    SubmittedProfile,
    VerificationStatus,
)

from .base import Clock, Service
from .event_service import EventLogService

# Invite statuses that still accept submissions from the invitee
OPEN_FOR_SUBMISSION = (InviteStatus.PENDING, InviteStatus.AWAITING_VERIFICATION)


class VerificationService(Service):
    """Collects the invitee's profile and media for moderator review.

    Callers are expected to have verified the invite token first.
    """

    def __init__(
        self,
        verification_repository: VerificationRepository,
        invite_repository: InviteRepository,
        event_log: EventLogService,
        clock: Clock = utcnow,
    ) -> None:
        self.verification_repository = verification_repository
        self.invite_repository = invite_repository
        self.event_log = event_log
        self.clock = clock

    async def get_session(self, invite_id: InviteId) -> VerificationSession | None:
        return await self.verification_repository.find_by_invite(invite_id)

    async def submit_profile(
        self, invite: Invite, profile: SubmittedProfile
    ) -> VerificationSession:
        """Store the invitee's profile and move on to uploads.

        Raises:
            ValidationError: If consent or a required field is missing
            InvalidTransitionError: If the invite or session no longer accepts submissions
        """
        with logfire.span(
            "verification_service.submit_profile", invite_id=str(invite.id)
        ):
            await self._ensure_open(invite)

            if not profile.consent_acknowledged:
                raise ValidationError("Consent acknowledgement is required.")
            missing = profile.missing_required_fields()
            if missing:
                raise ValidationError(
                    "Missing or invalid profile fields: " + ", ".join(missing)
                )

            now = self.clock()
            session = await self.verification_repository.save_profile(
                invite.id,
                invite.invitee_email,
                profile,
                VerificationStatus.AWAITING_UPLOADS,
                now,
            )
            await self._advance_invite(invite)
            await self.event_log.record(
                invite.id,
                InviteEventType.PROFILE_SAVED,
                metadata={"session_id": str(session.id)},
            )
            logfire.info(
                "Verification profile saved",
                invite_id=str(invite.id),
                session_id=str(session.id),
            )
            return session

    async def submit_media(
        self, invite: Invite, media: SubmittedMedia
    ) -> VerificationSession:
        """Store media references and hand the session to moderators.

        Raises:
            ValidationError: If no profile was submitted or no media is given
            InvalidTransitionError: If the invite or session no longer accepts submissions
        """
        with logfire.span(
            "verification_service.submit_media", invite_id=str(invite.id)
        ):
            session = await self._ensure_open(invite)
            if session is None or session.submitted_profile is None:
                raise ValidationError("Submit your profile before uploading media.")
            if media.is_empty():
                raise ValidationError("At least one media reference is required.")

            now = self.clock()
            session = await self.verification_repository.save_media(
                invite.id,
                invite.invitee_email,
                media,
                VerificationStatus.UNDER_REVIEW,
                now,
            )
            await self._advance_invite(invite)
            await self.event_log.record(
                invite.id,
                InviteEventType.MEDIA_SAVED,
                metadata={
                    "session_id": str(session.id),
                    "identity_documents": len(media.identity_documents),
                    "selfies": len(media.selfies),
                    "has_video": media.verification_video is not None,
                },
            )
            logfire.info(
                "Verification media saved",
                invite_id=str(invite.id),
                session_id=str(session.id),
            )
            return session

    async def _ensure_open(self, invite: Invite) -> VerificationSession | None:
        if invite.status not in OPEN_FOR_SUBMISSION:
            raise InvalidTransitionError(
                invite.status.value, InviteStatus.AWAITING_VERIFICATION.value
            )
        session = await self.verification_repository.find_by_invite(invite.id)
        if session and session.status == VerificationStatus.APPROVED:
            raise InvalidTransitionError(
                session.status.value, VerificationStatus.UNDER_REVIEW.value
            )
        return session

    async def _advance_invite(self, invite: Invite) -> None:
        if invite.status != InviteStatus.PENDING:
            return
        await self.invite_repository.transition(
            invite.id,
            (InviteStatus.PENDING,),
            InviteStatus.AWAITING_VERIFICATION,
            now=self.clock(),
        )
