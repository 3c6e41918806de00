"""Verification submission use cases.

Both are public and authenticated by the invite token alone. A token
that is not valid is answered with its status, never with an error.
"""

import logfire
from pydantic import BaseModel

from singles.application.usecase.base import BaseUseCase
from singles.application.usecase.invite.validate_invite import TOKEN_STATUS_MESSAGES
from singles.domain.model.verification import VerificationSession
from singles.domain.service import InviteService, VerificationService
from singles.domain.value import (
    SubmittedMedia,
    SubmittedProfile,
    TokenStatus,
    VerificationStatus,
)


class SubmitProfileRequest(BaseModel):
    """Profile submitted with the invite token."""

    token: str
    profile: SubmittedProfile


class SubmitMediaRequest(BaseModel):
    """Media references submitted with the invite token."""

    token: str
    media: SubmittedMedia


class SubmissionResponse(BaseModel):
    """Outcome of a verification submission."""

    accepted: bool
    token_status: TokenStatus
    message: str
    session_id: str | None = None
    session_status: VerificationStatus | None = None

    @classmethod
    def rejected(cls, status: TokenStatus) -> "SubmissionResponse":
        return cls(
            accepted=False, token_status=status, message=TOKEN_STATUS_MESSAGES[status]
        )

    @classmethod
    def saved(cls, session: VerificationSession) -> "SubmissionResponse":
        return cls(
            accepted=True,
            token_status=TokenStatus.VALID,
            message="Submission saved",
            session_id=str(session.id),
            session_status=session.status,
        )


class SubmitProfileUseCase(BaseUseCase):
    """Use case for the invitee's profile step."""

    def __init__(
        self,
        invite_service: InviteService,
        verification_service: VerificationService,
    ) -> None:
        self.invite_service = invite_service
        self.verification_service = verification_service

    async def execute(self, request: SubmitProfileRequest) -> SubmissionResponse:
        """Store the profile once the invite token checks out.

        Raises:
            ValidationError: If consent or a required field is missing
            InvalidTransitionError: If the invite no longer accepts submissions
        """
        with logfire.span("submit_profile.execute"):
            check = await self.invite_service.verify_invite_token(request.token)
            if not check.is_valid:
                return SubmissionResponse.rejected(check.status)

            session = await self.verification_service.submit_profile(
                check.invite, request.profile
            )
            return SubmissionResponse.saved(session)


class SubmitMediaUseCase(BaseUseCase):
    """Use case for the invitee's upload step."""

    def __init__(
        self,
        invite_service: InviteService,
        verification_service: VerificationService,
    ) -> None:
        self.invite_service = invite_service
        self.verification_service = verification_service

    async def execute(self, request: SubmitMediaRequest) -> SubmissionResponse:
        """Store media references and queue the session for moderation.

        Raises:
            ValidationError: If no profile was submitted or no media is given
            InvalidTransitionError: If the invite no longer accepts submissions
        """
        with logfire.span("submit_media.execute"):
            check = await self.invite_service.verify_invite_token(request.token)
            if not check.is_valid:
                return SubmissionResponse.rejected(check.status)

            session = await self.verification_service.submit_media(
                check.invite, request.media
            )
            return SubmissionResponse.saved(session)
