"""Moderator decline and rejection use cases."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field

from singles.application.usecase.base import BaseUseCase
from singles.application.usecase.invite.get_invites import InviteItem
from singles.domain.service import ModerationService
from singles.domain.value import InviteId, SessionId, UserId, VerificationStatus


class ModeratorDeclineRequest(BaseModel):
    invite_id: str
    moderator_id: str
    reason: str | None = Field(default=None, max_length=500)


class ModeratorDeclineResponse(BaseModel):
    invite: InviteItem


class ModeratorDeclineUseCase(BaseUseCase):
    """Use case for a moderator declining an invite outright."""

    def __init__(self, moderation_service: ModerationService) -> None:
        self.moderation_service = moderation_service

    async def execute(
        self, request: ModeratorDeclineRequest
    ) -> ModeratorDeclineResponse:
        invite = await self.moderation_service.decline(
            InviteId(UUID(request.invite_id)),
            UserId(UUID(request.moderator_id)),
            reason=request.reason,
        )
        return ModeratorDeclineResponse(invite=InviteItem.from_invite(invite))


class RejectVerificationRequest(BaseModel):
    session_id: str
    moderator_id: str
    reason: str = Field(min_length=1, max_length=500)
    notes: str | None = Field(default=None, max_length=2000)


class RejectVerificationResponse(BaseModel):
    session_id: str
    invite_id: str
    status: VerificationStatus
    rejection_reason: str | None
    decision_at: datetime | None


class RejectVerificationUseCase(BaseUseCase):
    """Use case for rejecting a verification session.

    The invite keeps its status, so the invitee may resubmit.
    """

    def __init__(self, moderation_service: ModerationService) -> None:
        self.moderation_service = moderation_service

    async def execute(
        self, request: RejectVerificationRequest
    ) -> RejectVerificationResponse:
        session = await self.moderation_service.reject(
            SessionId(UUID(request.session_id)),
            UserId(UUID(request.moderator_id)),
            reason=request.reason,
            notes=request.notes,
        )
        return RejectVerificationResponse(
            session_id=str(session.id),
            invite_id=str(session.invite_id),
            status=session.status,
            rejection_reason=session.rejection_reason,
            decision_at=session.decision_at,
        )
