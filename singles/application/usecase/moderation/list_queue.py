"""Moderation queue use case."""

from datetime import datetime

from pydantic import BaseModel

from singles.application.usecase.invite.get_invites import InviteItem
from singles.domain.service import ModerationService
from singles.domain.value import (
    InviteStatus,
    SubmittedMedia,
    SubmittedProfile,
    VerificationStatus,
)


class SessionItem(BaseModel):
    """Verification session attached to a queued invite."""

    session_id: str
    status: VerificationStatus
    submitted_profile: SubmittedProfile | None = None
    submitted_media: SubmittedMedia | None = None
    moderation_notes: str | None = None
    rejection_reason: str | None = None
    decision_at: datetime | None = None
    updated_at: datetime


class QueueItem(BaseModel):
    invite: InviteItem
    inviter_id: str
    session: SessionItem | None = None


class ListQueueRequest(BaseModel):
    statuses: list[InviteStatus] | None = None


class ListQueueResponse(BaseModel):
    items: list[QueueItem]
    total: int


class ListQueueUseCase:
    """Use case for the moderators' review queue."""

    def __init__(self, moderation_service: ModerationService) -> None:
        self.moderation_service = moderation_service

    async def execute(self, request: ListQueueRequest) -> ListQueueResponse:
        queue = await self.moderation_service.list_queue(request.statuses)

        items = []
        for entry in queue:
            session = entry.session
            items.append(
                QueueItem(
                    invite=InviteItem.from_invite(entry.invite),
                    inviter_id=str(entry.invite.inviter_id),
                    session=SessionItem(
                        session_id=str(session.id),
                        status=session.status,
                        submitted_profile=session.submitted_profile,
                        submitted_media=session.submitted_media,
                        moderation_notes=session.moderation_notes,
                        rejection_reason=session.rejection_reason,
                        decision_at=session.decision_at,
                        updated_at=session.updated_at,
                    )
                    if session
                    else None,
                )
            )
        return ListQueueResponse(items=items, total=len(items))
