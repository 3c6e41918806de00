"""Verification session entity."""

from datetime import datetime
from typing import Optional

from pydantic import Field

from singles.domain.model.common import DomainModel, utcnow
from singles.domain.value import (
    InviteId,
    SessionId,
    SubmittedMedia,
    SubmittedProfile,
    UserId,
    VerificationStatus,
)


class VerificationSession(DomainModel):
    """Moderation record holding the invitee's submitted profile and media.

    At most one session exists per invite.
    """

    id: SessionId
    invite_id: InviteId
    invitee_email: str
    status: VerificationStatus = VerificationStatus.AWAITING_PROFILE
    submitted_profile: Optional[SubmittedProfile] = None
    submitted_media: Optional[SubmittedMedia] = None
    moderation_notes: Optional[str] = None
    decision_user_id: Optional[UserId] = None
    decision_at: Optional[datetime] = None
    rejection_reason: Optional[str] = None
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)
