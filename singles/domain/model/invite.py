"""Invite entity.

An invite is a couple's offer to a single to join through a moderated
onboarding pipeline. Only the salted hash of the invite secret is stored.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from singles.domain.model.common import DomainModel, utcnow
from singles.domain.value import InviteId, InviteStatus, RequestedRole, UserId


class Invite(DomainModel):
    """Invite entity.

    Business rules:
    - Created in pending status by an eligible couple within their quota
    - Terminal statuses (completed, revoked, declined, expired) are final
    - Never physically deleted; terminal invites are retained for audit
    """

    id: InviteId
    inviter_id: UserId
    invitee_email: str
    requested_role: RequestedRole
    status: InviteStatus = InviteStatus.PENDING
    token_hash: bytes = Field(repr=False)
    token_salt: bytes = Field(repr=False)
    expires_at: datetime
    consumed_at: Optional[datetime] = None
    invitee_user_id: Optional[UserId] = None
    created_ip_address: Optional[str] = None
    created_user_agent: Optional[str] = None
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)

    @property
    def is_terminal(self) -> bool:
        return self.status.is_terminal

    def is_expired(self, now: datetime) -> bool:
        """Whether the invite link is past its expiry at ``now``."""
        return self.expires_at <= now
