"""Activation token entity."""

from datetime import datetime
from typing import Optional

from pydantic import Field

from singles.domain.model.common import DomainModel, utcnow
from singles.domain.value import ActivationId, InviteId, UserId


class ActivationToken(DomainModel):
    """Shorter-lived secret issued after moderator approval.

    At most one unconsumed activation token exists per invite; issuing a
    new one consumes the previous.
    """

    id: ActivationId
    invite_id: InviteId
    token_hash: bytes = Field(repr=False)
    token_salt: bytes = Field(repr=False)
    expires_at: datetime
    consumed_at: Optional[datetime] = None
    created_by_user_id: Optional[UserId] = None
    created_at: datetime = Field(default_factory=utcnow)

    def is_expired(self, now: datetime) -> bool:
        return self.expires_at <= now
