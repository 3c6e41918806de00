"""Invite event entity."""

from datetime import datetime
from typing import Any, Optional

from pydantic import Field

from singles.domain.model.common import DomainModel, utcnow
from singles.domain.value import EventId, InviteEventType, InviteId, UserId


class InviteEvent(DomainModel):
    """Append-only audit record of an invite lifecycle event."""

    id: EventId
    invite_id: InviteId
    event_type: InviteEventType
    actor_user_id: Optional[UserId] = None
    metadata: dict[str, Any] = Field(default_factory=dict)
    created_at: datetime = Field(default_factory=utcnow)
