"""Invite event log domain service."""

from typing import Any
from uuid import uuid4

import logfire

from singles.domain.model.common import utcnow
from singles.domain.model.event import InviteEvent
from singles.domain.repository.event import InviteEventRepository
from singles.domain.value import EventId, InviteEventType, InviteId, UserId

from .base import Clock, Service


class EventLogService(Service):
    """Append-only audit trail of invite lifecycle events."""

    def __init__(
        self, event_repository: InviteEventRepository, clock: Clock = utcnow
    ) -> None:
        self.event_repository = event_repository
        self.clock = clock

    async def record(
        self,
        invite_id: InviteId,
        event_type: InviteEventType,
        actor_user_id: UserId | None = None,
        metadata: dict[str, Any] | None = None,
    ) -> InviteEvent:
        """Append an event for an invite.

        Args:
            invite_id: Invite the event belongs to
            event_type: What happened
            actor_user_id: Who did it (None for the invitee or the system)
            metadata: JSON-serializable details

        Returns:
            The stored event
        """
        event = InviteEvent(
            id=EventId(uuid4()),
            invite_id=invite_id,
            event_type=event_type,
            actor_user_id=actor_user_id,
            metadata=metadata or {},
            created_at=self.clock(),
        )
        saved = await self.event_repository.append(event)
        logfire.info(
            "Invite event recorded",
            invite_id=str(invite_id),
            event_type=event_type.value,
            actor_user_id=str(actor_user_id) if actor_user_id else None,
        )
        return saved

    async def history(self, invite_id: InviteId) -> list[InviteEvent]:
        return await self.event_repository.find_by_invite(invite_id)
