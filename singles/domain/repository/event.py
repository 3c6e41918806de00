"""Invite event repository interface."""

from abc import ABC, abstractmethod

from singles.domain.model.event import InviteEvent
from singles.domain.value import InviteId


class InviteEventRepository(ABC):
    """Append-only store for invite lifecycle events."""

    @abstractmethod
    async def append(self, event: InviteEvent) -> InviteEvent:
        pass

    @abstractmethod
    async def find_by_invite(self, invite_id: InviteId) -> list[InviteEvent]:
        """Events for an invite in the order they were recorded."""
        pass
