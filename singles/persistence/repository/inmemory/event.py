"""In-memory invite event repository for testing."""

from singles.domain.model.event import InviteEvent
from singles.domain.repository.event import InviteEventRepository
from singles.domain.value import InviteId


class InMemoryInviteEventRepository(InviteEventRepository):
    """In-memory implementation of InviteEventRepository for testing."""

    def __init__(self) -> None:
        self._events: list[InviteEvent] = []

    async def append(self, event: InviteEvent) -> InviteEvent:
        self._events.append(event)
        return event

    async def find_by_invite(self, invite_id: InviteId) -> list[InviteEvent]:
        return [e for e in self._events if e.invite_id == invite_id]
