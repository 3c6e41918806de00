"""In-memory invite repository for testing."""

from collections.abc import Iterable
from datetime import datetime
from typing import Optional

from sqlalchemy.exc import IntegrityError

from singles.domain.model.invite import Invite
from singles.domain.repository.invite import InviteRepository
from singles.domain.value import ACTIVE_INVITE_STATUSES, InviteId, InviteStatus, UserId


class InMemoryInviteRepository(InviteRepository):
    """In-memory implementation of InviteRepository for testing.

    No method awaits between reading and writing, so each call is atomic
    with respect to other coroutines.
    """

    def __init__(self) -> None:
        self._invites: dict[InviteId, Invite] = {}

    async def find_by_id(self, invite_id: InviteId) -> Optional[Invite]:
        return self._invites.get(invite_id)

    async def add_within_quota(self, invite: Invite, limit: int) -> bool:
        if invite.id in self._invites:
            raise IntegrityError("Duplicate invite id", None, Exception())
        if self._count_active(invite.inviter_id) >= limit:
            return False
        self._invites[invite.id] = invite
        return True

    async def count_active_by_inviter(self, inviter_id: UserId) -> int:
        return self._count_active(inviter_id)

    async def find_by_inviter(self, inviter_id: UserId) -> list[Invite]:
        invites = [i for i in self._invites.values() if i.inviter_id == inviter_id]
        return sorted(invites, key=lambda i: i.created_at, reverse=True)

    async def find_by_statuses(self, statuses: Iterable[InviteStatus]) -> list[Invite]:
        wanted = set(statuses)
        invites = [i for i in self._invites.values() if i.status in wanted]
        return sorted(invites, key=lambda i: i.updated_at, reverse=True)

    async def transition(
        self,
        invite_id: InviteId,
        from_statuses: Iterable[InviteStatus],
        to_status: InviteStatus,
        now: datetime,
        consume: bool = False,
    ) -> Optional[Invite]:
        invite = self._invites.get(invite_id)
        if invite is None or invite.status not in set(from_statuses):
            return None
        changes: dict = {"status": to_status, "updated_at": now}
        if consume and invite.consumed_at is None:
            changes["consumed_at"] = now
        updated = invite.model_copy(update=changes)
        self._invites[invite_id] = updated
        return updated

    async def link_invitee(
        self, invite_id: InviteId, user_id: UserId, now: datetime
    ) -> None:
        invite = self._invites.get(invite_id)
        if invite is not None:
            self._invites[invite_id] = invite.model_copy(
                update={"invitee_user_id": user_id, "updated_at": now}
            )

    def _count_active(self, inviter_id: UserId) -> int:
        return sum(
            1
            for i in self._invites.values()
            if i.inviter_id == inviter_id and i.status in ACTIVE_INVITE_STATUSES
        )
