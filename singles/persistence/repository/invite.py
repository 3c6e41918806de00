"""PostgreSQL implementation of Invite repository."""

from collections.abc import Iterable
from datetime import datetime
from typing import Optional

from sqlalchemy import func, insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from singles.domain.model import Invite
from singles.domain.repository import InviteRepository
from singles.domain.value import ACTIVE_INVITE_STATUSES, InviteId, InviteStatus, UserId
from singles.persistence.database import SqlStore
from singles.persistence.mappers import invite_to_dict, row_to_invite
from singles.persistence.tables import accounts_table, invites_table

_ACTIVE_VALUES = [status.value for status in ACTIVE_INVITE_STATUSES]


class PostgresInviteRepository(InviteRepository):
    """PostgreSQL implementation of InviteRepository."""

    def __init__(self, store: SqlStore) -> None:
        """Initialize repository with the store.

        Args:
            store: Retrying unit of work over the database
        """
        self.store = store

    async def find_by_id(self, invite_id: InviteId) -> Optional[Invite]:
        """Find an invite by ID.

        Args:
            invite_id: Invite ID to look up

        Returns:
            Invite if found, None otherwise
        """

        async def _find(session: AsyncSession) -> Optional[Invite]:
            stmt = select(invites_table).where(invites_table.c.id == invite_id)
            result = await session.execute(stmt)
            row = result.mappings().first()
            return row_to_invite(dict(row)) if row else None

        return await self.store.run(_find)

    async def add_within_quota(self, invite: Invite, limit: int) -> bool:
        """Insert an invite unless the inviter is at their active-invite ceiling.

        The inviter's account row is locked for the duration of the
        transaction so concurrent creations are counted one at a time.

        Args:
            invite: Invite to insert
            limit: Maximum number of active invites

        Returns:
            True if inserted, False if the quota is exhausted
        """

        async def _add(session: AsyncSession) -> bool:
            await session.execute(
                select(accounts_table.c.id)
                .where(accounts_table.c.id == invite.inviter_id)
                .with_for_update()
            )
            active = await session.scalar(
                select(func.count())
                .select_from(invites_table)
                .where(
                    invites_table.c.inviter_id == invite.inviter_id,
                    invites_table.c.status.in_(_ACTIVE_VALUES),
                )
            )
            if (active or 0) >= limit:
                return False
            await session.execute(insert(invites_table).values(**invite_to_dict(invite)))
            return True

        return await self.store.run(_add)

    async def count_active_by_inviter(self, inviter_id: UserId) -> int:
        async def _count(session: AsyncSession) -> int:
            stmt = (
                select(func.count())
                .select_from(invites_table)
                .where(
                    invites_table.c.inviter_id == inviter_id,
                    invites_table.c.status.in_(_ACTIVE_VALUES),
                )
            )
            return (await session.scalar(stmt)) or 0

        return await self.store.run(_count)

    async def find_by_inviter(self, inviter_id: UserId) -> list[Invite]:
        async def _find(session: AsyncSession) -> list[Invite]:
            stmt = (
                select(invites_table)
                .where(invites_table.c.inviter_id == inviter_id)
                .order_by(invites_table.c.created_at.desc())
            )
            result = await session.execute(stmt)
            return [row_to_invite(dict(row)) for row in result.mappings().all()]

        return await self.store.run(_find)

    async def find_by_statuses(self, statuses: Iterable[InviteStatus]) -> list[Invite]:
        values = [status.value for status in statuses]

        async def _find(session: AsyncSession) -> list[Invite]:
            stmt = (
                select(invites_table)
                .where(invites_table.c.status.in_(values))
                .order_by(invites_table.c.updated_at.desc())
            )
            result = await session.execute(stmt)
            return [row_to_invite(dict(row)) for row in result.mappings().all()]

        return await self.store.run(_find)

    async def transition(
        self,
        invite_id: InviteId,
        from_statuses: Iterable[InviteStatus],
        to_status: InviteStatus,
        now: datetime,
        consume: bool = False,
    ) -> Optional[Invite]:
        """Compare-and-set status update in a single UPDATE ... RETURNING."""
        allowed = [status.value for status in from_statuses]
        values: dict = {"status": to_status.value, "updated_at": now}
        if consume:
            values["consumed_at"] = func.coalesce(invites_table.c.consumed_at, now)

        async def _transition(session: AsyncSession) -> Optional[Invite]:
            stmt = (
                update(invites_table)
                .where(
                    invites_table.c.id == invite_id,
                    invites_table.c.status.in_(allowed),
                )
                .values(**values)
                .returning(*invites_table.c)
            )
            result = await session.execute(stmt)
            row = result.mappings().first()
            return row_to_invite(dict(row)) if row else None

        return await self.store.run(_transition)

    async def link_invitee(
        self, invite_id: InviteId, user_id: UserId, now: datetime
    ) -> None:
        async def _link(session: AsyncSession) -> None:
            await session.execute(
                update(invites_table)
                .where(invites_table.c.id == invite_id)
                .values(invitee_user_id=user_id, updated_at=now)
            )

        await self.store.run(_link)
