"""PostgreSQL implementation of InviteEvent repository."""

from sqlalchemy import insert, select
from sqlalchemy.ext.asyncio import AsyncSession

from singles.domain.model import InviteEvent
from singles.domain.repository import InviteEventRepository
from singles.domain.value import InviteId
from singles.persistence.database import SqlStore
from singles.persistence.mappers import event_to_dict, row_to_event
from singles.persistence.tables import invite_events_table


class PostgresInviteEventRepository(InviteEventRepository):
    """PostgreSQL implementation of InviteEventRepository. Insert-only."""

    def __init__(self, store: SqlStore) -> None:
        self.store = store

    async def append(self, event: InviteEvent) -> InviteEvent:
        async def _append(session: AsyncSession) -> InviteEvent:
            await session.execute(
                insert(invite_events_table).values(**event_to_dict(event))
            )
            return event

        return await self.store.run(_append)

    async def find_by_invite(self, invite_id: InviteId) -> list[InviteEvent]:
        async def _find(session: AsyncSession) -> list[InviteEvent]:
            stmt = (
                select(invite_events_table)
                .where(invite_events_table.c.invite_id == invite_id)
                .order_by(invite_events_table.c.created_at.asc())
            )
            result = await session.execute(stmt)
            return [row_to_event(dict(row)) for row in result.mappings().all()]

        return await self.store.run(_find)
