"""PostgreSQL implementation of ActivationToken repository."""

from datetime import datetime
from typing import Optional
from uuid import UUID

from sqlalchemy import insert, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from singles.domain.model import ActivationToken
from singles.domain.repository import ActivationRepository
from singles.domain.value import ActivationId, InviteId
from singles.persistence.database import SqlStore
from singles.persistence.mappers import activation_to_dict, row_to_activation
from singles.persistence.tables import invite_activations_table as activations


class PostgresActivationRepository(ActivationRepository):
    """PostgreSQL implementation of ActivationRepository."""

    def __init__(self, store: SqlStore) -> None:
        self.store = store

    async def find_by_id(self, activation_id: ActivationId) -> Optional[ActivationToken]:
        async def _find(session: AsyncSession) -> Optional[ActivationToken]:
            stmt = select(activations).where(activations.c.id == activation_id)
            result = await session.execute(stmt)
            row = result.mappings().first()
            return row_to_activation(dict(row)) if row else None

        return await self.store.run(_find)

    async def replace_for_invite(
        self, token: ActivationToken, now: datetime
    ) -> ActivationToken:
        async def _replace(session: AsyncSession) -> ActivationToken:
            await session.execute(
                update(activations)
                .where(
                    activations.c.invite_id == token.invite_id,
                    activations.c.consumed_at.is_(None),
                )
                .values(consumed_at=now)
            )
            await session.execute(insert(activations).values(**activation_to_dict(token)))
            return token

        return await self.store.run(_replace)

    async def consume(
        self, activation_id: ActivationId, now: datetime, claim_id: UUID
    ) -> bool:
        """Claim the token; only the caller whose UPDATE matches a row wins.

        Matching on our own ``claim_id`` keeps a retry by ``SqlStore.run``
        from reporting a claim it already committed as lost.
        """

        async def _consume(session: AsyncSession) -> bool:
            stmt = (
                update(activations)
                .where(
                    activations.c.id == activation_id,
                    or_(
                        activations.c.consumed_at.is_(None),
                        activations.c.consumed_claim_id == claim_id,
                    ),
                )
                .values(consumed_at=now, consumed_claim_id=claim_id)
                .returning(activations.c.id)
            )
            result = await session.execute(stmt)
            return result.first() is not None

        return await self.store.run(_consume)

    async def release(self, activation_id: ActivationId, claim_id: UUID) -> bool:
        async def _release(session: AsyncSession) -> bool:
            stmt = (
                update(activations)
                .where(
                    activations.c.id == activation_id,
                    activations.c.consumed_claim_id == claim_id,
                )
                .values(consumed_at=None, consumed_claim_id=None)
                .returning(activations.c.id)
            )
            result = await session.execute(stmt)
            return result.first() is not None

        return await self.store.run(_release)

    async def consume_all_for_invite(self, invite_id: InviteId, now: datetime) -> int:
        async def _consume_all(session: AsyncSession) -> int:
            stmt = (
                update(activations)
                .where(
                    activations.c.invite_id == invite_id,
                    activations.c.consumed_at.is_(None),
                )
                .values(consumed_at=now)
                .returning(activations.c.id)
            )
            result = await session.execute(stmt)
            return len(result.all())

        return await self.store.run(_consume_all)
