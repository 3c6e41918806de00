"""PostgreSQL implementation of Account repository."""

from datetime import datetime
from typing import Optional

from sqlalchemy import func, insert, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from singles.domain.error import DuplicateError
from singles.domain.model import Account
from singles.domain.repository import AccountRepository
from singles.domain.value import UserId
from singles.persistence.database import SqlStore
from singles.persistence.mappers import account_to_dict, row_to_account
from singles.persistence.tables import accounts_table


class PostgresAccountRepository(AccountRepository):
    """PostgreSQL implementation of AccountRepository."""

    def __init__(self, store: SqlStore) -> None:
        self.store = store

    async def find_by_id(self, user_id: UserId) -> Optional[Account]:
        async def _find(session: AsyncSession) -> Optional[Account]:
            result = await session.execute(
                select(accounts_table).where(accounts_table.c.id == user_id)
            )
            row = result.mappings().first()
            return row_to_account(dict(row)) if row else None

        return await self.store.run(_find)

    async def find_by_email(self, email: str) -> Optional[Account]:
        normalized = email.strip().lower()

        async def _find(session: AsyncSession) -> Optional[Account]:
            result = await session.execute(
                select(accounts_table).where(
                    func.lower(accounts_table.c.email) == normalized
                )
            )
            row = result.mappings().first()
            return row_to_account(dict(row)) if row else None

        return await self.store.run(_find)

    async def username_exists(self, username: str) -> bool:
        async def _exists(session: AsyncSession) -> bool:
            result = await session.execute(
                select(accounts_table.c.id).where(accounts_table.c.username == username)
            )
            return result.first() is not None

        return await self.store.run(_exists)

    async def add(self, account: Account) -> Account:
        async def _add(session: AsyncSession) -> Account:
            await session.execute(
                insert(accounts_table).values(**account_to_dict(account))
            )
            return account

        try:
            return await self.store.run(_add)
        except IntegrityError as e:
            raise DuplicateError("An account with this email or username exists") from e

    async def link_single(
        self,
        user_id: UserId,
        password_hash: str,
        invite_source_user_id: UserId,
        now: datetime,
    ) -> Optional[Account]:
        async def _link(session: AsyncSession) -> Optional[Account]:
            stmt = (
                update(accounts_table)
                .where(accounts_table.c.id == user_id)
                .values(
                    password_hash=password_hash,
                    invite_source_user_id=func.coalesce(
                        accounts_table.c.invite_source_user_id, invite_source_user_id
                    ),
                    is_email_verified=True,
                    updated_at=now,
                )
                .returning(*accounts_table.c)
            )
            result = await session.execute(stmt)
            row = result.mappings().first()
            return row_to_account(dict(row)) if row else None

        return await self.store.run(_link)
