"""PostgreSQL implementation of SingleProfile repository."""

from typing import Optional

from sqlalchemy import insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from singles.domain.model import SingleProfile
from singles.domain.repository import ProfileRepository
from singles.domain.value import UserId
from singles.persistence.database import SqlStore
from singles.persistence.mappers import profile_to_dict, row_to_profile
from singles.persistence.tables import single_profiles_table


class PostgresProfileRepository(ProfileRepository):
    """PostgreSQL implementation of ProfileRepository."""

    def __init__(self, store: SqlStore) -> None:
        self.store = store

    async def find_by_user(self, user_id: UserId) -> Optional[SingleProfile]:
        async def _find(session: AsyncSession) -> Optional[SingleProfile]:
            stmt = select(single_profiles_table).where(
                single_profiles_table.c.user_id == user_id
            )
            result = await session.execute(stmt)
            row = result.mappings().first()
            return row_to_profile(dict(row)) if row else None

        return await self.store.run(_find)

    async def save(self, profile: SingleProfile) -> SingleProfile:
        """Save a profile (create or update).

        Args:
            profile: Profile to save

        Returns:
            Saved profile
        """
        profile_dict = profile_to_dict(profile)

        async def _save(session: AsyncSession) -> SingleProfile:
            existing = await session.scalar(
                select(single_profiles_table.c.user_id).where(
                    single_profiles_table.c.user_id == profile.user_id
                )
            )
            if existing:
                update_dict = {
                    k: v
                    for k, v in profile_dict.items()
                    if k not in ("user_id", "created_at")
                }
                stmt = (
                    update(single_profiles_table)
                    .where(single_profiles_table.c.user_id == profile.user_id)
                    .values(**update_dict)
                )
            else:
                stmt = insert(single_profiles_table).values(**profile_dict)
            await session.execute(stmt)
            return profile

        return await self.store.run(_save)
