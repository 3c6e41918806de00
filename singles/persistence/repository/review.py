"""PostgreSQL implementation of Review repository."""

from typing import Optional

from sqlalchemy import func, insert, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from singles.domain.error import DuplicateError
from singles.domain.model import Review, ReviewStats
from singles.domain.repository import ReviewRepository
from singles.domain.value import UserId
from singles.persistence.database import SqlStore
from singles.persistence.mappers import review_to_dict, row_to_review
from singles.persistence.tables import reviews_table


class PostgresReviewRepository(ReviewRepository):
    """PostgreSQL implementation of ReviewRepository."""

    def __init__(self, store: SqlStore) -> None:
        self.store = store

    async def find_by_pair(
        self, single_user_id: UserId, couple_user_id: UserId
    ) -> Optional[Review]:
        async def _find(session: AsyncSession) -> Optional[Review]:
            stmt = select(reviews_table).where(
                reviews_table.c.single_user_id == single_user_id,
                reviews_table.c.couple_user_id == couple_user_id,
            )
            result = await session.execute(stmt)
            row = result.mappings().first()
            return row_to_review(dict(row)) if row else None

        return await self.store.run(_find)

    async def add(self, review: Review) -> Review:
        """Insert a review.

        Raises:
            DuplicateError: If the (single, couple) pair already has a review
        """

        async def _add(session: AsyncSession) -> Review:
            await session.execute(insert(reviews_table).values(**review_to_dict(review)))
            return review

        try:
            return await self.store.run(_add)
        except IntegrityError as e:
            raise DuplicateError(
                "You have already shared feedback for this single."
            ) from e

    async def find_by_single(self, single_user_id: UserId) -> list[Review]:
        async def _find(session: AsyncSession) -> list[Review]:
            stmt = (
                select(reviews_table)
                .where(reviews_table.c.single_user_id == single_user_id)
                .order_by(reviews_table.c.created_at.desc())
            )
            result = await session.execute(stmt)
            return [row_to_review(dict(row)) for row in result.mappings().all()]

        return await self.store.run(_find)

    async def stats_for_single(self, single_user_id: UserId) -> ReviewStats:
        async def _stats(session: AsyncSession) -> ReviewStats:
            stmt = select(
                func.avg(reviews_table.c.score), func.count(reviews_table.c.id)
            ).where(reviews_table.c.single_user_id == single_user_id)
            average, count = (await session.execute(stmt)).one()
            return ReviewStats(
                average_score=round(float(average), 2) if average is not None else None,
                review_count=count or 0,
            )

        return await self.store.run(_stats)
