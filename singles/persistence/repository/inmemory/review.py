"""In-memory review repository for testing."""

from typing import Optional

from singles.domain.error import DuplicateError
from singles.domain.model.review import Review, ReviewStats
from singles.domain.repository.review import ReviewRepository
from singles.domain.value import UserId


class InMemoryReviewRepository(ReviewRepository):
    """In-memory implementation of ReviewRepository for testing."""

    def __init__(self) -> None:
        self._reviews: list[Review] = []

    async def find_by_pair(
        self, single_user_id: UserId, couple_user_id: UserId
    ) -> Optional[Review]:
        for review in self._reviews:
            if (
                review.single_user_id == single_user_id
                and review.couple_user_id == couple_user_id
            ):
                return review
        return None

    async def add(self, review: Review) -> Review:
        if await self.find_by_pair(review.single_user_id, review.couple_user_id):
            raise DuplicateError("You have already shared feedback for this single.")
        self._reviews.append(review)
        return review

    async def find_by_single(self, single_user_id: UserId) -> list[Review]:
        reviews = [r for r in self._reviews if r.single_user_id == single_user_id]
        return sorted(reviews, key=lambda r: r.created_at, reverse=True)

    async def stats_for_single(self, single_user_id: UserId) -> ReviewStats:
        scores = [r.score for r in self._reviews if r.single_user_id == single_user_id]
        if not scores:
            return ReviewStats(average_score=None, review_count=0)
        return ReviewStats(
            average_score=round(sum(scores) / len(scores), 2),
            review_count=len(scores),
        )
