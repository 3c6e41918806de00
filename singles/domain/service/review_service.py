"""Review domain service."""

import math
from dataclasses import dataclass
from uuid import uuid4

import logfire

from singles.domain.error import (
    DuplicateError,
    ForbiddenError,
    NotFoundError,
    ValidationError,
)
from singles.domain.model.common import utcnow
from singles.domain.model.review import Review, ReviewStats
from singles.domain.repository import AccountRepository, ReviewRepository
from singles.domain.value import AccountKind, ReviewId, UserId

from .base import Clock, Service

MIN_SCORE = 1
MAX_SCORE = 5
MAX_COMMENT_LENGTH = 1000
DUPLICATE_REVIEW_MESSAGE = "You have already shared feedback for this single."


@dataclass
class ReviewResult:
    """A stored review with the subject's recomputed aggregate."""

    review: Review
    stats: ReviewStats


class ReviewService(Service):
    """Domain service for couples' feedback on singles."""

    def __init__(
        self,
        review_repository: ReviewRepository,
        account_repository: AccountRepository,
        clock: Clock = utcnow,
    ) -> None:
        self.review_repository = review_repository
        self.account_repository = account_repository
        self.clock = clock

    async def create_review(
        self,
        single_id: UserId,
        couple_id: UserId,
        score: int | float,
        comment: str | None = None,
    ) -> ReviewResult:
        """Record a couple's review of a single.

        Args:
            single_id: The reviewed single
            couple_id: The reviewing couple
            score: Rating between 1 and 5
            comment: Optional free text, truncated to 1000 characters

        Returns:
            The review and the single's updated average and count

        Raises:
            ValidationError: If the score is out of range
            NotFoundError: If the single does not exist
            ForbiddenError: If the reviewer is not a couple
            DuplicateError: If this couple already reviewed this single
        """
        with logfire.span(
            "review_service.create_review",
            single_id=str(single_id),
            couple_id=str(couple_id),
        ):
            rounded = self._validate_score(score)

            single = await self.account_repository.find_by_id(single_id)
            if not single or single.kind != AccountKind.SINGLE:
                raise NotFoundError("Single", str(single_id))

            reviewer = await self.account_repository.find_by_id(couple_id)
            if not reviewer or reviewer.kind != AccountKind.COUPLE:
                raise ForbiddenError("Only couple accounts can review singles.")

            if await self.review_repository.find_by_pair(single_id, couple_id):
                raise DuplicateError(DUPLICATE_REVIEW_MESSAGE)

            text = (comment or "").strip()[:MAX_COMMENT_LENGTH] or None
            review = Review(
                id=ReviewId(uuid4()),
                single_user_id=single_id,
                couple_user_id=couple_id,
                score=rounded,
                comment=text,
                created_at=self.clock(),
            )
            saved = await self.review_repository.add(review)
            stats = await self.review_repository.stats_for_single(single_id)

            logfire.info(
                "Review created",
                review_id=str(saved.id),
                single_id=str(single_id),
                review_count=stats.review_count,
            )
            return ReviewResult(review=saved, stats=stats)

    async def list_reviews(self, single_id: UserId) -> list[Review]:
        return await self.review_repository.find_by_single(single_id)

    async def get_stats(self, single_id: UserId) -> ReviewStats:
        return await self.review_repository.stats_for_single(single_id)

    @staticmethod
    def _validate_score(score: int | float) -> int:
        if isinstance(score, bool) or not isinstance(score, (int, float)):
            raise ValidationError("Score must be a number between 1 and 5.")
        if not MIN_SCORE <= score <= MAX_SCORE:
            raise ValidationError("Score must be a number between 1 and 5.")
        # Halves round up: 2.5 -> 3, 4.5 -> 5
        return math.floor(score + 0.5)
