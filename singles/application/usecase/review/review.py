"""Review use cases."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field

from singles.application.usecase.base import BaseUseCase
from singles.domain.model.review import Review
from singles.domain.service import ReviewService
from singles.domain.value import UserId


class ReviewItem(BaseModel):
    review_id: str
    couple_user_id: str
    score: int
    comment: str | None = None
    created_at: datetime

    @classmethod
    def from_review(cls, review: Review) -> "ReviewItem":
        return cls(
            review_id=str(review.id),
            couple_user_id=str(review.couple_user_id),
            score=review.score,
            comment=review.comment,
            created_at=review.created_at,
        )


class CreateReviewRequest(BaseModel):
    single_user_id: str
    couple_user_id: str  # User ID from auth
    score: float
    comment: str | None = Field(default=None, max_length=5000)


class CreateReviewResponse(BaseModel):
    review: ReviewItem
    average_score: float | None
    review_count: int


class CreateReviewUseCase(BaseUseCase):
    """Use case for a couple reviewing a single."""

    def __init__(self, review_service: ReviewService) -> None:
        self.review_service = review_service

    async def execute(self, request: CreateReviewRequest) -> CreateReviewResponse:
        """Store the review and return the single's updated aggregate.

        Raises:
            ValidationError: If the score is out of range
            NotFoundError: If the single does not exist
            ForbiddenError: If the reviewer is not a couple
            DuplicateError: If the couple already reviewed this single
        """
        result = await self.review_service.create_review(
            UserId(UUID(request.single_user_id)),
            UserId(UUID(request.couple_user_id)),
            request.score,
            request.comment,
        )
        return CreateReviewResponse(
            review=ReviewItem.from_review(result.review),
            average_score=result.stats.average_score,
            review_count=result.stats.review_count,
        )


class GetReviewsRequest(BaseModel):
    single_user_id: str


class GetReviewsResponse(BaseModel):
    reviews: list[ReviewItem]
    average_score: float | None
    review_count: int


class GetReviewsUseCase:
    """Reviews for a single, newest first, with the aggregate."""

    def __init__(self, review_service: ReviewService) -> None:
        self.review_service = review_service

    async def execute(self, request: GetReviewsRequest) -> GetReviewsResponse:
        single_id = UserId(UUID(request.single_user_id))
        reviews = await self.review_service.list_reviews(single_id)
        stats = await self.review_service.get_stats(single_id)
        return GetReviewsResponse(
            reviews=[ReviewItem.from_review(r) for r in reviews],
            average_score=stats.average_score,
            review_count=stats.review_count,
        )
