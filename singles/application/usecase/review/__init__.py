"""Review use cases."""

from singles.application.usecase.review.review import (
    CreateReviewRequest,
    CreateReviewResponse,
    CreateReviewUseCase,
    GetReviewsRequest,
    GetReviewsResponse,
    GetReviewsUseCase,
    ReviewItem,
)

__all__ = [
    "CreateReviewRequest",
    "CreateReviewResponse",
    "CreateReviewUseCase",
    "GetReviewsRequest",
    "GetReviewsResponse",
    "GetReviewsUseCase",
    "ReviewItem",
]
