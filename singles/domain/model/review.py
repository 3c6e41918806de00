"""Review entity."""

from datetime import datetime
from typing import Optional

from pydantic import Field

from singles.domain.model.common import DomainModel, utcnow
from singles.domain.value import ReviewId, UserId


class Review(DomainModel):
    """A couple's feedback on a single. One per (single, couple) pair."""

    id: ReviewId
    single_user_id: UserId
    couple_user_id: UserId
    score: int = Field(ge=1, le=5)
    comment: Optional[str] = Field(default=None, max_length=1000)
    created_at: datetime = Field(default_factory=utcnow)


class ReviewStats(DomainModel):
    """Aggregate feedback for a single."""

    average_score: Optional[float] = None
    review_count: int = 0
