"""Review repository interface."""

from abc import ABC, abstractmethod

from singles.domain.model.review import Review, ReviewStats
from singles.domain.value import UserId


class ReviewRepository(ABC):
    """Repository for Review entity."""

    @abstractmethod
    async def find_by_pair(
        self, single_user_id: UserId, couple_user_id: UserId
    ) -> Review | None:
        pass

    @abstractmethod
    async def add(self, review: Review) -> Review:
        """Insert a review.

        Raises:
            DuplicateError: If the couple already reviewed this single
        """
        pass

    @abstractmethod
    async def find_by_single(self, single_user_id: UserId) -> list[Review]:
        """Reviews of a single, newest first."""
        pass

    @abstractmethod
    async def stats_for_single(self, single_user_id: UserId) -> ReviewStats:
        pass
