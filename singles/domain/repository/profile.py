"""Single profile repository interface."""

from abc import ABC, abstractmethod

from singles.domain.model.profile import SingleProfile
from singles.domain.value import UserId


class ProfileRepository(ABC):
    """Repository for SingleProfile entity."""

    @abstractmethod
    async def find_by_user(self, user_id: UserId) -> SingleProfile | None:
        pass

    @abstractmethod
    async def save(self, profile: SingleProfile) -> SingleProfile:
        """Save a profile (create or update, keyed by user ID)."""
        pass
