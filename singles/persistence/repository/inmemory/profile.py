"""In-memory single profile repository for testing."""

from typing import Optional

from singles.domain.model.profile import SingleProfile
from singles.domain.repository.profile import ProfileRepository
from singles.domain.value import UserId


class InMemoryProfileRepository(ProfileRepository):
    """In-memory implementation of ProfileRepository for testing."""

    def __init__(self) -> None:
        self._profiles: dict[UserId, SingleProfile] = {}

    async def find_by_user(self, user_id: UserId) -> Optional[SingleProfile]:
        return self._profiles.get(user_id)

    async def save(self, profile: SingleProfile) -> SingleProfile:
        self._profiles[profile.user_id] = profile
        return profile
