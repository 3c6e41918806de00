"""Single profile use cases."""

from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import BaseModel

from singles.domain.model.profile import SingleProfile
from singles.domain.service import ProfileService
from singles.domain.value import ProfileUpdate, UserId


class ProfileResponse(BaseModel):
    """A single's profile as shown to its owner."""

    user_id: str
    invite_source_user_id: str | None = None
    nickname: str | None = None
    contact_email: str | None = None
    country: str | None = None
    city: str | None = None
    short_bio: str | None = None
    interests: str | None = None
    play_preferences: str | None = None
    boundaries: str | None = None
    availability: Any = None
    reputation_score: float | None = None
    trusted_count: int = 0
    updated_at: datetime

    @classmethod
    def from_profile(cls, profile: SingleProfile) -> "ProfileResponse":
        data = profile.model_dump(
            exclude={"user_id", "invite_source_user_id", "compliance_summary", "created_at"}
        )
        return cls(
            user_id=str(profile.user_id),
            invite_source_user_id=str(profile.invite_source_user_id)
            if profile.invite_source_user_id
            else None,
            **data,
        )


class GetProfileRequest(BaseModel):
    user_id: str


class GetProfileUseCase:
    def __init__(self, profile_service: ProfileService) -> None:
        self.profile_service = profile_service

    async def execute(self, request: GetProfileRequest) -> ProfileResponse:
        profile = await self.profile_service.get_profile(UserId(UUID(request.user_id)))
        return ProfileResponse.from_profile(profile)


class UpdateProfileRequest(BaseModel):
    user_id: str
    update: ProfileUpdate


class UpdateProfileUseCase:
    """Partial profile edit by the owning single."""

    def __init__(self, profile_service: ProfileService) -> None:
        self.profile_service = profile_service

    async def execute(self, request: UpdateProfileRequest) -> ProfileResponse:
        profile = await self.profile_service.update_profile(
            UserId(UUID(request.user_id)), request.update
        )
        return ProfileResponse.from_profile(profile)
