"""Single profile domain service."""

import logfire

from singles.domain.error import NotFoundError
from singles.domain.model.common import utcnow
from singles.domain.model.profile import SingleProfile
from singles.domain.repository import ProfileRepository
from singles.domain.value import ProfileUpdate, SubmittedProfile, UserId

from .base import Clock, Service

# Fields copied from a moderated submission into the profile
SUBMISSION_FIELDS = (
    "nickname",
    "contact_email",
    "country",
    "city",
    "short_bio",
    "interests",
    "play_preferences",
    "boundaries",
    "availability",
)


class ProfileService(Service):
    """Domain service for single profiles."""

    def __init__(
        self, profile_repository: ProfileRepository, clock: Clock = utcnow
    ) -> None:
        self.profile_repository = profile_repository
        self.clock = clock

    async def get_profile(self, user_id: UserId) -> SingleProfile:
        """Get a single's profile.

        Raises:
            NotFoundError: If the single has no profile
        """
        with logfire.span("profile_service.get_profile", user_id=str(user_id)):
            profile = await self.profile_repository.find_by_user(user_id)
            if not profile:
                raise NotFoundError("SingleProfile", str(user_id))
            return profile

    async def update_profile(
        self, user_id: UserId, update: ProfileUpdate
    ) -> SingleProfile:
        """Apply a partial edit. Only fields the caller supplied are changed."""
        with logfire.span("profile_service.update_profile", user_id=str(user_id)):
            profile = await self.get_profile(user_id)
            changes = {name: getattr(update, name) for name in update.model_fields_set}
            if not changes:
                return profile

            changes["updated_at"] = self.clock()
            saved = await self.profile_repository.save(
                profile.model_copy(update=changes)
            )
            logfire.info(
                "Single profile updated",
                user_id=str(user_id),
                fields=sorted(changes.keys() - {"updated_at"}),
            )
            return saved

    async def hydrate_from_submission(
        self,
        user_id: UserId,
        invite_source_user_id: UserId,
        submission: SubmittedProfile,
    ) -> SingleProfile:
        """Create or merge a profile from the moderated submission.

        Reputation fields of an existing profile are kept, as are fields
        the submission leaves empty.
        """
        with logfire.span(
            "profile_service.hydrate_from_submission", user_id=str(user_id)
        ):
            now = self.clock()
            values = {name: getattr(submission, name) for name in SUBMISSION_FIELDS}
            existing = await self.profile_repository.find_by_user(user_id)

            if existing:
                profile = existing.model_copy(
                    update={
                        **{k: v for k, v in values.items() if v is not None},
                        "invite_source_user_id": existing.invite_source_user_id
                        or invite_source_user_id,
                        "updated_at": now,
                    }
                )
            else:
                profile = SingleProfile(
                    user_id=user_id,
                    invite_source_user_id=invite_source_user_id,
                    created_at=now,
                    updated_at=now,
                    **values,
                )

            saved = await self.profile_repository.save(profile)
            logfire.info(
                "Single profile hydrated",
                user_id=str(user_id),
                merged=existing is not None,
            )
            return saved
