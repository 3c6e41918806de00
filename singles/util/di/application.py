"""Application layer DI providers."""

from dishka import Scope, provide

from singles.application.usecase.invite import (
    ConfirmInviteUseCase,
    CreateInviteUseCase,
    DeclineInviteUseCase,
    GetInvitesUseCase,
    RevokeInviteUseCase,
    ValidateInviteUseCase,
)
from singles.application.usecase.moderation import (
    ApproveInviteUseCase,
    ListQueueUseCase,
    ModeratorDeclineUseCase,
    RejectVerificationUseCase,
)
from singles.application.usecase.onboarding import (
    CompleteActivationUseCase,
    SubmitMediaUseCase,
    SubmitProfileUseCase,
    ValidateActivationUseCase,
)
from singles.application.usecase.profile import GetProfileUseCase, UpdateProfileUseCase
from singles.application.usecase.review import CreateReviewUseCase, GetReviewsUseCase
from singles.domain.service import (
    ActivationService,
    EligibilityService,
    InviteService,
    ModerationService,
    NotificationClient,
    ProfileService,
    ReviewService,
    VerificationService,
)
from singles.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Production application use cases provider - concrete, no mocks needed."""

    scope = Scope.REQUEST

    # Invite use cases
    @provide
    def get_create_invite_use_case(
        self,
        invite_service: InviteService,
        eligibility_service: EligibilityService,
        notification_client: NotificationClient,
    ) -> CreateInviteUseCase:
        """Provide create invite use case."""
        return CreateInviteUseCase(
            invite_service=invite_service,
            eligibility_service=eligibility_service,
            notification_client=notification_client,
        )

    @provide
    def get_get_invites_use_case(
        self, invite_service: InviteService
    ) -> GetInvitesUseCase:
        """Provide get invites use case."""
        return GetInvitesUseCase(invite_service=invite_service)

    @provide
    def get_revoke_invite_use_case(
        self, invite_service: InviteService
    ) -> RevokeInviteUseCase:
        return RevokeInviteUseCase(invite_service=invite_service)

    @provide
    def get_decline_invite_use_case(
        self, invite_service: InviteService
    ) -> DeclineInviteUseCase:
        return DeclineInviteUseCase(invite_service=invite_service)

    @provide
    def get_confirm_invite_use_case(
        self, invite_service: InviteService
    ) -> ConfirmInviteUseCase:
        return ConfirmInviteUseCase(invite_service=invite_service)

    @provide
    def get_validate_invite_use_case(
        self,
        invite_service: InviteService,
        eligibility_service: EligibilityService,
    ) -> ValidateInviteUseCase:
        """Provide validate invite use case."""
        return ValidateInviteUseCase(
            invite_service=invite_service,
            eligibility_service=eligibility_service,
        )

    # Onboarding use cases
    @provide
    def get_submit_profile_use_case(
        self,
        invite_service: InviteService,
        verification_service: VerificationService,
    ) -> SubmitProfileUseCase:
        return SubmitProfileUseCase(
            invite_service=invite_service,
            verification_service=verification_service,
        )

    @provide
    def get_submit_media_use_case(
        self,
        invite_service: InviteService,
        verification_service: VerificationService,
    ) -> SubmitMediaUseCase:
        return SubmitMediaUseCase(
            invite_service=invite_service,
            verification_service=verification_service,
        )

    @provide
    def get_validate_activation_use_case(
        self,
        activation_service: ActivationService,
        eligibility_service: EligibilityService,
    ) -> ValidateActivationUseCase:
        return ValidateActivationUseCase(
            activation_service=activation_service,
            eligibility_service=eligibility_service,
        )

    @provide
    def get_complete_activation_use_case(
        self, activation_service: ActivationService
    ) -> CompleteActivationUseCase:
        return CompleteActivationUseCase(activation_service=activation_service)

    # Moderation use cases
    @provide
    def get_approve_invite_use_case(
        self,
        moderation_service: ModerationService,
        notification_client: NotificationClient,
    ) -> ApproveInviteUseCase:
        """Provide approve invite use case."""
        return ApproveInviteUseCase(
            moderation_service=moderation_service,
            notification_client=notification_client,
        )

    @provide
    def get_moderator_decline_use_case(
        self, moderation_service: ModerationService
    ) -> ModeratorDeclineUseCase:
        return ModeratorDeclineUseCase(moderation_service=moderation_service)

    @provide
    def get_reject_verification_use_case(
        self, moderation_service: ModerationService
    ) -> RejectVerificationUseCase:
        return RejectVerificationUseCase(moderation_service=moderation_service)

    @provide
    def get_list_queue_use_case(
        self, moderation_service: ModerationService
    ) -> ListQueueUseCase:
        return ListQueueUseCase(moderation_service=moderation_service)

    # Profile and review use cases
    @provide
    def get_get_profile_use_case(
        self, profile_service: ProfileService
    ) -> GetProfileUseCase:
        return GetProfileUseCase(profile_service=profile_service)

    @provide
    def get_update_profile_use_case(
        self, profile_service: ProfileService
    ) -> UpdateProfileUseCase:
        return UpdateProfileUseCase(profile_service=profile_service)

    @provide
    def get_create_review_use_case(
        self, review_service: ReviewService
    ) -> CreateReviewUseCase:
        """Provide create review use case."""
        return CreateReviewUseCase(review_service=review_service)

    @provide
    def get_get_reviews_use_case(
        self, review_service: ReviewService
    ) -> GetReviewsUseCase:
        return GetReviewsUseCase(review_service=review_service)
