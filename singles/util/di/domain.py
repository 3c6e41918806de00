"""Domain layer DI providers."""

from dishka import Scope, provide

from singles.config import AuthSettings, Settings
from singles.domain.repository import (
    AccountRepository,
    ActivationRepository,
    InviteEventRepository,
    InviteRepository,
    ProfileRepository,
    ReviewRepository,
    VerificationRepository,
)
from singles.domain.service import (
    ActivationService,
    EligibilityService,
    EventLogService,
    InviteService,
    JWTService,
    ModerationService,
    NotificationClient,
    ProfileService,
    ReviewService,
    TokenCodec,
    VerificationService,
)
from singles.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Production domain services provider - concrete, no mocks needed.

    Domain services are REQUEST-scoped to align with the repository lifecycle.
    """

    scope = Scope.REQUEST

    @provide(scope=Scope.APP)
    def get_token_codec(self) -> TokenCodec:
        """Provide the stateless split-token codec."""
        return TokenCodec()

    @provide
    def get_jwt_service(self, auth_settings: AuthSettings) -> JWTService:
        """Provide JWT token domain service."""
        return JWTService(auth_settings=auth_settings)

    @provide
    def get_event_log_service(
        self, event_repository: InviteEventRepository
    ) -> EventLogService:
        """Provide invite audit trail service."""
        return EventLogService(event_repository=event_repository)

    @provide
    def get_eligibility_service(
        self, account_repository: AccountRepository
    ) -> EligibilityService:
        """Provide inviter eligibility service."""
        return EligibilityService(account_repository=account_repository)

    @provide
    def get_invite_service(
        self,
        invite_repository: InviteRepository,
        activation_repository: ActivationRepository,
        eligibility_service: EligibilityService,
        event_log: EventLogService,
        token_codec: TokenCodec,
        settings: Settings,
    ) -> InviteService:
        """Provide invite domain service."""
        return InviteService(
            invite_repository=invite_repository,
            activation_repository=activation_repository,
            eligibility_service=eligibility_service,
            event_log=event_log,
            token_codec=token_codec,
            settings=settings,
        )

    @provide
    def get_verification_service(
        self,
        verification_repository: VerificationRepository,
        invite_repository: InviteRepository,
        event_log: EventLogService,
    ) -> VerificationService:
        """Provide verification submission service."""
        return VerificationService(
            verification_repository=verification_repository,
            invite_repository=invite_repository,
            event_log=event_log,
        )

    @provide
    def get_profile_service(
        self, profile_repository: ProfileRepository
    ) -> ProfileService:
        """Provide single profile service."""
        return ProfileService(profile_repository=profile_repository)

    @provide
    def get_activation_service(
        self,
        activation_repository: ActivationRepository,
        invite_repository: InviteRepository,
        account_repository: AccountRepository,
        verification_repository: VerificationRepository,
        profile_service: ProfileService,
        event_log: EventLogService,
        notification_client: NotificationClient,
        token_codec: TokenCodec,
        settings: Settings,
    ) -> ActivationService:
        """Provide activation domain service."""
        return ActivationService(
            activation_repository=activation_repository,
            invite_repository=invite_repository,
            account_repository=account_repository,
            verification_repository=verification_repository,
            profile_service=profile_service,
            event_log=event_log,
            notification_client=notification_client,
            token_codec=token_codec,
            settings=settings,
        )

    @provide
    def get_moderation_service(
        self,
        invite_repository: InviteRepository,
        verification_repository: VerificationRepository,
        activation_repository: ActivationRepository,
        activation_service: ActivationService,
        eligibility_service: EligibilityService,
        event_log: EventLogService,
    ) -> ModerationService:
        """Provide moderation domain service."""
        return ModerationService(
            invite_repository=invite_repository,
            verification_repository=verification_repository,
            activation_repository=activation_repository,
            activation_service=activation_service,
            eligibility_service=eligibility_service,
            event_log=event_log,
        )

    @provide
    def get_review_service(
        self,
        review_repository: ReviewRepository,
        account_repository: AccountRepository,
    ) -> ReviewService:
        """Provide review domain service."""
        return ReviewService(
            review_repository=review_repository,
            account_repository=account_repository,
        )
