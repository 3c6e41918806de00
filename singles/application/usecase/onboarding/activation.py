"""Activation use cases."""

from datetime import datetime

import logfire
from pydantic import BaseModel, Field

from singles.application.usecase.base import BaseUseCase
from singles.application.usecase.invite.validate_invite import TOKEN_STATUS_MESSAGES
from singles.domain.service import ActivationService, EligibilityService
from singles.domain.value import ActivationStatus, RequestedRole, TokenStatus

ACTIVATION_MESSAGES = {
    ActivationStatus.ACTIVATED: "Your account is ready.",
    ActivationStatus.INVALID: TOKEN_STATUS_MESSAGES[TokenStatus.INVALID],
    ActivationStatus.EXPIRED: TOKEN_STATUS_MESSAGES[TokenStatus.EXPIRED],
    ActivationStatus.CONSUMED: TOKEN_STATUS_MESSAGES[TokenStatus.CONSUMED],
}


class ValidateActivationRequest(BaseModel):
    token: str


class ValidateActivationResponse(BaseModel):
    """Activation link check. Details are only present for a valid token."""

    valid: bool
    token_status: TokenStatus
    message: str
    invitee_email: str | None = None
    requested_role: RequestedRole | None = None
    role_label: str | None = None
    inviter_name: str | None = None
    expires_at: datetime | None = None


class ValidateActivationUseCase:
    """Use case for checking an activation link before the password form."""

    def __init__(
        self,
        activation_service: ActivationService,
        eligibility_service: EligibilityService,
    ) -> None:
        self.activation_service = activation_service
        self.eligibility_service = eligibility_service

    async def execute(
        self, request: ValidateActivationRequest
    ) -> ValidateActivationResponse:
        check = await self.activation_service.verify_activation_token(request.token)
        if not check.is_valid:
            return ValidateActivationResponse(
                valid=False,
                token_status=check.status,
                message=TOKEN_STATUS_MESSAGES[check.status],
            )

        invite = check.invite
        return ValidateActivationResponse(
            valid=True,
            token_status=check.status,
            message=TOKEN_STATUS_MESSAGES[check.status],
            invitee_email=invite.invitee_email,
            requested_role=invite.requested_role,
            role_label=invite.requested_role.label,
            inviter_name=await self.eligibility_service.inviter_display_name(
                invite.inviter_id
            ),
            expires_at=check.expires_at,
        )


class CompleteActivationRequest(BaseModel):
    """Activation token and the single's chosen password."""

    token: str
    password: str = Field(repr=False)


class CompleteActivationResponse(BaseModel):
    status: ActivationStatus
    message: str
    user_id: str | None = None
    invite_id: str | None = None


class CompleteActivationUseCase(BaseUseCase):
    """Use case for redeeming an activation token."""

    def __init__(self, activation_service: ActivationService) -> None:
        self.activation_service = activation_service

    async def execute(
        self, request: CompleteActivationRequest
    ) -> CompleteActivationResponse:
        """Create or link the single's account.

        Raises:
            ValidationError: If the password is too short
            ConflictError: If the email belongs to a couple account
        """
        with logfire.span("complete_activation.execute"):
            result = await self.activation_service.complete_activation(
                request.token, request.password
            )
            return CompleteActivationResponse(
                status=result.status,
                message=ACTIVATION_MESSAGES[result.status],
                user_id=str(result.user_id) if result.user_id else None,
                invite_id=str(result.invite_id) if result.invite_id else None,
            )
