"""Validate invite use case."""

from datetime import datetime

import logfire
from pydantic import BaseModel

from singles.domain.service import EligibilityService, InviteService
from singles.domain.value import InviteStatus, RequestedRole, TokenStatus

TOKEN_STATUS_MESSAGES = {
    TokenStatus.VALID: "Valid invite",
    TokenStatus.INVALID: "This link is invalid.",
    TokenStatus.EXPIRED: "This link has expired.",
    TokenStatus.CONSUMED: "This link has already been used.",
}


class ValidateInviteRequest(BaseModel):
    """Validate invite request."""

    token: str


class ValidateInviteResponse(BaseModel):
    """Validate invite response.

    Invite details are only filled in for a valid token.
    """

    valid: bool
    token_status: TokenStatus
    message: str
    status: InviteStatus | None = None
    invitee_email: str | None = None
    requested_role: RequestedRole | None = None
    role_label: str | None = None
    inviter_name: str | None = None
    expires_at: datetime | None = None


class ValidateInviteUseCase:
    """Use case for checking an invite link before onboarding starts."""

    def __init__(
        self,
        invite_service: InviteService,
        eligibility_service: EligibilityService,
    ) -> None:
        """Initialize validate invite use case.

        Args:
            invite_service: Invite domain service
            eligibility_service: Supplies the inviter's display name
        """
        self.invite_service = invite_service
        self.eligibility_service = eligibility_service

    async def execute(self, request: ValidateInviteRequest) -> ValidateInviteResponse:
        with logfire.span("validate_invite.execute"):
            check = await self.invite_service.verify_invite_token(request.token)
            if not check.is_valid:
                logfire.info("Invite token not usable", status=check.status.value)
                return ValidateInviteResponse(
                    valid=False,
                    token_status=check.status,
                    message=TOKEN_STATUS_MESSAGES[check.status],
                )

            invite = check.invite
            return ValidateInviteResponse(
                valid=True,
                token_status=check.status,
                message=TOKEN_STATUS_MESSAGES[check.status],
                status=invite.status,
                invitee_email=invite.invitee_email,
                requested_role=invite.requested_role,
                role_label=invite.requested_role.label,
                inviter_name=await self.eligibility_service.inviter_display_name(
                    invite.inviter_id
                ),
                expires_at=invite.expires_at,
            )
