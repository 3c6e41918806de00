"""Create invite use case."""

from datetime import datetime
from uuid import UUID

import logfire
from pydantic import BaseModel, Field

from singles.application.usecase.base import BaseUseCase
from singles.domain.service import (
    EligibilityService,
    InviteService,
    NotificationClient,
)
from singles.domain.value import InviteStatus, RequestedRole, UserId


class CreateInviteRequest(BaseModel):
    """Request to invite a single."""

    inviter_id: str
    invitee_email: str
    requested_role: str
    ttl_hours: int | None = Field(default=None, ge=1)
    ip_address: str | None = None
    user_agent: str | None = None


class CreateInviteResponse(BaseModel):
    """Response after creating an invite."""

    invite_id: str
    invite_url: str
    invitee_email: str
    requested_role: RequestedRole
    role_label: str
    status: InviteStatus
    expires_at: datetime
    email_sent: bool


class CreateInviteUseCase(BaseUseCase):
    """Use case for a couple inviting a single.

    The invite email is sent after the invite is stored. A delivery
    failure is logged and reported through ``email_sent``; the invite
    and its link stay valid.
    """

    def __init__(
        self,
        invite_service: InviteService,
        eligibility_service: EligibilityService,
        notification_client: NotificationClient,
    ) -> None:
        """Initialize use case.

        Args:
            invite_service: Invite domain service
            eligibility_service: Inviter eligibility service
            notification_client: Outbound email client
        """
        self.invite_service = invite_service
        self.eligibility_service = eligibility_service
        self.notification_client = notification_client

    async def execute(self, request: CreateInviteRequest) -> CreateInviteResponse:
        """Create the invite and email the link to the invitee.

        Raises:
            ValidationError: If the role or email is invalid
            IneligibleError: If the inviter may not invite
            QuotaExceededError: If the inviter has too many active invites
        """
        inviter_id = UserId(UUID(request.inviter_id))

        with logfire.span("create_invite", inviter_id=str(inviter_id)):
            created = await self.invite_service.create_invite(
                inviter_id=inviter_id,
                invitee_email=request.invitee_email,
                role=request.requested_role,
                ttl_hours=request.ttl_hours,
                ip_address=request.ip_address,
                user_agent=request.user_agent,
            )
            invite = created.invite

            email_sent = True
            try:
                await self.notification_client.send_invite_email(
                    to=invite.invitee_email,
                    invite_link=created.invite_url,
                    inviter_name=await self.eligibility_service.inviter_display_name(
                        inviter_id
                    ),
                    role_label=invite.requested_role.label,
                    expires_at=created.expires_at,
                )
            except Exception as e:
                email_sent = False
                logfire.error(
                    "Failed to send invite email",
                    invite_id=str(invite.id),
                    error=str(e),
                )

            return CreateInviteResponse(
                invite_id=str(invite.id),
                invite_url=created.invite_url,
                invitee_email=invite.invitee_email,
                requested_role=invite.requested_role,
                role_label=invite.requested_role.label,
                status=invite.status,
                expires_at=created.expires_at,
                email_sent=email_sent,
            )
