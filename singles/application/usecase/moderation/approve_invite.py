"""Approve invite use case."""

from datetime import datetime
from uuid import UUID

import logfire
from pydantic import BaseModel

from singles.application.usecase.base import BaseUseCase
from singles.application.usecase.invite.get_invites import InviteItem
from singles.domain.service import ModerationService, NotificationClient
from singles.domain.value import InviteId, UserId


class ApproveInviteRequest(BaseModel):
    invite_id: str
    moderator_id: str


class ApproveInviteResponse(BaseModel):
    """Approved invite. The activation link itself only goes out by email."""

    invite: InviteItem
    activation_expires_at: datetime
    email_sent: bool


class ApproveInviteUseCase(BaseUseCase):
    """Use case for a moderator approving an invitee."""

    def __init__(
        self,
        moderation_service: ModerationService,
        notification_client: NotificationClient,
    ) -> None:
        """Initialize use case.

        Args:
            moderation_service: Moderation domain service
            notification_client: Outbound email client
        """
        self.moderation_service = moderation_service
        self.notification_client = notification_client

    async def execute(self, request: ApproveInviteRequest) -> ApproveInviteResponse:
        """Approve, issue the activation token and email the link.

        Raises:
            NotFoundError: If the invite does not exist
            InvalidTransitionError: If the invite cannot be approved
        """
        invite_id = InviteId(UUID(request.invite_id))
        moderator_id = UserId(UUID(request.moderator_id))

        with logfire.span("approve_invite", invite_id=str(invite_id)):
            outcome = await self.moderation_service.approve(invite_id, moderator_id)

            email_sent = True
            try:
                await self.notification_client.send_activation_email(
                    to=outcome.invitee_email,
                    activation_link=outcome.activation_url,
                    inviter_name=outcome.inviter_name,
                    role_label=outcome.role_label,
                    expires_at=outcome.activation_expires_at,
                )
            except Exception as e:
                email_sent = False
                logfire.error(
                    "Failed to send activation email",
                    invite_id=str(invite_id),
                    error=str(e),
                )

            return ApproveInviteResponse(
                invite=InviteItem.from_invite(outcome.invite),
                activation_expires_at=outcome.activation_expires_at,
                email_sent=email_sent,
            )
