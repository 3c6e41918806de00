"""Get invites use case."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel

from singles.domain.model.invite import Invite
from singles.domain.service import InviteService
from singles.domain.value import InviteStatus, RequestedRole, UserId


class InviteItem(BaseModel):
    """Invite item in response."""

    invite_id: str
    invitee_email: str
    requested_role: RequestedRole
    role_label: str
    status: InviteStatus
    expires_at: datetime
    invitee_user_id: str | None = None
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_invite(cls, invite: Invite) -> "InviteItem":
        return cls(
            invite_id=str(invite.id),
            invitee_email=invite.invitee_email,
            requested_role=invite.requested_role,
            role_label=invite.requested_role.label,
            status=invite.status,
            expires_at=invite.expires_at,
            invitee_user_id=str(invite.invitee_user_id)
            if invite.invitee_user_id
            else None,
            created_at=invite.created_at,
            updated_at=invite.updated_at,
        )


class GetInvitesRequest(BaseModel):
    """Get invites request."""

    inviter_id: str  # User ID from auth
    status: InviteStatus | None = None


class GetInvitesResponse(BaseModel):
    """Get invites response."""

    invites: list[InviteItem]
    total: int
    remaining_quota: int


class GetInvitesUseCase:
    """Use case for listing the invites a couple has sent."""

    def __init__(self, invite_service: InviteService) -> None:
        self.invite_service = invite_service

    async def execute(self, request: GetInvitesRequest) -> GetInvitesResponse:
        """List invites, newest first, with the remaining active-invite quota."""
        inviter_id = UserId(UUID(request.inviter_id))

        invites = await self.invite_service.list_invites(inviter_id)
        if request.status:
            invites = [i for i in invites if i.status == request.status]

        items = [InviteItem.from_invite(invite) for invite in invites]
        return GetInvitesResponse(
            invites=items,
            total=len(items),
            remaining_quota=await self.invite_service.remaining_quota(inviter_id),
        )
