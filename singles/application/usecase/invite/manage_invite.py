"""Inviter-side invite management use cases: revoke, decline and confirm."""

from uuid import UUID

from pydantic import BaseModel, Field

from singles.application.usecase.base import BaseUseCase
from singles.application.usecase.invite.get_invites import InviteItem
from singles.domain.service import InviteService
from singles.domain.value import InviteId, UserId


class ManageInviteRequest(BaseModel):
    """Request naming an invite and the acting couple."""

    invite_id: str
    actor_id: str


class DeclineInviteRequest(ManageInviteRequest):
    reason: str | None = Field(default=None, max_length=500)


class ManageInviteResponse(BaseModel):
    """The invite after the change."""

    invite: InviteItem


def _ids(request: ManageInviteRequest) -> tuple[InviteId, UserId]:
    return InviteId(UUID(request.invite_id)), UserId(UUID(request.actor_id))


class RevokeInviteUseCase(BaseUseCase):
    """Inviter withdraws an invite. Closed invites are returned unchanged."""

    def __init__(self, invite_service: InviteService) -> None:
        self.invite_service = invite_service

    async def execute(self, request: ManageInviteRequest) -> ManageInviteResponse:
        invite_id, actor_id = _ids(request)
        invite = await self.invite_service.revoke_invite(invite_id, actor_id)
        return ManageInviteResponse(invite=InviteItem.from_invite(invite))


class DeclineInviteUseCase(BaseUseCase):
    """Inviter declines the invitee."""

    def __init__(self, invite_service: InviteService) -> None:
        self.invite_service = invite_service

    async def execute(self, request: DeclineInviteRequest) -> ManageInviteResponse:
        invite_id, actor_id = _ids(request)
        invite = await self.invite_service.decline_invite(
            invite_id, actor_id, reason=request.reason
        )
        return ManageInviteResponse(invite=InviteItem.from_invite(invite))


class ConfirmInviteUseCase(BaseUseCase):
    """Inviter confirms the activated single, completing the invite."""

    def __init__(self, invite_service: InviteService) -> None:
        self.invite_service = invite_service

    async def execute(self, request: ManageInviteRequest) -> ManageInviteResponse:
        invite_id, actor_id = _ids(request)
        invite = await self.invite_service.confirm_linkage(invite_id, actor_id)
        return ManageInviteResponse(invite=InviteItem.from_invite(invite))
