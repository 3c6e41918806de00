"""Couple-facing invite routes."""

from uuid import UUID

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Body, Cookie, Query, Request, status
from pydantic import BaseModel, Field

from singles.application.usecase.invite import (
    ConfirmInviteUseCase,
    CreateInviteRequest,
    CreateInviteResponse,
    CreateInviteUseCase,
    DeclineInviteRequest,
    DeclineInviteUseCase,
    GetInvitesRequest,
    GetInvitesResponse,
    GetInvitesUseCase,
    ManageInviteRequest,
    ManageInviteResponse,
    RevokeInviteUseCase,
)
from singles.domain.service import JWTService
from singles.domain.value import AccountKind, InviteStatus
from singles.interface.api.auth import authenticate

router = APIRouter(prefix="/singles/invites", tags=["invites"], route_class=DishkaRoute)


class CreateInviteAPIRequest(BaseModel):
    """API request for inviting a single."""

    invitee_email: str
    requested_role: str
    ttl_hours: int | None = Field(default=None, ge=1)


class DeclineInviteAPIRequest(BaseModel):
    reason: str | None = Field(default=None, max_length=500)


@router.post(
    "/", response_model=CreateInviteResponse, status_code=status.HTTP_201_CREATED
)
async def create_invite(
    body: CreateInviteAPIRequest,
    request: Request,
    create_invite_use_case: FromDishka[CreateInviteUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> CreateInviteResponse:
    """Invite a single.

    Args:
        body: Invitee email, role and optional link lifetime
        request: Incoming request, for the audit IP and user agent
        create_invite_use_case: Create invite use case from DI
        jwt_service: JWT service from DI
        auth_token: JWT token from cookie

    Returns:
        The invite, its link and whether the email went out
    """
    payload = authenticate(jwt_service, auth_token, kind=AccountKind.COUPLE)

    return await create_invite_use_case.execute(
        CreateInviteRequest(
            inviter_id=payload.user_id,
            invitee_email=body.invitee_email,
            requested_role=body.requested_role,
            ttl_hours=body.ttl_hours,
            ip_address=request.client.host if request.client else None,
            user_agent=request.headers.get("user-agent"),
        )
    )


@router.get("/", response_model=GetInvitesResponse)
async def get_invites(
    get_invites_use_case: FromDishka[GetInvitesUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
    status_filter: InviteStatus | None = Query(default=None, alias="status"),
) -> GetInvitesResponse:
    """Get invites created by the current couple, with the remaining quota."""
    payload = authenticate(jwt_service, auth_token, kind=AccountKind.COUPLE)

    return await get_invites_use_case.execute(
        GetInvitesRequest(inviter_id=payload.user_id, status=status_filter)
    )


@router.delete("/{invite_id}", response_model=ManageInviteResponse)
async def revoke_invite(
    invite_id: UUID,
    revoke_invite_use_case: FromDishka[RevokeInviteUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> ManageInviteResponse:
    """Revoke an invite. Revoking a closed invite changes nothing."""
    payload = authenticate(jwt_service, auth_token, kind=AccountKind.COUPLE)

    return await revoke_invite_use_case.execute(
        ManageInviteRequest(invite_id=str(invite_id), actor_id=payload.user_id)
    )


@router.post("/{invite_id}/decline", response_model=ManageInviteResponse)
async def decline_invite(
    invite_id: UUID,
    decline_invite_use_case: FromDishka[DeclineInviteUseCase],
    jwt_service: FromDishka[JWTService],
    body: DeclineInviteAPIRequest | None = Body(default=None),
    auth_token: str | None = Cookie(default=None),
) -> ManageInviteResponse:
    """Decline the invitee."""
    payload = authenticate(jwt_service, auth_token, kind=AccountKind.COUPLE)

    return await decline_invite_use_case.execute(
        DeclineInviteRequest(
            invite_id=str(invite_id),
            actor_id=payload.user_id,
            reason=body.reason if body else None,
        )
    )


@router.post("/{invite_id}/confirm", response_model=ManageInviteResponse)
async def confirm_invite(
    invite_id: UUID,
    confirm_invite_use_case: FromDishka[ConfirmInviteUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> ManageInviteResponse:
    """Confirm the activated single, completing the invite."""
    payload = authenticate(jwt_service, auth_token, kind=AccountKind.COUPLE)

    return await confirm_invite_use_case.execute(
        ManageInviteRequest(invite_id=str(invite_id), actor_id=payload.user_id)
    )
