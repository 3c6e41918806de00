"""Moderator routes."""

from uuid import UUID

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Body, Cookie, Query
from pydantic import BaseModel, Field

from singles.application.usecase.moderation import (
    ApproveInviteRequest,
    ApproveInviteResponse,
    ApproveInviteUseCase,
    ListQueueRequest,
    ListQueueResponse,
    ListQueueUseCase,
    ModeratorDeclineRequest,
    ModeratorDeclineResponse,
    ModeratorDeclineUseCase,
    RejectVerificationRequest,
    RejectVerificationResponse,
    RejectVerificationUseCase,
)
from singles.domain.service import JWTService
from singles.domain.value import InviteStatus
from singles.interface.api.auth import require_moderator

router = APIRouter(prefix="/singles/admin", tags=["moderation"], route_class=DishkaRoute)


class DeclineAPIRequest(BaseModel):
    reason: str | None = Field(default=None, max_length=500)


class RejectAPIRequest(BaseModel):
    reason: str = Field(min_length=1, max_length=500)
    notes: str | None = Field(default=None, max_length=2000)


@router.get("/invites", response_model=ListQueueResponse)
async def list_queue(
    list_queue_use_case: FromDishka[ListQueueUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
    status_filter: list[InviteStatus] | None = Query(default=None, alias="status"),
) -> ListQueueResponse:
    """Invites awaiting review. ``status`` may be repeated to widen the queue."""
    require_moderator(jwt_service, auth_token)
    return await list_queue_use_case.execute(ListQueueRequest(statuses=status_filter))


@router.post("/invites/{invite_id}/approve", response_model=ApproveInviteResponse)
async def approve_invite(
    invite_id: UUID,
    approve_invite_use_case: FromDishka[ApproveInviteUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> ApproveInviteResponse:
    """Approve the invitee and email their activation link."""
    payload = require_moderator(jwt_service, auth_token)
    return await approve_invite_use_case.execute(
        ApproveInviteRequest(invite_id=str(invite_id), moderator_id=payload.user_id)
    )


@router.post("/invites/{invite_id}/decline", response_model=ModeratorDeclineResponse)
async def decline_invite(
    invite_id: UUID,
    moderator_decline_use_case: FromDishka[ModeratorDeclineUseCase],
    jwt_service: FromDishka[JWTService],
    body: DeclineAPIRequest | None = Body(default=None),
    auth_token: str | None = Cookie(default=None),
) -> ModeratorDeclineResponse:
    payload = require_moderator(jwt_service, auth_token)
    return await moderator_decline_use_case.execute(
        ModeratorDeclineRequest(
            invite_id=str(invite_id),
            moderator_id=payload.user_id,
            reason=body.reason if body else None,
        )
    )


@router.post("/sessions/{session_id}/reject", response_model=RejectVerificationResponse)
async def reject_verification(
    session_id: UUID,
    body: RejectAPIRequest,
    reject_verification_use_case: FromDishka[RejectVerificationUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> RejectVerificationResponse:
    """Reject a verification session. The invitee may resubmit."""
    payload = require_moderator(jwt_service, auth_token)
    return await reject_verification_use_case.execute(
        RejectVerificationRequest(
            session_id=str(session_id),
            moderator_id=payload.user_id,
            reason=body.reason,
            notes=body.notes,
        )
    )
