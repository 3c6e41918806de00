"""Invite use cases."""

from singles.application.usecase.invite.create_invite import (
    CreateInviteRequest,
    CreateInviteResponse,
    CreateInviteUseCase,
)
from singles.application.usecase.invite.get_invites import (
    GetInvitesRequest,
    GetInvitesResponse,
    GetInvitesUseCase,
    InviteItem,
)
from singles.application.usecase.invite.manage_invite import (
    ConfirmInviteUseCase,
    DeclineInviteRequest,
    DeclineInviteUseCase,
    ManageInviteRequest,
    ManageInviteResponse,
    RevokeInviteUseCase,
)
from singles.application.usecase.invite.validate_invite import (
    TOKEN_STATUS_MESSAGES,
    ValidateInviteRequest,
    ValidateInviteResponse,
    ValidateInviteUseCase,
)

__all__ = [
    "TOKEN_STATUS_MESSAGES",
    "ConfirmInviteUseCase",
    "CreateInviteRequest",
    "CreateInviteResponse",
    "CreateInviteUseCase",
    "DeclineInviteRequest",
    "DeclineInviteUseCase",
    "GetInvitesRequest",
    "GetInvitesResponse",
    "GetInvitesUseCase",
    "InviteItem",
    "ManageInviteRequest",
    "ManageInviteResponse",
    "RevokeInviteUseCase",
    "ValidateInviteRequest",
    "ValidateInviteResponse",
    "ValidateInviteUseCase",
]
