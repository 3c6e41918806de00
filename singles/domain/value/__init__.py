"""Domain value objects for single member onboarding."""

from singles.domain.value.identifiers import (
    ActivationId,
    EventId,
    InviteId,
    ReviewId,
    SessionId,
    UserId,
)
from singles.domain.value.types import (
    ACTIVE_INVITE_STATUSES,
    TERMINAL_INVITE_STATUSES,
    AccountKind,
    ActivationStatus,
    Email,
    InviteEventType,
    InviteStatus,
    MediaReference,
    ProfileUpdate,
    RequestedRole,
    SubmittedMedia,
    SubmittedProfile,
    TokenStatus,
    VerificationStatus,
)

__all__ = [
    # Identifiers
    "UserId",
    "InviteId",
    "ActivationId",
    "SessionId",
    "ReviewId",
    "EventId",
    # Types
    "ACTIVE_INVITE_STATUSES",
    "TERMINAL_INVITE_STATUSES",
    "AccountKind",
    "ActivationStatus",
    "Email",
    "InviteEventType",
    "InviteStatus",
    "MediaReference",
    "ProfileUpdate",
    "RequestedRole",
    "SubmittedMedia",
    "SubmittedProfile",
    "TokenStatus",
    "VerificationStatus",
]
