"""Moderator use cases."""

from singles.application.usecase.moderation.approve_invite import (
    ApproveInviteRequest,
    ApproveInviteResponse,
    ApproveInviteUseCase,
)
from singles.application.usecase.moderation.decide import (
    ModeratorDeclineRequest,
    ModeratorDeclineResponse,
    ModeratorDeclineUseCase,
    RejectVerificationRequest,
    RejectVerificationResponse,
    RejectVerificationUseCase,
)
from singles.application.usecase.moderation.list_queue import (
    ListQueueRequest,
    ListQueueResponse,
    ListQueueUseCase,
    QueueItem,
)

__all__ = [
    "ApproveInviteRequest",
    "ApproveInviteResponse",
    "ApproveInviteUseCase",
    "ListQueueRequest",
    "ListQueueResponse",
    "ListQueueUseCase",
    "ModeratorDeclineRequest",
    "ModeratorDeclineResponse",
    "ModeratorDeclineUseCase",
    "QueueItem",
    "RejectVerificationRequest",
    "RejectVerificationResponse",
    "RejectVerificationUseCase",
]
