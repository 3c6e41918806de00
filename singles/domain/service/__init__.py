"""Domain services."""

from .activation_service import (
    ActivationResult,
    ActivationService,
    ActivationTokenCheck,
    IssuedActivation,
)
from .base import Clock, Service
from .eligibility_service import EligibilityService
from .event_service import EventLogService
from .invite_service import CreatedInvite, InviteService, InviteTokenCheck
from .jwt_service import JWTService
from .moderation_service import ApprovalOutcome, ModerationItem, ModerationService
from .notification import NotificationClient
from .profile_service import ProfileService
from .review_service import ReviewResult, ReviewService
from .token_codec import IssuedToken, TokenCodec
from .verification_service import VerificationService

__all__ = [
    "ActivationResult",
    "ActivationService",
    "ActivationTokenCheck",
    "ApprovalOutcome",
    "Clock",
    "CreatedInvite",
    "EligibilityService",
    "EventLogService",
    "InviteService",
    "InviteTokenCheck",
    "IssuedActivation",
    "IssuedToken",
    "JWTService",
    "ModerationItem",
    "ModerationService",
    "NotificationClient",
    "ProfileService",
    "ReviewResult",
    "ReviewService",
    "Service",
    "TokenCodec",
    "VerificationService",
]
