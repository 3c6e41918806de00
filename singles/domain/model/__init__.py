"""Domain model entities for single member onboarding."""

from singles.domain.model.account import Account
from singles.domain.model.activation import ActivationToken
from singles.domain.model.event import InviteEvent
from singles.domain.model.invite import Invite
from singles.domain.model.profile import SingleProfile
from singles.domain.model.review import Review, ReviewStats
from singles.domain.model.verification import VerificationSession

__all__ = [
    "Account",
    "ActivationToken",
    "Invite",
    "InviteEvent",
    "Review",
    "ReviewStats",
    "SingleProfile",
    "VerificationSession",
]
