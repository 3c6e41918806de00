"""Repository interfaces for single member onboarding.

Repository interfaces are defined in the domain layer (dependency inversion).
Implementations live in the persistence layer.
"""

from singles.domain.repository.account import AccountRepository
from singles.domain.repository.activation import ActivationRepository
from singles.domain.repository.event import InviteEventRepository
from singles.domain.repository.invite import InviteRepository
from singles.domain.repository.profile import ProfileRepository
from singles.domain.repository.review import ReviewRepository
from singles.domain.repository.verification import VerificationRepository

__all__ = [
    "AccountRepository",
    "ActivationRepository",
    "InviteEventRepository",
    "InviteRepository",
    "ProfileRepository",
    "ReviewRepository",
    "VerificationRepository",
]
