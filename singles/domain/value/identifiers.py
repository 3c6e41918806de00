"""Strongly typed identifiers for single member onboarding entities.

Using NewType for strong typing prevents mixing up different entity IDs
and makes the code more self-documenting.
"""

from typing import NewType
from uuid import UUID

UserId = NewType("UserId", UUID)
InviteId = NewType("InviteId", UUID)
ActivationId = NewType("ActivationId", UUID)
SessionId = NewType("SessionId", UUID)
ReviewId = NewType("ReviewId", UUID)
EventId = NewType("EventId", UUID)
