"""Verification session repository interface."""

from abc import ABC, abstractmethod
from collections.abc import Iterable
from datetime import datetime

from singles.domain.model.verification import VerificationSession
from singles.domain.value import (
    InviteId,
    SessionId,
    SubmittedMedia,
    SubmittedProfile,
    UserId,
    VerificationStatus,
)


class VerificationRepository(ABC):
    """Repository for VerificationSession entity.

    Sessions are keyed by invite; saving a submission creates the session
    on first use and updates it afterwards.
    """

    @abstractmethod
    async def find_by_id(self, session_id: SessionId) -> VerificationSession | None:
        pass

    @abstractmethod
    async def find_by_invite(self, invite_id: InviteId) -> VerificationSession | None:
        pass

    @abstractmethod
    async def find_by_invites(
        self, invite_ids: Iterable[InviteId]
    ) -> dict[InviteId, VerificationSession]:
        """Load sessions for several invites, keyed by invite ID."""
        pass

    @abstractmethod
    async def save_profile(
        self,
        invite_id: InviteId,
        invitee_email: str,
        profile: SubmittedProfile,
        status: VerificationStatus,
        now: datetime,
    ) -> VerificationSession:
        pass

    @abstractmethod
    async def save_media(
        self,
        invite_id: InviteId,
        invitee_email: str,
        media: SubmittedMedia,
        status: VerificationStatus,
        now: datetime,
    ) -> VerificationSession:
        pass

    @abstractmethod
    async def record_decision(
        self,
        session_id: SessionId,
        status: VerificationStatus,
        decision_user_id: UserId,
        now: datetime,
        rejection_reason: str | None = None,
        moderation_notes: str | None = None,
    ) -> VerificationSession | None:
        """Store a moderator decision.

        Returns:
            The updated session, or None if it does not exist
        """
        pass
