"""In-memory verification session repository for testing."""

from collections.abc import Iterable
from datetime import datetime
from typing import Any, Optional
from uuid import uuid4

from singles.domain.model.verification import VerificationSession
from singles.domain.repository.verification import VerificationRepository
from singles.domain.value import (
    InviteId,
    SessionId,
    SubmittedMedia,
    SubmittedProfile,
    UserId,
    VerificationStatus,
)


class InMemoryVerificationRepository(VerificationRepository):
    """In-memory implementation of VerificationRepository for testing."""

    def __init__(self) -> None:
        self._sessions: dict[InviteId, VerificationSession] = {}

    async def find_by_id(self, session_id: SessionId) -> Optional[VerificationSession]:
        for session in self._sessions.values():
            if session.id == session_id:
                return session
        return None

    async def find_by_invite(self, invite_id: InviteId) -> Optional[VerificationSession]:
        return self._sessions.get(invite_id)

    async def find_by_invites(
        self, invite_ids: Iterable[InviteId]
    ) -> dict[InviteId, VerificationSession]:
        return {
            invite_id: self._sessions[invite_id]
            for invite_id in invite_ids
            if invite_id in self._sessions
        }

    async def save_profile(
        self,
        invite_id: InviteId,
        invitee_email: str,
        profile: SubmittedProfile,
        status: VerificationStatus,
        now: datetime,
    ) -> VerificationSession:
        return self._upsert(
            invite_id, invitee_email, {"submitted_profile": profile}, status, now
        )

    async def save_media(
        self,
        invite_id: InviteId,
        invitee_email: str,
        media: SubmittedMedia,
        status: VerificationStatus,
        now: datetime,
    ) -> VerificationSession:
        return self._upsert(
            invite_id, invitee_email, {"submitted_media": media}, status, now
        )

    async def record_decision(
        self,
        session_id: SessionId,
        status: VerificationStatus,
        decision_user_id: UserId,
        now: datetime,
        rejection_reason: str | None = None,
        moderation_notes: str | None = None,
    ) -> Optional[VerificationSession]:
        session = await self.find_by_id(session_id)
        if session is None:
            return None
        changes: dict[str, Any] = {
            "status": status,
            "decision_user_id": decision_user_id,
            "decision_at": now,
            "rejection_reason": rejection_reason,
            "updated_at": now,
        }
        if moderation_notes is not None:
            changes["moderation_notes"] = moderation_notes
        updated = session.model_copy(update=changes)
        self._sessions[session.invite_id] = updated
        return updated

    def _upsert(
        self,
        invite_id: InviteId,
        invitee_email: str,
        submission: dict[str, Any],
        status: VerificationStatus,
        now: datetime,
    ) -> VerificationSession:
        existing = self._sessions.get(invite_id)
        if existing:
            session = existing.model_copy(
                update={
                    **submission,
                    "invitee_email": invitee_email,
                    "status": status,
                    "updated_at": now,
                }
            )
        else:
            session = VerificationSession(
                id=SessionId(uuid4()),
                invite_id=invite_id,
                invitee_email=invitee_email,
                status=status,
                created_at=now,
                updated_at=now,
                **submission,
            )
        self._sessions[invite_id] = session
        return session
