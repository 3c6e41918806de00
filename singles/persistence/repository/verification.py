"""PostgreSQL implementation of VerificationSession repository."""

from collections.abc import Iterable
from datetime import datetime
from typing import Any, Optional
from uuid import uuid4

from sqlalchemy import insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from singles.domain.model import VerificationSession
from singles.domain.repository import VerificationRepository
from singles.domain.value import (
    InviteId,
    SessionId,
    SubmittedMedia,
    SubmittedProfile,
    UserId,
    VerificationStatus,
)
from singles.persistence.database import SqlStore
from singles.persistence.mappers import (
    row_to_verification_session,
    submission_to_json,
)
from singles.persistence.tables import verification_sessions_table as sessions


class PostgresVerificationRepository(VerificationRepository):
    """PostgreSQL implementation of VerificationRepository."""

    def __init__(self, store: SqlStore) -> None:
        self.store = store

    async def find_by_id(self, session_id: SessionId) -> Optional[VerificationSession]:
        async def _find(session: AsyncSession) -> Optional[VerificationSession]:
            result = await session.execute(
                select(sessions).where(sessions.c.id == session_id)
            )
            row = result.mappings().first()
            return row_to_verification_session(dict(row)) if row else None

        return await self.store.run(_find)

    async def find_by_invite(self, invite_id: InviteId) -> Optional[VerificationSession]:
        async def _find(session: AsyncSession) -> Optional[VerificationSession]:
            return await self._find_by_invite(session, invite_id)

        return await self.store.run(_find)

    async def find_by_invites(
        self, invite_ids: Iterable[InviteId]
    ) -> dict[InviteId, VerificationSession]:
        ids = list(invite_ids)
        if not ids:
            return {}

        async def _find(session: AsyncSession) -> dict[InviteId, VerificationSession]:
            result = await session.execute(
                select(sessions).where(sessions.c.invite_id.in_(ids))
            )
            found = [row_to_verification_session(dict(row)) for row in result.mappings()]
            return {item.invite_id: item for item in found}

        return await self.store.run(_find)

    async def save_profile(
        self,
        invite_id: InviteId,
        invitee_email: str,
        profile: SubmittedProfile,
        status: VerificationStatus,
        now: datetime,
    ) -> VerificationSession:
        return await self._upsert(
            invite_id,
            invitee_email,
            {"submitted_profile": submission_to_json(profile)},
            status,
            now,
        )

    async def save_media(
        self,
        invite_id: InviteId,
        invitee_email: str,
        media: SubmittedMedia,
        status: VerificationStatus,
        now: datetime,
    ) -> VerificationSession:
        return await self._upsert(
            invite_id,
            invitee_email,
            {"submitted_media": submission_to_json(media)},
            status,
            now,
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
        values: dict[str, Any] = {
            "status": status.value,
            "decision_user_id": decision_user_id,
            "decision_at": now,
            "rejection_reason": rejection_reason,
            "updated_at": now,
        }
        if moderation_notes is not None:
            values["moderation_notes"] = moderation_notes

        async def _decide(session: AsyncSession) -> Optional[VerificationSession]:
            result = await session.execute(
                update(sessions)
                .where(sessions.c.id == session_id)
                .values(**values)
                .returning(*sessions.c)
            )
            row = result.mappings().first()
            return row_to_verification_session(dict(row)) if row else None

        return await self.store.run(_decide)

    async def _upsert(
        self,
        invite_id: InviteId,
        invitee_email: str,
        submission: dict[str, Any],
        status: VerificationStatus,
        now: datetime,
    ) -> VerificationSession:
        async def _save(session: AsyncSession) -> VerificationSession:
            existing = await self._find_by_invite(session, invite_id)
            if existing:
                stmt = (
                    update(sessions)
                    .where(sessions.c.id == existing.id)
                    .values(
                        **submission,
                        invitee_email=invitee_email,
                        status=status.value,
                        updated_at=now,
                    )
                )
            else:
                stmt = insert(sessions).values(
                    **submission,
                    id=SessionId(uuid4()),
                    invite_id=invite_id,
                    invitee_email=invitee_email,
                    status=status.value,
                    created_at=now,
                    updated_at=now,
                )
            await session.execute(stmt)
            saved = await self._find_by_invite(session, invite_id)
            assert saved is not None
            return saved

        return await self.store.run(_save)

    @staticmethod
    async def _find_by_invite(
        session: AsyncSession, invite_id: InviteId
    ) -> Optional[VerificationSession]:
        result = await session.execute(
            select(sessions).where(sessions.c.invite_id == invite_id)
        )
        row = result.mappings().first()
        return row_to_verification_session(dict(row)) if row else None
