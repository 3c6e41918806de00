"""Moderation domain service."""

from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import datetime

import logfire

from singles.domain.error import InvalidTransitionError, NotFoundError
from singles.domain.model.common import utcnow
from singles.domain.model.invite import Invite
from singles.domain.model.verification import VerificationSession
from singles.domain.repository import (
    ActivationRepository,
    InviteRepository,
    VerificationRepository,
)
from singles.domain.value import (
    ACTIVE_INVITE_STATUSES,
    InviteEventType,
    InviteId,
    InviteStatus,
    SessionId,
    UserId,
    VerificationStatus,
)

from .activation_service import ActivationService
from .base import Clock, Service
from .eligibility_service import EligibilityService
from .event_service import EventLogService
from .invite_service import EXPIRABLE_STATUSES, expire_invite

# Approving an awaiting_activation invite re-issues a lost or expired link
APPROVABLE_STATUSES = (
    InviteStatus.PENDING,
    InviteStatus.AWAITING_VERIFICATION,
    InviteStatus.AWAITING_ACTIVATION,
)


@dataclass
class ApprovalOutcome:
    """Everything the caller needs to email the activation link."""

    invite: Invite
    activation_url: str = field(repr=False)
    activation_expires_at: datetime
    invitee_email: str
    inviter_name: str
    role_label: str


@dataclass
class ModerationItem:
    """An invite in the moderation queue with its verification session."""

    invite: Invite
    session: VerificationSession | None


class ModerationService(Service):
    """Moderator decisions on invites and verification sessions."""

    def __init__(
        self,
        invite_repository: InviteRepository,
        verification_repository: VerificationRepository,
        activation_repository: ActivationRepository,
        activation_service: ActivationService,
        eligibility_service: EligibilityService,
        event_log: EventLogService,
        clock: Clock = utcnow,
    ) -> None:
        self.invite_repository = invite_repository
        self.verification_repository = verification_repository
        self.activation_repository = activation_repository
        self.activation_service = activation_service
        self.eligibility_service = eligibility_service
        self.event_log = event_log
        self.clock = clock

    async def list_queue(
        self, statuses: Iterable[InviteStatus] | None = None
    ) -> list[ModerationItem]:
        """Invites awaiting moderation (or in the given statuses) with their sessions."""
        wanted = list(statuses or (InviteStatus.AWAITING_VERIFICATION,))
        with logfire.span(
            "moderation_service.list_queue", statuses=[s.value for s in wanted]
        ):
            invites = await self.invite_repository.find_by_statuses(wanted)
            sessions = await self.verification_repository.find_by_invites(
                [invite.id for invite in invites]
            )
            return [
                ModerationItem(invite=invite, session=sessions.get(invite.id))
                for invite in invites
            ]

    async def approve(self, invite_id: InviteId, moderator_id: UserId) -> ApprovalOutcome:
        """Approve an invitee and issue their activation token.

        Args:
            invite_id: The invite to approve
            moderator_id: The approving moderator

        Returns:
            The activation link and notification context

        Raises:
            NotFoundError: If the invite does not exist
            InvalidTransitionError: If the invite is closed, lapsed or already
                activated
        """
        with logfire.span(
            "moderation_service.approve",
            invite_id=str(invite_id),
            moderator_id=str(moderator_id),
        ):
            invite = await self.invite_repository.find_by_id(invite_id)
            if not invite:
                raise NotFoundError("Invite", str(invite_id))
            if invite.status not in APPROVABLE_STATUSES:
                raise InvalidTransitionError(
                    invite.status.value, InviteStatus.AWAITING_ACTIVATION.value
                )

            now = self.clock()
            if invite.status in EXPIRABLE_STATUSES and invite.is_expired(now):
                await expire_invite(self.invite_repository, self.event_log, invite, now)
                logfire.warn("Approval refused for lapsed invite", invite_id=str(invite_id))
                raise InvalidTransitionError(
                    InviteStatus.EXPIRED.value, InviteStatus.AWAITING_ACTIVATION.value
                )

            approved = await self.invite_repository.transition(
                invite_id,
                APPROVABLE_STATUSES,
                InviteStatus.AWAITING_ACTIVATION,
                now=now,
            )
            if approved is None:
                current = await self.invite_repository.find_by_id(invite_id) or invite
                raise InvalidTransitionError(
                    current.status.value, InviteStatus.AWAITING_ACTIVATION.value
                )

            issued = await self.activation_service.issue_token(approved, moderator_id)

            session = await self.verification_repository.find_by_invite(invite_id)
            if session:
                await self.verification_repository.record_decision(
                    session.id, VerificationStatus.APPROVED, moderator_id, now
                )

            await self.event_log.record(
                invite_id,
                InviteEventType.APPROVED,
                actor_user_id=moderator_id,
                metadata={
                    "status_before": invite.status.value,
                    "activation_id": str(issued.activation.id),
                },
            )
            logfire.info(
                "Invite approved",
                invite_id=str(invite_id),
                moderator_id=str(moderator_id),
            )
            return ApprovalOutcome(
                invite=approved,
                activation_url=issued.activation_url,
                activation_expires_at=issued.expires_at,
                invitee_email=approved.invitee_email,
                inviter_name=await self.eligibility_service.inviter_display_name(
                    approved.inviter_id
                ),
                role_label=approved.requested_role.label,
            )

    async def reject(
        self,
        session_id: SessionId,
        moderator_id: UserId,
        reason: str,
        notes: str | None = None,
    ) -> VerificationSession:
        """Reject a verification session. The invite status is left unchanged.

        Raises:
            NotFoundError: If the session does not exist
            InvalidTransitionError: If the session was already approved
        """
        with logfire.span(
            "moderation_service.reject",
            session_id=str(session_id),
            moderator_id=str(moderator_id),
        ):
            session = await self.verification_repository.find_by_id(session_id)
            if not session:
                raise NotFoundError("VerificationSession", str(session_id))
            if session.status == VerificationStatus.APPROVED:
                raise InvalidTransitionError(
                    session.status.value, VerificationStatus.REJECTED.value
                )

            updated = await self.verification_repository.record_decision(
                session_id,
                VerificationStatus.REJECTED,
                moderator_id,
                self.clock(),
                rejection_reason=reason,
                moderation_notes=notes,
            )
            if updated is None:
                raise NotFoundError("VerificationSession", str(session_id))

            await self.event_log.record(
                session.invite_id,
                InviteEventType.VERIFICATION_REJECTED,
                actor_user_id=moderator_id,
                metadata={"session_id": str(session_id), "reason": reason},
            )
            logfire.info(
                "Verification rejected",
                session_id=str(session_id),
                invite_id=str(session.invite_id),
            )
            return updated

    async def decline(
        self, invite_id: InviteId, moderator_id: UserId, reason: str | None = None
    ) -> Invite:
        """Decline an invite outright. Closed invites are returned unchanged."""
        with logfire.span(
            "moderation_service.decline",
            invite_id=str(invite_id),
            moderator_id=str(moderator_id),
        ):
            invite = await self.invite_repository.find_by_id(invite_id)
            if not invite:
                raise NotFoundError("Invite", str(invite_id))
            if invite.is_terminal:
                return invite

            now = self.clock()
            updated = await self.invite_repository.transition(
                invite_id,
                ACTIVE_INVITE_STATUSES,
                InviteStatus.DECLINED,
                now=now,
                consume=True,
            )
            if updated is None:
                return await self.invite_repository.find_by_id(invite_id) or invite

            await self.activation_repository.consume_all_for_invite(invite_id, now)
            metadata = {"status_before": invite.status.value}
            if reason:
                metadata["reason"] = reason
            await self.event_log.record(
                invite_id,
                InviteEventType.DECLINED,
                actor_user_id=moderator_id,
                metadata=metadata,
            )
            logfire.info("Invite declined by moderator", invite_id=str(invite_id))
            return updated
