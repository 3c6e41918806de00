"""Invite domain service."""

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from uuid import UUID, uuid4

import logfire
from pydantic import ValidationError as PydanticValidationError

from singles.config import Settings
from singles.domain.error import (
    ForbiddenError,
    InvalidTransitionError,
    NotFoundError,
    QuotaExceededError,
    ValidationError,
)
from singles.domain.model.common import utcnow
from singles.domain.model.invite import Invite
from singles.domain.repository import ActivationRepository, InviteRepository
from singles.domain.value import (
    ACTIVE_INVITE_STATUSES,
    Email,
    InviteEventType,
    InviteId,
    InviteStatus,
    RequestedRole,
    TokenStatus,
    UserId,
)

from .base import Clock, Service
from .eligibility_service import EligibilityService
from .event_service import EventLogService
from .token_codec import TokenCodec

# Lazy expiry only moves invites that are still waiting on the invitee
EXPIRABLE_STATUSES = (InviteStatus.PENDING, InviteStatus.AWAITING_VERIFICATION)


@dataclass
class CreatedInvite:
    """A freshly issued invite and its shareable link."""

    invite: Invite
    invite_url: str = field(repr=False)
    token: str = field(repr=False)

    @property
    def expires_at(self) -> datetime:
        return self.invite.expires_at


@dataclass
class InviteTokenCheck:
    """Outcome of presenting an invite token."""

    status: TokenStatus
    invite: Invite | None = None

    @property
    def is_valid(self) -> bool:
        return self.status == TokenStatus.VALID


def parse_uuid(value: str) -> UUID | None:
    try:
        return UUID(value)
    except (ValueError, TypeError, AttributeError):
        return None


async def expire_invite(
    invite_repository: InviteRepository,
    event_log: EventLogService,
    invite: Invite,
    now: datetime,
) -> bool:
    """Move a lapsed pending or awaiting_verification invite to ``expired``.

    Returns:
        True if this call expired the invite
    """
    expired = await invite_repository.transition(
        invite.id, EXPIRABLE_STATUSES, InviteStatus.EXPIRED, now=now
    )
    if expired:
        await event_log.record(
            invite.id,
            InviteEventType.EXPIRED,
            metadata={"status_before": invite.status.value},
        )
        logfire.info("Invite expired", invite_id=str(invite.id))
    return expired is not None


class InviteService(Service):
    """Domain service for the inviter's side of the invite lifecycle.

    Enforces eligibility and the active-invite quota, issues invite tokens,
    and exposes listing, revocation, decline and final confirmation.
    """

    def __init__(
        self,
        invite_repository: InviteRepository,
        activation_repository: ActivationRepository,
        eligibility_service: EligibilityService,
        event_log: EventLogService,
        token_codec: TokenCodec,
        settings: Settings,
        clock: Clock = utcnow,
    ) -> None:
        self.invite_repository = invite_repository
        self.activation_repository = activation_repository
        self.eligibility_service = eligibility_service
        self.event_log = event_log
        self.token_codec = token_codec
        self.settings = settings
        self.clock = clock

    async def create_invite(
        self,
        inviter_id: UserId,
        invitee_email: str,
        role: RequestedRole | str,
        ttl_hours: int | None = None,
        ip_address: str | None = None,
        user_agent: str | None = None,
    ) -> CreatedInvite:
        """Create a pending invite for a single.

        Args:
            inviter_id: The inviting couple's account ID
            invitee_email: Address the invite is meant for
            role: One of the supported single roles
            ttl_hours: Requested link lifetime (clamped to the configured maximum)
            ip_address: Creator's IP address, kept for audit
            user_agent: Creator's user agent, kept for audit

        Returns:
            The invite with its shareable URL and combined token

        Raises:
            ValidationError: If the role or email is invalid
            NotFoundError: If the inviter does not exist
            IneligibleError: If the inviter is not eligible to invite
            QuotaExceededError: If the inviter has too many active invites
        """
        with logfire.span(
            "invite_service.create_invite", inviter_id=str(inviter_id)
        ):
            requested_role = self._parse_role(role)
            email = self._normalize_email(invitee_email)

            await self.eligibility_service.assert_eligible(inviter_id)

            limit = self.settings.invitations.max_active_invites
            now = self.clock()
            invite_id = InviteId(uuid4())
            issued = self.token_codec.issue(str(invite_id))

            invite = Invite(
                id=invite_id,
                inviter_id=inviter_id,
                invitee_email=email,
                requested_role=requested_role,
                status=InviteStatus.PENDING,
                token_hash=issued.secret_hash,
                token_salt=issued.salt,
                expires_at=now + self._ttl(ttl_hours),
                created_ip_address=ip_address,
                created_user_agent=user_agent,
                created_at=now,
                updated_at=now,
            )

            if not await self.invite_repository.add_within_quota(invite, limit):
                active = await self.invite_repository.count_active_by_inviter(
                    inviter_id
                )
                logfire.warn(
                    "Invite quota exceeded",
                    inviter_id=str(inviter_id),
                    active=active,
                    limit=limit,
                )
                raise QuotaExceededError(active, limit)

            await self.event_log.record(
                invite.id,
                InviteEventType.CREATED,
                actor_user_id=inviter_id,
                metadata={
                    "invitee_email": email,
                    "requested_role": requested_role.value,
                    "expires_at": invite.expires_at.isoformat(),
                    "plan_product_code": self.settings.invitations.plan_product_code,
                },
            )

            logfire.info(
                "Invite created",
                invite_id=str(invite.id),
                inviter_id=str(inviter_id),
                role=requested_role.value,
            )
            return CreatedInvite(
                invite=invite,
                invite_url=self.build_invite_url(issued.combined_token),
                token=issued.combined_token,
            )

    async def list_invites(self, inviter_id: UserId) -> list[Invite]:
        """All invites owned by the inviter, most recent first."""
        with logfire.span("invite_service.list_invites", inviter_id=str(inviter_id)):
            return await self.invite_repository.find_by_inviter(inviter_id)

    async def remaining_quota(self, inviter_id: UserId) -> int:
        active = await self.invite_repository.count_active_by_inviter(inviter_id)
        return max(self.settings.invitations.max_active_invites - active, 0)

    async def revoke_invite(self, invite_id: InviteId, actor_id: UserId) -> Invite:
        """Revoke an invite on behalf of its inviter.

        Already-terminal invites are returned unchanged.

        Raises:
            NotFoundError: If the invite does not exist
            ForbiddenError: If the actor is not the inviter
        """
        with logfire.span(
            "invite_service.revoke_invite",
            invite_id=str(invite_id),
            actor_id=str(actor_id),
        ):
            return await self._close_invite(
                invite_id, actor_id, InviteStatus.REVOKED, InviteEventType.REVOKED
            )

    async def decline_invite(
        self, invite_id: InviteId, actor_id: UserId, reason: str | None = None
    ) -> Invite:
        """Decline an invite on behalf of its inviter.

        Already-terminal invites are returned unchanged.
        """
        with logfire.span(
            "invite_service.decline_invite",
            invite_id=str(invite_id),
            actor_id=str(actor_id),
        ):
            return await self._close_invite(
                invite_id,
                actor_id,
                InviteStatus.DECLINED,
                InviteEventType.DECLINED,
                reason=reason,
            )

    async def confirm_linkage(self, invite_id: InviteId, actor_id: UserId) -> Invite:
        """Inviter confirms the activated single, completing the invite.

        Raises:
            NotFoundError: If the invite does not exist
            ForbiddenError: If the actor is not the inviter
            InvalidTransitionError: If the invite is not awaiting the couple
        """
        with logfire.span(
            "invite_service.confirm_linkage",
            invite_id=str(invite_id),
            actor_id=str(actor_id),
        ):
            invite = await self._get_owned(invite_id, actor_id)
            if invite.status == InviteStatus.COMPLETED:
                return invite

            updated = await self.invite_repository.transition(
                invite_id,
                (InviteStatus.AWAITING_COUPLE,),
                InviteStatus.COMPLETED,
                now=self.clock(),
                consume=True,
            )
            if updated is None:
                current = await self.invite_repository.find_by_id(invite_id) or invite
                if current.status == InviteStatus.COMPLETED:
                    return current
                raise InvalidTransitionError(
                    current.status.value, InviteStatus.COMPLETED.value
                )

            await self.event_log.record(
                invite_id, InviteEventType.COMPLETED, actor_user_id=actor_id
            )
            logfire.info("Invite completed", invite_id=str(invite_id))
            return updated

    async def verify_invite_token(self, combined_token: str) -> InviteTokenCheck:
        """Check a presented invite token.

        Malformed tokens, unknown ids and wrong secrets all yield ``invalid``
        so that a caller cannot learn whether an invite id exists.
        """
        with logfire.span("invite_service.verify_invite_token"):
            parsed = self.token_codec.parse(combined_token)
            invite_uuid = parse_uuid(parsed[0]) if parsed else None
            if invite_uuid is None:
                return InviteTokenCheck(status=TokenStatus.INVALID)

            invite = await self.invite_repository.find_by_id(InviteId(invite_uuid))
            if not invite or not self.token_codec.verify(
                combined_token, invite.token_hash, invite.token_salt
            ):
                logfire.warn("Invite token rejected", reason="lookup_or_hash")
                return InviteTokenCheck(status=TokenStatus.INVALID)

            if invite.status == InviteStatus.COMPLETED:
                return InviteTokenCheck(status=TokenStatus.CONSUMED)
            if invite.status in (InviteStatus.REVOKED, InviteStatus.DECLINED):
                return InviteTokenCheck(status=TokenStatus.INVALID)
            if invite.status == InviteStatus.EXPIRED:
                return InviteTokenCheck(status=TokenStatus.EXPIRED)

            now = self.clock()
            if invite.is_expired(now):
                await expire_invite(self.invite_repository, self.event_log, invite, now)
                return InviteTokenCheck(status=TokenStatus.EXPIRED)

            return InviteTokenCheck(status=TokenStatus.VALID, invite=invite)

    def build_invite_url(self, combined_token: str) -> str:
        invitations = self.settings.invitations
        return f"{self.settings.api.frontend_url}{invitations.join_path}?token={combined_token}"

    async def _close_invite(
        self,
        invite_id: InviteId,
        actor_id: UserId,
        target: InviteStatus,
        event_type: InviteEventType,
        reason: str | None = None,
    ) -> Invite:
        invite = await self._get_owned(invite_id, actor_id)
        if invite.is_terminal:
            logfire.info(
                "Invite already closed",
                invite_id=str(invite_id),
                status=invite.status.value,
            )
            return invite

        now = self.clock()
        updated = await self.invite_repository.transition(
            invite_id, ACTIVE_INVITE_STATUSES, target, now=now, consume=True
        )
        if updated is None:
            # Another request closed it first
            current = await self.invite_repository.find_by_id(invite_id)
            return current or invite

        await self.activation_repository.consume_all_for_invite(invite_id, now)

        metadata = {"status_before": invite.status.value}
        if reason:
            metadata["reason"] = reason
        await self.event_log.record(
            invite_id, event_type, actor_user_id=actor_id, metadata=metadata
        )
        logfire.info(
            "Invite closed", invite_id=str(invite_id), status=target.value
        )
        return updated

    async def _get_owned(self, invite_id: InviteId, actor_id: UserId) -> Invite:
        invite = await self.invite_repository.find_by_id(invite_id)
        if not invite:
            raise NotFoundError("Invite", str(invite_id))
        if invite.inviter_id != actor_id:
            logfire.warn(
                "Invite ownership mismatch",
                invite_id=str(invite_id),
                actor_id=str(actor_id),
            )
            raise ForbiddenError("Only the inviting couple can change this invite.")
        return invite

    def _ttl(self, ttl_hours: int | None) -> timedelta:
        invitations = self.settings.invitations
        hours = invitations.default_ttl_hours if ttl_hours is None else ttl_hours
        return timedelta(hours=min(max(int(hours), 1), invitations.max_ttl_hours))

    @staticmethod
    def _parse_role(role: RequestedRole | str) -> RequestedRole:
        try:
            return RequestedRole(role)
        except ValueError:
            raise ValidationError(
                "Requested role must be one of: "
                + ", ".join(r.value for r in RequestedRole)
            )

    @staticmethod
    def _normalize_email(email: str) -> str:
        try:
            return Email(email).root
        except PydanticValidationError:
            raise ValidationError("A valid invitee email is required.")
