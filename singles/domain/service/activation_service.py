"""Activation domain service."""

import re
import secrets
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from uuid import UUID, uuid4

import logfire

from singles.config import Settings
from singles.domain.error import ConflictError, DuplicateError, ValidationError
from singles.domain.model.account import Account
from singles.domain.model.activation import ActivationToken
from singles.domain.model.common import utcnow
from singles.domain.model.invite import Invite
from singles.domain.repository import (
    AccountRepository,
    ActivationRepository,
    InviteRepository,
    VerificationRepository,
)
from singles.domain.value import (
    AccountKind,
    ActivationId,
    ActivationStatus,
    InviteEventType,
    InviteId,
    InviteStatus,
    SubmittedProfile,
    TokenStatus,
    UserId,
)
from singles.util.password import hash_password_async

from .base import Clock, Service
from .event_service import EventLogService
from .invite_service import parse_uuid
from .notification import NotificationClient
from .profile_service import ProfileService
from .token_codec import TokenCodec

USERNAME_PREFIX = "single_"
USERNAME_MAX_LENGTH = 20
USERNAME_ATTEMPTS = 6
ACCOUNT_CREATE_ATTEMPTS = 3


@dataclass
class IssuedActivation:
    """A newly issued activation token and its link."""

    activation: ActivationToken
    activation_url: str = field(repr=False)
    token: str = field(repr=False)

    @property
    def expires_at(self) -> datetime:
        return self.activation.expires_at


@dataclass
class ActivationTokenCheck:
    """Outcome of presenting an activation token."""

    status: TokenStatus
    invite: Invite | None = None
    activation_id: ActivationId | None = None
    expires_at: datetime | None = None

    @property
    def is_valid(self) -> bool:
        return self.status == TokenStatus.VALID


@dataclass
class ActivationResult:
    """Outcome of redeeming an activation token."""

    status: ActivationStatus
    invite_id: InviteId | None = None
    user_id: UserId | None = None


class ActivationService(Service):
    """Issues activation tokens and turns approved invitees into members.

    Redemption is race-safe: the token is claimed with a single atomic
    update, so concurrent redemptions see exactly one winner.
    """

    def __init__(
        self,
        activation_repository: ActivationRepository,
        invite_repository: InviteRepository,
        account_repository: AccountRepository,
        verification_repository: VerificationRepository,
        profile_service: ProfileService,
        event_log: EventLogService,
        notification_client: NotificationClient,
        token_codec: TokenCodec,
        settings: Settings,
        clock: Clock = utcnow,
    ) -> None:
        self.activation_repository = activation_repository
        self.invite_repository = invite_repository
        self.account_repository = account_repository
        self.verification_repository = verification_repository
        self.profile_service = profile_service
        self.event_log = event_log
        self.notification_client = notification_client
        self.token_codec = token_codec
        self.settings = settings
        self.clock = clock

    async def issue_token(self, invite: Invite, actor_id: UserId) -> IssuedActivation:
        """Issue a fresh activation token, consuming any earlier one."""
        with logfire.span(
            "activation_service.issue_token", invite_id=str(invite.id)
        ):
            now = self.clock()
            activation_id = ActivationId(uuid4())
            issued = self.token_codec.issue(str(activation_id))
            activation = ActivationToken(
                id=activation_id,
                invite_id=invite.id,
                token_hash=issued.secret_hash,
                token_salt=issued.salt,
                expires_at=now
                + timedelta(hours=self.settings.invitations.activation_ttl_hours),
                created_by_user_id=actor_id,
                created_at=now,
            )
            saved = await self.activation_repository.replace_for_invite(activation, now)

            await self.event_log.record(
                invite.id,
                InviteEventType.ACTIVATION_TOKEN_CREATED,
                actor_user_id=actor_id,
                metadata={
                    "activation_id": str(activation_id),
                    "expires_at": saved.expires_at.isoformat(),
                },
            )
            return IssuedActivation(
                activation=saved,
                activation_url=self.build_activation_url(issued.combined_token),
                token=issued.combined_token,
            )

    async def verify_activation_token(self, combined_token: str) -> ActivationTokenCheck:
        """Check a presented activation token.

        Malformed tokens, unknown ids and wrong secrets all yield ``invalid``.
        """
        with logfire.span("activation_service.verify_activation_token"):
            parsed = self.token_codec.parse(combined_token)
            activation_uuid = parse_uuid(parsed[0]) if parsed else None
            if activation_uuid is None:
                return ActivationTokenCheck(status=TokenStatus.INVALID)

            activation = await self.activation_repository.find_by_id(
                ActivationId(activation_uuid)
            )
            if not activation or not self.token_codec.verify(
                combined_token, activation.token_hash, activation.token_salt
            ):
                logfire.warn("Activation token rejected", reason="lookup_or_hash")
                return ActivationTokenCheck(status=TokenStatus.INVALID)

            if activation.consumed_at is not None:
                return ActivationTokenCheck(status=TokenStatus.CONSUMED)
            if activation.is_expired(self.clock()):
                return ActivationTokenCheck(status=TokenStatus.EXPIRED)

            invite = await self.invite_repository.find_by_id(activation.invite_id)
            if not invite:
                return ActivationTokenCheck(status=TokenStatus.INVALID)
            if invite.status in (InviteStatus.AWAITING_COUPLE, InviteStatus.COMPLETED):
                return ActivationTokenCheck(status=TokenStatus.CONSUMED)
            if invite.status != InviteStatus.AWAITING_ACTIVATION:
                return ActivationTokenCheck(status=TokenStatus.INVALID)

            return ActivationTokenCheck(
                status=TokenStatus.VALID,
                invite=invite,
                activation_id=activation.id,
                expires_at=activation.expires_at,
            )

    async def complete_activation(
        self, combined_token: str, password: str
    ) -> ActivationResult:
        """Redeem an activation token and set up the single's account.

        Args:
            combined_token: The activation token from the emailed link
            password: The single's chosen password

        Returns:
            ``activated`` with the account ID, or the token outcome that
            prevented activation

        Raises:
            ValidationError: If the password is too short
            ConflictError: If the email belongs to a couple account
        """
        with logfire.span("activation_service.complete_activation"):
            check = await self.verify_activation_token(combined_token)
            if not check.is_valid:
                return ActivationResult(status=ActivationStatus(check.status.value))

            min_length = self.settings.auth.password_min_length
            if not isinstance(password, str) or len(password) < min_length:
                raise ValidationError(
                    f"Password must be at least {min_length} characters."
                )

            invite = check.invite
            existing = await self.account_repository.find_by_email(invite.invitee_email)
            if existing and existing.kind != AccountKind.SINGLE:
                logfire.warn(
                    "Activation email bound to another account kind",
                    invite_id=str(invite.id),
                    kind=existing.kind.value,
                )
                raise ConflictError(
                    "This email is already associated with a couple account."
                )

            password_hash = await hash_password_async(
                password, self.settings.auth.password_hash_rounds
            )

            now = self.clock()
            claim_id = uuid4()
            if not await self.activation_repository.consume(
                check.activation_id, now, claim_id
            ):
                logfire.info(
                    "Activation token already redeemed", invite_id=str(invite.id)
                )
                return ActivationResult(status=ActivationStatus.CONSUMED)

            try:
                user_id = await self._finish_activation(invite, password_hash, now)
            except Exception:
                await self._release_claim(check.activation_id, claim_id, invite)
                raise

            logfire.info(
                "Single activated", invite_id=str(invite.id), user_id=str(user_id)
            )
            await self._notify_admins(invite, user_id)
            return ActivationResult(
                status=ActivationStatus.ACTIVATED, invite_id=invite.id, user_id=user_id
            )

    def build_activation_url(self, combined_token: str) -> str:
        invitations = self.settings.invitations
        return f"{self.settings.api.frontend_url}{invitations.activation_path}?token={combined_token}"

    async def _finish_activation(
        self, invite: Invite, password_hash: str, now: datetime
    ) -> UserId:
        # Every step is safe to repeat, so a released token can be redeemed again
        user_id = await self._create_or_link_account(invite, password_hash, now)
        await self.invite_repository.link_invitee(invite.id, user_id, now)
        await self.event_log.record(
            invite.id, InviteEventType.USER_LINKED, actor_user_id=user_id
        )

        session = await self.verification_repository.find_by_invite(invite.id)
        submission = (
            session.submitted_profile
            if session and session.submitted_profile
            else SubmittedProfile()
        )
        await self.profile_service.hydrate_from_submission(
            user_id, invite.inviter_id, submission
        )

        await self.event_log.record(
            invite.id, InviteEventType.ACTIVATION_COMPLETED, actor_user_id=user_id
        )
        await self.invite_repository.transition(
            invite.id,
            (InviteStatus.AWAITING_ACTIVATION,),
            InviteStatus.AWAITING_COUPLE,
            now=now,
        )
        return user_id

    async def _release_claim(
        self, activation_id: ActivationId, claim_id: UUID, invite: Invite
    ) -> None:
        try:
            released = await self.activation_repository.release(activation_id, claim_id)
        except Exception as e:
            # The original failure is re-raised by the caller
            logfire.error(
                "Failed to release activation token after failed redemption",
                invite_id=str(invite.id),
                error=str(e),
            )
            return
        logfire.warn(
            "Activation failed; token released for retry",
            invite_id=str(invite.id),
            released=released,
        )

    async def _create_or_link_account(
        self, invite: Invite, password_hash: str, now: datetime
    ) -> UserId:
        """Link the single account holding the invitee email, or create one.

        A concurrent activation for the same email (another couple's invite)
        or a username taken in between surfaces as ``DuplicateError`` from
        ``add``; the email is then looked up again before retrying.

        Raises:
            ConflictError: If the email belongs to a couple account
        """
        last_error: DuplicateError | None = None
        for _ in range(ACCOUNT_CREATE_ATTEMPTS):
            existing = await self.account_repository.find_by_email(invite.invitee_email)
            if existing:
                if existing.kind != AccountKind.SINGLE:
                    raise ConflictError(
                        "This email is already associated with a couple account."
                    )
                await self.account_repository.link_single(
                    existing.id, password_hash, invite.inviter_id, now
                )
                return existing.id

            account = Account(
                id=UserId(uuid4()),
                kind=AccountKind.SINGLE,
                email=invite.invitee_email,
                username=await self._unique_username(invite.invitee_email),
                password_hash=password_hash,
                invite_source_user_id=invite.inviter_id,
                is_email_verified=True,
                created_at=now,
                updated_at=now,
            )
            try:
                saved = await self.account_repository.add(account)
            except DuplicateError as e:
                logfire.warn(
                    "Account insert collided; retrying lookup",
                    invite_id=str(invite.id),
                )
                last_error = e
                continue
            return saved.id

        raise last_error


    async def _unique_username(self, email: str) -> str:
        local_part = re.sub(r"[^a-z0-9]", "", email.split("@")[0].lower()) or "single"
        base = f"{USERNAME_PREFIX}{local_part}"[:USERNAME_MAX_LENGTH]
        candidate = base
        for _ in range(USERNAME_ATTEMPTS):
            if not await self.account_repository.username_exists(candidate):
                return candidate
            candidate = f"{base[:USERNAME_MAX_LENGTH - 4]}{secrets.randbelow(10000):04d}"
        return f"{USERNAME_PREFIX}{uuid4().hex[:10]}"

    async def _notify_admins(self, invite: Invite, user_id: UserId) -> None:
        # Account creation is already committed; a failed notification must not undo it
        try:
            await self.notification_client.notify_admin_new_member(
                {
                    "invite_id": str(invite.id),
                    "user_id": str(user_id),
                    "invitee_email": invite.invitee_email,
                    "requested_role": invite.requested_role.value,
                    "role_label": invite.requested_role.label,
                    "inviter_id": str(invite.inviter_id),
                }
            )
        except Exception as e:
            logfire.error(
                "Failed to notify admins about new single member",
                invite_id=str(invite.id),
                user_id=str(user_id),
                error=str(e),
            )
