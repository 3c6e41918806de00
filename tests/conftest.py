"""Test configuration and shared helpers."""

import os
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from uuid import uuid4

# Cheap bcrypt cost for tests; must be set before Settings is first built
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("AUTH__PASSWORD_HASH_ROUNDS", "4")

from singles.config import Settings  # noqa: E402
from singles.domain.model.account import Account  # noqa: E402
from singles.domain.repository import (  # noqa: E402
    AccountRepository,
    ActivationRepository,
    InviteEventRepository,
    InviteRepository,
    ProfileRepository,
    VerificationRepository,
)
from singles.domain.service import (  # noqa: E402
    ActivationService,
    EligibilityService,
    EventLogService,
    InviteService,
    ModerationService,
    NotificationClient,
    ProfileService,
    TokenCodec,
    VerificationService,
)
from singles.domain.value import (  # noqa: E402
    AccountKind,
    MediaReference,
    SubmittedMedia,
    SubmittedProfile,
    UserId,
)


class FrozenClock:
    """Controllable clock for time-travel tests."""

    def __init__(self, now: datetime | None = None) -> None:
        self.now = now or datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> datetime:
        self.now = self.now + timedelta(**kwargs)
        return self.now


async def make_couple(
    account_repository: AccountRepository, **overrides
) -> Account:
    """Create a couple account that passes every eligibility rule by default."""
    suffix = uuid4().hex[:8]
    values = {
        "id": UserId(uuid4()),
        "kind": AccountKind.COUPLE,
        "email": f"couple-{suffix}@example.com",
        "username": f"couple_{suffix}",
        "is_email_verified": True,
        "is_partner_email_verified": True,
        "membership_type": "couple_monthly",
        "membership_expires_at": datetime(2099, 1, 1, tzinfo=timezone.utc),
        "partner1_nickname": "Alex",
        "partner2_nickname": "Sam",
    }
    values.update(overrides)
    return await account_repository.add(Account(**values))


async def make_single(account_repository: AccountRepository, **overrides) -> Account:
    suffix = uuid4().hex[:8]
    values = {
        "id": UserId(uuid4()),
        "kind": AccountKind.SINGLE,
        "email": f"single-{suffix}@example.com",
        "username": f"single_{suffix}",
        "is_email_verified": True,
    }
    values.update(overrides)
    return await account_repository.add(Account(**values))


def make_profile(**overrides) -> SubmittedProfile:
    values = {
        "nickname": "Robin",
        "contact_email": "Robin@Example.com",
        "country": "Spain",
        "city": "Valencia",
        "short_bio": "  Friendly and curious.  ",
        "consent_acknowledged": True,
    }
    values.update(overrides)
    return SubmittedProfile(**values)


def make_media() -> SubmittedMedia:
    return SubmittedMedia(
        identity_documents=[MediaReference(id="doc-1", url="https://cdn.example.com/doc-1")],
        selfies=[MediaReference(id="selfie-1", url="https://cdn.example.com/selfie-1")],
    )


@dataclass
class Services:
    """Domain services sharing one clock and the environment's repositories."""

    invites: InviteService
    verification: VerificationService
    moderation: ModerationService
    activation: ActivationService
    profiles: ProfileService
    eligibility: EligibilityService
    events: EventLogService


async def build_services(env, clock) -> Services:
    """Wire domain services by hand so tests can control time."""
    settings = await env.get(Settings)
    codec = await env.get(TokenCodec)
    accounts = await env.get(AccountRepository)
    invites = await env.get(InviteRepository)
    activations = await env.get(ActivationRepository)
    sessions = await env.get(VerificationRepository)

    events = EventLogService(await env.get(InviteEventRepository), clock=clock)
    eligibility = EligibilityService(accounts, clock=clock)
    profiles = ProfileService(await env.get(ProfileRepository), clock=clock)
    activation = ActivationService(
        activation_repository=activations,
        invite_repository=invites,
        account_repository=accounts,
        verification_repository=sessions,
        profile_service=profiles,
        event_log=events,
        notification_client=await env.get(NotificationClient),
        token_codec=codec,
        settings=settings,
        clock=clock,
    )
    return Services(
        invites=InviteService(
            invites, activations, eligibility, events, codec, settings, clock=clock
        ),
        verification=VerificationService(sessions, invites, events, clock=clock),
        moderation=ModerationService(
            invites, sessions, activations, activation, eligibility, events, clock=clock
        ),
        activation=activation,
        profiles=profiles,
        eligibility=eligibility,
        events=events,
    )


async def submit_for_review(services: Services, inviter: Account, **profile_overrides):
    """Create an invite and walk it through profile and media submission.

    Returns:
        The CreatedInvite and the verification session under review
    """
    created = await services.invites.create_invite(
        inviter.id, "robin@example.com", "single_female"
    )
    await services.verification.submit_profile(
        created.invite, make_profile(**profile_overrides)
    )
    check = await services.invites.verify_invite_token(created.token)
    session = await services.verification.submit_media(check.invite, make_media())
    return created, session
