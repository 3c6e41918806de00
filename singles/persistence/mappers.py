"""Mappers for converting between database rows and domain models.

Since we're using Pydantic domain models (immutable), we use manual mapping
instead of SQLAlchemy's classical imperative mapping.
"""

from datetime import datetime, timezone
from typing import Any, Dict, Optional
from uuid import UUID

from singles.domain.model import (
    Account,
    ActivationToken,
    Invite,
    InviteEvent,
    Review,
    SingleProfile,
    VerificationSession,
)
from singles.domain.value import (
    AccountKind,
    ActivationId,
    EventId,
    InviteEventType,
    InviteId,
    InviteStatus,
    RequestedRole,
    ReviewId,
    SessionId,
    SubmittedMedia,
    SubmittedProfile,
    UserId,
    VerificationStatus,
)


def _uuid(value: Any) -> Optional[UUID]:
    if value is None:
        return None
    return UUID(value) if isinstance(value, str) else value


def _aware(value: Optional[datetime]) -> Optional[datetime]:
    """Attach UTC to naive timestamps (drivers without timezone support)."""
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def row_to_account(row: Dict[str, Any]) -> Account:
    source = _uuid(row.get("invite_source_user_id"))
    return Account(
        id=UserId(_uuid(row["id"])),
        kind=AccountKind(row["kind"]),
        email=row["email"],
        username=row["username"],
        password_hash=row.get("password_hash"),
        invite_source_user_id=UserId(source) if source else None,
        is_email_verified=row["is_email_verified"],
        is_partner_email_verified=row["is_partner_email_verified"],
        membership_type=row.get("membership_type"),
        membership_expires_at=_aware(row.get("membership_expires_at")),
        partner1_nickname=row.get("partner1_nickname"),
        partner2_nickname=row.get("partner2_nickname"),
        created_at=_aware(row["created_at"]),
        updated_at=_aware(row["updated_at"]),
    )


def account_to_dict(account: Account) -> Dict[str, Any]:
    data = account.model_dump()
    data["kind"] = account.kind.value
    return data


def row_to_invite(row: Dict[str, Any]) -> Invite:
    """Convert database row to Invite domain model.

    Args:
        row: Database row as dict

    Returns:
        Invite domain model
    """
    invitee_user_id = _uuid(row.get("invitee_user_id"))
    return Invite(
        id=InviteId(_uuid(row["id"])),
        inviter_id=UserId(_uuid(row["inviter_id"])),
        invitee_email=row["invitee_email"],
        requested_role=RequestedRole(row["requested_role"]),
        status=InviteStatus(row["status"]),
        token_hash=bytes(row["token_hash"]),
        token_salt=bytes(row["token_salt"]),
        expires_at=_aware(row["expires_at"]),
        consumed_at=_aware(row.get("consumed_at")),
        invitee_user_id=UserId(invitee_user_id) if invitee_user_id else None,
        created_ip_address=row.get("created_ip_address"),
        created_user_agent=row.get("created_user_agent"),
        created_at=_aware(row["created_at"]),
        updated_at=_aware(row["updated_at"]),
    )


def invite_to_dict(invite: Invite) -> Dict[str, Any]:
    """Convert Invite domain model to database dict.

    Args:
        invite: Invite domain model

    Returns:
        Dict suitable for database insertion/update
    """
    data = invite.model_dump()
    data["requested_role"] = invite.requested_role.value
    data["status"] = invite.status.value
    return data


def row_to_activation(row: Dict[str, Any]) -> ActivationToken:
    created_by = _uuid(row.get("created_by_user_id"))
    return ActivationToken(
        id=ActivationId(_uuid(row["id"])),
        invite_id=InviteId(_uuid(row["invite_id"])),
        token_hash=bytes(row["token_hash"]),
        token_salt=bytes(row["token_salt"]),
        expires_at=_aware(row["expires_at"]),
        consumed_at=_aware(row.get("consumed_at")),
        created_by_user_id=UserId(created_by) if created_by else None,
        created_at=_aware(row["created_at"]),
    )


def activation_to_dict(activation: ActivationToken) -> Dict[str, Any]:
    return activation.model_dump()


def row_to_verification_session(row: Dict[str, Any]) -> VerificationSession:
    decision_user_id = _uuid(row.get("decision_user_id"))
    profile = row.get("submitted_profile")
    media = row.get("submitted_media")
    return VerificationSession(
        id=SessionId(_uuid(row["id"])),
        invite_id=InviteId(_uuid(row["invite_id"])),
        invitee_email=row["invitee_email"],
        status=VerificationStatus(row["status"]),
        submitted_profile=SubmittedProfile.model_validate(profile) if profile else None,
        submitted_media=SubmittedMedia.model_validate(media) if media else None,
        moderation_notes=row.get("moderation_notes"),
        decision_user_id=UserId(decision_user_id) if decision_user_id else None,
        decision_at=_aware(row.get("decision_at")),
        rejection_reason=row.get("rejection_reason"),
        created_at=_aware(row["created_at"]),
        updated_at=_aware(row["updated_at"]),
    )


def submission_to_json(
    submission: SubmittedProfile | SubmittedMedia | None,
) -> Optional[Dict[str, Any]]:
    return submission.model_dump(mode="json") if submission is not None else None


def row_to_profile(row: Dict[str, Any]) -> SingleProfile:
    source = _uuid(row.get("invite_source_user_id"))
    return SingleProfile(
        user_id=UserId(_uuid(row["user_id"])),
        invite_source_user_id=UserId(source) if source else None,
        nickname=row.get("nickname"),
        contact_email=row.get("contact_email"),
        country=row.get("country"),
        city=row.get("city"),
        short_bio=row.get("short_bio"),
        interests=row.get("interests"),
        play_preferences=row.get("play_preferences"),
        boundaries=row.get("boundaries"),
        availability=row.get("availability"),
        reputation_score=row.get("reputation_score"),
        trusted_count=row.get("trusted_count") or 0,
        compliance_summary=row.get("compliance_summary"),
        created_at=_aware(row["created_at"]),
        updated_at=_aware(row["updated_at"]),
    )


def profile_to_dict(profile: SingleProfile) -> Dict[str, Any]:
    return profile.model_dump()


def row_to_review(row: Dict[str, Any]) -> Review:
    return Review(
        id=ReviewId(_uuid(row["id"])),
        single_user_id=UserId(_uuid(row["single_user_id"])),
        couple_user_id=UserId(_uuid(row["couple_user_id"])),
        score=row["score"],
        comment=row.get("comment"),
        created_at=_aware(row["created_at"]),
    )


def review_to_dict(review: Review) -> Dict[str, Any]:
    return review.model_dump()


def row_to_event(row: Dict[str, Any]) -> InviteEvent:
    actor = _uuid(row.get("actor_user_id"))
    return InviteEvent(
        id=EventId(_uuid(row["id"])),
        invite_id=InviteId(_uuid(row["invite_id"])),
        event_type=InviteEventType(row["event_type"]),
        actor_user_id=UserId(actor) if actor else None,
        metadata=row.get("metadata") or {},
        created_at=_aware(row["created_at"]),
    )


def event_to_dict(event: InviteEvent) -> Dict[str, Any]:
    data = event.model_dump()
    data["event_type"] = event.event_type.value
    return data
