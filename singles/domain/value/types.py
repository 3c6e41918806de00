"""Domain value objects for single member onboarding.

Value objects are immutable and defined by their values, not identity.
They encapsulate validation rules and business logic.
"""

import json
import re
from enum import Enum
from typing import Any

from pydantic import Field, field_validator

from singles.domain.value.common import RootValueObject, ValueObject, clean_text

EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


class RequestedRole(str, Enum):
    """Role a couple invites a single into."""

    SINGLE_MALE = "single_male"
    SINGLE_FEMALE = "single_female"

    @property
    def label(self) -> str:
        """Human readable label used in notifications."""
        return _ROLE_LABELS[self]


_ROLE_LABELS = {
    RequestedRole.SINGLE_MALE: "Bull Invite",
    RequestedRole.SINGLE_FEMALE: "Unicorn Invite",
}


class InviteStatus(str, Enum):
    """Lifecycle status of an invite.

    pending -> awaiting_verification -> awaiting_activation -> awaiting_couple
    -> completed, with revoked/declined/expired reachable from any
    non-terminal status.
    """

    PENDING = "pending"
    AWAITING_VERIFICATION = "awaiting_verification"
    AWAITING_ACTIVATION = "awaiting_activation"
    AWAITING_COUPLE = "awaiting_couple"
    COMPLETED = "completed"
    REVOKED = "revoked"
    DECLINED = "declined"
    EXPIRED = "expired"

    @property
    def is_terminal(self) -> bool:
        return self in TERMINAL_INVITE_STATUSES


ACTIVE_INVITE_STATUSES = frozenset(
    {
        InviteStatus.PENDING,
        InviteStatus.AWAITING_VERIFICATION,
        InviteStatus.AWAITING_ACTIVATION,
        InviteStatus.AWAITING_COUPLE,
    }
)

TERMINAL_INVITE_STATUSES = frozenset(
    {
        InviteStatus.COMPLETED,
        InviteStatus.REVOKED,
        InviteStatus.DECLINED,
        InviteStatus.EXPIRED,
    }
)


class VerificationStatus(str, Enum):
    """Status of the invitee's verification session."""

    AWAITING_PROFILE = "awaiting_profile"
    AWAITING_UPLOADS = "awaiting_uploads"
    UNDER_REVIEW = "under_review"
    APPROVED = "approved"
    REJECTED = "rejected"


class AccountKind(str, Enum):
    """Kind of member account."""

    COUPLE = "couple"
    SINGLE = "single"


class TokenStatus(str, Enum):
    """Outcome of presenting an invite or activation token."""

    VALID = "valid"
    EXPIRED = "expired"
    CONSUMED = "consumed"
    INVALID = "invalid"


class ActivationStatus(str, Enum):
    """Outcome of redeeming an activation token."""

    ACTIVATED = "activated"
    EXPIRED = "expired"
    CONSUMED = "consumed"
    INVALID = "invalid"


class InviteEventType(str, Enum):
    """Audit trail event types, keyed by invite."""

    CREATED = "invite.created"
    APPROVED = "invite.approved"
    ACTIVATION_TOKEN_CREATED = "invite.activation_token_created"
    USER_LINKED = "invite.user_linked"
    ACTIVATION_COMPLETED = "invite.activation_completed"
    COMPLETED = "invite.completed"
    REVOKED = "invite.revoked"
    DECLINED = "invite.declined"
    EXPIRED = "invite.expired"
    PROFILE_SAVED = "verification.profile_saved"
    MEDIA_SAVED = "verification.media_saved"
    VERIFICATION_REJECTED = "verification.rejected"


class Email(RootValueObject[str]):
    """Normalized email address (trimmed, lowercased)."""

    @field_validator("root", mode="before")
    @classmethod
    def normalize_email(cls, v: Any) -> str:
        if not isinstance(v, str):
            raise ValueError("Email must be a string")
        v = v.strip().lower()
        if len(v) > 320 or not EMAIL_PATTERN.match(v):
            raise ValueError("Invalid email address")
        return v


class MediaReference(ValueObject):
    """Opaque reference to an uploaded blob (identity document, selfie, video)."""

    id: str = Field(min_length=1, max_length=200)
    url: str = Field(min_length=1, max_length=2048)
    label: str | None = Field(default=None, max_length=120)

    @field_validator("id", "url", "label", mode="before")
    @classmethod
    def strip_text(cls, v: Any) -> Any:
        return clean_text(v)


class SubmittedMedia(ValueObject):
    """Media references submitted for moderator review."""

    identity_documents: list[MediaReference] = Field(default_factory=list, max_length=10)
    verification_video: MediaReference | None = None
    selfies: list[MediaReference] = Field(default_factory=list, max_length=10)

    def is_empty(self) -> bool:
        return (
            not self.identity_documents
            and self.verification_video is None
            and not self.selfies
        )


class ProfileFields(ValueObject):
    """Free-text profile fields shared by submissions and self-service edits.

    Text is trimmed and blank values become None. Contact email is
    lowercased. Availability accepts structured data or a JSON string.
    """

    nickname: str | None = Field(default=None, max_length=120)
    contact_email: str | None = Field(default=None, max_length=320)
    short_bio: str | None = Field(default=None, max_length=600)
    interests: str | None = Field(default=None, max_length=500)
    play_preferences: str | None = Field(default=None, max_length=500)
    boundaries: str | None = Field(default=None, max_length=500)
    availability: Any = None

    @field_validator(
        "nickname", "short_bio", "interests", "play_preferences", "boundaries",
        mode="before",
    )
    @classmethod
    def strip_text(cls, v: Any) -> Any:
        return clean_text(v)

    @field_validator("contact_email", mode="before")
    @classmethod
    def normalize_contact_email(cls, v: Any) -> Any:
        v = clean_text(v)
        return v.lower() if isinstance(v, str) else v

    @field_validator("availability", mode="before")
    @classmethod
    def parse_availability(cls, v: Any) -> Any:
        if isinstance(v, str):
            v = v.strip()
            if not v:
                return None
            try:
                return json.loads(v)
            except json.JSONDecodeError:
                return v
        return v


class SubmittedProfile(ProfileFields):
    """Profile submitted by the invitee during verification."""

    country: str | None = Field(default=None, max_length=120)
    city: str | None = Field(default=None, max_length=120)
    consent_acknowledged: bool = False

    @field_validator("country", "city", mode="before")
    @classmethod
    def strip_location(cls, v: Any) -> Any:
        return clean_text(v)

    def missing_required_fields(self) -> list[str]:
        """Names of required fields that are absent or invalid."""
        missing = []
        if not self.nickname:
            missing.append("nickname")
        if not self.contact_email or not EMAIL_PATTERN.match(self.contact_email):
            missing.append("contact_email")
        if not self.country:
            missing.append("country")
        if not self.city:
            missing.append("city")
        return missing


class ProfileUpdate(ProfileFields):
    """Partial profile edit by the owning single.

    Only fields present in ``model_fields_set`` are applied.
    """
