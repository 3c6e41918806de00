"""Member account entity."""

from datetime import datetime
from typing import Optional

from pydantic import Field

from singles.domain.model.common import DomainModel, utcnow
from singles.domain.value import AccountKind, UserId

DEFAULT_COUPLE_NAME = "A DateAstrum couple"


class Account(DomainModel):
    """Member account, either a couple or a single.

    Membership and email verification are owned by other parts of the
    platform; onboarding only reads them.
    """

    id: UserId
    kind: AccountKind
    email: str
    username: str
    password_hash: Optional[str] = Field(default=None, repr=False)
    invite_source_user_id: Optional[UserId] = None
    is_email_verified: bool = False
    is_partner_email_verified: bool = False
    membership_type: Optional[str] = None
    membership_expires_at: Optional[datetime] = None
    partner1_nickname: Optional[str] = None
    partner2_nickname: Optional[str] = None
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)

    @property
    def display_name(self) -> str:
        """Name shown to invitees, e.g. "Alex & Sam"."""
        first = (self.partner1_nickname or "").strip()
        second = (self.partner2_nickname or "").strip()
        if first and second:
            return f"{first} & {second}"
        if first or second:
            return first or second
        return self.username or self.email or DEFAULT_COUPLE_NAME

    def has_active_membership(self, now: datetime) -> bool:
        plan = (self.membership_type or "").strip().lower()
        if not plan or plan == "free":
            return False
        if self.membership_expires_at is not None and self.membership_expires_at <= now:
            return False
        return True
