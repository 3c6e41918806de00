"""Single profile entity."""

from datetime import datetime
from typing import Any, Optional

from pydantic import Field

from singles.domain.model.common import DomainModel, utcnow
from singles.domain.value import UserId


class SingleProfile(DomainModel):
    """Public profile of an activated single member.

    Created from the moderated submission when activation completes and
    editable by the owning single afterwards.
    """

    user_id: UserId
    invite_source_user_id: Optional[UserId] = None  # Weak reference to inviting couple
    nickname: Optional[str] = None
    contact_email: Optional[str] = None
    country: Optional[str] = None
    city: Optional[str] = None
    short_bio: Optional[str] = None
    interests: Optional[str] = None
    play_preferences: Optional[str] = None
    boundaries: Optional[str] = None
    availability: Any = None
    reputation_score: Optional[float] = None
    trusted_count: int = 0
    compliance_summary: Optional[str] = None
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)
