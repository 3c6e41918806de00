"""SQLAlchemy table definitions for single member onboarding.

Core tables only; rows are mapped to frozen domain models in mappers.py.
They match the schema defined in Alembic migrations.
"""

from sqlalchemy import (
    JSON,
    Boolean,
    CheckConstraint,
    Column,
    DateTime,
    Float,
    ForeignKey,
    Index,
    Integer,
    LargeBinary,
    MetaData,
    String,
    Table,
    Text,
    UniqueConstraint,
    Uuid,
    func,
)
from sqlalchemy.dialects.postgresql import JSONB

# Metadata object for all tables
metadata = MetaData()

# JSONB on PostgreSQL, plain JSON elsewhere
JSONType = JSON().with_variant(JSONB(), "postgresql")


def _timestamp(name: str, nullable: bool = False) -> Column:
    return Column(
        name,
        DateTime(timezone=True),
        nullable=nullable,
        server_default=None if nullable else func.now(),
    )


# ============================================================================
# ACCOUNTS TABLE (couples and singles)
# ============================================================================
accounts_table = Table(
    "accounts",
    metadata,
    Column("id", Uuid, primary_key=True),
    Column("kind", String(20), nullable=False),  # 'couple', 'single'
    Column("email", String(320), nullable=False, unique=True),
    Column("username", String(50), nullable=False, unique=True),
    Column("password_hash", String(255), nullable=True),
    Column(
        "invite_source_user_id",
        Uuid,
        ForeignKey("accounts.id", ondelete="SET NULL"),
        nullable=True,
    ),
    Column("is_email_verified", Boolean, nullable=False, server_default="false"),
    Column("is_partner_email_verified", Boolean, nullable=False, server_default="false"),
    Column("membership_type", String(50), nullable=True),
    _timestamp("membership_expires_at", nullable=True),
    Column("partner1_nickname", String(120), nullable=True),
    Column("partner2_nickname", String(120), nullable=True),
    _timestamp("created_at"),
    _timestamp("updated_at"),
)

# ============================================================================
# INVITES TABLE
# ============================================================================
invites_table = Table(
    "invites",
    metadata,
    Column("id", Uuid, primary_key=True),
    Column(
        "inviter_id", Uuid, ForeignKey("accounts.id", ondelete="CASCADE"), nullable=False
    ),
    Column("invitee_email", String(320), nullable=False),
    Column("requested_role", String(20), nullable=False),
    Column("status", String(30), nullable=False),
    Column("token_hash", LargeBinary(32), nullable=False),  # sha256(secret + salt)
    Column("token_salt", LargeBinary(16), nullable=False),
    _timestamp("expires_at"),
    _timestamp("consumed_at", nullable=True),
    Column(
        "invitee_user_id",
        Uuid,
        ForeignKey("accounts.id", ondelete="SET NULL"),
        nullable=True,
    ),
    Column("created_ip_address", String(64), nullable=True),
    Column("created_user_agent", String(512), nullable=True),
    _timestamp("created_at"),
    _timestamp("updated_at"),
)

Index("idx_invites_inviter_status", invites_table.c.inviter_id, invites_table.c.status)
Index("idx_invites_status_updated", invites_table.c.status, invites_table.c.updated_at)

# ============================================================================
# INVITE ACTIVATIONS TABLE
# ============================================================================
invite_activations_table = Table(
    "invite_activations",
    metadata,
    Column("id", Uuid, primary_key=True),
    Column(
        "invite_id", Uuid, ForeignKey("invites.id", ondelete="CASCADE"), nullable=False
    ),
    Column("token_hash", LargeBinary(32), nullable=False),
    Column("token_salt", LargeBinary(16), nullable=False),
    _timestamp("expires_at"),
    _timestamp("consumed_at", nullable=True),
    Column("consumed_claim_id", Uuid, nullable=True),
    Column(
        "created_by_user_id",
        Uuid,
        ForeignKey("accounts.id", ondelete="SET NULL"),
        nullable=True,
    ),
    _timestamp("created_at"),
)

Index("idx_invite_activations_invite_id", invite_activations_table.c.invite_id)

# ============================================================================
# VERIFICATION SESSIONS TABLE (one per invite)
# ============================================================================
verification_sessions_table = Table(
    "verification_sessions",
    metadata,
    Column("id", Uuid, primary_key=True),
    Column(
        "invite_id",
        Uuid,
        ForeignKey("invites.id", ondelete="CASCADE"),
        nullable=False,
        unique=True,
    ),
    Column("invitee_email", String(320), nullable=False),
    Column("status", String(30), nullable=False),
    Column("submitted_profile", JSONType, nullable=True),
    Column("submitted_media", JSONType, nullable=True),
    Column("moderation_notes", Text, nullable=True),
    Column(
        "decision_user_id",
        Uuid,
        ForeignKey("accounts.id", ondelete="SET NULL"),
        nullable=True,
    ),
    _timestamp("decision_at", nullable=True),
    Column("rejection_reason", Text, nullable=True),
    _timestamp("created_at"),
    _timestamp("updated_at"),
)

# ============================================================================
# SINGLE PROFILES TABLE
# ============================================================================
single_profiles_table = Table(
    "single_profiles",
    metadata,
    Column(
        "user_id", Uuid, ForeignKey("accounts.id", ondelete="CASCADE"), primary_key=True
    ),
    Column(
        "invite_source_user_id",
        Uuid,
        ForeignKey("accounts.id", ondelete="SET NULL"),
        nullable=True,
    ),
    Column("nickname", String(120), nullable=True),
    Column("contact_email", String(320), nullable=True),
    Column("country", String(120), nullable=True),
    Column("city", String(120), nullable=True),
    Column("short_bio", String(600), nullable=True),
    Column("interests", String(500), nullable=True),
    Column("play_preferences", String(500), nullable=True),
    Column("boundaries", String(500), nullable=True),
    Column("availability", JSONType, nullable=True),
    Column("reputation_score", Float, nullable=True),
    Column("trusted_count", Integer, nullable=False, server_default="0"),
    Column("compliance_summary", Text, nullable=True),
    _timestamp("created_at"),
    _timestamp("updated_at"),
)

# ============================================================================
# REVIEWS TABLE
# ============================================================================
reviews_table = Table(
    "reviews",
    metadata,
    Column("id", Uuid, primary_key=True),
    Column(
        "single_user_id",
        Uuid,
        ForeignKey("accounts.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column(
        "couple_user_id",
        Uuid,
        ForeignKey("accounts.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column("score", Integer, nullable=False),
    Column("comment", String(1000), nullable=True),
    _timestamp("created_at"),
    CheckConstraint("score >= 1 AND score <= 5", name="ck_reviews_score_range"),
    UniqueConstraint("single_user_id", "couple_user_id", name="uq_reviews_pair"),
)

Index("idx_reviews_single_user_id", reviews_table.c.single_user_id)

# ============================================================================
# INVITE EVENTS TABLE (append-only audit trail)
# ============================================================================
invite_events_table = Table(
    "invite_events",
    metadata,
    Column("id", Uuid, primary_key=True),
    Column(
        "invite_id", Uuid, ForeignKey("invites.id", ondelete="CASCADE"), nullable=False
    ),
    Column("event_type", String(64), nullable=False),
    Column(
        "actor_user_id",
        Uuid,
        ForeignKey("accounts.id", ondelete="SET NULL"),
        nullable=True,
    ),
    Column("metadata", JSONType, nullable=False),
    _timestamp("created_at"),
)

Index(
    "idx_invite_events_invite_created",
    invite_events_table.c.invite_id,
    invite_events_table.c.created_at,
)
