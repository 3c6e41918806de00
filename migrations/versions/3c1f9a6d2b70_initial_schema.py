"""initial_schema

Create the schema for single member onboarding:
- Accounts (couples and singles)
- Invites (split-token invites with lifecycle status)
- Invite activations (post-approval activation tokens)
- Verification sessions (submitted profile and media, one per invite)
- Single profiles
- Reviews (one per couple and single)
- Invite events (append-only audit trail)

Revision ID: 3c1f9a6d2b70
Revises:
Create Date: 2026-10-18 09:12:44.518203

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = "3c1f9a6d2b70"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.Column(
            "updated_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
    ]


def upgrade() -> None:
    """Upgrade schema."""
    # ========================================================================
    # ACCOUNTS table
    # ========================================================================
    op.create_table(
        "accounts",
        sa.Column("id", sa.UUID(), nullable=False),
        sa.Column("kind", sa.String(20), nullable=False),  # 'couple', 'single'
        sa.Column("email", sa.String(320), nullable=False),
        sa.Column("username", sa.String(50), nullable=False),
        sa.Column("password_hash", sa.String(255), nullable=True),
        sa.Column("invite_source_user_id", sa.UUID(), nullable=True),
        sa.Column(
            "is_email_verified", sa.Boolean(), nullable=False, server_default="false"
        ),
        sa.Column(
            "is_partner_email_verified",
            sa.Boolean(),
            nullable=False,
            server_default="false",
        ),
        sa.Column("membership_type", sa.String(50), nullable=True),
        sa.Column("membership_expires_at", sa.TIMESTAMP(timezone=True), nullable=True),
        sa.Column("partner1_nickname", sa.String(120), nullable=True),
        sa.Column("partner2_nickname", sa.String(120), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(
            ["invite_source_user_id"], ["accounts.id"], ondelete="SET NULL"
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("email", name="uq_accounts_email"),
        sa.UniqueConstraint("username", name="uq_accounts_username"),
    )

    # ========================================================================
    # INVITES table
    # ========================================================================
    op.create_table(
        "invites",
        sa.Column("id", sa.UUID(), nullable=False),
        sa.Column("inviter_id", sa.UUID(), nullable=False),
        sa.Column("invitee_email", sa.String(320), nullable=False),
        sa.Column("requested_role", sa.String(20), nullable=False),
        sa.Column("status", sa.String(30), nullable=False),
        sa.Column("token_hash", sa.LargeBinary(32), nullable=False),
        sa.Column("token_salt", sa.LargeBinary(16), nullable=False),
        sa.Column("expires_at", sa.TIMESTAMP(timezone=True), nullable=False),
        sa.Column("consumed_at", sa.TIMESTAMP(timezone=True), nullable=True),
        sa.Column("invitee_user_id", sa.UUID(), nullable=True),
        sa.Column("created_ip_address", sa.String(64), nullable=True),
        sa.Column("created_user_agent", sa.String(512), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(["inviter_id"], ["accounts.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(
            ["invitee_user_id"], ["accounts.id"], ondelete="SET NULL"
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "idx_invites_inviter_status", "invites", ["inviter_id", "status"]
    )
    op.create_index(
        "idx_invites_status_updated", "invites", ["status", "updated_at"]
    )

    # ========================================================================
    # INVITE_ACTIVATIONS table
    # ========================================================================
    op.create_table(
        "invite_activations",
        sa.Column("id", sa.UUID(), nullable=False),
        sa.Column("invite_id", sa.UUID(), nullable=False),
        sa.Column("token_hash", sa.LargeBinary(32), nullable=False),
        sa.Column("token_salt", sa.LargeBinary(16), nullable=False),
        sa.Column("expires_at", sa.TIMESTAMP(timezone=True), nullable=False),
        sa.Column("consumed_at", sa.TIMESTAMP(timezone=True), nullable=True),
        # Redemption that holds the token; lets a retried claim recognise itself
        sa.Column("consumed_claim_id", sa.UUID(), nullable=True),
        sa.Column("created_by_user_id", sa.UUID(), nullable=True),
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.ForeignKeyConstraint(["invite_id"], ["invites.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(
            ["created_by_user_id"], ["accounts.id"], ondelete="SET NULL"
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "idx_invite_activations_invite_id", "invite_activations", ["invite_id"]
    )

    # ========================================================================
    # VERIFICATION_SESSIONS table (one per invite)
    # ========================================================================
    op.create_table(
        "verification_sessions",
        sa.Column("id", sa.UUID(), nullable=False),
        sa.Column("invite_id", sa.UUID(), nullable=False),
        sa.Column("invitee_email", sa.String(320), nullable=False),
        sa.Column("status", sa.String(30), nullable=False),
        sa.Column(
            "submitted_profile", postgresql.JSONB(astext_type=sa.Text()), nullable=True
        ),
        sa.Column(
            "submitted_media", postgresql.JSONB(astext_type=sa.Text()), nullable=True
        ),
        sa.Column("moderation_notes", sa.Text(), nullable=True),
        sa.Column("decision_user_id", sa.UUID(), nullable=True),
        sa.Column("decision_at", sa.TIMESTAMP(timezone=True), nullable=True),
        sa.Column("rejection_reason", sa.Text(), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(["invite_id"], ["invites.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(
            ["decision_user_id"], ["accounts.id"], ondelete="SET NULL"
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("invite_id", name="uq_verification_sessions_invite"),
    )

    # ========================================================================
    # SINGLE_PROFILES table
    # ========================================================================
    op.create_table(
        "single_profiles",
        sa.Column("user_id", sa.UUID(), nullable=False),
        sa.Column("invite_source_user_id", sa.UUID(), nullable=True),
        sa.Column("nickname", sa.String(120), nullable=True),
        sa.Column("contact_email", sa.String(320), nullable=True),
        sa.Column("country", sa.String(120), nullable=True),
        sa.Column("city", sa.String(120), nullable=True),
        sa.Column("short_bio", sa.String(600), nullable=True),
        sa.Column("interests", sa.String(500), nullable=True),
        sa.Column("play_preferences", sa.String(500), nullable=True),
        sa.Column("boundaries", sa.String(500), nullable=True),
        sa.Column(
            "availability", postgresql.JSONB(astext_type=sa.Text()), nullable=True
        ),
        sa.Column("reputation_score", sa.Float(), nullable=True),
        sa.Column("trusted_count", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("compliance_summary", sa.Text(), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(["user_id"], ["accounts.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(
            ["invite_source_user_id"], ["accounts.id"], ondelete="SET NULL"
        ),
        sa.PrimaryKeyConstraint("user_id"),
    )

    # ========================================================================
    # REVIEWS table
    # ========================================================================
    op.create_table(
        "reviews",
        sa.Column("id", sa.UUID(), nullable=False),
        sa.Column("single_user_id", sa.UUID(), nullable=False),
        sa.Column("couple_user_id", sa.UUID(), nullable=False),
        sa.Column("score", sa.Integer(), nullable=False),
        sa.Column("comment", sa.String(1000), nullable=True),
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.ForeignKeyConstraint(
            ["single_user_id"], ["accounts.id"], ondelete="CASCADE"
        ),
        sa.ForeignKeyConstraint(
            ["couple_user_id"], ["accounts.id"], ondelete="CASCADE"
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("single_user_id", "couple_user_id", name="uq_reviews_pair"),
        sa.CheckConstraint("score >= 1 AND score <= 5", name="ck_reviews_score_range"),
    )
    op.create_index("idx_reviews_single_user_id", "reviews", ["single_user_id"])

    # ========================================================================
    # INVITE_EVENTS table (append-only)
    # ========================================================================
    op.create_table(
        "invite_events",
        sa.Column("id", sa.UUID(), nullable=False),
        sa.Column("invite_id", sa.UUID(), nullable=False),
        sa.Column("event_type", sa.String(64), nullable=False),
        sa.Column("actor_user_id", sa.UUID(), nullable=True),
        sa.Column(
            "metadata",
            postgresql.JSONB(astext_type=sa.Text()),
            nullable=False,
            server_default=sa.text("'{}'::jsonb"),
        ),
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.ForeignKeyConstraint(["invite_id"], ["invites.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(
            ["actor_user_id"], ["accounts.id"], ondelete="SET NULL"
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "idx_invite_events_invite_created",
        "invite_events",
        ["invite_id", "created_at"],
    )


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index("idx_invite_events_invite_created", table_name="invite_events")
    op.drop_table("invite_events")
    op.drop_index("idx_reviews_single_user_id", table_name="reviews")
    op.drop_table("reviews")
    op.drop_table("single_profiles")
    op.drop_table("verification_sessions")
    op.drop_index("idx_invite_activations_invite_id", table_name="invite_activations")
    op.drop_table("invite_activations")
    op.drop_index("idx_invites_status_updated", table_name="invites")
    op.drop_index("idx_invites_inviter_status", table_name="invites")
    op.drop_table("invites")
    op.drop_table("accounts")
