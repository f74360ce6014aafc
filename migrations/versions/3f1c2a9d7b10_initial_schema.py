"""initial_schema

Create the account claim schema for LunaBeam:
- Profiles (one per identity, placeholders for provisioned accounts)
- Supporters (circle membership, provisioner flag)
- Auth credentials (bcrypt password hashes)
- Account claims (token + passcode, one pending claim per subject)

Revision ID: 3f1c2a9d7b10
Revises:
Create Date: 2025-11-03 10:12:44.318205

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = "3f1c2a9d7b10"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

_ENUMS = {
    "account_status": ("active", "pending_user_consent", "user_claimed"),
    "authentication_status": ("placeholder", "pending", "active"),
    "user_role": ("individual", "supporter", "friend", "provider", "admin"),
    "permission_level": ("viewer", "collaborator", "admin"),
    "claim_status": ("pending", "accepted", "expired", "revoked"),
}


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
    op.execute('CREATE EXTENSION IF NOT EXISTS "uuid-ossp"')

    # Create ENUM types (idempotent)
    for name, values in _ENUMS.items():
        labels = ", ".join(f"'{v}'" for v in values)
        op.execute(f"""
            DO $$ BEGIN
                CREATE TYPE {name} AS ENUM ({labels});
            EXCEPTION
                WHEN duplicate_object THEN null;
            END $$;
        """)

    # ========================================================================
    # PROFILES
    # ========================================================================
    op.create_table(
        "profiles",
        sa.Column(
            "id",
            sa.UUID(),
            server_default=sa.text("uuid_generate_v4()"),
            nullable=False,
        ),
        sa.Column("identity_id", sa.UUID(), nullable=False, unique=True),
        sa.Column("first_name", sa.String(255), nullable=False),
        sa.Column("email", sa.String(255), nullable=True),
        sa.Column(
            "account_status",
            postgresql.ENUM(
                *_ENUMS["account_status"], name="account_status", create_type=False
            ),
            nullable=False,
            server_default="active",
        ),
        sa.Column(
            "authentication_status",
            postgresql.ENUM(
                *_ENUMS["authentication_status"], name="authentication_status", create_type=False
            ),
            nullable=False,
            server_default="active",
        ),
        sa.Column(
            "password_set", sa.Boolean(), nullable=False, server_default="false"
        ),
        sa.Column(
            "onboarding_complete",
            sa.Boolean(),
            nullable=False,
            server_default="false",
        ),
        sa.Column("created_by_supporter", sa.UUID(), nullable=True),
        sa.Column("claimed_at", sa.TIMESTAMP(timezone=True), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("idx_profiles_email", "profiles", ["email"])

    # ========================================================================
    # SUPPORTERS
    # ========================================================================
    op.create_table(
        "supporters",
        sa.Column(
            "id",
            sa.UUID(),
            server_default=sa.text("uuid_generate_v4()"),
            nullable=False,
        ),
        sa.Column("individual_id", sa.UUID(), nullable=False),
        sa.Column("supporter_id", sa.UUID(), nullable=False),
        sa.Column(
            "role",
            postgresql.ENUM(
                *_ENUMS["user_role"], name="user_role", create_type=False
            ),
            nullable=False,
            server_default="supporter",
        ),
        sa.Column(
            "permission_level",
            postgresql.ENUM(
                *_ENUMS["permission_level"], name="permission_level", create_type=False
            ),
            nullable=False,
            server_default="viewer",
        ),
        sa.Column(
            "is_provisioner", sa.Boolean(), nullable=False, server_default="false"
        ),
        sa.Column("invited_by", sa.UUID(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint(
            "individual_id", "supporter_id", name="uq_supporter_relationship"
        ),
    )
    op.create_index("idx_supporters_individual_id", "supporters", ["individual_id"])
    op.create_index("idx_supporters_supporter_id", "supporters", ["supporter_id"])

    # ========================================================================
    # AUTH CREDENTIALS
    # ========================================================================
    op.create_table(
        "auth_credentials",
        sa.Column("identity_id", sa.UUID(), nullable=False),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("secret_hash", sa.Text(), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("identity_id"),
    )
    op.create_index(
        "idx_auth_credentials_email", "auth_credentials", ["email"], unique=True
    )

    # ========================================================================
    # ACCOUNT CLAIMS
    # ========================================================================
    op.create_table(
        "account_claims",
        sa.Column(
            "id",
            sa.UUID(),
            server_default=sa.text("uuid_generate_v4()"),
            nullable=False,
        ),
        sa.Column("token", sa.String(255), nullable=False, unique=True),
        sa.Column("passcode", sa.String(12), nullable=False),
        sa.Column("subject_id", sa.UUID(), nullable=False),
        sa.Column("issuer_id", sa.UUID(), nullable=True),
        sa.Column("invitee_contact", sa.String(255), nullable=False),
        sa.Column("display_name", sa.String(255), nullable=False),
        sa.Column(
            "status",
            postgresql.ENUM(
                *_ENUMS["claim_status"], name="claim_status", create_type=False
            ),
            nullable=False,
            server_default="pending",
        ),
        sa.Column("issued_at", sa.TIMESTAMP(timezone=True), nullable=False),
        sa.Column("expires_at", sa.TIMESTAMP(timezone=True), nullable=False),
        sa.Column("claimed_at", sa.TIMESTAMP(timezone=True), nullable=True),
        sa.Column("claimed_identity_id", sa.UUID(), nullable=True),
        sa.Column("revoked_at", sa.TIMESTAMP(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint("id"),
        sa.CheckConstraint(
            "expires_at > issued_at", name="chk_claim_expiry_after_issue"
        ),
        sa.CheckConstraint(
            "(status = 'accepted') = (claimed_at IS NOT NULL)",
            name="chk_claim_claimed_at",
        ),
    )
    op.create_index("idx_account_claims_issuer_id", "account_claims", ["issuer_id"])
    op.create_index(
        "idx_account_claims_subject_id", "account_claims", ["subject_id"]
    )

    # Partial unique constraint: only one pending claim per subject
    op.execute("""
        CREATE UNIQUE INDEX idx_account_claims_unique_pending_subject
        ON account_claims (subject_id)
        WHERE status = 'pending'
    """)

    # ========================================================================
    # TRIGGERS
    # ========================================================================
    op.execute("""
        CREATE OR REPLACE FUNCTION update_updated_at_column()
        RETURNS TRIGGER AS $$
        BEGIN
            NEW.updated_at = NOW();
            RETURN NEW;
        END;
        $$ LANGUAGE plpgsql
    """)

    for table in ("profiles", "supporters", "auth_credentials"):
        op.execute(f"""
            CREATE TRIGGER update_{table}_updated_at
            BEFORE UPDATE ON {table}
            FOR EACH ROW EXECUTE FUNCTION update_updated_at_column()
        """)


def downgrade() -> None:
    """Downgrade schema."""
    for table in ("profiles", "supporters", "auth_credentials"):
        op.execute(f"DROP TRIGGER IF EXISTS update_{table}_updated_at ON {table}")
    op.execute("DROP FUNCTION IF EXISTS update_updated_at_column()")

    op.drop_table("account_claims")
    op.drop_table("auth_credentials")
    op.drop_table("supporters")
    op.drop_table("profiles")

    for name in reversed(list(_ENUMS)):
        op.execute(f"DROP TYPE IF EXISTS {name}")
