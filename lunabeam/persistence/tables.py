"""SQLAlchemy table definitions for LunaBeam.

These table definitions are used with SQLAlchemy Core and manual mappers.
They match the schema defined in Alembic migrations.
"""

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    Enum,
    Index,
    MetaData,
    String,
    Table,
    Text,
    UniqueConstraint,
)
from sqlalchemy.dialects.postgresql import TIMESTAMP, UUID

# Metadata object for all tables
metadata = MetaData()

# ============================================================================
# PROFILES TABLE
# ============================================================================
profiles_table = Table(
    "profiles",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    # Authentication identity; re-keyed when a placeholder profile is claimed
    Column("identity_id", UUID, nullable=False, unique=True),
    Column("first_name", String(255), nullable=False),
    Column("email", String(255), nullable=True),
    Column(
        "account_status",
        Enum(
            "active",
            "pending_user_consent",
            "user_claimed",
            name="account_status",
            create_type=False,
        ),
        nullable=False,
        server_default="active",
    ),
    Column(
        "authentication_status",
        Enum(
            "placeholder",
            "pending",
            "active",
            name="authentication_status",
            create_type=False,
        ),
        nullable=False,
        server_default="active",
    ),
    Column("password_set", Boolean, nullable=False, server_default="false"),
    Column("onboarding_complete", Boolean, nullable=False, server_default="false"),
    Column("created_by_supporter", UUID, nullable=True),
    Column("claimed_at", TIMESTAMP(timezone=True), nullable=True),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

Index("idx_profiles_email", profiles_table.c.email)

# ============================================================================
# SUPPORTERS TABLE (Circle membership)
# ============================================================================
supporters_table = Table(
    "supporters",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column("individual_id", UUID, nullable=False),
    Column("supporter_id", UUID, nullable=False),
    Column(
        "role",
        Enum(
            "individual",
            "supporter",
            "friend",
            "provider",
            "admin",
            name="user_role",
            create_type=False,
        ),
        nullable=False,
        server_default="supporter",
    ),
    Column(
        "permission_level",
        Enum("viewer", "collaborator", "admin", name="permission_level", create_type=False),
        nullable=False,
        server_default="viewer",
    ),
    Column("is_provisioner", Boolean, nullable=False, server_default="false"),
    Column("invited_by", UUID, nullable=True),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    UniqueConstraint("individual_id", "supporter_id", name="uq_supporter_relationship"),
)

Index("idx_supporters_individual_id", supporters_table.c.individual_id)
Index("idx_supporters_supporter_id", supporters_table.c.supporter_id)

# ============================================================================
# AUTH CREDENTIALS TABLE
# ============================================================================
auth_credentials_table = Table(
    "auth_credentials",
    metadata,
    Column("identity_id", UUID, primary_key=True),
    Column("email", String(255), nullable=False),
    Column("secret_hash", Text, nullable=False),  # bcrypt
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

Index("idx_auth_credentials_email", auth_credentials_table.c.email, unique=True)

# ============================================================================
# ACCOUNT CLAIMS TABLE
# ============================================================================
account_claims_table = Table(
    "account_claims",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column("token", String(255), nullable=False, unique=True),  # URL-safe token
    Column("passcode", String(12), nullable=False),
    Column("subject_id", UUID, nullable=False),  # Identity being claimed
    Column("issuer_id", UUID, nullable=True),  # Provisioning supporter
    Column("invitee_contact", String(255), nullable=False),
    Column("display_name", String(255), nullable=False),
    Column(
        "status",
        Enum(
            "pending",
            "accepted",
            "expired",
            "revoked",
            name="claim_status",
            create_type=False,
        ),
        nullable=False,
        server_default="pending",
    ),
    Column("issued_at", TIMESTAMP(timezone=True), nullable=False),
    Column("expires_at", TIMESTAMP(timezone=True), nullable=False),
    Column("claimed_at", TIMESTAMP(timezone=True), nullable=True),
    Column("claimed_identity_id", UUID, nullable=True),
    Column("revoked_at", TIMESTAMP(timezone=True), nullable=True),
    CheckConstraint("expires_at > issued_at", name="chk_claim_expiry_after_issue"),
    CheckConstraint(
        "(status = 'accepted') = (claimed_at IS NOT NULL)",
        name="chk_claim_claimed_at",
    ),
)

Index("idx_account_claims_issuer_id", account_claims_table.c.issuer_id)
Index("idx_account_claims_subject_id", account_claims_table.c.subject_id)

# Only one pending claim per subject
Index(
    "idx_account_claims_unique_pending_subject",
    account_claims_table.c.subject_id,
    unique=True,
    postgresql_where=account_claims_table.c.status == "pending",
)
