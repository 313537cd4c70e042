"""SQLAlchemy table definitions for Picket.

They match the schema defined in the Alembic migrations.
"""

from sqlalchemy import (
    BigInteger,
    Column,
    Enum,
    ForeignKey,
    Index,
    MetaData,
    String,
    Table,
    Text,
)
from sqlalchemy.dialects.postgresql import TIMESTAMP, UUID

metadata = MetaData()

ROLE_ENUM = Enum("member", "picketer", "admin", name="user_role", create_type=False)

# ============================================================================
# USERS TABLE (active credentials)
# ============================================================================
users_table = Table(
    "users",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column("name", String(255), nullable=False),
    Column("surname", String(255), nullable=False),
    Column("patronymic", String(255), nullable=False),
    Column("email", String(254), nullable=False),  # Stored lower-cased
    Column("password_hash", String(255), nullable=False),
    Column("role", ROLE_ENUM, nullable=False),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

# Email uniqueness is enforced here, never by a read-then-write in code
Index("uq_users_email", users_table.c.email, unique=True)

# ============================================================================
# ARCHIVED USERS TABLE
# ============================================================================
archived_users_table = Table(
    "archived_users",
    metadata,
    Column("id", UUID, primary_key=True),
    Column("name", String(255), nullable=False),
    Column("surname", String(255), nullable=False),
    Column("patronymic", String(255), nullable=False),
    Column("email", String(254), nullable=False),  # Not unique: may be reused
    Column("password_hash", String(255), nullable=False),
    Column("role", ROLE_ENUM, nullable=False),
    Column("created_at", TIMESTAMP(timezone=True), nullable=False),
    Column("updated_at", TIMESTAMP(timezone=True), nullable=False),
    Column(
        "archived_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

Index("idx_archived_users_archived_at", archived_users_table.c.archived_at.desc())

# ============================================================================
# INVITATIONS TABLE
# ============================================================================
invitations_table = Table(
    "invitations",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column("token", String(255), nullable=False, unique=True),
    Column("role", ROLE_ENUM, nullable=False),
    Column("recipient", String(254), nullable=False),
    # No FK: the issuer may later be archived or deleted
    Column("issued_by", UUID, nullable=True),
    Column(
        "status",
        Enum("pending", "consumed", name="invitation_status", create_type=False),
        nullable=False,
        server_default="pending",
    ),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column("expires_at", TIMESTAMP(timezone=True), nullable=False),
    Column("consumed_at", TIMESTAMP(timezone=True), nullable=True),
    Column("consumed_by", UUID, nullable=True),
)

Index(
    "idx_invitations_status_expires_at",
    invitations_table.c.status,
    invitations_table.c.expires_at,
)

# ============================================================================
# PUSH SUBSCRIPTIONS TABLE
# ============================================================================
push_subscriptions_table = Table(
    "push_subscriptions",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column("user_id", UUID, ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
    Column("endpoint", Text, nullable=False, unique=True),
    Column("expiration_time", BigInteger, nullable=True),
    Column("p256dh", String(255), nullable=False),
    Column("auth", String(255), nullable=False),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

Index("idx_push_subscriptions_user_id", push_subscriptions_table.c.user_id)
