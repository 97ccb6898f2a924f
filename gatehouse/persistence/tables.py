"""SQLAlchemy table definitions for Gatehouse.

They match the schema defined in Alembic migrations. Uniqueness of account
email and of (provider, provider_user_id) is enforced here, at the storage
layer, and is the final arbiter for concurrent logins.
"""

from sqlalchemy import (
    Column,
    ForeignKey,
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
# ACCOUNTS TABLE
# ============================================================================
accounts_table = Table(
    "accounts",
    metadata,
    Column("id", UUID(as_uuid=True), primary_key=True),
    Column("email", String(320), nullable=False),  # Case-sensitive, as given
    Column("password_hash", Text, nullable=True),  # NULL for OAuth-only accounts
    Column("display_name", String(255), nullable=True),
    Column("avatar_url", Text, nullable=True),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    UniqueConstraint("email", name="uq_accounts_email"),
)

# ============================================================================
# EXTERNAL IDENTITIES TABLE (Google, Facebook, ...)
# ============================================================================
external_identities_table = Table(
    "external_identities",
    metadata,
    Column("id", UUID(as_uuid=True), primary_key=True),
    Column(
        "account_id",
        UUID(as_uuid=True),
        ForeignKey("accounts.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column("provider", String(50), nullable=False),  # 'google', 'facebook'
    Column("provider_user_id", String(255), nullable=False),
    Column("last_login_at", TIMESTAMP(timezone=True), nullable=False),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    UniqueConstraint("provider", "provider_user_id", name="uq_provider_identity"),
)

Index("idx_external_identities_account_id", external_identities_table.c.account_id)
