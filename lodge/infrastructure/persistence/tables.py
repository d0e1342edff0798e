"""Table definitions for principals, documents, programs and notification records."""

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    ForeignKey,
    Index,
    MetaData,
    String,
    Table,
    Text,
)

metadata = MetaData()

# ============================================================================
# PRINCIPALS TABLE (authorization attributes of each account)
# ============================================================================
principals_table = Table(
    "principals",
    metadata,
    Column("id", String, primary_key=True),
    Column("tier", String(16), nullable=False),  # Tier as string
    Column("grade", String(16), nullable=True),  # Grade label, NULL for non-members
    Column("office", String(32), nullable=True),  # Office as string
    Column("active", Boolean, nullable=False, default=True),
)

Index("idx_principals_active_grade", principals_table.c.active, principals_table.c.grade)


# ============================================================================
# DOCUMENTS TABLE
# ============================================================================
documents_table = Table(
    "documents",
    metadata,
    Column("id", String, primary_key=True),
    Column("title", String, nullable=False),
    Column("kind", String(32), nullable=False),  # DocumentKind as string
    Column("category", String(16), nullable=False),  # Grade label or "general"
    Column("owner_id", String, ForeignKey("principals.id"), nullable=False),
    Column("status", String(16), nullable=False),  # DocumentStatus as string
    Column("description", Text, nullable=True),
    Column("moderated_by", String, nullable=True),
    Column("moderated_at", DateTime(timezone=True), nullable=True),
    Column("moderation_comments", Text, nullable=True),
    Column("created_at", DateTime(timezone=True), nullable=False),
    Column("updated_at", DateTime(timezone=True), nullable=False),
)

Index("idx_documents_owner_id", documents_table.c.owner_id)
Index("idx_documents_status", documents_table.c.status)


# ============================================================================
# PROGRAMS TABLE
# ============================================================================
programs_table = Table(
    "programs",
    metadata,
    Column("id", String, primary_key=True),
    Column("topic", String, nullable=False),
    Column("scheduled_for", DateTime(timezone=True), nullable=False),
    Column("grade", String(16), nullable=False),  # Grade label or "general"
    Column("owner_id", String, ForeignKey("principals.id"), nullable=False),
    Column("location", String, nullable=True),
    Column("description", Text, nullable=True),
    Column("created_at", DateTime(timezone=True), nullable=False),
)

Index("idx_programs_scheduled_for", programs_table.c.scheduled_for)


# ============================================================================
# NOTIFICATIONS TABLE (one row per recipient per event)
# ============================================================================
notifications_table = Table(
    "notifications",
    metadata,
    Column("id", String, primary_key=True),
    Column("event_id", String, nullable=False),
    Column("recipient_id", String, nullable=False),  # Not a FK: Single targets are unverified
    Column("title", String, nullable=False),
    Column("body", Text, nullable=False),
    Column("category", String(32), nullable=False),
    Column("priority", String(16), nullable=False),
    Column("link", String, nullable=True),
    Column("link_text", String, nullable=True),
    Column("related_kind", String(32), nullable=True),
    Column("related_id", String, nullable=True),
    Column("sender_id", String, nullable=True),
    Column("expires_at", DateTime(timezone=True), nullable=True),
    Column("read", Boolean, nullable=False, default=False),
    Column("read_at", DateTime(timezone=True), nullable=True),
    Column("created_at", DateTime(timezone=True), nullable=False),
)

Index("idx_notifications_recipient_read", notifications_table.c.recipient_id, notifications_table.c.read)
Index("idx_notifications_expires_at", notifications_table.c.expires_at)
Index("idx_notifications_event_id", notifications_table.c.event_id)
