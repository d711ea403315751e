"""SQLAlchemy table definitions for Remark.

These table definitions are used with SQLAlchemy Core statements.
They match the schema defined in Alembic migrations.
"""

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    Index,
    Integer,
    MetaData,
    String,
    Table,
    Text,
)
from sqlalchemy.dialects.postgresql import TIMESTAMP

# Metadata object for all tables
metadata = MetaData()

# ============================================================================
# COMMENTS TABLE
# ============================================================================
comments_table = Table(
    "comments",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("post_id", Integer, nullable=False),
    # 0 marks a root comment, so no foreign key on this column
    Column("parent_id", Integer, nullable=False, server_default="0"),
    Column("name", String(255), nullable=False),
    Column("email", String(255), nullable=False),
    Column("comment", Text, nullable=False),
    Column("is_approved", Boolean, nullable=False, server_default="false"),
    Column(
        "create_date", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    CheckConstraint("post_id > 0", name="post_id_positive"),
    CheckConstraint("parent_id >= 0", name="parent_id_non_negative"),
    CheckConstraint("parent_id <> id", name="parent_id_not_self"),
)

Index("idx_comments_post_id", comments_table.c.post_id)
Index("idx_comments_parent_id", comments_table.c.parent_id)
Index("idx_comments_email", comments_table.c.email)
Index(
    "idx_comments_sibling_order",
    comments_table.c.parent_id,
    comments_table.c.create_date,
    comments_table.c.id,
)
