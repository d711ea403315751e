"""create comments table

Revision ID: 3c1f0a7d92e4
Revises:
Create Date: 2026-10-17 10:12:44.518203

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = "3c1f0a7d92e4"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        "comments",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("post_id", sa.Integer(), nullable=False),
        # 0 marks a root comment
        sa.Column("parent_id", sa.Integer(), server_default="0", nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("comment", sa.Text(), nullable=False),
        sa.Column(
            "is_approved", sa.Boolean(), server_default="false", nullable=False
        ),
        sa.Column(
            "create_date",
            postgresql.TIMESTAMP(timezone=True),
            server_default=sa.text("NOW()"),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.CheckConstraint("post_id > 0", name="post_id_positive"),
        sa.CheckConstraint("parent_id >= 0", name="parent_id_non_negative"),
        sa.CheckConstraint("parent_id <> id", name="parent_id_not_self"),
    )
    op.create_index("idx_comments_post_id", "comments", ["post_id"])
    op.create_index("idx_comments_parent_id", "comments", ["parent_id"])
    op.create_index("idx_comments_email", "comments", ["email"])
    # Serves sibling listings in (create_date, id) order
    op.create_index(
        "idx_comments_sibling_order",
        "comments",
        ["parent_id", "create_date", "id"],
    )


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index("idx_comments_sibling_order", table_name="comments")
    op.drop_index("idx_comments_email", table_name="comments")
    op.drop_index("idx_comments_parent_id", table_name="comments")
    op.drop_index("idx_comments_post_id", table_name="comments")
    op.drop_table("comments")
