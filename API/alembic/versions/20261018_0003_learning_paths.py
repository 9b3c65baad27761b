"""add curated learning paths

Revision ID: 20261018_0003
Revises: 20261015_0002
Create Date: 2026-10-18 10:00:00
"""

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision = "20261018_0003"
down_revision = "20261015_0002"
branch_labels = None
depends_on = None


def upgrade() -> None:
    bind = op.get_bind()
    inspector = sa.inspect(bind)

    if not inspector.has_table("learning_paths"):
        op.create_table(
            "learning_paths",
            sa.Column("id", postgresql.UUID(as_uuid=True), nullable=False),
            sa.Column("slug", sa.String(length=128), nullable=False),
            sa.Column("title", sa.String(length=255), nullable=False),
            sa.Column("description", sa.Text(), nullable=True),
            sa.Column("duration", sa.String(length=64), nullable=False, server_default=""),
            sa.Column("status", sa.String(length=32), nullable=False, server_default="draft"),
            sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=True),
            sa.PrimaryKeyConstraint("id"),
            sa.UniqueConstraint("slug"),
        )
        op.create_index("idx_learning_paths_status_created_at", "learning_paths", ["status", "created_at"])

    if not inspector.has_table("learning_path_items"):
        op.create_table(
            "learning_path_items",
            sa.Column("id", postgresql.UUID(as_uuid=True), nullable=False),
            sa.Column("path_id", postgresql.UUID(as_uuid=True), nullable=False),
            sa.Column("order", sa.Integer(), nullable=False, server_default="0"),
            sa.Column("type", sa.String(length=16), nullable=False),
            sa.Column("domain", sa.String(length=128), nullable=True),
            sa.Column("module", sa.String(length=128), nullable=True),
            sa.Column("lesson", sa.String(length=128), nullable=True),
            sa.Column("case_id", sa.String(length=128), nullable=True),
            sa.ForeignKeyConstraint(["path_id"], ["learning_paths.id"], ondelete="CASCADE"),
            sa.PrimaryKeyConstraint("id"),
        )
        op.create_index("idx_learning_path_items_path_order", "learning_path_items", ["path_id", "order"])


def downgrade() -> None:
    bind = op.get_bind()
    inspector = sa.inspect(bind)

    if inspector.has_table("learning_path_items"):
        op.drop_index("idx_learning_path_items_path_order", table_name="learning_path_items")
        op.drop_table("learning_path_items")
    if inspector.has_table("learning_paths"):
        op.drop_index("idx_learning_paths_status_created_at", table_name="learning_paths")
        op.drop_table("learning_paths")
