"""add profile weekly target and learning track

Revision ID: 20261015_0002
Revises: 20261012_0001
Create Date: 2026-10-15 11:00:00
"""

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = "20261015_0002"
down_revision = "20261012_0001"
branch_labels = None
depends_on = None


def _has_column(inspector: sa.Inspector, table_name: str, column_name: str) -> bool:
    return any(col["name"] == column_name for col in inspector.get_columns(table_name))


def upgrade() -> None:
    bind = op.get_bind()
    inspector = sa.inspect(bind)
    if not inspector.has_table("profiles"):
        return

    if not _has_column(inspector, "profiles", "weekly_target_hours"):
        op.add_column("profiles", sa.Column("weekly_target_hours", sa.Float(), nullable=True))
    if not _has_column(inspector, "profiles", "learning_track"):
        op.add_column("profiles", sa.Column("learning_track", sa.String(length=64), nullable=True))
    op.create_index(
        "idx_user_lesson_progress_status_lesson",
        "user_lesson_progress",
        ["status", "domain_id", "module_id", "lesson_id"],
        unique=False,
        if_not_exists=True,
    )


def downgrade() -> None:
    bind = op.get_bind()
    inspector = sa.inspect(bind)
    if not inspector.has_table("profiles"):
        return

    op.drop_index("idx_user_lesson_progress_status_lesson", table_name="user_lesson_progress", if_exists=True)
    if _has_column(inspector, "profiles", "learning_track"):
        op.drop_column("profiles", "learning_track")
    if _has_column(inspector, "profiles", "weekly_target_hours"):
        op.drop_column("profiles", "weekly_target_hours")
