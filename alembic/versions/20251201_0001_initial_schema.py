"""Initial schema for the studio scheduler.

Revision ID: 20251201_0001
Revises:
Create Date: 2025-12-01 09:00:00.000000
"""

from __future__ import annotations

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision = "20251201_0001"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    staff_role_enum = postgresql.ENUM("host", name="staffrole", create_type=False)
    staff_role_enum.create(op.get_bind(), checkfirst=True)

    op.create_table(
        "staff",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("name", sa.String(length=120), nullable=False),
        sa.Column("role", staff_role_enum, nullable=False, server_default="host"),
        sa.Column("constraints", sa.Text(), nullable=False),
        sa.Column("avatar", sa.String(length=255), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False, server_default=sa.text("CURRENT_TIMESTAMP")),
    )

    op.create_table(
        "shift",
        sa.Column("id", sa.String(length=64), primary_key=True),
        sa.Column("date", sa.Date(), nullable=False),
        sa.Column("start_time", sa.String(length=5), nullable=False),
        sa.Column("end_time", sa.String(length=5), nullable=False),
        sa.Column("role", staff_role_enum, nullable=False, server_default="host"),
        sa.Column("assigned_staff_id", sa.String(length=64), nullable=True),
    )
    op.create_index("ix_shift_date", "shift", ["date"])

    op.create_table(
        "schedulerun",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("model", sa.String(length=64), nullable=False),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("assignments", sa.JSON(), nullable=False),
        sa.Column("unfilled_shift_ids", sa.JSON(), nullable=False),
        sa.Column("shift_count", sa.Integer(), nullable=False, server_default=sa.text("0")),
        sa.Column("staff_count", sa.Integer(), nullable=False, server_default=sa.text("0")),
        sa.Column("created_at", sa.DateTime(), nullable=False, server_default=sa.text("CURRENT_TIMESTAMP")),
    )


def downgrade() -> None:
    op.drop_table("schedulerun")
    op.drop_index("ix_shift_date", table_name="shift")
    op.drop_table("shift")
    op.drop_table("staff")
    postgresql.ENUM(name="staffrole").drop(op.get_bind(), checkfirst=True)
