"""Store staff creation order.

Revision ID: 20251215_0002
Revises: 20251201_0001
Create Date: 2025-12-15 09:00:00.000000
"""

from __future__ import annotations

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = "20251215_0002"
down_revision = "20251201_0001"
branch_labels = None
depends_on = None


def upgrade() -> None:
    with op.batch_alter_table("staff") as batch_op:
        batch_op.add_column(
            sa.Column("position", sa.Integer(), nullable=False, server_default=sa.text("0"))
        )
        batch_op.create_index("ix_staff_position", ["position"])

    # Number existing rows by creation time, ids break ties.
    op.execute(
        """
        UPDATE staff SET position = (
            SELECT COUNT(*) FROM staff AS earlier
            WHERE earlier.created_at < staff.created_at
               OR (earlier.created_at = staff.created_at AND earlier.id <= staff.id)
        )
        """
    )


def downgrade() -> None:
    with op.batch_alter_table("staff") as batch_op:
        batch_op.drop_index("ix_staff_position")
        batch_op.drop_column("position")
