"""create suggestions table

Revision ID: e4a7c1d92b10
Revises:
Create Date: 2026-10-19 00:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "e4a7c1d92b10"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "suggestions",
        sa.Column("id", sa.String(64), primary_key=True),
        sa.Column("department", sa.String(200), nullable=False),
        sa.Column("tag", sa.String(100), nullable=False),
        sa.Column("text", sa.Text(), nullable=False),
        sa.Column("status", sa.String(20), nullable=False, server_default="Pending"),
        sa.Column("admin_response", sa.Text(), nullable=False, server_default=""),
        sa.Column("submitted_by", sa.String(200), nullable=False, server_default="Anonymous"),
        sa.Column("priority", sa.String(10), nullable=False, server_default="Medium"),
        sa.Column("created", sa.DateTime(timezone=True), nullable=False),
        sa.Column("responded_date", sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index("ix_suggestions_created", "suggestions", ["created"])


def downgrade() -> None:
    op.drop_index("ix_suggestions_created", table_name="suggestions")
    op.drop_table("suggestions")
