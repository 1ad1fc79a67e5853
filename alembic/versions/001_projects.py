"""Initial schema — projects table (id → project record).

Revision ID: 001_projects
Revises: None
Create Date: 2026-10-18

u64 columns are stored as 20-digit zero-padded text (see crowdfund/db/types.py).
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "001_projects"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "projects",
        sa.Column("id", sa.String(64), primary_key=True),
        sa.Column("creator", sa.Text, nullable=False),
        sa.Column("title", sa.Text, nullable=False),
        sa.Column("description", sa.Text, nullable=False),
        sa.Column("goal_amount", sa.String(20), nullable=False),
        sa.Column("raised_amount", sa.String(20), nullable=False, server_default="0" * 20),
        sa.Column("start_time", sa.String(20), nullable=False),
        sa.Column("deadline", sa.String(20), nullable=False),
        sa.Column("contributors", sa.JSON, nullable=False),
        sa.Column("status", sa.String(20), nullable=False, server_default="Funding"),
        sa.Column("version", sa.Integer, nullable=False),
    )
    op.create_index("ix_projects_status", "projects", ["status"])


def downgrade() -> None:
    op.drop_index("ix_projects_status", table_name="projects")
    op.drop_table("projects")
