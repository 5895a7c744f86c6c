"""initial schema: users, positions, candidates

Revision ID: 3f1c2a9d7b10
Revises:
Create Date: 2026-10-18 12:00:00.000000

"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision: str = "3f1c2a9d7b10"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column(
            "created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False
        ),
        sa.Column(
            "updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False
        ),
    ]


def upgrade() -> None:
    """Create users, positions and candidates tables."""
    op.create_table(
        "users",
        sa.Column("id", sa.String(length=255), primary_key=True),
        sa.Column("email", sa.String(length=255), nullable=True, unique=True),
        sa.Column("first_name", sa.String(length=100), nullable=True),
        sa.Column("last_name", sa.String(length=100), nullable=True),
        sa.Column("profile_image_url", sa.String(length=1000), nullable=True),
        *_timestamps(),
    )
    op.create_index(op.f("ix_users_created_at"), "users", ["created_at"], unique=False)

    op.create_table(
        "positions",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("title", sa.String(length=200), nullable=False),
        sa.Column("department", sa.String(length=100), nullable=False),
        sa.Column("description", sa.String(), nullable=True),
        sa.Column("location", sa.String(length=200), nullable=False),
        sa.Column("status", sa.String(length=30), server_default="Active", nullable=False),
        *_timestamps(),
    )
    op.create_index(op.f("ix_positions_title"), "positions", ["title"], unique=False)
    op.create_index(op.f("ix_positions_created_at"), "positions", ["created_at"], unique=False)

    op.create_table(
        "candidates",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("name", sa.String(length=200), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("phone", sa.String(length=50), nullable=False),
        sa.Column("resume", sa.String(length=1000), nullable=True),
        sa.Column("position_id", sa.Integer(), nullable=True),
        sa.Column("position_applied", sa.String(length=200), nullable=False),
        sa.Column("status", sa.String(length=20), server_default="New", nullable=False),
        *_timestamps(),
    )
    op.create_index(op.f("ix_candidates_email"), "candidates", ["email"], unique=False)
    op.create_index(op.f("ix_candidates_position_id"), "candidates", ["position_id"], unique=False)
    op.create_index(
        op.f("ix_candidates_position_applied"), "candidates", ["position_applied"], unique=False
    )
    op.create_index(op.f("ix_candidates_status"), "candidates", ["status"], unique=False)
    op.create_index(op.f("ix_candidates_created_at"), "candidates", ["created_at"], unique=False)


def downgrade() -> None:
    """Drop users, positions and candidates tables."""
    op.drop_table("candidates")
    op.drop_table("positions")
    op.drop_table("users")
