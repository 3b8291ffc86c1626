"""Initial schema — round types, configs, assignments, rounds, links, members.

Revision ID: 001_round_schema
Revises: None
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "001_round_schema"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _created_at() -> sa.Column:
    return sa.Column(
        "created_at", sa.DateTime(timezone=True), nullable=False,
        server_default=sa.func.now(),
    )


def upgrade() -> None:
    op.create_table(
        "round_types",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("duration_amount", sa.Integer, nullable=False),
        sa.Column("duration_unit", sa.String(20), nullable=False, server_default="minutes"),
        _created_at(),
    )

    op.create_table(
        "round_configs",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("round_type_id", sa.Integer, sa.ForeignKey("round_types.id"), nullable=False, unique=True),
        sa.Column("enabled", sa.Boolean, nullable=False, server_default=sa.true()),
        _created_at(),
    )

    op.create_table(
        "round_assignments",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("round_type_id", sa.Integer, sa.ForeignKey("round_types.id"), nullable=False),
        sa.Column("subject_id", sa.String(64), nullable=False),
        _created_at(),
    )
    op.create_index("ix_round_assignments_round_type_id", "round_assignments", ["round_type_id"])

    op.create_table(
        "rounds",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("round_timestamp", sa.String(20), nullable=False, unique=True),
        sa.Column("status", sa.String(20), nullable=False),
        _created_at(),
    )

    op.create_table(
        "round_type_links",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("round_id", sa.Integer, sa.ForeignKey("rounds.id"), nullable=False),
        sa.Column("round_type_id", sa.Integer, sa.ForeignKey("round_types.id"), nullable=False),
        _created_at(),
        sa.UniqueConstraint("round_id", "round_type_id", name="uq_round_type_link"),
    )
    op.create_index("ix_round_type_links_round_id", "round_type_links", ["round_id"])
    op.create_index("ix_round_type_links_round_type_id", "round_type_links", ["round_type_id"])

    op.create_table(
        "round_members",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("round_id", sa.Integer, sa.ForeignKey("rounds.id"), nullable=False),
        sa.Column("subject_id", sa.String(64), nullable=False),
        _created_at(),
        sa.UniqueConstraint("round_id", "subject_id", name="uq_round_member"),
    )
    op.create_index("ix_round_members_round_id", "round_members", ["round_id"])


def downgrade() -> None:
    op.drop_table("round_members")
    op.drop_table("round_type_links")
    op.drop_table("rounds")
    op.drop_table("round_assignments")
    op.drop_table("round_configs")
    op.drop_table("round_types")
