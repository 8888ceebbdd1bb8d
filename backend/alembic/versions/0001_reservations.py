"""Reservations table.

Revision ID: 0001
Revises:
Create Date: 2025-06-01
"""

from __future__ import annotations

import sqlalchemy as sa
from alembic import op

revision = "0001"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "reservations",
        sa.Column("id", sa.String(length=64), primary_key=True),
        sa.Column("animal_name", sa.String(length=120), nullable=False),
        sa.Column(
            "animal_type",
            sa.String(length=32),
            nullable=False,
            server_default="Other",
        ),
        sa.Column("owner_first_name", sa.String(length=120), nullable=False),
        sa.Column("owner_last_name", sa.String(length=120), nullable=False),
        sa.Column("start_date", sa.Date(), nullable=False),
        sa.Column("end_date", sa.Date(), nullable=False),
        sa.Column("notes", sa.Text()),
        sa.Column(
            "status",
            sa.String(length=20),
            nullable=False,
            server_default="active",
        ),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
        sa.CheckConstraint(
            "end_date >= start_date", name="ck_reservation_end_not_before_start"
        ),
    )
    op.create_index(
        "ix_reservations_start_date", "reservations", ["start_date"], unique=False
    )


def downgrade() -> None:
    op.drop_index("ix_reservations_start_date", table_name="reservations")
    op.drop_table("reservations")
