"""initial_schema

Revision ID: 001_initial_schema
Revises:
Create Date: 2026-10-19 12:00:00.000000 UTC

Creates the two tables:
  - history_records  (saved TaxInputs as JSONB + denormalized monthly summary)
  - chat_history     (assistant exchanges per session)
"""
from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = "001_initial_schema"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # --- history_records table ---
    op.create_table(
        "history_records",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("session_id", sa.String(length=36), nullable=False, comment="Session that saved this record"),
        sa.Column("inputs_data", postgresql.JSONB(astext_type=sa.Text()), nullable=False, comment="Full TaxInputs serialized as JSONB"),
        sa.Column("tax_year", sa.Integer(), nullable=False),
        sa.Column("monthly_gross", sa.Float(), nullable=False, comment="Salary + other monthly income"),
        sa.Column("monthly_tax", sa.Float(), nullable=False),
        sa.Column("monthly_net", sa.Float(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_history_records_session_id"), "history_records", ["session_id"], unique=False)

    # --- chat_history table ---
    op.create_table(
        "chat_history",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("session_id", sa.String(length=36), nullable=False, comment="Session identifier - groups messages by user session"),
        sa.Column("message", sa.Text(), nullable=False),
        sa.Column("reply", sa.Text(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_chat_history_session_id"), "chat_history", ["session_id"], unique=False)


def downgrade() -> None:
    op.drop_index(op.f("ix_chat_history_session_id"), table_name="chat_history")
    op.drop_table("chat_history")
    op.drop_index(op.f("ix_history_records_session_id"), table_name="history_records")
    op.drop_table("history_records")
