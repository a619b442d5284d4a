"""
models/history_record.py - SQLAlchemy ORM model for saved calculations.

Table: history_records
One row per "Save Calculation". Scoped by session_id.
"""
import uuid
from datetime import datetime, timezone

from sqlalchemy import DateTime, Float, Integer, String
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column

from naijatax.database import Base


class HistoryRecordORM(Base):
    """
    ORM model for a saved (inputs, summary) pair.

    inputs_data: Full TaxInputs serialized as JSONB - the result is NOT stored,
    it is recomputed from inputs (the engine is deterministic).
    monthly_*: Denormalized summary figures for listing and trend queries.
    """
    __tablename__ = "history_records"

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        default=lambda: str(uuid.uuid4()),
    )
    session_id: Mapped[str] = mapped_column(
        String(36),
        nullable=False,
        index=True,
        comment="Session that saved this record",
    )
    inputs_data: Mapped[dict] = mapped_column(
        JSONB,
        nullable=False,
        comment="Full TaxInputs serialized as JSONB",
    )
    tax_year: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
    )
    monthly_gross: Mapped[float] = mapped_column(
        Float,
        nullable=False,
        comment="Salary + other monthly income",
    )
    monthly_tax: Mapped[float] = mapped_column(Float, nullable=False)
    monthly_net: Mapped[float] = mapped_column(Float, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        nullable=False,
    )
