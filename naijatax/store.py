"""
store.py - Data access facade for NaijaTax.

Provides a consistent, high-level API for persisting and retrieving domain objects.
Routes use these functions - no route touches SQLAlchemy directly.

Design principles:
  - All functions are async and accept an AsyncSession parameter
  - No raw SQL: ORM-only queries
  - Logs only record_id / session_id - never income or tax figures
  - Returns domain Pydantic objects (not ORM instances) so callers are persistence-agnostic
  - Uses flush() (not commit()) - the get_db() dependency handles commit
"""
import logging
import uuid
from typing import Optional

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from naijatax.calculator.schemas import TaxCalculationResult, TaxInputs
from naijatax.history.schemas import HistorySummary, TaxHistoryRecord
from naijatax.models.chat_history import ChatHistoryORM
from naijatax.models.history_record import HistoryRecordORM

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Conversion helpers
# ---------------------------------------------------------------------------

def build_summary(inputs: TaxInputs, result: TaxCalculationResult) -> HistorySummary:
    """
    Monthly summary saved alongside the inputs.
    monthly_gross includes other income; monthly_net (from the engine) does not.
    """
    return HistorySummary(
        monthly_gross=inputs.monthly_gross_income + inputs.other_monthly_income,
        monthly_tax=result.monthly_tax_liability,
        monthly_net=result.monthly_net_income,
    )


def _to_record(orm: HistoryRecordORM) -> TaxHistoryRecord:
    return TaxHistoryRecord(
        id=orm.id,
        session_id=orm.session_id,
        timestamp=orm.created_at,
        inputs=TaxInputs.model_validate(orm.inputs_data),
        summary=HistorySummary(
            monthly_gross=orm.monthly_gross,
            monthly_tax=orm.monthly_tax,
            monthly_net=orm.monthly_net,
        ),
    )


# ---------------------------------------------------------------------------
# History operations
# ---------------------------------------------------------------------------

async def save_record(
    db: AsyncSession,
    session_id: str,
    inputs: TaxInputs,
    result: TaxCalculationResult,
) -> TaxHistoryRecord:
    """Persist inputs + summary. Returns the stored record with its generated id."""
    summary = build_summary(inputs, result)
    orm = HistoryRecordORM(
        id=str(uuid.uuid4()),
        session_id=session_id,
        inputs_data=inputs.model_dump(mode="json"),
        tax_year=inputs.year,
        monthly_gross=summary.monthly_gross,
        monthly_tax=summary.monthly_tax,
        monthly_net=summary.monthly_net,
    )
    db.add(orm)
    await db.flush()
    await db.refresh(orm)
    logger.info("Saved history record record_id=%s session_id=%s", orm.id, session_id)
    return _to_record(orm)


async def list_records(
    db: AsyncSession,
    session_id: str,
) -> list[TaxHistoryRecord]:
    """All records for a session, newest first."""
    result = await db.execute(
        select(HistoryRecordORM)
        .where(HistoryRecordORM.session_id == session_id)
        .order_by(HistoryRecordORM.created_at.desc())
    )
    return [_to_record(row) for row in result.scalars().all()]


async def get_record(
    db: AsyncSession,
    record_id: str,
) -> Optional[TaxHistoryRecord]:
    """Returns None if no record found (caller raises 404)."""
    result = await db.execute(
        select(HistoryRecordORM).where(HistoryRecordORM.id == record_id)
    )
    orm = result.scalar_one_or_none()
    if orm is None:
        return None
    return _to_record(orm)


async def delete_record(
    db: AsyncSession,
    record_id: str,
) -> bool:
    """Delete one record. Returns False if it did not exist."""
    result = await db.execute(
        select(HistoryRecordORM).where(HistoryRecordORM.id == record_id)
    )
    orm = result.scalar_one_or_none()
    if orm is None:
        return False
    await db.delete(orm)
    await db.flush()
    logger.info("Deleted history record record_id=%s", record_id)
    return True


async def clear_records(
    db: AsyncSession,
    session_id: str,
) -> int:
    """Delete every record for a session. Returns the number removed."""
    result = await db.execute(
        delete(HistoryRecordORM).where(HistoryRecordORM.session_id == session_id)
    )
    await db.flush()
    removed = result.rowcount or 0
    logger.info("Cleared history session_id=%s removed=%d", session_id, removed)
    return removed


# ---------------------------------------------------------------------------
# Assistant chat operations
# ---------------------------------------------------------------------------

async def save_chat_message(
    db: AsyncSession,
    session_id: str,
    message: str,
    reply: str,
) -> None:
    """
    Persist a single exchange.
    Logs only session_id (not message text - potential PII).
    """
    orm = ChatHistoryORM(
        id=str(uuid.uuid4()),
        session_id=session_id,
        message=message,
        reply=reply,
    )
    db.add(orm)
    await db.flush()
    logger.info("Saved chat message session_id=%s", session_id)


async def get_chat_history(
    db: AsyncSession,
    session_id: str,
) -> list[dict]:
    """All exchanges for a session, oldest first. Empty list if none."""
    result = await db.execute(
        select(ChatHistoryORM)
        .where(ChatHistoryORM.session_id == session_id)
        .order_by(ChatHistoryORM.created_at.asc())
    )
    rows = result.scalars().all()
    return [
        {
            "message": row.message,
            "reply": row.reply,
            "created_at": row.created_at.isoformat(),
        }
        for row in rows
    ]
