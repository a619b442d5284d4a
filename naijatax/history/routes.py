"""
History HTTP routes - POST   /api/history
                      GET    /api/history
                      DELETE /api/history
                      GET    /api/history/trend
                      GET    /api/history/export.csv
                      GET    /api/history/{record_id}
                      DELETE /api/history/{record_id}

Records are scoped by session_id (query parameter on reads, body on save).
Fixed paths are declared before /{record_id} so they are not captured by it.
"""
from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.responses import JSONResponse, Response
from sqlalchemy.ext.asyncio import AsyncSession

from naijatax.calculator.tax_engine import calculate_tax
from naijatax.calculator.validator import validate_inputs
from naijatax.database import get_db
from naijatax.errors import make_validation_error_response
from naijatax.history.export import build_trend, export_history_csv, history_csv_filename
from naijatax.history.schemas import (
    HistoryListResponse,
    SaveHistoryRequest,
    TaxHistoryRecord,
    TrendPoint,
)
from naijatax.store import (
    clear_records,
    delete_record,
    get_record,
    list_records,
    save_record,
)

router = APIRouter(prefix="/api/history", tags=["history"])
logger = logging.getLogger(__name__)


@router.post("", status_code=201)
async def save_calculation(
    body: SaveHistoryRequest,
    db: AsyncSession = Depends(get_db),
) -> JSONResponse:
    """Validate, compute and persist one calculation. Returns the stored record."""
    try:
        validate_inputs(body.inputs)
    except ValueError as exc:
        return make_validation_error_response(str(exc))

    result = calculate_tax(body.inputs)
    record = await save_record(db, body.session_id, body.inputs, result)
    return JSONResponse(status_code=201, content=record.model_dump(mode="json"))


@router.get("")
async def get_history(
    session_id: str = Query(..., description="Session whose records to list"),
    db: AsyncSession = Depends(get_db),
) -> HistoryListResponse:
    """Saved records, newest first."""
    records = await list_records(db, session_id)
    logger.info("History request session_id=%s records=%d", session_id, len(records))
    return HistoryListResponse(session_id=session_id, records=records)


@router.delete("")
async def clear_history(
    session_id: str = Query(..., description="Session whose records to delete"),
    db: AsyncSession = Depends(get_db),
) -> dict:
    removed = await clear_records(db, session_id)
    return {"session_id": session_id, "removed": removed}


@router.get("/trend")
async def get_trend(
    session_id: str = Query(...),
    db: AsyncSession = Depends(get_db),
) -> list[TrendPoint]:
    """Gross/net/tax series, oldest first."""
    records = await list_records(db, session_id)
    return build_trend(records)


@router.get("/export.csv")
async def export_csv(
    session_id: str = Query(...),
    db: AsyncSession = Depends(get_db),
) -> Response:
    records = await list_records(db, session_id)
    filename = history_csv_filename()
    logger.info("CSV exported session_id=%s records=%d", session_id, len(records))
    return Response(
        content=export_history_csv(records),
        media_type="text/csv; charset=utf-8",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.get("/{record_id}")
async def get_history_record(
    record_id: str,
    db: AsyncSession = Depends(get_db),
) -> TaxHistoryRecord:
    record = await get_record(db, record_id)
    if record is None:
        raise HTTPException(status_code=404, detail=f"History record '{record_id}' not found")
    return record


@router.delete("/{record_id}", status_code=204)
async def delete_history_record(
    record_id: str,
    db: AsyncSession = Depends(get_db),
) -> Response:
    deleted = await delete_record(db, record_id)
    if not deleted:
        raise HTTPException(status_code=404, detail=f"History record '{record_id}' not found")
    return Response(status_code=204)
