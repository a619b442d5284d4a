"""
Calculator HTTP routes - POST /api/calculate,
                          GET  /api/bands,
                          GET  /api/tips,
                          GET  /api/export/{record_id}

The engine itself is pure; these handlers add validation, the optional
Redis result cache and the PDF export of saved records.
"""
from __future__ import annotations

import logging
import math

from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import JSONResponse, StreamingResponse
from redis.exceptions import RedisError
from sqlalchemy.ext.asyncio import AsyncSession

from naijatax.cache import get_cached_result, set_cached_result
from naijatax.calculator.pdf_generator import generate_tax_report
from naijatax.calculator.schemas import BandTableEntry, TaxInputs
from naijatax.calculator.tax_engine import TAX_BANDS, calculate_tax
from naijatax.calculator.tips import EDUCATIONAL_TIPS
from naijatax.calculator.validator import validate_inputs
from naijatax.database import get_db
from naijatax.errors import make_validation_error_response
from naijatax.store import get_record

router = APIRouter(prefix="/api", tags=["calculator"])
logger = logging.getLogger(__name__)


@router.post("/calculate")
async def calculate(request: Request, inputs: TaxInputs) -> JSONResponse:
    """
    Validate inputs and run the PAYE engine.

    Uses the Redis result cache when app.state.redis is set. A Redis
    failure mid-request is logged and the result is computed directly.
    """
    try:
        validate_inputs(inputs)
    except ValueError as exc:
        return make_validation_error_response(str(exc))

    redis_client = getattr(request.app.state, "redis", None)

    if redis_client is not None:
        try:
            cached = await get_cached_result(redis_client, inputs)
        except RedisError as exc:
            logger.warning("Cache read failed, computing directly: %s", exc)
            cached = None
        if cached is not None:
            return JSONResponse(status_code=200, content=cached.model_dump())

    result = calculate_tax(inputs)

    if redis_client is not None:
        try:
            await set_cached_result(redis_client, inputs, result)
        except RedisError as exc:
            logger.warning("Cache write failed: %s", exc)

    logger.info(
        "Tax calculated year=%s employment_type=%s bands=%d",
        inputs.year,
        inputs.employment_type.value,
        len(result.band_allocations),
    )
    return JSONResponse(status_code=200, content=result.model_dump())


@router.get("/bands")
async def list_bands() -> list[BandTableEntry]:
    """The configured band table. upper_width is null for the unbounded top band."""
    return [
        BandTableEntry(
            label=band.label,
            rate=band.rate,
            upper_width=band.upper_width if math.isfinite(band.upper_width) else None,
        )
        for band in TAX_BANDS
    ]


@router.get("/tips")
async def list_tips() -> list[dict[str, str]]:
    return EDUCATIONAL_TIPS


@router.get("/export/{record_id}")
async def export_pdf(
    record_id: str,
    db: AsyncSession = Depends(get_db),
) -> StreamingResponse:
    """Recompute a saved record's result and download it as a PDF report."""
    record = await get_record(db, record_id)
    if record is None:
        raise HTTPException(status_code=404, detail=f"History record '{record_id}' not found")

    result = calculate_tax(record.inputs)
    buffer = generate_tax_report(record.inputs, result, saved_at=record.timestamp)
    filename = f"naijatax_{record.inputs.year}_{record_id}.pdf"
    logger.info("PDF exported record_id=%s filename=%s", record_id, filename)

    return StreamingResponse(
        buffer,
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
