"""
schemas.py - History Pydantic v2 data contracts.

A history record pairs one TaxInputs with a monthly summary, a timestamp and
a generated id. The full TaxCalculationResult is never stored; it is
recomputed from inputs when needed (PDF export).
"""
from __future__ import annotations

from datetime import datetime
from typing import List

from pydantic import BaseModel, ConfigDict, Field

from naijatax.calculator.schemas import TaxInputs


class HistorySummary(BaseModel):
    model_config = ConfigDict(extra="forbid")

    monthly_gross: float     # monthly_gross_income + other_monthly_income
    monthly_tax: float
    monthly_net: float


class TaxHistoryRecord(BaseModel):
    model_config = ConfigDict(extra="forbid")

    id: str
    session_id: str
    timestamp: datetime
    inputs: TaxInputs
    summary: HistorySummary


class SaveHistoryRequest(BaseModel):
    """Body of POST /api/history."""
    model_config = ConfigDict(extra="forbid")

    session_id: str = Field(..., min_length=1, max_length=36)
    inputs: TaxInputs


class TrendPoint(BaseModel):
    """One point of the gross/net/tax trend chart, oldest first."""
    year: int
    saved_at: datetime
    monthly_gross: float
    monthly_net: float
    monthly_tax: float


class HistoryListResponse(BaseModel):
    session_id: str
    records: List[TaxHistoryRecord]
