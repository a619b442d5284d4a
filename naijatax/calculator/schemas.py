"""
schemas.py - Calculator Pydantic v2 data contracts.

Defines:
  - EmploymentType          (SALARIED | SELF_EMPLOYED - carried, never branched on)
  - TaxBand                 (one row of the static band table)
  - TaxInputs               (one calculation request - all amounts MONTHLY)
  - TaxBandAllocation       (per-band share of taxable income and tax)
  - TaxCalculationResult    (immutable engine output)
  - BandTableEntry          (JSON-safe view of a TaxBand for GET /api/bands)
  - ErrorDetail, ErrorBody, ErrorResponse  (cross-cutting error envelope)

TaxInputs deliberately has NO ge=0 constraints: the engine accepts any float.
Boundary checks live in validator.py and run before the engine in every route.
"""
from __future__ import annotations

import datetime
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------

class EmploymentType(str, Enum):
    salaried = "SALARIED"
    self_employed = "SELF_EMPLOYED"


# ---------------------------------------------------------------------------
# TaxBand - static configuration row
# ---------------------------------------------------------------------------

class TaxBand(BaseModel):
    """
    One marginal band. upper_width is the WIDTH of the band, not a cumulative
    ceiling: income spills into the next band once this width is consumed.
    The final band of a table uses float("inf").
    """
    model_config = ConfigDict(extra="forbid", frozen=True)

    upper_width: float
    rate: float
    label: str


# ---------------------------------------------------------------------------
# TaxInputs - one calculation request
# ---------------------------------------------------------------------------

class TaxInputs(BaseModel):
    """
    Declared income and deductions for one PAYE calculation.

    All monetary fields are in NGN and MONTHLY. The engine annualises (×12).
    year is informational only - it never selects a different band table.
    """
    model_config = ConfigDict(extra="forbid")

    monthly_gross_income: float = Field(
        default=0,
        description="Monthly gross salary in NGN.",
    )
    other_monthly_income: float = Field(
        default=0,
        description="Other monthly income in NGN. Taxed, but excluded from monthly_net_income.",
    )
    employment_type: EmploymentType = Field(
        default=EmploymentType.salaried,
        description="Salaried (PAYE) or self-employed. Does not change the computation.",
    )
    monthly_pension_contribution: float = Field(
        default=0,
        description="Monthly employee pension contribution.",
    )
    monthly_nhf_contribution: float = Field(
        default=0,
        description="Monthly National Housing Fund contribution.",
    )
    monthly_other_deductions: float = Field(
        default=0,
        description="Other monthly allowable deductions (NHIS, life assurance, etc.).",
    )
    year: int = Field(
        default_factory=lambda: datetime.date.today().year,
        description="Assessment year. Informational only.",
    )


# ---------------------------------------------------------------------------
# Engine output
# ---------------------------------------------------------------------------

class TaxBandAllocation(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    label: str
    rate: float
    taxable_amount_in_band: float    # Annual amount allocated to this band
    tax_payable_in_band: float       # taxable_amount_in_band × rate


class TaxCalculationResult(BaseModel):
    """
    Output of calculate_tax(). Constructed once, never mutated.

    Computation sequence:
      1. annual_gross_income = (monthly gross + other) × 12
      2. consolidated_relief_allowance = max(200000, 1% gross) + 20% gross
      3. total_allowable_deductions = (pension + NHF + other) × 12
      4. annual_taxable_income = max(0, gross - CRA - deductions)
      5. band walk → annual_tax_liability
      6. monthly_tax_liability = annual / 12
      7. monthly_net_income = monthly gross SALARY - monthly tax
    """
    model_config = ConfigDict(extra="forbid", frozen=True)

    annual_gross_income: float
    consolidated_relief_allowance: float
    total_allowable_deductions: float
    annual_taxable_income: float
    annual_tax_liability: float
    monthly_tax_liability: float
    monthly_net_income: float
    band_allocations: List[TaxBandAllocation]   # One per configured band, table order


class BandTableEntry(BaseModel):
    """JSON-safe band row. upper_width is None for the unbounded top band."""
    model_config = ConfigDict(extra="forbid")

    label: str
    rate: float
    upper_width: Optional[float] = None


# ---------------------------------------------------------------------------
# Error envelope
# ---------------------------------------------------------------------------

class ErrorDetail(BaseModel):
    field: Optional[str] = None
    issue: str


class ErrorBody(BaseModel):
    code: str
    message: str
    details: List[ErrorDetail] = []


class ErrorResponse(BaseModel):
    error: ErrorBody


__all__ = [
    "EmploymentType",
    "TaxBand",
    "TaxInputs",
    "TaxBandAllocation",
    "TaxCalculationResult",
    "BandTableEntry",
    "ErrorDetail",
    "ErrorBody",
    "ErrorResponse",
]
