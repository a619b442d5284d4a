"""
NaijaTax Tax Engine - Nigerian PAYE (Personal Income Tax)
Pure Python, no I/O, deterministic. Same input → same output, bit for bit.

All arithmetic is IEEE-754 double precision and evaluated in a fixed order.
Do NOT reorder the additions/subtractions below: results are compared exactly
against stored history records.
"""
from __future__ import annotations

from typing import Sequence

from naijatax.calculator.schemas import (
    TaxBand,
    TaxBandAllocation,
    TaxCalculationResult,
    TaxInputs,
)

# ===========================================================================
# CONSOLIDATED RELIEF ALLOWANCE (CRA)
# CRA = max(₦200,000, 1% of gross) + 20% of gross
# The 20% term is ADDITIVE, not an alternative to the floor.
# ===========================================================================

CRA_FLOOR          = 200_000.0
CRA_FLOOR_PCT      = 0.01
CRA_GROSS_PCT      = 0.20

MONTHS_PER_YEAR    = 12

# ===========================================================================
# BAND TABLE - widths, not cumulative ceilings
# ===========================================================================

TAX_BANDS: tuple[TaxBand, ...] = (
    TaxBand(upper_width=800_000,      rate=0.00, label="First ₦800,000"),
    TaxBand(upper_width=2_199_999,    rate=0.15, label="Next ₦2,199,999 (Up to ₦2.99m)"),
    TaxBand(upper_width=9_000_000,    rate=0.18, label="Next ₦9,000,000 (Up to ₦11.99m)"),
    TaxBand(upper_width=13_000_000,   rate=0.21, label="Next ₦13,000,000 (Up to ₦24.99m)"),
    TaxBand(upper_width=25_000_000,   rate=0.23, label="Next ₦25,000,000 (Up to ₦49.99m)"),
    TaxBand(upper_width=float("inf"), rate=0.25, label="Above ₦50,000,000"),
)


# ===========================================================================
# INTERNAL HELPERS (pure functions - no side effects, no I/O)
# ===========================================================================

def calculate_cra(annual_gross_income: float) -> float:
    """Consolidated Relief Allowance. Always >= ₦200,000 for non-negative gross."""
    base_cra = max(CRA_FLOOR, CRA_FLOOR_PCT * annual_gross_income)
    percent_cra = CRA_GROSS_PCT * annual_gross_income
    return base_cra + percent_cra


def allocate_bands(
    taxable_income: float,
    bands: Sequence[TaxBand],
) -> tuple[list[TaxBandAllocation], float]:
    """
    Walk the band table once, filling each band up to its width.

    Every band gets an allocation entry, including zero ones once taxable
    income is exhausted, so the output always has len(bands) rows.
    Returns (allocations, total_tax).
    """
    remaining = taxable_income
    total_tax = 0.0
    allocations: list[TaxBandAllocation] = []

    for band in bands:
        if remaining <= 0:
            allocations.append(TaxBandAllocation(
                label=band.label,
                rate=band.rate,
                taxable_amount_in_band=0.0,
                tax_payable_in_band=0.0,
            ))
            continue

        amount_in_band = min(remaining, band.upper_width)
        tax_in_band = amount_in_band * band.rate

        allocations.append(TaxBandAllocation(
            label=band.label,
            rate=band.rate,
            taxable_amount_in_band=amount_in_band,
            tax_payable_in_band=tax_in_band,
        ))

        total_tax += tax_in_band
        remaining -= amount_in_band

    return allocations, total_tax


# ===========================================================================
# PUBLIC API
# ===========================================================================

def calculate_tax(
    inputs: TaxInputs,
    bands: Sequence[TaxBand] = TAX_BANDS,
) -> TaxCalculationResult:
    """
    Compute PAYE liability for one set of monthly inputs.

    Never raises for numeric input and never validates: negative amounts
    propagate arithmetically, taxable income is clamped at zero.
    employment_type and year are carried on the inputs but not consulted.

    monthly_net_income is gross SALARY minus monthly tax. other_monthly_income
    is taxed but NOT added back to the net figure.
    """
    # Step 1: Annual gross (salary + other income)
    annual_gross = (inputs.monthly_gross_income + inputs.other_monthly_income) * MONTHS_PER_YEAR

    # Step 2: CRA
    total_cra = calculate_cra(annual_gross)

    # Step 3: Allowable deductions
    total_allowable_deductions = (
        inputs.monthly_pension_contribution
        + inputs.monthly_nhf_contribution
        + inputs.monthly_other_deductions
    ) * MONTHS_PER_YEAR

    # Step 4: Taxable income (never negative - no refunds modelled)
    taxable_income = max(0.0, annual_gross - total_cra - total_allowable_deductions)

    # Step 5: Band walk
    allocations, annual_tax = allocate_bands(taxable_income, bands)

    # Step 6-7: Monthly view
    monthly_tax = annual_tax / MONTHS_PER_YEAR
    net_monthly_income = inputs.monthly_gross_income - monthly_tax

    return TaxCalculationResult(
        annual_gross_income=annual_gross,
        consolidated_relief_allowance=total_cra,
        total_allowable_deductions=total_allowable_deductions,
        annual_taxable_income=taxable_income,
        annual_tax_liability=annual_tax,
        monthly_tax_liability=monthly_tax,
        monthly_net_income=net_monthly_income,
        band_allocations=allocations,
    )
