"""Boundary validator tests - all violations collected in one ValueError."""
from __future__ import annotations

import json
import math

import pytest

from naijatax.calculator.schemas import TaxInputs
from naijatax.calculator.tax_engine import calculate_tax
from naijatax.calculator.validator import (
    MAX_MONTHLY_AMOUNT,
    MAX_TAX_YEAR,
    MIN_TAX_YEAR,
    validate_inputs,
)


def _violations(exc_info) -> list[dict]:
    return json.loads(str(exc_info.value))


def test_valid_inputs_pass(scenario_inputs: TaxInputs) -> None:
    validate_inputs(scenario_inputs)


def test_all_zero_inputs_pass() -> None:
    validate_inputs(TaxInputs(year=2025))


def test_negative_amount_rejected() -> None:
    with pytest.raises(ValueError) as exc_info:
        validate_inputs(TaxInputs(monthly_gross_income=-1, year=2025))
    violations = _violations(exc_info)
    assert [v["field"] for v in violations] == ["monthly_gross_income"]
    assert "negative" in violations[0]["issue"]


@pytest.mark.parametrize("bad", [float("nan"), float("inf"), float("-inf")])
def test_non_finite_amount_rejected(bad: float) -> None:
    with pytest.raises(ValueError) as exc_info:
        validate_inputs(TaxInputs(monthly_nhf_contribution=bad, year=2025))
    violations = _violations(exc_info)
    assert violations[0]["field"] == "monthly_nhf_contribution"
    assert "finite" in violations[0]["issue"]


def test_multiple_violations_reported_together() -> None:
    inputs = TaxInputs(
        monthly_gross_income=-5,
        monthly_pension_contribution=-10,
        monthly_other_deductions=float("nan"),
        year=1850,
    )
    with pytest.raises(ValueError) as exc_info:
        validate_inputs(inputs)
    fields = {v["field"] for v in _violations(exc_info)}
    assert fields == {
        "monthly_gross_income",
        "monthly_pension_contribution",
        "monthly_other_deductions",
        "year",
    }


@pytest.mark.parametrize("year", [MIN_TAX_YEAR, 2026, MAX_TAX_YEAR])
def test_year_bounds_inclusive(year: int) -> None:
    validate_inputs(TaxInputs(year=year))


@pytest.mark.parametrize("year", [MIN_TAX_YEAR - 1, MAX_TAX_YEAR + 1])
def test_year_out_of_range_rejected(year: int) -> None:
    with pytest.raises(ValueError) as exc_info:
        validate_inputs(TaxInputs(year=year))
    assert _violations(exc_info)[0]["field"] == "year"


@pytest.mark.parametrize("field", [
    "monthly_gross_income",
    "other_monthly_income",
    "monthly_other_deductions",
])
def test_amount_above_monthly_cap_rejected(field: str) -> None:
    with pytest.raises(ValueError) as exc_info:
        validate_inputs(TaxInputs(**{field: 1e308}, year=2025))
    violations = _violations(exc_info)
    assert [v["field"] for v in violations] == [field]
    assert "maximum" in violations[0]["issue"]


def test_amounts_at_cap_pass_and_stay_finite() -> None:
    inputs = TaxInputs(
        monthly_gross_income=MAX_MONTHLY_AMOUNT,
        other_monthly_income=MAX_MONTHLY_AMOUNT,
        monthly_pension_contribution=MAX_MONTHLY_AMOUNT,
        monthly_nhf_contribution=MAX_MONTHLY_AMOUNT,
        monthly_other_deductions=MAX_MONTHLY_AMOUNT,
        year=2025,
    )
    validate_inputs(inputs)
    result = calculate_tax(inputs)
    assert all(math.isfinite(v) for v in (
        result.annual_gross_income,
        result.consolidated_relief_allowance,
        result.total_allowable_deductions,
        result.annual_taxable_income,
        result.annual_tax_liability,
        result.monthly_net_income,
    ))


def test_largest_accepted_income_is_taxed() -> None:
    inputs = TaxInputs(monthly_gross_income=MAX_MONTHLY_AMOUNT, year=2025)
    validate_inputs(inputs)
    result = calculate_tax(inputs)
    assert result.annual_taxable_income > 0
    assert result.annual_tax_liability > 0
