"""
Calculator boundary validator.

The tax engine is total over floats and never validates. Every route that
feeds user input to calculate_tax() calls validate_inputs() first.

Validates TaxInputs AFTER Pydantic structural validation has already passed.
Collects all violations in a single pass and raises ValueError with a
JSON-encoded list of {field, issue} dicts so the route can build the standard
error envelope.

Rules enforced:
  1. Every monetary field is finite (no NaN / Infinity)
  2. Every monetary field is >= 0
  3. Every monetary field is <= MAX_MONTHLY_AMOUNT, so annual totals stay finite
  4. year lies within MIN_TAX_YEAR..MAX_TAX_YEAR
"""
from __future__ import annotations

import json
import logging
import math
from typing import Any

from naijatax.calculator.schemas import TaxInputs

logger = logging.getLogger(__name__)

MIN_TAX_YEAR = 2000
MAX_TAX_YEAR = 2100

# ₦1 trillion a month. Twelve of every field summed stays far below float max.
MAX_MONTHLY_AMOUNT = 1e12

MONETARY_FIELDS = (
    "monthly_gross_income",
    "other_monthly_income",
    "monthly_pension_contribution",
    "monthly_nhf_contribution",
    "monthly_other_deductions",
)


def validate_inputs(inputs: TaxInputs) -> None:
    """
    Validate inputs against the boundary rules.

    Raises:
        ValueError: If any rule is violated. The message is a JSON string
            containing a list of {"field": str, "issue": str} dicts.
    """
    violations: list[dict[str, Any]] = []

    for name in MONETARY_FIELDS:
        value = getattr(inputs, name)
        if not math.isfinite(value):
            violations.append({
                "field": name,
                "issue": "Value must be a finite number.",
            })
        elif value < 0:
            violations.append({
                "field": name,
                "issue": f"Value ₦{value:,.2f} is negative. Amounts must be zero or more.",
            })
        elif value > MAX_MONTHLY_AMOUNT:
            violations.append({
                "field": name,
                "issue": f"Value exceeds the maximum of ₦{MAX_MONTHLY_AMOUNT:,.0f} per month.",
            })

    if not MIN_TAX_YEAR <= inputs.year <= MAX_TAX_YEAR:
        violations.append({
            "field": "year",
            "issue": f"Tax year {inputs.year} is outside {MIN_TAX_YEAR}-{MAX_TAX_YEAR}.",
        })

    if violations:
        logger.info("Input validation failed violations=%d", len(violations))
        raise ValueError(json.dumps(violations))
