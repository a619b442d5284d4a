"""
Named input scenarios shared by the test modules.

SCENARIO_INPUTS is the default calculator form: ₦250,000 monthly salary with
a ₦20,000 pension contribution. Expected figures:
  annual gross 3,000,000 | CRA 830,000 | deductions 240,000
  taxable 1,930,000 | annual tax 169,500 | monthly tax 14,125 | net 235,875
"""

SCENARIO_INPUTS = dict(
    monthly_gross_income=250_000,
    other_monthly_income=0,
    employment_type="SALARIED",
    monthly_pension_contribution=20_000,
    monthly_nhf_contribution=0,
    monthly_other_deductions=0,
    year=2025,
)
