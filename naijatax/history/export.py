"""
export.py - CSV export and trend series for saved calculations.

Entry points:
    export_history_csv(records) -> str
    history_csv_filename(today) -> str
    build_trend(records) -> list[TrendPoint]
"""
from __future__ import annotations

import csv
import datetime
import io
from typing import Iterable, Optional

from naijatax.history.schemas import TaxHistoryRecord, TrendPoint

CSV_HEADERS = [
    "Saved At",
    "Tax Year",
    "Monthly Gross",
    "Pension",
    "NHF",
    "Other Deductions",
    "Monthly Tax",
    "Monthly Net",
]


def export_history_csv(records: Iterable[TaxHistoryRecord]) -> str:
    """
    Render records as CSV, one row per record in the order given.
    An empty history produces the header row only.
    """
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(CSV_HEADERS)
    for record in records:
        writer.writerow([
            record.timestamp.isoformat(),
            record.inputs.year,
            record.summary.monthly_gross,
            record.inputs.monthly_pension_contribution,
            record.inputs.monthly_nhf_contribution,
            record.inputs.monthly_other_deductions,
            record.summary.monthly_tax,
            record.summary.monthly_net,
        ])
    return buffer.getvalue()


def history_csv_filename(today: Optional[datetime.date] = None) -> str:
    today = today or datetime.date.today()
    return f"naijatax_history_{today.isoformat()}.csv"


def build_trend(records: Iterable[TaxHistoryRecord]) -> list[TrendPoint]:
    """Gross/net/tax per record, sorted oldest first for charting."""
    ordered = sorted(records, key=lambda r: r.timestamp)
    return [
        TrendPoint(
            year=r.inputs.year,
            saved_at=r.timestamp,
            monthly_gross=r.summary.monthly_gross,
            monthly_net=r.summary.monthly_net,
            monthly_tax=r.summary.monthly_tax,
        )
        for r in ordered
    ]
