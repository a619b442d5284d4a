"""CSV export, trend ordering and history summary tests."""
from __future__ import annotations

import datetime
from datetime import timezone

from naijatax.calculator.schemas import TaxInputs
from naijatax.calculator.tax_engine import calculate_tax
from naijatax.history.export import (
    CSV_HEADERS,
    build_trend,
    export_history_csv,
    history_csv_filename,
)
from naijatax.history.schemas import HistorySummary, TaxHistoryRecord
from naijatax.store import build_summary


def _record(record_id: str, saved_at: datetime.datetime, year: int, gross: float) -> TaxHistoryRecord:
    inputs = TaxInputs(
        monthly_gross_income=gross,
        monthly_pension_contribution=gross * 0.08,
        year=year,
    )
    result = calculate_tax(inputs)
    return TaxHistoryRecord(
        id=record_id,
        session_id="session-1",
        timestamp=saved_at,
        inputs=inputs,
        summary=build_summary(inputs, result),
    )


def test_build_summary_gross_includes_other_income() -> None:
    inputs = TaxInputs(monthly_gross_income=250_000, other_monthly_income=50_000, year=2025)
    result = calculate_tax(inputs)
    summary = build_summary(inputs, result)
    assert summary.monthly_gross == 300_000
    assert summary.monthly_tax == result.monthly_tax_liability
    # Net is salary minus tax - other income is not in it
    assert summary.monthly_net == 250_000 - result.monthly_tax_liability


def test_csv_empty_history_is_header_only() -> None:
    assert export_history_csv([]) == ",".join(CSV_HEADERS) + "\n"


def test_csv_rows_follow_record_order() -> None:
    records = [
        _record("b", datetime.datetime(2025, 3, 1, tzinfo=timezone.utc), 2025, 300_000),
        _record("a", datetime.datetime(2025, 1, 1, tzinfo=timezone.utc), 2024, 200_000),
    ]
    lines = export_history_csv(records).strip().split("\n")
    assert lines[0] == ",".join(CSV_HEADERS)
    assert len(lines) == 3
    first = lines[1].split(",")
    assert first[0] == "2025-03-01T00:00:00+00:00"
    assert first[1] == "2025"
    assert float(first[2]) == 300_000
    assert float(first[3]) == 24_000
    assert lines[2].split(",")[1] == "2024"


def test_csv_filename_uses_date() -> None:
    assert history_csv_filename(datetime.date(2026, 10, 19)) == "naijatax_history_2026-10-19.csv"


def test_trend_sorted_oldest_first() -> None:
    newest = _record("n", datetime.datetime(2025, 6, 1, tzinfo=timezone.utc), 2025, 500_000)
    oldest = _record("o", datetime.datetime(2024, 6, 1, tzinfo=timezone.utc), 2024, 100_000)
    middle = _record("m", datetime.datetime(2025, 1, 1, tzinfo=timezone.utc), 2025, 300_000)

    trend = build_trend([newest, oldest, middle])

    assert [p.monthly_gross for p in trend] == [100_000, 300_000, 500_000]
    assert trend[0].year == 2024
    assert trend[-1].monthly_tax == newest.summary.monthly_tax
    assert trend[-1].monthly_net == newest.summary.monthly_net


def test_trend_empty() -> None:
    assert build_trend([]) == []


def test_summary_round_trips_through_record() -> None:
    record = _record("x", datetime.datetime(2025, 1, 1, tzinfo=timezone.utc), 2025, 250_000)
    restored = TaxHistoryRecord.model_validate(record.model_dump(mode="json"))
    assert restored.summary == HistorySummary(**record.summary.model_dump())
    assert restored.inputs == record.inputs
