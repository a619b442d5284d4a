"""
pdf_generator.py - NaijaTax PDF report generator.

Builds a formatted PAYE summary report using reportlab PLATYPUS.
Output is a BytesIO buffer (no temp file on disk).

Entry point:
    generate_tax_report(inputs, result, saved_at=None) -> BytesIO

CRITICAL: buffer.seek(0) is called after doc.build(story) - reportlab leaves
the buffer position at the end after writing.

PDF sections:
  1. Header (NaijaTax, tax year, employment type, date)
  2. Take-home callout box
  3. Annual summary table
  4. Band breakdown (bands that received income only)
  5. Disclaimer footer (8pt)

Amounts are printed with an "NGN" prefix: the built-in Helvetica font has no
naira glyph.
"""
from __future__ import annotations

import datetime
import logging
from io import BytesIO
from typing import Optional

from reportlab.lib.colors import HexColor, black
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.lib.units import mm
from reportlab.platypus import (
    KeepTogether,
    Paragraph,
    SimpleDocTemplate,
    Spacer,
    Table,
    TableStyle,
)

from naijatax.calculator.schemas import EmploymentType, TaxCalculationResult, TaxInputs

logger = logging.getLogger(__name__)

GREEN_LIGHT = HexColor("#D1FAE5")
GREY_LIGHT  = HexColor("#F2F2F2")

DISCLAIMER = (
    "This report is an estimate for informational purposes only and does not "
    "constitute official tax advice or a filing with any tax authority."
)


def _ngn(value: float) -> str:
    return f"NGN {value:,.0f}"


def _build_summary_table(result: TaxCalculationResult) -> Table:
    """Annual figures top to bottom, then the monthly view. Tax rows bold."""
    data = [
        ["", "Amount"],
        ["Annual Gross Income", _ngn(result.annual_gross_income)],
        ["Consolidated Relief Allowance", _ngn(result.consolidated_relief_allowance)],
        ["Allowable Deductions", _ngn(result.total_allowable_deductions)],
        ["Taxable Income", _ngn(result.annual_taxable_income)],
        ["Annual Tax Liability", _ngn(result.annual_tax_liability)],
        ["Monthly Tax Liability", _ngn(result.monthly_tax_liability)],
        ["Monthly Net Income", _ngn(result.monthly_net_income)],
    ]
    style_cmds = [
        ("BACKGROUND", (0, 0), (-1, 0), GREY_LIGHT),
        ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
        ("FONTNAME", (0, 5), (-1, 6), "Helvetica-Bold"),
        ("GRID", (0, 0), (-1, -1), 0.5, black),
        ("ALIGN", (1, 0), (-1, -1), "RIGHT"),
        ("ALIGN", (0, 0), (0, -1), "LEFT"),
        ("TOPPADDING", (0, 0), (-1, -1), 4),
        ("BOTTOMPADDING", (0, 0), (-1, -1), 4),
        ("LEFTPADDING", (0, 0), (0, -1), 6),
    ]
    t = Table(data, colWidths=[110 * mm, 60 * mm])
    t.setStyle(TableStyle(style_cmds))
    return t


def _build_band_table(result: TaxCalculationResult) -> Table:
    """
    Bands with a non-zero allocation, plus a total row.
    The 0% band still appears when income fell into it.
    """
    header = ["Band", "Rate", "Taxable Amount", "Tax Payable"]
    rows = [
        [
            a.label.replace("₦", "NGN "),
            f"{a.rate:.0%}",
            _ngn(a.taxable_amount_in_band),
            _ngn(a.tax_payable_in_band),
        ]
        for a in result.band_allocations
        if a.taxable_amount_in_band > 0
    ]
    rows.append([
        "Total", "",
        _ngn(result.annual_taxable_income),
        _ngn(result.annual_tax_liability),
    ])
    style_cmds = [
        ("BACKGROUND", (0, 0), (-1, 0), GREY_LIGHT),
        ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
        ("FONTNAME", (0, -1), (-1, -1), "Helvetica-Bold"),
        ("GRID", (0, 0), (-1, -1), 0.5, black),
        ("ALIGN", (1, 0), (-1, -1), "RIGHT"),
        ("ALIGN", (0, 0), (0, -1), "LEFT"),
        ("FONTSIZE", (0, 1), (0, -1), 8),
        ("TOPPADDING", (0, 0), (-1, -1), 3),
        ("BOTTOMPADDING", (0, 0), (-1, -1), 3),
        ("LEFTPADDING", (0, 0), (0, -1), 4),
    ]
    t = Table([header] + rows, colWidths=[75 * mm, 20 * mm, 40 * mm, 35 * mm], repeatRows=1)
    t.setStyle(TableStyle(style_cmds))
    return t


# ---------------------------------------------------------------------------
# Public entry point
# ---------------------------------------------------------------------------

def generate_tax_report(
    inputs: TaxInputs,
    result: TaxCalculationResult,
    saved_at: Optional[datetime.datetime] = None,
) -> BytesIO:
    """
    Generate a formatted NaijaTax PDF report.

    Args:
        inputs: The TaxInputs the result was computed from.
        result: Output of calculate_tax(inputs).
        saved_at: Timestamp of the history record, if the report is for one.

    Returns:
        BytesIO buffer at position 0, ready for StreamingResponse.
    """
    buffer = BytesIO()
    doc = SimpleDocTemplate(
        buffer,
        pagesize=A4,
        leftMargin=20 * mm,
        rightMargin=20 * mm,
        topMargin=20 * mm,
        bottomMargin=20 * mm,
        title="NaijaTax PAYE Report",
    )
    styles = getSampleStyleSheet()
    story = []

    # 1. Header
    title_style = ParagraphStyle(
        "report_title",
        parent=styles["Heading1"],
        fontSize=18,
        fontName="Helvetica-Bold",
    )
    story.append(Paragraph("NaijaTax - PAYE Report", title_style))
    story.append(Spacer(1, 2 * mm))
    story.append(Paragraph(f"Tax year: {inputs.year}", styles["Normal"]))
    employment = "Salaried (PAYE)" if inputs.employment_type == EmploymentType.salaried else "Self-Employed"
    story.append(Paragraph(f"Employment type: {employment}", styles["Normal"]))
    story.append(
        Paragraph(
            f"Report generated: {datetime.date.today().strftime('%d %B %Y')}",
            styles["Normal"],
        )
    )
    if saved_at is not None:
        story.append(
            Paragraph(f"Calculation saved: {saved_at.strftime('%d %B %Y %H:%M')}", styles["Normal"])
        )
    story.append(Spacer(1, 6 * mm))

    # 2. Take-home callout
    callout_style = ParagraphStyle(
        "callout",
        parent=styles["Normal"],
        fontSize=14,
        fontName="Helvetica-Bold",
    )
    callout_table = Table(
        [[Paragraph(
            f"Monthly take-home: {_ngn(result.monthly_net_income)} "
            f"(tax {_ngn(result.monthly_tax_liability)})",
            callout_style,
        )]],
        colWidths=[170 * mm],
    )
    callout_table.setStyle(
        TableStyle([
            ("BACKGROUND", (0, 0), (-1, -1), GREEN_LIGHT),
            ("BOX", (0, 0), (-1, -1), 1, black),
            ("TOPPADDING", (0, 0), (-1, -1), 10),
            ("BOTTOMPADDING", (0, 0), (-1, -1), 10),
            ("LEFTPADDING", (0, 0), (-1, -1), 12),
        ])
    )
    story.append(callout_table)
    story.append(Spacer(1, 8 * mm))

    # 3. Summary
    summary_heading = Paragraph("Summary", styles["Heading2"])
    story.append(KeepTogether([summary_heading, Spacer(1, 2 * mm), _build_summary_table(result)]))
    story.append(Spacer(1, 6 * mm))

    # 4. Band breakdown
    band_heading = Paragraph("Tax Band Breakdown", styles["Heading2"])
    story.append(KeepTogether([band_heading, Spacer(1, 2 * mm), _build_band_table(result)]))
    story.append(Spacer(1, 8 * mm))

    # 5. Disclaimer
    disclaimer_style = ParagraphStyle(
        "disclaimer",
        parent=styles["Normal"],
        fontSize=8,
        textColor=HexColor("#666666"),
    )
    story.append(Paragraph(DISCLAIMER, disclaimer_style))

    doc.build(story)
    buffer.seek(0)
    logger.info("PDF report built bytes=%d", buffer.getbuffer().nbytes)
    return buffer
