"""Render calculation results as downloadable CSV or PDF documents."""

from __future__ import annotations

import csv
from io import StringIO
from typing import Iterable

from fpdf import FPDF
from fpdf.enums import XPos, YPos

from zzptax.backend.app.models import TaxCalculationResult
from zzptax.backend.config.year_config import YearConfiguration

from .calculators import format_percentage, income_tax_breakdown

EXPORT_FORMATS = ("csv", "pdf")

RESULT_LABELS: dict[str, str] = {
    "gross_profit": "Gross profit",
    "zelfstandigenaftrek": "Zelfstandigenaftrek",
    "startersaftrek": "Startersaftrek",
    "total_ondernemersaftrek": "Total ondernemersaftrek",
    "profit_after_ondernemersaftrek": "Profit after ondernemersaftrek",
    "mkb_winstvrijstelling": "MKB-winstvrijstelling",
    "car_bijtelling": "Car bijtelling",
    "taxable_profit": "Taxable profit",
    "income_tax": "Income tax",
    "effective_tax_rate": "Effective tax rate",
    "vat_due": "VAT due",
    "vat_reclaimable": "VAT reclaimable",
    "net_vat_position": "Net VAT position",
    "kia_deduction": "KIA deduction (informational)",
    "representation_deduction": "Representation deduction (informational)",
}


def _format_money(value: float, currency: str) -> str:
    return f"{currency} {value:,.2f}"


def _summary_rows(
    result: TaxCalculationResult, currency: str
) -> Iterable[tuple[str, str]]:
    values = result.as_dict()
    for key, label in RESULT_LABELS.items():
        value = values[key]
        if key == "effective_tax_rate":
            yield label, f"{value:.2f}%"
        else:
            yield label, _format_money(value, currency)


def _bracket_rows(
    result: TaxCalculationResult, config: YearConfiguration
) -> list[tuple[str, str]]:
    rows: list[tuple[str, str]] = []
    for share in income_tax_breakdown(result.taxable_profit, config.income_tax):
        upper = (
            _format_money(share.upper_bound, config.currency)
            if share.upper_bound is not None
            else "and above"
        )
        label = (
            f"{_format_money(share.lower_bound, config.currency)} - {upper} "
            f"at {format_percentage(share.rate)}"
        )
        rows.append((label, _format_money(share.tax, config.currency)))
    return rows


def render_csv(result: TaxCalculationResult, config: YearConfiguration) -> str:
    """Return ``result`` as CSV with summary and bracket sections."""

    buffer = StringIO()
    writer = csv.writer(buffer)
    writer.writerow(["Section", "Item", "Value"])
    for label, value in _summary_rows(result, config.currency):
        writer.writerow(["Summary", label, value])

    writer.writerow([])
    for label, value in _bracket_rows(result, config):
        writer.writerow(["Income tax brackets", label, value])

    return buffer.getvalue()


def render_pdf(result: TaxCalculationResult, config: YearConfiguration) -> bytes:
    """Return ``result`` as a single-page PDF report."""

    pdf = FPDF()
    pdf.set_auto_page_break(auto=True, margin=15)
    pdf.add_page()

    pdf.set_title(f"Tax calculation {config.year}")
    pdf.set_text_color(33, 37, 41)
    pdf.set_draw_color(222, 226, 230)

    pdf.set_font("Helvetica", style="B", size=16)
    pdf.cell(
        0,
        10,
        f"Eenmanszaak tax calculation {config.year}",
        new_x=XPos.LMARGIN,
        new_y=YPos.NEXT,
    )

    pdf.ln(2)
    pdf.set_font("Helvetica", style="B", size=12)
    pdf.cell(0, 8, "Summary", new_x=XPos.LMARGIN, new_y=YPos.NEXT)
    pdf.set_font("Helvetica", size=11)
    for label, value in _summary_rows(result, config.currency):
        pdf.multi_cell(pdf.epw, 6, f"{label}: {value}")

    bracket_rows = _bracket_rows(result, config)
    if bracket_rows:
        pdf.ln(4)
        pdf.set_font("Helvetica", style="B", size=12)
        pdf.cell(0, 8, "Income tax brackets", new_x=XPos.LMARGIN, new_y=YPos.NEXT)
        pdf.set_font("Helvetica", size=11)
        for label, value in bracket_rows:
            pdf.multi_cell(pdf.epw, 6, f"{label}: {value}")

    pdf.ln(6)
    pdf.set_font("Helvetica", size=9)
    pdf.multi_cell(
        0,
        5,
        "KIA and representation deductions are shown for reference and are not "
        "included in the taxable profit.",
    )

    output = pdf.output()
    if isinstance(output, (bytes, bytearray)):
        return bytes(output)
    return output.encode("latin1")


__all__ = ["EXPORT_FORMATS", "RESULT_LABELS", "render_csv", "render_pdf"]
