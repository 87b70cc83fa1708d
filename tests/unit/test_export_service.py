"""Unit coverage for CSV and PDF calculation exports."""

from __future__ import annotations

import csv
from io import StringIO

from zzptax.backend.app.models import TaxCalculationInput
from zzptax.backend.app.services.calculators import compute_comprehensive_tax
from zzptax.backend.app.services.export_service import (
    RESULT_LABELS,
    render_csv,
    render_pdf,
)


def _result(config):
    return compute_comprehensive_tax(
        TaxCalculationInput(gross_profit=85_420, hours_worked=1_450), config
    )


def test_csv_contains_summary_and_brackets(config_2025) -> None:
    rows = list(csv.reader(StringIO(render_csv(_result(config_2025), config_2025))))

    assert rows[0] == ["Section", "Item", "Value"]

    summary = {row[1]: row[2] for row in rows if row and row[0] == "Summary"}
    assert set(summary) == set(RESULT_LABELS.values())
    assert summary["Taxable profit"] == "EUR 72,415.35"
    assert summary["Income tax"] == "EUR 26,503.15"
    assert summary["Effective tax rate"] == "31.03%"

    brackets = [row for row in rows if row and row[0] == "Income tax brackets"]
    assert len(brackets) == 2
    assert brackets[0][1] == "EUR 0.00 - EUR 38,441.00 at 35.82%"
    assert brackets[0][2] == "EUR 13,769.57"


def test_csv_without_taxable_profit_has_no_bracket_rows(config_2025) -> None:
    result = compute_comprehensive_tax(
        TaxCalculationInput(gross_profit=0, hours_worked=0), config_2025
    )

    rows = list(csv.reader(StringIO(render_csv(result, config_2025))))

    assert not any(row and row[0] == "Income tax brackets" for row in rows)


def test_pdf_is_rendered(config_2025) -> None:
    document = render_pdf(_result(config_2025), config_2025)

    assert isinstance(document, bytes)
    assert document.startswith(b"%PDF")
