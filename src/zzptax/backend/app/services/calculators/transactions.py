"""Totals and review warnings for categorised bank transactions."""

from __future__ import annotations

from collections.abc import Iterable

from zzptax.backend.app.models import CategorisedTransaction, TransactionSummary
from zzptax.backend.config.year_config import YearConfiguration, default_configuration

from .investment import compute_kia
from .vat import vat_in_gross_amount


def _collect_warnings(
    transactions: list[CategorisedTransaction], config: YearConfiguration
) -> tuple[str, ...]:
    rules = config.transactions
    warnings: list[str] = []

    low_confidence = sum(
        1 for item in transactions if item.confidence < rules.low_confidence_threshold
    )
    if low_confidence:
        warnings.append(
            f"{low_confidence} transactions have low confidence categorization - review manually"
        )

    personal = sum(1 for item in transactions if item.category == rules.private_category)
    if personal:
        warnings.append(f"{personal} transactions appear to be personal expenses")

    high_value_kia = sum(
        1
        for item in transactions
        if item.is_kia_eligible and item.amount > rules.high_value_threshold
    )
    if high_value_kia:
        warnings.append(f"{high_value_kia} high-value KIA-eligible transactions detected")

    return tuple(warnings)


def summarise_transactions(
    transactions: Iterable[CategorisedTransaction],
    config: YearConfiguration | None = None,
) -> TransactionSummary:
    """Aggregate ``transactions`` into deductible, VAT and KIA totals."""

    year = config or default_configuration()
    items = list(transactions)

    total_amount = 0.0
    total_deductible = 0.0
    total_vat_reclaimable = 0.0
    kia_eligible_amount = 0.0
    categories: dict[str, float] = {}

    for item in items:
        total_amount += item.amount
        total_deductible += item.amount * item.deductible_percentage / 100
        if item.vat_reclaimable:
            total_vat_reclaimable += vat_in_gross_amount(item.amount, item.vat_percentage)
        if item.is_kia_eligible:
            kia_eligible_amount += item.amount
        categories[item.category] = categories.get(item.category, 0.0) + item.amount

    return TransactionSummary(
        transaction_count=len(items),
        total_amount=total_amount,
        total_deductible=total_deductible,
        total_vat_reclaimable=total_vat_reclaimable,
        kia_eligible_amount=kia_eligible_amount,
        kia_deduction=compute_kia(kia_eligible_amount, year.kia),
        estimated_tax_savings=total_deductible * year.transactions.estimated_savings_rate,
        categories=categories,
        warnings=_collect_warnings(items, year),
    )


__all__ = ["summarise_transactions"]
